import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from booklibrary import auth, models, schemas
from booklibrary.database import get_db

router = APIRouter(prefix="/api/book", tags=["books"])
logger = logging.getLogger(__name__)


def _get_owned_book(db: Session, book_id: int, user_id: int) -> models.Book:
    # Books owned by someone else are reported exactly like missing ones.
    db_book = (
        db.query(models.Book)
        .filter(models.Book.id == book_id, models.Book.owner_id == user_id)
        .first()
    )

    if not db_book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")

    return db_book


# Get Books
@router.get("", response_model=list[schemas.BookOut])
def get_books(
    db: Session = Depends(get_db),
    user_id: int = Depends(auth.get_current_user_id),
):
    return (
        db.query(models.Book)
        .filter(models.Book.owner_id == user_id)
        .order_by(models.Book.id.asc())
        .all()
    )


@router.get("/{book_id}", response_model=schemas.BookOut)
def get_book(
    book_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(auth.get_current_user_id),
):
    return _get_owned_book(db, book_id, user_id)


# Add Book
@router.post("", response_model=schemas.BookOut)
def add_book(
    book: schemas.BookCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(auth.get_current_user_id),
):
    now = models.utcnow()
    new_book = models.Book(
        name=book.name,
        isbn=book.isbn,
        description=book.description,
        page_count=book.page_count,
        author=book.author,
        owner_id=user_id,
        created_at=now,
        updated_at=now,
    )

    db.add(new_book)
    db.commit()
    db.refresh(new_book)

    logger.info("Created book id=%s for user id=%s", new_book.id, user_id)
    return new_book


@router.put("/{book_id}", response_model=schemas.BookOut)
def update_book(
    book_id: int,
    book: schemas.BookUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(auth.get_current_user_id),
):
    db_book = _get_owned_book(db, book_id, user_id)

    for field, value in book.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_book, field, value)
    # Never earlier than the previous value, even if the clock steps back.
    db_book.updated_at = max(models.utcnow(), db_book.updated_at)

    db.commit()
    db.refresh(db_book)

    logger.info("Updated book id=%s for user id=%s", book_id, user_id)
    return db_book


@router.delete("/{book_id}", response_model=schemas.MessageResponse)
def delete_book(
    book_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(auth.get_current_user_id),
):
    db_book = _get_owned_book(db, book_id, user_id)

    db.delete(db_book)
    db.commit()

    logger.info("Deleted book id=%s for user id=%s", book_id, user_id)
    return {"message": "Book deleted successfully"}
