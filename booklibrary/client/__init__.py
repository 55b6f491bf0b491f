from booklibrary.client.api import ApiError, BookApi
from booklibrary.client.credentials import CredentialStore
from booklibrary.client.forms import BookForm, BookFormData, FormMode, validate_book
from booklibrary.client.notifications import Toaster
from booklibrary.client.routing import Navigator
from booklibrary.client.views import BookListView

__all__ = [
    "ApiError",
    "BookApi",
    "BookForm",
    "BookFormData",
    "BookListView",
    "CredentialStore",
    "FormMode",
    "Navigator",
    "Toaster",
    "validate_book",
]
