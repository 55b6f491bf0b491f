from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from booklibrary.config import Settings, settings


def require_secret_key(config: Settings) -> str:
    if not config.SECRET_KEY:
        raise RuntimeError("SECRET_KEY is missing. Set it in the environment or .env")
    return config.SECRET_KEY


require_secret_key(settings)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
# Missing credentials are reported as 401 by get_current_user_id, not 403.
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def hash_password(password: str):
    return pwd_context.hash(password)


def verify_password(password, hash):
    return pwd_context.verify(password, hash)


def create_token(data: dict, expires_delta: timedelta | None = None):
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    payload = data.copy()
    payload.update({"exp": expire})

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        raise _unauthorized("Invalid or expired token") from exc


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> int:
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Unauthorized")

    payload = decode_token(credentials.credentials)
    user_id = payload.get("id")

    if user_id is None:
        raise _unauthorized("Token missing user id")

    try:
        return int(user_id)
    except (TypeError, ValueError) as exc:
        raise _unauthorized("Invalid user id in token") from exc
