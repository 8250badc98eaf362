from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.config import get_db, settings
from api.models.models import User as DbUser
from api.schemas.auth_schemas import AuthTokenPayload
from api.schemas.user_schemas import User
from api.utils.jwt import access_token_expiry, create_access_token, get_password_hash, verify_password, verify_token
from api.utils.logger import configure_logging

logger = configure_logging()


def get_current_user(access_token: Optional[str] = Cookie(None), db: Session = Depends(get_db)) -> User:
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
        )

    payload = verify_token(access_token)
    user = get_user_by_email(payload.sub, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return User(id=user.id, email=user.email, preferences=user.preferences, hashed_password=user.hashed_password)


def set_auth_cookie(response: Response, user: DbUser) -> None:
    token = create_access_token(AuthTokenPayload(sub=user.email, exp=access_token_expiry()))
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=False,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key="access_token",
        httponly=True,
        secure=False,
        samesite="lax"
    )


def get_user_by_email(email: str, db: Session) -> DbUser | None:
    return db.query(DbUser).filter(DbUser.email == email.strip().lower()).first()


def create_user(email: str, password: str, db: Session) -> DbUser:
    user = DbUser(email=email.strip().lower(), hashed_password=get_password_hash(password), preferences={})
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    db.refresh(user)
    logger.info("user registered id=%s", user.id)
    return user


def authenticate_user(email: str, password: str, db: Session) -> DbUser | None:
    user = get_user_by_email(email, db)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
