"""Endpoints for registration, login and account management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    authenticate_user,
    create_user,
    delete_own_account,
)
from app.domain.entities import ROLE_ORGANIZER, ROLE_PARTICIPANT, User
from app.domain.exceptions import InvalidInputError
from app.infrastructure.database import get_db
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.security import create_user_token
from app.interfaces.api.dependencies import get_current_user, get_notification_dispatcher
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    DeleteAccountRequest,
    RegisterRequest,
    RegisterResponse,
    Token,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_SELF_SERVICE_ROLES = (ROLE_PARTICIPANT, ROLE_ORGANIZER)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create a participant or organizer account and return its token."""

    if payload.role not in _SELF_SERVICE_ROLES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role")

    try:
        user = create_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
    except InvalidInputError as exc:
        raise to_http_exception(exc) from exc

    logger.info("Registered user %s with role %s", user.id, user.role)
    return RegisterResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        token=create_user_token(user.id),
    )


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a JWT."""

    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=create_user_token(user.id), token_type="bearer", role=user.role)


@router.get("/profile", response_model=UserRead)
def read_profile(current_user: User = Depends(get_current_user)):
    return UserRead.model_validate(current_user)


@router.delete("/account")
def delete_account(
    payload: DeleteAccountRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Remove the caller's account together with everything it owns."""

    try:
        delete_own_account(db, dispatcher, user=current_user, password=payload.password)
    except InvalidInputError as exc:
        raise to_http_exception(exc) from exc

    logger.info("User %s deleted their account", current_user.id)
    return {"message": "Account deleted successfully"}
