import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session, select

from classpet.config import settings
from classpet.db import get_session
from classpet.dependencies import require_user
from classpet.models import User
from classpet.schemas.auth import LoginForm, LoginResponse, RegisterForm, UserRead
from classpet.security import create_access_token

router = APIRouter(tags=["auth"])
log = logging.getLogger(__name__)


def _token_response(user: User, response: Response) -> dict:
    token = create_access_token(user.id)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
    )
    return {"user": user, "token": token}


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
def register(form: RegisterForm, response: Response, session: Session = Depends(get_session)):
    email = form.email.lower().strip()
    if session.exec(select(User).where(User.email == email)).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is already registered")

    user = User(name=form.name.strip(), email=email)
    user.set_password(form.password)
    session.add(user)
    session.commit()
    session.refresh(user)
    log.info("Registered teacher %s", user.id)
    return _token_response(user, response)


@router.post("/login", response_model=LoginResponse)
def login(form: LoginForm, response: Response, session: Session = Depends(get_session)):
    user = session.exec(select(User).where(User.email == form.email.lower().strip())).first()
    if not user or not user.check_password(form.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return _token_response(user, response)


@router.post("/logout")
def logout(response: Response, current_user: User = Depends(require_user)):
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserRead)
def me(current_user: User = Depends(require_user)):
    return current_user
