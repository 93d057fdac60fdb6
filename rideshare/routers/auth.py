# rideshare/routers/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import login_session, logout_session, require_auth
from ..errors import BadRequest, Unauthorized, failure_message
from ..models.user import User
from ..schemas import LoginRequest, UserCreate, UserOut
from ..services.users import create_user, get_user_by_username, username_or_email_taken
from ..utils.security import verify_password

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=UserOut, dependencies=[Depends(failure_message("Failed to register"))])
def api_register(payload: UserCreate, request: Request, db: Session = Depends(get_db)):
    taken = username_or_email_taken(db, payload.username, payload.email)
    if taken:
        raise BadRequest(taken)

    # role из тела запроса сюда не попадает: схема его не знает, сервис всё равно ставит "user"
    user = create_user(db, payload.model_dump())
    login_session(request, user)
    return user


@router.post("/login", response_model=UserOut, dependencies=[Depends(failure_message("Failed to log in"))])
def api_login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    user = get_user_by_username(db, payload.username)
    if not user or not verify_password(user.password, payload.password):
        raise Unauthorized("Invalid username or password")
    login_session(request, user)
    return user


@router.post("/logout")
def api_logout(request: Request):
    logout_session(request)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserOut, dependencies=[Depends(failure_message("Failed to fetch user"))])
def api_current_user(user: User = Depends(require_auth)):
    return user
