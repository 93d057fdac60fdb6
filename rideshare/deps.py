# rideshare/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .db import get_db
from .errors import Unauthorized
from .models.user import User
from .services.users import get_user

SESSION_USER_KEY = "user_id"


# ------------------ Session ------------------

def login_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


def logout_session(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    sess = getattr(request, "session", None) or {}
    user_id = sess.get(SESSION_USER_KEY)
    if not user_id:
        return None
    user = get_user(db, user_id)
    if not user:
        # пользователь удалён, а кука осталась
        request.session.clear()
    return user


# ------------------ Auth guard ------------------

def require_auth(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise Unauthorized("Authentication required")
    return user
