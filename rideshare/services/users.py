from __future__ import annotations

import logging

from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import Conflict
from ..models.user import User, UserRole
from ..utils.security import hash_password

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def create_user(db: Session, data: dict) -> User:
    """
    Новый пользователь всегда получает role="user", что бы ни пришло во входных данных.
    `data["password"]` — открытый пароль, в БД ложится только хэш.
    """
    u = User(
        username=data["username"],
        email=data["email"],
        password=hash_password(data["password"]),
        name=data["name"],
        phone=data["phone"],
        role=UserRole.USER,
    )
    db.add(u)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Username or email already exists")
    db.refresh(u)
    logger.info("user registered id=%s username=%s", u.id, u.username)
    return u


def is_user_admin(db: Session, user_id: str) -> bool:
    u = get_user(db, user_id)
    return bool(u and u.is_admin)


def promote_user_to_admin(db: Session, user_id: str) -> User | None:
    # понижения нет: роль admin необратима
    u = get_user(db, user_id)
    if not u:
        return None
    if u.role != UserRole.ADMIN:
        u.role = UserRole.ADMIN
        db.commit()
        db.refresh(u)
        logger.info("user promoted to admin id=%s username=%s", u.id, u.username)
    return u


def get_admin_users(db: Session) -> list[User]:
    return list(
        db.execute(select(User).where(User.role == UserRole.ADMIN).order_by(User.created_at)).scalars().all()
    )


def promote_usernames(db: Session, usernames: set[str]) -> list[User]:
    """
    Первичное назначение админов (ADMIN_USERNAMES / CLI).
    Незарегистрированные логины пропускаются.
    """
    if not usernames:
        return []
    rows = db.execute(select(User).where(User.username.in_(sorted(usernames)))).scalars().all()
    promoted = []
    for u in rows:
        if u.role != UserRole.ADMIN:
            promote_user_to_admin(db, u.id)
            promoted.append(u)
    missing = usernames - {u.username for u in rows}
    if missing:
        logger.warning("admin bootstrap: users not found: %s", ", ".join(sorted(missing)))
    return promoted


def username_or_email_taken(db: Session, username: str, email: str) -> str | None:
    u = db.execute(
        select(User).where(or_(User.username == username, User.email == email)).limit(1)
    ).scalar_one_or_none()
    if not u:
        return None
    return "Username already exists" if u.username == username else "Email already exists"
