# rideshare/admin/security.py
from fastapi import Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import require_auth
from ..errors import Forbidden
from ..models.user import User
from ..services.users import is_user_admin


def require_admin(
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
) -> User:
    """
    Пропускает только пользователей с role == 'admin' (проверка по БД на каждый запрос).
    Без сессии — 401, без прав — 403.
    """
    if not is_user_admin(db, user.id):
        raise Forbidden("Admin access required")
    return user
