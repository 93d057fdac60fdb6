# rideshare/routers/admin.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..admin.security import require_admin
from ..db import get_db
from ..errors import NotFound, failure_message
from ..models.user import User
from ..schemas import CarOut, PromoteResponse, UserBrief, UserOut
from ..services.cars import get_pending_cars
from ..services.users import get_admin_users, promote_user_to_admin

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/pending-cars", response_model=list[CarOut], dependencies=[Depends(failure_message("Failed to fetch pending cars"))])
def api_admin_pending_cars(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return get_pending_cars(db)


# очередь модерации для дашборда; пока совпадает с pending-cars
@router.get("/cars", response_model=list[CarOut], dependencies=[Depends(failure_message("Failed to fetch cars"))])
def api_admin_cars(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return get_pending_cars(db)


@router.get("/users", response_model=list[UserOut], dependencies=[Depends(failure_message("Failed to fetch admin users"))])
def api_admin_users(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return get_admin_users(db)


@router.patch("/users/{user_id}/promote", response_model=PromoteResponse, dependencies=[Depends(failure_message("Failed to promote user"))])
def api_admin_promote(user_id: str, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    user = promote_user_to_admin(db, user_id)
    if not user:
        raise NotFound("User not found")
    return PromoteResponse(
        message="User promoted to admin successfully",
        user=UserBrief.model_validate(user),
    )
