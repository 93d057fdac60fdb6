# rideshare/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .config import settings
from .db import SessionLocal, init_db
from .errors import register_exception_handlers
from .services.users import promote_usernames

from .routers import (
    auth as auth_router,
    cars as cars_router,
    rides as rides_router,
    bookings as bookings_router,
    admin as admin_router,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Rideshare API")

# --- CORS ---
allowed_origins = (
    [o.strip() for o in settings.ALLOWED_ORIGINS.split(",")]
    if getattr(settings, "ALLOWED_ORIGINS", None)
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Сессии ---
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE,
    same_site=(settings.COOKIE_SAMESITE or "lax"),
    https_only=settings.COOKIE_SECURE,
)

# --- Ошибки -> {"message": ...} ---
register_exception_handlers(app)

# --- Подключение роутеров ---
app.include_router(auth_router.router)
app.include_router(cars_router.router)
app.include_router(rides_router.router)
app.include_router(bookings_router.router)
app.include_router(admin_router.router)


# --- Инициализация БД ---
@app.on_event("startup")
def on_startup():
    init_db()
    usernames = settings.admin_usernames()
    if usernames:
        db = SessionLocal()
        try:
            promoted = promote_usernames(db, usernames)
        finally:
            db.close()
        if promoted:
            logger.info("admin bootstrap: promoted %s", ", ".join(u.username for u in promoted))
