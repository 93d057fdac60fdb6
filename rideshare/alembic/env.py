from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from rideshare.config import settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

def get_url():
    return settings.DATABASE_URL

from rideshare.db import Base  # импорт моделей для автогенерации метаданных
from rideshare.models import user, car, ride, booking  # noqa: F401

def run_migrations_offline():
    url = get_url()
    context.configure(url=url, target_metadata=Base.metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()
    connectable = engine_from_config(configuration, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=Base.metadata)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
