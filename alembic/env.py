import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# ---------------------------------------------------------
# ★ 프로젝트 루트를 path에 추가 (app 패키지 import 용)
# ---------------------------------------------------------
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.core.config import Settings
from app.models import Base

# ---------------------------------------------------------
# Alembic 설정 객체
# ---------------------------------------------------------
config = context.config

# Logging 설정
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# ---------------------------------------------------------
# Alembic이 추적할 metadata 설정
# ---------------------------------------------------------
target_metadata = Base.metadata


# ---------------------------------------------------------
# ★ DB URL은 alembic.ini 대신 Settings(.env)에서 가져온다
# ---------------------------------------------------------
def get_url():
    return Settings().DATABASE_URL


# ---------------------------------------------------------
# offline 모드 (SQL 출력만)
# ---------------------------------------------------------
def run_migrations_offline():
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


# ---------------------------------------------------------
# online 모드 (DB 연결 후 migration 실행)
# ---------------------------------------------------------
def run_migrations_online():
    config.set_main_option("sqlalchemy.url", get_url())

    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


# ---------------------------------------------------------
# 실행
# ---------------------------------------------------------
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
