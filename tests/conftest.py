import io
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.core.config import Settings
from app.db import build_engine, build_session_factory
from app.domains.photos.model import Photo
from app.main import create_app
from app.models import Base


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    return Settings(
        SQLALCHEMY_DATABASE_URL="sqlite://",
        UPLOAD_PATH=str(upload_dir),
        MAX_FILE_SIZE_BYTES=10 * 1024 * 1024,
        ALLOWED_MIME_TYPES=["image/jpeg", "image/png", "image/gif", "image/webp"],
        AUTO_CREATE_SCHEMA=True,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def db(settings):
    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


def make_image(width: int = 40, height: int = 30, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 120, 40)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return make_image()


BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


def make_photo(name: str, minutes: int = 0, **kwargs) -> Photo:
    """BASE_TIME + minutes 에 업로드된 것으로 보이는 사진 레코드"""
    fields = dict(
        original_file_name=f"{name}.jpg",
        stored_file_name=f"{name}-stored.jpg",
        file_path=f"/uploads/{name}-stored.jpg",
        file_size=1024,
        mime_type="image/jpeg",
        uploaded_at=BASE_TIME + timedelta(minutes=minutes),
    )
    fields.update(kwargs)
    return Photo(**fields)
