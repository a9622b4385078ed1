import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.core.config import Settings
from app.core.logging import setup_logging
from app.db import build_engine, build_session_factory
from app.domains.photos.router.photo_router import router as photo_router
from app.models import Base

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 업로드 디렉토리 보장
        os.makedirs(settings.UPLOAD_PATH, exist_ok=True)

        # 운영에서는 alembic upgrade head 사용. 로컬/테스트에서만 자동 생성
        if settings.AUTO_CREATE_SCHEMA:
            Base.metadata.create_all(bind=engine)

        logger.info(f"Photo Album API started (uploads: {settings.UPLOAD_PATH})")
        yield
        engine.dispose()

    app = FastAPI(
        title="Photo Album API 📷",
        version="1.0.0",
        description="Backend API for uploading, browsing and deleting photos",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "Photos", "description": "사진 업로드/조회/삭제 API"},
        ],
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_factory = build_session_factory(engine)

    # 🟢 라우터 등록
    app.include_router(photo_router)

    @app.get("/")
    def root():
        return {"message": "📷 Photo Album API is running successfully"}

    return app


app = create_app()

# 🟢 로컬 실행용 entry point
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
