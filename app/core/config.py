from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DB_HOST: Optional[str] = None
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "photo_album"

    # 직접 지정하면 DB_* 값보다 우선 (테스트/로컬 sqlite 용)
    SQLALCHEMY_DATABASE_URL: Optional[str] = None

    UPLOAD_PATH: str = "uploads"
    MAX_FILE_SIZE_BYTES: int = 10 * 1024 * 1024
    ALLOWED_MIME_TYPES: List[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]

    AUTO_CREATE_SCHEMA: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def DATABASE_URL(self) -> str:
        """SQLAlchemy 연결 URL. DB_HOST가 없으면 로컬 sqlite 파일을 사용"""
        if self.SQLALCHEMY_DATABASE_URL:
            return self.SQLALCHEMY_DATABASE_URL
        if not self.DB_HOST:
            return "sqlite:///./photo_album.db"
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def max_file_size_mb(self) -> int:
        return self.MAX_FILE_SIZE_BYTES // 1024 // 1024
