from sqlalchemy import Column, Integer, BigInteger, String, DateTime, Index

from app.models.base import Base


class PhotoEntity(Base):
    __tablename__ = "photos"

    id = Column(String(32), primary_key=True)
    original_file_name = Column(String(255), nullable=False)
    stored_file_name = Column(String(255), nullable=False, unique=True)
    file_path = Column(String(500), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    mime_type = Column(String(50), nullable=False)

    uploaded_at = Column(DateTime, nullable=False)

    # 업로드 후 이미지 디코딩에 성공한 경우에만 채워짐
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)

    __table_args__ = (
        Index("ix_photos_uploaded_at", "uploaded_at"),
    )
