import logging
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.error_handler import utcnow
from app.domains.photos.exception import PhotoValidationError, StorageError
from app.domains.photos.model import Photo
from app.models.photo import PhotoEntity

logger = logging.getLogger(__name__)

# 컬럼 길이 제한 (models/photo.py와 동일)
MAX_FILE_NAME_LENGTH = 255
MAX_FILE_PATH_LENGTH = 500
MAX_MIME_TYPE_LENGTH = 50


def _to_record(entity: PhotoEntity) -> Photo:
    return Photo(
        id=entity.id,
        original_file_name=entity.original_file_name,
        stored_file_name=entity.stored_file_name,
        file_path=entity.file_path,
        file_size=entity.file_size,
        mime_type=entity.mime_type,
        uploaded_at=entity.uploaded_at,
        width=entity.width,
        height=entity.height,
    )


def _to_entity(photo: Photo) -> PhotoEntity:
    return PhotoEntity(
        id=photo.id,
        original_file_name=photo.original_file_name,
        stored_file_name=photo.stored_file_name,
        file_path=photo.file_path,
        file_size=photo.file_size,
        mime_type=photo.mime_type,
        uploaded_at=photo.uploaded_at,
        width=photo.width,
        height=photo.height,
    )


def _check_text(name: str, value: Optional[str], max_length: int) -> None:
    if value is None or not value.strip():
        raise PhotoValidationError(f"{name} must not be blank")
    if len(value) > max_length:
        raise PhotoValidationError(f"{name} must be at most {max_length} characters")


def validate_photo(photo: Photo) -> None:
    _check_text("original_file_name", photo.original_file_name, MAX_FILE_NAME_LENGTH)
    _check_text("stored_file_name", photo.stored_file_name, MAX_FILE_NAME_LENGTH)
    _check_text("file_path", photo.file_path, MAX_FILE_PATH_LENGTH)
    _check_text("mime_type", photo.mime_type, MAX_MIME_TYPE_LENGTH)
    if photo.file_size is None or photo.file_size <= 0:
        raise PhotoValidationError("file_size must be positive")
    if photo.width is not None and photo.width <= 0:
        raise PhotoValidationError("width must be positive")
    if photo.height is not None and photo.height <= 0:
        raise PhotoValidationError("height must be positive")


class PhotoRepository:
    def __init__(self, db: Session):
        self.db = db

    # -------------------------------
    # WRITE
    # -------------------------------
    def save(self, photo: Photo) -> Photo:
        """id / uploaded_at이 비어 있으면 채워서 저장하고, 저장된 레코드를 반환"""
        if photo.id is None:
            photo.id = uuid.uuid4().hex
        if photo.uploaded_at is None:
            photo.uploaded_at = utcnow()

        validate_photo(photo)

        entity = _to_entity(photo)
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"failed to save photo {photo.id}") from e

        return _to_record(entity)

    def delete_by_id(self, photo_id: str) -> bool:
        try:
            deleted = (
                self.db.query(PhotoEntity)
                .filter(PhotoEntity.id == photo_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"failed to delete photo {photo_id}") from e

        return deleted > 0

    def update_metadata(
        self,
        photo_id: str,
        width: Optional[int],
        height: Optional[int],
    ) -> Optional[Photo]:
        """width / height 컬럼만 갱신. 없는 id면 None"""
        try:
            updated = (
                self.db.query(PhotoEntity)
                .filter(PhotoEntity.id == photo_id)
                .update(
                    {PhotoEntity.width: width, PhotoEntity.height: height},
                    synchronize_session=False,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"failed to update metadata of photo {photo_id}") from e

        if not updated:
            return None
        return self.find_by_id(photo_id)

    # -------------------------------
    # READ
    # -------------------------------
    def find_by_id(self, photo_id: str) -> Optional[Photo]:
        try:
            self.db.expire_all()
            entity = self.db.get(PhotoEntity, photo_id)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to load photo {photo_id}") from e

        return _to_record(entity) if entity else None

    def find_all(self) -> List[Photo]:
        """최신순 전체 목록"""
        return self._fetch(self._newest_first())

    def find_page(self, offset: int, limit: int) -> List[Photo]:
        if offset < 0:
            raise ValueError("offset must be >= 0")
        if limit < 0:
            raise ValueError("limit must be >= 0")
        if limit == 0:
            return []

        return self._fetch(self._newest_first().offset(offset).limit(limit))

    def count(self) -> int:
        try:
            return self.db.query(PhotoEntity).count()
        except SQLAlchemyError as e:
            raise StorageError("failed to count photos") from e

    def find_uploaded_before(
        self,
        uploaded_at: datetime,
        photo_id: Optional[str] = None,
        limit: int = 1,
    ) -> List[Photo]:
        """
        uploaded_at보다 오래된 사진 (가까운 순 = 내림차순)

        photo_id를 주면 같은 시각의 사진은 id가 더 작은 것만 포함한다.
        """
        cond = PhotoEntity.uploaded_at < uploaded_at
        if photo_id is not None:
            cond = or_(
                cond,
                and_(PhotoEntity.uploaded_at == uploaded_at, PhotoEntity.id < photo_id),
            )

        query = self._newest_first().filter(cond).limit(limit)
        return self._fetch(query)

    def find_uploaded_after(
        self,
        uploaded_at: datetime,
        photo_id: Optional[str] = None,
        limit: int = 1,
    ) -> List[Photo]:
        """uploaded_at보다 최신인 사진 (가까운 순 = 오름차순)"""
        cond = PhotoEntity.uploaded_at > uploaded_at
        if photo_id is not None:
            cond = or_(
                cond,
                and_(PhotoEntity.uploaded_at == uploaded_at, PhotoEntity.id > photo_id),
            )

        query = (
            self.db.query(PhotoEntity)
            .filter(cond)
            .order_by(PhotoEntity.uploaded_at.asc(), PhotoEntity.id.asc())
            .limit(limit)
        )
        return self._fetch(query)

    def find_by_upload_month(self, year: int, month: int) -> List[Photo]:
        if not 1 <= month <= 12:
            raise ValueError("month must be between 1 and 12")

        start = datetime(year, month, 1)
        end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)

        query = (
            self._newest_first()
            .filter(PhotoEntity.uploaded_at >= start)
            .filter(PhotoEntity.uploaded_at < end)
        )
        return self._fetch(query)

    def find_without_dimensions(
        self,
        limit: int = 100,
        after: Optional[Tuple[datetime, str]] = None,
    ) -> List[Photo]:
        """
        width 또는 height가 비어 있는 사진 (오래된 순, 백필용)

        after=(uploaded_at, id)를 주면 그 사진 뒤부터 조회한다.
        """
        query = self.db.query(PhotoEntity).filter(
            or_(PhotoEntity.width.is_(None), PhotoEntity.height.is_(None))
        )
        if after is not None:
            uploaded_at, photo_id = after
            query = query.filter(
                or_(
                    PhotoEntity.uploaded_at > uploaded_at,
                    and_(PhotoEntity.uploaded_at == uploaded_at, PhotoEntity.id > photo_id),
                )
            )
        query = query.order_by(PhotoEntity.uploaded_at.asc(), PhotoEntity.id.asc()).limit(limit)
        return self._fetch(query)

    # -------------------------------
    # helpers
    # -------------------------------
    def _newest_first(self):
        # 같은 시각이면 id로 순서를 고정
        return (
            self.db.query(PhotoEntity)
            .order_by(PhotoEntity.uploaded_at.desc(), PhotoEntity.id.desc())
        )

    def _fetch(self, query) -> List[Photo]:
        try:
            return [_to_record(e) for e in query.all()]
        except SQLAlchemyError as e:
            raise StorageError("failed to query photos") from e
