import logging
import os
import uuid
from typing import BinaryIO, List, Optional

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.images import read_dimensions
from app.core.storage import LocalFileStore
from app.domains.photos.exception import (
    PHOTO_ERRORS,
    FilesystemError,
    PhotoAlbumError,
    PhotoValidationError,
)
from app.domains.photos.model import Photo, PhotoPage, UploadResult
from app.domains.photos.repository.photo_repository import MAX_FILE_NAME_LENGTH, PhotoRepository

logger = logging.getLogger(__name__)


def file_extension(file_name: Optional[str]) -> str:
    """마지막 '.' 뒤 확장자 (점 포함). 없으면 빈 문자열"""
    if not file_name:
        return ""
    return os.path.splitext(file_name)[1]


class PhotoService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.photo_repo = PhotoRepository(db)
        self.file_store = LocalFileStore(settings.UPLOAD_PATH)
        self.allowed_mime_types = {m.lower() for m in settings.ALLOWED_MIME_TYPES}
        self.max_file_size = settings.MAX_FILE_SIZE_BYTES

    # ============================================
    # 업로드
    # ============================================
    def upload_photo(
        self,
        file_stream: BinaryIO,
        original_name: str,
        declared_mime_type: Optional[str],
        declared_size: Optional[int],
    ) -> UploadResult:
        file_name = original_name or ""

        try:
            # 1) MIME 타입 검사
            mime_type = (declared_mime_type or "").strip()
            if mime_type.lower() not in self.allowed_mime_types:
                logger.warning(f"Upload rejected: Invalid file type {declared_mime_type} for {file_name}")
                return self._failed(file_name, "PHOTO_400_1")

            # 2) 선언된 크기 검사 (스트림을 읽기 전에)
            rejected = self._check_size(file_name, declared_size)
            if rejected:
                return rejected

            content = file_stream.read()

            # 실제로 읽은 크기도 한 번 더 확인. 저장되는 크기는 실제 바이트 수
            rejected = self._check_size(file_name, len(content))
            if rejected:
                return rejected
            file_size = len(content)

            # 3) 저장 파일명 생성 + 파일명 길이 검사 (디스크에 쓰기 전에)
            stored_file_name = f"{uuid.uuid4().hex}{file_extension(file_name)}"
            if not self._valid_name(file_name) or not self._valid_name(stored_file_name):
                logger.warning(f"Upload rejected: Invalid file name length {len(file_name)}")
                return self._failed(file_name, "PHOTO_400_5")

            # 4) 이미지 크기 추출 (실패해도 계속 진행)
            width, height = read_dimensions(content, file_name)

            # 5) 디스크에 저장
            try:
                full_path = self.file_store.write(stored_file_name, content)
            except FilesystemError:
                logger.error(f"Error saving file {file_name} as {stored_file_name}", exc_info=True)
                return self._failed(file_name, "PHOTO_500_1")

            # 6) 메타데이터 저장, 실패하면 방금 쓴 파일 삭제
            photo = Photo(
                original_file_name=file_name,
                stored_file_name=stored_file_name,
                file_path=self.file_store.public_path(stored_file_name),
                file_size=file_size,
                mime_type=mime_type,
                width=width,
                height=height,
            )
            try:
                photo = self.photo_repo.save(photo)
            except PhotoValidationError:
                self._discard_file(stored_file_name, full_path)
                logger.warning(f"Upload rejected: Invalid photo metadata for {file_name}", exc_info=True)
                return self._failed(file_name, "PHOTO_400_5")
            except Exception:
                self._discard_file(stored_file_name, full_path)
                logger.error(f"Error saving photo metadata to database for {file_name}", exc_info=True)
                return self._failed(file_name, "PHOTO_500_2")

        except Exception:
            logger.error(f"Unexpected error during photo upload for {file_name}", exc_info=True)
            return self._failed(file_name, "PHOTO_500_3")

        logger.info(f"Successfully uploaded photo {file_name} with ID {photo.id}")
        return UploadResult(success=True, file_name=file_name, photo_id=photo.id)

    def _check_size(self, file_name: str, size: Optional[int]) -> Optional[UploadResult]:
        if size is None:
            return None
        if size > self.max_file_size:
            logger.warning(f"Upload rejected: File size {size} exceeds limit for {file_name}")
            return UploadResult.failed(
                file_name,
                "PHOTO_400_2",
                f"File size exceeds {self.settings.max_file_size_mb}MB limit.",
            )
        if size <= 0:
            logger.warning(f"Upload rejected: File {file_name} is empty")
            return self._failed(file_name, "PHOTO_400_3")
        return None

    @staticmethod
    def _valid_name(name: str) -> bool:
        return bool(name.strip()) and len(name) <= MAX_FILE_NAME_LENGTH

    def _discard_file(self, stored_file_name: str, full_path: str) -> None:
        # 롤백용 정리. 실패해도 로그만 남김
        try:
            self.file_store.delete(stored_file_name)
        except FilesystemError:
            logger.error(f"Error deleting file {full_path} during rollback", exc_info=True)

    @staticmethod
    def _failed(file_name: str, code: str) -> UploadResult:
        return UploadResult.failed(file_name, code, PHOTO_ERRORS[code].reason)

    # ============================================
    # 삭제
    # ============================================
    def delete_photo(self, photo_id: str) -> bool:
        """
        사진 삭제. 없는 id면 False

        파일 삭제 실패는 로그만 남기고 메타데이터는 삭제한다.
        DB 오류(StorageError)는 그대로 전파.
        """
        photo = self.photo_repo.find_by_id(photo_id)
        if photo is None:
            logger.warning(f"Photo with ID {photo_id} not found for deletion")
            return False

        try:
            self.file_store.delete(photo.stored_file_name)
        except FilesystemError:
            logger.error(
                f"Error deleting file {photo.stored_file_name} for photo ID {photo_id}",
                exc_info=True,
            )

        try:
            deleted = self.photo_repo.delete_by_id(photo_id)
        except PhotoAlbumError:
            logger.error(f"Error deleting photo with ID {photo_id}", exc_info=True)
            raise

        if not deleted:
            # 조회와 삭제 사이에 다른 요청이 먼저 지운 경우
            logger.warning(f"Photo with ID {photo_id} was already removed")
            return False

        logger.info(f"Successfully deleted photo ID {photo_id}")
        return True

    # ============================================
    # 조회
    # ============================================
    def get_photo(self, photo_id: str) -> Optional[Photo]:
        return self.photo_repo.find_by_id(photo_id)

    def get_all_photos(self) -> List[Photo]:
        return self.photo_repo.find_all()

    def list_photos(self, page: int, size: int) -> PhotoPage:
        """page는 0부터 시작"""
        if page < 0:
            raise ValueError("page must be >= 0")
        if size < 0:
            raise ValueError("size must be >= 0")

        photos = self.photo_repo.find_page(offset=page * size, limit=size)
        return PhotoPage(
            page=page,
            size=size,
            total_count=self.photo_repo.count(),
            photos=photos,
        )

    def get_photos_by_month(self, year: int, month: int) -> List[Photo]:
        return self.photo_repo.find_by_upload_month(year, month)

    def get_previous_photo(self, current: Photo) -> Optional[Photo]:
        """현재 사진보다 오래된 바로 옆 사진"""
        older = self.photo_repo.find_uploaded_before(current.uploaded_at, current.id)
        return older[0] if older else None

    def get_next_photo(self, current: Photo) -> Optional[Photo]:
        """현재 사진보다 최신인 바로 옆 사진"""
        newer = self.photo_repo.find_uploaded_after(current.uploaded_at, current.id)
        return newer[0] if newer else None

    def read_photo_file(self, photo: Photo) -> Optional[bytes]:
        """디스크에 파일이 없으면 None"""
        if not self.file_store.exists(photo.stored_file_name):
            logger.error(
                f"Physical file not found for photo ID {photo.id} at path "
                f"{self.file_store.path_for(photo.stored_file_name)}"
            )
            return None
        return self.file_store.read(photo.stored_file_name)

    # ============================================
    # 이미지 크기 백필
    # ============================================
    def backfill_dimensions(self, batch_size: int = 100) -> int:
        """
        width/height가 비어 있는 사진을 다시 디코딩해서 채운다.

        batch_size 단위로 (uploaded_at, id) 커서를 옮겨가며 끝까지 훑으므로
        디코딩할 수 없는 사진이 앞에 쌓여 있어도 뒤의 사진까지 처리된다.

        Returns:
            int: 크기를 채운 사진 수
        """
        updated = 0
        cursor = None
        while True:
            batch = self.photo_repo.find_without_dimensions(limit=batch_size, after=cursor)
            if not batch:
                break

            for photo in batch:
                if self._backfill_one(photo):
                    updated += 1

            last = batch[-1]
            cursor = (last.uploaded_at, last.id)

        logger.info(f"Backfilled dimensions for {updated} photo(s)")
        return updated

    def _backfill_one(self, photo: Photo) -> bool:
        try:
            content = self.file_store.read(photo.stored_file_name)
        except FilesystemError:
            logger.warning(f"Skipping photo {photo.id}: file {photo.stored_file_name} unreadable")
            return False

        width, height = read_dimensions(content, photo.original_file_name)
        if width is None or height is None:
            return False

        self.photo_repo.update_metadata(photo.id, width, height)
        return True
