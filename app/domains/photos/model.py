from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Photo:
    """업로드된 사진 한 장의 메타데이터"""
    original_file_name: str
    stored_file_name: str
    file_path: str
    file_size: int
    mime_type: str
    id: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class UploadResult:
    success: bool
    file_name: str
    photo_id: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def failed(cls, file_name: str, code: str, message: str) -> "UploadResult":
        return cls(success=False, file_name=file_name, error_code=code, error_message=message)


@dataclass
class PhotoPage:
    page: int
    size: int
    total_count: int
    photos: List[Photo] = field(default_factory=list)
