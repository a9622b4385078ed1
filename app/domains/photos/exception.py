from dataclasses import dataclass
from typing import Dict, Optional

from app.core.error_handler import error_response
from app.schemas.error_schema import ErrorResponse


class PhotoAlbumError(Exception):
    """사진첩 도메인 공통 예외"""


class PhotoValidationError(PhotoAlbumError):
    """저장 전 필드 제약 위반 (빈 값, 길이 초과, 크기 0 이하 등)"""


class StorageError(PhotoAlbumError):
    """DB 접근 실패 (연결 오류, 제약 조건 위반)"""


class FilesystemError(PhotoAlbumError):
    """업로드 디렉토리 읽기/쓰기 실패"""


@dataclass(frozen=True)
class PhotoError:
    status: int
    code: str
    reason: str

    def to_dict(self, path: str) -> Dict:
        return {
            "success": False,
            "status": self.status,
            "code": self.code,
            "reason": self.reason,
            "timeStamp": "...",
            "path": path,
        }


PHOTO_ERRORS: Dict[str, PhotoError] = {
    # Upload
    "PHOTO_400_1": PhotoError(400, "PHOTO_400_1", "File type not supported. Please upload JPEG, PNG, GIF, or WebP images."),
    "PHOTO_400_2": PhotoError(400, "PHOTO_400_2", "File size exceeds the upload limit."),
    "PHOTO_400_3": PhotoError(400, "PHOTO_400_3", "File is empty."),
    "PHOTO_400_5": PhotoError(400, "PHOTO_400_5", "File name must be between 1 and 255 characters."),
    "PHOTO_500_1": PhotoError(500, "PHOTO_500_1", "Error saving file. Please try again."),
    "PHOTO_500_2": PhotoError(500, "PHOTO_500_2", "Error saving photo information. Please try again."),
    "PHOTO_500_3": PhotoError(500, "PHOTO_500_3", "An unexpected error occurred. Please try again."),

    # Lookup / file
    "PHOTO_404_1": PhotoError(404, "PHOTO_404_1", "Photo not found."),
    "PHOTO_404_2": PhotoError(404, "PHOTO_404_2", "Photo file not found."),
    "PHOTO_400_4": PhotoError(400, "PHOTO_400_4", "Month must be between 1 and 12."),
    "PHOTO_500_5": PhotoError(500, "PHOTO_500_5", "Error loading photos. Please try again."),

    # Delete
    "PHOTO_500_4": PhotoError(500, "PHOTO_500_4", "Failed to delete photo. Please try again."),
}


def photo_error(code: str, path: str, reason: Optional[str] = None):
    err = PHOTO_ERRORS.get(code)
    if not err:
        return error_response(500, "PHOTO_500_3", PHOTO_ERRORS["PHOTO_500_3"].reason, path)
    return error_response(err.status, err.code, reason or err.reason, path)


def _examples(path: str, codes) -> Dict:
    return {
        code: {"value": PHOTO_ERRORS[code].to_dict(path)}
        for code in codes
    }


def _responses(path: str, mapping: Dict[int, tuple]) -> Dict:
    return {
        status: {
            "model": ErrorResponse,
            "description": description,
            "content": {"application/json": {"examples": _examples(path, codes)}},
        }
        for status, (description, codes) in mapping.items()
    }


# Swagger responses
PHOTO_LIST_RESPONSES = _responses("/api/v1/photos", {
    500: ("서버 내부 오류", ["PHOTO_500_5"]),
})

PHOTO_UPLOAD_RESPONSES = _responses("/api/v1/photos", {
    400: ("잘못된 파일 (형식/크기/파일명)", ["PHOTO_400_1", "PHOTO_400_2", "PHOTO_400_3", "PHOTO_400_5"]),
    500: ("파일 또는 메타데이터 저장 실패", ["PHOTO_500_1", "PHOTO_500_2", "PHOTO_500_3"]),
})

PHOTO_ARCHIVE_RESPONSES = _responses("/api/v1/photos/archive/{year}/{month}", {
    400: ("잘못된 월", ["PHOTO_400_4"]),
    500: ("서버 내부 오류", ["PHOTO_500_5"]),
})

PHOTO_DETAIL_RESPONSES = _responses("/api/v1/photos/{photo_id}", {
    404: ("사진을 찾을 수 없음", ["PHOTO_404_1"]),
    500: ("서버 내부 오류", ["PHOTO_500_5"]),
})

PHOTO_FILE_RESPONSES = _responses("/api/v1/photos/{photo_id}/file", {
    404: ("사진 또는 파일을 찾을 수 없음", ["PHOTO_404_1", "PHOTO_404_2"]),
    500: ("서버 내부 오류", ["PHOTO_500_5"]),
})

PHOTO_DELETE_RESPONSES = _responses("/api/v1/photos/{photo_id}", {
    404: ("사진을 찾을 수 없음", ["PHOTO_404_1"]),
    500: ("삭제 실패", ["PHOTO_500_4"]),
})
