from pydantic import BaseModel, Field
from typing import List, Optional

from app.domains.photos.model import Photo


class PhotoItem(BaseModel):
    """사진 메타데이터"""
    id: str = Field(..., description="사진 ID")
    original_file_name: str = Field(..., description="업로드 시 원본 파일명")
    stored_file_name: str = Field(..., description="서버에 저장된 파일명")
    file_path: str = Field(..., description="논리 경로 (/uploads/...)")
    file_url: str = Field(..., description="원본 이미지 조회 URL")
    file_size: int = Field(..., description="파일 크기 (bytes)")
    mime_type: str = Field(..., description="MIME 타입")
    uploaded_at: Optional[str] = Field(None, description="업로드 시간 (ISO 형식, UTC)")
    width: Optional[int] = Field(None, description="가로 픽셀")
    height: Optional[int] = Field(None, description="세로 픽셀")

    @classmethod
    def from_photo(cls, photo: Photo) -> "PhotoItem":
        return cls(
            id=photo.id,
            original_file_name=photo.original_file_name,
            stored_file_name=photo.stored_file_name,
            file_path=photo.file_path,
            file_url=f"/api/v1/photos/{photo.id}/file",
            file_size=photo.file_size,
            mime_type=photo.mime_type,
            uploaded_at=photo.uploaded_at.isoformat() if photo.uploaded_at else None,
            width=photo.width,
            height=photo.height,
        )


class PhotoListResponse(BaseModel):
    """사진 목록 조회 응답"""
    success: bool = Field(True, description="성공 여부")
    status: int = Field(200, description="HTTP 상태 코드")
    photos: List[PhotoItem] = Field(default_factory=list, description="사진 목록 (최신순)")
    page: int = Field(..., description="현재 페이지 번호 (0부터 시작)")
    size: int = Field(..., description="페이지 크기")
    total_count: int = Field(..., description="전체 사진 개수")
    timeStamp: str = Field(..., description="응답 시간 (ISO 형식)")
    path: str = Field(..., description="요청 경로")


class PhotoArchiveResponse(BaseModel):
    """월별 사진 목록 응답"""
    success: bool = Field(True, description="성공 여부")
    status: int = Field(200, description="HTTP 상태 코드")
    year: int = Field(..., description="연도")
    month: int = Field(..., description="월 (1-12)")
    photos: List[PhotoItem] = Field(default_factory=list, description="사진 목록 (최신순)")
    timeStamp: str = Field(..., description="응답 시간 (ISO 형식)")
    path: str = Field(..., description="요청 경로")


class PhotoDetailResponse(BaseModel):
    """사진 상세 조회 응답"""
    success: bool = Field(True, description="성공 여부")
    status: int = Field(200, description="HTTP 상태 코드")
    photo: PhotoItem = Field(..., description="사진 정보")
    previous_photo_id: Optional[str] = Field(None, description="바로 이전(더 오래된) 사진 ID")
    next_photo_id: Optional[str] = Field(None, description="바로 다음(더 최신) 사진 ID")
    timeStamp: str = Field(..., description="응답 시간 (ISO 형식)")
    path: str = Field(..., description="요청 경로")


class PhotoUploadResponse(BaseModel):
    """사진 업로드 응답"""
    success: bool = Field(True, description="성공 여부")
    status: int = Field(201, description="HTTP 상태 코드")
    photo_id: str = Field(..., description="생성된 사진 ID")
    file_name: str = Field(..., description="원본 파일명")
    timeStamp: str = Field(..., description="응답 시간 (ISO 형식)")
    path: str = Field(..., description="요청 경로")


class PhotoDeleteResponse(BaseModel):
    """사진 삭제 응답"""
    success: bool = Field(True, description="성공 여부")
    status: int = Field(200, description="HTTP 상태 코드")
    photo_id: str = Field(..., description="삭제된 사진 ID")
    timeStamp: str = Field(..., description="응답 시간 (ISO 형식)")
    path: str = Field(..., description="요청 경로")
