from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Header, Path, Query, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.error_handler import utcnow
from app.db import get_db, get_settings
from app.domains.photos.exception import (
    PHOTO_ARCHIVE_RESPONSES,
    PHOTO_DELETE_RESPONSES,
    PHOTO_DETAIL_RESPONSES,
    PHOTO_FILE_RESPONSES,
    PHOTO_LIST_RESPONSES,
    PHOTO_UPLOAD_RESPONSES,
    PhotoAlbumError,
    photo_error,
)
from app.domains.photos.model import Photo
from app.domains.photos.service.photo_service import PhotoService
from app.schemas.photos.photo_schema import (
    PhotoArchiveResponse,
    PhotoDeleteResponse,
    PhotoDetailResponse,
    PhotoItem,
    PhotoListResponse,
    PhotoUploadResponse,
)

# 원본 이미지는 바뀌지 않으므로 1년 캐시
CACHE_CONTROL = "public, max-age=31536000"
_EPOCH = datetime(1970, 1, 1)


router = APIRouter(
    prefix="/api/v1/photos",
    tags=["Photos"]
)


def _ok(status: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status, content=jsonable_encoder(content))


def photo_etag(photo: Photo) -> str:
    ticks = (photo.uploaded_at - _EPOCH) // timedelta(microseconds=1)
    return f'"{photo.id}-{ticks}"'


def _etag_matches(etag: str, if_none_match: str) -> bool:
    tags = [t.strip() for t in if_none_match.split(",")]
    return "*" in tags or etag in tags


# -------------------------------------------------------
# 1) 사진 목록 (최신순, 페이지네이션)
# -------------------------------------------------------
@router.get(
    "",
    summary="사진 목록 조회",
    description="업로드된 사진을 최신순으로 페이지네이션하여 조회합니다.",
    status_code=200,
    response_model=PhotoListResponse,
    responses=PHOTO_LIST_RESPONSES,
)
def list_photos(
    request: Request,
    page: int = Query(0, description="페이지 번호 (0부터 시작)", ge=0),
    size: int = Query(20, description="페이지 크기", ge=1, le=100),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    path = request.url.path
    service = PhotoService(db, settings)

    try:
        result = service.list_photos(page=page, size=size)
    except PhotoAlbumError:
        return photo_error("PHOTO_500_5", path)

    return _ok(200, {
        "success": True,
        "status": 200,
        "photos": [PhotoItem.from_photo(p) for p in result.photos],
        "page": result.page,
        "size": result.size,
        "total_count": result.total_count,
        "timeStamp": utcnow().isoformat(),
        "path": path,
    })


# -------------------------------------------------------
# 2) 사진 업로드
# -------------------------------------------------------
@router.post(
    "",
    summary="사진 업로드",
    description="이미지 파일을 업로드합니다. JPEG, PNG, GIF, WebP만 허용됩니다.",
    status_code=201,
    response_model=PhotoUploadResponse,
    responses=PHOTO_UPLOAD_RESPONSES,
)
def upload_photo(
    request: Request,
    file: UploadFile = File(..., description="이미지 파일 (multipart/form-data)"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    path = request.url.path
    service = PhotoService(db, settings)

    result = service.upload_photo(
        file_stream=file.file,
        original_name=file.filename or "",
        declared_mime_type=file.content_type,
        declared_size=file.size,
    )

    if not result.success:
        return photo_error(result.error_code, path, reason=result.error_message)

    return _ok(201, {
        "success": True,
        "status": 201,
        "photo_id": result.photo_id,
        "file_name": result.file_name,
        "timeStamp": utcnow().isoformat(),
        "path": path,
    })


# -------------------------------------------------------
# 3) 월별 사진 목록
# -------------------------------------------------------
@router.get(
    "/archive/{year}/{month}",
    summary="월별 사진 목록 조회",
    description="특정 연/월에 업로드된 사진을 최신순으로 조회합니다.",
    status_code=200,
    response_model=PhotoArchiveResponse,
    responses=PHOTO_ARCHIVE_RESPONSES,
)
def list_photos_by_month(
    request: Request,
    year: int = Path(..., description="연도", ge=1, le=9998),
    month: int = Path(..., description="월 (1-12)"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    path = request.url.path
    if not 1 <= month <= 12:
        return photo_error("PHOTO_400_4", path)

    service = PhotoService(db, settings)
    try:
        photos = service.get_photos_by_month(year, month)
    except PhotoAlbumError:
        return photo_error("PHOTO_500_5", path)

    return _ok(200, {
        "success": True,
        "status": 200,
        "year": year,
        "month": month,
        "photos": [PhotoItem.from_photo(p) for p in photos],
        "timeStamp": utcnow().isoformat(),
        "path": path,
    })


# -------------------------------------------------------
# 4) 사진 상세 (이전/다음 사진 포함)
# -------------------------------------------------------
@router.get(
    "/{photo_id}",
    summary="사진 상세 조회",
    description="사진 한 장의 정보와 이전(더 오래된)/다음(더 최신) 사진 ID를 조회합니다.",
    status_code=200,
    response_model=PhotoDetailResponse,
    responses=PHOTO_DETAIL_RESPONSES,
)
def get_photo_detail(
    request: Request,
    photo_id: str = Path(..., description="사진 ID"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    path = request.url.path
    service = PhotoService(db, settings)

    try:
        photo = service.get_photo(photo_id)
        if photo is None:
            return photo_error("PHOTO_404_1", path)

        previous_photo = service.get_previous_photo(photo)
        next_photo = service.get_next_photo(photo)
    except PhotoAlbumError:
        return photo_error("PHOTO_500_5", path)

    return _ok(200, {
        "success": True,
        "status": 200,
        "photo": PhotoItem.from_photo(photo),
        "previous_photo_id": previous_photo.id if previous_photo else None,
        "next_photo_id": next_photo.id if next_photo else None,
        "timeStamp": utcnow().isoformat(),
        "path": path,
    })


# -------------------------------------------------------
# 5) 원본 이미지 파일
# -------------------------------------------------------
@router.get(
    "/{photo_id}/file",
    summary="원본 이미지 조회",
    description="저장된 이미지 바이트를 반환합니다. 장기 캐시 헤더와 ETag가 포함됩니다.",
    status_code=200,
    response_class=Response,
    responses=PHOTO_FILE_RESPONSES,
)
def get_photo_file(
    request: Request,
    photo_id: str = Path(..., description="사진 ID"),
    if_none_match: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    path = request.url.path
    service = PhotoService(db, settings)

    try:
        photo = service.get_photo(photo_id)
        if photo is None:
            return photo_error("PHOTO_404_1", path)

        etag = photo_etag(photo)
        headers = {"Cache-Control": CACHE_CONTROL, "ETag": etag}

        if if_none_match and _etag_matches(etag, if_none_match):
            return Response(status_code=304, headers=headers)

        content = service.read_photo_file(photo)
    except PhotoAlbumError:
        return photo_error("PHOTO_500_5", path)

    if content is None:
        return photo_error("PHOTO_404_2", path)

    headers["Content-Disposition"] = f"inline; filename*=utf-8''{quote(photo.original_file_name)}"
    return Response(content=content, media_type=photo.mime_type, headers=headers)


# -------------------------------------------------------
# 6) 사진 삭제
# -------------------------------------------------------
@router.delete(
    "/{photo_id}",
    summary="사진 삭제",
    description="사진 파일과 메타데이터를 삭제합니다.",
    status_code=200,
    response_model=PhotoDeleteResponse,
    responses=PHOTO_DELETE_RESPONSES,
)
def delete_photo(
    request: Request,
    photo_id: str = Path(..., description="사진 ID"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    path = request.url.path
    service = PhotoService(db, settings)

    try:
        deleted = service.delete_photo(photo_id)
    except PhotoAlbumError:
        return photo_error("PHOTO_500_4", path)

    if not deleted:
        return photo_error("PHOTO_404_1", path)

    return _ok(200, {
        "success": True,
        "status": 200,
        "photo_id": photo_id,
        "timeStamp": utcnow().isoformat(),
        "path": path,
    })
