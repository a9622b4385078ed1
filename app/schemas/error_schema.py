from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """공통 에러 응답 (photo_error / error_response 가 생성)"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "status": 404,
                "code": "PHOTO_404_1",
                "reason": "Photo not found.",
                "timeStamp": "2026-10-19T09:30:00.000000",
                "path": "/api/v1/photos/0f8c1c2e9d4b4f3a8a7e6d5c4b3a2910",
            }
        }
    )

    success: bool = Field(False, description="성공 여부 (항상 false)")
    status: int = Field(..., description="HTTP 상태 코드")
    code: str = Field(..., description="에러 코드 (PHOTO_<status>_<n>)")
    reason: str = Field(..., description="사용자에게 보여줄 에러 사유")
    timeStamp: str = Field(..., description="응답 시간 (ISO 형식, UTC)")
    path: str = Field(..., description="요청 경로")
