from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from app.schemas.error_schema import ErrorResponse


def utcnow() -> datetime:
    """naive UTC 현재 시각 (DB DateTime 컬럼과 동일한 형식)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def error_response(status: int, code: str, reason: str, path: str) -> JSONResponse:

    error = ErrorResponse(
        success=False,
        status=status,
        code=code,
        reason=reason,
        timeStamp=utcnow().isoformat(),
        path=path
    )

    return JSONResponse(
        status_code=status,
        content=error.model_dump()
    )
