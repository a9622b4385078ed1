import io
import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def read_dimensions(content: bytes, label: str = "") -> Tuple[Optional[int], Optional[int]]:
    """
    이미지 가로/세로 픽셀 크기 추출 (best effort)

    디코딩에 실패해도 예외를 던지지 않고 (None, None)을 반환한다.
    """
    try:
        with Image.open(io.BytesIO(content)) as image:
            width, height = image.size
        return width, height
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.warning(f"Could not extract image dimensions for {label or 'upload'}: {e}")
        return None, None
