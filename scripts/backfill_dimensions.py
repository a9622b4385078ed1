"""
이미지 크기(width/height) 백필 스크립트

업로드 당시 디코딩에 실패했거나 크기 컬럼이 비어 있는 사진을
디스크의 원본 파일로 다시 읽어 채운다.

사용법:
    python scripts/backfill_dimensions.py [배치 크기]

배치 크기는 한 번에 조회하는 행 수이며, 비어 있는 사진은 끝까지 모두 처리한다.

예시:
    python scripts/backfill_dimensions.py 200
"""
import sys
import os

# 프로젝트 루트를 Python path에 추가
sys.path.insert(0, os.path.abspath(os.path.dirname(os.path.dirname(__file__))))

from app.core.config import Settings
from app.core.logging import setup_logging
from app.db import build_engine, build_session_factory
from app.domains.photos.exception import PhotoAlbumError
from app.domains.photos.service.photo_service import PhotoService


def backfill(settings: Settings, batch_size: int = 100) -> int:
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        return PhotoService(db, settings).backfill_dimensions(batch_size=batch_size)
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    try:
        batch_size = int(sys.argv[1]) if len(sys.argv) > 1 else 100
    except ValueError:
        print("사용법: python scripts/backfill_dimensions.py [배치 크기]")
        sys.exit(1)

    settings = Settings()
    setup_logging(settings.LOG_LEVEL)

    try:
        count = backfill(settings, batch_size)
    except PhotoAlbumError as e:
        print(f"[오류] 백필 실패: {e}")
        sys.exit(1)

    print(f"[성공] {count}개 사진의 이미지 크기를 채웠습니다.")
