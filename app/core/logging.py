import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """앱 전체 로깅 설정 (create_app에서 한 번 호출)"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # SQL 로그는 너무 많아서 WARNING 이상만
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
