import logging
import os

from app.domains.photos.exception import FilesystemError

logger = logging.getLogger(__name__)

# 클라이언트에 노출되는 논리 경로의 prefix
PUBLIC_PREFIX = "/uploads"


class LocalFileStore:
    """업로드 루트 디렉토리 아래에 사진 파일을 저장/조회/삭제"""

    def __init__(self, root: str):
        self.root = root

    def path_for(self, stored_file_name: str) -> str:
        # 사용자 입력 파일명이 아니라 서버가 만든 이름만 들어오지만, 디렉토리 탈출은 막아둔다
        return os.path.join(self.root, os.path.basename(stored_file_name))

    def public_path(self, stored_file_name: str) -> str:
        return f"{PUBLIC_PREFIX}/{stored_file_name}"

    def write(self, stored_file_name: str, content: bytes) -> str:
        full_path = self.path_for(stored_file_name)
        try:
            os.makedirs(self.root, exist_ok=True)
            with open(full_path, "wb") as f:
                f.write(content)
        except OSError as e:
            raise FilesystemError(f"failed to write {full_path}") from e
        return full_path

    def read(self, stored_file_name: str) -> bytes:
        full_path = self.path_for(stored_file_name)
        try:
            with open(full_path, "rb") as f:
                return f.read()
        except OSError as e:
            raise FilesystemError(f"failed to read {full_path}") from e

    def exists(self, stored_file_name: str) -> bool:
        return os.path.isfile(self.path_for(stored_file_name))

    def delete(self, stored_file_name: str) -> bool:
        """파일이 있었으면 True, 없었으면 False"""
        full_path = self.path_for(stored_file_name)
        try:
            os.remove(full_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemError(f"failed to delete {full_path}") from e
        return True
