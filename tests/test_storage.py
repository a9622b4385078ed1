import pytest

from app.core.storage import LocalFileStore
from app.domains.photos.exception import FilesystemError


def test_write_creates_directory(tmp_path):
    store = LocalFileStore(str(tmp_path / "nested" / "uploads"))

    full_path = store.write("abc.png", b"data")

    assert full_path == str(tmp_path / "nested" / "uploads" / "abc.png")
    assert store.read("abc.png") == b"data"
    assert store.exists("abc.png")


def test_path_stays_inside_root(tmp_path):
    store = LocalFileStore(str(tmp_path))

    assert store.path_for("../../etc/passwd") == str(tmp_path / "passwd")


def test_public_path():
    assert LocalFileStore("/srv/uploads").public_path("abc.png") == "/uploads/abc.png"


def test_delete(tmp_path):
    store = LocalFileStore(str(tmp_path))
    store.write("abc.png", b"data")

    assert store.delete("abc.png") is True
    assert store.delete("abc.png") is False
    assert not store.exists("abc.png")


def test_read_missing_raises(tmp_path):
    with pytest.raises(FilesystemError):
        LocalFileStore(str(tmp_path)).read("missing.png")


def test_write_failure_raises(tmp_path):
    # 루트 자리에 일반 파일이 있으면 디렉토리를 만들 수 없음
    blocker = tmp_path / "uploads"
    blocker.write_bytes(b"")

    with pytest.raises(FilesystemError):
        LocalFileStore(str(blocker)).write("abc.png", b"data")
