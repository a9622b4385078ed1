from datetime import datetime

import pytest

from app.domains.photos.exception import PhotoValidationError, StorageError
from app.domains.photos.repository.photo_repository import PhotoRepository
from conftest import BASE_TIME, make_photo


@pytest.fixture
def repo(db):
    return PhotoRepository(db)


def test_save_assigns_id_and_timestamp(repo):
    photo = make_photo("a", uploaded_at=None)

    saved = repo.save(photo)

    assert saved.id is not None
    assert len(saved.id) == 32
    assert saved.uploaded_at is not None
    assert repo.find_by_id(saved.id) == saved


def test_save_keeps_given_id_and_timestamp(repo):
    saved = repo.save(make_photo("a", id="f" * 32))

    assert saved.id == "f" * 32
    assert saved.uploaded_at == BASE_TIME


@pytest.mark.parametrize("overrides", [
    {"file_size": 0},
    {"file_size": -5},
    {"original_file_name": "   "},
    {"mime_type": ""},
    {"stored_file_name": "x" * 256},
    {"width": 0},
])
def test_save_rejects_invalid_fields_before_writing(repo, overrides):
    with pytest.raises(PhotoValidationError):
        repo.save(make_photo("a", **overrides))

    assert repo.count() == 0


def test_save_duplicate_stored_file_name_raises_storage_error(repo):
    repo.save(make_photo("a"))

    with pytest.raises(StorageError):
        repo.save(make_photo("b", stored_file_name="a-stored.jpg"))

    # 롤백 후에도 세션은 계속 사용 가능
    assert repo.count() == 1


def test_find_by_id_missing_returns_none(repo):
    assert repo.find_by_id("does-not-exist") is None


def test_find_all_is_newest_first(repo):
    a = repo.save(make_photo("a", minutes=0))
    b = repo.save(make_photo("b", minutes=1))
    c = repo.save(make_photo("c", minutes=2))

    assert [p.id for p in repo.find_all()] == [c.id, b.id, a.id]


def test_find_page_offset_and_limit(repo):
    a = repo.save(make_photo("a", minutes=0))
    b = repo.save(make_photo("b", minutes=1))
    c = repo.save(make_photo("c", minutes=2))

    assert [p.id for p in repo.find_page(offset=0, limit=2)] == [c.id, b.id]
    assert [p.id for p in repo.find_page(offset=2, limit=2)] == [a.id]
    assert repo.find_page(offset=3, limit=2) == []
    assert repo.find_page(offset=0, limit=0) == []


def test_find_page_rejects_negative_values(repo):
    with pytest.raises(ValueError):
        repo.find_page(offset=-1, limit=2)
    with pytest.raises(ValueError):
        repo.find_page(offset=0, limit=-1)


def test_count(repo):
    assert repo.count() == 0
    repo.save(make_photo("a"))
    repo.save(make_photo("b"))
    assert repo.count() == 2


def test_uploaded_before_and_after_are_strict(repo):
    a = repo.save(make_photo("a", minutes=0))
    b = repo.save(make_photo("b", minutes=1))
    c = repo.save(make_photo("c", minutes=2))

    assert [p.id for p in repo.find_uploaded_before(b.uploaded_at)] == [a.id]
    assert [p.id for p in repo.find_uploaded_after(b.uploaded_at)] == [c.id]
    assert repo.find_uploaded_before(a.uploaded_at) == []
    assert repo.find_uploaded_after(c.uploaded_at) == []

    # 가까운 순서
    assert [p.id for p in repo.find_uploaded_before(c.uploaded_at, limit=10)] == [b.id, a.id]
    assert [p.id for p in repo.find_uploaded_after(a.uploaded_at, limit=10)] == [b.id, c.id]


def test_navigation_round_trip(repo):
    repo.save(make_photo("a", minutes=0))
    b = repo.save(make_photo("b", minutes=1))
    repo.save(make_photo("c", minutes=2))

    older = repo.find_uploaded_before(b.uploaded_at)[0]
    back = repo.find_uploaded_after(older.uploaded_at)[0]

    assert back.uploaded_at == b.uploaded_at
    assert back.id == b.id


def test_equal_timestamps_are_ordered_by_id(repo):
    low = repo.save(make_photo("low", id="1" * 32, minutes=5))
    high = repo.save(make_photo("high", id="9" * 32, minutes=5))

    assert [p.id for p in repo.find_all()] == [high.id, low.id]
    assert [p.id for p in repo.find_uploaded_before(high.uploaded_at, high.id)] == [low.id]
    assert [p.id for p in repo.find_uploaded_after(low.uploaded_at, low.id)] == [high.id]
    assert repo.find_uploaded_before(low.uploaded_at, low.id) == []
    assert repo.find_uploaded_after(high.uploaded_at, high.id) == []


def test_delete_by_id_is_idempotent(repo):
    a = repo.save(make_photo("a"))
    b = repo.save(make_photo("b"))

    assert repo.delete_by_id(a.id) is True
    assert repo.delete_by_id(a.id) is False
    assert repo.find_by_id(a.id) is None
    assert repo.find_by_id(b.id) is not None


def test_update_metadata_changes_only_dimensions(repo):
    a = repo.save(make_photo("a"))

    updated = repo.update_metadata(a.id, 640, 480)

    assert updated.width == 640
    assert updated.height == 480
    assert updated.original_file_name == a.original_file_name
    assert updated.uploaded_at == a.uploaded_at
    assert repo.find_by_id(a.id).width == 640


def test_update_metadata_unknown_id_returns_none(repo):
    assert repo.update_metadata("missing", 1, 1) is None


def test_find_by_upload_month(repo):
    jan = repo.save(make_photo("jan", uploaded_at=datetime(2024, 1, 31, 23, 59)))
    dec_early = repo.save(make_photo("dec1", uploaded_at=datetime(2024, 12, 1, 0, 0)))
    dec_late = repo.save(make_photo("dec2", uploaded_at=datetime(2024, 12, 20, 8, 0)))
    repo.save(make_photo("next-year", uploaded_at=datetime(2025, 1, 1, 0, 0)))

    assert [p.id for p in repo.find_by_upload_month(2024, 12)] == [dec_late.id, dec_early.id]
    assert [p.id for p in repo.find_by_upload_month(2024, 1)] == [jan.id]
    assert repo.find_by_upload_month(2024, 6) == []

    with pytest.raises(ValueError):
        repo.find_by_upload_month(2024, 13)


def test_find_without_dimensions(repo):
    old = repo.save(make_photo("old", minutes=0))
    repo.save(make_photo("sized", minutes=1, width=10, height=10))
    new = repo.save(make_photo("new", minutes=2, width=10))

    assert [p.id for p in repo.find_without_dimensions()] == [old.id, new.id]
    assert [p.id for p in repo.find_without_dimensions(limit=1)] == [old.id]


def test_find_without_dimensions_after_cursor(repo):
    a = repo.save(make_photo("a", minutes=0))
    b = repo.save(make_photo("b", minutes=1))
    c = repo.save(make_photo("c", minutes=1))
    d = repo.save(make_photo("d", minutes=2))
    same_time = sorted([b, c], key=lambda p: p.id)

    after_a = repo.find_without_dimensions(after=(a.uploaded_at, a.id))
    assert [p.id for p in after_a] == [same_time[0].id, same_time[1].id, d.id]

    first = same_time[0]
    after_first = repo.find_without_dimensions(after=(first.uploaded_at, first.id))
    assert [p.id for p in after_first] == [same_time[1].id, d.id]

    assert repo.find_without_dimensions(after=(d.uploaded_at, d.id)) == []
