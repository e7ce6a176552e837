"""로컬 blob 저장소 테스트"""

import pytest

from incoming_goods.storage.blob_store import LocalBlobStore


def test_put_get_delete(tmp_path):
    store = LocalBlobStore(str(tmp_path))
    store.put("7/abc.jpg", b"image")

    assert (tmp_path / "7" / "abc.jpg").read_bytes() == b"image"
    assert store.get("7/abc.jpg") == b"image"
    assert [p.name for p in (tmp_path / "7").iterdir()] == ["abc.jpg"]

    store.delete("7/abc.jpg")
    assert not (tmp_path / "7" / "abc.jpg").exists()
    store.delete("7/abc.jpg")


def test_missing_blob(tmp_path):
    store = LocalBlobStore(str(tmp_path))
    with pytest.raises(FileNotFoundError):
        store.get("1/missing.png")


@pytest.mark.parametrize("key", ["../escape.jpg", "1/../../escape.jpg", "/etc/passwd"])
def test_keys_cannot_escape_root(tmp_path, key):
    store = LocalBlobStore(str(tmp_path / "root"))
    with pytest.raises(ValueError):
        store.put(key, b"x")
