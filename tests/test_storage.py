# tests/test_storage.py
"""Local upload store: writes, reads and the traversal guard"""

import pytest

from app.services import storage as storage_module
from app.services.storage import LocalStorage, PathTraversalError, content_type_for, storage


def test_save_and_read(tmp_path):
    store = LocalStorage(tmp_path)
    key = store.save("poster-1-u1.png", b"abc")
    assert key == "poster-1-u1.png"
    assert store.exists(key)
    assert store.read(key) == b"abc"
    assert (tmp_path / key).read_bytes() == b"abc"


def test_delete(tmp_path):
    store = LocalStorage(tmp_path)
    key = store.save("a.jpg", b"x")
    store.delete(key)
    assert not store.exists(key)


@pytest.mark.parametrize("key", ["../secret.txt", "../../etc/passwd", "/etc/passwd", "a/../../b.jpg"])
def test_traversal_blocked(tmp_path, key):
    store = LocalStorage(tmp_path / "uploads")
    with pytest.raises(PathTraversalError):
        store.resolve(key)
    with pytest.raises(PathTraversalError):
        store.save(key, b"x")


@pytest.mark.parametrize("key", ["a\x00.png", "sub/\x00", "\x00../etc/passwd"])
def test_nul_byte_key_rejected(tmp_path, key):
    store = LocalStorage(tmp_path)
    with pytest.raises(PathTraversalError):
        store.resolve(key)


def test_failed_write_leaves_no_partial_file(tmp_path, monkeypatch):
    store = LocalStorage(tmp_path)
    real_open = open

    class _DiskFull:
        def __init__(self, f):
            self._f = f

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            self._f.close()
            return False

        def write(self, data):
            self._f.write(data[:10])
            self._f.flush()
            raise OSError(28, "No space left on device")

    def fake_open(path, mode="r", *args, **kwargs):
        return _DiskFull(real_open(path, mode, *args, **kwargs))

    monkeypatch.setattr(storage_module, "open", fake_open, raising=False)
    with pytest.raises(OSError):
        store.save("poster-1-u1.png", b"x" * 100)

    assert not (tmp_path / "poster-1-u1.png").exists()
    assert not store.exists("poster-1-u1.png")


def test_nested_key_inside_root(tmp_path):
    store = LocalStorage(tmp_path)
    assert store.resolve("sub/dir/a.png") == (tmp_path / "sub" / "dir" / "a.png").resolve()


def test_default_store_follows_settings(uploads_dir):
    assert storage.root == uploads_dir.resolve()
    assert storage.url_for("poster-1-u.png") == "/uploads/poster-1-u.png"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("a.jpg", "image/jpeg"),
        ("a.JPEG", "image/jpeg"),
        ("a.png", "image/png"),
        ("a.gif", "image/gif"),
        ("a.webp", "image/webp"),
        ("a.svg", "application/octet-stream"),
        ("README", "application/octet-stream"),
    ],
)
def test_content_type_for(name, expected):
    assert content_type_for(name) == expected
