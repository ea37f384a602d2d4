"""
Test configuration and fixtures
"""

import pytest

from shoots3 import config as cfg


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's AWS setup and shoots3 defaults out of the tests."""
    for name in (cfg.BUCKET_ENV, cfg.REGION_ENV, "AWS_PROFILE", "AWS_DEFAULT_REGION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws_config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws_credentials"))
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")


class FakeStore:
    """In-memory stand-in for S3Store."""

    def __init__(self, existing=(), put_error=None):
        self.objects = {key: b"" for key in existing}
        self.put_error = put_error
        self.head_calls = []
        self.put_calls = []

    def exists(self, bucket, key):
        self.head_calls.append((bucket, key))
        return (bucket, key) in self.objects

    def put(self, bucket, key, body, content_type):
        self.put_calls.append({"bucket": bucket, "key": key, "body": body, "content_type": content_type})
        if self.put_error is not None:
            raise self.put_error
        self.objects[(bucket, key)] = body.read()


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def use_store(monkeypatch):
    """Route shoots3.cli to the given fake store and record the open_store arguments."""
    opened = {}

    def _use(fake):
        def _open_store(**kwargs):
            opened.update(kwargs)
            return fake

        monkeypatch.setattr("shoots3.cli.open_store", _open_store)
        return opened

    return _use


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello from shoots3\n")
    return path


@pytest.fixture
def png_bytes():
    return b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + bytes(range(256)) * 4
