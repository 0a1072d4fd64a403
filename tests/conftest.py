# tests/conftest.py
import io
import os
import sys

import pytest
from werkzeug.datastructures import FileStorage

# Add the project root to PYTHONPATH so "web_app" and "src" can be imported
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from src.reviews import ReviewApiClient
from src.storage import PreviewStore


@pytest.fixture
def draft_dir(tmp_path):
    return tmp_path / "draft_photos"


@pytest.fixture
def store(draft_dir):
    return PreviewStore(str(draft_dir))


@pytest.fixture
def make_file():
    def _make(name="photo.png", data=b"\x89PNG fake image", content_type="image/png"):
        return FileStorage(stream=io.BytesIO(data), filename=name, content_type=content_type)
    return _make


@pytest.fixture
def app(draft_dir, monkeypatch):
    # No background storage ping during tests
    monkeypatch.setattr(ReviewApiClient, "ensure_storage_async", lambda self: None)

    from web_app import create_app
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DRAFT_PHOTO_DIR": str(draft_dir),
        "SESSION_FILE_DIR": str(draft_dir.parent / "flask_session"),
        "REVIEW_API_URL": "http://reviews.test",
        "SUPABASE_URL": "",
        "SUPABASE_ANON_KEY": "",
        "REDIS_URL": None,
        "IMAGE_ENCODE_WORKERS": 2,
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()
