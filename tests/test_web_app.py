# tests/test_web_app.py

import pytest

from web_app import normalize_redis_url


def test_upstash_cli_format_is_converted_to_tls_url():
    url = normalize_redis_url("redis-cli --tls -u redis://default:pw@eu1-example.upstash.io:6379")
    assert url == "rediss://default:pw@eu1-example.upstash.io:6379"


def test_upstash_plain_url_gets_tls():
    assert normalize_redis_url("redis://x@a.upstash.io:6379").startswith("rediss://")


def test_other_urls_are_untouched():
    assert normalize_redis_url("redis://localhost:6379/0") == "redis://localhost:6379/0"


def test_unparseable_cli_format_raises():
    with pytest.raises(ValueError):
        normalize_redis_url("redis-cli --tls")


def test_app_uses_filesystem_sessions_without_redis(app):
    assert app.config["SESSION_TYPE"] == "filesystem"
    assert app.config["SESSION_FILE_DIR"].endswith("flask_session")
