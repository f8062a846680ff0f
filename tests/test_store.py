"""Tests for registry persistence."""

import json
from datetime import datetime, timezone

import pytest
import redis

from drive_images.store import (
    DEFAULT_OPTION_KEY,
    ImageRecord,
    JSONFileStore,
    MemoryStore,
    RedisStore,
    create_store,
    decode_blob,
    encode_blob,
)
from drive_images.store.models import UNKNOWN_CREATED, parse_created


def make_record(key: str, raw: str = "1AbCdEfGhIjK") -> ImageRecord:
    return ImageRecord(
        key=key,
        title=key.title(),
        raw=raw,
        url=f"https://drive.google.com/uc?export=view&id={raw}",
        created=datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc),
    )


class StubRedis:
    """Minimal stand-in for a redis.Redis client."""

    def __init__(self, fail: bool = False):
        self.values = {}
        self.fail = fail
        self.closed = False

    def get(self, key):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return self.values.get(key)

    def set(self, key, value):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.values[key] = value
        return True

    def ping(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return True

    def close(self):
        self.closed = True


class TestBlobFormat:
    """Test blob encoding and decoding."""

    def test_encode_layout(self):
        blob = encode_blob({"sunset": make_record("sunset")})
        assert json.loads(blob) == {
            "sunset": {
                "title": "Sunset",
                "raw": "1AbCdEfGhIjK",
                "url": "https://drive.google.com/uc?export=view&id=1AbCdEfGhIjK",
                "created": "2024-05-06T07:08:09+00:00",
            }
        }

    def test_decode_preserves_order(self):
        images = {key: make_record(key) for key in ["zeta", "alpha", "mid"]}
        assert list(decode_blob(encode_blob(images))) == ["zeta", "alpha", "mid"]

    def test_decode_restores_records(self):
        images = {"sunset": make_record("sunset")}
        assert decode_blob(encode_blob(images)) == images

    @pytest.mark.parametrize("blob", [None, "", "not json", "[1, 2]", '"text"'])
    def test_unusable_blob_is_empty(self, blob):
        assert decode_blob(blob) == {}

    def test_malformed_records_kept(self):
        blob = json.dumps({
            "good": make_record("good").to_dict(),
            "not-a-dict": "oops",
            "no-created": {"title": "x", "raw": "y", "url": "z"},
            "bad-created": {"title": "x", "raw": "y", "url": "z", "created": "yesterday"},
            "zero-date": {"title": "x", "raw": "y", "url": "z", "created": "0000-00-00 00:00:00"},
        })

        images = decode_blob(blob)

        assert list(images) == ["good", "not-a-dict", "no-created", "bad-created", "zero-date"]
        assert images["good"] == make_record("good")
        assert images["no-created"].created == UNKNOWN_CREATED
        assert images["zero-date"].url == "z"
        assert images["not-a-dict"].raw == "oops"
        assert images["not-a-dict"].url == ""

    def test_legacy_timestamp(self):
        """Timestamps in the old 'YYYY-MM-DD HH:MM:SS' form still load."""
        created = parse_created("2023-02-03 04:05:06")
        assert created == datetime(2023, 2, 3, 4, 5, 6, tzinfo=timezone.utc)

    def test_missing_title_defaults_to_raw(self):
        record = ImageRecord.from_dict("k", {"raw": "abc", "url": "abc", "created": "2024-01-01T00:00:00"})
        assert record.title == "abc"
        assert record.created.tzinfo is not None


class TestMemoryStore:
    """Test MemoryStore."""

    def test_empty_until_saved(self):
        store = MemoryStore()
        assert store.load() == {}
        assert store.dump() is None

    def test_load_returns_copy(self):
        """Mutating a loaded snapshot does not touch the stored blob."""
        store = MemoryStore()
        store.save({"a": make_record("a")})
        snapshot = store.load()
        snapshot["b"] = make_record("b")
        assert list(store.load()) == ["a"]


class TestJSONFileStore:
    """Test JSONFileStore."""

    def test_missing_file_is_empty(self, tmp_path):
        store = JSONFileStore(str(tmp_path / "missing.json"))
        assert store.load() == {}

    def test_save_creates_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "images.json"
        store = JSONFileStore(str(path))
        store.save({"sunset": make_record("sunset")})

        assert path.exists()
        assert list(JSONFileStore(str(path)).load()) == ["sunset"]

    def test_no_temp_files_left(self, tmp_path):
        store = JSONFileStore(str(tmp_path / "images.json"))
        store.save({"a": make_record("a")})
        store.save({"b": make_record("b")})
        assert [p.name for p in tmp_path.iterdir()] == ["images.json"]

    def test_corrupt_file_loads_empty(self, tmp_path):
        path = tmp_path / "images.json"
        path.write_text("{broken", encoding="utf-8")
        assert JSONFileStore(str(path)).load() == {}

    def test_health_check(self, tmp_path):
        assert JSONFileStore(str(tmp_path / "images.json")).health_check()


class TestRedisStore:
    """Test RedisStore with an injected client."""

    def test_round_trip(self):
        client = StubRedis()
        store = RedisStore(client=client)
        store.save({"sunset": make_record("sunset")})

        assert DEFAULT_OPTION_KEY in client.values
        assert list(store.load()) == ["sunset"]

    def test_custom_option_key(self):
        client = StubRedis()
        RedisStore(client=client, option_key="site:images").save({})
        assert list(client.values) == ["site:images"]

    def test_bytes_blob(self):
        client = StubRedis()
        client.values[DEFAULT_OPTION_KEY] = encode_blob({"a": make_record("a")}).encode("utf-8")
        assert list(RedisStore(client=client).load()) == ["a"]

    def test_errors_propagate(self):
        store = RedisStore(client=StubRedis(fail=True))
        with pytest.raises(redis.RedisError):
            store.load()
        with pytest.raises(redis.RedisError):
            store.save({})

    def test_health_check(self):
        assert RedisStore(client=StubRedis()).health_check() is True
        assert RedisStore(client=StubRedis(fail=True)).health_check() is False

    def test_close(self):
        client = StubRedis()
        RedisStore(client=client).close()
        assert client.closed

    def test_requires_url_or_client(self):
        with pytest.raises(ValueError):
            RedisStore()


class TestCreateStore:
    """Test store selection from configuration."""

    def test_file_store_by_default(self, config, registry_path):
        store = create_store(config)
        assert isinstance(store, JSONFileStore)
        assert store.path == registry_path

    def test_redis_when_configured(self, config):
        config.redis_url = "redis://localhost:6379/0"
        config.option_key = "custom:key"
        store = create_store(config)

        assert isinstance(store, RedisStore)
        assert store.option_key == "custom:key"
