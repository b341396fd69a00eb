"""Tests for the storage backends behind the cart and session stores"""
import json

import pytest
import redis

from fixzep.config import CART_STORAGE_KEY
from fixzep.domain.cart import CartStore
from fixzep.storage import FileStore, MemoryStore, RedisStore, create_store

from .conftest import PLUMBING, TAP_REPAIR


class FakeRedis:
    """Just the commands RedisStore uses"""

    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise redis.ConnectionError("down")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail:
            raise redis.ConnectionError("down")
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class TestMemoryStore:
    def test_values_are_copied(self):
        store = MemoryStore()
        value = {"items": [1]}
        store.set("k", value)

        value["items"].append(2)

        assert store.get("k") == {"items": [1]}

    def test_missing_key(self):
        assert MemoryStore().get("nope") is None


class TestFileStore:
    def test_round_trip_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        FileStore(str(path)).set("fixzep-cart", {"items": []})
        FileStore(str(path)).set("fixzep-client-auth", {"token": "t", "user": {"_id": "u1"}})

        reopened = FileStore(str(path))

        assert reopened.get("fixzep-cart") == {"items": []}
        assert reopened.get("fixzep-client-auth")["token"] == "t"

    def test_delete(self, tmp_path):
        store = FileStore(str(tmp_path / "s.json"))
        store.set("a", 1)
        store.set("b", 2)

        store.delete("a")

        assert json.loads((tmp_path / "s.json").read_text()) == {"b": 2}

    def test_failed_write_leaves_no_temp_file(self, tmp_path, monkeypatch):
        store = FileStore(str(tmp_path / "s.json"))

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("fixzep.storage.os.replace", fail_replace)

        assert store.set("k", 1) is False
        assert list(tmp_path.iterdir()) == []

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text("{not json")

        store = FileStore(str(path))

        assert store.get("fixzep-cart") is None
        assert store.set("fixzep-cart", {"items": []})
        assert store.get("fixzep-cart") == {"items": []}

    def test_cart_survives_restart(self, tmp_path):
        path = str(tmp_path / "s.json")
        cart = CartStore(FileStore(path), CART_STORAGE_KEY)
        cart.add_item(TAP_REPAIR, PLUMBING)
        cart.add_item(TAP_REPAIR, PLUMBING)

        reloaded = CartStore(FileStore(path), CART_STORAGE_KEY)

        assert reloaded.get_item("svc1").quantity == 2


class TestRedisStore:
    def test_round_trip_with_prefix(self):
        client = FakeRedis()
        store = RedisStore(client=client, prefix="web:")

        store.set("fixzep-cart", {"items": []})

        assert "web:fixzep-cart" in client.data
        assert store.get("fixzep-cart") == {"items": []}

    def test_errors_are_logged_not_raised(self):
        store = RedisStore(client=FakeRedis(fail=True))

        assert store.set("k", 1) is False
        assert store.get("k") is None

    def test_cart_mutations_do_not_raise_when_redis_down(self):
        cart = CartStore(RedisStore(client=FakeRedis(fail=True)), CART_STORAGE_KEY)

        cart.add_item(TAP_REPAIR, PLUMBING)

        assert cart.get_item_count() == 1


class TestCreateStore:
    def test_memory_backend(self):
        assert isinstance(create_store("memory"), MemoryStore)

    def test_file_backend(self):
        assert isinstance(create_store("file"), FileStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_store("sqlite")
