"""
Redis store: command translation and error mapping, against a mocked client.
"""
from unittest.mock import MagicMock

import pytest
import redis

from redis_table import Table
from redis_table.core.errors import BackingResourceTypeMismatch, TransientStoreFailure
from redis_table.stores.base import ResourceKind
from redis_table.stores.redis import RedisCounter, RedisFieldMap, RedisOrderedSet, RedisStore


@pytest.fixture
def client():
    c = MagicMock(spec=redis.Redis)
    c.type.return_value = b"none"
    return c


@pytest.fixture
def store(client):
    return RedisStore(client=client)


class TestGetOrCreate:
    def test_new_counter_initialised_to_zero(self, store, client):
        c = store.get_or_create("t:ID", ResourceKind.COUNTER)
        assert isinstance(c, RedisCounter)
        client.set.assert_called_once_with("t:ID", 0, nx=True)

    def test_existing_counter_left_alone(self, store, client):
        client.type.return_value = b"string"
        store.get_or_create("t:ID", ResourceKind.COUNTER)
        client.set.assert_not_called()

    def test_hash_and_zset_handles(self, store, client):
        assert isinstance(store.get_or_create("t:DATA", ResourceKind.FIELD_MAP), RedisFieldMap)
        assert isinstance(store.get_or_create("t:INDEX:a", ResourceKind.ORDERED_SET), RedisOrderedSet)
        client.set.assert_not_called()

    def test_wrong_type_rejected(self, store, client):
        client.type.return_value = b"set"
        with pytest.raises(BackingResourceTypeMismatch) as exc:
            store.get_or_create("t:DATA", ResourceKind.FIELD_MAP)
        assert exc.value.actual == "set"
        assert exc.value.expected == "hash"

    def test_connection_failure_is_transient(self, store, client):
        client.type.side_effect = redis.ConnectionError("refused")
        with pytest.raises(TransientStoreFailure) as exc:
            store.get_or_create("t:DATA", ResourceKind.FIELD_MAP)
        assert isinstance(exc.value.__cause__, redis.ConnectionError)

    def test_delete(self, store, client):
        client.delete.return_value = 1
        assert store.delete("t:ID") is True
        client.delete.return_value = 0
        assert store.delete("t:ID") is False


class TestCounter:
    def test_increment(self, client):
        client.incr.return_value = 7
        assert RedisCounter(client, "t:ID").increment() == 7
        client.incr.assert_called_once_with("t:ID")

    def test_timeout_is_transient(self, client):
        """A failed increment surfaces as a recoverable error."""
        client.incr.side_effect = redis.TimeoutError("slow")
        with pytest.raises(TransientStoreFailure):
            RedisCounter(client, "t:ID").increment()

    def test_non_integer_value(self, client):
        client.incr.side_effect = redis.ResponseError("value is not an integer or out of range")
        with pytest.raises(BackingResourceTypeMismatch):
            RedisCounter(client, "t:ID").increment()


class TestFieldMap:
    def test_get_set_delete(self, client):
        h = RedisFieldMap(client, "t:DATA")
        client.hget.return_value = b"{}"
        assert h.get("1") == b"{}"
        h.set("1", b"{}")
        h.delete_field("1")
        client.hget.assert_called_once_with("t:DATA", "1")
        client.hset.assert_called_once_with("t:DATA", "1", b"{}")
        client.hdel.assert_called_once_with("t:DATA", "1")

    def test_multi_get(self, client):
        client.hmget.return_value = [b"a", None]
        assert RedisFieldMap(client, "t:DATA").multi_get(["1", "2"]) == [b"a", None]
        client.hmget.assert_called_once_with("t:DATA", ["1", "2"])

    def test_multi_get_empty_skips_call(self, client):
        assert RedisFieldMap(client, "t:DATA").multi_get([]) == []
        client.hmget.assert_not_called()

    def test_items_decodes_fields(self, client):
        client.hscan_iter.return_value = iter([(b"1", b"{}"), (b"2", b"[]")])
        assert list(RedisFieldMap(client, "t:DATA").items()) == [("1", b"{}"), ("2", b"[]")]

    def test_wrongtype(self, client):
        client.hget.side_effect = redis.ResponseError(
            "WRONGTYPE Operation against a key holding the wrong kind of value"
        )
        with pytest.raises(BackingResourceTypeMismatch):
            RedisFieldMap(client, "t:DATA").get("1")

    def test_other_response_errors_propagate(self, client):
        client.hset.side_effect = redis.ResponseError("OOM command not allowed")
        with pytest.raises(redis.ResponseError):
            RedisFieldMap(client, "t:DATA").set("1", b"{}")


class TestOrderedSet:
    def test_add_remove(self, client):
        z = RedisOrderedSet(client, "t:INDEX:age")
        z.add(30, "4")
        z.remove("4")
        client.zadd.assert_called_once_with("t:INDEX:age", {"4": 30})
        client.zrem.assert_called_once_with("t:INDEX:age", "4")

    def test_ascending_range(self, client):
        client.zrangebyscore.return_value = [b"1", b"2"]
        ids = RedisOrderedSet(client, "t:INDEX:age").range_by_score(0, 10, 2, 3)
        assert ids == ["1", "2"]
        client.zrangebyscore.assert_called_once_with(
            "t:INDEX:age", 0, 10, start=2, num=3, withscores=False
        )

    def test_descending_range_swaps_bounds(self, client):
        client.zrevrangebyscore.return_value = [b"2"]
        RedisOrderedSet(client, "t:INDEX:age").range_by_score(0, 10, 0, 5, descending=True)
        client.zrevrangebyscore.assert_called_once_with(
            "t:INDEX:age", 10, 0, start=0, num=5, withscores=False
        )

    def test_infinite_bounds(self, client):
        client.zrangebyscore.return_value = []
        client.zcount.return_value = 0
        z = RedisOrderedSet(client, "t:INDEX:age")
        z.range_by_score(float("-inf"), float("inf"), 0, 5)
        z.count(float("-inf"), float("inf"))
        client.zrangebyscore.assert_called_once_with(
            "t:INDEX:age", "-inf", "+inf", start=0, num=5, withscores=False
        )
        client.zcount.assert_called_once_with("t:INDEX:age", "-inf", "+inf")

    def test_with_scores(self, client):
        client.zrangebyscore.return_value = [(b"1", 3.0)]
        z = RedisOrderedSet(client, "t:INDEX:age")
        assert z.range_by_score(0, 10, 0, 5, with_scores=True) == [("1", 3.0)]

    def test_members(self, client):
        client.zrange.return_value = [(b"1", 3.0), (b"2", 4.0)]
        assert RedisOrderedSet(client, "t:INDEX:age").members() == [("1", 3.0), ("2", 4.0)]
        client.zrange.assert_called_once_with("t:INDEX:age", 0, -1, withscores=True)


class TestTableOverRedis:
    """Table wiring against the mocked client."""

    def test_insert_issues_commands_in_order(self, store, client):
        client.incr.return_value = 1
        Table("users", "age", store=store).insert({"age": 30})
        names = [c[0] for c in client.method_calls if c[0] != "type"]
        assert names == ["set", "incr", "hset", "zadd"]
        client.hset.assert_called_once_with("users:DATA", "1", b'{"age": 30, "redisId": 1}')
        client.zadd.assert_called_once_with("users:INDEX:age", {"1": 30})

    def test_counter_failure_propagates(self, store, client):
        client.incr.side_effect = redis.ConnectionError("down")
        t = Table("users", "age", store=store)
        with pytest.raises(TransientStoreFailure):
            t.insert({"age": 30})
        client.hset.assert_not_called()

    def test_select_fetches_in_one_batch(self, store, client):
        client.zrevrangebyscore.return_value = [b"2", b"1"]
        client.hmget.return_value = [b'{"age": 9, "redisId": 2}', b'{"age": 3, "redisId": 1}']
        result = Table("users", "age", store=store).select("age", 0, 10, descending=True)
        assert result.ids() == [2, 1]
        client.hmget.assert_called_once_with("users:DATA", ["2", "1"])
