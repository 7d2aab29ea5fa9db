"""
Shared fixtures: an in-memory stand-in for the chat model and a tiny
dict-backed Redis double covering the commands TaskStore uses.
"""

import pytest

from mediagen.services.task_store import TaskStore


class FakeTextClient:
    """Returns canned answers in order and records every call."""

    def __init__(self, *answers, error=None):
        self.answers = list(answers)
        self.error = error
        self.calls = []

    def generate_text(self, user_prompt, system_prompt, options):
        self.calls.append({"user_prompt": user_prompt, "system_prompt": system_prompt, "options": options})
        if self.error is not None:
            raise self.error
        return self.answers.pop(0)


class _FakePipeline:
    def __init__(self, redis):
        self._redis = redis
        self._ops = []

    def __getattr__(self, name):
        def queue(*args, **kwargs):
            self._ops.append((name, args, kwargs))
            return self
        return queue

    def execute(self):
        return [getattr(self._redis, name)(*args, **kwargs) for name, args, kwargs in self._ops]


class FakeRedis:
    def __init__(self):
        self.hashes = {}
        self.lists = {}
        self.ttls = {}

    def pipeline(self):
        return _FakePipeline(self)

    def hset(self, key, mapping):
        self.hashes.setdefault(key, {}).update({k: str(v) for k, v in mapping.items()})
        return len(mapping)

    def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    def expire(self, key, seconds):
        self.ttls[key] = seconds
        return True

    def rpush(self, key, value):
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    def lpop(self, key):
        items = self.lists.get(key) or []
        return items.pop(0) if items else None

    def llen(self, key):
        return len(self.lists.get(key, []))


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def store(fake_redis):
    return TaskStore(fake_redis, ttl_seconds=60)


@pytest.fixture
def text_client():
    """Factory: text_client("answer one", "answer two") or text_client(error=exc)."""
    return FakeTextClient
