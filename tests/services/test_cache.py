from types import SimpleNamespace

import pytest

from app.core.cache import CacheManager, MemoryCacheBackend
from app.core.decorators import _generate_cache_key, cache_endpoint


@pytest.mark.asyncio
async def test_invalidate_user_cache_only_drops_that_user():
    manager = CacheManager(MemoryCacheBackend())
    await manager.set("user:1:course_progress:course_id=3", {"pct": 33})
    await manager.set("user:1:learning_progress", [])
    await manager.set("user:12:course_progress:course_id=3", {"pct": 0})
    await manager.set("course_list:limit=100:skip=0", [])

    assert await manager.invalidate_user_cache(1) == 2
    assert await manager.get("user:1:course_progress:course_id=3") is None
    assert await manager.get("user:12:course_progress:course_id=3") == {"pct": 0}
    assert await manager.get("course_list:limit=100:skip=0") == []


def test_cache_key_is_scoped_to_current_user():
    key = _generate_cache_key(
        "get_course_progress",
        {"db": object(), "current_user": SimpleNamespace(id=7), "course_id": 3},
        "course_progress",
    )
    assert key == "user:7:course_progress:course_id=3"


def test_cache_endpoint_rejects_sync_functions():
    with pytest.raises(TypeError):
        @cache_endpoint(ttl=10)
        def not_async():
            return None
