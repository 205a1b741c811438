import functools
import inspect
from typing import Optional, Callable
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from app.core.cache import cache
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

def cache_endpoint(ttl: int = 300, key_prefix: Optional[str] = None):
    """Cache the JSON-encoded result of an async endpoint per user and arguments.

    Keys are namespaced ``user:{id}:...`` when the endpoint receives a
    ``current_user`` so ``cache.invalidate_user_cache`` can drop them on writes.
    """
    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"cache_endpoint only supports async endpoints, got {func.__name__}")

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            if not settings.CACHE_ENABLED:
                return await func(*args, **kwargs)

            cache_key = _generate_cache_key(func.__name__, kwargs, key_prefix)
            request = kwargs.get('request')

            cached_value = await cache.get(cache_key)
            if cached_value is not None:
                if isinstance(request, Request):
                    request.state.cache_status = "HIT"
                logger.debug(f"Cache HIT for key: {cache_key}")
                return cached_value

            result = await func(*args, **kwargs)

            if result is not None:
                encoded = jsonable_encoder(result)
                await cache.set(cache_key, encoded, ttl=ttl)
                if isinstance(request, Request):
                    request.state.cache_status = "MISS"
                logger.debug(f"Cache MISS for key: {cache_key} (stored with TTL {ttl}s)")

            return result

        return async_wrapper

    return decorator


def _generate_cache_key(func_name: str, kwargs: dict, prefix: Optional[str] = None) -> str:
    user_id = None
    current_user = kwargs.get('current_user')
    if current_user is not None and hasattr(current_user, 'id'):
        user_id = current_user.id

    name = prefix or func_name
    key_parts = [f"user:{user_id}:{name}"] if user_id else [name]

    skip_keys = {'db', 'current_user', 'request', 'enrollment'}
    for k, v in sorted(kwargs.items()):
        if k not in skip_keys:
            key_parts.append(f"{k}={v}")

    return ":".join(key_parts)
