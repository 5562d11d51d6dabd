"""Redis client configuration and utilities."""

import redis

from app.config import Settings


def create_redis_client(settings: Settings) -> redis.Redis:
    """
    Create a Redis client from settings.

    Returns:
        Redis client instance
    """
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        username=settings.redis_username,
        password=settings.redis_password or None,
        decode_responses=settings.redis_decode_responses,
        socket_connect_timeout=5,
        socket_keepalive=True,
        health_check_interval=30,
    )


def check_redis_connection(client: redis.Redis) -> bool:
    """
    Check if Redis connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        return bool(client.ping())
    except redis.RedisError:
        return False
