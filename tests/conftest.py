"""Pytest configuration for django-zset tests."""

from tests.fixtures import async_client, client, executor, zset

# Re-export fixtures so pytest can discover them
__all__ = [
    "async_client",
    "client",
    "executor",
    "zset",
]
