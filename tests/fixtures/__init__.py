"""Test fixtures for django-zset."""

from tests.fixtures.clients import async_client, client, executor, sent, zset

__all__ = [
    "async_client",
    "client",
    "executor",
    "sent",
    "zset",
]
