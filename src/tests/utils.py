"""Shared helpers for tests (seeding, user creation, fake Redis, API clients)."""

from __future__ import annotations

from typing import Dict
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient

from access_control.models import Role
from access_control.repositories import RoleRepository
from articles.models import Article, ArticleStatus
from articles.slugs import generate_slug
from authentication.managers import UserManager
from authentication.services import TokenService
from scripts.management.commands.seed_newsroom import (  # noqa: F401
    create_sample_articles,
    create_seed_categories,
    create_seed_seo_settings,
    create_seed_users,
)

User = get_user_model()

REDIS_CLIENT_IMPORTS = (
    "core.redis_client.get_redis_client",
    "authentication.services.get_redis_client",
    "articles.counters.get_redis_client",
)


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService and ViewCounter."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def set(self, key: str, value: str, nx: bool = False, ex: int | None = None):
        """Mimic SET with NX: returns None when the key already exists."""
        if nx and key in self._store:
            return None
        self._store[key] = value
        return True

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)

    def delete(self, *keys: str) -> int:
        return sum(1 for key in keys if self._store.pop(key, None) is not None)

    def flushall(self) -> None:
        self._store.clear()


def create_user(email: str, password: str = "Pass12345", role: Role | None = None, **extra):
    """Create a user with a bcrypt-hashed password and, optionally, a role row."""

    user = User.objects.create(
        email=email,
        password_hash=UserManager.hash_password(password),
        **extra,
    )
    if role is not None and role != Role.USER:
        RoleRepository().assign(user.id, role)
    return user


def create_article(author, title: str = "Sample", status: str = ArticleStatus.DRAFT, **fields) -> Article:
    """Insert an article directly, bypassing the workflow."""

    fields.setdefault("content", f"{title} body")
    fields.setdefault("category", "national")
    return Article.objects.create(
        title=title,
        slug=generate_slug(title) + f"-{Article.objects.count()}",
        status=status,
        author=author,
        **fields,
    )


def client_for(user) -> APIClient:
    """APIClient authenticated with a fresh access token for ``user``."""

    access, _ = TokenService.generate_tokens(user)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    return client


class FakeRedisTestCase(TestCase):
    """TestCase with every Redis client import patched to one in-memory fake."""

    @classmethod
    def setUpClass(cls):
        """Patch Redis clients to use the in-memory fake for all tests."""
        super().setUpClass()
        cls.fake_redis = FakeRedis()
        cls.patchers = [mock.patch(target, return_value=cls.fake_redis) for target in REDIS_CLIENT_IMPORTS]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        """Stop Redis patches after all tests complete."""
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()

    def setUp(self):
        self.fake_redis.flushall()
        cache.clear()
        self.anon = APIClient()


class NewsroomTestCase(FakeRedisTestCase):
    """Seeded categories plus one admin, two editors and a reader."""

    @classmethod
    def setUpTestData(cls):
        create_seed_categories()
        cls.admin = create_user("admin@test.com", role=Role.ADMIN)
        cls.editor = create_user("editor@test.com", role=Role.EDITOR)
        cls.other_editor = create_user("editor2@test.com", role=Role.EDITOR)
        cls.reader = create_user("reader@test.com")
