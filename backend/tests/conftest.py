"""Shared fixtures: in-memory Redis and repository doubles, and an app client."""

import os

# Cheap bcrypt and a fixed secret before settings are imported.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("APP_ENV", "test")

import uuid  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from eps_family.api import deps  # noqa: E402
from eps_family.cache.session_cache import SessionCache  # noqa: E402
from eps_family.db.models.eps_provider import EpsProvider  # noqa: E402
from eps_family.db.models.family_member import FamilyMember  # noqa: E402
from eps_family.db.models.user import User  # noqa: E402
from eps_family.main import create_app  # noqa: E402
from eps_family.repositories import eps_providers as provider_repository  # noqa: E402
from eps_family.repositories import family_members as member_repository  # noqa: E402
from eps_family.repositories import users as user_repository  # noqa: E402
from eps_family.services.auth_service import AuthService  # noqa: E402


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRedis:
    """The subset of redis.asyncio.Redis used by the session cache."""

    def __init__(self):
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.fail_writes = False

    async def set(self, key, value, ex=None):
        if self.fail_writes:
            raise ConnectionError("redis unavailable")
        self.values[key] = value
        self.ttls[key] = ex
        return True

    async def get(self, key):
        return self.values.get(key)

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.values.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def ping(self):
        return True


class FakeUserStore:
    """Stands in for the users repository, keyed by id."""

    def __init__(self):
        self.users: dict[uuid.UUID, User] = {}

    def add(self, *, email, password_hash, full_name, is_active=True) -> User:
        user = User(
            id=uuid.uuid4(),
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            is_active=is_active,
            created_at=_now(),
            updated_at=_now(),
        )
        self.users[user.id] = user
        return user

    async def create_user(self, db, *, email, password_hash, full_name):
        return self.add(email=email, password_hash=password_hash, full_name=full_name.strip())

    async def get_user_by_email(self, db, email):
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_active_user_by_id(self, db, user_id):
        user = self.users.get(user_id)
        return user if user is not None and user.is_active else None


class FakeProviderStore:
    def __init__(self):
        self.providers: dict[uuid.UUID, EpsProvider] = {}

    def add(self, *, name, code, is_active=True) -> EpsProvider:
        provider = EpsProvider(
            id=uuid.uuid4(),
            name=name,
            code=code,
            parser_key=None,
            is_active=is_active,
            created_at=_now(),
            updated_at=_now(),
        )
        self.providers[provider.id] = provider
        return provider

    async def list_active_providers(self, db):
        active = [p for p in self.providers.values() if p.is_active]
        return sorted(active, key=lambda p: p.name)

    async def get_provider_by_id(self, db, provider_id):
        return self.providers.get(provider_id)


class FakeMemberStore:
    def __init__(self, providers: FakeProviderStore):
        self.providers = providers
        self.members: dict[uuid.UUID, FamilyMember] = {}

    async def create_member(self, db, user_id, **fields):
        member = FamilyMember(
            id=uuid.uuid4(),
            user_id=user_id,
            created_at=_now(),
            updated_at=_now(),
            **{key: fields.get(key) for key in member_repository.MUTABLE_FIELDS},
        )
        member.eps_provider = self.providers.providers.get(member.eps_provider_id)
        self.members[member.id] = member
        return member

    async def list_members(self, db, user_id):
        owned = [m for m in self.members.values() if m.user_id == user_id]
        return sorted(owned, key=lambda m: m.full_name)

    async def get_member(self, db, member_id, user_id):
        member = self.members.get(member_id)
        if member is None or member.user_id != user_id:
            return None
        return member

    async def update_member(self, db, member, **fields):
        for key, value in fields.items():
            if key in member_repository.MUTABLE_FIELDS:
                setattr(member, key, value)
        member.eps_provider = self.providers.providers.get(member.eps_provider_id)
        member.updated_at = _now()
        return member

    async def delete_member(self, db, member):
        self.members.pop(member.id, None)


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def session_cache(fake_redis):
    return SessionCache(fake_redis)


@pytest.fixture
def user_store(monkeypatch):
    store = FakeUserStore()
    for name in ("create_user", "get_user_by_email", "get_active_user_by_id"):
        monkeypatch.setattr(user_repository, name, getattr(store, name))
    return store


@pytest.fixture
def provider_store(monkeypatch):
    store = FakeProviderStore()
    for name in ("list_active_providers", "get_provider_by_id"):
        monkeypatch.setattr(provider_repository, name, getattr(store, name))
    return store


@pytest.fixture
def member_store(monkeypatch, provider_store):
    store = FakeMemberStore(provider_store)
    for name in ("create_member", "list_members", "get_member", "update_member", "delete_member"):
        monkeypatch.setattr(member_repository, name, getattr(store, name))
    return store


@pytest.fixture
def auth_service(user_store, session_cache):
    return AuthService(db=MagicMock(), cache=session_cache)


@pytest.fixture
def app(session_cache, user_store):
    application = create_app()

    async def _fake_db():
        yield MagicMock()

    application.dependency_overrides[deps.get_db] = _fake_db
    application.dependency_overrides[deps.get_session_cache] = lambda: session_cache
    return application


@pytest.fixture
def client(app):
    return TestClient(app)
