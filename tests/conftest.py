# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import uuid

import pytest
from unittest.mock import Mock

from core.config import Settings
from models.admin_user import AccountHandle
from services.profile_store import LogRef, split_path
from services.provisioning import AdminProvisioner


class FakeAuthError(Exception):
    """Shaped like supabase-py's AuthApiError: .message + .code."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code


class FakeIdentityService:
    """In-memory Supabase Auth with per-method failure injection."""

    def __init__(self):
        self.accounts = {}
        self.calls = []
        self.fail_on = {}

    def _maybe_fail(self, method):
        if method in self.fail_on:
            raise self.fail_on[method]

    def create_account(self, email, password, display_name, email_pre_verified=True):
        self.calls.append(("create_account", email))
        self._maybe_fail("create_account")

        if any(a.email == email for a in self.accounts.values()):
            raise FakeAuthError(
                "A user with this email address has already been registered",
                code="email_exists",
            )
        if len(password) < 6:
            raise FakeAuthError("Password should be at least 6 characters.", code="weak_password")

        account = AccountHandle(
            id=str(uuid.uuid4()),
            email=email,
            email_verified=email_pre_verified,
            claims={"provider": "email", "providers": ["email"]},
        )
        self.accounts[account.id] = account
        return account.model_copy(deep=True)

    def set_claims(self, account_id, claims):
        self.calls.append(("set_claims", account_id))
        self._maybe_fail("set_claims")
        account = self.accounts[account_id]
        account.claims = {**account.claims, **claims}

    def get_account(self, account_id):
        self.calls.append(("get_account", account_id))
        self._maybe_fail("get_account")
        if account_id not in self.accounts:
            raise FakeAuthError("User not found", code="user_not_found")
        return self.accounts[account_id].model_copy(deep=True)


class FakeProfileStore:
    """In-memory tables; a second write to the same key fails like an insert would."""

    def __init__(self):
        self.tables = {}
        self.fail_on = {}

    def write(self, path, record):
        table, key = split_path(path)
        if table in self.fail_on:
            raise self.fail_on[table]
        rows = self.tables.setdefault(table, {})
        if key in rows:
            raise FakeAuthError("duplicate key value violates unique constraint")
        rows[key] = {**record, "id": key}

    def append_log(self, collection):
        return LogRef(collection=collection, key=str(uuid.uuid4()))

    def rows(self, table):
        return list(self.tables.get(table, {}).values())


@pytest.fixture
def identity():
    return FakeIdentityService()


@pytest.fixture
def store():
    return FakeProfileStore()


@pytest.fixture
def provisioner(identity, store):
    return AdminProvisioner(identity, store)


@pytest.fixture
def configured_settings():
    """Settings with Supabase + all four admin variables present."""
    return Settings(
        SUPABASE_URL="https://project.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="service-role-key",
        ADMIN1_EMAIL="a@x.com",
        ADMIN1_PASSWORD="Pw12345!",
        ADMIN2_EMAIL="b@x.com",
        ADMIN2_PASSWORD="Pw12345!",
    )


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client
