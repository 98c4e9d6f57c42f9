"""Тесты фасада авторизации с хранилищем в памяти."""
import asyncio
from typing import Dict, Optional

import pytest

from vollmed.authentication import AuthenticationService
from vollmed.db.models import User
from vollmed.errors import AuthenticationFailed, InvalidToken
from vollmed.security import PasswordHasher, TokenService

SECRET = "unit-test-secret-key-0123456789abcdef"


class InMemoryUsers:
    def __init__(self) -> None:
        self._by_login: Dict[str, User] = {}

    def add(self, user: User) -> None:
        self._by_login[user.login] = user

    async def find_by_login(self, login: str) -> Optional[User]:
        return self._by_login.get(login)


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher(bcrypt_rounds=4)


@pytest.fixture()
def tokens() -> TokenService:
    return TokenService(secret=SECRET, issuer="API Voll.med")


@pytest.fixture()
def service(hasher: PasswordHasher, tokens: TokenService) -> AuthenticationService:
    users = InMemoryUsers()
    users.add(User(id=1, login="alice", password_hash=hasher.hash("secret1")))
    return AuthenticationService(users, hasher, tokens)


def test_valid_credentials_issue_token(service: AuthenticationService, tokens: TokenService) -> None:
    token = asyncio.run(service.authenticate_and_issue_token("alice", "secret1"))
    assert tokens.verify(token) == "alice"


@pytest.mark.parametrize(
    "login,password",
    [("alice", "wrong"), ("bob", "secret1"), ("", "secret1"), ("alice", None)],
)
def test_bad_credentials_fail_with_same_error(
    service: AuthenticationService, login: str, password: Optional[str]
) -> None:
    with pytest.raises(AuthenticationFailed) as info:
        asyncio.run(service.authenticate_and_issue_token(login, password))
    assert info.value.message == AuthenticationFailed.message


def test_resolve_token_returns_identity(service: AuthenticationService, tokens: TokenService) -> None:
    identity = asyncio.run(service.resolve_token(tokens.issue("alice")))
    assert identity.id == 1
    assert identity.login == "alice"
    assert identity.roles == ("ROLE_USER",)


def test_resolve_token_for_unknown_subject(service: AuthenticationService, tokens: TokenService) -> None:
    with pytest.raises(InvalidToken):
        asyncio.run(service.resolve_token(tokens.issue("ghost")))


class RecordingHasher(PasswordHasher):
    """Хешер, который запоминает вызовы dummy_verify."""

    def __init__(self) -> None:
        super().__init__(bcrypt_rounds=4)
        self.dummy_calls = 0

    def dummy_verify(self) -> None:
        self.dummy_calls += 1
        super().dummy_verify()


def test_unknown_login_still_spends_a_hash_check(tokens: TokenService) -> None:
    hasher = RecordingHasher()
    users = InMemoryUsers()
    users.add(User(id=1, login="alice", password_hash=hasher.hash("secret1")))
    service = AuthenticationService(users, hasher, tokens)

    with pytest.raises(AuthenticationFailed):
        asyncio.run(service.authenticate_and_issue_token("bob", "secret1"))
    assert hasher.dummy_calls == 1

    with pytest.raises(AuthenticationFailed):
        asyncio.run(service.authenticate_and_issue_token("alice", "wrong"))
    assert hasher.dummy_calls == 1
