# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-hobbylink-suite")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from hobbylink.api.v1.dependencies import get_identity_provider  # noqa: E402
from hobbylink.core.security import create_access_token  # noqa: E402
from hobbylink.core.settings import Settings  # noqa: E402
from hobbylink.db.session import Base, build_engine  # noqa: E402
from hobbylink.db.session import get_db as app_get_session  # noqa: E402
from hobbylink.main import app as fastapi_app  # noqa: E402
from hobbylink.models import Community, Hobby, Member, MemberRole, Post, User  # noqa: E402
from hobbylink.services.identity import CallerIdentity, IdentityProfile  # noqa: E402

TEST_DB_URL = "sqlite://"


class FakeIdentityProvider:
    """Stand-in for the identity provider client.

    Known subjects get a generated profile unless ``profiles`` says otherwise;
    a ``None`` entry means the provider does not know the subject.
    """

    def __init__(self) -> None:
        self.profiles: dict[str, IdentityProfile | None] = {}
        self.calls: list[str] = []
        self.error: Exception | None = None
        self.on_fetch: Callable[[str], None] | None = None

    async def fetch_profile(self, subject: str) -> IdentityProfile | None:
        self.calls.append(subject)
        if self.error is not None:
            raise self.error
        if self.on_fetch is not None:
            self.on_fetch(subject)
        if subject in self.profiles:
            return self.profiles[subject]
        return IdentityProfile(
            email=f"{subject}@hobbylink.test",
            name=subject.replace("_", " ").title(),
        )

    async def close(self) -> None:
        return None


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    identity_provider: FakeIdentityProvider,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_identity_provider, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return Settings()


def auth_headers(subject: str) -> dict[str, str]:
    """Return bearer headers for an identity-provider subject."""
    return {"Authorization": f"Bearer {create_access_token(subject)}"}


def _make_user(db: Session, subject: str, name: str) -> User:
    user = User(external_id=subject, email=f"{subject}@hobbylink.test", name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _make_user(db_session, "user_test", "Test User")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _make_user(db_session, "user_other", "Other User")


@pytest.fixture()
def caller(test_user: User) -> CallerIdentity:
    return CallerIdentity(subject=test_user.external_id)


@pytest.fixture()
def other_caller(other_user: User) -> CallerIdentity:
    return CallerIdentity(subject=other_user.external_id)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user.external_id)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user.external_id)


@pytest.fixture()
def hobby(db_session: Session) -> Hobby:
    hobby = Hobby(name="Bouldering", description="Ropeless climbing", tags=["climbing"])
    db_session.add(hobby)
    db_session.commit()
    db_session.refresh(hobby)
    return hobby


@pytest.fixture()
def community(db_session: Session, test_user: User, hobby: Hobby) -> Community:
    """Create a community administered by ``test_user``."""
    community = Community(
        name="Test Community",
        description="Test community description",
        hobby=hobby,
        creator=test_user,
    )
    community.users.append(test_user)
    community.members.append(Member(user=test_user, role=MemberRole.ADMIN))
    db_session.add(community)
    db_session.commit()
    db_session.refresh(community)
    return community


@pytest.fixture()
def membership(db_session: Session, community: Community, other_user: User) -> Member:
    """Make ``other_user`` a regular member of ``community``."""
    member = Member(user=other_user, community=community, role=MemberRole.MEMBER)
    community.users.append(other_user)
    db_session.add(member)
    db_session.commit()
    return member


@pytest.fixture()
def test_post(db_session: Session, community: Community, other_user: User, membership: Member) -> Post:
    """Create a post written by ``other_user`` in ``community``."""
    post = Post(
        title="First send",
        content="Finally topped the purple problem",
        tags=["v4"],
        author=other_user,
        community=community,
    )
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture()
def headers_for() -> Callable[[str], dict[str, str]]:
    """Return a factory of bearer headers for arbitrary subjects."""
    return auth_headers
