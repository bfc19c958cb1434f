# tests/test_config_logging.py
"""Tests for settings, logging setup, session tokens and operator scripts."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import pytest
from jose import JWTError, jwt
from sqlalchemy import func, select

from hobbylink.core.logging import LOG_FORMAT, LOGGER_NAME, setup_logging
from hobbylink.core.security import create_access_token, decode_access_token
from hobbylink.core.settings import Settings
from hobbylink.models import Hobby
from hobbylink.scripts.migrate import MIGRATIONS_DIR, build_config
from hobbylink.scripts.seed_hobbies import STARTER_HOBBIES, seed_hobbies


def test_settings_defaults(monkeypatch) -> None:
    for name in ("DATABASE_URL", "ALLOW_DEFAULT_HOBBY", "IDENTITY_API_URL"):
        monkeypatch.delenv(name, raising=False)
    cfg = Settings(SECRET_KEY="s3cret", _env_file=None)

    assert cfg.app_name == "HobbyLink"
    assert cfg.database_url == "sqlite:///./hobbylink.db"
    assert cfg.allow_default_hobby is True
    assert cfg.default_hobby_name == "General"
    assert cfg.community_page_size == 50
    assert cfg.identity_api_url is None


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ALLOW_DEFAULT_HOBBY", "false")
    monkeypatch.setenv("IDENTITY_API_URL", "https://idp.test")
    monkeypatch.setenv("TEST_DATABASE_URL", "sqlite:///./test.db")
    monkeypatch.setenv("USE_TEST_DATABASE", "true")
    cfg = Settings(SECRET_KEY="s3cret", _env_file=None)

    assert cfg.allow_default_hobby is False
    assert cfg.identity_api_url == "https://idp.test"
    assert cfg.effective_database_url == "sqlite:///./test.db"


def test_sync_url_swaps_async_driver() -> None:
    cfg = Settings(
        SECRET_KEY="s3cret",
        DATABASE_URL="postgresql+asyncpg://app@db/hobbylink",
        _env_file=None,
    )
    assert cfg.database_url_sync == "postgresql+psycopg://app@db/hobbylink"


def test_setup_logging_is_idempotent() -> None:
    logger = setup_logging("DEBUG")
    handlers = list(logger.handlers)
    again = setup_logging("INFO")

    assert logger is again is logging.getLogger(LOGGER_NAME)
    assert again.handlers == handlers
    assert len(handlers) == 1
    assert handlers[0].formatter._fmt == LOG_FORMAT


def test_access_token_roundtrip() -> None:
    token = create_access_token("user_ada", {"sid": "sess_1"})
    claims = decode_access_token(token)
    assert claims["sub"] == "user_ada"
    assert claims["sid"] == "sess_1"


def test_expired_token_is_rejected(test_settings) -> None:
    token = jwt.encode(
        {"sub": "user_ada", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        test_settings.secret_key,
        algorithm=test_settings.jwt_algorithm,
    )
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_expired_token_is_unauthorized_over_http(client, community, test_settings) -> None:
    token = jwt.encode(
        {"sub": "user_test", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        test_settings.secret_key,
        algorithm=test_settings.jwt_algorithm,
    )
    response = client.post(
        f"/api/v1/communities/{community.id}/join",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


def test_seed_hobbies_is_idempotent(db_session, test_settings) -> None:
    seed_hobbies(db_session)
    seed_hobbies(db_session)

    names = db_session.execute(select(Hobby.name).order_by(Hobby.name)).scalars().all()
    expected = sorted({entry["name"] for entry in STARTER_HOBBIES} | {test_settings.default_hobby_name})
    assert names == expected
    assert db_session.execute(select(func.count(Hobby.id))).scalar_one() == len(expected)


def test_migration_config_points_at_project_migrations() -> None:
    cfg = build_config("sqlite:///./migrated.db")
    assert cfg.get_main_option("script_location") == MIGRATIONS_DIR
    assert cfg.get_main_option("sqlalchemy.url") == "sqlite:///./migrated.db"
