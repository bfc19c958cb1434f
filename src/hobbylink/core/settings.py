"""Runtime configuration for HobbyLink.

Every option is read from the environment (or a local ``.env`` file) through
pydantic-settings; the field aliases below are the variable names.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_PG_SCHEME = "postgresql+asyncpg"
_SYNC_PG_SCHEME = "postgresql+psycopg"


class Settings(BaseSettings):
    """Process-wide settings; see the aliases for the environment names."""

    app_name: str = Field(default="HobbyLink", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Verifies bearer session tokens; there is no default on purpose.
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    database_url: str = Field(default="sqlite:///./hobbylink.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Identity provider backend API, used only to provision first-time users.
    identity_api_url: str | None = Field(default=None, alias="IDENTITY_API_URL")
    identity_api_key: str | None = Field(default=None, alias="IDENTITY_API_KEY")
    identity_http_timeout_seconds: float = Field(
        default=10.0,
        alias="IDENTITY_HTTP_TIMEOUT_SECONDS",
    )

    allow_default_hobby: bool = Field(default=True, alias="ALLOW_DEFAULT_HOBBY")
    default_hobby_name: str = Field(default="General", alias="DEFAULT_HOBBY_NAME")
    default_hobby_description: str = Field(
        default="General hobby for communities without a specific hobby",
        alias="DEFAULT_HOBBY_DESCRIPTION",
    )
    community_page_size: int = Field(default=50, alias="COMMUNITY_PAGE_SIZE")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """The test database when ``USE_TEST_DATABASE`` is set and configured."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """``effective_database_url`` with an asyncpg driver swapped for psycopg.

        Alembic and the operator scripts need a blocking driver.
        """
        url = self.effective_database_url
        if url.startswith(_ASYNC_PG_SCHEME):
            return _SYNC_PG_SCHEME + url[len(_ASYNC_PG_SCHEME):]
        return url


settings = Settings()  # type: ignore[call-arg]
