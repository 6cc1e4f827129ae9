"""Application configuration."""

from dataclasses import dataclass
from enum import Enum

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from announcer.core.errors import ConfigurationError

LOCAL_REDIS_URL = "redis://localhost:6379"
NAIS_REDIS_VARIABLES = (
    "REDIS_HOST_RSS",
    "REDIS_USERNAME_RSS",
    "REDIS_PASSWORD_RSS",
    "REDIS_PORT_RSS",
)


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    Cross-field requirements (secrets needed outside dry-run mode) are
    checked by ``build_config`` so that importing this module never fails.
    """

    app_name: str = "Announcer"
    version: str = "0.1.0"

    # Mode
    DRY_RUN: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    ROOT_MESSAGE: str = "Hello, check out https://nais.io/log/!"

    # Feed Settings
    FEED_URL: str = "https://nais.io/log/rss.xml"
    FEED_TIMEOUT: float = Field(default=10.0, gt=0)

    # Slack Settings
    SLACK_TOKEN: SecretStr | None = None
    SLACK_CHANNEL_ID: str | None = None
    SLACK_API_URL: str = "https://slack.com/api"
    SINK_TIMEOUT: float = Field(default=10.0, gt=0)

    # Redis Settings
    REDIS_URL: str | None = None
    NAIS_CLUSTER_NAME: str | None = None
    REDIS_HOST_RSS: str | None = None
    REDIS_USERNAME_RSS: str | None = None
    REDIS_PASSWORD_RSS: SecretStr | None = None
    REDIS_PORT_RSS: str | None = None
    STORE_TIMEOUT: float = Field(default=5.0, gt=0)
    STORE_WRITE_RETRIES: int = Field(default=0, ge=0)
    STORE_RETRY_DELAY: float = Field(default=0.5, ge=0)

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True
    TESTING: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class Mode(str, Enum):
    """Whether side effects reach real collaborators."""

    NORMAL = "normal"
    DRY_RUN = "dry_run"

    @property
    def is_dry_run(self) -> bool:
        return self is Mode.DRY_RUN


@dataclass(frozen=True)
class StoreConfig:
    uri: str


@dataclass(frozen=True)
class SinkConfig:
    token: str
    channel_id: str
    api_url: str = "https://slack.com/api"

    def __repr__(self) -> str:
        return (
            f"SinkConfig(token='***', channel_id={self.channel_id!r}, "
            f"api_url={self.api_url!r})"
        )


@dataclass(frozen=True)
class FeedConfig:
    url: str


@dataclass(frozen=True)
class Timeouts:
    """Per-call deadlines in seconds."""

    feed: float = 10.0
    store: float = 5.0
    sink: float = 10.0


@dataclass(frozen=True)
class AppConfig:
    """Explicit configuration handed to the reconciliation pass."""

    mode: Mode
    feed: FeedConfig
    store: StoreConfig | None = None
    sink: SinkConfig | None = None
    timeouts: Timeouts = Timeouts()
    store_write_retries: int = 0
    store_retry_delay: float = 0.5

    def sink_config(self) -> SinkConfig:
        """Get the Slack configuration.

        Raises:
            ConfigurationError: If no Slack configuration was provided
        """
        if self.sink is None:
            raise ConfigurationError("Slack configuration missing")
        return self.sink


def resolve_redis_url(settings: Settings) -> str:
    """Work out the Redis connection URI from the environment.

    An explicit ``REDIS_URL`` wins. Inside a NAIS cluster the TLS URI is
    assembled from the ``REDIS_*_RSS`` variables, otherwise the local
    development default is used.

    Raises:
        ConfigurationError: If running in NAIS without the Redis variables
    """
    if settings.REDIS_URL:
        return settings.REDIS_URL

    if not settings.NAIS_CLUSTER_NAME:
        return LOCAL_REDIS_URL

    password = settings.REDIS_PASSWORD_RSS
    missing = [name for name in NAIS_REDIS_VARIABLES if not getattr(settings, name)]
    if missing or password is None:
        raise ConfigurationError(
            f"Missing {', '.join(missing)} env; required when running in NAIS"
        )

    return (
        f"rediss://{settings.REDIS_USERNAME_RSS}:{password.get_secret_value()}"
        f"@{settings.REDIS_HOST_RSS}:{settings.REDIS_PORT_RSS}"
    )


def build_config(settings: Settings) -> AppConfig:
    """Build the explicit application configuration.

    Args:
        settings: Raw settings loaded from the environment

    Returns:
        Validated application configuration

    Raises:
        ConfigurationError: If required secrets are missing in normal mode
    """
    mode = Mode.DRY_RUN if settings.DRY_RUN else Mode.NORMAL
    timeouts = Timeouts(
        feed=settings.FEED_TIMEOUT,
        store=settings.STORE_TIMEOUT,
        sink=settings.SINK_TIMEOUT,
    )
    feed = FeedConfig(url=settings.FEED_URL)

    if mode.is_dry_run:
        return AppConfig(
            mode=mode,
            feed=feed,
            timeouts=timeouts,
            store_write_retries=settings.STORE_WRITE_RETRIES,
            store_retry_delay=settings.STORE_RETRY_DELAY,
        )

    if settings.SLACK_TOKEN is None or not settings.SLACK_TOKEN.get_secret_value():
        raise ConfigurationError("Missing SLACK_TOKEN env; required in normal mode")
    if not settings.SLACK_CHANNEL_ID:
        raise ConfigurationError(
            "Missing SLACK_CHANNEL_ID env; required in normal mode"
        )

    return AppConfig(
        mode=mode,
        feed=feed,
        store=StoreConfig(uri=resolve_redis_url(settings)),
        sink=SinkConfig(
            token=settings.SLACK_TOKEN.get_secret_value(),
            channel_id=settings.SLACK_CHANNEL_ID,
            api_url=settings.SLACK_API_URL,
        ),
        timeouts=timeouts,
        store_write_retries=settings.STORE_WRITE_RETRIES,
        store_retry_delay=settings.STORE_RETRY_DELAY,
    )


# Create settings instance
settings = Settings()
