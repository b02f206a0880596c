"""Configuration management for OAuth providers."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.errors import ConfigurationError


class ProviderCredentials(BaseModel):
    """Client credentials issued by a provider. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(..., min_length=1, description="OAuth client ID / consumer key")
    client_secret: str = Field(..., description="OAuth client secret / consumer secret")
    redirect_uri: str = Field(..., description="Callback URL registered with the provider")


class OwnerFieldMap(BaseModel):
    """Names of the profile payload keys holding the normalized owner fields."""

    model_config = ConfigDict(frozen=True)

    id: str = "id"
    name: str = "name"
    screen_name: str | None = None
    email: str | None = "email"


class ProviderEndpoints(BaseModel):
    """Endpoints and defaults for a standard OAuth2 provider."""

    model_config = ConfigDict(frozen=True)

    authorization_endpoint: str
    token_endpoint: str
    userinfo_endpoint: str
    scopes: list[str] = Field(default_factory=list)
    owner_fields: OwnerFieldMap = Field(default_factory=OwnerFieldMap)


class ProviderConfig(BaseModel):
    """Everything needed to build a provider adapter."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Provider name, e.g. 'twitter', 'google'")
    protocol: Literal["oauth1", "oauth2"]
    credentials: ProviderCredentials
    endpoints: ProviderEndpoints | None = Field(
        default=None,
        description="OAuth2 endpoints. Falls back to the built-in preset for `name`.",
    )


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTH_BRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitter (OAuth1)
    twitter_client_id: str | None = Field(default=None, description="Twitter consumer key")
    twitter_client_secret: str | None = Field(
        default=None, description="Twitter consumer secret"
    )
    twitter_redirect_uri: str | None = Field(
        default=None, description="Callback URL registered with the Twitter app"
    )
    twitter_api_base: str = Field(
        default="https://api.twitter.com",
        description="Base URL for Twitter OAuth and REST endpoints",
    )

    # HTTP
    http_timeout: float = Field(
        default=10.0, gt=0, description="Timeout in seconds for provider round trips"
    )

    # Temporary token storage
    temporary_token_max_age: int | None = Field(
        default=900,
        description="Seconds an encrypted temporary token stays valid. None disables expiry.",
    )
    token_encryption_key: str | None = Field(
        default=None, description="Fernet key for encrypted temporary token storage"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("twitter_api_base")
    @classmethod
    def validate_twitter_api_base(cls, v: str) -> str:
        """Validate that the Twitter API base is an HTTPS URL without trailing slash."""
        if not v.startswith("https://"):
            raise ValueError("Twitter API base URL must start with https://")
        return v.rstrip("/")

    def twitter_credentials(self) -> ProviderCredentials:
        """Build Twitter credentials from settings.

        Raises:
            ConfigurationError: If any of the Twitter values is unset
        """
        missing = [
            name
            for name in ("twitter_client_id", "twitter_client_secret", "twitter_redirect_uri")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(f"Missing Twitter settings: {', '.join(missing)}")

        return ProviderCredentials(
            client_id=self.twitter_client_id,
            client_secret=self.twitter_client_secret,
            redirect_uri=self.twitter_redirect_uri,
        )


# Global settings instance
settings = Settings()
