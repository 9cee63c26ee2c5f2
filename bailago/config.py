"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LifecycleSettings(BaseModel):
    """Account inactivity lifecycle configuration."""

    # Days without activity before an active account is marked inactive
    inactive_after_days: int = Field(default=90, ge=1)

    # Days without activity before an account is scheduled for deletion
    schedule_deletion_after_days: int = Field(default=180, ge=1)

    # Grace period between the final warning and the anonymization
    deletion_grace_days: int = Field(default=7, ge=1)

    # How often the sweep runs when started with run_periodically()
    sweep_interval_hours: float = Field(default=24.0, gt=0)

    # Placeholders written over PII when an account is deleted
    deleted_email_domain: str = "deleted.local"
    deleted_display_name: str = "Deleted user"

    @model_validator(mode="after")
    def validate_thresholds(self) -> "LifecycleSettings":
        """Deletion must be scheduled strictly after the inactivity warning."""
        if self.schedule_deletion_after_days <= self.inactive_after_days:
            raise ValueError(
                "schedule_deletion_after_days must be greater than inactive_after_days"
            )
        return self


class TokenSettings(BaseModel):
    """Email verification and password reset token configuration."""

    email_verification_ttl_hours: int = Field(default=24, ge=1)
    password_reset_ttl_hours: int = Field(default=1, ge=1)


class InvitationSettings(BaseModel):
    """Group invitation configuration."""

    expiry_days: int = Field(default=7, ge=1)


class SecuritySettings(BaseModel):
    """Credential hashing configuration."""

    # bcrypt work factor (4-31). Lower only for tests.
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class PushSettings(BaseModel):
    """Expo push notification configuration."""

    # When False, notifications are only logged
    enabled: bool = False
    expo_push_url: str = "https://exp.host/--/api/v2/push/send"
    expo_access_token: str | None = None
    timeout_seconds: float = 10.0


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Nested sections are overridden with double-underscore environment
    variables, for example:

        ENVIRONMENT=production
        LIFECYCLE__INACTIVE_AFTER_DAYS=60
        PUSH__ENABLED=true
        PUSH__EXPO_ACCESS_TOKEN=...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    lifecycle: LifecycleSettings = LifecycleSettings()
    tokens: TokenSettings = TokenSettings()
    invitations: InvitationSettings = InvitationSettings()
    security: SecuritySettings = SecuritySettings()
    push: PushSettings = PushSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
