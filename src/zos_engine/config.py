"""Connection and runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ValidationError
from .models import Session


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Settings for reaching a z/OSMF host."""

    host: Optional[str] = None
    port: int = 443
    protocol: str = "https"
    user: Optional[str] = None
    password: Optional[str] = None
    token_type: Optional[str] = None
    token_value: Optional[str] = None
    base_path: str = ""
    reject_unauthorized: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        """Build configuration from ZOSMF_* environment variables."""
        env = os.environ if env is None else env
        return cls(
            host=env.get("ZOSMF_HOST"),
            port=int(env.get("ZOSMF_PORT", "443")),
            protocol=env.get("ZOSMF_PROTOCOL", "https"),
            user=env.get("ZOSMF_USER"),
            password=env.get("ZOSMF_PASSWORD"),
            token_type=env.get("ZOSMF_TOKEN_TYPE"),
            token_value=env.get("ZOSMF_TOKEN_VALUE"),
            base_path=env.get("ZOSMF_BASE_PATH", ""),
            reject_unauthorized=_as_bool(env.get("ZOSMF_REJECT_UNAUTHORIZED", "true")),
            log_level=env.get("LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """Validate configuration and raise errors for missing required values."""
        required_fields = [
            ("ZOSMF_HOST", self.host),
        ]

        missing = [name for name, value in required_fields if not value]
        if not (self.user and self.password) and not (self.token_type and self.token_value):
            missing.append("ZOSMF_USER/ZOSMF_PASSWORD or ZOSMF_TOKEN_TYPE/ZOSMF_TOKEN_VALUE")
        if missing:
            raise ValidationError(f"Missing required configuration fields: {missing}")

    def to_session(self) -> Session:
        """Create a Session from this configuration."""
        return Session(
            hostname=self.host,
            port=self.port,
            protocol=self.protocol,
            user=self.user,
            password=self.password,
            token_type=self.token_type,
            token_value=self.token_value,
            base_path=self.base_path,
            reject_unauthorized=self.reject_unauthorized,
        )
