"""Configuration via environment variables.

A ``.env`` file in the working directory is loaded first; variables already
present in the environment win. All checks run here, before any input file
is opened or any request is made.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .models.migration import PasswordHasher

DEFAULT_API_URL = "https://api.clerk.com/v1"

MISSING_KEY_MESSAGE = (
    "CLERK_SECRET_KEY is required. Please copy .env.example to .env and add your key."
)


def is_production_key(secret_key: str) -> bool:
    """A key whose second underscore-delimited segment is ``live`` (sk_live_...)."""
    parts = secret_key.split("_")
    return len(parts) > 1 and parts[1] == "live"


def _read_environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    if environ is None:
        load_dotenv(".env")
        return os.environ
    return environ


def _get_secret_key(environ: Mapping[str, str]) -> str:
    secret_key = environ.get("CLERK_SECRET_KEY", "").strip()
    if not secret_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)
    return secret_key


def _get_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value}")
    return value


def _get_hasher(environ: Mapping[str, str]) -> PasswordHasher:
    raw = environ.get("PASSWORD_HASHER", "").strip() or PasswordHasher.BCRYPT.value
    try:
        return PasswordHasher(raw)
    except ValueError:
        allowed = ", ".join(h.value for h in PasswordHasher)
        raise ConfigurationError(
            f"PASSWORD_HASHER must be one of: {allowed}. Got {raw!r}"
        )


@dataclass(frozen=True)
class MigrationSettings:
    secret_key: str
    delay_ms: int = 1000
    retry_delay_ms: int = 10000
    import_to_dev_instance: bool = False
    offset: int = 0
    password_hasher: PasswordHasher = PasswordHasher.BCRYPT
    api_url: str = DEFAULT_API_URL

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000.0

    @property
    def is_production(self) -> bool:
        return is_production_key(self.secret_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MigrationSettings":
        """Load migration settings.

        Raises:
            ConfigurationError: if the key is missing, a value is malformed,
                or a development key is used without IMPORT_TO_DEV_INSTANCE=true.
        """
        environ = _read_environ(environ)

        secret_key = _get_secret_key(environ)
        import_to_dev = environ.get("IMPORT_TO_DEV_INSTANCE", "false").strip().lower() == "true"

        if not is_production_key(secret_key) and not import_to_dev:
            raise ConfigurationError(
                "The Clerk Secret Key provided is for a development instance. "
                "Development instances are limited to 500 users and do not share "
                "their userbase with production instances. If you want to import "
                "users to your development instance, please set "
                "'IMPORT_TO_DEV_INSTANCE' in your .env to 'true'."
            )

        return cls(
            secret_key=secret_key,
            delay_ms=_get_int(environ, "DELAY_MS", 1000),
            retry_delay_ms=_get_int(environ, "RETRY_DELAY_MS", 10000),
            import_to_dev_instance=import_to_dev,
            offset=_get_int(environ, "OFFSET", 0),
            password_hasher=_get_hasher(environ),
            api_url=environ.get("CLERK_API_URL", "").strip() or DEFAULT_API_URL,
        )


@dataclass(frozen=True)
class CleanupSettings:
    secret_key: str
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CleanupSettings":
        """Load cleanup settings, refusing production keys outright."""
        environ = _read_environ(environ)

        secret_key = _get_secret_key(environ)
        if is_production_key(secret_key):
            raise ConfigurationError(
                "The Clerk Secret Key provided is for a production instance. "
                "Do not run cleanup in production!"
            )

        return cls(
            secret_key=secret_key,
            api_url=environ.get("CLERK_API_URL", "").strip() or DEFAULT_API_URL,
        )
