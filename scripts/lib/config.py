"""Configuration loading and validation for the signing script."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

DEFAULT_SIGNING_KEY_USER = "aws-cdk@amazon.com"
SIGNING_KEY_SECRET_SUFFIX = "SigningKey"


class ConfigurationError(Exception):
    """Configuration validation error."""

    pass


@dataclass
class SigningConfig:
    """Validated signing configuration."""

    key_scope: str
    key_user: str = DEFAULT_SIGNING_KEY_USER
    aws_region: str | None = None
    aws_profile: str | None = None

    @property
    def secret_id(self) -> str:
        """Secrets Manager id holding the signing key, e.g. ``scope/SigningKey``."""
        return f"{self.key_scope}/{SIGNING_KEY_SECRET_SUFFIX}"


@dataclass
class SigningKey:
    """Private key material and passphrase stored in the signing secret."""

    private_key: str
    passphrase: str

    @classmethod
    def from_secret_string(cls, secret_string: str) -> "SigningKey":
        """
        Parse the JSON secret ``{"PrivateKey": ..., "Passphrase": ...}``.

        Raises:
            ConfigurationError: If the secret is not JSON or lacks a field.
        """
        try:
            value = json.loads(secret_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Signing key secret is not valid JSON: {e}") from e

        if not isinstance(value, dict):
            raise ConfigurationError("Signing key secret must be a JSON object")

        missing = [key for key in ("PrivateKey", "Passphrase") if not value.get(key)]
        if missing:
            raise ConfigurationError(f"Signing key secret is missing: {', '.join(missing)}")

        return cls(private_key=value["PrivateKey"], passphrase=value["Passphrase"])


def load_env(env_path: Path = Path(".env")) -> dict[str, str]:
    """Load configuration from the process environment, seeded from a .env file if present."""
    values = dict(dotenv_values(env_path)) if env_path.exists() else {}
    values.update(os.environ)
    return {key: value for key, value in values.items() if value is not None}


def get_signing_config(aws_profile: str | None = None) -> SigningConfig | None:
    """Load signing configuration, or None when SIGNING_KEY_SCOPE is not set."""
    env = load_env()

    key_scope = env.get("SIGNING_KEY_SCOPE", "")
    if not key_scope:
        return None

    # Set AWS_PROFILE environment variable if provided
    if aws_profile:
        os.environ["AWS_PROFILE"] = aws_profile

    return SigningConfig(
        key_scope=key_scope,
        key_user=env.get("SIGNING_KEY_USER") or DEFAULT_SIGNING_KEY_USER,
        aws_region=env.get("AWS_REGION") or None,
        aws_profile=aws_profile,
    )
