"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ..core.directus.client import REQUEST_TIMEOUT
from ..core.directus.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    # Priority 1: Read from /run/secrets
    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.debug(f"Loaded {secret_name} from /run/secrets")
                return secret_value
        except OSError as e:
            logger.warning(f"Failed to read /run/secrets/{secret_name}: {e}")

    # Priority 2: Fallback to environment variable
    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug(f"Loaded {env_var} from environment")
            return secret_value

    return None


@dataclass
class ProviderConfig:
    """Provider configuration container."""
    endpoint: str
    token: str = field(repr=False)
    timeout: float = REQUEST_TIMEOUT

    # Audit
    audit_log_enabled: bool = False
    operator: str = "automation"


def _env_flag(var_name: str) -> bool:
    return os.environ.get(var_name, "false").strip().lower() in ("1", "true", "yes")


def load_settings() -> ProviderConfig:
    """Load provider settings from environment and /run/secrets.

    Raises:
        ConfigurationError: If endpoint or token is missing, or the timeout is invalid
    """
    endpoint = os.environ.get("DIRECTUS_ENDPOINT", "").strip()
    if not endpoint:
        raise ConfigurationError("Environment variable DIRECTUS_ENDPOINT is required.")

    token = _load_secret_from_file("directus_token", "DIRECTUS_TOKEN")
    if not token:
        raise ConfigurationError(
            "DIRECTUS_TOKEN not found. Provide it via Docker secrets (/run/secrets/directus_token) "
            "or environment variable."
        )

    raw_timeout = os.environ.get("DIRECTUS_TIMEOUT", "").strip()
    timeout = REQUEST_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"DIRECTUS_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigurationError(f"DIRECTUS_TIMEOUT must be positive, got {raw_timeout!r}")

    return ProviderConfig(
        endpoint=endpoint,
        token=token,
        timeout=timeout,
        audit_log_enabled=_env_flag("DIRECTUS_AUDIT_LOG"),
        operator=os.environ.get("DIRECTUS_OPERATOR", "automation"),
    )
