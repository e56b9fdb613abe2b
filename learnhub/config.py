"""
Centralized configuration for the LearnHub platform.

Every setting comes from the environment (loaded from .env / .env.local by
the entry points) and is read through a function here, so tests can patch
os.environ without reimporting modules.
"""

import logging
import os

logger = logging.getLogger(__name__)


def is_dev_mode() -> bool:
    """Check if running in development mode (--dev flag or DEV_MODE env)."""
    return os.getenv("DEV_MODE", "").lower() in ("true", "1", "yes")


def is_production() -> bool:
    """Check if running in a deployed environment."""
    return os.getenv("ENVIRONMENT", "").lower() == "production"


def get_api_port() -> int:
    """Get API server port from env or default."""
    return int(os.getenv("API_PORT", "8000"))


def get_frontend_url() -> str:
    """Get frontend URL (used for CORS)."""
    return os.environ.get("FRONTEND_URL", "http://localhost:3000").rstrip("/")


def get_allowed_origins() -> list[str]:
    """
    Get list of allowed CORS origins.

    Includes localhost variants for dev and the configured frontend URL.
    """
    hosts = ["localhost", "127.0.0.1"]
    origins = [f"http://{host}:{port}" for host in hosts for port in (3000, 5173)]

    frontend_url = get_frontend_url()
    if frontend_url not in origins:
        origins.append(frontend_url)

    return origins


def get_sentry_dsn() -> str | None:
    """Sentry DSN, or None when error reporting is disabled."""
    return os.environ.get("SENTRY_DSN") or None


# Provider prefix (litellm model string) -> env var holding its API key,
# in fallback order when LLM_PROVIDER is not set
LLM_PROVIDER_KEYS = {
    "groq": "GROQ_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def get_llm_provider() -> str | None:
    """
    Get the configured litellm model string, or None if no provider is usable.

    LLM_PROVIDER wins when its key is present. Otherwise the first provider
    with a key set is used, in the order of LLM_PROVIDER_KEYS.
    """
    explicit = os.environ.get("LLM_PROVIDER")
    if explicit:
        prefix = explicit.split("/", 1)[0]
        key_var = LLM_PROVIDER_KEYS.get(prefix)
        if key_var is None or os.environ.get(key_var):
            return explicit
        logger.warning(f"LLM_PROVIDER={explicit} set but {key_var} is missing")
        return None

    defaults = {
        "anthropic": "anthropic/claude-sonnet-4-6",
        "groq": "groq/llama-3.3-70b-versatile",
        "gemini": "gemini/gemini-2.0-flash",
        "openai": "openai/gpt-4o-mini",
    }
    for prefix, key_var in LLM_PROVIDER_KEYS.items():
        if os.environ.get(key_var):
            return defaults[prefix]
    return None


# Required environment variables for production
# Format: (name, description, required_in_dev)
REQUIRED_ENV_VARS = [
    ("DATABASE_URL", "PostgreSQL connection string", True),
    ("JWT_SECRET", "Secret key for session tokens", True),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []
    in_dev = is_dev_mode()

    for name, description, required_in_dev in REQUIRED_ENV_VARS:
        value = os.environ.get(name)

        if not value:
            if is_production():
                errors.append(f"  ✗ {name}: Not set ({description})")
            elif required_in_dev or not in_dev:
                warnings.append(f"  ⚠ {name}: Not set ({description})")

    if errors:
        for error in errors:
            logger.error(error)
        return False, warnings

    return True, warnings
