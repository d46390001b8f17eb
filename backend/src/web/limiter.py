"""
Rate Limiter - SlowAPI configuration for API rate limiting
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import AppConfig, config

# Current limit strings, replaced by configure_limiter() when an app is built
_limits = {
    "default": config.rate_limit_default,
    "write": config.rate_limit_write,
}


def default_limit() -> str:
    return _limits["default"]


def write_limit() -> str:
    """Limit applied explicitly to mutating routes."""
    return _limits["write"]


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[default_limit],
    enabled=config.rate_limit_enabled,
)


def configure_limiter(app_config: AppConfig) -> Limiter:
    """Apply an app's rate limit settings to the shared limiter."""
    limiter.enabled = app_config.rate_limit_enabled
    _limits["default"] = app_config.rate_limit_default
    _limits["write"] = app_config.rate_limit_write
    return limiter
