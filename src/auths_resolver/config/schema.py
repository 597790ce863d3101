"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from auths_resolver import __version__
from auths_resolver.core.constants import DEFAULT_CACHE_MAXSIZE, DEFAULT_CACHE_TTL_SECONDS
from auths_resolver.core.errors import ResolverConfigurationError

# Env keys that override config (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "GITHUB_TOKEN",
    "GITEA_TOKEN",
    "AUTHS_RESOLVER_CACHE_TTL",
)


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


class Config:
    """Typed accessor over the loaded YAML mapping, with env overrides applied."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace config data and re-read env overrides. Invalid data leaves the old config in place."""
        previous = (self._data, self._env)
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            try:
                self.validate()
            except ResolverConfigurationError:
                self._data, self._env = previous
                raise
        logger.debug("Config reloaded: {} keys", len(self._data))

    def validate(self) -> None:
        """Validate config values; raise ResolverConfigurationError on failure."""
        try:
            ttl = self.cache_ttl_seconds
            timeout = self.http_timeout_seconds
            maxsize = self.cache_maxsize
            attempts = self.http_retry_attempts
        except (TypeError, ValueError) as exc:
            raise ResolverConfigurationError(
                f"Invalid numeric config value: {exc}", code="invalid_number", original_error=exc
            ) from exc
        if ttl <= 0:
            raise ResolverConfigurationError(
                "cache_ttl_seconds must be positive", code="invalid_cache_ttl", details={"value": ttl}
            )
        if maxsize <= 0:
            raise ResolverConfigurationError(
                "cache_maxsize must be positive", code="invalid_cache_maxsize", details={"value": maxsize}
            )
        if timeout <= 0:
            raise ResolverConfigurationError(
                "http_timeout_seconds must be positive",
                code="invalid_http_timeout",
                details={"value": timeout},
            )
        if attempts < 1:
            raise ResolverConfigurationError(
                "http_retry_attempts must be at least 1",
                code="invalid_retry_attempts",
                details={"value": attempts},
            )
        for key in ("github_token", "gitea_token"):
            val = self._data.get(key)
            if val is not None and not isinstance(val, str):
                raise ResolverConfigurationError(
                    f"{key} must be a string", code="invalid_token", details={"type": type(val).__name__}
                )

    @property
    def cache_ttl_seconds(self) -> int:
        env_val = self._env.get("AUTHS_RESOLVER_CACHE_TTL", "")
        if env_val.strip():
            return int(env_val)
        return int(self._data.get("cache_ttl_seconds", DEFAULT_CACHE_TTL_SECONDS))

    @property
    def cache_maxsize(self) -> int:
        return int(self._data.get("cache_maxsize", DEFAULT_CACHE_MAXSIZE))

    @property
    def http_timeout_seconds(self) -> float:
        return float(self._data.get("http_timeout_seconds", 10.0))

    @property
    def http_retry_attempts(self) -> int:
        return int(self._data.get("http_retry_attempts", 3))

    @property
    def user_agent(self) -> str:
        return str(self._data.get("user_agent") or f"auths-resolver/{__version__}")

    @property
    def github_token(self) -> str | None:
        return self._env.get("GITHUB_TOKEN") or self._data.get("github_token") or None

    @property
    def gitea_token(self) -> str | None:
        return self._env.get("GITEA_TOKEN") or self._data.get("gitea_token") or None


# Global config instance (set by __main__)
cfg: Config = Config({})
