"""Resolver orchestrator: detect forge -> check cache -> pick adapter -> resolve -> cache."""

from __future__ import annotations

from collections.abc import Mapping

import httpx
from loguru import logger

from auths_resolver.adapters import (
    ForgeAdapter,
    ForgeHttpClient,
    GiteaAdapter,
    GitHubAdapter,
    GitLabAdapter,
)
from auths_resolver.cache import ResolveCache
from auths_resolver.config import Config, cfg
from auths_resolver.core.errors import ResolverConfigurationError, UnknownForgeError, UrlParseError
from auths_resolver.detect import detect_forge
from auths_resolver.models import ResolveResult


def build_adapters(
    http: ForgeHttpClient | None = None,
    *,
    github_token: str | None = None,
    gitea_token: str | None = None,
) -> dict[str, ForgeAdapter]:
    """One adapter per supported forge type, sharing one HTTP client."""
    http = http or ForgeHttpClient()
    adapters: list[ForgeAdapter] = [
        GitHubAdapter(http, token=github_token),
        GiteaAdapter(http, token=gitea_token),
        GitLabAdapter(),
    ]
    return {adapter.name: adapter for adapter in adapters}


class Resolver:
    """Resolves identity bundles from repository URLs, memoizing results per (url, filter)."""

    def __init__(
        self,
        *,
        cache: ResolveCache | None = None,
        adapters: Mapping[str, ForgeAdapter] | None = None,
    ) -> None:
        self._cache = cache if cache is not None else ResolveCache()
        self._adapters: dict[str, ForgeAdapter] = dict(adapters) if adapters is not None else build_adapters()

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Resolver:
        """Build a resolver from validated config. Raises ResolverConfigurationError on bad values."""
        config.validate()
        http = ForgeHttpClient(
            timeout=config.http_timeout_seconds,
            user_agent=config.user_agent,
            retry_attempts=config.http_retry_attempts,
            transport=transport,
        )
        return cls(
            cache=ResolveCache(ttl=config.cache_ttl_seconds, maxsize=config.cache_maxsize),
            adapters=build_adapters(
                http,
                github_token=config.github_token,
                gitea_token=config.gitea_token,
            ),
        )

    @property
    def cache(self) -> ResolveCache:
        return self._cache

    def register(self, adapter: ForgeAdapter) -> None:
        """Add or replace the adapter for adapter.name."""
        self._adapters[adapter.name] = adapter

    def adapter_for(self, forge_type: str) -> ForgeAdapter:
        try:
            return self._adapters[forge_type]
        except KeyError:
            raise UnknownForgeError(
                f"No adapter for forge type: {forge_type}",
                code="unknown_forge",
                details={"forge_type": forge_type},
            ) from None

    async def resolve(
        self,
        repo_url: str,
        forge_hint: str | None = None,
        identity_filter: str | None = None,
    ) -> ResolveResult:
        """Resolve repo_url to an identity bundle. Never raises."""
        config = detect_forge(repo_url, forge_hint)
        if config is None:
            err = UrlParseError(f"Could not parse repository URL: {repo_url}", code="bad_url")
            return ResolveResult.failure(str(err))

        key = ResolveCache.make_key(repo_url, identity_filter)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            adapter = self.adapter_for(config.type)
        except UnknownForgeError as exc:
            logger.warning("{}", exc)
            return ResolveResult.failure(str(exc))

        logger.debug("Resolving {} via {} ({})", repo_url, adapter.name, config.base_url)
        try:
            result = await adapter.resolve(config, identity_filter)
        except Exception as exc:
            logger.exception("Adapter {} raised for {}: {}", adapter.name, repo_url, exc)
            result = ResolveResult.failure(str(exc) or type(exc).__name__)

        # Failures are cached too, to avoid hammering the forge
        self._cache.set(key, result)
        return result


_default_resolver: Resolver | None = None


def get_default_resolver() -> Resolver:
    """Process-wide resolver built from the global config on first use."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = Resolver.from_config(cfg)
    return _default_resolver


def set_default_resolver(resolver: Resolver | None) -> None:
    """Replace (or with None, reset) the process-wide resolver."""
    global _default_resolver
    _default_resolver = resolver


async def resolve_from_repo(
    repo_url: str,
    forge_hint: str | None = None,
    identity_filter: str | None = None,
) -> ResolveResult:
    """Resolve identity + attestation data from a repository URL using the default resolver."""
    try:
        resolver = get_default_resolver()
    except ResolverConfigurationError as exc:
        logger.error("Cannot build default resolver: {}", exc)
        return ResolveResult.failure(str(exc))
    return await resolver.resolve(repo_url, forge_hint, identity_filter)


def clear_cache() -> None:
    """Drop every cached result of the default resolver."""
    if _default_resolver is not None:
        _default_resolver.cache.clear()
