"""Forge adapter interface: list auths refs, read blobs, resolve a bundle."""

from __future__ import annotations

from abc import ABC, abstractmethod

from auths_resolver.models import ForgeConfig, RefEntry, ResolveResult


class ForgeAdapter(ABC):
    """Interface for forge adapters. One instance per forge type, selected by name."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Forge type this adapter serves (e.g. 'github', 'gitea', 'gitlab')."""
        ...

    @abstractmethod
    async def list_auths_refs(self, config: ForgeConfig) -> list[RefEntry]:
        """List refs under refs/auths/, in forge order."""
        ...

    @abstractmethod
    async def read_blob(self, config: ForgeConfig, sha: str) -> str:
        """Read a blob by sha and return its decoded text."""
        ...

    @abstractmethod
    async def resolve(self, config: ForgeConfig, identity_filter: str | None = None) -> ResolveResult:
        """Resolve the identity bundle. Never raises; failures come back as ResolveResult.error."""
        ...
