"""Value types passed between detector, adapters, cache and callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ForgeConfig:
    """Parsed repository location. Derived once per resolve call."""

    type: str  # "github" | "gitea" | "gitlab"
    base_url: str
    owner: str
    repo: str


@dataclass(frozen=True)
class RefEntry:
    """A single git ref from a forge ref listing."""

    ref: str
    sha: str


@dataclass(frozen=True)
class IdentityBundle:
    """Controller identity, its Ed25519 key and device attestations."""

    identity_did: str
    public_key_hex: str
    attestation_chain: tuple[Any, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity_did": self.identity_did,
            "public_key_hex": self.public_key_hex,
            "attestation_chain": list(self.attestation_chain),
        }


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of a resolve. A present bundle means success."""

    bundle: IdentityBundle | None = None
    error: str | None = None

    @classmethod
    def success(cls, bundle: IdentityBundle) -> ResolveResult:
        return cls(bundle=bundle)

    @classmethod
    def failure(cls, message: str) -> ResolveResult:
        return cls(bundle=None, error=message)

    @property
    def ok(self) -> bool:
        return self.bundle is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form; `error` is omitted when unset."""
        data: dict[str, Any] = {"bundle": self.bundle.to_dict() if self.bundle else None}
        if self.error is not None:
            data["error"] = self.error
        return data
