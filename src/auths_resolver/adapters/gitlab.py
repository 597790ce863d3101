"""GitLab stub.

GitLab's Refs API only returns branches and tags, never arbitrary refs like
refs/auths/*, so there is nothing to list or walk. Callers are told to pass
attestation data explicitly instead.
"""

from __future__ import annotations

from auths_resolver.adapters.base import ForgeAdapter
from auths_resolver.core.errors import UnsupportedForgeOperationError
from auths_resolver.models import ForgeConfig, RefEntry, ResolveResult

GITLAB_UNSUPPORTED_MESSAGE = (
    "GitLab does not expose custom Git refs via its REST API. "
    "Provide attestation data manually using the attestation and public-key attributes."
)


class GitLabAdapter(ForgeAdapter):
    """No network access; every operation is answered locally."""

    @property
    def name(self) -> str:
        return "gitlab"

    async def list_auths_refs(self, config: ForgeConfig) -> list[RefEntry]:
        return []

    async def read_blob(self, config: ForgeConfig, sha: str) -> str:
        raise UnsupportedForgeOperationError(
            "GitLab adapter does not support blob reads", code="unsupported_operation"
        )

    async def resolve(self, config: ForgeConfig, identity_filter: str | None = None) -> ResolveResult:
        return ResolveResult.failure(GITLAB_UNSUPPORTED_MESSAGE)
