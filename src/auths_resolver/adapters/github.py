"""GitHub adapter: auths refs via the git data API on api.github.com."""

from __future__ import annotations

from typing import Any

from auths_resolver.adapters.rest import GitRestAdapter
from auths_resolver.adapters.schemas import parse_ref_list
from auths_resolver.models import ForgeConfig, RefEntry


class GitHubAdapter(GitRestAdapter):
    """GitHub REST v3. Lists refs with a single matching-refs query."""

    label = "GitHub"
    accept = "application/vnd.github.v3+json"

    @property
    def name(self) -> str:
        return "github"

    def _refs_url(self, config: ForgeConfig) -> str:
        return f"{self._git_url(config)}/matching-refs/auths/"

    def _parse_refs(self, data: Any) -> list[RefEntry]:
        return parse_ref_list(data)
