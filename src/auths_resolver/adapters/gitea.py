"""Gitea adapter: same git data API as GitHub, under /api/v1 on the instance origin.

Base URL comes from the repository URL, so self-hosted instances work as-is.
"""

from __future__ import annotations

from typing import Any

from auths_resolver.adapters.rest import GitRestAdapter
from auths_resolver.adapters.schemas import parse_ref_list
from auths_resolver.models import ForgeConfig, RefEntry


class GiteaAdapter(GitRestAdapter):
    label = "Gitea"
    api_prefix = "/api/v1"

    @property
    def name(self) -> str:
        return "gitea"

    def _auth_header(self, token: str) -> str:
        return f"token {token}"

    def _refs_url(self, config: ForgeConfig) -> str:
        return f"{self._git_url(config)}/refs/auths"

    def _parse_refs(self, data: Any) -> list[RefEntry]:
        # Gitea returns a bare object instead of an array when exactly one ref matches
        return parse_ref_list(data, allow_single=True)
