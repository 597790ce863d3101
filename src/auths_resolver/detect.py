"""Repository URL -> forge configuration."""

from __future__ import annotations

import httpx

from auths_resolver.core.constants import GITHUB_API_BASE
from auths_resolver.models import ForgeConfig

_HOST_FORGES = {
    "github.com": "github",
    "gitlab.com": "gitlab",
}


def _origin(url: httpx.URL) -> str:
    host = url.host
    if ":" in host:
        host = f"[{host}]"
    if url.port is not None:
        host = f"{host}:{url.port}"
    return f"{url.scheme}://{host}"


def detect_forge(repo_url: str, forge_hint: str | None = None) -> ForgeConfig | None:
    """Parse a repository URL and work out which forge serves it.

    - github.com -> github, API on https://api.github.com
    - gitlab.com -> gitlab, API on the request origin
    - any other host -> gitea (self-hosted), API on the request origin
    - ``forge_hint`` overrides host detection and is trusted as-is

    Returns None for unparseable URLs or paths without owner and repo.
    """
    try:
        url = httpx.URL(repo_url)
    except (httpx.InvalidURL, TypeError):
        return None
    if not url.scheme or not url.host:
        return None

    # Encoded path, so an escaped "/" (%2F) stays inside its segment
    path = url.raw_path.decode("ascii").partition("?")[0]
    if path.endswith("/"):
        path = path[:-1]
    if path.endswith(".git"):
        path = path[:-4]
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        return None

    owner = segments[0]
    repo = segments[1].removesuffix(".git")
    if not repo:
        return None

    if forge_hint:
        forge_type = forge_hint
    else:
        forge_type = _HOST_FORGES.get(url.host.lower(), "gitea")

    # GitHub serves its REST API from a dedicated host; the others share the web origin
    base_url = GITHUB_API_BASE if forge_type == "github" else _origin(url)
    return ForgeConfig(type=forge_type, base_url=base_url, owner=owner, repo=repo)
