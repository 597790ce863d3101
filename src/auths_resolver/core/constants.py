"""Forge types and git ref layout constants."""

from __future__ import annotations

from typing import Literal

ForgeType = Literal["github", "gitea", "gitlab"]
FORGE_TYPES: tuple[ForgeType, ...] = ("github", "gitea", "gitlab")

GITHUB_API_BASE = "https://api.github.com"

# Ref layout written by the auths CLI
IDENTITY_REF = "refs/auths/identity"
DEVICE_PREFIX = "refs/auths/devices/nodes"
IDENTITY_BLOB = "identity.json"
ATTESTATION_BLOB = "attestation.json"

DEFAULT_CACHE_TTL_SECONDS = 300
DEFAULT_CACHE_MAXSIZE = 1024
