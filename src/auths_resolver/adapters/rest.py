"""Shared resolve flow for forges exposing git's data API over REST.

Resolution flow:
1. List refs under refs/auths/
2. Read identity ref -> commit -> tree -> identity.json blob
3. Extract the public key from the controller DID (did:key:z...)
4. Discover device attestation refs
5. Read attestation.json for each device, skipping unreadable ones
6. Return IdentityBundle
"""

from __future__ import annotations

import base64
import binascii
import json
from abc import abstractmethod
from typing import Any

from loguru import logger

from auths_resolver.adapters.base import ForgeAdapter
from auths_resolver.adapters.http import ForgeHttpClient
from auths_resolver.adapters.schemas import parse_blob, parse_commit_tree_sha, parse_tree
from auths_resolver.core.constants import (
    ATTESTATION_BLOB,
    DEVICE_PREFIX,
    IDENTITY_BLOB,
    IDENTITY_REF,
)
from auths_resolver.core.errors import (
    BlobReadError,
    IdentityFilterMismatch,
    IdentityParseError,
    MissingIdentityRefError,
    NoRefsError,
    ResolverError,
    UnsupportedDidSchemeError,
)
from auths_resolver.did import DID_KEY_PREFIX, did_key_to_public_key_hex
from auths_resolver.models import ForgeConfig, IdentityBundle, RefEntry, ResolveResult


def extract_controller_did(identity: Any) -> str:
    """Controller DID from identity.json; older layouts call it identity_did."""
    did = None
    if isinstance(identity, dict):
        did = identity.get("controller_did")
        if did is None:
            did = identity.get("identity_did")
    if not did or not isinstance(did, str):
        raise IdentityParseError("No controller_did found in identity.json", code="no_controller_did")
    return did


class GitRestAdapter(ForgeAdapter):
    """ForgeAdapter over a GitHub-style git data API. Subclasses supply the dialect."""

    label = "Git"
    api_prefix = ""
    accept = "application/json"

    def __init__(self, http: ForgeHttpClient | None = None, *, token: str | None = None) -> None:
        self._http = http or ForgeHttpClient()
        self._token = token

    def _auth_header(self, token: str) -> str:
        return f"Bearer {token}"

    def _headers(self) -> dict[str, str]:
        h = {"Accept": self.accept}
        if self._token:
            h["Authorization"] = self._auth_header(self._token)
        return h

    def _git_url(self, config: ForgeConfig) -> str:
        return f"{config.base_url}{self.api_prefix}/repos/{config.owner}/{config.repo}/git"

    async def _get(self, url: str) -> Any:
        return await self._http.get_json(url, label=self.label, headers=self._headers())

    @abstractmethod
    def _refs_url(self, config: ForgeConfig) -> str:
        """URL listing refs under the auths namespace."""
        ...

    @abstractmethod
    def _parse_refs(self, data: Any) -> list[RefEntry]:
        ...

    async def list_auths_refs(self, config: ForgeConfig) -> list[RefEntry]:
        data = await self._get(self._refs_url(config))
        return self._parse_refs(data)

    async def read_blob(self, config: ForgeConfig, sha: str) -> str:
        blob = parse_blob(await self._get(f"{self._git_url(config)}/blobs/{sha}"))
        if blob.encoding != "base64":
            return blob.content
        try:
            # b64decode drops the newlines forges wrap content with
            return base64.b64decode(blob.content).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise BlobReadError(
                f"Could not decode blob {sha}: {exc}", code="bad_blob", original_error=exc
            ) from exc

    async def _read_tree_blob(self, config: ForgeConfig, commit_sha: str, blob_name: str) -> str | None:
        """Follow commit -> tree -> named entry -> blob. None when the tree lacks the entry."""
        git_url = self._git_url(config)
        tree_sha = parse_commit_tree_sha(await self._get(f"{git_url}/commits/{commit_sha}"))
        entries = parse_tree(await self._get(f"{git_url}/trees/{tree_sha}"))
        entry = next((e for e in entries if e.path == blob_name), None)
        if entry is None:
            return None
        return await self.read_blob(config, entry.sha)

    async def _collect_attestations(self, config: ForgeConfig, refs: list[RefEntry]) -> list[Any]:
        """Read attestation.json for every device ref. Unreadable devices are left out."""
        chain: list[Any] = []
        for device_ref in refs:
            if not device_ref.ref.startswith(DEVICE_PREFIX + "/"):
                continue
            try:
                blob = await self._read_tree_blob(config, device_ref.sha, ATTESTATION_BLOB)
                if blob is not None:
                    chain.append(json.loads(blob))
            except Exception as exc:
                logger.debug("Skipping device ref {}: {}", device_ref.ref, exc)
        return chain

    async def _resolve_bundle(self, config: ForgeConfig, identity_filter: str | None) -> IdentityBundle:
        refs = await self.list_auths_refs(config)
        if not refs:
            raise NoRefsError("No auths refs found in this repository", code="no_refs")

        identity_ref = next((r for r in refs if r.ref == IDENTITY_REF), None)
        if identity_ref is None:
            raise MissingIdentityRefError(
                f"No identity ref found ({IDENTITY_REF})", code="no_identity_ref"
            )

        identity_blob = await self._read_tree_blob(config, identity_ref.sha, IDENTITY_BLOB)
        if identity_blob is None:
            raise BlobReadError(
                f"Could not read {IDENTITY_BLOB} from identity ref", code="no_identity_blob"
            )

        try:
            identity = json.loads(identity_blob)
        except ValueError as exc:
            raise IdentityParseError(
                f"{IDENTITY_BLOB} is not valid JSON: {exc}", code="bad_identity_json", original_error=exc
            ) from exc
        controller_did = extract_controller_did(identity)

        if identity_filter and controller_did != identity_filter:
            raise IdentityFilterMismatch(
                f"Identity {controller_did} does not match filter {identity_filter}",
                code="identity_mismatch",
                details={"identity": controller_did, "filter": identity_filter},
            )

        if not controller_did.startswith(DID_KEY_PREFIX):
            raise UnsupportedDidSchemeError(
                f"Cannot extract public key from {controller_did}. "
                "Only did:key is supported for auto-resolve.",
                code="unsupported_did_scheme",
            )
        public_key_hex = did_key_to_public_key_hex(controller_did)

        chain = await self._collect_attestations(config, refs)
        return IdentityBundle(
            identity_did=controller_did,
            public_key_hex=public_key_hex,
            attestation_chain=tuple(chain),
        )

    async def resolve(self, config: ForgeConfig, identity_filter: str | None = None) -> ResolveResult:
        try:
            bundle = await self._resolve_bundle(config, identity_filter)
        except ResolverError as exc:
            logger.warning("{} resolve failed for {}/{}: {}", self.label, config.owner, config.repo, exc)
            return ResolveResult.failure(str(exc))
        except Exception as exc:
            logger.warning("{} resolve error for {}/{}: {!r}", self.label, config.owner, config.repo, exc)
            return ResolveResult.failure(str(exc) or type(exc).__name__)

        logger.info(
            "Resolved {} for {}/{} ({} attestations)",
            bundle.identity_did,
            config.owner,
            config.repo,
            len(bundle.attestation_chain),
        )
        return ResolveResult.success(bundle)
