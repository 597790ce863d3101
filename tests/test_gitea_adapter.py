"""Test the Gitea adapter against a fake REST API."""

import pytest

from auths_resolver.adapters import GiteaAdapter
from auths_resolver.models import ForgeConfig, RefEntry
from tests.mocks import KEY_HEX, TEST_DID_KEY, FakeForge, forge_routes

CONFIG = ForgeConfig(type="gitea", base_url="https://git.example.com", owner="user", repo="project")
REFS = "/api/v1/repos/user/project/git/refs/auths"


def make_adapter(routes, **kwargs):
    forge = FakeForge(routes)
    return forge, GiteaAdapter(forge.client(), **kwargs)


class TestGiteaListRefs:
    @pytest.mark.asyncio
    async def test_uses_api_v1_prefix(self):
        forge, adapter = make_adapter({REFS: [{"ref": "refs/auths/identity", "object": {"sha": "abc123"}}]})

        refs = await adapter.list_auths_refs(CONFIG)

        assert len(refs) == 1
        assert forge.urls == ["https://git.example.com/api/v1/repos/user/project/git/refs/auths"]

    @pytest.mark.asyncio
    async def test_single_object_response(self):
        _, adapter = make_adapter({REFS: {"ref": "refs/auths/identity", "object": {"sha": "abc123"}}})
        refs = await adapter.list_auths_refs(CONFIG)
        assert refs == [RefEntry("refs/auths/identity", "abc123")]

    @pytest.mark.asyncio
    async def test_token_header(self):
        forge, adapter = make_adapter({REFS: []}, token="gitea-tok")
        await adapter.list_auths_refs(CONFIG)
        assert forge.requests[0].headers["Authorization"] == "token gitea-tok"
        assert forge.requests[0].headers["Accept"] == "application/json"


class TestGiteaResolve:
    @pytest.mark.asyncio
    async def test_resolves_bundle(self):
        forge, adapter = make_adapter(forge_routes("git/refs/auths"))

        result = await adapter.resolve(CONFIG)

        assert result.ok
        assert result.bundle.identity_did == TEST_DID_KEY
        assert result.bundle.public_key_hex == KEY_HEX
        assert len(result.bundle.attestation_chain) == 1
        assert all("/api/v1/repos/user/project/git/" in url for url in forge.urls)

    @pytest.mark.asyncio
    async def test_single_identity_ref_resolves(self):
        routes = forge_routes("git/refs/auths", attestations=())
        routes["git/refs/auths"] = routes["git/refs/auths"][0]
        _, adapter = make_adapter(routes)

        result = await adapter.resolve(CONFIG)

        assert result.ok
        assert result.bundle.attestation_chain == ()

    @pytest.mark.asyncio
    async def test_no_refs(self):
        _, adapter = make_adapter({"git/refs/auths": []})
        result = await adapter.resolve(CONFIG)
        assert result.bundle is None
        assert "No auths refs found" in result.error

    @pytest.mark.asyncio
    async def test_missing_ref_namespace_reports_http_error(self):
        _, adapter = make_adapter({})
        result = await adapter.resolve(CONFIG)
        assert result.bundle is None
        assert result.error.startswith("Gitea API 404: Not Found")

    @pytest.mark.asyncio
    async def test_configurable_base_url(self):
        config = ForgeConfig(type="gitea", base_url="https://my-gitea.internal:3000", owner="org", repo="code")
        forge, adapter = make_adapter({"my-gitea.internal:3000/api/v1/repos/org/code/git/refs/auths": []})

        await adapter.resolve(config)

        assert forge.urls[0].startswith("https://my-gitea.internal:3000/")
