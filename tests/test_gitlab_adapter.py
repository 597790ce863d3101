"""Test the GitLab stub adapter."""

from unittest.mock import patch

import pytest

from auths_resolver.adapters import GitLabAdapter
from auths_resolver.adapters.gitlab import GITLAB_UNSUPPORTED_MESSAGE
from auths_resolver.core.errors import UnsupportedForgeOperationError
from auths_resolver.models import ForgeConfig

CONFIG = ForgeConfig(type="gitlab", base_url="https://gitlab.com", owner="org", repo="project")


class TestGitLabAdapter:
    def test_name(self):
        assert GitLabAdapter().name == "gitlab"

    @pytest.mark.asyncio
    async def test_list_refs_is_empty(self):
        assert await GitLabAdapter().list_auths_refs(CONFIG) == []

    @pytest.mark.asyncio
    async def test_read_blob_not_supported(self):
        with pytest.raises(UnsupportedForgeOperationError, match="does not support blob reads"):
            await GitLabAdapter().read_blob(CONFIG, "abc")

    @pytest.mark.asyncio
    async def test_resolve_returns_fixed_error_without_network(self):
        with patch("httpx.AsyncClient") as client_cls:
            result = await GitLabAdapter().resolve(CONFIG)
            client_cls.assert_not_called()

        assert result.bundle is None
        assert result.error == GITLAB_UNSUPPORTED_MESSAGE
        assert "Provide attestation data manually" in result.error

    @pytest.mark.asyncio
    async def test_identity_filter_ignored(self):
        result = await GitLabAdapter().resolve(CONFIG, "did:key:z6MkAny")
        assert result.error == GITLAB_UNSUPPORTED_MESSAGE
