"""Forge adapters. Each implements base.ForgeAdapter."""

from auths_resolver.adapters.base import ForgeAdapter
from auths_resolver.adapters.gitea import GiteaAdapter
from auths_resolver.adapters.github import GitHubAdapter
from auths_resolver.adapters.gitlab import GitLabAdapter
from auths_resolver.adapters.http import ForgeHttpClient

__all__ = ["ForgeAdapter", "ForgeHttpClient", "GitHubAdapter", "GitLabAdapter", "GiteaAdapter"]
