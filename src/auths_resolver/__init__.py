"""Resolve auths identity bundles from git forge refs."""

__version__ = "0.1.0"

from auths_resolver.adapters import ForgeAdapter  # noqa: E402
from auths_resolver.cache import ResolveCache  # noqa: E402
from auths_resolver.detect import detect_forge  # noqa: E402
from auths_resolver.did import (  # noqa: E402
    did_key_to_public_key_hex,
    public_key_hex_to_did_key,
    sanitize_did_for_ref,
)
from auths_resolver.models import (  # noqa: E402
    ForgeConfig,
    IdentityBundle,
    RefEntry,
    ResolveResult,
)
from auths_resolver.resolver import Resolver, clear_cache, resolve_from_repo  # noqa: E402

__all__ = [
    "ForgeAdapter",
    "ForgeConfig",
    "IdentityBundle",
    "RefEntry",
    "ResolveCache",
    "ResolveResult",
    "Resolver",
    "__version__",
    "clear_cache",
    "detect_forge",
    "did_key_to_public_key_hex",
    "public_key_hex_to_did_key",
    "resolve_from_repo",
    "sanitize_did_for_ref",
]
