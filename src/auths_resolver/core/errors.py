"""Resolver domain exceptions."""

from __future__ import annotations


class ResolverError(Exception):
    """Base for resolver domain errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class ResolverConfigurationError(ResolverError):
    """Config validation or load failure."""


class UrlParseError(ResolverError):
    """Repository URL could not be parsed into owner/repo."""


class UnknownForgeError(ResolverError):
    """No adapter registered for the detected forge type."""


class NoRefsError(ResolverError):
    """Repository has no refs under refs/auths/."""


class MissingIdentityRefError(ResolverError):
    """refs/auths/identity is absent."""


class BlobReadError(ResolverError):
    """Commit -> tree -> blob traversal failed at some hop."""


class ForgeSchemaError(BlobReadError):
    """Forge API payload did not have the expected shape."""


class IdentityParseError(ResolverError):
    """identity.json is malformed or lacks a controller DID."""


class IdentityFilterMismatch(ResolverError):
    """Resolved controller DID differs from the requested identity."""


class UnsupportedDidSchemeError(ResolverError):
    """DID is not a did:key:z... identifier."""


class DidDecodeError(ResolverError):
    """Bad base58 payload or multicodec prefix."""


class UnsupportedForgeOperationError(ResolverError):
    """Operation not available on this forge."""


class HttpError(ResolverError):
    """Non-2xx response from a forge API."""

    def __init__(self, forge: str, status: int, reason: str, url: str) -> None:
        super().__init__(
            f"{forge} API {status}: {reason} ({url})",
            code="http_error",
            details={"status": status, "reason": reason, "url": url},
        )
        self.status = status
        self.reason = reason
        self.url = url
