"""Forge REST payload shapes (git data API) and strict parsers.

GitHub and Gitea share the same JSON shapes for the git data endpoints:

  ref:    { ref, object: { sha } }
  commit: { tree: { sha } }
  tree:   { tree: [ { path, sha }, ... ] }
  blob:   { content, encoding }

Parsers raise ForgeSchemaError naming the offending field instead of letting
a KeyError/TypeError escape from deep inside the traversal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from auths_resolver.core.errors import ForgeSchemaError
from auths_resolver.models import RefEntry


@dataclass(frozen=True)
class TreeEntry:
    path: str
    sha: str


@dataclass(frozen=True)
class BlobPayload:
    content: str
    encoding: str


def _require_dict(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ForgeSchemaError(
            f"Unexpected {what} payload: expected object, got {type(data).__name__}",
            code="schema_mismatch",
            details={"what": what},
        )
    return data


def _require_str(data: dict[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ForgeSchemaError(
            f"Unexpected {what} payload: missing string field '{key}'",
            code="schema_mismatch",
            details={"what": what, "field": key},
        )
    return value


def parse_ref_entry(data: Any) -> RefEntry:
    entry = _require_dict(data, "ref")
    obj = _require_dict(entry.get("object"), "ref object")
    return RefEntry(ref=_require_str(entry, "ref", "ref"), sha=_require_str(obj, "sha", "ref object"))


def parse_ref_list(data: Any, *, allow_single: bool = False) -> list[RefEntry]:
    """Parse a ref listing. With ``allow_single``, a bare object counts as a one-element list."""
    if isinstance(data, dict) and allow_single:
        data = [data]
    if not isinstance(data, list):
        raise ForgeSchemaError(
            f"Unexpected ref list payload: expected array, got {type(data).__name__}",
            code="schema_mismatch",
            details={"what": "ref list"},
        )
    return [parse_ref_entry(item) for item in data]


def parse_commit_tree_sha(data: Any) -> str:
    commit = _require_dict(data, "commit")
    tree = _require_dict(commit.get("tree"), "commit tree")
    return _require_str(tree, "sha", "commit tree")


def parse_tree(data: Any) -> list[TreeEntry]:
    tree = _require_dict(data, "tree")
    entries = tree.get("tree")
    if not isinstance(entries, list):
        raise ForgeSchemaError(
            "Unexpected tree payload: missing array field 'tree'",
            code="schema_mismatch",
            details={"what": "tree", "field": "tree"},
        )
    result: list[TreeEntry] = []
    for item in entries:
        item = _require_dict(item, "tree entry")
        result.append(
            TreeEntry(
                path=_require_str(item, "path", "tree entry"),
                sha=_require_str(item, "sha", "tree entry"),
            )
        )
    return result


def parse_blob(data: Any) -> BlobPayload:
    blob = _require_dict(data, "blob")
    encoding = blob.get("encoding")
    return BlobPayload(
        content=_require_str(blob, "content", "blob"),
        encoding=encoding if isinstance(encoding, str) else "",
    )
