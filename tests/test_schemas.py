"""Test strict parsing of forge git data API payloads."""

import pytest

from auths_resolver.adapters.schemas import (
    BlobPayload,
    TreeEntry,
    parse_blob,
    parse_commit_tree_sha,
    parse_ref_list,
    parse_tree,
)
from auths_resolver.core.errors import BlobReadError, ForgeSchemaError
from auths_resolver.models import RefEntry

REF = {"ref": "refs/auths/identity", "object": {"sha": "abc123", "type": "commit"}}


class TestParseRefList:
    def test_array(self):
        assert parse_ref_list([REF]) == [RefEntry("refs/auths/identity", "abc123")]

    def test_empty_array(self):
        assert parse_ref_list([]) == []

    def test_single_object_wrapped_when_allowed(self):
        assert parse_ref_list(REF, allow_single=True) == [RefEntry("refs/auths/identity", "abc123")]

    def test_single_object_rejected_by_default(self):
        with pytest.raises(ForgeSchemaError, match="expected array"):
            parse_ref_list(REF)

    def test_entry_missing_sha(self):
        with pytest.raises(ForgeSchemaError, match="'sha'"):
            parse_ref_list([{"ref": "refs/auths/identity", "object": {}}])

    def test_entry_missing_object(self):
        with pytest.raises(ForgeSchemaError, match="ref object"):
            parse_ref_list([{"ref": "refs/auths/identity"}])

    def test_schema_error_is_blob_read_error(self):
        with pytest.raises(BlobReadError):
            parse_ref_list("nope")


class TestParseCommitAndTree:
    def test_commit_tree_sha(self):
        assert parse_commit_tree_sha({"sha": "c1", "tree": {"sha": "t1"}}) == "t1"

    def test_commit_without_tree(self):
        with pytest.raises(ForgeSchemaError, match="commit tree"):
            parse_commit_tree_sha({"sha": "c1"})

    def test_tree_entries(self):
        entries = parse_tree({"tree": [{"path": "identity.json", "sha": "b1", "mode": "100644"}]})
        assert entries == [TreeEntry(path="identity.json", sha="b1")]

    def test_tree_without_entries(self):
        with pytest.raises(ForgeSchemaError, match="'tree'"):
            parse_tree({"sha": "t1"})

    def test_tree_entry_not_object(self):
        with pytest.raises(ForgeSchemaError, match="tree entry"):
            parse_tree({"tree": ["identity.json"]})


class TestParseBlob:
    def test_base64_blob(self):
        assert parse_blob({"content": "e30=", "encoding": "base64"}) == BlobPayload("e30=", "base64")

    def test_missing_encoding_defaults_to_empty(self):
        assert parse_blob({"content": "{}"}).encoding == ""

    def test_missing_content(self):
        with pytest.raises(ForgeSchemaError, match="'content'"):
            parse_blob({"encoding": "base64"})
