"""Test did:key decoding/encoding and ref-safe DID helpers."""

import re

import pytest

from auths_resolver.core.errors import DidDecodeError, UnsupportedDidSchemeError
from auths_resolver.did import (
    _base58_decode,
    _base58_encode,
    device_ref_for,
    did_key_to_public_key_hex,
    public_key_hex_to_did_key,
    sanitize_did_for_ref,
    truncate_did,
)
from tests.mocks import KEY_HEX, TEST_DID_KEY

# Ed25519 did:key as published by the auths CLI
PUBLISHED_DID_KEY = "did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp"


class TestDidKeyToPublicKeyHex:
    def test_extracts_ed25519_key(self):
        hex_key = did_key_to_public_key_hex(PUBLISHED_DID_KEY)
        assert re.fullmatch(r"[0-9a-f]{64}", hex_key)

    def test_decodes_encoded_key(self):
        assert did_key_to_public_key_hex(TEST_DID_KEY) == KEY_HEX

    def test_same_input_same_output(self):
        assert did_key_to_public_key_hex(PUBLISHED_DID_KEY) == did_key_to_public_key_hex(PUBLISHED_DID_KEY)

    @pytest.mark.parametrize("did", ["did:keri:EOrg123", "not-a-did", "did:key:6Mk", ""])
    def test_rejects_other_schemes(self, did):
        with pytest.raises(UnsupportedDidSchemeError, match="Expected did:key:z"):
            did_key_to_public_key_hex(did)

    def test_rejects_wrong_multicodec_prefix(self):
        did = "did:key:z" + _base58_encode(b"\x12\x00" + bytes(range(32)))
        with pytest.raises(DidDecodeError, match="got: 0x1200"):
            did_key_to_public_key_hex(did)

    def test_rejects_short_payload(self):
        did = "did:key:z" + _base58_encode(b"\xed\x01" + b"\x05" * 10)
        with pytest.raises(DidDecodeError, match=r"0xED 0x01\), got: 0xed01"):
            did_key_to_public_key_hex(did)

    def test_rejects_invalid_base58_character(self):
        with pytest.raises(DidDecodeError, match="Invalid base58 character: 0"):
            did_key_to_public_key_hex("did:key:z6Mk0OIl")

    def test_decode_error_carries_prefix_details(self):
        did = "did:key:z" + _base58_encode(b"\xe7\x01" + bytes(33))
        with pytest.raises(DidDecodeError) as exc_info:
            did_key_to_public_key_hex(did)
        assert exc_info.value.details["prefix"] == "e701"


class TestBase58:
    def test_leading_ones_become_zero_bytes(self):
        assert _base58_decode("112") == b"\x00\x00\x01"

    def test_encode_keeps_leading_zero_bytes(self):
        assert _base58_encode(b"\x00\x01") == "12"

    def test_known_value(self):
        # 58 = "21" in base58
        assert _base58_decode("21") == b"\x3a"


class TestPublicKeyHexToDidKey:
    def test_encodes_with_ed25519_prefix(self):
        did = public_key_hex_to_did_key(KEY_HEX)
        assert did.startswith("did:key:z6Mk")

    def test_rejects_wrong_length(self):
        with pytest.raises(DidDecodeError, match="32-byte"):
            public_key_hex_to_did_key("abcd")

    def test_rejects_non_hex(self):
        with pytest.raises(DidDecodeError, match="not valid hex"):
            public_key_hex_to_did_key("zz" * 32)


class TestSanitizeDidForRef:
    def test_replaces_colons(self):
        assert sanitize_did_for_ref("did:keri:EOrg123") == "did_keri_EOrg123"

    def test_replaces_all_non_alphanumeric(self):
        assert sanitize_did_for_ref("did:key:z6Mk...") == "did_key_z6Mk___"

    def test_keeps_alphanumeric(self):
        assert sanitize_did_for_ref("abc123") == "abc123"

    def test_empty_string(self):
        assert sanitize_did_for_ref("") == ""

    def test_device_ref_path(self):
        assert device_ref_for("did:key:z6MkDev1") == "refs/auths/devices/nodes/did_key_z6MkDev1"


class TestTruncateDid:
    def test_short_did_unchanged(self):
        assert truncate_did("did:key:z6Mk") == "did:key:z6Mk"

    def test_keeps_method_prefix(self):
        short = truncate_did(PUBLISHED_DID_KEY)
        assert short.startswith("did:key:")
        assert "…" in short
        assert short.endswith(PUBLISHED_DID_KEY[-6:])

    @pytest.mark.parametrize("max_len", [12, 20, 24, 40])
    def test_output_fills_max_len(self, max_len):
        assert len(truncate_did(PUBLISHED_DID_KEY, max_len=max_len)) == max_len

    def test_default_rendering(self):
        assert truncate_did(PUBLISHED_DID_KEY) == "did:key:z6MkiTBz…3mDooWp"

    def test_long_prefix_falls_back_to_plain_cut(self):
        did = "did:averyveryverylongmethodname:abc"
        assert truncate_did(did, max_len=10) == "did:ave..."
