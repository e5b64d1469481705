"""Tests for sanitizing typed messages and composing the signing digest."""

import logging

import pytest
from eth_utils.crypto import keccak

from eip712_typed_data import (
    MalformedTypeDefinition,
    MissingRequiredField,
    UndefinedTypeReference,
    hash_struct,
    sanitize_data,
    sign,
    signable_bytes,
)

# allow redefining outer name for fixtures
# pylint: disable=redefined-outer-name

MAIL_DIGEST = "be609aee343fb3c4b28e1df9e632fca64fcfaede20f02e86244efddf30957bd2"
ARRAY_MAIL_DIGEST = "a85c2e2b118698e88db68a8105b794a8cc7cec074e89ef991cb4f5f533819cc2"
DEMO_DIGEST = "dfbd630472bbaf9ad7b6529ff9d06fd09fac80b16f3605a4c235ee82e74058a2"
DOMAIN_HASH = "f2cee375fa42b42143804025fc449deafd50cc031ca257e0b194a650a912090f"


def test_sign_reference_vectors(mail, mail_with_arrays, demo):
    """Digests match the published EIP-712 examples and the Demo golden value."""
    assert sign(mail).hex() == MAIL_DIGEST
    assert sign(mail, use_v4=False).hex() == MAIL_DIGEST
    assert sign(mail_with_arrays).hex() == ARRAY_MAIL_DIGEST
    assert sign(demo).hex() == DEMO_DIGEST


def test_sign_deterministic(mail_with_arrays):
    """Signing twice gives the same digest."""
    assert sign(mail_with_arrays) == sign(mail_with_arrays)


def test_signable_bytes(mail):
    """The pre-image is the prefix, the domain separator, then the message hash."""
    data = signable_bytes(mail)
    assert len(data) == 66
    assert data[:2] == b"\x19\x01"
    assert data[2:34].hex() == DOMAIN_HASH
    assert data[34:] == hash_struct("Mail", mail["message"], mail["types"])
    assert keccak(data) == sign(mail)


def test_domain_separation(mail):
    """The digest depends on the domain, not only on the message."""
    message_hash = hash_struct("Mail", mail["message"], mail["types"])
    assert sign(mail) != message_hash

    other_chain = dict(mail, domain=dict(mail["domain"], chainId=5))
    assert sign(other_chain) != sign(mail)


def test_sign_domain_only(mail):
    """When the primary type is the domain, there is no message hash."""
    mail["primaryType"] = "EIP712Domain"
    data = signable_bytes(mail)
    assert len(data) == 34
    assert sign(mail) == keccak(b"\x19\x01" + bytes.fromhex(DOMAIN_HASH))


def test_sanitize_drops_unknown_keys(mail, caplog):
    """Only the four EIP-712 keys are kept."""
    mail["extra"] = "ignored"
    with caplog.at_level(logging.DEBUG, logger="eip712_typed_data.signing"):
        sanitized = sanitize_data(mail)
    assert set(sanitized) == {"types", "primaryType", "domain", "message"}
    assert "extra" in caplog.text
    assert sign(mail).hex() == MAIL_DIGEST


def test_sanitize_adds_domain_type(demo):
    """A missing domain type is treated as an empty struct."""
    del demo["types"]["EIP712Domain"]
    sanitized = sanitize_data(demo)
    assert sanitized["types"]["EIP712Domain"] == []
    assert sanitized["types"]["Demo"] == demo["types"]["Demo"]

    empty_domain_hash = keccak(keccak(text="EIP712Domain()"))
    message_hash = hash_struct("Demo", demo["message"], demo["types"])
    assert sign(demo) == keccak(b"\x19\x01" + empty_domain_hash + message_hash)


@pytest.mark.parametrize("key", ["types", "primaryType", "domain", "message"])
def test_sanitize_missing_key(demo, key):
    """Each of the four keys is required."""
    del demo[key]
    with pytest.raises(MissingRequiredField) as excinfo:
        sign(demo)
    assert excinfo.value.key == key


@pytest.mark.parametrize("typed_data", [[], "text", None, 42])
def test_sanitize_not_a_mapping(typed_data):
    """Input that isn't a mapping has no keys, so the first required key is missing."""
    with pytest.raises(MissingRequiredField) as excinfo:
        sign(typed_data)
    assert excinfo.value.key == "types"


def test_sanitize_none_is_missing(demo):
    """A key set to None counts as missing."""
    demo["message"] = None
    with pytest.raises(MissingRequiredField):
        sanitize_data(demo)


@pytest.mark.parametrize(
    "types",
    [
        [],
        {"Demo": "uint256 value"},
        {"Demo": [{"name": "value"}]},
        {"Demo": [{"name": 1, "type": "uint256"}]},
    ],
)
def test_sanitize_malformed_types(demo, types):
    """The types table must map names to lists of name/type members."""
    demo["types"] = types
    with pytest.raises(MalformedTypeDefinition):
        sanitize_data(demo)


def test_sign_undefined_primary_type(demo):
    """A primary type that isn't defined fails."""
    demo["primaryType"] = "Missing"
    with pytest.raises(UndefinedTypeReference):
        sign(demo)


def test_errors_are_value_errors(demo):
    """Every failure can be caught as a ValueError."""
    del demo["domain"]
    with pytest.raises(ValueError):
        sign(demo)
