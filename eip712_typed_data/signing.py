"""EIP-712 signing digests.

A typed message is a mapping of the form::

    {
        "types": {...},        # struct definitions, including "EIP712Domain"
        "primaryType": "Mail", # the struct type of the message
        "domain": {...},       # values for the EIP712Domain struct
        "message": {...},      # values for the primary struct
    }
"""

import logging
from collections.abc import Mapping

from eth_utils.crypto import keccak

from eip712_typed_data.constants import EIP712_DOMAIN_TYPE_NAME, TYPED_DATA_PREFIX, TYPED_MESSAGE_KEYS
from eip712_typed_data.encoding import hash_struct
from eip712_typed_data.exceptions import MalformedTypeDefinition, MissingRequiredField

logger = logging.getLogger(__name__)


def _validate_types(types):
    """Check the types table has the shape ``{str: [{"name": str, "type": str}, ...]}``."""
    if not isinstance(types, Mapping):
        raise MalformedTypeDefinition(f"types must be a mapping, got {type(types).__name__}")
    for type_name, members in types.items():
        if not isinstance(type_name, str) or not isinstance(members, (list, tuple)):
            raise MalformedTypeDefinition(f"{type_name!r} must map to a list of members")
        for member in members:
            if not (
                isinstance(member, Mapping)
                and isinstance(member.get("name"), str)
                and isinstance(member.get("type"), str)
            ):
                raise MalformedTypeDefinition(f"Invalid member of {type_name}: {member!r}")


def sanitize_data(data: Mapping) -> dict:
    """Remove properties from a typed message that are not defined by EIP-712.

    The returned ``types`` always contain an ``EIP712Domain`` entry, empty if the caller gave none.

    Raises:
        MissingRequiredField: If any of ``types``, ``primaryType``, ``domain`` or ``message`` is missing.
        MalformedTypeDefinition: If ``types`` is not a table of struct members.
    """
    if not isinstance(data, Mapping):
        # Anything that isn't a mapping has none of the required keys
        data = {}
    sanitized = {key: data[key] for key in TYPED_MESSAGE_KEYS if data.get(key) is not None}
    dropped = set(data) - set(sanitized)
    if dropped:
        logger.debug("Dropping typed data keys: %s", sorted(map(str, dropped)))

    for key in TYPED_MESSAGE_KEYS:
        if key not in sanitized:
            raise MissingRequiredField(key)

    _validate_types(sanitized["types"])
    sanitized["types"] = {EIP712_DOMAIN_TYPE_NAME: [], **sanitized["types"]}
    return sanitized


def signable_bytes(typed_data: Mapping, use_v4: bool = True) -> bytes:
    r"""Construct the bytes that are hashed to produce the signing digest.

    The result is ``b'\x19\x01' || domain_separator || hash_struct(message)``. The message hash is left out
    when the primary type is the domain itself.
    """
    sanitized = sanitize_data(typed_data)
    types = sanitized["types"]
    parts = [TYPED_DATA_PREFIX, hash_struct(EIP712_DOMAIN_TYPE_NAME, sanitized["domain"], types, use_v4)]
    if sanitized["primaryType"] != EIP712_DOMAIN_TYPE_NAME:
        parts.append(hash_struct(sanitized["primaryType"], sanitized["message"], types, use_v4))
    return b"".join(parts)


def sign(typed_data: Mapping, use_v4: bool = True) -> bytes:
    """Hash a typed message as per EIP-712, returning the 32-byte digest to be signed.

    Args:
        typed_data (Mapping): The typed message.
        use_v4 (bool, optional): Use the V4 encoding rules. Defaults to True.

    Returns:
        bytes: keccak256 of ``signable_bytes(typed_data)``.
    """
    digest = keccak(signable_bytes(typed_data, use_v4))
    logger.debug("EIP-712 digest for %s: 0x%s", typed_data.get("primaryType"), digest.hex())
    return digest
