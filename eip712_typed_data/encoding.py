"""EIP-712 type and data encoding.

Types are given as a plain table::

    {
        "Person": [{"name": "name", "type": "string"}, {"name": "wallet", "type": "address"}],
        "Mail": [{"name": "from", "type": "Person"}, {"name": "to", "type": "Person"}, ...],
    }

and data as nested mappings keyed by field name.
"""

import re
from collections.abc import Mapping
from typing import Any, List, NamedTuple

from eth_utils.crypto import keccak

import eip712_typed_data
from eip712_typed_data.conversions import to_bytes
from eip712_typed_data.exceptions import (
    InvalidFieldValue,
    InvalidInputKind,
    MissingFieldValue,
    RecursionDepthExceeded,
    UndefinedTypeReference,
    UnsupportedArrayEncoding,
)
from eip712_typed_data.types import Array, Bytes, EIP712Type, String, StructRef, encode_abi, from_solidity_type

ZERO_WORD = bytes(32)

_BYTES32 = Bytes(32)
_BASE_TYPE_PATTERN = re.compile(r"^\w*")


class EncodedField(NamedTuple):
    """One ABI-ready member of an encoded struct. Non-static values have already been hashed."""

    abi_type: EIP712Type
    value: Any


def find_type_dependencies(primary_type: str, types: Mapping, results: List[str] | None = None) -> List[str]:
    """Find every struct type reachable from ``primary_type``, in first-seen order.

    Array suffixes are ignored, so ``Person[]`` depends on ``Person``. Primitive types are never included.
    """
    if results is None:
        results = []
    primary_type = _BASE_TYPE_PATTERN.match(primary_type)[0]
    if primary_type in results or primary_type not in types:
        return results
    results.append(primary_type)
    for field in types[primary_type]:
        find_type_dependencies(field["type"], types, results)
    return results


def encode_type(primary_type: str, types: Mapping) -> str:
    """Get the encoded type signature of a struct.

    The primary type comes first, and referenced structs are appended in alphabetical order.
    """
    deps = [dep for dep in find_type_dependencies(primary_type, types) if dep != primary_type]
    result = ""
    for type_name in [primary_type] + sorted(deps):
        members = types.get(type_name)
        if members is None:
            raise UndefinedTypeReference(type_name)
        member_sigs = [f"{m['type']} {m['name']}" for m in members]
        result += f'{type_name}({",".join(member_sigs)})'
    return result


def hash_type(primary_type: str, types: Mapping) -> bytes:
    """Get the keccak hash of the struct's encoded type."""
    return keccak(text=encode_type(primary_type, types))


def encode_data(primary_type: str, data: Mapping, types: Mapping, use_v4: bool = True) -> bytes:
    """Encode a struct's data as ``type_hash || member_1 || member_2 ...``.

    Every member is one 32-byte word: dynamic values, nested structs and arrays are hashed first.

    Args:
        primary_type (str): The name of the struct type in ``types``.
        data (Mapping): The values of the struct, keyed by member name.
        types (Mapping): The type definition table.
        use_v4 (bool, optional): Use the V4 rules, which support arrays and treat missing nested structs as zero.
            Defaults to True.

    Returns:
        bytes: The ABI encoded struct.
    """
    return _encode_data(primary_type, data, types, use_v4, depth=0)


def hash_struct(primary_type: str, data: Mapping, types: Mapping, use_v4: bool = True) -> bytes:
    """Return the hash of the struct.

    hash_struct => keccak(type_hash || encode_data)
    """
    return keccak(encode_data(primary_type, data, types, use_v4))


def _check_depth(depth: int):
    if depth > eip712_typed_data.max_depth:
        raise RecursionDepthExceeded(eip712_typed_data.max_depth)


def _encode_data(primary_type: str, data: Mapping, types: Mapping, use_v4: bool, depth: int) -> bytes:
    _check_depth(depth)
    if not isinstance(data, Mapping):
        raise InvalidFieldValue(primary_type, data, "struct data must be a mapping")

    encoded = [EncodedField(_BYTES32, hash_type(primary_type, types))]
    for member in types[primary_type]:
        name, type_name = member["name"], member["type"]
        value = data.get(name)
        if use_v4:
            encoded.append(_encode_field(name, type_name, value, types, depth))
            continue

        # Legacy encoding skips members without a value
        if value is None:
            continue
        typ = _resolve(type_name, types)
        if isinstance(typ, Bytes) and typ.length == 0:
            encoded.append(EncodedField(_BYTES32, _hash_bytes(value)))
        elif isinstance(typ, String):
            encoded.append(EncodedField(_BYTES32, _hash_string(value)))
        elif isinstance(typ, StructRef):
            encoded.append(EncodedField(_BYTES32, keccak(_encode_data(type_name, value, types, use_v4, depth + 1))))
        elif isinstance(typ, Array):
            raise UnsupportedArrayEncoding(name, type_name)
        else:
            encoded.append(EncodedField(typ, value))

    return encode_abi([f.abi_type for f in encoded], [f.value for f in encoded])


def _encode_field(name: str, type_name: str, value, types: Mapping, depth: int) -> EncodedField:
    """Reduce a single V4 member to an ABI type and value."""
    typ = _resolve(type_name, types)

    if isinstance(typ, StructRef):
        if value is None:
            return EncodedField(_BYTES32, ZERO_WORD)
        return EncodedField(_BYTES32, keccak(_encode_data(type_name, value, types, True, depth + 1)))

    if value is None:
        raise MissingFieldValue(name, type_name)

    if isinstance(typ, Bytes) and typ.length == 0:
        return EncodedField(_BYTES32, _hash_bytes(value))

    if isinstance(typ, String):
        return EncodedField(_BYTES32, _hash_string(value))

    if isinstance(typ, Array):
        _check_depth(depth + 1)
        if not isinstance(value, (list, tuple)):
            raise InvalidFieldValue(type_name, value, "expected a list")
        member_type_name = typ.member_type.type_name
        items = [_encode_field(name, member_type_name, item, types, depth + 1) for item in value]
        return EncodedField(_BYTES32, keccak(encode_abi([i.abi_type for i in items], [i.value for i in items])))

    return EncodedField(typ, value)


def _resolve(type_name: str, types: Mapping) -> EIP712Type:
    typ = from_solidity_type(type_name, types)
    if typ is None:
        raise UndefinedTypeReference(type_name)
    return typ


def _hash_bytes(value) -> bytes:
    return keccak(to_bytes(value))


def _hash_string(value) -> bytes:
    # Strings are hashed as their text, so "0xabcd" is not mistaken for hex
    if isinstance(value, str):
        return keccak(text=value)
    try:
        return keccak(to_bytes(value))
    except InvalidInputKind as exc:
        raise InvalidFieldValue("string", value) from exc
