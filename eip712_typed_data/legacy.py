"""Typed signature hashes in the pre-EIP-712 array format.

A request is a list of ``{"name": ..., "type": ..., "value": ...}`` records, hashed as
``keccak(keccak(packed schema) || keccak(packed values))``.
"""

from collections.abc import Mapping, Sequence

from eth_utils.crypto import keccak

from eip712_typed_data.conversions import to_bytes
from eip712_typed_data.exceptions import MalformedLegacyRequest
from eip712_typed_data.types import encode_packed


def typed_signature_hash(typed_data: Mapping | Sequence[Mapping]) -> bytes:
    """Hash a legacy typed signature request.

    Args:
        typed_data (Mapping | Sequence[Mapping]): A single record, or a non-empty list of them.

    Raises:
        MalformedLegacyRequest: If there are no records, or a record has no name.
    """
    if isinstance(typed_data, Mapping):
        typed_data = [typed_data]
    if isinstance(typed_data, (str, bytes)) or not isinstance(typed_data, Sequence) or not typed_data:
        raise MalformedLegacyRequest()

    for record in typed_data:
        if (
            not isinstance(record, Mapping)
            or not record.get("name")
            or not isinstance(record.get("type"), str)
            or "value" not in record
        ):
            raise MalformedLegacyRequest()

    types = [record["type"] for record in typed_data]
    values = [to_bytes(record["value"]) if record["type"] == "bytes" else record["value"] for record in typed_data]
    schema = [f"{record['type']} {record['name']}" for record in typed_data]

    schema_hash = keccak(encode_packed(["string"] * len(schema), schema))
    data_hash = keccak(encode_packed(types, values))
    return keccak(schema_hash + data_hash)
