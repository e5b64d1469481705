"""EIP-712 typed messages as objects."""

import json
from collections.abc import Mapping
from json import JSONEncoder
from typing import Any, Dict, List, NamedTuple

from eth_utils.conversions import to_hex

from eip712_typed_data import encoding, signing
from eip712_typed_data.constants import EIP712_DOMAIN_TYPE_NAME


class BytesJSONEncoder(JSONEncoder):
    """Custom JSON encoder for bytes."""

    def default(self, o):
        """Encode bytes as hex strings."""
        return to_hex(o) if isinstance(o, (bytes, bytearray)) else super().default(o)


class TypedData(NamedTuple):
    """A sanitized typed message.

    Examples:
        typed = TypedData.from_message({"types": ..., "primaryType": "Mail", "domain": ..., "message": ...})
        digest = typed.hash()
    """

    types: Dict[str, List[Dict[str, str]]]
    primary_type: str
    domain: Dict[str, Any]
    message: Dict[str, Any]

    @classmethod
    def from_message(cls, message_dict: Mapping) -> "TypedData":
        """Build from a typed message dictionary, dropping keys that aren't part of EIP-712.

        Args:
            message_dict (Mapping): A dictionary with ``types``, ``primaryType``, ``domain`` and ``message``.

        Returns:
            TypedData: The sanitized typed message.
        """
        sanitized = signing.sanitize_data(message_dict)
        return cls(
            types=sanitized["types"],
            primary_type=sanitized["primaryType"],
            domain=sanitized["domain"],
            message=sanitized["message"],
        )

    @classmethod
    def from_json(cls, text: str) -> "TypedData":
        """Build from a JSON typed message, as sent to ``eth_signTypedData_v4``."""
        return cls.from_message(json.loads(text))

    def to_message(self) -> dict:
        """Convert into a dictionary suitable for messaging.

        Dictionary is of the form:
            {
                'primaryType': Name of the primary type,
                'types': Definition of each included struct type (including the domain type)
                'domain': Values for the domain struct,
                'message': Values for the message struct,
            }
        """
        return {
            "primaryType": self.primary_type,
            "types": self.types,
            "domain": self.domain,
            "message": self.message,
        }

    def to_message_json(self) -> str:
        """Convert into a JSON string suitable for messaging. Bytes values are written as hex."""
        return json.dumps(self.to_message(), cls=BytesJSONEncoder)

    def encode_type(self) -> str:
        """Get the encoded type signature of the primary type."""
        return encoding.encode_type(self.primary_type, self.types)

    def type_hash(self) -> bytes:
        """Get the keccak hash of the primary type's encoded type."""
        return encoding.hash_type(self.primary_type, self.types)

    def domain_separator(self, use_v4: bool = True) -> bytes:
        """Return the hash of the domain struct."""
        return encoding.hash_struct(EIP712_DOMAIN_TYPE_NAME, self.domain, self.types, use_v4)

    def hash_struct(self, use_v4: bool = True) -> bytes:
        """Return the hash of the message struct."""
        return encoding.hash_struct(self.primary_type, self.message, self.types, use_v4)

    def signable_bytes(self, use_v4: bool = True) -> bytes:
        r"""Construct a byte object suitable for signing based on the EIP712 spec.

        This method prefixes the byte string with `b'\x19\x01'` and appends hashes of the
        domain and structure, which are used to produce the final signable byte object.
        """
        return signing.signable_bytes(self.to_message(), use_v4)

    def hash(self, use_v4: bool = True) -> bytes:
        """Return the 32-byte EIP-712 digest."""
        return signing.sign(self.to_message(), use_v4)
