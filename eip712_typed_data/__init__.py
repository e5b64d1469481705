"""EIP-712 typed structured data hashing for python."""

# required before imports to avoid circular dependency
# pylint: disable=wrong-import-position
# pylint: disable=invalid-name
# Maximum nesting of struct and array values followed while encoding data
max_depth = 64

from eip712_typed_data.constants import EIP712_DOMAIN_TYPE_NAME, EIP712_DOMAIN_TYPE_PROPERTIES, TYPED_DATA_PREFIX
from eip712_typed_data.conversions import sha3, to_bytes
from eip712_typed_data.domain_separator import build_typed_data, make_domain
from eip712_typed_data.encoding import encode_data, encode_type, find_type_dependencies, hash_struct, hash_type
from eip712_typed_data.exceptions import (
    InvalidFieldValue,
    InvalidInputKind,
    MalformedLegacyRequest,
    MalformedTypeDefinition,
    MissingFieldValue,
    MissingRequiredField,
    RecursionDepthExceeded,
    TypedDataError,
    UndefinedTypeReference,
    UnsupportedArrayEncoding,
)
from eip712_typed_data.legacy import typed_signature_hash
from eip712_typed_data.signing import sanitize_data, sign, signable_bytes
from eip712_typed_data.typed_data import TypedData
from eip712_typed_data.types import encode_abi, encode_packed, from_solidity_type
