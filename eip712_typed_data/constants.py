"""Constants shared by the sanitizer, the domain builder and the hashers."""

EIP712_DOMAIN_TYPE_NAME = "EIP712Domain"

EIP712_DOMAIN_TYPE_PROPERTIES = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
    {"name": "salt", "type": "bytes32"},
]

EIP712_DOMAIN_DEFAULT_VERSION = "4"

ZERO_ADDRESS = "0x" + "00" * 20
ZERO_HASH = "0x" + "00" * 32

TYPED_DATA_PREFIX = b"\x19\x01"

TYPED_MESSAGE_KEYS = ("types", "primaryType", "domain", "message")
