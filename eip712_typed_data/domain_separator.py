"""EIP-712 Domain Separator."""

from collections.abc import Mapping, Sequence

from eip712_typed_data.constants import (
    EIP712_DOMAIN_DEFAULT_VERSION,
    EIP712_DOMAIN_TYPE_NAME,
    EIP712_DOMAIN_TYPE_PROPERTIES,
    ZERO_ADDRESS,
    ZERO_HASH,
)

# allow camelCase
# ruff: noqa: N803
# pylint: disable=invalid-name

DOMAIN_DEFAULTS = {
    "chainId": 1,
    "version": EIP712_DOMAIN_DEFAULT_VERSION,
    "verifyingContract": ZERO_ADDRESS,
    "salt": ZERO_HASH,
}


def make_domain(name=None, version=None, chainId=None, verifyingContract=None, salt=None) -> dict:
    """Create the values of the standard EIP712Domain struct.

    Anything not given falls back to chain 1, version "4", the zero address and a zero salt.
    ``name`` has no default.
    """
    if all(i is None for i in [name, version, chainId, verifyingContract, salt]):
        raise ValueError("At least one argument must be given.")

    domain = dict(DOMAIN_DEFAULTS)
    if name is not None:
        domain["name"] = str(name)
    if version is not None:
        domain["version"] = str(version)
    if chainId is not None:
        domain["chainId"] = int(chainId)
    if verifyingContract is not None:
        domain["verifyingContract"] = verifyingContract
    if salt is not None:
        domain["salt"] = salt
    return domain


def build_typed_data(domain: Mapping, primary_type: str, types: Mapping | Sequence, message: Mapping) -> dict:
    """Assemble a complete typed message around the standard domain.

    Args:
        domain (Mapping): Domain values. Missing values get the ``DOMAIN_DEFAULTS``.
        primary_type (str): The name of the message struct.
        types (Mapping | Sequence): Either a full type table, or just the members of ``primary_type``.
        message (Mapping): The message values.

    Returns:
        dict: A typed message with the ``EIP712Domain`` type definition included.
    """
    if isinstance(types, Mapping):
        struct_types = dict(types)
    else:
        struct_types = {primary_type: list(types)}
    return {
        "primaryType": primary_type,
        "domain": {**DOMAIN_DEFAULTS, **domain},
        "types": {EIP712_DOMAIN_TYPE_NAME: [dict(p) for p in EIP712_DOMAIN_TYPE_PROPERTIES], **struct_types},
        "message": message,
    }
