"""Shared typed messages for the test suite."""

import copy

import pytest

# allow redefining outer name for fixtures
# pylint: disable=redefined-outer-name

DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

# The "Ether Mail" example from EIP-712
MAIL = {
    "types": {
        "EIP712Domain": DOMAIN_TYPE,
        "Person": [
            {"name": "name", "type": "string"},
            {"name": "wallet", "type": "address"},
        ],
        "Mail": [
            {"name": "from", "type": "Person"},
            {"name": "to", "type": "Person"},
            {"name": "contents", "type": "string"},
        ],
    },
    "primaryType": "Mail",
    "domain": {
        "name": "Ether Mail",
        "version": "1",
        "chainId": 1,
        "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
    },
    "message": {
        "from": {"name": "Cow", "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"},
        "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
        "contents": "Hello, Bob!",
    },
}

# The same example using the V4 array extension
MAIL_WITH_ARRAYS = {
    "types": {
        "EIP712Domain": DOMAIN_TYPE,
        "Person": [
            {"name": "name", "type": "string"},
            {"name": "wallets", "type": "address[]"},
        ],
        "Mail": [
            {"name": "from", "type": "Person"},
            {"name": "to", "type": "Person[]"},
            {"name": "contents", "type": "string"},
        ],
    },
    "primaryType": "Mail",
    "domain": MAIL["domain"],
    "message": {
        "from": {
            "name": "Cow",
            "wallets": [
                "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826",
                "0xDeaDbeefdEAdbeefdEadbEEFdeadbeEFdEaDbeeF",
            ],
        },
        "to": [
            {
                "name": "Bob",
                "wallets": [
                    "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB",
                    "0xB0BdaBea57B0BDABeA57b0bdABEA57b0BDabEa57",
                    "0xB0B0b0b0b0b0B000000000000000000000000000",
                ],
            }
        ],
        "contents": "Hello, Bob!",
    },
}

DEMO = {
    "primaryType": "Demo",
    "domain": {
        "verifyingContract": "0xEEb4801FBc9781EEF20801853C1Cb25faB8A7a3b",
        "chainId": 1,
        "name": "Demo",
        "version": "4",
    },
    "types": {
        "EIP712Domain": DOMAIN_TYPE,
        "Demo": [{"name": "value", "type": "uint256"}],
    },
    "message": {"value": 1},
}


@pytest.fixture
def mail():
    """Provide a fresh copy of the EIP-712 Ether Mail example."""
    return copy.deepcopy(MAIL)


@pytest.fixture
def mail_with_arrays():
    """Provide a fresh copy of the Ether Mail example with array members."""
    return copy.deepcopy(MAIL_WITH_ARRAYS)


@pytest.fixture
def demo():
    """Provide a fresh copy of the single uint256 Demo message."""
    return copy.deepcopy(DEMO)
