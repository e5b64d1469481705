"""EIP-712 Types.

Field type strings are parsed once into one of the classes below. Static types know how to
encode a value into a single 32-byte ABI word, and into Solidity's tight packing.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from eth_utils.address import is_address
from eth_utils.conversions import to_bytes, to_int
from eth_utils.hexadecimal import is_0x_prefixed, is_hexstr

from eip712_typed_data.exceptions import InvalidFieldValue, UndefinedTypeReference

# allow magic value comparison
# ruff: noqa: PLR2004


class EIP712Type:
    """The base type for members of a struct.

    Generally you wouldn't use this directly - see the subclasses below, or ``from_solidity_type``.
    """

    type_name = None

    def __init__(self, type_name: str):
        """Initialize the type."""
        self.type_name = type_name

    def encode_value(self, value) -> bytes:
        """Given a value, verify it and convert it into a 32-byte ABI word.

        Args:
            value (Any): A correct input value for the implemented type.

        Returns:
            bytes: A 32-byte object containing encoded data
        """
        raise InvalidFieldValue(self.type_name, value, "not a static ABI type")

    def encode_packed(self, value) -> bytes:
        """Encode a value using Solidity's non-standard tight packing."""
        raise InvalidFieldValue(self.type_name, value, "cannot be packed")

    def __eq__(self, other):
        """Equality is determined by type equality."""
        self_type = getattr(self, "type_name")
        other_type = getattr(other, "type_name", None)

        return self_type is not None and self_type == other_type

    def __hash__(self):
        """Hash is determined by the type name."""
        return hash(self.type_name)

    def __repr__(self):
        """Show the solidity type name."""
        return f"{self.__class__.__name__}({self.type_name!r})"


class StructRef(EIP712Type):
    """Reference to a struct defined in the type table."""


class Array(EIP712Type):
    """Represent an array member type.

    This class can represent both fixed and dynamic arrays of a specific member type.

    Args:
        member_type (EIP712Type): The type of the array members. This can be any subclass of EIP712Type.
        fixed_length (int, optional): The number of elements in the array if it is a fixed-length array.
            Defaults to 0, which represents a dynamic array.

    Examples:
        a1 = Array(String())          # string[] a1
        a2 = Array(String(), 8)       # string[8] a2
        a3 = Array(StructRef("Foo"))  # Foo[] a3
    """

    def __init__(self, member_type: EIP712Type, fixed_length: int = 0):
        """Initialize an instance of the Array class representing an array member type."""
        fixed_length = assert_int(fixed_length)
        if fixed_length == 0:
            type_name = f"{member_type.type_name}[]"
        else:
            type_name = f"{member_type.type_name}[{fixed_length}]"
        self.member_type = member_type
        self.fixed_length = fixed_length
        super().__init__(type_name)

    def encode_packed(self, value):
        """Array members are padded to full words when packed."""
        if not isinstance(value, (list, tuple)):
            raise InvalidFieldValue(self.type_name, value, "expected a list")
        return b"".join(self.member_type.encode_value(v) for v in value)


class Address(EIP712Type):
    """Represent an address type."""

    def __init__(self):
        """Initialize an address type."""
        super().__init__("address")

    def _to_int(self, value) -> int:
        # Some smart conversions - need to get the address to a numeric before we encode it
        if isinstance(value, bytes):
            if len(value) != 20:
                raise InvalidFieldValue(self.type_name, value, "expected 20 bytes")
            return to_int(value)
        if isinstance(value, str):
            if not is_address(value):
                raise InvalidFieldValue(self.type_name, value, "not a valid address")
            return to_int(hexstr=value)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise InvalidFieldValue(self.type_name, value)

    def encode_value(self, value):
        """Encode addresses like Uint160 numbers."""
        return Uint(160).encode_value(self._to_int(value))

    def encode_packed(self, value):
        """Addresses pack to their 20 raw bytes."""
        return Uint(160).encode_packed(self._to_int(value))


class Boolean(EIP712Type):
    """Represent a bool type."""

    def __init__(self):
        """Initialize a bool type."""
        super().__init__("bool")

    def _to_int(self, value) -> int:
        if value is False:
            return 0
        if value is True:
            return 1
        raise InvalidFieldValue(self.type_name, value, "must be True or False")

    def encode_value(self, value):
        """Booleans are encoded like the uint256 values of 0 and 1."""
        return Uint(256).encode_value(self._to_int(value))

    def encode_packed(self, value):
        """Booleans pack to a single byte."""
        return Uint(8).encode_packed(self._to_int(value))


class Bytes(EIP712Type):
    """Represent a solidity bytes type.

    Length may be used to specify a static bytesN type. Or 0 for a dynamic bytes type.
    Length MUST be between 0 and 32, or a ValueError is raised.

    Examples:
        b1 = Bytes()    # bytes b1
        b2 = Bytes(10)  # bytes10 b2
    """

    def __init__(self, length: int = 0):
        """Initialize a bytes type."""
        length = assert_int(length)
        if length == 0:
            # Special case: Length of 0 means a dynamic bytes type
            type_name = "bytes"
        elif 1 <= length <= 32:
            type_name = f"bytes{length}"
        else:
            raise ValueError(f"Byte length must be between 1 or 32. Got: {length}")
        self.length = length
        super().__init__(type_name)

    def _to_bytes(self, value) -> bytes:
        if isinstance(value, str):
            if not is_hexstr(value):
                raise InvalidFieldValue(self.type_name, value, "expected a hex string")
            return to_bytes(hexstr=value)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, (list, tuple)):
            try:
                return bytes(value)
            except (TypeError, ValueError) as exc:
                raise InvalidFieldValue(self.type_name, value) from exc
        raise InvalidFieldValue(self.type_name, value)

    def encode_value(self, value):
        """Encode static bytesN types by right-padding to 32 bytes."""
        if self.length == 0:
            # dynamic bytes are always hashed before they reach the ABI encoder
            return super().encode_value(value)
        value = self._to_bytes(value)
        if len(value) > self.length:
            raise InvalidFieldValue(self.type_name, value, f"given bytes with length {len(value)}")
        return value + bytes(32 - len(value))

    def encode_packed(self, value):
        """Packed bytes are the raw bytes; bytesN must have exactly N of them."""
        value = self._to_bytes(value)
        if self.length and len(value) != self.length:
            raise InvalidFieldValue(self.type_name, value, f"given bytes with length {len(value)}")
        return value


class Int(EIP712Type):
    """Represent a signed int type.

    Length may be given to specify the int length in bits. Default length is 256.

    Examples:
        i1 = Int(256)  # int256 i1
        i2 = Int()     # int256 i2
        i3 = Int(128)  # int128 i3
    """

    signed = True
    type_prefix = "int"

    def __init__(self, length: int = 256):
        """Initialize an int type."""
        length = assert_int(length)
        if length < 8 or length > 256 or length % 8 != 0:
            raise ValueError(f"{self.type_prefix} length must be a multiple of 8, between 8 and 256. Got: {length}")
        self.length = length
        super().__init__(f"{self.type_prefix}{length}")

    def _to_int(self, value) -> int:
        if isinstance(value, bool):
            raise InvalidFieldValue(self.type_name, value, "expected an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if is_0x_prefixed(value):
                    return to_int(hexstr=value)
                return int(value, 10)
            except ValueError as exc:
                raise InvalidFieldValue(self.type_name, value) from exc
        raise InvalidFieldValue(self.type_name, value, "expected an integer")

    def encode_packed(self, value):
        """Packed ints take exactly length // 8 bytes."""
        value = self._to_int(value)
        try:
            return value.to_bytes(self.length // 8, byteorder="big", signed=self.signed)
        except OverflowError as exc:
            raise InvalidFieldValue(self.type_name, value, "out of range") from exc

    def encode_value(self, value):
        """Ints are encoded by padding them to 256-bit representations."""
        value = self._to_int(value)
        self.encode_packed(value)  # For validation
        return value.to_bytes(32, byteorder="big", signed=self.signed)


class String(EIP712Type):
    """Represent a string type."""

    def __init__(self):
        """Initialize a string type."""
        super().__init__("string")

    def encode_packed(self, value):
        """Strings pack to their UTF-8 bytes."""
        if not isinstance(value, str):
            raise InvalidFieldValue(self.type_name, value, "expected a str")
        return value.encode("utf-8")


class Uint(Int):
    """Represent an unsigned int type.

    Length may be given to specify the int length in bits. Default length is 256.

    Examples:
        ui1 = Uint(256)  # uint256 ui1
        ui2 = Uint()     # uint256 ui2
        ui3 = Uint(128)  # uint128 ui3
    """

    signed = False
    type_prefix = "uint"


def assert_int(value) -> int:
    """Convert to int, raising an error if unable."""
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Expected an int, got {value}") from exc


# This helper dict maps solidity's type names to our EIP712Type classes
solidity_type_map = {
    "address": Address,
    "bool": Boolean,
    "bytes": Bytes,
    "int": Int,
    "string": String,
    "uint": Uint,
}

_PRIMITIVE_PATTERN = re.compile(r"([a-z]+)(\d+)?")
_ARRAY_PATTERN = re.compile(r"(.+)\[(\d*)\]")


def from_solidity_type(solidity_type: str, types: Mapping | None = None) -> EIP712Type | None:
    """Convert a type string into the EIP712Type implementation.

    A name defined in ``types`` is a struct reference. Otherwise a trailing bracket group makes an
    array of whatever precedes it, so ``uint8[][2]`` is a fixed array of dynamic uint8 arrays.
    Returns None for anything else that isn't a basic solidity type.
    """
    if types is not None and solidity_type in types:
        return StructRef(solidity_type)

    match = _ARRAY_PATTERN.fullmatch(solidity_type)
    if match is not None:
        member_type = from_solidity_type(match[1], types)
        if member_type is None:
            return None
        return Array(member_type, int(match[2] or 0))

    match = _PRIMITIVE_PATTERN.fullmatch(solidity_type)
    if match is None:
        return None

    # type_name     # The type name, like the "bytes" in "bytes32"
    # opt_len       # An optional length spec, like the "32" in "bytes32"
    type_name, opt_len = match.groups()

    if type_name not in solidity_type_map:
        # Only supporting basic types here - return None if we don't recognize it.
        return None

    base_type = solidity_type_map[type_name]
    try:
        if opt_len is None:
            return base_type()
        if base_type in (Address, Boolean, String) or int(opt_len) == 0:
            return None
        return base_type(int(opt_len))
    except ValueError:
        return None


def _parse_abi_type(abi_type: EIP712Type | str) -> EIP712Type:
    if isinstance(abi_type, EIP712Type):
        return abi_type
    parsed = from_solidity_type(abi_type)
    if parsed is None:
        raise UndefinedTypeReference(abi_type)
    return parsed


def encode_abi(abi_types: Sequence[EIP712Type | str], values: Sequence[Any]) -> bytes:
    """Encode a tuple of static values into concatenated 32-byte ABI words."""
    if len(abi_types) != len(values):
        raise ValueError(f"Got {len(values)} values for {len(abi_types)} types")
    return b"".join(_parse_abi_type(t).encode_value(v) for t, v in zip(abi_types, values))


def encode_packed(abi_types: Sequence[EIP712Type | str], values: Sequence[Any]) -> bytes:
    """Encode a tuple of values with Solidity's tight packing, as in ``abi.encodePacked``."""
    if len(abi_types) != len(values):
        raise ValueError(f"Got {len(values)} values for {len(abi_types)} types")
    return b"".join(_parse_abi_type(t).encode_packed(v) for t, v in zip(abi_types, values))
