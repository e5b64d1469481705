"""EIP-712 typed data errors.

Every error derives from ValueError, so callers that only care about "bad input" may catch that.
"""

# allow classes without docstrings
# pylint: disable=missing-class-docstring


class TypedDataError(ValueError):
    """Base class for all typed data validation failures."""


class UndefinedTypeReference(TypedDataError):
    """A field or the primary type names a type that is not defined."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"No type definition specified: {type_name}")


class MissingFieldValue(TypedDataError):
    """A non-struct field has no value in the data."""

    def __init__(self, name: str, type_name: str):
        self.name = name
        self.type_name = type_name
        super().__init__(f"missing value for field {name} of type {type_name}")


class UnsupportedArrayEncoding(TypedDataError):
    """An array field was encountered outside of V4 encoding."""

    def __init__(self, name: str, type_name: str):
        self.name = name
        self.type_name = type_name
        super().__init__(f"Arrays are unimplemented in encode_data; use V4 extension ({type_name} {name})")


class InvalidInputKind(TypedDataError):
    """A value could not be coerced into bytes."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Cannot convert {type(value).__name__} to bytes: {value!r}")


class MissingRequiredField(TypedDataError):
    """One of the four top-level typed message keys is missing."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Typed data is missing required field "{key}"')


class MalformedLegacyRequest(TypedDataError):
    def __init__(self, message: str = "Expect argument to be non-empty array"):
        super().__init__(message)


class MalformedTypeDefinition(TypedDataError):
    """The types table is not a mapping of type names to lists of {name, type} members."""


class InvalidFieldValue(TypedDataError):
    """A value cannot be encoded as the given type."""

    def __init__(self, type_name: str, value, reason: str = ""):
        self.type_name = type_name
        self.value = value
        message = f"Cannot encode {value!r} as {type_name}"
        super().__init__(f"{message}: {reason}" if reason else message)


class RecursionDepthExceeded(TypedDataError):
    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Typed data is nested deeper than the maximum depth of {depth}")
