"""Exceptions raised by typedsig. All derive from ValueError."""

from __future__ import annotations


class TypedDataError(ValueError):
    """Base class for every error raised by typedsig."""


class InvalidTypeDefinition(TypedDataError):
    """A struct type definition is malformed."""


class DuplicateType(InvalidTypeDefinition):
    """A type name was registered twice."""


class UnknownFieldType(InvalidTypeDefinition):
    """A field refers to a type that is neither primitive nor registered."""


class RecursiveType(InvalidTypeDefinition):
    """Struct types reference each other without an array in between."""


class UnknownType(TypedDataError):
    """A type name is not present in the registry."""


class SchemaMismatch(TypedDataError):
    """A record is missing a declared field or carries an undeclared one."""


class ValueTypeMismatch(TypedDataError):
    """A value does not match the shape or range of its declared type."""


class InvalidSignatureLength(TypedDataError):
    """A packed signature is not exactly 65 bytes."""


class InvalidComponentLength(TypedDataError):
    """A signature component has the wrong size."""


class HexFormatError(TypedDataError):
    """A hex string is not exact lowercase/uppercase hex of even length."""


class SignerError(TypedDataError):
    """Error raised by the secp256k1 signer."""


class InvalidPrivateKey(SignerError):
    """Private key is not 32 bytes or outside [1, n-1]."""


class SigningError(SignerError):
    """Signing could not produce a signature."""


class RecoveryError(SignerError):
    """No public key can be recovered from (digest, signature)."""


__all__: tuple[str, ...] = (
    "DuplicateType",
    "HexFormatError",
    "InvalidComponentLength",
    "InvalidPrivateKey",
    "InvalidSignatureLength",
    "InvalidTypeDefinition",
    "RecoveryError",
    "RecursiveType",
    "SchemaMismatch",
    "SignerError",
    "SigningError",
    "TypedDataError",
    "UnknownFieldType",
    "UnknownType",
    "ValueTypeMismatch",
)
