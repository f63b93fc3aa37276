"""
secp256k1 signer used at the typed-data boundary: address derivation,
recoverable ECDSA signing (RFC 6979 nonces) and signer recovery.

Signatures are packed as r (32) || s (32) || v (1) with v = 27 + recovery id.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from ..errors import InvalidPrivateKey, RecoveryError, SigningError
from ..hashes import keccak256

logger = logging.getLogger(__name__)

_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)
_INFINITY = None

V_OFFSET = 27


def _add(p, q):
    """Affine point addition; None is the point at infinity."""
    if p is _INFINITY:
        return q
    if q is _INFINITY:
        return p
    (px, py), (qx, qy) = p, q
    if px == qx:
        if (py + qy) % _P == 0:
            return _INFINITY
        lam = 3 * px * px * pow(2 * py, -1, _P) % _P
    else:
        lam = (qy - py) * pow(qx - px, -1, _P) % _P
    rx = (lam * lam - px - qx) % _P
    return (rx, (lam * (px - rx) - py) % _P)


def _mul(k: int, point):
    """Double-and-add scalar multiplication."""
    acc = _INFINITY
    k %= _N
    while k:
        if k & 1:
            acc = _add(acc, point)
        point = _add(point, point)
        k >>= 1
    return acc


def _private_scalar(privkey: bytes) -> int:
    if not isinstance(privkey, (bytes, bytearray)) or len(privkey) != 32:
        raise InvalidPrivateKey("private key must be 32 bytes")
    d = int.from_bytes(privkey, "big")
    if not 0 < d < _N:
        raise InvalidPrivateKey("private key out of range [1, n-1]")
    return d


def _encode_point(point) -> bytes:
    x, y = point
    return b"\x04" + x.to_bytes(32, "big") + y.to_bytes(32, "big")


def _address_of(point) -> bytes:
    # keccak over X || Y, without the 0x04 marker.
    return keccak256(_encode_point(point)[1:])[12:]


def privkey_to_pubkey(privkey: bytes) -> bytes:
    """
    Uncompressed public key (65 bytes: 0x04 || x || y) of a 32-byte private key.

    Raises:
        InvalidPrivateKey: Wrong length or scalar outside [1, n-1].
    """
    return _encode_point(_mul(_private_scalar(privkey), _G))


def derive_address(privkey: bytes) -> bytes:
    """
    20-byte Ethereum address (last 20 bytes of keccak256(x || y)).

    Raises:
        InvalidPrivateKey: Wrong length or scalar outside [1, n-1].
    """
    return _address_of(_mul(_private_scalar(privkey), _G))


def _rfc6979_nonces(d: int, digest: bytes):
    """Deterministic nonce candidates per RFC 6979 section 3.2 (HMAC-SHA256)."""
    x = d.to_bytes(32, "big")
    h = (int.from_bytes(digest, "big") % _N).to_bytes(32, "big")
    v = b"\x01" * 32
    k = b"\x00" * 32
    k = hmac.new(k, v + b"\x00" + x + h, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    k = hmac.new(k, v + b"\x01" + x + h, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    while True:
        v = hmac.new(k, v, hashlib.sha256).digest()
        candidate = int.from_bytes(v, "big")
        if 0 < candidate < _N:
            yield candidate
        k = hmac.new(k, v + b"\x00", hashlib.sha256).digest()
        v = hmac.new(k, v, hashlib.sha256).digest()


def sign_digest(digest: bytes, privkey: bytes) -> bytes:
    """
    Recoverable ECDSA signature over a 32-byte digest.

    The digest is signed as-is (no further hashing); s is normalized to the
    lower half of the curve order.

    Args:
        digest: 32-byte message digest.
        privkey: 32-byte private key.

    Returns:
        65-byte packed signature r || s || v, v in {27, 28}.

    Raises:
        InvalidPrivateKey: Malformed private key.
        SigningError: Digest is not 32 bytes.
    """
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != 32:
        raise SigningError("digest must be 32 bytes")
    d = _private_scalar(privkey)
    z = int.from_bytes(digest, "big")
    for k in _rfc6979_nonces(d, digest):
        rx, ry = _mul(k, _G)
        r = rx % _N
        if r == 0:
            continue
        s = pow(k, -1, _N) * (z + r * d) % _N
        if s == 0:
            continue
        recid = (ry & 1) | (2 if rx >= _N else 0)
        if s > _N // 2:
            s = _N - s
            recid ^= 1
        logger.debug("Signed digest %s (recid=%d)", digest.hex(), recid)
        return r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([V_OFFSET + recid])


def _recover_point(digest: bytes, r: int, s: int, recid: int):
    if not (0 < r < _N and 0 < s < _N):
        raise RecoveryError("signature scalars out of range")
    x = r + _N if recid & 2 else r
    if x >= _P:
        raise RecoveryError("recovery id selects x beyond the field")
    alpha = (pow(x, 3, _P) + 7) % _P
    y = pow(alpha, (_P + 1) // 4, _P)
    if y * y % _P != alpha:
        raise RecoveryError("r is not the x coordinate of a curve point")
    if y & 1 != recid & 1:
        y = _P - y
    z = int.from_bytes(digest, "big") % _N
    r_inv = pow(r, -1, _N)
    q = _add(_mul(-z * r_inv % _N, _G), _mul(s * r_inv % _N, (x, y)))
    if q is _INFINITY:
        raise RecoveryError("recovered point at infinity")
    return q


def recover_pubkey(digest: bytes, signature: bytes) -> bytes:
    """Uncompressed public key that produced ``signature`` over ``digest``."""
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != 32:
        raise RecoveryError("digest must be 32 bytes")
    if not isinstance(signature, (bytes, bytearray)) or len(signature) != 65:
        raise RecoveryError("signature must be 65 bytes")
    v = signature[64]
    recid = v - V_OFFSET if v >= V_OFFSET else v
    if recid not in (0, 1, 2, 3):
        raise RecoveryError(f"unsupported recovery byte {v}")
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    return _encode_point(_recover_point(bytes(digest), r, s, recid))


def recover_address(digest: bytes, signature: bytes) -> bytes:
    """
    20-byte address of the key that signed ``digest``.

    Accepts v in {0, 1, 27, 28} (and the rare 2/3, 29/30 recovery ids).

    Raises:
        RecoveryError: Malformed signature or no valid point recovered.
    """
    address = keccak256(recover_pubkey(digest, signature)[1:])[12:]
    logger.debug("Recovered %s from digest %s", address.hex(), bytes(digest).hex())
    return address


__all__: tuple[str, ...] = (
    "derive_address",
    "privkey_to_pubkey",
    "recover_address",
    "recover_pubkey",
    "sign_digest",
)
