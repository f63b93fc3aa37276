"""Keccak-256 against published vectors."""

from typedsig import keccak256
from typedsig.hashes import Keccak256

KECCAK256_EMPTY = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)
KECCAK256_HELLO = bytes.fromhex(
    "1c8aff950685c2ed4bc3174f3472287b56d9517b9c948127319a09a7a36deac8"
)
KECCAK256_COW = bytes.fromhex(
    "c85ef7d79691fe79573b1a7064c19c1a9819ebdbd1faaab1a8ec92344438aaf4"
)


def test_keccak256_empty() -> None:
    assert keccak256(b"") == KECCAK256_EMPTY


def test_keccak256_known_inputs() -> None:
    assert keccak256(b"hello") == KECCAK256_HELLO
    assert keccak256(b"cow") == KECCAK256_COW


def test_keccak256_eip712_domain_typehash() -> None:
    assert keccak256(
        b"EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
    ).hex() == "8b73c3c69bb8fe3d512ecc4cf759cc79239f7b179b0ffacaa9a75d522b39400f"


def test_keccak256_output_length() -> None:
    assert len(keccak256(b"x" * 135)) == 32
    assert len(keccak256(b"x" * 136)) == 32
    assert len(keccak256(b"x" * 1000)) == 32


def test_keccak256_block_boundaries_differ() -> None:
    digests = {keccak256(b"\x00" * n) for n in (134, 135, 136, 137, 272)}
    assert len(digests) == 5


def test_incremental_matches_one_shot() -> None:
    data = bytes(range(256)) * 3
    hasher = Keccak256()
    for off in range(0, len(data), 50):
        hasher.update(data[off : off + 50])
    assert hasher.digest() == keccak256(data)
    # digest() does not finalize the hasher
    assert hasher.digest() == keccak256(data)
    assert hasher.update(b"more").hexdigest() == keccak256(data + b"more").hex()


def test_accepts_bytearray() -> None:
    assert keccak256(bytearray(b"hello")) == KECCAK256_HELLO
