"""Signature codec: split / join / v normalization."""

import pytest

from typedsig import (InvalidComponentLength, InvalidSignatureLength,
                      Signature, join_signature, normalize_v, recovery_id,
                      split_signature)

R = bytes(range(32))
S = bytes(range(32, 64))


def test_split_layout() -> None:
    sig = R + S + b"\x1c"
    r, s, v = split_signature(sig)
    assert (r, s, v) == (R, S, 28)


def test_split_keeps_raw_v() -> None:
    assert split_signature(R + S + b"\x00").v == 0
    assert split_signature(R + S + b"\x01").v == 1


@pytest.mark.parametrize("length", [0, 64, 66, 130])
def test_split_wrong_length(length: int) -> None:
    with pytest.raises(InvalidSignatureLength):
        split_signature(b"\x01" * length)


@pytest.mark.parametrize("v", [0, 1, 27, 28, 255])
def test_round_trip(v: int) -> None:
    assert split_signature(join_signature(R, S, v)) == (R, S, v)


@pytest.mark.parametrize("size", [31, 33])
def test_join_bad_r(size: int) -> None:
    with pytest.raises(InvalidComponentLength):
        join_signature(b"\x01" * size, S, 27)


@pytest.mark.parametrize("size", [31, 33])
def test_join_bad_s(size: int) -> None:
    with pytest.raises(InvalidComponentLength):
        join_signature(R, b"\x01" * size, 27)


@pytest.mark.parametrize("v", [-1, 256, True])
def test_join_bad_v(v) -> None:
    with pytest.raises(InvalidComponentLength):
        join_signature(R, S, v)


def test_signature_tuple_helpers() -> None:
    sig = Signature(R, S, 27)
    assert sig.to_bytes() == R + S + b"\x1b"
    assert sig.hex() == "0x" + (R + S).hex() + "1b"


def test_normalize_v() -> None:
    assert normalize_v(0) == 27
    assert normalize_v(1) == 28
    assert normalize_v(27) == 27
    assert recovery_id(28) == 1
    assert recovery_id(0) == 0
    with pytest.raises(InvalidComponentLength):
        normalize_v(2)


def test_split_rejects_non_bytes() -> None:
    with pytest.raises(InvalidSignatureLength):
        split_signature("x" * 65)  # type: ignore[arg-type]


def test_join_rejects_non_bytes() -> None:
    with pytest.raises(InvalidComponentLength):
        join_signature("x" * 32, S, 27)  # type: ignore[arg-type]
    with pytest.raises(InvalidComponentLength):
        join_signature(R, "x" * 32, 27)  # type: ignore[arg-type]
