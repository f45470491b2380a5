"""
Range Proof Encoding
====================

This module defines the opaque RangeProof byte container and the decoder that
turns its bytes into the structured proof consumed by the verifier.

Byte Layout (P = point size, S = scalar size, k = ceil(log2 n)):
-----------------------------------------------------------------
    A || S || T1 || T2                      4·P
    t_x || t_x_blinding || e_blinding       3·S
    L_0 || R_0 || ... || L_{k-1} || R_{k-1}  2k·P
    a || b                                  2·S

The size depends only on n and the group, so a proof of any other length is
rejected before a single point is decompressed.
"""

from dataclasses import dataclass
from typing import Union

from .errors import DeserializationError, UnsupportedRangeError
from .groups import decode_point, decode_scalar, encode_point, encode_scalar
from .utils import log2_ceil

SUPPORTED_BIT_LENGTHS = (8, 16, 32, 64)


@dataclass(frozen=True)
class RangeProof:
    """Immutable wrapper around the serialized bytes of a range proof."""

    data: bytes

    def __len__(self):
        return len(self.data)


def range_proof_from_bytes(data: bytes) -> RangeProof:
    """Wrap bytes as a RangeProof; no validation is performed."""
    return RangeProof(bytes(data))


def range_proof_to_bytes(proof: RangeProof) -> bytes:
    return proof.data


def check_num_bits(num_bits: int):
    """Raise UnsupportedRangeError unless num_bits is an int in {8, 16, 32, 64}."""
    if type(num_bits) is not int or num_bits not in SUPPORTED_BIT_LENGTHS:
        raise UnsupportedRangeError(num_bits)


def expected_proof_size(num_bits: int, params: dict) -> int:
    """
    Byte length of a proof for num_bits in the group described by params.

    Formula:
    --------
    4·P + 3·S + 2·ceil(log2 n)·P + 2·S
    """
    check_num_bits(num_bits)
    P = params['point_size']
    S = params['scalar_size']
    return 4 * P + 3 * S + 2 * log2_ceil(num_bits) * P + 2 * S


def decode_proof(data: Union[bytes, RangeProof], num_bits: int, params: dict) -> dict:
    """
    Parse proof bytes into their structured form.

    Parameters
    ----------
    data : bytes or RangeProof
        The serialized proof
    num_bits : int
        The claimed bit length
    params : dict
        Group parameters from groups.setup()

    Returns
    -------
    dict
        - 'A', 'S', 'T1', 'T2': G1 points
        - 't_x', 't_x_blinding', 'e_blinding': ZR scalars
        - 'L', 'R': lists of ceil(log2 n) G1 points each
        - 'a', 'b': final inner-product scalars

    Raises
    ------
    UnsupportedRangeError
        If num_bits is not supported
    DeserializationError
        On a length mismatch or any invalid point or scalar encoding
    """
    if isinstance(data, RangeProof):
        data = data.data
    data = bytes(data)

    expected = expected_proof_size(num_bits, params)
    if len(data) != expected:
        raise DeserializationError(
            f"Proof for {num_bits} bits must be {expected} bytes, got {len(data)}")

    P = params['point_size']
    S = params['scalar_size']
    offset = 0

    def take_point():
        nonlocal offset
        point = decode_point(data[offset:offset + P], params)
        offset += P
        return point

    def take_scalar():
        nonlocal offset
        scalar = decode_scalar(data[offset:offset + S], params)
        offset += S
        return scalar

    proof = {}
    for name in ('A', 'S', 'T1', 'T2'):
        proof[name] = take_point()
    for name in ('t_x', 't_x_blinding', 'e_blinding'):
        proof[name] = take_scalar()

    proof['L'] = []
    proof['R'] = []
    for _ in range(log2_ceil(num_bits)):
        proof['L'].append(take_point())
        proof['R'].append(take_point())

    proof['a'] = take_scalar()
    proof['b'] = take_scalar()
    return proof


def encode_proof(proof: dict, params: dict) -> RangeProof:
    """
    Serialize a structured proof (the inverse of decode_proof).

    The keys are those returned by decode_proof(); L and R must have equal
    length.
    """
    if len(proof['L']) != len(proof['R']):
        raise ValueError(f"L and R must have same length: {len(proof['L'])} != {len(proof['R'])}")

    parts = [encode_point(proof[name], params) for name in ('A', 'S', 'T1', 'T2')]
    parts += [encode_scalar(proof[name], params) for name in ('t_x', 't_x_blinding', 'e_blinding')]
    for L, R in zip(proof['L'], proof['R']):
        parts.append(encode_point(L, params))
        parts.append(encode_point(R, params))
    parts.append(encode_scalar(proof['a'], params))
    parts.append(encode_scalar(proof['b'], params))
    return RangeProof(b"".join(parts))
