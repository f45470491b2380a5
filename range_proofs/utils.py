"""
Utility Functions
=================

Scalar-vector helpers and multi-exponentiation in G1.

According to charm-crypto documentation:
- Group operations use * for multiplication, ** for exponentiation
- group.init(G1, 1) is the identity element, group.init(ZR, k) the scalar k
- ZR arithmetic (+, -, *, /) is performed modulo the group order
"""

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1
from typing import List


def multiexp_g1(bases: List[G1], exponents: List[ZR], group: PairingGroup) -> G1:
    """
    Compute multi-exponentiation in G1: ∏ bases[i]^{exponents[i]}.

    This is the multi-scalar multiplication the verifier evaluates once per
    proof; written additively it is Σ exponents[i]·bases[i].

    Parameters
    ----------
    bases : List[G1]
        List of base elements in G1
    exponents : List[ZR]
        List of exponents in Z_p
    group : PairingGroup
        The pairing group

    Returns
    -------
    G1
        The product ∏ bases[i]^{exponents[i]}

    Notes
    -----
    - If bases is empty, returns the identity element 1_G
    - bases and exponents must have the same length
    - The product is always computed over every term; there is no early exit
    """
    if len(bases) != len(exponents):
        raise ValueError(f"bases and exponents must have same length: {len(bases)} != {len(exponents)}")

    result = group.init(G1, 1)
    for base, exp in zip(bases, exponents):
        result *= base ** exp

    return result


def powers(x: ZR, n: int, group: PairingGroup) -> List[ZR]:
    """Return [x^0, x^1, ..., x^{n-1}]."""
    result = []
    current = group.init(ZR, 1)
    for _ in range(n):
        result.append(current)
        current = current * x
    return result


def inner_product(a: List[ZR], b: List[ZR], group: PairingGroup) -> ZR:
    """Compute <a, b> = Σ a_i · b_i."""
    if len(a) != len(b):
        raise ValueError(f"Vectors must have same length: {len(a)} != {len(b)}")
    result = group.init(ZR, 0)
    for a_i, b_i in zip(a, b):
        result += a_i * b_i
    return result


def sum_of_powers(x: ZR, n: int, group: PairingGroup) -> ZR:
    """Compute Σ_{i=0}^{n-1} x^i."""
    result = group.init(ZR, 0)
    for p in powers(x, n, group):
        result += p
    return result


def log2_ceil(n: int) -> int:
    """Number of halving rounds needed to reduce a length-n vector to one element."""
    return (n - 1).bit_length()
