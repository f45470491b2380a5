"""
Commitment Generation and Adapters
==================================

This module implements the three commitment forms a range proof can be
checked against, and reduces each one to the canonical verification input

    (point, val_base, rand_base)   with   point = val_base^v · rand_base^r

- Pedersen commitment: C = B^v · B_blinding^γ under the default bases
- ElGamal ciphertext: (left, right) = (B^v · Y^r, B^r) under public key Y = B^sk;
  left is a Pedersen commitment to v with Y as the blinding base
- Generic commitment: any point together with its two bases

The verifier never learns which form the input came from.
"""

from charm.toolbox.pairinggroup import ZR, G1
from typing import Tuple

from .crs import pedersen_gens
from .errors import DeserializationError
from .groups import setup, encode_point, decode_point


def commit_pedersen(value: ZR, blinding: ZR, val_base: G1, rand_base: G1) -> G1:
    """
    Formula (Pedersen commitment):
    ------------------------------
    V := val_base^{v} · rand_base^{γ}
    """
    return (val_base ** value) * (rand_base ** blinding)


class PedersenCommitment:
    """Pedersen commitment under the default bases (B, B_blinding)."""

    def __init__(self, point: G1, group_name: str = None):
        self.point = point
        self.group_name = setup(group_name)['group_name']

    @classmethod
    def commit(cls, value: ZR, blinding: ZR, group_name: str = None) -> 'PedersenCommitment':
        gens = pedersen_gens(group_name)
        return cls(commit_pedersen(value, blinding, gens['B'], gens['B_blinding']), group_name)

    @classmethod
    def from_bytes(cls, data: bytes, group_name: str = None) -> 'PedersenCommitment':
        """Raises DeserializationError if data is not a valid compressed point."""
        return cls(decode_point(data, setup(group_name)), group_name)

    def to_bytes(self) -> bytes:
        return encode_point(self.point, setup(self.group_name))

    def verification_input(self) -> Tuple[G1, G1, G1]:
        gens = pedersen_gens(self.group_name)
        return self.point, gens['B'], gens['B_blinding']

    def __eq__(self, other):
        return isinstance(other, PedersenCommitment) and self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())


class Ciphertext:
    """
    Twisted ElGamal ciphertext (left, right).

    Notes
    -----
    Only `left` is consumed by range-proof verification; `right` completes
    the ciphertext so that the holder of sk can recover B^v = left / right^sk.
    """

    def __init__(self, left: G1, right: G1, group_name: str = None):
        self.left = left
        self.right = right
        self.group_name = setup(group_name)['group_name']

    @classmethod
    def encrypt(cls, value: ZR, randomness: ZR, pubkey: G1, group_name: str = None) -> 'Ciphertext':
        """
        Formula:
        --------
        left := B^{v} · Y^{r},  right := B^{r}
        """
        B = pedersen_gens(group_name)['B']
        return cls(commit_pedersen(value, randomness, B, pubkey), B ** randomness, group_name)

    @classmethod
    def from_bytes(cls, data: bytes, group_name: str = None) -> 'Ciphertext':
        params = setup(group_name)
        size = params['point_size']
        if len(data) != 2 * size:
            raise DeserializationError(f"Ciphertext encoding must be {2 * size} bytes, got {len(data)}")
        return cls(decode_point(data[:size], params), decode_point(data[size:], params), group_name)

    def to_bytes(self) -> bytes:
        params = setup(self.group_name)
        return encode_point(self.left, params) + encode_point(self.right, params)

    def decrypt_to_point(self, secret_key: ZR) -> G1:
        """Recover B^v; the scalar v itself is not recovered."""
        return self.left / (self.right ** secret_key)

    def verification_input(self, pubkey: G1) -> Tuple[G1, G1, G1]:
        return self.left, pedersen_gens(self.group_name)['B'], pubkey


def elgamal_keygen(group_name: str = None) -> Tuple[ZR, G1]:
    """Return (sk, Y = B^sk) for a fresh random secret key."""
    group = setup(group_name)['group']
    sk = group.random(ZR)
    return sk, pedersen_gens(group_name)['B'] ** sk


def generic_verification_input(point: G1, val_base: G1, rand_base: G1) -> Tuple[G1, G1, G1]:
    return point, val_base, rand_base
