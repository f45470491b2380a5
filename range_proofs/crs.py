"""
Public Generators
=================

This module derives the public bases shared by provers and verifiers.

Two generator sets are needed:
- Pedersen bases (B, B_blinding): the default value base and blinding base of
  a Pedersen commitment V = B^v · B_blinding^γ
- Bulletproof generators (G_i, H_i) for i ∈ [0, 64): the vector bases used by
  the bit-commitments A, S and by the inner-product argument

Every base is obtained by hashing a fixed label into G1, so nobody knows a
discrete-log relation between any two of them and no trusted setup is
required. A range proof for n bits uses the prefixes G_0..G_{n-1} and
H_0..H_{n-1}, so one set of 64 generators serves all supported sizes.
"""

import functools

from charm.toolbox.pairinggroup import G1

from .groups import setup, encode_point

MAX_GENERATORS = 64

PEDERSEN_BASE_LABEL = b"range-proofs/pedersen/B"
PEDERSEN_BLINDING_LABEL = b"range-proofs/pedersen/B_blinding"
BULLETPROOF_G_LABEL = b"range-proofs/bulletproofs/G"
BULLETPROOF_H_LABEL = b"range-proofs/bulletproofs/H"


def pedersen_gens(group_name: str = None) -> dict:
    """
    Return the default Pedersen bases.

    Returns
    -------
    dict
        - 'B': value base (also the ElGamal basepoint)
        - 'B_blinding': blinding base, derived by hashing the encoding of B

    Examples
    --------
    >>> gens = pedersen_gens()
    >>> V = gens['B'] ** v * gens['B_blinding'] ** gamma
    """
    return _pedersen_gens(setup(group_name)['group_name'])


@functools.lru_cache(maxsize=None)
def _pedersen_gens(group_name: str) -> dict:
    params = setup(group_name)
    group = params['group']
    B = group.hash(PEDERSEN_BASE_LABEL, G1)
    B_blinding = group.hash(PEDERSEN_BLINDING_LABEL + encode_point(B, params), G1)
    return {'B': B, 'B_blinding': B_blinding}


def bulletproof_gens(group_name: str = None) -> dict:
    """
    Return the Bulletproof generator vectors.

    Returns
    -------
    dict
        - 'capacity': number of generators in each vector (64)
        - 'G_vec': tuple of G_i = H_G1(label_G || i)
        - 'H_vec': tuple of H_i = H_G1(label_H || i)

    Notes
    -----
    Index i is encoded as 4 big-endian bytes. The vectors are tuples so the
    cached value cannot be modified by a caller.
    """
    return _bulletproof_gens(setup(group_name)['group_name'])


@functools.lru_cache(maxsize=None)
def _bulletproof_gens(group_name: str) -> dict:
    group = setup(group_name)['group']
    G_vec = tuple(group.hash(BULLETPROOF_G_LABEL + i.to_bytes(4, 'big'), G1)
                  for i in range(MAX_GENERATORS))
    H_vec = tuple(group.hash(BULLETPROOF_H_LABEL + i.to_bytes(4, 'big'), G1)
                  for i in range(MAX_GENERATORS))
    return {
        'capacity': MAX_GENERATORS,
        'G_vec': G_vec,
        'H_vec': H_vec,
    }
