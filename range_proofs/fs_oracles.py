"""
Fiat-Shamir Transcript
======================

This module implements the transcript from which every verifier challenge of
the range proof is derived, making the interactive protocol non-interactive.

Construction:
-------------
The transcript keeps a 32-byte SHA-256 state. Absorbing a labelled message
replaces the state with

    state := SHA256(state || len(label) || label || len(msg) || msg)

with lengths as 4-byte big-endian integers. A challenge is

    digest := SHA512(state || "challenge" || len(label) || label)
    c      := int(digest) mod p

after which the digest is absorbed back into the state, so successive
challenges under the same label differ. The 512-bit digest makes the
reduction modulo the ~254-bit order statistically uniform.

Domain Separation:
------------------
- The transcript is created with the caller's domain-separation tag (dst)
- range_proof_domain_sep() binds the bit length n and party count m
- inner_product_domain_sep() binds the inner-product vector length

Challenge Order (prover and verifier must agree):
-------------------------------------------------
    V                      (commitment)
    A, S          -> y, z
    T1, T2        -> x
    t_x, t_x_blinding, e_blinding -> w
    [ipp] for each round: L_j, R_j -> u_j
    batching weight c      (verifier only)
"""

import hashlib

from charm.toolbox.pairinggroup import ZR, G1

from .groups import encode_point, encode_scalar

_INITIAL_STATE = hashlib.sha256(b"range-proofs transcript v1").digest()


def _length_prefixed(data: bytes) -> bytes:
    return len(data).to_bytes(4, 'big') + data


class Transcript:
    """
    Append-only challenge-derivation context for a single proof.

    A Transcript lives only for one proving or verification call and is never
    shared between calls.
    """

    def __init__(self, dst, params: dict):
        """
        Parameters
        ----------
        dst : bytes or str
            Domain-separation tag; a str is UTF-8 encoded
        params : dict
            Group parameters from groups.setup()
        """
        if isinstance(dst, str):
            dst = dst.encode('utf-8')
        self.params = params
        self._state = _INITIAL_STATE
        self.append_message(b"dom-sep", bytes(dst))

    def append_message(self, label: bytes, message: bytes):
        h = hashlib.sha256()
        h.update(self._state)
        h.update(_length_prefixed(label))
        h.update(_length_prefixed(message))
        self._state = h.digest()

    def append_u64(self, label: bytes, value: int):
        self.append_message(label, value.to_bytes(8, 'big'))

    def append_point(self, label: bytes, point: G1):
        self.append_message(label, encode_point(point, self.params))

    def append_scalar(self, label: bytes, scalar: ZR):
        self.append_message(label, encode_scalar(scalar, self.params))

    def challenge_scalar(self, label: bytes) -> ZR:
        """
        Derive the next challenge scalar.

        Returns
        -------
        ZR
            SHA-512 of the current state and label, reduced modulo the order
        """
        digest = hashlib.sha512(self._state + b"challenge" + _length_prefixed(label)).digest()
        self.append_message(b"challenge-output", digest)
        value = int.from_bytes(digest, 'big') % self.params['order']
        return self.params['group'].init(ZR, value)

    def range_proof_domain_sep(self, n: int, m: int = 1):
        self.append_message(b"dom-sep", b"rangeproof v1")
        self.append_u64(b"n", n)
        self.append_u64(b"m", m)

    def inner_product_domain_sep(self, n: int):
        self.append_message(b"dom-sep", b"ipp v1")
        self.append_u64(b"n", n)
