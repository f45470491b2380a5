"""
Bulletproofs Range-Proof Verification
=====================================

Verification of zero-knowledge range proofs: given a value hidden in a
commitment (or an ElGamal ciphertext), check a proof that the value lies in
[0, 2^n) for n ∈ {8, 16, 32, 64} without learning it.

The group arithmetic is provided by charm-crypto (the G1 group of a pairing
curve, BN254 by default); this package implements the Fiat-Shamir transcript,
proof decoding and the batched verification equation.

Modules:
--------
- groups: Group initialization, point/scalar wire encoding
- crs: Public generators (Pedersen bases, Bulletproof generator vectors)
- commit: Pedersen commitments, ElGamal ciphertexts, verification adapters
- proofs: RangeProof container and proof decoder
- fs_oracles: Fiat-Shamir transcript with domain separation
- verify: Verification algorithm and public entry points
- utils: Scalar-vector helpers and multi-exponentiation
- config / errors: Feature flag and error taxonomy

Usage:
------
    from range_proofs import (
        PedersenCommitment, range_proof_from_bytes, verify_range_proof_pedersen
    )

    commitment = PedersenCommitment.from_bytes(commitment_bytes)
    proof = range_proof_from_bytes(proof_bytes)
    ok = verify_range_proof_pedersen(commitment, proof, 64, b"my-app")
"""

__version__ = "0.1.0"
__author__ = "Range Proof Verification Implementation"

from .config import Config
from .errors import (
    RangeProofError, ConfigurationError, UnsupportedRangeError, DeserializationError
)
from .groups import setup
from .crs import pedersen_gens, bulletproof_gens
from .commit import PedersenCommitment, Ciphertext, elgamal_keygen
from .proofs import (
    RangeProof, SUPPORTED_BIT_LENGTHS, range_proof_from_bytes, range_proof_to_bytes,
    decode_proof, encode_proof, expected_proof_size
)
from .fs_oracles import Transcript
from .verify import (
    get_max_range_bits, verify_range_proof, verify_range_proof_pedersen,
    verify_range_proof_elgamal
)

__all__ = [
    'Config',
    'RangeProofError', 'ConfigurationError', 'UnsupportedRangeError', 'DeserializationError',
    'setup', 'pedersen_gens', 'bulletproof_gens',
    'PedersenCommitment', 'Ciphertext', 'elgamal_keygen',
    'RangeProof', 'SUPPORTED_BIT_LENGTHS', 'range_proof_from_bytes', 'range_proof_to_bytes',
    'decode_proof', 'encode_proof', 'expected_proof_size',
    'Transcript',
    'get_max_range_bits', 'verify_range_proof', 'verify_range_proof_pedersen',
    'verify_range_proof_elgamal',
]
