"""
Range Proof Verification
========================

This module implements Bulletproofs range-proof verification for a single
commitment and the three public entry points (Pedersen, ElGamal, generic).

The verifier folds both equations the prover must satisfy into ONE
multi-exponentiation that must equal the identity:

(a) the polynomial-commitment opening of t(x):

    B^{t_x} · B_blinding^{t_x_blinding} = V^{z²} · B^{δ(y,z)} · T1^{x} · T2^{x²}

(b) the inner-product argument for <l(x), r(x)> = t_x with Q = B^{w}:

    A · S^{x} · ∏ G_i^{-z} · ∏ H'_i^{z·y^i + z²·2^i} · B_blinding^{-e_blinding} · Q^{t_x}
        · ∏ L_j^{u_j²} · ∏ R_j^{u_j⁻²}
    = ∏ G_i^{a·s_i} · ∏ H'_i^{b·s_{n-1-i}} · Q^{a·b}

where H'_i = H_i^{y^{-i}}. Equation (a) is weighted by a transcript challenge
c, then divided through into (b). Every term is evaluated whether or not an
earlier term already disagrees.

Decoding failures are reported as False, while contract misuse (disabled
feature, unsupported bit length) raises before any group operation.
"""

import logging

from charm.toolbox.pairinggroup import ZR, G1
from typing import List, Tuple, Union

from .commit import Ciphertext, PedersenCommitment, generic_verification_input
from .config import Config
from .crs import bulletproof_gens
from .errors import ConfigurationError, DeserializationError
from .fs_oracles import Transcript
from .groups import setup, decode_point, is_identity
from .proofs import RangeProof, check_num_bits, decode_proof
from .utils import multiexp_g1, powers, sum_of_powers, log2_ceil

logger = logging.getLogger(__name__)

MAX_RANGE_BITS = 64


def get_max_range_bits() -> int:
    """Largest supported range-proof bit length."""
    return MAX_RANGE_BITS


def check_preconditions(num_bits: int, config: Config = None) -> Config:
    """
    Enforce the call-boundary contract before any cryptographic work.

    Raises
    ------
    ConfigurationError
        If range-proof verification is disabled by the configuration
    UnsupportedRangeError
        If num_bits is not in {8, 16, 32, 64}
    """
    if config is None:
        config = Config()
    if not config.bulletproofs_enabled:
        raise ConfigurationError("Bulletproofs range-proof verification is disabled")
    check_num_bits(num_bits)
    return config


def ipp_verification_scalars(L: List[G1], R: List[G1], n: int,
                             transcript: Transcript, group) -> Tuple[List[ZR], List[ZR], List[ZR]]:
    """
    Replay the inner-product rounds and compute the folding scalars.

    Parameters
    ----------
    L, R : List[G1]
        Round commitments in creation order
    n : int
        Length of the folded vectors (a power of two)
    transcript : Transcript
        The range-proof transcript, positioned right after w
    group : PairingGroup
        The pairing group

    Returns
    -------
    Tuple[List[ZR], List[ZR], List[ZR]]
        (u², u⁻², s) where s_i = ∏_j u_j^{±1}, the sign of u_j being + iff
        bit (k-1-j) of i is set (k rounds, round 0 folds the top bit).

    Notes
    -----
    s is built incrementally: s_0 = ∏ u_j⁻¹ and s_i = s_{i-2^m} · u_{k-1-m}²
    where m = floor(log2 i). The H side uses s reversed, since the prover
    folds H with the inverse challenges.
    """
    lg_n = len(L)
    if lg_n != len(R) or lg_n != log2_ceil(n):
        raise ValueError(f"Inner-product argument for n={n} needs {log2_ceil(n)} rounds, got {lg_n}")

    one = group.init(ZR, 1)
    transcript.inner_product_domain_sep(n)

    challenges = []
    for L_j, R_j in zip(L, R):
        transcript.append_point(b"L", L_j)
        transcript.append_point(b"R", R_j)
        challenges.append(transcript.challenge_scalar(b"u"))

    challenges_inv = [one / u for u in challenges]
    all_inv = one
    for u_inv in challenges_inv:
        all_inv *= u_inv

    challenges_sq = [u * u for u in challenges]
    challenges_inv_sq = [u_inv * u_inv for u_inv in challenges_inv]

    s = [all_inv]
    for i in range(1, n):
        lg_i = i.bit_length() - 1
        k = 1 << lg_i
        s.append(s[i - k] * challenges_sq[(lg_n - 1) - lg_i])

    return challenges_sq, challenges_inv_sq, s


def verify_decoded(V: G1, B: G1, B_blinding: G1, proof: dict, n: int, dst, params: dict) -> bool:
    """
    Check a decoded proof against commitment V = B^v · B_blinding^γ.

    Parameters
    ----------
    V : G1
        The commitment point
    B, B_blinding : G1
        Value base and randomness base of V
    proof : dict
        Output of proofs.decode_proof()
    n : int
        Bit length
    dst : bytes or str
        Domain-separation tag
    params : dict
        Group parameters from groups.setup()

    Returns
    -------
    bool
        True iff the combined multi-exponentiation is the identity
    """
    group = params['group']
    gens = bulletproof_gens(params['group_name'])
    G = list(gens['G_vec'][:n])
    H = list(gens['H_vec'][:n])

    transcript = Transcript(dst, params)
    transcript.range_proof_domain_sep(n, 1)
    transcript.append_point(b"V", V)

    transcript.append_point(b"A", proof['A'])
    transcript.append_point(b"S", proof['S'])
    y = transcript.challenge_scalar(b"y")
    z = transcript.challenge_scalar(b"z")

    transcript.append_point(b"T_1", proof['T1'])
    transcript.append_point(b"T_2", proof['T2'])
    x = transcript.challenge_scalar(b"x")

    transcript.append_scalar(b"t_x", proof['t_x'])
    transcript.append_scalar(b"t_x_blinding", proof['t_x_blinding'])
    transcript.append_scalar(b"e_blinding", proof['e_blinding'])
    w = transcript.challenge_scalar(b"w")

    u_sq, u_inv_sq, s = ipp_verification_scalars(proof['L'], proof['R'], n, transcript, group)

    # Batching weight for equation (a)
    c = transcript.challenge_scalar(b"c")

    one = group.init(ZR, 1)
    z_sq = z * z
    z_cu = z_sq * z
    a = proof['a']
    b = proof['b']
    t_x = proof['t_x']

    powers_of_2 = powers(group.init(ZR, 2), n, group)
    powers_of_y_inv = powers(one / y, n, group)

    # δ(y,z) = (z - z²)·<1, y^n> - z³·<1, 2^n>
    delta = (z - z_sq) * sum_of_powers(y, n, group) - z_cu * group.init(ZR, 2 ** n - 1)

    g_scalars = [-z - a * s_i for s_i in s]
    h_scalars = [z + powers_of_y_inv[i] * (z_sq * powers_of_2[i] - b * s[n - 1 - i])
                 for i in range(n)]

    bases = [proof['A'], proof['S'], proof['T1'], proof['T2']]
    exponents = [one, x, c * x, c * x * x]

    bases += proof['L'] + proof['R']
    exponents += u_sq + u_inv_sq

    bases += [B_blinding, B]
    exponents += [-proof['e_blinding'] - c * proof['t_x_blinding'],
                  w * (t_x - a * b) + c * (delta - t_x)]

    bases += G + H
    exponents += g_scalars + h_scalars

    bases.append(V)
    exponents.append(c * z_sq)

    mega_check = multiexp_g1(bases, exponents, group)
    is_valid = is_identity(mega_check, params)
    if not is_valid:
        logger.debug("Range proof rejected: verification equation does not hold (n=%d)", n)
    return is_valid


def _verify_canonical(point: G1, val_base: G1, rand_base: G1, proof: Union[RangeProof, bytes],
                      num_bits: int, dst, params: dict) -> bool:
    try:
        decoded = decode_proof(proof, num_bits, params)
    except DeserializationError as e:
        logger.debug("Range proof rejected: %s", e)
        return False

    if is_identity(point, params):
        logger.debug("Range proof rejected: commitment is the identity")
        return False
    if is_identity(val_base, params) or is_identity(rand_base, params):
        logger.debug("Range proof rejected: commitment base is the identity")
        return False

    return verify_decoded(point, val_base, rand_base, decoded, num_bits, dst, params)


def _require_same_group(group_name: str, params: dict):
    if group_name != params['group_name']:
        raise ConfigurationError(
            f"Commitment belongs to {group_name!r} but the verifier is configured for {params['group_name']!r}")


def verify_range_proof(commitment_point: G1, val_base: G1, rand_base: G1,
                       proof: Union[RangeProof, bytes], num_bits: int, dst,
                       config: Config = None) -> bool:
    """
    Verify a range proof against a generic two-base commitment.

    Parameters
    ----------
    commitment_point : G1
        The commitment val_base^v · rand_base^r
    val_base : G1
        Base the hidden value is committed under
    rand_base : G1
        Base the blinding randomness is committed under
    proof : RangeProof or bytes
        The serialized proof
    num_bits : int
        Bit length n; the proof shows v ∈ [0, 2^n)
    dst : bytes or str
        Domain-separation tag the proof was created under
    config : Config, optional
        Verifier configuration; read from the environment if omitted

    Returns
    -------
    bool
        True iff the proof is valid. Malformed proofs return False.

    Raises
    ------
    ConfigurationError, UnsupportedRangeError
        On contract misuse, before any group operation
    """
    config = check_preconditions(num_bits, config)
    params = setup(config.pairing_curve)
    point, val_base, rand_base = generic_verification_input(commitment_point, val_base, rand_base)
    return _verify_canonical(point, val_base, rand_base, proof, num_bits, dst, params)


def verify_range_proof_pedersen(commitment: Union[PedersenCommitment, bytes],
                                proof: Union[RangeProof, bytes], num_bits: int, dst,
                                config: Config = None) -> bool:
    """
    Verify a range proof for a Pedersen commitment under the default bases.

    `commitment` is a PedersenCommitment or its compressed encoding; an
    encoding that is not a valid point makes the proof invalid (False).
    """
    config = check_preconditions(num_bits, config)
    params = setup(config.pairing_curve)

    if not isinstance(commitment, PedersenCommitment):
        try:
            commitment = PedersenCommitment.from_bytes(commitment, params['group_name'])
        except DeserializationError as e:
            logger.debug("Range proof rejected: bad commitment: %s", e)
            return False
    _require_same_group(commitment.group_name, params)

    point, val_base, rand_base = commitment.verification_input()
    return _verify_canonical(point, val_base, rand_base, proof, num_bits, dst, params)


def verify_range_proof_elgamal(ciphertext: Union[Ciphertext, bytes],
                               proof: Union[RangeProof, bytes], pubkey: Union[G1, bytes],
                               num_bits: int, dst, config: Config = None) -> bool:
    """
    Verify a range proof for the value encrypted in an ElGamal ciphertext.

    The commitment is (ciphertext.left, B, pubkey): left = B^v · Y^r is a
    Pedersen commitment to v with the public key as the blinding base.
    """
    config = check_preconditions(num_bits, config)
    params = setup(config.pairing_curve)

    try:
        if not isinstance(ciphertext, Ciphertext):
            ciphertext = Ciphertext.from_bytes(ciphertext, params['group_name'])
        if isinstance(pubkey, (bytes, bytearray)):
            pubkey = decode_point(pubkey, params)
    except DeserializationError as e:
        logger.debug("Range proof rejected: bad ciphertext or public key: %s", e)
        return False
    _require_same_group(ciphertext.group_name, params)

    point, val_base, rand_base = ciphertext.verification_input(pubkey)
    return _verify_canonical(point, val_base, rand_base, proof, num_bits, dst, params)
