"""
Group Initialization and Encoding
=================================

This module sets up the prime-order group used by the range-proof verifier
and defines the wire encoding of its elements.

According to charm-crypto documentation (https://jhuisi.github.io/charm/tutorial.html):
- PairingGroup('BN254') provides a Type-3 pairing with a 254-bit base field
- Only the source group G1 and the scalar field ZR are used here; no pairing
  is ever evaluated by the verifier
- Group operations use * for the group law and ** for scalar multiplication
- group.serialize(elem) returns b"<type>:<base64 of compressed bytes>"

Wire Encoding:
--------------
- Point: the compressed bytes of a G1 element (charm's serialization with the
  type prefix and base64 wrapping removed). Fixed width for a given curve.
- Scalar: big-endian unsigned integer, fixed width ceil(bits(order) / 8).
  Values >= order are rejected on decoding.
"""

import base64
import functools
import logging

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .config import DEFAULT_CURVE
from .errors import ConfigurationError, DeserializationError

logger = logging.getLogger(__name__)

# Label hashed to G1 to size the point encoding; never used as a base
_PROBE_LABEL = b"range-proofs/encoding-probe"


def setup(group_name: str = None) -> dict:
    """
    Initialize the group for range-proof verification.

    Parameters
    ----------
    group_name : str, optional
        The charm-crypto pairing curve identifier. Default is 'BN254'.

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'group_name': The name of the curve used
        - 'order': The prime group order as a Python int
        - 'point_size': Byte width of a compressed G1 point
        - 'scalar_size': Byte width of an encoded scalar
        - 'point_prefix': charm's serialization prefix for G1 elements
        - 'identity': The identity element of G1

    Raises
    ------
    ConfigurationError
        If charm-crypto cannot load the requested curve.

    Notes
    -----
    The result is cached per curve name and never mutated, so it can be read
    from any number of threads. Elements from different PairingGroup objects
    must not be mixed, hence every caller goes through this cache.
    """
    return _setup(group_name or DEFAULT_CURVE)


@functools.lru_cache(maxsize=None)
def _setup(group_name: str) -> dict:
    try:
        group = PairingGroup(group_name)
    except Exception as e:
        raise ConfigurationError(f"Pairing group {group_name!r} is not available: {e}") from e

    order = int(group.order())
    probe = group.hash(_PROBE_LABEL, G1)
    prefix, body = group.serialize(probe).split(b':', 1)

    params = {
        'group': group,
        'group_name': group_name,
        'order': order,
        'point_size': len(base64.b64decode(body)),
        'scalar_size': (order.bit_length() + 7) // 8,
        'point_prefix': prefix + b':',
        'identity': group.init(G1, 1),
    }
    logger.debug("Initialized group %s: %d-byte points, %d-byte scalars",
                 group_name, params['point_size'], params['scalar_size'])
    return params


def is_identity(point: G1, params: dict) -> bool:
    return point == params['identity']


def encode_point(point: G1, params: dict) -> bytes:
    """Encode a G1 element as its fixed-width compressed bytes."""
    serialized = params['group'].serialize(point)
    return base64.b64decode(serialized.split(b':', 1)[1])


def decode_point(data: bytes, params: dict) -> G1:
    """
    Decode compressed bytes into a G1 element.

    Parameters
    ----------
    data : bytes
        Exactly params['point_size'] bytes
    params : dict
        Group parameters from setup()

    Returns
    -------
    G1
        The decoded point

    Raises
    ------
    DeserializationError
        If the length is wrong, the bytes are not a point of the group, the
        point is the identity, or the encoding is not canonical (re-encoding
        the decoded point must reproduce the input bytes).
    """
    data = bytes(data)
    if len(data) != params['point_size']:
        raise DeserializationError(
            f"Point encoding must be {params['point_size']} bytes, got {len(data)}")

    group = params['group']
    try:
        point = group.deserialize(params['point_prefix'] + base64.b64encode(data))
        canonical = encode_point(point, params)
        member = group.ismember(point)
    except Exception as e:
        raise DeserializationError(f"Invalid point encoding: {e}") from e

    if not member:
        raise DeserializationError("Decoded point is not in the prime-order subgroup")
    if canonical != data:
        raise DeserializationError("Point encoding is not canonical")
    if is_identity(point, params):
        raise DeserializationError("Point encodes the group identity")
    return point


def encode_scalar(scalar: ZR, params: dict) -> bytes:
    """Encode a ZR element as a fixed-width big-endian integer."""
    return (int(scalar) % params['order']).to_bytes(params['scalar_size'], 'big')


def decode_scalar(data: bytes, params: dict) -> ZR:
    """
    Decode a fixed-width big-endian integer into a ZR element.

    Raises DeserializationError on a wrong length or a value >= group order;
    out-of-range encodings are rejected, never reduced.
    """
    if len(data) != params['scalar_size']:
        raise DeserializationError(
            f"Scalar encoding must be {params['scalar_size']} bytes, got {len(data)}")
    value = int.from_bytes(data, 'big')
    if value >= params['order']:
        raise DeserializationError("Scalar encoding is not reduced modulo the group order")
    return params['group'].init(ZR, value)
