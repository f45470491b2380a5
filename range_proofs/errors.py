"""
Error Taxonomy
==============

Exceptions raised by the range-proof verifier.

- ConfigurationError: verification capability unavailable (fatal)
- UnsupportedRangeError: bit length outside {8, 16, 32, 64} (fatal)
- DeserializationError: malformed proof, point or scalar encoding

A proof whose equations do not hold is NOT an error: the verification
entry points return False for it.
"""


class RangeProofError(Exception):
    """Base class for all range-proof errors."""


class ConfigurationError(RangeProofError, RuntimeError):
    """Verification is disabled or the configured group cannot be loaded."""


class UnsupportedRangeError(RangeProofError, ValueError):
    """The requested bit length is not one of the supported sizes."""

    def __init__(self, num_bits):
        self.num_bits = num_bits
        super().__init__(f"Unsupported range proof bit length: {num_bits!r}")


class DeserializationError(RangeProofError, ValueError):
    """Bytes do not decode to a well-formed proof, point or scalar."""
