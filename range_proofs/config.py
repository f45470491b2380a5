"""
Range-proof verifier configuration
Feature flag, group selection and verifier service address
"""

import os

DEFAULT_CURVE = 'BN254'
DEFAULT_VERIFIER_HOST = 'localhost'
DEFAULT_VERIFIER_PORT = 5003


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Verifier configuration.

    Values not passed explicitly are read from the environment when the
    object is created:

    - BULLETPROOFS_ENABLED: whether range-proof verification is available
    - RANGE_PROOF_CURVE: charm-crypto pairing curve whose G1 group is used
    - VERIFIER_HOST / VERIFIER_PORT: address of the HTTP verification service
    """

    def __init__(self, bulletproofs_enabled: bool = None, pairing_curve: str = None,
                 verifier_host: str = None, verifier_port: int = None):
        if bulletproofs_enabled is None:
            bulletproofs_enabled = _env_flag('BULLETPROOFS_ENABLED', 'true')
        self.bulletproofs_enabled = bulletproofs_enabled
        self.pairing_curve = pairing_curve or os.getenv('RANGE_PROOF_CURVE', DEFAULT_CURVE)
        self.verifier_host = verifier_host or os.getenv('VERIFIER_HOST', DEFAULT_VERIFIER_HOST)
        self.verifier_port = int(verifier_port or os.getenv('VERIFIER_PORT', DEFAULT_VERIFIER_PORT))

    @property
    def verifier_url(self):
        return f"http://{self.verifier_host}:{self.verifier_port}"

    def __repr__(self):
        return (f"Config(bulletproofs_enabled={self.bulletproofs_enabled}, "
                f"pairing_curve={self.pairing_curve!r}, verifier_url={self.verifier_url!r})")


# Service-wide instance; library entry points build their own when none is passed
config = Config()
