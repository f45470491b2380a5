"""
Shared fixtures: group parameters, generators and a proof factory.
"""

import os
import sys

import pytest
from charm.toolbox.pairinggroup import ZR

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from range_proofs.config import Config
from range_proofs.crs import pedersen_gens
from range_proofs.groups import setup
from bulletproof_prover import prove_range


@pytest.fixture(scope="session")
def params():
    """Initialize the default group."""
    return setup()


@pytest.fixture(scope="session")
def group(params):
    return params['group']


@pytest.fixture(scope="session")
def gens(params):
    return pedersen_gens(params['group_name'])


@pytest.fixture
def enabled_config(params):
    return Config(bulletproofs_enabled=True, pairing_curve=params['group_name'])


@pytest.fixture
def disabled_config(params):
    return Config(bulletproofs_enabled=False, pairing_curve=params['group_name'])


@pytest.fixture(scope="session")
def make_pedersen_proof(params, gens, group):
    """
    Factory: make_pedersen_proof(value, n, dst) -> (proof, V, blinding)
    for a commitment under the default Pedersen bases.
    """
    def make(value, n=8, dst=b"test", check_range=True):
        blinding = group.random(ZR)
        proof, V = prove_range(value, blinding, gens['B'], gens['B_blinding'], n, dst, params,
                               check_range=check_range)
        return proof, V, blinding
    return make


@pytest.fixture(scope="session")
def pedersen_proof_8(make_pedersen_proof):
    """Honest 8-bit proof for v = 5 under dst "test"."""
    return make_pedersen_proof(5, n=8, dst="test")
