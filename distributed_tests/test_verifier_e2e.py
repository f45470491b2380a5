"""
范围证明Verifier端到端测试
需要先启动服务器: python -m distributed.verifier_server
"""

import os
import sys

import pytest
import requests
from charm.toolbox.pairinggroup import ZR

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'tests'))

from bulletproof_prover import prove_range
from distributed.client import VerifierClient
from range_proofs import Ciphertext, PedersenCommitment, elgamal_keygen, pedersen_gens, setup
from range_proofs.config import config
from range_proofs.groups import encode_point


class TestVerifierE2E:
    """端到端测试类"""

    @classmethod
    def setup_class(cls):
        """连接运行中的Verifier服务器"""
        cls.client = VerifierClient()
        try:
            health = cls.client.health()
        except requests.ConnectionError:
            pytest.skip(f"Verifier server not running at {config.verifier_url}")
        if not health['bulletproofs_enabled']:
            pytest.skip("Verifier server has bulletproofs disabled")

        cls.params = setup(health['curve'])
        cls.group = cls.params['group']
        cls.gens = pedersen_gens(health['curve'])

    def test_max_range_bits(self):
        assert self.client.max_range_bits() == 64

    @pytest.mark.parametrize("num_bits", [8, 16, 32, 64])
    def test_pedersen_proof(self, num_bits):
        """Pedersen承诺: 正确的dst通过，错误的dst失败"""
        r = self.group.random(ZR)
        proof, V = prove_range(2 ** num_bits - 1, r, self.gens['B'], self.gens['B_blinding'],
                               num_bits, b"e2e", self.params)
        commitment = PedersenCommitment(V, self.params['group_name']).to_bytes()

        assert self.client.verify_pedersen(commitment, proof.data, num_bits, "e2e")
        assert not self.client.verify_pedersen(commitment, proof.data, num_bits, "e2e-other")

    def test_elgamal_proof(self):
        """ElGamal密文: 用公钥作为随机基"""
        _, pk = elgamal_keygen(self.params['group_name'])
        r = self.group.random(ZR)
        ciphertext = Ciphertext.encrypt(self.group.init(ZR, 1000), r, pk, self.params['group_name'])
        proof, _ = prove_range(1000, r, self.gens['B'], pk, 16, b"e2e", self.params)

        assert self.client.verify_elgamal(ciphertext.to_bytes(), proof.data,
                                          encode_point(pk, self.params), 16, "e2e")

    def test_tampered_proof(self):
        r = self.group.random(ZR)
        proof, V = prove_range(7, r, self.gens['B'], self.gens['B_blinding'], 8, b"e2e", self.params)
        commitment = PedersenCommitment(V, self.params['group_name']).to_bytes()
        tampered = proof.data[:-1] + bytes([proof.data[-1] ^ 0x01])

        assert not self.client.verify_pedersen(commitment, tampered, 8, "e2e")

    def test_unsupported_bits_is_client_error(self):
        with pytest.raises(requests.HTTPError):
            self.client.verify_pedersen(b"", b"", 24, "e2e")
