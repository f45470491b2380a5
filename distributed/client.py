"""
范围证明验证服务客户端库
封装HTTP调用，提供统一的接口
"""

import requests
from range_proofs.config import config
from distributed.serialization import serialize_bytes


class VerifierClient:
    """Range proof Verifier客户端"""

    def __init__(self, base_url: str = None, timeout: float = 30.0):
        self.base_url = base_url or config.verifier_url
        self.timeout = timeout

    def _get(self, path: str) -> dict:
        resp = requests.get(f"{self.base_url}{path}", timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _post(self, path: str, payload: dict) -> dict:
        resp = requests.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def health(self) -> dict:
        """健康检查"""
        return self._get('/health')

    def max_range_bits(self) -> int:
        """支持的最大比特长度"""
        return self._get('/max_range_bits')['max_range_bits']

    def verify_pedersen(self, commitment: bytes, proof: bytes, num_bits: int, dst: str) -> bool:
        """验证Pedersen承诺的范围证明"""
        result = self._post('/verify_pedersen', {
            'commitment': serialize_bytes(commitment),
            'proof': serialize_bytes(proof),
            'num_bits': num_bits,
            'dst': dst,
        })
        return result['is_valid']

    def verify_elgamal(self, ciphertext: bytes, proof: bytes, pubkey: bytes,
                       num_bits: int, dst: str) -> bool:
        """验证ElGamal密文的范围证明，ciphertext为 left || right"""
        result = self._post('/verify_elgamal', {
            'ciphertext': serialize_bytes(ciphertext),
            'proof': serialize_bytes(proof),
            'pubkey': serialize_bytes(pubkey),
            'num_bits': num_bits,
            'dst': dst,
        })
        return result['is_valid']

    def verify(self, commitment: bytes, val_base: bytes, rand_base: bytes,
               proof: bytes, num_bits: int, dst: str) -> bool:
        """验证通用双基承诺的范围证明"""
        result = self._post('/verify', {
            'commitment': serialize_bytes(commitment),
            'val_base': serialize_bytes(val_base),
            'rand_base': serialize_bytes(rand_base),
            'proof': serialize_bytes(proof),
            'num_bits': num_bits,
            'dst': dst,
        })
        return result['is_valid']
