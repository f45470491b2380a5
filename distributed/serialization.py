"""
范围证明服务序列化工具
用于在HTTP传输中序列化/反序列化G1群元素、证明字节和密文
"""

import base64
import binascii
from charm.toolbox.pairinggroup import G1
from range_proofs.groups import encode_point, decode_point
from range_proofs.commit import Ciphertext


def serialize_bytes(data: bytes) -> str:
    """序列化字节数据为base64字符串"""
    return base64.b64encode(data).decode('utf-8')


def deserialize_bytes(data: str) -> bytes:
    """从base64字符串反序列化字节数据，非法字符抛出ValueError"""
    if not isinstance(data, str):
        raise ValueError(f"Expected a base64 string, got {type(data).__name__}")
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 data: {e}") from e


def serialize_g1(elem: G1, params: dict) -> str:
    """序列化G1元素为base64字符串（压缩点编码）"""
    return serialize_bytes(encode_point(elem, params))


def deserialize_g1(data: str, params: dict) -> G1:
    """从base64字符串反序列化G1元素，非法点抛出DeserializationError"""
    return decode_point(deserialize_bytes(data), params)


def serialize_ciphertext(ciphertext: Ciphertext) -> str:
    """序列化ElGamal密文 (left || right)"""
    return serialize_bytes(ciphertext.to_bytes())


def deserialize_dst(data) -> bytes:
    """域分离标签：JSON中以UTF-8字符串传输"""
    if not isinstance(data, str):
        raise ValueError(f"dst must be a string, got {type(data).__name__}")
    return data.encode('utf-8')
