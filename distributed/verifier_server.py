"""
Range Proof Verifier HTTP服务器
负责验证Pedersen承诺、ElGamal密文和通用承诺的范围证明
"""

import logging

from flask import Flask, request, jsonify

from range_proofs import (
    ConfigurationError, DeserializationError, UnsupportedRangeError, get_max_range_bits, setup,
    verify_range_proof, verify_range_proof_elgamal, verify_range_proof_pedersen
)
from range_proofs.verify import check_preconditions
from range_proofs.config import config
from distributed.serialization import deserialize_bytes, deserialize_dst, deserialize_g1

logger = logging.getLogger(__name__)

app = Flask(__name__)

# 全局状态
verifier_state = {
    'config': config,
}


def _run_verification(verify_call):
    """执行验证并把错误映射为HTTP状态码"""
    try:
        is_valid = verify_call()
    except UnsupportedRangeError as e:
        return jsonify({'success': False, 'error': str(e)}), 400
    except ConfigurationError as e:
        logger.warning("Verification request refused: %s", e)
        return jsonify({'success': False, 'error': str(e)}), 503
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'success': False, 'error': f"Malformed request: {e!r}"}), 400

    return jsonify({'success': True, 'is_valid': is_valid})


@app.route('/health', methods=['GET'])
def health():
    """健康检查"""
    cfg = verifier_state['config']
    return jsonify({
        'status': 'ok',
        'bulletproofs_enabled': cfg.bulletproofs_enabled,
        'curve': cfg.pairing_curve,
    })


@app.route('/max_range_bits', methods=['GET'])
def max_range_bits():
    """支持的最大比特长度"""
    return jsonify({'max_range_bits': get_max_range_bits()})


@app.route('/verify_pedersen', methods=['POST'])
def verify_pedersen():
    """验证Pedersen承诺的范围证明"""
    data = request.get_json(silent=True) or {}
    cfg = verifier_state['config']

    return _run_verification(lambda: verify_range_proof_pedersen(
        deserialize_bytes(data['commitment']),
        deserialize_bytes(data['proof']),
        data['num_bits'],
        deserialize_dst(data['dst']),
        config=cfg,
    ))


@app.route('/verify_elgamal', methods=['POST'])
def verify_elgamal():
    """验证ElGamal密文的范围证明"""
    data = request.get_json(silent=True) or {}
    cfg = verifier_state['config']

    return _run_verification(lambda: verify_range_proof_elgamal(
        deserialize_bytes(data['ciphertext']),
        deserialize_bytes(data['proof']),
        deserialize_bytes(data['pubkey']),
        data['num_bits'],
        deserialize_dst(data['dst']),
        config=cfg,
    ))


@app.route('/verify', methods=['POST'])
def verify_generic():
    """验证通用双基承诺的范围证明"""
    data = request.get_json(silent=True) or {}
    cfg = verifier_state['config']

    def call():
        check_preconditions(data['num_bits'], cfg)
        params = setup(cfg.pairing_curve)
        try:
            points = [deserialize_g1(data[key], params)
                      for key in ('commitment', 'val_base', 'rand_base')]
        except DeserializationError as e:
            logger.debug("Range proof rejected: bad commitment or base: %s", e)
            return False
        return verify_range_proof(
            *points,
            deserialize_bytes(data['proof']),
            data['num_bits'],
            deserialize_dst(data['dst']),
            config=cfg,
        )

    return _run_verification(call)


def main():
    """启动Verifier服务器"""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')
    cfg = verifier_state['config']
    if not cfg.bulletproofs_enabled:
        logger.warning("Bulletproofs verification is disabled; verification requests will fail with 503")
    logger.info("Starting range proof verifier on %s:%s (curve %s)",
                cfg.verifier_host, cfg.verifier_port, cfg.pairing_curve)
    app.run(host=cfg.verifier_host, port=cfg.verifier_port, debug=False)


if __name__ == '__main__':
    main()
