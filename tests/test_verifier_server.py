"""
Tests for the HTTP verification service and its requests client.

The Flask test client stands in for a running server; VerifierClient is
exercised by routing requests.get/post into the same test client.
"""

import pytest
from charm.toolbox.pairinggroup import ZR

from range_proofs import Ciphertext, PedersenCommitment, elgamal_keygen
from range_proofs.config import Config
from distributed import client as client_module
from distributed import verifier_server
from distributed.client import VerifierClient
from distributed.serialization import serialize_bytes, serialize_g1, serialize_ciphertext
from bulletproof_prover import prove_range


@pytest.fixture
def http(params):
    verifier_server.app.config['TESTING'] = True
    original = verifier_server.verifier_state['config']
    verifier_server.verifier_state['config'] = Config(bulletproofs_enabled=True,
                                                      pairing_curve=params['group_name'])
    with verifier_server.app.test_client() as test_client:
        yield test_client
    verifier_server.verifier_state['config'] = original


def _pedersen_payload(proof, V, dst="test", num_bits=8):
    return {
        'commitment': serialize_bytes(PedersenCommitment(V).to_bytes()),
        'proof': serialize_bytes(proof.data),
        'num_bits': num_bits,
        'dst': dst,
    }


def test_health(http, params):
    resp = http.get('/health')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['status'] == 'ok'
    assert body['bulletproofs_enabled'] is True
    assert body['curve'] == params['group_name']


def test_max_range_bits(http):
    assert http.get('/max_range_bits').get_json() == {'max_range_bits': 64}


def test_verify_pedersen(http, pedersen_proof_8):
    proof, V, _ = pedersen_proof_8

    resp = http.post('/verify_pedersen', json=_pedersen_payload(proof, V))
    assert resp.status_code == 200
    assert resp.get_json() == {'success': True, 'is_valid': True}

    resp = http.post('/verify_pedersen', json=_pedersen_payload(proof, V, dst="other"))
    assert resp.get_json() == {'success': True, 'is_valid': False}


@pytest.mark.parametrize("num_bits", [24, 8.0, "8"])
def test_verify_pedersen_unsupported_bits(http, pedersen_proof_8, num_bits):
    proof, V, _ = pedersen_proof_8
    resp = http.post('/verify_pedersen', json=_pedersen_payload(proof, V, num_bits=num_bits))
    assert resp.status_code == 400
    assert resp.get_json()['success'] is False


def test_verify_pedersen_malformed(http, pedersen_proof_8):
    proof, V, _ = pedersen_proof_8
    payload = _pedersen_payload(proof, V)

    missing = dict(payload)
    del missing['proof']
    assert http.post('/verify_pedersen', json=missing).status_code == 400

    bad_base64 = dict(payload, proof="not base64!!")
    assert http.post('/verify_pedersen', json=bad_base64).status_code == 400

    assert http.post('/verify_pedersen', data="garbage").status_code == 400


def test_verify_disabled(http, params, pedersen_proof_8):
    proof, V, _ = pedersen_proof_8
    verifier_server.verifier_state['config'] = Config(bulletproofs_enabled=False,
                                                      pairing_curve=params['group_name'])
    resp = http.post('/verify_pedersen', json=_pedersen_payload(proof, V))
    assert resp.status_code == 503
    assert resp.get_json()['success'] is False


def test_verify_elgamal(http, params, gens, group):
    _, pk = elgamal_keygen()
    r = group.random(ZR)
    ciphertext = Ciphertext.encrypt(group.init(ZR, 200), r, pk)
    proof, _ = prove_range(200, r, gens['B'], pk, 8, b"http", params)

    payload = {
        'ciphertext': serialize_ciphertext(ciphertext),
        'proof': serialize_bytes(proof.data),
        'pubkey': serialize_g1(pk, params),
        'num_bits': 8,
        'dst': "http",
    }
    assert http.post('/verify_elgamal', json=payload).get_json()['is_valid'] is True

    payload['num_bits'] = 16
    assert http.post('/verify_elgamal', json=payload).get_json()['is_valid'] is False


def test_verify_generic(http, params, gens, pedersen_proof_8):
    proof, V, _ = pedersen_proof_8
    payload = {
        'commitment': serialize_g1(V, params),
        'val_base': serialize_g1(gens['B'], params),
        'rand_base': serialize_g1(gens['B_blinding'], params),
        'proof': serialize_bytes(proof.data),
        'num_bits': 8,
        'dst': "test",
    }
    assert http.post('/verify', json=payload).get_json()['is_valid'] is True

    payload['val_base'] = serialize_bytes(b"\xff" * params['point_size'])
    resp = http.post('/verify', json=payload)
    assert resp.status_code == 200
    assert resp.get_json() == {'success': True, 'is_valid': False}

    payload['val_base'] = "not base64!!"
    assert http.post('/verify', json=payload).status_code == 400


def test_verify_generic_checks_preconditions_before_decoding(http, params, pedersen_proof_8):
    proof, _, _ = pedersen_proof_8
    bad_point = serialize_bytes(b"\xff" * params['point_size'])
    payload = {
        'commitment': bad_point,
        'val_base': bad_point,
        'rand_base': bad_point,
        'proof': serialize_bytes(proof.data),
        'num_bits': 24,
        'dst': "test",
    }
    assert http.post('/verify', json=payload).status_code == 400

    payload['num_bits'] = 8
    verifier_server.verifier_state['config'] = Config(bulletproofs_enabled=False,
                                                      pairing_curve=params['group_name'])
    assert http.post('/verify', json=payload).status_code == 503


class _Response:
    """Minimal requests.Response stand-in built from a Flask test response."""

    def __init__(self, flask_response):
        self.status_code = flask_response.status_code
        self._json = flask_response.get_json()

    def raise_for_status(self):
        if self.status_code >= 400:
            raise client_module.requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._json


@pytest.fixture
def verifier_client(http, monkeypatch):
    base_url = "http://verifier.test"

    def fake_get(url, timeout=None):
        return _Response(http.get(url[len(base_url):]))

    def fake_post(url, json=None, timeout=None):
        return _Response(http.post(url[len(base_url):], json=json))

    monkeypatch.setattr(client_module.requests, 'get', fake_get)
    monkeypatch.setattr(client_module.requests, 'post', fake_post)
    return VerifierClient(base_url)


def test_client_roundtrip(verifier_client, params, gens, pedersen_proof_8):
    proof, V, _ = pedersen_proof_8
    commitment = PedersenCommitment(V).to_bytes()

    assert verifier_client.health()['status'] == 'ok'
    assert verifier_client.max_range_bits() == 64
    assert verifier_client.verify_pedersen(commitment, proof.data, 8, "test") is True
    assert verifier_client.verify_pedersen(commitment, proof.data, 8, "other") is False
    assert verifier_client.verify(
        commitment,
        PedersenCommitment(gens['B']).to_bytes(),
        PedersenCommitment(gens['B_blinding']).to_bytes(),
        proof.data, 8, "test",
    ) is True


def test_client_elgamal(verifier_client, params, gens, group):
    _, pk = elgamal_keygen()
    r = group.random(ZR)
    ciphertext = Ciphertext.encrypt(group.init(ZR, 1), r, pk)
    proof, _ = prove_range(1, r, gens['B'], pk, 8, "client", params)
    pk_bytes = PedersenCommitment(pk).to_bytes()

    assert verifier_client.verify_elgamal(ciphertext.to_bytes(), proof.data, pk_bytes, 8, "client")


def test_client_raises_on_unsupported_bits(verifier_client, pedersen_proof_8):
    proof, V, _ = pedersen_proof_8
    with pytest.raises(client_module.requests.HTTPError):
        verifier_client.verify_pedersen(PedersenCommitment(V).to_bytes(), proof.data, 24, "test")
