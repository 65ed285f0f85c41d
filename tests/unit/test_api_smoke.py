"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /verify returns present / absent / invalid outcomes
3. Malformed input is a 400, oversize proofs a 413
4. POST /verify/account checks account and storage proofs
"""

import pytest
from fastapi.testclient import TestClient

from fixtures import (
    FixtureTrie,
    make_account,
    make_account_proof_dict,
    make_address,
    make_state_trie,
    make_storage_proof_dict,
    make_storage_trie,
)

from api.app import app
from api.deps import get_verifier
from core.config.runtime import VerifierConfig
from core.crypto.hashing import EMPTY_CODE_HASH, EMPTY_TRIE_ROOT, keccak256, to_hex
from core.trie.verifier import ProofVerifier


# Create test client
client = TestClient(app)


@pytest.fixture
def trie():
    return FixtureTrie({
        b"\x01" * 32: b"one" * 20,
        b"\x02" * 32: b"two" * 20,
        b"\x12" * 32: b"three" * 20,
    })


def _body(trie, key, /, **extra):
    return {
        "root": to_hex(trie.root_hash),
        "key": to_hex(key),
        "proof": trie.prove_hex(key),
        **extra,
    }


class TestHealth:

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "trieproof-api", "version": "v1"}


class TestVerifyEndpoint:

    def test_present(self, trie):
        response = client.post("/verify", json=_body(trie, b"\x01" * 32))
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["outcome"]["status"] == "present"
        assert data["outcome"]["value"] == to_hex(b"one" * 20)

    def test_absent(self, trie):
        response = client.post("/verify", json=_body(trie, b"\x03" * 32))
        data = response.json()
        assert data["ok"] is True
        assert data["outcome"]["status"] == "absent"
        assert data["outcome"]["value"] is None

    def test_value_mismatch(self, trie):
        response = client.post("/verify", json=_body(trie, b"\x01" * 32, value="0xbeef"))
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is False
        assert data["outcome"]["reason"] == "value mismatch"
        assert data["outcome"]["code"] == "VALUE_MISMATCH"

    def test_empty_proof(self, trie):
        body = _body(trie, b"\x01" * 32)
        body["proof"] = []
        data = client.post("/verify", json=body).json()
        assert data["outcome"]["reason"] == "empty proof"

    def test_hash_key(self):
        preimage = b"\xaa" * 20
        trie = FixtureTrie({keccak256(preimage): b"v" * 40, keccak256(b"x"): b"w" * 40})
        body = {
            "root": to_hex(trie.root_hash),
            "key": to_hex(preimage),
            "proof": trie.prove_hex(keccak256(preimage)),
            "hash_key": True,
        }
        data = client.post("/verify", json=body).json()
        assert data["key"] == to_hex(keccak256(preimage))
        assert data["outcome"]["status"] == "present"

    def test_bad_key(self, trie):
        response = client.post("/verify", json=_body(trie, b"\x01" * 32, key="0102"))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_bad_root(self, trie):
        response = client.post("/verify", json=_body(trie, b"\x01" * 32, root="0x1234"))
        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_missing_fields(self):
        response = client.post("/verify", json={"root": "0x00"})
        assert response.status_code == 422

    def test_proof_too_large(self, trie):
        app.dependency_overrides[get_verifier] = lambda: ProofVerifier(
            VerifierConfig(max_proof_nodes=1)
        )
        try:
            response = client.post("/verify", json=_body(trie, b"\x01" * 32))
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 413
        assert response.json()["error"]["code"] == "PROOF_TOO_LARGE"


class TestVerifyAccountEndpoint:

    def test_account_with_storage(self):
        storage = make_storage_trie({0: 42, 1: 7})
        address = make_address(10)
        account = make_account(nonce=3, balance=99, storage_root=storage.root_hash)
        state = make_state_trie({address: account, make_address(11): make_account()})
        proof = make_account_proof_dict(
            state,
            address,
            account,
            storage_proof=[
                make_storage_proof_dict(storage, 0, 42),
                make_storage_proof_dict(storage, 5, 0),
            ],
        )

        response = client.post(
            "/verify/account",
            json={"state_root": to_hex(state.root_hash), "proof": proof},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["address"] == address
        assert data["account"]["status"] == "present"
        assert data["storage"]["0x0"]["status"] == "present"
        assert data["storage"]["0x5"]["status"] == "absent"

    def test_lying_storage_value(self):
        storage = make_storage_trie({0: 42})
        address = make_address(10)
        account = make_account(storage_root=storage.root_hash)
        state = make_state_trie({address: account, make_address(11): make_account()})
        entry = make_storage_proof_dict(storage, 0, 42)
        entry["value"] = "0x2b"
        proof = make_account_proof_dict(state, address, account, storage_proof=[entry])

        data = client.post(
            "/verify/account",
            json={"state_root": to_hex(state.root_hash), "proof": proof},
        ).json()

        assert data["ok"] is False
        assert data["account"]["status"] == "present"
        assert data["storage"]["0x0"]["code"] == "VALUE_MISMATCH"

    def test_wrong_state_root(self, state_trie, accounts):
        address, account = next(iter(accounts.items()))
        proof = make_account_proof_dict(state_trie, address, account)
        data = client.post(
            "/verify/account",
            json={"state_root": to_hex(keccak256(b"elsewhere")), "proof": proof},
        ).json()
        assert data["ok"] is False
        assert data["account"]["code"] == "HASH_MISMATCH"

    def test_invalid_proof_shape(self):
        response = client.post(
            "/verify/account",
            json={"state_root": "0x" + "00" * 32, "proof": {"address": "0x01"}},
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("key", ["0xzz", "0x" + "11" * 33])
    def test_bad_storage_key(self, key):
        storage = make_storage_trie({0: 42})
        address = make_address(10)
        account = make_account(storage_root=storage.root_hash)
        state = make_state_trie({address: account, make_address(11): make_account()})
        entry = make_storage_proof_dict(storage, 0, 42)
        entry["key"] = key
        proof = make_account_proof_dict(state, address, account, storage_proof=[entry])

        response = client.post(
            "/verify/account",
            json={"state_root": to_hex(state.root_hash), "proof": proof},
        )

        assert response.status_code == 422
        assert "storage key" in response.text.lower()

    def test_empty_state(self):
        proof = {
            "address": make_address(10),
            "accountProof": [],
            "balance": "0x0",
            "codeHash": to_hex(EMPTY_CODE_HASH),
            "nonce": "0x0",
            "storageHash": to_hex(EMPTY_TRIE_ROOT),
            "storageProof": [make_storage_proof_dict(None, 0, 0)],
        }
        data = client.post(
            "/verify/account",
            json={"state_root": to_hex(EMPTY_TRIE_ROOT), "proof": proof},
        ).json()
        assert data["ok"] is True
        assert data["account"]["status"] == "absent"
        assert data["storage"]["0x0"]["status"] == "absent"
