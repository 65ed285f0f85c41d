"""
Configuration Unit Tests
Tests for core/config/runtime.py and trieproof_cli/config.py
"""
import json

import pytest

from core.config.runtime import RpcConfig, RuntimeConfig, VerifierConfig
from trieproof_cli.config import (
    CLIConfig,
    get_default_config_template,
    load_config,
    load_config_from_env,
    load_config_from_file,
)


class TestRuntimeConfig:

    def test_defaults(self):
        config = RuntimeConfig()
        assert config.rpc.url is None
        assert config.rpc.timeout == 30.0
        assert config.verifier == VerifierConfig(max_proof_nodes=64, max_node_bytes=4096)
        assert config.log_level == "INFO"

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"verifier": {"max_proof_nodes": 10}})
        assert config.verifier.max_proof_nodes == 10
        assert config.verifier.max_node_bytes == 4096
        assert config.rpc == RpcConfig()

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "trieproof.yaml"
        path.write_text(
            "rpc:\n"
            "  url: https://node.example\n"
            "  timeout: 5\n"
            "verifier:\n"
            "  max_node_bytes: 1024\n"
            "log_level: DEBUG\n"
        )
        config = RuntimeConfig.from_yaml(path)
        assert config.rpc.url == "https://node.example"
        assert config.rpc.timeout == 5
        assert config.verifier.max_node_bytes == 1024
        assert config.log_level == "DEBUG"

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")

    def test_from_yaml_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TRIEPROOF_RPC_URL", "https://env.example")
        monkeypatch.setenv("TRIEPROOF_RPC_TIMEOUT", "2.5")
        monkeypatch.setenv("TRIEPROOF_MAX_PROOF_NODES", "12")
        monkeypatch.setenv("TRIEPROOF_LOG_LEVEL", "WARNING")
        config = RuntimeConfig.from_env()
        assert config.rpc.url == "https://env.example"
        assert config.rpc.timeout == 2.5
        assert config.verifier.max_proof_nodes == 12
        assert config.log_level == "WARNING"

    def test_env_overrides_file(self, monkeypatch):
        base = RuntimeConfig.from_dict({
            "rpc": {"url": "https://file.example", "max_retries": 9},
            "verifier": {"max_node_bytes": 100},
        })
        monkeypatch.setenv("TRIEPROOF_RPC_URL", "https://env.example")
        monkeypatch.setenv("TRIEPROOF_MAX_NODE_BYTES", "200")
        config = base.with_env_overrides()
        assert config.rpc.url == "https://env.example"
        assert config.rpc.max_retries == 9
        assert config.verifier.max_node_bytes == 200
        assert base.rpc.url == "https://file.example"

    def test_no_overrides_returns_self(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config

    def test_to_dict(self):
        data = RuntimeConfig().to_dict()
        assert data["verifier"] == {"max_proof_nodes": 64, "max_node_bytes": 4096}
        assert data["rpc"]["url"] is None

    @pytest.mark.parametrize("kwargs", [
        {"max_proof_nodes": 0},
        {"max_node_bytes": -1},
    ])
    def test_verifier_config_validation(self, kwargs):
        with pytest.raises(ValueError):
            VerifierConfig(**kwargs)


class TestCLIConfig:

    def test_to_runtime(self):
        cli = CLIConfig(rpc_url="https://node.example", max_proof_nodes=8, log_level="DEBUG")
        runtime = cli.to_runtime()
        assert runtime.rpc.url == "https://node.example"
        assert runtime.verifier.max_proof_nodes == 8
        assert runtime.log_level == "DEBUG"

    def test_to_dict_hides_missing_url(self):
        assert CLIConfig().to_dict()["rpc_url"] == "(not configured)"

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "trieproof.json"
        path.write_text(json.dumps({"rpc_url": "https://file.example", "max_node_bytes": 512}))
        config = load_config_from_file(path)
        assert config.rpc_url == "https://file.example"
        assert config.max_node_bytes == 512
        assert config.max_proof_nodes == 64

    def test_load_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_file(tmp_path / "nope.json")

    def test_load_from_env(self, monkeypatch):
        monkeypatch.setenv("TRIEPROOF_RPC_MAX_RETRIES", "7")
        monkeypatch.setenv("TRIEPROOF_LOG_FILE", "/tmp/trieproof.log")
        config = load_config_from_env()
        assert config.rpc_max_retries == 7
        assert config.log_file == "/tmp/trieproof.log"

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "trieproof.json").write_text(json.dumps({"max_proof_nodes": 3}))
        assert load_config().max_proof_nodes == 3

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"rpc_url": "https://file.example"}))
        monkeypatch.setenv("TRIEPROOF_RPC_URL", "https://env.example")
        assert load_config(path).rpc_url == "https://env.example"

    def test_template_is_valid_json(self):
        data = json.loads(get_default_config_template())
        assert data["max_proof_nodes"] == 64
        assert data["default_output_format"] == "human"
