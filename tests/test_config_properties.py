"""
Property-based tests for configuration persistence and environment overrides.
"""

import json
import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from kdn_sdk.config import (
    KADENANAMES_NAMESPACE_MAINNET_MODULE,
    VAULT,
    HttpConfig,
    LoggingConfig,
    NetworkConfig,
    RegistryConfig,
    SDKConfig,
    apply_env_overrides,
    create_default_config,
    load_config_from_file,
    parse_hosts,
    save_config_to_file,
)


# Strategies for generating valid test data

identifiers = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789-"),
    min_size=1,
    max_size=20,
)


@st.composite
def host_table_strategy(draw) -> dict:
    """Generate network id -> base URL tables."""
    networks = draw(st.lists(identifiers, max_size=4, unique=True))
    return {
        network: f"https://{draw(identifiers)}.example.com"
        for network in networks
    }


@st.composite
def sdk_config_strategy(draw) -> SDKConfig:
    """Generate valid SDKConfig objects."""
    return SDKConfig(
        network=NetworkConfig(hosts=draw(host_table_strategy())),
        registry=RegistryConfig(
            mainnet_module=f"free.{draw(identifiers)}",
            testnet_module=f"free.{draw(identifiers)}",
            vault_account=draw(identifiers),
        ),
        http=HttpConfig(
            timeout_seconds=draw(st.floats(min_value=0.5, max_value=120, allow_nan=False)),
        ),
        logging=LoggingConfig(
            level=draw(st.sampled_from(["debug", "info", "warn", "error"])),
            output_format=draw(st.sampled_from(["json", "text", "both"])),
        ),
    )


class TestConfigurationRoundTripProperty:
    """Saving then loading a configuration preserves every field."""

    @given(config=sdk_config_strategy())
    @settings(max_examples=50)
    def test_config_round_trip_preserves_data(self, config: SDKConfig) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "config.json"

            assert save_config_to_file(config, path)
            loaded = load_config_from_file(path)

        assert loaded == config

    def test_saved_file_is_readable_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            save_config_to_file(create_default_config(), path)
            data = json.loads(path.read_text(encoding="utf-8"))

        assert data["registry"]["mainnet_module"] == KADENANAMES_NAMESPACE_MAINNET_MODULE
        assert data["registry"]["vault_account"] == VAULT
        assert data["network"]["hosts"] == {}

    def test_missing_sections_use_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{}", encoding="utf-8")
            loaded = load_config_from_file(path)

        assert loaded == create_default_config()


class TestInvalidConfigurationProperty:
    """Unreadable files load as None instead of raising."""

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            assert load_config_from_file(Path(tmp) / "absent.json") is None

    def test_invalid_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            assert load_config_from_file(path) is None

    def test_hosts_must_be_an_object(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"network": {"hosts": ["a"]}}), encoding="utf-8")
            assert load_config_from_file(path) is None

    def test_invalid_timeout(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"http": {"timeout_seconds": "soon"}}), encoding="utf-8")
            assert load_config_from_file(path) is None


class TestEnvironmentOverridesProperty:
    """KDN_* variables override file values without mutating the input."""

    @given(hosts=host_table_strategy())
    @settings(max_examples=50)
    def test_parse_hosts(self, hosts: dict) -> None:
        value = ",".join(f"{network}={url}" for network, url in hosts.items())
        assert parse_hosts(value) == hosts

    def test_parse_hosts_skips_malformed_chunks(self) -> None:
        assert parse_hosts(" a=http://x/ , junk, =http://y, b= ,c=http://z") == {
            "a": "http://x",
            "c": "http://z",
        }

    def test_overrides_are_applied(self) -> None:
        base = SDKConfig(network=NetworkConfig(hosts={"development": "http://old"}))

        config = apply_env_overrides(base, {
            "KDN_HOSTS": "development=http://localhost:8080,fast-development=http://localhost:9090",
            "KDN_HTTP_TIMEOUT": "3.5",
            "KDN_LOG_LEVEL": "DEBUG",
            "KDN_LOG_FORMAT": "JSON",
            "KDN_VAULT_ACCOUNT": "vault-2",
        })

        assert config.network.hosts == {
            "development": "http://localhost:8080",
            "fast-development": "http://localhost:9090",
        }
        assert config.http.timeout_seconds == 3.5
        assert config.logging.level == "debug"
        assert config.logging.output_format == "json"
        assert config.registry.vault_account == "vault-2"
        assert base.network.hosts == {"development": "http://old"}

    @given(config=sdk_config_strategy())
    @settings(max_examples=50)
    def test_empty_environment_changes_nothing(self, config: SDKConfig) -> None:
        assert apply_env_overrides(config, {}) == config

    def test_invalid_timeout_is_ignored(self, capsys) -> None:
        config = apply_env_overrides(create_default_config(), {"KDN_HTTP_TIMEOUT": "never"})

        assert config.http.timeout_seconds == 10.0
        assert "KDN_HTTP_TIMEOUT" in capsys.readouterr().err
