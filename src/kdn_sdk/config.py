"""
Configuration dataclasses for the KadenaNames SDK.

This module defines the configuration structures used by the engine:
network host overrides, registry contract identifiers, HTTP settings and
logging, together with JSON file persistence and environment overrides.
"""

import json
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

# Deployment defaults; verify against the live registry contract before use.
# RegistryConfig and KDN_VAULT_ACCOUNT override them.

# Registry module per network family
KADENANAMES_NAMESPACE_MAINNET_MODULE = "free.kadenanames"
KADENANAMES_NAMESPACE_TESTNET_MODULE = "free.kadenanames-testnet"

# Account receiving registration fees
VAULT = "kadenanames-vault"

DEFAULT_CONFIG_PATH = Path.home() / ".kdn_sdk" / "config.json"


@dataclass
class NetworkConfig:
    """Host table entries merged over the default network hosts."""

    hosts: dict[str, str] = field(default_factory=dict)


@dataclass
class RegistryConfig:
    """Identifiers of the registry contract."""

    mainnet_module: str = KADENANAMES_NAMESPACE_MAINNET_MODULE
    testnet_module: str = KADENANAMES_NAMESPACE_TESTNET_MODULE
    vault_account: str = VAULT


@dataclass
class HttpConfig:
    """HTTP client settings for Chainweb requests."""

    timeout_seconds: float = 10.0


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "warn"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class SDKConfig:
    """Main configuration combining all sub-configurations."""

    network: NetworkConfig = field(default_factory=NetworkConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def create_default_config() -> SDKConfig:
    """Create the default configuration (public Chainweb hosts only)."""
    return SDKConfig()


def parse_hosts(value: str) -> dict[str, str]:
    """
    Parse a host table from 'network=url' pairs separated by commas.

    Args:
        value: e.g. "development=http://localhost:8080,testnet04=https://..."

    Returns:
        Mapping of network id to base URL
    """
    hosts = {}
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk or "=" not in chunk:
            continue
        network_id, url = chunk.split("=", 1)
        if network_id.strip() and url.strip():
            hosts[network_id.strip()] = url.strip().rstrip("/")
    return hosts


def apply_env_overrides(
    config: SDKConfig,
    environ: Mapping[str, str],
) -> SDKConfig:
    """
    Return a copy of the configuration with KDN_* environment overrides applied.

    Recognized variables: KDN_HOSTS, KDN_HTTP_TIMEOUT, KDN_LOG_LEVEL,
    KDN_LOG_FORMAT, KDN_VAULT_ACCOUNT.
    """
    network = config.network
    if environ.get("KDN_HOSTS"):
        hosts = dict(config.network.hosts)
        hosts.update(parse_hosts(environ["KDN_HOSTS"]))
        network = NetworkConfig(hosts=hosts)

    http = config.http
    if environ.get("KDN_HTTP_TIMEOUT"):
        try:
            http = HttpConfig(timeout_seconds=float(environ["KDN_HTTP_TIMEOUT"]))
        except ValueError:
            print(
                f"Ignoring invalid KDN_HTTP_TIMEOUT: {environ['KDN_HTTP_TIMEOUT']}",
                file=sys.stderr,
            )

    logging_config = config.logging
    if environ.get("KDN_LOG_LEVEL"):
        logging_config = replace(logging_config, level=environ["KDN_LOG_LEVEL"].lower())
    if environ.get("KDN_LOG_FORMAT"):
        logging_config = replace(
            logging_config, output_format=environ["KDN_LOG_FORMAT"].lower()
        )

    registry = config.registry
    if environ.get("KDN_VAULT_ACCOUNT"):
        registry = replace(registry, vault_account=environ["KDN_VAULT_ACCOUNT"])

    return SDKConfig(
        network=network,
        registry=registry,
        http=http,
        logging=logging_config,
    )


def load_config_from_file(config_path: Path) -> Optional[SDKConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        SDKConfig if successful, None otherwise
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        network_data = data.get("network", {})
        hosts = network_data.get("hosts", {})
        if not isinstance(hosts, dict):
            raise TypeError("network.hosts must be an object")

        registry_data = data.get("registry", {})
        registry = RegistryConfig(
            mainnet_module=registry_data.get(
                "mainnet_module", KADENANAMES_NAMESPACE_MAINNET_MODULE
            ),
            testnet_module=registry_data.get(
                "testnet_module", KADENANAMES_NAMESPACE_TESTNET_MODULE
            ),
            vault_account=registry_data.get("vault_account", VAULT),
        )

        http_data = data.get("http", {})
        http = HttpConfig(
            timeout_seconds=float(http_data.get("timeout_seconds", 10.0)),
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", "warn"),
            output_format=logging_data.get("output_format", "text"),
        )

        return SDKConfig(
            network=NetworkConfig(hosts={str(k): str(v) for k, v in hosts.items()}),
            registry=registry,
            http=http,
            logging=logging_config,
        )

    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None


def save_config_to_file(config: SDKConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Args:
        config: SDKConfig to save
        config_path: Path to save the configuration

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "network": {
                "hosts": dict(config.network.hosts),
            },
            "registry": {
                "mainnet_module": config.registry.mainnet_module,
                "testnet_module": config.registry.testnet_module,
                "vault_account": config.registry.vault_account,
            },
            "http": {
                "timeout_seconds": config.http.timeout_seconds,
            },
            "logging": {
                "level": config.logging.level,
                "output_format": config.logging.output_format,
            },
        }

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return True

    except (OSError, TypeError) as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False
