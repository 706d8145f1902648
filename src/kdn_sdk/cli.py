"""
Command-line interface for the KadenaNames SDK.

This module provides the main CLI entry point with commands for:
- name-to-address / address-to-name: Resolve names and addresses
- sale-state / name-info / price: Query registry state
- prepare-register / prepare-affiliate: Print unsigned transactions
- send: Submit a signed transaction read from a JSON file
- config: Configuration management

Results are printed as JSON on stdout.
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from . import __version__
from .audit_logger import AuditLogger
from .config import (
    DEFAULT_CONFIG_PATH,
    SDKConfig,
    apply_env_overrides,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)
from .enums import LogLevel
from .exceptions import KdnSdkError
from .models import PRICE_MAP, Result, UnsignedTransaction
from .sdk import KadenaNamesSDK

DEFAULT_NETWORK = "mainnet01"


def _load_config(args: argparse.Namespace) -> Optional[SDKConfig]:
    """Config file (if given), then .env / KDN_* environment overrides."""
    config = None
    if getattr(args, "config", None):
        config = load_config_from_file(Path(args.config))
        if config is None:
            print(f"Error: Could not load config from {args.config}", file=sys.stderr)
            return None

    if config is None:
        config = create_default_config()

    load_dotenv()
    return apply_env_overrides(config, os.environ)


def create_sdk(config: SDKConfig, verbose: bool = False) -> KadenaNamesSDK:
    logger = None
    if verbose:
        logger = AuditLogger(output_format="text", min_level=LogLevel.DEBUG)
    return KadenaNamesSDK(config=config, logger=logger)


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def print_result(result: Result) -> int:
    """Print a Result as JSON and map it to an exit code."""
    output = {"success": result.success}
    if result.success:
        output["data"] = _serialize(result.data)
    else:
        output["error"] = result.error
        output["error_code"] = result.error_code
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0 if result.success else 1


def _run(args: argparse.Namespace, operation) -> int:
    config = _load_config(args)
    if config is None:
        return 1
    sdk = create_sdk(config, verbose=args.verbose)
    result = asyncio.run(operation(sdk))
    return print_result(result)


def cmd_name_to_address(args: argparse.Namespace) -> int:
    """Handle the 'name-to-address' command."""
    return _run(args, lambda sdk: sdk.name_to_address(args.name, args.network))


def cmd_address_to_name(args: argparse.Namespace) -> int:
    """Handle the 'address-to-name' command."""
    return _run(args, lambda sdk: sdk.address_to_name(args.address, args.network))


def cmd_sale_state(args: argparse.Namespace) -> int:
    """Handle the 'sale-state' command."""
    return _run(args, lambda sdk: sdk.fetch_sale_state(args.name, args.network))


def cmd_name_info(args: argparse.Namespace) -> int:
    """Handle the 'name-info' command."""
    return _run(
        args, lambda sdk: sdk.fetch_name_info(args.name, args.network, args.owner)
    )


def cmd_price(args: argparse.Namespace) -> int:
    """Handle the 'price' command."""
    return _run(
        args,
        lambda sdk: sdk.fetch_price_by_period(args.period, args.network, args.owner),
    )


def cmd_prepare_register(args: argparse.Namespace) -> int:
    """Handle the 'prepare-register' command."""
    return _run(
        args,
        lambda sdk: sdk.prepare_register_name_transaction(
            args.owner,
            args.address,
            args.name,
            args.period,
            args.network,
            args.account,
        ),
    )


def cmd_prepare_affiliate(args: argparse.Namespace) -> int:
    """Handle the 'prepare-affiliate' command."""
    config = _load_config(args)
    if config is None:
        return 1
    sdk = create_sdk(config, verbose=args.verbose)
    result = sdk.prepare_add_affiliate_transaction(
        args.affiliate_name,
        args.fee_address,
        args.fee,
        args.admin_key,
        args.network,
    )
    return print_result(result)


def cmd_send(args: argparse.Namespace) -> int:
    """Handle the 'send' command."""
    try:
        with open(args.file, "r", encoding="utf-8") as f:
            transaction = UnsignedTransaction.from_dict(json.load(f))
    except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
        print(f"Error: Could not read transaction from {args.file}: {e}", file=sys.stderr)
        return 1

    try:
        return _run(
            args,
            lambda sdk: sdk.send_transaction(transaction, args.network, args.chain_id),
        )
    except KdnSdkError as e:
        print(json.dumps(e.to_dict(), indent=2, ensure_ascii=False), file=sys.stderr)
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"No configuration found at: {config_path}")
            print("Use 'config init' to create a default configuration.")
            return 1

        print(f"Configuration from: {config_path}")
        hosts = ", ".join(f"{k}={v}" for k, v in config.network.hosts.items()) or "(defaults)"
        print(f"  Hosts: {hosts}")
        print(f"  Mainnet module: {config.registry.mainnet_module}")
        print(f"  Testnet module: {config.registry.testnet_module}")
        print(f"  Vault account: {config.registry.vault_account}")
        print(f"  HTTP timeout: {config.http.timeout_seconds}s")
        print(f"  Log level: {config.logging.level}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        if save_config_to_file(create_default_config(), config_path):
            print(f"Configuration created at: {config_path}")
            return 0
        return 1

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return 1

        print(f"Configuration at {config_path} is valid.")
        return 0

    return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--network", "-n",
        default=DEFAULT_NETWORK,
        help=f"Network id (default: {DEFAULT_NETWORK})",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every request to stderr",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="kdn-sdk",
        description="KadenaNames resolution and transaction preparation",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    name_parser = subparsers.add_parser("name-to-address", help="Resolve a name to its address")
    name_parser.add_argument("name", help="Name to resolve (e.g., example.kda)")
    _add_common_arguments(name_parser)
    name_parser.set_defaults(func=cmd_name_to_address)

    address_parser = subparsers.add_parser("address-to-name", help="Resolve an address to its name")
    address_parser.add_argument("address", help="Account address (e.g., k:...)")
    _add_common_arguments(address_parser)
    address_parser.set_defaults(func=cmd_address_to_name)

    sale_parser = subparsers.add_parser("sale-state", help="Show whether a name is for sale")
    sale_parser.add_argument("name", help="Name to query")
    _add_common_arguments(sale_parser)
    sale_parser.set_defaults(func=cmd_sale_state)

    info_parser = subparsers.add_parser("name-info", help="Show price, availability and expiry of a name")
    info_parser.add_argument("name", help="Name to query")
    info_parser.add_argument("--owner", "-o", default="", help="Account used as query sender")
    _add_common_arguments(info_parser)
    info_parser.set_defaults(func=cmd_name_info)

    price_parser = subparsers.add_parser("price", help="Show the registration price for a period")
    price_parser.add_argument(
        "period",
        type=int,
        choices=sorted(PRICE_MAP),
        help="Registration period in years",
    )
    price_parser.add_argument("--owner", "-o", default="", help="Account used as query sender")
    _add_common_arguments(price_parser)
    price_parser.set_defaults(func=cmd_price)

    register_parser = subparsers.add_parser(
        "prepare-register",
        help="Print an unsigned name registration transaction",
    )
    register_parser.add_argument("name", help="Name to register")
    register_parser.add_argument("--owner", required=True, help="Owner account paying the fee")
    register_parser.add_argument("--address", required=True, help="Address the name resolves to")
    register_parser.add_argument("--account", required=True, help="Public key signing the transaction")
    register_parser.add_argument(
        "--period",
        type=int,
        choices=sorted(PRICE_MAP),
        default=1,
        help="Registration period in years (default: 1)",
    )
    _add_common_arguments(register_parser)
    register_parser.set_defaults(func=cmd_prepare_register)

    affiliate_parser = subparsers.add_parser(
        "prepare-affiliate",
        help="Print an unsigned add-affiliate transaction",
    )
    affiliate_parser.add_argument("affiliate_name", help="Affiliate name")
    affiliate_parser.add_argument("--fee-address", required=True, help="Account receiving affiliate fees")
    affiliate_parser.add_argument("--fee", type=float, required=True, help="Affiliate fee share")
    affiliate_parser.add_argument("--admin-key", required=True, help="Governance account sending the transaction")
    _add_common_arguments(affiliate_parser)
    affiliate_parser.set_defaults(func=cmd_prepare_affiliate)

    send_parser = subparsers.add_parser("send", help="Submit a signed transaction")
    send_parser.add_argument("file", help="Path to signed transaction JSON ({cmd, hash, sigs})")
    send_parser.add_argument("--chain-id", help="Target chain (default: derived from network)")
    _add_common_arguments(send_parser)
    send_parser.set_defaults(func=cmd_send)

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument("--path", "-p", help="Path to configuration file")
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
