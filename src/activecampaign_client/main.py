#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Command-line interface for the ActiveCampaign client.

Reads configuration from the environment (or a .env file), fetches a resource
and prints it as JSON.
"""

import sys
import json
import argparse
import logging
from typing import Any, Dict, List, Optional, Union

from activecampaign_client.client import ActiveCampaignClient
from activecampaign_client.config import ClientConfig
from activecampaign_client.exceptions import ActiveCampaignError
from activecampaign_client.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

# resource -> (list method, single-item method)
RESOURCES = {
    "contacts": ("get_contacts", "get_contact"),
    "accounts": ("get_accounts", "get_account"),
    "account-custom-fields": ("get_account_custom_fields", None),
    "custom-fields": ("get_custom_fields", None),
    "tags": ("get_tags", None),
    "deals": ("get_deals", "get_deal"),
    "deal-custom-fields": ("get_deal_custom_fields", None),
    "deal-custom-field-data": (None, "get_deal_custom_field_data"),
    "connections": ("get_connections", "get_connection"),
    "connection-customers": (None, "get_connection_customers"),
    "customers": ("get_customers", None),
    "orders": ("get_orders", None),
}


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up command-line argument parsing.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="activecampaign",
        description="Query the ActiveCampaign API",
        epilog="Set ACTIVECAMPAIGN_API_URL and ACTIVECAMPAIGN_API_KEY in the environment or a .env file.",
    )

    parser.add_argument(
        "resource",
        choices=sorted(RESOURCES),
        help="Resource to fetch",
    )
    parser.add_argument(
        "--id",
        type=str,
        help="Fetch a single item by ID",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter to send (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: DEBUG when DEBUG_MODE is true, else LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Format log output as JSON",
    )

    return parser


def parse_params(pairs: List[str]) -> Dict[str, str]:
    """
    Parse KEY=VALUE pairs into a dictionary.

    Raises:
        ValueError: If a pair has no '='
    """
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid parameter (expected KEY=VALUE): {pair}")
        params[key] = value
    return params


def fetch_resource(
    client: ActiveCampaignClient,
    resource: str,
    item_id: Optional[str],
    params: Dict[str, str],
) -> Any:
    """
    Call the client method that serves a resource.

    Raises:
        ValueError: If the resource cannot be fetched the way requested
    """
    list_method, item_method = RESOURCES[resource]

    if resource == "connection-customers":
        return client.get_connection_customers(item_id, params or None)

    if item_id:
        if item_method is None:
            raise ValueError(f"'{resource}' cannot be fetched by ID")
        return getattr(client, item_method)(item_id)

    if list_method is None:
        raise ValueError(f"'{resource}' requires --id")
    return getattr(client, list_method)(params or None)


def resolve_log_level(cli_level: Optional[str], config: ClientConfig) -> Union[int, str]:
    """
    Pick the logging level: --log-level first, then DEBUG_MODE, then LOG_LEVEL.
    """
    if cli_level:
        return cli_level
    if config.debug_mode:
        return logging.DEBUG
    return config.log_level


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        int: Exit code
    """
    parser = setup_argparse()
    args = parser.parse_args(argv)

    config = ClientConfig()
    configure_logging(
        level=resolve_log_level(args.log_level, config),
        log_file=str(config.log_file_path) if config.log_file_path else None,
        json_logs=args.json_logs,
    )

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 2

    try:
        params = parse_params(args.param)
        with ActiveCampaignClient.from_config(config) as client:
            result = fetch_resource(client, args.resource, args.id, params)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ActiveCampaignError as e:
        logger.debug(f"Request failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
