"""Command-line access to the plugin configuration.

Usage examples::

    plugin-config show
    plugin-config get debug.log_level
    plugin-config set performance.cache_duration 600
    plugin-config --store options.yml reset
    plugin-config env
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from plugin_boilerplate.admin.sections import resolve_path
from plugin_boilerplate.config import Config, HostEnvironment, cast_value
from plugin_boilerplate.core.exceptions import UnknownSettingError
from plugin_boilerplate.core.option_store import YamlOptionStore
from plugin_boilerplate.logging_config import setup_logging
from plugin_boilerplate.version import PLUGIN_NAME, get_plugin_version

logger = logging.getLogger(__name__)

DEFAULT_STORE = "plugin-options.yml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugin-config",
        description=f"Inspect and change {PLUGIN_NAME} configuration.",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=Path(os.environ.get("PLUGIN_BOILERPLATE_STORE", DEFAULT_STORE)),
        help="YAML option file (default: %(default)s)",
    )
    parser.add_argument(
        "--constants",
        type=Path,
        default=None,
        help="YAML file of bootstrap constants",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable logging output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_plugin_version()}")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the effective configuration")

    get_cmd = sub.add_parser("get", help="Print one value")
    get_cmd.add_argument("key")
    get_cmd.add_argument("--default", default=None)

    set_cmd = sub.add_parser("set", help="Change one value and save")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")
    set_cmd.add_argument("--no-save", action="store_true", help="Do not persist the change")
    set_cmd.add_argument("--strict", action="store_true", help="Only accept known settings")

    sub.add_parser("reset", help="Delete stored settings and restore defaults")
    sub.add_parser("env", help="Show environment classification")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    host = HostEnvironment.from_environ(constants_path=args.constants)
    config = Config(store=YamlOptionStore(args.store), host=host)
    if args.verbose:
        setup_logging(config)

    if args.command == "show":
        print(yaml.safe_dump(config.get_config(), default_flow_style=False, sort_keys=False), end="")
        return 0

    if args.command == "get":
        print(json.dumps(config.get(args.key, args.default)))
        return 0

    if args.command == "set":
        if args.strict:
            try:
                resolve_path(args.key)
            except UnknownSettingError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 2
        config.set(args.key, cast_value(args.value))
        if args.no_save:
            return 0
        if not config.save():
            print("error: could not save configuration", file=sys.stderr)
            return 1
        return 0

    if args.command == "reset":
        config.reset()
        return 0

    if args.command == "env":
        print(f"environment_type: {host.environment_type}")
        print(f"wp_debug: {str(host.wp_debug).lower()}")
        print(f"site_url: {host.site_url}")
        print(f"development: {str(config.is_development()).lower()}")
        print(f"production: {str(config.is_production()).lower()}")
        print(f"staging: {str(config.is_staging()).lower()}")
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
