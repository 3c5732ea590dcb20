"""Command-line driver.

Usage:
    anvil plugins                      # list applied plugins in order
    anvil --plugin ./my_plugin.py clean
    anvil build                        # run the build hook
    anvil schema                       # JSON schema of .anvil/plugins.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from anvil import __version__
from anvil.compilation import BuildCompilation
from anvil.configuration import BuildConfiguration
from anvil.log import configure_logging
from anvil.plugins.config_file import plugin_configuration_schema
from anvil.plugins.errors import AnvilError
from anvil.plugins.manager import PluginManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="anvil", description="Plugin-driven build orchestrator")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--build-folder",
        type=Path,
        default=Path.cwd(),
        help="Project folder to build (default: current directory)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show plugin loading details")
    parser.add_argument(
        "--plugin",
        dest="plugins",
        action="append",
        default=[],
        metavar="SPEC",
        help="Additional plugin to apply after the configured ones (repeatable)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("plugins", help="Apply all plugins and list them in application order")
    sub.add_parser("clean", help="Apply all plugins and run the clean action")
    sub.add_parser("build", help="Apply all plugins and run the build action")
    sub.add_parser("schema", help="Print the JSON schema of the plugin configuration file")
    return parser


def _create_manager(build_folder: Path) -> PluginManager:
    configuration = BuildConfiguration.initialize(build_folder)
    return PluginManager(configuration, BuildCompilation())


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose or None)

    if args.command == "schema":
        print(json.dumps(plugin_configuration_schema(), indent=2))
        return 0

    try:
        manager = _create_manager(args.build_folder)
        manager.initialize_all(args.plugins)

        if args.command == "plugins":
            for name in manager.applied_plugins:
                print(name)
        elif args.command == "clean":
            manager.compilation.run_clean()
        elif args.command == "build":
            manager.compilation.run_build()
    except AnvilError as e:
        logger.error(str(e))
        if e.__cause__ is not None:
            logger.opt(exception=e.__cause__).debug("Caused by:")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
