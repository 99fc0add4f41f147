"""Command-line entry point.

Usage
-----
::

    ruuvigw --port 9000 --interface 0.0.0.0 --mac-mapping names.yaml

Point the Ruuvi Gateway's "custom HTTP server" at ``http://<host>:9000/``
and scrape ``http://<host>:9000/metrics``.  Every option can also be set
through ``RUUVIGW_*`` environment variables (see
:meth:`ruuvigw.config.ExporterConfig.from_env`).
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from aiohttp import web

from ruuvigw import __version__
from ruuvigw.config import ExporterConfig
from ruuvigw.exceptions import RuuviConfigError
from ruuvigw.labels import LabelMapping
from ruuvigw.server import create_app
from ruuvigw.state import MeasurementStore

_logger = logging.getLogger("ruuvigw")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ruuvigw",
        description="Receive Ruuvi Gateway posts and expose the latest tag readings as metrics.",
    )
    parser.add_argument("--port", "-p", type=int, help="Port to listen on (default: 9000)")
    parser.add_argument("--interface", "-i", help="Interface to bind to (default: 0.0.0.0)")
    parser.add_argument("--mac-mapping", "-m", help="YAML file with MAC address to name mappings")
    parser.add_argument("--log-level", help="Logging level name (default: WARNING)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(argv: Sequence[str] | None = None) -> ExporterConfig:
    """Parse *argv* on top of the environment configuration."""
    args = build_parser().parse_args(argv)
    log_level = "DEBUG" if args.verbose else args.log_level
    return ExporterConfig.from_env(
        port=args.port,
        interface=args.interface,
        mac_mapping=args.mac_mapping,
        log_level=log_level.upper() if log_level else None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    try:
        config = load_config(argv)
    except RuuviConfigError as exc:
        print(f"ruuvigw: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        labels = LabelMapping.load(config.mac_mapping) if config.mac_mapping else LabelMapping()
    except RuuviConfigError as exc:
        _logger.error("%s", exc)
        return 2

    app = create_app(MeasurementStore(), labels, max_body_size=config.max_body_size)
    _logger.warning("Starting server on %s:%s", config.interface, config.port)
    web.run_app(app, host=config.interface, port=config.port, print=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
