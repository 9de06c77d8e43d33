#!/usr/bin/env python3
"""
Script: run_dashboard.py

Purpose: Serve the interactive salary dashboard.

Usage:
    python scripts/run_dashboard.py
    python scripts/run_dashboard.py --data data/ds_salaries.csv --port 8050
    python scripts/run_dashboard.py --config config/dashboard.yaml --debug
    python scripts/run_dashboard.py --synthetic --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from salaryflow.config import load_config
from salaryflow.dashboard.app import create_app
from salaryflow.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Serve the interactive data science salary dashboard"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="YAML configuration file (optional)",
    )
    parser.add_argument(
        "--data",
        type=str,
        help="Salary CSV to load (default: data/ds_salaries.csv)",
    )
    parser.add_argument(
        "--host",
        type=str,
        help="Interface to bind (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: 8050)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Run Dash in debug mode with hot reload",
    )
    parser.add_argument(
        "--synthetic",
        action="store_true",
        help="Serve a generated sample dataset instead of reading a CSV",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(
            args.config,
            data_path=args.data,
            host=args.host,
            port=args.port,
            debug=args.debug,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.message}")
        sys.exit(1)

    app = create_app(config, synthetic=args.synthetic)
    logger.info(f"Serving dashboard on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=config.debug)


if __name__ == "__main__":
    main()
