#!/usr/bin/env python3
"""
Scan recent Ethereum blocks for human-readable messages in transaction data.

CLI wrapper script for the block scanner.

Usage:
    python scripts/scan_blocks.py --config configs/scanner_config.yaml

The RPC credential is read from the environment variable named in the
config (INFURA_KEY by default), optionally loaded from a .env file.
Reports are printed to stdout; logs go to stderr.
"""

import logging
import sys
from pathlib import Path

import click
import yaml

from eth_message_scanner.config import ScannerConfig, load_credential
from eth_message_scanner.detection.pipeline import MessageDetector
from eth_message_scanner.exceptions import ScannerError
from eth_message_scanner.extraction.core.fetcher import Web3LedgerSource
from eth_message_scanner.extraction.core.utils import (
    Web3ConnectionManager,
    build_rpc_url,
    redact_rpc_url,
    setup_logging,
)
from eth_message_scanner.scanning.report import format_block_report
from eth_message_scanner.scanning.scanner import BlockScanner, ScanDirection

logger = logging.getLogger(__name__)


def load_config(config_path: Path | None = None) -> ScannerConfig:
    """Load scanner configuration, falling back to defaults if absent."""
    if config_path is None:
        # Default to project root configs/scanner_config.yaml
        project_root = Path(__file__).parent.parent
        config_path = project_root / "configs" / "scanner_config.yaml"

        if not config_path.exists():
            logger.warning(f"Config file not found at {config_path}, using defaults")
            return ScannerConfig()

    return ScannerConfig.from_yaml(config_path)


@click.command()
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to scanner config YAML file (optional)",
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to .env file holding the RPC credential (optional)",
)
@click.option(
    "--depth",
    type=click.IntRange(min=0),
    default=None,
    help="Number of blocks below the chain head to scan (overrides config)",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Logging level (overrides config)",
)
def main(
    config: Path | None, env_file: Path | None, depth: int | None, log_level: str | None
) -> None:
    """
    Scan recent Ethereum blocks for embedded text messages.

    Known contract calls are skipped; every other payload is decoded and
    checked for plausible natural-language text.
    """
    try:
        cfg = load_config(config)
    except (ValueError, OSError, yaml.YAMLError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    setup_logging(level=log_level or cfg.logging.level, log_format=cfg.logging.format)

    scan_depth = depth if depth is not None else cfg.scan.depth

    try:
        credential = load_credential(cfg.rpc.credential_env, env_file)
        rpc_url = build_rpc_url(cfg.rpc.url_template, credential)

        manager = Web3ConnectionManager(
            rpc_url=rpc_url,
            timeout=cfg.rpc.timeout,
            display_url=redact_rpc_url(rpc_url, credential),
        )
        detector = MessageDetector.from_config(cfg.detection)
        scanner = BlockScanner(
            source=Web3LedgerSource(manager),
            detector=detector,
            pacing_delay=cfg.scan.pacing_delay,
        )

        reports = scanner.scan_recent(
            depth=scan_depth, direction=ScanDirection(cfg.scan.direction)
        )
        for report in reports:
            for line in format_block_report(report):
                click.echo(line)

    except (ScannerError, ValueError, OSError) as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
