#!/usr/bin/env python3
"""
Inspect a single transaction payload stage by stage.

Shows the signature check, decoded text, candidates, and accepted messages
for one hex-encoded payload. Useful for tuning the detection heuristics
without connecting to a node.

Usage:
    python scripts/analyze_payload.py 0x68656c6c6f20776f726c64
    python scripts/analyze_payload.py --strategy ascii --lenient 48656c6c6f
"""

import sys
from dataclasses import replace
from pathlib import Path

import click
import yaml

from eth_message_scanner.config import DetectionConfig, ScannerConfig
from eth_message_scanner.detection.pipeline import MessageDetector
from eth_message_scanner.extraction.core.normalization import normalize_hex_field
from eth_message_scanner.extraction.core.utils import setup_logging
from eth_message_scanner.scanning.report import quote_message


@click.command()
@click.argument("payload")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to scanner config YAML file (optional)",
)
@click.option(
    "--strategy",
    type=click.Choice(["codepoint", "ascii"]),
    default=None,
    help="Decoding strategy (overrides config)",
)
@click.option(
    "--lenient",
    is_flag=True,
    help="Disable the letter-ratio and vowel checks",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default="WARNING",
    help="Logging level",
)
def main(
    payload: str, config: Path | None, strategy: str | None, lenient: bool, log_level: str
) -> None:
    """Analyze a hex-encoded PAYLOAD (with or without 0x prefix)."""
    setup_logging(level=log_level)

    try:
        if config:
            detection = ScannerConfig.from_yaml(config).detection
        else:
            detection = DetectionConfig()

        if strategy:
            detection = replace(detection, strategy=strategy)
        if lenient:
            detection = replace(
                detection, with_letter_ratio_check=False, require_vowel=False
            )

        detector = MessageDetector.from_config(detection)
        data = normalize_hex_field(payload)
    except (ValueError, OSError, yaml.YAMLError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    analysis = detector.inspect_payload(data)

    click.echo(f"Payload length: {analysis.payload_length} bytes")
    if analysis.payload_length == 0:
        click.echo("Empty payload: nothing to decode")
        return
    if analysis.signature is not None:
        click.echo(f"Known contract call: {analysis.signature} (skipped)")
        return

    click.echo(f"Decoded text: {quote_message(analysis.decoded)}")
    click.echo(f"Candidates ({len(analysis.candidates)}):")
    for candidate in analysis.candidates:
        verdict = "accepted" if candidate in analysis.accepted else "rejected"
        click.echo(f"  - {quote_message(candidate)} [{verdict}]")

    click.echo(f"Possible messages: {len(analysis.accepted)}")


if __name__ == "__main__":
    main()
