"""
Human-readable rendering of block reports.

Output is line-oriented text:

    Block <n>
    Tx: <hash>
    To: <address>
    Possible messages:
      - "<message>"

A blank line precedes every block header. The "To:" line is omitted for
contract creations or when destinations are not requested.
"""

import json

from ..detection.models import BlockReport


def quote_message(message: str) -> str:
    """Double-quote a message, escaping quotes and backslashes."""
    return json.dumps(message, ensure_ascii=False)


def format_block_report(
    report: BlockReport, include_destination: bool = True
) -> list[str]:
    """
    Render a block report as output lines.

    Args:
        report: Block report with at least one finding
        include_destination: Emit a "To:" line for findings with a destination

    Returns:
        Lines without trailing newlines
    """
    lines = ["", f"Block {report.block_number}"]

    for finding in report.findings:
        lines.append(f"Tx: {finding.tx_hash}")
        if include_destination and finding.to:
            lines.append(f"To: {finding.to}")
        lines.append("Possible messages:")
        lines.extend(f"  - {quote_message(message)}" for message in finding.messages)

    return lines
