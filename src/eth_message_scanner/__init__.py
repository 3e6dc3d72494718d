"""
Ethereum Message Scanner

A forensics toolkit for finding human-readable text hidden in the data
field of Ethereum transactions. Scans a rolling window of recent blocks,
skips well-known contract calls, and applies a cheap heuristic classifier
to separate plausible messages from binary noise.
"""

__version__ = "0.1.0"
