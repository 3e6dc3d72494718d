"""
Ethereum block extraction.

This module provides tools for connecting to an Ethereum node and turning
its blocks into immutable transaction payloads for message detection.
"""
