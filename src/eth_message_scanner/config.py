"""
Scanner configuration management.

This module provides utilities for loading, validating, and accessing
scanner configuration from YAML files, plus the RPC credential from the
environment (optionally populated from a .env file).

Usage:
    from eth_message_scanner.config import ScannerConfig, load_credential

    config = ScannerConfig.from_yaml("configs/scanner_config.yaml")
    api_key = load_credential(config.rpc.credential_env)
    print(config.scan.depth)  # 100
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from .exceptions import MissingCredentialError

logger = logging.getLogger(__name__)

DECODING_STRATEGIES = ("codepoint", "ascii")
SCAN_DIRECTIONS = ("descending", "ascending")


@dataclass
class RPCConfig:
    """Ethereum node endpoint configuration."""

    url_template: str = "https://mainnet.infura.io/v3/{api_key}"
    credential_env: str = "INFURA_KEY"
    timeout: int = 30

    def __post_init__(self):
        """Validate configuration values."""
        if "{api_key}" not in self.url_template:
            raise ValueError(
                f"url_template must contain an {{api_key}} placeholder, "
                f"got {self.url_template}"
            )
        if not self.credential_env:
            raise ValueError("credential_env cannot be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


@dataclass
class ScanConfig:
    """Block range and pacing configuration."""

    depth: int = 100  # Blocks below the chain head to scan
    pacing_delay: float = 0.25  # Seconds to wait between blocks
    direction: str = "descending"

    def __post_init__(self):
        """Validate configuration values."""
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")
        if self.pacing_delay < 0:
            raise ValueError(
                f"pacing_delay must be non-negative, got {self.pacing_delay}"
            )
        if self.direction not in SCAN_DIRECTIONS:
            raise ValueError(
                f"direction must be 'descending' or 'ascending', got {self.direction}"
            )


@dataclass
class DetectionConfig:
    """Message detection heuristics."""

    strategy: str = "codepoint"
    min_message_length: int = 4
    min_words: int = 2
    min_word_length: int = 3
    letter_ratio: float = 0.6
    with_letter_ratio_check: bool = True
    require_vowel: bool = True
    signatures_file: str | None = None

    def __post_init__(self):
        """Validate configuration values."""
        if self.strategy not in DECODING_STRATEGIES:
            raise ValueError(
                f"strategy must be 'codepoint' or 'ascii', got {self.strategy}"
            )
        if self.min_message_length <= 0:
            raise ValueError(
                f"min_message_length must be positive, got {self.min_message_length}"
            )
        # Remaining thresholds are validated by ClassifierConfig


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        """Validate configuration values."""
        if self.level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Unknown logging level: {self.level}")


@dataclass
class ScannerConfig:
    """Complete scanner configuration."""

    rpc: RPCConfig = field(default_factory=RPCConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "ScannerConfig":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            ScannerConfig instance with loaded values

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If YAML structure is invalid
            yaml.YAMLError: If YAML parsing fails
        """
        yaml_path = Path(yaml_path)

        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        logger.info(f"Loading scanner configuration from {yaml_path}")

        with open(yaml_path, "r") as f:
            config_dict = yaml.safe_load(f)

        if not config_dict:
            raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

        try:
            config = cls.from_dict(config_dict)
        except TypeError as e:
            raise ValueError(
                f"Invalid configuration structure in {yaml_path}: {e}"
            ) from e

        logger.debug(f"Scan depth: {config.scan.depth}")
        logger.debug(f"Decoding strategy: {config.detection.strategy}")
        return config

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ScannerConfig":
        """
        Create configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            ScannerConfig instance
        """
        return cls(
            rpc=RPCConfig(**(config_dict.get("rpc") or {})),
            scan=ScanConfig(**(config_dict.get("scan") or {})),
            detection=DetectionConfig(**(config_dict.get("detection") or {})),
            logging=LoggingConfig(**(config_dict.get("logging") or {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def save_yaml(self, yaml_path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            yaml_path: Path to save YAML file
        """
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {yaml_path}")


def load_credential(env_var: str, env_file: str | Path | None = None) -> str:
    """
    Read the RPC credential from the environment.

    Values from a .env file are loaded first without overriding variables
    already set in the process environment.

    Args:
        env_var: Name of the environment variable holding the credential
        env_file: Optional .env path. Searches from the working directory if None.

    Returns:
        The credential string, stripped of surrounding whitespace

    Raises:
        MissingCredentialError: If the variable is unset or blank
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    credential = (os.getenv(env_var) or "").strip()
    if not credential:
        raise MissingCredentialError(env_var)

    return credential
