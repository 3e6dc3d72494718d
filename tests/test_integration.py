"""
Integration tests for the end-to-end scan.

Tests the complete workflow from raw block data to rendered report lines,
and the CLI scripts with the node connection mocked out.
"""

import importlib.util
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner
from web3 import Web3

from eth_message_scanner.config import DetectionConfig
from eth_message_scanner.detection.pipeline import MessageDetector
from eth_message_scanner.exceptions import BlockFetchError, LedgerConnectionError
from eth_message_scanner.extraction.core.fetcher import Web3LedgerSource
from eth_message_scanner.extraction.core.utils import Web3ConnectionManager
from eth_message_scanner.scanning.report import format_block_report
from eth_message_scanner.scanning.scanner import BlockScanner

PROJECT_ROOT = Path(__file__).parent.parent
RECIPIENT = Web3.to_checksum_address("0x742d35cc6634c0532925a3b844bc9e7595f0beb1")


def load_script(name: str):
    """Import a CLI script from the scripts/ directory as a module."""
    path = PROJECT_ROOT / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def sample_blocks() -> dict[int, list[dict]]:
    """Load sample block data keyed by block number."""
    fixture_path = Path(__file__).parent / "fixtures" / "sample_blocks.json"
    with open(fixture_path, "r") as f:
        raw = json.load(f)
    return {int(number): transactions for number, transactions in raw.items()}


@pytest.fixture
def mock_manager(sample_blocks):
    """Connection manager mock serving the sample blocks."""
    manager = MagicMock(spec=Web3ConnectionManager)
    manager.get_head_block_number.return_value = max(sample_blocks)

    def get_block(block_number, full_transactions=True):
        if block_number not in sample_blocks:
            raise ValueError(f"Block {block_number} not found")
        return {"number": block_number, "transactions": sample_blocks[block_number]}

    manager.get_block.side_effect = get_block
    return manager


class TestEndToEndScan:
    """Test scanning fixture blocks through the real pipeline."""

    def test_scan_recent_fixture_blocks(self, mock_manager):
        """Test that only blocks with messages are reported, newest first."""
        scanner = BlockScanner(
            source=Web3LedgerSource(mock_manager),
            detector=MessageDetector.from_config(DetectionConfig()),
            sleep=lambda _: None,
        )

        reports = list(scanner.scan_recent(depth=2))

        assert [report.block_number for report in reports] == [19000002, 19000000]

        newest = reports[0]
        assert [finding.tx_hash for finding in newest.findings] == [
            "0x" + "1" * 64,
            "0x" + "3" * 64,
        ]
        assert newest.findings[0].messages == ("hello world this is a test",)
        assert newest.findings[0].to == RECIPIENT
        assert newest.findings[1].messages == (" building in public",)
        assert newest.findings[1].to is None

        oldest = reports[1]
        assert oldest.findings[0].messages == ("Lorem ipsum dolor sit amet",)

        assert scanner.stats.transactions_analyzed == 6

    def test_rendered_output(self, mock_manager):
        """Test the printed line shape for one block."""
        scanner = BlockScanner(
            source=Web3LedgerSource(mock_manager),
            detector=MessageDetector(),
            sleep=lambda _: None,
        )

        report = scanner.scan_block(19000000)
        lines = format_block_report(report)

        assert lines == [
            "",
            "Block 19000000",
            "Tx: 0x" + "6" * 64,
            f"To: {RECIPIENT}",
            "Possible messages:",
            '  - "Lorem ipsum dolor sit amet"',
        ]

    def test_missing_block_is_skipped(self, mock_manager, caplog):
        """Test that a block the node cannot serve does not stop the scan."""
        scanner = BlockScanner(
            source=Web3LedgerSource(mock_manager),
            detector=MessageDetector(),
            sleep=lambda _: None,
        )

        reports = list(scanner.scan([19000003, 19000002]))

        assert [report.block_number for report in reports] == [19000002]
        assert scanner.stats.blocks_failed == 1
        assert "Block 19000003 fetch error" in caplog.text

    def test_fetch_error_type(self, mock_manager):
        """Test that the source raises BlockFetchError for unknown blocks."""
        with pytest.raises(BlockFetchError):
            Web3LedgerSource(mock_manager).block_transactions(1)


class TestScanBlocksCLI:
    """Test the scan_blocks.py script with a mocked connection."""

    @pytest.fixture
    def script(self):
        return load_script("scan_blocks")

    @pytest.fixture
    def config_file(self, tmp_path) -> Path:
        path = tmp_path / "scanner_config.yaml"
        path.write_text(
            "rpc:\n"
            "  credential_env: ETH_MESSAGE_SCANNER_CLI_KEY\n"
            "scan:\n"
            "  depth: 2\n"
            "  pacing_delay: 0\n"
        )
        return path

    @pytest.fixture
    def env_file(self, tmp_path) -> Path:
        path = tmp_path / ".env"
        path.write_text("")
        return path

    def test_missing_credential_is_fatal(self, script, config_file, env_file, monkeypatch):
        """Test that the scan exits with status 1 without a credential."""
        monkeypatch.delenv("ETH_MESSAGE_SCANNER_CLI_KEY", raising=False)

        result = CliRunner().invoke(
            script.main, ["--config", str(config_file), "--env-file", str(env_file)]
        )

        assert result.exit_code == 1

    def test_connection_failure_is_fatal(
        self, script, config_file, env_file, monkeypatch
    ):
        """Test that a failed handshake exits with status 1."""
        monkeypatch.setenv("ETH_MESSAGE_SCANNER_CLI_KEY", "abc123")

        def fail(**kwargs):
            raise LedgerConnectionError("Failed to connect to Ethereum node")

        monkeypatch.setattr(script, "Web3ConnectionManager", fail)

        result = CliRunner().invoke(
            script.main, ["--config", str(config_file), "--env-file", str(env_file)]
        )

        assert result.exit_code == 1

    def test_scan_prints_reports(
        self, script, config_file, env_file, mock_manager, monkeypatch
    ):
        """Test a full scan with reports printed to stdout."""
        monkeypatch.setenv("ETH_MESSAGE_SCANNER_CLI_KEY", "abc123")
        captured = {}

        def connect(**kwargs):
            captured.update(kwargs)
            return mock_manager

        monkeypatch.setattr(script, "Web3ConnectionManager", connect)

        result = CliRunner().invoke(
            script.main, ["--config", str(config_file), "--env-file", str(env_file)]
        )

        assert result.exit_code == 0
        assert captured["rpc_url"] == "https://mainnet.infura.io/v3/abc123"
        assert "abc123" not in captured["display_url"]
        assert "Block 19000002" in result.output
        assert "Block 19000001" not in result.output
        assert '  - "Lorem ipsum dolor sit amet"' in result.output


class TestAnalyzePayloadCLI:
    """Test the analyze_payload.py script."""

    @pytest.fixture
    def script(self):
        return load_script("analyze_payload")

    def test_readable_payload(self, script):
        """Test the stage breakdown for a readable payload."""
        payload = "0x" + b"hello world, xk qz".hex()

        result = CliRunner().invoke(script.main, [payload])

        assert result.exit_code == 0
        assert 'Decoded text: "hello world, xk qz"' in result.output
        assert '"hello world" [accepted]' in result.output
        assert '" xk qz" [rejected]' in result.output
        assert "Possible messages: 1" in result.output

    def test_contract_call(self, script):
        """Test that a known selector is reported and skipped."""
        payload = "a9059cbb" + b"hello world".hex()

        result = CliRunner().invoke(script.main, [payload])

        assert result.exit_code == 0
        assert "Known contract call: ERC20 transfer" in result.output

    def test_lenient_flag(self, script):
        """Test that --lenient accepts vowel-free words."""
        payload = b"rhythm myths".hex()

        strict = CliRunner().invoke(script.main, [payload])
        lenient = CliRunner().invoke(script.main, [payload, "--lenient"])

        assert "Possible messages: 0" in strict.output
        assert "Possible messages: 1" in lenient.output

    def test_invalid_hex(self, script):
        """Test that malformed hex exits with status 1."""
        result = CliRunner().invoke(script.main, ["0xnothex"])

        assert result.exit_code == 1
