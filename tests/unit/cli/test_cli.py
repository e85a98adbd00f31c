"""Tests for the copilot command line interface."""

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from src.copilot.cli import app
from src.copilot.core.models import ApplicationUser
from src.copilot.core.storage import FileDurableStore, UserCache
from src.copilot.runtime.config.config_data import ConfigData, SessionCacheConfig
from src.copilot.runtime.context import with_context
from tests.fixtures.dummies import ScriptedOracle

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("src.copilot.cli.configure_logging"):
        yield


@pytest.fixture
def file_store_config(tmp_path: Path):
    override = ConfigData()
    override.session = SessionCacheConfig(store="file", file_path=str(tmp_path / "storage.json"))
    with with_context(override):
        yield override


class TestVerifyCommand:
    def test_success_exits_zero(self):
        oracle = ScriptedOracle([False, True])

        with patch("src.copilot.cli.verify_commands.build_oracle", return_value=oracle):
            result = runner.invoke(app, ["verify", "0xabc", "--interval-ms", "0"])

        assert result.exit_code == 0
        assert "EAP Purchase Successful" in result.output
        assert oracle.calls == ["0xabc", "0xabc"]

    def test_timeout_exits_one(self):
        oracle = ScriptedOracle([False])

        with patch("src.copilot.cli.verify_commands.build_oracle", return_value=oracle):
            result = runner.invoke(
                app, ["verify", "0xabc", "--interval-ms", "0", "--max-attempts", "3"]
            )

        assert result.exit_code == 1
        assert "Verification Timeout" in result.output
        assert len(oracle.calls) == 3

    def test_invalid_options_exit_two(self):
        with patch("src.copilot.cli.verify_commands.build_oracle") as build_oracle:
            result = runner.invoke(app, ["verify", "0xabc", "--max-attempts", "0"])

        assert result.exit_code == 2
        build_oracle.assert_not_called()

    def test_oracle_option_selects_implementation(self):
        oracle = ScriptedOracle([True])

        with patch(
            "src.copilot.cli.verify_commands.build_oracle", return_value=oracle
        ) as build_oracle:
            runner.invoke(app, ["verify", "5sig", "-i", "0", "-o", "solana"])

        config = build_oracle.call_args.args[0]
        assert config.verification.oracle == "solana"
        assert config.verification.poll_interval_ms == 0


class TestCacheCommands:
    def test_show_empty_cache(self, file_store_config):
        result = runner.invoke(app, ["cache", "show"])

        assert result.exit_code == 0
        assert "No cached user" in result.output

    def test_show_cached_user(self, file_store_config, cached_user: ApplicationUser):
        store = FileDurableStore(file_store_config.session.file_path)
        UserCache(store).save(cached_user)

        result = runner.invoke(app, ["cache", "show"])

        assert result.exit_code == 0
        assert "user-1" in result.output
        assert "did:privy:alice" in result.output

    def test_clear_removes_cached_user(self, file_store_config, cached_user: ApplicationUser):
        store = FileDurableStore(file_store_config.session.file_path)
        UserCache(store).save(cached_user)

        result = runner.invoke(app, ["cache", "clear"])

        assert result.exit_code == 0
        assert "Cached user cleared" in result.output
        assert UserCache(store).load() is None
