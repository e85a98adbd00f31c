"""Unit tests for the application context and scoped config overrides."""

import asyncio

import pytest

from src.copilot.runtime.config.config_data import ConfigData
from src.copilot.runtime.context import AppContext, get_config, get_context, with_context


class TestContextManager:
    def test_default_context_available(self):
        """Should have a default context available."""
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_level(self):
        """Should override config for the duration of the context manager."""
        original_config = get_config()
        original_interval = original_config.verification.poll_interval_ms

        test_config = ConfigData()
        test_config.verification.poll_interval_ms = 1

        with with_context(test_config):
            override_config = get_config()
            assert override_config.verification.poll_interval_ms == 1
            assert override_config is not original_config

        after_config = get_config()
        assert after_config.verification.poll_interval_ms == original_interval
        assert after_config is original_config

    def test_unset_fields_are_inherited(self):
        """Fields not explicitly set on the override keep the enclosing values."""
        outer = ConfigData()
        outer.verification.max_attempts = 7

        with with_context(outer):
            inner = ConfigData()
            inner.verification.poll_interval_ms = 0

            with with_context(inner):
                config = get_config()
                assert config.verification.poll_interval_ms == 0
                assert config.verification.max_attempts == 7

            assert get_config().verification.max_attempts == 7

    def test_none_override_is_noop(self):
        original = get_config()

        with with_context(None):
            assert get_config() is original

    def test_rejects_non_config_override(self):
        with pytest.raises(ValueError):
            with with_context({"verification": {}}):
                pass

    @pytest.mark.asyncio
    async def test_override_is_task_local(self):
        """An override in one task must not leak into a concurrent task."""
        seen: dict[str, str] = {}
        entered = asyncio.Event()
        checked = asyncio.Event()

        async def overriding():
            override = ConfigData()
            override.session.store = "file"
            with with_context(override):
                entered.set()
                seen["inside"] = get_config().session.store
                await checked.wait()

        async def observing():
            await entered.wait()
            seen["outside"] = get_config().session.store
            checked.set()

        await asyncio.gather(overriding(), observing())

        assert seen["inside"] == "file"
        assert seen["outside"] == get_config().session.store
