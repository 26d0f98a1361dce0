"""Tests for two-phase singleton logging configuration."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from aigc_check.logging_config import (
    _LITELLM_LOGGERS,
    _SUPPRESSED_LOGGERS,
    cleanup_third_party_handlers,
    set_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_flags() -> Iterator[None]:
    import aigc_check.logging_config as mod

    mod._phase1_done = False
    mod._phase2_done = False
    root_level = logging.getLogger().level
    yield
    logging.getLogger().setLevel(root_level)


class TestSetupLogging:
    def test_first_call_wins(self) -> None:
        with patch("aigc_check.logging_config.logging.basicConfig") as mock_bc:
            setup_logging("DEBUG")
            setup_logging("ERROR")
        mock_bc.assert_called_once()
        kwargs = mock_bc.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert kwargs["stream"] is sys.stderr

    def test_litellm_log_env_default(self) -> None:
        os.environ.pop("LITELLM_LOG", None)
        with patch("aigc_check.logging_config.logging.basicConfig"):
            setup_logging()
        assert os.environ.get("LITELLM_LOG") == "WARNING"

    def test_litellm_log_env_not_overwritten(self) -> None:
        os.environ["LITELLM_LOG"] = "ERROR"
        try:
            with patch("aigc_check.logging_config.logging.basicConfig"):
                setup_logging()
            assert os.environ["LITELLM_LOG"] == "ERROR"
        finally:
            os.environ.pop("LITELLM_LOG", None)

    def test_noisy_loggers_raised_to_warning(self) -> None:
        logging.getLogger("httpx").setLevel(logging.DEBUG)
        with patch("aigc_check.logging_config.logging.basicConfig"):
            setup_logging()
        for name in _SUPPRESSED_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING, name

    def test_set_level_after_setup(self) -> None:
        set_level("info")
        assert logging.getLogger().level == logging.INFO


class TestCleanupThirdPartyHandlers:
    def test_handlers_cleared_and_propagating(self) -> None:
        for name in _LITELLM_LOGGERS:
            lg = logging.getLogger(name)
            lg.addHandler(logging.StreamHandler())
            lg.propagate = False

        cleanup_third_party_handlers()

        for name in _LITELLM_LOGGERS:
            lg = logging.getLogger(name)
            assert lg.handlers == []
            assert lg.propagate is True

    def test_second_call_is_noop(self) -> None:
        lg = logging.getLogger("LiteLLM")
        cleanup_third_party_handlers()

        handler = logging.StreamHandler()
        lg.addHandler(handler)
        try:
            cleanup_third_party_handlers()
            assert handler in lg.handlers
        finally:
            lg.removeHandler(handler)
