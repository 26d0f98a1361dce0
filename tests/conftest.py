"""Shared test fixtures — detector config, sample texts, fake collaborators."""

import os

# Force a demo API key for all tests. No real LLM calls.
# Set unconditionally at import time so a real key in the shell
# environment never reaches Settings().
os.environ["GEMINI_API_KEY"] = "for-demo-purposes-only"

from pathlib import Path
from typing import Any

import pytest

from aigc_check.config import DetectorConfig, Settings
from aigc_check.logger import DetectionLogger

HUMAN_TEXT = (
    "I think the trip went better than I expected. Maybe the weather "
    "helped, but I feel we planned it well. My sister says I worry "
    "too much, and perhaps she is right. I believe we will go back "
    "next spring if the trains are running."
)

GENERATED_TEXT = (
    "## Overview\n"
    "This is a crucial and pivotal topic. Additionally, it is crucial "
    "to note the vital role of planning. Furthermore, the pivotal "
    "factors are crucial. Moreover, vital insights matter. "
    "Additionally, the results are significant. Furthermore, "
    "**significant** progress is vital.\n"
    "As of my last knowledge update, the data was incomplete.\n"
    "I hope this helps! Let me know if you need more. Feel free to ask."
)


@pytest.fixture
def detector_config() -> DetectorConfig:
    return DetectorConfig()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        gemini_api_key="for-demo-purposes-only",
        log_dir=tmp_path / "logs",
        config_path=tmp_path / "missing.yaml",
    )


@pytest.fixture
def detection_logger(tmp_path: Path) -> DetectionLogger:
    return DetectionLogger(tmp_path / "logs")


def mock_llm_response(content: str) -> Any:
    """Build a litellm-shaped response with usage metadata."""
    msg = type("Msg", (), {"content": content})()
    choice = type("Choice", (), {"message": msg})()
    usage = type(
        "Usage",
        (),
        {"prompt_tokens": 100, "completion_tokens": 50},
    )()
    return type(
        "Response", (), {"choices": [choice], "usage": usage}
    )()
