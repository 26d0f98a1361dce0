"""Singleton logging configuration — two-phase initialization.

Phase 1: setup_logging() — call BEFORE litellm is imported.
  Sets LITELLM_LOG and configures the root logger.

Phase 2: cleanup_third_party_handlers() — call AFTER all imports.
  Clears the StreamHandlers litellm attaches at import time.

Both phases are idempotent. Log output goes to stderr so that reports
written to stdout stay machine readable.
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_SUPPRESSED_LOGGERS = (
    "LiteLLM",
    "LiteLLM Router",
    "LiteLLM Proxy",
    "openai._base_client",
    "httpx",
    "httpcore",
)

_LITELLM_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy")

_phase1_done = False
_phase2_done = False


def setup_logging(level: str = "WARNING") -> None:
    """Phase 1: configure the root logger and set env vars.

    The first call wins; later calls are no-ops, use ``set_level`` to
    change verbosity afterwards.
    """
    global _phase1_done  # noqa: PLW0603
    if _phase1_done:
        return
    _phase1_done = True

    # litellm._logging reads this at import time.
    os.environ.setdefault("LITELLM_LOG", "WARNING")

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_level(level: str) -> None:
    logging.getLogger().setLevel(getattr(logging, level.upper()))


def cleanup_third_party_handlers() -> None:
    """Phase 2: drop litellm's duplicate handlers, propagate to root."""
    global _phase2_done  # noqa: PLW0603
    if _phase2_done:
        return
    _phase2_done = True

    for name in _LITELLM_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
