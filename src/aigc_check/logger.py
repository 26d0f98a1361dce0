"""Structured JSON-lines logger for detection requests and stages."""

import hashlib
import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from aigc_check.constants import ERROR_TRUNCATION_CHARS

__all__ = ["AUDIT_LOGGER", "DetectionLogger"]

AUDIT_LOGGER = "aigc_check.detection.audit"


class DetectionLogger:
    """Writes one JSON object per line to ``<log_dir>/detection.log``.

    Entries carry the request id so a request's stages can be joined.
    Only text length is recorded, never the text itself.
    """

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._log_dir.mkdir(parents=True, exist_ok=True)
        target = (log_dir / "detection.log").resolve()
        # One logger per file so instances never share handlers.
        digest = hashlib.sha1(str(target).encode()).hexdigest()[:12]
        self._logger = logging.getLogger(f"{AUDIT_LOGGER}.{digest}")
        self._logger.setLevel(getattr(logging, level.upper()))
        self._logger.propagate = False

        if not self._logger.handlers:
            handler = logging.FileHandler(target, encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    @property
    def level(self) -> int:
        return self._logger.level

    def log_request(
        self,
        request_id: str,
        text_length: int,
        mode: str,
        score: float,
        risk_level: str,
        duration_ms: float,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "request",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "text_length": text_length,
                "mode": mode,
                "score": round(score, 2),
                "risk_level": risk_level,
                "duration_ms": duration_ms,
            })
        )

    def log_error(
        self,
        request_id: str,
        component: str,
        error: str,
        error_class: str = "unknown",
    ) -> None:
        self._logger.error(
            json.dumps({
                "type": "error",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "component": component,
                "error_class": error_class,
                "error": error[:ERROR_TRUNCATION_CHARS],
            })
        )

    def log_stage(
        self,
        request_id: str,
        stage_name: str,
        status: str,
        duration_ms: float,
        error: str | None = None,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "stage",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "stage": stage_name,
                "status": status,
                "duration_ms": duration_ms,
                "error": error,
            })
        )
