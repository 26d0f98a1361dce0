"""JSON export — the full detection result as a structured envelope."""

from __future__ import annotations

import json
from typing import Any

from aigc_check.scoring.calculator import RISK_DESCRIPTIONS
from aigc_check.services.detection import DetectionResult


def result_to_dict(
    result: DetectionResult, *, include_text: bool = False
) -> dict[str, Any]:
    """JSON-serializable view of a result; the input text is opt-in."""
    payload: dict[str, Any] = result.model_dump(
        mode="json", exclude=None if include_text else {"text"}
    )
    payload["risk_description"] = RISK_DESCRIPTIONS[result.risk_level]
    payload["detected_rules"] = sum(
        1 for r in result.rule_results if r.detected
    )
    return payload


def export_json(
    result: DetectionResult, *, include_text: bool = False
) -> str:
    return json.dumps(
        result_to_dict(result, include_text=include_text),
        indent=2,
        ensure_ascii=False,
    )
