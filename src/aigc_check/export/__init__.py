"""Export module — render a detection result as text or JSON."""

from collections.abc import Callable

from aigc_check.constants import OutputFormat
from aigc_check.export.json_export import export_json, result_to_dict
from aigc_check.export.text import export_text
from aigc_check.services.detection import DetectionResult

__all__ = [
    "export_json",
    "export_result",
    "export_text",
    "result_to_dict",
]

_EXPORTERS: dict[str, Callable[[DetectionResult], str]] = {
    OutputFormat.TEXT: export_text,
    OutputFormat.JSON: export_json,
}


def export_result(
    result: DetectionResult, fmt: str = OutputFormat.TEXT
) -> str:
    """Dispatch rendering by format string."""
    exporter = _EXPORTERS.get(fmt)
    if exporter is None:
        valid = ", ".join(_EXPORTERS)
        msg = f"Unsupported format: {fmt}. Use: {valid}"
        raise ValueError(msg)
    return exporter(result)
