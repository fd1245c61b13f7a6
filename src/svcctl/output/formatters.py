"""JSON output for ControlResult.

Orchestrators parse stdout, so every invocation renders exactly one
compact JSON object: ``{"success": ..., "message": ..., "exitCode": ...}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svcctl.services.result import ControlResult


def format_result(result: ControlResult) -> str:
    """Format a ControlResult as a single JSON document."""
    return result.model_dump_json(by_alias=True)
