"""ControlResult and ExitCode — the universal service contract.

INVARIANT: All service-layer methods return ControlResult.
``success`` is always ``exit_code == 0``; a result that disagrees is
rejected at construction.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, Field, model_validator


class ExitCode(IntEnum):
    """Process exit codes, one per error category."""

    OK = 0
    INVALID_INPUT = 1
    ILLEGAL_STATE = 2
    TIMEOUT = 3
    TARGET_NOT_FOUND = 4
    UNEXPECTED = 99


class ControlResult(BaseModel):
    """The single record emitted by every invocation.

    Attributes:
        success: Whether the operation succeeded.
        message: Human-readable outcome or failure reason.
        exit_code: Process exit code, serialized as ``exitCode``.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    success: bool
    message: str
    exit_code: int = Field(alias="exitCode")

    @model_validator(mode="after")
    def _success_matches_exit_code(self) -> ControlResult:
        if self.success != (self.exit_code == ExitCode.OK):
            msg = f"success={self.success} is inconsistent with exitCode={self.exit_code}"
            raise ValueError(msg)
        return self

    @classmethod
    def of(cls, exit_code: ExitCode | int, message: str) -> ControlResult:
        """Build a result whose ``success`` flag is derived from *exit_code*."""
        code = int(exit_code)
        return cls(success=code == ExitCode.OK, message=message, exit_code=code)

    @classmethod
    def ok(cls, message: str) -> ControlResult:
        return cls.of(ExitCode.OK, message)
