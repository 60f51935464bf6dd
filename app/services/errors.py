from __future__ import annotations

import asyncio
from typing import Any, Literal

from app.ai.client import ModelClientError

TailoringErrorKind = Literal[
    "parse_error",
    "jd_analysis_error",
    "matching_error",
    "formatting_error",
    "cover_letter_error",
    "timeout",
    "api_error",
]


class TailoringError(RuntimeError):
    def __init__(self, message: str, *, kind: TailoringErrorKind, details: Any = None):
        super().__init__(message)
        self.kind = kind
        self.details = details

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": str(self)}


def to_tailoring_error(exc: BaseException, stage_kind: TailoringErrorKind) -> TailoringError:
    """Map any pipeline exception onto the single surfaced error type."""
    if isinstance(exc, TailoringError):
        return exc
    if isinstance(exc, ModelClientError):
        kind: TailoringErrorKind = "timeout" if exc.kind == "timeout" else "api_error"
        return TailoringError(str(exc), kind=kind, details={"model_error": exc.kind})
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return TailoringError(str(exc) or "Operation timed out", kind="timeout")
    return TailoringError(str(exc) or exc.__class__.__name__, kind=stage_kind, details={"type": exc.__class__.__name__})
