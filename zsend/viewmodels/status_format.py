"""Display labels for submission phases and inline field errors.

Call context:
    ``SendVM`` exposes these through ``status_text``/``progress`` and
    ``field_messages`` so the host view never maps codes itself.
"""

from __future__ import annotations

from typing import Optional

from zsend.domain.entities import SubmissionPhase
from zsend.domain.errors import ValidationError
from zsend.domain.validation import MAX_MEMO_LENGTH

_PHASE_LABELS = {
    SubmissionPhase.IDLE: "",
    SubmissionPhase.VALIDATING: "Validating transaction...",
    SubmissionPhase.SUBMITTING: "Broadcasting transaction...",
    SubmissionPhase.SUCCEEDED: "Transaction sent!",
    SubmissionPhase.FAILED: "Transaction failed",
}

_PHASE_PROGRESS = {
    SubmissionPhase.IDLE: 0.0,
    SubmissionPhase.VALIDATING: 0.25,
    SubmissionPhase.SUBMITTING: 0.5,
    SubmissionPhase.SUCCEEDED: 1.0,
    SubmissionPhase.FAILED: 0.0,
}

_FIELD_MESSAGES = {
    ValidationError.EMPTY_AMOUNT: "Amount is required",
    ValidationError.NOT_A_NUMBER: "Invalid amount",
    ValidationError.NON_POSITIVE_AMOUNT: "Amount must be greater than 0",
    ValidationError.INSUFFICIENT_BALANCE: "Insufficient balance",
    ValidationError.INVALID_ADDRESS: "Invalid BitcoinZ address",
    ValidationError.MEMO_TOO_LONG: f"Memo must be at most {MAX_MEMO_LENGTH} characters",
}


def phase_label(phase: SubmissionPhase) -> str:
    return _PHASE_LABELS.get(phase, "")


def phase_progress(phase: SubmissionPhase) -> float:
    return _PHASE_PROGRESS.get(phase, 0.0)


def field_error_message(error: Optional[ValidationError]) -> str:
    if error is None:
        return ""
    return _FIELD_MESSAGES.get(error, error.value.replace("_", " ").capitalize())


__all__ = ["field_error_message", "phase_label", "phase_progress"]
