"""
Errors surfaced by the synthesis core to its callers.
"""
from __future__ import annotations


SYNTHESIS_UNAVAILABLE = "Synthesis unavailable"


class SynthesisError(RuntimeError):
    """Raised when the language-model call behind a synthesis request fails.

    The message is always the single user-facing text; the transport error
    is chained as ``__cause__``. ``status_code`` is a hint for HTTP callers.
    """

    def __init__(self, status_code: int = 502, message: str = SYNTHESIS_UNAVAILABLE):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
