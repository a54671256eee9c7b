"""
Cooperative cancellation for long-running analysis and synthesis loops.
"""

import threading
from typing import Optional

from .config_logging import OperationCanceledError


class CancellationToken:
    """
    Signal shared between a caller and a running operation.

    The operation polls the token; the caller cancels it from any thread.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def throw_if_cancellation_requested(self):
        """Raise OperationCanceledError if cancellation was requested."""
        if self._event.is_set():
            raise OperationCanceledError()


class _NoneToken(CancellationToken):
    """Token that can never be canceled."""

    def cancel(self):
        raise RuntimeError("The default cancellation token cannot be canceled")


NONE = _NoneToken()


def ensure_token(token: Optional[CancellationToken]) -> CancellationToken:
    return token if token is not None else NONE
