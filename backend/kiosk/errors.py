"""Domain errors raised by kiosk services.

Routes never build error responses themselves; the application factory maps
these to HTTP responses (422 for validation, 404 for missing records).
"""

from typing import Iterable, List, Optional


class KioskError(Exception):
    pass


class ValidationError(KioskError):
    """Malformed or out-of-range input. Carries every failing message."""

    def __init__(self, messages: Iterable[str], fields: Optional[Iterable[str]] = None):
        self.messages: List[str] = list(messages)
        self.fields: List[str] = list(fields or [])
        super().__init__('; '.join(self.messages))


class NotFoundError(KioskError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
