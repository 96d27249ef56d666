from typing import List, Optional


class DeckError(Exception):
    """Base exception for all deck related errors"""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self):
        if self.source:
            return f"[{self.source}] {self.message}"
        return self.message


class DeckParseError(DeckError):
    """Deck text is malformed"""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        source: Optional[str] = None,
    ):
        super().__init__(message, source=source)
        self.line = line

    def __str__(self):
        location = self.source or "<deck>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"[{location}] {self.message}"


class DeckValidationError(DeckError):
    """Deck failed one or more validation checks"""

    def __init__(self, message: str, issues: Optional[List] = None, source: Optional[str] = None):
        super().__init__(message, source=source)
        self.issues = list(issues or [])
