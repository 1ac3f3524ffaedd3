import logging
from typing import Optional


class SmartIncrementError(Exception):
    """Base for conditions reported to the user as a single notification."""

    level = logging.WARNING

    def __init__(self, message: str, level: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if level is not None:
            self.level = level


class EmptyOrNonNumericSource(SmartIncrementError):
    pass


class InvalidPromptInput(SmartIncrementError):
    pass


class NoStructuralMatch(SmartIncrementError):
    def __init__(self, message: str = "smart-increment: no matching pattern found on current line.") -> None:
        super().__init__(message)


class NoMatchesInScope(SmartIncrementError):
    def __init__(self, message: str = "smart-increment: no matches found in range.") -> None:
        super().__init__(message)


class DegenerateTemplate(SmartIncrementError):
    def __init__(self, message: str = "smart-increment: no number placeholders in pattern.") -> None:
        super().__init__(message)
