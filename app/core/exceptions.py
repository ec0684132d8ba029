from typing import List, Optional


class CarFlipError(Exception):
    """Base class for all lead-desk domain exceptions.

    Every custom exception in this module inherits from here so that a
    single ``except CarFlipError`` clause can catch any domain error.
    """

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(detail)


class LeadNotFoundError(CarFlipError):
    """Raised when a requested lead does not exist."""

    def __init__(self, detail: str = "Lead not found"):
        super().__init__(detail)


class VANotFoundError(CarFlipError):
    """Raised when a submission names a VA that does not exist."""

    def __init__(self, detail: str = "Selected VA not found"):
        super().__init__(detail)


class DuplicateVAError(CarFlipError):
    """Raised when creating a VA whose name is already taken."""

    def __init__(self, detail: str = "VA with this name already exists"):
        super().__init__(detail)


class InvalidLeadDataError(CarFlipError):
    """Raised when lead data fails a rule the request schema cannot check."""

    def __init__(self, detail: str = "Invalid lead data"):
        super().__init__(detail)


class MajorConditionIssueError(CarFlipError):
    """Raised when a submission reports a disqualifying vehicle condition.

    ``errors`` carries the validator messages so the caller can show
    exactly which issues caused the rejection.
    """

    def __init__(
        self,
        errors: Optional[List[str]] = None,
        detail: str = "Lead rejected due to major issues",
    ):
        self.errors: List[str] = list(errors or [])
        super().__init__(detail)


class SpamDetectedError(CarFlipError):
    """Raised when the honeypot field of a submission is filled in."""

    def __init__(self, detail: str = "Spam detected"):
        super().__init__(detail)


class InvalidStatusTransitionError(CarFlipError):
    """Raised when an invalid status transition is attempted."""

    def __init__(self, detail: str = "Invalid status transition"):
        super().__init__(detail)


class InvalidSettingsError(CarFlipError):
    """Raised when a settings update would leave the commission tiers
    in an inconsistent state."""

    def __init__(self, detail: str = "Invalid settings"):
        super().__init__(detail)
