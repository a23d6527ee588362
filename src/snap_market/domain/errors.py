"""Error taxonomy shared by services and pages."""


class SnapMarketError(Exception):
    """Base class for application errors."""


class AuthRequiredError(SnapMarketError):
    """Raised when a protected page is requested without a session."""


class FetchFailureError(SnapMarketError):
    """Raised when a read against the store fails."""


class WriteFailureError(SnapMarketError):
    """Raised when a mutation against the store fails."""


class ValidationError(WriteFailureError):
    """Raised when submitted data cannot be written as given."""


class NotAuthorizedError(SnapMarketError):
    """Raised when the acting user may not perform a mutation."""


class InvalidTransitionError(SnapMarketError):
    """Raised when a booking is not in a state that allows the transition."""


def error_message(exc: BaseException, fallback: str) -> str:
    """Return the store or provider message of an exception, or a fallback."""
    message = getattr(exc, "message", None) or str(exc)
    return str(message).strip() or fallback
