class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a password or OTP does not check out."""


class DuplicateSubmissionError(DomainError):
    """Raised when an employee already timed in for the day."""


class QueueFullError(DomainError):
    """Raised when the batch email queue is at its hard limit."""


class MailDeliveryError(DomainError):
    """Raised when the mail backend could not hand the message over."""


class ConfigurationError(DomainError):
    """Raised when required settings are missing."""
