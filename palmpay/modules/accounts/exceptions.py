"""Account domain specific exceptions."""


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when the e-mail address or CNIC is already registered."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""


class AccountValidationError(AccountError):
    """Raised when sign-up or profile input is malformed."""


class InvalidCredentialsError(AccountError):
    """Raised when a supplied password does not match."""


class InvalidAccountTokenError(AccountError):
    """Raised when a reset or verification token cannot be honoured."""
