class BankError(Exception):
    """Base class for every domain error raised by the services."""


# Categories ---------------------------------------------------------------
class ValidationError(BankError):
    """Request rejected before touching the store."""


class NotFoundError(BankError):
    """A referenced record does not exist."""


class AuthorizationError(BankError):
    """The caller is authenticated but does not own the resource."""


class AuthenticationError(BankError):
    """The caller could not be identified."""


class BusinessRuleError(BankError):
    """The request is well formed but violates a ledger rule."""


class ConflictError(BankError):
    """The request collides with existing state."""


# Concrete errors ----------------------------------------------------------
class InvalidAmountError(ValidationError):
    """Raised when an amount is not positive, too precise, or out of range."""


class SameAccountTransferError(ValidationError):
    """Raised when source and destination of a transfer are the same."""


class InvalidAccountTypeError(ValidationError):
    """Raised when an account type is neither checking nor savings."""


class AccountNotFoundError(NotFoundError):
    """Raised when an account id is missing from the store."""


class SourceAccountNotFoundError(AccountNotFoundError):
    """Raised when the debited side of a transfer does not exist."""


class DestinationAccountNotFoundError(AccountNotFoundError):
    """Raised when the credited side of a transfer does not exist."""


class NotificationNotFoundError(NotFoundError):
    pass


class UnauthorizedError(AuthorizationError):
    """Raised when an account belongs to a different user."""


class InvalidCredentialsError(AuthenticationError):
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is malformed, expired or badly signed."""


class InsufficientFundsError(BusinessRuleError):
    """Raised when a withdrawal/transfer would drop balance below zero."""


class UserAlreadyExistsError(ConflictError):
    pass
