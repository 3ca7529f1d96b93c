"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidVoteValueError(ValidationError):
    """Raised when a vote value is anything other than +1 or -1."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Vote value must be 1 (upvote) or -1 (downvote), got {value!r}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ItemNotFoundError(NotFoundError):
    """Raised when the post or comment being voted on does not exist."""

    pass


class UserNotFoundError(NotFoundError):
    """Raised when a voter or content owner does not exist."""

    def __init__(self, identifier: str):
        super().__init__("User", identifier)


class ConcurrencyConflictError(DomainError):
    """Raised when a write lost the race for an item's ledger.

    Nothing was applied; the whole operation is safe to retry.
    """

    pass


class PersistenceFailureError(DomainError):
    """Raised when the atomic commit of ledger and scores did not succeed.

    The transaction was rolled back, so the operation is safe to retry.
    """

    pass
