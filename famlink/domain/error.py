"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PolicyDeniedError(DomainError):
    """Raised when a policy check blocks an operation.

    The reason is user-facing and is returned to the caller verbatim so the
    UI can explain why the action is blocked.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class StateConflictError(DomainError):
    """Raised when a connection is no longer in the state a transition expects.

    Covers lost races, double responses and missing rows alike. The message
    never reveals which actor won.
    """

    def __init__(self, message: str = "Invitation not found or already processed"):
        super().__init__(message)


class InvitationExpiredError(StateConflictError):
    """Raised when accepting an invitation whose deadline has passed."""

    def __init__(self) -> None:
        super().__init__("Invitation has expired")


class TransientError(DomainError):
    """Raised when a backing store is unavailable. Safe to retry."""

    pass
