"""Domain layer errors."""

from booking.domain.value import IneligibilityReason


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotEligibleError(BusinessRuleViolationError):
    """Raised when a mentor operation's preconditions do not hold."""

    def __init__(self, reason: IneligibilityReason, event_id: str, mentor_id: str):
        self.reason = reason
        self.event_id = event_id
        self.mentor_id = mentor_id
        super().__init__(reason.message)


class PermissionDeniedError(DomainError):
    """Raised when the active role lacks the capability for an action."""

    def __init__(self, capability: str, actor_id: str, action: str):
        self.capability = capability
        self.actor_id = actor_id
        self.action = action
        super().__init__(f"Actor {actor_id} is not authorized to {action}")


class StaleWriteError(DomainError):
    """Raised when an event changed between read and conditional write."""

    def __init__(self, event_id: str, expected_version: int):
        self.event_id = event_id
        self.expected_version = expected_version
        super().__init__(
            f"Event {event_id} was modified concurrently "
            f"(expected version {expected_version})"
        )


class RemoteWriteError(DomainError):
    """Raised when the persistence collaborator could not complete a write."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed: {detail}")
