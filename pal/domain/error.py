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


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a record they have no role in."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class DuplicateProposalError(DomainError):
    """A like or super-like against a pair that already has an active match."""

    def __init__(self, from_user_id: str, to_user_id: str):
        self.from_user_id = from_user_id
        self.to_user_id = to_user_id
        super().__init__(
            f"An active match already exists between {from_user_id} and {to_user_id}"
        )


class QuotaExhaustedError(DomainError):
    """Super-like attempted with no remaining quota and no premium status."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} has no super-likes remaining today")


class InvalidTransitionError(DomainError):
    """A state-machine operation invoked from a state that does not permit it."""

    def __init__(self, resource: str, resource_id: str, current: str, target: str):
        self.resource = resource
        self.resource_id = resource_id
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move {resource} {resource_id} from '{current}' to '{target}'"
        )


class ConcurrentModificationError(InvalidTransitionError):
    """The record changed between read and write (revision mismatch)."""


class InvalidProposedTimeError(DomainError):
    """A proposed meetup time that is not strictly in the future."""

    def __init__(self, proposed: str, now: str):
        self.proposed = proposed
        super().__init__(f"Proposed time {proposed} is not after {now}")


class PremiumRequiredError(DomainError):
    """A premium-only action attempted by a free user."""

    def __init__(self, feature: str):
        self.feature = feature
        super().__init__(f"{feature} requires a premium account")


class NothingToUndoError(DomainError):
    """Undo attempted with no recorded last action."""

    def __init__(self):
        super().__init__("There is no action to undo")


class DuplicateCoupleLinkError(DomainError):
    """A link request between users who already have one, or are linked elsewhere."""

    def __init__(self, user_id: str, partner_id: str):
        self.user_id = user_id
        self.partner_id = partner_id
        super().__init__(
            f"A couple link already exists for {user_id} or {partner_id}"
        )
