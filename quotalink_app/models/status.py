"""
URL record status as a forward-only state machine.

ACTIVE is the only non-terminal state. A record may stay where it is
or leave ACTIVE once; nothing ever returns to ACTIVE.
"""

from enum import Enum

from quotalink_app.exceptions import InvalidStatusTransitionError


class UrlStatus(str, Enum):
    """Lifecycle states of a URL record"""
    ACTIVE = "active"
    EXPIRED = "expired"
    LIMIT_EXCEEDED = "limit_exceeded"
    INACTIVE = "inactive"

    @property
    def is_terminal(self) -> bool:
        return self is not UrlStatus.ACTIVE

    def can_transition_to(self, target: "UrlStatus") -> bool:
        """Same-state moves are no-ops; otherwise only ACTIVE has outgoing edges"""
        if target is self:
            return True
        return target in _TRANSITIONS[self]

    def transition_to(self, target: "UrlStatus") -> "UrlStatus":
        if not self.can_transition_to(target):
            raise InvalidStatusTransitionError(self, target)
        return target


_TRANSITIONS = {
    UrlStatus.ACTIVE: frozenset({
        UrlStatus.EXPIRED,
        UrlStatus.LIMIT_EXCEEDED,
        UrlStatus.INACTIVE,
    }),
    UrlStatus.EXPIRED: frozenset(),
    UrlStatus.LIMIT_EXCEEDED: frozenset(),
    UrlStatus.INACTIVE: frozenset(),
}
