"""Identity checks shared by every user-facing service.

The identity provider itself lives outside this package; services receive
whatever user identifier it produced (or None when the caller is anonymous).
"""

from uuid import UUID

from career_coach.shared.exceptions import UnauthorizedError


def require_user_id(user_id: UUID | None) -> UUID:
    """Return the authenticated user id or raise UnauthorizedError."""
    if user_id is None:
        raise UnauthorizedError()
    return user_id
