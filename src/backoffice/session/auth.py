"""Authenticated-session bookkeeping."""

import structlog

logger = structlog.get_logger(__name__)


class AuthSession:
    """The signed-in user and the locally known set of invalidated sessions.

    Administrators force a user out by adding their id to
    ``invalidated_user_ids``; the liveness poller notices and logs them out.
    """

    def __init__(self) -> None:
        self.user = None
        self.token: str | None = None
        self.invalidated_user_ids: set[str] = set()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        return str(self.user.id) if self.user is not None else None

    def sign_in(self, user, token: str) -> None:
        self.user = user
        self.token = token
        self.invalidated_user_ids.discard(str(user.id))

    def force_logout_user(self, user_id) -> None:
        self.invalidated_user_ids.add(str(user_id))
        logger.info("Session invalidated", target_user_id=str(user_id))

    def is_invalidated(self) -> bool:
        return self.user_id is not None and self.user_id in self.invalidated_user_ids

    def clear(self) -> None:
        self.user = None
        self.token = None
