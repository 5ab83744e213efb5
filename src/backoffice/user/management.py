"""User account mutations."""

import structlog
from protean.exceptions import ValidationError

from backoffice.gateway.port import GatewayError
from backoffice.shared.service import MutationService
from backoffice.user.user import User

logger = structlog.get_logger(__name__)


class UserService(MutationService):
    async def add(self, name, email, role, password=None, **fields) -> bool:
        try:
            user = User(name=name, email=email, role=role, **fields)
        except ValidationError as exc:
            self.report_invalid("add user", exc)
            return False

        ticket = self.store.begin("users")
        try:
            created = await self.gateway.create_user(user, password=password)
        except GatewayError as exc:
            self.report_failure("add user", exc, email=email)
            return False

        if not self.store.is_same_session(ticket):
            return False
        self.store.prepend("users", created)
        logger.info("User added", user_id=str(created.id), role=created.role)
        return True

    async def update(self, user_id, **changes) -> User | None:
        """Edit a user; returns the server's copy, or None on failure."""
        existing = self.store.find("users", user_id)
        if existing is None:
            logger.warning("Update for unknown user", user_id=str(user_id))
            return None

        try:
            revised = existing.revised(**changes)
        except (ValidationError, ValueError) as exc:
            self.report_invalid("update user", exc, user_id=str(user_id))
            return None

        ticket = self.store.begin(f"users:{user_id}")
        try:
            updated = await self.gateway.update_user(revised)
        except GatewayError as exc:
            self.report_failure("update user", exc, user_id=str(user_id))
            return None

        if not self.store.is_current(ticket):
            return None
        self.store.replace("users", updated)
        return updated

    async def delete(self, user_id, hard: bool = False) -> bool:
        ticket = self.store.begin(f"users:{user_id}")
        try:
            await self.gateway.delete_user(user_id, hard=hard)
        except GatewayError as exc:
            self.report_failure("delete user", exc, user_id=str(user_id), hard=hard)
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.remove("users", user_id)
        logger.info("User deleted", user_id=str(user_id), hard=hard)
        return True
