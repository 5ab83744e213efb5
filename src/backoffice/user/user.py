"""User aggregate — staff accounts as seen by the back-office client."""

from enum import Enum

from protean.fields import DateTime, String

from backoffice.domain import backoffice
from backoffice.shared.revision import revise


class Role(Enum):
    ADMIN = "Admin"
    MANAGER = "Manager"
    STAFF = "Staff"


@backoffice.aggregate
class User:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    role = String(choices=Role, default=Role.STAFF.value)
    profile_picture_url = String(max_length=500)
    last_activity = DateTime()

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def revised(self, **changes) -> "User":
        return revise(self, ("name", "email", "role", "profile_picture_url", "last_activity"), **changes)


def manager_emails(users) -> list[str]:
    """Email addresses of every Manager-role user, in list order."""
    return [user.email for user in users if user.is_manager]
