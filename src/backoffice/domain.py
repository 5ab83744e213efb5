"""Back-office bounded context — client-side state orchestration.

Holds inventory, cart, checkout, discounts, inquiries and the notification
feed for one authenticated staff session. The remote backend owns
persistence; this domain mirrors it and applies business rules locally.
"""

from protean.domain import Domain

from backoffice.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
backoffice = Domain(name="backoffice")
