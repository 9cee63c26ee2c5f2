"""Infrastructure providers."""

# Import bases
from .clock import ClockProvider
from .notification import NotificationProvider
from .persistence import PersistenceProvider
from .security import SecurityProvider

# Import implementations (needed for __subclasses__())
from .clock import ProdClockProvider  # noqa: F401
from .notification import ProdNotificationProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .security import ProdSecurityProvider  # noqa: F401

__all__ = [
    "ClockProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdClockProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
    "ProdSecurityProvider",
    "SecurityProvider",
]
