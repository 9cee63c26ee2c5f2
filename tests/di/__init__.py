"""Mock providers for testing."""

from .clock import MockClockProvider
from .notification import MockNotificationProvider
from .persistence import MockPersistenceProvider
from .security import MockSecurityProvider
from .container import build_test_container

__all__ = [
    "MockClockProvider",
    "MockNotificationProvider",
    "MockPersistenceProvider",
    "MockSecurityProvider",
    "build_test_container",
]
