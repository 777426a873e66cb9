"""
Owner capability gate for petfolio.

The owner flag is a UI switch persisted next to the content, not a
security boundary. Stores never read it themselves; callers read it here
and pass the boolean into every mutating call.
"""

from ..errors import PermissionDeniedError
from ..logging_config import get_logger, log_user_action
from ..storage import AUTH_KEY, KeyValueStore

logger = get_logger(__name__)


class AuthGate:
    """Reads and toggles the persisted owner flag."""

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    @property
    def is_owner(self) -> bool:
        value = self.kv.read(AUTH_KEY)
        return value is True or value == "true"

    def login(self) -> None:
        """Set the owner flag."""
        self.kv.write(AUTH_KEY, True)
        log_user_action("login")

    def logout(self) -> None:
        """Clear the owner flag."""
        self.kv.remove(AUTH_KEY)
        log_user_action("logout")


def require_owner(authorized: bool, action: str) -> None:
    """
    Reject a mutation made without the owner capability.

    Raises:
        PermissionDeniedError: If ``authorized`` is not True
    """
    if authorized is not True:
        raise PermissionDeniedError(
            f"Owner capability required for {action}",
            details={"action": action},
        )
