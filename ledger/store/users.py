"""
User Directory and Authentication

Holds every known user keyed by id and checks id + PIN pairs.

DESIGN DECISION: Credential checks raise specific exceptions
(unknown id, wrong PIN, non-numeric id). The interactive login loop
turns each one into a re-prompt; the web front end shows the message.
"""

import threading
from typing import Callable, Iterable, Optional, Union

import structlog

from ledger.models.transaction import User


logger = structlog.get_logger(__name__)


class AuthenticationError(Exception):
    """Base exception for failed logins."""

    def __init__(self, message: str, user_id: Optional[int] = None):
        super().__init__(message)
        self.user_id = user_id


class InvalidUserIdError(AuthenticationError):
    """The user id was not a number."""
    pass


class UnknownUserError(AuthenticationError):
    """No user has this id."""
    pass


class IncorrectPinError(AuthenticationError):
    """The PIN does not match."""
    pass


def parse_user_id(raw: Union[str, int]) -> int:
    if isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidUserIdError("User id must be numeric. Try again.")


class UserDirectory:
    """id -> User mapping."""

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._lock = threading.RLock()
        self._users: dict[int, User] = {}
        if users is not None:
            self.load(users)

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def load(self, users: Iterable[User]) -> None:
        """
        Replace the whole directory.

        A later entry with the same id overwrites an earlier one.
        """
        with self._lock:
            self._users.clear()
            for user in users:
                if user.id in self._users:
                    logger.info("profile_overwritten", user_id=user.id)
                self._users[user.id] = user

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    @staticmethod
    def is_admin(user: Optional[User]) -> bool:
        return user is not None and user.is_admin

    def verify(self, user_id: Union[str, int], pin: str) -> User:
        """
        Check one id + PIN pair.

        Raises:
            InvalidUserIdError: user_id is not numeric
            UnknownUserError: no user with that id
            IncorrectPinError: PIN mismatch
        """
        parsed_id = parse_user_id(user_id)
        user = self.get(parsed_id)
        if user is None:
            raise UnknownUserError("No such user id. Try again.", parsed_id)
        if not user.verify_pin(pin):
            raise IncorrectPinError("Incorrect PIN. Try again.", parsed_id)
        return user

    def authenticate(
        self,
        prompt: Callable[[str], str],
        notify: Callable[[str], None],
        on_failure: Optional[Callable[[AuthenticationError], None]] = None,
    ) -> User:
        """
        Interactive login loop.

        Prompts for an id, then a PIN, until a pair matches. There is no
        way out of this loop other than success.

        Args:
            prompt: Reads one line of input after showing the given text
            notify: Shows a message to the user
            on_failure: Called with every rejected attempt (for auditing)
        """
        while True:
            try:
                user_id = parse_user_id(prompt("Welcome! Enter your user id: "))
                if self.get(user_id) is None:
                    raise UnknownUserError("No such user id. Try again.", user_id)
                pin = prompt("Enter your PIN: ")
                return self.verify(user_id, pin)
            except AuthenticationError as e:
                notify(str(e))
                if on_failure is not None:
                    on_failure(e)
