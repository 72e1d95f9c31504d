"""Tests for the user directory and login."""

import pytest
from structlog.testing import capture_logs

from ledger.models import User
from ledger.store import (
    IncorrectPinError,
    InvalidUserIdError,
    UnknownUserError,
    UserDirectory,
)


def scripted(answers):
    """Prompt function that replays answers in order."""
    remaining = list(answers)

    def prompt(_message):
        return remaining.pop(0)

    return prompt


class TestUserDirectory:
    """Tests for UserDirectory."""

    def test_load_replaces_contents(self, alice, bob):
        """Test a second load forgets earlier users."""
        directory = UserDirectory([alice])
        directory.load([bob])
        assert directory.get(1) is None
        assert directory.get(2) == bob
        assert len(directory) == 1

    def test_later_duplicate_id_wins(self):
        """Test a later profile overwrites an earlier one with the same id."""
        first = User(id=4, name="First", pin="1")
        second = User(id=4, name="Second", pin="2")
        with capture_logs() as logs:
            directory = UserDirectory([first, second])
        assert directory.get(4).name == "Second"
        assert logs[0]["event"] == "profile_overwritten"

    def test_is_admin(self, directory, alice, admin):
        """Test the admin check tolerates a missing user."""
        assert directory.is_admin(admin)
        assert not directory.is_admin(alice)
        assert not directory.is_admin(None)


class TestVerify:
    """Tests for single credential checks."""

    def test_valid_pair(self, directory, alice):
        """Test a matching id and PIN."""
        assert directory.verify("1", "1111") == alice
        assert directory.verify(1, " 1111 ") == alice

    def test_non_numeric_id(self, directory):
        """Test a non-numeric id."""
        with pytest.raises(InvalidUserIdError, match="must be numeric"):
            directory.verify("abc", "1111")

    def test_unknown_id(self, directory):
        """Test an id with no profile."""
        with pytest.raises(UnknownUserError) as exc_info:
            directory.verify("42", "1111")
        assert exc_info.value.user_id == 42

    def test_wrong_pin(self, directory):
        """Test a PIN mismatch."""
        with pytest.raises(IncorrectPinError, match="Incorrect PIN"):
            directory.verify("1", "9999")


class TestAuthenticate:
    """Tests for the interactive login loop."""

    def test_retries_until_success(self, directory, alice):
        """Test every failure re-prompts with a message."""
        messages = []
        failures = []
        user = directory.authenticate(
            scripted(["abc", "42", "1", "9999", "1", "1111"]),
            messages.append,
            failures.append,
        )
        assert user == alice
        assert messages == [
            "User id must be numeric. Try again.",
            "No such user id. Try again.",
            "Incorrect PIN. Try again.",
        ]
        assert [type(e) for e in failures] == [
            InvalidUserIdError,
            UnknownUserError,
            IncorrectPinError,
        ]

    def test_unknown_id_does_not_ask_for_pin(self, directory):
        """Test the PIN is only requested for a known id."""
        prompts = []
        answers = iter(["42", "2", "2222"])

        def prompt(message):
            prompts.append(message)
            return next(answers)

        directory.authenticate(prompt, lambda _message: None)
        assert prompts == [
            "Welcome! Enter your user id: ",
            "Welcome! Enter your user id: ",
            "Enter your PIN: ",
        ]
