"""Errors raised by the fitness domain services.

All of them are recoverable: the caller reports the problem and the user
retries. Each carries a short machine-readable ``code`` for tool payloads.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for user-facing tracker errors."""

    code = "tracker_error"


class UsernameTakenError(TrackerError):
    code = "username_taken"

    def __init__(self, username: str) -> None:
        super().__init__("Username is already taken. Please choose another.")
        self.username = username


class InvalidCredentialsError(TrackerError):
    """Unknown username and wrong password are deliberately indistinguishable."""

    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__(
            "Invalid username or password. If you haven't signed up yet, "
            "please create an account."
        )


class MissingRequiredFieldError(TrackerError):
    code = "missing_required_field"

    def __init__(self, fields: list[str], step: int | None = None) -> None:
        where = f" (step {step})" if step is not None else ""
        super().__init__(f"Missing required field(s){where}: {', '.join(fields)}")
        self.fields = fields
        self.step = step


class NotAuthenticatedError(TrackerError):
    code = "not_authenticated"

    def __init__(self) -> None:
        super().__init__("No user is signed in.")


class ProfileNotFoundError(TrackerError):
    code = "profile_not_found"

    def __init__(self, username: str) -> None:
        super().__init__(f"No account named {username!r}.")
        self.username = username


class InvalidEntryError(TrackerError, ValueError):
    code = "invalid_entry"
