"""Switcher Exception Hierarchy

Every failure the rule engine can report is a SwitcherError subclass:
- Referential failures: BrowserNotFoundError, RuleNotFoundError
- Input failures: UnknownFieldError, InvalidInputError
- Resolution failures: NoMatchError (and BrowserNotFoundError for dangling rules)
- Storage failures: PersistenceError

The CommandDispatcher catches SwitcherError and prints str(error).
Nothing in this hierarchy is retryable.
"""

from pathlib import Path
from typing import Union


class SwitcherError(Exception):
    """Base class for all user-reportable switcher failures."""


class BrowserNotFoundError(SwitcherError):
    """Raised when a browser name does not match any configured browser.

    Used for registry lookups (remove/edit), rule writes that reference an
    unknown browser, and resolution of a rule whose browser was removed.
    """

    def __init__(self, name: str):
        super().__init__(f"Browser '{name}' not found.")
        self.name = name


class RuleNotFoundError(SwitcherError):
    """Raised when no rule has the requested id."""

    def __init__(self, rule_id: int):
        super().__init__("Rule not found.")
        self.rule_id = rule_id


class UnknownFieldError(SwitcherError):
    """Raised by rule edit for a field other than hostname/browser/priority."""

    def __init__(self, field: str):
        super().__init__("Unknown field.")
        self.field = field


class InvalidInputError(SwitcherError):
    """Raised when user input cannot be parsed (non-integer id, URL without host)."""


class NoMatchError(SwitcherError):
    """Raised when no rule pattern matches the URL host."""

    def __init__(self, host: str):
        super().__init__("No matching rule found.")
        self.host = host


class PersistenceError(SwitcherError):
    """Raised when the data file cannot be read, parsed or written."""

    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(message)
        self.path = Path(path)

    def __str__(self):
        return f"[{self.path}] {super().__str__()}"
