"""RuleStore - prioritized hostname rules

Each rule maps a hostname pattern to a browser name with an integer
priority (lower wins).

INVARIANTS:
- Rule ids are assigned as max(existing ids) + 1 (1 when empty) and are
  never handed out twice, even after the highest rule is removed.
- browser_name is validated against the BrowserRegistry when it is written
  (add, edit browser) and never again.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Union

from switcher.core.browser_registry import BrowserRegistry
from switcher.core.exceptions import (
    BrowserNotFoundError,
    InvalidInputError,
    RuleNotFoundError,
    UnknownFieldError,
)


@dataclass
class Rule:
    """A routing rule."""
    id: int
    hostname: str      # exact host, "*" or "*.suffix"
    browser_name: str  # weak reference into BrowserRegistry
    priority: int


def parse_int(value: Union[str, int], what: str) -> int:
    """Parse user input as an integer or raise InvalidInputError."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"Invalid {what}: '{value}' is not a whole number.") from None


class RuleStore:
    """Ordered, mutable collection of rules with monotonic ids."""

    def __init__(self, browsers: BrowserRegistry, on_change: Optional[Callable[[], None]] = None):
        self._browsers = browsers
        self._rules: List[Rule] = []
        self._next_id = 1
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def next_id(self) -> int:
        """Id the next added rule will receive."""
        return self._next_id

    def list(self, order_by_priority: bool = False) -> List[Rule]:
        """Rules in insertion order, or by ascending priority.

        sorted() is stable, so rules sharing a priority keep insertion order.
        """
        if order_by_priority:
            return sorted(self._rules, key=lambda r: r.priority)
        return list(self._rules)

    def get(self, rule_id: int) -> Rule:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise RuleNotFoundError(rule_id)

    def add(self, hostname: str, browser_name: str, priority: Union[str, int]) -> Rule:
        priority = parse_int(priority, "priority")
        if self._browsers.find(browser_name) is None:
            logging.info(f"Rule rejected: unknown browser '{browser_name}'")
            raise BrowserNotFoundError(browser_name)

        rule = Rule(id=self._next_id, hostname=hostname, browser_name=browser_name, priority=priority)
        self._next_id += 1
        self._rules.append(rule)
        logging.info(f"Rule added: #{rule.id} {hostname} -> {browser_name} (priority {priority})")
        self._changed()
        return rule

    def remove(self, rule_id: Union[str, int]) -> Rule:
        rule = self.get(parse_int(rule_id, "rule id"))
        self._rules.remove(rule)
        logging.info(f"Rule removed: #{rule.id}")
        self._changed()
        return rule

    def edit(self, rule_id: Union[str, int], field: str, new_value: str) -> Rule:
        """Change one field of a rule.

        Args:
            rule_id: Id of the rule to edit
            field: "hostname", "browser" or "priority"
            new_value: Raw user value; priority is parsed as an integer

        Raises:
            RuleNotFoundError: No rule with this id
            BrowserNotFoundError: field is "browser" and the name is unknown
            InvalidInputError: field is "priority" and the value is not an int
            UnknownFieldError: any other field name
        """
        rule = self.get(parse_int(rule_id, "rule id"))

        if field == "hostname":
            rule.hostname = new_value
        elif field == "browser":
            if self._browsers.find(new_value) is None:
                raise BrowserNotFoundError(new_value)
            rule.browser_name = new_value
        elif field == "priority":
            rule.priority = parse_int(new_value, "priority")
        else:
            raise UnknownFieldError(field)

        logging.info(f"Rule updated: #{rule.id} {field} = {new_value}")
        self._changed()
        return rule

    def restore(self, rules: Iterable[Rule]) -> None:
        """Replace the whole collection and recompute the next id.

        Does not trigger persistence.
        """
        self._rules = list(rules)
        self._next_id = max((r.id for r in self._rules), default=0) + 1

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
