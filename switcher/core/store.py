"""SwitcherStore - the single in-memory authority for browsers and rules

Owns one BrowserRegistry, one RuleStore and the RuleMemory that persists
them. Collections call back into the store after each successful mutation
and the store rewrites the whole document.

Usage:
    store = SwitcherStore.open(Path("rules.json"))
    store.browsers.add("chrome", "/usr/bin/google-chrome")
    store.rules.add("*.example.com", "chrome", 10)
    resolution = store.resolver().resolve("https://www.example.com/")
"""

import logging
from pathlib import Path
from typing import Optional

from switcher.core.browser_registry import BrowserRegistry
from switcher.core.rule_resolver import RuleResolver
from switcher.core.rule_store import RuleStore
from switcher.memory.rule_memory import RuleMemory


class SwitcherStore:
    """Browsers + rules + persistence, passed explicitly to every consumer."""

    def __init__(self, memory: Optional[RuleMemory] = None, strict_wildcards: bool = False):
        self.memory = memory
        self.strict_wildcards = strict_wildcards
        self.browsers = BrowserRegistry(on_change=self.save)
        self.rules = RuleStore(self.browsers, on_change=self.save)

    @classmethod
    def open(cls, storage_path: Path, strict_wildcards: bool = False) -> "SwitcherStore":
        """Create a store backed by storage_path and load it.

        Raises:
            PersistenceError: the existing file is unreadable or malformed
        """
        store = cls(RuleMemory(storage_path), strict_wildcards=strict_wildcards)
        store.load()
        return store

    def load(self) -> None:
        """Replace in-memory state with the persisted snapshot."""
        if self.memory is None:
            return
        browsers, rules = self.memory.load()
        self.browsers.restore(browsers)
        self.rules.restore(rules)
        logging.info(f"Store loaded: {len(browsers)} browsers, {len(rules)} rules, next rule id {self.rules.next_id}")

    def save(self) -> None:
        """Write a full snapshot. In-memory stores (no RuleMemory) skip this."""
        if self.memory is None:
            return
        self.memory.save(self.browsers.list(), self.rules.list())

    def resolver(self) -> RuleResolver:
        return RuleResolver(self.rules, self.browsers, strict_wildcards=self.strict_wildcards)
