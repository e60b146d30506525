"""BrowserRegistry - the set of browsers a URL can be routed to

Browsers are identified by display name. Lookups are case-insensitive and
return the first match; uniqueness of names is not enforced.

Removing a browser never touches rules that reference it. Those rules keep
the name as a plain string and fail at resolution time instead.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from switcher.core.exceptions import BrowserNotFoundError


@dataclass
class Browser:
    """A launchable browser."""
    name: str
    path: str
    start_arguments: str = ""  # prepended to the URL on launch


class BrowserRegistry:
    """Ordered, mutable collection of Browser entries.

    Every successful mutation calls on_change (the store uses it to persist).
    Failed operations raise BrowserNotFoundError and do not call it.
    """

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self._browsers: List[Browser] = []
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._browsers)

    def list(self) -> List[Browser]:
        """Browsers in insertion order (a copy; empty means none configured)."""
        return list(self._browsers)

    def find(self, name: str) -> Optional[Browser]:
        """Case-insensitive lookup of the first browser with this name."""
        wanted = name.casefold()
        for browser in self._browsers:
            if browser.name.casefold() == wanted:
                return browser
        return None

    def add(self, name: str, path: str, start_arguments: Optional[str] = "") -> Browser:
        browser = Browser(name=name, path=path, start_arguments=start_arguments or "")
        self._browsers.append(browser)
        logging.info(f"Browser added: {name} -> {path}")
        self._changed()
        return browser

    def remove(self, name: str) -> Browser:
        browser = self.find(name)
        if browser is None:
            raise BrowserNotFoundError(name)

        self._browsers.remove(browser)
        logging.info(f"Browser removed: {browser.name}")
        self._changed()
        return browser

    def edit(
        self,
        name: str,
        new_path: Optional[str] = None,
        new_start_arguments: Optional[str] = None,
    ) -> Browser:
        """Overwrite path and/or start arguments.

        Blank or missing values keep the current setting.
        """
        browser = self.find(name)
        if browser is None:
            raise BrowserNotFoundError(name)

        if new_path is not None and new_path.strip():
            browser.path = new_path
        if new_start_arguments is not None and new_start_arguments.strip():
            browser.start_arguments = new_start_arguments

        logging.info(f"Browser updated: {browser.name} -> {browser.path} [{browser.start_arguments}]")
        self._changed()
        return browser

    def restore(self, browsers: List[Browser]) -> None:
        """Replace the whole collection without triggering persistence."""
        self._browsers = list(browsers)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
