"""Rule Memory - JSON snapshot of browsers and rules

Storage:
- One indented UTF-8 JSON object: {"browsers": [...], "rules": [...]}
- Rewritten in full after every change (no append log, no atomic rename)

Field names are written in camelCase. Reading matches keys
case-insensitively so files written with PascalCase members load as well.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from switcher.core.browser_registry import Browser
from switcher.core.exceptions import PersistenceError
from switcher.core.rule_store import Rule


class RuleMemory:
    """Reads and writes the browsers/rules document."""

    def __init__(self, storage_path: Optional[Path] = None):
        if storage_path is None:
            storage_path = Path.home() / ".browser_switcher" / "rules.json"

        self.storage_path = Path(storage_path)

    def load(self) -> Tuple[List[Browser], List[Rule]]:
        """Load browsers and rules from disk.

        Returns:
            (browsers, rules); both empty when the file does not exist

        Raises:
            PersistenceError: unreadable file, invalid JSON or wrong shape
        """
        if not self.storage_path.exists():
            logging.info(f"No rules file at {self.storage_path}, starting empty")
            return [], []

        try:
            with open(self.storage_path, "r", encoding="utf-8-sig") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            logging.error(f"Invalid JSON in rules file: {e}")
            raise PersistenceError(self.storage_path, f"Rules file is not valid JSON: {e}") from e
        except OSError as e:
            logging.error(f"Error reading rules file: {e}")
            raise PersistenceError(self.storage_path, f"Cannot read rules file: {e}") from e

        if not isinstance(document, dict):
            raise PersistenceError(self.storage_path, "Rules file must contain a JSON object")

        document = _casefold_keys(document)
        try:
            browsers = [self._browser_from_dict(item) for item in document.get("browsers") or []]
            rules = [self._rule_from_dict(item) for item in document.get("rules") or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logging.error(f"Malformed entry in rules file: {e!r}")
            raise PersistenceError(self.storage_path, f"Malformed entry in rules file: {e!r}") from e

        logging.info(f"Loaded {len(browsers)} browsers and {len(rules)} rules from {self.storage_path}")
        return browsers, rules

    def save(self, browsers: List[Browser], rules: List[Rule]) -> None:
        """Overwrite the file with a full snapshot.

        Raises:
            PersistenceError: the file or its directory cannot be written
        """
        document = {
            "browsers": [self._browser_to_dict(b) for b in browsers],
            "rules": [self._rule_to_dict(r) for r in rules],
        }
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.storage_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logging.error(f"Error saving rules file: {e}")
            raise PersistenceError(self.storage_path, f"Cannot write rules file: {e}") from e

        logging.debug(f"Saved {len(browsers)} browsers and {len(rules)} rules to {self.storage_path}")

    # =========================================================================
    # WIRE FORMAT
    # =========================================================================

    @staticmethod
    def _browser_to_dict(browser: Browser) -> Dict[str, Any]:
        return {
            "name": browser.name,
            "path": browser.path,
            "startArguments": browser.start_arguments,
        }

    @staticmethod
    def _rule_to_dict(rule: Rule) -> Dict[str, Any]:
        return {
            "id": rule.id,
            "hostname": rule.hostname,
            "browserName": rule.browser_name,
            "priority": rule.priority,
        }

    @staticmethod
    def _browser_from_dict(raw: Dict[str, Any]) -> Browser:
        raw = _casefold_keys(raw)
        return Browser(
            name=_as_text(raw["name"]),
            path=_as_text(raw.get("path")),
            start_arguments=_as_text(raw.get("startarguments")),
        )

    @staticmethod
    def _rule_from_dict(raw: Dict[str, Any]) -> Rule:
        raw = _casefold_keys(raw)
        return Rule(
            id=_as_int(raw["id"]),
            hostname=_as_text(raw["hostname"]),
            browser_name=_as_text(raw["browsername"]),
            priority=_as_int(raw["priority"]),
        )


def _casefold_keys(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {str(key).casefold(): value for key, value in raw.items()}


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_int(value: Any) -> int:
    # bool is an int subclass; reject it along with floats like 1.5
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)
