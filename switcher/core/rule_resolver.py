"""RuleResolver - pick one browser for a URL

Resolution order (non-negotiable):
1. Extract the URL host
2. Keep every rule whose pattern matches the host
3. Lowest priority wins; equal priorities go to the rule added first
4. Look the winner's browser up by name (case-insensitive)

No match and a dangling browser reference are separate failures
(NoMatchError vs BrowserNotFoundError) so callers can report them apart.

Pattern forms:
- "*"          every host
- "*.suffix"   any host whose text ends with "suffix". There is no dot
               boundary check, so "*.example.com" also matches
               "example.com" and "evilexample.com". strict=True requires
               the host to be "suffix" or to end with ".suffix".
- anything else exact, case-sensitive equality with the host
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from switcher.core.browser_registry import Browser, BrowserRegistry
from switcher.core.exceptions import BrowserNotFoundError, InvalidInputError, NoMatchError
from switcher.core.rule_store import Rule, RuleStore


WILDCARD = "*"
SUFFIX_PREFIX = "*."


def matches(pattern: str, host: str, strict: bool = False) -> bool:
    """Return True if a rule pattern matches a host."""
    if pattern == WILDCARD:
        return True

    if pattern.startswith(SUFFIX_PREFIX):
        domain = pattern[len(SUFFIX_PREFIX):]
        if strict:
            return host == domain or host.endswith("." + domain)
        return host.endswith(domain)

    return pattern == host


def extract_host(url: str) -> str:
    """Host component of a URL, lower-cased.

    Raises:
        InvalidInputError: the URL has no host
    """
    try:
        host = urlparse(url.strip()).hostname
    except ValueError as e:
        raise InvalidInputError(f"Invalid URL '{url}': {e}") from None
    if not host:
        raise InvalidInputError(f"Invalid URL '{url}': no host name.")
    return host


def build_launch_arguments(browser: Browser, url: str) -> str:
    """Start arguments, a space, the URL. For display; the launcher never re-splits it."""
    return f"{browser.start_arguments} {url}"


@dataclass(frozen=True)
class Resolution:
    """Winning rule and the browser it points at."""
    url: str
    host: str
    rule: Rule
    browser: Browser

    @property
    def arguments(self) -> str:
        return build_launch_arguments(self.browser, self.url)


class RuleResolver:
    """Read-only view over the rule and browser collections."""

    def __init__(self, rules: RuleStore, browsers: BrowserRegistry, strict_wildcards: bool = False):
        self._rules = rules
        self._browsers = browsers
        self.strict_wildcards = strict_wildcards

    def matching_rules(self, host: str) -> List[Rule]:
        """All rules matching host, in store order."""
        return [r for r in self._rules.list() if matches(r.hostname, host, self.strict_wildcards)]

    def select_rule(self, host: str) -> Optional[Rule]:
        """Lowest-priority matching rule; first one wins a tie."""
        best: Optional[Rule] = None
        for rule in self.matching_rules(host):
            if best is None or rule.priority < best.priority:
                best = rule
        return best

    def resolve(self, url: str) -> Resolution:
        """Resolve a URL to its rule and browser.

        Raises:
            InvalidInputError: URL has no host
            NoMatchError: no rule matches the host
            BrowserNotFoundError: the winning rule names a removed browser
        """
        host = extract_host(url)
        logging.debug(f"Resolving host '{host}': candidates {[r.id for r in self.matching_rules(host)]}")

        rule = self.select_rule(host)
        if rule is None:
            logging.info(f"No rule matches host '{host}'")
            raise NoMatchError(host)

        browser = self._browsers.find(rule.browser_name)
        if browser is None:
            logging.warning(f"Rule #{rule.id} points at missing browser '{rule.browser_name}'")
            raise BrowserNotFoundError(rule.browser_name)

        logging.info(f"Resolved '{host}' via rule #{rule.id} ({rule.hostname}) -> {browser.name}")
        return Resolution(url=url, host=host, rule=rule, browser=browser)
