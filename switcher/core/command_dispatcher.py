"""CommandDispatcher - interactive command front end

Parses one command line at a time and calls into the SwitcherStore,
the RuleResolver and the browser.launch tool.

INVARIANT: a command never terminates the loop by failing. SwitcherError
is caught here and printed; state is left as it was before the command.
"""

import logging
from typing import Callable, Dict, List, Optional

from switcher.core.exceptions import SwitcherError
from switcher.core.rule_resolver import Resolution
from switcher.core.store import SwitcherStore
from switcher.tools.base import Tool
from switcher.tools.launch_browser import LaunchBrowser


WELCOME = "Welcome to BrowserSwitcher app! Below are the available commands"

HELP_TEXT = """Available commands:
  help                               - Display this help message
  rule list [-p]                     - List all rules (-p: by priority)
  rule add <host> <browser> <prio>   - Add a new rule
  rule remove <id>                   - Remove a rule
  rule edit <id> <field> <value>     - Edit a rule (hostname/browser/priority)
  rule test <url>                    - Show which rule and browser a URL resolves to
  browser list                       - List all browsers
  browser add                        - Add a new browser
  browser remove <name>              - Remove a browser
  browser edit <name>                - Edit a browser
  open <url>                         - Open a URL with the matching browser
  exit                               - Leave the program"""

RULE_ADD_USAGE = (
    "Usage: rule add <hostname> <browser_name> <priority>\n"
    "Priority logic: smaller numbers have priority over the bigger ones"
)


class CommandDispatcher:
    """Routes command lines to store operations.

    Usage:
        dispatcher = CommandDispatcher(store)
        while dispatcher.dispatch(input("> ")):
            pass
    """

    EXIT_COMMANDS = ("exit", "quit")

    def __init__(
        self,
        store: SwitcherStore,
        launcher: Optional[Tool] = None,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self.store = store
        self.launcher = launcher or LaunchBrowser()
        self._input = input_func
        self._output = output

        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "help": lambda parts: self.show_help(),
            "rule": self._rule_command,
            "browser": self._browser_command,
            "open": self._open_command,
        }

    def dispatch(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the user asked to leave, True otherwise
        """
        parts = line.split()
        if not parts:
            return True

        command = parts[0].lower()
        if command in self.EXIT_COMMANDS:
            return False

        handler = self._commands.get(command)
        if handler is None:
            self._output("Unknown command. Type 'help' to see available commands.")
            return True

        try:
            handler(parts)
        except SwitcherError as e:
            logging.debug(f"Command '{line.strip()}' failed: {e!r}")
            self._output(str(e))
        return True

    def show_help(self) -> None:
        self._output(HELP_TEXT)

    # =========================================================================
    # URL HANDLING
    # =========================================================================

    def open_url(self, url: str) -> bool:
        """Resolve a URL and launch its browser.

        Resolution failures and launch failures are printed.

        Returns:
            True if a browser process was started
        """
        try:
            resolution = self.store.resolver().resolve(url)
        except SwitcherError as e:
            self._output(str(e))
            return False
        return self._launch(resolution)

    def _launch(self, resolution: Resolution) -> bool:
        browser = resolution.browser
        result = self.launcher.execute({
            "path": browser.path,
            "start_arguments": browser.start_arguments,
            "url": resolution.url,
        })
        if result.get("status") != "success":
            self._output(f"Failed to launch '{browser.name}': {result.get('error', 'unknown error')}")
            return False
        return True

    def _open_command(self, parts: List[str]) -> None:
        if len(parts) < 2:
            self._output("Usage: open <url>")
            return
        self.open_url(parts[1])

    # =========================================================================
    # RULE COMMANDS
    # =========================================================================

    def _rule_command(self, parts: List[str]) -> None:
        if len(parts) < 2:
            self._output("No rule command provided. Type 'help' for more details.")
            return

        sub = parts[1].lower()
        if sub == "list":
            self._list_rules(order_by_priority=len(parts) > 2 and parts[2] == "-p")
        elif sub == "add":
            if len(parts) < 5:
                self._output(RULE_ADD_USAGE)
                return
            self.store.rules.add(parts[2], parts[3], parts[4])
            self._output("Rule added.")
        elif sub == "remove":
            if len(parts) < 3:
                self._output("Usage: rule remove <id>")
                return
            self.store.rules.remove(parts[2])
            self._output("Rule removed.")
        elif sub == "edit":
            if len(parts) < 5:
                self._output("Usage: rule edit <id> <hostname/browser/priority> <new_value>")
                return
            field = parts[3]
            self.store.rules.edit(parts[2], field, " ".join(parts[4:]))
            self._output(f"{field.capitalize()} updated.")
        elif sub == "test":
            if len(parts) < 3:
                self._output("Usage: rule test <url>")
                return
            resolution = self.store.resolver().resolve(parts[2])
            rule = resolution.rule
            self._output(
                f"Host '{resolution.host}' -> rule {rule.id} ({rule.hostname}, priority {rule.priority}) "
                f"-> browser '{resolution.browser.name}'"
            )
        else:
            self._output("Unknown rule command.")

    def _list_rules(self, order_by_priority: bool) -> None:
        rules = self.store.rules.list(order_by_priority=order_by_priority)
        if not rules:
            self._output("No rules defined.")
            return
        for rule in rules:
            self._output(
                f"ID: {rule.id}, Hostname: {rule.hostname}, Browser: {rule.browser_name}, Priority: {rule.priority}"
            )

    # =========================================================================
    # BROWSER COMMANDS
    # =========================================================================

    def _browser_command(self, parts: List[str]) -> None:
        if len(parts) < 2:
            self._output("Invalid browser command. Type 'help' for more details.")
            return

        sub = parts[1].lower()
        if sub == "list":
            self._list_browsers()
        elif sub == "add":
            self._add_browser()
        elif sub == "remove":
            if len(parts) < 3:
                self._output("Usage: browser remove <name>")
                return
            browser = self.store.browsers.remove(parts[2])
            self._output(f"Browser '{browser.name}' removed.")
        elif sub == "edit":
            if len(parts) < 3:
                self._output("Usage: browser edit <name>")
                return
            self._edit_browser(parts[2])
        else:
            self._output("Unknown browser command.")

    def _list_browsers(self) -> None:
        browsers = self.store.browsers.list()
        if not browsers:
            self._output("No browsers available.")
            return
        self._output("Available browsers:")
        for browser in browsers:
            self._output(f"Name: {browser.name}, Path: {browser.path}, StartArguments: {browser.start_arguments}")

    def _add_browser(self) -> None:
        name = self._input("Browser display name? ").strip()
        path = self._input("Browser path? ").strip()
        arguments = self._input("Browser start arguments (optional)? ").strip()

        self.store.browsers.add(name, path, arguments)
        self._output("Browser added.")

    def _edit_browser(self, name: str) -> None:
        browser = self.store.browsers.find(name)
        if browser is None:
            self._output(f"Browser '{name}' not found.")
            return

        new_path = self._input(f"New browser path (current: {browser.path})? ")
        new_arguments = self._input(f"New start arguments (current: {browser.start_arguments})? ")

        self.store.browsers.edit(browser.name, new_path.strip(), new_arguments.strip())
        self._output(f"Browser '{browser.name}' updated.")
