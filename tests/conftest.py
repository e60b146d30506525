import sys
import pytest
from pathlib import Path

# Add project root to path so tests run without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from switcher.core.store import SwitcherStore
from switcher.core.switcher_config import SwitcherConfig
from switcher.tools.base import Tool


class RecordingLauncher(Tool):
    """Test-only stand-in for browser.launch that records calls instead of spawning."""

    def __init__(self, status="success", error=None):
        self.calls = []
        self._status = status
        self._error = error

    @property
    def name(self) -> str:
        return "browser.launch"

    @property
    def schema(self):
        return {"type": "object", "properties": {}, "required": ["path", "url"]}

    def execute(self, args):
        self.calls.append(dict(args))
        if self._status == "success":
            return {"status": "success", "pid": 4242}
        return {"status": "error", "error": self._error}


@pytest.fixture(autouse=True)
def reset_switcher_config():
    """Every test starts from the default configuration."""
    SwitcherConfig.reset()
    yield
    SwitcherConfig.reset()


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "rules.json"


@pytest.fixture
def store(data_file):
    """Empty store persisted to a temp file."""
    return SwitcherStore.open(data_file)


@pytest.fixture
def populated_store(store):
    """Store with chrome and firefox plus two rules."""
    store.browsers.add("chrome", "/bin/chrome", "")
    store.browsers.add("firefox", "/bin/firefox", "--new-window")
    store.rules.add("*", "chrome", 100)
    store.rules.add("news.com", "firefox", 1)
    return store


@pytest.fixture
def launcher():
    return RecordingLauncher()


@pytest.fixture
def failing_launcher():
    return RecordingLauncher(status="error", error="Executable not found: /bin/firefox")
