import json
from loguru import logger
import pytest

from ccrun.claude_settings import ClaudeSettingsStore
from ccrun.commands import AdminCommands
from ccrun.config.storage import LauncherConfigStore
from ccrun.const import ANTHROPIC_ENV_KEYS, PROXY_ENV_KEYS, TEST_HOME_ENV
from ccrun.engine import ReconciliationEngine
from ccrun.launcher import ProcessLauncher

class FakeLauncher(ProcessLauncher):
    """Records launches instead of running claude."""

    def __init__(self, exit_code=0, on_launch=None, error=None):
        self.exit_code = exit_code
        self.on_launch = on_launch
        self.error = error
        self.calls = []

    def launch(self, args, env):
        self.calls.append((list(args), dict(env)))
        if self.on_launch is not None:
            self.on_launch(args, env)
        if self.error is not None:
            raise self.error
        return self.exit_code

    @property
    def last_env(self):
        return self.calls[-1][1]

class ScriptedPrompt:
    """Answers prompts from a fixed list, then with empty strings."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.questions = []

    def __call__(self, question):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else ""

@pytest.fixture(autouse=True)
def home_dir(tmp_path, monkeypatch):
    """Point both documents at a temporary home and scrub inherited variables."""
    monkeypatch.setenv(TEST_HOME_ENV, str(tmp_path))
    for key in (*ANTHROPIC_ENV_KEYS, *PROXY_ENV_KEYS):
        monkeypatch.delenv(key, raising=False)
    return tmp_path

@pytest.fixture
def launcher_store():
    return LauncherConfigStore()

@pytest.fixture
def settings_store():
    return ClaudeSettingsStore()

@pytest.fixture
def fake_launcher():
    return FakeLauncher()

@pytest.fixture
def scripted_prompt():
    return ScriptedPrompt()

@pytest.fixture
def output():
    lines = []
    return lines

@pytest.fixture
def engine(launcher_store, settings_store, scripted_prompt, fake_launcher, output):
    return ReconciliationEngine(
        launcher_store=launcher_store,
        settings_store=settings_store,
        prompt_fn=scripted_prompt,
        process_launcher=fake_launcher,
        output_fn=output.append,
    )

@pytest.fixture
def commands(launcher_store, settings_store, scripted_prompt, output):
    return AdminCommands(
        launcher_store=launcher_store,
        settings_store=settings_store,
        prompt_fn=scripted_prompt,
        output_fn=output.append,
    )

@pytest.fixture
def write_json():
    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
    return _write

@pytest.fixture
def read_json():
    def _read(path):
        return json.loads(path.read_text(encoding="utf-8"))
    return _read

@pytest.fixture
def log_messages():
    """Collect loguru output emitted during the test."""
    messages = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(sink_id)
