"""
Launch environment construction and the process launch boundary.

The environment handed to ``claude`` is always a fresh copy of the parent's
environment with any inherited ``ANTHROPIC_*`` variables dropped and the
computed values laid on top.
"""

from typing import Dict, List, Mapping, Optional
import contextlib
import subprocess
import threading
import shutil
import signal
import os

from ccrun.const import ANTHROPIC_AUTH_TOKEN, ANTHROPIC_BASE_URL, ANTHROPIC_ENV_KEYS, DEFAULT_CLAUDE_BIN, PROXY_ENV_KEYS
from ccrun.config.models import ModelMapping
from ccrun.logger import _logger
from ccrun.models import LaunchError

def build_proxy_env(proxy_url :Optional[str])->Dict[str, str]:
    if not proxy_url:
        return {}
    return {key: proxy_url for key in PROXY_ENV_KEYS}

def build_env(base_url :str, token :str, proxy_url :Optional[str]=None, models :Optional[ModelMapping]=None)->Dict[str, str]:
    """Variables for a third-party endpoint launch."""
    env = {
        ANTHROPIC_BASE_URL: base_url,
        ANTHROPIC_AUTH_TOKEN: token,
    }
    if models is not None:
        env.update(models.to_env())
    env.update(build_proxy_env(proxy_url))
    return env

def build_official_env(proxy_url :Optional[str]=None)->Dict[str, str]:
    """Variables for an official launch: proxy settings only."""
    return build_proxy_env(proxy_url)

def merge_env(overrides :Mapping[str, str], base :Optional[Mapping[str, str]]=None)->Dict[str, str]:
    env = dict(os.environ if base is None else base)
    for key in ANTHROPIC_ENV_KEYS:
        env.pop(key, None)
    env.update(overrides)
    return env

@contextlib.contextmanager
def _ignore_sigint():
    """Let Ctrl+C reach the child only, so the parent survives to restore settings."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)

def _exit_status(returncode :Optional[int])->int:
    if returncode is None:
        return 0
    # killed by signal N -> shell convention 128 + N
    if returncode < 0:
        return 128 - returncode
    return returncode

class ProcessLauncher:
    def launch(self, args :List[str], env :Dict[str, str])->int:
        raise NotImplementedError

class SubprocessLauncher(ProcessLauncher):
    """Runs the Claude Code CLI with inherited stdio and waits for it to exit."""

    def __init__(self, program :str=DEFAULT_CLAUDE_BIN):
        self.program = program

    def launch(self, args :List[str], env :Dict[str, str])->int:
        executable = shutil.which(self.program, path=env.get("PATH")) or self.program
        _logger.logger.debug(f"Launching {executable} with args {args}")
        try:
            process = subprocess.Popen([executable, *args], env=env)
        except FileNotFoundError as e:
            raise LaunchError(
                message=f"Error: could not find '{self.program}' on PATH",
                hint="Install Claude Code with: npm install -g @anthropic-ai/claude-code"
            ) from e
        except OSError as e:
            raise LaunchError(message=f"Error: failed to start '{self.program}': {e}") from e

        with _ignore_sigint():
            returncode = process.wait()
        _logger.logger.debug(f"{self.program} exited with code {returncode}")
        return _exit_status(returncode)
