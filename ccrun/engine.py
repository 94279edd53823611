"""
ccrun.engine
============
Launch modes and the settings reconciliation around each launch.

Every launch follows the same sequence: snapshot ``~/.claude/settings.json``,
compute the change the mode needs, write it, run ``claude``, wait for it to
exit, then either restore the snapshot (temporary modes) or leave the change
in place (persist mode).

Modes
-----
Official (``cc-run``)
    Clears ``env.ANTHROPIC_*`` when a base URL or auth token is set, and the
    ``proxy`` key when the launcher policy ``clearForOfficial`` is on. The
    child only receives proxy variables derived from the proxy left in place.
    The snapshot is restored after exit.

Provider (``cc-run <provider>``)
    Clears any ``env.ANTHROPIC_*`` key, never touches ``proxy``. The child
    receives the endpoint's base URL, token, model mapping and the launcher
    proxy policy. The snapshot is restored after exit.

Provider persist (``cc-run <provider> --claude``)
    Clears any pre-existing ``env.ANTHROPIC_*`` keys, then writes the new
    endpoint permanently so the native ``claude`` command uses it. Nothing is
    restored.

Restore official (``cc-run --claude``)
    Removes ``env.ANTHROPIC_*`` permanently. Launches only when passthrough
    arguments were given.

When no clearable state is present the settings file is not written at all.
Restoration runs from a ``finally`` block, so it happens for any exit code
and when the launch itself fails. If the parent process is killed before
``claude`` exits, the restore never runs and the settings stay in their
temporary state.
"""

from typing import Callable, Dict, List, Optional
import json

from ccrun.claude_settings import ClaudeSettingsStore
from ccrun.config.endpoints import resolve_endpoint
from ccrun.config.models import ClaudeSettings, Endpoint
from ccrun.config.storage import LauncherConfigStore
from ccrun.credentials import CredentialStore, PromptFn
from ccrun.launcher import ProcessLauncher, SubprocessLauncher, build_env, build_official_env, merge_env
from ccrun.logger import _logger
from ccrun.models import EndpointNotFoundError, TokenRequiredError
from ccrun.utils import prompt, retry_on_os_error

class ReconciliationEngine:
    def __init__(
        self,
        launcher_store :Optional[LauncherConfigStore]=None,
        settings_store :Optional[ClaudeSettingsStore]=None,
        prompt_fn :Optional[PromptFn]=None,
        process_launcher :Optional[ProcessLauncher]=None,
        output_fn :Callable[[str], None]=print
    ):
        self.launcher_store = launcher_store or LauncherConfigStore()
        self.settings_store = settings_store or ClaudeSettingsStore()
        self.prompt_fn = prompt_fn or prompt
        self.process_launcher = process_launcher or SubprocessLauncher()
        self.output_fn = output_fn
        self.credentials = CredentialStore(self.launcher_store, self.prompt_fn)

    # ------------------------------------------------------------------
    # Launch modes
    # ------------------------------------------------------------------
    def run_official(self, passthrough_args :Optional[List[str]]=None)->int:
        """Launch the official Claude, temporarily hiding any third-party config."""
        proxy_config = self.launcher_store.get_proxy_config()
        backup = self.settings_store.backup()

        clear_endpoint = backup.has_third_party_env()
        clear_proxy = bool(proxy_config.clear_for_official) and backup.proxy is not None
        _logger.logger.debug(f"Official launch: clear_endpoint={clear_endpoint} clear_proxy={clear_proxy}")

        patched = backup
        if clear_endpoint:
            patched = patched.without_anthropic_env()
            self.output_fn("Temporarily cleared the third-party endpoint config")
        if clear_proxy:
            patched = patched.without_proxy()
            self.output_fn("Temporarily cleared the proxy config")

        env = merge_env(build_official_env(patched.proxy_url))
        needs_restore = clear_endpoint or clear_proxy
        return self._launch(passthrough_args, env, backup if needs_restore else None, patched)

    def run_provider(self, provider :str, persist :bool=False, passthrough_args :Optional[List[str]]=None)->int:
        """
        Launch Claude against a built-in or custom endpoint.

        Args:
            provider: endpoint name, matched case-sensitively.
            persist: also configure the native ``claude`` command to use this
                endpoint, leaving the change in place after exit.
            passthrough_args: arguments handed to ``claude`` as-is.

        Returns:
            int: the exit code of ``claude``.

        Raises:
            EndpointNotFoundError: if no endpoint has this name. Nothing is
                written and nothing is launched.
            TokenRequiredError: if no token is saved and an empty one is entered.
        """
        endpoint = resolve_endpoint(provider, self.launcher_store.read())
        if endpoint is None:
            raise EndpointNotFoundError.from_name(provider)

        token = self._resolve_token(endpoint)
        self.launcher_store.set_last_used(provider)
        proxy_url = self.launcher_store.get_proxy_config().active_url

        backup = self.settings_store.backup()
        has_env = backup.has_anthropic_env()
        patched = backup.without_anthropic_env() if has_env else backup
        _logger.logger.debug(f"Provider launch: provider={provider} persist={persist} clear_env={has_env}")
        if has_env:
            self.output_fn("Temporarily cleared the ANTHROPIC settings in settings.json")

        env = merge_env(build_env(endpoint.endpoint, token, proxy_url, endpoint.models))

        if persist:
            self.settings_store.write(patched.with_third_party_api(endpoint.endpoint, token, endpoint.models))
            self.output_fn(f"Configured the native claude command to use {provider}")
            self.output_fn("Run \"cc-run --claude\" to restore the official config")
            return self.process_launcher.launch(list(passthrough_args or []), env)

        return self._launch(passthrough_args, env, backup if has_env else None, patched)

    def restore_official(self, passthrough_args :Optional[List[str]]=None)->int:
        """Point the native ``claude`` command back at the official endpoint."""
        self.settings_store.remove_third_party_api()
        self.output_fn("Restored the native claude command to the official endpoint")

        if not passthrough_args:
            return 0

        self.output_fn(f"Passthrough arguments: {' '.join(passthrough_args)}")
        env = merge_env(build_official_env(self.settings_store.get_proxy()))
        return self.process_launcher.launch(list(passthrough_args), env)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve_token(self, endpoint :Endpoint)->str:
        token = endpoint.token or self.credentials.get_token(endpoint.name)
        if token:
            return token

        token = self.credentials.prompt_for_token(endpoint.name)
        if not token:
            raise TokenRequiredError.from_name(endpoint.name)
        self.credentials.set_token(endpoint.name, token)
        return token

    def _launch(
        self,
        passthrough_args :Optional[List[str]],
        env :Dict[str, str],
        backup :Optional[ClaudeSettings],
        patched :ClaudeSettings
    )->int:
        args = list(passthrough_args or [])
        if backup is None:
            return self.process_launcher.launch(args, env)

        self.settings_store.write(patched)
        self.output_fn("Settings will be restored after Claude exits...")
        try:
            return self.process_launcher.launch(args, env)
        finally:
            self._restore(backup)

    def _restore(self, backup :ClaudeSettings)->None:
        try:
            retry_on_os_error(self.settings_store.restore)(backup)
        except OSError as e:
            _logger.logger.error(
                f"Failed to restore {self.settings_store.file_path}: {e}. "
                "The file was left in its temporary state. Original contents:\n"
                f"{json.dumps(backup.to_json_dict(), indent=2, ensure_ascii=False)}"
            )
            raise
        self.output_fn("Settings restored")
