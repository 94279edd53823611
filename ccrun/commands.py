from typing import Callable, List, Optional

from ccrun.claude_settings import ClaudeSettingsStore
from ccrun.config.endpoints import BUILTIN_ENDPOINTS, is_builtin_endpoint, resolve_endpoint
from ccrun.config.models import Endpoint, ModelMapping
from ccrun.config.storage import LauncherConfigStore
from ccrun.const import MANAGEMENT_COMMANDS
from ccrun.credentials import CredentialStore, PromptFn
from ccrun.models import BuiltinEndpointError, EndpointNotFoundError, InvalidUrlError, TokenRequiredError
from ccrun.utils import is_valid_url, mask_secret, prompt

PROXY_HELP = """Proxy commands:

  cc-run proxy on      Enable the proxy (asks for the proxy URL the first time)
  cc-run proxy off     Disable the proxy
  cc-run proxy reset   Forget the proxy configuration
  cc-run proxy status  Show the proxy status
  cc-run proxy help    Show this help

Notes:
  - proxy on adds a proxy entry to ~/.claude/settings.json
  - proxy off removes the proxy entry from ~/.claude/settings.json
  - the proxy URL is kept in ~/.runcc/config.json"""

class AdminCommands:
    """Non-launching commands: endpoint, token and proxy management."""

    def __init__(
        self,
        launcher_store :Optional[LauncherConfigStore]=None,
        settings_store :Optional[ClaudeSettingsStore]=None,
        prompt_fn :Optional[PromptFn]=None,
        output_fn :Callable[[str], None]=print
    ):
        self.launcher_store = launcher_store or LauncherConfigStore()
        self.settings_store = settings_store or ClaudeSettingsStore()
        self.prompt_fn = prompt_fn or prompt
        self.output_fn = output_fn
        self.credentials = CredentialStore(self.launcher_store, self.prompt_fn)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def list_endpoints(self)->int:
        config = self.launcher_store.read()

        self.output_fn("Available endpoints:")
        self.output_fn("")
        self.output_fn("Built-in:")
        for endpoint in BUILTIN_ENDPOINTS:
            token = config.tokens.get(endpoint.name)
            self.output_fn(self._format_endpoint(endpoint, token, config.last_used))

        self.output_fn("")
        if not config.endpoints:
            self.output_fn("Custom: none")
            return 0

        self.output_fn("Custom:")
        for endpoint in config.endpoints:
            self.output_fn(self._format_endpoint(endpoint, endpoint.token, config.last_used))
        return 0

    @staticmethod
    def _format_endpoint(endpoint :Endpoint, token :Optional[str], last_used :Optional[str])->str:
        marker = "*" if endpoint.name == last_used else " "
        token_status = f"token {mask_secret(token)}" if token else "no token"
        return f" {marker}{endpoint.name.ljust(12)} {endpoint.endpoint} ({token_status})"

    def add(self, name :str, endpoint :str)->int:
        if is_builtin_endpoint(name):
            raise BuiltinEndpointError.cannot_add(name)
        if name in MANAGEMENT_COMMANDS:
            raise BuiltinEndpointError.reserved_command(name)
        if not is_valid_url(endpoint):
            raise InvalidUrlError.from_url(endpoint)

        token = self.prompt_fn(f"Enter the API token for {name}: ").strip()
        model = self.prompt_fn("Enter the model name: ").strip()

        replaced = self.launcher_store.add_custom_endpoint(
            name,
            endpoint,
            token=token or None,
            models=ModelMapping.single(model)
        )
        self.output_fn(f"{'Updated' if replaced else 'Added'} endpoint: {name}")
        return 0

    def remove(self, name :str)->int:
        if is_builtin_endpoint(name):
            raise BuiltinEndpointError.cannot_remove(name)
        if not self.launcher_store.remove_custom_endpoint(name):
            raise EndpointNotFoundError(
                message=f"Error: custom endpoint \"{name}\" not found",
                hint="Run \"cc-run list\" to see the available endpoints"
            )
        self.output_fn(f"Removed endpoint: {name}")
        return 0

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------
    def _assert_provider_exists(self, name :str)->None:
        if resolve_endpoint(name, self.launcher_store.read()) is None:
            raise EndpointNotFoundError.from_name(name)

    def token_set(self, provider :str, token :Optional[str]=None)->int:
        self._assert_provider_exists(provider)

        final_token = (token or "").strip() or self.credentials.prompt_for_token(provider)
        if not final_token:
            raise TokenRequiredError.from_name(provider)

        self.credentials.set_token(provider, final_token)
        self.output_fn(f"Saved the token for {provider}")
        return 0

    def token_clean(self, provider :str)->int:
        self._assert_provider_exists(provider)

        if self.credentials.clear_token(provider):
            self.output_fn(f"Cleared the token for {provider}")
        else:
            self.output_fn(f"No token configured for {provider}")
        return 0

    # ------------------------------------------------------------------
    # Proxy
    # ------------------------------------------------------------------
    def proxy_on(self)->int:
        current = self.launcher_store.get_proxy_config()
        proxy_url = current.url
        if not proxy_url:
            proxy_url = self.prompt_fn("Enter the proxy URL (e.g. http://127.0.0.1:7890): ").strip()
        if not is_valid_url(proxy_url):
            raise InvalidUrlError.from_url(proxy_url or "", what="proxy")

        self.launcher_store.set_proxy_config(True, proxy_url, current.clear_for_official)
        self.settings_store.set_proxy(proxy_url)

        self.output_fn(f"Proxy enabled: {proxy_url}")
        self.output_fn(f"Settings file: {self.settings_store.file_path}")
        return 0

    def proxy_off(self)->int:
        current = self.launcher_store.get_proxy_config()
        self.launcher_store.set_proxy_config(False, current.url, current.clear_for_official)
        self.settings_store.remove_proxy()
        self.output_fn("Proxy disabled")
        return 0

    def proxy_reset(self)->int:
        self.launcher_store.set_proxy_config(False)
        self.settings_store.remove_proxy()
        self.output_fn("Proxy configuration reset")
        return 0

    def proxy_status(self)->int:
        proxy_config = self.launcher_store.get_proxy_config()
        claude_proxy = self.settings_store.get_proxy()

        lines :List[str] = [
            "cc-run proxy config:",
            f"  status: {'on' if proxy_config.enabled else 'off'}",
        ]
        if proxy_config.url:
            lines.append(f"  url: {proxy_config.url}")
        if proxy_config.clear_for_official is not None:
            lines.append(f"  clear for official launches: {'yes' if proxy_config.clear_for_official else 'no'}")
        lines.append("")
        lines.append(f"Claude settings file ({self.settings_store.file_path}):")
        lines.append(f"  proxy: {claude_proxy if claude_proxy else 'not configured'}")

        for line in lines:
            self.output_fn(line)
        return 0

    def proxy_help(self)->int:
        self.output_fn(PROXY_HELP)
        return 0
