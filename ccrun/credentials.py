from typing import Callable, Optional

from ccrun.config.endpoints import is_builtin_endpoint
from ccrun.config.storage import LauncherConfigStore
from ccrun.models import EndpointNotFoundError

PromptFn = Callable[[str], str]

class CredentialStore:
    """
    Tokens per provider.

    Built-in providers keep their token in the launcher config ``tokens`` map;
    custom endpoints keep it on their own descriptor.
    """

    def __init__(self, store :LauncherConfigStore, prompt_fn :PromptFn):
        self.store = store
        self.prompt_fn = prompt_fn

    def get_token(self, provider :str)->Optional[str]:
        if is_builtin_endpoint(provider):
            return self.store.get_token(provider)
        endpoint = self.store.read().find_endpoint(provider)
        return endpoint.token if endpoint is not None else None

    def set_token(self, provider :str, token :str)->None:
        if is_builtin_endpoint(provider):
            self.store.save_token(provider, token)
        elif not self.store.set_custom_endpoint_token(provider, token):
            raise EndpointNotFoundError.from_name(provider)

    def clear_token(self, provider :str)->bool:
        """Remove the saved token. Returns False (and writes nothing) when there was none."""
        if is_builtin_endpoint(provider):
            return self.store.clear_token(provider)
        endpoint = self.store.read().find_endpoint(provider)
        if endpoint is None or not endpoint.token:
            return False
        return self.store.set_custom_endpoint_token(provider, None)

    def prompt_for_token(self, provider :str)->str:
        return self.prompt_fn(f"Enter the API token for {provider}: ").strip()
