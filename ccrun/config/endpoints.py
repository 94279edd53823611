from typing import List, Optional

from ccrun.config.models import Endpoint, LauncherConfig, ModelMapping

BUILTIN_ENDPOINTS :List[Endpoint] = [
    Endpoint(
        name="glm",
        endpoint="https://open.bigmodel.cn/api/anthropic",
        models=ModelMapping(haiku="glm-4.7", opus="glm-4.7", sonnet="glm-4.7"),
    ),
    Endpoint(
        name="deepseek",
        endpoint="https://api.deepseek.com/anthropic",
        models=ModelMapping(haiku="deepseek-chat", opus="deepseek-chat", sonnet="deepseek-chat"),
    ),
    Endpoint(
        name="minimax",
        endpoint="https://api.minimax.io/anthropic",
        models=ModelMapping(haiku="MiniMax-M2", opus="MiniMax-M2", sonnet="MiniMax-M2"),
    ),
]

def get_builtin_endpoint(name :str)->Optional[Endpoint]:
    """Return a copy of the built-in endpoint with this exact name, if any."""
    for endpoint in BUILTIN_ENDPOINTS:
        if endpoint.name == name:
            return endpoint.model_copy(deep=True)
    return None

def is_builtin_endpoint(name :str)->bool:
    return any(endpoint.name == name for endpoint in BUILTIN_ENDPOINTS)

def get_builtin_endpoint_names()->List[str]:
    return [endpoint.name for endpoint in BUILTIN_ENDPOINTS]

def resolve_endpoint(name :str, config :LauncherConfig)->Optional[Endpoint]:
    """
    Resolve a provider name to its endpoint descriptor.

    Built-ins are checked first (case-sensitive), then the custom endpoints of
    the given launcher config snapshot. The result is a copy.
    """
    builtin = get_builtin_endpoint(name)
    if builtin is not None:
        return builtin
    custom = config.find_endpoint(name)
    return custom.model_copy(deep=True) if custom is not None else None
