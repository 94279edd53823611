from ccrun.config.models import ClaudeSettings, Endpoint, LauncherConfig, ModelMapping, ProxyConfig
from ccrun.config.endpoints import (
    BUILTIN_ENDPOINTS,
    get_builtin_endpoint,
    get_builtin_endpoint_names,
    is_builtin_endpoint,
    resolve_endpoint
)
from ccrun.config.storage import LauncherConfigStore

__all__ = [
    "BUILTIN_ENDPOINTS",
    "ClaudeSettings",
    "Endpoint",
    "LauncherConfig",
    "LauncherConfigStore",
    "ModelMapping",
    "ProxyConfig",
    "get_builtin_endpoint",
    "get_builtin_endpoint_names",
    "is_builtin_endpoint",
    "resolve_endpoint"
]
