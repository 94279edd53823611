"""
Pydantic models for the two JSON documents cc-run reads and writes.

``LauncherConfig`` is cc-run's own state (``~/.runcc/config.json``) and is
serialised with the camelCase keys the file has always used.

``ClaudeSettings`` is Claude Code's native ``~/.claude/settings.json``. Only
``proxy`` and ``env`` are modelled; every other key is carried through
untouched, and dumping returns exactly the keys that were read or set so a
snapshot written back is identical to the document it was taken from. The
patch helpers never mutate in place, they return a new document.
"""

from typing import Any, Dict, List, Optional, Tuple
import copy

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ccrun.const import ANTHROPIC_AUTH_TOKEN, ANTHROPIC_BASE_URL, ANTHROPIC_ENV_KEYS, MODEL_ENV_KEYS

class ModelMapping(BaseModel):
    haiku :Optional[str]=None
    opus :Optional[str]=None
    sonnet :Optional[str]=None

    @classmethod
    def single(cls, model :Optional[str])->Optional["ModelMapping"]:
        """Map every tier to the same model, or nothing when no model is given."""
        if not model:
            return None
        return cls(haiku=model, opus=model, sonnet=model)

    def to_env(self)->Dict[str, str]:
        env = {}
        for tier, key in MODEL_ENV_KEYS.items():
            model = getattr(self, tier)
            if model:
                env[key] = model
        return env

class Endpoint(BaseModel):
    name :str
    endpoint :str
    token :Optional[str]=None
    models :Optional[ModelMapping]=None

class ProxyConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    enabled :bool=False
    url :Optional[str]=None
    clear_for_official :Optional[bool]=Field(default=None, alias="clearForOfficial")

    @property
    def active_url(self)->Optional[str]:
        """Proxy URL to export to the child, only when the policy is enabled."""
        return self.url if self.enabled and self.url else None

class LauncherConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    endpoints :List[Endpoint]=Field(default_factory=list)
    tokens :Dict[str, str]=Field(default_factory=dict)
    last_used :Optional[str]=Field(default=None, alias="lastUsed")
    proxy :ProxyConfig=Field(default_factory=ProxyConfig)

    @field_validator("endpoints", "tokens", "proxy", mode="before")
    @classmethod
    def null_as_default(cls, value :Any, info)->Any:
        if value is None:
            return {"endpoints": [], "tokens": {}, "proxy": {}}[info.field_name]
        return value

    def find_endpoint(self, name :str)->Optional[Endpoint]:
        for endpoint in self.endpoints:
            if endpoint.name == name:
                return endpoint
        return None

    def to_json_dict(self)->Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

class ClaudeSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    # any JSON shape is kept as read; helpers below only act on the expected types
    proxy :Any=None
    env :Any=None

    def to_json_dict(self)->Dict[str, Any]:
        data = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        }
        data.update(self.model_extra or {})
        return data

    def snapshot(self)->"ClaudeSettings":
        """Deep copy that shares nothing with this document."""
        return ClaudeSettings.model_validate(copy.deepcopy(self.to_json_dict()))

    def _env_dict(self)->Dict[str, Any]:
        return self.env if isinstance(self.env, dict) else {}

    @property
    def proxy_url(self)->Optional[str]:
        return self.proxy if isinstance(self.proxy, str) and self.proxy else None

    def has_third_party_env(self)->bool:
        """True when a base URL or auth token is configured for the native ``claude`` command."""
        env = self._env_dict()
        return bool(env.get(ANTHROPIC_BASE_URL) or env.get(ANTHROPIC_AUTH_TOKEN))

    def has_anthropic_env(self)->bool:
        env = self._env_dict()
        return any(env.get(key) for key in ANTHROPIC_ENV_KEYS)

    def get_third_party_api(self)->Optional[Tuple[str, str]]:
        env = self._env_dict()
        base_url = env.get(ANTHROPIC_BASE_URL)
        auth_token = env.get(ANTHROPIC_AUTH_TOKEN)
        if base_url and auth_token:
            return base_url, auth_token
        return None

    def with_proxy(self, url :str)->"ClaudeSettings":
        data = copy.deepcopy(self.to_json_dict())
        data["proxy"] = url
        return ClaudeSettings.model_validate(data)

    def without_proxy(self)->"ClaudeSettings":
        data = copy.deepcopy(self.to_json_dict())
        data.pop("proxy", None)
        return ClaudeSettings.model_validate(data)

    def without_anthropic_env(self)->"ClaudeSettings":
        data = copy.deepcopy(self.to_json_dict())
        env = data.get("env")
        if isinstance(env, dict):
            for key in ANTHROPIC_ENV_KEYS:
                env.pop(key, None)
            # an emptied env block is dropped entirely
            if not env:
                data.pop("env")
        return ClaudeSettings.model_validate(data)

    def with_third_party_api(self, base_url :str, token :str, models :Optional[ModelMapping]=None)->"ClaudeSettings":
        data = copy.deepcopy(self.to_json_dict())
        env = data.get("env")
        if not isinstance(env, dict):
            env = {}
        env[ANTHROPIC_BASE_URL] = base_url
        env[ANTHROPIC_AUTH_TOKEN] = token
        if models is not None:
            env.update(models.to_env())
        data["env"] = env
        return ClaudeSettings.model_validate(data)
