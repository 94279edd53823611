"""
Claude Code's own settings file, ``~/.claude/settings.json``.

The external ``claude`` program reads this file natively, so whatever cc-run
writes here must stay in Claude's schema. Documents are always read whole,
patched in memory (see ``ClaudeSettings``) and written whole.
"""

from typing import Any, Optional, Tuple

from ccrun.const import CLAUDE_SETTINGS_DIRNAME, CLAUDE_SETTINGS_FILENAME
from ccrun.config.models import ClaudeSettings, ModelMapping
from ccrun.config.storage import JsonDocumentStore

class ClaudeSettingsStore(JsonDocumentStore):
    dirname = CLAUDE_SETTINGS_DIRNAME
    filename = CLAUDE_SETTINGS_FILENAME
    description = "Claude settings file"

    def default(self)->ClaudeSettings:
        return ClaudeSettings()

    def parse(self, data :Any)->ClaudeSettings:
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return ClaudeSettings.model_validate(data)

    def dump(self, document :ClaudeSettings)->Any:
        return document.to_json_dict()

    def backup(self)->ClaudeSettings:
        """Full deep copy of the current document, used to restore after a temporary launch."""
        return self.read().snapshot()

    def restore(self, backup :ClaudeSettings)->None:
        self.write(backup)

    def get_proxy(self)->Optional[str]:
        return self.read().proxy_url

    def set_proxy(self, url :str)->None:
        self.write(self.read().with_proxy(url))

    def remove_proxy(self)->None:
        self.write(self.read().without_proxy())

    def get_third_party_api(self)->Optional[Tuple[str, str]]:
        return self.read().get_third_party_api()

    def set_third_party_api(self, base_url :str, token :str, models :Optional[ModelMapping]=None)->None:
        self.write(self.read().with_third_party_api(base_url, token, models))

    def remove_third_party_api(self)->None:
        self.write(self.read().without_anthropic_env())
