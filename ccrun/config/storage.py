"""
Persistence for cc-run's JSON documents.

``JsonDocumentStore`` holds the shared read/write mechanics: documents live at
a fixed path under the home directory (``CC_RUN_TEST_HOME`` overrides it for
test isolation), a missing file reads as the default document, a corrupt one
is logged and also reads as the default document, and writes replace the
whole file atomically. There is no locking and no partial update; callers do
a full read-modify-write.

``LauncherConfigStore`` manages ``~/.runcc/config.json``.
"""

from typing import Any, List, Optional, Union
from pathlib import Path
import contextlib
import tempfile
import json
import os

from pydantic import ValidationError

from ccrun.const import DEFAULT_ENCODING, LAUNCHER_CONFIG_DIRNAME, LAUNCHER_CONFIG_FILENAME, TEST_HOME_ENV
from ccrun.config.models import Endpoint, LauncherConfig, ModelMapping, ProxyConfig
from ccrun.logger import _logger

def get_home_dir()->Path:
    """Root under which both documents live, evaluated on every call."""
    return Path(os.getenv(TEST_HOME_ENV) or Path.home())

class JsonDocumentStore:
    dirname :str = ""
    filename :str = ""
    description :str = "config file"

    def __init__(self, home_dir :Optional[Union[str, Path]]=None):
        self._home_dir = home_dir

    @property
    def home_dir(self)->Path:
        return Path(self._home_dir) if self._home_dir else get_home_dir()

    @property
    def dir_path(self)->Path:
        return self.home_dir / self.dirname

    @property
    def file_path(self)->Path:
        return self.dir_path / self.filename

    def default(self)->Any:
        raise NotImplementedError

    def parse(self, data :Any)->Any:
        raise NotImplementedError

    def dump(self, document :Any)->Any:
        raise NotImplementedError

    def read(self)->Any:
        if not self.file_path.exists():
            return self.default()

        try:
            with open(self.file_path, "r", encoding=DEFAULT_ENCODING) as _file:
                data = json.load(_file)
            return self.parse(data)
        except (OSError, ValueError, ValidationError) as e:
            _logger.logger.warning(
                f"Failed to read {self.description} {self.file_path}: {e}. Using an empty default instead."
            )
            return self.default()

    def write(self, document :Any)->None:
        self.dir_path.mkdir(parents=True, exist_ok=True)
        content = json.dumps(self.dump(document), indent=2, ensure_ascii=False)

        fd, tmp_path = tempfile.mkstemp(prefix=f".{self.filename}.", suffix=".tmp", dir=self.dir_path)
        try:
            with os.fdopen(fd, "w", encoding=DEFAULT_ENCODING) as _file:
                _file.write(content)
                _file.flush()
                os.fsync(_file.fileno())
            os.replace(tmp_path, self.file_path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
            raise
        _logger.logger.debug(f"Wrote {self.description} {self.file_path}")

class LauncherConfigStore(JsonDocumentStore):
    dirname = LAUNCHER_CONFIG_DIRNAME
    filename = LAUNCHER_CONFIG_FILENAME
    description = "cc-run config file"

    def default(self)->LauncherConfig:
        return LauncherConfig()

    def parse(self, data :Any)->LauncherConfig:
        return LauncherConfig.model_validate(data)

    def dump(self, document :LauncherConfig)->Any:
        return document.to_json_dict()

    def get_custom_endpoints(self)->List[Endpoint]:
        return self.read().endpoints

    def add_custom_endpoint(self, name :str, endpoint :str, token :Optional[str]=None, models :Optional[ModelMapping]=None)->bool:
        """
        Add a custom endpoint, replacing any existing one with the same name in full.
        Returns True when an existing endpoint was replaced.
        """
        config = self.read()
        new_endpoint = Endpoint(name=name, endpoint=endpoint, token=token, models=models)
        for index, existing in enumerate(config.endpoints):
            if existing.name == name:
                config.endpoints[index] = new_endpoint
                self.write(config)
                return True
        config.endpoints.append(new_endpoint)
        self.write(config)
        return False

    def remove_custom_endpoint(self, name :str)->bool:
        config = self.read()
        remaining = [endpoint for endpoint in config.endpoints if endpoint.name != name]
        if len(remaining) == len(config.endpoints):
            return False
        config.endpoints = remaining
        self.write(config)
        return True

    def get_token(self, provider :str)->Optional[str]:
        return self.read().tokens.get(provider)

    def save_token(self, provider :str, token :str)->None:
        config = self.read()
        config.tokens[provider] = token
        self.write(config)

    def clear_token(self, provider :str)->bool:
        config = self.read()
        if provider not in config.tokens:
            return False
        del config.tokens[provider]
        self.write(config)
        return True

    def set_custom_endpoint_token(self, name :str, token :Optional[str])->bool:
        """Set (or with None, remove) the token of a custom endpoint. False if it does not exist."""
        config = self.read()
        endpoint = config.find_endpoint(name)
        if endpoint is None:
            return False
        endpoint.token = token
        self.write(config)
        return True

    def get_last_used(self)->Optional[str]:
        return self.read().last_used

    def set_last_used(self, provider :str)->None:
        config = self.read()
        config.last_used = provider
        self.write(config)

    def get_proxy_config(self)->ProxyConfig:
        return self.read().proxy

    def set_proxy_config(self, enabled :bool, url :Optional[str]=None, clear_for_official :Optional[bool]=None)->None:
        config = self.read()
        config.proxy = ProxyConfig(enabled=enabled, url=url, clear_for_official=clear_for_official)
        self.write(config)
