"""Layered configuration provider.

Lookup order, highest priority first:

    1. values given with ``Config.set``
    2. environment variables ``UKI_<KEY>`` ('.' in the key becomes '_')
    3. YAML files, later files overriding earlier ones
    4. defaults passed to the constructor

Keys are case-insensitive. Nested YAML mappings are flattened with '.', so
``squashfs: {options: [...]}`` is read back as ``squashfs.options``.
"""
from __future__ import annotations
import logging, os
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from .constants import ENV_PREFIX
from .errors import ConfigError, NotFound

__all__ = ['Config']

log = logging.getLogger(__name__)

_MISSING = object()


def _flatten(data: Mapping, prefix: str = '') -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in data.items():
        key = f"{prefix}{str(k).lower()}"
        if isinstance(v, Mapping):
            out.update(_flatten(v, key + '.'))
        else:
            out[key] = v
    return out


def env_name(key: str) -> str:
    return ENV_PREFIX + key.upper().replace('.', '_').replace('-', '_')


class Config:
    def __init__(self, defaults: Optional[Mapping[str, Any]] = None,
                 env: Optional[Mapping[str, str]] = None):
        self._defaults = _flatten(defaults or {})
        self._files: Dict[str, Any] = {}
        self._env: Mapping[str, str] = env if env is not None else {}
        self._overrides: Dict[str, Any] = {}

    @classmethod
    def from_sources(cls, files: Iterable[str] = (), env: Optional[Mapping[str, str]] = None,
                     defaults: Optional[Mapping[str, Any]] = None) -> 'Config':
        cfg = cls(defaults=defaults, env=os.environ if env is None else env)
        for path in files:
            cfg.load_file(path)
        return cfg

    def load_file(self, path: str) -> None:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise NotFound(f"config file not found: {path}", path) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}", path) from e
        if data is None:
            return
        if not isinstance(data, Mapping):
            raise ConfigError(f"config file {path} must contain a mapping, got {type(data).__name__}", path)
        flat = _flatten(data)
        log.debug("loaded %d keys from %s", len(flat), path)
        self._files.update(flat)

    def set(self, key: str, value: Any) -> None:
        self._overrides[key.lower()] = value

    def get(self, key: str, default: Any = None) -> Any:
        key = key.lower()
        if key in self._overrides:
            return self._overrides[key]
        val = self._env.get(env_name(key), _MISSING)
        if val is not _MISSING:
            return val
        if key in self._files:
            return self._files[key]
        return self._defaults.get(key, default)

    def get_list(self, key: str) -> List[str]:
        """Return ``key`` as a list of strings; [] when unset.

        A string value is split on newlines, which is how several entries are
        passed through one env variable. Lines are kept verbatim; only empty
        ones are dropped.
        """
        val = self.get(key)
        if val is None:
            return []
        if isinstance(val, str):
            return [line for line in val.split('\n') if line]
        if isinstance(val, (list, tuple)):
            return [str(v) for v in val]
        return [str(val)]
