# Copyright 2016-2026, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Runtime support for the stratus configuration system. Please use stratus.Config instead.
"""
from typing import Any, Dict, List, NamedTuple, Optional, Set

import json
import os

import yaml

# default to an empty map for config.
CONFIG: Dict[str, Any] = dict()

# default to an empty set for config secret keys.
_SECRET_KEYS: Set[str] = set()

_setting_extensions = [".yaml", ".yml", ".json"]


class StackSettings(NamedTuple):
    config: Dict[str, str]
    secret_keys: List[str]


def set_config(k: str, v: Any, secret: bool = False):
    """
    Sets a configuration variable. Meant for internal use only.
    """
    CONFIG[k] = v
    if secret:
        _SECRET_KEYS.add(k)


def set_all_config(config: Dict[str, str], secret_keys: Optional[List[str]] = None) -> None:
    """
    Overwrites the config map and optional list of secret keys.
    """
    global CONFIG
    CONFIG = dict(config)

    if secret_keys is not None:
        global _SECRET_KEYS
        _SECRET_KEYS = set(secret_keys)


def get_config_env() -> Dict[str, Any]:
    """
    Returns the environment map that will be used for config checking when variables aren't set.
    """
    if "STRATUS_CONFIG" in os.environ:
        env_config = os.environ["STRATUS_CONFIG"]
        return json.loads(env_config)
    return dict()


def get_config_env_key(k: str) -> str:
    """
    Returns a scrubbed environment variable key, STRATUS_CONFIG_<k>, that can be used for
    setting explicit variables. This is unlike STRATUS_CONFIG which is just a JSON-serialized bag.
    """
    env_key = ""
    for c in k:
        if c == "_" or "A" <= c <= "Z" or "0" <= c <= "9":
            env_key += c
        elif "a" <= c <= "z":
            env_key += c.upper()
        else:
            env_key += "_"
    return "STRATUS_CONFIG_%s" % env_key


def get_config_secret_keys_env() -> List[str]:
    """
    Returns the list of config keys that contain secrets.
    """
    if "STRATUS_CONFIG_SECRET_KEYS" in os.environ:
        keys = os.environ["STRATUS_CONFIG_SECRET_KEYS"]
        return json.loads(keys)
    return []


def get_config(k: str) -> Any:
    """
    Returns a configuration variable's value or None if it is unset.
    """
    # If the config has been set explicitly, use it.
    if k in CONFIG:
        return CONFIG[k]

    # If there is a specific STRATUS_CONFIG_<k> environment variable, use it.
    env_key = get_config_env_key(k)
    if env_key in os.environ:
        return os.environ[env_key]

    # If the config hasn't been set, but there is a process-wide STRATUS_CONFIG environment variable, use it.
    env_dict = get_config_env()
    if env_dict is not None and k in env_dict:
        return env_dict[k]

    return None


def is_config_secret(k: str) -> bool:
    """
    Returns True if the configuration variable is a secret.
    """
    return k in _SECRET_KEYS or k in get_config_secret_keys_env()


def get_stack_settings_path(work_dir: str, stack: str) -> str:
    for ext in _setting_extensions:
        path = os.path.join(work_dir, f"Stratus.{stack}{ext}")
        if os.path.exists(path):
            return path
    raise FileNotFoundError(f"failed to find stack settings file in workdir: {work_dir}")


def load_stack_settings(path: str) -> StackSettings:
    """
    Reads a stack settings file. Its `config` map holds fully qualified keys; a value of the form
    `{secret: <value>}` marks the key as secret. Non-string values are stored as JSON.
    """
    with open(path, "r", encoding="utf-8") as file:
        settings = json.load(file) if path.endswith(".json") else yaml.safe_load(file)
    settings = settings or {}
    if not isinstance(settings, dict):
        raise ValueError(f"stack settings in {path} must be a mapping")

    config: Dict[str, str] = {}
    secret_keys: List[str] = []
    for key, value in (settings.get("config") or {}).items():
        if isinstance(value, dict) and set(value) == {"secret"}:
            value = value["secret"]
            secret_keys.append(key)
        config[key] = value if isinstance(value, str) else json.dumps(value)
    return StackSettings(config=config, secret_keys=secret_keys)
