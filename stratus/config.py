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
The config module contains all configuration management functionality.
"""
import json
from typing import Any, Callable, Optional, TypeVar

from . import errors, log
from .output import Output
from .runtime.config import get_config, get_config_env_key, is_config_secret
from .runtime.settings import get_project

T = TypeVar("T")


def _parse_bool(v: str) -> bool:
    if v in ["true", "True"]:
        return True
    if v in ["false", "False"]:
        return False
    raise ValueError(v)


class Config:
    """
    Config is a bag of related configuration state. Each bag contains any number of configuration variables, indexed by
    simple keys, and each has a name that uniquely identifies it; two bags with different names do not share values for
    variables that otherwise share the same key. For example the bag `todo` holds `todo:sqlPassword`, which is
    entirely separate from `azure-native:sqlPassword`.
    """

    name: str
    """
    The configuration bag's logical name that uniquely identifies it. The default is the name of the current project.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        """
        :param str name: The configuration bag's logical name that uniquely identifies it. If not provided, the name
               of the current project is used.
        """
        if not name:
            name = get_project()
        if not isinstance(name, str):
            raise TypeError("Expected name to be a string")
        self.name = name

    def _get(self, key: str, secret: bool = False) -> Optional[str]:
        full_key = self.full_key(key)
        if not secret and is_config_secret(full_key):
            log.warn(
                f"Configuration '{full_key}' value is a secret; use a secret getter to keep it out of plain outputs"
            )
        return get_config(full_key)

    def _get_typed(
        self, key: str, parse: Callable[[str], T], expect_type: str, secret: bool = False
    ) -> Optional[T]:
        v = self._get(key, secret)
        if v is None:
            return None
        try:
            return parse(v)
        except ValueError as e:
            shown = log.REDACTED if secret or is_config_secret(self.full_key(key)) else v
            raise ConfigTypeError(self.full_key(key), shown, expect_type) from e

    def _require_typed(
        self, key: str, parse: Callable[[str], T], expect_type: str, secret: bool = False
    ) -> T:
        v = self._get_typed(key, parse, expect_type, secret)
        if v is None:
            raise ConfigMissingError(self.full_key(key), secret)
        return v

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Returns an optional configuration value by its key,
        a default value if that key is unset and a default is provided,
        or None if it doesn't exist.

        :param str key: The requested configuration key.
        :param Optional[str] default: An optional fallback value to use if the given configuration key is not set.
        :return: The configuration key's value, or None if one does not exist.
        :rtype: Optional[str]
        """
        config_candidate = self._get(key)
        return config_candidate if config_candidate is not None else default

    def get_secret(self, key: str, default: Optional[str] = None) -> Optional[Output[str]]:
        """
        Returns an optional configuration value by its key, marked as a secret,
        a default value if that key is unset and a default is provided,
        or None if it doesn't exist.
        """
        config_candidate = self._get(key, secret=True)
        v = config_candidate if config_candidate is not None else default
        if v is None:
            return None
        return Output.secret(v)

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        """
        Returns an optional configuration value, as a bool, by its key,
        a default value if that key is unset and a default is provided,
        or None if it doesn't exist.

        :raises ConfigTypeError: The configuration value existed but couldn't be coerced to bool.
        """
        v = self._get_typed(key, _parse_bool, "bool")
        return v if v is not None else default

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """
        Returns an optional configuration value, as an int, by its key.

        :raises ConfigTypeError: The configuration value existed but couldn't be coerced to int.
        """
        v = self._get_typed(key, int, "int")
        return v if v is not None else default

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """
        Returns an optional configuration value, as a float, by its key.

        :raises ConfigTypeError: The configuration value existed but couldn't be coerced to float.
        """
        v = self._get_typed(key, float, "float")
        return v if v is not None else default

    def get_object(self, key: str, default: Optional[Any] = None) -> Optional[Any]:
        """
        Returns an optional configuration value, as an object, by its key. The stored value is JSON.

        :raises ConfigTypeError: The configuration value existed but isn't legal JSON.
        """
        v = self._get_typed(key, json.loads, "JSON object")
        return v if v is not None else default

    def get_secret_bool(self, key: str, default: Optional[bool] = None) -> Optional[Output[bool]]:
        v = self._get_typed(key, _parse_bool, "bool", secret=True)
        v = v if v is not None else default
        return None if v is None else Output.secret(v)

    def get_secret_int(self, key: str, default: Optional[int] = None) -> Optional[Output[int]]:
        v = self._get_typed(key, int, "int", secret=True)
        v = v if v is not None else default
        return None if v is None else Output.secret(v)

    def get_secret_float(self, key: str, default: Optional[float] = None) -> Optional[Output[float]]:
        v = self._get_typed(key, float, "float", secret=True)
        v = v if v is not None else default
        return None if v is None else Output.secret(v)

    def get_secret_object(self, key: str, default: Optional[Any] = None) -> Optional[Output[Any]]:
        v = self._get_typed(key, json.loads, "JSON object", secret=True)
        v = v if v is not None else default
        return None if v is None else Output.secret(v)

    def require(self, key: str) -> str:
        """
        Returns a configuration value by its given key. If it doesn't exist, an error is thrown.

        :param str key: The requested configuration key.
        :return: The configuration key's value.
        :rtype: str
        :raises ConfigMissingError: The configuration value did not exist.
        """
        return self._require_typed(key, str, "string")

    def require_secret(self, key: str) -> Output[str]:
        """
        Returns a configuration value, marked as a secret, by its given key. If it doesn't exist, an error is thrown.

        :raises ConfigMissingError: The configuration value did not exist.
        """
        return Output.secret(self._require_typed(key, str, "string", secret=True))

    def require_bool(self, key: str) -> bool:
        return self._require_typed(key, _parse_bool, "bool")

    def require_secret_bool(self, key: str) -> Output[bool]:
        return Output.secret(self._require_typed(key, _parse_bool, "bool", secret=True))

    def require_int(self, key: str) -> int:
        return self._require_typed(key, int, "int")

    def require_secret_int(self, key: str) -> Output[int]:
        return Output.secret(self._require_typed(key, int, "int", secret=True))

    def require_float(self, key: str) -> float:
        return self._require_typed(key, float, "float")

    def require_secret_float(self, key: str) -> Output[float]:
        return Output.secret(self._require_typed(key, float, "float", secret=True))

    def require_object(self, key: str) -> Any:
        """
        Returns a configuration value as a JSON string and deserializes the JSON into a Python
        object. If it doesn't exist, or the configuration value is not a legal JSON string, an
        error is thrown.
        """
        return self._require_typed(key, json.loads, "JSON object")

    def require_secret_object(self, key: str) -> Output[Any]:
        return Output.secret(self._require_typed(key, json.loads, "JSON object", secret=True))

    def full_key(self, key: str) -> str:
        """
        Turns a simple configuration key into a fully resolved one, by prepending the bag's name.

        :param str key: The name of the configuration key.
        :return: The name of the configuration key, prefixed with the bag's name.
        :rtype: str
        """
        return f"{self.name}:{key}"


class ConfigTypeError(errors.RunError):
    """
    Indicates a configuration value is of the wrong type.
    """

    key: str
    """
    The name of the key whose value was ill-typed.
    """

    value: str
    """
    The ill-typed value, redacted when the key is secret.
    """

    expect_type: str
    """
    The expected type of this value.
    """

    def __init__(self, key: str, value: str, expect_type: str) -> None:
        self.key = key
        self.value = value
        self.expect_type = expect_type
        super().__init__(f"Configuration '{key}' value '{value}' is not a valid '{expect_type}'")


class ConfigMissingError(errors.RunError):
    """
    Indicates a configuration value is missing.
    """

    key: str
    """
    The name of the missing configuration key.
    """

    secret: bool
    """
    If this is a secret configuration key.
    """

    def __init__(self, key: str, secret: bool) -> None:
        self.key = key
        self.secret = secret
        super().__init__(
            f"Missing required configuration variable '{key}'\n"
            + f"\tplease set it in the stack settings file{' as {secret: <value>}' if secret else ''}"
            + f" or in the {get_config_env_key(key)} environment variable"
        )
