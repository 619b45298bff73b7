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
Utility functions for logging messages to the diagnostic stream of a provisioning run.

Every message is scrubbed of registered secret values before it leaves the process.
"""
import sys
from typing import Optional, Set, TYPE_CHECKING

from ._output import _safe_str
from .runtime.settings import get_engine, is_debug_enabled

if TYPE_CHECKING:
    from .resource import Resource

REDACTED = "[secret]"

_SECRETS: Set[str] = set()


def register_secret(value: str) -> None:
    """
    Registers a plaintext secret so that it is redacted from every subsequent log message.
    """
    if isinstance(value, str) and value:
        _SECRETS.add(value)


def clear_secrets() -> None:
    """Forgets all registered secrets. For use in testing to ensure test isolation."""
    _SECRETS.clear()


def scrub(msg: str) -> str:
    """
    Replaces every registered secret in `msg` with a redaction marker.
    """
    # Longest first so a secret that contains another is redacted whole.
    for secret in sorted(_SECRETS, key=len, reverse=True):
        if secret in msg:
            msg = msg.replace(secret, REDACTED)
    return msg


def debug(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the debug channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    engine = get_engine()
    if engine is not None:
        _log(engine, "debug", msg, resource)
    elif is_debug_enabled():
        print("debug: " + _format(msg, resource), file=sys.stderr)


def info(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the info channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    engine = get_engine()
    if engine is not None:
        _log(engine, "info", msg, resource)
    else:
        print("info: " + _format(msg, resource), file=sys.stderr)


def warn(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the warning channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    engine = get_engine()
    if engine is not None:
        _log(engine, "warning", msg, resource)
    else:
        print("warning: " + _format(msg, resource), file=sys.stderr)


def error(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the error channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    engine = get_engine()
    if engine is not None:
        _log(engine, "error", msg, resource)
    else:
        print("error: " + _format(msg, resource), file=sys.stderr)


def _urn_of(resource: Optional['Resource']) -> str:
    if resource is None or not resource.is_registered():
        return ""
    return resource.urn


def _format(msg: str, resource: Optional['Resource']) -> str:
    urn = _urn_of(resource)
    msg = scrub(_safe_str(msg))
    return f"{urn}: {msg}" if urn else msg


def _log(engine, severity, message, resource):
    engine.log(severity, scrub(_safe_str(message)), _urn_of(resource))
