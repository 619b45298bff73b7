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
Runtime settings and configuration.
"""
from __future__ import annotations

from typing import Any, Optional

# excessive_debug_output enables, well, pretty excessive debug output pertaining to resources and properties.
excessive_debug_output = False


class Settings:
    """
    A bag of properties for configuring the stratus runtime.
    """

    def __init__(
        self,
        project: Optional[str],
        stack: Optional[str],
        parallel: Optional[int] = None,
        dry_run: Optional[bool] = None,
        engine: Optional[Any] = None,
        debug: Optional[bool] = None,
        create_timeout: Optional[str] = None,
    ):
        """
        :param project: The project name, used in URNs and as the default config namespace.
        :param stack: The stack (target environment) name.
        :param parallel: Maximum number of concurrent provider operations, unbounded if None.
        :param dry_run: True when previewing the graph without creating anything.
        :param engine: An optional log sink with a `log(severity, message, urn)` method.
        :param debug: Whether debug messages are written to stderr when no engine is attached.
        :param create_timeout: Default creation timeout for resources without custom timeouts, e.g. "10m".
        """
        self.project = project
        self.stack = stack
        self.parallel = parallel
        self.dry_run = dry_run
        self.engine = engine
        self.debug = debug
        self.create_timeout = create_timeout

    def __repr__(self):
        return f"<class Settings[project={self.project!r} stack={self.stack!r} parallel={self.parallel!r}>"


# default to "empty" settings.
SETTINGS = Settings(project="project", stack="stack")


def configure(settings: Settings):
    """
    Configure sets the current ambient settings bag to the one given.
    """
    if not settings or not isinstance(settings, Settings):
        raise TypeError("Settings is expected to be non-None and of type Settings")
    for key, value in settings.__dict__.items():
        setattr(SETTINGS, key, value)


def is_dry_run() -> bool:
    """
    Returns whether or not we are currently doing a preview.
    """
    return bool(SETTINGS.dry_run)


def is_debug_enabled() -> bool:
    return bool(SETTINGS.debug) or excessive_debug_output


def get_project() -> str:
    """
    Returns the current project name.
    """
    return SETTINGS.project


def get_stack() -> str:
    """
    Returns the current stack name.
    """
    return SETTINGS.stack


def get_parallel() -> Optional[int]:
    return SETTINGS.parallel


def get_create_timeout() -> Optional[str]:
    return SETTINGS.create_timeout


def get_engine() -> Optional[Any]:
    return SETTINGS.engine
