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

import functools
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from stratus import CustomResource, log
from stratus.runtime import config, settings
from stratus.runtime.mocks import Mocks, MockResourceArgs
from stratus.runtime.stack import run


def supress_unobserved_task_logging():
    """Suppresses logs about faulted unobserved tasks. This is similar to
    what `todo_infra` does when it runs a stack: when part of a graph fails,
    the outputs of everything downstream fail too and are often never awaited.

    This scope of this setting necessarily bleeds beyond this test; it
    has to do so because the undesired logs appear after the entire
    `pytest` program terminates, not after a particular module
    terminates.

    """
    logging.getLogger("asyncio").setLevel(logging.CRITICAL)


# If calling code imports this module to use `raises`, it probably needs this.
supress_unobserved_task_logging()


def reset_runtime(project: str = "project", stack: str = "stack") -> None:
    """Puts the ambient runtime state back to its defaults."""
    settings.configure(settings.Settings(project, stack))
    config.set_all_config({}, [])
    log.clear_secrets()


def stratus_test(coro):
    """Runs an async test method on a fresh event loop with a fresh runtime."""

    @functools.wraps(coro)
    def wrapper(*args, **kwargs):
        reset_runtime()
        run(lambda: coro(*args, **kwargs))

    return wrapper


def raises(exception_type):
    """Decorates a test by wrapping its body in `pytest.raises`."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            with pytest.raises(exception_type):
                return fn(*args, **kwargs)

        return wrapper

    return decorator


class MyResource(CustomResource):
    def __init__(self, name: str, props: Optional[Dict[str, Any]] = None, opts=None):
        super().__init__("test:index:MyResource", name, props, opts)


class RecordingEngine:
    """A log sink that keeps every message."""

    def __init__(self):
        self.messages: List[Tuple[str, str, str]] = []

    def log(self, severity: str, message: str, urn: str) -> None:
        self.messages.append((severity, message, urn))

    def text(self) -> str:
        return "\n".join(m for _, m, _ in self.messages)


class TableMocks(Mocks):
    """
    Mocks whose outputs are looked up by resource name. A callable entry is called with the args; an
    exception instance entry is raised.
    """

    def __init__(self, table: Optional[Dict[str, Any]] = None):
        self.table = table or {}

    def new_resource(self, args: MockResourceArgs):
        entry = self.table.get(args.name, {})
        if isinstance(entry, BaseException):
            raise entry
        if callable(entry):
            entry = entry(args)
        return f"{args.name}_id", dict(entry)
