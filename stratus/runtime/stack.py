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
Support for running a program as a stack: declaring its resources, creating them, and resolving the
values it exports.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from inspect import isawaitable
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar, Union

from .. import log
from ..errors import RunError
from ..output import Output
from ..provider import ProviderContext, ProviderRegistry
from . import settings
from .graph import DependencyGraph
from .registry import ResourceRegistry
from .scheduler import RunReport, Scheduler

T = TypeVar("T")

Program = Callable[
    [ResourceRegistry],
    Union[None, Mapping[str, Any], Awaitable[Optional[Mapping[str, Any]]]],
]
"""
A program declares resources by registering them with the registry it is given, and returns the
values it exports, if any.
"""


class OutputValue:
    """
    The resolved value of a stack export.
    """

    value: Any
    secret: bool

    def __init__(self, value: Any, secret: bool = False) -> None:
        self.value = value
        self.secret = secret

    def __repr__(self) -> str:
        return log.REDACTED if self.secret else repr(self.value)

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, OutputValue)
            and self.value == other.value
            and self.secret == other.secret
        )


class UpResult:
    report: RunReport
    outputs: Dict[str, OutputValue]

    def __init__(self, report: RunReport, outputs: Dict[str, OutputValue]) -> None:
        self.report = report
        self.outputs = outputs

    def __repr__(self) -> str:
        return f"UpResult(outputs={self.outputs!r})"


class Stack:
    """
    A Stack runs one program against one target environment.

    :param program: The program declaring the stack's resources.
    :param providers: The providers that create those resources.
    :param context: The explicit context handed to every provider call.
    """

    def __init__(
        self,
        program: Program,
        providers: ProviderRegistry,
        context: ProviderContext,
        parallel: Optional[int] = None,
        create_timeout: Optional[str] = None,
    ) -> None:
        self.program = program
        self.providers = providers
        self.context = context
        self.parallel = parallel if parallel is not None else settings.get_parallel()
        self.create_timeout = (
            create_timeout if create_timeout is not None else settings.get_create_timeout()
        )

    async def _declare(self) -> Tuple[ResourceRegistry, Optional[Mapping[str, Any]]]:
        registry = ResourceRegistry(self.context.project, self.context.stack)
        exports = self.program(registry)
        if isawaitable(exports):
            exports = await exports
        return registry, exports

    async def preview(self) -> List[List[str]]:
        """
        Declares the program's resources without creating any of them, and returns their URNs grouped
        in the order they would be created. Resources within a group are independent.
        """
        registry, _ = await self._declare()
        graph = DependencyGraph.build(registry)
        return [[r.urn for r in layer] for layer in graph.topological_layers()]

    async def up(self) -> UpResult:
        """
        Declares and creates the program's resources and resolves its exports.

        :raises ConstructionError: The declared graph is invalid; nothing was created.
        :raises RunError: Some resource failed. The error carries the run's report.
        """
        registry, exports = await self._declare()
        scheduler = Scheduler(
            registry,
            self.providers,
            self.context,
            parallel=self.parallel,
            create_timeout=self.create_timeout,
        )
        report = await scheduler.run()
        log.info(report.summary())
        if report.failures:
            raise RunError("update failed:\n" + report.summary(), report)

        outputs: Dict[str, OutputValue] = {}
        for key, value in (exports or {}).items():
            try:
                data = await Output.from_input(value)._data
            except Exception as exn:
                raise RunError(f"export '{key}' failed: {exn}", report) from exn
            outputs[key] = OutputValue(data.value, data.secret)
        return UpResult(report, outputs)


def _set_default_executor(loop, parallelism: Optional[int]):
    """configure this event loop to respect the settings provided."""
    if parallelism is None:
        return
    parallelism = max(parallelism, 1)
    executor = ThreadPoolExecutor(max_workers=parallelism)
    loop.set_default_executor(executor)


def run(coro: Callable[[], Awaitable[T]], parallel: Optional[int] = None) -> T:
    """
    Runs the coroutine returned by `coro` on a fresh event loop whose thread pool respects `parallel`.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    _set_default_executor(loop, parallel)

    # Unobserved failed outputs are expected when part of the graph fails; asyncio would otherwise
    # log every one of them on exit.
    logging.getLogger("asyncio").setLevel(logging.CRITICAL)
    try:
        return loop.run_until_complete(coro())
    finally:
        loop.close()
        asyncio.set_event_loop(None)
