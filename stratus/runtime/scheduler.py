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
The scheduler creates the resources of a registry in dependency order. Every resource runs as its own
asyncio task that waits for its dependencies, resolves its inputs, and then calls its provider.
Independent branches of the graph proceed concurrently; a failure skips everything downstream of it
and nothing else.
"""
import asyncio
import contextlib
import functools
import traceback
from inspect import iscoroutinefunction
from typing import Any, Dict, List, NamedTuple, Optional, Set

from .. import log
from ..errors import (
    CommandError,
    ConstructionError,
    DependencyCycleError,
    DependencyFailedError,
    ProviderError,
    ResourceTimeoutError,
)
from ..provider import CreateArgs, CreateResult, ProviderContext, ProviderRegistry
from ..resource import ComponentResource, Resource, ResourceState, parse_duration
from .graph import DependencyGraph, dependencies_of
from .registry import ResourceRegistry
from .rpc import redact_properties, resolve_properties
from .task_manager import TaskManager

STALL_CHECK_INTERVAL = 0.05
"""
Seconds between checks for resources that wait on each other through Outputs returned from `apply`.
"""


class Failure(NamedTuple):
    urn: str
    error: BaseException


class RunReport:
    """
    RunReport is the outcome of a provisioning run: the final state of every resource, the failures
    that caused the run to fail (first failure first), and the resources that were skipped because of them.
    """

    states: Dict[str, ResourceState]
    failures: List[Failure]
    skipped: Dict[str, str]
    """
    Maps the URN of each skipped resource to the URN of the failed resource that caused the skip.
    """

    def __init__(self) -> None:
        self.states = {}
        self.failures = []
        self.skipped = {}

    @property
    def succeeded(self) -> List[str]:
        return [urn for urn, state in self.states.items() if state is ResourceState.CREATED]

    @property
    def ok(self) -> bool:
        return not self.failures and not self.skipped

    def state_of(self, urn: str) -> ResourceState:
        return self.states[urn]

    def summary(self) -> str:
        lines = [
            f"{len(self.succeeded)} created, {len(self.failures)} failed, {len(self.skipped)} skipped"
        ]
        for failure in self.failures:
            message = str(failure.error)
            if not isinstance(failure.error, ProviderError):
                message = f"{failure.urn}: {message}"
            lines.append(f"  failed: {log.scrub(message)}")
        for urn, origin in self.skipped.items():
            lines.append(f"  skipped: {urn} (because {origin} failed)")
        return "\n".join(lines)


class Scheduler:
    """
    Scheduler runs one provisioning pass over a registry.

    :param registry: The declared resources. Resources registered while the run is in progress are
           scheduled as well.
    :param providers: The providers, looked up by the package of each resource's type.
    :param context: The explicit context handed to every provider call.
    :param parallel: The maximum number of concurrent provider calls, unbounded if None.
    :param create_timeout: The creation timeout of resources without a custom one, e.g. "10m".
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        providers: ProviderRegistry,
        context: ProviderContext,
        parallel: Optional[int] = None,
        create_timeout: Optional[str] = None,
    ) -> None:
        if parallel is not None and parallel < 1:
            raise ValueError("parallel must be at least 1")
        self._registry = registry
        self._providers = providers
        self._context = context
        self._parallel = parallel
        self._default_timeout = parse_duration(create_timeout) if create_timeout else None
        self._tasks = TaskManager()
        self._graph: Optional[DependencyGraph] = None
        self._done: Dict[Resource, asyncio.Event] = {}
        self._node_tasks: Dict[Resource, "asyncio.Future[None]"] = {}
        self._resolving: Set[Resource] = set()
        self._report = RunReport()
        self._semaphore: Optional[asyncio.Semaphore] = None

    @property
    def graph(self) -> Optional[DependencyGraph]:
        return self._graph

    async def run(self) -> RunReport:
        """
        Creates every resource of the registry and returns the report. Construction errors (cycles,
        references to unregistered resources) are raised before any provider is called; provider
        failures are recorded in the report.
        """
        self._graph = DependencyGraph.build(self._registry)
        if self._parallel is not None:
            self._semaphore = asyncio.Semaphore(self._parallel)

        log.debug(f"running {len(self._graph)} resources with parallel={self._parallel}")
        self._registry.set_listener(self._on_register)
        try:
            nodes = self._graph.nodes()
            for r in nodes:
                self._prepare(r)
            for r in nodes:
                self._start(r)
            watchdog = asyncio.ensure_future(self._watch_for_stalls())
            try:
                await self._tasks.wait_all()
            finally:
                watchdog.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await watchdog
        finally:
            self._registry.set_listener(None)
        return self._report

    def _prepare(self, r: Resource) -> None:
        self._done[r] = asyncio.Event()
        self._report.states[r.urn] = ResourceState.PENDING

    def _on_register(self, r: Resource) -> None:
        assert self._graph is not None
        self._graph.add(r, self._registry)
        self._prepare(r)
        self._start(r)

    def _start(self, r: Resource) -> None:
        self._node_tasks[r] = self._tasks.create_task(self._run_node(r), r.urn)

    async def _run_node(self, r: Resource) -> None:
        try:
            await self._create_node(r)
        except asyncio.CancelledError:
            # Cancelled after being failed by the stall check.
            if not self._report.states[r.urn].finished:
                raise
        except Exception as exn:  # pylint: disable=broad-except
            if self._report.states[r.urn].finished:
                raise
            log.debug(traceback.format_exc(), r)
            self._fail(r, exn)
        finally:
            if not self._report.states[r.urn].finished:
                self._fail(r, RuntimeError(f"{r.urn} finished without an outcome"))
            self._done[r].set()

    async def _create_node(self, r: Resource) -> None:
        assert self._graph is not None
        deps = self._graph.dependencies(r)
        await asyncio.gather(*[self._done[d].wait() for d in deps])

        for dep in self._graph._sorted(deps):
            if self._report.states[dep.urn] is not ResourceState.CREATED:
                self._skip(r, self._origin_of(dep))
                return

        self._resolving.add(r)
        try:
            inputs, secret_keys = await resolve_properties(r.props)
        except DependencyFailedError as exn:
            self._skip(r, exn.origin, exn)
            return
        finally:
            self._resolving.discard(r)

        self._report.states[r.urn] = ResourceState.CREATING
        log.debug(f"creating with inputs {redact_properties(inputs, secret_keys)}", r)

        if isinstance(r, ComponentResource):
            await self._expand(r, inputs)
            return

        result = await self._create(r, inputs)
        outs: Dict[str, Any] = {**inputs, **result.outs, "id": result.id}
        declared: Set[str] = set(result.secret_outputs) | set(r.opts.additional_secret_outputs or [])
        secrets = declared | (secret_keys & set(outs))
        # An echoed secret input had only its secret leaves registered when it was resolved.
        echoed = {k for k in secret_keys & set(outs) if outs[k] == inputs.get(k)}
        for name in declared | (secrets - echoed):
            for s in _secret_strings(outs.get(name)):
                log.register_secret(s)

        self._report.states[r.urn] = ResourceState.CREATED
        r._resolve(outs, secrets)
        log.info("created", r)

    async def _expand(self, r: ComponentResource, inputs: Dict[str, Any]) -> None:
        outs = await r.expand(self._registry, inputs)
        children = [c for c in r.child_resources() if c in self._done]
        await asyncio.gather(*[self._done[c].wait() for c in children])
        for child in sorted(children, key=lambda c: c.urn):
            if self._report.states[child.urn] is not ResourceState.CREATED:
                self._skip(r, self._origin_of(child))
                return
        self._report.states[r.urn] = ResourceState.CREATED
        r._resolve(outs or {})
        log.info(f"created with {len(children)} children", r)

    async def _create(self, r: Resource, inputs: Dict[str, Any]) -> CreateResult:
        provider = self._providers.get(r.package, r.opts.version)
        args = CreateArgs(r.type_, r.resource_name, r.urn, inputs)

        timeout = self._default_timeout
        if r.opts.custom_timeouts is not None and r.opts.custom_timeouts.create is not None:
            timeout = r.opts.custom_timeouts.create_seconds()

        if self._semaphore is not None:
            async with self._semaphore:
                result = await self._call_provider(r, provider.create, args, timeout)
        else:
            result = await self._call_provider(r, provider.create, args, timeout)

        if not isinstance(result, CreateResult):
            raise ProviderError(
                r.urn, f"provider returned {type(result).__name__}, expected CreateResult"
            )
        return result

    async def _call_provider(self, r: Resource, create, args: CreateArgs, timeout: Optional[float]) -> Any:
        if iscoroutinefunction(create):
            call = asyncio.ensure_future(create(self._context, args))
        else:
            loop = asyncio.get_running_loop()
            call = loop.run_in_executor(None, functools.partial(create, self._context, args))

        try:
            if timeout is None:
                return await call
            # A call that times out is abandoned, not cancelled.
            return await asyncio.wait_for(asyncio.shield(call), timeout)
        except asyncio.TimeoutError as exn:
            raise ResourceTimeoutError(r.urn, timeout or 0) from exn
        except (ProviderError, CommandError):
            raise
        except Exception as exn:
            raise ProviderError(r.urn, f"{type(exn).__name__}: {exn}") from exn

    async def _watch_for_stalls(self) -> None:
        while True:
            await asyncio.sleep(STALL_CHECK_INTERVAL)
            self._break_stalled_cycle()

    def _break_stalled_cycle(self) -> None:
        """
        The static graph cannot see an Output that an `apply` returns, so a `depends_on` pointing back
        at a resource that reaches its dependent that way leaves both waiting forever. Such a wait-for
        cycle is found here, and the resources in it that are waiting for their inputs are failed with
        a DependencyCycleError, which skips the rest of the cycle.
        """
        assert self._graph is not None
        unfinished = {r for r in self._done if not self._report.states[r.urn].finished}
        waits: Dict[Resource, Set[Resource]] = {}
        for r in unfinished:
            if r in self._resolving:
                # Recomputed because an apply records the Output it returned as a late source.
                try:
                    deps = dependencies_of(r)
                except ConstructionError:
                    deps = self._graph.dependencies(r)
            elif self._report.states[r.urn] is ResourceState.CREATING and isinstance(r, ComponentResource):
                deps = set(r.child_resources())
            else:
                deps = self._graph.dependencies(r)
            waits[r] = {d for d in deps if d in unfinished}

        cycle = self._graph.find_cycle(waits)
        if cycle is None:
            return
        error = DependencyCycleError([c.urn for c in cycle])
        for r in cycle[:-1]:
            if r in self._resolving and not self._report.states[r.urn].finished:
                self._fail(r, error)
                self._node_tasks[r].cancel()

    def _origin_of(self, dep: Resource) -> str:
        return self._report.skipped.get(dep.urn, dep.urn)

    def _fail(self, r: Resource, exn: BaseException) -> None:
        self._report.states[r.urn] = ResourceState.FAILED
        self._report.failures.append(Failure(r.urn, exn))
        log.error(f"creation failed: {exn}", r)
        r._reject(DependencyFailedError(r.urn, exn))

    def _skip(self, r: Resource, origin: str, cause: Optional[BaseException] = None) -> None:
        self._report.states[r.urn] = ResourceState.SKIPPED
        self._report.skipped[r.urn] = origin
        log.info(f"skipped because {origin} failed", r)
        r._reject(DependencyFailedError(origin, cause))


def _secret_strings(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, dict):
        return [s for v in value.values() for s in _secret_strings(v)]
    if isinstance(value, (list, tuple)):
        return [s for v in value for s in _secret_strings(v)]
    return []
