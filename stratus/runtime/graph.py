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
The dependency graph of a provisioning run. Edges are inferred statically from the Outputs and
resources a resource's inputs reference, plus its explicit `depends_on` option, so the whole graph
is known (and checked for cycles) before any provider is called.
"""
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Set

from ..errors import ConstructionError, DependencyCycleError
from ..output import Output
from ..resource import Resource

if TYPE_CHECKING:
    from .registry import ResourceRegistry


def dependencies_of(resource: Resource) -> Set[Resource]:
    """
    Returns the resources `resource` directly depends on: every resource an Output in its input
    properties was derived from, every resource its inputs reference directly, and its `depends_on`
    option. The parent is not a dependency.

    An Output returned from inside an `apply` is not known until the apply runs, so the resources it
    came from are missing here. A `depends_on` that closes a cycle through such an Output cannot be
    rejected up front; the scheduler detects the resulting stall and fails the run with a
    DependencyCycleError instead.

    :raises ConstructionError: An input is a deferred Output that was never given its value.
    """
    deps: Set[Resource] = set()
    _collect(resource.props, deps, resource)
    for dep in resource.opts._depends_on_list():
        if not isinstance(dep, Resource):
            raise ConstructionError(
                f"'depends_on' of resource '{resource.resource_name}' must contain only resources, not {type(dep).__name__}"
            )
        deps.add(dep)
    return deps


def _collect(value: Any, deps: Set[Resource], owner: Resource) -> None:
    if isinstance(value, Output):
        for o in value._walk():
            if o._deferred:
                raise ConstructionError(
                    f"an input of resource '{owner.resource_name}' is a deferred output that was never resolved"
                )
            deps |= o._direct_resources
    elif isinstance(value, Resource):
        deps.add(value)
    elif isinstance(value, dict):
        for k, v in value.items():
            _collect(k, deps, owner)
            _collect(v, deps, owner)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for v in value:
            _collect(v, deps, owner)


class DependencyGraph:
    """
    DependencyGraph maps each registered resource to the resources it depends on.
    """

    _deps: Dict[Resource, Set[Resource]]
    _dependents: Dict[Resource, Set[Resource]]
    _order: Dict[Resource, int]

    def __init__(self) -> None:
        self._deps = {}
        self._dependents = {}
        self._order = {}

    @staticmethod
    def build(registry: "ResourceRegistry") -> "DependencyGraph":
        """
        Builds the graph of every resource registered so far.

        :raises ConstructionError: A resource depends on a resource that was never registered.
        :raises DependencyCycleError: The dependencies form a cycle.
        """
        graph = DependencyGraph()
        for resource in registry.resources():
            graph._insert(resource, registry)
        graph._check_acyclic()
        return graph

    def add(self, resource: Resource, registry: "ResourceRegistry") -> None:
        """
        Adds a resource registered after the graph was built, such as a fan-out child.
        """
        if resource in self._deps:
            return
        self._insert(resource, registry)
        self._check_acyclic()

    def _insert(self, resource: Resource, registry: "ResourceRegistry") -> None:
        deps = dependencies_of(resource)
        for dep in deps:
            if dep not in registry:
                raise ConstructionError(
                    f"resource {resource.urn} depends on resource '{dep.resource_name}' of type '{dep.type_}' "
                    "which was never registered"
                )
        self._order[resource] = len(self._order)
        self._deps[resource] = deps
        self._dependents.setdefault(resource, set())
        for dep in deps:
            self._dependents.setdefault(dep, set()).add(resource)

    def _sorted(self, resources: Iterable[Resource]) -> List[Resource]:
        return sorted(resources, key=lambda r: self._order.get(r, len(self._order)))

    def _check_acyclic(self) -> None:
        cycle = self.find_cycle(self._deps)
        if cycle is not None:
            raise DependencyCycleError([c.urn for c in cycle])

    def find_cycle(self, waits: Mapping[Resource, Iterable[Resource]]) -> Optional[List[Resource]]:
        """
        Returns a cycle of the wait-for relation `waits` as a path whose first and last elements are
        the same resource, or None. Resources are visited in registration order, so the result is
        deterministic.
        """
        white, grey, black = 0, 1, 2
        colour: Dict[Resource, int] = {r: white for r in waits}
        path: List[Resource] = []

        def visit(r: Resource) -> Optional[List[Resource]]:
            colour[r] = grey
            path.append(r)
            for dep in self._sorted(waits.get(r, ())):
                if colour.get(dep, black) == grey:
                    return path[path.index(dep):] + [dep]
                if colour.get(dep, black) == white:
                    found = visit(dep)
                    if found is not None:
                        return found
            path.pop()
            colour[r] = black
            return None

        for r in self._sorted(waits):
            if colour[r] == white:
                found = visit(r)
                if found is not None:
                    return found
        return None

    def dependencies(self, resource: Resource) -> Set[Resource]:
        """The direct dependencies of `resource`."""
        return set(self._deps.get(resource, ()))

    def dependents(self, resource: Resource) -> Set[Resource]:
        """Every resource that transitively depends on `resource`."""
        result: Set[Resource] = set()
        pending = list(self._dependents.get(resource, ()))
        while pending:
            r = pending.pop()
            if r in result:
                continue
            result.add(r)
            pending.extend(self._dependents.get(r, ()))
        return result

    def topological_layers(self) -> List[List[Resource]]:
        """
        Groups the resources into layers such that every resource's dependencies are in earlier layers.
        Resources within a layer are independent of each other and are listed in registration order.
        """
        remaining = dict(self._deps)
        placed: Set[Resource] = set()
        layers: List[List[Resource]] = []
        while remaining:
            layer = self._sorted(r for r, deps in remaining.items() if deps <= placed)
            if not layer:
                # Unreachable once the graph has been checked for cycles.
                raise DependencyCycleError([r.urn for r in self._sorted(remaining)])
            layers.append(layer)
            placed.update(layer)
            for r in layer:
                del remaining[r]
        return layers

    def nodes(self) -> List[Resource]:
        return self._sorted(self._deps)

    def __contains__(self, item: object) -> bool:
        return item in self._deps

    def __len__(self) -> int:
        return len(self._deps)
