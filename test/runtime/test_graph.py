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

import pytest

from stratus import (
    ConstructionError,
    DependencyCycleError,
    Output,
    ResourceOptions,
    deferred_output,
)
from stratus.runtime.graph import DependencyGraph, dependencies_of
from stratus.runtime.registry import ResourceRegistry

from ..helpers import MyResource


@pytest.mark.asyncio
async def test_edges_from_outputs():
    registry = ResourceRegistry("p", "s")
    a = registry.register(MyResource("a"))
    b = registry.register(MyResource("b"))
    c = registry.register(
        MyResource(
            "c",
            {
                "x": a.get_output("x").apply(lambda v: v + 1),
                "nested": {"list": [Output.format("{0}", b.get_output("y"))]},
            },
        )
    )
    graph = DependencyGraph.build(registry)
    assert graph.dependencies(c) == {a, b}
    assert graph.dependencies(a) == set()
    assert graph.dependents(a) == {c}


@pytest.mark.asyncio
async def test_edges_from_references_and_depends_on():
    registry = ResourceRegistry("p", "s")
    a = registry.register(MyResource("a"))
    b = registry.register(MyResource("b", {"ref": a}))
    c = registry.register(MyResource("c", opts=ResourceOptions(depends_on=b)))
    assert dependencies_of(b) == {a}
    assert dependencies_of(c) == {b}
    graph = DependencyGraph.build(registry)
    assert graph.dependents(a) == {b, c}


@pytest.mark.asyncio
async def test_parent_is_not_a_dependency():
    registry = ResourceRegistry("p", "s")
    parent = registry.register(MyResource("parent"))
    child = registry.register(MyResource("child", opts=ResourceOptions(parent=parent)))
    assert dependencies_of(child) == set()


@pytest.mark.asyncio
async def test_cycle_through_depends_on():
    registry = ResourceRegistry("p", "s")
    first: list = []
    a = registry.register(MyResource("a", opts=ResourceOptions(depends_on=first)))
    b = registry.register(MyResource("b", {"x": a.get_output("x")}))
    first.append(b)

    with pytest.raises(DependencyCycleError) as ctx:
        DependencyGraph.build(registry)
    cycle = ctx.value.cycle
    assert cycle[0] == cycle[-1]
    assert set(cycle) == {a.urn, b.urn}


@pytest.mark.asyncio
async def test_cycle_through_deferred_output():
    registry = ResourceRegistry("p", "s")
    later, resolve_later = deferred_output()
    a = registry.register(MyResource("a", {"x": later}))
    b = registry.register(MyResource("b", {"x": a.get_output("x")}))
    c = registry.register(MyResource("c", {"x": b.get_output("x")}))
    resolve_later(c.get_output("x"))

    with pytest.raises(DependencyCycleError) as ctx:
        DependencyGraph.build(registry)
    assert set(ctx.value.cycle) == {a.urn, b.urn, c.urn}
    assert len(ctx.value.cycle) == 4


@pytest.mark.asyncio
async def test_self_dependency_is_a_cycle():
    registry = ResourceRegistry("p", "s")
    deps: list = []
    a = registry.register(MyResource("a", opts=ResourceOptions(depends_on=deps)))
    deps.append(a)
    with pytest.raises(DependencyCycleError) as ctx:
        DependencyGraph.build(registry)
    assert ctx.value.cycle == [a.urn, a.urn]


@pytest.mark.asyncio
async def test_unresolved_deferred_output():
    registry = ResourceRegistry("p", "s")
    later, _ = deferred_output()
    registry.register(MyResource("a", {"x": later}))
    with pytest.raises(ConstructionError):
        DependencyGraph.build(registry)


@pytest.mark.asyncio
async def test_unregistered_dependency():
    registry = ResourceRegistry("p", "s")
    ghost = MyResource("ghost")
    registry.register(MyResource("a", {"x": ghost.get_output("x")}))
    with pytest.raises(ConstructionError) as ctx:
        DependencyGraph.build(registry)
    assert "ghost" in str(ctx.value)


@pytest.mark.asyncio
async def test_depends_on_must_hold_resources():
    registry = ResourceRegistry("p", "s")
    registry.register(MyResource("a", opts=ResourceOptions(depends_on=["b"])))  # type: ignore
    with pytest.raises(ConstructionError):
        DependencyGraph.build(registry)


@pytest.mark.asyncio
async def test_topological_layers():
    registry = ResourceRegistry("p", "s")
    rg = registry.register(MyResource("rg"))
    sa = registry.register(MyResource("sa", {"rg": rg.get_output("name")}))
    pw = registry.register(MyResource("pw"))
    server = registry.register(
        MyResource("server", {"rg": rg.get_output("name"), "pw": pw.get_output("result")})
    )
    db = registry.register(MyResource("db", {"server": server.get_output("name")}))

    layers = DependencyGraph.build(registry).topological_layers()
    assert layers == [[rg, pw], [sa, server], [db]]


@pytest.mark.asyncio
async def test_add_late_node():
    registry = ResourceRegistry("p", "s")
    a = registry.register(MyResource("a"))
    graph = DependencyGraph.build(registry)
    b = registry.register(MyResource("b", {"x": a.get_output("x")}))
    assert b not in graph
    graph.add(b, registry)
    assert graph.dependencies(b) == {a}
    assert len(graph) == 2
