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

from stratus import ConstructionError, Output, ResourceOptions, RunError
from stratus.provider import ProviderContext
from stratus.runtime import settings
from stratus.runtime.mocks import mock_providers
from stratus.runtime.stack import OutputValue, Stack, run

from ..helpers import MyResource, TableMocks, stratus_test


CONTEXT = ProviderContext("project", "stack")


def program(registry):
    a = registry.register(MyResource("a"))
    b = registry.register(MyResource("b", {"x": a.get_output("id")}))
    registry.register(MyResource("c"))
    return {
        "b": b.get_output("id"),
        "token": Output.secret("t0ken"),
        "literal": 42,
    }


@pytest.mark.asyncio
async def test_up_resolves_exports():
    providers, _ = mock_providers(TableMocks(), ["test"])
    result = await Stack(program, providers, CONTEXT).up()

    assert result.report.ok
    assert result.outputs == {
        "b": OutputValue("b_id"),
        "token": OutputValue("t0ken", secret=True),
        "literal": OutputValue(42),
    }
    assert repr(result.outputs["token"]) == "[secret]"


@pytest.mark.asyncio
async def test_async_program():
    async def async_program(registry):
        registry.register(MyResource("a"))
        return None

    providers, _ = mock_providers(TableMocks(), ["test"])
    result = await Stack(async_program, providers, CONTEXT).up()
    assert result.outputs == {}
    assert len(result.report.succeeded) == 1


@pytest.mark.asyncio
async def test_up_raises_run_error_with_report():
    providers, _ = mock_providers(TableMocks({"a": RuntimeError("denied")}), ["test"])
    with pytest.raises(RunError) as ctx:
        await Stack(program, providers, CONTEXT).up()

    report = ctx.value.report
    assert report is not None
    assert str(ctx.value).startswith("update failed:\n1 created, 1 failed, 1 skipped")
    assert report.succeeded == ["urn:stratus:stack::project::test:index:MyResource::c"]


@pytest.mark.asyncio
async def test_construction_error_before_any_call():
    def cyclic(registry):
        deps: list = []
        a = registry.register(MyResource("a", opts=ResourceOptions(depends_on=deps)))
        b = registry.register(MyResource("b", {"x": a.get_output("id")}))
        deps.append(b)

    providers, by_package = mock_providers(TableMocks(), ["test"])
    with pytest.raises(ConstructionError):
        await Stack(cyclic, providers, CONTEXT).up()
    assert by_package["test"].calls == []


@pytest.mark.asyncio
async def test_preview_creates_nothing():
    providers, by_package = mock_providers(TableMocks(), ["test"])
    layers = await Stack(program, providers, CONTEXT).preview()

    prefix = "urn:stratus:stack::project::test:index:MyResource::"
    assert layers == [[prefix + "a", prefix + "c"], [prefix + "b"]]
    assert by_package["test"].calls == []


def test_stack_defaults_come_from_settings():
    settings.configure(settings.Settings("project", "stack", parallel=3, create_timeout="5m"))
    providers, _ = mock_providers(TableMocks(), ["test"])
    stack = Stack(program, providers, CONTEXT)
    assert stack.parallel == 3
    assert stack.create_timeout == "5m"


def test_run_on_fresh_loop():
    async def answer():
        return 42

    assert run(answer, parallel=2) == 42


@stratus_test
async def test_up_through_run_helper():
    providers, _ = mock_providers(TableMocks(), ["test"])
    result = await Stack(program, providers, CONTEXT).up()
    assert result.outputs["literal"].value == 42
