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

from stratus import DependencyFailedError, Output, log
from stratus.runtime.rpc import redact_properties, resolve_properties

from ..helpers import MyResource


@pytest.mark.asyncio
async def test_only_secret_leaves_are_registered():
    inputs = {
        "environment": {
            "PASSWORD": Output.secret("s3cr3t-value"),
            "GITHUB_REF": "main",
            "REGION": Output.from_input("westeurope"),
        },
        "tags": ["plain", Output.secret(["hidden-tag"])],
        "name": "app",
    }

    resolved, secret_keys = await resolve_properties(inputs)

    assert resolved["environment"] == {"PASSWORD": "s3cr3t-value", "GITHUB_REF": "main", "REGION": "westeurope"}
    assert resolved["tags"] == ["plain", ["hidden-tag"]]
    assert secret_keys == {"environment", "tags"}
    assert redact_properties(resolved, secret_keys)["environment"] == log.REDACTED

    assert log.scrub("PASSWORD=s3cr3t-value GITHUB_REF=main") == "PASSWORD=[secret] GITHUB_REF=main"
    assert log.scrub("REGION=westeurope tags=plain,hidden-tag") == "REGION=westeurope tags=plain,[secret]"


@pytest.mark.asyncio
async def test_none_properties_are_dropped():
    resolved, secret_keys = await resolve_properties({"a": None, "b": Output.from_input(None), "c": 1})
    assert resolved == {"c": 1}
    assert secret_keys == set()


@pytest.mark.asyncio
async def test_dependency_failure_wins():
    a = MyResource("a")
    a._reject(DependencyFailedError("urn:a"))
    failing = Output.from_input(1).apply(lambda v: v / 0)

    with pytest.raises(DependencyFailedError) as ctx:
        await resolve_properties({"x": failing, "y": a.get_output("id")})
    assert ctx.value.origin == "urn:a"
