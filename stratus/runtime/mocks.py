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
Mocks for testing.
"""
import asyncio
import itertools
from abc import ABC, abstractmethod
from inspect import isawaitable
from typing import Dict, Iterable, List, Optional, Tuple

from ..provider import CreateArgs, CreateResult, Provider, ProviderContext, ProviderRegistry


class MockResourceArgs:
    """
    MockResourceArgs is used to construct a newResource Mock
    """

    typ: str
    name: str
    urn: str
    inputs: dict

    def __init__(self, typ: str, name: str, urn: str, inputs: dict) -> None:
        """
        :param str typ: The token that indicates which resource type is being constructed. This token is of the form "package:module:type".
        :param str name: The logical name of the resource instance.
        :param str urn: The URN of the resource instance.
        :param dict inputs: The resolved inputs for the resource.
        """
        self.typ = typ
        self.name = name
        self.urn = urn
        self.inputs = inputs


class Mocks(ABC):
    """
    Mocks is an abstract class that allows subclasses to replace the operations normally implemented by cloud
    providers with their own implementations. This can be used during testing to ensure that resource
    constructors return predictable values.
    """

    @abstractmethod
    def new_resource(self, args: MockResourceArgs) -> Tuple[Optional[str], dict]:
        """
        new_resource mocks resource construction calls. This function should return the physical identifier and the output properties
        for the resource being constructed. It may be a coroutine function, and it may raise to simulate a failed creation.

        :param MockResourceArgs args.
        """
        return "", {}


class MockCall:
    """One recorded creation call."""

    urn: str
    typ: str
    inputs: dict
    started: int
    finished: Optional[int]

    def __init__(self, urn: str, typ: str, inputs: dict, started: int) -> None:
        self.urn = urn
        self.typ = typ
        self.inputs = inputs
        self.started = started
        self.finished = None

    def __repr__(self) -> str:
        return f"MockCall({self.urn!r}, started={self.started}, finished={self.finished})"


class MockProvider(Provider):
    """
    MockProvider adapts Mocks to the Provider interface and records the order in which creation calls
    start and finish. Sequence numbers come from a counter shared by every MockProvider built from the
    same `clock`, so calls can be ordered across packages.
    """

    calls: List[MockCall]

    def __init__(
        self,
        package: str,
        mocks: Mocks,
        version: Optional[str] = None,
        clock: Optional[Iterable[int]] = None,
    ) -> None:
        super().__init__(package, version)
        self.mocks = mocks
        self.calls = []
        self._clock = iter(clock) if clock is not None else itertools.count()

    async def create(self, ctx: ProviderContext, args: CreateArgs) -> CreateResult:
        call = MockCall(args.urn, args.type, args.inputs, next(self._clock))
        self.calls.append(call)

        # Give every other ready task a chance to start before this one finishes.
        await asyncio.sleep(0)
        try:
            result = self.mocks.new_resource(MockResourceArgs(args.type, args.name, args.urn, args.inputs))
            if isawaitable(result):
                result = await result
        finally:
            call.finished = next(self._clock)

        id_, outs = result
        return CreateResult(id_ or f"{args.name}_id", outs)

    def call_for(self, urn: str) -> MockCall:
        for call in self.calls:
            if call.urn == urn:
                return call
        raise KeyError(urn)


def mock_providers(mocks: Mocks, packages: Iterable[str]) -> Tuple[ProviderRegistry, Dict[str, MockProvider]]:
    """
    Builds a ProviderRegistry that serves every package in `packages` with a MockProvider sharing one clock.
    """
    clock = itertools.count()
    providers = {pkg: MockProvider(pkg, mocks, clock=clock) for pkg in packages}
    return ProviderRegistry(providers.values()), providers


def all_calls(providers: Dict[str, MockProvider]) -> List[MockCall]:
    """Returns the calls of every provider ordered by the time they started."""
    calls: List[MockCall] = [c for p in providers.values() for c in p.calls]
    return sorted(calls, key=lambda c: c.started)
