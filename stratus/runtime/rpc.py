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
Support for resolving a resource's declared inputs into the plain values handed to its provider.
"""
import asyncio
from inspect import isawaitable
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from .. import log
from ..asset import Archive, Asset
from ..errors import DependencyFailedError
from ..output import Inputs, Output
from ..resource import Resource


async def resolve_property(value: Any, secrets: Optional[Set[str]] = None) -> Tuple[Any, bool]:
    """
    Resolves an arbitrary Input into a plain value, returning it together with whether any part of it
    was secret. Outputs and awaitables are awaited, lists, tuples and dicts are resolved deeply, and
    resources are replaced by their URNs. Assets and archives are passed through.

    If `secrets` is given, the strings inside every secret Output are added to it. Plain values that
    merely sit next to a secret are not.
    """
    if isinstance(value, Output):
        # Outputs are shared between consumers; a cancelled consumer leaves them running.
        data = await asyncio.shield(value._data)
        inner, inner_secret = await resolve_property(data.value, secrets)
        if data.secret and secrets is not None:
            secrets.update(_strings_of(inner))
        return inner, data.secret or inner_secret

    if isinstance(value, Resource):
        return value.urn, False

    if isinstance(value, (Asset, Archive)):
        return value, False

    if isinstance(value, dict):
        keys = list(value.keys())
        results = await asyncio.gather(
            *[resolve_property(k, secrets) for k in keys],
            *[resolve_property(value[k], secrets) for k in keys],
        )
        resolved_keys, resolved_values = results[: len(keys)], results[len(keys):]
        secret = any(s for _, s in results)
        return {k: v for (k, _), (v, _) in zip(resolved_keys, resolved_values)}, secret

    if isinstance(value, (list, tuple)):
        items = await asyncio.gather(*[resolve_property(v, secrets) for v in value])
        resolved = [v for v, _ in items]
        return (tuple(resolved) if isinstance(value, tuple) else resolved), any(s for _, s in items)

    if isawaitable(value):
        return await resolve_property(await value, secrets)

    return value, False


async def resolve_properties(inputs: Inputs) -> Tuple[Dict[str, Any], Set[str]]:
    """
    Resolves every input property of a resource. Returns the plain property bag and the names of the
    properties whose values were secret. The strings held by secret Outputs are registered with the log
    scrubber; plain strings in the same property are not.

    If an input failed because a resource it was derived from failed, the DependencyFailedError is
    raised in preference to any other failure, since the consumer must then be skipped rather than
    failed.
    """
    keys = list(inputs.keys())
    secrets: Set[str] = set()
    results = await asyncio.gather(
        *[resolve_property(inputs[k], secrets) for k in keys], return_exceptions=True
    )

    failures = [r for r in results if isinstance(r, BaseException)]
    for failure in failures:
        if isinstance(failure, DependencyFailedError):
            raise failure
    if failures:
        raise failures[0]

    resolved: Dict[str, Any] = {}
    secret_keys: Set[str] = set()
    for k, (v, secret) in zip(keys, results):  # type: ignore
        # We treat properties that resolve to None as if they don't exist.
        if v is None:
            continue
        resolved[k] = v
        if secret:
            secret_keys.add(k)
    for s in secrets:
        log.register_secret(s)
    return resolved, secret_keys


def _strings_of(value: Any) -> Iterable[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for v in value.values():
            yield from _strings_of(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            yield from _strings_of(v)


def redact_properties(props: Dict[str, Any], secret_keys: Iterable[str]) -> Dict[str, Any]:
    """
    Returns a copy of `props` fit for diagnostics, with every secret property replaced by a marker.
    """
    secrets = set(secret_keys)
    return {k: (log.REDACTED if k in secrets else v) for k, v in props.items()}
