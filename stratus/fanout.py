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
Dynamic fan-out: one child resource per element of a collection that is only known once an upstream
resource has been created.
"""
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .errors import ConstructionError
from .output import Input, Output
from .resource import ComponentResource, Resource, ResourceOptions
from .runtime.registry import ResourceRegistry

Factory = Callable[[str, ResourceOptions], Resource]
"""
A fan-out factory builds the child resource for one element. It must pass the options it is given
(which parent the child to the fan-out) through to the child.
"""


def split_keys(source: Any, delimiter: str = ",") -> List[str]:
    """
    Splits `source` into fan-out keys: elements are stripped, empty elements are dropped and duplicates
    are removed keeping the first occurrence. `source` is a delimited string or a sequence of strings.
    """
    if source is None:
        return []
    if isinstance(source, str):
        elements: Sequence[Any] = source.split(delimiter)
    elif isinstance(source, (list, tuple)):
        elements = source
    else:
        raise TypeError(f"cannot fan out over {type(source).__name__}")

    keys: List[str] = []
    for element in elements:
        key = str(element).strip()
        if key and key not in keys:
            keys.append(key)
    return keys


class FanOut(ComponentResource):
    """
    FanOut creates one child per key of `source` once `source` resolves. The children are parented to
    the fan-out, so each child's URN is keyed by its element, and they have no edges between them.
    The fan-out finishes once all its children have; if any child fails, the fan-out is skipped.

    :param str name: The name of the fan-out.
    :param Input source: A delimited string, or a sequence of strings.
    :param Factory factory: Builds the child for a key.
    :param str delimiter: The separator used when `source` is a string.
    """

    def __init__(
        self,
        name: str,
        source: Input[Union[str, Sequence[str]]],
        factory: Factory,
        delimiter: str = ",",
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        if not callable(factory):
            raise TypeError("Expected factory to be callable")
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        super().__init__("stratus:index:FanOut", name, {"source": source}, opts)
        self._factory = factory
        self._delimiter = delimiter

    @property
    def keys(self) -> Output[List[str]]:
        """The deduplicated keys the children were created for, in order."""
        return self.get_output("keys")

    @property
    def children(self) -> Output[List[Resource]]:
        """The created children, in key order."""
        return self.get_output("children")

    async def expand(self, registry: ResourceRegistry, inputs: Dict[str, Any]) -> Dict[str, Any]:
        keys = split_keys(inputs.get("source"), self._delimiter)
        created: List[Resource] = []
        for key in keys:
            child = self._factory(key, ResourceOptions(parent=self))
            if not isinstance(child, Resource):
                raise TypeError(f"fan-out factory returned {type(child).__name__} for '{key}'")
            if child.parent is not self:
                raise ConstructionError(
                    f"fan-out factory must parent the child for '{key}' to the fan-out '{self.resource_name}'"
                )
            registry.register(child)
            created.append(child)
        return {"keys": keys, "children": created}
