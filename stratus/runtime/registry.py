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
The resource registry holds the resources a program declares. Resources are registered explicitly;
nothing is registered merely by constructing it.
"""
from typing import Callable, Dict, Iterator, List, Optional, TypeVar

from .. import log
from ..errors import ConstructionError, DuplicateResourceError
from ..resource import Resource
from ..urn import create_urn, qualified_type_of

R = TypeVar("R", bound=Resource)


class ResourceRegistry:
    """
    ResourceRegistry assigns URNs to resources and keeps them in declaration order.
    """

    project: str
    stack: str

    _resources: Dict[str, Resource]
    _listener: Optional[Callable[[Resource], None]]

    def __init__(self, project: str, stack: str) -> None:
        self.project = project
        self.stack = stack
        self._resources = {}
        self._listener = None

    def register(self, resource: R) -> R:
        """
        Registers `resource`, assigning its URN, and returns it.

        :raises DuplicateResourceError: A resource with the same URN is already registered.
        :raises ConstructionError: The resource's parent has not been registered.
        """
        if not isinstance(resource, Resource):
            raise TypeError("Expected a Resource")
        if resource.is_registered():
            raise ConstructionError(f"resource {resource.urn} is already registered")

        parent_type = None
        if resource.parent is not None:
            if not resource.parent.is_registered():
                raise ConstructionError(
                    f"the parent of resource '{resource.resource_name}' must be registered before it"
                )
            parent_type = qualified_type_of(resource.parent.urn)

        urn = create_urn(resource.resource_name, resource.type_, self.project, self.stack, parent_type)
        if urn in self._resources:
            raise DuplicateResourceError(urn)

        resource._urn = urn
        self._resources[urn] = resource
        log.debug(f"registered {urn}")

        if self._listener is not None:
            self._listener(resource)
        return resource

    def set_listener(self, listener: Optional[Callable[[Resource], None]]) -> None:
        """
        Sets the callback invoked for every registration from now on. The scheduler listens while a run
        is in progress so that resources registered late (fan-out children) are scheduled too.
        """
        self._listener = listener

    def resources(self) -> List[Resource]:
        return list(self._resources.values())

    def get(self, urn: str) -> Optional[Resource]:
        return self._resources.get(urn)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Resource):
            return item.is_registered() and self._resources.get(item.urn) is item
        return item in self._resources

    def __iter__(self) -> Iterator[Resource]:
        return iter(list(self._resources.values()))

    def __len__(self) -> int:
        return len(self._resources)
