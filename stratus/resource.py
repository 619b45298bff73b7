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
"""The Resource module, containing all resource-related definitions."""

import asyncio
import re
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Union,
)

from .errors import ConstructionError

if TYPE_CHECKING:
    from .output import Inputs, Output, OutputData
    from .runtime.registry import ResourceRegistry


_DURATION_UNITS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}

_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d)")


def parse_duration(duration: str) -> float:
    """
    Parses a duration such as "40s", "5m", "1h", "1d" or "1h30m" into seconds.
    """
    if not isinstance(duration, str) or not duration:
        raise ValueError(f"invalid duration: {duration!r}")
    total = 0.0
    pos = 0
    for match in _DURATION_RE.finditer(duration):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos != len(duration):
        raise ValueError(f"invalid duration: {duration!r}")
    return total


class CustomTimeouts:
    create: Optional[str]
    """
    create is the optional create timout represented as a string e.g. 5m, 40s, 1d.
    """

    def __init__(self, create: Optional[str] = None) -> None:
        if create is not None:
            # Validate eagerly so a malformed timeout is a declaration error.
            parse_duration(create)
        self.create = create

    def create_seconds(self) -> Optional[float]:
        return None if self.create is None else parse_duration(self.create)


class ResourceState(Enum):
    PENDING = "pending"
    CREATING = "creating"
    CREATED = "created"
    FAILED = "failed"
    SKIPPED = "skipped"
    """
    The resource was never attempted because something it depends on failed or was skipped.
    """

    @property
    def finished(self) -> bool:
        return self in (ResourceState.CREATED, ResourceState.FAILED, ResourceState.SKIPPED)


class ResourceOptions:
    """
    ResourceOptions is a bag of optional settings that control a resource's behavior.
    """

    parent: Optional["Resource"]
    """
    If provided, the currently-constructing resource should be the child of the provided parent
    resource. The parent qualifies the child's URN; it does not order creation.
    """

    depends_on: Optional[Union[Sequence["Resource"], "Resource"]]
    """
    If provided, declares that the currently-constructing resource depends on the given resources.
    """

    version: Optional[str]
    """
    An optional version requirement. The provider for this resource's package must be of the same
    major version and not older.
    """

    additional_secret_outputs: Optional[List[str]]
    """
    The names of outputs for this resource that should be treated as secrets.
    """

    custom_timeouts: Optional[CustomTimeouts]
    """
    An optional customTimeouts config block.
    """

    def __init__(
        self,
        parent: Optional["Resource"] = None,
        depends_on: Optional[Union[Sequence["Resource"], "Resource"]] = None,
        version: Optional[str] = None,
        additional_secret_outputs: Optional[List[str]] = None,
        custom_timeouts: Optional[CustomTimeouts] = None,
    ) -> None:
        """
        :param Optional[Resource] parent: If provided, the currently-constructing resource should be the child of
               the provided parent resource.
        :param Optional[Union[List[Resource],Resource]] depends_on: If provided, declares that the
               currently-constructing resource depends on the given resources.
        :param Optional[str] version: An optional provider version requirement for this resource.
        :param Optional[List[str]] additional_secret_outputs: If provided, a list of output property names that should
               also be treated as secret.
        :param Optional[CustomTimeouts] custom_timeouts: If provided, a config block for custom timeout information.
        """
        self.parent = parent
        self.depends_on = depends_on
        self.version = version
        self.additional_secret_outputs = additional_secret_outputs
        self.custom_timeouts = custom_timeouts

    def _depends_on_list(self) -> List["Resource"]:
        if self.depends_on is None:
            return []
        if isinstance(self.depends_on, Resource):
            return [self.depends_on]
        return list(self.depends_on)

    @staticmethod
    def merge(
        opts1: Optional["ResourceOptions"], opts2: Optional["ResourceOptions"]
    ) -> "ResourceOptions":
        """
        merge produces a new ResourceOptions object with the respective attributes of the `opts1`
        instance in it with the attributes of `opts2` merged over them.

        Both the `opts1` instance and the `opts2` instance will be unchanged. Both of `opts1` and
        `opts2` can be `None`, in which case its attributes are ignored.

        Collections (`depends_on`, `additional_secret_outputs`) are concatenated. Any other
        attribute set on `opts2` replaces the one on `opts1`.
        """
        opts1 = opts1 or ResourceOptions()
        opts2 = opts2 or ResourceOptions()

        secrets = _merge_lists(opts1.additional_secret_outputs, opts2.additional_secret_outputs)
        depends_on: Optional[List[Resource]] = None
        if opts1.depends_on is not None or opts2.depends_on is not None:
            depends_on = opts1._depends_on_list() + opts2._depends_on_list()

        return ResourceOptions(
            parent=opts2.parent if opts2.parent is not None else opts1.parent,
            depends_on=depends_on,
            version=opts2.version if opts2.version is not None else opts1.version,
            additional_secret_outputs=secrets,
            custom_timeouts=opts2.custom_timeouts
            if opts2.custom_timeouts is not None
            else opts1.custom_timeouts,
        )


def _merge_lists(dest, source):
    if dest is None:
        return None if source is None else list(source)
    if source is None:
        return list(dest)
    return list(dest) + list(source)


class Resource:
    """
    Resource represents a declared piece of infrastructure whose creation is performed by a provider.

    A resource does nothing until it is registered with a ResourceRegistry and the registry's graph is run.
    Its output properties are Outputs that resolve exactly once, when its creation completes.
    """

    _name: str
    """
    The name assigned to the resource at construction.
    """

    _type: str
    """
    The type of the resource, a `package:module:Type` token.
    """

    _props: Dict[str, Any]
    """
    The declared input properties. Values may be prompt values, Outputs, or nested lists and dicts of them.
    """

    _childResources: Set["Resource"]

    def __init__(
        self,
        t: str,
        name: str,
        custom: bool,
        props: Optional["Inputs"] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        """
        :param str t: The type of this resource.
        :param str name: The name of this resource.
        :param bool custom: True if this resource is a custom resource.
        :param Optional[dict] props: An optional list of input properties to use as inputs for the resource.
        :param Optional[ResourceOptions] opts: Optional set of :class:`stratus.ResourceOptions` to use for this
               resource.
        """
        if not t:
            raise TypeError("Missing resource type argument")
        if not isinstance(t, str):
            raise TypeError("Expected resource type to be a string")
        if not name:
            raise TypeError("Missing resource name argument (for URN creation)")
        if not isinstance(name, str):
            raise TypeError("Expected resource name to be a string")
        if opts is None:
            opts = ResourceOptions()
        elif not isinstance(opts, ResourceOptions):
            raise TypeError("Expected resource options to be a ResourceOptions instance")
        if props is not None and not isinstance(props, Mapping):
            raise TypeError("Expected resource properties to be a mapping")

        self._type = t
        self._name = name
        self._custom = custom
        self._props = dict(props or {})
        self._opts = opts
        self._parent = opts.parent
        self._childResources = set()
        self._urn: Optional[str] = None

        self._output_futures: Dict[str, "asyncio.Future[OutputData[Any]]"] = {}
        self._outputs: Dict[str, "Output[Any]"] = {}
        self._outcome: Optional[Dict[str, "OutputData[Any]"]] = None
        self._failure: Optional[BaseException] = None

        if self._parent is not None:
            if not isinstance(self._parent, Resource):
                raise TypeError("Resource parent is not a valid Resource")
            self._parent._childResources.add(self)

    @property
    def resource_name(self) -> str:
        """The name the resource was declared with."""
        return self._name

    @property
    def type_(self) -> str:
        return self._type

    @property
    def package(self) -> str:
        return self._type.split(":")[0]

    @property
    def parent(self) -> Optional["Resource"]:
        return self._parent

    @property
    def props(self) -> Dict[str, Any]:
        return self._props

    @property
    def opts(self) -> ResourceOptions:
        return self._opts

    @property
    def urn(self) -> str:
        """
        The stable, logical URN used to distinctly address a resource. It is assigned when the resource is
        registered and is a pure function of the resource's type, name and parent chain.
        """
        if self._urn is None:
            raise ConstructionError(
                f"resource '{self._name}' of type '{self._type}' has not been registered"
            )
        return self._urn

    def is_registered(self) -> bool:
        return self._urn is not None

    def is_custom(self) -> bool:
        return self._custom

    def child_resources(self) -> List["Resource"]:
        return list(self._childResources)

    def get_output(self, name: str) -> "Output[Any]":
        """
        Returns the Output for the output property `name`. The same Output instance is returned for
        repeated lookups, and it carries this resource as its dependency.
        Outputs belong to the running event loop, so this is called while a program declares its resources.

        :param str name: The output property name.
        """
        from .output import Output  # pylint: disable=import-outside-toplevel

        out = self._outputs.get(name)
        if out is None:
            fut: "asyncio.Future[OutputData[Any]]" = asyncio.get_running_loop().create_future()
            out = Output(fut, resources={self})
            self._output_futures[name] = fut
            self._outputs[name] = out
            self._settle(name, fut)
        return out

    # Private implementation details - do not document.
    def _settle(self, name: str, fut: "asyncio.Future[OutputData[Any]]") -> None:
        from .output import OutputData  # pylint: disable=import-outside-toplevel

        if fut.done():
            return
        if self._failure is not None:
            fut.set_exception(self._failure)
        elif self._outcome is not None:
            fut.set_result(self._outcome.get(name, OutputData(None)))

    def _resolve(self, outputs: Mapping[str, Any], secret_outputs: Iterable[str] = ()) -> None:
        """
        Records the result of creating this resource. Each output resolves exactly once.
        """
        from .output import OutputData  # pylint: disable=import-outside-toplevel

        if self._outcome is not None or self._failure is not None:
            raise RuntimeError(f"outputs of '{self._name}' were already recorded")
        secrets = set(secret_outputs)
        self._outcome = {k: OutputData(v, k in secrets) for k, v in outputs.items()}
        for name, fut in self._output_futures.items():
            self._settle(name, fut)

    def _reject(self, exn: BaseException) -> None:
        if self._outcome is not None or self._failure is not None:
            raise RuntimeError(f"outputs of '{self._name}' were already recorded")
        self._failure = exn
        for name, fut in self._output_futures.items():
            self._settle(name, fut)

    # End private implementation details.

    def __repr__(self) -> str:
        ident = self._urn or f"{self._type}::{self._name}"
        return f"<{type(self).__name__} {ident}>"


class CustomResource(Resource):
    """
    CustomResource is a resource whose creation is performed by the provider registered for the
    package of its type token.
    """

    def __init__(
        self,
        t: str,
        name: str,
        props: Optional["Inputs"] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        """
        :param str t: The type of this resource.
        :param str name: The name of this resource.
        :param Optional[dict] props: An optional list of input properties to use as inputs for the resource.
        :param Optional[ResourceOptions] opts: Optional set of :class:`stratus.ResourceOptions` to use for this
               resource.
        """
        Resource.__init__(self, t, name, True, props, opts)

    @property
    def id(self) -> "Output[str]":
        """
        id is the provider-assigned unique ID for this managed resource.
        """
        return self.get_output("id")


class ComponentResource(Resource):
    """
    ComponentResource is a resource that aggregates one or more other child resources into a higher
    level abstraction. The component itself is a node of the graph, but is not created by a provider:
    once its inputs resolve, `expand` registers its children, and the component finishes when they do.
    """

    def __init__(
        self,
        t: str,
        name: str,
        props: Optional["Inputs"] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        Resource.__init__(self, t, name, False, props, opts)

    async def expand(
        self, registry: "ResourceRegistry", inputs: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Registers this component's children with `registry` given its resolved inputs and returns the
        component's own outputs.
        """
        return {}
