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
Providers perform the actual creation of resources for a package, e.g. "azure-native" or "command".
"""
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from semver import VersionInfo

from .errors import ProviderError


class ProviderContext:
    """
    ProviderContext is the explicit session state handed to every provider call: which project and
    stack the run targets, the stack's configuration, and the credentials a provider may need.
    """

    project: str
    stack: str
    config: Mapping[str, str]
    credentials: Mapping[str, str]

    def __init__(
        self,
        project: str,
        stack: str,
        config: Optional[Mapping[str, str]] = None,
        credentials: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.project = project
        self.stack = stack
        self.config = dict(config or {})
        self.credentials = dict(credentials or {})

    def __repr__(self) -> str:
        # Credentials are never rendered.
        return (
            f"ProviderContext(project={self.project!r}, stack={self.stack!r}, "
            f"config_keys={sorted(self.config)!r}, credentials=<{len(self.credentials)} hidden>)"
        )


class CreateArgs:
    """CreateArgs carries the resolved inputs of the resource being created."""

    type: str
    """The type token of the resource, e.g. `azure-native:sql:Server`."""

    name: str
    """The declared name of the resource."""

    urn: str
    """The URN of the resource."""

    inputs: Dict[str, Any]
    """The fully resolved input properties."""

    def __init__(self, typ: str, name: str, urn: str, inputs: Dict[str, Any]) -> None:
        self.type = typ
        self.name = name
        self.urn = urn
        self.inputs = inputs


class CreateResult:
    """CreateResult represents the results of a call to `Provider.create`."""

    id: str
    """The ID of the created resource."""

    outs: Mapping[str, Any]
    """Any properties that were computed during creation."""

    secret_outputs: Sequence[str]
    """The names of outputs the provider knows to be sensitive."""

    def __init__(
        self,
        id_: str,
        outs: Optional[Mapping[str, Any]] = None,
        secret_outputs: Optional[Sequence[str]] = None,
    ) -> None:
        self.id = id_
        self.outs = dict(outs or {})
        self.secret_outputs = list(secret_outputs or [])


class Provider:
    """Provider represents an object that implements the resources for a particular package.

    `create` may be a plain method or a coroutine function. Plain methods are run in the event loop's
    thread pool so they can block on network or subprocess I/O.
    """

    package: str
    version: Optional[str]

    def __init__(self, package: str, version: Optional[str] = None) -> None:
        """
        :param str package: The package this provider implements, the first segment of its type tokens.
        :param Optional[str] version: The version of the provider. Must be valid semver.
        """
        self.package = package
        self.version = version

    def create(self, ctx: ProviderContext, args: CreateArgs) -> Union[CreateResult, Any]:
        """Create allocates a new instance of the provided resource and returns its unique ID afterwards.

        :param ProviderContext ctx: The explicit context of the run.
        :param CreateArgs args: The resolved inputs and identity of the resource.
        """

        raise ProviderError(args.urn, f"Subclass of Provider must implement 'create' for {args.type}")


def _validate_provider_version(required: str, provider: Provider) -> None:
    """
    Raise ProviderError unless `provider` satisfies the version requirement `required`: the same
    major version and not older.
    """
    try:
        min_version = VersionInfo.parse(required)
    except ValueError as e:
        raise ProviderError(provider.package, f"invalid version requirement '{required}'") from e
    if provider.version is None:
        raise ProviderError(
            provider.package,
            f"version {min_version} was requested but the provider does not declare a version",
        )
    try:
        version = VersionInfo.parse(provider.version)
    except ValueError as e:
        raise ProviderError(
            provider.package, f"could not parse provider version '{provider.version}'"
        ) from e
    if min_version.major != version.major:
        raise ProviderError(
            provider.package,
            f"Major version mismatch. Version {min_version} was requested but the provider is {version}.",
        )
    if min_version.compare(version) == 1:
        raise ProviderError(
            provider.package,
            f"Minimum version requirement failed. The minimum version requirement is "
            f"{min_version}, the provider is {version}.",
        )


class ProviderRegistry:
    """
    Maps packages to the providers that implement them.
    """

    _providers: Dict[str, Provider]

    def __init__(self, providers: Optional[Iterable[Provider]] = None) -> None:
        self._providers = {}
        for provider in providers or []:
            self.add(provider)

    def add(self, provider: Provider) -> None:
        self._providers[provider.package] = provider

    def get(self, package: str, version: Optional[str] = None) -> Provider:
        provider = self._providers.get(package)
        if provider is None:
            raise ProviderError(package, f"no provider is registered for package '{package}'")
        if version is not None:
            _validate_provider_version(version, provider)
        return provider

    def packages(self) -> Tuple[str, ...]:
        return tuple(sorted(self._providers))

    def __contains__(self, package: object) -> bool:
        return package in self._providers
