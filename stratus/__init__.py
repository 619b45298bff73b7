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
stratus declares cloud resources as a dependency graph and creates them in dependency order, with
asynchronous output propagation and dynamic fan-out.
"""

# Make all module members inside of this package available as package members.
from .asset import (
    Asset,
    Archive,
    FileArchive,
    FileAsset,
)

from .config import (
    Config,
    ConfigMissingError,
    ConfigTypeError,
)

from .errors import (
    CommandError,
    ConstructionError,
    DependencyCycleError,
    DependencyFailedError,
    DuplicateResourceError,
    ProviderError,
    ResourceTimeoutError,
    RunError,
    TransformError,
)

from .resource import (
    Resource,
    CustomResource,
    CustomTimeouts,
    ComponentResource,
    ResourceOptions,
    ResourceState,
)

from .output import (
    Output,
    Input,
    Inputs,
    deferred_output,
)

from .log import (
    debug,
    info,
    warn,
    error,
)

from .fanout import (
    FanOut,
)

from .provider import (
    CreateArgs,
    CreateResult,
    Provider,
    ProviderContext,
    ProviderRegistry,
)

from . import runtime

__all__ = [
    # asset
    "Asset",
    "Archive",
    "FileArchive",
    "FileAsset",
    # config
    "Config",
    "ConfigMissingError",
    "ConfigTypeError",
    # errors
    "CommandError",
    "ConstructionError",
    "DependencyCycleError",
    "DependencyFailedError",
    "DuplicateResourceError",
    "ProviderError",
    "ResourceTimeoutError",
    "RunError",
    "TransformError",
    # resource
    "Resource",
    "CustomResource",
    "CustomTimeouts",
    "ComponentResource",
    "ResourceOptions",
    "ResourceState",
    # output
    "Output",
    "Input",
    "Inputs",
    "deferred_output",
    # log
    "debug",
    "info",
    "warn",
    "error",
    # fanout
    "FanOut",
    # provider
    "CreateArgs",
    "CreateResult",
    "Provider",
    "ProviderContext",
    "ProviderRegistry",
    # runtime
    "runtime",
]
