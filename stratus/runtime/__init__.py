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
The runtime implementation of stratus: the resource registry, the dependency graph and the scheduler
that creates resources in dependency order.
"""

from .config import (
    set_config,
    set_all_config,
    get_config,
    get_config_env,
    get_config_env_key,
    get_config_secret_keys_env,
    is_config_secret,
    load_stack_settings,
    get_stack_settings_path,
    StackSettings,
)

from .settings import (
    Settings,
    configure,
    is_dry_run,
)

from .registry import (
    ResourceRegistry,
)

from .graph import (
    DependencyGraph,
    dependencies_of,
)

from .scheduler import (
    Failure,
    RunReport,
    Scheduler,
)

from .stack import (
    OutputValue,
    Stack,
    UpResult,
    run,
)

from .mocks import (
    Mocks,
    MockProvider,
    MockResourceArgs,
    mock_providers,
)

__all__ = [
    # config
    "set_config",
    "set_all_config",
    "get_config",
    "get_config_env",
    "get_config_env_key",
    "get_config_secret_keys_env",
    "is_config_secret",
    "load_stack_settings",
    "get_stack_settings_path",
    "StackSettings",
    # settings
    "Settings",
    "configure",
    "is_dry_run",
    # registry
    "ResourceRegistry",
    # graph
    "DependencyGraph",
    "dependencies_of",
    # scheduler
    "Failure",
    "RunReport",
    "Scheduler",
    # stack
    "OutputValue",
    "Stack",
    "UpResult",
    "run",
    # mocks
    "Mocks",
    "MockProvider",
    "MockResourceArgs",
    "mock_providers",
]
