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
from typing import Optional

from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions


class Workspace(CustomResource):
    """A Log Analytics workspace."""

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        sku_name: Input[str] = "PerGB2018",
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:operationalinsights:Workspace",
            resource_name,
            {"resource_group_name": resource_group_name, "sku": {"name": sku_name}},
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")


class Component(CustomResource):
    """An Application Insights component, backed by a Log Analytics workspace."""

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        workspace_resource_id: Input[str],
        application_type: Input[str] = "web",
        kind: Input[str] = "web",
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:insights:Component",
            resource_name,
            {
                "resource_group_name": resource_group_name,
                "workspace_resource_id": workspace_resource_id,
                "application_type": application_type,
                "kind": kind,
            },
            opts,
        )

    @property
    def instrumentation_key(self) -> Output[str]:
        return self.get_output("instrumentation_key")

    @property
    def connection_string(self) -> Output[str]:
        return self.get_output("connection_string")
