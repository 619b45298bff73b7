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


class ResourceGroup(CustomResource):
    """
    An Azure resource group.

    :param str resource_name: The name of the resource.
    :param Input[str] location: The location of the resource group, e.g. "WestEurope".
    """

    def __init__(
        self,
        resource_name: str,
        location: Optional[Input[str]] = None,
        resource_group_name: Optional[Input[str]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:resources:ResourceGroup",
            resource_name,
            {"location": location, "resource_group_name": resource_group_name},
            opts,
        )

    @property
    def name(self) -> Output[str]:
        """The name of the resource group, assigned by the provider unless given."""
        return self.get_output("name")

    @property
    def location(self) -> Output[str]:
        return self.get_output("location")
