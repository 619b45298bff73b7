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
from typing import Any, Dict, List, Optional, Sequence

from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions


def name_value_pair(name: str, value: Input[str]) -> Dict[str, Any]:
    """An app setting of a web app."""
    return {"name": name, "value": value}


def conn_string_info(name: str, connection_string: Input[str], type: str = "SQLAzure") -> Dict[str, Any]:  # pylint: disable=redefined-builtin
    """A named connection string of a web app."""
    return {"name": name, "type": type, "connection_string": connection_string}


class AppServicePlan(CustomResource):
    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        sku_name: Input[str] = "B1",
        sku_tier: Input[str] = "Basic",
        kind: Input[str] = "App",
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:web:AppServicePlan",
            resource_name,
            {
                "resource_group_name": resource_group_name,
                "kind": kind,
                "sku": {"name": sku_name, "tier": sku_tier},
            },
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")


class WebApp(CustomResource):
    """
    An App Service web app. `outbound_ip_addresses` is the comma-separated list of addresses the app
    connects to other services from.
    """

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        server_farm_id: Input[str],
        app_settings: Optional[Sequence[Dict[str, Any]]] = None,
        connection_strings: Optional[Sequence[Dict[str, Any]]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        site_config: Dict[str, List[Dict[str, Any]]] = {
            "app_settings": list(app_settings or []),
            "connection_strings": list(connection_strings or []),
        }
        super().__init__(
            "azure-native:web:WebApp",
            resource_name,
            {
                "resource_group_name": resource_group_name,
                "server_farm_id": server_farm_id,
                "site_config": site_config,
            },
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")

    @property
    def default_host_name(self) -> Output[str]:
        return self.get_output("default_host_name")

    @property
    def outbound_ip_addresses(self) -> Output[str]:
        return self.get_output("outbound_ip_addresses")
