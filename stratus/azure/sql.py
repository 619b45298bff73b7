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
from typing import Callable, Optional

from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions

CONNECTION_STRING_TEMPLATE = (
    "Server=tcp:{host},1433;Initial Catalog={database};Persist Security Info=False;"
    "User ID={user};Password={password};MultipleActiveResultSets=False;Encrypt=True;"
    "TrustServerCertificate=False;Connection Timeout=30;"
)


class Server(CustomResource):
    """
    An Azure SQL logical server.
    """

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        administrator_login: Input[str],
        administrator_login_password: Input[str],
        version: Input[str] = "12.0",
        public_network_access: Input[str] = "Enabled",
        location: Optional[Input[str]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:sql:Server",
            resource_name,
            {
                "resource_group_name": resource_group_name,
                "location": location,
                "administrator_login": administrator_login,
                "administrator_login_password": administrator_login_password,
                "version": version,
                "public_network_access": public_network_access,
            },
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")

    @property
    def fully_qualified_domain_name(self) -> Output[str]:
        return self.get_output("fully_qualified_domain_name")


class Database(CustomResource):
    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        server_name: Input[str],
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:sql:Database",
            resource_name,
            {"resource_group_name": resource_group_name, "server_name": server_name},
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")


class FirewallRule(CustomResource):
    """
    A rule admitting the addresses `start_ip_address` through `end_ip_address` to a SQL server.
    """

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        server_name: Input[str],
        start_ip_address: Input[str],
        end_ip_address: Input[str],
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:sql:FirewallRule",
            resource_name,
            {
                "resource_group_name": resource_group_name,
                "server_name": server_name,
                "start_ip_address": start_ip_address,
                "end_ip_address": end_ip_address,
            },
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")


def format_connection_string(host: str, database: str, user: str, password: str) -> str:
    return CONNECTION_STRING_TEMPLATE.format(host=host, database=database, user=user, password=password)


def sql_connection_string(
    host: Input[str], database: Input[str], user: Input[str], password: Input[str]
) -> Output[str]:
    """
    The ADO.NET connection string for `database` on `host`. It is secret whenever `password` is.
    """
    return Output.all(host, database, user, password).apply(
        lambda args: format_connection_string(args[0], args[1], args[2], args[3])
    )


def firewall_rule_for_ip(
    server_name: Input[str], resource_group_name: Input[str]
) -> Callable[[str, ResourceOptions], FirewallRule]:
    """
    Returns a fan-out factory that admits a single IP address to the server. Each rule is named by its address.
    """

    def factory(ip: str, opts: ResourceOptions) -> FirewallRule:
        return FirewallRule(
            ip,
            resource_group_name=resource_group_name,
            server_name=server_name,
            start_ip_address=ip,
            end_ip_address=ip,
            opts=opts,
        )

    return factory
