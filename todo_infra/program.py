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
The resources of the ToDo backend: storage for the API's build artifact, an Azure SQL database, Application
Insights, and the web app serving the API. The run ends with the database migration.
"""
import os
from datetime import date
from typing import Any, Dict, Optional

from stratus import Config, FanOut, FileArchive, Output, ResourceOptions
from stratus.azure import (
    AppServicePlan,
    Blob,
    BlobContainer,
    Component,
    ContentHeaders,
    Database,
    FirewallRule,
    ResourceGroup,
    SasWindow,
    Server,
    StorageAccount,
    WebApp,
    Workspace,
    conn_string_info,
    firewall_rule_for_ip,
    name_value_pair,
    signed_blob_read_url,
    sql_connection_string,
)
from stratus.command import Command
from stratus.password import RandomPassword
from stratus.runtime import ResourceRegistry

SQL_ADMIN = "pulumi"

CODE_URL_WINDOW = SasWindow(date(2021, 1, 1), date(2030, 1, 1))

CODE_URL_HEADERS = ContentHeaders(
    content_type="application/json",
    cache_control="max-age=5",
    content_disposition="inline",
    content_encoding="deflate",
)


def define_infrastructure(
    registry: ResourceRegistry, config: Optional[Config] = None
) -> Dict[str, Any]:
    """
    Registers the ToDo backend's resources and returns the stack's exports.

    Configuration (in the project's namespace):
      location: the Azure region, "WestEurope" by default.
      apiDir: the API project, built and uploaded to the web app.
      deployDir: the migration project, run once the database is reachable.
      sqlPassword (secret): pins the SQL administrator password instead of generating one.
    """
    config = config or Config()
    location = config.get("location", "WestEurope")
    api_dir = config.get("apiDir", "../ToDoBackEnd.API")
    deploy_dir = config.get("deployDir", "../ToDoBackEnd.Deploy")

    resource_group = registry.register(ResourceGroup("resourceGroup", location=location))

    storage_account = registry.register(
        StorageAccount(
            "sa",
            resource_group_name=resource_group.name,
            kind="StorageV2",
            sku_name="Standard_LRS",
        )
    )

    container = registry.register(
        BlobContainer(
            "zips",
            account_name=storage_account.name,
            resource_group_name=resource_group.name,
            public_access="None",
        )
    )

    build_api = registry.register(Command("buildApi", create="dotnet publish -c Debug", dir=api_dir))

    blob = registry.register(
        Blob(
            "appservice-blob",
            resource_group_name=resource_group.name,
            account_name=storage_account.name,
            container_name=container.name,
            blob_name="ToDoBackEnd.API.zip",
            type="Block",
            source=FileArchive(os.path.join(api_dir, "bin", "Debug", "netcoreapp3.1", "publish")),
            opts=ResourceOptions(depends_on=[build_api]),
        )
    )

    code_blob_url = signed_blob_read_url(
        storage_account.name,
        container.name,
        blob.name,
        storage_account.primary_key,
        CODE_URL_WINDOW,
        CODE_URL_HEADERS,
    )

    password = registry.register(
        RandomPassword("password", length=16, special=True, pinned=config.get_secret("sqlPassword"))
    )

    sql_server = registry.register(
        Server(
            "sqlServer",
            resource_group_name=resource_group.name,
            location=resource_group.location,
            administrator_login=SQL_ADMIN,
            administrator_login_password=password.result,
            version="12.0",
            public_network_access="Enabled",
        )
    )

    sql_db = registry.register(
        Database("sqlDb", resource_group_name=resource_group.name, server_name=sql_server.name)
    )

    connection_string = sql_connection_string(
        sql_server.fully_qualified_domain_name, sql_db.name, SQL_ADMIN, password.result
    )

    insights_workspace = registry.register(
        Workspace("insightsWorkspace", resource_group_name=resource_group.name, sku_name="PerGB2018")
    )

    app_insights = registry.register(
        Component(
            "appInsights",
            resource_group_name=resource_group.name,
            workspace_resource_id=insights_workspace.id,
            application_type="web",
            kind="web",
        )
    )

    app_service_plan = registry.register(
        AppServicePlan(
            "appServicePlan",
            resource_group_name=resource_group.name,
            kind="App",
            sku_name="B1",
            sku_tier="Basic",
        )
    )

    app = registry.register(
        WebApp(
            "webApp",
            resource_group_name=resource_group.name,
            server_farm_id=app_service_plan.id,
            app_settings=[
                name_value_pair("WEBSITE_RUN_FROM_PACKAGE", code_blob_url),
                name_value_pair("ASPNETCORE_ENVIRONMENT", "Development"),
                name_value_pair("APPINSIGHTS_INSTRUMENTATIONKEY", app_insights.instrumentation_key),
                name_value_pair(
                    "APPLICATIONINSIGHTS_CONNECTION_STRING",
                    Output.concat("InstrumentationKey=", app_insights.instrumentation_key),
                ),
                name_value_pair("ApplicationInsightsAgent_EXTENSION_VERSION", "~2"),
            ],
            connection_strings=[
                conn_string_info("ReadWriteConnection", connection_string),
                conn_string_info("ReadOnlyConnection", connection_string),
            ],
        )
    )

    # One rule per outbound address of the web app, known only once the app exists.
    registry.register(
        FanOut(
            "webAppOutboundIps",
            app.outbound_ip_addresses,
            firewall_rule_for_ip(sql_server.name, resource_group.name),
        )
    )

    my_ip = registry.register(Command("myIp", create="curl ifconfig.me"))
    current_ip = my_ip.stdout.apply(str.strip)

    local_ip_rule = registry.register(
        FirewallRule(
            "localIp",
            resource_group_name=resource_group.name,
            server_name=sql_server.name,
            start_ip_address=current_ip,
            end_ip_address=current_ip,
        )
    )

    registry.register(
        Command(
            "dbDeploy",
            create="dotnet run",
            dir=deploy_dir,
            environment={
                "ConnectionString": connection_string,
                "BackEndUserPassword": password.result,
                "GITHUB_REF": "main",
            },
            opts=ResourceOptions(depends_on=[local_ip_rule]),
        )
    )

    return {"Endpoint": app.default_host_name.apply(lambda hostname: f"https://{hostname}/")}
