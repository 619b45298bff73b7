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

import base64

import pytest

from stratus import DependencyFailedError, ResourceState, RunError, log
from stratus.password import RandomProvider
from stratus.provider import ProviderContext
from stratus.runtime import Settings, configure, set_config
from stratus.runtime.mocks import mock_providers
from stratus.azure import signed_blob_read_url
from stratus.runtime.stack import OutputValue, Stack
from todo_infra.program import CODE_URL_HEADERS, CODE_URL_WINDOW, define_infrastructure

from .helpers import RecordingEngine, TableMocks

ACCOUNT_KEY = base64.b64encode(b"storage-account-primary-key").decode()
PREFIX = "urn:stratus:stack::project::"

AZURE = {
    "resourceGroup": {"name": "resourceGroup1a2b"},
    "sa": {"name": "sa3c4d", "primary_key": ACCOUNT_KEY},
    "zips": {"name": "zips"},
    "appservice-blob": {"name": "ToDoBackEnd.API.zip"},
    "sqlServer": {"name": "sqlserver5e6f", "fully_qualified_domain_name": "sqlserver5e6f.database.windows.net"},
    "sqlDb": {"name": "sqlDb"},
    "appInsights": {"instrumentation_key": "ikey-0000"},
    "webApp": {
        "name": "webapp7a8b",
        "default_host_name": "webapp7a8b.azurewebsites.net",
        "outbound_ip_addresses": "20.50.2.1,20.50.2.2,20.50.2.1",
    },
    "buildApi": {"stdout": "published", "stderr": ""},
    "myIp": {"stdout": " 203.0.113.9\n", "stderr": ""},
    "dbDeploy": {"stdout": "migrated", "stderr": ""},
}

CONTEXT = ProviderContext("project", "stack")


def stack_with(table):
    providers, by_package = mock_providers(TableMocks(table), ["azure-native", "command"])
    providers.add(RandomProvider())
    return Stack(define_infrastructure, providers, CONTEXT), by_package


@pytest.mark.asyncio
async def test_full_run():
    stack, providers = stack_with(AZURE)
    result = await stack.up()

    assert result.outputs == {"Endpoint": OutputValue("https://webapp7a8b.azurewebsites.net/")}
    report = result.report
    assert report.ok
    assert len(report.succeeded) == 18

    azure = providers["azure-native"]
    command = providers["command"]

    site_config = azure.call_for(PREFIX + "azure-native:web:WebApp::webApp").inputs["site_config"]
    settings = {s["name"]: s["value"] for s in site_config["app_settings"]}
    assert settings["WEBSITE_RUN_FROM_PACKAGE"].startswith(
        "https://sa3c4d.blob.core.windows.net/zips/ToDoBackEnd.API.zip?sv=2019-12-12&st=2021-01-01&se=2030-01-01&"
    )
    assert settings["APPLICATIONINSIGHTS_CONNECTION_STRING"] == "InstrumentationKey=ikey-0000"
    assert [c["name"] for c in site_config["connection_strings"]] == ["ReadWriteConnection", "ReadOnlyConnection"]

    local_ip = azure.call_for(PREFIX + "azure-native:sql:FirewallRule::localIp")
    assert local_ip.inputs["start_ip_address"] == "203.0.113.9"
    assert local_ip.inputs["end_ip_address"] == "203.0.113.9"

    fan_out = PREFIX + "stratus:index:FanOut$azure-native:sql:FirewallRule::"
    for ip in ("20.50.2.1", "20.50.2.2"):
        rule = azure.call_for(fan_out + ip)
        assert rule.inputs["server_name"] == "sqlserver5e6f"
        assert rule.inputs["start_ip_address"] == ip
    assert report.state_of(PREFIX + "stratus:index:FanOut::webAppOutboundIps") is ResourceState.CREATED

    blob = azure.call_for(PREFIX + "azure-native:storage:Blob::appservice-blob")
    build = command.call_for(PREFIX + "command:local:Command::buildApi")
    assert blob.started > build.finished

    deploy = command.call_for(PREFIX + "command:local:Command::dbDeploy")
    assert deploy.started > local_ip.finished
    env = deploy.inputs["environment"]
    assert env["GITHUB_REF"] == "main"
    assert env["ConnectionString"].startswith("Server=tcp:sqlserver5e6f.database.windows.net,1433;Initial Catalog=sqlDb;")
    assert f"Password={env['BackEndUserPassword']};" in env["ConnectionString"]


@pytest.mark.asyncio
async def test_secrets_never_reach_the_log():
    engine = RecordingEngine()
    configure(Settings("project", "stack", engine=engine, debug=True))
    set_config("project:sqlPassword", "Pinned#Pass1", secret=True)

    stack, providers = stack_with(AZURE)
    await stack.up()

    server = providers["azure-native"].call_for(PREFIX + "azure-native:sql:Server::sqlServer")
    assert server.inputs["administrator_login_password"] == "Pinned#Pass1"

    text = engine.text()
    assert "creating with inputs" in text
    assert "Pinned#Pass1" not in text
    assert ACCOUNT_KEY not in text
    assert "sig=" not in text


@pytest.mark.asyncio
async def test_plain_values_next_to_secrets_stay_readable():
    set_config("project:sqlPassword", "Pinned#Pass1", secret=True)

    stack, providers = stack_with(AZURE)
    await stack.up()

    # dbDeploy's environment and webApp's app settings mix secret and plain entries.
    for plain in (
        "GITHUB_REF=main",
        "ASPNETCORE_ENVIRONMENT=Development",
        "ApplicationInsightsAgent_EXTENSION_VERSION=~2",
    ):
        assert log.scrub(plain) == plain

    env = providers["command"].call_for(PREFIX + "command:local:Command::dbDeploy").inputs["environment"]
    assert log.scrub(f"BackEndUserPassword={env['BackEndUserPassword']}") == "BackEndUserPassword=[secret]"
    assert log.scrub("password Pinned#Pass1") == "password [secret]"


@pytest.mark.asyncio
async def test_storage_failure_skips_only_its_dependents():
    table = dict(AZURE, sa=RuntimeError("storage account quota exceeded"))
    stack, providers = stack_with(table)

    code_urls = []

    def program(registry):
        exports = define_infrastructure(registry)
        account = registry.get(PREFIX + "azure-native:storage:StorageAccount::sa")
        container = registry.get(PREFIX + "azure-native:storage:BlobContainer::zips")
        blob = registry.get(PREFIX + "azure-native:storage:Blob::appservice-blob")
        code_urls.append(
            signed_blob_read_url(
                account.name, container.name, blob.name, account.primary_key, CODE_URL_WINDOW, CODE_URL_HEADERS
            )
        )
        return exports

    stack.program = program
    with pytest.raises(RunError) as ctx:
        await stack.up()

    report = ctx.value.report
    sa = PREFIX + "azure-native:storage:StorageAccount::sa"
    assert [f.urn for f in report.failures] == [sa]
    assert report.skipped == {
        PREFIX + "azure-native:storage:BlobContainer::zips": sa,
        PREFIX + "azure-native:storage:Blob::appservice-blob": sa,
        PREFIX + "azure-native:web:WebApp::webApp": sa,
        PREFIX + "stratus:index:FanOut::webAppOutboundIps": sa,
    }
    for name in (
        "azure-native:sql:Server::sqlServer",
        "azure-native:sql:Database::sqlDb",
        "azure-native:sql:FirewallRule::localIp",
        "command:local:Command::dbDeploy",
        "command:local:Command::buildApi",
    ):
        assert report.state_of(PREFIX + name) is ResourceState.CREATED
    assert "storage account quota exceeded" in str(ctx.value)

    # The signed code URL is derived from the failed account, so it fails too, naming the account.
    with pytest.raises(DependencyFailedError) as url_ctx:
        await code_urls[0].future()
    assert url_ctx.value.origin == sa


@pytest.mark.asyncio
async def test_urns_are_stable_across_runs():
    first, _ = stack_with(AZURE)
    first_result = await first.up()

    set_config("project:sqlPassword", "Another#Pass2", secret=True)
    second, _ = stack_with(AZURE)
    second_result = await second.up()

    assert sorted(first_result.report.states) == sorted(second_result.report.states)


@pytest.mark.asyncio
async def test_preview_groups_independent_resources():
    stack, providers = stack_with(AZURE)
    layers = await stack.preview()

    assert layers[0] == [
        PREFIX + "azure-native:resources:ResourceGroup::resourceGroup",
        PREFIX + "command:local:Command::buildApi",
        PREFIX + "random:index:RandomPassword::password",
        PREFIX + "command:local:Command::myIp",
    ]
    assert layers[-1] == [PREFIX + "stratus:index:FanOut::webAppOutboundIps"]
    assert all(p.calls == [] for p in providers.values())
