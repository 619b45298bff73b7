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

import pytest

from stratus import Output, ResourceOptions
from stratus.azure import FirewallRule, firewall_rule_for_ip, format_connection_string, sql_connection_string


def test_connection_string():
    assert format_connection_string("srv.database.windows.net", "sqlDb", "pulumi", "pw;1") == (
        "Server=tcp:srv.database.windows.net,1433;Initial Catalog=sqlDb;Persist Security Info=False;"
        "User ID=pulumi;Password=pw;1;MultipleActiveResultSets=False;Encrypt=True;"
        "TrustServerCertificate=False;Connection Timeout=30;"
    )


@pytest.mark.asyncio
async def test_connection_string_is_secret_with_secret_password():
    conn = sql_connection_string("host", "db", "user", Output.secret("pw"))
    assert await conn.is_secret()
    assert "Password=pw;" in await conn.future()

    plain = sql_connection_string("host", "db", "user", "pw")
    assert not await plain.is_secret()


def test_firewall_rule_factory():
    factory = firewall_rule_for_ip("server", "rg")
    opts = ResourceOptions()
    rule = factory("10.1.2.3", opts)
    assert isinstance(rule, FirewallRule)
    assert rule.resource_name == "10.1.2.3"
    assert rule.opts is opts
    assert rule.props["start_ip_address"] == "10.1.2.3"
    assert rule.props["end_ip_address"] == "10.1.2.3"
    assert rule.props["server_name"] == "server"
