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

from stratus.urn import _parse_urn, create_urn, qualified_type_of


def test_create_urn():
    urn = create_urn("sqlServer", "azure-native:sql:Server", "todo", "dev")
    assert urn == "urn:stratus:dev::todo::azure-native:sql:Server::sqlServer"


def test_create_urn_with_parent():
    urn = create_urn(
        "10.0.0.1", "azure-native:sql:FirewallRule", "todo", "dev", parent_type="stratus:index:FanOut"
    )
    assert urn == "urn:stratus:dev::todo::stratus:index:FanOut$azure-native:sql:FirewallRule::10.0.0.1"
    assert qualified_type_of(urn) == "stratus:index:FanOut$azure-native:sql:FirewallRule"


def test_parse_urn():
    parts = _parse_urn("urn:stratus:dev::todo::stratus:index:FanOut$command:local:Command::build")
    assert parts.stack == "dev"
    assert parts.project == "todo"
    assert parts.typ == "command:local:Command"
    assert parts.pkg_name == "command"
    assert parts.mod_name == "local"
    assert parts.typ_name == "Command"
    assert parts.urn_name == "build"


def test_parse_urn_name_with_separator():
    parts = _parse_urn("urn:stratus:dev::todo::azure-native:sql:FirewallRule::2001:db8::1")
    assert parts.urn_name == "2001:db8::1"


@pytest.mark.parametrize("urn", ["", "urn:pulumi:a::b::c::d", "urn:stratus:only"])
def test_parse_invalid(urn):
    with pytest.raises(ValueError):
        _parse_urn(urn)
