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
Typed resources of the `azure-native` package and helpers for signing blob URLs and SQL connection strings.
A provider implementing `azure-native` is supplied at run time.
"""

from .insights import Component, Workspace
from .resources import ResourceGroup
from .sas import ContentHeaders, SasWindow, blob_read_url, service_sas_token, signed_blob_read_url
from .sql import (
    Database,
    FirewallRule,
    Server,
    firewall_rule_for_ip,
    format_connection_string,
    sql_connection_string,
)
from .storage import Blob, BlobContainer, StorageAccount
from .web import AppServicePlan, WebApp, conn_string_info, name_value_pair

__all__ = [
    "AppServicePlan",
    "Blob",
    "BlobContainer",
    "Component",
    "ContentHeaders",
    "Database",
    "FirewallRule",
    "ResourceGroup",
    "SasWindow",
    "Server",
    "StorageAccount",
    "WebApp",
    "Workspace",
    "blob_read_url",
    "conn_string_info",
    "firewall_rule_for_ip",
    "format_connection_string",
    "name_value_pair",
    "service_sas_token",
    "signed_blob_read_url",
    "sql_connection_string",
]
