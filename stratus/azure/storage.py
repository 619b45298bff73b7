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
from typing import Optional, Union

from ..asset import Archive, Asset
from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions


class StorageAccount(CustomResource):
    """
    An Azure storage account. `primary_key` is secret.
    """

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        kind: Input[str] = "StorageV2",
        sku_name: Input[str] = "Standard_LRS",
        location: Optional[Input[str]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        opts = ResourceOptions.merge(opts, ResourceOptions(additional_secret_outputs=["primary_key"]))
        super().__init__(
            "azure-native:storage:StorageAccount",
            resource_name,
            {
                "resource_group_name": resource_group_name,
                "kind": kind,
                "sku": {"name": sku_name},
                "location": location,
            },
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")

    @property
    def primary_key(self) -> Output[str]:
        """The base64-encoded primary access key of the account."""
        return self.get_output("primary_key")


class BlobContainer(CustomResource):
    def __init__(
        self,
        resource_name: str,
        account_name: Input[str],
        resource_group_name: Input[str],
        public_access: Input[str] = "None",
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:storage:BlobContainer",
            resource_name,
            {
                "account_name": account_name,
                "resource_group_name": resource_group_name,
                "public_access": public_access,
            },
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")


class Blob(CustomResource):
    """
    A blob uploaded from a local asset or archive.
    """

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        account_name: Input[str],
        container_name: Input[str],
        source: Input[Union[Asset, Archive]],
        blob_name: Optional[Input[str]] = None,
        type: Input[str] = "Block",  # pylint: disable=redefined-builtin
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "azure-native:storage:Blob",
            resource_name,
            {
                "resource_group_name": resource_group_name,
                "account_name": account_name,
                "container_name": container_name,
                "blob_name": blob_name,
                "type": type,
                "source": source,
            },
            opts,
        )

    @property
    def name(self) -> Output[str]:
        return self.get_output("name")

    @property
    def url(self) -> Output[str]:
        return self.get_output("url")
