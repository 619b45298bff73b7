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

import pathlib

import pytest

from stratus import Archive, Asset, FileArchive, FileAsset, Output
from stratus.azure import Blob
from stratus.provider import ProviderContext
from stratus.runtime.mocks import mock_providers
from stratus.runtime.registry import ResourceRegistry
from stratus.runtime.rpc import resolve_property
from stratus.runtime.scheduler import Scheduler

from .helpers import TableMocks


def test_paths_are_normalized_to_strings():
    assert FileAsset(pathlib.PurePosixPath("build/app.zip")).path == "build/app.zip"
    assert FileArchive("publish").path == "publish"
    assert repr(FileArchive("publish")) == "FileArchive('publish')"
    assert isinstance(FileAsset("a.txt"), Asset)
    assert isinstance(FileArchive("publish"), Archive)


def test_path_must_be_a_path():
    with pytest.raises(TypeError):
        FileAsset(42)
    with pytest.raises(TypeError):
        FileArchive(None)


def test_archive_is_not_read_when_declared(tmp_path):
    # A build step later in the run produces the directory.
    archive = FileArchive(tmp_path / "not-built-yet")
    assert archive.path == str(tmp_path / "not-built-yet")


@pytest.mark.asyncio
async def test_assets_pass_through_input_resolution():
    asset = FileAsset("app.zip")
    value, secret = await resolve_property(Output.from_input({"source": asset}))
    assert value["source"] is asset
    assert not secret


@pytest.mark.asyncio
async def test_blob_source_reaches_the_provider():
    registry = ResourceRegistry("project", "stack")
    archive = FileArchive("publish")
    blob = registry.register(Blob("code", "rg", "account", "zips", archive))

    providers, by_package = mock_providers(TableMocks(), ["azure-native"])
    report = await Scheduler(registry, providers, ProviderContext("project", "stack")).run()

    assert report.ok
    assert by_package["azure-native"].call_for(blob.urn).inputs["source"] is archive
