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
Assets are data blobs, such as build artifacts, that can be passed to resources.
"""
from os import PathLike, fspath
from typing import Union


class Asset:
    """
    Asset represents a single blob of text or data that is managed as a first
    class entity.
    """


class FileAsset(Asset):
    """
    A FileAsset is a kind of asset produced from a given path to a file on
    the local filesystem.
    """

    path: str

    def __init__(self, path: Union[str, PathLike]) -> None:
        if not isinstance(path, (str, PathLike)):
            raise TypeError("FileAsset path must be a string or os.PathLike")
        self.path = fspath(path)

    def __repr__(self) -> str:
        return f"FileAsset({self.path!r})"


class Archive:
    """
    Archive represents a collection of named assets.
    """


class FileArchive(Archive):
    """
    A FileArchive is a file-based archive, or a collection of file-based assets. This can be
    a raw directory or a single archive file in one of the supported formats (.tar, .tar.gz, or .zip).

    The path is not read when the archive is declared. A build step that produces the archive may
    run earlier in the same provisioning run.
    """

    path: str

    def __init__(self, path: Union[str, PathLike]) -> None:
        if not isinstance(path, (str, PathLike)):
            raise TypeError("FileArchive path must be a string or os.PathLike")
        self.path = fspath(path)

    def __repr__(self) -> str:
        return f"FileArchive({self.path!r})"

