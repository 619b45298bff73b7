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
Uniform resource names identify every resource of a stack. A URN is a pure function of the resource's
declared identity, so re-running the same program yields the same URNs.
"""
from collections import namedtuple
from typing import Optional

URN_PREFIX = "urn:stratus:"

_UrnParts = namedtuple(
    "_UrnParts", ["stack", "project", "qualified_type", "typ", "pkg_name", "mod_name", "typ_name", "urn_name"]
)


def create_urn(
    name: str,
    typ: str,
    project: str,
    stack: str,
    parent_type: Optional[str] = None,
) -> str:
    """
    Computes the URN of a resource from its name, its type token and, when it is parented,
    the qualified type of its parent.
    """
    qualified_type = f"{parent_type}${typ}" if parent_type else typ
    return f"{URN_PREFIX}{stack}::{project}::{qualified_type}::{name}"


def qualified_type_of(urn: str) -> str:
    return _parse_urn(urn).qualified_type


def _parse_urn(urn: str) -> _UrnParts:
    if not urn.startswith(URN_PREFIX):
        raise ValueError(f"Cannot parse URN: {urn}")
    try:
        urn_parts = urn[len(URN_PREFIX):].split("::")
        stack, project, qualified_type = urn_parts[0], urn_parts[1], urn_parts[2]
        urn_name = "::".join(urn_parts[3:]) if len(urn_parts) >= 4 else ""
        typ = qualified_type.split("$")[-1]
        typ_parts = typ.split(":")
        return _UrnParts(
            stack=stack,
            project=project,
            qualified_type=qualified_type,
            typ=typ,
            pkg_name=typ_parts[0],
            mod_name=typ_parts[1] if len(typ_parts) > 1 else "",
            typ_name=typ_parts[2] if len(typ_parts) > 2 else "",
            urn_name=urn_name,
        )
    except Exception as e:
        raise ValueError(f"Cannot parse URN: {urn}") from e
