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

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .command import CommandResult
    from .runtime.scheduler import RunReport


class RunError(Exception):
    """
    Can be used for terminating a program abruptly, but resulting in a clean exit rather than the usual
    verbose unhandled error logic which emits the source program text and complete stack trace.

    When raised at the end of a provisioning run, `report` holds the per-resource outcome.
    """

    report: Optional["RunReport"]

    def __init__(self, message: str, report: Optional["RunReport"] = None):
        super().__init__(message)
        self.report = report


class ConstructionError(Exception):
    """
    Raised when the declared resource graph is invalid. Construction errors are detected before any
    provider is called.
    """


class DuplicateResourceError(ConstructionError):
    def __init__(self, urn: str):
        super().__init__(f"Duplicate resource URN '{urn}'; try giving it a unique name")
        self.urn = urn


class DependencyCycleError(ConstructionError):
    """
    Raised when the declared dependencies form a cycle. `cycle` lists the URNs along the cycle, with the
    first URN repeated at the end.
    """

    cycle: List[str]

    def __init__(self, cycle: List[str]):
        super().__init__("Dependency cycle detected: " + " -> ".join(cycle))
        self.cycle = cycle


class ProviderError(Exception):
    """
    Raised when a provider fails to create a resource.
    """

    def __init__(self, urn: str, message: str):
        super().__init__(f"{urn}: {message}")
        self.urn = urn


class ResourceTimeoutError(ProviderError):
    def __init__(self, urn: str, timeout: float):
        super().__init__(urn, f"creation did not complete within {timeout:g}s")
        self.timeout = timeout


class TransformError(Exception):
    """
    Raised by an Output whose transformation function failed. `cause` is the original exception.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause


class DependencyFailedError(Exception):
    """
    The failure observed by anything that depends on a resource that failed or was skipped.
    `origin` is the URN of the resource whose failure caused the skip.
    """

    def __init__(self, origin: str, cause: Optional[BaseException] = None):
        super().__init__(f"skipped because '{origin}' failed")
        self.origin = origin
        self.cause = cause


class CommandError(Exception):
    def __init__(self, command_result: "CommandResult"):
        self.name = "CommandError"
        self.command_result = command_result
        super().__init__(str(command_result))
