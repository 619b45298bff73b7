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
Local commands: the build step, discovering the operator's IP address, and the database migration that
ends a provisioning run.
"""
import os
import subprocess
import threading
from typing import Any, Callable, List, Mapping, Optional

from . import log
from .errors import CommandError
from .output import Input, Output
from .provider import CreateArgs, CreateResult, Provider, ProviderContext
from .resource import CustomResource, ResourceOptions

OnOutput = Callable[[str], Any]


class CommandResult:
    def __init__(self, stdout: str, stderr: str, code: int) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.code = code

    def __repr__(self):
        return f"CommandResult(stdout={self.stdout!r}, stderr={self.stderr!r}, code={self.code!r})"

    def __str__(self) -> str:
        return f"\n code: {self.code}\n stdout: {self.stdout}\n stderr: {self.stderr}"


def _shell(command: str) -> List[str]:
    if os.name == "nt":
        return ["cmd", "/C", command]
    return ["/bin/sh", "-c", command]


class CommandRunner:
    """
    CommandRunner runs shell commands. Environment values are handed to the child process directly and
    are never part of the command line or of any log message.
    """

    def run(
        self,
        command: str,
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, Any]] = None,
        on_output: Optional[OnOutput] = None,
        on_error: Optional[OnOutput] = None,
    ) -> CommandResult:
        """
        Runs a command, returning a CommandResult. If the command fails, a CommandError is raised.

        :param command: The command line, run by the platform shell.
        :param cwd: The working directory to run the command in.
        :param env: Additional environment variables to set when running the command. Entries whose
               value is None are left out.
        :param on_output: A callback to invoke when the command outputs stdout data.
        :param on_error: A callback to invoke when the command outputs stderr data.
        """
        # Entries that resolved to None are unset, not the string "None".
        additional_env = {k: str(v) for k, v in (env or {}).items() if v is not None}
        full_env = {**os.environ, **additional_env}
        log.debug(
            f"running '{command}' in {cwd or os.getcwd()} with environment keys {sorted(additional_env)}"
        )

        stdout_chunks: List[str] = []
        stderr_chunks: List[str] = []

        def consumer(stream, callback, chunks):
            for line in iter(stream.readline, ""):
                stripped = line.rstrip()
                if callback:
                    callback(stripped)
                chunks.append(stripped)
            stream.close()

        with subprocess.Popen(
            _shell(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=full_env,
            encoding="utf-8",
        ) as process:
            assert process.stdout is not None
            assert process.stderr is not None

            stdout = threading.Thread(
                target=consumer, args=(process.stdout, on_output, stdout_chunks)
            )
            stderr = threading.Thread(
                target=consumer, args=(process.stderr, on_error, stderr_chunks)
            )

            stdout.start()
            stderr.start()

            stdout.join()
            stderr.join()

            process.wait()
            code = process.returncode

        result = CommandResult(
            stderr="\n".join(stderr_chunks), stdout="\n".join(stdout_chunks), code=code
        )
        if code != 0:
            raise CommandError(result)

        return result


class Command(CustomResource):
    """
    A command run on the machine performing the provisioning run. It runs once, when its inputs resolve.

    :param str resource_name: The name of the resource.
    :param Input[str] create: The command to run.
    :param Input[str] dir: The working directory to run the command in.
    :param Mapping[str, Input[str]] environment: Additional environment variables, possibly secret.
    """

    def __init__(
        self,
        resource_name: str,
        create: Input[str],
        dir: Optional[Input[str]] = None,  # pylint: disable=redefined-builtin
        environment: Optional[Mapping[str, Input[str]]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        super().__init__(
            "command:local:Command",
            resource_name,
            {"create": create, "dir": dir, "environment": dict(environment or {})},
            opts,
        )

    @property
    def stdout(self) -> Output[str]:
        return self.get_output("stdout")

    @property
    def stderr(self) -> Output[str]:
        return self.get_output("stderr")


class CommandProvider(Provider):
    """
    CommandProvider implements the `command` package.
    """

    def __init__(self, runner: Optional[CommandRunner] = None) -> None:
        super().__init__("command", "0.1.0")
        self.runner = runner or CommandRunner()

    def create(self, ctx: ProviderContext, args: CreateArgs) -> CreateResult:
        command = args.inputs["create"]
        result = self.runner.run(
            command,
            cwd=args.inputs.get("dir"),
            env=args.inputs.get("environment") or {},
        )
        return CreateResult(args.urn, {"stdout": result.stdout, "stderr": result.stderr})
