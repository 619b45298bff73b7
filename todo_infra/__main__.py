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
Provisions the ToDo backend.

    python -m todo_infra up --stack dev --provider azure-native=my_azure_provider:AzureNativeProvider
"""
import argparse
import importlib
import os
import sys
import traceback
from typing import List, Optional

from stratus import Config, RunError, log
from stratus.command import CommandProvider
from stratus.password import RandomProvider
from stratus.provider import Provider, ProviderContext, ProviderRegistry
from stratus.runtime import (
    Settings,
    Stack,
    configure,
    get_stack_settings_path,
    load_stack_settings,
    run,
    set_all_config,
)

from .program import define_infrastructure

# use exit code 32 to signal that an error message was displayed to the user
PYTHON_PROCESS_EXITED_AFTER_SHOWING_USER_ACTIONABLE_MESSAGE_CODE = 32

_CREDENTIAL_VARS = [
    "AZURE_CLIENT_ID",
    "AZURE_CLIENT_SECRET",
    "AZURE_TENANT_ID",
    "AZURE_SUBSCRIPTION_ID",
]


def _load_provider(spec: str) -> Provider:
    """Instantiates the provider named by `package=module:Class`."""
    try:
        package, target = spec.split("=", 1)
        module_name, class_name = target.split(":", 1)
    except ValueError as e:
        raise ValueError(f"expected --provider package=module:Class, got '{spec}'") from e
    provider = getattr(importlib.import_module(module_name), class_name)()
    if not isinstance(provider, Provider):
        raise TypeError(f"{target} is not a stratus Provider")
    if provider.package != package:
        raise ValueError(f"{target} implements package '{provider.package}', not '{package}'")
    return provider


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="todo-infra", description="Provision the ToDo backend")
    ap.add_argument("command", choices=["up", "preview"], help="Create the resources, or only list them")
    ap.add_argument("--stack", default="dev", help="Set the stack name")
    ap.add_argument("--project", default="todo", help="Set the project name")
    ap.add_argument("--config-file", help="The stack settings file (default: Stratus.<stack>.yaml)")
    ap.add_argument("--parallel", type=int, help="Run P resource operations in parallel (default=none)")
    ap.add_argument(
        "--provider",
        action="append",
        default=[],
        metavar="PACKAGE=MODULE:CLASS",
        help="Use the given provider for a package; may be repeated",
    )
    ap.add_argument("--debug", action="store_true", help="Print debug messages")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)

    exit_code = 1
    try:
        config_file = args.config_file
        if config_file is None:
            try:
                config_file = get_stack_settings_path(os.getcwd(), args.stack)
            except FileNotFoundError:
                config_file = None
        if config_file is not None:
            stack_settings = load_stack_settings(config_file)
            set_all_config(stack_settings.config, stack_settings.secret_keys)
            for key in stack_settings.secret_keys:
                log.register_secret(stack_settings.config[key])
        else:
            stack_settings = None

        configure(
            Settings(
                project=args.project,
                stack=args.stack,
                parallel=args.parallel,
                dry_run=args.command == "preview",
                debug=args.debug,
                create_timeout=Config("stratus").get("createTimeout"),
            )
        )

        credentials = {k: os.environ[k] for k in _CREDENTIAL_VARS if k in os.environ}
        for value in credentials.values():
            log.register_secret(value)
        context = ProviderContext(
            args.project,
            args.stack,
            config=stack_settings.config if stack_settings is not None else {},
            credentials=credentials,
        )

        providers = ProviderRegistry([CommandProvider(), RandomProvider()])
        for spec in args.provider:
            providers.add(_load_provider(spec))

        stack = Stack(define_infrastructure, providers, context, parallel=args.parallel)

        if args.command == "preview":
            layers = run(stack.preview, args.parallel)
            for i, layer in enumerate(layers):
                for urn in layer:
                    print(f"{i}\t{urn}")
        else:
            result = run(stack.up, args.parallel)
            for key, value in result.outputs.items():
                print(f"{key}: {value!r}")
        exit_code = 0
    except RunError as e:
        log.error(str(e))
    except Exception:
        log.error("Program failed with an unhandled exception:\n" + traceback.format_exc())
        exit_code = PYTHON_PROCESS_EXITED_AFTER_SHOWING_USER_ACTIONABLE_MESSAGE_CODE
    finally:
        sys.stdout.flush()
        sys.stderr.flush()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
