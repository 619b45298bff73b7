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
Secret generation. The generated password is always a secret.
"""
import secrets
import string
from typing import List, Optional

from .output import Input, Output
from .provider import CreateArgs, CreateResult, Provider, ProviderContext
from .resource import CustomResource, ResourceOptions

DEFAULT_SPECIAL = "!@#$%&*()-_=+[]{}<>:?"

_random = secrets.SystemRandom()


def generate_password(
    length: int = 16,
    special: bool = True,
    override_special: Optional[str] = None,
) -> str:
    """
    Generates a password of `length` characters drawn from a cryptographically secure source. The password
    contains at least one lowercase letter, one uppercase letter, one digit and, when `special` is set, one
    special character.

    :raises ValueError: `length` is smaller than the number of required character classes.
    """
    classes: List[str] = [string.ascii_lowercase, string.ascii_uppercase, string.digits]
    if special:
        symbols = override_special if override_special is not None else DEFAULT_SPECIAL
        if not symbols:
            raise ValueError("override_special must not be empty when special characters are enabled")
        classes.append(symbols)
    if length < len(classes):
        raise ValueError(f"length must be at least {len(classes)}, got {length}")

    chars = [_random.choice(cls) for cls in classes]
    alphabet = "".join(classes)
    chars.extend(_random.choice(alphabet) for _ in range(length - len(chars)))
    _random.shuffle(chars)
    return "".join(chars)


class RandomPassword(CustomResource):
    """
    A random password. `result` is always secret. If `pinned` is given, it is used verbatim instead of a
    freshly generated password, so that reruns reproduce the same value.
    """

    def __init__(
        self,
        resource_name: str,
        length: Input[int] = 16,
        special: Input[bool] = True,
        override_special: Optional[Input[str]] = None,
        pinned: Optional[Input[str]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        opts = ResourceOptions.merge(opts, ResourceOptions(additional_secret_outputs=["result"]))
        super().__init__(
            "random:index:RandomPassword",
            resource_name,
            {
                "length": length,
                "special": special,
                "override_special": override_special,
                "pinned": pinned,
            },
            opts,
        )

    @property
    def result(self) -> Output[str]:
        return self.get_output("result")


class RandomProvider(Provider):
    """RandomProvider implements the `random` package locally."""

    def __init__(self) -> None:
        super().__init__("random", "0.1.0")

    def create(self, ctx: ProviderContext, args: CreateArgs) -> CreateResult:
        if args.type != "random:index:RandomPassword":
            raise ValueError(f"unknown resource type {args.type}")
        result = args.inputs.get("pinned")
        if result is None:
            result = generate_password(
                int(args.inputs.get("length", 16)),
                bool(args.inputs.get("special", True)),
                args.inputs.get("override_special"),
            )
        return CreateResult("none", {"result": result}, secret_outputs=["result"])
