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
import asyncio
from typing import Awaitable, List, Optional

from .. import log
from . import settings


class TaskManager:
    """
    TaskManager is responsible for keeping track of the async tasks that are dispatched
    throughout the course of a provisioning run, including tasks created while it is waiting.
    """

    tasks: List["asyncio.Future"]
    """
    The tasks that have not been awaited yet.
    """

    def __init__(self):
        self.clear()

    def create_task(self, coro: Awaitable, name: Optional[str] = None) -> "asyncio.Future":
        """
        Schedules `coro` on the event loop and tracks it until `wait_all` has awaited it.

        :param coro: The coroutine
        :param name: The name of this task, to be used for logging
        :return: The task
        """
        fut = asyncio.ensure_future(coro)
        if name is not None and settings.excessive_debug_output:
            log.debug(f"scheduled task {name}")
        self.tasks.append(fut)
        return fut

    async def wait_all(self) -> None:
        """
        Waits until every tracked task is done. Tasks created while waiting are waited for as well.
        """
        while self.tasks:
            # Pump the event loop so that freshly queued tasks get to run before we block.
            await asyncio.sleep(0)
            if settings.excessive_debug_output:
                log.debug(f"waiting for quiescence; {len(self.tasks)} tasks outstanding")

            # Prefer a task that is already done, so a quick failure surfaces before a long running task.
            task = next((t for t in self.tasks if t.done()), self.tasks[0])
            self.tasks.remove(task)
            await task

        log.debug("All outstanding tasks completed.")

    def clear(self) -> None:
        """Clears any tracked state. For use in testing to ensure test isolation."""
        self.tasks = []
