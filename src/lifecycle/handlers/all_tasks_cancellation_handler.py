# lifecycle/handlers/all_tasks_cancellation_handler.py

import asyncio
from typing import List, Optional

from utils.logger import get_logger, LogCategory
from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AllTasksCancellationHandler(IShutdownHandler):
    """
    Cancels *all* tracked asyncio tasks (channel pumps, timers, keyboard)
    except the task running this handler and any explicitly excluded tasks.

    Priority: 30 (last)
    """

    shutdown_priority = 30

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        """
        Args:
            exclude_tasks: Tasks that should not be cancelled.
                           The current task is always excluded automatically.
        """
        self.exclude_tasks = exclude_tasks or []

    async def shutdown(self) -> None:
        current = asyncio.current_task()
        registry = TaskRegistry.instance()

        exclude = list(self.exclude_tasks)
        if current:
            exclude.append(current)

        tasks: List[asyncio.Task] = registry.get_tasks_for_shutdown(exclude=exclude)

        if not tasks:
            log.debug("AllTasksCancellationHandler: no tasks to cancel")
            return

        log.info(f"AllTasksCancellationHandler: cancelling {len(tasks)} background tasks")

        for t in tasks:
            t.cancel(msg="shutdown")
            log.debug(f"[AllTasksCancellation] Cancelled task: {t.get_name()}")

        await asyncio.gather(*tasks, return_exceptions=True)

        log.info("AllTasksCancellationHandler completed successfully.")
