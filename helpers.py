import asyncio
from typing import Any, Awaitable


async def gather_all(**reads: Awaitable[Any]) -> dict[str, Any]:
    """Run independent reads concurrently and wait for every one of them.

    Results come back keyed by the keyword each read was passed under. The
    first failure cancels the reads still in flight and is re-raised as the
    original exception, not wrapped in an ExceptionGroup.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = {name: tg.create_task(read) for name, read in reads.items()}
    except BaseExceptionGroup as group:
        raise group.exceptions[0]
    return {name: task.result() for name, task in tasks.items()}
