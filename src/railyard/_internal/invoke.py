"""Invoke helpers — call sync or async handlers uniformly.

Controller actions and mounted handlers can be ``def`` or ``async def``.
Any code that calls one must handle both cases. This module provides a
single helper so the sync/async check lives in exactly one place.

Usage::

    from railyard._internal.invoke import invoke

    result = await invoke(action)
    result = await invoke(action, offload=True)  # sync work in a worker thread
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, offload: bool = False, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    With ``offload=True``, plain functions run in anyio's worker thread
    pool so a blocking action does not stall the event loop. Coroutine
    functions are always awaited on the calling loop.
    """
    if offload and not inspect.iscoroutinefunction(handler):
        result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    else:
        result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
