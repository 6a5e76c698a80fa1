"""Single-worker FIFO scheduler handed to the host for each interpreter."""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable


class FIFOScheduler:
    """Runs submitted jobs one at a time, in submission order."""

    def __init__(self, name: str):
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        return self._executor.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
