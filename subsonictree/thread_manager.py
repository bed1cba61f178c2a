#!/usr/bin/env python3

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional
import logging
import threading


def completed_future(value: Any) -> Future:
    """Return a future that is already resolved with ``value``."""
    future: Future = Future()
    future.set_result(value)
    return future


def failed_future(exc: BaseException) -> Future:
    """Return a future that is already resolved with ``exc``."""
    future: Future = Future()
    future.set_exception(exc)
    return future


class ThreadManager:
    """
    Centralized owner of the thread pools that run data source calls.

    Every submitted call yields a ``concurrent.futures.Future``; the pools are
    shut down together when the manager is closed.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the ThreadManager.

        Args:
            logger: Logger instance for logging thread-related operations.
        """
        self.logger = logger or logging.getLogger("ThreadManager")

        self._pools: Dict[str, ThreadPoolExecutor] = {}
        self._default_configs = {
            "api": {"max_workers": 4, "thread_name_prefix": "api_pool"},
        }
        self._pools_lock = threading.RLock()
        self._shutdown = False

        self._active_tasks = 0
        self._active_tasks_lock = threading.Lock()

        self.logger.debug("ThreadManager initialized")

    def get_pool(self, pool_name: str, **kwargs) -> ThreadPoolExecutor:
        """
        Get or lazily create the named thread pool.

        Args:
            pool_name: Name of the thread pool.
            **kwargs: Overrides for ``max_workers`` or ``thread_name_prefix``.

        Returns:
            The requested ThreadPoolExecutor instance.
        """
        with self._pools_lock:
            if self._shutdown:
                raise RuntimeError("ThreadManager has been shut down")
            if pool_name in self._pools:
                return self._pools[pool_name]

            config = self._default_configs.get(pool_name, {}).copy()
            config.update(kwargs)
            max_workers = config.pop("max_workers", 4)
            thread_name_prefix = config.pop("thread_name_prefix", f"{pool_name}_pool")

            self.logger.debug(
                f"Creating thread pool '{pool_name}' with {max_workers} workers"
            )
            pool = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix=thread_name_prefix
            )
            self._pools[pool_name] = pool
            return pool

    def submit_task(self, pool_name: str, fn: Callable, *args, **kwargs) -> Future:
        """
        Submit a call to the named pool and track it until it completes.

        Returns:
            Future representing the submitted call.
        """
        pool = self.get_pool(pool_name)

        with self._active_tasks_lock:
            self._active_tasks += 1

        future = pool.submit(fn, *args, **kwargs)
        future.add_done_callback(self._task_done_callback)
        return future

    def _task_done_callback(self, future: Future) -> None:
        with self._active_tasks_lock:
            self._active_tasks -= 1

        if not future.cancelled() and future.exception() is not None:
            self.logger.debug(f"Task finished with exception: {future.exception()!r}")

    def get_active_tasks(self) -> int:
        with self._active_tasks_lock:
            return self._active_tasks

    def shutdown(self, wait: bool = True) -> None:
        """
        Shut down every pool owned by this manager.

        Args:
            wait: Whether to wait for running calls to finish.
        """
        with self._pools_lock:
            if self._shutdown:
                return
            self._shutdown = True
            self.logger.info(f"Shutting down ThreadManager (wait={wait})")
            for pool_name, pool in self._pools.items():
                self.logger.debug(f"Shutting down '{pool_name}' thread pool")
                pool.shutdown(wait=wait)
            self._pools.clear()
