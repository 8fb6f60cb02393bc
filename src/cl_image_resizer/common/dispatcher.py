"""Dispatcher - hands pipeline runs from the event loop to a worker pool."""

import asyncio
import os
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Callable

from loguru import logger

from ..pipeline.pipeline import process
from ..utils.profiling import timed
from .concurrency_gate import ConcurrencyGate, ConcurrencyToken
from .encoding import Encoding
from .schemas import DEFAULT_CONCURRENCY_LIMIT, EncodeConfig, EncodedOutput, ResizeSpec

ProcessFn = Callable[[Path, ResizeSpec, Encoding, EncodeConfig], EncodedOutput]


class Dispatcher:
    """
    Runs the blocking pipeline off the event loop, behind a ConcurrencyGate.

    Responsibilities:
    - Acquires a gate token before any CPU work is scheduled
    - Executes the pipeline on a thread pool sized independently of the gate
    - Releases the token when the worker finishes, even if the awaiting
      request was cancelled in the meantime

    Example:
        dispatcher = Dispatcher(EncodeConfig(), concurrency_limit=50)
        output = await dispatcher.submit(path, ResizeToWidth(width=800), Encoding.AVIF)
        dispatcher.close()
    """

    def __init__(
        self,
        config: EncodeConfig,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        workers: int | None = None,
        process_fn: ProcessFn = process,
    ):
        """Initialize dispatcher.

        Args:
            config: Encoder settings shared by every run
            concurrency_limit: Maximum number of runs executing at once
            workers: Thread pool size. Defaults to min(concurrency_limit, cpu count).
            process_fn: Pipeline entry point, replaceable for tests
        """
        self.config: EncodeConfig = config
        self.gate: ConcurrencyGate = ConcurrencyGate(concurrency_limit)
        self.workers: int = workers if workers is not None else min(
            concurrency_limit, os.cpu_count() or 1
        )
        self._process: ProcessFn = process_fn
        self._executor: ThreadPoolExecutor = ThreadPoolExecutor(
            max_workers=self.workers,
            thread_name_prefix="resize-worker",
        )

    @timed("request")
    async def submit(
        self,
        source_path: str | Path,
        resize_spec: ResizeSpec,
        encoding: Encoding,
    ) -> EncodedOutput:
        """Run the pipeline for one request once capacity is available.

        Raises:
            NotFound: If the source cannot be opened or decoded
            FailedToResize: If resizing or encoding fails
        """
        token = await self.gate.acquire()
        loop = asyncio.get_running_loop()

        try:
            future = loop.run_in_executor(
                self._executor,
                self._process,
                Path(source_path),
                resize_spec,
                encoding,
                self.config,
            )
        except BaseException:
            token.release()
            raise

        future.add_done_callback(partial(_release_when_done, token))

        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            logger.debug(f"request for {Path(source_path).name} cancelled, result will be discarded")
            raise

    def close(self) -> None:
        """Stop accepting work and wait for running workers."""
        self._executor.shutdown(wait=True, cancel_futures=True)


def _release_when_done(token: ConcurrencyToken, future: "asyncio.Future[EncodedOutput]") -> None:
    token.release()
    # Mark the outcome as retrieved when nobody awaits it any more
    if not future.cancelled():
        _ = future.exception()
