# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import functools
import logging
import os
import time

import psutil

BENCHMARK_LOGGING_LEVEL = 5

logger = logging.getLogger(__name__)
logging.addLevelName(BENCHMARK_LOGGING_LEVEL, "BENCHMARK")


def getRSS():
    return psutil.Process(os.getpid()).memory_info().rss


class Benchmark:
    """ Context manager that reports how long a piece of code takes to run. """

    nesting: list[str] = []

    def __init__(self, name: str):
        self.name = name
        self.startTime = 0.0
        self.startBytes = 0

    def __enter__(self):
        # Skip the RSS probe unless someone is listening at benchmark level
        self.measureMemory = logger.isEnabledFor(BENCHMARK_LOGGING_LEVEL)
        Benchmark.nesting.append(self.name)
        self.startBytes = getRSS() if self.measureMemory else 0
        self.startTime = time.perf_counter()
        return self

    def __exit__(self, exc_type=None, exc_value=None, traceback=None):
        ms = 1000 * (time.perf_counter() - self.startTime)
        kb = (getRSS() - self.startBytes) // 1024 if self.measureMemory else 0

        description = "/".join(Benchmark.nesting)
        if exc_type:
            description += f" (EXCEPTION RAISED! {exc_type.__name__})"
        logger.log(BENCHMARK_LOGGING_LEVEL, f"{ms:8.1f} ms {kb:6,d}K {description}")

        Benchmark.nesting.pop()
        self.startTime = 0.0


def benchmark(func):
    """ Function decorator that reports how long the function takes to run. """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with Benchmark(func.__qualname__):
            return func(*args, **kwargs)
    return wrapper
