"""Throughput benchmark for the logger in synchronous, asynchronous and threaded modes."""

from __future__ import annotations

import argparse
import threading
from collections.abc import Sequence

from .logger import force, logger_singleton
from .timecounter import TimeCounter

FILE_NUM = 10
FILE_SIZE_MB = 16
DEFAULT_COUNT = 400_000
DEFAULT_THREADS = 2

_LONG_TEXT = (
    "a looooooooooooooooooooooooooooooooooooooooooooooooooooooooog string, i value is %d!"
)
_SYNC_FORMAT = "syn log test. " + _LONG_TEXT
_ASYNC_FORMAT = "asyn log test. " + _LONG_TEXT
_THREAD_FORMAT = "multi thread log test. " + _LONG_TEXT


def run_sync(count: int = DEFAULT_COUNT) -> int:
    """Write ``count`` records synchronously; return the time taken in microseconds."""
    print("syn log test...")
    logger_singleton.init_instance(FILE_NUM, FILE_SIZE_MB, False)
    try:
        counter = TimeCounter()
        for i in range(count):
            force(_SYNC_FORMAT, i)
        elapsed = counter.elapsed_micro()
        print(f"syn write log time cost {elapsed} us")
    finally:
        logger_singleton.destroy_instance()
    return elapsed


def run_async(count: int = DEFAULT_COUNT) -> int:
    """Write ``count`` records through the background writer; return microseconds taken."""
    print("asyn log test...")
    logger_singleton.init_instance(FILE_NUM, FILE_SIZE_MB, True)
    try:
        counter = TimeCounter()
        for i in range(count):
            force(_ASYNC_FORMAT, i)
        elapsed = counter.elapsed_micro()
        print(f"sigle thread asyn write log time cost {elapsed} us")
    finally:
        logger_singleton.destroy_instance()
    return elapsed


def run_threaded(threads: int = DEFAULT_THREADS, count: int = DEFAULT_COUNT // 2) -> int:
    """Let ``threads`` threads each write ``count`` records at once; return microseconds taken."""
    if threads < 1:
        raise ValueError(f"need at least one thread, got {threads}")
    print("multi thread log test...")
    logger_singleton.init_instance(FILE_NUM, FILE_SIZE_MB, True)
    try:
        start = threading.Event()

        def worker() -> None:
            start.wait()
            print("write log start!")
            for i in range(count):
                force(_THREAD_FORMAT, i)

        workers = [threading.Thread(target=worker) for _ in range(threads)]
        for thread in workers:
            thread.start()
        start.set()
        counter = TimeCounter()
        for thread in workers:
            thread.join()
        elapsed = counter.elapsed_micro()
        print(f"multi thread asyn write log time cost {elapsed} us")
    finally:
        logger_singleton.destroy_instance()
    return elapsed


def _pause(prompt: str) -> None:
    print(prompt)
    try:
        input()
    except EOFError:
        pass


def main(argv: Sequence[str] | None = None) -> int:
    """Run the three benchmarks one after another."""
    parser = argparse.ArgumentParser(description="Measure logger write throughput.")
    parser.add_argument(
        "--count", type=int, default=DEFAULT_COUNT, help="records written per benchmark"
    )
    parser.add_argument(
        "--threads", type=int, default=DEFAULT_THREADS, help="writer threads in the last run"
    )
    parser.add_argument(
        "--no-wait", action="store_true", help="do not wait for Enter between runs"
    )
    options = parser.parse_args(argv)
    if options.threads < 1:
        parser.error("--threads must be at least 1")

    print("log write test...")
    run_sync(options.count)
    if not options.no_wait:
        _pause("Press Enter to continue...")
    run_async(options.count)
    if not options.no_wait:
        _pause("Press Enter to continue...")
    run_threaded(options.threads, options.count // options.threads)
    if not options.no_wait:
        _pause("Press Enter to exit...")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())