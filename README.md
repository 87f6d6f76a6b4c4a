# mmrlogger

A file logger that writes timestamped lines to `<dir>/<name>.log`. Once the
file grows past a size limit, it is rotated. A fixed number of older files
is kept: `<name>.log.1` … `<name>.log.N`, where `.1` is the newest.

It can write in two ways:

- **synchronous**: every call is written to the file and flushed at once.
- **asynchronous**: calls fill an in-memory buffer. A background thread
  writes the buffer out when it is nearly full (1 MiB buffers), at least
  every five seconds, and on close.

## Installation

```
pip install .
```

No third-party libraries are needed.

## Usage

```python
from mmrlogger.logger import Logger, LogLevel

with Logger(file_num=10, file_size_mb=16, asynchronous=True,
            log_dir="logs", log_name="app") as log:
    log.log_info("service started on port %d", 8080)
    log.log_error("could not open %s", "data.bin")
```

`Logger.close()` does three things:

- flushes anything still buffered;
- stops the writer thread;
- closes the file.

Leaving the `with` block calls it for you. Logging after the logger is closed
raises `ValueError`.

The logger prints a short notice to standard output when it is created and
another when it is closed. When it starts it writes a `start` line to the log,
and in asynchronous mode a `stop` line on close.

### Line format

Each line begins with `YYYY-MM-DD HH:MM:SS.mmm ` in local time, then the
message. Messages use printf-style `%` formatting. The formatted message is
encoded as UTF-8 and cut off at 2048 bytes.

### Levels

The levels, from most to least severe, are `FORCE`, `FATAL`, `ERROR`, `WARN`,
`INFO` and `DEBUG`. `LogLevel` also has `OFF`. Each level has a matching
method, such as `log_force` or `log_debug`.

A call is written only if its level is at or above the threshold in
`Logger.level`. The default threshold is `LogLevel.DEBUG`, so every call is
written. Setting `LogLevel.OFF` silences the level methods. `log_write` writes
whatever the threshold is.

### Where the log goes

If `log_dir` or `log_name` is not given, the log goes to a `log` directory
next to the running program. The log name is the program's file name without
its extension. The directory is created if it does not exist.

Read-only properties:

| Property        | Meaning                                      |
|-----------------|----------------------------------------------|
| `file_path`     | the file being written                       |
| `file_max_num`  | how many rotated files are kept              |
| `file_max_size` | the rotation threshold, in bytes             |

### Shared instance

`mmrlogger.singleton.Singleton` holds at most one instance of a class:

- `init_instance(...)` creates the instance on the first call. Later calls
  return the same instance.
- `get_instance()` returns the instance, or `None` if there is none.
- `destroy_instance()` closes the instance and drops it.

`mmrlogger.logger.logger_singleton` is such a holder for `Logger`. The
module-level helpers `force`, `fatal`, `error`, `warn`, `info` and `debug`
write through it. They raise `RuntimeError` if it has not been initialised.

Each line from a helper is prefixed as
`[<thread id>][<level letter>][<calling function>][<line>]`. With
`echo=True`, `force`, `fatal`, `error` and `warn` also print the line to
standard output.

```python
from mmrlogger.logger import logger_singleton, warn

logger_singleton.init_instance(10, 16, False, "logs", "app")
warn("disk usage at %d%%", 91, echo=True)
logger_singleton.destroy_instance()
```

### Helpers

`mmrlogger.timecounter.TimeCounter` measures the time elapsed since it was
created or last `reset()`. It reports whole hours, minutes, seconds,
milliseconds, microseconds or nanoseconds.

`mmrlogger.common` provides:

- `thread_id()` and `process_id()`;
- `cut_function_name()`, which reduces a full signature to its name;
- `app_path_and_name()`, which returns the running program's directory and name.

## Benchmark

```
mmrlogger-bench
```

This writes many lines in three runs. Each run reports its time in
microseconds.

1. Synchronously.
2. Asynchronously from one thread.
3. Asynchronously from several threads at once.

Each run uses the shared logger, with 10 files of 16 MB each. The runs write
to the `log` directory next to the command.

Options:

| Option          | Meaning                                                            |
|-----------------|--------------------------------------------------------------------|
| `--count N`     | lines written per run (default 400000); shared out among threads in the last run |
| `--threads N`   | writer threads in the last run (default 2)                         |
| `--no-wait`     | do not wait for Enter between runs                                 |

The same runs are available as `run_sync`, `run_async` and `run_threaded` in
`mmrlogger.main`.