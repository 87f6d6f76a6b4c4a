import re
import sys
import threading
from pathlib import Path

import pytest

from mmrlogger.logger import (
    LogLevel,
    Logger,
    debug,
    error,
    fatal,
    force,
    info,
    logger_singleton,
    warn,
)

STAMP = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} ")


def read_lines(path):
    with open(path, "rb") as handle:
        return handle.read().decode("utf-8").splitlines()


def body(line):
    return line[24:]


@pytest.fixture
def shared(tmp_path):
    logger = logger_singleton.init_instance(
        10, 16, False, str(tmp_path), "shared"
    )
    try:
        yield logger
    finally:
        logger_singleton.destroy_instance()


def test_sync_lines_have_timestamp_and_message(tmp_path):
    with Logger(3, 1, False, str(tmp_path), "app") as log:
        log.log_info("value is %d!", 42)
        path = log.file_path
    lines = read_lines(path)
    assert len(lines) == 2
    assert all(STAMP.match(line) for line in lines)
    assert "----------------- start -----------------" in lines[0]
    assert body(lines[1]) == "value is 42!"


def test_sync_writes_no_stop_line(tmp_path):
    log = Logger(3, 1, False, str(tmp_path), "app")
    log.log_write("only")
    log.close()
    lines = read_lines(tmp_path / "app.log")
    assert not any("stop" in line for line in lines)
    assert body(lines[-1]) == "only"


def test_async_flushes_everything_on_close(tmp_path):
    log = Logger(3, 16, True, str(tmp_path), "async")
    for i in range(100):
        log.log_debug("record %d", i)
    log.close()
    lines = read_lines(tmp_path / "async.log")
    assert "----------------- start -----------------" in lines[0]
    assert "----------------- stop -----------------" in lines[-1]
    assert [body(line) for line in lines[1:-1]] == [f"record {i}" for i in range(100)]


def test_async_many_threads_keep_every_record(tmp_path):
    log = Logger(3, 16, True, str(tmp_path), "threads")

    def work(n):
        for i in range(200):
            log.log_force("worker %d item %d", n, i)

    workers = [threading.Thread(target=work, args=(n,)) for n in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    log.close()
    lines = read_lines(tmp_path / "threads.log")
    records = [body(line) for line in lines if "worker" in line]
    assert len(records) == 800
    for n in range(4):
        mine = [r for r in records if r.startswith(f"worker {n} ")]
        assert mine == [f"worker {n} item {i}" for i in range(200)]


def test_message_truncated_to_max_length(tmp_path):
    with Logger(3, 16, False, str(tmp_path), "long") as log:
        log.log_write("%s", "x" * 3000)
    line = read_lines(tmp_path / "long.log")[-1]
    assert body(line) == "x" * 2048


def test_level_filtering(tmp_path):
    with Logger(3, 16, False, str(tmp_path), "lvl") as log:
        log.level = LogLevel.WARN
        log.log_debug("debug")
        log.log_info("info")
        log.log_warn("warn")
        log.log_error("error")
        log.log_fatal("fatal")
        log.log_force("force")
    bodies = [body(line) for line in read_lines(tmp_path / "lvl.log")[1:]]
    assert bodies == ["warn", "error", "fatal", "force"]


def test_log_write_ignores_off_level(tmp_path):
    with Logger(3, 16, False, str(tmp_path), "off") as log:
        log.level = LogLevel.OFF
        log.log_force("hidden")
        log.log_write("shown")
    bodies = [body(line) for line in read_lines(tmp_path / "off.log")[1:]]
    assert bodies == ["shown"]


def test_rotation_keeps_newest_files(tmp_path):
    with Logger(3, 0, False, str(tmp_path), "rot") as log:
        for i in range(5):
            log.log_write("m%d", i)
    base = tmp_path / "rot.log"
    assert [body(line) for line in read_lines(f"{base}.1")] == ["m4"]
    assert [body(line) for line in read_lines(f"{base}.2")] == ["m3"]
    assert [body(line) for line in read_lines(f"{base}.3")] == ["m2"]
    assert not (tmp_path / "rot.log.4").exists()
    assert base.read_bytes() == b""


def test_properties_and_defaults(tmp_path):
    with Logger(log_dir=str(tmp_path), log_name="d", asynchronous=False) as log:
        assert log.file_max_num == 10
        assert log.file_max_size == 16 * 1024 * 1024
        assert log.level is LogLevel.DEBUG
        assert log.file_path == str(tmp_path / "d.log")


def test_default_location_from_program(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "prog.py")])
    with Logger(asynchronous=False) as log:
        log.log_write("here")
        path = log.file_path
    assert Path(path) == tmp_path / "log" / "prog.log"
    lines = read_lines(path)
    assert body(lines[-1]) == "here"


def test_construct_and_destruct_messages(tmp_path, capsys):
    log = Logger(3, 1, False, str(tmp_path), "msg")
    log.close()
    out = capsys.readouterr().out
    assert "Logger instance construct: file number[3] file size [1 Mb]" in out
    assert "Logger instance destruct." in out


def test_write_after_close_raises(tmp_path):
    with Logger(3, 16, False, str(tmp_path), "closed") as log:
        pass
    with pytest.raises(ValueError):
        log.log_write("late")


def test_bad_format_arguments_raise(tmp_path):
    with Logger(3, 16, False, str(tmp_path), "fmt") as log:
        with pytest.raises(TypeError):
            log.log_write("%d", "abc")


def test_log_appends_to_existing_file(tmp_path):
    (tmp_path / "old.log").write_bytes(b"previous\n")
    with Logger(3, 16, False, str(tmp_path), "old") as log:
        log.log_write("new")
    lines = read_lines(tmp_path / "old.log")
    assert lines[0] == "previous"
    assert body(lines[-1]) == "new"


def test_force_prefixes_call_site(shared):
    force("hello %d", 5)
    line = read_lines(shared.file_path)[-1]
    assert "[A][test_force_prefixes_call_site][" in line
    assert line.endswith("]hello 5")


def test_level_tags(shared):
    fatal("f")
    error("e")
    warn("w")
    info("i")
    debug("d")
    tags = [re.match(r"\[\d+\]\[(\w)\]", body(line)).group(1)
            for line in read_lines(shared.file_path)[1:]]
    assert tags == ["F", "E", "W", "I", "D"]


def test_shared_level_filters_debug(shared):
    shared.level = LogLevel.INFO
    debug("dropped")
    info("kept")
    bodies = [body(line) for line in read_lines(shared.file_path)[1:]]
    assert len(bodies) == 1
    assert bodies[0].endswith("kept")


def test_echo_prints_message(shared, capsys):
    capsys.readouterr()
    error("echoed %s", "text", echo=True)
    out = capsys.readouterr().out
    assert "[E][test_echo_prints_message][" in out
    assert out.endswith("]echoed text\n")


def test_shared_functions_require_instance():
    logger_singleton.destroy_instance()
    with pytest.raises(RuntimeError):
        force("nothing")