import io
import threading
from datetime import datetime

import pytest

from idiomkit.logger import (
    BufferedOutput,
    ConsoleOutput,
    FileOutput,
    LevelFilter,
    Logger,
    LogLevel,
    buffered_logger,
    console_logger,
    file_logger,
    level_label,
    log_container,
    main,
    simple_format,
    thread_format,
    timestamp_format,
)


def _buffered(**kwargs):
    output = BufferedOutput()
    return Logger(simple_format, output, **kwargs), output


def test_simple_format_is_identity():
    assert simple_format("hello") == "hello"


def test_level_label_info():
    assert level_label(LogLevel.INFO) == "[INFO] "


def test_level_labels_are_distinct():
    labels = {level_label(level) for level in LogLevel}
    assert len(labels) == len(LogLevel)


def test_level_label_unknown_value():
    assert level_label(99) not in {level_label(level) for level in LogLevel}


def test_levels_are_ordered():
    level_filter = LevelFilter(LogLevel.INFO)
    results = [
        level_filter.should_log(level)
        for level in (
            LogLevel.DEBUG,
            LogLevel.INFO,
            LogLevel.WARNING,
            LogLevel.ERROR,
            LogLevel.FATAL,
        )
    ]
    assert results == [False, True, True, True, True]


def test_timestamp_format_shape():
    result = timestamp_format("msg")
    stamp = datetime.strptime(result[1:20], "%Y-%m-%d %H:%M:%S")
    assert result[0] == "["
    assert result[20:] == "] msg"
    assert abs((datetime.now() - stamp).total_seconds()) < 5


def test_thread_format_contains_thread_id():
    result = thread_format("msg")
    assert str(threading.get_ident()) in result
    assert result.endswith("msg")


def test_logger_writes_label_and_message():
    logger, output = _buffered()
    logger.info("hello")
    assert output.buffer == (level_label(LogLevel.INFO) + "hello",)


def test_each_convenience_method_uses_its_level():
    logger, output = _buffered()
    logger.debug("m")
    logger.info("m")
    logger.warning("m")
    logger.error("m")
    logger.fatal("m")
    assert list(output.buffer) == [level_label(level) + "m" for level in LogLevel]


def test_level_filter_drops_lower_levels():
    output = BufferedOutput()
    logger = Logger(simple_format, output, False, LevelFilter(LogLevel.WARNING))
    logger.debug("a")
    logger.info("b")
    logger.warning("c")
    logger.error("d")
    assert output.buffer == (
        level_label(LogLevel.WARNING) + "c",
        level_label(LogLevel.ERROR) + "d",
    )


def test_level_filter_should_log():
    level_filter = LevelFilter(LogLevel.ERROR)
    assert level_filter.should_log(LogLevel.FATAL)
    assert level_filter.should_log(LogLevel.ERROR)
    assert not level_filter.should_log(LogLevel.WARNING)


def test_default_filter_lets_everything_through():
    assert all(LevelFilter().should_log(level) for level in LogLevel)


def test_console_output_writes_line():
    stream = io.StringIO()
    ConsoleOutput(stream).write("line")
    assert stream.getvalue() == "line\n"


def test_console_logger_writes_to_stream():
    stream = io.StringIO()
    console_logger(stream).warning("careful")
    assert stream.getvalue() == level_label(LogLevel.WARNING) + "careful\n"


def test_file_output_appends(tmp_path):
    path = tmp_path / "out.log"
    with FileOutput(str(path)) as first:
        first.write("one")
    with FileOutput(str(path)) as second:
        second.write("two")
    assert path.read_text(encoding="utf-8").splitlines() == ["one", "two"]


def test_file_output_ignores_writes_after_close(tmp_path):
    path = tmp_path / "out.log"
    output = FileOutput(str(path))
    output.write("kept")
    output.close()
    output.write("dropped")
    assert path.read_text(encoding="utf-8").splitlines() == ["kept"]


def test_file_output_unopenable_path_raises(tmp_path):
    with pytest.raises(OSError):
        FileOutput(str(tmp_path / "missing" / "out.log"))


def test_file_logger_writes_timestamped_lines(tmp_path):
    path = tmp_path / "app.log"
    logger = file_logger(str(path))
    logger.info("stored")
    logger.output.close()
    (line,) = path.read_text(encoding="utf-8").splitlines()
    assert line.endswith(level_label(LogLevel.INFO) + "stored")
    assert line.startswith("[")


def test_buffered_output_clear():
    output = BufferedOutput()
    output.write("a")
    output.write("b")
    assert len(output.buffer) == 2
    output.clear()
    assert output.buffer == ()


def test_buffered_output_dump_to_stream():
    output = BufferedOutput()
    output.write("a")
    output.write("b")
    stream = io.StringIO()
    output.dump(stream)
    assert stream.getvalue().splitlines() == ["a", "b"]


def test_buffered_output_dump_to_file_round_trip(tmp_path):
    output = BufferedOutput()
    for message in ("first", "second", "third"):
        output.write(message)
    path = tmp_path / "dump.log"
    output.dump_to_file(str(path))
    assert tuple(path.read_text(encoding="utf-8").splitlines()) == output.buffer


def test_buffered_logger_tags_thread():
    logger = buffered_logger()
    logger.error("boom")
    (entry,) = logger.output.buffer
    assert str(threading.get_ident()) in entry
    assert entry.endswith(level_label(LogLevel.ERROR) + "boom")


def test_thread_safe_logger_keeps_every_message():
    logger, output = _buffered(thread_safe=True)

    def work(n):
        for i in range(50):
            logger.info(f"{n}-{i}")

    threads = [threading.Thread(target=work, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(output.buffer) == 200
    assert len(set(output.buffer)) == 200


def test_log_container_sequence():
    logger, output = _buffered()
    log_container(logger, [1, 2, 3])
    label = level_label(LogLevel.INFO)
    assert len(output.buffer) == 4
    assert list(output.buffer[1:]) == [label + "  1", label + "  2", label + "  3"]


def test_log_container_mapping():
    logger, output = _buffered()
    log_container(logger, {"a": 1, "b": 2})
    label = level_label(LogLevel.INFO)
    assert list(output.buffer[1:]) == [label + "  a -> 1", label + "  b -> 2"]


def test_log_container_empty_logs_only_header():
    logger, output = _buffered()
    log_container(logger, [])
    assert len(output.buffer) == 1


def test_main_writes_log_files(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert len((tmp_path / "example.log").read_text(encoding="utf-8").splitlines()) == 2
    assert len((tmp_path / "buffer_dump.log").read_text(encoding="utf-8").splitlines()) == 3
    assert "Thread 3" in capsys.readouterr().out