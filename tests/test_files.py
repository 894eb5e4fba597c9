import pytest

from idiomkit.files import (
    FileException,
    FileHandle,
    FileHandler,
    FileMode,
    LineIterator,
    main,
)


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_bytes("alpha\nbeta\ngamma\n".encode("utf-8"))
    return path


def test_write_then_read_round_trip(tmp_path):
    path = tmp_path / "out.txt"
    with FileHandler(str(path), FileMode.WRITE) as writer:
        writer.write("hello ")
        writer.write_line("world")
    with FileHandler(str(path), FileMode.READ) as reader:
        assert reader.read() == "hello world\n"


def test_unicode_round_trip(tmp_path):
    path = tmp_path / "u.txt"
    text = "第一行\n第二行\n"
    with FileHandler(str(path), FileMode.WRITE) as writer:
        writer.write(text)
    with FileHandler(str(path), FileMode.READ) as reader:
        assert reader.read() == text


def test_read_lines_drops_newlines(sample):
    with FileHandler(str(sample), FileMode.READ) as reader:
        assert reader.read_lines() == ["alpha", "beta", "gamma"]


def test_read_lines_keeps_last_line_without_newline_and_blank_lines(tmp_path):
    path = tmp_path / "x.txt"
    path.write_bytes(b"a\n\nb")
    with FileHandler(str(path), FileMode.READ) as reader:
        assert reader.read_lines() == ["a", "", "b"]


def test_read_lines_of_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    with FileHandler(str(path), FileMode.READ) as reader:
        assert reader.read_lines() == []


def test_read_is_repeatable(sample):
    with FileHandler(str(sample), FileMode.READ) as reader:
        first = reader.read()
        assert reader.read() == first
        assert first == sample.read_text(encoding="utf-8")


def test_read_restores_position(sample):
    with FileHandler(str(sample), FileMode.READ) as reader:
        reader.handle.raw.seek(3)
        reader.read()
        assert reader.handle.raw.tell() == 3


def test_read_mode_missing_file_raises(tmp_path):
    with pytest.raises(FileException):
        FileHandler(str(tmp_path / "missing.txt"), FileMode.READ)


def test_read_write_mode_missing_file_raises(tmp_path):
    with pytest.raises(FileException):
        FileHandler(str(tmp_path / "missing.txt"))


def test_write_mode_truncates(sample):
    with FileHandler(str(sample), FileMode.WRITE) as writer:
        writer.write("new")
    assert sample.read_bytes() == b"new"


def test_append_mode_appends(sample):
    original = sample.read_bytes()
    with FileHandler(str(sample), FileMode.APPEND) as appender:
        appender.write_line("delta")
    assert sample.read_bytes() == original + b"delta\n"


def test_write_in_read_mode_raises(sample):
    with FileHandler(str(sample), FileMode.READ) as reader:
        with pytest.raises(FileException):
            reader.write("nope")


def test_read_in_write_mode_raises(tmp_path):
    with FileHandler(str(tmp_path / "w.txt"), FileMode.WRITE) as writer:
        with pytest.raises(FileException):
            writer.read()


def test_read_write_mode_overwrites_from_start(sample):
    with FileHandler(str(sample)) as handler:
        handler.write("ALPHA")
        assert handler.read_lines() == ["ALPHA", "beta", "gamma"]


def test_context_manager_closes(sample):
    with FileHandler(str(sample), FileMode.READ) as reader:
        assert reader.is_open()
    assert not reader.is_open()


def test_operations_after_close_raise(sample):
    handler = FileHandler(str(sample), FileMode.READ)
    handler.close()
    with pytest.raises(FileException):
        handler.read()


def test_take_transfers_ownership(sample):
    original = FileHandler(str(sample), FileMode.READ)
    moved = original.take()
    try:
        assert moved.is_open()
        assert not original.is_open()
        assert moved.filepath == str(sample)
        assert original.handle is None
        assert moved.read_lines() == ["alpha", "beta", "gamma"]
        with pytest.raises(FileException):
            original.read()
    finally:
        moved.close()


def test_file_handle_close_and_raw(sample):
    handle = FileHandle(str(sample), FileMode.READ)
    assert handle.is_open()
    assert handle.raw.read() == sample.read_bytes()
    handle.close()
    assert not handle.is_open()
    assert handle.raw.closed


def test_file_handle_missing_file_raises(tmp_path):
    with pytest.raises(FileException):
        FileHandle(str(tmp_path / "missing.txt"), FileMode.READ)


def test_line_iterator_yields_all_lines(sample):
    with FileHandler(str(sample), FileMode.READ) as reader:
        assert list(LineIterator(reader)) == reader.read_lines()


def test_line_iterator_exhaustion(sample):
    with FileHandler(str(sample), FileMode.READ) as reader:
        iterator = LineIterator(reader)
        assert iterator.has_next()
        for _ in range(3):
            next(iterator)
        assert not iterator.has_next()
        with pytest.raises(StopIteration):
            next(iterator)


def test_main_creates_test_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert len((tmp_path / "test.txt").read_text(encoding="utf-8").splitlines()) == 4
    assert not (tmp_path / "non_existent_file.txt").exists()
    assert "non_existent_file.txt" in capsys.readouterr().out