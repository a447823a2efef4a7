import threading
from datetime import datetime
from pathlib import Path

import pytest

from logwrap.errors import InvalidFilenameError
from logwrap.session import SessionState
from logwrap.store.discovery import read_records
from logwrap.store.writer import FileLogWriter, default_log_directory, log_file_name

WHEN = datetime(2024, 1, 2, 3, 4, 5)


def _writer(tmp_path: Path, session_id: int = 1234) -> FileLogWriter:
    state = SessionState(clock=lambda: session_id)
    state.enable()
    return FileLogWriter(state, directory_resolver=lambda: tmp_path / "default", now=lambda: WHEN)


def test_log_file_name_with_and_without_session() -> None:
    assert log_file_name("req", 1700000000000) == "req_1700000000000.log"
    assert log_file_name("req", None) == "req_NO_SESSION.log"


def test_append_uses_default_directory_when_unset(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    result = writer.append("req", "hdr", "body")

    assert result.ok
    assert result.path == tmp_path / "default" / "req_1234.log"
    assert result.path.read_text(encoding="utf-8").startswith("hdr at 2024-01-02 03:04:05\n")


def test_append_prefers_configured_directory(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    writer.state.set_output_directory(tmp_path / "nested" / "deeper")
    result = writer.append("req", "hdr", "body")

    assert result.path == tmp_path / "nested" / "deeper" / "req_1234.log"
    assert result.path.is_file()
    assert not (tmp_path / "default").exists()


def test_two_argument_append_uses_filename_as_header(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    result = writer.append("events", "something happened")

    records = read_records(result.path)
    assert records[0].header == "events"
    assert records[0].content == "something happened"


def test_session_is_read_at_call_time(tmp_path: Path) -> None:
    ids = iter([10, 20])
    state = SessionState(clock=lambda: next(ids))
    writer = FileLogWriter(state, directory_resolver=lambda: tmp_path)

    state.enable()
    first = writer.append("req", "a", "1")
    state.disable()
    no_session = writer.append("req", "b", "2")
    state.enable()
    second = writer.append("req", "c", "3")

    assert [first.path.name, no_session.path.name, second.path.name] == [
        "req_10.log",
        "req_NO_SESSION.log",
        "req_20.log",
    ]


def test_sequential_records_are_complete_and_ordered(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    for idx in range(25):
        writer.append("seq", f"h{idx}", f"content {idx}")

    records = read_records(tmp_path / "default" / "seq_1234.log")
    assert [(r.header, r.content) for r in records] == [(f"h{idx}", f"content {idx}") for idx in range(25)]


def test_concurrent_appends_do_not_interleave(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    threads_count, per_thread = 12, 15
    barrier = threading.Barrier(threads_count)

    def work(worker: int) -> None:
        barrier.wait()
        for idx in range(per_thread):
            body = "\n".join(f"{worker}-{idx}-{line}" * 20 for line in range(30))
            writer.append("shared", f"worker-{worker}", body)

    threads = [threading.Thread(target=work, args=(n,)) for n in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    records = read_records(tmp_path / "default" / "shared_1234.log")
    assert len(records) == threads_count * per_thread
    for record in records:
        worker = int(record.header.split("-")[1])
        lines = record.content.split("\n")
        assert len(lines) == 30
        prefix = f"{worker}-"
        assert all(line.startswith(prefix) for line in lines)
        idx = lines[0].split("-")[1]
        assert all(line.split("-")[1] == idx for line in lines)


def test_io_failure_is_returned_not_raised(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("occupied", encoding="utf-8")
    writer = _writer(tmp_path)
    writer.state.set_output_directory(blocker / "logs")

    result = writer.append("req", "hdr", "body")

    assert not result.ok
    assert isinstance(result.error, OSError)
    assert blocker.read_text(encoding="utf-8") == "occupied"


@pytest.mark.parametrize("name", ["", "   ", ".", "..", "a/b", "a\\b", "nul\x00"])
def test_invalid_base_filename_fails_fast(tmp_path: Path, name: str) -> None:
    writer = _writer(tmp_path)
    with pytest.raises(InvalidFilenameError):
        writer.append(name, "hdr", "body")
    assert not (tmp_path / "default").exists()


def test_default_log_directory_honours_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LOGWRAP_LOG_DIR", str(tmp_path / "from-env"))
    assert default_log_directory() == tmp_path / "from-env"

    monkeypatch.delenv("LOGWRAP_LOG_DIR")
    assert default_log_directory() == Path.home() / "logs"


def test_explicit_none_content_keeps_header(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    result = writer.append("req", "hdr", None)

    records = read_records(result.path)
    assert [(r.header, r.content) for r in records] == [("hdr", "null")]


def test_unencodable_text_is_returned_and_leaves_no_file(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    result = writer.append("req", "hdr", "bad \ud800 text")

    assert not result.ok
    assert isinstance(result.error, UnicodeError)
    assert not result.path.exists()
    assert not (tmp_path / "default").exists()


def test_directory_with_nul_byte_is_returned_not_raised(tmp_path: Path) -> None:
    writer = _writer(tmp_path)
    writer.state.set_output_directory(str(tmp_path) + "/bad\x00dir")

    result = writer.append("req", "hdr", "body")

    assert not result.ok
    assert isinstance(result.error, ValueError)
    assert sorted(p.name for p in tmp_path.iterdir()) == []


def test_file_locks_are_released_after_writes(tmp_path: Path) -> None:
    ids = iter(range(1, 6))
    state = SessionState(clock=lambda: next(ids))
    writer = FileLogWriter(state, directory_resolver=lambda: tmp_path)

    for _ in range(5):
        state.enable()
        for name in ("req", "resp", "events"):
            assert writer.append(name, "body").ok

    assert len(writer._file_locks) == 0
    assert len(list(tmp_path.iterdir())) == 15
