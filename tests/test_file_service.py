from __future__ import annotations

import io
from pathlib import Path

import pytest

from nomoji.services import file_service as fs
from nomoji.services.file_service import OutputMode


def test_decode_bytes_rejects_invalid_utf8():
    with pytest.raises(fs.DecodeFailure) as ei:
        fs.decode_bytes(b"ok \xff\xfe", "utf-8")
    assert "Failed to decode file as utf-8" in str(ei.value)


def test_decode_bytes_names_the_input_kind():
    with pytest.raises(fs.DecodeFailure) as ei:
        fs.decode_bytes(b"\xff", "utf-8", "input")
    assert str(ei.value).startswith("Failed to decode input as utf-8:")


def test_decode_bytes_unknown_encoding():
    with pytest.raises(fs.DecodeFailure) as ei:
        fs.decode_bytes(b"abc", "no-such-codec")
    assert "Unknown encoding" in str(ei.value)


def test_read_source_missing_file(tmp_path: Path):
    with pytest.raises(fs.ReadFailure) as ei:
        fs.read_source(tmp_path / "missing.txt", "utf-8")
    assert str(ei.value).startswith("Failed to read file:")


def test_process_file_dry_run_leaves_file_untouched(write_file, config):
    path = write_file("notes.txt", "Test \U0001F680 rocket \U0001F525 fire")
    before = path.read_bytes()

    result = fs.process_file(path, mode=OutputMode.INPLACE, dry_run=True, config=config)

    assert result.success
    assert result.emojis_found == 2
    assert result.output is None
    assert path.read_bytes() == before


def test_process_file_inplace(write_file, config):
    path = write_file("notes.txt", "Line 1 \U0001F600\nLine 2 \U0001F30D\n")

    result = fs.process_file(path, mode=OutputMode.INPLACE, config=config)

    assert result.success
    assert result.emojis_found == 2
    assert path.read_text(encoding="utf-8") == "Line 1 \nLine 2 \n"
    assert not Path(f"{path}.bak").exists()


def test_process_file_backup_keeps_original_bytes(write_file, config):
    original = "keep \U0001F44B\U0001F3FD this\r\n"
    path = write_file("doc.md", original)

    result = fs.process_file(path, mode=OutputMode.BACKUP, config=config)

    backup = path.with_name("doc.md.bak")
    assert result.success
    assert result.emojis_found == 1
    assert backup.read_bytes() == original.encode("utf-8")
    assert path.read_bytes() == b"keep  this\r\n"


def test_process_file_custom_backup_suffix(write_file, config):
    config.processing.backup_suffix = ".orig"
    path = write_file("doc.md", "x \U0001F600")

    fs.process_file(path, mode=OutputMode.BACKUP, config=config)

    assert path.with_name("doc.md.orig").exists()


def test_process_file_backup_mode_always_creates_backup(write_file, config):
    path = write_file("plain.txt", "nothing to see")

    result = fs.process_file(path, mode=OutputMode.BACKUP, config=config)

    assert result.success
    assert result.emojis_found == 0
    assert path.with_name("plain.txt.bak").read_bytes() == b"nothing to see"
    assert path.read_bytes() == b"nothing to see"


def test_process_file_inplace_without_emoji_is_not_rewritten(write_file, config, monkeypatch):
    path = write_file("plain.txt", "nothing to see")

    def fail(self, data):
        raise AssertionError("unchanged file was rewritten")

    monkeypatch.setattr(Path, "write_bytes", fail)
    result = fs.process_file(path, mode=OutputMode.INPLACE, config=config)

    assert result.success
    assert result.emojis_found == 0


def test_process_file_preserves_leading_bom(write_file, config):
    path = write_file("bom.txt", "\ufeffhi \U0001F600")

    result = fs.process_file(path, mode=OutputMode.INPLACE, config=config)

    assert result.emojis_found == 1
    assert path.read_bytes() == "\ufeffhi ".encode("utf-8")
    assert path.read_bytes().startswith(b"\xef\xbb\xbf")


def test_process_file_stdout_mode_defers_output(write_file, config):
    path = write_file("a.txt", "hi \U0001F600")

    result = fs.process_file(path, config=config)

    assert result.output == "hi "
    assert path.read_text(encoding="utf-8") == "hi \U0001F600"


def test_process_file_decode_failure(write_file, config):
    path = write_file("bad.txt", b"\xff\xfe\xfa")

    result = fs.process_file(path, mode=OutputMode.INPLACE, config=config)

    assert not result.success
    assert result.emojis_found == 0
    assert "Failed to decode" in result.error


def test_process_file_write_failure(write_file, config, monkeypatch):
    path = write_file("a.txt", "x \U0001F600")

    def boom(self, data):
        raise PermissionError("read-only")

    monkeypatch.setattr(Path, "write_bytes", boom)
    result = fs.process_file(path, mode=OutputMode.INPLACE, config=config)

    assert not result.success
    assert result.emojis_found == 1
    assert result.error.startswith("Failed to write file:")


def test_process_file_backup_failure(write_file, config, monkeypatch):
    path = write_file("a.txt", "x \U0001F600")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(fs.shutil, "copy2", boom)
    result = fs.process_file(path, mode=OutputMode.BACKUP, config=config)

    assert not result.success
    assert result.error.startswith("Failed to create backup:")
    assert path.read_text(encoding="utf-8") == "x \U0001F600"


def test_process_files_continues_after_failure(write_file, tmp_path, config):
    good = write_file("good.txt", "a \U0001F600")
    missing = tmp_path / "missing.txt"
    other = write_file("other.txt", "b \U0001F1FA\U0001F1F8 c")

    results = fs.process_files([good, missing, other], mode=OutputMode.INPLACE, config=config)

    assert [r.source for r in results] == [str(good), str(missing), str(other)]
    assert [r.success for r in results] == [True, False, True]
    assert [r.emojis_found for r in results] == [1, 0, 1]
    assert good.read_text(encoding="utf-8") == "a "
    assert other.read_text(encoding="utf-8") == "b  c"


def test_process_files_writes_stdout_in_input_order(write_file, config, fake_stdout):
    paths = [write_file(f"f{i}.txt", f"{i}\U0001F600\n") for i in range(6)]

    results = fs.process_files(paths, config=config, max_workers=3, stream=fake_stdout)

    assert fake_stdout.getvalue() == "".join(f"{i}\n" for i in range(6))
    assert all(result.output is None for result in results)


def test_process_files_repeats_duplicates_on_stdout(write_file, config, fake_stdout):
    path = write_file("dup.txt", "x \U0001F600\n")

    results = fs.process_files([path, path], config=config, stream=fake_stdout)

    assert [r.emojis_found for r in results] == [1, 1]
    assert fake_stdout.getvalue() == "x \nx \n"


def test_process_files_dry_run_counts_every_argument(write_file, config):
    path = write_file("dup.txt", "x \U0001F600")

    results = fs.process_files([path, path], mode=OutputMode.INPLACE, dry_run=True, config=config)

    assert len(results) == 2


@pytest.mark.parametrize("mode", [OutputMode.INPLACE, OutputMode.BACKUP])
def test_process_files_writes_each_file_once_across_aliases(write_file, tmp_path, monkeypatch, config, mode):
    original = "x \U0001F600"
    path = write_file("a.txt", original)
    monkeypatch.chdir(tmp_path)

    results = fs.process_files(["a.txt", "./a.txt", str(path)], mode=mode, config=config)

    assert [r.source for r in results] == ["a.txt"]
    assert results[0].emojis_found == 1
    assert path.read_text(encoding="utf-8") == "x "
    if mode is OutputMode.BACKUP:
        assert path.with_name("a.txt.bak").read_text(encoding="utf-8") == original


def test_process_files_empty():
    assert fs.process_files([]) == []


def test_process_stdin(config, fake_stdout):
    stdin = io.BytesIO("piped \U0001F600 output \U0001F44B\U0001F3FF\n".encode("utf-8"))

    result = fs.process_stdin(config=config, stdin=stdin, stream=fake_stdout)

    assert result.success
    assert result.source == "stdin"
    assert result.emojis_found == 2
    assert fake_stdout.getvalue() == "piped  output \n"


def test_process_stdin_dry_run_writes_nothing(config, fake_stdout):
    stdin = io.BytesIO("\U0001F600".encode("utf-8"))

    result = fs.process_stdin(dry_run=True, config=config, stdin=stdin, stream=fake_stdout)

    assert result.emojis_found == 1
    assert fake_stdout.getvalue() == ""


def test_process_stdin_invalid_bytes(config, fake_stdout):
    result = fs.process_stdin(config=config, stdin=io.BytesIO(b"\xc3\x28"), stream=fake_stdout)

    assert not result.success
    assert "Failed to decode" in result.error
    assert fake_stdout.getvalue() == ""


def test_emit_stdout_without_buffer():
    stream = io.StringIO()
    fs.emit_stdout("plain", "utf-8", stream)
    assert stream.getvalue() == "plain"
