"""Tests for the command-line front end."""

import io
import os
import sys

import pytest

from brainbrain.cli import main


class _FullDiskFile:
    """Real file on disk that fails like a full device on write or close."""

    def __init__(self, path, fail_on):
        self._f = open(path, "w", encoding="utf-8")
        self._fail_on = fail_on

    def write(self, text):
        if self._fail_on == "write":
            raise OSError(28, "No space left on device")
        return self._f.write(text)

    def close(self):
        self._f.close()
        if self._fail_on == "close":
            raise OSError(28, "No space left on device")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def _full_disk_open(fail_on):
    def _open(path, mode="r", **kwargs):
        if "w" not in mode:
            return open(path, mode, **kwargs)
        return _FullDiskFile(path, fail_on)

    return _open


def _source(tmp_path, text, name="prog.bf"):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


class TestTranslateCommand:
    def test_default_target_to_stdout(self, tmp_path, capsys):
        rc = main([_source(tmp_path, "+.")])
        out = capsys.readouterr().out
        assert rc == 0
        assert out.startswith("global _start\n")
        assert "int 80h" in out

    def test_bf_flag(self, tmp_path, capsys):
        rc = main([_source(tmp_path, "++[>+<-]"), "-b", "-m", "4"])
        assert rc == 0
        assert capsys.readouterr().out == "++\n[\n    >\n    +\n    <\n    -\n]\n"

    def test_target_option_and_output_file(self, tmp_path):
        out = tmp_path / "prog.asm"
        rc = main([_source(tmp_path, ",."), str(out), "--target", "nasm-libc"])
        assert rc == 0
        text = out.read_text()
        assert "global main\n" in text
        assert "call putchar\n" in text

    def test_bf_flag_after_output_path(self, tmp_path):
        out = tmp_path / "normalized.bf"
        rc = main([_source(tmp_path, "+ comment -"), str(out), "-b"])
        assert rc == 0
        assert out.read_text() == ""


class TestErrors:
    def test_missing_input_file(self, tmp_path, capsys):
        rc = main([str(tmp_path / "missing.bf")])
        assert rc == 1
        assert "error: Failed to open" in capsys.readouterr().err

    def test_malformed_source(self, tmp_path, capsys):
        rc = main([_source(tmp_path, "[[+]")])
        err = capsys.readouterr().err
        assert rc == 1
        assert err.startswith("error: Source code contains invalid bf")

    def test_invalid_memory_size(self, tmp_path, capsys):
        rc = main([_source(tmp_path, "+"), "-m", "0"])
        assert rc == 1
        assert "memory size" in capsys.readouterr().err

    def test_unknown_target_is_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main([_source(tmp_path, "+"), "-t", "wasm"])
        assert exc_info.value.code == 2

    def test_write_failure_removes_partial_output(self, tmp_path, monkeypatch, capsys):
        out = tmp_path / "prog.asm"
        monkeypatch.setattr(
            "brainbrain.cli.open", _full_disk_open(fail_on="write"), raising=False
        )
        rc = main([_source(tmp_path, "+"), str(out)])
        assert rc == 1
        assert not out.exists()
        assert "No space left on device" in capsys.readouterr().err

    def test_failure_on_close_removes_partial_output(self, tmp_path, monkeypatch, capsys):
        out = tmp_path / "prog.asm"
        monkeypatch.setattr(
            "brainbrain.cli.open", _full_disk_open(fail_on="close"), raising=False
        )
        rc = main([_source(tmp_path, "+"), str(out)])
        assert rc == 1
        assert not out.exists()
        assert "No space left on device" in capsys.readouterr().err

    @pytest.mark.skipif(not os.path.exists("/dev/full"), reason="needs /dev/full")
    def test_write_failure_keeps_symlinked_output(self, tmp_path, capsys):
        link = tmp_path / "out.asm"
        os.symlink("/dev/full", link)
        rc = main([_source(tmp_path, "+"), str(link)])
        assert rc == 1
        assert os.path.islink(link)
        assert "No space left on device" in capsys.readouterr().err



class TestInspectionModes:
    def test_ir_only(self, tmp_path, capsys):
        rc = main([_source(tmp_path, "++[-]"), "--ir-only"])
        out = capsys.readouterr().out
        assert rc == 0
        assert out.startswith("memory size: 3000\n")
        assert "[block 1]  next=(none)  exit=2  loop" in out

    def test_stats(self, tmp_path, capsys):
        rc = main([_source(tmp_path, "++[-]."), "--stats"])
        out = capsys.readouterr().out
        assert rc == 0
        assert "INCREMENT: 2\n" in out
        assert "LOOPS: 1\n" in out


class TestRunMode:
    def test_run_echoes_input(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"hi")))
        out = tmp_path / "out.bin"
        rc = main([_source(tmp_path, ",[.,]"), str(out), "--run", "--eof", "zero"])
        assert rc == 0
        assert out.read_bytes() == b"hi"

    def test_run_step_limit_reported(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"")))
        out = tmp_path / "out.bin"
        rc = main([_source(tmp_path, "+[]"), str(out), "--run", "--max-steps", "20"])
        assert rc == 1
        assert "Step limit of 20" in capsys.readouterr().err
