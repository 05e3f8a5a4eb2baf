import io
import sys

from pipex.cli import main


def test_too_few_arguments(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == "Expected 4 arguments"


def test_three_arguments(tmp_path, capsys):
    assert main([str(tmp_path / "in"), "cat", str(tmp_path / "out")]) == 1
    assert "Expected 4 arguments" in capsys.readouterr().err


def test_runs_pipeline(tmp_path):
    infile = tmp_path / "in"
    infile.write_text("abc\n")
    outfile = tmp_path / "out"
    assert main([str(infile), "cat", "tr a-z A-Z", str(outfile)]) == 0
    assert outfile.read_text() == "ABC\n"


def test_missing_path(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("PATH", raising=False)
    infile = tmp_path / "in"
    infile.write_text("abc\n")
    assert main([str(infile), "cat", "cat", str(tmp_path / "out")]) == 1
    assert "couldn't extract PATH" in capsys.readouterr().err


def test_missing_command_status(tmp_path, capsys):
    infile = tmp_path / "in"
    infile.write_text("abc\n")
    assert main([str(infile), "cat", "nosuchcmd_xyz", str(tmp_path / "out")]) == 127
    assert "nosuchcmd_xyz: command not found" in capsys.readouterr().err


def test_heredoc_from_stdin(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.BytesIO(b"hi\nEND\n"))
    outfile = tmp_path / "out"
    assert main(["here_doc", "END", "cat", "cat", str(outfile)]) == 0
    assert outfile.read_text() == "hi\n"
    assert capsys.readouterr().out.startswith("> ")