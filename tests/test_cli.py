"""Tests for the command line entry point."""

import json

from resume_ingest.cli import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args(["resume.pdf"])
    assert args.path == "resume.pdf"
    assert args.log_level is None
    assert args.text_only is False
    assert args.indent == 2


def test_prints_draft_as_json(tmp_path, capsys, sample_resume):
    path = tmp_path / "resume.txt"
    path.write_text(sample_resume, encoding="utf-8")

    assert main([str(path)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["personalInfo"]["fullName"] == "Jane Doe"
    assert payload["skills"] == "Python, Go, PostgreSQL"
    assert payload["design"]["accentColor"] == "#1e40af"


def test_text_only(tmp_path, capsys, resume_pdf):
    path = tmp_path / "resume.pdf"
    path.write_bytes(resume_pdf)

    assert main([str(path), "--text-only"]) == 0
    assert capsys.readouterr().out == "Jane Doe\nSkills   Engineer\nExperience\n"


def test_extraction_error_exit_code(tmp_path, capsys):
    path = tmp_path / "resume.odt"
    path.write_text("x")

    assert main([str(path), "--log-level", "ERROR"]) == 1
    assert "error: Unsupported document type '.odt'" in capsys.readouterr().err
