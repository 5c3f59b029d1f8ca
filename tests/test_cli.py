"""End-to-end tests for the command-line interface.

WHY: The CLI is how most users meet the glosser. These tests run the
whole pipeline (options, source reading, glossing, formatting, saving)
on small files and check what lands on disk.

HOW: main() is called with an explicit argv pointing at files under
tmp_path. Flags that have environment defaults are always given
explicitly.

RULES:
- Failures must exit with status 1 via SystemExit.
- Status messages go to stderr, never stdout.
"""

import json

import pytest

from interlinear.cli import _parse_formats, _resolve_output_path, build_parser, main

SOURCE = "amar\nAMAR-1SG\nI love\n\nni-na-ku-penda\n1SG-PRS-2SG-love\nI love you\n"

FLAGS = ["--auto-tag", "--no-first-line-orig", "--last-line-free"]


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "examples.txt"
    path.write_text(SOURCE, encoding="utf-8")
    return path


class TestParser:
    """Argument parsing and defaults."""

    def test_boolean_flags_default_to_none(self):
        args = build_parser().parse_args(["in.txt"])
        assert args.auto_tag is None
        assert args.first_line_orig is None
        assert args.last_line_free is None
        assert args.spacing is None

    def test_negative_flags(self):
        args = build_parser().parse_args(["in.txt", "--no-auto-tag", "--no-spacing"])
        assert args.auto_tag is False
        assert args.spacing is False

    def test_parse_formats(self):
        assert _parse_formats("html, json") == ["html", "json"]
        assert set(_parse_formats("")) == {"html", "plain_text", "json"}

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format 'pdf'"):
            _parse_formats("html,pdf")


class TestOutputPaths:
    """Existing outputs are never overwritten."""

    def test_first_free_name(self, tmp_path):
        assert _resolve_output_path("ex", "-gloss.html", tmp_path).name == "ex-gloss.html"

    def test_numeric_suffix_on_conflict(self, tmp_path):
        (tmp_path / "ex-gloss.html").write_text("x")
        (tmp_path / "ex-gloss-2.html").write_text("x")
        assert _resolve_output_path("ex", "-gloss.html", tmp_path).name == "ex-gloss-3.html"

    def test_suffix_without_extension(self, tmp_path):
        (tmp_path / "ex-gloss").write_text("x")
        assert _resolve_output_path("ex", "-gloss", tmp_path).name == "ex-gloss-2"


class TestMain:
    """Full runs of the CLI."""

    def test_writes_every_format(self, source_file, tmp_path):
        main([str(source_file), "--formats", "html,plain_text,json"] + FLAGS)
        assert (tmp_path / "examples-gloss.html").is_file()
        assert (tmp_path / "examples-gloss.txt").is_file()
        assert (tmp_path / "examples-gloss.json").is_file()

    def test_html_content(self, source_file, tmp_path):
        main([str(source_file), "--formats", "html"] + FLAGS)
        content = (tmp_path / "examples-gloss.html").read_text(encoding="utf-8")
        assert '<abbr class="gloss__abbr" title="first person">1</abbr>' in content

    def test_output_dir(self, source_file, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        main([str(source_file), "--formats", "json", "--output-dir", str(out)] + FLAGS)
        data = json.loads((out / "examples-gloss.json").read_text(encoding="utf-8"))
        assert len(data["glosses"]) == 2

    def test_second_run_does_not_overwrite(self, source_file, tmp_path):
        main([str(source_file), "--formats", "plain_text"] + FLAGS)
        main([str(source_file), "--formats", "plain_text"] + FLAGS)
        assert (tmp_path / "examples-gloss.txt").is_file()
        assert (tmp_path / "examples-gloss-2.txt").is_file()

    def test_flag_overrides_config_file(self, source_file, tmp_path):
        config = tmp_path / "options.json"
        config.write_text(json.dumps({"autoTag": False}), encoding="utf-8")
        main([
            str(source_file), "--formats", "html", "--config", str(config),
            "--auto-tag", "--no-first-line-orig", "--last-line-free",
        ])
        content = (tmp_path / "examples-gloss.html").read_text(encoding="utf-8")
        assert "<abbr" in content

    def test_config_file_applies(self, source_file, tmp_path):
        config = tmp_path / "options.json"
        config.write_text(json.dumps({"autoTag": False}), encoding="utf-8")
        main([
            str(source_file), "--formats", "html", "--config", str(config),
            "--no-first-line-orig", "--last-line-free",
        ])
        content = (tmp_path / "examples-gloss.html").read_text(encoding="utf-8")
        assert "<abbr" not in content

    def test_deferred_run(self, source_file, tmp_path):
        main([str(source_file), "--formats", "json", "--deferred"] + FLAGS)
        data = json.loads((tmp_path / "examples-gloss.json").read_text(encoding="utf-8"))
        assert [gloss["label"] for gloss in data["glosses"]] == ["1", "2"]

    def test_invalid_glosses_are_skipped(self, tmp_path):
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps({"glosses": [
            {"tiers": ["a", "A", "free"]},
            {"tiers": []},
        ]}), encoding="utf-8")
        main([str(path), "--formats", "json"] + FLAGS)
        data = json.loads((tmp_path / "mixed-gloss.json").read_text(encoding="utf-8"))
        assert data["skipped"] == [1]
        assert len(data["glosses"]) == 1

    def test_status_goes_to_stderr(self, source_file, capsys):
        main([str(source_file), "--formats", "json"] + FLAGS)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Done!" in captured.err


class TestMainFailures:
    """Configuration and input errors exit with status 1."""

    def _exit_code(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        return excinfo.value.code

    def test_missing_input(self, tmp_path):
        assert self._exit_code([str(tmp_path / "nope.txt")]) == 1

    def test_missing_output_dir(self, source_file, tmp_path):
        argv = [str(source_file), "--output-dir", str(tmp_path / "missing")]
        assert self._exit_code(argv) == 1

    def test_unknown_format(self, source_file, capsys):
        assert self._exit_code([str(source_file), "--formats", "pdf"]) == 1
        assert "Unknown format 'pdf'" in capsys.readouterr().err

    def test_invalid_lexers(self, source_file, tmp_path):
        config = tmp_path / "options.json"
        config.write_text(json.dumps({"lexers": ["("]}), encoding="utf-8")
        assert self._exit_code([str(source_file), "--config", str(config)]) == 1

    def test_no_valid_gloss(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"glosses": [{"tiers": []}]}), encoding="utf-8")
        assert self._exit_code([str(path), "--formats", "json"] + FLAGS) == 1
