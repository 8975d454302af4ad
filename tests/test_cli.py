"""Tests for the docsync command line."""

import json
import shutil
from pathlib import Path

import pytest

from docsync import readers
from docsync.cli import build_parser, main


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def _flat(output: str) -> str:
    # rich wraps long lines at the console width
    return " ".join(output.split())


class TestParser:
    """Tests for argument defaults."""

    def test_sync_defaults(self):
        """sync reads lib/ and writes .project/features/ by default."""
        args = build_parser().parse_args(["sync"])
        assert args.source == Path("lib")
        assert args.output == Path(".project/features")
        assert not args.dry_run

    def test_validate_defaults(self):
        """validate checks .project/ with markdownlint by default."""
        args = build_parser().parse_args(["validate"])
        assert args.docs == Path(".project")
        assert args.lint_command == "markdownlint"
        assert not args.no_lint

    def test_command_required(self):
        """A subcommand must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestSyncCommand:
    """Tests for `docsync sync`."""

    def test_sync_writes_documents(self, tmp_path, capsys):
        """Tagged comments become documents and the run succeeds."""
        _write(tmp_path / "lib" / "a.js", "/** @feature Login\n * Users can log in. */\n")
        out = tmp_path / "features"

        code = main(["sync", "--source", str(tmp_path / "lib"), "--output", str(out)])

        assert code == 0
        assert (out / "login.md").exists()
        assert "Synchronization complete" in _flat(capsys.readouterr().out)

    def test_nothing_to_sync(self, tmp_path, capsys):
        """No tags is a success with a notice."""
        (tmp_path / "lib").mkdir()

        code = main(["sync", "--source", str(tmp_path / "lib"), "--output", str(tmp_path / "out")])

        assert code == 0
        assert "Nothing to sync" in _flat(capsys.readouterr().out)

    def test_dry_run(self, tmp_path):
        """--dry-run writes nothing."""
        _write(tmp_path / "lib" / "a.js", "/** @feature Login */\n")
        out = tmp_path / "features"

        code = main(["sync", "--source", str(tmp_path / "lib"), "--output", str(out), "--dry-run"])

        assert code == 0
        assert not out.exists()

    def test_all_writes_failing_exits_nonzero(self, tmp_path):
        """Failure to write every document is a failed run."""
        _write(tmp_path / "lib" / "a.js", "/** @feature Login */\n")
        out = _write(tmp_path / "features", "not a directory")

        assert main(["sync", "--source", str(tmp_path / "lib"), "--output", str(out)]) == 1

    def test_source_is_file(self, tmp_path):
        """A source path that is a file is a fatal error."""
        src = _write(tmp_path / "lib", "x")
        assert main(["sync", "--source", str(src), "--output", str(tmp_path / "out")]) == 1


class TestValidateCommand:
    """Tests for `docsync validate`."""

    def test_clean_docs(self, tmp_path, capsys):
        """Valid docs pass."""
        _write(tmp_path / "a.md", "# A\n\n[b](b.md)\n")
        _write(tmp_path / "b.md", "# B\n")

        code = main(["validate", "--docs", str(tmp_path), "--no-lint"])

        assert code == 0
        assert "Validation successful" in _flat(capsys.readouterr().out)

    def test_broken_link(self, tmp_path, capsys):
        """A broken link fails the run and is shown."""
        _write(tmp_path / "a.md", "[see](./missing.md)\n")

        code = main(["validate", "--docs", str(tmp_path), "--no-lint"])

        assert code == 1
        output = _flat(capsys.readouterr().out)
        assert "./missing.md" in output
        assert "Validation failed" in output

    def test_unreadable_document_listed(self, tmp_path, monkeypatch, capsys):
        """Unreadable documents are shown and fail the run."""
        a = _write(tmp_path / "a.md", "# A\n")
        monkeypatch.setattr(readers, "read_file_safe", lambda p: None)

        code = main(["validate", "--docs", str(tmp_path), "--no-lint"])

        assert code == 1
        output = _flat(capsys.readouterr().out)
        assert "Unreadable documents" in output
        assert a.name in output

    def test_missing_docs_dir(self, tmp_path):
        """A missing docs directory fails."""
        assert main(["validate", "--docs", str(tmp_path / "nope"), "--no-lint"]) == 1

    def test_missing_linter(self, tmp_path, capsys):
        """An uninstallable linter aborts with an error."""
        _write(tmp_path / "a.md", "# A\n")

        code = main([
            "validate", "--docs", str(tmp_path),
            "--lint-command", "definitely-not-a-real-linter-xyz",
        ])

        assert code == 1
        assert "not installed" in _flat(capsys.readouterr().out)

    @pytest.mark.skipif(shutil.which("sh") is None, reason="requires a POSIX shell")
    def test_lint_failure(self, tmp_path):
        """A linter exiting non-zero fails the run."""
        _write(tmp_path / "a.md", "# A\n")

        code = main([
            "validate", "--docs", str(tmp_path),
            "--lint-command", "sh -c 'echo a.md:1 MD041/x bad >&2; exit 1' lint",
        ])

        assert code == 1

    def test_saves_report(self, tmp_path):
        """--output writes a JSON report."""
        docs = tmp_path / "docs"
        _write(docs / "a.md", "[x](x.md)\n")
        out = tmp_path / "report.json"

        main(["validate", "--docs", str(docs), "--no-lint", "--output", str(out)])

        data = json.loads(out.read_text())
        assert data["report"]["broken_links"][0]["target"] == "x.md"
