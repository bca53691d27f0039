"""
Tests for the psras-coverage command line.
"""

import json

import pytest

from psras_toolkit.cli import EXIT_FAILED, EXIT_OK, EXIT_UNAVAILABLE, main


@pytest.fixture
def bank(tmp_path):
    """Question bank directory matching the sample standards."""
    bank_dir = tmp_path / "bank"
    bank_dir.mkdir()
    cited = [{"instrument": "PACE", "cite": "s.41"}, {"instrument": "Code C", "cite": "para 15.1"}]
    questions = [
        {"id": "q1", "topicId": "pace-detention-time", "tags": ["detention"], "references": cited},
        {"id": "q2", "topicId": "pace-detention-time", "tags": ["reviews"], "references": []},
        {"id": "q3", "topicId": "ethics-1", "tags": ["legal-advice"], "references": cited},
    ]
    (bank_dir / "bank.json").write_text(json.dumps({"questions": questions}), encoding="utf-8")
    return bank_dir


class TestBacklogCommand:
    """Tests for the backlog subcommand."""

    def test_table(self, bank, standards_file, capsys):
        """Prints the summary and one line per criterion."""
        assert main(["backlog", str(bank), "--standards", str(standards_file), "--target", "2"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Missing: 1  Partial: 2  OK: 1" in out
        assert out.index("C-4") < out.index("C-1")

    def test_json(self, bank, standards_file, capsys):
        """--json prints the serialized report."""
        assert main(["backlog", str(bank), "--standards", str(standards_file), "--json"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["targetCount"] == 30
        assert [row["criterionId"] for row in data["rows"]][0] == "C-4"

    def test_exports(self, bank, standards_file, tmp_path):
        """--csv and --pdf write files."""
        csv_path = tmp_path / "backlog.csv"
        pdf_path = tmp_path / "backlog.pdf"
        code = main([
            "backlog", str(bank), "--standards", str(standards_file),
            "--csv", str(csv_path), "--pdf", str(pdf_path),
        ])
        assert code == EXIT_OK
        assert csv_path.read_text(encoding="utf-8").startswith("Criterion ID,")
        assert pdf_path.read_bytes().startswith(b"%PDF")

    def test_standards_unavailable(self, bank, tmp_path, capsys):
        """Missing standards exit with 2."""
        code = main(["backlog", str(bank), "--standards", str(tmp_path / "missing.json")])
        assert code == EXIT_UNAVAILABLE
        assert "Standards unavailable" in capsys.readouterr().err

    def test_question_bank_unavailable(self, standards_file, tmp_path, capsys):
        """A missing bank exits with 2."""
        code = main(["backlog", str(tmp_path / "nope"), "--standards", str(standards_file)])
        assert code == EXIT_UNAVAILABLE
        assert "Cannot load question bank" in capsys.readouterr().err

    def test_invalid_env_config(self, bank, standards_file, monkeypatch):
        """Bad environment configuration exits with 2."""
        monkeypatch.setenv("PSRAS_TARGET_COUNT", "lots")
        assert main(["backlog", str(bank), "--standards", str(standards_file)]) == EXIT_UNAVAILABLE


class TestAuditCommand:
    """Tests for the audit subcommand."""

    def test_failing_audit(self, bank, standards_file, tmp_path, capsys):
        """Failures exit with 1 and the report is written."""
        report = tmp_path / "TEST_REPORT.md"
        code = main(["audit", str(bank), "--standards", str(standards_file), "--report", str(report)])
        assert code == EXIT_FAILED
        assert "Audit FAILED" in capsys.readouterr().out
        assert report.read_text(encoding="utf-8").startswith("# Coverage Audit Report")

    def test_passing_audit(self, tmp_path, standards_file, capsys):
        """A fully served bank exits with 0."""
        cited = [{"instrument": "PACE", "cite": "s.41"}, {"instrument": "Code C", "cite": "para 15.1"}]
        bank = tmp_path / "bank.jsonl"
        bank.write_text(
            json.dumps({"id": "q1", "tags": ["detention", "legal-advice", "conduct"], "references": cited}) + "\n",
            encoding="utf-8",
        )
        code = main(["audit", str(bank), "--standards", str(standards_file), "--min-questions", "1"])
        assert code == EXIT_OK
        assert "Audit PASSED" in capsys.readouterr().out


class TestValidateCommand:
    """Tests for the validate subcommand."""

    def test_review_required(self, bank, standards_file, capsys):
        """A custody question without citations needs review."""
        assert main(["validate", str(bank), "--standards", str(standards_file)]) == EXIT_FAILED
        out = capsys.readouterr().out
        assert "[REVIEW] q2: requires at least one authority" in out
        assert "3 questions checked, 1 require review" in out

    def test_attach_fixes_missing(self, bank, standards_file, tmp_path):
        """--attach fills citations; --output writes the snapshot."""
        output = tmp_path / "attached.jsonl"
        code = main([
            "validate", str(bank), "--standards", str(standards_file),
            "--attach", "--output", str(output),
        ])
        assert code == EXIT_OK
        records = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
        q2 = next(r for r in records if r["id"] == "q2")
        assert [ref["cite"] for ref in q2["references"]] == ["s.40", "para 15.1"]
        assert q2["references"][0]["note"] == "Auto-attached from standards spine"
