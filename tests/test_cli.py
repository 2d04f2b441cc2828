"""Smoke tests for the Typer CLI router."""
import csv
import json
from pathlib import Path

from typer.testing import CliRunner

from recordnorm.cli.main import app

runner = CliRunner()


def _dump(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _summary(output: str) -> dict:
    head, _, _ = output.partition("Data Transformation Summary:")
    return json.loads(head)


def test_help_shows_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("convert", "classify", "stats", "config"):
        assert command in result.stdout


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "recordnorm" in result.stdout


def test_convert_writes_csv_and_summary(tmp_path: Path) -> None:
    source = _dump(
        tmp_path / "people.json",
        {
            "persons": [
                {"firstName": "Anna", "lastName": "Smith", "email": "anna@smith.com", "age": 30, "department": "Sales", "salary": 1000},
                {"firstName": "John", "lastName": "Doe", "email": "john@doe.com", "age": 40, "department": "Sales", "salary": 2000},
                "Zoe\nMiller",
            ]
        },
    )
    target = tmp_path / "out" / "people.csv"
    result = runner.invoke(app, ["convert", "--input", str(source), "--output", str(target)])

    assert result.exit_code == 0, result.output
    summary = _summary(result.stdout)
    assert summary["status"] == "completed"
    assert summary["records"] == 3
    assert "Success Rate: 100.00%" in result.stdout

    with target.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["ID", "First Name", "Last Name", "Email", "Age", "Department", "Salary"]
    assert [row[2] for row in rows[1:3]] == ["Doe", "Smith"]
    assert rows[3][1] == "Zoe Miller"


def test_convert_honours_delimiter_header_and_sort_flags(tmp_path: Path) -> None:
    source = _dump(tmp_path / "mixed.json", ["Zed", {"firstName": "Ana", "lastName": "Ruiz", "email": "a@r.io"}])
    target = tmp_path / "mixed.csv"
    result = runner.invoke(
        app,
        ["convert", "-i", str(source), "-o", str(target), "--delimiter", ";", "--no-header", "--no-sort"],
    )

    assert result.exit_code == 0, result.output
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines == ["1;Zed;;;;;", "2;Ana;Ruiz;a@r.io;;;"]


def test_convert_reads_paths_from_config_file(tmp_path: Path) -> None:
    _dump(tmp_path / "in.json", [{"firstName": "John"}])
    config = tmp_path / "recordnorm.yaml"
    config.write_text(
        "paths:\n  input: in.json\n  output: result.csv\ncsv:\n  delimiter: '|'\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["convert", "--config-file", str(config)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "result.csv").read_text(encoding="utf-8").splitlines()[1] == "1|John|||||"


def test_convert_logs_events(tmp_path: Path) -> None:
    source = _dump(tmp_path / "in.json", [{"firstName": "John", "email": "bad address"}])
    log_file = tmp_path / "logs" / "run.jsonl"
    result = runner.invoke(
        app,
        ["convert", "-i", str(source), "-o", str(tmp_path / "out.csv"), "--log-file", str(log_file)],
    )

    assert result.exit_code == 0, result.output
    events = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    names = [event["event"] for event in events]
    assert names[0] == "convert.start"
    assert names[-1] == "convert.completed"
    assert "record.email_invalid" in names
    trace_ids = {event["trace_id"] for event in events if event["event"].startswith("convert.")}
    assert len(trace_ids) == 1


def test_convert_fails_on_missing_input(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["convert", "-i", str(tmp_path / "missing.json"), "-o", str(tmp_path / "out.csv")],
    )
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_convert_fails_on_empty_batch(tmp_path: Path) -> None:
    source = _dump(tmp_path / "empty.json", [])
    result = runner.invoke(app, ["convert", "-i", str(source), "-o", str(tmp_path / "out.csv")])
    assert result.exit_code == 1
    assert "no records" in result.output
    assert not (tmp_path / "out.csv").exists()


def test_classify_prints_json_lines(tmp_path: Path) -> None:
    source = _dump(tmp_path / "in.json", [{"title": "T", "journal": "J"}, "Ana Ruiz"])
    result = runner.invoke(app, ["classify", "--input", str(source)])

    assert result.exit_code == 0, result.output
    lines = [json.loads(line) for line in result.stdout.splitlines()]
    assert lines == [
        {"index": 1, "category": "PUBLICATION", "match_ratio": 100},
        {"index": 2, "category": "STRING", "match_ratio": 0},
    ]


def test_stats_summarises_records(tmp_path: Path) -> None:
    source = _dump(
        tmp_path / "in.json",
        [
            {"firstName": "Ana", "department": "Ops", "age": 30, "salary": 100},
            {"firstName": "Bob", "department": "Ops", "age": 50},
        ],
    )
    result = runner.invoke(app, ["stats", "--input", str(source)])

    assert result.exit_code == 0, result.output
    assert "Total Records: 2" in result.stdout
    assert "Unique Departments: 1" in result.stdout
    assert "Average Age: 40.00" in result.stdout
    assert "Average Salary: 50.00" in result.stdout


def test_config_init_and_show(tmp_path: Path) -> None:
    target = tmp_path / "recordnorm.yaml"
    result = runner.invoke(app, ["config", "init", "--output", str(target)])
    assert result.exit_code == 0, result.output
    assert target.exists()

    again = runner.invoke(app, ["config", "init", "--output", str(target)])
    assert again.exit_code == 1

    shown = runner.invoke(app, ["config", "show", "--config-file", str(target)])
    assert shown.exit_code == 0, shown.output
    payload = json.loads(shown.stdout)
    assert payload["delimiter"] == ","
    assert payload["sort_enabled"] is True
    assert payload["source"] == str(target)
