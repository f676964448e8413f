"""Basic tests for the command-line interface."""

import logging

import pytest
import yaml
from click.testing import CliRunner

from streamscaler.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_compute(runner):
    result = runner.invoke(cli, [
        "compute",
        "--catch-up-rate", "100",
        "--input-rate", "200",
        "--target-utilization", "0.8",
        "--catch-up-duration", "600 s",
        "--restart-time", "60 s",
    ])
    assert result.exit_code == 0
    assert "Target processing capacity: 370" in result.output


def test_compute_zero_utilization(runner):
    result = runner.invoke(cli, [
        "compute", "--catch-up-rate", "100", "--input-rate", "200", "-u", "0",
    ])
    assert result.exit_code == 0
    assert "Target processing capacity: inf" in result.output


def test_compute_bad_duration(runner):
    result = runner.invoke(cli, [
        "compute", "--catch-up-rate", "100", "--input-rate", "200",
        "--restart-time", "whenever",
    ])
    assert result.exit_code == 1


def test_generate_and_evaluate(runner, tmp_path):
    config_path = tmp_path / "example.yaml"
    result = runner.invoke(cli, ["generate-config", "--output", str(config_path)])
    assert result.exit_code == 0
    assert config_path.exists()

    csv_path = tmp_path / "vertices.csv"
    result = runner.invoke(cli, ["evaluate", str(config_path), "--output-csv", str(csv_path)])
    assert result.exit_code == 0
    # source: 100 + 20 + 200/0.7, window-aggregate: 40 + 10 + 100/0.7
    assert "source: target=406.0" in result.output
    assert "window-aggregate: target=193.0" in result.output
    assert "Total capacity: 599" in result.output
    assert csv_path.exists()


def test_validate(runner, tmp_path):
    config_path = tmp_path / "example.json"
    runner.invoke(cli, ["generate-config", "--output", str(config_path), "--format", "json"])

    result = runner.invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 0
    assert "Configuration is valid" in result.output


def test_validate_reports_errors(runner, tmp_path):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text(yaml.dump({"autoscaler": {"job.autoscaler.restart.time": "-1 s"}}))

    result = runner.invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 1
    assert "errors" in result.output


def test_evaluate_invalid_config(runner, tmp_path):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text(yaml.dump({"vertices": {}}))

    result = runner.invoke(cli, ["evaluate", str(config_path)])
    assert result.exit_code == 1


def test_evaluate_builds_summary_once(runner, tmp_path, caplog):
    config_path = tmp_path / "example.yaml"
    runner.invoke(cli, ["generate-config", "--output", str(config_path)])

    summary_path = tmp_path / "summary.json"
    with caplog.at_level(logging.INFO):
        result = runner.invoke(cli, ["evaluate", str(config_path), "--output-json", str(summary_path)])

    assert result.exit_code == 0
    assert summary_path.exists()
    evaluated = [r for r in caplog.records if r.getMessage().startswith("Evaluated 2 vertices")]
    assert len(evaluated) == 1


def test_validate_rejects_non_numeric_metric(runner, tmp_path):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text(yaml.dump({
        "vertices": {
            "source": {
                "CATCH_UP_DATA_RATE": {"current": "fast"},
                "TARGET_DATA_RATE": {"average": 200.0},
            }
        }
    }))

    result = runner.invoke(cli, ["validate", str(config_path)])
    assert result.exit_code == 1
    assert "must be a number" in result.output
