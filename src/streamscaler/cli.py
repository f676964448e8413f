"""Command-line interface for streamscaler."""

import logging
import sys
from pathlib import Path

import click

from streamscaler.config import AutoScalerOptions, Configuration
from streamscaler.config.validator import validate_and_load_config
from streamscaler.evaluation import CapacityReportGenerator
from streamscaler.metrics import EvaluatedScalingMetric, ScalingMetric
from streamscaler.utils import get_target_processing_capacity

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@click.group()
@click.version_option(version="0.1.0", prog_name="streamscaler")
def cli():
    """streamscaler: Target processing capacity for streaming job autoscaling."""
    pass


@cli.command()
@click.option("--catch-up-rate", type=float, required=True,
              help="Current rate needed to drain the backlog (records/s)")
@click.option("--input-rate", type=float, required=True,
              help="Average steady-state input rate (records/s)")
@click.option("--target-utilization", "-u", type=float,
              default=AutoScalerOptions.TARGET_UTILIZATION.default,
              show_default=True, help="Target utilization")
@click.option("--catch-up-duration", default=AutoScalerOptions.CATCH_UP_DURATION.default,
              show_default=True, help="Time budget to drain the backlog, e.g. '10 min'")
@click.option("--restart-time", default=AutoScalerOptions.RESTART_TIME.default,
              show_default=True, help="Expected restart downtime, e.g. '60s'")
@click.option("--with-restart/--no-restart", default=True, show_default=True,
              help="Budget for the backlog accumulated during a restart")
def compute(catch_up_rate: float, input_rate: float, target_utilization: float,
            catch_up_duration: str, restart_time: str, with_restart: bool):
    """Compute the target processing capacity of a single vertex."""
    conf = Configuration({
        AutoScalerOptions.CATCH_UP_DURATION.key: catch_up_duration,
        AutoScalerOptions.RESTART_TIME.key: restart_time,
    })
    metrics = {
        ScalingMetric.CATCH_UP_DATA_RATE: EvaluatedScalingMetric.of(catch_up_rate),
        ScalingMetric.TARGET_DATA_RATE: EvaluatedScalingMetric(current=input_rate, average=input_rate),
    }

    try:
        capacity = get_target_processing_capacity(metrics, conf, target_utilization, with_restart)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Target processing capacity: {capacity:.0f}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
@click.option(
    "--output-json", "-j", default=None,
    help="Path to save the summary report as JSON"
)
@click.option(
    "--output-csv", "-c", default=None,
    help="Path to save per-vertex results as CSV"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level"
)
def evaluate(config_file: str, output_json: str, output_csv: str, log_level: str):
    """Evaluate target capacities for every vertex in a configuration file."""
    # Set log level
    logging.getLogger().setLevel(getattr(logging, log_level))

    click.echo(f"Loading configuration from {config_file}...")

    try:
        generator = CapacityReportGenerator.from_file(config_file)
        summary = generator.generate_summary_report()
        generator.save(summary_path=output_json, csv_path=output_csv, summary=summary)
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    for vertex_id, row in summary["results"].items():
        click.echo(f"{vertex_id}: target={row['target_capacity']} "
                   f"scale_up={row['scale_up_threshold']} "
                   f"scale_down={row['scale_down_threshold']} [{row['status']}]")

    click.echo(f"\nVertices: {summary['vertices']['total']} "
               f"({summary['vertices']['undefined']} undefined, "
               f"{summary['vertices']['unbounded']} unbounded)")
    click.echo(f"Total capacity: {summary['capacity']['total_finite']:.0f}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate(config_file: str):
    """Validate a configuration file without evaluating it."""
    click.echo(f"Validating configuration: {config_file}")

    try:
        is_valid, errors, _ = validate_and_load_config(config_file)
    except Exception as e:
        click.echo(click.style(f"Error validating configuration: {e}", fg="red"))
        sys.exit(1)

    if is_valid:
        click.echo(click.style("✓ Configuration is valid", fg="green"))
    else:
        click.echo(click.style(f"✗ Configuration has {len(errors)} errors:", fg="red"))
        for i, error in enumerate(errors[:20], 1):
            click.echo(f"  {i}. {error}")
        if len(errors) > 20:
            click.echo(f"  ... and {len(errors) - 20} more errors")

    sys.exit(0 if is_valid else 1)


@cli.command()
@click.option(
    "--output", "-o", default="example_config.yaml",
    help="Output file path"
)
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
def generate_config(output: str, format: str):
    """Generate an example configuration file."""
    example_config = {
        "autoscaler": {
            AutoScalerOptions.TARGET_UTILIZATION.key: 0.7,
            AutoScalerOptions.TARGET_UTILIZATION_BOUNDARY.key: 0.4,
            AutoScalerOptions.CATCH_UP_DURATION.key: "10 min",
            AutoScalerOptions.RESTART_TIME.key: "60 s",
        },
        "vertices": {
            "source": {
                "CATCH_UP_DATA_RATE": {"current": 100.0},
                "TARGET_DATA_RATE": {"current": 210.0, "average": 200.0},
            },
            "window-aggregate": {
                "CATCH_UP_DATA_RATE": {"current": 40.0},
                "TARGET_DATA_RATE": {"current": 95.0, "average": 100.0},
            },
        },
    }

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == "yaml":
        import yaml
        with open(output_path, "w") as f:
            yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
    else:
        import json
        with open(output_path, "w") as f:
            json.dump(example_config, f, indent=2)

    click.echo(f"Generated example configuration at {output_path}")


if __name__ == "__main__":
    cli()
