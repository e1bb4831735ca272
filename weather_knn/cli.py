"""Command-line entry point: fit and evaluate the precipitation models."""
import logging

import click

from weather_knn.constants import DEFAULT_CONFIG, PARSE_ERROR_POLICIES
from weather_knn.data_loader import load_data
from weather_knn.errors import WeatherKNNError
from weather_knn.pipeline import make_config, run_pipeline, metrics_table


@click.command()
@click.argument("infile", type=click.Path(exists=True, dir_okay=False))
@click.option("--seed", type=int, default=DEFAULT_CONFIG["seed"], show_default=True)
@click.option("--train-fraction", type=click.FloatRange(0, 1, min_open=True),
              default=DEFAULT_CONFIG["train_fraction"], show_default=True)
@click.option("--k", "k", type=click.IntRange(min=1), default=DEFAULT_CONFIG["k"], show_default=True)
@click.option("--degree", type=click.IntRange(min=2), default=DEFAULT_CONFIG["polynomial_degree"],
              show_default=True, help="Polynomial degree for the expanded model.")
@click.option("--no-polynomial", is_flag=True, help="Fit only the plain feature model.")
@click.option("--weighted/--uniform", default=DEFAULT_CONFIG["weighted"], show_default=True,
              help="Distance-weight neighbor targets.")
@click.option("--on-parse-error", type=click.Choice(PARSE_ERROR_POLICIES),
              default=DEFAULT_CONFIG["on_parse_error"], show_default=True)
@click.option("-v", "--verbose", is_flag=True)
def main(infile, seed, train_fraction, k, degree, no_polynomial, weighted, on_parse_error, verbose):
    """Predict hourly precipitation in INFILE from humidity and temperature."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = make_config(
        seed=seed, train_fraction=train_fraction, k=k,
        polynomial_degree=None if no_polynomial else degree,
        weighted=weighted, on_parse_error=on_parse_error,
    )
    try:
        output = run_pipeline(load_data(infile), config)
    except WeatherKNNError as exc:
        raise click.ClickException(str(exc)) from exc

    split = output["split"]
    click.echo(f"{len(output['dataset']):,} rows: {len(split.train):,} train / {len(split.test):,} test")
    click.echo(metrics_table(output["results"]).to_string(float_format=lambda v: f"{v:.4f}"))


if __name__ == "__main__":
    main()
