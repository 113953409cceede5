"""Main CLI interface for traffic trend analysis

Provides command-line commands for:
- Fitting growth models to a station's annual volumes
- Showing the active configuration
"""

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from traffic_trends import __version__
from traffic_trends.analysis import TrendAnalysis, default_station
from traffic_trends.data import Direction, StationInfo
from traffic_trends.utils.config import ConfigLoader
from traffic_trends.utils.logging_config import get_logger, setup_logging


console = Console()
logger = get_logger(__name__)

QUALITY_STYLES = {'good': 'green', 'fair': 'yellow', 'poor': 'red', 'n/a': 'dim'}


@click.group()
@click.version_option(version=__version__, prog_name='Traffic Trends')
def cli():
    """
    Traffic Trends

    Growth-rate analysis of annual traffic volumes (TDPA):
    - Linear, exponential and logarithmic regression
    - R² fit quality and annualized growth rates
    """
    pass


@cli.command()
@click.option(
    '--config',
    '-c',
    type=click.Path(),
    default=None,
    help='Path to configuration file (default: config/config.yaml)'
)
@click.option(
    '--year',
    '-y',
    type=int,
    default=None,
    help='Latest year, i.e. the year of the first volume given'
)
@click.option(
    '--volumes',
    '-v',
    type=str,
    default=None,
    help='Volumes separated by spaces or tabs, most recent year first'
)
@click.option('--road', type=str, default=None, help='Road name')
@click.option('--section', type=str, default=None, help='Road section')
@click.option('--station', type=str, default=None, help='Counting station')
@click.option('--km', type=str, default=None, help='Kilometre marker (e.g. 150+000)')
@click.option(
    '--direction',
    type=click.Choice([d.value for d in Direction]),
    default=None,
    help='Direction: S1, S2 or S0 (both)'
)
@click.option(
    '--project',
    '-p',
    'horizon',
    type=int,
    default=0,
    help='Number of years to project past the last observation'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
    default=None,
    help='Logging level (overrides config)'
)
def analyze(config, year, volumes, road, section, station, km, direction, horizon, log_level):
    """
    Fit growth models to annual traffic volumes

    Missing options fall back to the station defaults in the config file.

    Examples:
      traffic-trends analyze                                # Configured example station
      traffic-trends analyze -y 2024 -v "5200 5100 4950"    # Three years ending 2024
      traffic-trends analyze -y 2024 -v "5200 5100 4950" -p 10
    """
    try:
        cfg = ConfigLoader(config)
        setup_logging(
            log_level=log_level or cfg.get('logging.level', 'INFO'),
            log_file=cfg.get('logging.file')
        )

        defaults = default_station(cfg)
        station_info = StationInfo(
            road=road if road is not None else defaults.road,
            section=section if section is not None else defaults.section,
            station=station if station is not None else defaults.station,
            km=km if km is not None else defaults.km,
            direction=Direction(direction) if direction else defaults.direction
        )

        if year is None:
            year = int(cfg.get('station.latest_year'))
        if volumes is None:
            volumes = cfg.get('station.raw_volumes', '')

        analysis = TrendAnalysis(config=cfg, station=station_info)
        analysis.run(year, volumes)

        console.print(Panel.fit(
            f"[bold cyan]{station_info.road}[/bold cyan]\n"
            f"Section: {station_info.section}   Station: {station_info.station}   "
            f"Km: {station_info.km}   Direction: {station_info.direction.value}",
            title="Traffic Growth Analysis",
            border_style="cyan"
        ))

        if not analysis.series:
            console.print("\n[bold red]✗ No valid volumes found in input[/bold red]")
            raise click.Abort()

        _print_series(analysis)
        _print_models(analysis)

        best = analysis.best_model()
        if best is not None:
            console.print(
                f"\n[bold]Best fit:[/bold] {best.model.value} "
                f"(R² = {best.r_squared:.4f}, growth rate = {best.growth_rate:.2f}%)"
            )
        else:
            console.print("\n[yellow]⚠️  No model could be fitted (need at least 2 years)[/yellow]")

        if horizon > 0 and best is not None:
            _print_projection(analysis, horizon)

    except click.Abort:
        raise

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {str(e)}")
        logger.exception("Analysis failed")
        raise click.Abort()


@cli.command('show-config')
@click.option(
    '--config',
    '-c',
    type=click.Path(),
    default=None,
    help='Path to configuration file (default: config/config.yaml)'
)
def show_config(config):
    """Show the active configuration"""
    try:
        cfg = ConfigLoader(config)
    except FileNotFoundError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {str(e)}")
        raise click.Abort()

    table = Table(title=f"Configuration ({cfg.config_path})", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for key in [
        'logging.level',
        'logging.file',
        'analysis.min_points',
        'analysis.projection_horizon',
        'analysis.fit_quality.good',
        'analysis.fit_quality.fair',
        'station.road',
        'station.section',
        'station.station',
        'station.km',
        'station.direction',
        'station.latest_year',
        'station.raw_volumes'
    ]:
        table.add_row(key, repr(cfg.get(key)))

    console.print(table)


def _print_series(analysis: TrendAnalysis):
    """Historical data with year-over-year growth"""
    table = Table(title="Historical Data", show_header=True, header_style="bold cyan")
    table.add_column("Year", style="cyan")
    table.add_column("TDPA (veh)", justify="right")
    table.add_column("Growth Rate", justify="right")

    for obs in analysis.series:
        style = "red" if obs.growth_rate < 0 else "green"
        table.add_row(
            str(obs.year),
            f"{obs.volume:,.0f}",
            f"[{style}]{obs.growth_rate:.2f}%[/{style}]"
        )

    console.print(table)


def _print_models(analysis: TrendAnalysis):
    """One row per regression model"""
    table = Table(title="Regression Models", show_header=True, header_style="bold cyan")
    table.add_column("Model", style="cyan", no_wrap=True)
    table.add_column("Formula", style="yellow")
    table.add_column("R²", justify="right")
    table.add_column("Growth Rate", justify="right", style="green")

    for result in analysis.results.values():
        quality = analysis.fit_quality(result)
        style = QUALITY_STYLES[quality]
        if result.is_fitted:
            r2_str = f"[{style}]{result.r_squared:.4f}[/{style}]"
            rate_str = f"{result.growth_rate:.2f}%"
        else:
            r2_str = f"[dim]{result.status.value}[/dim]"
            rate_str = "—"
        table.add_row(result.model.value, result.formula, r2_str, rate_str)

    console.print(table)


def _print_projection(analysis: TrendAnalysis, horizon: int):
    """Extrapolated volumes for each fitted model"""
    df = analysis.project(horizon)

    table = Table(title=f"{horizon}-Year Projection", show_header=True, header_style="bold cyan")
    table.add_column("Year", style="cyan")
    model_cols = [c for c in df.columns if c != 'year']
    for col in model_cols:
        table.add_column(analysis.results[col].model.value, justify="right")

    for _, row in df.iterrows():
        table.add_row(str(int(row['year'])), *[f"{row[c]:,.0f}" for c in model_cols])

    console.print(table)


if __name__ == '__main__':
    cli()
