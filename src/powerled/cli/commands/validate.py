"""Validate command - checks a power LED config file."""

from pathlib import Path

import click

from powerled.exceptions import ConfigurationError
from powerled.models import PowerLedConfig, format_code


@click.command()
@click.argument('config_file', type=click.Path(dir_okay=False, path_type=Path))
def validate(config_file: Path):
    """
    Validate a power LED config file and show what it contains.

    \b
    Examples:
      powerled validate /usr/share/power-led/config.json
    """
    try:
        config = PowerLedConfig.load(config_file)
    except ConfigurationError as e:
        click.echo(f"Invalid config: {e.get_full_message()}", err=True)
        raise SystemExit(1)

    click.echo(f"Config OK: {config_file}")
    click.echo(f"  POST_start:             {format_code(config.post_start)}")
    click.echo(f"  POST_end:               {format_code(config.post_end)}")
    click.echo(f"  BMC_booted_group:       {config.booted_group}")
    click.echo(f"  POST_active_group:      {config.post_active_group}")
    click.echo(f"  fully_powered_on_group: {config.fully_powered_on_group}")
