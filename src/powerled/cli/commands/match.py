"""Match command - compares two POST codes with the daemon's matcher."""

import click

from powerled.core import codes_match
from powerled.exceptions import PostCodeLengthError
from powerled.models import parse_hex_bytes


def _parse_code(ctx, param, value: str) -> bytes:
    try:
        return parse_hex_bytes(value.replace(",", " ").split())
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param)


@click.command()
@click.argument('observed', callback=_parse_code)
@click.argument('reference', callback=_parse_code)
def match(observed: bytes, reference: bytes):
    """
    Check whether OBSERVED matches REFERENCE.

    Codes are hex bytes separated by spaces or commas. The last byte of each
    code is an instance counter and is ignored.

    \b
    Examples:
      powerled match "01 55 00" "55 07"
      powerled match 01,02,03,00 01,02,03,05
    """
    try:
        matched = codes_match(observed, reference)
    except PostCodeLengthError as e:
        click.echo(f"Error: {e.technical_message}", err=True)
        raise SystemExit(1)

    click.echo("match" if matched else "no match")
