import logging
import os
import subprocess
import sys
import time
import webbrowser

import click

from .chudnovsky import of_pi
from .decimal_value import DecimalValue
from .errors import FixedLoomError
from .rounding import RoundingMode
from .verify import verify_pi


_ROUNDING_CHOICE = click.Choice([m.name for m in RoundingMode], case_sensitive=False)
_OPERATIONS = ["add", "subtract", "multiply", "divide", "remainder"]


def _parse(value: str, scale: int, rounding: str) -> DecimalValue:
    try:
        return DecimalValue.value_of(value, scale, RoundingMode.parse(rounding))
    except FixedLoomError as e:
        raise click.ClickException(str(e)) from e


def _run_app(host: str, port: int, open_browser: bool):
    url = f"http://{host}:{port}"
    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        os.path.join(os.path.dirname(__file__), "streamlit_app.py"),
        "--server.address",
        host,
        "--server.port",
        str(port),
    ]
    proc = subprocess.Popen(cmd)
    if open_browser:
        for _ in range(60):
            time.sleep(0.2)
            try:
                webbrowser.open(url)
                break
            except webbrowser.Error:
                pass
    raise SystemExit(proc.wait())


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.option("--host", default="localhost", show_default=True)
@click.option("--port", default=8501, show_default=True, type=int)
@click.option("--open/--no-open", default=True, show_default=True)
def app(host: str, port: int, open: bool):
    _run_app(host, port, open)


@main.command()
@click.option("--scale", default=50, show_default=True, type=int)
@click.option("--verify/--no-verify", default=False, show_default=True)
def pi(scale: int, verify: bool):
    try:
        value = of_pi(scale)
    except FixedLoomError as e:
        raise click.ClickException(str(e)) from e
    if verify:
        ok, kind = verify_pi(value)
        if not ok:
            raise click.ClickException(f"verification failed ({kind})")
    click.echo(str(value))


@main.command()
@click.argument("operation", type=click.Choice(_OPERATIONS, case_sensitive=False))
@click.argument("left")
@click.argument("right")
@click.option("--scale", default=2, show_default=True, type=int)
@click.option("--rounding", type=_ROUNDING_CHOICE, default="HALF_UP", show_default=True)
def calc(operation: str, left: str, right: str, scale: int, rounding: str):
    mode = RoundingMode.parse(rounding)
    a = _parse(left, scale, rounding)
    b = _parse(right, scale, rounding)
    try:
        result = getattr(a, operation.lower())(b, mode)
    except FixedLoomError as e:
        raise click.ClickException(str(e)) from e
    click.echo(str(result))


@main.command()
@click.argument("value")
@click.option("--scale", default=2, show_default=True, type=int)
@click.option("--to", "new_scale", required=True, type=int)
@click.option("--rounding", type=_ROUNDING_CHOICE, default="HALF_UP", show_default=True)
def resize(value: str, scale: int, new_scale: int, rounding: str):
    v = _parse(value, scale, rounding)
    try:
        result = v.resize_precision(new_scale, RoundingMode.parse(rounding))
    except FixedLoomError as e:
        raise click.ClickException(str(e)) from e
    click.echo(str(result))


@main.command()
@click.argument("value")
@click.option("--scale", default=10, show_default=True, type=int)
def sqrt(value: str, scale: int):
    v = _parse(value, scale, "HALF_UP")
    try:
        click.echo(str(v.sqrt()))
    except FixedLoomError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument("value")
@click.option("--scale", default=10, show_default=True, type=int)
def log(value: str, scale: int):
    v = _parse(value, scale, "HALF_UP")
    try:
        click.echo(str(v.log()))
    except FixedLoomError as e:
        raise click.ClickException(str(e)) from e
