import importlib
import sys
from functools import partial
from functools import reduce
from typing import Annotated
from typing import Any

from typer import Argument
from typer import Exit
from typer import Typer

from .config import Config
from .config import load_config
from .log import setup_logging
from .result import Failure
from .result import Success
from .result import Try
from .result import of_failure
from .result import to

app = Typer()


def configure() -> Config:
    """Load the configuration and set up logging from it."""
    try:
        config = load_config()
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
        raise Exit(2) from None
    setup_logging(json_logs=config.json_logs, log_level=config.log_level)
    return config


def resolve(target: str) -> Try[Any]:
    """Import the object named by a 'module:attribute' target."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        return of_failure(
            ValueError(f"Target must be 'module:attribute', got: '{target}'")
        )
    return to(partial(importlib.import_module, module_name)).map(
        lambda module: reduce(getattr, attribute.split("."), module)
    )


@app.command()
def run(
    target: Annotated[
        str,
        Argument(
            help="Callable to run. Examples: 'json:loads', 'pathlib:Path.cwd'",
            metavar="MODULE:ATTRIBUTE",
        ),
    ],
    args: Annotated[
        list[str] | None,
        Argument(help="String arguments passed to the callable."),
    ] = None,
):
    """Run a callable and report whether it succeeded.

    Exits with status 1 when the callable, or importing it, raises,
    and with status 2 when the configuration is invalid.
    """
    configure()

    match resolve(target).flat_map(lambda fn: to(partial(fn, *(args or [])))):
        case Success(value):
            print(f"Success: {value!r}")
        case Failure(error):
            print(f"Failure: {type(error).__name__}: {error}")
            raise Exit(1)


@app.command()
def config():
    """Show the resolved configuration."""
    config = configure()
    print(f"log_level = {config.log_level}")
    print(f"json_logs = {config.json_logs}")


if __name__ == "__main__":
    app()
