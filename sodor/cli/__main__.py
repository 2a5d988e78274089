"""Sodor CLI - Main Entry Point.

Commands:
    routes   - Print the routes derived from controllers
    version  - Show version information
"""

import logging
import sys
from typing import Optional

import click

from . import __version__, __cli_name__
from ..faults import Fault
from .utils.colors import error, _CROSS


@click.group()
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, verbose: bool):
    """Derive and inspect controller routes."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command('routes')
@click.argument('controllers', nargs=-1, required=True)
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help='YAML or JSON config file')
@click.option('--env-file', type=click.Path(dir_okay=False), help='.env file with SODOR_* keys')
@click.option('--json-output', is_flag=True, help='Print the route report as JSON')
@click.pass_context
def routes_cmd(ctx, controllers: tuple, config_path: Optional[str], env_file: Optional[str], json_output: bool):
    """
    Print the routes derived from CONTROLLERS.

    Examples:
      sodor routes app.users:Users
      sodor routes app.users:Users app.admin:Admin --json-output
    """
    from .commands.inspect import inspect_routes

    try:
        inspect_routes(
            list(controllers),
            config_path=config_path,
            env_file=env_file,
            json_output=json_output,
            verbose=ctx.obj['verbose'],
        )
    except click.BadParameter as e:
        error(f"  {_CROSS} {e.message}")
        sys.exit(1)
    except Fault as e:
        error(f"  {_CROSS} {e}")
        sys.exit(1)


@cli.command('version')
def version():
    """Show version information."""
    click.echo(f"{__cli_name__} {__version__}")


def main():
    """Entry point for `sodor` command."""
    cli(obj={})


if __name__ == '__main__':
    main()
