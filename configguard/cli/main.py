"""
ConfigGuard CLI - Main entry point
"""
from pathlib import Path

import click

from configguard import __version__
from configguard.cli import check, settings
from configguard.utils.config import ConfigManager
from configguard.utils.logger import set_log_level


@click.group()
@click.version_option(version=__version__)
@click.option('--config-file', type=click.Path(dir_okay=False),
              help='Settings file (defaults to ~/.configguard/config.json)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_file, verbose):
    """
    🛡️  ConfigGuard - Secret Detection Gate for Generated Configuration

    Detect API keys, passwords, tokens and private keys in configuration
    variables before they are written to files that end up in version control.

    WORKFLOW:

    1. Check a variables file:
       configguard check variables.yaml

    2. Gate a generation target (passes if the target is git-ignored):
       configguard check variables.yaml --target .env.local

    3. Inspect a single value:
       configguard classify api_key sk_live_...
    """
    ctx.ensure_object(dict)
    config = ConfigManager(Path(config_file) if config_file else None)
    ctx.obj['config'] = config
    set_log_level("DEBUG" if verbose else config.load().log_level)


# Register subcommands
cli.add_command(check.check)
cli.add_command(check.classify)
cli.add_command(settings.settings)


if __name__ == '__main__':
    cli()
