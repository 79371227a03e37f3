"""
ConfigGuard CLI - Settings commands
"""
import click

from configguard.utils.config import ConfigManager


@click.group(name='config')
@click.pass_context
def settings(ctx):
    """Show or change persisted ConfigGuard settings"""
    pass


@settings.command()
@click.pass_context
def show(ctx):
    """Display current settings"""
    config: ConfigManager = ctx.obj['config']

    click.echo(f"⚙️  Settings ({config.config_path})\n")
    for key, value in config.load().to_dict().items():
        click.echo(f"   {key:<24} {value}")


@settings.command(name='set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key: str, value: str):
    """Change a single setting"""
    config: ConfigManager = ctx.obj['config']

    try:
        config.set(key, value)
    except (KeyError, ValueError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"✅ {key} = {config.get(key)}")
    click.echo(f"💾 Configuration saved to: {config.config_path}")
