"""
ConfigGuard CLI - Check commands

Provides commands for scanning configuration variables for secrets:
- check a whole variables file (JSON, YAML, TOML or dotenv)
- apply the security gate for a generation target
- classify a single key/value pair
"""
from pathlib import Path
from typing import Optional

import click

from configguard.cli.report import format_security_report, format_verdict, to_json
from configguard.core.detector import SecretDetector
from configguard.core.exceptions import ConfigGuardError
from configguard.core.gate import SecurityGate
from configguard.core.walker import has_secrets
from configguard.utils.config import ConfigManager
from configguard.utils.loader import load_variables


def _build_detector(ctx: click.Context) -> SecretDetector:
    config: ConfigManager = ctx.obj['config']
    return SecretDetector.from_config(config.load())


@click.command()
@click.argument('variables_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--target', 'target_path', type=click.Path(dir_okay=False),
              help='Output file the variables would be written to (applies the security gate)')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default=None,
              help='Output format (defaults to the configured report format)')
@click.option('--no-color', is_flag=True, help='Disable coloured output')
@click.pass_context
def check(ctx, variables_file: str, target_path: Optional[str], output_format: Optional[str],
          no_color: bool):
    """
    Scan a variables file for potential secrets.

    Exits with status 1 when secrets are found. With --target, the file may
    still pass if the target path is ignored by git.

    Examples:
        configguard check config/variables.yaml

        configguard check .env.production --target dist/app.json
    """
    config: ConfigManager = ctx.obj['config']
    settings = config.load()
    output_format = output_format or settings.default_report_format

    try:
        detector = _build_detector(ctx)
        variables = load_variables(variables_file)
    except ConfigGuardError as e:
        click.echo(f"❌ Error: {e.message}", err=True)
        ctx.exit(1)

    if target_path:
        _check_target(ctx, detector, variables, target_path, output_format, no_color,
                      settings.check_gitignore)
        return

    result = has_secrets(variables, detector)
    if output_format == 'json':
        click.echo(to_json({"file": variables_file, **result.to_dict()}))
    else:
        click.echo(format_security_report(f"Secret scan: {variables_file}", result,
                                          color=not no_color))
    ctx.exit(1 if result.has_secrets else 0)


def _check_target(ctx, detector: SecretDetector, variables, target_path: str,
                  output_format: str, no_color: bool, check_gitignore: bool) -> None:
    """Run the security gate for a single target and report the decision."""
    target_name = Path(target_path).name
    gate = SecurityGate(detector=detector, check_gitignore=check_gitignore)

    try:
        decision = gate.evaluate(target_name, target_path, variables)
    except ConfigGuardError as e:
        click.echo(f"❌ Error: {e.message}", err=True)
        ctx.exit(1)

    result = decision.result
    if output_format == 'json':
        click.echo(to_json({"target": target_path, "blocked": decision.blocked,
                            "ignored": decision.ignored, **result.to_dict()}))
    else:
        if result.total_count or result.allowed:
            click.echo(format_security_report(f"Security check: {target_name}", result,
                                              color=not no_color, blocked=decision.blocked))
        if decision.blocked:
            click.echo(
                f"\n❌ Target '{target_name}' would write {result.total_count} potential "
                f"secret(s) to a tracked file. Add {target_path} to .gitignore or mark the "
                f"values with unsafe().",
                err=True,
            )
        else:
            click.echo(f"✅ Target '{target_name}' may be written to {target_path}")
    ctx.exit(1 if decision.blocked else 0)


@click.command()
@click.argument('key')
@click.argument('value')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@click.option('--no-color', is_flag=True, help='Disable coloured output')
@click.pass_context
def classify(ctx, key: str, value: str, output_format: str, no_color: bool):
    """Classify a single KEY / VALUE pair (exit status 1 if it looks secret)."""
    try:
        detector = _build_detector(ctx)
    except ConfigGuardError as e:
        click.echo(f"❌ Error: {e.message}", err=True)
        ctx.exit(1)

    verdict = detector.is_potentially_a_secret(key, value)
    if output_format == 'json':
        click.echo(to_json({"key": key, **verdict.to_dict()}))
    else:
        click.echo(format_verdict(key, verdict, color=not no_color))
    ctx.exit(1 if verdict.is_secret else 0)
