"""Command-line interface for the API governance engine."""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from apigov import __version__
from apigov.errors import GovernanceError
from apigov.loader import load_document
from apigov.policy import GovernancePolicy
from apigov.report import ComplianceReport, ReportTimer, generate_compliance_report
from apigov.validator import GovernanceEngine

CONTEXT_SETTINGS = {
    'help_option_names': ['-h', '--help'],
    'max_content_width': 120
}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose: bool):
    """apigov: governance checks and compliance scoring for OpenAPI documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


@cli.command()
@click.argument('specs', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('--policy', 'policy_path', type=click.Path(exists=True, dir_okay=False),
              help='Governance policy YAML file')
@click.option('--total-apis', type=click.IntRange(min=1), default=1, show_default=True,
              help='Normalization denominator for scoring')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json', 'markdown']),
              default='text', show_default=True, help='Output format')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write the report to a file (single spec only)')
def check(
    specs: Tuple[str, ...],
    policy_path: Optional[str],
    total_apis: int,
    output_format: str,
    output: Optional[str],
):
    """Evaluate one or more spec files. Exits 1 if any violation is found."""
    if output and len(specs) > 1:
        raise click.UsageError("--output can only be used with a single spec")

    try:
        policy = GovernancePolicy.from_file(Path(policy_path)) if policy_path else GovernancePolicy()
    except GovernanceError as e:
        raise click.ClickException(str(e))

    engine = GovernanceEngine(policy=policy)
    failed = False

    for spec in specs:
        spec_path = Path(spec)
        try:
            with ReportTimer() as timer:
                document = load_document(spec_path)
                report = engine.evaluate(document, total_apis=total_apis)
        except GovernanceError as e:
            raise click.ClickException(str(e))

        compliance = generate_compliance_report(
            report,
            document,
            duration_ms=timer.duration_ms,
            source_path=spec_path,
            total_apis=total_apis,
            policy=policy,
        )
        failed = failed or not report.passed

        if output:
            output_path = Path(output)
            if output_format == 'text':
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(_render(compliance, spec_path, 'text') + '\n', encoding='utf-8')
            else:
                compliance.save(output_path, format=output_format)
            click.echo(f"Report saved to {output}")
        else:
            click.echo(_render(compliance, spec_path, output_format))

    sys.exit(1 if failed else 0)


@cli.command()
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output policy file path')
def policy(output: Optional[str]):
    """Print the default governance policy as YAML."""
    content = GovernancePolicy().to_yaml()
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding='utf-8')
        click.echo(f"Policy saved to {output_path}")
    else:
        click.echo(content, nl=False)


def _render(compliance: ComplianceReport, spec_path: Path, output_format: str) -> str:
    if output_format == 'json':
        return compliance.to_json()
    if output_format == 'markdown':
        return compliance.to_markdown()

    report = compliance.report
    lines = [f"{spec_path}: governance score {report.score}"]
    if report.passed:
        lines.append("  No governance violations found.")
    for violation in report.violations:
        lines.append(f"  {violation}")
    return "\n".join(lines)


if __name__ == '__main__':
    cli()
