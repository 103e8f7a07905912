"""
Extraction run history commands.
"""

import click
from db import Database, RunStatus


STATUS_COLORS = {
    RunStatus.RUNNING: 'blue',
    RunStatus.COMPLETED: 'green',
    RunStatus.FAILED: 'red'
}


@click.group()
def runs():
    """Inspect extraction runs."""
    pass


@runs.command()
@click.option('--limit', '-l', type=int, default=20, help='Number of runs to show (default: 20)')
@click.option('--status', '-s', type=click.Choice(RunStatus.ALL), help='Filter by status')
def list(limit, status):
    """
    List extraction runs, most recent first.

    Example:
        vocab runs list
        vocab runs list --status failed
    """
    db = Database()
    entries = db.list_runs(status=status, limit=limit)

    if not entries:
        click.echo(click.style("No runs found", fg="yellow"))
        return

    output_lines = [click.style("\n=== Extraction Runs ===\n", fg="cyan", bold=True)]

    for run in entries:
        color = STATUS_COLORS.get(run['status'], 'white')
        stats = run['statistics']
        output_lines.append(f"[{run['extraction_id']}]")
        output_lines.append(f"    Status: {click.style(run['status'], fg=color)}")
        output_lines.append(f"    Questions: {stats.get('totalQuestions', 0)}  |  Stored words: {stats.get('storedWords', 0)}  |  Errors: {stats.get('errorsEncountered', 0)}")
        output_lines.append(f"    Started: {run['start_time']}")
        if run['end_time']:
            output_lines.append(f"    Ended: {run['end_time']}")
        output_lines.append("")

    click.echo("\n".join(output_lines))


@runs.command()
@click.argument('extraction_id')
@click.option('--errors', '-e', 'error_limit', type=int, default=5, help='Number of errors to show (default: 5)')
def show(extraction_id, error_limit):
    """
    Show statistics, parameters and errors of an extraction run.

    Example:
        vocab runs show extraction_1760659200000
    """
    db = Database()
    run = db.get_run(extraction_id)

    if not run:
        click.echo(click.style(f"✗ Run {extraction_id} not found", fg="red"))
        return

    color = STATUS_COLORS.get(run['status'], 'white')
    click.echo(click.style(f"\n=== Run {run['extraction_id']} ===\n", fg="cyan", bold=True))
    click.echo(f"Status: {click.style(run['status'], fg=color)}")
    click.echo(f"Started: {run['start_time']}")
    if run['end_time']:
        click.echo(f"Ended: {run['end_time']}")
        duration = (run['end_time'] - run['start_time']).total_seconds()
        click.echo(f"Duration: {duration:.2f} seconds")

    if run['statistics']:
        click.echo(f"\n{click.style('Statistics:', bold=True)}")
        for key, value in run['statistics'].items():
            click.echo(f"  {key}: {value}")

    if run['parameters']:
        click.echo(f"\n{click.style('Parameters:', bold=True)}")
        for key, value in run['parameters'].items():
            click.echo(f"  {key}: {value}")

    errors = run['errors']
    if errors:
        click.echo(f"\n{click.style('Errors:', fg='red', bold=True)} ({len(errors)} recorded)")
        for error in errors[:error_limit]:
            context = next((f"{key} {error[key]}" for key in ('page', 'question_id', 'word') if key in error), 'run')
            prefix = "FATAL " if error.get('fatal') else ""
            click.echo(f"  {prefix}[{context}] {error['error']}")
        if len(errors) > error_limit:
            click.echo(f"  ... and {len(errors) - error_limit} more")
