"""
Local corpus management commands.
"""

import json
import click

from db.corpus import CorpusDatabase
from extractors import get_corpus_source, CorpusSourceError


def load_records(path: str) -> list:
    """
    Load question hits from a JSON array file or a JSON-lines file.

    Raises:
        click.ClickException: If the file cannot be parsed
    """
    with open(path, encoding='utf-8') as f:
        content = f.read()

    stripped = content.lstrip()
    try:
        if stripped.startswith('['):
            records = json.loads(stripped)
        else:
            records = [json.loads(line) for line in content.splitlines() if line.strip()]
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")

    if not isinstance(records, list):
        raise click.ClickException(f"{path} must contain a JSON array or JSON lines")
    return records


@click.group()
def corpus():
    """Manage the local question corpus."""
    pass


@corpus.command(name='import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
def import_records(path):
    """
    Import question records into the local corpus database.

    Records are matched by objectID; existing ones are updated.

    Examples:
        vocab corpus import questions.json
        vocab corpus import questions.jsonl
    """
    records = load_records(path)
    click.echo(f"Importing {len(records)} records from {click.style(path, fg='cyan')}...")

    corpus_db = CorpusDatabase()
    stats = corpus_db.import_records(records)

    click.echo(click.style(f"✓ Imported {stats['total']} records", fg="green"))
    click.echo(f"  Inserted: {stats['inserted']}")
    click.echo(f"  Updated: {stats['updated']}")
    if stats['errors']:
        click.echo(click.style(f"  Errors: {stats['errors']}", fg="red"))


@corpus.command()
def stats():
    """
    Show local corpus statistics.

    Example:
        vocab corpus stats
    """
    corpus_db = CorpusDatabase()
    stats_data = corpus_db.get_stats()

    if stats_data['total_records'] == 0:
        click.echo(click.style("No records in corpus", fg="yellow"))
        return

    click.echo(f"Total records: {click.style(str(stats_data['total_records']), fg='green')}")
    if stats_data['earliest_year'] is not None:
        click.echo(f"Years: {stats_data['earliest_year']}-{stats_data['latest_year']}")
    if stats_data['oldest_entry']:
        click.echo(f"Oldest entry: {stats_data['oldest_entry'].strftime('%Y-%m-%d %H:%M')}")
    if stats_data['newest_entry']:
        click.echo(f"Newest entry: {stats_data['newest_entry'].strftime('%Y-%m-%d %H:%M')}")

    click.echo("\nSubjects:")
    for subject, count in sorted(stats_data['subjects'].items(), key=lambda x: x[1], reverse=True):
        click.echo(f"  {click.style(subject, fg='cyan')}: {count}")


@corpus.command()
@click.option('--backend', '-b', type=click.Choice(['local', 'algolia']), default=None, help='Corpus backend (default: CORPUS_BACKEND)')
@click.option('--limit', '-l', type=int, default=3, help='Number of records to inspect (default: 3)')
def inspect(backend, limit):
    """
    Show the field structure of the first records of the corpus source.

    Example:
        vocab corpus inspect --backend algolia --limit 5
    """
    try:
        source = get_corpus_source(backend)
        hits = source.fetch_page(0, limit, None)
    except CorpusSourceError as e:
        click.echo(click.style(f"✗ {e}", fg="red"))
        return

    click.echo(f"Source: {click.style(source.describe(), fg='cyan')}")
    click.echo(f"Sample records: {len(hits)}\n")

    for i, hit in enumerate(hits, 1):
        click.echo(click.style(f"Record {i}: {hit.get('objectID')}", bold=True))
        for key, value in hit.items():
            if isinstance(value, str):
                preview = value if len(value) <= 80 else value[:77] + '...'
                click.echo(f"  {key} (str, {len(value)} chars): {preview}")
            else:
                click.echo(f"  {key} ({type(value).__name__}): {json.dumps(value, ensure_ascii=False)[:80]}")
        click.echo()


@corpus.command()
@click.confirmation_option(prompt='Delete every record of the local corpus?')
def clear():
    """
    Delete all records of the local corpus.

    Example:
        vocab corpus clear --yes
    """
    corpus_db = CorpusDatabase()
    count = corpus_db.clear()
    click.echo(click.style(f"✓ Deleted {count} records", fg="green"))
