"""
Stored vocabulary commands.
"""

import click
from db import Database
from db.database import WORD_SORT_OPTIONS


@click.group()
def words():
    """Browse stored vocabulary words."""
    pass


@words.command()
@click.option('--sort', '-s', 'sort_by', type=click.Choice(WORD_SORT_OPTIONS), default='frequency', help='Sort order (default: frequency)')
@click.option('--subject', default=None, help='Only words seen in this subject area')
@click.option('--min-frequency', '-f', type=int, default=1, help='Minimum frequency (default: 1)')
@click.option('--search', default=None, help='Substring of the word')
@click.option('--limit', '-l', type=int, default=20, help='Number of words to show (default: 20)')
@click.option('--offset', '-o', type=int, default=0, help='Number of words to skip (default: 0)')
@click.option('--no-pager', is_flag=True, help='Disable pagination')
def list(sort_by, subject, min_frequency, search, limit, offset, no_pager):
    """
    List stored vocabulary words.

    Examples:
        vocab words list
        vocab words list --sort alphabetical --limit 50
        vocab words list --subject english --min-frequency 5
        vocab words list --search ana
    """
    db = Database()
    entries, total = db.list_words(
        sort_by=sort_by,
        subject=subject,
        min_frequency=min_frequency,
        search=search,
        limit=limit,
        offset=offset
    )

    if not entries:
        click.echo(click.style("No words found", fg="yellow"))
        return

    output_lines = [click.style(f"\n=== Vocabulary ({offset + 1}-{offset + len(entries)} of {total}) ===\n", fg="cyan", bold=True)]

    for entry in entries:
        year_range = entry['year_range']
        output_lines.append(
            f"#{entry['rank']:<5} {click.style(entry['word'], bold=True):<30} "
            f"freq: {entry['frequency']:<6} difficulty: {entry['difficulty']:<3} "
            f"years: {year_range['earliest']}-{year_range['latest']}"
        )
        if entry['examples']:
            output_lines.append(f"       \"{entry['examples'][0]}\"")

    if offset + len(entries) < total:
        output_lines.append(f"\n... use --offset {offset + len(entries)} to see more")

    output_text = "\n".join(output_lines)

    # Use pager if more than 20 results and not disabled
    if len(entries) > 20 and not no_pager:
        click.echo_via_pager(output_text)
    else:
        click.echo(output_text)


@words.command()
@click.argument('word')
def show(word):
    """
    Show a stored word with all of its examples.

    Example:
        vocab words show analyze
    """
    db = Database()
    entry = db.get_word(word)

    if not entry:
        click.echo(click.style(f"✗ Word '{word}' not found", fg="red"))
        return

    click.echo(click.style(f"\n=== {entry['word']} ===\n", fg="cyan", bold=True))
    click.echo(f"Rank: {entry['rank']}")
    click.echo(f"Frequency: {entry['frequency']}")
    click.echo(f"Difficulty: {entry['difficulty']}/10")
    click.echo(f"Questions: {entry['question_count']}")
    click.echo(f"Years: {entry['year_range']['earliest']}-{entry['year_range']['latest']}")
    click.echo(f"Subjects: {', '.join(entry['subject_areas']) or '-'}")
    click.echo(f"Average sentence length: {entry['avg_sentence_length']}")
    click.echo(f"Extraction: {entry['extraction_id']} ({entry['extracted_at']})")

    detail = db.get_examples(word)
    if not detail or not detail['examples']:
        return

    click.echo(f"\n{click.style('Examples:', bold=True)} ({detail['total_examples']})")
    for i, example in enumerate(detail['examples'], 1):
        marker = click.style('★', fg='yellow') if example.get('isHighlighted') else ' '
        click.echo(f"  {marker} {i}. {example['sentence']}")
        click.echo(f"       question {example['questionId']} | {example['year']} | {example['subject']} | complexity {example['complexity']}")
