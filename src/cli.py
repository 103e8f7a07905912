#!/usr/bin/env python3
"""
CLI for the vocabulary extractor.
"""

import click
from importlib.metadata import version
from commands import corpus, extract, runs, words


@click.group()
@click.version_option(version=version("vocab-extractor"))
def cli():
    """Vocabulary Extractor CLI - Rank exam vocabulary by corpus frequency."""
    pass


# Register command groups
cli.add_command(corpus.corpus)
cli.add_command(extract.extract)
cli.add_command(runs.runs)
cli.add_command(words.words)


if __name__ == "__main__":
    cli()
