"""
Vocabulary extraction commands.
"""

import sys
import click

from db import Database
from extractors import get_corpus_source, CorpusRecord, CorpusSourceError
from extractors.local import InMemoryCorpusSource
from processors.config import ExtractionConfig
from processors.extraction import VocabularyExtractor
from processors.tokenization import tokenize_record


SAMPLE_QUESTION = {
    'objectID': 'test-123',
    'question': 'The quick brown fox jumps over the lazy dog. This sentence contains various words of different complexity levels.',
    'english_text': 'Advanced vocabulary includes words like serendipity, ubiquitous, and paradigm.',
    'year': 2023,
    'subject': 'english'
}

SAMPLE_EXTRACTION_SIZE = 5


@click.group()
def extract():
    """Run and verify vocabulary extraction."""
    pass


@extract.command()
@click.option('--backend', '-b', type=click.Choice(['local', 'algolia']), default=None, help='Corpus backend (default: CORPUS_BACKEND)')
@click.option('--page-size', type=int, default=None, help='Records per corpus page')
@click.option('--max-words', type=int, default=None, help='Maximum number of words to store')
@click.option('--min-frequency', type=int, default=None, help='Minimum frequency of a stored word')
@click.option('--quiet', '-q', is_flag=True, help='Only print errors')
def run(backend, page_size, max_words, min_frequency, quiet):
    """
    Extract vocabulary from the whole corpus and store the top words.

    Exits with status 1 if the run fails.

    Examples:
        vocab extract run
        vocab extract run --backend algolia
        vocab extract run --max-words 500 --min-frequency 3
    """
    try:
        config = ExtractionConfig().with_overrides(
            page_size=page_size,
            max_words_to_store=max_words,
            min_frequency=min_frequency
        )
        source = get_corpus_source(backend)
    except (CorpusSourceError, ValueError) as e:
        click.echo(click.style(f"✗ {e}", fg="red"), err=True)
        sys.exit(1)

    extractor = VocabularyExtractor(source, Database(), config=config, verbose=not quiet)
    exit_code = extractor.run()

    if exit_code == 0:
        click.echo(click.style(f"✓ Run {extractor.extraction_id} completed", fg="green"))
    else:
        click.echo(click.style(f"✗ Run {extractor.extraction_id} failed", fg="red"), err=True)

    sys.exit(exit_code)


@extract.command()
@click.option('--backend', '-b', type=click.Choice(['local', 'algolia']), default=None, help='Corpus backend (default: CORPUS_BACKEND)')
def check(backend):
    """
    Test connectivity and extraction logic before a full run.

    Runs: service initialization, corpus probe, store probe, word extraction
    on a sample question, and a small in-memory extraction. Nothing is
    written to the vocabulary tables.

    Example:
        vocab extract check
    """
    config = ExtractionConfig().with_overrides(page_size=10, max_words_to_store=50, progress_interval=5)
    state = {}

    def initialize_services():
        state['source'] = get_corpus_source(backend)
        state['db'] = Database()
        click.echo(f"  Corpus source: {state['source'].describe()}")
        click.echo(f"  Vocabulary store: {state['db'].db_path}")
        return True

    def corpus_connection():
        found = state['source'].probe()
        if found == 0:
            click.echo(click.style("  ⚠️  Corpus connected but no records found", fg="yellow"))
            return False
        return True

    def store_connection():
        return state['db'].probe()

    def word_extraction():
        record = CorpusRecord.from_hit(SAMPLE_QUESTION, config.text_fields)
        occurrences = tokenize_record(record, config)
        click.echo(f"  Extracted {len(occurrences)} words from sample text")
        for occurrence in occurrences[:5]:
            click.echo(f"    - \"{occurrence.word}\" ({occurrence.sentence})")
        return len(occurrences) > 0

    def small_extraction():
        hits = state['source'].fetch_page(0, SAMPLE_EXTRACTION_SIZE, config.retrieved_fields)
        click.echo(f"  Processing {len(hits)} sample questions...")

        extractor = VocabularyExtractor(
            InMemoryCorpusSource(hits), state['db'], config=config, verbose=False
        )
        extractor.extract()
        words = extractor.prepare_words()

        stats = extractor.statistics
        click.echo(f"    Questions processed: {stats['totalQuestions']}")
        click.echo(f"    Words extracted: {stats['totalWords']}")
        click.echo(f"    Unique words: {stats['uniqueWords']}")
        click.echo(f"    Words to store: {len(words)}")
        for word in words[:5]:
            click.echo(f"    {word.rank}. \"{word.word}\" (frequency: {word.frequency})")
        return True

    tests = [
        ('Initialize Services', initialize_services),
        ('Corpus Connection', corpus_connection),
        ('Store Connection', store_connection),
        ('Word Extraction Logic', word_extraction),
        ('Small-Scale Extraction', small_extraction),
    ]

    click.echo(click.style("\n=== Vocabulary Extractor Checks ===\n", fg="cyan", bold=True))

    passed = 0
    failed = 0
    for name, test in tests:
        click.echo(f"Running: {name}")
        try:
            result = test()
        except Exception as e:
            click.echo(click.style(f"✗ {name}: FAILED - {e}\n", fg="red"))
            failed += 1
            continue

        if result is False:
            click.echo(click.style(f"✗ {name}: FAILED\n", fg="red"))
            failed += 1
        else:
            click.echo(click.style(f"✓ {name}: PASSED\n", fg="green"))
            passed += 1

    click.echo(f"Checks passed: {click.style(str(passed), fg='green')}")
    click.echo(f"Checks failed: {click.style(str(failed), fg='red')}")

    if failed == 0:
        click.echo(click.style("\n✓ All checks passed. Ready to run: vocab extract run", fg="green"))
    else:
        click.echo(click.style("\n⚠️  Some checks failed. Fix them before running a full extraction.", fg="yellow"))
        sys.exit(1)
