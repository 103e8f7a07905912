"""
Application settings management.
Uses python-dotenv to load environment variables from .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

# Store original environment values to prevent modification
_ENV_CACHE = {}


def get_setting(key: str, default=None):
    """
    Get a setting from environment variables.

    Similar to Django's settings pattern - returns a copy of the value
    to prevent accidental modification of the actual environment variable.

    Args:
        key: Environment variable name
        default: Default value if not found

    Returns:
        The environment variable value or default

    Example:
        >>> PAGE_SIZE = int(get_setting('PAGE_SIZE', '1000'))
        >>> DEBUG = get_setting('DEBUG', 'False') == 'True'
    """
    # Use cached value if available, otherwise get from env
    if key not in _ENV_CACHE:
        _ENV_CACHE[key] = os.getenv(key, default)

    # Return a copy to prevent modification
    value = _ENV_CACHE[key]

    # For mutable types, return a copy
    if isinstance(value, (list, dict)):
        return value.copy()

    return value


def get_bool_setting(key: str, default: str = 'False') -> bool:
    """Read a boolean flag ('true', '1', 'yes' are truthy)."""
    return str(get_setting(key, default)).lower() in ('true', '1', 'yes')


# Debug mode
DEBUG = get_bool_setting('DEBUG', 'False')

# Corpus source
CORPUS_BACKEND = get_setting('CORPUS_BACKEND', 'local')
CORPUS_INDEX = get_setting('CORPUS_INDEX', 'korean-english-question-pairs')
ALGOLIA_APP_ID = get_setting('ALGOLIA_APP_ID')
ALGOLIA_SEARCH_KEY = get_setting('ALGOLIA_SEARCH_KEY')
ALGOLIA_TIMEOUT = int(get_setting('ALGOLIA_TIMEOUT', '30'))

# Database paths
CORPUS_DB_PATH = get_setting('CORPUS_DB_PATH', 'data/corpus.db')
VOCAB_DB_PATH = get_setting('VOCAB_DB_PATH', 'data/vocabulary.db')

# Extraction parameters
PAGE_SIZE = int(get_setting('PAGE_SIZE', '1000'))
MAX_WORDS_TO_STORE = int(get_setting('MAX_WORDS_TO_STORE', '2000'))
MIN_FREQUENCY = int(get_setting('MIN_FREQUENCY', '2'))
MIN_WORD_LENGTH = int(get_setting('MIN_WORD_LENGTH', '3'))
MAX_WORD_LENGTH = int(get_setting('MAX_WORD_LENGTH', '20'))
EXCLUDE_COMMON_WORDS = get_bool_setting('EXCLUDE_COMMON_WORDS', 'True')
MAX_EXAMPLES_PER_WORD = int(get_setting('MAX_EXAMPLES_PER_WORD', '10'))
HIGHLIGHTED_EXAMPLES = int(get_setting('HIGHLIGHTED_EXAMPLES', '3'))
PROGRESS_INTERVAL = int(get_setting('PROGRESS_INTERVAL', '100'))
PAGE_DELAY_MS = int(get_setting('PAGE_DELAY_MS', '100'))

# Maximum write operations per commit
COMMIT_LIMIT = int(get_setting('COMMIT_LIMIT', '500'))

# Free-text fields of a corpus record that are tokenized, in order
TEXT_FIELDS = [
    field.strip()
    for field in get_setting('TEXT_FIELDS', 'question,english_text,korean_text').split(',')
    if field.strip()
]
