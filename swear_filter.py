import logging
import re
import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional

from word_store import WordStore

logger = logging.getLogger(__name__)

# ==================== CONSTANTS ====================
ZERO_WIDTH_SPACE = '\u200B'

# Vocabulary entry that trips when a message normalizes down to nothing
EMPTY_MESSAGE_WORD = ' '

# All Unicode space separators (Zs) live below U+3001
SPACE_SEPARATORS = ''.join(
    c for c in map(chr, range(0x3001)) if unicodedata.category(c) == 'Zs'
)

_WHITESPACE = '[\t\n\f\r' + re.escape(SPACE_SEPARATORS) + ']'
LEAD_CLOSE_WHITESPACE = re.compile(rf'\A{_WHITESPACE}+|{_WHITESPACE}+\Z')
INSIDE_WHITESPACE = re.compile(rf'{_WHITESPACE}{{2,}}')


class NormalizationError(ValueError):
    """Raised when a message cannot go through diacritic normalization."""


@dataclass(frozen=True)
class Match:
    """A tripped vocabulary word.

    ``index`` points into the normalized message (or into its space-stripped
    form for spaced bypass hits), not into the message the caller passed in.
    """
    word: str
    index: int


@dataclass(frozen=True)
class FilterOptions:
    # Skip NFD -> strip combining marks -> NFC (ex: à -> a)
    disable_normalize: bool = False
    # Skip turning tabs into single spaces
    disable_spaced_tab: bool = False
    # Skip trimming and removal of whitespace runs (ex: hello[space][space]world -> helloworld)
    disable_multi_whitespace_stripping: bool = False
    # Skip removal of U+200B
    disable_zero_width_stripping: bool = False
    # Also look for words in the message with every space removed (ex: h e l l -> hell)
    enable_spaced_bypass: bool = False


DEFAULT_OPTIONS = FilterOptions()


# ==================== Normalization ====================

def strip_combining_marks(text: str) -> str:
    """Decompose, drop nonspacing marks (Mn), then recompose."""
    decomposed = unicodedata.normalize('NFD', text)
    stripped = ''.join(c for c in decomposed if unicodedata.category(c) != 'Mn')
    return unicodedata.normalize('NFC', stripped)


def strip_whitespace_runs(text: str) -> str:
    """Trim both ends, then delete every run of two or more whitespace characters."""
    text = LEAD_CLOSE_WHITESPACE.sub('', text)
    return INSIDE_WHITESPACE.sub('', text)


def normalize_message(message: str, options: Optional[FilterOptions] = None) -> str:
    """Run a message through the normalization pipeline.

    Stages, in order: lower-casing (always), combining mark removal,
    tab to space, zero-width space removal, whitespace trimming and run
    removal. Each stage after the first can be switched off through
    ``options``.

    Raises:
        NormalizationError: the message is not valid Unicode text (it holds
            unpaired surrogates) and mark removal is enabled.
    """
    options = options or DEFAULT_OPTIONS
    text = message.lower()

    if not options.disable_normalize:
        try:
            text.encode('utf-8')
        except UnicodeEncodeError as e:
            raise NormalizationError(
                f"cannot normalize message: {e.reason} at position {e.start}"
            ) from e
        text = strip_combining_marks(text)

    if not options.disable_spaced_tab:
        text = text.replace('\t', ' ')

    if not options.disable_zero_width_stripping:
        text = text.replace(ZERO_WIDTH_SPACE, '')

    if not options.disable_multi_whitespace_stripping:
        text = strip_whitespace_runs(text)

    return text


@lru_cache(maxsize=4096)
def _fold_word(word: str, strip_marks: bool) -> str:
    """Comparison form of a vocabulary entry: lower-cased, optionally mark-free."""
    folded = word.lower()
    if strip_marks:
        folded = strip_combining_marks(folded)
    return folded


# ==================== MAIN FILTER CLASS ====================
class SwearFilter:
    def __init__(self, words: Iterable[str] = (), options: Optional[FilterOptions] = None):
        self._options = options or DEFAULT_OPTIONS
        self._store = WordStore(words)

    @property
    def options(self) -> FilterOptions:
        return self._options

    def normalize(self, message: str) -> str:
        """Normalized form of ``message`` under this filter's options."""
        return normalize_message(message, self._options)

    def check(self, message: str) -> List[Match]:
        """Return every vocabulary word found in the normalized message.

        Each word is reported at most once, at its first occurrence. The
        order of the returned matches follows the vocabulary set and is not
        meaningful.
        """
        with self._store.reading() as words:
            if not words:
                return []

            try:
                message = self.normalize(message)
            except NormalizationError as e:
                logger.warning("Message rejected by normalization: %s", e)
                raise

            strip_marks = not self._options.disable_normalize
            tripped_words: List[Match] = []
            check_empty = False
            nospace_message = None

            for swear in words:
                if swear == EMPTY_MESSAGE_WORD:
                    check_empty = True
                    continue

                target = _fold_word(swear, strip_marks)

                idx = message.find(target)
                if idx != -1:
                    tripped_words.append(Match(word=swear, index=idx))
                    continue

                if self._options.enable_spaced_bypass:
                    if nospace_message is None:
                        nospace_message = message.replace(' ', '')
                    idx = nospace_message.find(target)
                    if idx != -1:
                        tripped_words.append(Match(word=swear, index=idx))

            if check_empty and message == '':
                tripped_words.append(Match(word=EMPTY_MESSAGE_WORD, index=0))

        logger.debug("Normalized message %r tripped %d word(s)", message, len(tripped_words))
        return tripped_words

    def add(self, *words: str) -> None:
        """Add words to the filter."""
        self._store.add(*words)

    def delete(self, *words: str) -> None:
        """Remove words from the filter; unknown words are ignored."""
        self._store.delete(*words)

    def words(self) -> List[str]:
        """Currently active words, in no particular order."""
        return self._store.words()
