from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from swear_filter import EMPTY_MESSAGE_WORD, FilterOptions, SwearFilter
from word_store import load_word_file, split_words

# Load .env before any Settings() reads the environment
load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")


def _env_str(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_flag(name: str) -> bool:
    """True when the variable holds 1/true/yes/on (any case)."""
    return os.getenv(name, "").strip().lower() in _TRUTHY


class Settings(BaseModel):
    """Filter configuration derived from SWEARFILTER_* environment variables."""

    LOG_LEVEL: str = Field(default_factory=lambda: _env_str("SWEARFILTER_LOG_LEVEL", "WARNING").upper())

    # Vocabulary seeding
    WORDS: str = Field(default_factory=lambda: _env_str("SWEARFILTER_WORDS"))
    WORDS_FILE: str = Field(default_factory=lambda: _env_str("SWEARFILTER_WORDS_FILE"))
    FLAG_EMPTY: bool = Field(default_factory=lambda: _env_flag("SWEARFILTER_FLAG_EMPTY"))

    # Pipeline switches
    DISABLE_NORMALIZE: bool = Field(default_factory=lambda: _env_flag("SWEARFILTER_DISABLE_NORMALIZE"))
    DISABLE_SPACED_TAB: bool = Field(default_factory=lambda: _env_flag("SWEARFILTER_DISABLE_SPACED_TAB"))
    DISABLE_MULTI_WHITESPACE: bool = Field(default_factory=lambda: _env_flag("SWEARFILTER_DISABLE_MULTI_WHITESPACE"))
    DISABLE_ZERO_WIDTH: bool = Field(default_factory=lambda: _env_flag("SWEARFILTER_DISABLE_ZERO_WIDTH"))
    ENABLE_SPACED_BYPASS: bool = Field(default_factory=lambda: _env_flag("SWEARFILTER_ENABLE_SPACED_BYPASS"))

    def filter_options(self) -> FilterOptions:
        return FilterOptions(
            disable_normalize=self.DISABLE_NORMALIZE,
            disable_spaced_tab=self.DISABLE_SPACED_TAB,
            disable_multi_whitespace_stripping=self.DISABLE_MULTI_WHITESPACE,
            disable_zero_width_stripping=self.DISABLE_ZERO_WIDTH,
            enable_spaced_bypass=self.ENABLE_SPACED_BYPASS,
        )

    def initial_words(self) -> List[str]:
        """Words from SWEARFILTER_WORDS, then the word file, then the empty-message sentinel."""
        words = split_words(self.WORDS)
        if self.WORDS_FILE:
            words.extend(load_word_file(self.WORDS_FILE))
        if self.FLAG_EMPTY:
            words.append(EMPTY_MESSAGE_WORD)
        return list(dict.fromkeys(words))

    def build_filter(self) -> SwearFilter:
        return SwearFilter(self.initial_words(), self.filter_options())
