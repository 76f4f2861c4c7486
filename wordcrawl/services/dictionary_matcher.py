from typing import AbstractSet, Iterable, Set

from wordcrawl.domain.config import DEFAULT_MINIMUM_WORD_LENGTH


def match_words(text: str, dictionary: AbstractSet[str], minimum_word_length: int = DEFAULT_MINIMUM_WORD_LENGTH) -> Set[str]:
    """Return the dictionary words found in `text`.

    Tokens are split on whitespace only and lowercased; punctuation stays
    attached, so "dog," does not match "dog". Tokens of length
    `minimum_word_length` or shorter are ignored.
    """
    if not text:
        return set()
    found = set()
    for token in text.split():
        word = token.lower()
        if len(word) > minimum_word_length and word in dictionary:
            found.add(word)
    return found


class DictionaryMatcher:
    def __init__(self, dictionary: Iterable[str], minimum_word_length: int = DEFAULT_MINIMUM_WORD_LENGTH):
        self.dictionary = frozenset(w.lower() for w in dictionary)
        self.minimum_word_length = int(minimum_word_length)

    def match(self, text: str) -> Set[str]:
        return match_words(text, self.dictionary, self.minimum_word_length)
