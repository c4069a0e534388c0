"""Reserved words: short codes which must never be assigned or resolved

Reserved words are the names of system routes (e.g. /ping). A generated code
equal to one of them is discarded, and a redirect request for one is refused
before the data store is queried.

Classes:
    ReservedWordFilter:
        Immutable set of reserved words with exact, case-sensitive matching.

Example:
    >>> from fastshortener.utils.reserved import ReservedWordFilter
    >>> reserved = ReservedWordFilter({'ping', 'error'})
    >>> reserved.is_reserved('ping')
    True
    >>> reserved.is_reserved('Ping')
    False
"""

from collections.abc import Iterable

from fastshortener.constants import Defaults


class ReservedWordFilter:
    """Reject short codes which collide with reserved route names.

    The word set is frozen at construction. Matching is exact and case-sensitive.

    Example:
        >>> reserved = ReservedWordFilter({'ping', 'error'})
        >>> 'aBcDeFgH' in reserved
        False
    """

    def __init__(self, words: Iterable[str] = Defaults.RESERVED_WORDS):
        if isinstance(words, str):
            raise TypeError('Reserved words must be an iterable of strings, not a single string.')

        words = frozenset(words)
        if not all(isinstance(word, str) for word in words):
            raise TypeError(f'Reserved words must be strings (given words: {sorted(map(repr, words))}).')

        self._words = words

    @property
    def words(self) -> frozenset[str]:
        return self._words

    def is_reserved(self, code: str) -> bool:
        return code in self._words

    def __contains__(self, code: object) -> bool:
        return code in self._words

    def __repr__(self) -> str:
        return f'ReservedWordFilter({sorted(self._words)!r})'
