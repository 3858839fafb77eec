"""Porter stemmer for English tokens.

Each step strips or rewrites one family of suffixes. The *measure* of a stem
(the number of vowel-run -> consonant-run transitions) gates most rewrites so
that short stems are left alone: ``feed`` stays ``feed`` while ``agreed``
becomes ``agree``. Rule order matters; the first matching suffix in a step
decides the outcome even when its gate rejects the rewrite.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

VOWELS = frozenset("aeiou")

STEP2_SUFFIXES: Tuple[Tuple[str, str], ...] = (
    ("ational", "ate"),
    ("tional", "tion"),
    ("enci", "ence"),
    ("anci", "ance"),
    ("izer", "ize"),
    ("abli", "able"),
    ("alli", "al"),
    ("entli", "ent"),
    ("eli", "e"),
    ("ousli", "ous"),
    ("ization", "ize"),
    ("ation", "ate"),
    ("ator", "ate"),
    ("alism", "al"),
    ("iveness", "ive"),
    ("fulness", "ful"),
    ("ousness", "ous"),
    ("aliti", "al"),
    ("iviti", "ive"),
    ("biliti", "ble"),
)

STEP3_SUFFIXES: Tuple[Tuple[str, str], ...] = (
    ("icate", "ic"),
    ("ative", ""),
    ("alize", "al"),
    ("iciti", "ic"),
    ("ical", "ic"),
    ("ful", ""),
    ("ness", ""),
)

STEP4_SUFFIXES: Tuple[str, ...] = (
    "al", "ance", "ence", "er", "ic", "able", "ible", "ant", "ement",
    "ment", "ent", "ion", "ou", "ism", "ate", "iti", "ous", "ive", "ize",
)


def _is_vowel(char: str) -> bool:
    return char in VOWELS


def measure(stem: str) -> int:
    """Count vowel-sequence to consonant-sequence transitions in ``stem``."""
    count = 0
    in_vowel = False
    for char in stem:
        if _is_vowel(char):
            in_vowel = True
        elif in_vowel:
            count += 1
            in_vowel = False
    return count


def _contains_vowel(stem: str) -> bool:
    return any(_is_vowel(c) for c in stem)


def _ends_double_consonant(word: str) -> bool:
    return len(word) >= 2 and word[-1] == word[-2] and not _is_vowel(word[-1])


def _ends_cvc(word: str) -> bool:
    if len(word) < 3:
        return False
    c1, v, c2 = word[-3], word[-2], word[-1]
    return not _is_vowel(c1) and _is_vowel(v) and not _is_vowel(c2) and c2 not in "wxy"


class PorterStemmer:
    """Stateless suffix-stripping stemmer; safe to share between threads."""

    def stem(self, word: str) -> str:
        if not word or not word.strip() or len(word) < 3:
            return word.lower()
        word = word.lower()
        for step in (
            self._step1a,
            self._step1b,
            self._step1c,
            self._step2,
            self._step3,
            self._step4,
            self._step5,
        ):
            word = step(word)
        return word

    def stem_all(self, tokens: Iterable[str]) -> List[str]:
        return [self.stem(t) for t in tokens]

    @staticmethod
    def _step1a(word: str) -> str:
        if word.endswith("sses") or word.endswith("ies"):
            return word[:-2]
        if word.endswith("ss"):
            return word
        if word.endswith("s"):
            return word[:-1]
        return word

    @staticmethod
    def _step1b(word: str) -> str:
        if word.endswith("eed"):
            stem = word[:-3]
            return stem + "ee" if measure(stem) > 0 else word

        if word.endswith("ed") and _contains_vowel(word[:-2]):
            word = word[:-2]
        elif word.endswith("ing") and _contains_vowel(word[:-3]):
            word = word[:-3]
        else:
            return word

        # restore a silent e or undo consonant doubling left by the stripped suffix
        if word.endswith(("at", "bl", "iz")):
            return word + "e"
        if _ends_double_consonant(word) and word[-1] not in "lsz":
            return word[:-1]
        if measure(word) == 1 and _ends_cvc(word):
            return word + "e"
        return word

    @staticmethod
    def _step1c(word: str) -> str:
        if word.endswith("y") and _contains_vowel(word[:-1]):
            return word[:-1] + "i"
        return word

    @staticmethod
    def _replace_suffix(word: str, table: Tuple[Tuple[str, str], ...]) -> str:
        for suffix, replacement in table:
            if word.endswith(suffix):
                stem = word[: -len(suffix)]
                return stem + replacement if measure(stem) > 0 else word
        return word

    def _step2(self, word: str) -> str:
        return self._replace_suffix(word, STEP2_SUFFIXES)

    def _step3(self, word: str) -> str:
        return self._replace_suffix(word, STEP3_SUFFIXES)

    @staticmethod
    def _step4(word: str) -> str:
        for suffix in STEP4_SUFFIXES:
            if not word.endswith(suffix):
                continue
            stem = word[: -len(suffix)]
            if measure(stem) > 1:
                if suffix != "ion" or stem.endswith(("s", "t")):
                    return stem
            return word
        return word

    @staticmethod
    def _step5(word: str) -> str:
        if word.endswith("e"):
            stem = word[:-1]
            m = measure(stem)
            if m > 1 or (m == 1 and not _ends_cvc(stem)):
                return stem
        if word.endswith("ll") and measure(word[:-1]) > 1:
            return word[:-1]
        return word


_default_stemmer = PorterStemmer()


def stem(word: str) -> str:
    return _default_stemmer.stem(word)


def stem_all(tokens: Iterable[str]) -> List[str]:
    return _default_stemmer.stem_all(tokens)


__all__ = ["PorterStemmer", "measure", "stem", "stem_all"]
