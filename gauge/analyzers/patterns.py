"""
Password Pattern Detector
==========================

Finds the low-entropy structures people build passwords from and prices
each one in bits, so the estimator can charge a password for the
generating pattern instead of for every character independently.

Pattern families:
- Repeated characters (aaa, 1111)
- Sequential runs with a constant step (abcd, 1357, zyx)
- Keyboard walks along a QWERTY row (qwerty, asdf, 7890, !@#$)
- Dictionary substrings, case-insensitive and through l33t
  substitutions (P@ssw0rd)
- Years 1900-2099

Whole-password transformations (repetition, mirror, case swap) need the
estimator itself to price their base and live in
:mod:`gauge.analyzers.estimator`.

References:
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
    - Weir, M., Aggarwal, S., de Medeiros, B., & Glodek, B. (2009).
      Password Cracking Using Probabilistic Context-Free Grammars.
      IEEE S&P.
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
"""

from __future__ import annotations

import math
import re

from gauge.analyzers.charset import POOL_SIZES, char_class
from gauge.core.models import CharClass, PatternMatch


# ===================================================================== #
#  Pattern Databases
# ===================================================================== #

# Most common leaked passwords, most frequent first
_COMMON_PASSWORDS: tuple[str, ...] = (
    "password", "123456", "12345678", "qwerty", "123456789", "12345",
    "1234", "111111", "1234567", "dragon", "123123", "baseball",
    "abc123", "football", "monkey", "letmein", "696969", "shadow",
    "master", "666666", "qwertyuiop", "123321", "mustang", "1234567890",
    "michael", "654321", "superman", "1qaz2wsx", "7777777", "121212",
    "000000", "qazwsx", "123qwe", "killer", "trustno1", "jordan",
    "jennifer", "zxcvbnm", "asdfgh", "hunter", "buster", "soccer",
    "harley", "batman", "andrew", "tigger", "sunshine", "iloveyou",
    "2000", "charlie", "robert", "thomas", "hockey", "ranger",
    "daniel", "starwars", "klaster", "112233", "george", "computer",
    "michelle", "jessica", "pepper", "1111", "zxcvbn", "555555",
    "11111111", "131313", "freedom", "777777", "pass", "maggie",
    "159753", "aaaaaa", "ginger", "princess", "joshua", "cheese",
    "amanda", "summer", "love", "ashley", "nicole", "chelsea",
    "biteme", "matthew", "access", "yankees", "987654321", "dallas",
    "austin", "thunder", "taylor", "matrix", "admin", "welcome",
    "login", "passw0rd", "changeme", "default", "secret", "hunter2",
    "qwerty123", "password1", "password123", "1q2w3e4r", "zaq1zaq1",
    "azerty", "solo", "flower", "hello", "whatever", "dragon1",
)

# Common English words and password fragments (length >= 4)
_COMMON_WORDS: tuple[str, ...] = (
    "that", "have", "with", "this", "from", "they", "will", "would",
    "there", "their", "what", "about", "which", "when", "make", "like",
    "time", "just", "know", "take", "people", "into", "year", "your",
    "good", "some", "could", "them", "other", "than", "then", "look",
    "only", "come", "over", "think", "also", "back", "after", "work",
    "first", "well", "even", "want", "because", "these", "give",
    "most", "life", "name", "very", "home", "world", "hand", "high",
    "place", "night", "great", "keep", "help", "tell", "still",
    "child", "here", "word", "never", "last", "long", "must", "house",
    "turn", "move", "live", "found", "money", "water", "every",
    "school", "power", "same", "part", "number", "head", "side",
    "away", "small", "state", "point", "form", "game", "under",
    "light", "story", "city", "open", "begin", "girl", "line", "food",
    "body", "left", "face", "being", "family", "friend", "mother",
    "father", "young", "real", "book", "read", "black", "white",
    "start", "earth", "heart", "music", "spider", "winter", "spring",
    "autumn", "eagle", "tiger", "lion", "wolf", "bear", "falcon",
    "phoenix", "angel", "devil", "demon", "magic", "wizard", "ninja",
    "orange", "purple", "silver", "golden", "diamond", "cookie",
    "coffee", "banana", "apple", "cherry", "happy", "lucky", "sweet",
    "blue", "green", "yellow", "king", "queen", "star", "moon", "sunny",
    "fire", "rock", "blood", "cool", "baby", "test", "user", "root",
    "guest", "temp", "demo", "system", "server", "network", "internet",
    "security", "private", "public", "backup", "manager", "service",
    "january", "february", "march", "april", "june", "july", "august",
    "september", "october", "november", "december", "monday", "friday",
)


def _rank_words(*lists: tuple[str, ...]) -> dict[str, int]:
    ranks: dict[str, int] = {}
    for words in lists:
        for word in words:
            ranks.setdefault(word, len(ranks) + 1)
    return ranks


_WORD_RANKS: dict[str, int] = _rank_words(_COMMON_PASSWORDS, _COMMON_WORDS)
_MAX_WORD_LENGTH: int = max(len(word) for word in _WORD_RANKS)

# L33t speak substitution map (one reading per symbol)
_LEET_MAP: dict[str, str] = {
    "4": "a", "@": "a", "8": "b", "(": "c", "3": "e",
    "6": "g", "9": "g", "#": "h", "1": "i", "!": "i",
    "|": "l", "0": "o", "5": "s", "$": "s", "7": "t",
    "+": "t", "2": "z",
}

# QWERTY rows, unshifted letters and digits plus the shifted digit row
_KEYBOARD_ROWS: tuple[str, ...] = (
    "`1234567890-=",
    "~!@#$%^&*()_+",
    "qwertyuiop[]\\",
    "asdfghjkl;'",
    "zxcvbnm,./",
)
_KEYBOARD_INDEX: tuple[dict[str, int], ...] = tuple(
    {ch: idx for idx, ch in enumerate(row)} for row in _KEYBOARD_ROWS
)

_OBVIOUS_STARTS = frozenset("aAzZ019")
_SEQUENCE_CLASSES = frozenset({CharClass.LOWER, CharClass.UPPER, CharClass.DIGIT})
_YEAR_RE = re.compile(r"(?:19|20)[0-9]{2}")
_YEAR_BITS = math.log2(200)

_MIN_RUN = 3


class PatternDetector:
    """Detects weakening patterns in a password and prices them in bits.

    Every detector runs in time linear in the password length (dictionary
    lookups are bounded by the longest known word), so very long inputs
    stay cheap.

    Usage::

        detector = PatternDetector()
        for match in detector.detect("Summer2024!"):
            print(match.kind, match.start, match.end, match.bits)
    """

    def __init__(self, min_word_length: int = 4, max_sequence_step: int = 5) -> None:
        """Initialise the detector.

        Args:
            min_word_length: Shortest dictionary substring to report.
            max_sequence_step: Largest code-point step for sequences.
        """
        self.min_word_length = max(1, min_word_length)
        self.max_sequence_step = max(1, max_sequence_step)

    def detect(self, password: str) -> list[PatternMatch]:
        """Return every pattern match found in *password*.

        Matches may overlap; the estimator picks the cheapest cover.
        """
        if len(password) < _MIN_RUN:
            return []

        matches: list[PatternMatch] = []
        matches.extend(self._repeat_matches(password))
        matches.extend(self._sequence_matches(password))
        matches.extend(self._keyboard_matches(password))
        matches.extend(self._dictionary_matches(password))
        matches.extend(self._year_matches(password))
        return matches

    # ------------------------------------------------------------------ #
    #  Individual Detectors
    # ------------------------------------------------------------------ #

    @staticmethod
    def _repeat_matches(password: str) -> list[PatternMatch]:
        """Runs of one repeated character: pick the character, pick the count."""
        matches: list[PatternMatch] = []
        n = len(password)
        i = 0
        while i < n:
            j = i + 1
            while j < n and password[j] == password[i]:
                j += 1
            run = j - i
            if run >= _MIN_RUN:
                pool = POOL_SIZES[char_class(password[i])]
                matches.append(PatternMatch(
                    kind="repeat",
                    start=i,
                    end=j,
                    bits=math.log2(pool) + math.log2(run),
                    detail=f"one character repeated {run} times",
                ))
            i = j
        return matches

    def _sequence_matches(self, password: str) -> list[PatternMatch]:
        """Runs inside one class with a constant code-point step."""
        matches: list[PatternMatch] = []
        n = len(password)
        i = 0
        while i < n - 2:
            cls = char_class(password[i])
            step = ord(password[i + 1]) - ord(password[i])
            if (
                cls not in _SEQUENCE_CLASSES
                or char_class(password[i + 1]) is not cls
                or not 0 < abs(step) <= self.max_sequence_step
            ):
                i += 1
                continue

            j = i + 1
            while (
                j + 1 < n
                and ord(password[j + 1]) - ord(password[j]) == step
                and char_class(password[j + 1]) is cls
            ):
                j += 1

            length = j - i + 1
            if length < _MIN_RUN:
                i += 1
                continue

            start_bits = 2.0 if password[i] in _OBVIOUS_STARTS else math.log2(POOL_SIZES[cls])
            bits = start_bits + math.log2(length) + math.log2(abs(step))
            if step < 0:
                bits += 1.0
            matches.append(PatternMatch(
                kind="sequence",
                start=i,
                end=j + 1,
                bits=bits,
                detail=(
                    f"{'descending' if step < 0 else 'ascending'} run of "
                    f"{length}, step {abs(step)}"
                ),
            ))
            # The last character may open the next run
            i = j
        return matches

    @staticmethod
    def _keyboard_matches(password: str) -> list[PatternMatch]:
        """Walks of adjacent keys along one keyboard row, either direction."""
        matches: list[PatternMatch] = []
        lowered = _fold_case(password)
        n = len(lowered)

        for row, index in zip(_KEYBOARD_ROWS, _KEYBOARD_INDEX):
            for direction in (1, -1):
                i = 0
                while i < n:
                    if lowered[i] not in index:
                        i += 1
                        continue
                    j = i
                    while (
                        j + 1 < n
                        and lowered[j + 1] in index
                        and index[lowered[j + 1]] == index[lowered[j]] + direction
                    ):
                        j += 1
                    length = j - i + 1
                    if length >= _MIN_RUN:
                        bits = math.log2(len(row)) + math.log2(length)
                        if direction < 0:
                            bits += 1.0
                        if any(ch.isupper() for ch in password[i : j + 1]):
                            bits += 1.0
                        matches.append(PatternMatch(
                            kind="keyboard",
                            start=i,
                            end=j + 1,
                            bits=bits,
                            detail=f"keyboard walk of {length} keys"
                            + (" (reversed)" if direction < 0 else ""),
                        ))
                    i = j + 1
        return matches

    def _dictionary_matches(self, password: str) -> list[PatternMatch]:
        """Common passwords and words, case-insensitive and de-l33ted.

        Inside a run of one repeated character only tokens touching an end
        of the run are reported; the repeat match prices the interior.
        """
        matches: list[PatternMatch] = []
        lowered = _fold_case(password)
        deleeted = "".join(_LEET_MAP.get(ch, ch) for ch in lowered)
        n = len(lowered)
        run_start, run_end = _run_bounds(lowered)

        for i in range(n):
            longest = min(_MAX_WORD_LENGTH, n - i)
            interior = i > run_start[i]
            if interior and run_end[i] - i > longest:
                continue
            for length in range(self.min_word_length, longest + 1):
                if interior and i + length < run_end[i]:
                    continue
                token = lowered[i : i + length]
                substitutions = 0
                rank = _WORD_RANKS.get(token)
                if rank is None:
                    plain = deleeted[i : i + length]
                    if plain == token:
                        continue
                    rank = _WORD_RANKS.get(plain)
                    if rank is None:
                        continue
                    substitutions = sum(1 for a, b in zip(token, plain) if a != b)

                bits = (
                    math.log2(rank + 1)
                    + _case_variation_bits(password[i : i + length])
                    + substitutions
                )
                detail = f"common word, rank {rank}"
                if substitutions:
                    detail += f", {substitutions} l33t substitution(s)"
                matches.append(PatternMatch(
                    kind="dictionary",
                    start=i,
                    end=i + length,
                    bits=bits,
                    detail=detail,
                ))
        return matches

    @staticmethod
    def _year_matches(password: str) -> list[PatternMatch]:
        """Four-digit years between 1900 and 2099."""
        return [
            PatternMatch(
                kind="year",
                start=match.start(),
                end=match.end(),
                bits=_YEAR_BITS,
                detail="year 1900-2099",
            )
            for match in _YEAR_RE.finditer(password)
        ]


def _run_bounds(text: str) -> tuple[list[int], list[int]]:
    """Start and end of the same-character run holding each position."""
    n = len(text)
    starts = [0] * n
    ends = [0] * n
    i = 0
    while i < n:
        j = i + 1
        while j < n and text[j] == text[i]:
            j += 1
        for k in range(i, j):
            starts[k] = i
            ends[k] = j
        i = j
    return starts, ends


def _case_variation_bits(token: str) -> float:
    """Extra bits for the capitalisation of a dictionary token.

    All lowercase costs nothing; a capitalised first letter or all caps
    costs one bit; otherwise count the ways to place the minority case.
    """
    upper = sum(1 for ch in token if ch.isupper())
    lower = sum(1 for ch in token if ch.islower())
    if upper == 0:
        return 0.0
    if lower == 0 or (upper == 1 and token[0].isupper()):
        return 1.0
    variations = sum(math.comb(upper + lower, k) for k in range(1, min(upper, lower) + 1))
    return math.log2(variations)


def _fold_case(password: str) -> str:
    """Lowercase *password* without changing its length.

    A few code points lowercase to two characters ("İ"); those are kept
    as-is so match offsets stay aligned with the original text.
    """
    folded: list[str] = []
    for ch in password:
        lowered = ch.lower()
        folded.append(lowered if len(lowered) == 1 else ch)
    return "".join(folded)
