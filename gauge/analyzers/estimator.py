"""
Password Entropy Estimator
===========================

Estimates the effective entropy of a password in whole bits.

Two models are computed and the lower one is reported, because the
point of the estimate is to flag weakness:

1. Character-pool model: ``length * (log2(N) + log2(k))`` where ``N`` is
   the summed pool size of the character classes present and ``k`` the
   number of classes, i.e. the symbol plus the class layout of every
   position.
2. Structural model: the cheapest segmentation of the password into
   detected patterns (see :mod:`gauge.analyzers.patterns`) and
   brute-forced characters, chosen by dynamic programming. Whole-password
   transformations of a shorter base (``base * n``, ``base + reversed``,
   ``base + base.swapcase()``) are priced through the base's own
   estimate.

The result is ``floor(min(pool, structural))``. Estimation is a pure
function: no state survives a call and the password is not retained.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
    - Knuth, D. E., Morris, J. H., & Pratt, V. R. (1977). Fast Pattern
      Matching in Strings. SIAM Journal on Computing, 6(2).
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Optional

from gauge.analyzers.charset import classes_present, per_char_bits, pool_size
from gauge.analyzers.patterns import PatternDetector
from gauge.core.models import EstimateBreakdown, PatternMatch


# Absorbs float noise such as 63.99999999 for an exact 64-bit product
_FLOOR_EPSILON = 1e-9


class QualityEstimator:
    """Estimates password entropy in bits.

    Usage::

        estimator = QualityEstimator()
        bits = estimator.estimate_bits("Tr0ub4dor&3xQ9")
        breakdown = estimator.explain("Tr0ub4dor&3xQ9")
    """

    def __init__(self, detector: Optional[PatternDetector] = None) -> None:
        """Initialise the estimator.

        Args:
            detector: Pattern detector to use. Defaults to
                :class:`PatternDetector` with its default settings.
        """
        self._detector = detector or PatternDetector()

    def estimate_bits(self, password: str) -> int:
        """Estimate the entropy of *password* in whole bits.

        Total over all strings: the empty string yields 0 and no input
        raises.

        Args:
            password: Password text, already resolved by the caller.

        Returns:
            Non-negative integer estimate, floored.
        """
        if not password:
            return 0
        return _floor_bits(self._estimate(password))

    def explain(self, password: str) -> EstimateBreakdown:
        """Estimate *password* and report how the estimate was reached.

        Args:
            password: Password text.

        Returns:
            EstimateBreakdown with both model values and the chosen
            pattern matches. The password text is not included.
        """
        if not password:
            return EstimateBreakdown()

        classes = classes_present(password)
        rate = per_char_bits(classes)
        pool_bits = len(password) * rate
        structural_bits, chosen = self._cheapest_cover(password, rate)

        return EstimateBreakdown(
            length=len(password),
            pool_size=pool_size(classes),
            char_classes=classes,
            pool_bits=round(pool_bits, 4),
            structural_bits=round(structural_bits, 4),
            matches=chosen,
            bits=_floor_bits(min(pool_bits, structural_bits)),
        )

    # ------------------------------------------------------------------ #
    #  Models
    # ------------------------------------------------------------------ #

    def _estimate(self, password: str) -> float:
        """Unrounded estimate: the lower of the two models."""
        rate = per_char_bits(classes_present(password))
        pool_bits = len(password) * rate
        structural_bits, _ = self._cheapest_cover(password, rate)
        return min(pool_bits, structural_bits)

    def _cheapest_cover(
        self, password: str, rate: float
    ) -> tuple[float, list[PatternMatch]]:
        """Minimum-cost segmentation into patterns and brute-forced characters.

        ``best[i]`` is the cheapest cost of ``password[:i]``; a character
        not covered by a pattern costs *rate*.

        Returns:
            Tuple of (total bits, matches on the cheapest path in order).
        """
        n = len(password)
        matches = self._detector.detect(password)
        matches.extend(self._transformation_matches(password))

        by_end: dict[int, list[PatternMatch]] = defaultdict(list)
        for match in matches:
            by_end[match.end].append(match)

        best: list[float] = [0.0] * (n + 1)
        back: list[Optional[PatternMatch]] = [None] * (n + 1)
        for i in range(1, n + 1):
            best[i] = best[i - 1] + rate
            for match in by_end.get(i, ()):
                cost = best[match.start] + match.bits
                if cost < best[i]:
                    best[i] = cost
                    back[i] = match

        chosen: list[PatternMatch] = []
        i = n
        while i > 0:
            match = back[i]
            if match is None:
                i -= 1
            else:
                chosen.append(match)
                i = match.start
        chosen.reverse()
        return best[n], chosen

    def _transformation_matches(self, password: str) -> list[PatternMatch]:
        """Whole-password repetition, mirror and case swap of a shorter base.

        Each base is strictly shorter than the password, so the recursion
        through :meth:`_estimate` terminates. A periodic password is priced
        through its repeated unit only, which keeps the recursion to one
        short base.
        """
        n = len(password)
        if n < 2:
            return []

        matches: list[PatternMatch] = []

        period = _smallest_period(password)
        if period < n:
            count = n // period
            matches.append(PatternMatch(
                kind="repetition",
                start=0,
                end=n,
                bits=self._estimate(password[:period]) + math.log2(count),
                detail=f"{period}-character unit repeated {count} times",
            ))
            return matches

        if n >= 3 and password == password[::-1]:
            base = password[: (n + 1) // 2]
            matches.append(PatternMatch(
                kind="mirror",
                start=0,
                end=n,
                bits=self._estimate(base) + 1.0,
                detail=f"{len(base)}-character base followed by its reverse",
            ))

        if n % 2 == 0:
            half = password[: n // 2]
            swapped = half.swapcase()
            if swapped != half and len(swapped) == len(half) and password[n // 2 :] == swapped:
                matches.append(PatternMatch(
                    kind="case_swap",
                    start=0,
                    end=n,
                    bits=self._estimate(half) + 1.0,
                    detail=f"{len(half)}-character base followed by its case swap",
                ))

        return matches


def _smallest_period(text: str) -> int:
    """Length of the shortest unit that *text* is an exact repetition of.

    Uses the Knuth-Morris-Pratt prefix function; returns ``len(text)``
    when the text is not a repetition.
    """
    n = len(text)
    prefix = [0] * n
    k = 0
    for i in range(1, n):
        while k and text[i] != text[k]:
            k = prefix[k - 1]
        if text[i] == text[k]:
            k += 1
        prefix[i] = k
    period = n - prefix[-1]
    return period if n % period == 0 else n


def _floor_bits(bits: float) -> int:
    return max(0, math.floor(bits + _FLOOR_EPSILON))


_DEFAULT_ESTIMATOR = QualityEstimator()


def estimate_bits(password: str) -> int:
    """Estimate *password* entropy in bits with the default estimator."""
    return _DEFAULT_ESTIMATOR.estimate_bits(password)
