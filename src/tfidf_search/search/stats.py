"""Term weighting helpers for TF-IDF scoring.

These stay independent of the index so the weighting rules can be unit
tested on plain integers.
"""

from __future__ import annotations

import math


# Weight used whenever tf or idf would otherwise be zero or undefined: a term
# missing from the document, a term unseen corpus-wide, or an empty corpus.
MIN_WEIGHT = 1.0


def calculate_tf(frequency: int) -> float:
    """Return the raw occurrence count, floored at ``MIN_WEIGHT`` for absent terms."""

    if frequency <= 0:
        return MIN_WEIGHT
    return float(frequency)


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return ``1 + ln(total_docs / doc_freq)``.

    Strictly decreasing in ``doc_freq`` for a fixed corpus size. Falls back
    to ``MIN_WEIGHT`` when the term is unseen or the corpus is empty, so
    there is never a division by zero.
    """

    if total_docs <= 0 or doc_freq <= 0:
        return MIN_WEIGHT
    return 1.0 + math.log(total_docs / doc_freq)
