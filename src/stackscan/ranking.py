"""Scoring used to pick one candidate when a line holds nested frames."""
from __future__ import annotations

import logging
import re
from typing import Iterable

from .frames import Candidate
from .paths import count_separators, has_separator

log = logging.getLogger(__name__)

POSITION_WEIGHT = 0.5
SEPARATOR_WEIGHT = 0.03
TAG_PENALTY = 1.0
SEPARATOR_BONUS = 0.5
EXTENSION_BONUS = 0.5
DISQUALIFIED = 100.0

_NATIVE = re.compile(r"\(?native\)?", re.IGNORECASE)
_ANGLE_TAG = re.compile(r"<[^>]+>")
_EXTENSION = re.compile(r"\.[a-z0-9]+$", re.IGNORECASE)


def score_candidate(candidate: Candidate) -> float:
    """Earlier chunks, deeper paths and real file extensions score higher."""
    path = candidate.path
    score = POSITION_WEIGHT / (candidate.index + 1)

    if path is None or _NATIVE.fullmatch(path.strip()):
        return score - DISQUALIFIED

    score += SEPARATOR_WEIGHT * count_separators(path)
    if _ANGLE_TAG.search(path):
        score -= TAG_PENALTY
    if has_separator(path):
        score += SEPARATOR_BONUS
    if _EXTENSION.search(path):
        score += EXTENSION_BONUS
    return score


def _path_length(candidate: Candidate) -> int:
    return len(candidate.path or "")


def rank_candidates(candidates: Iterable[Candidate]) -> Candidate | None:
    """Return the highest scoring candidate; ties go to the longer path."""
    best: Candidate | None = None
    best_score = 0.0
    for candidate in candidates:
        score = score_candidate(candidate)
        log.debug("candidate %r scored %.3f", candidate, score)
        if (
            best is None
            or score > best_score
            or (score == best_score and _path_length(candidate) > _path_length(best))
        ):
            best, best_score = candidate, score
    return best
