"""File name search with an exact, additive relevance score."""

from __future__ import annotations

from typing import Iterable

from codepad.services.file_store import FileRecord

EXACT_BONUS = 100
PREFIX_BONUS = 50
CONTAINS_BONUS = 25
PATH_BONUS = 10
BREVITY_BASE = 20


def match_score(full_name: str, basename: str, term: str) -> int:
    """Score already lower-cased names against a lower-cased term."""
    score = 0
    if basename == term:
        score += EXACT_BONUS
    if basename.startswith(term):
        score += PREFIX_BONUS
    if term in basename:
        score += CONTAINS_BONUS
    if term in full_name:
        score += PATH_BONUS
    # Shorter names win ties
    score += max(0, BREVITY_BASE - len(basename))
    return score


def rank(query: str, records: Iterable[FileRecord]) -> list[tuple[FileRecord, int]]:
    """Matching records with scores, best first; ties keep collection order."""
    term = query.lower()
    if not term:
        return []

    hits: list[tuple[FileRecord, int]] = []
    for record in records:
        if record.is_placeholder:
            continue
        full_name = record.name.lower()
        basename = record.basename.lower()
        if term not in full_name:
            continue
        score = match_score(full_name, basename, term)
        if score > 0:
            hits.append((record, score))

    # list.sort is stable
    hits.sort(key=lambda hit: hit[1], reverse=True)
    return hits


def search(query: str, records: Iterable[FileRecord]) -> list[FileRecord]:
    return [record for record, _ in rank(query, records)]
