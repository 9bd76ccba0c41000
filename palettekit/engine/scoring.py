"""
Fuzzy/substring scoring and the default filter.

Scoring tiers:
- Exact substring at a word boundary  -> 150 minus a small position penalty
- Exact substring elsewhere           -> 100 minus a small position penalty
- Subsequence (chars in order)        -> accumulated per-character points

The substring tier always outranks the subsequence tier for realistic
candidate lengths.
"""

from collections.abc import Sequence
from typing import Optional

from ..models import Command, GroupedCommands

WORD_SEPARATORS = frozenset(" -_")

SUBSTRING_BASE = 100.0
WORD_START_BONUS = 50.0
POSITION_PENALTY = 0.5
CHAR_MATCH_POINTS = 10
CONSECUTIVE_BONUS = 15
FUZZY_WORD_START_BONUS = 10


def _is_word_start(text: str, index: int) -> bool:
    return index == 0 or text[index - 1] in WORD_SEPARATORS


def fuzzy_score(text: str, query: str) -> Optional[float]:
    """
    Score how well ``query`` matches ``text``.

    Args:
        text: Candidate string (label or keyword)
        query: User query

    Returns:
        A score (higher is better), 0 for an empty query, or None when the
        query is not even a subsequence of the text.
    """
    if not query:
        return 0.0

    t = text.lower()
    q = query.lower()

    sub_index = t.find(q)
    if sub_index != -1:
        bonus = WORD_START_BONUS if _is_word_start(t, sub_index) else 0.0
        return SUBSTRING_BASE + bonus - sub_index * POSITION_PENALTY

    score = 0.0
    ti = 0
    qi = 0
    prev_match = -2

    while qi < len(q) and ti < len(t):
        if t[ti] == q[qi]:
            score += CHAR_MATCH_POINTS
            if ti == prev_match + 1:
                score += CONSECUTIVE_BONUS
            if _is_word_start(t, ti):
                score += FUZZY_WORD_START_BONUS
            prev_match = ti
            qi += 1
        ti += 1

    return score if qi == len(q) else None


def best_score(command: Command, query: str) -> Optional[float]:
    """Best score across a command's label and keywords, or None."""
    scores = [fuzzy_score(command.label, query)]
    scores.extend(fuzzy_score(keyword, query) for keyword in command.keywords)
    matched = [s for s in scores if s is not None]
    return max(matched) if matched else None


def default_filter(items: Sequence[Command], query: str) -> list[Command]:
    """
    Keep matching commands, best first.

    An empty query returns the items in their original order. Equal scores
    keep input order (``sorted`` is stable).
    """
    if not query:
        return list(items)

    scored: list[tuple[float, Command]] = []
    for item in items:
        score = best_score(item, query)
        if score is not None:
            scored.append((score, item))

    scored.sort(key=lambda pair: -pair[0])
    return [item for _, item in scored]


def group_commands(commands: Sequence[Command]) -> list[GroupedCommands]:
    """Cluster commands by group, in first-seen group order."""
    order: list[Optional[str]] = []
    buckets: dict[Optional[str], list[Command]] = {}

    for command in commands:
        if command.group not in buckets:
            buckets[command.group] = []
            order.append(command.group)
        buckets[command.group].append(command)

    return [GroupedCommands(group=g, commands=buckets[g]) for g in order]
