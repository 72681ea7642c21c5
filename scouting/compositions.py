from __future__ import annotations

from typing import List, Optional, Sequence

from .models import CompositionData, CompositionInsight, DraftPriority
from .thresholds import percent

MAX_COMPOSITIONS = 5
MIN_COMPOSITION_GAMES = 2
MAX_DRAFT_ENTRIES = 3


def _draft_line(prefix: str, entries: Sequence[DraftPriority]) -> str:
    parts = [f"{e.character} ({percent(e.rate)}%)" for e in entries[:MAX_DRAFT_ENTRIES]]
    return f"{prefix}: {', '.join(parts)}"


def extract_compositions(
    data: Optional[CompositionData], matches_analyzed: int
) -> List[CompositionInsight]:
    """Rank the most frequent compositions and summarise draft priorities.

    Compositions seen in fewer than two games are skipped before the top five
    are taken, so a rare comp never pushes out a recurring one.
    """
    if data is None:
        return []

    out: List[CompositionInsight] = []
    # sorted() is stable: equal frequencies keep their input order
    ranked = sorted(data.top_compositions, key=lambda c: c.frequency, reverse=True)
    eligible = [c for c in ranked if c.games_played >= MIN_COMPOSITION_GAMES]
    for rank, comp in enumerate(eligible[:MAX_COMPOSITIONS], start=1):
        text = (
            f"Comp #{rank} ({percent(comp.frequency)}% frequency, "
            f"{percent(comp.win_rate)}% win rate): {', '.join(comp.characters)}"
        )
        if comp.archetype:
            text += f" ({comp.archetype} style)"
        out.append(
            CompositionInsight(
                text=text,
                characters=tuple(comp.characters),
                frequency=comp.frequency,
                win_rate=comp.win_rate,
                archetype=comp.archetype,
                games_played=comp.games_played,
                rank=rank,
            )
        )

    if data.first_pick_priorities:
        out.append(
            CompositionInsight(
                text=_draft_line("First pick priorities", data.first_pick_priorities),
                characters=tuple(p.character for p in data.first_pick_priorities[:MAX_DRAFT_ENTRIES]),
                games_played=matches_analyzed,
            )
        )
    if data.common_bans:
        out.append(
            CompositionInsight(
                text=_draft_line("Common bans against", data.common_bans),
                characters=tuple(b.character for b in data.common_bans[:MAX_DRAFT_ENTRIES]),
                games_played=matches_analyzed,
            )
        )
    return out
