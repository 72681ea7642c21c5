from __future__ import annotations

from typing import List, Sequence

from .models import DigestibleReport, HeadToHeadReport, StrategyInsight
from .thresholds import whole

HEAVY_RULE = "=" * 63
LIGHT_RULE = "-" * 63


def _section(lines: List[str], heading: str, rule: str = LIGHT_RULE) -> None:
    lines.append(heading)
    lines.append(rule)


def _bullets(lines: List[str], heading: str, items: Sequence[StrategyInsight]) -> None:
    if not items:
        return
    lines.append(f"{heading}:")
    for item in items:
        lines.append(f"  * {item.text}")


def render_text(report: DigestibleReport) -> str:
    lines: List[str] = []
    lines.append(HEAVY_RULE)
    lines.append(f"  SCOUTING REPORT: {report.team_name}")
    lines.append(f"  Generated: {report.generated_at} | Matches Analyzed: {report.matches_analyzed}")
    lines.append(HEAVY_RULE)
    lines.append("")

    _section(lines, "EXECUTIVE SUMMARY")
    lines.append(report.executive_summary)
    lines.append("")

    _section(lines, "COMMON STRATEGIES")
    strategies = report.common_strategies
    _bullets(lines, "Attack Patterns", strategies.attack_patterns)
    _bullets(lines, "Defense Setups", strategies.defense_setups)
    _bullets(lines, "Objective Priorities", strategies.objective_priorities)
    _bullets(lines, "Timing Patterns", strategies.timing_patterns)
    lines.append("")

    _section(lines, "PLAYER TENDENCIES")
    for tendency in report.player_tendencies:
        lines.append(f"  * {tendency.text}")
    lines.append("")

    _section(lines, "RECENT COMPOSITIONS")
    for comp in report.recent_compositions:
        lines.append(f"  * {comp.text}")
    lines.append("")

    how = report.how_to_win
    _section(lines, "HOW TO WIN", HEAVY_RULE)
    lines.append(f"WIN CONDITION: {how.win_condition}")
    lines.append(f"Confidence: {whole(how.confidence_score)}%")
    lines.append("")

    if how.actionable_insights:
        lines.append("Actionable Insights:")
        for insight in how.actionable_insights:
            lines.append(f"  [{insight.impact}] {insight.recommendation}")
            lines.append(f"         Data: {insight.data_backing}")
        lines.append("")

    draft = how.draft_strategy
    if draft.priority_bans:
        lines.append("Draft - Priority Bans:")
        for ban in draft.priority_bans:
            lines.append(f"  x {ban.text}")
        lines.append("")
    if draft.recommended_picks:
        lines.append("Draft - Recommended Picks:")
        for pick in draft.recommended_picks:
            lines.append(f"  + {pick.text}")
        lines.append("")
    if draft.target_picks:
        lines.append("Draft - Target Picks (force opponent onto):")
        for target in draft.target_picks:
            lines.append(f"  > {target.text}")
        lines.append("")

    if how.in_game_strategy:
        lines.append("In-Game Strategy:")
        for strat in how.in_game_strategy:
            lines.append(f"  - {strat.strategy} ({strat.timing})")
            lines.append(f"      Reason: {strat.reason}")

    lines.append("")
    lines.append(HEAVY_RULE)
    lines.append("  Report generated by SCOUT9 - Automated Scouting Report Generator")
    lines.append(HEAVY_RULE)
    return "\n".join(lines) + "\n"


def render_head_to_head_text(report: HeadToHeadReport) -> str:
    lines: List[str] = []
    lines.append(HEAVY_RULE)
    lines.append(f"  MATCHUP: {report.team1_name} vs {report.team2_name}")
    lines.append(
        f"  Title: {report.title} | Matches: {report.total_matches} | "
        f"Record: {report.team1_wins}-{report.team2_wins}"
    )
    lines.append(HEAVY_RULE)
    lines.append("")

    _section(lines, "RECOMMENDATION")
    lines.append(report.recommendation)
    lines.append(f"Confidence: {whole(report.confidence_score)}%")
    lines.append("")

    style = report.style_comparison
    if style is not None:
        _section(lines, "STYLE COMPARISON")
        for text in (style.early_game_insight, style.mid_game_insight, style.late_game_insight):
            if text:
                lines.append(f"  * {text}")
        if style.style_insight:
            lines.append(f"  * {style.style_insight}")
        lines.append("")

    if report.insights:
        _section(lines, "INSIGHTS")
        for insight in report.insights:
            lines.append(f"  [{insight.type}] {insight.text}")
        lines.append("")

    for warning in report.warnings:
        lines.append(f"WARNING: {warning}")

    return "\n".join(lines) + "\n"
