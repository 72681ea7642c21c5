from __future__ import annotations

import os
import tempfile
from typing import Any, List, Optional
from xml.sax.saxutils import escape

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from reportlab.lib import colors  # noqa: E402
from reportlab.lib.pagesizes import letter  # noqa: E402
from reportlab.lib.styles import getSampleStyleSheet  # noqa: E402
from reportlab.lib.units import inch  # noqa: E402
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle  # noqa: E402

from .models import DigestibleReport  # noqa: E402
from .thresholds import percent, whole  # noqa: E402

TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONT", (0, 0), (-1, -1), "Helvetica", 8),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
)


def _save_plot(fig, path: str) -> str:
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)
    return path


def _plot_compositions(report: DigestibleReport, out_path: str) -> Optional[str]:
    comps = [c for c in report.recent_compositions if c.rank > 0]
    if not comps:
        return None
    labels = [f"#{c.rank}" for c in comps]
    freqs = [c.frequency for c in comps]
    winrates = [c.win_rate for c in comps]

    fig, ax = plt.subplots(figsize=(6.5, 3.2))
    ax.bar(labels, freqs, color="#4a7ebb", label="frequency")
    ax2 = ax.twinx()
    ax2.plot(labels, winrates, color="black", marker="o", linewidth=1.5, label="win rate")
    ax.set_ylim(0, 1)
    ax2.set_ylim(0, 1)
    ax.set_title("Top Compositions (Frequency + Win Rate)")
    ax.set_ylabel("Frequency")
    ax2.set_ylabel("Win Rate")
    ax.legend(loc="upper left", fontsize=8)
    ax2.legend(loc="upper right", fontsize=8)
    return _save_plot(fig, out_path)


def _plot_insight_confidence(report: DigestibleReport, out_path: str) -> Optional[str]:
    insights = report.how_to_win.actionable_insights
    if not insights:
        return None
    top = insights[:8]
    labels = [i.recommendation[:40] for i in top]
    values = [i.confidence for i in top]
    fig, ax = plt.subplots(figsize=(6.5, 3.2))
    ax.barh(labels[::-1], values[::-1], color="#2f9e8f")
    ax.set_xlim(0, 1)
    ax.set_title("Actionable Insight Confidence")
    ax.set_xlabel("Confidence")
    ax.tick_params(axis="y", labelsize=7)
    return _save_plot(fig, out_path)


def _tendency_table(report: DigestibleReport) -> Optional[Table]:
    if not report.player_tendencies:
        return None
    styles = getSampleStyleSheet()
    rows: List[List[Any]] = [["Player", "Role", "Tendency", "Games"]]
    for t in report.player_tendencies:
        rows.append(
            [t.player_name, t.role or "-", Paragraph(escape(t.text), styles["BodyText"]), str(t.sample_size)]
        )
    table = Table(rows, colWidths=[1.1 * inch, 0.8 * inch, 4.0 * inch, 0.6 * inch])
    table.setStyle(TABLE_STYLE)
    return table


def build_report_pdf(report: DigestibleReport, output_path: str) -> None:
    """Lay out a digestible report as a PDF with two charts."""
    styles = getSampleStyleSheet()
    story: List[Any] = []
    story.append(Paragraph(f"Scouting Report: {escape(report.team_name)}", styles["Title"]))
    story.append(
        Paragraph(
            f"Generated {report.generated_at} | Matches analyzed: <b>{report.matches_analyzed}</b>",
            styles["BodyText"],
        )
    )
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("Executive Summary", styles["Heading3"]))
    story.append(Paragraph(escape(report.executive_summary), styles["BodyText"]))
    story.append(Spacer(1, 0.15 * inch))

    strategies = report.common_strategies
    if not strategies.is_empty():
        story.append(Paragraph("Common Strategies", styles["Heading3"]))
        for heading, items in (
            ("Attack patterns", strategies.attack_patterns),
            ("Defense setups", strategies.defense_setups),
            ("Objective priorities", strategies.objective_priorities),
            ("Timing patterns", strategies.timing_patterns),
        ):
            for item in items:
                story.append(Paragraph(f"<b>{heading}:</b> {escape(item.text)}", styles["BodyText"]))
        story.append(Spacer(1, 0.15 * inch))

    table = _tendency_table(report)
    if table is not None:
        story.append(Paragraph("Player Tendencies", styles["Heading3"]))
        story.append(table)
        story.append(Spacer(1, 0.15 * inch))

    if report.recent_compositions:
        story.append(Paragraph("Recent Compositions", styles["Heading3"]))
        for comp in report.recent_compositions:
            story.append(Paragraph(escape(comp.text), styles["BodyText"]))
        story.append(Spacer(1, 0.15 * inch))

    how = report.how_to_win
    story.append(Paragraph("How To Win", styles["Heading2"]))
    story.append(
        Paragraph(
            f"<b>Win condition:</b> {escape(how.win_condition)} (confidence {whole(how.confidence_score)}%)",
            styles["BodyText"],
        )
    )
    for insight in how.actionable_insights:
        story.append(
            Paragraph(
                f"[{insight.impact}] <b>{escape(insight.recommendation)}</b>: {escape(insight.data_backing)}",
                styles["BodyText"],
            )
        )
    draft = how.draft_strategy
    for label, items in (
        ("Ban", draft.priority_bans),
        ("Pick", draft.recommended_picks),
        ("Target", draft.target_picks),
    ):
        for item in items:
            rate = f" ({percent(item.win_rate)}% WR)" if item.win_rate else ""
            story.append(Paragraph(f"<b>{label}:</b> {escape(item.text)}{rate}", styles["BodyText"]))
    for strat in how.in_game_strategy:
        story.append(
            Paragraph(f"<b>{escape(strat.strategy)}</b> ({escape(strat.timing)}): {escape(strat.reason)}", styles["BodyText"])
        )
    story.append(Spacer(1, 0.2 * inch))

    with tempfile.TemporaryDirectory() as tmp:
        plots = [
            (
                "compositions.png",
                _plot_compositions,
                "Compositions: bars show how often each lineup was played; line is its win rate.",
            ),
            (
                "confidence.png",
                _plot_insight_confidence,
                "Actionable insights ranked by the confidence behind each recommendation.",
            ),
        ]
        for name, fn, caption in plots:
            path = os.path.join(tmp, name)
            img = fn(report, path)
            if img and os.path.exists(img):
                story.append(Paragraph(caption, styles["BodyText"]))
                story.append(Image(img, width=6.5 * inch, height=3.2 * inch))
                story.append(Spacer(1, 0.2 * inch))

        doc = SimpleDocTemplate(output_path, pagesize=letter)
        doc.build(story)

