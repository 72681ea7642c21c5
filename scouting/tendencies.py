"""Per-player tendency statements.

Each rule is an independent pure function of a profile. Rules run in the
order of ``RULES`` for every player, and players keep their input order.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from .config import LOL, VALORANT
from .models import PlayerProfile, PlayerTendencyInsight
from .thresholds import (
    ASSIST_PLAYSTYLE,
    KDA_TIER,
    MULTIKILL_TIER,
    POOL_DEPTH,
    SYNERGY_TIER,
    WEAPON_RELIANCE,
    classify,
    one_decimal,
    percent,
    two_decimals,
)

Rule = Callable[[PlayerProfile, str], List[PlayerTendencyInsight]]

SIGNATURE_MIN_GAMES = 3
WEAPON_SHARE_MIN = 0.3
OPERATOR_SHARE_MIN = 0.35
SYNERGY_MIN = 0.3
CORE_ITEM_RATE_MIN = 0.5
ABILITY_USES_MIN = 10


def _insight(
    player: PlayerProfile,
    tendency_type: str,
    text: str,
    value: float,
    context: str,
    sample_size: Optional[int] = None,
) -> PlayerTendencyInsight:
    return PlayerTendencyInsight(
        text=text,
        player_name=player.nickname,
        role=player.role,
        tendency_type=tendency_type,
        value=value,
        context=context,
        sample_size=player.games_played if sample_size is None else sample_size,
    )


def signature_pick(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    if not player.character_pool:
        return []
    top = player.character_pool[0]
    if top.games_played < SIGNATURE_MIN_GAMES:
        return []
    text = (
        f"Player '{player.nickname}' ({player.role}) signature pick: {top.character} "
        f"({percent(top.pick_rate)}% pick rate, {percent(top.win_rate)}% win rate)"
    )
    return [_insight(player, "signature_pick", text, top.win_rate, top.character, top.games_played)]


def kda_tier(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    if player.kda <= 0:
        return []
    level = classify(player.kda, KDA_TIER)
    text = f"Player '{player.nickname}' has {one_decimal(player.kda)} KDA ({level} performer)"
    return [_insight(player, "kda", text, player.kda, level)]


def multikill_impact(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    stats = player.multikills
    if stats is None or stats.total_multikills <= 0 or player.games_played <= 0:
        return []
    per_game = stats.total_multikills / player.games_played
    level = classify(per_game, MULTIKILL_TIER)
    text = f"Player '{player.nickname}' averages {one_decimal(per_game)} multikills/game ({level})"
    if stats.penta_kills > 0:
        text += f" - {stats.penta_kills} PENTA KILLS!"
    elif stats.quadra_kills > 0:
        text += f" - {stats.quadra_kills} quadra kills"
    return [_insight(player, "multikill", text, per_game, level)]


def weapon_dependency(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    if not player.weapons:
        return []
    top = player.weapons[0]
    if top.kill_share <= WEAPON_SHARE_MIN:
        return []
    share = percent(top.kill_share)
    style = classify(top.kill_share, WEAPON_RELIANCE)
    out = [
        _insight(
            player,
            "weapon_preference",
            f"Player '{player.nickname}' {style} {top.weapon_name} ({share}% of kills)",
            top.kill_share,
            top.weapon_name,
            top.kills,
        )
    ]
    if top.weapon_name == "Operator" and top.kill_share > OPERATOR_SHARE_MIN:
        out.append(
            _insight(
                player,
                "weapon_dependency",
                f"Player '{player.nickname}' is OPERATOR DEPENDENT ({share}% of kills) - deny Op rounds!",
                top.kill_share,
                "Operator",
                top.kills,
            )
        )
    return out


def synergy(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    if not player.synergy_partners:
        return []
    partner = player.synergy_partners[0]
    if partner.synergy_score <= SYNERGY_MIN:
        return []
    name = partner.player_name or partner.player_id
    level = classify(partner.synergy_score, SYNERGY_TIER)
    text = (
        f"Player '{player.nickname}' has {level} synergy with {name} "
        f"({percent(partner.synergy_score)}% of assists)"
    )
    return [_insight(player, "synergy", text, partner.synergy_score, name, partner.assist_count)]


def assist_playstyle(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    if player.assist_ratio <= 0:
        return []
    style = classify(player.assist_ratio, ASSIST_PLAYSTYLE)
    if style == ASSIST_PLAYSTYLE.default:
        return []
    text = (
        f"Player '{player.nickname}' playstyle: {style} "
        f"(assist ratio: {two_decimals(player.assist_ratio)})"
    )
    return [_insight(player, "playstyle", text, player.assist_ratio, style)]


def objective_focus(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    focus = player.objective_focus
    if focus is None or focus.towers_per_game <= 0:
        return []
    if focus.focus_type == "split-pusher":
        text = (
            f"Player '{player.nickname}' is a SPLIT-PUSHER "
            f"({one_decimal(focus.towers_per_game)} towers/game)"
        )
        return [_insight(player, "objective_focus", text, focus.towers_per_game, "split-pusher")]
    if focus.focus_type == "objective-focused":
        text = (
            f"Player '{player.nickname}' is OBJECTIVE-FOCUSED "
            f"({one_decimal(focus.dragons_per_game)} dragons/game, {focus.barons_secured} barons)"
        )
        return [_insight(player, "objective_focus", text, focus.dragons_per_game, "objective-focused")]
    return []


def item_core(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    if len(player.item_builds) < 3:
        return []
    core = [
        f"{item.item_name} ({percent(item.build_rate)}%)"
        for item in player.item_builds[:3]
        if item.build_rate > CORE_ITEM_RATE_MIN
    ]
    if not core:
        return []
    text = f"Player '{player.nickname}' core items: {', '.join(core)}"
    return [_insight(player, "item_build", text, float(len(core)), "core_items")]


def ability_reliance(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    if not player.ability_usage:
        return []
    top = player.ability_usage[0]
    if top.usage_per_game <= ABILITY_USES_MIN:
        return []
    name = top.ability_name or top.ability_id
    text = f"Player '{player.nickname}' heavily uses {name} ({one_decimal(top.usage_per_game)}/game)"
    return [_insight(player, "ability_usage", text, top.usage_per_game, name)]


def named_weaknesses(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    return [
        _insight(
            player,
            "weakness",
            f"Player '{player.nickname}' weakness: {w.title} ({one_decimal(w.value)})",
            w.value,
            w.description,
            w.sample_size,
        )
        for w in player.weaknesses
    ]


def pool_depth(player: PlayerProfile, title: str) -> List[PlayerTendencyInsight]:
    depth = len(player.character_pool)
    if depth == 0:
        return []
    label = classify(depth, POOL_DEPTH)
    noun = "agent pool" if title == VALORANT else "champion pool"
    text = f"Player '{player.nickname}' has {label} {noun} ({depth} picks)"
    return [_insight(player, "champion_pool", text, float(depth), label)]


RULES: Tuple[Rule, ...] = (
    signature_pick,
    kda_tier,
    multikill_impact,
    weapon_dependency,
    synergy,
    assist_playstyle,
    objective_focus,
    item_core,
    ability_reliance,
    named_weaknesses,
    pool_depth,
)


def extract_tendencies(
    players: Sequence[PlayerProfile], title: str = LOL
) -> List[PlayerTendencyInsight]:
    out: List[PlayerTendencyInsight] = []
    for player in players:
        for rule in RULES:
            out.extend(rule(player, title))
    return out
