"""Text summaries for the status and entity info panels."""

from dataclasses import dataclass
from typing import List, Optional

from space_replay.entities import Asteroid, Entity, Ship, Wormhole
from space_replay.snapshot import Snapshot
from space_replay.utils.math import round_half_up

DEFAULT_PLAYER_COLOR = "#ffffff"


@dataclass(frozen=True)
class PlayerSummary:
    id: int
    name: str
    color: str
    rock: int
    fuel: float
    ships: int


def player_summaries(snapshot: Optional[Snapshot]) -> List[PlayerSummary]:
    """One row per player with resources and owned ship count."""
    if snapshot is None:
        return []
    return [
        PlayerSummary(
            id=player.id,
            name=player.name,
            color=player.color,
            rock=player.rock,
            fuel=player.fuel,
            ships=sum(
                1 for s in snapshot.ships if s is not None and s.player == player.id
            ),
        )
        for player in snapshot.players
    ]


def player_color(snapshot: Optional[Snapshot], player_id: int) -> str:
    """Color of ``player_id`` in ``snapshot``; white when unknown."""
    if snapshot is None:
        return DEFAULT_PLAYER_COLOR
    player = snapshot.player(player_id)
    return player.color if player is not None and player.color else DEFAULT_PLAYER_COLOR


def frame_label(index: int, total: int) -> str:
    """Human frame counter, 1-based: ``"3 / 10"``."""
    if total == 0:
        return "0 / 0"
    return f"{index + 1} / {total}"


def describe_entity(entity: Optional[Entity]) -> List[str]:
    """Detail lines for the info panel; a single placeholder line when absent."""
    if entity is None:
        return ["Selected entity not found in current frame"]

    lines = [f"{entity.kind.value.capitalize()} ID: {entity.id}"]
    x, y = round_half_up(entity.position.x), round_half_up(entity.position.y)
    position = f"Pos: ({x}, {y})"
    if isinstance(entity, Ship):
        lines += [
            f"P{entity.player + 1}",
            position,
            f"HP: {entity.health}",
            f"Fuel: {entity.fuel:g}",
            f"Type: {entity.type.name.capitalize()}",
            f"Cargo: {entity.cargo}",
        ]
    elif isinstance(entity, Asteroid):
        lines += [position, f"Size: {entity.size:.2f}", f"Type: {entity.type}"]
        if entity.owner_id is not None:
            lines.append(f"Owner: P{entity.owner_id + 1}")
        if entity.surface is not None:
            lines.append(f"Surface: {entity.surface:g}")
    elif isinstance(entity, Wormhole):
        lines += [position, f"Target: {entity.target_id}"]
    return lines
