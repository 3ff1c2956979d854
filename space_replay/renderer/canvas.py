import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from space_replay.entities import Asteroid, Entity, Ship, Wormhole
from space_replay.snapshot import Snapshot
from space_replay.utils.color import hex_to_rgb
from space_replay.utils.math import clamp
from space_replay.utils.summary import player_color


DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 800
MIN_ZOOM = 0.005
MAX_ZOOM = 5.0
FIT_MARGIN = 1.1
GRID_SIZE = 1000

BACKGROUND = (10, 10, 26, 255)
BOUNDARY = (255, 255, 255, 77)
GRID = (255, 255, 255, 26)
WORMHOLE_OUTER = (255, 107, 74)
WORMHOLE_INNER = (255, 170, 74)
WORMHOLE_LINK = (255, 107, 74, 128)
ROCK_ASTEROID = ((136, 136, 136), (102, 102, 102))
OTHER_ASTEROID = ((170, 170, 136), (136, 136, 102))
SELECTION = (255, 255, 74, 255)
WORMHOLE_PATH = (0, 255, 0, 255)

SHIP_SIZE = 150.0
WORMHOLE_RADIUS = 20.0
SHIP_SELECTION_RADIUS = 160.0
WORMHOLE_SELECTION_RADIUS = 30.0
ASTEROID_SELECTION_MARGIN = 10.0

Point = Tuple[float, float]
RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Camera:
    """World-to-screen projection.

    Attributes:
        x, y: World point shown at the image center.
        zoom: Pixels per world unit.
        width, height: Image size in pixels.
    """

    x: float = 0.0
    y: float = 0.0
    zoom: float = 0.1
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def world_to_screen(self, x: float, y: float) -> Point:
        return (
            (x - self.x) * self.zoom + self.width / 2,
            (y - self.y) * self.zoom + self.height / 2,
        )

    def screen_to_world(self, sx: float, sy: float) -> Point:
        return (
            (sx - self.width / 2) / self.zoom + self.x,
            (sy - self.height / 2) / self.zoom + self.y,
        )

    def fit(self, radius: float) -> "Camera":
        """Center on the origin with the whole play area visible."""
        if radius <= 0:
            return replace(self, x=0.0, y=0.0)
        zoom = min(self.width, self.height) / (2 * radius * FIT_MARGIN)
        return replace(self, x=0.0, y=0.0, zoom=clamp(zoom, MIN_ZOOM, MAX_ZOOM))

    def pan(self, dx: float, dy: float) -> "Camera":
        """Drag the view by ``(dx, dy)`` screen pixels."""
        return replace(self, x=self.x - dx / self.zoom, y=self.y - dy / self.zoom)

    def zoom_by(self, factor: float) -> "Camera":
        return replace(self, zoom=clamp(self.zoom * factor, MIN_ZOOM, MAX_ZOOM))


def alpha_of(entity: Entity) -> int:
    """Opacity byte for an entity; fade placeholders use their fade alpha."""
    if entity.fade is None:
        return 255
    return int(round(clamp(entity.fade, 0.0, 1.0) * 255))


def with_alpha(rgb: Tuple[int, int, int], alpha: int) -> RGBA:
    return rgb[0], rgb[1], rgb[2], alpha


def circle_box(center: Point, radius: float) -> List[float]:
    cx, cy = center
    return [cx - radius, cy - radius, cx + radius, cy + radius]


def ship_polygon(center: Point, size: float, angle: float) -> List[Point]:
    """Triangle pointing along ``angle`` (radians), tip at ``size`` from the center."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    points = [(size, 0.0), (-size * 0.7, -size * 0.7), (-size * 0.7, size * 0.7)]
    cx, cy = center
    return [
        (cx + px * cos_a - py * sin_a, cy + px * sin_a + py * cos_a)
        for px, py in points
    ]


def draw_centered_text(
    draw: ImageDraw.ImageDraw, center: Point, text: str, fill: RGBA
) -> None:
    font = ImageFont.load_default()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = center[0] - (right - left) / 2 - left
    y = center[1] - (bottom - top) / 2 - top
    draw.text((x, y), text, fill=fill, font=font)


def health_color(fraction: float) -> Tuple[int, int, int]:
    if fraction > 0.5:
        return (74, 255, 74)
    if fraction > 0.25:
        return (255, 255, 74)
    return (255, 74, 74)


def draw_grid(draw: ImageDraw.ImageDraw, camera: Camera) -> None:
    left, top = camera.screen_to_world(0, 0)
    right, bottom = camera.screen_to_world(camera.width, camera.height)
    x = math.floor(left / GRID_SIZE) * GRID_SIZE
    while x <= right:
        sx, _ = camera.world_to_screen(x, 0)
        draw.line([(sx, 0), (sx, camera.height)], fill=GRID, width=1)
        x += GRID_SIZE
    y = math.floor(top / GRID_SIZE) * GRID_SIZE
    while y <= bottom:
        _, sy = camera.world_to_screen(0, y)
        draw.line([(0, sy), (camera.width, sy)], fill=GRID, width=1)
        y += GRID_SIZE


def draw_boundary(
    draw: ImageDraw.ImageDraw, snapshot: Snapshot, camera: Camera
) -> None:
    cx, cy = camera.world_to_screen(0, 0)
    r = snapshot.radius * camera.zoom
    draw.rectangle([cx - r, cy - r, cx + r, cy + r], outline=BOUNDARY, width=2)


def draw_wormholes(
    draw: ImageDraw.ImageDraw, snapshot: Snapshot, camera: Camera
) -> None:
    wormholes = [w for w in snapshot.wormholes if w is not None]
    by_id = {w.id: w for w in wormholes}
    for wormhole in wormholes:
        pos = camera.world_to_screen(wormhole.position.x, wormhole.position.y)
        partner = by_id.get(wormhole.target_id)
        if partner is not None and wormhole.id < partner.id:
            end = camera.world_to_screen(partner.position.x, partner.position.y)
            draw.line([pos, end], fill=WORMHOLE_LINK, width=2)
        radius = WORMHOLE_RADIUS * camera.zoom
        alpha = alpha_of(wormhole)
        draw.ellipse(circle_box(pos, radius), fill=with_alpha(WORMHOLE_OUTER, alpha))
        draw.ellipse(
            circle_box(pos, radius * 0.6), fill=with_alpha(WORMHOLE_INNER, alpha)
        )
        draw_centered_text(draw, pos, str(wormhole.id), (255, 255, 255, alpha))


def draw_asteroids(
    draw: ImageDraw.ImageDraw, snapshot: Snapshot, camera: Camera
) -> None:
    for asteroid in snapshot.asteroids:
        if asteroid is None:
            continue
        pos = camera.world_to_screen(asteroid.position.x, asteroid.position.y)
        radius = asteroid.size * camera.zoom
        body, crater = ROCK_ASTEROID if asteroid.type == 0 else OTHER_ASTEROID
        alpha = alpha_of(asteroid)
        draw.ellipse(circle_box(pos, radius), fill=with_alpha(body, alpha))
        crater_center = (pos[0] - radius * 0.3, pos[1] - radius * 0.3)
        draw.ellipse(
            circle_box(crater_center, radius * 0.3), fill=with_alpha(crater, alpha)
        )


def draw_ships(
    draw: ImageDraw.ImageDraw, snapshot: Snapshot, camera: Camera
) -> None:
    for ship in snapshot.ships:
        if ship is None:
            continue
        pos = camera.world_to_screen(ship.position.x, ship.position.y)
        size = SHIP_SIZE * camera.zoom
        alpha = alpha_of(ship)
        angle = 0.0
        if not ship.vector.is_zero():
            angle = math.atan2(ship.vector.y, ship.vector.x)
        color = hex_to_rgb(player_color(snapshot, ship.player))
        draw.polygon(ship_polygon(pos, size, angle), fill=with_alpha(color, alpha))

        if ship.health > 0:
            fraction = ship.health / 100
            top = pos[1] - size - 10 * camera.zoom
            draw.rectangle(
                [
                    pos[0] - size,
                    top,
                    pos[0] - size + size * 2 * fraction,
                    top + 4 * camera.zoom,
                ],
                fill=with_alpha(health_color(fraction), alpha),
            )
        draw_centered_text(draw, pos, f"P{ship.player + 1}", (255, 255, 255, alpha))


def selection_radius(entity: Entity) -> float:
    if isinstance(entity, Ship):
        return SHIP_SELECTION_RADIUS
    if isinstance(entity, Asteroid):
        return entity.size + ASTEROID_SELECTION_MARGIN
    return WORMHOLE_SELECTION_RADIUS


def draw_selection(
    draw: ImageDraw.ImageDraw, snapshot: Snapshot, selected: Entity, camera: Camera
) -> None:
    pos = camera.world_to_screen(selected.position.x, selected.position.y)
    radius = selection_radius(selected) * camera.zoom
    draw.ellipse(circle_box(pos, radius), outline=SELECTION, width=3)

    if not isinstance(selected, Wormhole):
        return
    partner = next(
        (w for w in snapshot.wormholes if w is not None and w.id == selected.target_id),
        None,
    )
    if partner is None:
        return
    end = camera.world_to_screen(partner.position.x, partner.position.y)
    draw.line([pos, end], fill=WORMHOLE_PATH, width=4)
    angle = math.atan2(end[1] - pos[1], end[0] - pos[0])
    arrow = 15
    draw.polygon(
        [
            end,
            *(
                (
                    end[0] - arrow * math.cos(angle + side),
                    end[1] - arrow * math.sin(angle + side),
                )
                for side in (-math.pi / 6, math.pi / 6)
            ),
        ],
        fill=WORMHOLE_PATH,
    )


def render(
    snapshot: Optional[Snapshot],
    selected: Optional[Entity] = None,
    camera: Optional[Camera] = None,
    show_grid: bool = False,
) -> Image.Image:
    """Render a displayed snapshot as an RGBA Pillow image.

    Layers, bottom to top: grid, boundary, wormholes, asteroids, ships,
    selection. Each layer is drawn on its own transparent image and
    composited so that faded entities blend with what lies beneath.

    Args:
        snapshot (Snapshot | None): Snapshot to draw; ``None`` draws a
            waiting message.
        selected (Entity | None): Resolved selected entity, if any.
        camera (Camera | None): Projection; defaults to fitting the play area.
        show_grid (bool): Draw the 1000-unit world grid.

    Returns:
        Image.Image: ``camera.width`` x ``camera.height`` RGBA image.
    """
    if camera is None:
        camera = Camera().fit(snapshot.radius if snapshot is not None else 0.0)
    img = Image.new("RGBA", (camera.width, camera.height), BACKGROUND)

    if snapshot is None:
        draw_centered_text(
            ImageDraw.Draw(img),
            (camera.width / 2, camera.height / 2),
            "Loading game data...",
            (255, 255, 255, 255),
        )
        return img

    layers = []
    if show_grid:
        layers.append(lambda d: draw_grid(d, camera))
    layers += [
        lambda d: draw_boundary(d, snapshot, camera),
        lambda d: draw_wormholes(d, snapshot, camera),
        lambda d: draw_asteroids(d, snapshot, camera),
        lambda d: draw_ships(d, snapshot, camera),
    ]
    if selected is not None:
        layers.append(lambda d: draw_selection(d, snapshot, selected, camera))

    for draw_layer in layers:
        layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
        draw_layer(ImageDraw.Draw(layer))
        img.alpha_composite(layer)
    return img


class SnapshotRenderer:
    """Keeps camera and grid settings between frames."""

    camera: Camera
    show_grid: bool

    def __init__(self, camera: Optional[Camera] = None, show_grid: bool = False):
        self.camera = camera or Camera()
        self.show_grid = show_grid

    def reset_view(self, snapshot: Optional[Snapshot]) -> None:
        self.camera = self.camera.fit(snapshot.radius if snapshot is not None else 0.0)

    def toggle_grid(self) -> None:
        self.show_grid = not self.show_grid

    def render(
        self, snapshot: Optional[Snapshot], selected: Optional[Entity] = None
    ) -> Image.Image:
        return render(snapshot, selected, self.camera, self.show_grid)
