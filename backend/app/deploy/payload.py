"""Deploy payload — the four grid arrays plus a densely indexed color table.

Colors used anywhere in the grid are sorted ascending and renumbered 1..K;
``colors`` is the flat ``[r, g, b, r, g, b, ...]`` list in that order. Cell
order is never changed.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from app.engine.context import Grid, validate_grid
from app.engine.palette import DEFAULT_PALETTE, RGB

logger = logging.getLogger(__name__)


@dataclass
class DeployPayload:
    bg_glyphs: list[int]
    fg_glyphs: list[int]
    bg_colors: list[int]
    fg_colors: list[int]
    colors: list[int]

    @property
    def color_count(self) -> int:
        return len(self.colors) // 3

    def to_dict(self) -> dict[str, list[int]]:
        return asdict(self)


def build_deploy_payload(
    grid: Grid,
    palette: tuple[RGB, ...] = DEFAULT_PALETTE,
) -> DeployPayload | None:
    """Remap the grid for deployment, or None when there is nothing valid to deploy."""
    problems = validate_grid(grid, len(palette))
    if problems:
        logger.warning("Grid not deployable: %s", "; ".join(problems[:3]))
        return None
    if not grid.is_generated:
        logger.warning("Grid not deployable: not generated yet")
        return None

    used = sorted(grid.used_colors())
    remap = {value: i + 1 for i, value in enumerate(used)}

    def _remap(values: list[int | None]) -> list[int]:
        return [remap.get(v, 0) if v is not None else 0 for v in values]

    colors: list[int] = []
    for value in used:
        colors.extend(palette[value - 1])

    payload = DeployPayload(
        bg_glyphs=[g if g is not None else 0 for g in grid.bg_glyphs],
        fg_glyphs=[g if g is not None else 0 for g in grid.fg_glyphs],
        bg_colors=_remap(grid.bg_colors),
        fg_colors=_remap(grid.fg_colors),
        colors=colors,
    )
    logger.info("Deploy payload: %d distinct colors", payload.color_count)
    return payload
