"""1x4 cleat layout for crate panels.

Every panel gets a perimeter frame, evenly spaced vertical intermediates and
one cleat over each plywood splice. Which perimeter pair runs full length
depends on the panel: front, back and top carry full-width top/bottom cleats
with the left/right cleats fitted between them; the end panels are the other
way around.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from ..entities import Cleat, PanelCleatLayout, SplicePosition
from ..value_objects import CleatEdge, CleatType, Orientation, PanelName

logger = logging.getLogger(__name__)

# 1x4 actual dimensions
CLEAT_WIDTH = 3.5
CLEAT_THICKNESS = 0.75
CLEAT_NOMINAL = "1x4"

# Maximum center-to-center spacing between vertical cleats
MAX_CLEAT_SPACING = 24.0

# Stock board length used for purchasing estimates (inches)
CLEAT_BOARD_LENGTH = 96.0


def _is_vertical_run(panel_name: str) -> bool:
    try:
        return PanelName(panel_name).is_vertical_run
    except ValueError:
        return False


class CleatCalculator:
    """Computes cleat layouts in each panel's local frame."""

    def __init__(
        self,
        cleat_width: float = CLEAT_WIDTH,
        cleat_thickness: float = CLEAT_THICKNESS,
        max_spacing: float = MAX_CLEAT_SPACING,
    ) -> None:
        self.cleat_width = cleat_width
        self.cleat_thickness = cleat_thickness
        self.max_spacing = max_spacing

    def layout(
        self,
        panel_name: str,
        width: float,
        height: float,
        splices: Sequence[SplicePosition] = (),
        is_rotated: bool = False,
    ) -> PanelCleatLayout:
        """Lay out all cleats for one panel.

        Args:
            panel_name: Panel identifier; end panels get vertical-run framing.
            width: Panel extent along local x.
            height: Panel extent along local y.
            splices: Plywood splice lines to cover.
            is_rotated: Carried onto the layout from the plywood tiling.

        Returns:
            PanelCleatLayout with perimeter, intermediate and splice cleats
            in that order.
        """
        vertical_run = _is_vertical_run(panel_name)
        cleats = (
            self._perimeter(panel_name, width, height, vertical_run)
            + self._intermediates(panel_name, width, height, vertical_run)
            + self._splice_cleats(panel_name, width, height, splices, vertical_run)
        )
        logger.debug("%s: %d cleats", panel_name, len(cleats))
        return PanelCleatLayout(
            panel_name=panel_name,
            panel_width=width,
            panel_height=height,
            cleats=tuple(cleats),
            is_rotated=is_rotated,
        )

    def _cleat(
        self,
        cleat_id: str,
        cleat_type: CleatType,
        orientation: Orientation,
        edge: CleatEdge,
        x: float,
        y: float,
        length: float,
    ) -> Cleat:
        return Cleat(
            id=cleat_id,
            type=cleat_type,
            orientation=orientation,
            edge=edge,
            x=x,
            y=y,
            length=max(length, 0.0),
            width=self.cleat_width,
            thickness=self.cleat_thickness,
            nominal=CLEAT_NOMINAL,
        )

    def _vertical_extent(self, height: float, vertical_run: bool) -> tuple[float, float]:
        """(y start, length) of a vertical member between the frame cleats."""
        if vertical_run:
            return 0.0, height
        return self.cleat_width, height - 2 * self.cleat_width

    def _horizontal_extent(self, width: float, vertical_run: bool) -> tuple[float, float]:
        """(x start, length) of a horizontal member between the frame cleats."""
        if vertical_run:
            return self.cleat_width, width - 2 * self.cleat_width
        return 0.0, width

    def _perimeter(
        self, panel_name: str, width: float, height: float, vertical_run: bool
    ) -> list[Cleat]:
        cw = self.cleat_width
        x0, h_len = self._horizontal_extent(width, vertical_run)
        y0, v_len = self._vertical_extent(height, vertical_run)
        perimeter = CleatType.PERIMETER
        return [
            self._cleat(f"{panel_name}_CLEAT_TOP", perimeter, Orientation.HORIZONTAL,
                        CleatEdge.TOP, x0, height - cw, h_len),
            self._cleat(f"{panel_name}_CLEAT_BOTTOM", perimeter, Orientation.HORIZONTAL,
                        CleatEdge.BOTTOM, x0, 0.0, h_len),
            self._cleat(f"{panel_name}_CLEAT_LEFT", perimeter, Orientation.VERTICAL,
                        CleatEdge.LEFT, 0.0, y0, v_len),
            self._cleat(f"{panel_name}_CLEAT_RIGHT", perimeter, Orientation.VERTICAL,
                        CleatEdge.RIGHT, width - cw, y0, v_len),
        ]

    def _intermediates(
        self, panel_name: str, width: float, height: float, vertical_run: bool
    ) -> list[Cleat]:
        """Vertical cleats evenly spaced between the left and right edges.

        Centers of the edge cleats sit at cw/2 and width - cw/2; that span is
        divided into the fewest equal intervals no longer than the maximum
        spacing.
        """
        cw = self.cleat_width
        span = width - cw
        if span <= self.max_spacing:
            return []

        intervals = math.ceil(span / self.max_spacing)
        spacing = span / intervals
        y0, length = self._vertical_extent(height, vertical_run)
        return [
            self._cleat(
                f"{panel_name}_CLEAT_VERT_{i}",
                CleatType.INTERMEDIATE,
                Orientation.VERTICAL,
                CleatEdge.INTERMEDIATE,
                i * spacing,  # centered at cw/2 + i*spacing
                y0,
                length,
            )
            for i in range(1, intervals)
        ]

    def _splice_cleats(
        self,
        panel_name: str,
        width: float,
        height: float,
        splices: Sequence[SplicePosition],
        vertical_run: bool,
    ) -> list[Cleat]:
        cw = self.cleat_width
        cleats: list[Cleat] = []
        vertical_index = 0
        horizontal_index = 0
        for splice in splices:
            if splice.orientation == Orientation.VERTICAL:
                vertical_index += 1
                y0, length = self._vertical_extent(height, vertical_run)
                cleats.append(
                    self._cleat(
                        f"{panel_name}_CLEAT_SPLICE_V_{vertical_index}",
                        CleatType.SPLICE,
                        Orientation.VERTICAL,
                        CleatEdge.INTERMEDIATE,
                        splice.x - cw / 2,
                        y0,
                        length,
                    )
                )
            else:
                horizontal_index += 1
                x0, length = self._horizontal_extent(width, vertical_run)
                cleats.append(
                    self._cleat(
                        f"{panel_name}_CLEAT_SPLICE_H_{horizontal_index}",
                        CleatType.SPLICE,
                        Orientation.HORIZONTAL,
                        CleatEdge.INTERMEDIATE,
                        x0,
                        splice.y - cw / 2,
                        length,
                    )
                )
        return cleats


def cleat_material(layouts: Iterable[PanelCleatLayout]) -> tuple[int, float, int]:
    """Total cleats, linear feet and 8 ft 1x4 boards for a set of panels.

    Returns:
        Tuple of (total_cleats, linear_feet, board_count).
    """
    total_cleats = 0
    linear_inches = 0.0
    for layout in layouts:
        total_cleats += len(layout.cleats)
        linear_inches += layout.linear_inches

    linear_feet = linear_inches / 12
    board_count = math.ceil(linear_inches / CLEAT_BOARD_LENGTH - 1e-9)
    return total_cleats, linear_feet, max(board_count, 0)
