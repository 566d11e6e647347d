"""Plywood sheet tiling for crate panels.

Panels larger than a stock sheet are split into a grid of sections. Full
sheets are placed from the top-left corner so the partial pieces always land
in the rightmost column and the bottom row, where they are easiest to trim.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from ..entities import MaterialUsage, PanelSpliceLayout, PlywoodSection, SplicePosition
from ..value_objects import Orientation

logger = logging.getLogger(__name__)

# Standard plywood sheet size (inches)
SHEET_WIDTH = 48.0
SHEET_HEIGHT = 96.0

# Rotated tiling must save at least this fraction of sheets to be chosen
ROTATION_SHEET_REDUCTION = 0.5

# Remainders below this are float noise from exact multiples
_EPSILON = 1e-6


def _divide(extent: float, sheet: float) -> list[float]:
    """Split an extent into full sheet lengths plus one remainder."""
    full = int(math.floor(extent / sheet + _EPSILON))
    remainder = extent - full * sheet
    pieces = [sheet] * full
    if remainder > _EPSILON:
        pieces.append(remainder)
    return pieces


class PlywoodSplicer:
    """Tiles rectangular panels with plywood sheets.

    Args:
        rotation_threshold: Fraction of sheets a rotated tiling has to save
            before it replaces the normal one.
    """

    def __init__(self, rotation_threshold: float = ROTATION_SHEET_REDUCTION) -> None:
        self.rotation_threshold = rotation_threshold

    def pack(
        self,
        panel_name: str,
        panel_width: float,
        panel_height: float,
        max_sheet_width: float = SHEET_WIDTH,
        max_sheet_height: float = SHEET_HEIGHT,
        is_rotated: bool = False,
    ) -> PanelSpliceLayout:
        """Tile a panel with sheets of the given size as laid.

        Sections are produced top row first, left to right, in the panel's
        local frame (origin lower-left, y up). Each section consumes one
        sheet.

        Args:
            panel_name: Panel identifier used for section ids.
            panel_width: Panel extent along local x.
            panel_height: Panel extent along local y.
            max_sheet_width: Sheet extent along local x.
            max_sheet_height: Sheet extent along local y.
            is_rotated: Recorded on the layout; the caller swaps the sheet
                dimensions.

        Returns:
            PanelSpliceLayout with sections, splices and sheet count.
        """
        column_widths = _divide(panel_width, max_sheet_width)
        row_heights = _divide(panel_height, max_sheet_height)

        sections: list[PlywoodSection] = []
        sheet_id = 0
        top = panel_height
        for row, row_height in enumerate(row_heights):
            y = top - row_height
            x = 0.0
            for col, col_width in enumerate(column_widths):
                sheet_id += 1
                sections.append(
                    PlywoodSection(
                        id=f"{panel_name}_S{row + 1}_{col + 1}",
                        x=x,
                        y=y,
                        width=col_width,
                        height=row_height,
                        sheet_id=sheet_id,
                    )
                )
                x += col_width
            top = y

        splices: list[SplicePosition] = []
        boundary = 0.0
        for col_width in column_widths[:-1]:
            boundary += col_width
            splices.append(SplicePosition(boundary, 0.0, Orientation.VERTICAL))
        boundary = panel_height
        for row_height in row_heights[:-1]:
            boundary -= row_height
            splices.append(SplicePosition(0.0, boundary, Orientation.HORIZONTAL))

        logger.debug(
            "%s: %.3f x %.3f -> %d cols x %d rows (%s)",
            panel_name,
            panel_width,
            panel_height,
            len(column_widths),
            len(row_heights),
            "rotated" if is_rotated else "normal",
        )

        return PanelSpliceLayout(
            panel_name=panel_name,
            panel_width=panel_width,
            panel_height=panel_height,
            sections=tuple(sections),
            splices=tuple(splices),
            sheet_count=len(sections),
            is_rotated=is_rotated,
            sheet_width=max_sheet_width,
            sheet_height=max_sheet_height,
        )

    def pack_with_rotation(
        self,
        panel_name: str,
        panel_width: float,
        panel_height: float,
        max_sheet_width: float = SHEET_WIDTH,
        max_sheet_height: float = SHEET_HEIGHT,
    ) -> PanelSpliceLayout:
        """Tile a panel, laying sheets sideways when that saves enough sheets.

        The rotated tiling wins only if it fits the panel on one sheet where
        the normal tiling cannot, or if it needs fewer than
        ``(1 - rotation_threshold)`` times the normal sheet count.
        """
        normal = self.pack(
            panel_name, panel_width, panel_height, max_sheet_width, max_sheet_height
        )
        rotated = self.pack(
            panel_name,
            panel_width,
            panel_height,
            max_sheet_height,
            max_sheet_width,
            is_rotated=True,
        )

        single_sheet = rotated.sheet_count == 1 and normal.sheet_count > 1
        saves_enough = rotated.sheet_count < (
            (1 - self.rotation_threshold) * normal.sheet_count
        )
        if single_sheet or saves_enough:
            logger.debug(
                "%s: rotated sheets (%d vs %d)",
                panel_name,
                rotated.sheet_count,
                normal.sheet_count,
            )
            return rotated
        return normal

    def material_usage(
        self,
        layouts: Iterable[PanelSpliceLayout],
        sheet_width: float = SHEET_WIDTH,
        sheet_height: float = SHEET_HEIGHT,
    ) -> MaterialUsage:
        """Sheet totals, waste and efficiency across panel layouts."""
        total_sheets = 0
        panel_area = 0.0
        for layout in layouts:
            total_sheets += layout.sheet_count
            panel_area += layout.panel_area

        sheet_area = total_sheets * sheet_width * sheet_height
        waste_area = sheet_area - panel_area
        efficiency = (panel_area / sheet_area) * 100 if sheet_area > 0 else 0.0

        return MaterialUsage(
            total_sheets=total_sheets,
            panel_area=panel_area,
            sheet_area=sheet_area,
            waste_area=waste_area,
            efficiency=efficiency,
        )
