"""Floorboard layout along the crate length.

Boards run across the full internal width and are laid side by side along
the span. A greedy pass picks lumber, then the boards are rearranged so the
widest sit at both ends and narrow or custom-cut boards meet in the middle.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..entities import CUSTOM_NOMINAL, Floorboard, FloorboardLayout
from ..value_objects import LumberSize
from .lumber import DEFAULT_FLOORBOARD

logger = logging.getLogger(__name__)

# Gap between adjacent boards (1/8 inch)
FLOORBOARD_GAP = 0.125

# Narrowest leftover worth filling with a custom-cut board
MIN_CUSTOM_WIDTH = 0.25

_EPSILON = 1e-9


class FloorboardLayoutPacker:
    """Packs floorboards across a 1D span."""

    def layout(
        self,
        span: float,
        ranked_sizes: Sequence[LumberSize],
        gap: float = FLOORBOARD_GAP,
        edge_inset: float = 0.0,
        thickness: float = DEFAULT_FLOORBOARD.thickness,
    ) -> FloorboardLayout:
        """Lay out floorboards over a span.

        Args:
            span: Total span in inches.
            ranked_sizes: Candidate lumber, any order; an empty sequence
                falls back to the default 2x6.
            gap: Gap between adjacent boards.
            edge_inset: Clearance kept at both ends of the span.
            thickness: Thickness recorded for custom-cut boards.

        Returns:
            FloorboardLayout sorted by position. Empty if the usable span is
            too small for any board.
        """
        if not ranked_sizes:
            logger.debug("No ranked floorboard sizes; using %s", DEFAULT_FLOORBOARD.nominal)
            ranked_sizes = [DEFAULT_FLOORBOARD]
        sizes = sorted(ranked_sizes, key=lambda lumber: lumber.width, reverse=True)

        usable = span - 2 * edge_inset
        boards = self._greedy_fill(usable, sizes, gap, thickness)
        if not boards:
            logger.debug("Span %.3f too small for any floorboard", usable)
            return FloorboardLayout(boards=(), span=span, gap=gap, edge_inset=edge_inset)

        placed = self._arrange_symmetric(boards, edge_inset, edge_inset + usable, gap)
        return FloorboardLayout(
            boards=tuple(placed), span=span, gap=gap, edge_inset=edge_inset
        )

    def _greedy_fill(
        self,
        usable: float,
        sizes: list[LumberSize],
        gap: float,
        thickness: float,
    ) -> list[Floorboard]:
        boards: list[Floorboard] = []
        remaining = usable
        while remaining > _EPSILON:
            fitting = [lumber for lumber in sizes if lumber.width <= remaining + _EPSILON]
            if fitting:
                lumber = fitting[0]
                boards.append(
                    Floorboard(lumber.nominal, lumber.width, lumber.thickness, 0.0)
                )
                remaining -= lumber.width + gap
                continue
            if remaining >= MIN_CUSTOM_WIDTH:
                boards.append(Floorboard(CUSTOM_NOMINAL, remaining, thickness, 0.0))
                logger.debug("Custom floorboard %.3f in", remaining)
            break
        return boards

    def _arrange_symmetric(
        self,
        boards: list[Floorboard],
        start: float,
        end: float,
        gap: float,
    ) -> list[Floorboard]:
        """Alternate boards between the two ends, widest first."""
        ordered = sorted(boards, key=lambda board: board.width, reverse=True)
        front = start
        back = end
        placed: list[Floorboard] = []
        for index, board in enumerate(ordered):
            if index % 2 == 0:
                position = front
                front += board.width + gap
            else:
                position = back - board.width
                back = position - gap
            placed.append(
                Floorboard(board.nominal, board.width, board.thickness, position)
            )

        placed.sort(key=lambda board: board.position)
        resolved: list[Floorboard] = []
        for board in placed:
            if resolved and board.position < resolved[-1].end + gap:
                board = Floorboard(
                    board.nominal, board.width, board.thickness, resolved[-1].end + gap
                )
            resolved.append(board)
        return resolved
