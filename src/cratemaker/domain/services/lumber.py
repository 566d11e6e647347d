"""Lumber selection tables for skids and floorboards.

Weight bands use inclusive upper bounds (``weight <= limit``). All tables are
constants; nothing here is derived at runtime.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, replace

from ..entities import SkidSpec
from ..value_objects import LumberSize

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_FLOORBOARD",
    "FLOORBOARD_RATINGS",
    "LUMBER_SIZES",
    "MIN_FORKLIFT_CLEARANCE",
    "SKID_BANDS",
    "FloorboardRating",
    "SkidBand",
    "SkidSpacingRule",
    "compute_skid_count",
    "lumber_size",
    "ranked_floorboard_sizes",
    "resolve_skids",
    "select_floorboard",
    "select_skid",
    "select_skid_spacing",
]

# Minimum skid height for forklift tine access
MIN_FORKLIFT_CLEARANCE = 3.5

# Actual dressed dimensions (thickness, width) by nominal size
LUMBER_SIZES: dict[str, LumberSize] = {
    "1x4": LumberSize("1x4", 0.75, 3.5),
    "2x6": LumberSize("2x6", 1.5, 5.5),
    "2x8": LumberSize("2x8", 1.5, 7.25),
    "2x10": LumberSize("2x10", 1.5, 9.25),
    "2x12": LumberSize("2x12", 1.5, 11.25),
    "3x4": LumberSize("3x4", 2.5, 3.5),
    "4x4": LumberSize("4x4", 3.5, 3.5),
    "4x6": LumberSize("4x6", 3.5, 5.5),
    "6x6": LumberSize("6x6", 5.5, 5.5),
    "8x8": LumberSize("8x8", 7.25, 7.25),
}


@dataclass(frozen=True)
class SkidBand:
    """One row of the skid selection table.

    Attributes:
        max_weight: Inclusive upper weight bound in pounds.
        nominal: Nominal skid size for the band.
        height: Skid height as installed (vertical dimension).
        width: Skid width as installed (horizontal dimension).
        thin: True for the low-profile band that needs explicit allowance.
    """

    max_weight: float
    nominal: str
    height: float
    width: float
    thin: bool = False


SKID_BANDS: tuple[SkidBand, ...] = (
    SkidBand(500, "3x4", 3.5, 2.5, thin=True),
    SkidBand(4500, "4x4", 3.5, 3.5),
    SkidBand(20000, "4x6", 3.5, 5.5),
    SkidBand(40000, "6x6", 5.5, 5.5),
    SkidBand(60000, "8x8", 7.25, 7.25),
)


@dataclass(frozen=True)
class SkidSpacingRule:
    """Maximum center-to-center skid spacing and minimum skid count."""

    max_spacing: float
    min_count: int = 2


# (inclusive max weight, rule) per nominal size; the last row of each list
# covers everything heavier.
SKID_SPACING_TABLE: dict[str, tuple[tuple[float, SkidSpacingRule], ...]] = {
    "3x4": ((math.inf, SkidSpacingRule(30.0)),),
    "4x4": ((math.inf, SkidSpacingRule(30.0)),),
    "4x6": (
        (6000, SkidSpacingRule(41.0)),
        (12000, SkidSpacingRule(28.0)),
        (math.inf, SkidSpacingRule(24.0)),
    ),
    "6x6": (
        (30000, SkidSpacingRule(41.0, min_count=3)),
        (math.inf, SkidSpacingRule(28.0, min_count=3)),
    ),
    "8x8": (
        (50000, SkidSpacingRule(41.0, min_count=3)),
        (math.inf, SkidSpacingRule(28.0, min_count=3)),
    ),
}


@dataclass(frozen=True)
class FloorboardRating:
    """Load and span rating of a floorboard lumber size."""

    lumber: LumberSize
    max_weight: float
    max_span: float


# Narrowest first
FLOORBOARD_RATINGS: tuple[FloorboardRating, ...] = (
    FloorboardRating(LUMBER_SIZES["2x6"], max_weight=5000, max_span=60),
    FloorboardRating(LUMBER_SIZES["2x8"], max_weight=10000, max_span=84),
    FloorboardRating(LUMBER_SIZES["2x10"], max_weight=20000, max_span=108),
    FloorboardRating(LUMBER_SIZES["2x12"], max_weight=60000, max_span=144),
)

DEFAULT_FLOORBOARD = LUMBER_SIZES["2x6"]


def lumber_size(nominal: str) -> LumberSize:
    """Look up the actual dimensions of a nominal lumber size.

    Raises:
        KeyError: If the nominal size is not in the table.
    """
    try:
        return LUMBER_SIZES[nominal]
    except KeyError:
        available = ", ".join(sorted(LUMBER_SIZES))
        raise KeyError(f"Unknown lumber size '{nominal}'. Available: {available}")


def _band_for_weight(weight: float, allow_thin_skid: bool) -> int:
    """Index of the skid band for a weight (clamped to the heaviest)."""
    for index, band in enumerate(SKID_BANDS):
        if band.thin and not allow_thin_skid:
            continue
        if weight <= band.max_weight:
            return index
    logger.warning(
        "Weight %.1f lb exceeds the skid table (max %.0f lb); using %s skids",
        weight,
        SKID_BANDS[-1].max_weight,
        SKID_BANDS[-1].nominal,
    )
    return len(SKID_BANDS) - 1


def select_skid(
    weight: float,
    allow_thin_skid: bool = False,
    allowed_sizes: Iterable[str] | None = None,
) -> SkidSpec:
    """Select skid lumber for a product weight.

    Walks the weight bands in order and takes the first whose upper bound
    contains the weight. When ``allowed_sizes`` excludes that band's lumber,
    the next heavier allowed band is used instead; a lighter one never is.

    Args:
        weight: Product weight in pounds.
        allow_thin_skid: Permit the 3x4 band for loads up to 500 lb.
        allowed_sizes: Nominal sizes available, or None for all.

    Returns:
        SkidSpec with nominal size and cross-section; count and spacing
        are left for :func:`resolve_skids`.
    """
    index = _band_for_weight(weight, allow_thin_skid)
    band = SKID_BANDS[index]

    if allowed_sizes is not None:
        allowed = set(allowed_sizes)
        if band.nominal not in allowed:
            heavier = [b for b in SKID_BANDS[index + 1 :] if b.nominal in allowed]
            if heavier:
                logger.info(
                    "Skid size %s not allowed; stepping up to %s",
                    band.nominal,
                    heavier[0].nominal,
                )
                band = heavier[0]
            else:
                logger.warning(
                    "No allowed skid size at or above %s; keeping %s",
                    band.nominal,
                    band.nominal,
                )

    return SkidSpec(nominal=band.nominal, height=band.height, width=band.width)


def select_skid_spacing(weight: float, skid: SkidSpec) -> SkidSpacingRule:
    """Look up the spacing rule for a skid size at a given weight.

    Heavier loads within the same skid size get tighter spacing.
    """
    rows = SKID_SPACING_TABLE[skid.nominal]
    for max_weight, rule in rows:
        if weight <= max_weight:
            return rule
    return rows[-1][1]


def compute_skid_count(
    internal_width: float,
    skid_width: float,
    max_spacing: float,
    min_count: int = 2,
) -> tuple[int, float]:
    """Number of skids and their center-to-center spacing.

    Two skids always sit flush with the extremes of the internal width.
    Intermediate skids are added, with the spacing redistributed evenly,
    until no adjacent pair is further apart than ``max_spacing``.

    Args:
        internal_width: Internal crate width in inches.
        skid_width: Skid width in inches.
        max_spacing: Maximum allowed center-to-center spacing.
        min_count: Minimum number of skids.

    Returns:
        Tuple of (count, spacing).
    """
    center_span = max(internal_width - skid_width, 0.0)

    if center_span <= max_spacing:
        count = 2
    else:
        count = math.ceil(center_span / max_spacing) + 1
    count = max(count, min_count, 2)

    spacing = center_span / (count - 1)
    logger.debug(
        "Skids: %d across %.3f in (spacing %.3f, max %.3f)",
        count,
        internal_width,
        spacing,
        max_spacing,
    )
    return count, spacing


def resolve_skids(
    weight: float,
    internal_width: float,
    allow_thin_skid: bool = False,
    allowed_sizes: Iterable[str] | None = None,
) -> SkidSpec:
    """Select skid lumber and resolve count and spacing for a crate."""
    skid = select_skid(weight, allow_thin_skid, allowed_sizes)
    rule = select_skid_spacing(weight, skid)
    count, spacing = compute_skid_count(
        internal_width, skid.width, rule.max_spacing, rule.min_count
    )
    return replace(
        skid,
        max_spacing=rule.max_spacing,
        min_count=rule.min_count,
        count=count,
        spacing=spacing,
    )


def _allowed_ratings(allowed_sizes: Iterable[str] | None) -> list[FloorboardRating]:
    if allowed_sizes is None:
        return list(FLOORBOARD_RATINGS)
    allowed = set(allowed_sizes)
    return [r for r in FLOORBOARD_RATINGS if r.lumber.nominal in allowed]


def select_floorboard(
    weight: float,
    internal_length: float,
    allowed_sizes: Iterable[str] | None = None,
) -> LumberSize:
    """Select floorboard lumber for a product weight and crate length.

    Picks the narrowest allowed lumber whose weight and span ratings both
    cover the crate. If none qualifies the widest allowed size is used, and
    an empty allowed set falls back to :data:`DEFAULT_FLOORBOARD`.
    """
    ratings = _allowed_ratings(allowed_sizes)
    if not ratings:
        logger.warning(
            "No floorboard lumber available; falling back to %s",
            DEFAULT_FLOORBOARD.nominal,
        )
        return DEFAULT_FLOORBOARD

    for rating in ratings:
        if weight <= rating.max_weight and internal_length <= rating.max_span:
            return rating.lumber

    widest = max(ratings, key=lambda r: r.lumber.width)
    logger.warning(
        "No floorboard rated for %.0f lb over %.1f in; using widest available %s",
        weight,
        internal_length,
        widest.lumber.nominal,
    )
    return widest.lumber


def ranked_floorboard_sizes(
    selected: LumberSize,
    allowed_sizes: Iterable[str] | None = None,
) -> list[LumberSize]:
    """Candidate floorboard sizes for the layout packer, widest first.

    Only sizes at least as wide as ``selected`` are offered, so every board
    in the layout meets the selected rating.
    """
    ratings = _allowed_ratings(allowed_sizes)
    ranked = [r.lumber for r in ratings if r.lumber.width >= selected.width]
    if selected not in ranked:
        ranked.append(selected)
    return sorted(ranked, key=lambda lumber: lumber.width, reverse=True)
