"""Tests for skid and floorboard lumber selection.

Tests cover:
- Weight band boundaries (inclusive upper bounds)
- Thin skid allowance
- Allowed-size filtering for skids and floorboards
- Skid count and spacing
- Floorboard fallbacks
"""

from __future__ import annotations

import logging

import pytest

from cratemaker.domain.entities import SkidSpec
from cratemaker.domain.services.lumber import (
    DEFAULT_FLOORBOARD,
    LUMBER_SIZES,
    compute_skid_count,
    lumber_size,
    ranked_floorboard_sizes,
    resolve_skids,
    select_floorboard,
    select_skid,
    select_skid_spacing,
)


class TestSelectSkid:
    """Tests for skid band selection."""

    @pytest.mark.parametrize(
        "weight,nominal",
        [
            (0, "4x4"),
            (800, "4x4"),
            (4500, "4x4"),
            (4500.01, "4x6"),
            (20000, "4x6"),
            (20000.5, "6x6"),
            (40000, "6x6"),
            (40001, "8x8"),
            (60000, "8x8"),
        ],
    )
    def test_band_boundaries_are_inclusive(self, weight: float, nominal: str) -> None:
        """Each band's upper weight limit belongs to that band."""
        assert select_skid(weight).nominal == nominal

    def test_thin_skid_requires_allowance(self) -> None:
        """Light loads only get 3x4 skids when explicitly allowed."""
        assert select_skid(300).nominal == "4x4"
        assert select_skid(300, allow_thin_skid=True).nominal == "3x4"
        assert select_skid(500, allow_thin_skid=True).nominal == "3x4"
        assert select_skid(500.5, allow_thin_skid=True).nominal == "4x4"

    def test_thin_skid_dimensions(self) -> None:
        skid = select_skid(100, allow_thin_skid=True)
        assert skid.height == 3.5
        assert skid.width == 2.5

    def test_4x6_lies_flat(self) -> None:
        """4x6 skids stand 3.5 in tall and 5.5 in wide."""
        skid = select_skid(10000)
        assert skid.height == 3.5
        assert skid.width == 5.5

    def test_overweight_clamps_to_heaviest(self, caplog: pytest.LogCaptureFixture) -> None:
        """Weights above the table use 8x8 skids and log a warning."""
        with caplog.at_level(logging.WARNING):
            skid = select_skid(75000)
        assert skid.nominal == "8x8"
        assert "exceeds the skid table" in caplog.text

    def test_disallowed_size_steps_up(self) -> None:
        """A disallowed band moves to the next heavier allowed size."""
        skid = select_skid(800, allowed_sizes={"6x6", "8x8"})
        assert skid.nominal == "6x6"

    def test_never_steps_down(self, caplog: pytest.LogCaptureFixture) -> None:
        """Lighter allowed sizes are ignored; the band's size is kept."""
        with caplog.at_level(logging.WARNING):
            skid = select_skid(30000, allowed_sizes={"4x4"})
        assert skid.nominal == "6x6"
        assert "No allowed skid size" in caplog.text


class TestSkidSpacing:
    """Tests for skid spacing rules and counts."""

    def test_4x4_spacing(self) -> None:
        rule = select_skid_spacing(800, SkidSpec("4x4", 3.5, 3.5))
        assert rule.max_spacing == 30.0
        assert rule.min_count == 2

    @pytest.mark.parametrize(
        "weight,max_spacing",
        [(5000, 41.0), (6000, 41.0), (10000, 28.0), (12000, 28.0), (15000, 24.0)],
    )
    def test_4x6_spacing_tightens_with_weight(
        self, weight: float, max_spacing: float
    ) -> None:
        rule = select_skid_spacing(weight, SkidSpec("4x6", 3.5, 5.5))
        assert rule.max_spacing == max_spacing

    def test_heavy_skids_need_three(self) -> None:
        rule = select_skid_spacing(35000, SkidSpec("6x6", 5.5, 5.5))
        assert rule.min_count == 3
        assert rule.max_spacing == 28.0

    def test_two_skids_when_span_fits(self) -> None:
        """Two skids suffice when the center span is within the maximum."""
        count, spacing = compute_skid_count(30.0, 3.5, 30.0)
        assert count == 2
        assert spacing == pytest.approx(26.5)

    def test_intermediate_skid_added(self) -> None:
        """34 in internal width with 4x4 skids needs a third skid."""
        count, spacing = compute_skid_count(34.0, 3.5, 30.0)
        assert count == 3
        assert spacing == pytest.approx(15.25)

    def test_min_count_enforced(self) -> None:
        count, spacing = compute_skid_count(20.0, 5.5, 41.0, min_count=3)
        assert count == 3
        assert spacing == pytest.approx(7.25)

    @pytest.mark.parametrize("width", [24.0, 34.0, 61.0, 100.0, 139.0, 250.0])
    @pytest.mark.parametrize("weight", [800, 5000, 10000, 25000, 45000])
    def test_spacing_never_exceeds_maximum(self, width: float, weight: float) -> None:
        skid = resolve_skids(weight, width)
        assert skid.count >= max(2, skid.min_count)
        assert skid.spacing <= skid.max_spacing + 1e-9
        assert skid.spacing * (skid.count - 1) == pytest.approx(width - skid.width)

    def test_resolve_skids_large_crate(self) -> None:
        """139 in internal width at 10000 lb: six 4x6 skids at 26.7 in."""
        skid = resolve_skids(10000, 139.0)
        assert skid.nominal == "4x6"
        assert skid.count == 6
        assert skid.spacing == pytest.approx(26.7)


class TestSelectFloorboard:
    """Tests for floorboard lumber selection."""

    def test_narrowest_qualifying(self) -> None:
        assert select_floorboard(800, 44.0).nominal == "2x6"

    def test_span_limit_inclusive(self) -> None:
        assert select_floorboard(5000, 60.0).nominal == "2x6"
        assert select_floorboard(5000, 60.5).nominal == "2x8"

    def test_weight_and_span_both_required(self) -> None:
        """10000 lb over 139 in needs the 144 in span of a 2x12."""
        assert select_floorboard(10000, 139.0).nominal == "2x12"

    def test_nothing_qualifies_uses_widest(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            lumber = select_floorboard(10000, 100.0, allowed_sizes={"2x6", "2x8"})
        assert lumber.nominal == "2x8"
        assert "using widest available" in caplog.text

    def test_empty_allowed_set_falls_back(self) -> None:
        """An empty allowed set yields the default 2x6 rather than an error."""
        lumber = select_floorboard(800, 44.0, allowed_sizes=frozenset())
        assert lumber == DEFAULT_FLOORBOARD
        assert lumber.nominal == "2x6"

    def test_ranked_sizes_widest_first(self) -> None:
        ranked = ranked_floorboard_sizes(LUMBER_SIZES["2x8"])
        assert [lumber.nominal for lumber in ranked] == ["2x12", "2x10", "2x8"]

    def test_ranked_sizes_respect_allowed(self) -> None:
        ranked = ranked_floorboard_sizes(LUMBER_SIZES["2x6"], {"2x6", "2x10"})
        assert [lumber.nominal for lumber in ranked] == ["2x10", "2x6"]


class TestLumberSize:
    def test_known_size(self) -> None:
        lumber = lumber_size("2x10")
        assert lumber.thickness == 1.5
        assert lumber.width == 9.25

    def test_unknown_size(self) -> None:
        with pytest.raises(KeyError, match="Unknown lumber size"):
            lumber_size("9x9")
