"""Tests for the built-in placement policies and the policy registry."""

import pytest

from gridplace.layout import policies
from gridplace.layout.errors import PlacementError, UnknownPolicyError
from gridplace.layout.targets import (
    CustomLayoutTarget,
    PositionOnlyTarget,
    Positionable,
    has_custom_layout,
    resolve_placement,
)
from gridplace.models.base import CellRect, Point
from gridplace.models.sprite import Sprite


class Marker:
    """Item with a position only."""

    def __init__(self) -> None:
        self.x = 0.0
        self.y = 0.0


class TestXY:
    """Tests for the xy policy."""

    def test_snaps_to_cell_corner(self) -> None:
        """Test xy sets the position to the cell's top-left corner."""
        item = Marker()
        policies.xy(item, 15, 25, 100, 100)
        assert (item.x, item.y) == (15, 25)

    def test_ignores_size(self) -> None:
        """Test xy does not touch the item's scale."""
        sprite = Sprite(40, 30)
        policies.xy(sprite, 5, 5, 100, 100)
        assert (sprite.width, sprite.height) == (40, 30)


class TestCenter:
    """Tests for the centering policies."""

    def test_center_x(self) -> None:
        """Test center_x centers horizontally and leaves y alone."""
        sprite = Sprite(40, 30, y=7)
        policies.center_x(sprite, 100, 0, 100, 100)
        assert sprite.x == 130
        assert sprite.y == 7

    def test_center_y(self) -> None:
        """Test center_y centers vertically and leaves x alone."""
        sprite = Sprite(40, 30, x=3)
        policies.center_y(sprite, 0, 100, 100, 100)
        assert sprite.x == 3
        assert sprite.y == 135

    def test_center_both(self) -> None:
        """Test center centers on both axes."""
        sprite = Sprite(40, 30)
        policies.center(sprite, 0, 0, 100, 100)
        assert (sprite.x, sprite.y) == (30, 35)
        assert (sprite.left, sprite.top) == (30, 35)

    def test_center_with_anchor(self) -> None:
        """Test the anchor offset keeps the visible box centered."""
        sprite = Sprite(40, 30, anchor=Point(0.5, 0.5))
        policies.center(sprite, 0, 0, 100, 100)
        assert (sprite.x, sprite.y) == (50, 50)
        assert (sprite.left, sprite.top) == (30, 35)

    def test_center_with_pivot(self) -> None:
        """Test the pivot offset is scaled by the item's scale."""
        sprite = Sprite(40, 30, pivot=Point(10, 0), scale=Point(2, 1))
        policies.center_x(sprite, 0, 0, 200, 100)
        # width 80, centered box starts at 60, pivot adds 10 * 2
        assert sprite.x == 80
        assert sprite.left == 60

    def test_oversized_item_overhangs(self) -> None:
        """Test items larger than the cell are centered, not clipped."""
        sprite = Sprite(200, 30)
        policies.center_x(sprite, 0, 0, 100, 100)
        assert sprite.x == -50

    def test_item_without_anchor(self) -> None:
        """Test items without anchor or pivot are centered by size alone."""

        class Box:
            x = 0.0
            y = 0.0
            width = 10.0
            height = 20.0

        box = Box()
        policies.center(box, 0, 0, 50, 50)
        assert (box.x, box.y) == (20, 15)


class TestCenterAndScaleToFit:
    """Tests for scale-to-fit placement."""

    def test_wide_cell_fits_height(self) -> None:
        """Test a wide cell shrinks the item to the cell height."""
        sprite = Sprite(40, 30)
        policies.center_and_scale_to_fit(sprite, 0, 0, 200, 60)
        assert sprite.scale.x == pytest.approx(2)
        assert sprite.scale.y == pytest.approx(2)
        assert sprite.width == pytest.approx(80)
        assert sprite.height == pytest.approx(60)
        assert sprite.x == pytest.approx(60)
        assert sprite.y == pytest.approx(0)

    def test_tall_cell_fits_width(self) -> None:
        """Test a tall cell stretches the item to the cell width."""
        sprite = Sprite(40, 30)
        policies.center_and_scale_to_fit(sprite, 0, 0, 80, 200)
        assert sprite.width == pytest.approx(80)
        assert sprite.height == pytest.approx(60)
        assert sprite.x == pytest.approx(0)
        assert sprite.y == pytest.approx(70)

    def test_tall_item_in_wide_cell(self) -> None:
        """Test a 50x200 item in a 100x50 cell is contained, centered and keeps its ratio."""
        sprite = Sprite(50, 200)
        policies.center_and_scale_to_fit(sprite, 0, 0, 100, 50)
        assert sprite.width <= 100
        assert sprite.height <= 50
        assert sprite.width / sprite.height == pytest.approx(50 / 200)
        assert sprite.x + sprite.width / 2 == pytest.approx(50)
        assert sprite.y + sprite.height / 2 == pytest.approx(25)

    def test_aspect_ratio_preserved(self) -> None:
        """Test the item's scale stays uniform."""
        sprite = Sprite(16, 9, scale=Point(0.1, 3))
        policies.center_and_scale_to_fit(sprite, 10, 10, 100, 100)
        assert sprite.scale.x == pytest.approx(sprite.scale.y)
        assert sprite.width <= 100 + 1e-9
        assert sprite.height <= 100 + 1e-9

    def test_fits_inside_cell(self) -> None:
        """Test the scaled box lies within the cell."""
        cell = CellRect(column=0, row=0, x=50, y=20, width=90, height=70)
        sprite = Sprite(30, 40)
        policies.center_and_scale_to_fit(sprite, cell.x, cell.y, cell.width, cell.height)
        assert cell.contains(sprite.left, sprite.top)
        assert cell.contains(sprite.left + sprite.width, sprite.top + sprite.height)

    def test_requires_scale(self) -> None:
        """Test items without a scale cannot be scaled to fit."""
        with pytest.raises(PlacementError, match="no 'scale'"):
            policies.center_and_scale_to_fit(Marker(), 0, 0, 10, 10)


class TestRegistry:
    """Tests for looking up policies by name."""

    def test_builtin_names(self) -> None:
        """Test all built-in policies are registered."""
        assert set(policies.policy_names()) >= {
            "xy",
            "center",
            "center_x",
            "center_y",
            "center_and_scale_to_fit",
        }

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("xy", policies.xy),
            ("centerX", policies.center_x),
            ("centerY", policies.center_y),
            ("centerAndScaleToFit", policies.center_and_scale_to_fit),
            ("identity", policies.xy),
        ],
    )
    def test_get_policy(self, name: str, expected: object) -> None:
        """Test names and aliases resolve to policy functions."""
        assert policies.get_policy(name) is expected

    def test_unknown_policy_suggestion(self) -> None:
        """Test unknown names suggest a close match."""
        with pytest.raises(UnknownPolicyError) as exc_info:
            policies.get_policy("centre")
        assert "did you mean 'center'?" in str(exc_info.value)

    def test_unknown_policy_is_key_error(self) -> None:
        """Test UnknownPolicyError can be caught as KeyError."""
        with pytest.raises(KeyError):
            policies.get_policy("nope")

    def test_policy_name(self) -> None:
        """Test reverse lookup of registered policies."""
        assert policies.policy_name(policies.center) == "center"
        assert policies.policy_name(lambda *args: None) is None
        assert policies.policy_name(None) is None

    def test_register_policy(self) -> None:
        """Test custom policies can be registered and looked up."""

        def bottom_left(item: object, x: float, y: float, width: float, height: float) -> None:
            item.x = x  # type: ignore[attr-defined]
            item.y = y + height  # type: ignore[attr-defined]

        policies.register_policy("bottom_left", bottom_left)
        try:
            assert policies.get_policy("bottom_left") is bottom_left
            with pytest.raises(ValueError, match="already registered"):
                policies.register_policy("bottom_left", policies.xy)
            policies.register_policy("bottom_left", policies.xy, replace=True)
            assert policies.get_policy("bottom_left") is policies.xy
        finally:
            policies.POLICIES.pop("bottom_left", None)

    def test_register_alias_name_rejected(self) -> None:
        """Test alias names cannot be registered, even with replace."""
        with pytest.raises(ValueError, match="alias"):
            policies.register_policy("identity", policies.center)
        with pytest.raises(ValueError, match="alias"):
            policies.register_policy("centerX", policies.center, replace=True)
        assert "identity" not in policies.POLICIES
        assert policies.get_policy("identity") is policies.xy


class TestPlacementTargets:
    """Tests for resolving items into placement targets."""

    def test_custom_layout_detected(self) -> None:
        """Test items with a layout method resolve to CustomLayoutTarget."""

        class Panel(Marker):
            def layout(self, x: float, y: float, width: float, height: float) -> None:
                self.x, self.y = x + 1, y + 1

        panel = Panel()
        target = resolve_placement(panel, policies.center)
        assert isinstance(target, CustomLayoutTarget)
        target.apply(CellRect(column=0, row=0, x=10, y=20, width=5, height=5))
        assert (panel.x, panel.y) == (11, 21)

    def test_position_only(self) -> None:
        """Test plain items resolve to PositionOnlyTarget with the default policy."""
        marker = Marker()
        target = resolve_placement(marker, policies.xy)
        assert target == PositionOnlyTarget(marker, policies.xy)
        target.apply(CellRect(column=1, row=1, x=3, y=4, width=5, height=5))
        assert (marker.x, marker.y) == (3, 4)

    def test_no_policy_noop(self) -> None:
        """Test a target without a policy leaves the item untouched."""
        marker = Marker()
        PositionOnlyTarget(marker, None).apply(CellRect(column=0, row=0, x=9, y=9, width=1, height=1))
        assert (marker.x, marker.y) == (0, 0)

    def test_has_custom_layout(self) -> None:
        """Test only callable layout attributes count."""
        assert not has_custom_layout(Marker())
        assert not has_custom_layout(Sprite(1, 1))

    def test_positionable(self) -> None:
        """Test sprites and plain markers satisfy Positionable."""
        assert isinstance(Sprite(1, 1), Positionable)
        assert isinstance(Marker(), Positionable)
        assert not isinstance(object(), Positionable)
