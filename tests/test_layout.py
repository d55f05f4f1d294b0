"""
Tests for the two-pass box layout.
"""

import random

import pytest

from ui_engine.layout import (
    Box, Direction, LayoutPhase, LayoutSystem, Margins, MultipleRoots, RectShape, Settings,
)
from ui_engine.scene import Scene

from .conftest import add_box, add_children

SX = 2 / 800
SY = 2 / 600


def shape_of(scene, eid):
    return scene.get_one(Box, eid).shape


def assert_shape(shape, x, y, w, h):
    assert shape.x == pytest.approx(x)
    assert shape.y == pytest.approx(y)
    assert shape.w == pytest.approx(w)
    assert shape.h == pytest.approx(h)


class TestBasicLayout:
    """Simple trees with known results."""

    def test_two_growing_children_split_the_viewport(self, scene, system):
        root = add_box(scene, direction=Direction.ROW)
        first, second = add_children(scene, root, [{"grow": 1}, {"grow": 1}])

        system.layout()

        assert_shape(shape_of(scene, root), -1, -1, 2, 2)
        assert_shape(shape_of(scene, first), -1, -1, 1, 2)
        assert_shape(shape_of(scene, second), 0, -1, 1, 2)

    def test_single_root_fills_viewport(self, scene, system):
        root = add_box(scene)
        system.layout()
        assert_shape(shape_of(scene, root), -1, -1, 2, 2)

    def test_root_margins_shrink_region(self, scene, system):
        root = add_box(scene, margins=Margins(l=40, b=30, r=40, t=30))
        system.layout()
        assert_shape(shape_of(scene, root), -1 + 40 * SX, -1 + 30 * SY, 2 - 80 * SX, 2 - 60 * SY)

    def test_column_direction_stacks_vertically(self, scene, system):
        root = add_box(scene, direction=Direction.COL)
        first, second = add_children(scene, root, [{"grow": 1}, {"grow": 3}])

        system.layout()

        assert_shape(shape_of(scene, first), -1, -1, 2, 0.5)
        assert_shape(shape_of(scene, second), -1, -0.5, 2, 1.5)

    def test_empty_scene(self, scene, system):
        system.layout()
        assert system.boxes == []
        assert system.phase is LayoutPhase.DONE


class TestDistribution:
    """Sharing surplus space between siblings."""

    def test_zero_grow_child_keeps_minimum_length(self, scene, system):
        root = add_box(scene)
        fixed, flexible = add_children(scene, root, [
            {"grow": 0, "min_size": (200, 0)},
            {"grow": 1},
        ])

        system.layout()

        assert_shape(shape_of(scene, fixed), -1, -1, 0.5, 2)
        assert_shape(shape_of(scene, flexible), -0.5, -1, 1.5, 2)

    def test_all_zero_grow_leaves_surplus_unused(self, scene, system):
        root = add_box(scene)
        first, second = add_children(scene, root, [
            {"grow": 0, "min_size": (80, 0)},
            {"grow": 0, "min_size": (120, 0)},
        ])

        system.layout()

        assert shape_of(scene, first).w == pytest.approx(80 * SX)
        assert shape_of(scene, second).w == pytest.approx(120 * SX)
        assert shape_of(scene, second).x == pytest.approx(-1 + 80 * SX)

    def test_outer_lengths_fill_parent(self, scene, system):
        root = add_box(scene, margins=Margins(10, 10, 10, 10))
        specs = [
            {"grow": 1, "margins": Margins(l=5, r=7), "min_size": (30, 10)},
            {"grow": 2, "margins": Margins(l=3), "min_size": (10, 0)},
            {"grow": 3, "margins": Margins(r=11)},
        ]
        children = add_children(scene, root, specs)

        system.layout()

        root_shape = shape_of(scene, root)
        outer_total = sum(
            shape_of(scene, eid).w + SX * (spec["margins"].l + spec["margins"].r)
            for eid, spec in zip(children, specs)
        )
        assert outer_total == pytest.approx(root_shape.w)

        # Each child starts right after the previous one's right margin
        cursor = root_shape.x
        for eid, spec in zip(children, specs):
            shape = shape_of(scene, eid)
            assert shape.x == pytest.approx(cursor + SX * spec["margins"].l)
            cursor = shape.x + shape.w + SX * spec["margins"].r

    def test_shares_are_proportional_to_grow(self, scene, system):
        root = add_box(scene)
        children = add_children(scene, root, [{"grow": 1}, {"grow": 2}, {"grow": 5}])

        system.layout()

        widths = [shape_of(scene, eid).w for eid in children]
        assert widths == pytest.approx([0.25, 0.5, 1.25])

    def test_surplus_reaches_grandchildren_across_directions(self, scene, system):
        root = add_box(scene, direction=Direction.ROW)
        left, right = add_children(scene, root, [{"direction": Direction.COL}, {}])
        top, bottom = add_children(scene, left, [{}, {}])

        system.layout()

        assert_shape(shape_of(scene, left), -1, -1, 1, 2)
        assert_shape(shape_of(scene, right), 0, -1, 1, 2)
        assert_shape(shape_of(scene, top), -1, -1, 1, 1)
        assert_shape(shape_of(scene, bottom), -1, 0, 1, 1)

    def test_minimum_size_propagates_to_parent(self, scene, system):
        root = add_box(scene)
        holder = add_box(scene, root, grow=0)
        leaf = add_box(scene, holder, min_size=(100, 50), margins=Margins(10, 10, 10, 10))

        system.layout()

        assert_shape(shape_of(scene, holder), -1, -1, 120 * SX, 2)
        assert_shape(shape_of(scene, leaf), -1 + 10 * SX, -1 + 10 * SY, 100 * SX, 2 - 20 * SY)


class TestCrossAxis:
    """Filling or keeping the cross axis."""

    def test_fill_and_non_fill_siblings(self, scene, system):
        root = add_box(scene)
        filled, margined, natural = add_children(scene, root, [
            {"fill_cross": True},
            {"fill_cross": True, "margins": Margins(b=30, t=30)},
            {"fill_cross": False, "min_size": (0, 100)},
        ])

        system.layout()

        assert_shape(shape_of(scene, filled), -1, -1, 2 / 3, 2)
        margined_shape = shape_of(scene, margined)
        assert margined_shape.h == pytest.approx(2 - 60 * SY)
        assert margined_shape.y == pytest.approx(-1 + 30 * SY)
        natural_shape = shape_of(scene, natural)
        assert natural_shape.h == pytest.approx(100 * SY)
        assert natural_shape.y == pytest.approx(-1)

    def test_all_filling_siblings_share_cross_length(self, scene, system):
        root = add_box(scene, direction=Direction.COL, margins=Margins(l=20, r=60))
        children = add_children(scene, root, [{"grow": g} for g in (0, 1, 4)])

        system.layout()

        widths = {shape_of(scene, eid).w for eid in children}
        assert len(widths) == 1
        assert widths.pop() == pytest.approx(shape_of(scene, root).w)


class TestEdgeCases:
    """Numeric corner cases that must not produce garbage geometry."""

    def test_over_constrained_margins_clamp_to_zero(self, scene, system):
        root = add_box(scene, margins=Margins(l=500, r=500))
        first, second = add_children(scene, root, [
            {"margins": Margins(10, 400, 10, 400)},
            {"min_size": (300, 700)},
        ])
        add_box(scene, first, margins=Margins(50, 50, 50, 50))

        system.layout()

        for box in system.boxes:
            assert box.shape.w >= 0
            assert box.shape.h >= 0
        assert shape_of(scene, root).w == 0

    def test_layout_is_idempotent(self, scene, system):
        root = add_box(scene, direction=Direction.COL, margins=Margins(3, 4, 5, 6))
        a, b = add_children(scene, root, [{"grow": 2, "min_size": (10, 20)}, {"fill_cross": False}])
        add_children(scene, a, [{"grow": 0.5}, {"grow": 1.5, "margins": Margins(1, 2, 3, 4)}])

        system.layout()
        first = [box.shape.as_tuple() for box in system.boxes]
        system.layout()
        second = [box.shape.as_tuple() for box in system.boxes]

        assert first == second

    def test_scratch_fields_are_reset(self, scene, system):
        root = add_box(scene)
        children = add_children(scene, root, [{"grow": 1}, {"grow": 2, "min_size": (40, 40)}])
        add_children(scene, children[0], [{}, {"fill_cross": False}])

        system.layout()
        expected = [box.shape.as_tuple() for box in system.boxes]

        for box in system.boxes:
            box.shape = RectShape(9.0, 9.0, 9.0, 9.0)
            box._extra = 123.0
            box._grow_total = 456.0
            box._offset = 789.0
            box._content = -1.0
        system.layout()

        assert [box.shape.as_tuple() for box in system.boxes] == expected

    @pytest.mark.parametrize("seed", range(10))
    def test_result_does_not_depend_on_store_order(self, seed):
        structure = [
            ("root", None, {"margins": Margins(4, 4, 4, 4)}),
            ("a", "root", {"direction": Direction.COL, "grow": 2}),
            ("b", "root", {"grow": 1, "min_size": (50, 50), "fill_cross": False}),
            ("a1", "a", {"grow": 1}),
            ("a2", "a", {"grow": 0, "min_size": (0, 90)}),
            ("a3", "a", {"grow": 3, "margins": Margins(2, 2, 2, 2)}),
        ]

        def build(creation_order):
            scene = Scene()
            ids = {name: scene.create(Box()) for name in creation_order}
            last_child = {}
            for name, parent, settings in structure:
                box = scene.get_one(Box, ids[name])
                box.settings = Settings(**settings)
                if parent is not None:
                    box.parent = ids[parent]
                    if parent in last_child:
                        box.sibling = ids[last_child[parent]]
                    last_child[parent] = name
            LayoutSystem(scene, (640, 480)).layout()
            return {name: scene.get_one(Box, ids[name]).shape.as_tuple() for name in ids}

        names = [name for name, _, _ in structure]
        shuffled = list(names)
        random.Random(seed).shuffle(shuffled)

        reference = build(names)
        result = build(shuffled)
        for name in names:
            assert result[name] == pytest.approx(reference[name])


class TestLayoutSystem:
    """Viewport handling, failures and pass sequencing."""

    def test_set_viewport_rescales_pixels(self, scene, system):
        root = add_box(scene, margins=Margins(l=100))
        system.layout()
        assert shape_of(scene, root).x == pytest.approx(-0.75)

        system.set_viewport((400, 300))
        system.layout()
        assert shape_of(scene, root).x == pytest.approx(-0.5)
        assert system.view_scale == (0.005, 2 / 300)

    @pytest.mark.parametrize("size", [(0, 600), (800, -1), (800.0, 600), (800,)])
    def test_invalid_viewport(self, scene, size):
        with pytest.raises(ValueError):
            LayoutSystem(scene, size)

    def test_multiple_roots_leave_shapes_untouched(self, scene, system):
        first_root = add_box(scene)
        add_children(scene, first_root, [{}, {}])
        second_root = add_box(scene)
        sentinel = (0.1, 0.2, 0.3, 0.4)
        for entity in scene.iter(Box):
            entity.components[0].shape = RectShape(*sentinel)

        with pytest.raises(MultipleRoots):
            system.layout()

        for entity in scene.iter(Box):
            assert entity.components[0].shape.as_tuple() == sentinel
        assert system.phase is LayoutPhase.IDLE
        assert scene.get_one(Box, second_root) is not None

    def test_failure_is_logged(self, scene, system, caplog):
        add_box(scene)
        add_box(scene)
        with caplog.at_level("ERROR", logger="ui_engine.layout.layout"):
            with pytest.raises(MultipleRoots):
                system.layout()
        assert "Layout aborted" in caplog.text

    def test_distribution_requires_measured_tree(self, scene, system):
        root = add_box(scene)
        add_children(scene, root, [{}])
        system.layout()

        with pytest.raises(RuntimeError):
            system._distribute(system.boxes)
        with pytest.raises(RuntimeError):
            system._measure(system.boxes)
