"""Tests for composition planning."""

from __future__ import annotations

import pytest

from chromaseed.render.plan import CompositionPlan, MIN_BLOCKS, plan_composition

from conftest import GOLDEN_SEED


@pytest.fixture(scope="module")
def plan():
    return plan_composition(GOLDEN_SEED, 760, 760)


def test_block_golden(plan):
    assert len(plan.blocks) == 76
    block = plan.blocks[0]
    assert block.w_px == pytest.approx(592.9264031202532)
    assert block.h_px == pytest.approx(256.83263015970584)
    assert block.nx == pytest.approx(0.8784165016841143)
    assert block.ny == pytest.approx(0.6201438729185611)


def test_swirl_golden(plan):
    swirl = plan.swirl
    assert swirl.pass_count == 2
    assert swirl.strength == pytest.approx(13.575333451852202)
    assert swirl.block_size == 14
    assert swirl.tear_chance == pytest.approx(0.21235772487707436)
    assert swirl.axis_bias == pytest.approx(0.7304647233895958)


def test_background_golden(plan):
    bg = plan.background
    assert bg.flow_passes == 155
    assert bg.flow_strength == pytest.approx(2.563889808859676)
    assert bg.flow_alpha == pytest.approx(0.01193748734332621)
    assert bg.gravity == pytest.approx(1.2238298846408724)
    assert bg.edge_resistance == pytest.approx(1.656858036806807)
    assert (bg.large_shapes, bg.medium_shapes, bg.small_shapes, bg.tiny_shapes) == (3, 8, 8, 29)
    assert bg.checker_enabled is False


def test_tail_golden(plan):
    assert plan.cantext_strength == pytest.approx(18.53730411734432)
    assert plan.weave_mode == 1


def test_small_canvas_block_count():
    assert len(plan_composition(GOLDEN_SEED, 220, 180).blocks) == 53


@pytest.mark.parametrize("seed", [1, 7, 99, 123456])
def test_ranges(seed):
    plan = plan_composition(seed, 500, 300)
    assert len(plan.blocks) >= MIN_BLOCKS
    for block in plan.blocks:
        assert 300 * 0.24 <= block.w_px < 300 * 0.89
        assert 300 * 0.21 <= block.h_px < 300 * 0.77
        assert 0 <= block.nx < 1 and 0 <= block.ny < 1
    assert plan.swirl.pass_count in (1, 2)
    assert 8 <= plan.swirl.block_size <= 19
    assert 110 <= plan.background.flow_passes < 220
    assert plan.weave_mode in (1, 2)


def test_deterministic():
    assert plan_composition(42, 400, 300) == plan_composition(42, 400, 300)


def test_dict_round_trip(plan):
    assert CompositionPlan.from_dict(plan.to_dict()) == plan
