"""
Tests for the frame step: easing, piston travel, contact and the crush latch.
"""

from dataclasses import replace

import pytest

from press.animation import advance, ease, fluid_color, in_contact, layout, piston_travel
from press.state import CrushState, default_state


def run_frames(state, config, n, dt=None):
    for _ in range(n):
        state = advance(state, config, dt)
    return state


class TestEase:

    def test_moves_fraction_of_difference(self):
        assert ease(0.0, 1.0, 0.1, 0.001) == pytest.approx(0.1)

    def test_snaps_inside_epsilon(self):
        assert ease(0.9995, 1.0, 0.1, 0.001) == 1.0

    def test_reference_dt_matches_per_frame_speed(self):
        assert ease(0.0, 1.0, 0.1, 0.001, dt=1 / 60, reference_dt=1 / 60) == pytest.approx(0.1)

    def test_two_half_frames_equal_one_frame(self):
        half = ease(0.0, 1.0, 0.1, 1e-9, dt=1 / 120, reference_dt=1 / 60)
        both = ease(half, 1.0, 0.1, 1e-9, dt=1 / 120, reference_dt=1 / 60)
        assert both == pytest.approx(0.1)


class TestAdvance:

    def test_converges_and_snaps_to_target(self, config):
        state = run_frames(default_state(config), config, 200)
        assert state.visual_position == 0.4

    def test_realistic_mode_is_slower(self, config):
        fast = run_frames(default_state(config), config, 10)
        slow = run_frames(default_state(config, realistic_mode=True), config, 10)
        assert slow.visual_position < fast.visual_position

    def test_does_not_mutate_input(self, config):
        state = default_state(config)
        advance(state, config)
        assert state.visual_position == 0.0


class TestTravel:

    def test_right_travel_scaled_by_area_ratio(self, config):
        y_left, travel = piston_travel(1.0, 5, 100, config.animation)
        assert y_left == 100.0
        assert travel == pytest.approx(100.0 * 0.05 * 5.0)

    def test_clamped_to_max_travel(self, config):
        _, travel = piston_travel(1.0, 50, 60, config.animation)
        assert travel == 130.0

    def test_contact_is_a_proximity_band(self, config):
        anim = config.animation
        assert in_contact(130.0, anim)
        assert in_contact(125.5, anim)
        assert not in_contact(125.0, anim)

    def test_default_geometry_never_reaches_ceiling(self, config):
        state = default_state(config).with_inputs(config, input_force=500.0)
        state = run_frames(state, config, 300)
        assert not layout(state, config).contact
        assert state.crush is CrushState.INTACT


class TestCrushLatch:

    def test_no_crush_below_threshold_even_in_contact(self, crushing_config):
        state = run_frames(default_state(crushing_config), crushing_config, 300)
        assert layout(state, crushing_config).contact
        assert state.output_force == 4000.0
        assert state.crush is CrushState.INTACT

    def test_crush_at_max_force(self, crushing_config):
        state = default_state(crushing_config).with_inputs(crushing_config, input_force=500.0)
        state = run_frames(state, crushing_config, 300)
        assert state.output_force == 10000.0
        assert state.crush is CrushState.CRUSHED

    def test_no_crush_without_contact(self, crushing_config):
        state = default_state(crushing_config).with_inputs(crushing_config, input_force=500.0)
        state = advance(state, crushing_config)
        assert not layout(state, crushing_config).contact
        assert state.crush is CrushState.INTACT

    def test_latch_survives_force_drop(self, crushing_config):
        state = default_state(crushing_config).with_inputs(crushing_config, input_force=500.0)
        state = run_frames(state, crushing_config, 300)
        state = state.with_inputs(crushing_config, input_force=0.0)
        state = run_frames(state, crushing_config, 300)
        assert state.visual_position == 0.0
        assert state.crush is CrushState.CRUSHED

    def test_crushed_layout_reapplied_every_frame(self, crushing_config):
        state = replace(default_state(crushing_config), crush=CrushState.CRUSHED)
        for _ in range(3):
            state = advance(state, crushing_config)
            frame = layout(state, crushing_config)
            assert frame.object_scale == 0.4
            assert frame.cracks_visible
            assert frame.message_visible


class TestLayout:

    def test_rest_geometry(self, config):
        frame = layout(default_state(config), config)
        assert frame.left_piston_y == 100.0
        assert frame.left_fluid == (100.0, 150.0)
        assert frame.right_piston_y == 150.0
        assert frame.right_fluid == (150.0, 100.0)
        assert frame.object_scale == 1.0
        assert not frame.cracks_visible

    def test_fluid_fill_follows_pistons(self, config):
        state = replace(default_state(config), visual_position=0.5)
        frame = layout(state, config)
        assert frame.left_fluid == (150.0, 100.0)
        assert frame.right_fluid == pytest.approx((137.5, 112.5))

    def test_fluid_color_endpoints(self, config):
        assert fluid_color(0.0, config) == config.fluid_base_color
        assert fluid_color(1e9, config) == config.fluid_high_pressure_color
