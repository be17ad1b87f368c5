from dataclasses import replace

from press.readouts import format_readouts
from press.state import CrushState, default_state


def test_default_readouts(config):
    r = format_readouts(default_state(config))
    assert r.input_force == "200 N"
    assert r.input_area == "5 cm²"
    assert r.output_area == "100 cm²"
    assert r.force_term == "200 N"
    assert r.ratio == "20.00 x"
    assert r.pressure == "400.0 kPa"
    assert r.output_force == "4000 N"
    assert r.gauge == "400 kPa"
    assert not r.warning
    assert r.crushed_message == ""


def test_rounding(config):
    state = default_state(config).with_inputs(config, input_force=100.0, input_area=3.0, output_area=7.0)
    r = format_readouts(state)
    assert r.ratio == "2.33 x"
    assert r.pressure == "333.3 kPa"
    assert r.output_force == "233 N"
    assert r.gauge == "333 kPa"


def test_crushed_message(config):
    state = replace(default_state(config), crush=CrushState.CRUSHED)
    assert format_readouts(state).crushed_message == "CRUSHED!"


def test_warning_matches_advantage_rule(config):
    state = default_state(config)
    assert not state.with_inputs(config, input_area=5.0, output_area=100.0).warning
    assert state.with_inputs(config, input_area=40.0, output_area=40.0).warning
