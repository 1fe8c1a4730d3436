"""
Playback controller tests (no GUI involved)
"""

import pytest

from core.simulation_controller import SimulationController


@pytest.fixture
def controller(processor):
    return SimulationController(processor)


def test_steps_per_frame_range(controller, config):
    controller.set_speed(0)
    assert controller.steps_per_frame() == 1
    controller.set_speed(config.max_speed)
    assert controller.steps_per_frame() == config.max_steps_per_frame
    controller.set_speed(10 ** 6)
    assert controller.speed == config.max_speed
    controller.set_speed(-5)
    assert controller.speed == 0


def test_toggle_play_compiles_first(controller, processor):
    assert controller.toggle_play("REPEAT 4 [ FD 10 RT 90 ]")
    assert controller.playing
    assert processor.is_compiled()
    assert not controller.toggle_play("ignored")
    assert not controller.playing


def test_toggle_play_with_bad_source(controller):
    assert not controller.toggle_play("FD")
    assert not controller.playing
    assert controller.status_is_error
    assert "FD" in controller.status


def test_tick_runs_until_finished(controller, processor):
    controller.set_speed(0)
    controller.toggle_play("FD 1 FD 1 FD 1")
    results = [controller.tick() for _ in range(4)]
    assert [r.executed for r in results] == [1, 1, 1, 0]
    assert results[-1].finished
    assert not controller.playing
    assert controller.status == "Program finished."
    assert len(processor.get_all_geometry()) == 3


def test_tick_when_paused_does_nothing(controller, processor):
    controller.compile("FD 1")
    assert controller.tick().executed == 0
    assert processor.get_all_geometry() == []


def test_step_reports_command(controller):
    result = controller.step("REPEAT 2 [ RT 45 ]")
    assert result.executed == 1
    assert result.last_text == "RT 45"
    assert controller.status == "Step: RT 45"


def test_reset(controller, processor):
    controller.toggle_play("FD 10")
    controller.tick()
    controller.reset()
    assert not controller.playing
    assert controller.status == "Reset."
    assert processor.get_all_geometry() == []


def test_load_program_file(controller, tmp_path):
    path = tmp_path / "square.logo"
    path.write_text("REPEAT 4 [ FD 10 RT 90 ]")
    text, error = controller.load_program_file(str(path))
    assert error is None
    assert text.startswith("REPEAT")

    text, error = controller.load_program_file(str(tmp_path / "missing.logo"))
    assert text is None
    assert error
