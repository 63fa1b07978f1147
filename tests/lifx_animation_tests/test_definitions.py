from lifx_animation.definitions import (
    AnimationDefinition,
    CycleDefinition,
    MoveDirection,
    MultizoneMoveDefinition,
    WaveDirection,
    WaveForm,
    WaveColors,
    TileChainWaveDefinition,
    wave_distance,
)

from lifx_colour.tiles import chain_from_dict
from lifx_colour import zones, OFF, RED, GREEN, BLUE

import pytest


class TestAnimationDefinition:
    def test_it_has_defaults(self):
        definition = AnimationDefinition()
        assert definition.start_time(0) is None
        assert not definition.wait_for_previous_animation_end()

        with pytest.raises(NotImplementedError):
            definition.color(0)


class TestCycleDefinition:
    def test_it_goes_round_forever(self):
        cycle = CycleDefinition([RED, GREEN, BLUE])
        assert [cycle.color(n) for n in range(7)] == [RED, GREEN, BLUE, RED, GREEN, BLUE, RED]
        assert cycle.color(3000) == RED

    def test_it_has_a_different_first_step(self):
        cycle = CycleDefinition([RED, GREEN], step_duration=500, start_transition=100)
        assert cycle.duration(0) == 100
        assert cycle.duration(1) == 500
        assert cycle.duration(2) == 500

    def test_it_finishes_on_the_first_color(self):
        cycle = CycleDefinition([RED, GREEN, BLUE], cycle_count=2)
        assert cycle.color(6) == RED
        assert cycle.color(7) is None

    def test_it_can_finish_on_the_last_color(self):
        cycle = CycleDefinition([RED, GREEN, BLUE], cycle_count=2, end_with_last=True)
        assert cycle.color(5) == BLUE
        assert cycle.color(6) is None

    def test_it_does_nothing_without_colors(self):
        assert CycleDefinition([]).color(0) is None

    def test_it_has_chainable_setters(self):
        cycle = CycleDefinition([RED, GREEN, BLUE])
        same = (
            cycle.set_cycle_duration(3000)
            .set_start_transition(0)
            .set_cycle_count(1)
            .set_end_with_last()
        )
        assert same is cycle
        assert cycle.step_duration == 1000
        assert cycle.duration(0) == 0
        assert cycle.color(2) == BLUE
        assert cycle.color(3) is None

    def test_it_ignores_negative_values(self):
        cycle = CycleDefinition([RED], step_duration=-1, start_transition=-5, cycle_count=-2)
        assert (cycle.step_duration, cycle.start_transition, cycle.cycle_count) == (0, 0, 0)
        assert cycle.set_step_duration(-10).step_duration == 0


class TestMultizoneMoveDefinition:
    def colors(self):
        return zones.Exact([RED] + [OFF] * 9)

    def test_it_moves_one_zone_each_step(self):
        move = MultizoneMoveDefinition(10, 5000, 1, MoveDirection.FORWARD, self.colors())
        assert move.duration(0) == 500
        assert move.color(0).as_list(10)[0] == RED
        assert move.color(1).as_list(10)[1] == RED
        assert move.color(1).as_list(10)[0] == OFF
        assert move.color(12).as_list(10)[2] == RED

    def test_it_moves_backward(self):
        move = MultizoneMoveDefinition(10, 5000, 1, MoveDirection.BACKWARD, self.colors())
        assert move.color(1).as_list(10)[9] == RED

    def test_it_mirrors_and_takes_twice_as_long(self):
        move = MultizoneMoveDefinition(10, 5000, 1, MoveDirection.OUTWARD, self.colors())
        assert move.duration(0) == 1000

        found = move.color(0).as_list(10)
        assert found[4] == RED and found[5] == RED
        assert found[3] == OFF and found[6] == OFF

    def test_it_stretches_the_colors(self):
        move = MultizoneMoveDefinition(
            4, 4000, 2, MoveDirection.FORWARD, zones.Exact([RED, BLUE])
        )
        assert move.color(0).as_list(4) == [RED, RED, BLUE, BLUE]

    def test_it_uses_the_selected_brightness(self):
        move = MultizoneMoveDefinition(10, 5000, 1, MoveDirection.FORWARD, self.colors())
        move.selected_brightness = 0.5
        assert move.color(0).as_list(10)[0] == RED.with_relative_brightness(0.5)


class TestWaves:
    def test_it_measures_distance_in_different_shapes(self):
        assert wave_distance(WaveForm.CIRCLE, 3, 4) == 5
        assert wave_distance(WaveForm.SQUARE, 3, -4) == 4
        assert wave_distance(WaveForm.DIAMOND, 1, 2) == 3
        assert wave_distance(WaveForm.VERTICAL, 3, 4) == 3
        assert wave_distance(WaveForm.HORIZONTAL, 3, 4) == 4
        assert wave_distance(WaveForm.HEART, 0, 0) == 0
        assert wave_distance(WaveForm.HEART, 0, 2) > 2

    def test_it_makes_rings_of_color(self):
        wave = WaveColors(0, 0, 4, 0, [RED, BLUE], WaveForm.CIRCLE)
        assert wave.color(0, 0, 8, 8) == RED
        assert wave.color(2, 0, 8, 8) == BLUE
        assert wave.color(1, 0, 8, 8) == RED.add(BLUE, 0.5)
        assert wave.color(4, 0, 8, 8) == RED

    def test_it_starts_in_the_middle_when_going_outward(self):
        wave = TileChainWaveDefinition(
            16, 8, 2000, 4, WaveDirection.OUTWARD, WaveForm.CIRCLE, [RED, BLUE]
        )
        assert (wave.x_center, wave.y_center) == (7.5, 3.5)
        assert wave.step_duration == 250
        assert wave.radius_factor == -0.5
        assert wave.duration(0) == 0
        assert wave.duration(1) == 250

        found = wave.color(2)
        assert isinstance(found, WaveColors)
        assert found.offset == -1

    def test_it_moves_the_other_way_inward(self):
        wave = TileChainWaveDefinition(
            16, 8, 2000, 4, WaveDirection.INWARD, WaveForm.CIRCLE, [RED, BLUE]
        )
        assert wave.radius_factor == 0.5

    def test_it_starts_from_an_edge(self):
        left = TileChainWaveDefinition(
            16, 8, 2000, 4, WaveDirection.FROM_LEFT, WaveForm.CIRCLE, [RED]
        )
        assert (left.x_center, left.y_center) == (-0.5, 3.5)

        top = TileChainWaveDefinition(
            16, 8, 2000, 4, WaveDirection.FROM_TOP, WaveForm.CIRCLE, [RED]
        )
        assert (top.x_center, top.y_center) == (7.5, 7.5)

    def test_it_puts_hearts_a_bit_higher(self):
        heart = TileChainWaveDefinition(
            8, 8, 2000, 4, WaveDirection.OUTWARD, WaveForm.HEART, [RED]
        )
        assert heart.y_center == pytest.approx(4.2)

    def test_it_has_a_minimum_step_duration(self):
        wave = TileChainWaveDefinition(
            8, 8, 1000, 4, WaveDirection.OUTWARD, WaveForm.CIRCLE, [RED, BLUE]
        )
        assert wave.step_duration == 250
        assert wave.radius_factor == -1

    def test_it_can_rebuild_wave_colors_from_a_dict(self):
        wave = TileChainWaveDefinition(
            16, 8, 2000, 8, WaveDirection.OUTWARD, WaveForm.CIRCLE, [RED, BLUE]
        )
        colors = wave.color(3)
        restored = chain_from_dict(colors.as_dict())
        assert isinstance(restored, WaveColors)
        assert restored == colors
        assert restored.form is WaveForm.CIRCLE
        assert restored.color(5, 2, 16, 8) == colors.color(5, 2, 16, 8)

        dimmed = colors.with_relative_brightness(0.5).shift(1, 0)
        assert chain_from_dict(dimmed.as_dict()).color(5, 2, 16, 8) == dimmed.color(5, 2, 16, 8)
