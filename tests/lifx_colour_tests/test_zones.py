from lifx_colour.hsbk import Color, OFF, RED, GREEN, BLUE
from lifx_colour import zones

import pytest


class TestFixed:
    def test_it_is_the_same_everywhere(self):
        fixed = zones.Fixed(RED)
        assert fixed.as_list(3) == [RED, RED, RED]

    def test_it_stays_fixed_when_dimmed(self):
        dimmed = zones.Fixed(Color(0, 0, 10000, 3500)).with_relative_brightness(0.5)
        assert isinstance(dimmed, zones.Fixed)
        assert dimmed.color(0, 1).brightness == 5000


class TestExact:
    def test_it_gives_off_past_the_end(self):
        exact = zones.Exact([RED, BLUE])
        assert exact.color(5, 10) == OFF
        assert exact.color(-1, 10) == OFF
        assert exact.as_list(3) == [RED, BLUE, OFF]


class TestInterpolated:
    def test_it_puts_the_ends_on_the_ends(self):
        colors = zones.Interpolated([RED, GREEN, BLUE]).as_list(5)
        assert colors[0] == RED
        assert colors[2] == GREEN
        assert colors[4] == BLUE
        assert colors[1] == RED.add(GREEN, 0.5)
        assert colors[3] == GREEN.add(BLUE, 0.5)

    def test_it_wraps_back_to_the_start_when_cyclic(self):
        colors = zones.Interpolated([RED, BLUE], cyclic=True).as_list(4)
        assert colors[0] == RED
        assert colors[2] == BLUE
        assert colors[1] == RED.add(BLUE, 0.5)
        assert colors[3] == BLUE.add(RED, 0.5)

    def test_it_uses_colors_as_they_are_when_there_are_enough(self):
        assert zones.Interpolated([RED, GREEN, BLUE]).as_list(2) == [RED, GREEN]

    def test_it_handles_one_or_no_colors(self):
        assert zones.Interpolated([GREEN]).as_list(2) == [GREEN, GREEN]
        assert zones.Interpolated([]).as_list(2) == [OFF, OFF]

    def test_it_can_guess_the_gradient_from_exact_colors(self):
        colors = [Color(i * 1000, 65535, 65535, 3500) for i in range(10)]

        interpolated = zones.Interpolated.from_colors(colors, 4)
        assert interpolated.colors == [colors[0], colors[3], colors[6], colors[9]]
        assert not interpolated.cyclic

        cyclic = zones.Interpolated.from_colors(colors, 5, cyclic=True)
        assert cyclic.colors == [colors[0], colors[2], colors[4], colors[6], colors[8]]

        assert zones.Interpolated.from_colors(colors, 20).colors == colors


class TestComposition:
    def test_it_shifts_around_the_strip(self):
        shifted = zones.Exact([RED, GREEN, BLUE]).shift(1)
        assert isinstance(shifted, zones.Shifted)
        assert shifted.as_list(3) == [BLUE, RED, GREEN]
        assert zones.Exact([RED, GREEN, BLUE]).shift(-1).as_list(3) == [GREEN, BLUE, RED]

    def test_it_scales_brightness(self):
        scaled = zones.Exact([Color(0, 0, 100, 3500)]).with_relative_brightness(0.5)
        assert isinstance(scaled, zones.Scaled)
        assert scaled.color(0, 1).brightness == 50

    def test_it_blends(self):
        blended = zones.Fixed(RED).add(zones.Fixed(GREEN), 0.5)
        assert blended.color(0, 1) == RED.add(GREEN, 0.5)

    def test_it_stretches(self):
        assert zones.Exact([RED, BLUE]).stretch(2).as_list(4) == [RED, RED, BLUE, BLUE]
        with pytest.raises(ValueError):
            zones.Fixed(RED).stretch(0)

    def test_it_mirrors_around_the_middle(self):
        mirrored = zones.Exact([RED, GREEN, BLUE]).mirror()
        assert mirrored.as_list(5) == [BLUE, GREEN, RED, GREEN, BLUE]
        assert mirrored.as_list(4) == [GREEN, RED, RED, GREEN]

    def test_it_knows_the_brightest_zone(self):
        exact = zones.Exact([Color(0, 0, 10, 3500), Color(0, 0, 300, 3500)])
        assert exact.max_brightness(2) == 300
        assert zones.OFF_ZONES.max_brightness(5) == 0


class TestSerialising:
    def test_it_describes_itself(self):
        combined = zones.Interpolated([RED, BLUE], cyclic=True).shift(2).mirror()
        assert combined.as_dict() == {
            "kind": "mirrored",
            "base": {
                "kind": "shifted",
                "amount": 2,
                "base": {
                    "kind": "interpolated",
                    "cyclic": True,
                    "colors": [RED.as_dict(), BLUE.as_dict()],
                },
            },
        }

    def test_it_can_be_made_from_its_description(self):
        combined = (
            zones.Exact([RED, GREEN])
            .stretch(2)
            .add(zones.Fixed(BLUE), 0.3)
            .with_relative_brightness(0.5)
        )
        restored = zones.from_dict(combined.as_dict())
        assert restored == combined
        assert restored.as_list(6) == combined.as_list(6)

    def test_it_complains_about_unknown_kinds(self):
        with pytest.raises(ValueError):
            zones.from_dict({"kind": "sparkles"})
