"""Tests for the numpy based random source."""
import json

import pytest

from mcstat import NumpyRandomSource


def draw(random_source, number=5):
    return [random_source.uniform_double() for i in range(number)]


class TestNumpyRandomSource:
    def test_seeding(self):
        assert draw(NumpyRandomSource(3)) == draw(NumpyRandomSource(3))
        assert draw(NumpyRandomSource(3)) != draw(NumpyRandomSource(4))

        random_source = NumpyRandomSource(3)
        first = draw(random_source)
        random_source.seed(3)
        assert draw(random_source) == first

    def test_uniform_integer(self):
        random_source = NumpyRandomSource(0)
        numbers = [random_source.uniform_integer(4) for i in range(200)]
        assert set(numbers) == {0, 1, 2, 3}

    def test_state_round_trip(self):
        random_source = NumpyRandomSource(12)
        draw(random_source)
        state = json.loads(json.dumps(random_source.get_state()))
        expected = draw(random_source)

        restored = NumpyRandomSource()
        restored.set_state(state)
        assert draw(restored) == expected

    def test_spawn_after_restore(self):
        random_source = NumpyRandomSource(31)
        random_source.spawn(2)
        state = json.loads(json.dumps(random_source.get_state()))
        expected = [draw(child) for child in random_source.spawn(3)]

        restored = NumpyRandomSource()
        restored.set_state(state)
        assert [draw(child) for child in restored.spawn(3)] == expected

    def test_spawned_streams_differ(self):
        children = NumpyRandomSource(8).spawn(2)
        assert draw(children[0]) != draw(children[1])
        with pytest.raises(Exception):
            NumpyRandomSource(8).set_state({"bit_generator": {}})
