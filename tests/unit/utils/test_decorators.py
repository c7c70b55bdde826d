"""Tests for timing and lazy-loading decorators."""

import logging

from doctalk.utils import require_loaded, timed


class LazyModel:
    def __init__(self):
        self.loads = 0

    @property
    def is_loaded(self):
        return self.loads > 0

    def load(self):
        self.loads += 1

    @require_loaded
    def predict(self, x):
        return x * 2


class TestRequireLoaded:
    def test_loads_once(self):
        model = LazyModel()

        assert model.predict(2) == 4
        assert model.predict(3) == 6
        assert model.loads == 1


class TestTimed:
    def test_logs_elapsed_time(self, caplog):
        @timed
        def work():
            return "done"

        with caplog.at_level(logging.INFO, logger=__name__):
            assert work() == "done"

        assert "work took" in caplog.text
