"""
Unit tests for observer module.
"""
import io

import numpy as np
import pytest

from pycg.observer import (
    CompositeObserver,
    Observer,
    OptimizationState,
    PrintObserver,
    TraceObserver,
)


class TestOptimizationState:
    """Tests for OptimizationState formatting."""

    def test_row_format(self) -> None:
        state = OptimizationState(3, 1.5, 0.25)
        assert str(state) == f"{3:6d}   {1.5:14e}   {0.25:14e}"

    def test_metadata_lines(self) -> None:
        state = OptimizationState(0, 1.0, 2.0, {"Current step size": 0.5})
        lines = str(state).splitlines()
        assert len(lines) == 2
        assert lines[1] == " * Current step size: 0.5"


class TestTraceObserver:
    """Tests for TraceObserver."""

    def test_stores_states(self) -> None:
        obs = TraceObserver()
        for i in range(3):
            obs.observe(OptimizationState(i, float(i), 0.0))
        assert [s.iteration for s in obs.states] == [0, 1, 2]

    def test_invalid_interval(self) -> None:
        with pytest.raises(ValueError):
            TraceObserver(interval=0)


class TestPrintObserver:
    """Tests for PrintObserver."""

    def test_header_printed_once(self) -> None:
        stream = io.StringIO()
        obs = PrintObserver(stream=stream)
        obs.observe(OptimizationState(0, 1.0, 2.0))
        obs.observe(OptimizationState(1, 0.5, 1.0))

        output = stream.getvalue()
        assert output.count("Iter     Function value") == 1
        assert len(output.strip().splitlines()) == 4

    def test_defaults_to_stdout(self, capsys) -> None:
        PrintObserver().observe(OptimizationState(0, 1.0, 2.0))
        assert "Gradient norm" in capsys.readouterr().out


class TestCompositeObserver:
    """Tests for CompositeObserver."""

    def test_respects_child_intervals(self) -> None:
        every = TraceObserver(interval=1)
        second = TraceObserver(interval=2)
        composite = CompositeObserver([every, second])
        for i in range(5):
            composite.observe(OptimizationState(i, 0.0, 0.0))
        assert len(every.states) == 5
        assert [s.iteration for s in second.states] == [0, 2, 4]

    def test_finalize_and_name(self) -> None:
        calls = []

        class Recorder(Observer):
            def observe(self, state: OptimizationState) -> None:
                pass

            def finalize(self) -> None:
                calls.append(True)

            def get_name(self) -> str:
                return "Recorder"

        composite = CompositeObserver([Recorder(), Recorder()])
        composite.finalize()
        assert calls == [True, True]
        assert composite.get_name() == "Composite[Recorder, Recorder]"

    def test_metadata_arrays(self) -> None:
        """Extended trace arrays are printed via numpy formatting."""
        state = OptimizationState(1, 0.0, 0.0, {"x": np.array([1.0, 2.0])})
        assert " * x: [1. 2.]" in str(state)
