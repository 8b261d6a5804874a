"""Tests for the tracer module."""

import json

import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        """Test that canvases are summarized with shape and type."""
        from primitivedraw.tracer import summarize

        arr = np.zeros((100, 200, 4), dtype=np.uint8)
        summary = summarize(arr)

        assert "ndarray" in summary
        assert "100x200x4" in summary
        assert "uint8" in summary

    def test_summary_capped_length(self):
        """Test that summary never exceeds max length."""
        from primitivedraw.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}
        summary = summarize(large_dict, max_len=40)

        assert len(summary) <= 40

    def test_list_summary(self):
        """Test list summarization."""
        from primitivedraw.tracer import summarize

        summary = summarize([1, 2, 3, 4, 5])

        assert "list" in summary
        assert "len=5" in summary

    def test_string_summary(self):
        """Test long string summarization."""
        from primitivedraw.tracer import summarize

        summary = summarize("a" * 1000)

        assert "str" in summary
        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_none_summary(self):
        """Test None summarization."""
        from primitivedraw.tracer import summarize

        assert summarize(None) == "None"

    def test_shape_summary(self):
        """Test that shapes are summarized by type and color."""
        from primitivedraw.models import Color, Point
        from primitivedraw.shapes.triangle import Triangle
        from primitivedraw.tracer import summarize

        tri = Triangle(
            vertices=(Point(x=0, y=0), Point(x=9, y=0), Point(x=0, y=9)),
            color=Color(r=255, g=0, b=0, a=128),
        )
        summary = summarize(tri)

        assert "Triangle" in summary
        assert "#FF0000" in summary


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        """Test that spans produce start, end and nested event lines."""
        from primitivedraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        configure_tracer(enabled=False)

        lines = capsys.readouterr().err.strip().split("\n")
        assert len(lines) == 5
        assert "inside" in lines[2]

    def test_tracer_disabled_no_output(self, capsys):
        """Test that disabled tracer produces no output."""
        from primitivedraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""

    def test_level_filtering(self, capsys):
        """Test that DEBUG events are dropped at INFO level."""
        from primitivedraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        tracer.event("hidden", level="DEBUG")
        tracer.event("shown", level="WARN")
        enabled = tracer.is_enabled_for("DEBUG")

        configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err
        assert enabled is False

    def test_json_output(self, capsys):
        """Test that JSON mode writes one parseable record per line."""
        from primitivedraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO", json_output=True)
        get_tracer().event("seeded", seed=42)
        configure_tracer(enabled=False)

        record = json.loads(capsys.readouterr().err.strip())
        assert record["message"] == "seeded seed=42"
        assert record["meta"] == {"seed": "42"}

    def test_trace_file(self, temp_dir):
        """Test that trace lines are also written to the trace file."""
        import os

        from primitivedraw.tracer import configure_tracer, get_tracer

        path = os.path.join(temp_dir, "trace.log")
        configure_tracer(enabled=True, level="INFO", file_path=path)
        get_tracer().event("to file")
        get_tracer().config.close()
        configure_tracer(enabled=False)

        with open(path) as f:
            assert "to file" in f.read()

    def test_span_failure_logged(self, capsys):
        """Test that an exception inside a span is logged and re-raised."""
        from primitivedraw.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")

        with pytest.raises(RuntimeError):
            with get_tracer().span("boom", module="test"):
                raise RuntimeError("bad")

        configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "failed error=RuntimeError: bad" in err
        assert "dt=" in err


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        """Test that decorated function executes normally."""
        from primitivedraw.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_with_exception(self):
        """Test that decorator lets exceptions propagate."""
        from primitivedraw.tracer import configure_tracer, trace

        configure_tracer(enabled=True, level="ERROR")

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()

        configure_tracer(enabled=False)

    def test_decorator_summarizes_named_args(self, capsys):
        """Test that named arguments are logged whether passed by position or keyword."""
        from primitivedraw.tracer import configure_tracer, trace

        configure_tracer(enabled=True, level="INFO")

        @trace(label="scaled", arg_names=("factor",))
        def scaled(value, factor=2):
            return value * factor

        assert scaled(4, 3) == 12
        assert scaled(4, factor=5) == 20
        assert scaled(4) == 8

        configure_tracer(enabled=False)

        lines = capsys.readouterr().err.strip().split("\n")
        starts = [line for line in lines if "start" in line]
        assert len(starts) == 3
        assert "factor=3" in starts[0]
        assert "factor=5" in starts[1]
        assert "value=" not in starts[0]
        assert "factor=" not in starts[2]
