"""
Tests for the tracer module.

These tests verify the debug tracing infrastructure used to capture
information about each stage of the parsing pipeline.
"""

from retroparse.tracer import ParseTrace, PipelineStage


class TestPipelineStage:
    """Tests for PipelineStage dataclass."""

    def test_creation(self):
        """Test basic creation of PipelineStage."""
        stage = PipelineStage(name="preprocess", data={"lines": 3})
        assert stage.name == "preprocess"
        assert stage.data["lines"] == 3

    def test_str(self):
        """Test string representation of a stage."""
        result = str(PipelineStage(name="configure", data={"ranker": "tight-tree"}))
        assert "=== Stage: configure ===" in result
        assert "ranker: tight-tree" in result

    def test_str_truncates_long_values(self):
        """Test that long values are truncated in the string form."""
        result = str(PipelineStage(name="grammar", data={"text": "x" * 200}))
        assert "x" * 100 + "..." in result
        assert "x" * 101 not in result


class TestParseTrace:
    """Tests for ParseTrace."""

    def test_add_stage_copies_data(self):
        """Test that add_stage stores a copy of the data."""
        trace = ParseTrace()
        data = {"lines": 1}
        trace.add_stage("preprocess", data)
        data["lines"] = 2
        assert trace.get_stage("preprocess").data == {"lines": 1}

    def test_get_missing_stage(self):
        """Test getting a stage that was never added."""
        assert ParseTrace().get_stage("grammar") is None

    def test_stage_names(self):
        """Test stage names are listed in insertion order."""
        trace = ParseTrace()
        trace.add_stage("preprocess", {})
        trace.add_stage("configure", {})
        assert trace.stage_names == ["preprocess", "configure"]

    def test_summary(self):
        """Test the summary header, input and stage count."""
        trace = ParseTrace(source="[A] -> [B]")
        trace.add_stage("preprocess", {})
        summary = trace.summary()
        assert "PARSE TRACE SUMMARY" in summary
        assert "'[A] -> [B]'" in summary
        assert "Pipeline stages: 1" in summary

    def test_summary_truncates_source(self):
        """Test that long input is truncated in the summary."""
        summary = ParseTrace(source="y" * 150).summary()
        assert "..." in summary

    def test_dump(self):
        """Test the detailed dump includes every stage."""
        trace = ParseTrace(source="x")
        trace.add_stage("preprocess", {"lines": 1})
        dump = trace.dump()
        assert "DETAILED TRACE" in dump
        assert "=== Stage: preprocess ===" in dump

    def test_dump_to_file(self, tmp_path):
        """Test writing the dump to a file."""
        trace = ParseTrace(source="x")
        trace.add_stage("preprocess", {"lines": 1})
        path = tmp_path / "trace.txt"
        trace.dump_to_file(str(path))
        assert path.read_text(encoding="utf-8") == trace.dump()
