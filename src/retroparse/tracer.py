"""
Debug tracing for the parsing pipeline.

When debug mode is enabled, the parser records a snapshot of every pipeline
stage on the result:

    >>> parser = DiagramParser(grammar)
    >>> result = parser.parse(source, debug=True)
    >>> print(result.trace.summary())
    >>> result.trace.dump_to_file("parse_trace.txt")

Stages, in order:
1. preprocess - directives found, lines blanked
2. grammar - raw tree returned by the grammar (skipped for empty input)
3. canonicalize - classifiers and relations kept and dropped
4. configure - resolved config values
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            # Truncate long values
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class ParseTrace:
    """
    Complete trace of one parse.

    Attributes:
        stages: Pipeline stages in the order they ran
        source: The original source text
    """

    stages: List[PipelineStage] = field(default_factory=list)
    source: str = ""

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        """Add a pipeline stage snapshot."""
        self.stages.append(PipelineStage(name, data.copy()))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def summary(self) -> str:
        """Generate a human-readable summary of the trace."""
        lines = [
            "=" * 60,
            "PARSE TRACE SUMMARY",
            "=" * 60,
            "",
            f"Input: {repr(self.source[:100])}"
            f"{'...' if len(self.source) > 100 else ''}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  {stage.name}")
        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete dump including every stage's data."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")
        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
