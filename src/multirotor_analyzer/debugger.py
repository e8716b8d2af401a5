"""
Calculation Debugger
====================

Records the intermediate values of one performance calculation so a
prediction can be checked by hand: every step keeps its formula, the inputs
it used and the value it produced.

A debugger is handed to the calculator explicitly and belongs to a single
calculation; there is no shared instance.
"""

from dataclasses import dataclass, field
from typing import List, Any, Optional, Dict, Tuple
from datetime import datetime


@dataclass
class CalculationStep:
    """A single calculation step with inputs, formula, and result."""
    category: str           # e.g. "Battery", "Hover", "Max Throttle"
    description: str
    formula: str
    variables: Dict[str, Any]
    result: Any
    result_name: str
    result_unit: str = ""
    comment: str = ""


@dataclass
class CalculationDebugger:
    """
    Traces and records calculation steps.

    Usage:
        debugger = CalculationDebugger()
        result = calculate_performance(aircraft, debugger=debugger)
        print(debugger.get_report())
    """

    steps: List[CalculationStep] = field(default_factory=list)
    sections: List[Tuple[int, str]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def start(self, **metadata):
        """Clear previous steps and start a new trace."""
        self.steps = []
        self.sections = []
        self.metadata = metadata
        self.start_time = datetime.now()
        self.end_time = None

    def finish(self):
        self.end_time = datetime.now()

    def start_section(self, name: str):
        self.sections.append((len(self.steps), name))

    def add_step(
        self,
        category: str,
        description: str,
        formula: str,
        variables: Dict[str, Any],
        result: Any,
        result_name: str,
        result_unit: str = "",
        comment: str = ""
    ):
        """Add a calculation step."""
        self.steps.append(CalculationStep(
            category=category,
            description=description,
            formula=formula,
            variables=dict(variables),
            result=result,
            result_name=result_name,
            result_unit=result_unit,
            comment=comment,
        ))

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, float):
            return f"{value:.6g}"
        return str(value)

    def get_report(self) -> str:
        """
        Generate a formatted text report of all recorded steps.

        Returns:
        -------
        str
            Formatted calculation trace
        """
        lines = ["=" * 70, "PERFORMANCE CALCULATION TRACE", "=" * 70]

        if self.start_time:
            lines.append(f"Generated: {self.start_time.strftime('%Y-%m-%d %H:%M:%S')}")

        if self.metadata:
            lines.append("")
            lines.append("Configuration:")
            for key, value in self.metadata.items():
                lines.append(f"  {key}: {value}")

        section_indices = dict(self.sections)

        for i, step in enumerate(self.steps):
            if i in section_indices:
                lines.append("")
                lines.append(f">>> {section_indices[i]}")
                lines.append("-" * 70)

            lines.append(f"[{i + 1}] {step.description}")

            if step.variables:
                var_strs = [
                    f"{name}={self._format_value(value)}"
                    for name, value in step.variables.items()
                ]
                lines.append(f"    Inputs: {', '.join(var_strs)}")

            if step.formula:
                lines.append(f"    Formula: {step.formula}")

            result = f"    => {step.result_name} = {self._format_value(step.result)}"
            if step.result_unit:
                result += f" {step.result_unit}"
            lines.append(result)

            if step.comment:
                lines.append(f"    // {step.comment}")

        lines.append("=" * 70)
        lines.append(f"Total Steps: {len(self.steps)}")
        if self.start_time and self.end_time:
            elapsed = (self.end_time - self.start_time).total_seconds()
            lines.append(f"Elapsed Time: {elapsed:.3f} seconds")
        lines.append("=" * 70)

        return "\n".join(lines)

    def get_step_count(self) -> int:
        return len(self.steps)

    def find_steps_by_category(self, category: str) -> List[CalculationStep]:
        """Find all steps in a given category."""
        return [s for s in self.steps if s.category == category]

    def find_step_by_result(self, result_name: str) -> Optional[CalculationStep]:
        """Find the most recent step that produced a specific result."""
        for step in reversed(self.steps):
            if step.result_name == result_name:
                return step
        return None
