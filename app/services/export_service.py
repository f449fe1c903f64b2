# app/services/export_service.py
"""
Export service: handles file exports (CSV, JSON, HTML, text).
"""

import json
from typing import Optional, Sequence
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from rodcraft.export import step_table_csv
from rodcraft.model import FullResult, StructureInput
from rodcraft.post import StepRow, get_result_summary
from rodcraft.project_io import structure_to_json
from rodcraft.report import ReportAssembler, ReportSections
from rodcraft.sections import SectionQueryRecord
from rodcraft.viz import ConstructionDiagram, EpureDiagram


class ExportService:
    """Service for exporting calculation data to various formats."""

    @staticmethod
    def generate_step_table_csv(rows: Sequence[StepRow]) -> str:
        """
        Generate the uniform-step table as CSV.

        Returns CSV content as a string.
        """
        return step_table_csv(rows)

    @staticmethod
    def generate_structure_json(structure: StructureInput) -> str:
        """Structure description in the editor's save format."""
        return structure_to_json(structure)

    @staticmethod
    def generate_result_json(result: FullResult) -> str:
        """Solver result for interchange."""
        return json.dumps(result.to_dict(), indent=2)

    @staticmethod
    def build_diagrams(result: FullResult, samples_per_rod: int = 30, epure_samples: int = 50) -> dict:
        """Renderable diagram handles keyed by report section."""
        return {
            'construction': ConstructionDiagram(result, samples_per_rod=samples_per_rod),
            'epure_n': EpureDiagram(result, 'N', epure_samples),
            'epure_sigma': EpureDiagram(result, 'sigma', epure_samples),
            'epure_u': EpureDiagram(result, 'u', epure_samples),
        }

    @staticmethod
    def generate_report_html(
        result: FullResult,
        sections: Optional[ReportSections] = None,
        section_history: Sequence[SectionQueryRecord] = (),
        step_rows: Sequence[StepRow] = (),
        step: Optional[float] = None,
        samples_per_rod: int = 30,
    ) -> str:
        """
        Assemble the HTML report.

        Raises ReportGenerationError when the report cannot be built.
        """
        assembler = ReportAssembler(
            result,
            diagrams=ExportService.build_diagrams(result, samples_per_rod),
            section_history=section_history,
            step_rows=step_rows,
            step=step,
        )
        return assembler.assemble(sections)

    @staticmethod
    def generate_summary_text(result: FullResult) -> str:
        """Generate a text summary of the calculation."""
        summary = get_result_summary(result)
        critical = summary['critical_rod']
        lines = [
            "ROD STRUCTURE SUMMARY",
            "=" * 40,
            "",
            "STRUCTURE",
            f"  Rods:          {summary['n_rods']}",
            f"  Nodes:         {summary['n_nodes']}",
            f"  Total length:  {sum(r.length for r in result.rods):.3f} m",
            "",
            "RESULTS",
            f"  Max |sigma|:   {summary['max_stress']:.4e} Pa"
            + (f" (rod {critical})" if critical is not None else ""),
            f"  Max |Delta|:   {summary['max_displacement']:.6e} m",
            f"  Strength:      {'OK' if summary['all_safe'] else 'FAILED'}",
        ]

        return "\n".join(lines)
