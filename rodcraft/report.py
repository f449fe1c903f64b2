# rodcraft/report.py
"""
REPORT ASSEMBLY
===============

Builds one self-contained HTML document from an already computed result:

    header        generation time, rod and node counts
    displacements nodal displacement table
    construction  structure drawing with the three epures
    epure_n       N(x) diagram
    epure_sigma   σ(x) diagram
    epure_u       u(x) diagram
    summary_table per-rod N₀, Nₗ and strength check
    section_queries  history of section queries with |σ| <= [σ] check
    step_table    uniform-step table, boundary rows highlighted
    footer

Diagrams are passed in as handles (anything with ``to_svg() -> str``, see
rodcraft.viz) keyed by section name. A handle that is missing, returns empty
markup or raises leaves its section out of the report; assembly carries on.
Any other failure surfaces as ReportGenerationError.
"""

import html
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Sequence

from .logger_mixin import LoggerMixin
from .model import FullResult
from .post import StepRow, nodal_displacements, summarize_rods
from .sections import SectionQueryRecord


class ReportGenerationError(RuntimeError):
    """Raised when the report cannot be assembled."""
    pass


class DiagramHandle(Protocol):
    def to_svg(self) -> str:
        ...


@dataclass
class ReportSections:
    """Which sections go into the report (all by default)."""
    construction: bool = True
    summary_table: bool = True
    epure_n: bool = True
    epure_sigma: bool = True
    epure_u: bool = True
    displacements: bool = True
    section_queries: bool = True
    step_table: bool = True

    @classmethod
    def none(cls) -> "ReportSections":
        return cls(**{f.name: False for f in fields(cls)})

    def selected(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]


SECTION_TITLES = {
    'displacements': 'Nodal displacements',
    'construction': 'Construction and epures',
    'epure_n': 'Epure N(x), N',
    'epure_sigma': 'Epure σ(x), Pa',
    'epure_u': 'Epure u(x), m',
    'summary_table': 'Rod summary',
    'section_queries': 'Section queries',
    'step_table': 'Uniform step table',
}

DIAGRAM_SECTIONS = ('construction', 'epure_n', 'epure_sigma', 'epure_u')

_STYLE = """
body { font-family: Arial, Helvetica, sans-serif; color: #333; margin: 24px; }
h1 { color: #2c3e50; border-bottom: 2px solid #4a90e2; padding-bottom: 6px; }
h2 { color: #2c3e50; margin-top: 28px; }
.meta { color: #666; font-size: 0.9em; }
.diagram { border: 1px solid #ddd; padding: 8px; background: #fafafa; overflow-x: auto; }
table { border-collapse: collapse; font-size: 0.85em; }
th, td { border: 1px solid #ccc; padding: 4px 8px; text-align: right; }
th { background: #2c3e50; color: #fff; }
tr.boundary td { background: #e3f2fd; font-weight: bold; }
td.ok { color: #2e7d32; text-align: center; }
td.fail { color: #c62828; text-align: center; }
footer { margin-top: 32px; color: #888; font-size: 0.8em; border-top: 1px solid #ddd; padding-top: 8px; }
"""


def _e(value) -> str:
    return html.escape(str(value))


def _check_cell(ok: bool) -> str:
    return '<td class="ok">✓</td>' if ok else '<td class="fail">✗</td>'


def _table(header: Sequence[str], rows: Sequence[str]) -> str:
    head = ''.join(f'<th>{_e(h)}</th>' for h in header)
    return f'<table>\n<thead><tr>{head}</tr></thead>\n<tbody>\n' + '\n'.join(rows) + '\n</tbody>\n</table>'


class ReportAssembler(LoggerMixin):
    """
    Assemble the HTML report for one calculation.

    Parameters
    ----------
    result : FullResult
        Solver output (rods and nodal displacements).
    diagrams : Mapping[str, DiagramHandle], optional
        Renderable handles keyed by 'construction', 'epure_n', 'epure_sigma',
        'epure_u'.
    section_history : Sequence[SectionQueryRecord], optional
        Records from SectionQueryCalculator.get_history().
    step_rows : Sequence[StepRow], optional
        Rows from build_step_table().
    clock : Callable[[], datetime], optional
        Time source for the header (defaults to ``datetime.now``).
    step : float, optional
        Step the table was built with, shown in its heading.
    debug : bool, optional
        Enables debug logging.
    """

    def __init__(
        self,
        result: FullResult,
        diagrams: Optional[Mapping[str, DiagramHandle]] = None,
        section_history: Sequence[SectionQueryRecord] = (),
        step_rows: Sequence[StepRow] = (),
        clock: Optional[Callable[[], datetime]] = None,
        step: Optional[float] = None,
        debug: bool = False,
    ):
        super().__init__(debug=debug)
        self.result = result
        self.diagrams: Dict[str, DiagramHandle] = dict(diagrams or {})
        self.section_history = tuple(section_history)
        self.step_rows = tuple(step_rows)
        self.clock = clock or datetime.now
        self.step = step

    def assemble(self, sections: Optional[ReportSections] = None) -> str:
        """
        Build the report document.

        Raises
        ------
        ReportGenerationError
            Anything other than a failing diagram handle went wrong.
        """
        sections = sections or ReportSections()
        try:
            return self._assemble(sections)
        except ReportGenerationError:
            raise
        except Exception as e:
            self.logger.error("Report generation failed: %s", e)
            raise ReportGenerationError(f"Report generation failed: {e}") from e

    def _assemble(self, sections: ReportSections) -> str:
        generated = self.clock()
        parts = [self._header(generated)]

        if sections.displacements:
            parts.append(self._displacements())
        for key in DIAGRAM_SECTIONS:
            if getattr(sections, key):
                parts.append(self._diagram(key))
        if sections.summary_table:
            parts.append(self._summary_table())
        if sections.section_queries:
            parts.append(self._section_queries())
        if sections.step_table:
            parts.append(self._step_table())

        parts.append(self._footer(generated))
        body = '\n'.join(p for p in parts if p)
        self.logger.debug("Report assembled: sections=%s", sections.selected())
        return (
            '<!DOCTYPE html>\n<html lang="en">\n<head>\n<meta charset="utf-8">\n'
            '<title>Rod structure calculation report</title>\n'
            f'<style>{_STYLE}</style>\n</head>\n<body>\n{body}\n</body>\n</html>\n'
        )

    def _header(self, generated: datetime) -> str:
        n_rods = len(self.result.rods)
        n_nodes = n_rods + 1 if n_rods else 0
        return (
            '<header>\n<h1>Rod structure calculation report</h1>\n'
            f'<p class="meta">Generated: {_e(f"{generated:%Y-%m-%d %H:%M:%S}")}<br>'
            f'Rods: {n_rods}, nodes: {n_nodes}</p>\n</header>'
        )

    def _section(self, key: str, content: str, title: Optional[str] = None) -> str:
        title = title or SECTION_TITLES[key]
        return f'<section id="{key}">\n<h2>{_e(title)}</h2>\n{content}\n</section>'

    def _diagram(self, key: str) -> Optional[str]:
        handle = self.diagrams.get(key)
        if handle is None:
            self.logger.warning("No diagram for section '%s'; section omitted", key)
            return None
        try:
            svg = handle.to_svg()
        except Exception as e:
            self.logger.warning("Diagram '%s' failed to render (%s); section omitted", key, e)
            return None
        if not svg or not svg.strip():
            self.logger.warning("Diagram '%s' rendered empty; section omitted", key)
            return None
        # SVG markup is embedded verbatim
        return self._section(key, f'<div class="diagram">{svg}</div>')

    def _displacements(self) -> str:
        rows = [
            f'<tr><td>{i}</td><td>{d:.6e}</td></tr>'
            for i, d in nodal_displacements(self.result)
        ]
        return self._section('displacements', _table(['Node', 'Δ, m'], rows))

    def _summary_table(self) -> str:
        rows = []
        for s in summarize_rods(self.result.rods):
            rows.append(
                f'<tr><td>{s.rod_id}</td><td>{s.length:.3f}</td><td>{s.area:.4e}</td>'
                f'<td>{s.n_start:.4e}</td><td>{s.n_end:.4e}</td>'
                f'<td>{abs(s.max_stress):.4e}</td><td>{s.allowable_stress:.4e}</td>'
                f'{_check_cell(s.is_safe)}</tr>'
            )
        header = ['Rod', 'L, m', 'A, m²', 'N₀, N', 'Nₗ, N', 'max |σ|, Pa', '[σ], Pa', 'Check']
        return self._section('summary_table', _table(header, rows))

    def _section_queries(self) -> Optional[str]:
        if not self.section_history:
            return None
        rows = []
        for i, rec in enumerate(self.section_history, start=1):
            allowable = self.result.rod(rec.rod_id).allowable_stress
            rows.append(
                f'<tr><td>{i}</td><td>{rec.rod_id}</td><td>{rec.x:.4f}</td>'
                f'<td>{rec.N:.4e}</td><td>{rec.sigma:.4e}</td><td>{rec.u:.6e}</td>'
                f'<td>{_e(f"{rec.timestamp:%H:%M:%S}")}</td>'
                f'{_check_cell(abs(rec.sigma) <= allowable)}</tr>'
            )
        header = ['#', 'Rod', 'x, m', 'N, N', 'σ, Pa', 'u, m', 'Time', 'Check']
        return self._section('section_queries', _table(header, rows))

    def _step_table(self) -> Optional[str]:
        if not self.step_rows:
            return None
        rows = []
        for row in self.step_rows:
            css = ' class="boundary"' if row.is_boundary else ''
            rows.append(
                f'<tr{css}><td>{row.rod_id}</td><td>{row.x:.4f}</td><td>{row.N:.4e}</td>'
                f'<td>{row.sigma:.4e}</td><td>{row.u:.6e}</td></tr>'
            )
        title = SECTION_TITLES['step_table']
        if self.step is not None:
            title = f"{title} (Δx = {self.step:g} m)"
        header = ['Rod', 'x, m', 'N(x), N', 'σ(x), Pa', 'u(x), m']
        return self._section('step_table', _table(header, rows), title=title)

    def _footer(self, generated: datetime) -> str:
        return (
            '<footer>Rod structure postprocessing report, RodCraft. '
            f'{_e(f"{generated:%Y-%m-%d}")}</footer>'
        )
