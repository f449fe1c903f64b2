# app/services/pdf_service.py
"""
PDF Report Generation Service - creates downloadable rod calculation reports.

Same section order as the HTML report (rodcraft.report); diagrams are
embedded as PNG images rendered by matplotlib.
"""

from io import BytesIO
from datetime import datetime
from typing import Optional, Sequence

import matplotlib.pyplot as plt
from reportlab.lib.pagesizes import A4
from reportlab.lib import colors
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, Image
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_CENTER

from rodcraft.model import FullResult
from rodcraft.post import StepRow, nodal_displacements, summarize_rods
from rodcraft.report import ReportSections
from rodcraft.sections import SectionQueryRecord
from rodcraft.viz import ConstructionDiagram, EpureDiagram

HEADER_BG = colors.HexColor('#2c3e50')
PASS_COLOR = colors.HexColor('#28a745')
FAIL_COLOR = colors.HexColor('#dc3545')
BOUNDARY_BG = colors.HexColor('#e3f2fd')


def _figure_image(fig, width: float) -> Image:
    """Rasterise a matplotlib figure into a reportlab Image of the given width."""
    buffer = BytesIO()
    try:
        fig.savefig(buffer, format='png', dpi=150, facecolor=fig.get_facecolor())
        fig_w, fig_h = fig.get_size_inches()
    finally:
        plt.close(fig)
    buffer.seek(0)
    return Image(buffer, width=width, height=width * fig_h / fig_w)


def _table(data, col_widths=None, extra_style=()) -> Table:
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BG),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f5f5f5')]),
        *extra_style,
    ]))
    return table


def _status_style(column: int, statuses: Sequence[bool]):
    style = []
    for i, ok in enumerate(statuses, start=1):
        style.append(('TEXTCOLOR', (column, i), (column, i), PASS_COLOR if ok else FAIL_COLOR))
        style.append(('FONTNAME', (column, i), (column, i), 'Helvetica-Bold'))
    return style


def generate_report_pdf(
    result: FullResult,
    sections: Optional[ReportSections] = None,
    section_history: Sequence[SectionQueryRecord] = (),
    step_rows: Sequence[StepRow] = (),
    step: Optional[float] = None,
    when: Optional[datetime] = None,
) -> bytes:
    """
    Generate the calculation report as PDF.

    Args:
        result: Solver result
        sections: Which sections to include (all by default)
        section_history: Section query records
        step_rows: Uniform step table rows
        step: Step used for the table (shown in the heading)
        when: Generation time (defaults to now)

    Returns:
        bytes: PDF file contents
    """
    sections = sections or ReportSections()
    when = when or datetime.now()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=0.6*inch,
        leftMargin=0.6*inch,
        topMargin=0.6*inch,
        bottomMargin=0.6*inch
    )
    content_width = A4[0] - 1.2*inch

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Title'],
        fontSize=18,
        spaceAfter=12,
        alignment=TA_CENTER,
    )
    heading_style = ParagraphStyle(
        'ReportHeading',
        parent=styles['Heading2'],
        fontSize=13,
        spaceBefore=12,
        spaceAfter=8,
    )

    elements = []

    # Header
    n_rods = len(result.rods)
    elements.append(Paragraph("Rod Structure Calculation Report", title_style))
    elements.append(Paragraph(
        f"Generated: {when.strftime('%Y-%m-%d %H:%M')} &nbsp; "
        f"Rods: {n_rods}, nodes: {n_rods + 1 if n_rods else 0}",
        ParagraphStyle('Meta', parent=styles['Normal'], alignment=TA_CENTER, textColor=colors.gray)
    ))
    elements.append(Spacer(1, 12))

    if sections.displacements:
        elements.append(Paragraph("Nodal displacements", heading_style))
        data = [['Node', 'Delta, m']]
        data += [[str(i), f"{d:.6e}"] for i, d in nodal_displacements(result)]
        elements.append(_table(data, col_widths=[1*inch, 2*inch]))

    if sections.construction and result.rods:
        elements.append(Paragraph("Construction and epures", heading_style))
        elements.append(_figure_image(ConstructionDiagram(result).figure(), content_width))

    for key, field_name, title in (
        ('epure_n', 'N', 'Epure N(x)'),
        ('epure_sigma', 'sigma', 'Epure sigma(x)'),
        ('epure_u', 'u', 'Epure u(x)'),
    ):
        if getattr(sections, key) and result.rods:
            elements.append(Paragraph(title, heading_style))
            elements.append(_figure_image(EpureDiagram(result, field_name).figure(), content_width))

    if sections.summary_table:
        elements.append(Paragraph("Rod summary", heading_style))
        summary = summarize_rods(result.rods)
        data = [['Rod', 'L, m', 'A, m2', 'N(0), N', 'N(L), N', 'max |sigma|, Pa', '[sigma], Pa', 'Check']]
        for s in summary:
            data.append([
                str(s.rod_id), f"{s.length:.3f}", f"{s.area:.4e}",
                f"{s.n_start:.4e}", f"{s.n_end:.4e}",
                f"{abs(s.max_stress):.4e}", f"{s.allowable_stress:.4e}",
                'PASS' if s.is_safe else 'FAIL',
            ])
        elements.append(_table(data, extra_style=_status_style(7, [s.is_safe for s in summary])))

    if sections.section_queries and section_history:
        elements.append(Paragraph("Section queries", heading_style))
        data = [['#', 'Rod', 'x, m', 'N, N', 'sigma, Pa', 'u, m', 'Time', 'Check']]
        statuses = []
        for i, rec in enumerate(section_history, start=1):
            ok = abs(rec.sigma) <= result.rod(rec.rod_id).allowable_stress
            statuses.append(ok)
            data.append([
                str(i), str(rec.rod_id), f"{rec.x:.4f}", f"{rec.N:.4e}",
                f"{rec.sigma:.4e}", f"{rec.u:.6e}", rec.timestamp.strftime('%H:%M:%S'),
                'PASS' if ok else 'FAIL',
            ])
        elements.append(_table(data, extra_style=_status_style(7, statuses)))

    if sections.step_table and step_rows:
        title = "Uniform step table" if step is None else f"Uniform step table (step {step:g} m)"
        elements.append(Paragraph(title, heading_style))
        data = [['Rod', 'x, m', 'N(x), N', 'sigma(x), Pa', 'u(x), m']]
        highlight = []
        for i, row in enumerate(step_rows, start=1):
            data.append([str(row.rod_id), f"{row.x:.4f}", f"{row.N:.4e}",
                         f"{row.sigma:.4e}", f"{row.u:.6e}"])
            if row.is_boundary:
                highlight.append(('BACKGROUND', (0, i), (-1, i), BOUNDARY_BG))
                highlight.append(('FONTNAME', (0, i), (-1, i), 'Helvetica-Bold'))
        elements.append(_table(data, extra_style=highlight))

    # Footer
    elements.append(Spacer(1, 24))
    elements.append(Paragraph(
        "Generated by RodCraft rod structure postprocessor.",
        ParagraphStyle('Footer', parent=styles['Normal'], fontSize=8,
                       textColor=colors.gray, alignment=TA_CENTER)
    ))

    doc.build(elements)

    return buffer.getvalue()
