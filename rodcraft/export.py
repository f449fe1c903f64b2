# rodcraft/export.py
"""
Export artifacts: step-table CSV and report files.

All functions are pure functions of already-computed tables; nothing here
evaluates fields or touches the network.
"""

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from .post import StepRow

STEP_TABLE_HEADER = ['Rod', 'x', 'N(x)', 'σ(x)', 'u(x)']


def step_table_csv(rows: Sequence[StepRow]) -> str:
    """
    Generate the uniform-step table as CSV.

    Returns CSV content as a string: x fixed with 4 decimals, N and σ in
    exponential notation with 4 digits, u with 6.
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')

    writer.writerow(STEP_TABLE_HEADER)
    for row in rows:
        writer.writerow([
            row.rod_id,
            f"{row.x:.4f}",
            f"{row.N:.4e}",
            f"{row.sigma:.4e}",
            f"{row.u:.6e}",
        ])

    return output.getvalue()


def step_table_filename(step: float) -> str:
    """Download name with the step embedded, e.g. step_table_0.5m.csv."""
    return f"step_table_{step:g}m.csv"


def report_filename(when: Optional[datetime] = None, extension: str = "html") -> str:
    """Download name with the generation date, e.g. rod_report_2025-11-03.html."""
    when = when or datetime.now()
    return f"rod_report_{when:%Y-%m-%d}.{extension}"


def write_report(
    html: str,
    directory: Union[str, Path] = ".",
    when: Optional[datetime] = None,
) -> Path:
    """Write a report document into `directory` under its dated name."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / report_filename(when)
    path.write_text(html, encoding="utf-8")
    return path
