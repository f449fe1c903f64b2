# File: demos/run_postprocessing.py
"""
DEMO: Postprocessing a Rod Chain (N / σ / u)
============================================

This demo shows how to postprocess a solved rod structure. It demonstrates:

1. How to load the structure and the solver result
2. How the chain is laid out on the canvas
3. How to build the uniform-step table and the rod summary
4. How to query single sections
5. How to export the CSV table and the HTML report

Run with:
    python demos/run_postprocessing.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rodcraft.diagrams import get_diagram_summary, sample_all_diagrams
from rodcraft.export import step_table_csv, step_table_filename, write_report
from rodcraft.layout import compute_layout
from rodcraft.post import build_step_table, get_result_summary, summarize_rods
from rodcraft.project_io import load_result, load_structure
from rodcraft.report import ReportAssembler
from rodcraft.sections import SectionQueryCalculator
from rodcraft.viz import ConstructionDiagram, EpureDiagram

DATA_DIR = Path(__file__).parent / "data"
OUTPUT_DIR = Path(__file__).parent / "output"


def main():
    """
    PSEUDOCODE:
    ==========

    STEP 1: Load structure and solver result
    STEP 2: Lay out the chain and sample the epures
    STEP 3: Build the step table and the rod summary
    STEP 4: Query sections
    STEP 5: Export CSV and HTML report
    """

    print("=" * 70)
    print("DEMO: Postprocessing a Rod Chain (N / σ / u)")
    print("=" * 70)
    print()

    # ========================================================================
    # STEP 1: LOAD STRUCTURE AND RESULT
    # ========================================================================
    print("STEP 1: Loading structure and solver result")
    print("-" * 70)

    structure = load_structure(DATA_DIR / "two_rod_structure.json")
    result = load_result(DATA_DIR / "two_rod_result.json")

    print(f"Structure: {len(structure.rods)} rods, {len(structure.nodes)} nodes")
    for i, d in enumerate(result.displacements):
        print(f"  Node {i}: Δ = {d:.6e} m")
    print()

    # ========================================================================
    # STEP 2: LAYOUT AND EPURES
    # ========================================================================
    print("STEP 2: Layout and epures")
    print("-" * 70)

    layout = compute_layout(result.rods)
    print(f"Length scale: {layout.length_scale:.1f} px/m "
          f"({'log' if layout.log_heights else 'linear'} heights)")
    for rod, geom in zip(result.rods, layout.rods):
        print(f"  Rod {rod.rod_id}: x={geom.x:.1f} px, width={geom.width:.1f} px, "
              f"height={geom.height:.1f} px")

    diagrams = sample_all_diagrams(result.rods, layout)
    for name, info in get_diagram_summary(diagrams).items():
        print(f"  max |{name}| = {info['max_abs']:.4e} (rod {info['critical_rod']})")
    for marker in diagrams['u'].extrema:
        p = marker.point
        print(f"  u(x) extremum on rod {p.rod_id}: x = {p.x_local:.3f} m, u = {p.value:.6e} m")
    print()

    # ========================================================================
    # STEP 3: STEP TABLE AND SUMMARY
    # ========================================================================
    print("STEP 3: Step table and rod summary")
    print("-" * 70)

    step = 0.5
    rows = build_step_table(result.rods, step)
    print(f"{'Rod':>4} {'x':>8} {'N(x)':>12} {'σ(x)':>12} {'u(x)':>14}")
    for row in rows:
        mark = "*" if row.is_boundary else " "
        print(f"{row.rod_id:>4} {row.x:>8.4f} {row.N:>12.4e} {row.sigma:>12.4e} {row.u:>14.6e} {mark}")
    print()

    for s in summarize_rods(result.rods):
        status = "✓" if s.is_safe else "✗"
        print(f"  Rod {s.rod_id}: N0={s.n_start:.4e}, NL={s.n_end:.4e}, "
              f"|σ|max={abs(s.max_stress):.4e} <= [σ]={s.allowable_stress:.4e} {status}")

    summary = get_result_summary(result)
    print(f"  All rods safe: {summary['all_safe']}")
    print()

    # ========================================================================
    # STEP 4: SECTION QUERIES
    # ========================================================================
    print("STEP 4: Section queries")
    print("-" * 70)

    calculator = SectionQueryCalculator(result.rods)
    for rod_id, x in [(0, 1.0), (1, 0.42), (1, 1.0)]:
        rec = calculator.query(rod_id, x)
        print(f"  Rod {rec.rod_id}, x={rec.x:.2f}: N={rec.N:.4e}, σ={rec.sigma:.4e}, u={rec.u:.6e}")
    print()

    # ========================================================================
    # STEP 5: EXPORT
    # ========================================================================
    print("STEP 5: Export")
    print("-" * 70)

    OUTPUT_DIR.mkdir(exist_ok=True)
    csv_path = OUTPUT_DIR / step_table_filename(step)
    csv_path.write_text(step_table_csv(rows), encoding="utf-8")
    print(f"  Step table: {csv_path}")

    assembler = ReportAssembler(
        result,
        diagrams={
            'construction': ConstructionDiagram(result),
            'epure_n': EpureDiagram(result, 'N'),
            'epure_sigma': EpureDiagram(result, 'sigma'),
            'epure_u': EpureDiagram(result, 'u'),
        },
        section_history=calculator.get_history(),
        step_rows=rows,
        step=step,
    )
    report_path = write_report(assembler.assemble(), OUTPUT_DIR)
    print(f"  Report:     {report_path}")
    print()
    print("=" * 70)


if __name__ == "__main__":
    main()
