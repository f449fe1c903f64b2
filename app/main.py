# app/main.py
"""
RodCraft Postprocessor - Streamlit Interface

Load a structure and the solver result for it, then inspect the
construction with its epures, the summary and step tables, query single
sections and download the report.

Run with:
    streamlit run app/main.py
"""

import streamlit as st
import sys
from pathlib import Path
from dataclasses import asdict

import pandas as pd

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import CONFIG
from components import render_node_editor, render_rod_editor, show_figure
from services import ExportService
from services.pdf_service import generate_report_pdf
from state import (
    get_structure, set_structure, pop_stale_result_notice, get_result, set_result,
    get_calculator, get_step, set_step, is_new_upload,
)

from rodcraft.editing import append_rod, remove_rod
from rodcraft.export import report_filename, step_table_filename
from rodcraft.model import RodSpec, result_matches_structure
from rodcraft.post import build_step_table, get_result_summary, nodal_displacements, summary_frame, step_table_frame
from rodcraft.project_io import StructureFileError, result_from_json, structure_from_json
from rodcraft.report import ReportGenerationError, ReportSections, SECTION_TITLES
from rodcraft.viz import ConstructionDiagram, StructureDiagram

DEMO_DIR = Path(__file__).parent.parent / "demos" / "data"

# Page configuration - must be first Streamlit command
st.set_page_config(
    page_title=CONFIG.app_name,
    page_icon="📏",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better styling
st.markdown("""
<style>
    /* Tighter spacing */
    .block-container {
        padding-top: 1rem;
        padding-bottom: 1rem;
    }

    /* Metrics styling */
    [data-testid="stMetricValue"] {
        font-size: 1.1rem;
    }

    /* Sidebar header */
    .sidebar-header {
        font-size: 0.9rem;
        font-weight: 600;
        color: #666;
        text-transform: uppercase;
        letter-spacing: 0.05em;
        margin-top: 1rem;
        margin-bottom: 0.5rem;
    }
</style>
""", unsafe_allow_html=True)


# =============================================================================
# SIDEBAR - Files and Settings
# =============================================================================

with st.sidebar:
    st.title("📏 RodCraft")
    st.caption(CONFIG.app_subtitle)

    st.divider()

    # -------------------------------------------------------------------------
    # FILES
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">📂 Files</p>', unsafe_allow_html=True)

    structure_file = st.file_uploader("Structure (JSON)", type=["json"], key="structure_file")
    if is_new_upload("structure", structure_file):
        try:
            set_structure(structure_from_json(structure_file.getvalue().decode("utf-8")))
        except StructureFileError as e:
            st.error(f"Structure file: {e}")

    result_file = st.file_uploader("Solver result (JSON)", type=["json"], key="result_file")
    if is_new_upload("result", result_file):
        try:
            set_result(result_from_json(result_file.getvalue().decode("utf-8")))
        except StructureFileError as e:
            st.error(f"Result file: {e}")

    if st.button("Load demo data", key="load_demo", use_container_width=True):
        set_result(result_from_json((DEMO_DIR / "two_rod_result.json").read_text(encoding="utf-8")))
        set_structure(structure_from_json((DEMO_DIR / "two_rod_structure.json").read_text(encoding="utf-8")))

    st.divider()

    # -------------------------------------------------------------------------
    # SETTINGS
    # -------------------------------------------------------------------------
    st.markdown('<p class="sidebar-header">⚙️ Step table</p>', unsafe_allow_html=True)
    step = st.number_input(
        "Step (m)",
        min_value=CONFIG.step_range[0],
        max_value=CONFIG.step_range[1],
        value=float(get_step()),
        step=0.1,
        format="%.3f",
    )
    set_step(step)


# =============================================================================
# STRUCTURE (preprocessor view)
# =============================================================================

structure = get_structure()

with st.expander("🧱 Structure", expanded=get_result() is None):
    show_figure(StructureDiagram(structure).figure())

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("➕ Add rod"):
            set_structure(append_rod(structure, RodSpec(
                id=0,
                length=CONFIG.default_length,
                area=CONFIG.default_area,
                elastic_modulus=CONFIG.default_E,
                allowable_stress=CONFIG.default_allowable_stress,
            )))
            st.rerun()
    with col2:
        if structure.rods and st.button("➖ Remove last rod"):
            set_structure(remove_rod(structure, len(structure.rods) - 1))
            st.rerun()
    with col3:
        st.download_button(
            label="💾 Save structure",
            data=ExportService.generate_structure_json(structure),
            file_name="rod_structure.json",
            mime="application/json",
        )

    if structure.rods:
        st.markdown("**Rods**")
        render_rod_editor(structure)
        st.markdown("**Nodes**")
        render_node_editor(structure)


# =============================================================================
# MAIN AREA - Postprocessing
# =============================================================================

if pop_stale_result_notice():
    st.warning("The structure was changed, so the loaded result no longer applies and was cleared.")

result = get_result()

if result is None or not result.rods:
    st.info("Load a solver result (or the demo data) to start postprocessing.")
    st.stop()

if structure.rods and not result_matches_structure(structure, result):
    st.caption("⚠ The loaded result was computed for a different structure than the one in the editor.")

summary = get_result_summary(result)

col_title, col_status = st.columns([3, 1])
with col_title:
    st.title("Postprocessing")
with col_status:
    if summary['all_safe']:
        st.success("✓ Strength OK", icon="✅")
    else:
        st.error(f"✗ Rod {summary['critical_rod']} overstressed", icon="❌")

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Rods / nodes", f"{summary['n_rods']} / {summary['n_nodes']}")
with col2:
    st.metric("Max |σ|", f"{summary['max_stress']:.3e} Pa")
with col3:
    st.metric("Max |Δ|", f"{summary['max_displacement']:.3e} m")

step_rows = build_step_table(result.rods, step)
calculator = get_calculator()

tab_construction, tab_tables, tab_sections, tab_report = st.tabs(
    ["📐 Construction", "📋 Tables", "🔍 Section queries", "📑 Report"]
)

# -------------------------------------------------------------------------
# CONSTRUCTION
# -------------------------------------------------------------------------
with tab_construction:
    show_figure(ConstructionDiagram(result, samples_per_rod=CONFIG.samples_per_rod).figure())
    st.caption("Blue/orange arrows = tensile/compressive nodal forces • Gold markers = extremum of u(x)")

# -------------------------------------------------------------------------
# TABLES
# -------------------------------------------------------------------------
with tab_tables:
    st.subheader("Nodal displacements")
    st.dataframe(
        pd.DataFrame(nodal_displacements(result), columns=["node", "displacement_m"]),
        hide_index=True,
    )

    st.subheader("Rod summary")
    st.dataframe(summary_frame(result.rods), hide_index=True)

    st.subheader(f"Step table (Δx = {step:g} m)")
    st.dataframe(step_table_frame(step_rows), hide_index=True)
    st.download_button(
        label="📄 Step table (CSV)",
        data=ExportService.generate_step_table_csv(step_rows),
        file_name=step_table_filename(step),
        mime="text/csv",
    )

    st.subheader("Downloads")
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="📄 Summary (TXT)",
            data=ExportService.generate_summary_text(result),
            file_name="rod_summary.txt",
            mime="text/plain",
            use_container_width=True,
        )
    with col2:
        st.download_button(
            label="💾 Result (JSON)",
            data=ExportService.generate_result_json(result),
            file_name="rod_result.json",
            mime="application/json",
            use_container_width=True,
        )

# -------------------------------------------------------------------------
# SECTION QUERIES
# -------------------------------------------------------------------------
with tab_sections:
    rod_ids = [rod.rod_id for rod in result.rods]
    col1, col2 = st.columns(2)
    with col1:
        rod_id = st.selectbox("Rod", rod_ids)
    with col2:
        length = result.rod(rod_id).length
        x = st.number_input("x (m)", min_value=0.0, max_value=float(length), value=0.0,
                            step=length / 10, format="%.4f")

    if st.button("Calculate"):
        calculator.query(rod_id, x)

    history = calculator.get_history()
    if history:
        st.dataframe(pd.DataFrame([asdict(r) for r in history]), hide_index=True)
        if st.button("Clear history"):
            calculator.clear()
            st.rerun()
    else:
        st.caption("No section queries yet.")

# -------------------------------------------------------------------------
# REPORT
# -------------------------------------------------------------------------
with tab_report:
    st.subheader("Report sections")
    chosen = {}
    cols = st.columns(2)
    for i, key in enumerate(CONFIG.report_sections):
        with cols[i % 2]:
            chosen[key] = st.checkbox(SECTION_TITLES[key], value=True, key=f"section_{key}")
    sections = ReportSections(**chosen)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Build HTML report", use_container_width=True):
            try:
                with st.spinner("Assembling report..."):
                    html_report = ExportService.generate_report_html(
                        result,
                        sections,
                        section_history=calculator.get_history(),
                        step_rows=step_rows,
                        step=step,
                        samples_per_rod=CONFIG.samples_per_rod,
                    )
                st.download_button(
                    label="🌐 Report (HTML)",
                    data=html_report,
                    file_name=report_filename(),
                    mime="text/html",
                    use_container_width=True,
                )
            except ReportGenerationError as e:
                st.error(f"Report generation failed: {e}")
    with col2:
        if st.button("Build PDF report", use_container_width=True):
            with st.spinner("Rendering PDF..."):
                pdf_bytes = generate_report_pdf(
                    result,
                    sections,
                    section_history=calculator.get_history(),
                    step_rows=step_rows,
                    step=step,
                )
            st.download_button(
                label="📑 Report (PDF)",
                data=pdf_bytes,
                file_name=report_filename(extension="pdf"),
                mime="application/pdf",
                use_container_width=True,
            )
