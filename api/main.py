# api/main.py
"""
FastAPI backend for RodCraft - exposes the rodcraft postprocessing engine as REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, StreamingResponse
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
import sys
from pathlib import Path

# Add project root to path to import rodcraft
sys.path.insert(0, str(Path(__file__).parent.parent))

from rodcraft.export import report_filename, step_table_csv, step_table_filename
from rodcraft.labels import resolve_label_positions
from rodcraft.layout import compute_layout
from rodcraft.model import FullResult, RodSpec, NodeSpec
from rodcraft.post import build_step_table
from rodcraft.report import ReportAssembler, ReportGenerationError, ReportSections
from rodcraft.sections import SectionQueryCalculator
from rodcraft.viz import ConstructionDiagram, EpureDiagram


app = FastAPI(
    title="RodCraft API",
    description="Rod structure layout and postprocessing engine",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class NodeData(BaseModel):
    """Node of the rod chain."""
    id: int
    fixed: bool = False
    externalForce: float = Field(0.0, description="Nodal force (N), > 0 tension")


class RodData(BaseModel):
    """Rod description."""
    id: int
    length: float = Field(..., gt=0, description="Length (m)")
    area: float = Field(..., gt=0, description="Cross-section area (m²)")
    elasticModulus: float = Field(..., gt=0, description="Elastic modulus (Pa)")
    allowableStress: float = Field(..., gt=0, description="Allowable stress (Pa)")
    distributedLoad: float = Field(0.0, description="Distributed load (N/m)")


class PolynomialData(BaseModel):
    a0: float
    a1: float
    a2: Optional[float] = None


class RodResultData(BaseModel):
    """Solver output for one rod."""
    rodId: int
    length: float = Field(..., gt=0)
    area: float = Field(..., gt=0)
    elasticModulus: float
    allowableStress: float
    distributedLoad: float = 0.0
    nodeRelatedTo: List[NodeData] = Field(..., min_length=2, max_length=2)
    axialForceCoeffs: PolynomialData
    stressCoeffs: PolynomialData
    displacementCoeffs: PolynomialData
    maxStressOnTheRod: float


class ResultData(BaseModel):
    """Complete solver result."""
    displacements: List[float] = Field(default_factory=list)
    resultOutput: List[RodResultData] = Field(..., min_length=1)

    def to_result(self) -> FullResult:
        return FullResult.from_dict(self.model_dump())


class LayoutRequest(BaseModel):
    rods: List[RodData] = Field(..., min_length=1)
    nodes: List[NodeData] = Field(default_factory=list)


class RodGeometryData(BaseModel):
    x: float
    y: float
    width: float
    height: float


class LabelData(BaseModel):
    y: float
    offset: float


class LayoutResult(BaseModel):
    """Pixel layout of the chain."""
    rods: List[RodGeometryData]
    nodeXs: List[float]
    labels: List[LabelData]
    lengthScale: float
    canvasWidth: float
    logHeights: bool
    shortRodsEnlarged: bool


class StepTableRequest(BaseModel):
    result: ResultData
    step: float = Field(0.5, description="Step (m); <= 0 gives an empty table")


class StepRowData(BaseModel):
    rodId: int
    x: float
    N: float
    sigma: float
    u: float
    isBoundary: bool


class SectionQueryData(BaseModel):
    rodId: int
    x: float


class ReportRequest(BaseModel):
    result: ResultData
    sections: Dict[str, bool] = Field(default_factory=dict, description="Section flags; missing = included")
    step: Optional[float] = Field(None, description="Step for the step table")
    queries: List[SectionQueryData] = Field(default_factory=list)


# =============================================================================
# Helpers
# =============================================================================

def to_result(data: ResultData) -> FullResult:
    try:
        return data.to_result()
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid result: {e}")


def to_sections(flags: Dict[str, bool]) -> ReportSections:
    unknown = set(flags) - set(ReportSections().selected())
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown report sections: {sorted(unknown)}")
    return ReportSections(**flags)


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/api/health")
async def health():
    """Health check."""
    return {"status": "ok", "service": "RodCraft API"}


@app.post("/api/layout", response_model=LayoutResult)
async def layout(request: LayoutRequest):
    """Compute the pixel layout and node label placements."""
    rods = [RodSpec.from_dict(r.model_dump()) for r in request.rods]
    nodes = [NodeSpec.from_dict(n.model_dump()) for n in request.nodes]
    if nodes and len(nodes) != len(rods) + 1:
        raise HTTPException(
            status_code=400,
            detail=f"Expected {len(rods) + 1} nodes for {len(rods)} rods, got {len(nodes)}",
        )

    geometry = compute_layout(rods)
    forces = [n.external_force for n in nodes] or [0.0] * len(geometry.node_xs)
    labels = resolve_label_positions(geometry.node_xs, forces)

    return LayoutResult(
        rods=[RodGeometryData(x=g.x, y=g.y, width=g.width, height=g.height) for g in geometry.rods],
        nodeXs=list(geometry.node_xs),
        labels=[LabelData(y=p.y, offset=p.offset) for p in labels],
        lengthScale=geometry.length_scale,
        canvasWidth=geometry.canvas_width,
        logHeights=geometry.log_heights,
        shortRodsEnlarged=geometry.short_rods_enlarged,
    )


@app.post("/api/step-table", response_model=List[StepRowData])
async def step_table(request: StepTableRequest):
    """Evaluate N, sigma and u at a uniform step along every rod."""
    result = to_result(request.result)
    return [
        StepRowData(rodId=r.rod_id, x=r.x, N=r.N, sigma=r.sigma, u=r.u, isBoundary=r.is_boundary)
        for r in build_step_table(result.rods, request.step)
    ]


@app.post("/api/step-table/csv")
async def step_table_csv_export(request: StepTableRequest):
    """Export the step table as CSV."""
    result = to_result(request.result)
    rows = build_step_table(result.rods, request.step)

    return StreamingResponse(
        iter([step_table_csv(rows)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={step_table_filename(request.step)}"}
    )


@app.post("/api/report", response_class=HTMLResponse)
async def report(request: ReportRequest):
    """Assemble the HTML report."""
    result = to_result(request.result)
    sections = to_sections(request.sections)

    calculator = SectionQueryCalculator(result.rods)
    for q in request.queries:
        try:
            calculator.query(q.rodId, q.x)
        except KeyError as e:
            raise HTTPException(status_code=400, detail=str(e))

    step_rows = build_step_table(result.rods, request.step) if request.step else []
    diagrams = {
        'construction': ConstructionDiagram(result),
        'epure_n': EpureDiagram(result, 'N'),
        'epure_sigma': EpureDiagram(result, 'sigma'),
        'epure_u': EpureDiagram(result, 'u'),
    }

    assembler = ReportAssembler(
        result,
        diagrams=diagrams,
        section_history=calculator.get_history(),
        step_rows=step_rows,
        step=request.step,
    )
    try:
        html = assembler.assemble(sections)
    except ReportGenerationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return HTMLResponse(
        content=html,
        headers={"Content-Disposition": f"inline; filename={report_filename()}"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
