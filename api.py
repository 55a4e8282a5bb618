from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from analyzer.config import load_settings
from analyzer.diagram import build_diagram_from_request
from analyzer.errors import AnalyzerError
from analyzer.model import (
	ArchitectureReport,
	DiagramOptions,
	DiagramRequest,
	DiagramResponse,
	ImportFact,
)
from analyzer.render import FORMAT_ASCII, FORMAT_PLANTUML, parse_formats, to_ascii, to_plantuml
from analyzer.report import build_report


app = FastAPI(title="Architecture Viz Analyzer")


class AnalyzeRequest(BaseModel):
	root_path: str
	imports: List[ImportFact] = []
	options: Optional[DiagramOptions] = None
	formats: Optional[str] = None


@app.post("/diagram", response_model=DiagramResponse)
def diagram(req: DiagramRequest, formats: str = "ascii,plantuml") -> DiagramResponse:
	result = build_diagram_from_request(req)
	wanted = parse_formats(formats)
	return DiagramResponse(
		diagram=result,
		ascii=to_ascii(result) if FORMAT_ASCII in wanted else None,
		plantuml=to_plantuml(result) if FORMAT_PLANTUML in wanted else None,
	)


@app.post("/analyze", response_model=ArchitectureReport)
def analyze(req: AnalyzeRequest) -> ArchitectureReport:
	settings = load_settings()
	if req.formats is not None:
		settings = settings.model_copy(update={"uml_formats": req.formats})
	try:
		return build_report(req.root_path, req.imports, settings, req.options)
	except AnalyzerError as e:
		raise HTTPException(status_code=400, detail=str(e))


def create_app() -> FastAPI:
	return app
