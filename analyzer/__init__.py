"""Analyzer package for synthesizing architecture diagrams from codebase facts.

Modules:
- modules.py: Mapping file paths to module labels by granularity.
- graph.py: Node/edge registry with content-derived identity.
- collapse.py: Bounding third-party dependency nodes.
- detectors.py: Pattern tables for I/O, HTTP endpoints and entrypoints.
- diagram.py: Assembling the finalized, deterministically ordered diagram.
- render.py: Arrow-text and PlantUML serializers.
- fs_scan.py, dirtree.py, import_graph.py, report.py: Report assembly around the diagram.
"""

__all__ = [
	"modules",
	"graph",
	"collapse",
	"detectors",
	"diagram",
	"render",
	"fs_scan",
	"dirtree",
	"import_graph",
	"report",
	"model",
	"config",
	"errors",
]
