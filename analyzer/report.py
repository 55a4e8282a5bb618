from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Optional, Sequence

from .config import Settings
from .diagram import build_diagram
from .dirtree import build_directory_tree
from .errors import InvalidRootError
from .fs_scan import detect_language, read_contents, scan_repository
from .import_graph import count_externals, render_import_graph
from .model import ArchitectureReport, DiagramOptions, ImportFact
from .render import FORMAT_ASCII, FORMAT_PLANTUML, parse_formats, to_ascii, to_plantuml


logger = logging.getLogger(__name__)


def _with_language(fact: ImportFact) -> ImportFact:
	if fact.language:
		return fact
	return fact.model_copy(update={"language": detect_language(fact.source_file)})


def build_report(
	root: str,
	imports: Sequence[ImportFact],
	settings: Settings,
	options: Optional[DiagramOptions] = None,
) -> ArchitectureReport:
	root = os.path.abspath(root)
	if not os.path.isdir(root):
		raise InvalidRootError(root)

	opts = options or settings.diagram_options()
	files = scan_repository(root, max_file_bytes=settings.max_file_bytes)
	rel_paths = [f.rel_path for f in files]
	contents, warnings = read_contents(files, settings.max_analyze_bytes)
	external_counts = count_externals(imports)
	logger.info("scanned %s: %d files, %d import facts", root, len(files), len(imports))

	uml_ascii = ""
	uml_plantuml = ""
	formats = parse_formats(settings.uml_formats)
	if formats:
		diagram = build_diagram(rel_paths, contents, imports, external_counts, opts)
		if FORMAT_ASCII in formats:
			uml_ascii = to_ascii(diagram)
		if FORMAT_PLANTUML in formats:
			uml_plantuml = to_plantuml(diagram)

	languages = sorted({f.language for f in files if f.language != "unknown"})
	return ArchitectureReport(
		generated_at=datetime.now(timezone.utc).isoformat(),
		root_path=root,
		languages=languages,
		directory_tree=build_directory_tree(os.path.basename(root), rel_paths, settings.tree_depth),
		import_graph=render_import_graph(imports),
		imports=[_with_language(f) for f in imports],
		external_dependencies=external_counts,
		uml_ascii=uml_ascii,
		uml_plantuml=uml_plantuml,
		warnings=warnings,
	)
