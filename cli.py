from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from analyzer.config import Settings, load_settings
from analyzer.diagram import build_diagram_from_request
from analyzer.errors import AnalyzerError, RequestFileError
from analyzer.import_graph import load_import_facts
from analyzer.model import ArchitectureReport, DiagramRequest
from analyzer.prompt import build_agent_prompt
from analyzer.render import parse_formats, render
from analyzer.report import build_report


logger = logging.getLogger("archviz")


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
	updates = {}
	if args.uml is not None:
		updates["uml_formats"] = args.uml
	if getattr(args, "granularity", None) is not None:
		updates["granularity"] = args.granularity
	if getattr(args, "max_nodes", None) is not None:
		updates["max_nodes"] = args.max_nodes
	if getattr(args, "no_io", False):
		updates["include_io"] = False
	if getattr(args, "no_endpoints", False):
		updates["include_endpoints"] = False
	if getattr(args, "tree_depth", None) is not None:
		updates["tree_depth"] = args.tree_depth
	return settings.model_copy(update=updates)


def format_report_text(report: ArchitectureReport) -> str:
	parts: List[str] = [f"# Architecture: {report.root_path}", ""]
	if report.languages:
		parts.append(f"Languages: {', '.join(report.languages)}")
		parts.append("")
	parts += ["## Directory tree", report.directory_tree, ""]
	if report.import_graph:
		parts += ["## Import graph", report.import_graph, ""]
	if report.uml_ascii:
		parts += ["## UML (ascii)", report.uml_ascii, ""]
	if report.uml_plantuml:
		parts += ["## UML (plantuml)", report.uml_plantuml, ""]
	if report.warnings:
		parts.append("## Warnings")
		parts += [f"- {w}" for w in report.warnings]
	return "\n".join(parts).rstrip() + "\n"


def cmd_analyze(args: argparse.Namespace) -> None:
	settings = _apply_overrides(args.settings, args)
	imports = load_import_facts(args.imports) if args.imports else []
	report = build_report(args.path, imports, settings)
	if args.format == "json":
		print(json.dumps(report.model_dump(by_alias=True), indent=2))
	elif args.format == "xml":
		print(report.to_xml())
	elif args.format == "prompt":
		print(build_agent_prompt(report))
	else:
		print(format_report_text(report), end="")


def cmd_render(args: argparse.Namespace) -> None:
	try:
		with open(args.request, "r", encoding="utf-8") as fh:
			request = DiagramRequest.model_validate_json(fh.read())
	except (OSError, ValidationError) as exc:
		raise RequestFileError(args.request, str(exc)) from exc
	diagram = build_diagram_from_request(request)
	formats = parse_formats(args.uml if args.uml is not None else args.settings.uml_formats)
	# ascii before plantuml
	for fmt in sorted(formats):
		print(render(diagram, fmt))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="archviz")
	parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Scan a repository and print an architecture report")
	pa.add_argument("path", help="Path to repository root")
	pa.add_argument("--imports", help="JSON file of import facts produced by a scanner")
	pa.add_argument("--uml", help="Diagram formats: ascii,plantuml|ascii|plantuml|none")
	pa.add_argument("--granularity", choices=["file", "module", "package"])
	pa.add_argument("--max-nodes", type=int, help="Soft node budget before collapsing externals")
	pa.add_argument("--no-io", action="store_true", help="Skip I/O datasource nodes")
	pa.add_argument("--no-endpoints", action="store_true", help="Skip HTTP endpoint nodes")
	pa.add_argument("--tree-depth", type=int)
	pa.add_argument("--format", choices=["text", "json", "xml", "prompt"], default="text")
	pa.set_defaults(func=cmd_analyze)

	pr = sub.add_parser("render", help="Render diagrams from a JSON diagram request")
	pr.add_argument("request", help="Path to a JSON DiagramRequest")
	pr.add_argument("--uml", help="Diagram formats: ascii,plantuml|ascii|plantuml|none")
	pr.set_defaults(func=cmd_render)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	args.settings = load_settings()

	level = args.settings.log_level
	if args.verbose == 1:
		level = "INFO"
	elif args.verbose > 1:
		level = "DEBUG"
	logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

	try:
		args.func(args)
	except AnalyzerError as exc:
		print(f"archviz: {exc}", file=sys.stderr)
		return 2
	return 0


if __name__ == "__main__":
	sys.exit(main())
