from __future__ import annotations

from typing import Callable, Dict, List, Set

from .graph import sanitize_id
from .model import Diagram, Edge, Node, NodeKind, Relation


FORMAT_ASCII = "ascii"
FORMAT_PLANTUML = "plantuml"
KNOWN_FORMATS = (FORMAT_ASCII, FORMAT_PLANTUML)


def parse_formats(csv: str) -> Set[str]:
	"""Parse ``ascii,plantuml|ascii|plantuml|none``; empty means both."""
	items = {x.strip().lower() for x in (csv or "").split(",") if x.strip()}
	if "none" in items:
		return set()
	if not items:
		return set(KNOWN_FORMATS)
	return {x for x in items if x in KNOWN_FORMATS}


def _ascii_label(node: Node) -> str:
	if node.kind is NodeKind.ENDPOINT:
		return node.label
	return f"[{node.label}]"


def _arrow(edge: Edge, src: str, dst: str, annotate: Callable[[str], str]) -> str:
	if edge.relation is Relation.USES:
		if edge.label.strip():
			return f"{src} ..> {dst} {annotate(edge.label)}"
		return f"{src} ..> {dst}"
	return f"{src} --> {dst}"


def to_ascii(diagram: Diagram) -> str:
	labels: Dict[str, str] = {n.id: _ascii_label(n) for n in diagram.nodes}
	lines: List[str] = [diagram.legend]
	for edge in diagram.edges:
		src = labels.get(edge.from_id, edge.from_id)
		dst = labels.get(edge.to_id, edge.to_id)
		lines.append(_arrow(edge, src, dst, lambda lbl: f"<<{lbl}>>"))
	return "\n".join(lines)


def _escape(text: str) -> str:
	return text.replace('"', '\\"')


# Shape keyword per node kind; datasources pick theirs by label.
PLANTUML_SHAPES: Dict[NodeKind, str] = {
	NodeKind.MODULE: "rectangle",
	NodeKind.EXTERNAL: "component",
	NodeKind.ENDPOINT: "usecase",
	NodeKind.MAIN: "rectangle",
}


def _plantuml_declaration(node: Node) -> str:
	ident = sanitize_id(node.id)
	if node.kind is NodeKind.DATASOURCE:
		shape = "database" if node.label.lower().startswith("db:") else "queue"
	else:
		shape = PLANTUML_SHAPES[node.kind]
	label = "main" if node.kind is NodeKind.MAIN else node.label
	return f'{shape} "{_escape(label)}" as {ident}'


def to_plantuml(diagram: Diagram) -> str:
	lines: List[str] = ["@startuml", "skinparam componentStyle rectangle"]
	for node in diagram.nodes:
		lines.append(_plantuml_declaration(node))
	for edge in diagram.edges:
		src = sanitize_id(edge.from_id)
		dst = sanitize_id(edge.to_id)
		lines.append(_arrow(edge, src, dst, lambda lbl: f": {_escape(lbl)}"))
	if diagram.legend.strip():
		lines.append("legend right")
		lines.append(diagram.legend.rstrip("\n"))
		lines.append("endlegend")
	lines.append("@enduml")
	return "\n".join(lines)


RENDERERS: Dict[str, Callable[[Diagram], str]] = {
	FORMAT_ASCII: to_ascii,
	FORMAT_PLANTUML: to_plantuml,
}


def render(diagram: Diagram, fmt: str) -> str:
	try:
		renderer = RENDERERS[fmt.strip().lower()]
	except KeyError:
		raise ValueError(f"Unknown diagram format: {fmt}") from None
	return renderer(diagram)
