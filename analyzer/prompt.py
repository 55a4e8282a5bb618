"""Agent-oriented prompt built from an architecture report."""
from __future__ import annotations

from typing import List

from .model import ArchitectureReport


INSTRUCTIONS = (
	"- Extract architectural overview, key modules, and responsibilities.",
	"- Use UML to identify entrypoints, service boundaries, and data sources.",
	"- Relate external dependencies to specific modules and features.",
	"- Return a concise outline plus follow-up questions if crucial information is missing.",
)


def build_agent_prompt(report: ArchitectureReport) -> str:
	lines: List[str] = [
		"You are an architecture-aware agent. Use the structure, imports and diagrams to understand this codebase.",
		"",
		f"Root: {report.root_path}",
	]
	if report.languages:
		lines.append(f"Languages: {', '.join(sorted(report.languages))}")

	lines += ["", "Directory tree:", report.directory_tree]
	lines += ["", "Import/dependency graph:", report.import_graph]

	if report.uml_ascii.strip():
		lines += ["", "UML (ASCII):", report.uml_ascii]

	if report.external_dependencies:
		lines += ["", "External dependencies (approximate):"]
		for name in sorted(report.external_dependencies):
			lines.append(f"  - {name}: {report.external_dependencies[name]} reference(s)")

	lines += ["", "Instructions:"]
	lines.extend(INSTRUCTIONS)
	return "\n".join(lines)
