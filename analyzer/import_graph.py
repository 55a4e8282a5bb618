from __future__ import annotations

import json
from collections import Counter
from typing import Dict, List, Sequence, Set, Tuple

from pydantic import TypeAdapter, ValidationError

from .errors import FactsFileError
from .model import ImportFact


_FACTS = TypeAdapter(List[ImportFact])


def load_import_facts(path: str) -> List[ImportFact]:
	"""Load scanner output: a JSON list of facts, or an object with an ``imports`` list."""
	try:
		with open(path, "r", encoding="utf-8") as fh:
			payload = json.load(fh)
	except (OSError, ValueError) as exc:
		raise FactsFileError(path, str(exc)) from exc
	if isinstance(payload, dict):
		payload = payload.get("imports", [])
	try:
		return _FACTS.validate_python(payload)
	except ValidationError as exc:
		raise FactsFileError(path, str(exc)) from exc


def count_externals(imports: Sequence[ImportFact]) -> Dict[str, int]:
	counts: Counter = Counter(f.raw_specifier for f in imports if not f.is_internal)
	return dict(counts)


def _target(fact: ImportFact) -> str:
	if fact.is_internal and fact.resolved_internal_path:
		return fact.resolved_internal_path
	return fact.raw_specifier


def render_import_graph(imports: Sequence[ImportFact]) -> str:
	"""List each source file followed by its unique targets, internal ones first."""
	by_source: Dict[str, Set[Tuple[bool, str]]] = {}
	for fact in imports:
		by_source.setdefault(fact.source_file, set()).add((fact.is_internal, _target(fact)))

	lines: List[str] = []
	for source in sorted(by_source):
		lines.append(source)
		for is_internal, target in sorted(by_source[source], key=lambda t: (not t[0], t[1])):
			tag = "(internal)" if is_internal else "(external)"
			lines.append(f"  └─> {target} {tag}")
	return "\n".join(lines)
