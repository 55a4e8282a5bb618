from __future__ import annotations

import logging
from typing import Callable, List, Mapping, Sequence, Set, Tuple

from .graph import GraphRegistry, node_id
from .model import ImportFact, NodeKind, Relation


logger = logging.getLogger(__name__)

MIN_KEPT_EXTERNALS = 5
MAX_KEPT_EXTERNALS = 15
COLLAPSED_KEY = "external/*"


def top_external_count(max_nodes: int) -> int:
	return max(MIN_KEPT_EXTERNALS, min(MAX_KEPT_EXTERNALS, max_nodes // 6))


def rank_externals(counts: Mapping[str, int]) -> List[str]:
	"""Names by descending reference count, ties alphabetical."""
	return [name for name, _ in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))]


def partition_externals(counts: Mapping[str, int], max_nodes: int) -> Tuple[Set[str], Set[str]]:
	ranked = rank_externals(counts)
	limit = top_external_count(max_nodes)
	return set(ranked[:limit]), set(ranked[limit:])


def collapsed_label(count: int) -> str:
	return f"[{COLLAPSED_KEY}] ({count} more)"


def add_external_edges(
	registry: GraphRegistry,
	imports: Sequence[ImportFact],
	counts: Mapping[str, int],
	resolve: Callable[[str], str],
	max_nodes: int,
) -> None:
	kept, collapsed = partition_externals(counts, max_nodes)
	logger.debug("externals: %d kept, %d collapsed", len(kept), len(collapsed))

	collapsed_id = ""
	if collapsed:
		collapsed_id = registry.ensure_node(
			node_id(NodeKind.EXTERNAL, COLLAPSED_KEY),
			collapsed_label(len(collapsed)),
			NodeKind.EXTERNAL,
			"external",
		)

	for fact in imports:
		if fact.is_internal:
			continue
		raw = fact.raw_specifier
		from_id = registry.module_node(resolve(fact.source_file))
		if raw in kept:
			ext_id = registry.add_node(NodeKind.EXTERNAL, f"ext:{raw}", "external")
			registry.add_edge(from_id, ext_id, Relation.IMPORTS)
		elif collapsed_id:
			registry.add_edge(from_id, collapsed_id, Relation.IMPORTS)
