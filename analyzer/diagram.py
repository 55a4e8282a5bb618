from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from .collapse import add_external_edges
from .detectors import detect_endpoints, detect_io, family_for_path, is_entrypoint, select_entrypoint
from .graph import GraphRegistry, node_id
from .import_graph import count_externals
from .model import (
	Diagram,
	DiagramOptions,
	DiagramRequest,
	Granularity,
	ImportFact,
	IOFlags,
	NodeKind,
	Relation,
)
from .modules import ModuleResolver


logger = logging.getLogger(__name__)


def legend_for(granularity: Granularity) -> str:
	return (
		"Legend:\n"
		f"- [module] components (grouped by {granularity.value})\n"
		"- ext:* are external libraries\n"
		"- db:/fs/env/http:external are data sources\n"
		"- (METHOD /path) are HTTP endpoints\n"
		"- main is the top-level entrypoint (if detected)\n"
		"Arrows:\n"
		"- imports: [a] --> [b]\n"
		"- uses:    [a] ..> [ds]\n"
		"- serves:  (endpoint) --> [handler module]\n"
	)


def _add_import_edges(registry: GraphRegistry, imports: Sequence[ImportFact], resolve: ModuleResolver) -> None:
	for fact in imports:
		from_id = registry.module_node(resolve(fact.source_file))
		if fact.is_internal and fact.resolved_internal_path:
			to_id = registry.module_node(resolve(fact.resolved_internal_path))
			registry.add_edge(from_id, to_id, Relation.IMPORTS)


def _add_io_edges(registry: GraphRegistry, module_flags: Mapping[str, IOFlags]) -> None:
	for module in sorted(module_flags):
		flags = module_flags[module]
		mod_id = registry.module_node(module)
		if flags.db:
			db_name = flags.db_kind or "db"
			ds_id = registry.ensure_node(
				node_id(NodeKind.DATASOURCE, f"db:{db_name}"), f"db: {db_name}", NodeKind.DATASOURCE, "datasource"
			)
			registry.add_edge(mod_id, ds_id, Relation.USES, "uses")
		if flags.fs_read or flags.fs_write:
			ds_id = registry.add_node(NodeKind.DATASOURCE, "fs", "datasource")
			registry.add_edge(mod_id, ds_id, Relation.USES, "reads/writes" if flags.fs_write else "reads")
		if flags.env:
			ds_id = registry.add_node(NodeKind.DATASOURCE, "env", "datasource")
			registry.add_edge(mod_id, ds_id, Relation.USES, "reads")
		if flags.network:
			ds_id = registry.ensure_node(
				node_id(NodeKind.DATASOURCE, "http:external"), "http: external", NodeKind.DATASOURCE, "datasource"
			)
			registry.add_edge(mod_id, ds_id, Relation.USES, "calls")


def _add_entrypoint_edges(
	registry: GraphRegistry, entry_file: str, imports: Sequence[ImportFact], resolve: ModuleResolver
) -> None:
	main_id = registry.add_node(NodeKind.MAIN, "main", "main")
	registry.add_edge(main_id, registry.module_node(resolve(entry_file)), Relation.IMPORTS)
	for fact in imports:
		if fact.source_file != entry_file or not fact.is_internal or not fact.resolved_internal_path:
			continue
		to_id = registry.module_node(resolve(fact.resolved_internal_path))
		registry.add_edge(main_id, to_id, Relation.IMPORTS)


def _fact_sort_key(fact: ImportFact):
	return (
		fact.source_file,
		fact.raw_specifier,
		fact.is_internal,
		fact.resolved_internal_path or "",
		fact.language or "",
	)


def build_diagram(
	rel_paths: Sequence[str],
	file_contents: Mapping[str, str],
	imports: Sequence[ImportFact],
	external_counts: Optional[Mapping[str, int]] = None,
	options: Optional[DiagramOptions] = None,
) -> Diagram:
	"""Synthesize the architecture graph for one source tree.

	Passes run in a fixed order: internal import edges, external collapsing,
	then (when enabled) I/O datasources, endpoints and the entrypoint. The
	result is sorted, so it does not depend on the iteration order of any
	input mapping.
	"""
	opts = options or DiagramOptions()
	if external_counts is None:
		external_counts = count_externals(imports)
	# Node ids can collide after sanitizing (`a-b` and `ab`); with first write
	# winning, facts must be visited in a canonical order.
	imports = sorted(imports, key=_fact_sort_key)
	resolve = ModuleResolver(rel_paths, opts.granularity)
	registry = GraphRegistry()

	_add_import_edges(registry, imports, resolve)
	add_external_edges(registry, imports, external_counts, resolve, opts.max_nodes)

	if opts.include_io or opts.include_endpoints:
		module_flags: Dict[str, IOFlags] = {}
		entry_candidates: List[str] = []

		# Sorted so the first-seen db kind of a module is stable.
		for rel in sorted(set(rel_paths)):
			text = file_contents.get(rel, "")
			lower = text.lower()
			module = resolve(rel)
			if opts.include_io:
				module_flags[module] = module_flags.get(module, IOFlags()).merged(detect_io(lower))
			if opts.include_endpoints:
				for ep in detect_endpoints(text, family_for_path(rel)):
					ep_id = registry.ensure_node(
						node_id(NodeKind.ENDPOINT, f"endpoint:{ep.method} {ep.path}"),
						f"({ep.method} {ep.path})",
						NodeKind.ENDPOINT,
						"endpoint",
					)
					registry.add_edge(ep_id, registry.module_node(module), Relation.SERVES)
			if is_entrypoint(rel, lower):
				entry_candidates.append(rel)

		if opts.include_io:
			_add_io_edges(registry, module_flags)

		entry_file = select_entrypoint(entry_candidates)
		if entry_file is not None:
			logger.debug("entrypoint %s selected from %d candidates", entry_file, len(entry_candidates))
			_add_entrypoint_edges(registry, entry_file, imports, resolve)

	diagram = registry.finalize(legend_for(opts.granularity))
	logger.debug("diagram built: %d nodes, %d edges", len(diagram.nodes), len(diagram.edges))
	return diagram


def build_diagram_from_request(request: DiagramRequest) -> Diagram:
	return build_diagram(
		request.rel_paths,
		request.file_contents,
		request.imports,
		request.external_counts,
		request.options,
	)
