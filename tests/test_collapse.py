from analyzer.collapse import (
	add_external_edges,
	collapsed_label,
	partition_externals,
	rank_externals,
	top_external_count,
)
from analyzer.graph import GraphRegistry
from analyzer.model import ImportFact, NodeKind
from analyzer.modules import ModuleResolver


def fact(src, raw, internal=False, resolved=None):
	return ImportFact(source_file=src, raw_specifier=raw, is_internal=internal, resolved_internal_path=resolved)


def test_top_external_count_is_clamped():
	assert top_external_count(30) == 5
	assert top_external_count(1) == 5
	assert top_external_count(60) == 10
	assert top_external_count(120) == 15
	assert top_external_count(1000) == 15


def test_rank_externals_by_count_then_name():
	counts = {"b": 2, "a": 2, "c": 5, "d": 1}
	assert rank_externals(counts) == ["c", "a", "b", "d"]


def test_partition_externals():
	counts = {f"lib{i:02d}": 1 for i in range(8)}
	kept, collapsed = partition_externals(counts, 30)
	assert kept == {"lib00", "lib01", "lib02", "lib03", "lib04"}
	assert collapsed == {"lib05", "lib06", "lib07"}


def test_collapsed_node_has_one_edge_per_module():
	counts = {f"lib{i:02d}": 1 for i in range(7)}
	imports = [fact("src/a/x.py", name) for name in counts]
	imports += [fact("src/a/y.py", "lib06"), fact("src/b/z.py", "lib06")]
	reg = GraphRegistry()
	add_external_edges(reg, imports, counts, ModuleResolver([], "module"), 30)

	collapsed = [n for n in reg.nodes.values() if n.label.startswith("[external/*]")]
	assert len(collapsed) == 1
	assert collapsed[0].label == collapsed_label(2) == "[external/*] (2 more)"
	into_collapsed = [e for e in reg.edges.values() if e.to_id == collapsed[0].id]
	assert sorted(e.from_id for e in into_collapsed) == ["module_src_a", "module_src_b"]


def test_no_collapsed_node_when_everything_fits():
	counts = {"react": 3, "lodash": 1}
	imports = [fact("web/a.ts", "react"), fact("web/a.ts", "lodash")]
	reg = GraphRegistry()
	add_external_edges(reg, imports, counts, ModuleResolver([], "module"), 120)
	labels = sorted(n.label for n in reg.nodes.values() if n.kind is NodeKind.EXTERNAL)
	assert labels == ["ext:lodash", "ext:react"]


def test_internal_facts_are_ignored():
	reg = GraphRegistry()
	add_external_edges(reg, [fact("a/x.py", "b", internal=True)], {}, ModuleResolver([], "module"), 120)
	assert reg.nodes == {}
	assert reg.edges == {}
