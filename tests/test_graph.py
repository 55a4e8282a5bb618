from analyzer.graph import GraphRegistry, node_id, sanitize_id
from analyzer.model import NodeKind, Relation


def test_node_id_replaces_separators_and_strips_unsafe_chars():
	assert node_id("module", "src/api") == "module_src_api"
	assert node_id(NodeKind.EXTERNAL, "ext:@scope/pkg-name") == "external_ext_scope_pkgname"
	assert node_id(NodeKind.ENDPOINT, "endpoint:GET /users") == "endpoint_endpoint_GET__users"
	assert node_id(NodeKind.EXTERNAL, "external/*") == "external_external_"


def test_sanitize_id():
	assert sanitize_id("a-b.c_d9") == "abc_d9"


def test_ensure_node_first_write_wins():
	reg = GraphRegistry()
	nid = node_id(NodeKind.MODULE, "src/api")
	reg.ensure_node(nid, "src/api", NodeKind.MODULE, "first")
	reg.ensure_node(nid, "src/api", NodeKind.MODULE, "second")
	assert len(reg.nodes) == 1
	assert reg.nodes[nid].group == "first"


def test_add_edge_collapses_duplicates():
	reg = GraphRegistry()
	a = reg.module_node("a")
	b = reg.module_node("b")
	reg.add_edge(a, b, Relation.IMPORTS)
	reg.add_edge(a, b, Relation.IMPORTS)
	reg.add_edge(a, b, Relation.USES, "reads")
	assert len(reg.edges) == 2


def test_finalize_sorts_nodes_and_edges():
	reg = GraphRegistry()
	m = reg.module_node("zeta")
	ds = reg.add_node(NodeKind.DATASOURCE, "fs", "datasource")
	a = reg.module_node("alpha")
	reg.add_edge(m, ds, Relation.USES, "reads")
	reg.add_edge(a, m, Relation.IMPORTS)
	diagram = reg.finalize("Legend:\n")
	assert [n.id for n in diagram.nodes] == ["datasource_fs", "module_alpha", "module_zeta"]
	assert [e.from_id for e in diagram.edges] == ["module_alpha", "module_zeta"]
	assert diagram.legend == "Legend:\n"
