from __future__ import annotations

import re
from typing import Dict, List

from .model import Diagram, Edge, Node, NodeKind, Relation
from .modules import group_for


_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_]+")


def sanitize_id(raw: str) -> str:
	"""Strip every character outside ``[A-Za-z0-9_]``."""
	return _UNSAFE_ID_CHARS.sub("", raw)


def node_id(kind: str, label: str) -> str:
	if isinstance(kind, NodeKind):
		kind = kind.value
	raw = f"{kind}_{label}"
	for ch in (" ", "/", ":"):
		raw = raw.replace(ch, "_")
	return sanitize_id(raw)


def _node_sort_key(node: Node):
	return (node.kind.value, node.id)


class GraphRegistry:
	"""Accumulates nodes and edges for one diagram build.

	Nodes are keyed by id and never overwritten; edges are keyed by
	``from|to|relation|label`` so repeated insertions collapse to one edge.
	"""

	def __init__(self):
		self.nodes: Dict[str, Node] = {}
		self.edges: Dict[str, Edge] = {}

	def ensure_node(self, id: str, label: str, kind: NodeKind, group: str = "") -> str:
		if id not in self.nodes:
			self.nodes[id] = Node(id=id, label=label, kind=kind, group=group)
		return id

	def add_node(self, kind: NodeKind, label: str, group: str = "") -> str:
		return self.ensure_node(node_id(kind, label), label, kind, group)

	def module_node(self, label: str) -> str:
		return self.add_node(NodeKind.MODULE, label, group_for(label))

	def add_edge(self, from_id: str, to_id: str, relation: Relation, label: str = "") -> None:
		edge = Edge(from_id=from_id, to_id=to_id, relation=relation, label=label)
		self.edges[edge.key] = edge

	def finalize(self, legend: str) -> Diagram:
		nodes: List[Node] = sorted(self.nodes.values(), key=_node_sort_key)
		edges: List[Edge] = [self.edges[k] for k in sorted(self.edges)]
		return Diagram(nodes=nodes, edges=edges, legend=legend)
