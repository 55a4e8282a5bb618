from __future__ import annotations

from typing import Dict, Iterable, List


class _TreeNode:
	def __init__(self, name: str):
		self.name = name
		self.children: Dict[str, "_TreeNode"] = {}
		self.is_file = False

	@property
	def is_dir(self) -> bool:
		return bool(self.children) and not self.is_file


def build_directory_tree(root_name: str, rel_paths: Iterable[str], max_depth: int = 6) -> str:
	"""Render included files as an ASCII tree.

	``max_depth`` counts path segments below the root (1 = direct children).
	Directories sort before files, then by name.
	"""
	max_depth = max(1, max_depth)
	root_name = root_name.strip() or "."
	root = _TreeNode(root_name)

	for rel in rel_paths:
		parts = [p for p in rel.strip().split("/") if p]
		cursor = root
		for part in parts:
			cursor = cursor.children.setdefault(part, _TreeNode(part))
		if parts:
			cursor.is_file = True

	lines: List[str] = [root_name]

	def walk(node: _TreeNode, depth: int, prefix: str) -> None:
		names = sorted(node.children, key=lambda k: (not node.children[k].is_dir, k))
		for idx, name in enumerate(names):
			child = node.children[name]
			last = idx == len(names) - 1
			lines.append(prefix + ("└── " if last else "├── ") + child.name)
			if depth < max_depth:
				walk(child, depth + 1, prefix + ("    " if last else "│   "))

	walk(root, 1, "")
	return "\n".join(lines)
