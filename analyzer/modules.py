from __future__ import annotations

from typing import Dict, Iterable, Union

from .model import Granularity


ANCHOR_DIRS = ("src", "lib", "pkg", "app", "cmd", "internal")

GranularityLike = Union[Granularity, str, None]


def parse_granularity(value: GranularityLike) -> Granularity:
	if isinstance(value, Granularity):
		return value
	text = (value or "").strip().lower()
	try:
		return Granularity(text)
	except ValueError:
		return Granularity.MODULE


def module_name(rel_path: str, granularity: GranularityLike = Granularity.MODULE) -> str:
	"""Map a POSIX relative path to the label of the module that owns it.

	- file: the path itself
	- package: the first path segment
	- module: ``<anchor>/<second>`` when the path starts with one of
	  ``ANCHOR_DIRS`` and has a second segment, otherwise the first segment
	"""
	gran = parse_granularity(granularity)
	parts = rel_path.split("/")
	if gran is Granularity.FILE:
		return rel_path
	if gran is Granularity.PACKAGE:
		return parts[0]
	if len(parts) >= 2 and parts[0] in ANCHOR_DIRS:
		return f"{parts[0]}/{parts[1]}"
	return parts[0]


def group_for(label: str) -> str:
	for anchor in ANCHOR_DIRS:
		if label.startswith(anchor + "/"):
			return anchor
	return "root"


class ModuleResolver:
	"""Caches path -> module labels for one build; unknown paths are derived on demand."""

	def __init__(self, rel_paths: Iterable[str], granularity: GranularityLike):
		self.granularity = parse_granularity(granularity)
		self._by_path: Dict[str, str] = {
			rel: module_name(rel, self.granularity) for rel in rel_paths
		}

	def __call__(self, rel_path: str) -> str:
		label = self._by_path.get(rel_path)
		if not label:
			label = module_name(rel_path, self.granularity)
			self._by_path[rel_path] = label
		return label
