from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Optional, Tuple

from .model import FileInfo


logger = logging.getLogger(__name__)

EXTENSION_LANGUAGE: Dict[str, str] = {
	".py": "python",
	".ts": "typescript",
	".tsx": "typescript",
	".js": "javascript",
	".jsx": "javascript",
	".mjs": "javascript",
	".cjs": "javascript",
	".java": "java",
	".kt": "kotlin",
	".kts": "kotlin",
	".go": "go",
	".rs": "rust",
	".swift": "swift",
	".c": "c",
	".cpp": "cpp",
}

IGNORE_DIRS = frozenset({".git", "node_modules", "dist", "build", "__pycache__"})


def detect_language(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return EXTENSION_LANGUAGE.get(ext.lower(), "unknown")


def to_posix_rel(root: str, path: str) -> str:
	return os.path.relpath(path, root).replace(os.sep, "/")


def scan_repository(
	root: str,
	ignore_names: Iterable[str] = (),
	max_file_bytes: Optional[int] = None,
) -> List[FileInfo]:
	skip = IGNORE_DIRS | set(ignore_names)
	files: List[FileInfo] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = [d for d in dirnames if d not in skip]
		for filename in filenames:
			if filename in skip:
				continue
			path = os.path.join(dirpath, filename)
			try:
				size = os.path.getsize(path)
			except OSError as exc:
				logger.warning("cannot stat %s: %s", path, exc)
				continue
			if max_file_bytes is not None and size > max_file_bytes:
				logger.debug("skipping %s (%d bytes)", path, size)
				continue
			files.append(
				FileInfo(
					path=path,
					rel_path=to_posix_rel(root, path),
					language=detect_language(filename),
					size=size,
				)
			)
	files.sort(key=lambda f: f.rel_path)
	return files


def read_contents(files: Iterable[FileInfo], max_analyze_bytes: int) -> Tuple[Dict[str, str], List[str]]:
	"""Read file text for analysis, truncated to ``max_analyze_bytes``.

	Binary files (any NUL byte) and unreadable files are reported as
	warnings and left out of the returned mapping.
	"""
	contents: Dict[str, str] = {}
	warnings: List[str] = []
	for f in files:
		try:
			with open(f.path, "rb") as fh:
				data = fh.read(max_analyze_bytes)
		except OSError as exc:
			warnings.append(f"unable to read {f.rel_path}: {exc}")
			continue
		if b"\x00" in data:
			warnings.append(f"skipping non-UTF8 analysis for: {f.rel_path}")
			continue
		contents[f.rel_path] = data.decode("utf-8", errors="replace")
	for w in warnings:
		logger.warning(w)
	return contents, warnings
