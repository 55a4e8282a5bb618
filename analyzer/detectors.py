"""Keyword and pattern classifiers over file text.

Every detector here is table driven: adding a marker or a language family
means editing a table, not the traversal in ``analyzer.diagram``.
"""
from __future__ import annotations

import posixpath
import re
from enum import Enum
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from .model import IOFlags


# ---------------------------------------------------------------------------
# I/O capabilities
# ---------------------------------------------------------------------------

IO_MARKERS: Dict[str, Tuple[str, ...]] = {
	"fs_read": ("fs.", "open(", "os.open", "filemanager", "pathlib"),
	"fs_write": ("writefile", "fs.write", "os.create", "os.write", "filemanager.default.create"),
	"network": ("http.", "fetch(", "urlsession", "requests.", "reqwest", "net/http"),
	"env": ("process.env", "os.environ", "getenv(", "environment."),
	"concurrency_hint": ("async", "await", "goroutine", " chan", "dispatchqueue", "tokio", "spawn"),
	"db": (
		"sqlalchemy",
		"psycopg2",
		"gorm",
		"database/sql",
		"entitymanager",
		"jpa",
		"mongoose",
		"redis",
	),
}

# Evaluated in order, first match wins, and only once the generic db markers matched.
DB_KIND_MARKERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
	("postgres", ("postgres", "psycopg2")),
	("mysql", ("mysql",)),
	("sqlite", ("sqlite",)),
	("mongo", ("mongo",)),
	("redis", ("redis",)),
)


def _contains_any(text: str, markers: Iterable[str]) -> bool:
	return any(m in text for m in markers)


def detect_db_kind(lower: str) -> Optional[str]:
	for kind, markers in DB_KIND_MARKERS:
		if _contains_any(lower, markers):
			return kind
	return None


def detect_io(lower: str) -> IOFlags:
	"""Classify lower-cased file text into I/O capability flags."""
	flags = {name: _contains_any(lower, markers) for name, markers in IO_MARKERS.items()}
	db_kind = detect_db_kind(lower) if flags["db"] else None
	return IOFlags(db_kind=db_kind, **flags)


# ---------------------------------------------------------------------------
# Language families
# ---------------------------------------------------------------------------

class LanguageFamily(str, Enum):
	JAVASCRIPT = "javascript/typescript"
	PYTHON = "python"
	GO = "go-like"
	RUST = "rust-like"
	JVM = "jvm-like"


FAMILY_BY_EXTENSION: Dict[str, LanguageFamily] = {
	".ts": LanguageFamily.JAVASCRIPT,
	".tsx": LanguageFamily.JAVASCRIPT,
	".js": LanguageFamily.JAVASCRIPT,
	".jsx": LanguageFamily.JAVASCRIPT,
	".mjs": LanguageFamily.JAVASCRIPT,
	".cjs": LanguageFamily.JAVASCRIPT,
	".py": LanguageFamily.PYTHON,
	".go": LanguageFamily.GO,
	".rs": LanguageFamily.RUST,
	".java": LanguageFamily.JVM,
	".kt": LanguageFamily.JVM,
	".kts": LanguageFamily.JVM,
}


def family_for_path(rel_path: str) -> Optional[LanguageFamily]:
	_, ext = posixpath.splitext(rel_path)
	return FAMILY_BY_EXTENSION.get(ext.lower())


# ---------------------------------------------------------------------------
# HTTP endpoints
# ---------------------------------------------------------------------------

class Endpoint(NamedTuple):
	method: str
	path: str


# An extractor yields one (method, path) pair per HTTP method the match declares.
Extractor = Callable[[re.Match], List[Tuple[str, str]]]


class EndpointRule(NamedTuple):
	pattern: re.Pattern
	extract: Extractor


def _groups(method_group: int, path_group: int) -> Extractor:
	return lambda m: [(m.group(method_group), m.group(path_group))]


def _any_method(path_group: int) -> Extractor:
	return lambda m: [("ANY", m.group(path_group))]


MAPPING_METHODS = ("get", "post", "put", "delete", "patch")


def method_from_mapping(mapping: str) -> str:
	lower = mapping.lower()
	for verb in MAPPING_METHODS:
		if lower.startswith(verb):
			return verb.upper()
	return "GET"


_QUOTED_WORD = re.compile(r"""['"](\w+)['"]""")


def _flask_route(m: re.Match) -> List[Tuple[str, str]]:
	methods = _QUOTED_WORD.findall(m.group(2) or "") or ["GET"]
	return [(method, m.group(1)) for method in methods]


ENDPOINT_RULES: Dict[LanguageFamily, Tuple[EndpointRule, ...]] = {
	LanguageFamily.JAVASCRIPT: (
		EndpointRule(
			re.compile(r"""\b(?:app|router|server|fastify)\.(get|post|put|delete|patch)\(\s*['"]([^'"]+)['"]""", re.M),
			_groups(1, 2),
		),
		EndpointRule(
			re.compile(r"""new\s+Router\(\)\.(get|post|put|delete|patch)\(\s*['"]([^'"]+)['"]""", re.M),
			_groups(1, 2),
		),
	),
	LanguageFamily.PYTHON: (
		EndpointRule(
			re.compile(r"""^\s*@(?:app|router)\.(get|post|put|delete|patch)\(\s*['"]([^'"]+)['"]""", re.M),
			_groups(1, 2),
		),
		EndpointRule(
			re.compile(
				r"""^\s*@(?:app|bp|blueprint)\.route\(\s*['"]([^'"]+)['"](?:[^)]*methods\s*=\s*[\[(]([^\])]*)[\])])?""",
				re.M,
			),
			_flask_route,
		),
	),
	LanguageFamily.GO: (
		EndpointRule(
			re.compile(r"""\.(GET|POST|PUT|DELETE|PATCH)\(\s*["']([^"']+)["']""", re.M),
			_groups(1, 2),
		),
		EndpointRule(
			re.compile(r"""http\.HandleFunc\(\s*["']([^"']+)["']""", re.M),
			_any_method(1),
		),
	),
	LanguageFamily.RUST: (
		EndpointRule(
			re.compile(r"""^\s*#\[\s*(get|post|put|delete|patch)\s*\(\s*["']([^"']+)['"]""", re.M),
			_groups(1, 2),
		),
	),
	LanguageFamily.JVM: (
		EndpointRule(
			re.compile(r"""^\s*@((?:Get|Post|Put|Delete|Patch)Mapping)\(\s*["']([^"']+)['"]""", re.M),
			lambda m: [(method_from_mapping(m.group(1)), m.group(2))],
		),
		EndpointRule(
			re.compile(
				r"""^\s*@RequestMapping\([^)]*value\s*=\s*["']([^"']+)["'][^)]*method\s*=\s*RequestMethod\.([A-Z]+)[^)]*\)""",
				re.M,
			),
			lambda m: [(m.group(2), m.group(1))],
		),
	),
}


def detect_endpoints(text: str, family: Optional[LanguageFamily]) -> List[Endpoint]:
	"""Extract (METHOD, path) pairs from route registrations in ``text``.

	Matching runs on the original text, not the lower-cased copy, because
	several idioms are case sensitive (Go's ``.GET``, JVM annotations).
	"""
	found: List[Endpoint] = []
	if family is None:
		return found
	for rule in ENDPOINT_RULES.get(family, ()):
		for match in rule.pattern.finditer(text):
			for method, path in rule.extract(match):
				method = (method or "").strip().upper()
				path = (path or "").strip()
				if method and path:
					found.append(Endpoint(method, path))
	return found


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------

ENTRY_PATHS = frozenset(
	{
		"src/main.rs",
		"src/index.ts",
		"src/index.js",
		"index.ts",
		"index.js",
	}
)
ENTRY_BASENAMES = frozenset({"main.swift"})
ENTRY_SUFFIXES = ("/main.ts", "/main.js", "/server.ts", "/server.js")

# Each group matches when all of its markers occur in the lower-cased text.
ENTRY_CONTENT_MARKERS: Tuple[Tuple[str, ...], ...] = (
	("package main", "func main("),
	("@main",),
	("public static void main(",),
	("fun main(",),
	("if __name__ == \"__main__\":",),
	("if __name__ == '__main__':",),
)


def is_entrypoint(rel_path: str, lower: str) -> bool:
	rel = rel_path.lower()
	if rel in ENTRY_PATHS or posixpath.basename(rel) in ENTRY_BASENAMES:
		return True
	if rel.endswith(ENTRY_SUFFIXES):
		return True
	return any(all(m in lower for m in group) for group in ENTRY_CONTENT_MARKERS)


def select_entrypoint(candidates: Iterable[str]) -> Optional[str]:
	return min(candidates, default=None)
