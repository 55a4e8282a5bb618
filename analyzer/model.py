from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional
from xml.sax.saxutils import quoteattr

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_MAX_NODES = 120


class Granularity(str, Enum):
	FILE = "file"
	MODULE = "module"
	PACKAGE = "package"


class NodeKind(str, Enum):
	MODULE = "module"
	EXTERNAL = "external"
	DATASOURCE = "datasource"
	ENDPOINT = "endpoint"
	MAIN = "main"


class Relation(str, Enum):
	IMPORTS = "imports"
	USES = "uses"
	SERVES = "serves"


class FileInfo(BaseModel):
	path: str
	rel_path: str
	language: str
	size: int = 0


class ImportFact(BaseModel):
	"""One import statement as reported by the external scanner.

	Field aliases follow the scanner's JSON wire names so fact files can be
	loaded as-is.
	"""

	model_config = ConfigDict(populate_by_name=True)

	source_file: str = Field(alias="file")
	raw_specifier: str = Field(alias="raw")
	is_internal: bool = Field(default=False, alias="isInternal")
	resolved_internal_path: Optional[str] = Field(default=None, alias="resolvedPath")
	language: Optional[str] = None


class Node(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	label: str
	kind: NodeKind
	group: str = ""


class Edge(BaseModel):
	model_config = ConfigDict(frozen=True)

	from_id: str
	to_id: str
	relation: Relation
	label: str = ""

	@property
	def key(self) -> str:
		return f"{self.from_id}|{self.to_id}|{self.relation.value}|{self.label}"


class Diagram(BaseModel):
	model_config = ConfigDict(frozen=True)

	nodes: List[Node] = []
	edges: List[Edge] = []
	legend: str = ""

	def node_by_id(self, node_id: str) -> Optional[Node]:
		for n in self.nodes:
			if n.id == node_id:
				return n
		return None


class IOFlags(BaseModel):
	model_config = ConfigDict(frozen=True)

	fs_read: bool = False
	fs_write: bool = False
	network: bool = False
	db: bool = False
	env: bool = False
	concurrency_hint: bool = False
	db_kind: Optional[str] = None

	def merged(self, other: "IOFlags") -> "IOFlags":
		return IOFlags(
			fs_read=self.fs_read or other.fs_read,
			fs_write=self.fs_write or other.fs_write,
			network=self.network or other.network,
			db=self.db or other.db,
			env=self.env or other.env,
			concurrency_hint=self.concurrency_hint or other.concurrency_hint,
			db_kind=self.db_kind or other.db_kind,
		)


class DiagramOptions(BaseModel):
	granularity: Granularity = Granularity.MODULE
	max_nodes: int = DEFAULT_MAX_NODES
	include_io: bool = True
	include_endpoints: bool = True

	@field_validator("granularity", mode="before")
	@classmethod
	def _normalize_granularity(cls, value):
		if isinstance(value, Granularity):
			return value
		text = str(value or "").strip().lower()
		try:
			return Granularity(text)
		except ValueError:
			return Granularity.MODULE

	@field_validator("max_nodes", mode="before")
	@classmethod
	def _normalize_max_nodes(cls, value):
		try:
			n = int(value)
		except (TypeError, ValueError):
			return DEFAULT_MAX_NODES
		return n if n > 0 else DEFAULT_MAX_NODES

	@field_validator("include_io", "include_endpoints", mode="before")
	@classmethod
	def _default_toggle(cls, value):
		return True if value is None else value


class DiagramRequest(BaseModel):
	rel_paths: List[str] = []
	file_contents: Dict[str, str] = {}
	imports: List[ImportFact] = []
	external_counts: Optional[Dict[str, int]] = None
	options: DiagramOptions = Field(default_factory=DiagramOptions)

	@field_validator("rel_paths", "file_contents", "imports", mode="before")
	@classmethod
	def _empty_when_null(cls, value, info):
		if value is None:
			return {} if info.field_name == "file_contents" else []
		return value

	@field_validator("options", mode="before")
	@classmethod
	def _default_options(cls, value):
		return DiagramOptions() if value is None else value


class DiagramResponse(BaseModel):
	diagram: Diagram
	ascii: Optional[str] = None
	plantuml: Optional[str] = None


class ArchitectureReport(BaseModel):
	generated_at: str
	root_path: str
	languages: List[str] = []
	directory_tree: str = ""
	import_graph: str = ""
	imports: List[ImportFact] = []
	external_dependencies: Dict[str, int] = {}
	uml_ascii: str = ""
	uml_plantuml: str = ""
	warnings: List[str] = []

	def to_xml(self) -> str:
		# XML-like for humans and agents; sections are CDATA, not validated markup.
		parts: List[str] = [f"<architecture generatedAt={quoteattr(self.generated_at)}>"]
		if self.root_path.strip():
			parts.append(f"  <root><![CDATA[{self.root_path}]]></root>")
		if self.languages:
			parts.append("  <languages>")
			for lang in self.languages:
				parts.append(f"    <language name={quoteattr(lang)}/>")
			parts.append("  </languages>")
		parts.append(f"  <directory_tree><![CDATA[\n{self.directory_tree}\n]]></directory_tree>")
		parts.append(f"  <import_graph><![CDATA[\n{self.import_graph}\n]]></import_graph>")
		if self.uml_ascii.strip():
			parts.append(f"  <uml_ascii><![CDATA[\n{self.uml_ascii}\n]]></uml_ascii>")
		if self.uml_plantuml.strip():
			parts.append(f"  <uml_plantuml><![CDATA[\n{self.uml_plantuml}\n]]></uml_plantuml>")
		if self.imports:
			parts.append("  <imports>")
			for fact in self.imports:
				internal = "true" if fact.is_internal else "false"
				parts.append(
					f"    <import file={quoteattr(fact.source_file)} language={quoteattr(fact.language or '')} internal=\"{internal}\">"
				)
				parts.append(f"      <raw><![CDATA[{fact.raw_specifier}]]></raw>")
				if (fact.resolved_internal_path or "").strip():
					parts.append(f"      <resolved_path><![CDATA[{fact.resolved_internal_path}]]></resolved_path>")
				parts.append("    </import>")
			parts.append("  </imports>")
		if self.external_dependencies:
			parts.append("  <external_dependencies>")
			for name in sorted(self.external_dependencies):
				count = self.external_dependencies[name]
				parts.append(f"    <dependency name={quoteattr(name)} count=\"{count}\"/>")
			parts.append("  </external_dependencies>")
		if self.warnings:
			parts.append("  <warnings>")
			for w in self.warnings:
				parts.append(f"    <warning><![CDATA[{w}]]></warning>")
			parts.append("  </warnings>")
		parts.append("</architecture>")
		return "\n".join(parts)
