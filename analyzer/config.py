from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel

from .model import DEFAULT_MAX_NODES, DiagramOptions

# Load .env from the working directory
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
	raw = os.getenv(name, "").strip()
	try:
		value = int(raw)
	except ValueError:
		return default
	return value if value > 0 else default


class Settings(BaseModel):
	uml_formats: str = "ascii,plantuml"
	granularity: str = "module"
	max_nodes: int = DEFAULT_MAX_NODES
	include_io: bool = True
	include_endpoints: bool = True
	tree_depth: int = 6
	max_file_bytes: int = 1_500_000
	max_analyze_bytes: int = 200_000
	log_level: str = "WARNING"

	def diagram_options(self) -> DiagramOptions:
		return DiagramOptions(
			granularity=self.granularity,
			max_nodes=self.max_nodes,
			include_io=self.include_io,
			include_endpoints=self.include_endpoints,
		)


def load_settings() -> Settings:
	return Settings(
		uml_formats=os.getenv("ARCHVIZ_UML", "ascii,plantuml"),
		granularity=os.getenv("ARCHVIZ_GRANULARITY", "module"),
		max_nodes=_env_int("ARCHVIZ_MAX_NODES", DEFAULT_MAX_NODES),
		include_io=_env_bool("ARCHVIZ_INCLUDE_IO", True),
		include_endpoints=_env_bool("ARCHVIZ_INCLUDE_ENDPOINTS", True),
		tree_depth=_env_int("ARCHVIZ_TREE_DEPTH", 6),
		max_file_bytes=_env_int("ARCHVIZ_MAX_FILE_BYTES", 1_500_000),
		max_analyze_bytes=_env_int("ARCHVIZ_MAX_ANALYZE_BYTES", 200_000),
		log_level=os.getenv("ARCHVIZ_LOG_LEVEL", "WARNING").upper(),
	)
