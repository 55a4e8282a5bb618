import json

import pytest

from analyzer.errors import FactsFileError
from analyzer.import_graph import count_externals, load_import_facts, render_import_graph
from analyzer.model import ImportFact


def fact(src, raw, internal=False, resolved=None):
	return ImportFact(source_file=src, raw_specifier=raw, is_internal=internal, resolved_internal_path=resolved)


def test_count_externals():
	imports = [fact("a.ts", "react"), fact("b.ts", "react"), fact("b.ts", "./c", True, "c.ts")]
	assert count_externals(imports) == {"react": 2}


def test_render_import_graph_groups_by_source():
	imports = [
		fact("src/b.ts", "lodash"),
		fact("src/a.ts", "react"),
		fact("src/a.ts", "react"),
		fact("src/a.ts", "./b", True, "src/b.ts"),
		fact("src/a.ts", "./missing", True),
	]
	assert render_import_graph(imports).splitlines() == [
		"src/a.ts",
		"  └─> ./missing (internal)",
		"  └─> src/b.ts (internal)",
		"  └─> react (external)",
		"src/b.ts",
		"  └─> lodash (external)",
	]


def test_load_import_facts_accepts_wire_names(tmp_path):
	path = tmp_path / "facts.json"
	path.write_text(
		json.dumps(
			{
				"imports": [
					{"file": "src/a.ts", "raw": "./b", "isInternal": True, "resolvedPath": "src/b.ts"},
					{"source_file": "src/a.ts", "raw_specifier": "react"},
				]
			}
		)
	)
	facts = load_import_facts(str(path))
	assert facts[0].resolved_internal_path == "src/b.ts"
	assert facts[0].is_internal
	assert facts[1].raw_specifier == "react"
	assert not facts[1].is_internal


def test_load_import_facts_errors(tmp_path):
	bad = tmp_path / "bad.json"
	bad.write_text("[{\"file\": 1")
	with pytest.raises(FactsFileError):
		load_import_facts(str(bad))
	with pytest.raises(FactsFileError):
		load_import_facts(str(tmp_path / "missing.json"))
	wrong = tmp_path / "wrong.json"
	wrong.write_text(json.dumps([{"raw": "x"}]))
	with pytest.raises(FactsFileError):
		load_import_facts(str(wrong))
