from analyzer.config import load_settings
from analyzer.model import Granularity


def test_settings_from_environment(monkeypatch):
	monkeypatch.setenv("ARCHVIZ_GRANULARITY", "package")
	monkeypatch.setenv("ARCHVIZ_MAX_NODES", "-5")
	monkeypatch.setenv("ARCHVIZ_INCLUDE_IO", "no")
	monkeypatch.setenv("ARCHVIZ_TREE_DEPTH", "three")
	monkeypatch.setenv("ARCHVIZ_LOG_LEVEL", "debug")
	settings = load_settings()
	assert settings.max_nodes == 120
	assert settings.include_io is False
	assert settings.include_endpoints is True
	assert settings.tree_depth == 6
	assert settings.log_level == "DEBUG"
	opts = settings.diagram_options()
	assert opts.granularity is Granularity.PACKAGE
	assert opts.include_io is False


def test_settings_defaults(monkeypatch):
	for name in ("ARCHVIZ_UML", "ARCHVIZ_GRANULARITY", "ARCHVIZ_MAX_NODES", "ARCHVIZ_INCLUDE_IO"):
		monkeypatch.delenv(name, raising=False)
	settings = load_settings()
	assert settings.uml_formats == "ascii,plantuml"
	assert settings.diagram_options().granularity is Granularity.MODULE
