from analyzer.dirtree import build_directory_tree


def test_tree_lists_directories_before_files():
	tree = build_directory_tree("proj", ["src/a.py", "README.md", "src/pkg/b.py"], 6)
	assert tree.splitlines() == [
		"proj",
		"├── src",
		"│   ├── pkg",
		"│   │   └── b.py",
		"│   └── a.py",
		"└── README.md",
	]


def test_tree_depth_limit():
	tree = build_directory_tree("proj", ["src/a.py", "README.md"], 1)
	assert tree.splitlines() == ["proj", "├── src", "└── README.md"]


def test_tree_defaults():
	assert build_directory_tree("  ", [], 0) == "."
	assert build_directory_tree("x", ["", "/"], 3) == "x"
