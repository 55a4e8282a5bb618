from __future__ import annotations


class AnalyzerError(Exception):
	"""Base class for errors raised at the analyzer's I/O-facing edges."""


class InvalidRootError(AnalyzerError):
	def __init__(self, root: str):
		super().__init__(f"Invalid root_path: {root}")
		self.root = root


class FactsFileError(AnalyzerError):
	def __init__(self, path: str, reason: str):
		super().__init__(f"Cannot load facts from {path}: {reason}")
		self.path = path
		self.reason = reason


class RequestFileError(AnalyzerError):
	def __init__(self, path: str, reason: str):
		super().__init__(f"Cannot load diagram request from {path}: {reason}")
		self.path = path
		self.reason = reason
