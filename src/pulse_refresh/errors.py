from __future__ import annotations


class RefreshError(Exception):
	"""Base class for errors raised around the refresh pass."""


class ParseError(RefreshError):
	"""Source could not be parsed into a module tree."""

	line: int
	column: int

	def __init__(self, message: str, *, line: int, column: int) -> None:
		super().__init__(f"{message} (line {line}, column {column})")
		self.line = line
		self.column = column
