"""
Depth-first traversal with mutable paths.

A NodePath knows where its node lives in the parent (field + list index), so
visitors can replace a node or insert statements after it while the walk is
in progress.
"""

from __future__ import annotations

from collections.abc import Callable

from pulse_refresh.nodes import (
	FUNCTION_TYPES,
	Block,
	Node,
	Program,
	StmtNode,
)


class NodePath:
	"""Location of a node in the tree: `parent_path.node.<field>[index]`."""

	__slots__: tuple[str, ...] = ("node", "parent_path", "field", "index")

	node: Node
	parent_path: NodePath | None
	field: str | None
	index: int | None

	def __init__(
		self,
		node: Node,
		parent_path: NodePath | None = None,
		field: str | None = None,
		index: int | None = None,
	) -> None:
		self.node = node
		self.parent_path = parent_path
		self.field = field
		self.index = index

	def __repr__(self) -> str:
		return f"NodePath({type(self.node).__name__}, field={self.field!r}, index={self.index!r})"

	@property
	def parent(self) -> Node | None:
		return self.parent_path.node if self.parent_path is not None else None

	def get(self, field: str) -> NodePath | list[NodePath] | None:
		"""Path(s) of a child field of this node."""
		value = getattr(self.node, field)
		if isinstance(value, list):
			return [
				NodePath(child, self, field, i)
				for i, child in enumerate(value)  # pyright: ignore[reportUnknownArgumentType, reportUnknownVariableType]
				if isinstance(child, Node)
			]
		if isinstance(value, Node):
			return NodePath(value, self, field, None)
		return None

	@property
	def in_statement_list(self) -> bool:
		"""True when this node is a statement of a block or of the module body."""
		return isinstance(self.parent, (Block, Program)) and self.index is not None

	def replace_with(self, node: Node) -> None:
		"""Put `node` where this path's node was."""
		parent = self.parent
		if parent is None or self.field is None:
			raise ValueError("Cannot replace the root node")
		if self.index is None:
			setattr(parent, self.field, node)
		else:
			getattr(parent, self.field)[self.index] = node
		self.node = node

	def insert_after(self, stmt: StmtNode) -> None:
		"""Insert a statement right after this one in its statement list."""
		parent = self.parent
		if parent is None or self.field is None or self.index is None:
			raise ValueError(f"Cannot insert after {type(self.node).__name__}: not in a list")
		getattr(parent, self.field).insert(self.index + 1, stmt)

	def find(self, predicate: Callable[[NodePath], bool]) -> NodePath | None:
		"""First path, starting at this one and walking up, matching predicate."""
		path: NodePath | None = self
		while path is not None:
			if predicate(path):
				return path
			path = path.parent_path
		return None

	def function_parent(self) -> NodePath | None:
		"""Nearest enclosing function, arrow or function declaration."""
		path = self.parent_path
		while path is not None:
			if isinstance(path.node, FUNCTION_TYPES):
				return path
			path = path.parent_path
		return None

	def statement_parent(self) -> NodePath | None:
		"""Nearest path (self included) sitting directly in a statement list."""
		return self.find(lambda p: p.in_statement_list)


class Visitor:
	"""Base visitor: define enter_<NodeType>(path) / exit_<NodeType>(path)."""

	def enter(self, path: NodePath) -> None:
		method = getattr(self, f"enter_{type(path.node).__name__}", None)
		if method is not None:
			method(path)

	def exit(self, path: NodePath) -> None:
		method = getattr(self, f"exit_{type(path.node).__name__}", None)
		if method is not None:
			method(path)


def traverse(root: Node, visitor: Visitor) -> None:
	"""Single depth-first pass over `root`.

	- children are read after `enter`, so replacements made on enter are walked
	- lists are walked by index, so statements inserted after the current one
	  are visited too
	- a node replaced on `exit` is not walked again
	"""
	_visit(NodePath(root), visitor)


def _visit(path: NodePath, visitor: Visitor) -> None:
	visitor.enter(path)
	node = path.node
	for name in node._fields:
		value = getattr(node, name)
		if isinstance(value, list):
			i = 0
			while i < len(value):  # pyright: ignore[reportUnknownArgumentType]
				child = value[i]
				if isinstance(child, Node):
					_visit(NodePath(child, path, name, i), visitor)
				i += 1
		elif isinstance(value, Node):
			_visit(NodePath(value, path, name, None), visitor)
	visitor.exit(path)
