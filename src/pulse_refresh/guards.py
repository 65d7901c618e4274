from __future__ import annotations

from dataclasses import dataclass, field

from pulse_refresh.nodes import Node


class NodeSet:
	"""Set of nodes keyed by identity.

	Members are held strongly, so an id() can't be recycled by a new node
	while the set is alive.
	"""

	__slots__: tuple[str, ...] = ("_nodes",)

	_nodes: dict[int, Node]

	def __init__(self) -> None:
		self._nodes = {}

	def add(self, node: Node) -> bool:
		"""Add a node. Returns False if it was already present."""
		key = id(node)
		if key in self._nodes:
			return False
		self._nodes[key] = node
		return True


@dataclass(slots=True)
class Guards:
	"""Nodes already handled by each mutating step of the refresh pass."""

	registration: NodeSet = field(default_factory=NodeSet)
	signature: NodeSet = field(default_factory=NodeSet)
	hook_calls: NodeSet = field(default_factory=NodeSet)
	outro: NodeSet = field(default_factory=NodeSet)
