"""
Lexical scopes and bindings for a module tree.

analyze() resolves every read of an identifier to its declaration so the
component detector can ask how a name is used elsewhere in the module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from pulse_refresh.nodes import (
	Arrow,
	Assign,
	Block,
	ClassDecl,
	Declarator,
	Function,
	FunctionDecl,
	Identifier,
	ImportDecl,
	JsxElement,
	Loop,
	Node,
	Pattern,
	Program,
	Property,
	Raw,
	RawStmt,
	Try,
	Update,
	VarDecl,
	iter_children,
)

logger = logging.getLogger(__name__)

BindingKind = Literal["var", "let", "const", "function", "param", "import", "class", "catch"]
ScopeKind = Literal["program", "function", "block"]


@dataclass(slots=True, eq=False)
class Reference:
	"""A read of a binding: `node` sits in `parent.<field>[index]`."""

	node: Identifier
	parent: Node
	field: str
	index: int | None = None


@dataclass(slots=True, eq=False)
class Binding:
	name: str
	kind: BindingKind
	node: Node
	scope: Scope
	references: list[Reference] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class Scope:
	kind: ScopeKind
	node: Node
	parent: Scope | None = None
	bindings: dict[str, Binding] = field(default_factory=dict)

	def get_binding(self, name: str) -> Binding | None:
		scope: Scope | None = self
		while scope is not None:
			binding = scope.bindings.get(name)
			if binding is not None:
				return binding
			scope = scope.parent
		return None

	def function_scope(self) -> Scope:
		"""Nearest function or program scope (where `var` lands)."""
		scope = self
		while scope.kind == "block" and scope.parent is not None:
			scope = scope.parent
		return scope

	def declare(self, name: str, kind: BindingKind, node: Node) -> Binding:
		existing = self.bindings.get(name)
		if existing is not None:
			# var redeclarations and function overloads keep the first site
			return existing
		binding = Binding(name, kind, node, self)
		self.bindings[name] = binding
		return binding


class ScopeIndex:
	"""Binding index for one module.

	Scopes are looked up by the node that owns them; bindings by the node
	that declares them.
	"""

	program: Program
	root: Scope
	used_names: set[str]
	_scopes: dict[int, Scope]
	_declared: dict[int, Binding]
	_uids: set[str]

	def __init__(self, program: Program) -> None:
		self.program = program
		self.root = Scope("program", program)
		self.used_names = set()
		self._scopes = {id(program): self.root}
		self._declared = {}
		self._uids = set()

	def scope_of(self, node: Node) -> Scope | None:
		"""Scope owned by a program, function or block node."""
		return self._scopes.get(id(node))

	def binding_for(self, node: Node) -> Binding | None:
		"""Binding introduced by a Declarator or FunctionDecl."""
		return self._declared.get(id(node))

	def add_scope(self, node: Node, scope: Scope) -> None:
		self._scopes[id(node)] = scope

	def add_declaration(self, node: Node, binding: Binding) -> None:
		self._declared[id(node)] = binding

	def generate_uid(self, name: str = "temp") -> Identifier:
		"""Fresh identifier: _name, _name2, _name3, ...

		Never collides with a name used anywhere in the module.
		"""
		base = name.lstrip("_") or "temp"
		i = 1
		while True:
			uid = f"_{base}" if i == 1 else f"_{base}{i}"
			if uid not in self.used_names and uid not in self._uids:
				self._uids.add(uid)
				return Identifier(uid)
			i += 1


def analyze(program: Program) -> ScopeIndex:
	"""Build the binding index of a module tree."""
	index = ScopeIndex(program)
	_Declarations(index).visit(program, index.root)
	_References(index).visit(program, index.root, None, "", None)
	logger.debug(
		"Resolved %d module-level bindings", len(index.root.bindings)
	)
	return index


def _is_function(node: Node) -> bool:
	return isinstance(node, (Function, Arrow, FunctionDecl))


class _Declarations:
	"""First pass: create scopes and declare every binding (hoisting included)."""

	def __init__(self, index: ScopeIndex) -> None:
		self.index = index

	def visit(self, node: Node, scope: Scope) -> None:
		index = self.index
		if isinstance(node, Identifier):
			index.used_names.add(node.name)
			return
		if isinstance(node, Pattern):
			index.used_names.update(node.names)
			return
		if isinstance(node, ImportDecl):
			for name in node.names:
				index.used_names.add(name)
				scope.declare(name, "import", node)
			return
		if isinstance(node, (Raw, RawStmt)):
			index.used_names.update(node.names)
			return
		if isinstance(node, ClassDecl):
			index.used_names.update(node.names)
			if node.name:
				index.used_names.add(node.name)
				scope.declare(node.name, "class", node)
			return
		if isinstance(node, Loop):
			index.used_names.update(node.names)
		if isinstance(node, VarDecl):
			target = scope.function_scope() if node.kind == "var" else scope
			for decl in node.declarations:
				for name in _target_names(decl.id):
					binding = target.declare(name, node.kind, decl)
					if isinstance(decl.id, Identifier):
						index.add_declaration(decl, binding)
			for decl in node.declarations:
				self.visit(decl, scope)
			return
		if _is_function(node):
			self.visit_function(node, scope)  # pyright: ignore[reportArgumentType]
			return
		if isinstance(node, Try):
			self.visit(node.block, scope)
			if node.handler is not None:
				handler_scope = Scope("block", node.handler, scope)
				index.add_scope(node.handler, handler_scope)
				if node.param is not None:
					for name in _target_names(node.param):
						index.used_names.add(name)
						handler_scope.declare(name, "catch", node)
				for stmt in node.handler.body:
					self.visit(stmt, handler_scope)
			if node.finalizer is not None:
				self.visit(node.finalizer, scope)
			return
		if isinstance(node, Block):
			block_scope = Scope("block", node, scope)
			index.add_scope(node, block_scope)
			for stmt in node.body:
				self.visit(stmt, block_scope)
			return
		for _, _, child in iter_children(node):
			self.visit(child, scope)

	def visit_function(self, node: Function | Arrow | FunctionDecl, scope: Scope) -> None:
		index = self.index
		if isinstance(node, FunctionDecl) and node.name is not None:
			index.used_names.add(node.name.name)
			binding = scope.declare(node.name.name, "function", node)
			index.add_declaration(node, binding)
		fn_scope = Scope("function", node, scope)
		index.add_scope(node, fn_scope)
		if isinstance(node, Function) and node.name is not None:
			index.used_names.add(node.name.name)
			fn_scope.declare(node.name.name, "function", node)
		for param in node.params:
			for name in _target_names(param):
				index.used_names.add(name)
				fn_scope.declare(name, "param", node)
		body = node.body
		if isinstance(body, Block):
			# The body block shares the function scope.
			index.add_scope(body, fn_scope)
			for stmt in body.body:
				self.visit(stmt, fn_scope)
		else:
			self.visit(body, fn_scope)


class _References:
	"""Second pass: attach every identifier read to its binding."""

	def __init__(self, index: ScopeIndex) -> None:
		self.index = index

	def visit(
		self,
		node: Node,
		scope: Scope,
		parent: Node | None,
		field_name: str,
		position: int | None,
	) -> None:
		if isinstance(node, Identifier):
			if parent is not None and _is_read(node, parent, field_name):
				binding = scope.get_binding(node.name)
				if binding is not None:
					binding.references.append(Reference(node, parent, field_name, position))
			return
		if isinstance(node, (Raw, RawStmt, ClassDecl)):
			# Verbatim code only exposes the names it renders as elements.
			for name in node.element_types:
				binding = scope.get_binding(name)
				if binding is not None:
					binding.references.append(Reference(Identifier(name), node, "text"))
			return
		inner = self.index.scope_of(node)
		if inner is not None:
			scope = inner
		for name, i, child in iter_children(node):
			self.visit(child, scope, node, name, i)


def _target_names(target: Identifier | Pattern) -> list[str]:
	if isinstance(target, Identifier):
		return [target.name]
	return list(target.names)


def _is_read(node: Identifier, parent: Node, field_name: str) -> bool:
	"""Whether an identifier in this position reads a binding."""
	if isinstance(parent, Declarator) and field_name == "id":
		return False
	if isinstance(parent, (Function, FunctionDecl)) and field_name in ("name", "params"):
		return False
	if isinstance(parent, Arrow) and field_name == "params":
		return False
	if isinstance(parent, Try) and field_name == "param":
		return False
	if isinstance(parent, Property) and field_name == "key":
		return parent.computed
	if isinstance(parent, Assign) and field_name == "target":
		return False
	if isinstance(parent, Update):
		return False
	if isinstance(parent, JsxElement) and field_name == "tag":
		# <div /> is an intrinsic element, <Foo /> reads Foo
		first = node.name[:1]
		return not (first.islower() or "-" in node.name)
	return True
