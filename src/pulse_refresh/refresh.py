"""
Fast-refresh instrumentation pass.

Rewrites a module tree so a hot-reload runtime can track its components:

	const Foo = () => { useState(0); };
	export default memo(() => null);

becomes

	const Foo = () => { useState(0); };
	__signature__(Foo, "useState{}");
	_c = Foo;
	export default _c3 = memo(_c2 = () => null);
	var _c, _c2, _c3;
	__register__(_c, "Foo");
	__register__(_c2, "%default%$memo");
	__register__(_c3, "%default%");

Running the pass again over the same tree changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pulse_refresh.detect import find_inner_components, is_componentish_name
from pulse_refresh.guards import Guards
from pulse_refresh.hooks import HookCall, HookCallRecorder, HookSignature, hook_name
from pulse_refresh.nodes import (
	Array,
	Arrow,
	Assign,
	Call,
	Declarator,
	ExportDefault,
	ExportNamed,
	ExprNode,
	ExprStmt,
	Function,
	FunctionDecl,
	Identifier,
	Literal,
	Node,
	Program,
	VarDecl,
	clone,
	emit,
	source_text,
)
from pulse_refresh.parser import parse
from pulse_refresh.scope import ScopeIndex, analyze
from pulse_refresh.traverse import NodePath, Visitor, traverse

logger = logging.getLogger(__name__)

REGISTER = "__register__"
SIGNATURE = "__signature__"
DEFAULT_EXPORT_ID = "%default%"

_STATE_KEY = "pulse_refresh"


@dataclass(slots=True)
class Registration:
	"""A component to register: `__register__(handle, persistent_id)`."""

	handle: Identifier
	persistent_id: str


@dataclass(slots=True)
class SignatureSite:
	"""A signature attached by the pass. `name` is None for inline functions."""

	name: str | None
	signature: HookSignature


@dataclass(slots=True, eq=False)
class ModuleState:
	"""Bookkeeping of the refresh pass for one module.

	Stored on the Program node, so re-running the pass on the same tree
	reuses its guards while every other module starts clean.
	"""

	scopes: ScopeIndex
	guards: Guards = field(default_factory=Guards)
	hooks: HookCallRecorder = field(default_factory=HookCallRecorder)
	pending: list[Registration] = field(default_factory=list)


@dataclass(slots=True)
class RefreshResult:
	program: Program
	registrations: list[Registration]
	signatures: list[SignatureSite]

	@property
	def code(self) -> str:
		return emit(self.program)

	@property
	def changed(self) -> bool:
		return bool(self.registrations or self.signatures)


class RefreshVisitor(Visitor):
	"""Visitor applying the registration and signature rewrites."""

	state: ModuleState
	registrations: list[Registration]
	signatures: list[SignatureSite]

	def __init__(self, state: ModuleState) -> None:
		self.state = state
		self.registrations = []
		self.signatures = []

	# --- Registration -------------------------------------------------------

	def create_registration(self, persistent_id: str) -> Identifier:
		handle = self.state.scopes.generate_uid("c")
		registration = Registration(handle, persistent_id)
		self.state.pending.append(registration)
		self.registrations.append(registration)
		logger.debug("Registering %s as %s", persistent_id, handle.name)
		return Identifier(handle.name)

	def enter_ExportDefault(self, path: NodePath) -> None:
		node = path.node
		assert isinstance(node, ExportDefault)
		if not isinstance(node.declaration, Call):
			# Only possible HOC calls are handled here. Named function
			# declarations go through enter_FunctionDecl and anonymous
			# `export default function() {}` is left alone.
			return

		# Make sure we're not mutating the same tree twice.
		if not self.state.guards.registration.add(node):
			return

		decl_path = path.get("declaration")
		assert isinstance(decl_path, NodePath)

		# export default memo(() => {})
		# export default memo(function Named() {})
		def on_found(persistent_id: str, target: Node, target_path: NodePath | None) -> None:
			if target_path is None:
				# export default hoc(Foo): Foo is registered where it's defined
				return
			assert isinstance(target, ExprNode)
			handle = self.create_registration(persistent_id)
			target_path.replace_with(Assign(handle, target))

		find_inner_components(DEFAULT_EXPORT_ID, decl_path, self.state.scopes, on_found)

	def enter_FunctionDecl(self, path: NodePath) -> None:
		node = path.node
		assert isinstance(node, FunctionDecl)
		insert_after_path = _module_statement(path)
		if insert_after_path is None:
			return
		if node.name is None:
			return
		inferred_name = node.name.name
		if not is_componentish_name(inferred_name):
			return

		if not self.state.guards.registration.add(node):
			return

		# function Named() {}
		# export function Named() {}
		def on_found(persistent_id: str, target: Node, target_path: NodePath | None) -> None:
			assert isinstance(target, Identifier)
			handle = self.create_registration(persistent_id)
			insert_after_path.insert_after(
				ExprStmt(Assign(handle, Identifier(target.name)))
			)

		find_inner_components(inferred_name, path, self.state.scopes, on_found)

	def enter_VarDecl(self, path: NodePath) -> None:
		node = path.node
		assert isinstance(node, VarDecl)
		insert_after_path = _module_statement(path)
		if insert_after_path is None:
			return

		if not self.state.guards.registration.add(node):
			return

		decl_paths = path.get("declarations")
		if not isinstance(decl_paths, list) or len(decl_paths) != 1:
			return
		decl_path = decl_paths[0]
		decl = decl_path.node
		assert isinstance(decl, Declarator)
		if not isinstance(decl.id, Identifier):
			return
		name = decl.id.name

		def on_found(persistent_id: str, target: Node, target_path: NodePath | None) -> None:
			if target_path is None:
				# export const Something = hoc(Foo)
				return
			assert isinstance(target, ExprNode)
			handle = self.create_registration(persistent_id)
			if isinstance(target, (Arrow, Function)) and isinstance(
				target_path.parent, Declarator
			):
				# let Foo = () => {}  ->  let Foo = () => {}; _c = Foo;
				# Registering on the next line keeps the inferred function name.
				insert_after_path.insert_after(ExprStmt(Assign(handle, Identifier(name))))
			else:
				# let Foo = hoc(() => {})  ->  let Foo = _c2 = hoc(_c = () => {})
				target_path.replace_with(Assign(handle, target))

		find_inner_components(name, decl_path, self.state.scopes, on_found)

	# --- Hook calls ---------------------------------------------------------

	def enter_Call(self, path: NodePath) -> None:
		node = path.node
		assert isinstance(node, Call)
		name = hook_name(node.callee)
		if name is None:
			return

		if not self.state.guards.hook_calls.add(node):
			return

		fn_path = path.function_parent()
		if fn_path is None:
			return
		key = ""
		parent = path.parent
		if isinstance(parent, Declarator) and path.field == "init":
			key = source_text(parent.id)
		self.state.hooks.record(fn_path.node, HookCall(name, node.callee, key))

	# --- Signatures ---------------------------------------------------------

	def exit_FunctionDecl(self, path: NodePath) -> None:
		node = path.node
		assert isinstance(node, FunctionDecl)
		if node.name is None:
			return
		signature = self.state.hooks.signature(node)
		if signature is None:
			return

		if not self.state.guards.signature.add(node):
			return

		# Unlike registration this applies to nested declarations too.
		insert_after_path = path.statement_parent()
		if insert_after_path is None:
			return
		insert_after_path.insert_after(
			ExprStmt(_signature_call(Identifier(node.name.name), signature))
		)
		self.signatures.append(SignatureSite(node.name.name, signature))

	def exit_Arrow(self, path: NodePath) -> None:
		self._sign_function_expression(path)

	def exit_Function(self, path: NodePath) -> None:
		self._sign_function_expression(path)

	def _sign_function_expression(self, path: NodePath) -> None:
		node = path.node
		signature = self.state.hooks.signature(node)
		if signature is None:
			return

		if not self.state.guards.signature.add(node):
			return

		parent = path.parent
		if isinstance(parent, Declarator):
			insert_after_path = path.statement_parent()
			if insert_after_path is None:
				return
			# let Foo = () => {}  ->  let Foo = () => {}; __signature__(Foo, ...);
			# Signing on the next line keeps the inferred function name.
			target = clone(parent.id)
			assert isinstance(target, ExprNode)
			insert_after_path.insert_after(ExprStmt(_signature_call(target, signature)))
			self.signatures.append(SignatureSite(source_text(parent.id), signature))
		else:
			# let Foo = hoc(() => {})  ->  let Foo = hoc(__signature__(() => {}, ...))
			assert isinstance(node, ExprNode)
			path.replace_with(_signature_call(node, signature))
			self.signatures.append(SignatureSite(None, signature))

	# --- Module epilogue ----------------------------------------------------

	def exit_Program(self, path: NodePath) -> None:
		node = path.node
		assert isinstance(node, Program)
		registrations = self.state.pending
		if not registrations:
			return

		if not self.state.guards.outro.add(node):
			return

		self.state.pending = []
		node.body.append(
			VarDecl("var", [Declarator(Identifier(r.handle.name)) for r in registrations])
		)
		for r in registrations:
			node.body.append(
				ExprStmt(
					Call(
						Identifier(REGISTER),
						[Identifier(r.handle.name), Literal(r.persistent_id)],
					)
				)
			)
		logger.debug("Appended %d registrations", len(registrations))


def _module_statement(path: NodePath) -> NodePath | None:
	"""Statement to insert after for a module-level declaration, else None."""
	parent = path.parent
	if isinstance(parent, Program):
		return path
	if isinstance(parent, (ExportNamed, ExportDefault)):
		export_path = path.parent_path
		if export_path is not None and isinstance(export_path.parent, Program):
			return export_path
	return None


def _signature_call(target: ExprNode, signature: HookSignature) -> Call:
	"""__signature__(target, "key"[, () => [customHooks]])"""
	args: list[ExprNode] = [target, Literal(signature.key)]
	if signature.custom_hooks:
		hooks: list[ExprNode] = []
		for callee in signature.custom_hooks:
			copied = clone(callee)
			assert isinstance(copied, ExprNode)
			hooks.append(copied)
		args.append(Arrow([], Array(hooks)))
	return Call(Identifier(SIGNATURE), args)


def module_state(program: Program) -> ModuleState:
	"""Refresh bookkeeping of a module, created on first use."""
	state = program.meta.get(_STATE_KEY)
	if not isinstance(state, ModuleState):
		state = ModuleState(analyze(program))
		program.meta[_STATE_KEY] = state
	return state


def transform(program: Program) -> RefreshResult:
	"""Instrument a module tree in place."""
	state = module_state(program)
	visitor = RefreshVisitor(state)
	traverse(program, visitor)
	logger.debug(
		"Refresh pass: %d registrations, %d signatures",
		len(visitor.registrations),
		len(visitor.signatures),
	)
	return RefreshResult(program, visitor.registrations, visitor.signatures)


def refresh_source(source: str) -> RefreshResult:
	"""Parse, instrument and return the result (see RefreshResult.code)."""
	return transform(parse(source))
