"""
Heuristic component detection.

Nothing here is declared by the user: a definition counts as a component
because of its name (capitalized), its shape (function, arrow, wrapper call)
or, as a last resort, because the module renders it somewhere.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pulse_refresh.nodes import (
	Arrow,
	Call,
	ClassDecl,
	Declarator,
	ExprNode,
	Function,
	FunctionDecl,
	Identifier,
	JsxElement,
	Member,
	Node,
	Raw,
	RawStmt,
	source_text,
)
from pulse_refresh.scope import Binding, ScopeIndex
from pulse_refresh.traverse import NodePath

logger = logging.getLogger(__name__)

# Functions whose first argument is an element type
ELEMENT_FACTORIES = frozenset({"createElement", "jsx", "jsxDEV", "jsxs"})

# (persistent_id, target, target_path). target_path is None when the definition
# lives elsewhere and must not be rewritten here.
OnFound = Callable[[str, Node, NodePath | None], None]


def is_componentish_name(name: str | None) -> bool:
	return name is not None and name != "" and "A" <= name[0] <= "Z"


def find_inner_components(
	inferred_name: str,
	path: NodePath,
	scopes: ScopeIndex,
	on_found: OnFound,
) -> bool:
	"""Report every component definition found at `path`.

	Wrapper calls are unwrapped through their first argument, each layer
	extending the persistent ID with `$<callee>`; definitions are reported
	innermost first, then each enclosing wrapper call. Returns whether
	anything was found.
	"""
	node = path.node

	if isinstance(node, Identifier):
		if not is_componentish_name(node.name):
			return False
		# export default hoc(Foo)
		# const X = hoc(Foo)
		on_found(inferred_name, node, None)
		return True

	if isinstance(node, FunctionDecl):
		# function Foo() {}
		# export function Foo() {}
		# export default function Foo() {}
		if node.name is None:
			return False
		on_found(inferred_name, node.name, None)
		return True

	if isinstance(node, Arrow):
		if isinstance(node.body, Arrow):
			return False
		# let Foo = () => {}
		# export default hoc1(hoc2(() => {}))
		on_found(inferred_name, node, path)
		return True

	if isinstance(node, Function):
		# let Foo = function() {}
		# const Foo = hoc1(forwardRef(function renderFoo() {}))
		# export default memo(function() {})
		on_found(inferred_name, node, path)
		return True

	if isinstance(node, Call):
		return _find_in_wrapper(inferred_name, path, node, scopes, on_found)

	if isinstance(node, Declarator):
		return _find_in_declarator(inferred_name, path, node, scopes, on_found)

	return False


def _find_in_wrapper(
	inferred_name: str,
	path: NodePath,
	node: Call,
	scopes: ScopeIndex,
	on_found: OnFound,
) -> bool:
	args = path.get("args")
	if not isinstance(args, list) or not args:
		return False
	callee = node.callee
	if not isinstance(callee, (Identifier, Member)):
		return False
	inner_name = f"{inferred_name}${source_text(callee)}"
	if not find_inner_components(inner_name, args[0], scopes, on_found):
		return False
	# const Foo = hoc1(hoc2(() => {}))
	# export default memo(React.forwardRef(function() {}))
	on_found(inferred_name, node, path)
	return True


def _find_in_declarator(
	inferred_name: str,
	path: NodePath,
	node: Declarator,
	scopes: ScopeIndex,
	on_found: OnFound,
) -> bool:
	init = node.init
	if init is None:
		return False
	if not isinstance(node.id, Identifier) or not is_componentish_name(node.id.name):
		return False
	if isinstance(init, (Identifier, Member)):
		return False
	init_path = path.get("init")
	assert isinstance(init_path, NodePath)
	if find_inner_components(inferred_name, init_path, scopes, on_found):
		return True
	# See if this identifier is used as an element type. Then it's a component.
	binding = scopes.binding_for(node)
	if binding is None:
		return False
	if is_likely_used_as_type(binding):
		# const X = styled(...); ... <X />
		logger.debug("%s is rendered in this module, treating it as a component", node.id.name)
		on_found(inferred_name, init, init_path)
		return True
	return False


def is_likely_used_as_type(binding: Binding) -> bool:
	"""Whether any read of the binding is used as an element type.

	Either as a JSX tag (<X />) or as the first argument of an element
	factory call (createElement(X), React.createElement(X), jsx(X, ...)).
	The first qualifying reference decides; later ones are not inspected.
	"""
	for ref in binding.references:
		parent = ref.parent
		if isinstance(parent, JsxElement) and ref.field == "tag":
			return True
		if isinstance(parent, (Raw, RawStmt, ClassDecl)):
			# verbatim code only records element-type uses
			return True
		if (
			isinstance(parent, Call)
			and ref.field == "args"
			and ref.index == 0
			and element_factory_name(parent.callee) in ELEMENT_FACTORIES
		):
			return True
	return False


def element_factory_name(callee: ExprNode) -> str | None:
	"""Last path segment of a callee: createElement, React.createElement -> createElement."""
	if isinstance(callee, Identifier):
		return callee.name
	if isinstance(callee, Member):
		return callee.prop
	return None
