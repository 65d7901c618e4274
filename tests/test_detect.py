"""
Tests for component detection: name heuristic, wrapper unwrapping and
reference-based classification.
"""

import pytest
from pulse_refresh.detect import (
	element_factory_name,
	find_inner_components,
	is_componentish_name,
	is_likely_used_as_type,
)
from pulse_refresh.nodes import Identifier, Member, emit
from pulse_refresh.parser import parse
from pulse_refresh.scope import analyze
from pulse_refresh.traverse import NodePath


def _found(source: str, name: str | None = None) -> list[tuple[str, str, bool]]:
	"""Run the detector on the first statement of `source`.

	Returns (persistent_id, target type, has_path) per callback, in order.
	"""
	program = parse(source)
	scopes = analyze(program)
	stmt_paths = NodePath(program).get("body")
	assert isinstance(stmt_paths, list)
	stmt_path = stmt_paths[0]
	found: list[tuple[str, str, bool]] = []

	def on_found(persistent_id, target, target_path):
		found.append((persistent_id, type(target).__name__, target_path is not None))

	decls = stmt_path.get("declarations") if hasattr(stmt_path.node, "declarations") else None
	if isinstance(decls, list):
		path = decls[0]
		inferred = emit(path.node.id)
	elif hasattr(stmt_path.node, "declaration"):
		path = stmt_path.get("declaration")
		assert isinstance(path, NodePath)
		inferred = name or "%default%"
	else:
		path = stmt_path
		inferred = name or ""
	find_inner_components(inferred, path, scopes, on_found)
	return found


# =============================================================================
# Name heuristic
# =============================================================================


class TestComponentishName:
	@pytest.mark.parametrize("name", ["Foo", "App", "X", "ZComponent"])
	def test_capitalized(self, name: str):
		assert is_componentish_name(name)

	@pytest.mark.parametrize("name", ["foo", "_Foo", "$Foo", "", "useFoo", "élan"])
	def test_not_capitalized(self, name: str):
		assert not is_componentish_name(name)

	def test_none(self):
		assert not is_componentish_name(None)


# =============================================================================
# Shapes
# =============================================================================


class TestShapes:
	def test_arrow(self):
		assert _found("const Foo = () => null;") == [("Foo", "Arrow", True)]

	def test_function_expression(self):
		assert _found("let Foo = function() {};") == [("Foo", "Function", True)]

	def test_lowercase_declarator(self):
		assert _found("const foo = () => null;") == []

	def test_arrow_chain_is_not_a_component(self):
		assert _found("const Foo = () => () => null;") == []

	def test_alias_is_not_a_component(self):
		assert _found("const Foo = Bar;") == []
		assert _found("const Foo = UI.Bar;") == []

	def test_no_init(self):
		assert _found("let Foo;") == []

	def test_function_declaration(self):
		assert _found("function Foo() {}", "Foo") == [("Foo", "Identifier", False)]

	def test_plain_value(self):
		assert _found("const Foo = 42;") == []


# =============================================================================
# Wrapper calls
# =============================================================================


class TestWrappers:
	def test_single_wrapper(self):
		assert _found("const Foo = memo(() => null);") == [
			("Foo$memo", "Arrow", True),
			("Foo", "Call", True),
		]

	def test_nested_wrappers_innermost_first(self):
		assert _found("const Foo = hoc1(hoc2(() => null));") == [
			("Foo$hoc1$hoc2", "Arrow", True),
			("Foo$hoc1", "Call", True),
			("Foo", "Call", True),
		]

	def test_member_callee(self):
		assert _found("const Foo = React.memo(function() {});") == [
			("Foo$React.memo", "Function", True),
			("Foo", "Call", True),
		]

	def test_wrapped_identifier(self):
		assert _found("export default memo(Foo);") == [
			("%default%$memo", "Identifier", False),
			("%default%", "Call", True),
		]

	def test_wrapped_lowercase_identifier(self):
		assert _found("export default memo(foo);") == []

	def test_no_arguments(self):
		assert _found("const Foo = make();") == []

	def test_computed_callee(self):
		assert _found("const Foo = hocs[0](() => null);") == []

	def test_only_first_argument(self):
		assert _found("const Foo = connect(mapState, () => null);") == []


# =============================================================================
# Reference-based classification
# =============================================================================


class TestUsedAsType:
	def test_rendered_in_jsx(self):
		source = "const Foo = styled.div``;\nconst el = <Foo />;"
		assert _found(source) == [("Foo", "Raw", True)]

	def test_create_element(self):
		source = "const Foo = makeThing();\nReact.createElement(Foo, null);"
		assert _found(source) == [("Foo", "Call", True)]

	@pytest.mark.parametrize("factory", ["jsx", "jsxs", "jsxDEV", "createElement"])
	def test_factories(self, factory: str):
		source = f"const Foo = makeThing();\n{factory}(Foo, {{}});"
		assert _found(source) == [("Foo", "Call", True)]

	def test_factory_non_tag_argument(self):
		source = "const Foo = makeThing();\ncreateElement(Bar, { as: Foo });\ncreateElement(Bar, Foo);"
		assert _found(source) == []

	def test_rendered_in_class_body(self):
		source = "const Foo = makeThing();\nclass A { render() { return <Foo />; } }"
		assert _found(source) == [("Foo", "Call", True)]

	def test_created_in_switch(self):
		source = "const Foo = makeThing();\nswitch (x) { default: jsx(Foo, {}); }"
		assert _found(source) == [("Foo", "Call", True)]

	def test_not_rendered(self):
		source = "const Foo = makeThing();\nconsole.log(Foo);"
		assert _found(source) == []

	def test_binding_lookup(self):
		program = parse("const Foo = x;\nconst a = <Foo />;")
		scopes = analyze(program)
		binding = scopes.root.get_binding("Foo")
		assert binding is not None
		assert is_likely_used_as_type(binding)


class TestElementFactoryName:
	def test_identifier(self):
		assert element_factory_name(Identifier("jsx")) == "jsx"

	def test_member(self):
		assert element_factory_name(Member(Identifier("React"), "createElement")) == "createElement"
