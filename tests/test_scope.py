"""
Tests for scope analysis: declarations, references and uid generation.
"""

from pulse_refresh.nodes import ClassDecl, Declarator, FunctionDecl, VarDecl
from pulse_refresh.parser import parse
from pulse_refresh.scope import analyze


def _declarator(program, index: int = 0) -> Declarator:
	stmt = program.body[index]
	assert isinstance(stmt, VarDecl)
	return stmt.declarations[0]


class TestBindings:
	def test_module_bindings(self):
		program = parse(
			'import React from "react";\n'
			+ "const A = 1;\n"
			+ "function B() {}\n"
			+ "class C {}\n"
		)
		index = analyze(program)
		kinds = {name: b.kind for name, b in index.root.bindings.items()}
		assert kinds == {"React": "import", "A": "const", "B": "function", "C": "class"}

	def test_binding_for_declarator(self):
		program = parse("const Foo = styled.div``;\nconst x = <Foo />;")
		index = analyze(program)
		binding = index.binding_for(_declarator(program))
		assert binding is not None
		assert binding.name == "Foo"
		assert len(binding.references) == 1
		assert binding.references[0].field == "tag"

	def test_binding_for_function(self):
		program = parse("function Foo() {}\nFoo();")
		index = analyze(program)
		fn = program.body[0]
		assert isinstance(fn, FunctionDecl)
		binding = index.binding_for(fn)
		assert binding is not None
		assert [r.field for r in binding.references] == ["callee"]

	def test_hoisted_reference(self):
		program = parse("const x = <Foo />;\nfunction Foo() {}")
		index = analyze(program)
		binding = index.root.get_binding("Foo")
		assert binding is not None
		assert len(binding.references) == 1

	def test_shadowing(self):
		program = parse(
			"const Foo = 1;\n"
			+ "function render(Foo) { return <Foo />; }\n"
		)
		index = analyze(program)
		binding = index.binding_for(_declarator(program))
		assert binding is not None
		assert binding.references == []

	def test_intrinsic_tags_are_not_reads(self):
		program = parse("const div = 1;\nconst x = <div />;")
		index = analyze(program)
		binding = index.binding_for(_declarator(program))
		assert binding is not None
		assert binding.references == []

	def test_assignment_target_is_not_a_read(self):
		program = parse("let Foo;\nFoo = 1;\nFoo++;")
		index = analyze(program)
		binding = index.binding_for(_declarator(program))
		assert binding is not None
		assert binding.references == []

	def test_property_keys_are_not_reads(self):
		program = parse("const a = 1;\nconst o = { a: 2 };\nobj.a;")
		index = analyze(program)
		binding = index.binding_for(_declarator(program))
		assert binding is not None
		assert binding.references == []

	def test_var_is_function_scoped(self):
		program = parse("function f() { { var inner = 1; } return inner; }")
		index = analyze(program)
		fn = program.body[0]
		scope = index.scope_of(fn)
		assert scope is not None
		binding = scope.bindings.get("inner")
		assert binding is not None
		assert len(binding.references) == 1

	def test_let_is_block_scoped(self):
		program = parse("function f() { { let inner = 1; } return inner; }")
		index = analyze(program)
		scope = index.scope_of(program.body[0])
		assert scope is not None
		assert "inner" not in scope.bindings

	def test_verbatim_render_is_a_reference(self):
		program = parse("const Foo = x;\nclass A { render() { return <Foo />; } }")
		index = analyze(program)
		binding = index.binding_for(_declarator(program))
		assert binding is not None
		[ref] = binding.references
		assert isinstance(ref.parent, ClassDecl)
		assert ref.node.name == "Foo"


class TestGenerateUid:
	def test_sequence(self):
		index = analyze(parse("foo();"))
		names = [index.generate_uid("c").name for _ in range(3)]
		assert names == ["_c", "_c2", "_c3"]

	def test_avoids_module_names(self):
		index = analyze(parse("const _c = 1;\nfunction f(_c2) {}"))
		assert index.generate_uid("c").name == "_c3"

	def test_avoids_names_in_verbatim_code(self):
		index = analyze(parse("class A { m() { return _c; } }\nswitch (x) { case _c2: break; }"))
		assert index.generate_uid("c").name == "_c3"

	def test_strips_leading_underscores(self):
		index = analyze(parse(""))
		assert index.generate_uid("_c").name == "_c"
