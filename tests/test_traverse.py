"""
Tests for NodePath mutation and traversal order.
"""

import pytest
from pulse_refresh.nodes import (
	Call,
	ExprStmt,
	Identifier,
	Literal,
	Program,
	emit,
)
from pulse_refresh.parser import parse
from pulse_refresh.traverse import NodePath, Visitor, traverse


class _Recorder(Visitor):
	def __init__(self) -> None:
		self.events: list[str] = []

	def enter_Identifier(self, path: NodePath) -> None:
		assert isinstance(path.node, Identifier)
		self.events.append(f"enter {path.node.name}")

	def exit_Call(self, path: NodePath) -> None:
		self.events.append("exit call")


class TestTraverse:
	def test_order(self):
		program = parse("f(a, b);")
		visitor = _Recorder()
		traverse(program, visitor)
		assert visitor.events == ["enter f", "enter a", "enter b", "exit call"]

	def test_inserted_statements_are_visited(self):
		program = parse("first();")

		class Inserter(_Recorder):
			def enter_ExprStmt(self, path: NodePath) -> None:
				stmt = path.node
				assert isinstance(stmt, ExprStmt)
				if emit(stmt) == "first();":
					path.insert_after(ExprStmt(Call(Identifier("second"), [])))

		visitor = Inserter()
		traverse(program, visitor)
		assert "enter second" in visitor.events
		assert emit(program) == "first();\nsecond();\n"

	def test_later_insert_lands_first(self):
		program = parse("a();")
		[path] = NodePath(program).get("body")  # pyright: ignore[reportGeneralTypeIssues]
		path.insert_after(ExprStmt(Call(Identifier("c"), [])))
		path.insert_after(ExprStmt(Call(Identifier("b"), [])))
		assert emit(program) == "a();\nb();\nc();\n"

	def test_replacement_on_enter_is_walked(self):
		program = parse("x;")

		class Replacer(_Recorder):
			def enter_Identifier(self, path: NodePath) -> None:
				super().enter_Identifier(path)
				assert isinstance(path.node, Identifier)
				if path.node.name == "x":
					path.replace_with(Call(Identifier("y"), []))

		visitor = Replacer()
		traverse(program, visitor)
		assert emit(program) == "y();\n"

	def test_replacing_root_fails(self):
		with pytest.raises(ValueError):
			NodePath(Program([])).replace_with(Literal(1))

	def test_insert_outside_a_list_fails(self):
		program = parse("f();")
		[stmt] = NodePath(program).get("body")  # pyright: ignore[reportGeneralTypeIssues]
		expr_path = stmt.get("expr")
		assert isinstance(expr_path, NodePath)
		with pytest.raises(ValueError):
			expr_path.insert_after(ExprStmt(Literal(1)))


class TestNodePath:
	def test_function_parent(self):
		program = parse("const f = () => { g(); };")
		found: list[str] = []

		class Finder(Visitor):
			def enter_Call(self, path: NodePath) -> None:
				fn = path.function_parent()
				assert fn is not None
				found.append(type(fn.node).__name__)

		traverse(program, Finder())
		assert found == ["Arrow"]

	def test_statement_parent(self):
		program = parse("const f = () => null;")
		found: list[str] = []

		class Finder(Visitor):
			def enter_Arrow(self, path: NodePath) -> None:
				stmt = path.statement_parent()
				assert stmt is not None
				found.append(type(stmt.node).__name__)

		traverse(program, Finder())
		assert found == ["VarDecl"]
