"""
JavaScript/JSX module AST.

Mutable data nodes produced by the parser adapter, rewritten in place by the
refresh pass and turned back into code with emit().
"""

from __future__ import annotations

import copy
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar, override
from typing import Literal as Lit


# =============================================================================
# Base classes
# =============================================================================
class Node(ABC):
	"""Base class for all AST nodes.

	`_fields` lists the attributes holding child nodes (or lists of child
	nodes), in source order. Traversal and scope analysis rely on it.
	"""

	__slots__: tuple[str, ...] = ()
	_fields: ClassVar[tuple[str, ...]] = ()

	@abstractmethod
	def emit(self, out: list[str]) -> None:
		"""Emit this node as JavaScript/JSX code into the output buffer."""


class ExprNode(Node, ABC):
	"""Base class for expression nodes."""

	__slots__: tuple[str, ...] = ()

	def precedence(self) -> int:
		"""Operator precedence (higher = binds tighter). Default: primary (20)."""
		return 20


class StmtNode(Node, ABC):
	"""Base class for statement nodes."""

	__slots__: tuple[str, ...] = ()


# =============================================================================
# Expression Nodes
# =============================================================================


@dataclass(slots=True, eq=False)
class Identifier(ExprNode):
	"""JS identifier: x, foo, MyComponent"""

	name: str

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.name)


@dataclass(slots=True, eq=False)
class Literal(ExprNode):
	"""JS literal: 42, "hello", true, null, `tpl`, /re/

	Parsed literals keep their source text in `raw` and emit it unchanged.
	"""

	value: int | float | str | bool | None
	raw: str | None = None

	@override
	def emit(self, out: list[str]) -> None:
		if self.raw is not None:
			out.append(self.raw)
		elif self.value is None:
			out.append("null")
		elif isinstance(self.value, bool):
			out.append("true" if self.value else "false")
		elif isinstance(self.value, str):
			out.append('"')
			out.append(_escape_string(self.value))
			out.append('"')
		else:
			out.append(str(self.value))


@dataclass(slots=True, eq=False)
class Raw(ExprNode):
	"""Expression kept verbatim (syntax the refresh pass never inspects).

	`names` lists every identifier in the text and `element_types` the ones
	used as a JSX tag or element factory type, as found by the parser.
	"""

	text: str
	names: list[str] = field(default_factory=list)
	element_types: list[str] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.text)


@dataclass(slots=True, eq=False)
class Pattern(ExprNode):
	"""Destructuring target: {a, b}, [state, setState], {x = 1, ...rest}

	Kept as source text. `names` lists the identifiers it binds.
	"""

	text: str
	names: list[str] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.text)


@dataclass(slots=True, eq=False)
class Array(ExprNode):
	"""JS array: [a, b, c]"""

	_fields: ClassVar[tuple[str, ...]] = ("elements",)

	elements: list[ExprNode]

	@override
	def emit(self, out: list[str]) -> None:
		out.append("[")
		for i, e in enumerate(self.elements):
			if i > 0:
				out.append(", ")
			_emit_operand(e, out)
		out.append("]")


@dataclass(slots=True, eq=False)
class Property(Node):
	"""Object literal entry: key: value, [key]: value, or shorthand key."""

	_fields: ClassVar[tuple[str, ...]] = ("key", "value")

	key: ExprNode
	value: ExprNode
	computed: bool = False
	shorthand: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		if self.shorthand:
			self.value.emit(out)
			return
		if self.computed:
			out.append("[")
			self.key.emit(out)
			out.append("]")
		else:
			self.key.emit(out)
		out.append(": ")
		_emit_operand(self.value, out)


@dataclass(slots=True, eq=False)
class Object(ExprNode):
	"""JS object: { key: value, ...rest }"""

	_fields: ClassVar[tuple[str, ...]] = ("props",)

	props: list[Property | ExprNode]

	@override
	def emit(self, out: list[str]) -> None:
		if not self.props:
			out.append("{}")
			return
		out.append("{ ")
		for i, p in enumerate(self.props):
			if i > 0:
				out.append(", ")
			p.emit(out)
		out.append(" }")


@dataclass(slots=True, eq=False)
class Member(ExprNode):
	"""JS member access: obj.prop or obj?.prop"""

	_fields: ClassVar[tuple[str, ...]] = ("obj",)

	obj: ExprNode
	prop: str
	optional: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		if not self.optional and _is_number(self.obj):
			# (1).toString()
			out.append("(")
			self.obj.emit(out)
			out.append(")")
		else:
			_emit_primary(self.obj, out)
		out.append("?." if self.optional else ".")
		out.append(self.prop)


@dataclass(slots=True, eq=False)
class Subscript(ExprNode):
	"""JS subscript access: obj[key]"""

	_fields: ClassVar[tuple[str, ...]] = ("obj", "key")

	obj: ExprNode
	key: ExprNode
	optional: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		_emit_primary(self.obj, out)
		out.append("?.[" if self.optional else "[")
		self.key.emit(out)
		out.append("]")


@dataclass(slots=True, eq=False)
class Call(ExprNode):
	"""JS function call: fn(args)"""

	_fields: ClassVar[tuple[str, ...]] = ("callee", "args")

	callee: ExprNode
	args: list[ExprNode]
	optional: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		_emit_primary(self.callee, out)
		out.append("?.(" if self.optional else "(")
		_emit_args(self.args, out)
		out.append(")")


@dataclass(slots=True, eq=False)
class New(ExprNode):
	"""JS new expression: new Ctor(args)"""

	_fields: ClassVar[tuple[str, ...]] = ("ctor", "args")

	ctor: ExprNode
	args: list[ExprNode]

	@override
	def emit(self, out: list[str]) -> None:
		out.append("new ")
		if _calls_in_chain(self.ctor):
			# new (getClass())(), new (a.b().c)()
			out.append("(")
			self.ctor.emit(out)
			out.append(")")
		else:
			_emit_primary(self.ctor, out)
		out.append("(")
		_emit_args(self.args, out)
		out.append(")")


@dataclass(slots=True, eq=False)
class Unary(ExprNode):
	"""JS unary expression: -x, !x, typeof x, await x"""

	_fields: ClassVar[tuple[str, ...]] = ("operand",)

	op: str
	operand: ExprNode

	@override
	def precedence(self) -> int:
		return _PRECEDENCE.get(_unary_tag(self.op), 17)

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.op)
		if self.op.isalpha():
			out.append(" ")
		operand = self.operand
		# - -x, +(+x), -(--x)
		if self.op in {"+", "-"} and isinstance(operand, (Unary, Update)):
			out.append("(")
			operand.emit(out)
			out.append(")")
			return
		_emit_paren(operand, _unary_tag(self.op), "unary", out)


@dataclass(slots=True, eq=False)
class Update(ExprNode):
	"""JS update expression: ++x, x--"""

	_fields: ClassVar[tuple[str, ...]] = ("operand",)

	op: Lit["++", "--"]
	operand: ExprNode
	prefix: bool = False

	@override
	def precedence(self) -> int:
		return 17 if self.prefix else 18

	@override
	def emit(self, out: list[str]) -> None:
		if self.prefix:
			out.append(self.op)
			_emit_primary(self.operand, out)
		else:
			_emit_primary(self.operand, out)
			out.append(self.op)


@dataclass(slots=True, eq=False)
class Binary(ExprNode):
	"""JS binary or logical expression: x + y, a && b"""

	_fields: ClassVar[tuple[str, ...]] = ("left", "right")

	left: ExprNode
	op: str
	right: ExprNode

	@override
	def precedence(self) -> int:
		return _PRECEDENCE.get(self.op, 0)

	@override
	def emit(self, out: list[str]) -> None:
		# Special: ** with unary on left needs parens
		force_left = self.op == "**" and isinstance(self.left, Unary)
		if force_left:
			out.append("(")
			self.left.emit(out)
			out.append(")")
		else:
			_emit_paren(self.left, self.op, "left", out)
		out.append(" ")
		out.append(self.op)
		out.append(" ")
		_emit_paren(self.right, self.op, "right", out)


@dataclass(slots=True, eq=False)
class Ternary(ExprNode):
	"""JS ternary expression: cond ? a : b"""

	_fields: ClassVar[tuple[str, ...]] = ("cond", "then", "else_")

	cond: ExprNode
	then: ExprNode
	else_: ExprNode

	@override
	def precedence(self) -> int:
		return _PRECEDENCE["?:"]

	@override
	def emit(self, out: list[str]) -> None:
		if self.cond.precedence() <= _PRECEDENCE["?:"]:
			out.append("(")
			self.cond.emit(out)
			out.append(")")
		else:
			self.cond.emit(out)
		out.append(" ? ")
		_emit_operand(self.then, out)
		out.append(" : ")
		_emit_operand(self.else_, out)


@dataclass(slots=True, eq=False)
class Assign(ExprNode):
	"""JS assignment expression: x = expr, x += expr

	Registration handles are attached with `_c = <component>`.
	"""

	_fields: ClassVar[tuple[str, ...]] = ("target", "value")

	target: ExprNode
	value: ExprNode
	op: str = "="

	@override
	def precedence(self) -> int:
		return _PRECEDENCE["="]

	@override
	def emit(self, out: list[str]) -> None:
		self.target.emit(out)
		out.append(" ")
		out.append(self.op)
		out.append(" ")
		_emit_operand(self.value, out)


@dataclass(slots=True, eq=False)
class Sequence(ExprNode):
	"""JS comma expression: a, b, c"""

	_fields: ClassVar[tuple[str, ...]] = ("exprs",)

	exprs: list[ExprNode]

	@override
	def precedence(self) -> int:
		return _PRECEDENCE[","]

	@override
	def emit(self, out: list[str]) -> None:
		for i, e in enumerate(self.exprs):
			if i > 0:
				out.append(", ")
			e.emit(out)


@dataclass(slots=True, eq=False)
class Spread(ExprNode):
	"""JS spread: ...expr"""

	_fields: ClassVar[tuple[str, ...]] = ("expr",)

	expr: ExprNode

	@override
	def emit(self, out: list[str]) -> None:
		out.append("...")
		_emit_operand(self.expr, out)


@dataclass(slots=True, eq=False)
class Arrow(ExprNode):
	"""JS arrow function: (x) => expr or (x) => { ... }"""

	_fields: ClassVar[tuple[str, ...]] = ("params", "body")

	params: list[Identifier | Pattern]
	body: ExprNode | Block
	is_async: bool = False

	@override
	def precedence(self) -> int:
		return _PRECEDENCE["=>"]

	@override
	def emit(self, out: list[str]) -> None:
		if self.is_async:
			out.append("async ")
		if len(self.params) == 1 and isinstance(self.params[0], Identifier):
			self.params[0].emit(out)
		else:
			_emit_params(self.params, out)
		out.append(" => ")
		body = self.body
		if isinstance(body, Block):
			body.emit(out)
			return
		buf: list[str] = []
		body.emit(buf)
		code = "".join(buf)
		# () => ({}), () => ({}).x
		if code.startswith("{") or body.precedence() < _PRECEDENCE["=>"]:
			out.append("(")
			out.append(code)
			out.append(")")
		else:
			out.append(code)


@dataclass(slots=True, eq=False)
class Function(ExprNode):
	"""JS function expression: function name(params) { ... }"""

	_fields: ClassVar[tuple[str, ...]] = ("name", "params", "body")

	params: list[Identifier | Pattern]
	body: Block
	name: Identifier | None = None
	is_async: bool = False
	is_generator: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		_emit_function(self, out)


# -----------------------------------------------------------------------------
# JSX
# -----------------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class JsxText(ExprNode):
	"""Raw JSX text between tags."""

	text: str

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.text)


@dataclass(slots=True, eq=False)
class JsxExpr(ExprNode):
	"""JSX expression container: {expr} or {}"""

	_fields: ClassVar[tuple[str, ...]] = ("expr",)

	expr: ExprNode | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("{")
		if self.expr is not None:
			self.expr.emit(out)
		out.append("}")


@dataclass(slots=True, eq=False)
class JsxAttr(Node):
	"""JSX attribute: name, name="str", name={expr}"""

	_fields: ClassVar[tuple[str, ...]] = ("value",)

	name: str
	value: ExprNode | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.name)
		if self.value is not None:
			out.append("=")
			self.value.emit(out)


@dataclass(slots=True, eq=False)
class JsxElement(ExprNode):
	"""JSX element or fragment.

	`tag` is None for fragments. Component tags are Identifier or Member
	nodes, so they take part in binding resolution like any other read.
	"""

	_fields: ClassVar[tuple[str, ...]] = ("tag", "attrs", "children")

	tag: ExprNode | None
	attrs: list[JsxAttr | Spread] = field(default_factory=list)
	children: list[ExprNode] = field(default_factory=list)
	self_closing: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		out.append("<")
		if self.tag is not None:
			self.tag.emit(out)
		for attr in self.attrs:
			out.append(" ")
			if isinstance(attr, Spread):
				out.append("{")
				attr.emit(out)
				out.append("}")
			else:
				attr.emit(out)
		if self.self_closing:
			out.append(" />")
			return
		out.append(">")
		for child in self.children:
			child.emit(out)
		out.append("</")
		if self.tag is not None:
			self.tag.emit(out)
		out.append(">")


# =============================================================================
# Statement Nodes
# =============================================================================


@dataclass(slots=True, eq=False)
class Program(StmtNode):
	"""A parsed ES module.

	`meta` carries per-module bookkeeping of passes run over the tree.
	"""

	_fields: ClassVar[tuple[str, ...]] = ("body",)

	body: list[StmtNode]
	meta: dict[str, object] = field(default_factory=dict, repr=False)

	@override
	def emit(self, out: list[str]) -> None:
		for stmt in self.body:
			stmt.emit(out)
			out.append("\n")


@dataclass(slots=True, eq=False)
class RawStmt(StmtNode):
	"""Statement kept verbatim. `names` and `element_types` as for Raw."""

	text: str
	names: list[str] = field(default_factory=list)
	element_types: list[str] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.text)


@dataclass(slots=True, eq=False)
class Comment(StmtNode):
	"""Line or block comment at statement level, emitted as written."""

	text: str

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.text)


@dataclass(slots=True, eq=False)
class ImportDecl(StmtNode):
	"""Import declaration, kept verbatim. `names` are the local bindings."""

	text: str
	names: list[str] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.text)


@dataclass(slots=True, eq=False)
class ClassDecl(StmtNode):
	"""Class declaration, kept verbatim. `names` and `element_types` as for Raw."""

	text: str
	name: str | None = None
	names: list[str] = field(default_factory=list)
	element_types: list[str] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.text)


@dataclass(slots=True, eq=False)
class ExprStmt(StmtNode):
	"""JS expression statement: expr;"""

	_fields: ClassVar[tuple[str, ...]] = ("expr",)

	expr: ExprNode

	@override
	def emit(self, out: list[str]) -> None:
		buf: list[str] = []
		self.expr.emit(buf)
		code = "".join(buf)
		if code.startswith(("{", "let [")) or _DECLARATION_START.match(code):
			out.append("(")
			out.append(code)
			out.append(")")
		else:
			out.append(code)
		out.append(";")


@dataclass(slots=True, eq=False)
class Declarator(Node):
	"""Single binding inside a variable declaration: id = init"""

	_fields: ClassVar[tuple[str, ...]] = ("id", "init")

	id: Identifier | Pattern
	init: ExprNode | None = None

	@override
	def emit(self, out: list[str]) -> None:
		self.id.emit(out)
		if self.init is not None:
			out.append(" = ")
			_emit_operand(self.init, out)


@dataclass(slots=True, eq=False)
class VarDecl(StmtNode):
	"""JS variable declaration: const a = 1, b;"""

	_fields: ClassVar[tuple[str, ...]] = ("declarations",)

	kind: Lit["var", "let", "const"]
	declarations: list[Declarator]

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.kind)
		out.append(" ")
		for i, d in enumerate(self.declarations):
			if i > 0:
				out.append(", ")
			d.emit(out)
		out.append(";")


@dataclass(slots=True, eq=False)
class FunctionDecl(StmtNode):
	"""JS function declaration: function Name(params) { ... }"""

	_fields: ClassVar[tuple[str, ...]] = ("name", "params", "body")

	name: Identifier | None
	params: list[Identifier | Pattern]
	body: Block
	is_async: bool = False
	is_generator: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		_emit_function(self, out)


@dataclass(slots=True, eq=False)
class Return(StmtNode):
	"""JS return statement: return expr;"""

	_fields: ClassVar[tuple[str, ...]] = ("value",)

	value: ExprNode | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("return")
		if self.value is not None:
			out.append(" ")
			self.value.emit(out)
		out.append(";")


@dataclass(slots=True, eq=False)
class Throw(StmtNode):
	"""JS throw statement: throw expr;"""

	_fields: ClassVar[tuple[str, ...]] = ("value",)

	value: ExprNode

	@override
	def emit(self, out: list[str]) -> None:
		out.append("throw ")
		self.value.emit(out)
		out.append(";")


@dataclass(slots=True, eq=False)
class Block(StmtNode):
	"""JS block: { ... } - a sequence of statements."""

	_fields: ClassVar[tuple[str, ...]] = ("body",)

	body: list[StmtNode]

	@override
	def emit(self, out: list[str]) -> None:
		out.append("{\n")
		for stmt in self.body:
			stmt.emit(out)
			out.append("\n")
		out.append("}")


@dataclass(slots=True, eq=False)
class If(StmtNode):
	"""JS if statement: if (cond) stmt else stmt"""

	_fields: ClassVar[tuple[str, ...]] = ("cond", "then", "else_")

	cond: ExprNode
	then: StmtNode
	else_: StmtNode | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("if (")
		self.cond.emit(out)
		out.append(") ")
		self.then.emit(out)
		if self.else_ is not None:
			out.append(" else ")
			self.else_.emit(out)


@dataclass(slots=True, eq=False)
class Try(StmtNode):
	"""JS try statement: try { } catch (e) { } finally { }"""

	_fields: ClassVar[tuple[str, ...]] = ("block", "param", "handler", "finalizer")

	block: Block
	param: Identifier | Pattern | None = None
	handler: Block | None = None
	finalizer: Block | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("try ")
		self.block.emit(out)
		if self.handler is not None:
			out.append(" catch ")
			if self.param is not None:
				out.append("(")
				self.param.emit(out)
				out.append(") ")
			self.handler.emit(out)
		if self.finalizer is not None:
			out.append(" finally ")
			self.finalizer.emit(out)


@dataclass(slots=True, eq=False)
class Loop(StmtNode):
	"""Any loop statement. Head and tail are kept verbatim, the body is parsed.

	for (...) body / while (...) body / do body while (...);
	"""

	_fields: ClassVar[tuple[str, ...]] = ("body",)

	head: str
	body: StmtNode
	tail: str = ""
	# identifiers in head and tail
	names: list[str] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.head)
		out.append(" ")
		self.body.emit(out)
		if self.tail:
			out.append(" ")
			out.append(self.tail)


@dataclass(slots=True, eq=False)
class ExportNamed(StmtNode):
	"""export <declaration>"""

	_fields: ClassVar[tuple[str, ...]] = ("declaration",)

	declaration: StmtNode

	@override
	def emit(self, out: list[str]) -> None:
		out.append("export ")
		self.declaration.emit(out)


@dataclass(slots=True, eq=False)
class ExportDefault(StmtNode):
	"""export default <function declaration | expression>"""

	_fields: ClassVar[tuple[str, ...]] = ("declaration",)

	declaration: ExprNode | FunctionDecl

	@override
	def emit(self, out: list[str]) -> None:
		out.append("export default ")
		if isinstance(self.declaration, FunctionDecl):
			self.declaration.emit(out)
			return
		buf: list[str] = []
		_emit_operand(self.declaration, buf)
		code = "".join(buf)
		# Would read back as a declaration
		if _DECLARATION_START.match(code):
			code = f"({code})"
		out.append(code)
		out.append(";")


FUNCTION_TYPES: tuple[type[Node], ...] = (Function, Arrow, FunctionDecl)


# =============================================================================
# Tree helpers
# =============================================================================


def emit(node: Node) -> str:
	"""Emit a node as JavaScript/JSX code."""
	out: list[str] = []
	node.emit(out)
	return "".join(out)


def source_text(node: Node) -> str:
	"""Source text a node stands for, as used in persistent IDs and hook names."""
	return emit(node)


def iter_children(node: Node) -> Iterator[tuple[str, int | None, Node]]:
	"""Yield (field, index, child) for every direct child, in source order."""
	for name in node._fields:
		value = getattr(node, name)
		if isinstance(value, list):
			for i, child in enumerate(value):
				if isinstance(child, Node):
					yield name, i, child
		elif isinstance(value, Node):
			yield name, None, value


def walk(node: Node) -> Iterator[Node]:
	"""Pre-order iteration over a subtree."""
	stack = [node]
	while stack:
		current = stack.pop()
		yield current
		children = [child for _, _, child in iter_children(current)]
		stack.extend(reversed(children))


def clone(node: Node) -> Node:
	"""Deep copy of a subtree (fresh node identities)."""
	return copy.deepcopy(node)


# =============================================================================
# Emit logic
# =============================================================================


# Operator precedence table (higher = binds tighter)
_PRECEDENCE: dict[str, int] = {
	# Primary
	".": 20,
	"[]": 20,
	"()": 20,
	# Unary
	"!": 17,
	"~": 17,
	"+u": 17,
	"-u": 17,
	"typeof": 17,
	"void": 17,
	"delete": 17,
	"await": 17,
	# Exponentiation (right-assoc)
	"**": 16,
	# Multiplicative
	"*": 15,
	"/": 15,
	"%": 15,
	# Additive
	"+": 14,
	"-": 14,
	# Shift
	"<<": 13,
	">>": 13,
	">>>": 13,
	# Relational
	"<": 12,
	"<=": 12,
	">": 12,
	">=": 12,
	"instanceof": 12,
	"in": 12,
	# Equality
	"==": 11,
	"!=": 11,
	"===": 11,
	"!==": 11,
	# Bitwise
	"&": 10,
	"^": 9,
	"|": 8,
	# Logical
	"&&": 7,
	"||": 6,
	"??": 6,
	# Ternary
	"?:": 4,
	# Assignment and arrows (right-assoc)
	"=": 2,
	"=>": 2,
	# Comma
	",": 1,
}

_RIGHT_ASSOC = {"**"}
_DECLARATION_START = re.compile(r"(?:async\s+)?function\b|class\b")
_SHORT_CIRCUIT = {"&&", "||"}


def _escape_string(s: str) -> str:
	"""Escape for double-quoted JS string literals."""
	return (
		s.replace("\\", "\\\\")
		.replace('"', '\\"')
		.replace("\n", "\\n")
		.replace("\r", "\\r")
		.replace("\t", "\\t")
		.replace("\b", "\\b")
		.replace("\f", "\\f")
		.replace("\v", "\\v")
		.replace("\x00", "\\x00")
		.replace("\u2028", "\\u2028")
		.replace("\u2029", "\\u2029")
	)


def _emit_paren(node: ExprNode, parent_op: str, side: str, out: list[str]) -> None:
	"""Emit child with parens if needed for precedence."""
	# Ternary as child of binary always needs parens
	needs_parens = False
	if isinstance(node, Ternary):
		needs_parens = True
	elif isinstance(node, Binary) and _mixes_nullish(parent_op, node.op):
		# `??` cannot share an unparenthesized chain with `&&` or `||`
		needs_parens = True
	else:
		child_prec = node.precedence()
		parent_prec = _PRECEDENCE.get(parent_op, 17 if side == "unary" else 0)
		if child_prec < parent_prec:
			needs_parens = True
		elif child_prec == parent_prec and isinstance(node, Binary):
			# Handle associativity
			if parent_op in _RIGHT_ASSOC:
				needs_parens = side == "left"
			else:
				needs_parens = side == "right"

	if needs_parens:
		out.append("(")
		node.emit(out)
		out.append(")")
	else:
		node.emit(out)


def _unary_tag(op: str) -> str:
	"""Precedence key of a unary operator: + and - are also binary."""
	return "+u" if op == "+" else ("-u" if op == "-" else op)


def _is_number(node: ExprNode) -> bool:
	if not isinstance(node, Literal):
		return False
	if node.raw is not None:
		return node.raw[:1].isdigit() or node.raw.startswith(".")
	return isinstance(node.value, (int, float)) and not isinstance(node.value, bool)


def _calls_in_chain(node: ExprNode) -> bool:
	"""Whether a member/subscript chain contains a call: a.b().c"""
	while isinstance(node, (Member, Subscript)):
		node = node.obj
	return isinstance(node, Call)


def _mixes_nullish(parent_op: str, child_op: str) -> bool:
	if parent_op == "??":
		return child_op in _SHORT_CIRCUIT
	return child_op == "??" and parent_op in _SHORT_CIRCUIT


def _emit_primary(node: ExprNode, out: list[str]) -> None:
	"""Emit with parens if not primary precedence."""
	if node.precedence() < 20 or isinstance(node, Ternary):
		out.append("(")
		node.emit(out)
		out.append(")")
	else:
		node.emit(out)


def _emit_operand(node: Node, out: list[str]) -> None:
	"""Emit an expression in a comma-separated position (args, elements, init)."""
	if isinstance(node, Sequence):
		out.append("(")
		node.emit(out)
		out.append(")")
	else:
		node.emit(out)


def _emit_args(args: list[ExprNode], out: list[str]) -> None:
	for i, a in enumerate(args):
		if i > 0:
			out.append(", ")
		_emit_operand(a, out)


def _emit_params(params: list[Identifier | Pattern], out: list[str]) -> None:
	out.append("(")
	for i, p in enumerate(params):
		if i > 0:
			out.append(", ")
		p.emit(out)
	out.append(")")


def _emit_function(fn: Function | FunctionDecl, out: list[str]) -> None:
	if fn.is_async:
		out.append("async ")
	out.append("function")
	if fn.is_generator:
		out.append("*")
	if fn.name is not None:
		out.append(" ")
		fn.name.emit(out)
	elif not fn.is_generator:
		out.append(" ")
	_emit_params(fn.params, out)
	out.append(" ")
	fn.body.emit(out)
