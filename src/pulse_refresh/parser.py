"""
JavaScript/JSX source -> node tree.

Parsing is delegated to tree-sitter; this module only converts the concrete
syntax tree into the mutable nodes of pulse_refresh.nodes. Constructs the
refresh pass never rewrites are kept verbatim as Raw/RawStmt nodes, which
still record the identifiers found in them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import tree_sitter
import tree_sitter_javascript as tsjavascript

from pulse_refresh.detect import ELEMENT_FACTORIES
from pulse_refresh.errors import ParseError
from pulse_refresh.nodes import (
	Array,
	Arrow,
	Assign,
	Binary,
	Block,
	Call,
	ClassDecl,
	Comment,
	Declarator,
	ExportDefault,
	ExportNamed,
	ExprNode,
	ExprStmt,
	Function,
	FunctionDecl,
	Identifier,
	If,
	ImportDecl,
	JsxAttr,
	JsxElement,
	JsxExpr,
	JsxText,
	Literal,
	Loop,
	Member,
	New,
	Object,
	Pattern,
	Program,
	Property,
	Raw,
	RawStmt,
	Return,
	Sequence,
	Spread,
	StmtNode,
	Subscript,
	Ternary,
	Throw,
	Try,
	Unary,
	Update,
	VarDecl,
)

logger = logging.getLogger(__name__)

TSNode = tree_sitter.Node

JS_LANGUAGE = tree_sitter.Language(tsjavascript.language())

_LITERAL_TYPES = {
	"number",
	"string",
	"template_string",
	"regex",
	"true",
	"false",
	"null",
}
_FUNCTION_EXPR_TYPES = {"function_expression", "function", "generator_function"}
_FUNCTION_DECL_TYPES = {"function_declaration", "generator_function_declaration"}
_VAR_DECL_TYPES = {"lexical_declaration", "variable_declaration"}
_LOOP_TYPES = {"for_statement", "for_in_statement", "while_statement"}
_VERBATIM_STMT_TYPES = {
	"switch_statement",
	"labeled_statement",
	"break_statement",
	"continue_statement",
	"debugger_statement",
	"with_statement",
}
# Names seen in verbatim code, and the nodes whose `name` declares one
_NAME_TYPES = {
	"identifier",
	"shorthand_property_identifier",
	"shorthand_property_identifier_pattern",
}
_NAMED_DECL_TYPES = {
	"class_declaration",
	"class",
	"function_declaration",
	"function_expression",
	"function",
	"generator_function_declaration",
	"generator_function",
}


def parse(source: str) -> Program:
	"""Parse an ES module (JSX allowed) into a Program node.

	Raises ParseError if the source contains syntax errors.
	"""
	parser = tree_sitter.Parser(JS_LANGUAGE)
	tree = parser.parse(source.encode("utf-8"))
	root = tree.root_node
	if root.has_error:
		bad = _first_error(root)
		row, col = bad.start_point if bad is not None else root.start_point
		raise ParseError("Invalid JavaScript syntax", line=row + 1, column=col + 1)
	return _Converter().program(root)


def _first_error(node: TSNode) -> TSNode | None:
	if node.type == "ERROR" or node.is_missing:
		return node
	for child in node.children:
		if child.has_error or child.is_missing:
			found = _first_error(child)
			if found is not None:
				return found
	return None


def _text(node: TSNode) -> str:
	raw = node.text
	return raw.decode("utf-8") if raw is not None else ""


def _raw(node: TSNode) -> Raw:
	names, element_types = _scan(node)
	return Raw(_text(node), names, element_types)


def _raw_stmt(node: TSNode) -> RawStmt:
	names, element_types = _scan(node)
	return RawStmt(_text(node), names, element_types)


def _named(node: TSNode) -> list[TSNode]:
	"""Named children without comments."""
	return [c for c in node.named_children if c.type != "comment"]


def _has_token(node: TSNode, token: str) -> bool:
	return any(c.type == token for c in node.children)


class _Converter:
	"""Converts a tree-sitter `program` into pulse_refresh nodes."""

	_stmt_handlers: dict[str, Callable[[_Converter, TSNode], StmtNode | None]]
	_expr_handlers: dict[str, Callable[[_Converter, TSNode], ExprNode]]

	def program(self, node: TSNode) -> Program:
		return Program(self.statements(node))

	def statements(self, node: TSNode) -> list[StmtNode]:
		"""Statements of a program or block. Comments between them are kept."""
		body: list[StmtNode] = []
		for child in node.named_children:
			if child.type == "comment":
				body.append(Comment(_text(child)))
				continue
			stmt = self.stmt(child)
			if stmt is not None:
				body.append(stmt)
		return body

	# --- Statements ---------------------------------------------------------

	def stmt(self, node: TSNode) -> StmtNode | None:
		kind = node.type
		if kind in _VAR_DECL_TYPES:
			return self.var_decl(node)
		if kind in _FUNCTION_DECL_TYPES:
			return self.function_decl(node)
		if kind in _LOOP_TYPES:
			body = node.child_by_field_name("body")
			if body is None:
				return _raw_stmt(node)
			head = node.text[: body.start_byte - node.start_byte] if node.text else b""
			return Loop(
				head.decode("utf-8").rstrip(),
				self.stmt_or_empty(body),
				names=_names_outside(node, body),
			)
		handler = self._stmt_handlers.get(kind)
		if handler is not None:
			return handler(self, node)
		if kind == "empty_statement":
			return None
		if kind not in _VERBATIM_STMT_TYPES:
			logger.debug("Keeping unsupported statement %r verbatim", kind)
		return _raw_stmt(node)

	def stmt_or_empty(self, node: TSNode) -> StmtNode:
		stmt = self.stmt(node)
		return stmt if stmt is not None else Block([])

	def block(self, node: TSNode) -> Block:
		return Block(self.statements(node))

	def expression_statement(self, node: TSNode) -> StmtNode:
		children = _named(node)
		if not children:
			return _raw_stmt(node)
		if len(children) > 1:
			return ExprStmt(Sequence([self.expr(c) for c in children]))
		return ExprStmt(self.expr(children[0]))

	def var_decl(self, node: TSNode) -> VarDecl:
		kind = _text(node.children[0])
		if kind not in ("var", "let", "const"):
			kind = "var"
		declarations: list[Declarator] = []
		for child in _named(node):
			if child.type != "variable_declarator":
				continue
			name = child.child_by_field_name("name")
			value = child.child_by_field_name("value")
			assert name is not None
			declarations.append(
				Declarator(
					self.target(name),
					self.expr(value) if value is not None else None,
				)
			)
		return VarDecl(kind, declarations)  # pyright: ignore[reportArgumentType]

	def function_decl(self, node: TSNode) -> FunctionDecl:
		name = node.child_by_field_name("name")
		body = node.child_by_field_name("body")
		assert body is not None
		return FunctionDecl(
			name=Identifier(_text(name)) if name is not None else None,
			params=self.params(node.child_by_field_name("parameters")),
			body=self.block(body),
			is_async=_has_token(node, "async"),
			is_generator=node.type.startswith("generator") or _has_token(node, "*"),
		)

	def return_statement(self, node: TSNode) -> StmtNode:
		children = _named(node)
		return Return(self.expr(children[0]) if children else None)

	def throw_statement(self, node: TSNode) -> StmtNode:
		children = _named(node)
		if not children:
			return _raw_stmt(node)
		return Throw(self.expr(children[0]))

	def if_statement(self, node: TSNode) -> StmtNode:
		cond = node.child_by_field_name("condition")
		then = node.child_by_field_name("consequence")
		alt = node.child_by_field_name("alternative")
		if cond is None or then is None:
			return _raw_stmt(node)
		else_: StmtNode | None = None
		if alt is not None:
			# else_clause wraps the actual statement
			inner = _named(alt) if alt.type == "else_clause" else [alt]
			if inner:
				else_ = self.stmt_or_empty(inner[0])
		return If(self.expr(cond), self.stmt_or_empty(then), else_)

	def try_statement(self, node: TSNode) -> StmtNode:
		body = node.child_by_field_name("body")
		if body is None:
			return _raw_stmt(node)
		result = Try(self.block(body))
		handler = node.child_by_field_name("handler")
		if handler is not None:
			param = handler.child_by_field_name("parameter")
			handler_body = handler.child_by_field_name("body")
			if param is not None:
				result.param = self.target(param)
			if handler_body is not None:
				result.handler = self.block(handler_body)
		finalizer = node.child_by_field_name("finalizer")
		if finalizer is not None:
			final_body = finalizer.child_by_field_name("body")
			if final_body is not None:
				result.finalizer = self.block(final_body)
		return result

	def do_statement(self, node: TSNode) -> StmtNode:
		body = node.child_by_field_name("body")
		if body is None or node.text is None:
			return _raw_stmt(node)
		tail = node.text[body.end_byte - node.start_byte :].decode("utf-8").strip()
		return Loop("do", self.stmt_or_empty(body), tail, _names_outside(node, body))

	def import_statement(self, node: TSNode) -> StmtNode:
		names: list[str] = []
		for child in _named(node):
			if child.type == "import_clause":
				names.extend(_import_names(child))
		return ImportDecl(_text(node), names)

	def class_declaration(self, node: TSNode) -> StmtNode:
		name = node.child_by_field_name("name")
		names, element_types = _scan(node)
		return ClassDecl(
			_text(node), _text(name) if name is not None else None, names, element_types
		)

	def export_statement(self, node: TSNode) -> StmtNode:
		declaration = node.child_by_field_name("declaration")
		value = node.child_by_field_name("value")
		if _has_token(node, "default"):
			if declaration is not None and declaration.type in _FUNCTION_DECL_TYPES:
				return ExportDefault(self.function_decl(declaration))
			if value is not None and value.type in _FUNCTION_EXPR_TYPES:
				# export default function () {}
				return ExportDefault(self.function_decl(value))
			if value is not None and value.type == "class":
				return _raw_stmt(node)
			if value is not None:
				return ExportDefault(self.expr(value))
			return _raw_stmt(node)
		if declaration is not None and (
			declaration.type in _VAR_DECL_TYPES
			or declaration.type in _FUNCTION_DECL_TYPES
		):
			inner = self.stmt(declaration)
			assert inner is not None
			return ExportNamed(inner)
		return _raw_stmt(node)

	# --- Expressions --------------------------------------------------------

	def expr(self, node: TSNode) -> ExprNode:
		kind = node.type
		if kind == "template_string" and any(
			c.type == "template_substitution" for c in node.named_children
		):
			return _raw(node)
		if kind in _LITERAL_TYPES:
			return Literal(None, raw=_text(node))
		if kind in _FUNCTION_EXPR_TYPES:
			return self.function_expression(node)
		handler = self._expr_handlers.get(kind)
		if handler is not None:
			return handler(self, node)
		logger.debug("Keeping unsupported expression %r verbatim", kind)
		return _raw(node)

	def identifier(self, node: TSNode) -> ExprNode:
		return Identifier(_text(node))

	def parenthesized_expression(self, node: TSNode) -> ExprNode:
		children = _named(node)
		if len(children) == 1:
			inner = self.expr(children[0])
			if isinstance(inner, Raw):
				# (yield x).value: verbatim text keeps its parentheses
				return _raw(node)
			return inner
		return Sequence([self.expr(c) for c in children])

	def member_expression(self, node: TSNode) -> ExprNode:
		obj = node.child_by_field_name("object")
		prop = node.child_by_field_name("property")
		if obj is None or prop is None:
			return _raw(node)
		return Member(self.expr(obj), _text(prop), optional=_has_token(node, "optional_chain"))

	def subscript_expression(self, node: TSNode) -> ExprNode:
		obj = node.child_by_field_name("object")
		index = node.child_by_field_name("index")
		if obj is None or index is None:
			return _raw(node)
		return Subscript(
			self.expr(obj), self.expr(index), optional=_has_token(node, "optional_chain")
		)

	def call_expression(self, node: TSNode) -> ExprNode:
		fn = node.child_by_field_name("function")
		args = node.child_by_field_name("arguments")
		if fn is None or args is None or args.type != "arguments":
			# tagged templates and friends
			return _raw(node)
		return Call(
			self.expr(fn),
			[self.expr(a) for a in _named(args)],
			optional=_has_token(node, "optional_chain"),
		)

	def new_expression(self, node: TSNode) -> ExprNode:
		ctor = node.child_by_field_name("constructor")
		args = node.child_by_field_name("arguments")
		if ctor is None:
			return _raw(node)
		return New(self.expr(ctor), [self.expr(a) for a in _named(args)] if args else [])

	def await_expression(self, node: TSNode) -> ExprNode:
		children = _named(node)
		if not children:
			return _raw(node)
		return Unary("await", self.expr(children[0]))

	def unary_expression(self, node: TSNode) -> ExprNode:
		op = node.child_by_field_name("operator")
		arg = node.child_by_field_name("argument")
		if op is None or arg is None:
			return _raw(node)
		return Unary(_text(op), self.expr(arg))

	def update_expression(self, node: TSNode) -> ExprNode:
		arg = node.child_by_field_name("argument")
		op = node.child_by_field_name("operator")
		if arg is None or op is None:
			return _raw(node)
		prefix = op.start_byte < arg.start_byte
		return Update(_text(op), self.expr(arg), prefix=prefix)  # pyright: ignore[reportArgumentType]

	def binary_expression(self, node: TSNode) -> ExprNode:
		left = node.child_by_field_name("left")
		op = node.child_by_field_name("operator")
		right = node.child_by_field_name("right")
		if left is None or op is None or right is None:
			return _raw(node)
		return Binary(self.expr(left), _text(op), self.expr(right))

	def ternary_expression(self, node: TSNode) -> ExprNode:
		cond = node.child_by_field_name("condition")
		then = node.child_by_field_name("consequence")
		else_ = node.child_by_field_name("alternative")
		if cond is None or then is None or else_ is None:
			return _raw(node)
		return Ternary(self.expr(cond), self.expr(then), self.expr(else_))

	def assignment_expression(self, node: TSNode) -> ExprNode:
		left = node.child_by_field_name("left")
		right = node.child_by_field_name("right")
		if left is None or right is None:
			return _raw(node)
		op = node.child_by_field_name("operator")
		return Assign(
			self.assign_target(left),
			self.expr(right),
			op=_text(op) if op is not None else "=",
		)

	def sequence_expression(self, node: TSNode) -> ExprNode:
		exprs: list[ExprNode] = []
		pending = [node]
		while pending:
			current = pending.pop(0)
			for child in _named(current):
				if child.type == "sequence_expression":
					pending.append(child)
				else:
					exprs.append(self.expr(child))
		return Sequence(exprs)

	def spread_element(self, node: TSNode) -> ExprNode:
		children = _named(node)
		if not children:
			return _raw(node)
		return Spread(self.expr(children[0]))

	def array(self, node: TSNode) -> ExprNode:
		# Holes have no node of their own: keep such arrays verbatim.
		prev = ""
		for child in node.children:
			if child.type == "," and prev in ("[", ","):
				return _raw(node)
			if child.type != "comment":
				prev = child.type
		return Array([self.expr(c) for c in _named(node)])

	def object(self, node: TSNode) -> ExprNode:
		props: list[Property | ExprNode] = []
		for child in _named(node):
			kind = child.type
			if kind == "pair":
				key = child.child_by_field_name("key")
				value = child.child_by_field_name("value")
				if key is None or value is None:
					props.append(_raw(child))
					continue
				if key.type == "computed_property_name":
					inner = _named(key)
					props.append(Property(self.expr(inner[0]), self.expr(value), computed=True))
				elif key.type in ("string", "number"):
					props.append(Property(Literal(None, raw=_text(key)), self.expr(value)))
				else:
					props.append(Property(Identifier(_text(key)), self.expr(value)))
			elif kind == "shorthand_property_identifier":
				name = _text(child)
				props.append(Property(Identifier(name), Identifier(name), shorthand=True))
			elif kind == "spread_element":
				props.append(self.spread_element(child))
			else:
				props.append(_raw(child))
		return Object(props)

	def arrow_function(self, node: TSNode) -> ExprNode:
		body = node.child_by_field_name("body")
		if body is None:
			return _raw(node)
		param = node.child_by_field_name("parameter")
		if param is not None:
			params = [self.target(param)]
		else:
			params = self.params(node.child_by_field_name("parameters"))
		return Arrow(
			params,
			self.block(body) if body.type == "statement_block" else self.expr(body),
			is_async=_has_token(node, "async"),
		)

	def function_expression(self, node: TSNode) -> ExprNode:
		body = node.child_by_field_name("body")
		if body is None:
			return _raw(node)
		name = node.child_by_field_name("name")
		return Function(
			params=self.params(node.child_by_field_name("parameters")),
			body=self.block(body),
			name=Identifier(_text(name)) if name is not None else None,
			is_async=_has_token(node, "async"),
			is_generator=node.type.startswith("generator") or _has_token(node, "*"),
		)

	# --- JSX ----------------------------------------------------------------

	def jsx_element(self, node: TSNode) -> ExprNode:
		open_tag = node.child_by_field_name("open_tag")
		if open_tag is None:
			return _raw(node)
		tag, attrs = self.jsx_opening(open_tag)
		children: list[ExprNode] = []
		for child in node.named_children:
			if child.type in ("jsx_opening_element", "jsx_closing_element"):
				continue
			children.append(self.jsx_child(child))
		return JsxElement(tag, attrs, children)

	def jsx_self_closing_element(self, node: TSNode) -> ExprNode:
		tag, attrs = self.jsx_opening(node)
		return JsxElement(tag, attrs, [], self_closing=True)

	def jsx_opening(self, node: TSNode) -> tuple[ExprNode | None, list[JsxAttr | Spread]]:
		name = node.child_by_field_name("name")
		tag = self.jsx_tag(name) if name is not None else None
		attrs: list[JsxAttr | Spread] = []
		for child in _named(node):
			if name is not None and child.start_byte == name.start_byte:
				continue
			if child.type == "jsx_attribute":
				attrs.append(self.jsx_attribute(child))
			elif child.type == "jsx_expression":
				inner = _named(child)
				if inner and inner[0].type == "spread_element":
					spread = self.spread_element(inner[0])
					if isinstance(spread, Spread):
						attrs.append(spread)
						continue
				attrs.append(JsxAttr(_text(child)))
		return tag, attrs

	def jsx_tag(self, node: TSNode) -> ExprNode:
		if node.type == "identifier":
			return Identifier(_text(node))
		if node.type == "member_expression":
			return self.member_expression(node)
		if node.type == "nested_identifier":
			parts = _text(node).split(".")
			tag: ExprNode = Identifier(parts[0])
			for part in parts[1:]:
				tag = Member(tag, part)
			return tag
		return _raw(node)

	def jsx_attribute(self, node: TSNode) -> JsxAttr:
		children = _named(node)
		name = _text(children[0]) if children else ""
		if len(children) < 2:
			return JsxAttr(name)
		value = children[1]
		if value.type == "string":
			return JsxAttr(name, Literal(None, raw=_text(value)))
		if value.type == "jsx_expression":
			return JsxAttr(name, self.jsx_expression(value))
		return JsxAttr(name, self.expr(value))

	def jsx_expression(self, node: TSNode) -> ExprNode:
		children = _named(node)
		if not children:
			return JsxExpr(None)
		return JsxExpr(self.expr(children[0]))

	def jsx_child(self, node: TSNode) -> ExprNode:
		kind = node.type
		if kind in ("jsx_text", "html_character_reference"):
			return JsxText(_text(node))
		if kind == "jsx_expression":
			return self.jsx_expression(node)
		if kind == "comment":
			return JsxText(_text(node))
		return self.expr(node)

	# --- Binding targets ----------------------------------------------------

	def params(self, node: TSNode | None) -> list[Identifier | Pattern]:
		if node is None:
			return []
		return [self.target(c) for c in _named(node)]

	def target(self, node: TSNode) -> Identifier | Pattern:
		if node.type == "identifier":
			return Identifier(_text(node))
		return Pattern(_text(node), _pattern_names(node))

	def assign_target(self, node: TSNode) -> ExprNode:
		if node.type in ("object_pattern", "array_pattern"):
			return Pattern(_text(node), _pattern_names(node))
		return self.expr(node)


_Converter._stmt_handlers = {
	"expression_statement": _Converter.expression_statement,
	"statement_block": _Converter.block,
	"return_statement": _Converter.return_statement,
	"throw_statement": _Converter.throw_statement,
	"if_statement": _Converter.if_statement,
	"try_statement": _Converter.try_statement,
	"do_statement": _Converter.do_statement,
	"import_statement": _Converter.import_statement,
	"class_declaration": _Converter.class_declaration,
	"export_statement": _Converter.export_statement,
}

_Converter._expr_handlers = {
	"identifier": _Converter.identifier,
	"undefined": _Converter.identifier,
	"parenthesized_expression": _Converter.parenthesized_expression,
	"member_expression": _Converter.member_expression,
	"subscript_expression": _Converter.subscript_expression,
	"call_expression": _Converter.call_expression,
	"new_expression": _Converter.new_expression,
	"await_expression": _Converter.await_expression,
	"unary_expression": _Converter.unary_expression,
	"update_expression": _Converter.update_expression,
	"binary_expression": _Converter.binary_expression,
	"ternary_expression": _Converter.ternary_expression,
	"assignment_expression": _Converter.assignment_expression,
	"augmented_assignment_expression": _Converter.assignment_expression,
	"sequence_expression": _Converter.sequence_expression,
	"spread_element": _Converter.spread_element,
	"array": _Converter.array,
	"object": _Converter.object,
	"arrow_function": _Converter.arrow_function,
	"jsx_element": _Converter.jsx_element,
	"jsx_self_closing_element": _Converter.jsx_self_closing_element,
	"jsx_expression": _Converter.jsx_expression,
}


def _pattern_names(node: TSNode) -> list[str]:
	"""Identifiers bound by a destructuring pattern, in source order."""
	names: list[str] = []

	def visit(n: TSNode) -> None:
		kind = n.type
		if kind in ("identifier", "shorthand_property_identifier_pattern"):
			names.append(_text(n))
		elif kind == "pair_pattern":
			value = n.child_by_field_name("value")
			if value is not None:
				visit(value)
		elif kind in ("assignment_pattern", "object_assignment_pattern"):
			left = n.child_by_field_name("left")
			if left is not None:
				visit(left)
		elif kind in ("object_pattern", "array_pattern", "rest_pattern"):
			for child in _named(n):
				visit(child)

	visit(node)
	return names


def _import_names(clause: TSNode) -> list[str]:
	names: list[str] = []
	for child in _named(clause):
		if child.type == "identifier":
			names.append(_text(child))
		elif child.type == "namespace_import":
			names.extend(_text(c) for c in _named(child) if c.type == "identifier")
		elif child.type == "named_imports":
			for spec in _named(child):
				if spec.type != "import_specifier":
					continue
				alias = spec.child_by_field_name("alias")
				name = spec.child_by_field_name("name")
				local = alias if alias is not None else name
				if local is not None:
					names.append(_text(local))
	return names


def _scan(node: TSNode) -> tuple[list[str], list[str]]:
	"""Identifiers of a subtree kept verbatim, and those used as element types.

	Element types are JSX tags (<Foo />) and the first argument of an element
	factory call (createElement(Foo)). Names declared inside the subtree are
	not reported as element types.
	"""
	names: list[str] = []
	types: list[str] = []
	declared: set[str] = set()
	pending = [node]
	while pending:
		current = pending.pop()
		kind = current.type
		if kind in _NAME_TYPES:
			names.append(_text(current))
		elif kind in ("jsx_opening_element", "jsx_self_closing_element"):
			tag = current.child_by_field_name("name")
			if tag is not None and tag.type == "identifier":
				name = _text(tag)
				if not (name[:1].islower() or "-" in name):
					types.append(name)
		elif kind == "call_expression":
			first = _factory_type_argument(current)
			if first is not None:
				types.append(first)
		elif kind == "variable_declarator":
			target = current.child_by_field_name("name")
			if target is not None:
				declared.update(_pattern_names(target))
		elif kind in ("formal_parameters", "catch_clause"):
			for child in _named(current):
				if child.type != "statement_block":
					declared.update(_pattern_names(child))
		elif kind == "arrow_function":
			param = current.child_by_field_name("parameter")
			if param is not None:
				declared.add(_text(param))
		if kind in _NAMED_DECL_TYPES:
			name_node = current.child_by_field_name("name")
			if name_node is not None:
				declared.add(_text(name_node))
		pending.extend(reversed(current.named_children))
	return (
		list(dict.fromkeys(names)),
		[name for name in dict.fromkeys(types) if name not in declared],
	)


def _names_outside(node: TSNode, body: TSNode) -> list[str]:
	"""Identifiers of a loop outside its body (head or do-while condition)."""
	names: list[str] = []
	for child in node.named_children:
		if child.start_byte != body.start_byte:
			names.extend(_scan(child)[0])
	return names


def _factory_type_argument(call: TSNode) -> str | None:
	"""`Foo` in createElement(Foo, ...) and React.createElement(Foo, ...)."""
	fn = call.child_by_field_name("function")
	args = call.child_by_field_name("arguments")
	if fn is None or args is None or args.type != "arguments":
		return None
	if fn.type == "identifier":
		last = _text(fn)
	elif fn.type == "member_expression":
		prop = fn.child_by_field_name("property")
		last = _text(prop) if prop is not None else ""
	else:
		return None
	if last not in ELEMENT_FACTORIES:
		return None
	first = _named(args)
	if not first or first[0].type != "identifier":
		return None
	return _text(first[0])
