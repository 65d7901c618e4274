"""
Hook call recording and hook signatures.

Every call to a `use[A-Z]...` function is recorded against its nearest
enclosing function. A function's signature is the ordered list of those
calls; when it changes between two edits, the runtime remounts instead of
preserving state.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from pulse_refresh.nodes import ExprNode, Identifier, Member, Node, source_text

logger = logging.getLogger(__name__)

_HOOK_NAME = re.compile(r"^use[A-Z]")

BUILTIN_HOOKS = frozenset(
	{
		"useState",
		"useReducer",
		"useEffect",
		"useLayoutEffect",
		"useMemo",
		"useCallback",
		"useRef",
		"useContext",
		"useImperativeMethods",
		"useDebugValue",
	}
)


@dataclass(slots=True, eq=False)
class HookCall:
	"""One hook call inside a function.

	`name` is the callee as written (useState, React.useEffect). `key` is the
	source of the variable the result is assigned to, or "".
	"""

	name: str
	callee: ExprNode
	key: str = ""


@dataclass(slots=True)
class HookSignature:
	key: str
	custom_hooks: list[ExprNode] = field(default_factory=list)


def hook_name(callee: ExprNode) -> str | None:
	"""Callee text if the call looks like a hook call, else None.

	useFoo() -> "useFoo", React.useState() -> "React.useState", foo() -> None
	"""
	if isinstance(callee, Identifier):
		last = callee.name
	elif isinstance(callee, Member):
		last = callee.prop
	else:
		return None
	if not _HOOK_NAME.match(last):
		return None
	return source_text(callee)


def is_builtin_hook(name: str) -> bool:
	"""useState, React.useState, R.useState... (bare or behind one namespace)."""
	qualifier, _, last = name.rpartition(".")
	if last not in BUILTIN_HOOKS:
		return False
	return qualifier == "" or qualifier.isidentifier()


class HookCallRecorder:
	"""Hook calls per function node.

	Side table keyed by node identity; the function nodes are held so their
	ids stay unique for as long as the recorder lives.
	"""

	__slots__: tuple[str, ...] = ("_calls",)

	_calls: dict[int, tuple[Node, list[HookCall]]]

	def __init__(self) -> None:
		self._calls = {}

	def record(self, fn: Node, call: HookCall) -> None:
		entry = self._calls.get(id(fn))
		if entry is None:
			entry = (fn, [])
			self._calls[id(fn)] = entry
		entry[1].append(call)
		logger.debug("Hook call %s{%s} in %s", call.name, call.key, type(fn).__name__)

	def calls_for(self, fn: Node) -> list[HookCall]:
		entry = self._calls.get(id(fn))
		return list(entry[1]) if entry is not None else []

	def signature(self, fn: Node) -> HookSignature | None:
		"""Signature of a function, or None if it made no hook calls."""
		entry = self._calls.get(id(fn))
		if entry is None:
			return None
		calls = entry[1]
		return HookSignature(
			key="\n".join(f"{call.name}{{{call.key}}}" for call in calls),
			custom_hooks=[call.callee for call in calls if not is_builtin_hook(call.name)],
		)
