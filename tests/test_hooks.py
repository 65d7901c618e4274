"""
Tests for hook call recognition and signature keys.
"""

import pytest
from pulse_refresh.hooks import (
	BUILTIN_HOOKS,
	HookCall,
	HookCallRecorder,
	hook_name,
	is_builtin_hook,
)
from pulse_refresh.nodes import Arrow, Block, Call, Identifier, Member, Subscript, emit


class TestHookName:
	def test_bare(self):
		assert hook_name(Identifier("useState")) == "useState"

	def test_member(self):
		assert hook_name(Member(Identifier("React"), "useEffect")) == "React.useEffect"

	def test_nested_member(self):
		callee = Member(Member(Identifier("a"), "b"), "useThing")
		assert hook_name(callee) == "a.b.useThing"

	@pytest.mark.parametrize("name", ["use", "user", "usestate", "Use", "fooUseBar", "_useFoo"])
	def test_not_hooks(self, name: str):
		assert hook_name(Identifier(name)) is None

	def test_computed_callee(self):
		assert hook_name(Subscript(Identifier("hooks"), Identifier("useFoo"))) is None

	def test_called_expression(self):
		assert hook_name(Call(Identifier("getHook"), [])) is None


class TestBuiltinHooks:
	@pytest.mark.parametrize("name", sorted(BUILTIN_HOOKS))
	def test_bare(self, name: str):
		assert is_builtin_hook(name)

	def test_namespaced(self):
		assert is_builtin_hook("React.useState")
		assert is_builtin_hook("R.useEffect")

	def test_custom(self):
		assert not is_builtin_hook("useFoo")
		assert not is_builtin_hook("React.useFoo")

	def test_deep_qualifier(self):
		assert not is_builtin_hook("a.b.useState")

	def test_use_transition_is_custom(self):
		assert not is_builtin_hook("useTransition")


class TestRecorder:
	def test_no_calls(self):
		recorder = HookCallRecorder()
		fn = Arrow([], Block([]))
		assert recorder.signature(fn) is None
		assert recorder.calls_for(fn) == []

	def test_key_and_custom_hooks(self):
		recorder = HookCallRecorder()
		fn = Arrow([], Block([]))
		custom = Identifier("useFoo")
		recorder.record(fn, HookCall("useState", Identifier("useState"), "[a, setA]"))
		recorder.record(fn, HookCall("useFoo", custom))
		recorder.record(fn, HookCall("React.useRef", Member(Identifier("React"), "useRef"), "ref"))
		signature = recorder.signature(fn)
		assert signature is not None
		assert signature.key == "useState{[a, setA]}\nuseFoo{}\nReact.useRef{ref}"
		assert signature.custom_hooks == [custom]

	def test_functions_are_separate(self):
		recorder = HookCallRecorder()
		outer = Arrow([], Block([]))
		inner = Arrow([], Block([]))
		recorder.record(outer, HookCall("useState", Identifier("useState")))
		recorder.record(inner, HookCall("useRef", Identifier("useRef")))
		outer_sig = recorder.signature(outer)
		inner_sig = recorder.signature(inner)
		assert outer_sig is not None and outer_sig.key == "useState{}"
		assert inner_sig is not None and inner_sig.key == "useRef{}"

	def test_namespaced_custom_hook(self):
		recorder = HookCallRecorder()
		fn = Arrow([], Block([]))
		callee = Member(Identifier("lib"), "useThing")
		recorder.record(fn, HookCall("lib.useThing", callee))
		signature = recorder.signature(fn)
		assert signature is not None
		assert [emit(c) for c in signature.custom_hooks] == ["lib.useThing"]
