"""
Tests for leadview.fragments and leadview.extensions

Covers:
- Registration, overwrite, lookup
- Installers run before queued extensions
- Extension queue: FIFO, drained exactly once, push after drain raises
- Queue-then-construct matches construct-then-register
"""

import pytest

from leadview import ExtensionQueueClosedError
from leadview.extensions import ExtensionQueue
from leadview.fragments import Fragment, FragmentRegistry


def _render(text):
    return lambda lead, payload: text


class TestFragmentRegistry:

    def test_register_and_get(self):
        registry = FragmentRegistry()
        registry.register("hello", Fragment("hello", _render("<p>hi</p>")))
        assert "hello" in registry
        assert registry.get("hello").render(None, None) == "<p>hi</p>"

    def test_get_unknown_returns_none(self):
        assert FragmentRegistry().get("nope") is None

    def test_register_bare_callable(self):
        registry = FragmentRegistry()
        fragment = registry.register("plain", _render("x"))
        assert fragment.predicate is None
        assert fragment.name == "plain"

    def test_register_non_callable_raises(self):
        with pytest.raises(TypeError):
            FragmentRegistry().register("bad", "not callable")

    def test_reregistration_overwrites(self):
        registry = FragmentRegistry()
        registry.register("a", _render("first"))
        registry.register("a", _render("second"))
        assert len(registry) == 1
        assert registry.get("a").render(None, None) == "second"

    def test_register_renames_fragment_to_key(self):
        registry = FragmentRegistry()
        registry.register("alias", Fragment("original", _render("x")))
        assert registry.get("alias").name == "alias"

    def test_decorator_form(self):
        registry = FragmentRegistry()

        @registry.fragment("greeting", when=lambda lead, payload: True)
        def greeting(lead, payload):
            """Says hello."""
            return "hello"

        fragment = registry.get("greeting")
        assert fragment.description == "Says hello."
        assert fragment.is_eligible(None, None)

    def test_names_sorted(self):
        registry = FragmentRegistry()
        for name in ("b", "a", "c"):
            registry.register(name, _render(name))
        assert registry.names() == ["a", "b", "c"]

    def test_predicate_less_fragment_always_eligible(self):
        assert Fragment("x", _render("x")).is_eligible(None, None)


class TestExtensionQueue:

    def test_drain_is_fifo(self):
        queue = ExtensionQueue("test")
        order = []
        queue.push(lambda registry: order.append("first"))
        queue.push(lambda registry: order.append("second"))
        FragmentRegistry(extensions=queue)
        assert order == ["first", "second"]

    def test_drained_exactly_once(self):
        queue = ExtensionQueue("test")
        calls = []
        queue.push(lambda registry: calls.append(registry))
        first = FragmentRegistry(extensions=queue)
        second = FragmentRegistry(extensions=queue)
        assert calls == [first]
        assert queue.drained
        assert len(second) == 0

    def test_push_after_drain_raises(self):
        queue = ExtensionQueue("test")
        FragmentRegistry(extensions=queue)
        with pytest.raises(ExtensionQueueClosedError) as exc_info:
            queue.push(lambda registry: None)
        assert exc_info.value.code == "LV_EXTENSION_QUEUE_CLOSED"

    def test_pending_count(self):
        queue = ExtensionQueue("test")
        queue.push(lambda registry: None)
        assert len(queue) == 1
        queue.drain(FragmentRegistry())
        assert len(queue) == 0

    def test_extensions_override_installers(self):
        queue = ExtensionQueue("test")
        queue.push(lambda registry: registry.register("shared", _render("extension")))
        registry = FragmentRegistry(
            installers=[lambda registry: registry.register("shared", _render("builtin"))],
            extensions=queue,
        )
        assert registry.get("shared").render(None, None) == "extension"

    def test_queued_equals_direct_registration(self):
        """Registering through the queue yields the same contents as direct calls."""
        def install_a(registry):
            registry.register("alpha", _render("a"))

        def install_b(registry):
            registry.register("beta", _render("b"))

        queue = ExtensionQueue("test")
        queue.push(install_a)
        queue.push(install_b)
        queued = FragmentRegistry(extensions=queue)

        direct = FragmentRegistry()
        install_a(direct)
        install_b(direct)

        assert queued.names() == direct.names()
        for name in direct.names():
            assert queued.get(name).render(None, None) == direct.get(name).render(None, None)
