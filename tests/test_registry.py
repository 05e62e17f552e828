import unittest

from safe_emitter import (
    CapacityExceeded,
    InvalidArgument,
    SafeEmitter,
    Symbol,
    UnsupportedOperation,
)
from safe_emitter.core import ListenerRegistry


def noop(*_):
    pass


class TestRegistration(unittest.TestCase):
    def setUp(self):
        self.emitter = SafeEmitter()

    def test_event_names_keep_registration_order(self):
        """Test that event_names() lists str and Symbol names in insertion order."""
        sym = Symbol("hey!")
        self.emitter.on("foo", noop)
        self.emitter.on("bar", noop)
        self.emitter.on(sym, noop)

        self.assertEqual(self.emitter.event_names(), ["foo", "bar", sym])

    def test_symbols_are_compared_by_identity(self):
        first, second = Symbol("same"), Symbol("same")
        self.emitter.on(first, noop)

        self.assertEqual(self.emitter.listener_count(first), 1)
        self.assertEqual(self.emitter.listener_count(second), 0)
        self.assertEqual(repr(first), "Symbol(same)")

    def test_listener_count(self):
        self.emitter.on("foo", noop)
        self.emitter.on("foo", lambda: None)
        self.emitter.on("bar", noop)

        self.assertEqual(self.emitter.listener_count("foo"), 2)
        self.assertEqual(self.emitter.listener_count("bar"), 1)
        self.assertEqual(self.emitter.listener_count("hey"), 0)

    def test_listeners_returns_copy_or_none(self):
        """Test that listeners() returns a copy for known names and None otherwise."""
        self.emitter.on("foo", noop)

        listeners = self.emitter.listeners("foo")
        self.assertEqual(listeners, [noop])
        listeners.append(print)
        self.assertEqual(self.emitter.listener_count("foo"), 1)
        self.assertIsNone(self.emitter.listeners("bar"))
        self.assertEqual(self.emitter.raw_listeners("foo"), [noop])

    def test_prepend_listener(self):
        """Test that prepend_listener puts the listener before existing ones."""
        first, second, third = (lambda: 1), (lambda: 2), (lambda: 3)
        self.emitter.on("foo", first)
        self.emitter.on("foo", second)
        self.emitter.prepend_listener("foo", third)

        self.assertEqual(self.emitter.listeners("foo"), [third, first, second])

    def test_aliases(self):
        self.emitter.add_event_listener("foo", noop)
        self.emitter.add_listener("foo", noop)
        self.assertEqual(self.emitter.listener_count("foo"), 2)

        self.assertTrue(self.emitter.remove_event_listener("foo", noop))
        self.assertTrue(self.emitter.remove_listener("foo", noop))
        self.assertEqual(self.emitter.listener_count("foo"), 0)

    def test_invalid_event_name(self):
        for call in (
            lambda: self.emitter.on(10, noop),
            lambda: self.emitter.prepend_listener(10, noop),
            lambda: self.emitter.off(10, noop),
            lambda: self.emitter.remove_all_listeners(10),
            lambda: self.emitter.stop_propagation(10),
            lambda: self.emitter.once(10),
            lambda: self.emitter.on(None, noop),
            lambda: self.emitter.on(True, noop),
        ):
            with self.assertRaises(InvalidArgument) as ctx:
                call()
            self.assertIsInstance(ctx.exception, TypeError)
            self.assertEqual(str(ctx.exception), "event_name should be a str or Symbol")

    def test_invalid_listener(self):
        for call in (
            lambda: self.emitter.on("foo", 10),
            lambda: self.emitter.prepend_listener("foo", "bar"),
            lambda: self.emitter.off("foo", 10),
        ):
            with self.assertRaises(InvalidArgument) as ctx:
                call()
            self.assertEqual(str(ctx.exception), "listener should be callable")
        self.assertEqual(self.emitter.event_names(), [])

    def test_catch_requires_callable(self):
        with self.assertRaises(InvalidArgument) as ctx:
            self.emitter.catch("10")
        self.assertEqual(str(ctx.exception), "error_handler should be callable")

    def test_catch_is_chainable(self):
        self.assertIs(self.emitter.catch(noop), self.emitter)

    def test_prepend_once_listener_is_not_implemented(self):
        with self.assertRaises(UnsupportedOperation) as ctx:
            self.emitter.prepend_once_listener("foo", noop)
        self.assertIsInstance(ctx.exception, NotImplementedError)
        self.assertEqual(
            str(ctx.exception),
            "SafeEmitter doesn't implement the method prepend_once_listener"
        )

    def test_emit_without_listeners_is_a_noop(self):
        """Test that emitting an unknown event needs no running loop."""
        self.assertIsNone(self.emitter.emit("foo", 1, 2))

    def test_introspection_never_fails(self):
        self.assertEqual(self.emitter.listener_count(["not", "hashable"]), 0)
        self.assertIsNone(self.emitter.listeners(10))
        self.assertFalse(self.emitter.has_listener({}, noop))
        self.assertIsNone(self.emitter.emit([1]))


class TestRemoval(unittest.TestCase):
    def setUp(self):
        self.emitter = SafeEmitter()

    def test_off_removes_listener(self):
        def listener():
            pass

        self.emitter.on("foo", listener)

        self.assertFalse(self.emitter.off("bar", lambda: None))
        self.assertFalse(self.emitter.off("foo", lambda: None))
        self.assertTrue(self.emitter.off("foo", listener))
        self.assertEqual(self.emitter.listeners("foo"), [])
        self.assertEqual(self.emitter.event_names(), ["foo"])

    def test_off_removes_one_occurrence(self):
        self.emitter.on("foo", noop)
        self.emitter.on("foo", noop)

        self.assertTrue(self.emitter.off("foo", noop))
        self.assertEqual(self.emitter.listener_count("foo"), 1)

    def test_off_matches_bound_methods(self):
        class Handler:
            def handle(self):
                pass

        handler = Handler()
        self.emitter.on("foo", handler.handle)
        self.assertTrue(self.emitter.has_listener("foo", handler.handle))
        self.assertFalse(self.emitter.off("foo", Handler().handle))
        self.assertTrue(self.emitter.off("foo", handler.handle))

    def test_off_ignores_equal_but_distinct_callables(self):
        """Test that a callable comparing equal to everything removes nothing."""
        class AlwaysEqual:
            def __call__(self):
                pass

            def __eq__(self, other):
                return True

            def __hash__(self):
                return 0

        listener = lambda: None
        self.emitter.on("foo", listener)

        self.assertFalse(self.emitter.has_listener("foo", AlwaysEqual()))
        self.assertFalse(self.emitter.off("foo", AlwaysEqual()))
        self.assertEqual(self.emitter.listeners("foo"), [listener])

    def test_remove_all_listeners(self):
        self.emitter.on("foo", noop)
        self.emitter.on("bar", noop)
        self.emitter.remove_all_listeners()

        self.assertEqual(self.emitter.listener_count("foo"), 0)
        self.assertEqual(self.emitter.listener_count("bar"), 0)
        self.assertEqual(self.emitter.event_names(), [])
        self.assertIsNone(self.emitter.listeners("foo"))

    def test_remove_all_listeners_for_event(self):
        self.emitter.on("foo", noop)
        self.emitter.on("bar", noop)
        self.emitter.remove_all_listeners("foo")
        self.emitter.remove_all_listeners("unknown")

        self.assertEqual(self.emitter.listener_count("foo"), 0)
        self.assertEqual(self.emitter.listener_count("bar"), 1)
        self.assertEqual(self.emitter.event_names(), ["bar"])

    def test_cleared_name_is_appended_again(self):
        self.emitter.on("foo", noop)
        self.emitter.on("bar", noop)
        self.emitter.remove_all_listeners("foo")
        self.emitter.on("foo", noop)

        self.assertEqual(self.emitter.event_names(), ["bar", "foo"])


class TestWithoutRunningLoop(unittest.TestCase):
    """Registry changes outside a running loop skip meta-events instead of failing."""

    def setUp(self):
        self.emitter = SafeEmitter()
        self.emitter.on("newListener", noop)
        self.emitter.on("removeListener", noop)

    def test_on_with_meta_listener(self):
        self.emitter.on("foo", noop)
        self.emitter.prepend_listener("foo", print)

        self.assertEqual(self.emitter.listeners("foo"), [print, noop])

    def test_off_with_meta_listener(self):
        self.emitter.on("foo", noop)

        self.assertTrue(self.emitter.off("foo", noop))
        self.assertEqual(self.emitter.listener_count("foo"), 0)
        self.assertFalse(self.emitter.off("foo", noop))

class TestCapacity(unittest.TestCase):
    def setUp(self):
        self.emitter = SafeEmitter()

    def test_default_capacity(self):
        self.assertEqual(self.emitter.get_max_listeners(), SafeEmitter.default_max_listeners)
        self.assertEqual(SafeEmitter.default_max_listeners, 10)

    def test_set_max_listeners(self):
        self.emitter.set_max_listeners(20)
        self.assertEqual(self.emitter.get_max_listeners(), 20)
        self.emitter.set_max_listeners(-5)
        self.assertEqual(self.emitter.get_max_listeners(), 10)

    def test_set_max_listeners_rejects_non_numbers(self):
        for value in ("10", None, True, float("nan")):
            with self.assertRaises(InvalidArgument) as ctx:
                self.emitter.set_max_listeners(value)
            self.assertEqual(str(ctx.exception), "max_listeners should be a number")

    def test_capacity_saturates(self):
        """Test that registrations beyond the limit fail without mutating the list."""
        self.emitter.set_max_listeners(3)
        for _ in range(3):
            self.emitter.on("foo", noop)

        with self.assertRaises(CapacityExceeded) as ctx:
            self.emitter.on("foo", noop)
        with self.assertRaises(CapacityExceeded):
            self.emitter.prepend_listener("foo", noop)

        self.assertEqual(ctx.exception.limit, 3)
        self.assertEqual(
            str(ctx.exception), "The maximum number of listeners (3) has been reached."
        )
        self.assertEqual(self.emitter.listener_count("foo"), 3)
        self.emitter.on("bar", noop)
        self.assertEqual(self.emitter.listener_count("bar"), 1)

    def test_zero_capacity_refuses_everything(self):
        self.emitter.set_max_listeners(0)
        with self.assertRaises(CapacityExceeded):
            self.emitter.on("foo", noop)
        self.assertIsNone(self.emitter.listeners("foo"))

    def test_negative_resets_to_class_default(self):
        class SmallEmitter(SafeEmitter):
            default_max_listeners = 2

        emitter = SmallEmitter()
        self.assertEqual(emitter.get_max_listeners(), 2)
        emitter.set_max_listeners(50)
        emitter.set_max_listeners(-1)
        self.assertEqual(emitter.get_max_listeners(), 2)


class TestListenerRegistry(unittest.TestCase):
    def test_snapshot_is_immutable_copy(self):
        registry = ListenerRegistry()
        registry.register("foo", noop)

        snapshot = registry.snapshot("foo")
        registry.register("foo", print, at_front=True)

        self.assertEqual(snapshot, (noop,))
        self.assertEqual(registry.snapshot("foo"), (print, noop))
        self.assertEqual(registry.snapshot("unknown"), ())

    def test_unregister_unknown(self):
        registry = ListenerRegistry()
        self.assertFalse(registry.unregister("foo", noop))
        registry.register("foo", noop)
        self.assertFalse(registry.unregister("foo", print))
        self.assertTrue(registry.unregister("foo", noop))
        self.assertFalse(registry.unregister("foo", noop))


if __name__ == '__main__':
    unittest.main()
