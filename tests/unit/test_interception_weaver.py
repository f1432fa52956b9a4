"""Unit tests for AuditWeaver and AuditedCallable.

Tests cover:
- Class weaving (public functions only) and method-level weaving
- Subclass weaving (overrides and new methods)
- Phase triggers: BEFORE + exactly one of AFTER_RETURNING / AFTER_THROWING
- Business results and errors pass through untouched
- Unbound access, module-level functions, async functions
- Dispatcher faults never reach the business call
- Decorator validation
"""

import inspect
from unittest.mock import MagicMock

import pytest

from auditaspect.domain.enums import Phase
from auditaspect.domain.value_objects import declared_config
from auditaspect.interception import AuditedCallable, AuditWeaver


@pytest.fixture
def dispatcher():
    """MagicMock dispatcher capturing (phase, context) pairs."""
    return MagicMock()


@pytest.fixture
def weaver(make_weaver, dispatcher):
    return make_weaver(dispatcher)


def dispatched(dispatcher):
    return [call[0] for call in dispatcher.dispatch.call_args_list]


@pytest.mark.unit
class TestClassWeaving:
    """Test which members a class decorator weaves."""

    def test_public_functions_woven(self, weaver):
        @weaver.auditable("a")
        class Service:
            def run(self):
                pass

            def _private(self):
                pass

            @staticmethod
            def util():
                pass

            @classmethod
            def build(cls):
                pass

            @property
            def name(self):
                return "svc"

        members = vars(Service)
        assert isinstance(members["run"], AuditedCallable)
        assert not isinstance(members["_private"], AuditedCallable)
        assert isinstance(members["util"], staticmethod)
        assert isinstance(members["build"], classmethod)
        assert isinstance(members["name"], property)
        assert declared_config(Service).handlers == ("a",)

    def test_method_level_decorator_kept(self, weaver):
        @weaver.auditable("a")
        class Service:
            @weaver.auditable("b")
            def run(self):
                pass

        audited = vars(Service)["run"]
        assert declared_config(audited).handlers == ("b",)
        assert audited.owner is Service
        assert audited.attr_name == "run"

    def test_metadata_preserved(self, weaver):
        @weaver.auditable("a")
        class Service:
            def run(self, value: int) -> int:
                """Double it."""
                return value * 2

        assert Service.run.__name__ == "run"
        assert Service.run.__doc__ == "Double it."
        assert list(inspect.signature(Service.run).parameters) == ["self", "value"]
        assert Service().run.__name__ == "run"


@pytest.mark.unit
class TestPhaseTriggers:
    """Test the interception points."""

    def test_successful_call(self, weaver, dispatcher):
        @weaver.auditable("a")
        class Service:
            def ok(self, s):
                return s.upper()

        service = Service()
        result = service.ok("abc")

        assert result == "ABC"
        calls = dispatched(dispatcher)
        assert [phase for phase, _ in calls] == [Phase.BEFORE, Phase.AFTER_RETURNING]
        before_ctx, after_ctx = calls[0][1], calls[1][1]
        assert before_ctx.target == "Service#ok"
        assert before_ctx.instance is service
        assert before_ctx.args == ("abc",)
        assert after_ctx.return_value == "ABC"
        assert after_ctx.invocation_id == before_ctx.invocation_id

    def test_raising_call_reraises_same_error(self, weaver, dispatcher):
        error = ValueError("expected")

        @weaver.auditable("a")
        class Service:
            def boom(self):
                raise error

        with pytest.raises(ValueError) as exc_info:
            Service().boom()

        assert exc_info.value is error
        calls = dispatched(dispatcher)
        assert [phase for phase, _ in calls] == [Phase.BEFORE, Phase.AFTER_THROWING]
        assert calls[1][1].error is error

    def test_base_exception_not_dispatched_as_after_throwing(self, weaver, dispatcher):
        @weaver.auditable("a")
        def interrupted():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            interrupted()

        assert [phase for phase, _ in dispatched(dispatcher)] == [Phase.BEFORE]

    def test_kwargs_forwarded(self, weaver, dispatcher):
        @weaver.auditable("a")
        def greet(name, *, punctuation="!"):
            return f"hi {name}{punctuation}"

        assert greet("bob", punctuation="?") == "hi bob?"
        context = dispatched(dispatcher)[0][1]
        assert context.args == ("bob",)
        assert dict(context.kwargs) == {"punctuation": "?"}
        assert context.instance is None

    def test_unbound_access_through_class(self, weaver, dispatcher):
        @weaver.auditable("a")
        class Service:
            def ok(self, s):
                return s * 2

        service = Service()

        assert Service.ok(service, "x") == "xx"
        context = dispatched(dispatcher)[0][1]
        assert context.instance is service
        assert context.site.target_type is Service

    def test_runtime_subclass_is_target_type(self, weaver, dispatcher):
        @weaver.auditable("a")
        class Service:
            def ok(self):
                return 1

        class Special(Service):
            pass

        Special().ok()

        assert dispatched(dispatcher)[0][1].target == "Special#ok"


@pytest.mark.unit
class TestSubclassWeaving:
    """Test that subclasses of woven classes are intercepted."""

    def test_undecorated_override_is_woven(self, weaver, dispatcher):
        @weaver.auditable("a", "b")
        class Service:
            @weaver.auditable("a", "failing", "b")
            def boom(self):
                raise ValueError("base")

        class Special(Service):
            def boom(self):
                raise ValueError("special")

        with pytest.raises(ValueError, match="special"):
            Special().boom()

        assert isinstance(vars(Special)["boom"], AuditedCallable)
        assert [(phase, ctx.target) for phase, ctx in dispatched(dispatcher)] == [
            (Phase.BEFORE, "Special#boom"),
            (Phase.AFTER_THROWING, "Special#boom"),
        ]

    def test_new_subclass_method_is_woven(self, weaver, dispatcher):
        @weaver.auditable("a")
        class Service:
            pass

        class Special(Service):
            def extra(self):
                return "x"

            def _hidden(self):
                return "y"

        assert Special().extra() == "x"
        assert not isinstance(vars(Special)["_hidden"], AuditedCallable)
        assert [phase for phase, _ in dispatched(dispatcher)] == [
            Phase.BEFORE,
            Phase.AFTER_RETURNING,
        ]

    def test_method_level_only_base_watches_subclasses(self, weaver, dispatcher):
        class Service:
            @weaver.auditable("solo")
            def run(self):
                return 1

        class Special(Service):
            def run(self):
                return 2

        class Deeper(Special):
            def run(self):
                return 3

        assert Deeper().run() == 3
        assert isinstance(vars(Special)["run"], AuditedCallable)
        assert dispatched(dispatcher)[0][1].target == "Deeper#run"

    def test_own_init_subclass_still_runs(self, weaver):
        seen = []

        @weaver.auditable("a")
        class Service:
            def __init_subclass__(cls, tag=None, **kwargs):
                super().__init_subclass__(**kwargs)
                seen.append((cls.__name__, tag))

        class Special(Service, tag="special"):
            def run(self):
                pass

        assert seen == [("Special", "special")]
        assert isinstance(vars(Special)["run"], AuditedCallable)


@pytest.mark.unit
class TestAsyncWeaving:
    """Test coroutine functions."""

    @pytest.mark.asyncio
    async def test_async_method(self, weaver, dispatcher):
        @weaver.auditable("a")
        class Service:
            async def fetch(self, key):
                return key.upper()

        bound = Service().fetch

        assert inspect.iscoroutinefunction(bound)
        assert await bound("k") == "K"
        assert [phase for phase, _ in dispatched(dispatcher)] == [
            Phase.BEFORE,
            Phase.AFTER_RETURNING,
        ]

    @pytest.mark.asyncio
    async def test_async_function_raising(self, weaver, dispatcher):
        @weaver.auditable("a")
        async def fail():
            raise ValueError("expected")

        assert inspect.iscoroutinefunction(fail)
        with pytest.raises(ValueError):
            await fail()

        assert [phase for phase, _ in dispatched(dispatcher)] == [
            Phase.BEFORE,
            Phase.AFTER_THROWING,
        ]

    @pytest.mark.asyncio
    async def test_before_fires_when_awaited(self, weaver, dispatcher):
        @weaver.auditable("a")
        async def work():
            return 1

        coro = work()
        assert dispatcher.dispatch.call_count == 0

        await coro

        assert dispatcher.dispatch.call_count == 2


@pytest.mark.unit
class TestEngineFaultIsolation:
    """Test that dispatcher faults never reach the business call."""

    def test_dispatcher_exception_logged_not_raised(self, weaver, dispatcher, mock_logger):
        dispatcher.dispatch.side_effect = RuntimeError("engine broke")

        @weaver.auditable("a")
        def ok():
            return "fine"

        assert ok() == "fine"
        assert mock_logger.error.call_count == 2
        assert mock_logger.error.call_args[0][0] == "audit_dispatch_failed"

    def test_business_error_survives_engine_fault(self, weaver, dispatcher):
        dispatcher.dispatch.side_effect = RuntimeError("engine broke")

        @weaver.auditable("a")
        def boom():
            raise ValueError("expected")

        with pytest.raises(ValueError, match="expected"):
            boom()

    def test_failing_logger_still_contained(self):
        broken = MagicMock()
        broken.dispatch.side_effect = RuntimeError("engine broke")
        logger = MagicMock()
        logger.error.side_effect = RuntimeError("logger broke")
        weaver = AuditWeaver(
            dispatcher_provider=lambda: broken, logger_provider=lambda: logger
        )

        @weaver.auditable("a")
        def ok():
            return 1

        assert ok() == 1


@pytest.mark.unit
class TestDecoratorValidation:
    """Test decorator arguments and targets."""

    def test_non_string_handler_rejected(self, weaver):
        with pytest.raises(TypeError):
            weaver.auditable(["a"])

    def test_staticmethod_rejected(self, weaver):
        with pytest.raises(TypeError):
            weaver.auditable("a")(staticmethod(lambda: None))

    def test_non_callable_rejected(self, weaver):
        with pytest.raises(TypeError):
            weaver.auditable("a")(42)

    def test_redecorating_replaces_config(self, weaver):
        @weaver.auditable("outer")
        @weaver.auditable("inner")
        def fn():
            pass

        assert isinstance(fn, AuditedCallable)
        assert not isinstance(fn.__wrapped__, AuditedCallable)
        assert declared_config(fn).handlers == ("outer",)
