"""
Handler binding (controller/factory.py)

Tests parameter extraction, per-request instantiation, execution
context and pass-through of sync and async results.
"""

import asyncio
import inspect
from types import SimpleNamespace

import pytest

from sodor.controller import Controller, ExecutionContext, Private, bind_handler, request_params

from tests.conftest import make_request


# ============================================================================
# request_params
# ============================================================================

class TestRequestParams:

    def test_params_attribute(self):
        assert request_params(make_request({"id": "1"})) == {"id": "1"}

    def test_path_params_attribute(self):
        request = SimpleNamespace(path_params={"id": "2"})
        assert request_params(request) == {"id": "2"}

    def test_mapping_request(self):
        assert request_params({"id": "3"}) == {"id": "3"}

    def test_no_params(self):
        assert request_params(object()) == {}


# ============================================================================
# bind_handler
# ============================================================================

class TestBindHandler:

    def test_positional_values_in_declared_order(self):
        class Dates(Controller):
            def show(self, year, month, day):
                return (year, month, day)

        handler = bind_handler(Dates, "show", ["year", "month", "day"])
        request = make_request({"day": "3", "year": "2024", "month": "05"})

        assert handler(request) == ("2024", "05", "3")

    def test_missing_param_is_none(self):
        class Users(Controller):
            def show(self, id, slug):
                return (id, slug)

        handler = bind_handler(Users, "show", ["id", "slug"])
        assert handler(make_request({"id": "9"})) == ("9", None)

    def test_extra_request_params_ignored(self):
        class Users(Controller):
            def show(self, id):
                return id

        handler = bind_handler(Users, "show", ["id"])
        assert handler(make_request({"id": "1", "other": "x"})) == "1"

    def test_fresh_controller_per_request(self):
        seen = []

        class Users(Controller):
            def show(self):
                seen.append(self)
                return self.request

        handler = bind_handler(Users, "show", [])
        first, second = make_request(), make_request()

        assert handler(first) is first
        assert handler(second) is second
        assert seen[0] is not seen[1]
        assert isinstance(seen[0], Users)

    def test_private_action_callable_from_action(self):
        class Maths(Controller):
            @Private()
            def double(self, value):
                return int(value) * 2

            def quad(self, value):
                return self.double(self.double(value))

        handler = bind_handler(Maths, "quad", ["value"])
        assert handler(make_request({"value": "3"})) == 12

    def test_override_is_invoked(self):
        class Base(Controller):
            def show(self):
                return "base"

        class Child(Base):
            def show(self):
                return "child"

        assert bind_handler(Child, "show", [])(make_request()) == "child"

    def test_handler_attributes(self):
        class Users(Controller):
            def show(self, id):
                """Show one user."""

        handler = bind_handler(Users, "show", ["id"])

        assert handler.action == "show"
        assert handler.params == ("id",)
        assert handler.controller_class is Users
        assert handler.__name__ == "show"
        assert handler.__doc__ == "Show one user."

    def test_params_captured_at_bind_time(self):
        class Users(Controller):
            def show(self, id):
                return id

        params = ["id"]
        handler = bind_handler(Users, "show", params)
        params.append("slug")

        assert handler.params == ("id",)

    def test_exceptions_propagate(self):
        class Users(Controller):
            def show(self):
                raise LookupError("gone")

        with pytest.raises(LookupError, match="gone"):
            bind_handler(Users, "show", [])(make_request())


# ============================================================================
# Execution context
# ============================================================================

class TestExecutionContextBinding:

    def test_context_hook_called_with_action(self):
        calls = []

        class Users(Controller):
            @classmethod
            def context(cls, action):
                calls.append(action)
                return {"db": "main"}

            def show(self, id):
                return (self.db, id, type(self).__name__)

        result = bind_handler(Users, "show", ["id"])(make_request({"id": "4"}))

        assert calls == ["show"]
        assert result == ("main", "4", "ExecutionContext")

    def test_controller_fields_take_precedence(self):
        class Users(Controller):
            @classmethod
            def context(cls, action):
                return {"request": "shadowed", "title": "Users"}

            def show(self):
                return (self.request, self.title)

        request = make_request()
        assert bind_handler(Users, "show", [])(request) == (request, "Users")

    def test_action_named_context_is_not_hook(self):
        class Users(Controller):
            def context(self, topic):
                return topic

            def show(self, id):
                return (type(self).__name__, id)

        assert bind_handler(Users, "show", ["id"])(make_request({"id": "1"})) == ("Users", "1")
        assert bind_handler(Users, "context", ["topic"])(make_request({"topic": "t"})) == "t"

    def test_staticmethod_hook(self):
        class Users(Controller):
            @staticmethod
            def context(action):
                return {"action": action}

            def show(self):
                return self.action

        assert bind_handler(Users, "show", [])(make_request()) == "show"

    def test_shared_keys_named_like_class_attributes(self):
        class Users(Controller):
            @classmethod
            def context(cls, action):
                return {"base": "primary-db", "routes": ["r"]}

            def show(self):
                return (self.base, self.routes)

        assert bind_handler(Users, "show", [])(make_request()) == ("primary-db", ["r"])

    def test_helper_sees_shared_context(self):
        class Users(Controller):
            @classmethod
            def context(cls, action):
                return {"db": "main"}

            @Private()
            def lookup(self, id):
                return f"{self.db}:{id}"

            def show(self, id):
                return self.lookup(id)

        assert bind_handler(Users, "show", ["id"])(make_request({"id": "7"})) == "main:7"

    def test_without_hook_context_is_controller(self):
        class Users(Controller):
            def show(self):
                return self

        result = bind_handler(Users, "show", [])(make_request())
        assert isinstance(result, Users)
        assert not isinstance(result, ExecutionContext)


# ============================================================================
# Async actions
# ============================================================================

class TestAsyncActions:

    def test_coroutine_returned_unawaited(self):
        class Users(Controller):
            async def show(self, id):
                return f"user {id}"

        result = bind_handler(Users, "show", ["id"])(make_request({"id": "5"}))

        assert inspect.iscoroutine(result)
        assert asyncio.run(result) == "user 5"

    @pytest.mark.asyncio
    async def test_await_handler(self):
        class Users(Controller):
            async def show(self, id):
                await asyncio.sleep(0)
                return {"id": id}

        handler = Users.handle("show", ["id"])
        assert await handler(make_request({"id": "6"})) == {"id": "6"}

    @pytest.mark.asyncio
    async def test_concurrent_requests_isolated(self):
        class Counter(Controller):
            async def bump(self, n):
                self.total = getattr(self, "total", 0) + int(n)
                await asyncio.sleep(0)
                return self.total

        handler = Counter.handle("bump", ["n"])
        results = await asyncio.gather(*[
            handler(make_request({"n": str(i)})) for i in range(5)
        ])

        assert results == [0, 1, 2, 3, 4]
