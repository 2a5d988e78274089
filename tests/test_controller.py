"""
Controller System (controller/base.py, controller/metadata.py)

Tests Controller base, action name collection, parameter introspection,
ExecutionContext and metadata extraction.
"""

import functools

import pytest

from sodor.controller import (
    Controller,
    ExecutionContext,
    Params,
    POST,
    Private,
    Special,
    action_names,
    parameter_names,
    extract_controller_metadata,
)
from sodor.controller.metadata import ActionMetadata, action_owner, resolve_action
from sodor.faults import IntrospectionFault, ReservedActionFault


# ============================================================================
# Controller base class
# ============================================================================

class TestControllerBase:

    def test_saves_request(self):
        request = object()
        assert Controller(request).request is request

    def test_default_base(self):
        class Users(Controller):
            pass

        assert Users.base is None
        assert Users.base_path() == "users"

    def test_base_override(self):
        class Users(Controller):
            base = "people"

        assert Users.base_path() == "people"

    def test_root_sentinel_has_no_actions(self):
        assert action_names(Controller) == []
        assert Controller.action_names() == []
        assert Controller.routes() == []


# ============================================================================
# Action names
# ============================================================================

class TestActionNames:

    def test_declaration_order(self):
        class Users(Controller):
            def show(self, id): pass
            def list(self): pass
            def create(self, id): pass

        assert action_names(Users) == ["show", "list", "create"]

    def test_private_and_dunder_names_skipped(self):
        class Users(Controller):
            base = "people"

            def __init__(self, request):
                super().__init__(request)

            def _helper(self): pass

            @classmethod
            def context(cls, action): return {}

            @property
            def current(self): return None

            def show(self): pass

        assert action_names(Users) == ["show"]

    def test_inherited_actions_first(self):
        class Base(Controller):
            def a(self): pass
            def b(self): pass

        class Child(Base):
            def c(self): pass

        assert action_names(Child) == ["a", "b", "c"]

    def test_override_keeps_single_entry(self):
        class Base(Controller):
            def a(self): pass
            def b(self): pass

        class Child(Base):
            def c(self): pass
            def a(self): return "override"

        names = action_names(Child)
        assert names == ["a", "b", "c"]
        assert resolve_action(Child, "a") is Child.__dict__["a"]
        assert action_owner(Child, "a") is Child
        assert action_owner(Child, "b") is Base

    def test_superset_of_ancestor_actions(self):
        class Grand(Controller):
            def g(self): pass

        class Parent(Grand):
            def p(self): pass

        class Child(Parent):
            def c(self): pass

        names = action_names(Child)
        assert set(action_names(Parent)) <= set(names)
        assert set(action_names(Grand)) <= set(names)
        assert len(names) >= 1

    def test_mixin_actions_collected(self):
        class Health:
            def ping(self): pass

        class Api(Health, Controller):
            def status(self): pass

        assert action_names(Api) == ["ping", "status"]

    def test_classmethod_entry_point(self):
        class Users(Controller):
            def show(self): pass

        assert Users.action_names() == ["show"]

    @pytest.mark.parametrize(
        "name", ["routes", "handle", "make_paths", "base_path", "action_names"],
    )
    def test_entry_point_name_rejected(self, name):
        Feed = type("Feed", (Controller,), {name: lambda self: None, "show": lambda self: None})

        with pytest.raises(ReservedActionFault) as exc:
            action_names(Feed)
        assert exc.value.code == "ACTION_RESERVED"
        assert exc.value.metadata == {"controller": "Feed", "action": name}

    def test_entry_point_name_rejected_in_mixin(self):
        class Feeds:
            def routes(self): pass

        class Feed(Feeds, Controller):
            def show(self): pass

        with pytest.raises(ReservedActionFault, match="Feed.routes"):
            Feed.action_names()

    def test_classmethod_override_allowed(self):
        class Feed(Controller):
            @classmethod
            def routes(cls):
                return super().routes()

            def show(self): pass

        assert action_names(Feed) == ["show"]


# ============================================================================
# Parameter names
# ============================================================================

class TestParameterNames:

    def test_signature_order(self):
        def action(self, id, slug):
            pass

        assert parameter_names(action) == ["id", "slug"]

    def test_no_params(self):
        def action(self):
            pass

        assert parameter_names(action) == []

    def test_varargs_and_kwargs_ignored(self):
        def action(self, id, *rest, flag=False, **extra):
            pass

        assert parameter_names(action) == ["id"]

    def test_explicit_params_win(self):
        @Params("year", "month")
        def action(self, *parts):
            pass

        assert parameter_names(action) == ["year", "month"]

    def test_decorated_function_follows_wrapped(self):
        def action(self, id):
            pass

        @functools.wraps(action)
        def wrapper(*args, **kwargs):
            return action(*args, **kwargs)

        assert parameter_names(wrapper) == ["id"]

    def test_non_callable(self):
        with pytest.raises(IntrospectionFault) as exc:
            parameter_names("show")
        assert exc.value.code == "INTROSPECTION_FAILED"

    def test_unreadable_signature(self):
        class Opaque:
            __signature__ = 42

            def __call__(self, id):
                pass

        with pytest.raises(IntrospectionFault):
            parameter_names(Opaque())


# ============================================================================
# ExecutionContext
# ============================================================================

class TestExecutionContext:

    def _controller(self):
        class Users(Controller):
            greeting = "hello"

            def show(self, id):
                return id

        return Users(request="req")

    def test_controller_attributes_first(self):
        ctx = ExecutionContext(self._controller(), {"request": "shared", "db": "db"})
        assert ctx.request == "req"
        assert ctx.db == "db"

    def test_controller_methods_available(self):
        ctx = ExecutionContext(self._controller(), {})
        assert ctx.show(3) == 3

    def test_object_shared_context(self):
        class Shared:
            db = "sqlite"

        ctx = ExecutionContext(self._controller(), Shared())
        assert ctx.db == "sqlite"
        assert ctx.greeting == "hello"

    def test_missing_attribute(self):
        ctx = ExecutionContext(self._controller(), {})
        with pytest.raises(AttributeError, match="no attribute 'nope'"):
            _ = ctx.nope

    def test_writes_land_on_controller(self):
        controller = self._controller()
        shared = {}
        ctx = ExecutionContext(controller, shared)
        ctx.count = 1
        assert controller.count == 1
        assert shared == {}

    def test_shared_keys_shadow_class_attributes(self):
        ctx = ExecutionContext(self._controller(), {"base": "primary-db", "routes": ["r"], "greeting": "hi"})
        assert ctx.base == "primary-db"
        assert ctx.routes == ["r"]
        assert ctx.greeting == "hi"

    def test_class_attributes_after_shared(self):
        ctx = ExecutionContext(self._controller(), {})
        assert ctx.greeting == "hello"
        assert ctx.base is None

    def test_methods_bound_to_context(self):
        class Users(Controller):
            def title(self):
                return self.site

        ctx = ExecutionContext(Users(request="req"), {"site": "Sodor"})
        assert ctx.title() == "Sodor"
        assert ctx.title.__self__ is ctx

    def test_repr(self):
        assert repr(ExecutionContext(self._controller(), None)) == "ExecutionContext(Users)"


# ============================================================================
# Metadata extraction
# ============================================================================

class TestControllerMetadata:

    def test_extract(self, users_controller):
        meta = extract_controller_metadata(users_controller)

        assert meta.class_name == "Users"
        assert meta.base_path == "users"
        assert meta.module_path.endswith(":Users")
        assert [a.name for a in meta.actions] == ["show", "list", "create"]

        create = meta.get_action("create")
        assert isinstance(create, ActionMetadata)
        assert create.http_method == "post"
        assert create.params == ["id"]
        assert create.paths == ["/users/create/:id", "/u/new/:id"]
        assert create.owner == "Users"

    def test_unrouted_actions_listed(self):
        class Jobs(Controller):
            @Private()
            def run(self): pass

            @Special()
            def tick(self): pass

        meta = extract_controller_metadata(Jobs, "jobs:Jobs")
        assert meta.module_path == "jobs:Jobs"
        assert [a.routed for a in meta.actions] == [False, False]

    def test_get_missing_action(self, users_controller):
        assert extract_controller_metadata(users_controller).get_action("nope") is None

    def test_to_dict(self):
        class Users(Controller):
            @POST()
            def create(self, id): pass

        data = extract_controller_metadata(Users, "app:Users").to_dict()
        assert data == {
            "controller": "app:Users",
            "base": "users",
            "actions": [{
                "name": "create",
                "owner": "Users",
                "method": "post",
                "params": ["id"],
                "paths": ["/users/create/:id"],
            }],
        }
