"""
Controller Base Class

Provides the base Controller class and the ExecutionContext used when a
controller supplies shared context for its actions.
"""

from typing import Any, Callable, List, Mapping, Optional, TYPE_CHECKING
import inspect
import types

if TYPE_CHECKING:
    from .compiler import Route

# Classmethods on Controller that actions must not shadow.
ENTRY_POINTS = ("action_names", "base_path", "make_paths", "handle", "routes")


class ExecutionContext:
    """
    Object an action body runs against when its controller defines `context`.

    Attribute reads try the controller's instance fields, then the shared
    context (a mapping or a plain object), then the controller class.
    Methods found on the class are bound to the context, so helpers an
    action calls through `self` see the shared context too. Writes always
    land on the controller.

    Attributes:
        controller: The per-request controller instance
        shared: The value returned by the controller class's `context(action)`
    """

    __slots__ = ("controller", "shared")

    def __init__(self, controller: "Controller", shared: Any):
        object.__setattr__(self, "controller", controller)
        object.__setattr__(self, "shared", shared)

    def __getattr__(self, name: str) -> Any:
        controller = object.__getattribute__(self, "controller")
        fields = vars(controller)
        if name in fields:
            return fields[name]

        shared = object.__getattribute__(self, "shared")
        if isinstance(shared, Mapping):
            if name in shared:
                return shared[name]
        elif shared is not None and hasattr(shared, name):
            return getattr(shared, name)

        try:
            attr = inspect.getattr_static(type(controller), name)
        except AttributeError:
            raise AttributeError(
                f"'{type(controller).__name__}' context has no attribute '{name}'"
            ) from None
        if inspect.isfunction(attr):
            return types.MethodType(attr, self)
        return getattr(controller, name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(object.__getattribute__(self, "controller"), name, value)

    def __repr__(self) -> str:
        controller = object.__getattribute__(self, "controller")
        return f"ExecutionContext({type(controller).__name__})"


class Controller:
    """
    Base Controller class.

    Subclasses define actions as plain methods. Routes are derived from
    method names, parameter lists, tags and inheritance; `Controller`
    itself contributes nothing.

    Class Attributes:
        base: Base path override (defaults to the lowercased class name)

    Optional hook:
        @classmethod
        def context(cls, action): return shared state for `action`

    Example:
        class Users(Controller):
            def show(self, id):
                return f"user {id}"

            @Root()
            def list(self):
                return "all users"

        Users.routes()
        # [Route('get', '/users/show/:id', ...), Route('get', '/users', ...)]
    """

    base: Optional[str] = None

    # One instance per request.
    def __init__(self, request: Any):
        self.request = request

    # Route derivation entry points

    @classmethod
    def action_names(cls) -> List[str]:
        from .metadata import action_names
        return action_names(cls)

    @classmethod
    def base_path(cls) -> str:
        from .compiler import base_path
        return base_path(cls)

    @classmethod
    def make_paths(cls, action: str, params: List[str]) -> List[str]:
        from .compiler import make_paths
        return make_paths(cls, action, params)

    @classmethod
    def handle(cls, action: str, params: List[str]) -> Callable[[Any], Any]:
        from .factory import bind_handler
        return bind_handler(cls, action, params)

    @classmethod
    def routes(cls) -> List["Route"]:
        """Collect the actions together into a list of routes."""
        from .compiler import routes
        return routes(cls)
