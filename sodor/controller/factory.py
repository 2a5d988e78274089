"""
Controller Factory

Binds controller actions into request handlers. Each call of a bound
handler creates one controller instance for one request.
"""

from typing import Any, Callable, List, Mapping, Sequence, Type
import functools
import inspect
import logging

from .base import ExecutionContext

logger = logging.getLogger("sodor.controller.factory")


def request_params(request: Any) -> Mapping[str, Any]:
    """
    Named path parameters of an incoming request.

    Looks for `request.params`, then `request.path_params`; a request
    that is itself a mapping is used directly.
    """
    for attr in ("params", "path_params"):
        params = getattr(request, attr, None)
        if params is not None:
            return params
    if isinstance(request, Mapping):
        return request
    return {}


def build_context(controller_class: Type, controller: Any, action: str) -> Any:
    """
    Object the action runs against.

    The controller itself, or an ExecutionContext layering the
    controller over `controller_class.context(action)` when the class
    defines that hook as a classmethod or staticmethod. A plain method
    named `context` is an ordinary action.
    """
    try:
        hook = inspect.getattr_static(controller_class, "context")
    except AttributeError:
        return controller
    if not isinstance(hook, (classmethod, staticmethod)):
        return controller
    return ExecutionContext(controller, controller_class.context(action))


def bind_handler(
    controller_class: Type,
    action: str,
    params: Sequence[str],
) -> Callable[[Any], Any]:
    """
    Wrap an action in a request handler.

    The handler extracts one value per declared parameter from the
    request (None when absent), instantiates the controller with the
    request, and calls the action with the values positionally. Its
    return value, awaitable or not, is passed through unchanged.

    Args:
        controller_class: Controller class owning the action
        action: Action name
        params: Ordered parameter names

    Returns:
        Callable taking the incoming request
    """
    params = list(params)
    function = inspect.getattr_static(controller_class, action)

    @functools.wraps(function)
    def handler(request: Any) -> Any:
        values = request_params(request)
        args: List[Any] = [values.get(name) for name in params]
        controller = controller_class(request)
        context = build_context(controller_class, controller, action)
        logger.debug("Dispatching %s.%s%r", controller_class.__name__, action, tuple(args))
        return getattr(type(controller), action)(context, *args)

    handler.action = action
    handler.params = tuple(params)
    handler.controller_class = controller_class
    return handler
