"""
Controller Metadata Extraction

Reads routing metadata off Controller classes: the ordered set of action
names visible on a class, the parameter names of each action, and a
summary dataclass used by inspection tooling.
"""

from typing import Any, Callable, Dict, List, Optional, Type
from dataclasses import dataclass, field
import inspect

from .base import ENTRY_POINTS, Controller
from .decorators import has_tag
from ..faults import IntrospectionFault, ReservedActionFault


@dataclass
class ActionMetadata:
    """
    Metadata for a single controller action.

    Attributes:
        name: Action (method) name
        function: The function reached by attribute lookup on the class
        owner: Name of the class that defines the function
        http_method: Verb the action answers to
        params: Ordered parameter names
        paths: Path patterns the action produces (empty when private)
    """
    name: str
    function: Callable[..., Any]
    owner: str
    http_method: str = 'get'
    params: List[str] = field(default_factory=list)
    paths: List[str] = field(default_factory=list)

    @property
    def routed(self) -> bool:
        return bool(self.paths)


@dataclass
class ControllerMetadata:
    """
    Complete metadata for a Controller class.

    Attributes:
        class_name: Controller class name
        module_path: Full import path (e.g., "app.users:Users")
        base_path: Base path segment(s) used for default routes
        actions: Action metadata in derivation order
    """
    class_name: str
    module_path: str
    base_path: str
    actions: List[ActionMetadata] = field(default_factory=list)

    def get_action(self, name: str) -> Optional[ActionMetadata]:
        for action in self.actions:
            if action.name == name:
                return action
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "controller": self.module_path,
            "base": self.base_path,
            "actions": [
                {
                    "name": a.name,
                    "owner": a.owner,
                    "method": a.http_method,
                    "params": list(a.params),
                    "paths": list(a.paths),
                }
                for a in self.actions
            ],
        }


def _chain(controller_class: Type) -> List[Type]:
    """Classes from the one nearest the root sentinel down to `controller_class`."""
    return [
        klass for klass in reversed(controller_class.__mro__)
        if klass not in Controller.__mro__
    ]


def _own_actions(klass: Type) -> List[str]:
    return [
        name for name, value in klass.__dict__.items()
        if inspect.isfunction(value) and not name.startswith('_')
    ]


def action_names(controller_class: Type) -> List[str]:
    """
    Ordered action names visible on `controller_class`.

    Ancestors come first; a name re-declared by a subclass keeps its
    first position and resolves to the override through normal lookup.
    The root sentinel `Controller` contributes nothing.

    Raises:
        ReservedActionFault: If an action is named after a Controller
            entry point such as `routes`
    """
    if controller_class is Controller:
        return []

    names: Dict[str, None] = {}
    for klass in _chain(controller_class):
        for name in _own_actions(klass):
            if name in ENTRY_POINTS:
                raise ReservedActionFault(controller_class.__name__, name)
            names.setdefault(name, None)
    return list(names)


def resolve_action(controller_class: Type, name: str) -> Callable[..., Any]:
    """Return the function that `name` resolves to on `controller_class`."""
    return inspect.getattr_static(controller_class, name)


def action_owner(controller_class: Type, name: str) -> Type:
    """Return the class whose body defines the visible `name`."""
    for klass in controller_class.__mro__:
        if name in klass.__dict__:
            return klass
    raise AttributeError(f"{controller_class.__name__} has no action '{name}'")


def parameter_names(func: Any) -> List[str]:
    """
    Ordered parameter names of an action.

    An explicit `Params(...)` tag wins. Otherwise the positional
    parameters of the signature are used, minus the leading `self`.

    Raises:
        IntrospectionFault: If `func` is not callable or has no readable
            signature.
    """
    if not callable(func):
        raise IntrospectionFault(func, "not callable")

    if inspect.isfunction(func):
        declared = has_tag(func, 'params')
        if declared is not None:
            return list(declared)

    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise IntrospectionFault(func, str(e)) from e

    positional = (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    )
    names = [
        name for name, param in sig.parameters.items()
        if param.kind in positional
    ]
    if inspect.isfunction(func) and names and names[0] == 'self':
        names = names[1:]
    return names


def extract_controller_metadata(
    controller_class: Type,
    module_path: Optional[str] = None,
    config: Optional[Any] = None,
) -> ControllerMetadata:
    """
    Extract metadata from a Controller class.

    Args:
        controller_class: The Controller class to analyze
        module_path: Full import path (derived from the class when omitted)
        config: Optional RoutingConfig

    Returns:
        ControllerMetadata with every visible action, routed or not
    """
    from .compiler import base_path, http_method, make_paths

    if module_path is None:
        module_path = f"{controller_class.__module__}:{controller_class.__name__}"

    actions = []
    for name in action_names(controller_class):
        function = resolve_action(controller_class, name)
        params = parameter_names(function)
        actions.append(ActionMetadata(
            name=name,
            function=function,
            owner=action_owner(controller_class, name).__name__,
            http_method=http_method(function, config),
            params=params,
            paths=make_paths(controller_class, name, params, config),
        ))

    return ControllerMetadata(
        class_name=controller_class.__name__,
        module_path=module_path,
        base_path=base_path(controller_class),
        actions=actions,
    )
