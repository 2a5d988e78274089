"""
Controller Compiler - Derives routes from controller classes.

For every visible action a controller produces zero or more paths:
  1. /base/action/:params  unless the action is `special`
  2. /base/:params         if the action (or class) is `root`, or is the index action
  3. /alias/:params        for each path of the action's `alias`
A `private` action (or an action of a private controller) produces none.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Type
from dataclasses import dataclass
import logging

from .decorators import has_tag
from .metadata import (
    ControllerMetadata,
    action_names,
    extract_controller_metadata,
    parameter_names,
    resolve_action,
)
from .factory import bind_handler
from ..config import RoutingConfig
from ..paths import Path, Segment

logger = logging.getLogger("sodor.controller.compiler")

_DEFAULT_CONFIG = RoutingConfig()


@dataclass(frozen=True)
class Route:
    """A derived (verb, path pattern, handler) triple."""

    method: str
    path: str
    handler: Callable[[Any], Any]

    def __iter__(self) -> Iterator[Any]:
        return iter((self.method, self.path, self.handler))

    def __repr__(self) -> str:
        action = getattr(self.handler, "action", "?")
        return f"Route({self.method!r}, {self.path!r}, action={action!r})"


def base_path(controller_class: Type) -> str:
    """
    Base path for a controller.

    Uses `controller_class.base` when it is a non-empty string, otherwise
    the class name in lower case. An action named `base` is not an override.
    """
    base = getattr(controller_class, "base", None)
    if isinstance(base, str) and base:
        return base.strip("/")
    return controller_class.__name__.lower()


def http_method(function: Any, config: Optional[RoutingConfig] = None) -> str:
    """Verb for an action: its method tag, else the configured default."""
    config = config or _DEFAULT_CONFIG
    method = has_tag(function, "method")
    return method if method else config.default_method


def make_paths(
    controller_class: Type,
    action: str,
    params: List[str],
    config: Optional[RoutingConfig] = None,
) -> List[str]:
    """
    Turn an action name and its parameter names into path patterns.

    Args:
        controller_class: Controller owning the action
        action: Action name
        params: Ordered parameter names, appended to every path
        config: Optional RoutingConfig

    Returns:
        Rendered paths in order: default, root, then aliases
    """
    config = config or _DEFAULT_CONFIG
    method = resolve_action(controller_class, action)

    if has_tag(method, "private") or has_tag(controller_class, "private"):
        return []

    base = base_path(controller_class)
    param_parts = [Segment.param(name) for name in params]
    paths: List[Path] = []

    if not has_tag(method, "special"):
        paths.append(Path(base, action))

    if (
        has_tag(method, "root")
        or has_tag(controller_class, "root")
        or action == config.index_action
    ):
        paths.append(Path(base))

    for alias in has_tag(method, "alias") or ():
        paths.append(Path.parse(alias))

    return [str(path.concat(param_parts)) for path in paths]


def routes(controller_class: Type, config: Optional[RoutingConfig] = None) -> List[Route]:
    """
    Collect a controller's actions into a flat list of routes.

    Ordering follows action order, then default/root/alias within an
    action. Textually identical paths are not merged.
    """
    config = config or _DEFAULT_CONFIG
    result: List[Route] = []

    for action in action_names(controller_class):
        function = resolve_action(controller_class, action)
        params = parameter_names(function)
        handler = bind_handler(controller_class, action, params)
        method = http_method(function, config)
        paths = make_paths(controller_class, action, params, config)

        if not paths and config.warn_unreachable and has_tag(function, "special"):
            if not (has_tag(function, "private") or has_tag(controller_class, "private")):
                logger.warning(
                    "%s.%s is special with no root or alias: it has no route",
                    controller_class.__name__, action,
                )

        for path in paths:
            logger.debug("%s %s -> %s.%s", method.upper(), path, controller_class.__name__, action)
            result.append(Route(method, path, handler))

    return result


def mount(
    controller_class: Type,
    add_route: Callable[[str, str, Callable[[Any], Any]], Any],
    config: Optional[RoutingConfig] = None,
) -> List[Route]:
    """
    Install a controller's routes into an external routing table.

    Args:
        controller_class: Controller to derive routes from
        add_route: Called as add_route(method, path, handler) per route

    Returns:
        The installed routes
    """
    installed = routes(controller_class, config)
    for route in installed:
        add_route(route.method, route.path, route.handler)
    logger.info("Mounted %d route(s) from %s", len(installed), controller_class.__name__)
    return installed


@dataclass
class CompiledController:
    """A controller with its metadata and derived routes."""

    controller_class: type
    metadata: ControllerMetadata
    routes: List[Route]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "controller": self.metadata.module_path,
            "base": self.metadata.base_path,
            "routes": [
                {
                    "method": r.method,
                    "path": r.path,
                    "action": getattr(r.handler, "action", None),
                }
                for r in self.routes
            ],
        }


class ControllerCompiler:
    """
    Compiles controllers into routes and reports on them.

    Routes are derived fresh on each call; compiled controllers are kept
    only for inspection.
    """

    def __init__(self, config: Optional[RoutingConfig] = None):
        self.config = config or RoutingConfig()
        self.compiled_controllers: Dict[str, CompiledController] = {}

    def compile_controller(self, controller_class: type) -> CompiledController:
        """
        Compile a controller class into routes.

        Raises:
            AnnotationTargetFault: If a tag is queried on an invalid target
            IntrospectionFault: If an action's parameters cannot be read
        """
        metadata = extract_controller_metadata(controller_class, config=self.config)
        compiled = CompiledController(
            controller_class=controller_class,
            metadata=metadata,
            routes=routes(controller_class, self.config),
        )
        self.compiled_controllers[metadata.module_path] = compiled
        return compiled

    def check_conflicts(self, compiled: List[CompiledController]) -> List[Dict[str, Any]]:
        """
        Report (verb, path) pairs produced more than once.

        Duplicates are legal; this is informational only.
        """
        seen: Dict[tuple, Dict[str, Any]] = {}
        conflicts = []

        for ctrl in compiled:
            for route in ctrl.routes:
                entry = {
                    "controller": ctrl.metadata.class_name,
                    "action": getattr(route.handler, "action", None),
                }
                key = (route.method, route.path)
                if key in seen:
                    conflicts.append({
                        "method": route.method,
                        "path": route.path,
                        "first": seen[key],
                        "second": entry,
                    })
                else:
                    seen[key] = entry

        return conflicts

    def export_routes(self, controllers: List[type]) -> Dict[str, Any]:
        """
        Export all compiled routes for inspection/debugging.

        Returns:
            Dict with controllers, total route count and duplicate paths
        """
        compiled = [self.compile_controller(ctrl) for ctrl in controllers]

        return {
            "controllers": [c.to_dict() for c in compiled],
            "total_routes": sum(len(c.routes) for c in compiled),
            "conflicts": self.check_conflicts(compiled),
        }
