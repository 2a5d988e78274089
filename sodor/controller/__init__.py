"""
Sodor Controller System

Class-based controllers whose routes are derived, not declared.

Key Features:
- Routes inferred from action names and parameter lists
- Inheritance-aware: base-class actions and their tags carry over
- Tags adjust derivation: Method/verb shortcuts, Alias, Root, Private, Special
- One controller instance per request

Example:
    from sodor import Controller, Root, POST, Alias

    class Users(Controller):
        def show(self, id):
            return f"user {id}"

        @Root()
        def list(self):
            return "all users"

        @POST()
        @Alias("u/new")
        def create(self, id):
            return f"created {id}"

    for method, path, handler in Users.routes():
        app.add_route(method, path, handler)
"""

from .base import Controller, ExecutionContext
from .decorators import (
    Tag, Method, Alias, Root, Private, Special, Params,
    GET, POST, PUT, DELETE, PATCH,
    OPTIONS, HEAD, TRACE, CONNECT,
    HTTP_METHODS,
    has_tag,
)
from .metadata import (
    ActionMetadata,
    ControllerMetadata,
    action_names,
    parameter_names,
    extract_controller_metadata,
)
from .factory import bind_handler, request_params
from .compiler import (
    Route,
    CompiledController,
    ControllerCompiler,
    base_path,
    make_paths,
    routes,
    mount,
)

__all__ = [
    # Base
    "Controller",
    "ExecutionContext",

    # Tags
    "Tag", "Method", "Alias", "Root", "Private", "Special", "Params",
    "GET", "POST", "PUT", "DELETE", "PATCH",
    "OPTIONS", "HEAD", "TRACE", "CONNECT",
    "HTTP_METHODS",
    "has_tag",

    # Metadata
    "ActionMetadata",
    "ControllerMetadata",
    "action_names",
    "parameter_names",
    "extract_controller_metadata",

    # Handlers
    "bind_handler",
    "request_params",

    # Compilation
    "Route",
    "CompiledController",
    "ControllerCompiler",
    "base_path",
    "make_paths",
    "routes",
    "mount",
]
