"""
Sodor - Declarative route synthesis for class-based controllers

Routes are derived from a controller's action names, parameter lists,
inheritance and a small set of tags:
- Controller: Base class; one instance per request
- Tags: Method and verb shortcuts, Alias, Root, Private, Special, Params
- Compiler: Route derivation, inspection and mounting
- Faults: Structured error handling with fault domains
- Config: Layered typed configuration
"""

__version__ = "0.1.0"

# ============================================================================
# Core
# ============================================================================

from .paths import Path, Segment
from .config import Config, ConfigLoader, RoutingConfig

# ============================================================================
# Controllers
# ============================================================================

from .controller import (
    Controller,
    ExecutionContext,
    Tag,
    Method,
    Alias,
    Root,
    Private,
    Special,
    Params,
    GET, POST, PUT, DELETE, PATCH,
    OPTIONS, HEAD, TRACE, CONNECT,
    HTTP_METHODS,
    has_tag,
    action_names,
    parameter_names,
    extract_controller_metadata,
    bind_handler,
    Route,
    ControllerCompiler,
    make_paths,
    routes,
    mount,
)

# ============================================================================
# Faults
# ============================================================================

from .faults import (
    Fault,
    FaultDomain,
    Severity,
    RoutingFault,
    AnnotationTargetFault,
    IntrospectionFault,
    AliasEmptyFault,
    UnsupportedMethodFault,
    ReservedActionFault,
    ConfigInvalidFault,
)

__all__ = [
    "__version__",
    # Core
    "Path", "Segment",
    "Config", "ConfigLoader", "RoutingConfig",
    # Controllers
    "Controller", "ExecutionContext",
    "Tag", "Method", "Alias", "Root", "Private", "Special", "Params",
    "GET", "POST", "PUT", "DELETE", "PATCH",
    "OPTIONS", "HEAD", "TRACE", "CONNECT",
    "HTTP_METHODS",
    "has_tag",
    "action_names",
    "parameter_names",
    "extract_controller_metadata",
    "bind_handler",
    "Route",
    "ControllerCompiler",
    "make_paths",
    "routes",
    "mount",
    # Faults
    "Fault", "FaultDomain", "Severity",
    "RoutingFault", "AnnotationTargetFault", "IntrospectionFault",
    "AliasEmptyFault", "UnsupportedMethodFault", "ReservedActionFault",
    "ConfigInvalidFault",
]
