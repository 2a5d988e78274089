"""
Sodor Faults - typed fault signals.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain taxonomy
- Severity: Severity levels

Domain faults:
- ConfigFault, ConfigInvalidFault
- RoutingFault, AnnotationTargetFault, IntrospectionFault,
  AliasEmptyFault, UnsupportedMethodFault, ReservedActionFault
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    RoutingFault,
    AnnotationTargetFault,
    IntrospectionFault,
    AliasEmptyFault,
    UnsupportedMethodFault,
    ReservedActionFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Config
    "ConfigFault",
    "ConfigInvalidFault",

    # Routing
    "RoutingFault",
    "AnnotationTargetFault",
    "IntrospectionFault",
    "AliasEmptyFault",
    "UnsupportedMethodFault",
    "ReservedActionFault",
]
