"""
Sodor Faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- ROUTING faults
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# ROUTING Faults
# ============================================================================

class RoutingFault(Fault):
    """Base class for route derivation faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.ROUTING,
            severity=severity,
            metadata=metadata,
        )


class AnnotationTargetFault(RoutingFault):
    """Tag queried against something that cannot carry tags."""

    def __init__(self, target: Any, kind: str, reason: str = "not a function or class"):
        super().__init__(
            code="ANNOTATION_TARGET",
            message=f"Cannot query tag '{kind}' on {target!r}: {reason}",
            metadata={"target": repr(target), "kind": kind},
        )


class IntrospectionFault(RoutingFault):
    """Parameter names could not be read from a callable."""

    def __init__(self, target: Any, reason: str):
        super().__init__(
            code="INTROSPECTION_FAILED",
            message=f"Cannot read parameter names of {target!r}: {reason}",
            metadata={"target": repr(target), "reason": reason},
        )


class AliasEmptyFault(RoutingFault):
    """Alias tag applied without any path."""

    def __init__(self):
        super().__init__(
            code="ALIAS_EMPTY",
            message="Alias requires at least one path",
        )


class UnsupportedMethodFault(RoutingFault):
    """HTTP verb outside the supported set."""

    def __init__(self, method: Any, supported: tuple[str, ...]):
        super().__init__(
            code="METHOD_UNSUPPORTED",
            message=f"Unsupported HTTP method {method!r} (expected one of {', '.join(supported)})",
            metadata={"method": repr(method), "supported": list(supported)},
        )


class ReservedActionFault(RoutingFault):
    """Action name collides with a Controller entry point."""

    def __init__(self, controller: str, name: str):
        super().__init__(
            code="ACTION_RESERVED",
            message=f"{controller}.{name} shadows the Controller.{name} entry point",
            metadata={"controller": controller, "action": name},
        )
