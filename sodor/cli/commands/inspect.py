"""Route inspection: import controllers and print the routes they derive."""

import importlib
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from ...config import ConfigLoader, RoutingConfig
from ...controller import Controller, ControllerCompiler
from ..utils.colors import _ARROW, _CHECK, dim, kv, section, success, table


def load_controller(ref: str) -> type:
    """
    Import a controller from "package.module:ClassName".

    Raises:
        click.BadParameter: If the reference is malformed or does not
            name a Controller subclass
    """
    if ":" not in ref:
        raise click.BadParameter(f"expected 'module:Class', got '{ref}'")

    module_name, _, attr_path = ref.partition(":")

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import '{module_name}': {e}") from e

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise click.BadParameter(f"'{module_name}' has no attribute '{attr_path}'") from e

    if not (isinstance(target, type) and issubclass(target, Controller)):
        raise click.BadParameter(f"'{ref}' is not a Controller subclass")
    return target


def load_routing_config(config_path: Optional[str], env_file: Optional[str] = None) -> RoutingConfig:
    paths = [config_path] if config_path else None
    return ConfigLoader.load(paths=paths, env_file=env_file).routing_config()


def inspect_routes(
    refs: List[str],
    *,
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
    json_output: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Show the routes derived from each referenced controller."""
    controllers = [load_controller(ref) for ref in refs]
    compiler = ControllerCompiler(load_routing_config(config_path, env_file))
    report = compiler.export_routes(controllers)

    if json_output:
        click.echo(json.dumps(report, indent=2))
        return report

    for compiled in compiler.compiled_controllers.values():
        meta = compiled.metadata
        click.echo()
        section(f"{meta.class_name} (/{meta.base_path})")
        rows = [
            [route.method.upper(), route.path, f"{_ARROW} {meta.class_name}.{route.handler.action}"]
            for route in compiled.routes
        ]
        if rows:
            table(["Method", "Path", "Action"], rows)
        else:
            dim("  No routes.")

        if verbose:
            unrouted = [a.name for a in meta.actions if not a.routed]
            if unrouted:
                kv("Unrouted", ", ".join(unrouted))

    click.echo()
    kv("Routes", str(report["total_routes"]))
    if report["conflicts"]:
        kv("Duplicates", str(len(report["conflicts"])))
        for conflict in report["conflicts"]:
            dim(
                f"    {conflict['method'].upper()} {conflict['path']}: "
                f"{conflict['first']['controller']}.{conflict['first']['action']} / "
                f"{conflict['second']['controller']}.{conflict['second']['action']}"
            )
    else:
        success(f"  {_CHECK} No duplicate routes")

    return report
