"""Resolve ``fromParam`` references on a Component before projection.

Parameters declare a name, a primitive type and an optional default. Callers
supply runtime values for some of them; every ``fromParam`` on an env var or
a workload setting is then replaced by the parameter's effective value. The
result is a new Component whose references are all literal.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

from component_spec import Component, Container, Env, Parameter, ParameterType, WorkloadSetting


logger = logging.getLogger(__name__)


class ParameterError(ValueError):
    """Raised when parameter values cannot be resolved against a Component."""


def _matches_type(value: Any, parameter_type: ParameterType) -> bool:
    if parameter_type is ParameterType.BOOLEAN:
        return isinstance(value, bool)
    if parameter_type is ParameterType.STRING:
        return isinstance(value, str)
    if parameter_type is ParameterType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return value is None


def _render_env_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value)


def effective_values(
    component: Component, values: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Return the effective value of every declared parameter.

    A supplied value wins over the parameter default. When a name is declared
    more than once the first declaration is used.
    """
    supplied = dict(values or {})
    declared: Dict[str, Parameter] = {}
    for parameter in component.parameters:
        declared.setdefault(parameter.name, parameter)

    unknown = sorted(name for name in supplied if name not in declared)
    if unknown:
        raise ParameterError(f"Unknown parameter(s): {', '.join(unknown)}")

    resolved: Dict[str, Any] = {}
    for name, parameter in declared.items():
        if name in supplied:
            value = supplied[name]
            if not _matches_type(value, parameter.parameter_type):
                raise ParameterError(
                    f"Parameter '{name}' expects a {parameter.parameter_type.value} value, "
                    f"got {type(value).__name__}"
                )
            resolved[name] = value
        elif parameter.default is not None:
            resolved[name] = parameter.default
        elif parameter.required:
            raise ParameterError(f"Missing value for required parameter '{name}'")
        else:
            resolved[name] = None
    return resolved


def _lookup(resolved: Mapping[str, Any], name: str, owner: str) -> Any:
    if name not in resolved:
        raise ParameterError(f"{owner} references undeclared parameter '{name}'")
    return resolved[name]


def _resolve_env(env: Env, resolved: Mapping[str, Any], container: str) -> Env:
    if not env.from_param:
        return env
    value = _lookup(resolved, env.from_param, f"Env '{env.name}' in container '{container}'")
    return env.model_copy(update={"value": _render_env_value(value), "from_param": None})


def _resolve_container(container: Container, resolved: Mapping[str, Any]) -> Container:
    env = [_resolve_env(item, resolved, container.name) for item in container.env]
    return container.model_copy(update={"env": env})


def _resolve_setting(setting: WorkloadSetting, resolved: Mapping[str, Any]) -> WorkloadSetting:
    if not setting.from_param:
        return setting
    value = _lookup(resolved, setting.from_param, f"Workload setting '{setting.name}'")
    return setting.model_copy(update={"default": value, "from_param": None})


def resolve_parameters(
    component: Component, values: Optional[Mapping[str, Any]] = None
) -> Component:
    resolved = effective_values(component, values)
    logger.debug("Resolved %d parameter(s) for component", len(resolved))
    return component.model_copy(
        update={
            "containers": [_resolve_container(c, resolved) for c in component.containers],
            "workload_settings": [
                _resolve_setting(s, resolved) for s in component.workload_settings
            ],
        }
    )
