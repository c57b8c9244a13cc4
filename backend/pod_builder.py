"""Project a Component schematic onto a Kubernetes pod spec.

The mapping is pure: it only reads the Component and always succeeds for a
validated one. Errors in the source document surface earlier, when the text
is parsed into a Component.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import yaml
from kubernetes import client

from component_spec import (
    Component,
    Container,
    Env,
    HealthProbe,
    HttpGet,
    Port,
    PortProtocol,
    Resources,
)
from kube_client import to_manifest
from parameter_resolver import resolve_parameters


logger = logging.getLogger(__name__)

_PROTOCOL_TOKENS: Dict[PortProtocol, str] = {
    PortProtocol.TCP: "TCP",
    PortProtocol.UDP: "UDP",
    PortProtocol.SCTP: "SCTP",
}


def port_protocol_token(protocol: PortProtocol) -> str:
    return _PROTOCOL_TOKENS[protocol]


def _resource_requirements(resources: Resources) -> client.V1ResourceRequirements:
    # Kubernetes has no built-in resource for GPUs at this schema version, and
    # paths are volumes rather than requests; neither is encoded here.
    requests = {
        "cpu": resources.cpu.required,
        "memory": resources.memory.required,
    }
    return client.V1ResourceRequirements(requests=requests, limits=None)


def _container_port(port: Port) -> client.V1ContainerPort:
    return client.V1ContainerPort(
        container_port=port.container_port,
        name=port.name,
        protocol=port_protocol_token(port.protocol),
    )


def _env_var(env: Env) -> client.V1EnvVar:
    if env.value is None and env.from_param:
        logger.debug(
            "Env '%s' references parameter '%s' which was not resolved; leaving it empty",
            env.name,
            env.from_param,
        )
    return client.V1EnvVar(name=env.name, value=env.value, value_from=None)


def _http_get_action(http_get: HttpGet) -> client.V1HTTPGetAction:
    return client.V1HTTPGetAction(
        path=http_get.path,
        port=http_get.port,
        http_headers=[
            client.V1HTTPHeader(name=header.name, value=header.value)
            for header in http_get.http_headers
        ],
    )


def _probe(probe: Optional[HealthProbe]) -> Optional[client.V1Probe]:
    if probe is None:
        return None

    exec_action = None
    if probe.exec is not None:
        exec_action = client.V1ExecAction(command=list(probe.exec.command))

    http_get = None
    if probe.http_get is not None:
        http_get = _http_get_action(probe.http_get)

    tcp_socket = None
    if probe.tcp_socket is not None:
        tcp_socket = client.V1TCPSocketAction(port=probe.tcp_socket.port)

    return client.V1Probe(
        _exec=exec_action,
        http_get=http_get,
        tcp_socket=tcp_socket,
        failure_threshold=probe.failure_threshold,
        period_seconds=probe.period_seconds,
        timeout_seconds=probe.timeout_seconds,
        success_threshold=probe.success_threshold,
        initial_delay_seconds=probe.initial_delay_seconds,
    )


def build_container(container: Container) -> client.V1Container:
    return client.V1Container(
        name=container.name,
        image=container.image,
        resources=_resource_requirements(container.resources),
        ports=[_container_port(port) for port in container.ports],
        env=[_env_var(env) for env in container.env],
        liveness_probe=_probe(container.liveness_probe),
        readiness_probe=_probe(container.readiness_probe),
    )


def build_pod_spec(component: Component) -> client.V1PodSpec:
    containers: List[client.V1Container] = [
        build_container(container) for container in component.containers
    ]
    return client.V1PodSpec(containers=containers)


project = build_pod_spec


def build_pod_manifest(
    component: Component, values: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Resolve parameters, project the component and return the pod spec as a dict."""
    resolved = resolve_parameters(component, values)
    return to_manifest(build_pod_spec(resolved))


def render_pod_spec(
    component: Component,
    values: Optional[Mapping[str, Any]] = None,
    *,
    fmt: str = "yaml",
) -> str:
    manifest = build_pod_manifest(component, values)
    if fmt == "yaml":
        return yaml.safe_dump(manifest, sort_keys=False)
    if fmt == "json":
        return json.dumps(manifest, indent=2, ensure_ascii=False)
    raise ValueError(f"Unsupported output format: {fmt}")


def suggest_manifest_filename(component: Component) -> str:
    base = component.containers[0].name if component.containers else "component"
    return f"podspec-{base}.yaml"
