import logging
import os
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from component_spec import SchemaError, parse_component_data
from group_version_kind import FormatError, GroupVersionKind
from log_config import configure_logging
from parameter_resolver import ParameterError
from pod_builder import build_pod_manifest, render_pod_spec, suggest_manifest_filename


logger = logging.getLogger(__name__)


def _cors_origins() -> List[str]:
    raw = os.getenv("HYDRA_CORS_ALLOW_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


class RenderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    component: Dict[str, Any]
    parameter_values: Dict[str, Any] = Field(default_factory=dict, alias="parameterValues")


class GroupVersionKindResponse(BaseModel):
    group: str
    version: str
    kind: str


class RenderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workload_type: str = Field(..., alias="workloadType")
    group_version_kind: GroupVersionKindResponse = Field(..., alias="groupVersionKind")
    pod_spec: Dict[str, Any] = Field(..., alias="podSpec")


configure_logging()

app = FastAPI(title="Hydra Schematic Service", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _gvk_response(gvk: GroupVersionKind) -> GroupVersionKindResponse:
    return GroupVersionKindResponse(group=gvk.group, version=gvk.version, kind=gvk.kind)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/components/validate")
def validate_component(payload: Dict[str, Any]) -> Dict[str, Any]:
    try:
        component = parse_component_data(payload)
    except SchemaError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return component.to_dict()


@app.post("/components/render", response_model=RenderResponse, response_model_by_alias=True)
def render_component(payload: RenderRequest) -> RenderResponse:
    try:
        component = parse_component_data(payload.component)
        gvk = component.workload_gvk()
        pod_spec = build_pod_manifest(component, payload.parameter_values)
    except (SchemaError, FormatError, ParameterError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info(
        "Rendered pod spec for workload %s with %d container(s)",
        component.workload_type,
        len(component.containers),
    )
    return RenderResponse(
        workload_type=component.workload_type,
        group_version_kind=_gvk_response(gvk),
        pod_spec=pod_spec,
    )


@app.post("/components/render/yaml")
def render_component_yaml(payload: RenderRequest) -> Dict[str, str]:
    try:
        component = parse_component_data(payload.component)
        yaml_content = render_pod_spec(component, payload.parameter_values)
        filename = suggest_manifest_filename(component)
    except (SchemaError, ParameterError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:  # pragma: no cover - unexpected
        logger.error("Failed to render component: %s", exc)
        raise HTTPException(status_code=500, detail=f"Failed to render component: {exc}")

    return {"filename": filename, "yaml": yaml_content}


@app.get("/gvk/parse", response_model=GroupVersionKindResponse)
def parse_group_version_kind(value: str = Query(...)) -> GroupVersionKindResponse:
    try:
        gvk = GroupVersionKind.parse(value)
    except FormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _gvk_response(gvk)
