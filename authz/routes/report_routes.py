from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from authz.dependencies import get_current_caller, get_store
from authz.repositories.tenant_store import TenantStore
from authz.schemas.report_schemas import GraphReportResponse
from authz.services.report_service import build_graph_report, render_graph_report

router = APIRouter(dependencies=[Depends(get_current_caller)])


@router.get("", response_model=GraphReportResponse)
async def get_report(
    output: Literal["json", "text"] = Query("json", alias="format"),
    store: TenantStore = Depends(get_store),
):
    """
    Read-only snapshot of tenants, accounts, roles and resources.

    `?format=text` returns the indented tree as plain text.
    """
    report = await build_graph_report(store)
    if output == "text":
        return PlainTextResponse(render_graph_report(report))
    return GraphReportResponse.model_validate(report)
