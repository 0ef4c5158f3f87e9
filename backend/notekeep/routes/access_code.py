"""
NoteKeep Backend — Access Code Passthrough
============================================

What:  GET /api/access-code proxies a third-party endpoint; OPTIONS answers
       CORS preflight.
Why:   The value is fetched server-side so the browser never talks to the
       upstream directly.

Responses (always with permissive CORS headers):
    200  { "uniqueGeneratedCode": "<code>" | null }
    <upstream status>  { "error": "Failed to fetch access code" }
    500  { "error": "Unable to fetch access code" }

Errors are answered here rather than by the global handlers because the
body shape ({ "error": ... } only) and the CORS headers differ from the
rest of the API.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from notekeep.exceptions import UpstreamServiceError
from notekeep.schemas.note import AccessCodeResponse
from notekeep.services import access_code_service as access_code_module

router = APIRouter(prefix="/api", tags=["Access Code"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@router.get(
    "/access-code",
    response_model=AccessCodeResponse,
    summary="Fetch the access code from the upstream service",
)
async def get_access_code() -> JSONResponse:
    try:
        code = await access_code_module.access_code_service.fetch_code()
    except UpstreamServiceError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message},
            headers=CORS_HEADERS,
        )

    body = AccessCodeResponse(unique_generated_code=code)
    return JSONResponse(
        content=body.model_dump(by_alias=True),
        headers=CORS_HEADERS,
    )


@router.options("/access-code", include_in_schema=False)
async def access_code_preflight() -> JSONResponse:
    return JSONResponse(content={}, headers=CORS_HEADERS)
