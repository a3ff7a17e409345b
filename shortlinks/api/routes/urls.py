"""Short link API routes.

This module contains the endpoints for link operations:
- Bind a URL to an alias (POST /url)
- Redirect to the bound URL (GET /{alias})
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from ...core.config import Settings, get_settings
from ...core.errors import LinkNotFoundError
from ...core.security import require_credentials
from ...models.url import URLSaveRequest, ErrorResponse
from ...schemas.url import URLSaveResponse
from ...services import AliasAssigner, LinkResolver
from ...utils.shortener import validate_alias, create_short_url
from ..dependencies import get_assigner, get_resolver

router = APIRouter(prefix="", tags=["URLs"])


def get_base_url(request: Request) -> str:
    """Get base URL from request.

    Args:
        request: FastAPI request object.

    Returns:
        Base URL string.
    """
    return str(request.base_url).rstrip("/")


@router.post(
    "/url",
    response_model=URLSaveResponse,
    dependencies=[Depends(require_credentials)],
    responses={
        200: {"description": "Short URL created successfully"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        409: {"model": ErrorResponse, "description": "Alias already exists"},
        422: {"description": "Invalid request"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
        503: {"model": ErrorResponse, "description": "No free alias found"},
    },
    summary="Create a short URL",
    description="Bind a URL to an alias. Omit the alias to have one generated.",
)
async def save_url(
    request: Request,
    url_data: URLSaveRequest,
    assigner: AliasAssigner = Depends(get_assigner),
    settings: Settings = Depends(get_settings),
) -> URLSaveResponse:
    """Bind a URL to a requested or generated alias.

    Args:
        request: FastAPI request object.
        url_data: URL and optional alias.
        assigner: Alias assignment service.
        settings: Application settings.

    Returns:
        The bound alias, its id and the full short URL.
    """
    if url_data.alias and not validate_alias(
        url_data.alias, settings.min_alias_length, settings.max_alias_length
    ):
        raise HTTPException(
            status_code=422,
            detail=(
                f"Alias must be {settings.min_alias_length}-"
                f"{settings.max_alias_length} alphanumeric characters"
            ),
        )

    assignment = await assigner.assign(
        url_data.url,
        url_data.alias or "",
        is_cancelled=request.is_disconnected,
    )

    return URLSaveResponse(
        alias=assignment.alias,
        id=assignment.id,
        short_url=create_short_url(get_base_url(request), assignment.alias),
    )


@router.get(
    "/{alias}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Redirect to original URL",
    description="Redirect to the URL bound to the alias.",
)
async def redirect(
    alias: str,
    resolver: LinkResolver = Depends(get_resolver),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Redirect to the URL bound to an alias.

    Args:
        alias: The alias.
        resolver: Alias resolution service.
        settings: Application settings.

    Returns:
        Redirect response to the bound URL.
    """
    # Malformed aliases can never have been stored
    if not validate_alias(
        alias, settings.min_alias_length, settings.max_alias_length
    ):
        raise LinkNotFoundError("Short URL not found", alias=alias)

    url = await resolver.resolve(alias)
    return RedirectResponse(url=url, status_code=302)
