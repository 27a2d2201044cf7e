import logging

from fastapi import APIRouter, Query

from unfurler.schemas.unfurl import UnfurlRequest, UnfurlResponse
from unfurler.services.fetcher import get_shared_async_client
from unfurler.services.unfurl import unfurl_async

router = APIRouter()
logger = logging.getLogger(__name__)


async def _unfurl(request: UnfurlRequest) -> UnfurlResponse:
    unfurled = await unfurl_async(request.url, client=get_shared_async_client())
    return UnfurlResponse(success=True, empty=unfurled.is_empty(), data=unfurled)


@router.get(
    "",
    response_model=UnfurlResponse,
    summary="Unfurl a URL",
    description="Fetch a URL once and return its preview: title, description, image, video and canonical URL, preferring Open Graph over Twitter Card over plain HTML metadata. Unreachable pages and non-200 responses return an empty preview rather than an error.",
)
async def unfurl_url(
    url: str = Query(..., description="URL to unfurl; https:// is assumed when no scheme is given"),
):
    """Unfurl the URL passed as a query parameter."""
    return await _unfurl(UnfurlRequest(url=url))


@router.post(
    "",
    response_model=UnfurlResponse,
    summary="Unfurl a URL (JSON body)",
    description="Same as GET /v1/unfurl with the URL in a JSON body.",
)
async def unfurl_url_post(request: UnfurlRequest):
    """Unfurl the URL given in the request body."""
    return await _unfurl(request)
