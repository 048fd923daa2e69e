from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from linktracker_app.schemas.url import REDIRECT_SOURCE
from linktracker_app.services.link_service import LinkService
from linktracker_app.dependencies import get_link_service

router = APIRouter(tags=["redirect"])


@router.get("/{shortcode}")
def redirect_to_original_url(
    shortcode: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL and record the click.

    Expiry is informational, so expired links still redirect.
    """
    record = link_service.get_link(shortcode)

    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )

    link_service.record_click(shortcode, source=REDIRECT_SOURCE)

    return RedirectResponse(url=record.original_url, status_code=status.HTTP_302_FOUND)
