from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from linktracker_app.exceptions import BatchTooLargeError
from linktracker_app.schemas.api import LinkStats, LinkSummary, ShortenRequest, ShortenResponse
from linktracker_app.schemas.url import UI_CLICK_SOURCE, ClickEvent, UrlRecord
from linktracker_app.services.link_service import LinkService
from linktracker_app.dependencies import get_link_service

router = APIRouter(prefix="/urls", tags=["urls"])


@router.post("/", response_model=ShortenResponse)
def shorten_urls(
    payload: ShortenRequest,
    link_service: LinkService = Depends(get_link_service)
):
    """Shorten up to five URLs; rows are validated independently"""
    try:
        results = link_service.shorten_batch(payload.submissions)
    except BatchTooLargeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return ShortenResponse(results=results)


@router.get("/", response_model=List[LinkSummary])
def list_urls(link_service: LinkService = Depends(get_link_service)):
    """All shortened URLs with their click totals"""
    return link_service.list_links()


@router.get("/{shortcode}", response_model=UrlRecord)
def get_url_info(
    shortcode: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get the stored record for a short code"""
    record = link_service.get_link(shortcode)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return record


@router.get("/{shortcode}/stats", response_model=LinkStats)
def get_url_stats(
    shortcode: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Click statistics for a short code"""
    stats = link_service.get_stats(shortcode)
    if not stats:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return stats


@router.post("/{shortcode}/clicks", response_model=ClickEvent, status_code=status.HTTP_201_CREATED)
def simulate_click(
    shortcode: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Record a simulated click from the statistics view"""
    event = link_service.record_click(shortcode, source=UI_CLICK_SOURCE)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return event
