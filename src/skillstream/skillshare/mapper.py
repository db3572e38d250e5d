"""Conversion of SkillShare records into host display types."""

from skillstream.host import (
    Episode,
    ExtractorLink,
    LoadResponse,
    Qualities,
    SearchResponse,
    TvType,
)
from skillstream.skillshare.models import CourseDetail, CourseSummary, LoadData


def to_search_response(summary: CourseSummary, api_name: str) -> SearchResponse:
    """Map a class to a search result whose url is the opaque load payload."""
    return SearchResponse(
        name=summary.title,
        url=summary.to_load_data().to_json(),
        api_name=api_name,
        type=TvType.TV_SERIES,
        poster_url=summary.small_cover_url,
    )


def to_episodes(detail: CourseDetail) -> list[Episode]:
    """Number lessons 0..N-1 in order, all in season 1."""
    return [
        Episode(data=lesson.url, name=lesson.title, season=1, episode=index)
        for index, lesson in enumerate(detail.lessons)
    ]


def to_load_response(
    data: LoadData, url: str, detail: CourseDetail, api_name: str
) -> LoadResponse:
    """Build the detail page of a class.

    Title and poster come from the search result that was selected, falling
    back to what the mirror reported.

    Args:
        data: The decoded opaque payload.
        url: The opaque payload as received from the host.
        detail: Lessons resolved from a mirror.
        api_name: Name of the provider.
    """
    return LoadResponse(
        name=data.title or detail.title or "",
        url=url,
        api_name=api_name,
        type=TvType.TV_SERIES,
        episodes=to_episodes(detail),
        poster_url=data.large_cover_url or detail.large_cover_url,
    )


def to_extractor_link(name: str, url: str, referer: str) -> ExtractorLink:
    return ExtractorLink(
        source=name,
        name=name,
        url=url,
        referer=referer,
        quality=Qualities.UNKNOWN,
        is_m3u8=True,
    )
