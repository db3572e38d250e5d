"""Listing, search and lesson lookup against SkillShare."""

from loguru import logger

from skillstream.config import Settings
from skillstream.exceptions import DecodeError, LoadError, TransportError
from skillstream.host import LinkCallback, SubtitleCallback
from skillstream.skillshare.client import SkillshareClient
from skillstream.skillshare.cursor import CursorTable, SortKey
from skillstream.skillshare.mapper import to_extractor_link
from skillstream.skillshare.models import (
    CourseDetail,
    CourseSummary,
    decode_bypass,
    decode_listing,
    decode_search,
)
from skillstream.skillshare.queries import classes_by_type_payload, search_payload


class SkillshareProvider:
    """Queries SkillShare and resolves lessons through the bypass mirrors.

    Home page listings are paginated with one cursor per sort key, kept in
    :attr:`cursors` for the lifetime of the provider. Calls are expected to be
    made one at a time.

    Attributes:
        name: Provider display name; used as the link source.
        settings: Endpoints and timeout.
        client: HTTP client used for every request.
        cursors: Listing cursors, one per :class:`SortKey`.
    """

    name = "SkillShare"

    def __init__(
        self,
        settings: Settings | None = None,
        client: SkillshareClient | None = None,
        cursors: CursorTable | None = None,
    ):
        self.settings = settings if settings is not None else Settings()
        self.client = client if client is not None else SkillshareClient(self.settings)
        self.cursors = cursors if cursors is not None else CursorTable()

    def fetch_page(
        self, sort_key: SortKey | str, page: int
    ) -> tuple[list[CourseSummary], bool]:
        """Fetch one page of a home page listing.

        Page 1 restarts the listing; later pages continue from where the
        previous call for the same sort key stopped. An empty page means the
        listing is exhausted and resets the cursor.

        Args:
            sort_key: Which listing to page through.
            page: 1-based page number.

        Returns:
            The classes on the page and whether another page may follow.

        Raises:
            TransportError: If the request fails.
            DecodeError: If the response cannot be decoded.
        """
        sort_key = SortKey(sort_key)
        self.cursors.reset_if_first_page(sort_key, page)
        cursor = self.cursors.cursor_for(sort_key)
        logger.debug(f"Fetching {sort_key.value} page {page} after {cursor!r}")

        body = self.client.query(classes_by_type_payload(sort_key.value, cursor))
        nodes = decode_listing(body)
        items = [CourseSummary.from_node(node) for node in nodes]

        self.cursors.advance(sort_key, nodes[-1].id if nodes else None)
        logger.info(f"{sort_key.label} page {page}: {len(items)} classes")
        return items, len(items) > 0

    def search(self, term: str) -> list[CourseSummary]:
        """Return the first page of classes matching ``term``."""
        body = self.client.query(search_payload(term))
        items = [CourseSummary.from_node(node) for node in decode_search(body)]
        logger.info(f"Search for {term!r}: {len(items)} classes")
        return items

    def _mirror_urls(self, course_id: str) -> list[str]:
        return [
            f"{self.settings.bypass_url}/{course_id}",
            f"{self.settings.bypass_fallback_url}/{course_id}/0",
        ]

    def resolve_course(self, course_id: str) -> CourseDetail:
        """Fetch the lessons of a class from the bypass mirrors.

        The primary mirror is tried first and the secondary only if the
        primary fails, whether by a network error or by an unusable response.

        Args:
            course_id: The class SKU.

        Returns:
            The class with its lessons in order.

        Raises:
            LoadError: If neither mirror returned usable lesson data.
        """
        last_error: Exception | None = None
        for url in self._mirror_urls(course_id):
            try:
                detail = decode_bypass(self.client.fetch(url))
            except (TransportError, DecodeError) as e:
                logger.warning(f"Mirror {url} failed: {e}")
                last_error = e
                continue
            logger.info(f"Resolved {len(detail.lessons)} lessons for {course_id} from {url}")
            return detail
        logger.error(f"No mirror returned lessons for {course_id}")
        raise LoadError("invalid response") from last_error

    def resolve_links(
        self,
        data: str,
        subtitle_callback: SubtitleCallback | None = None,
        callback: LinkCallback | None = None,
    ) -> bool:
        """Emit the HLS stream of a lesson.

        Lesson URLs from the mirrors are already playable, so this makes no
        request and emits exactly one link.

        Args:
            data: The lesson URL.
            subtitle_callback: Unused; lessons carry no separate subtitles.
            callback: Receives the link.

        Returns:
            Always True.
        """
        link = to_extractor_link(self.name, data, self.settings.referer)
        if callback is not None:
            callback(link)
        return True

    def close(self) -> None:
        self.client.close()
