"""SkillShare as a host plugin.

The host calls :func:`load` once when the plugin is loaded.
"""

from skillstream.config import Settings
from skillstream.exceptions import DecodeError
from skillstream.host import (
    HomePageList,
    HomePageResponse,
    LinkCallback,
    LoadResponse,
    MainAPI,
    MainPageRequest,
    PluginRegistry,
    ProviderStatus,
    SearchResponse,
    SubtitleCallback,
    TvType,
    main_page_of,
)
from skillstream.skillshare.cursor import SortKey
from skillstream.skillshare.mapper import to_load_response, to_search_response
from skillstream.skillshare.models import LoadData
from skillstream.skillshare.provider import SkillshareProvider


class SkillshareAPI(MainAPI):
    """Host-facing adapter around :class:`SkillshareProvider`."""

    name = SkillshareProvider.name
    main_url = Settings.main_url
    lang = "en"
    supported_types = frozenset({TvType.OTHERS})
    has_main_page = True
    has_chromecast_support = True
    status = ProviderStatus.OK
    icon_url = "https://www.google.com/s2/favicons?domain=skillshare.com&sz=%size%"
    main_page = main_page_of(*((key.value, key.label) for key in SortKey))

    def __init__(self, provider: SkillshareProvider | None = None):
        self.provider = provider if provider is not None else SkillshareProvider()
        self.main_url = self.provider.settings.main_url

    def get_main_page(self, page: int, request: MainPageRequest) -> HomePageResponse:
        items, has_next = self.provider.fetch_page(request.data, page)
        home = [to_search_response(item, self.name) for item in items]
        return HomePageResponse(
            items=[HomePageList(request.name, home, is_horizontal_images=True)],
            has_next=has_next,
        )

    def search(self, query: str) -> list[SearchResponse]:
        return [to_search_response(item, self.name) for item in self.provider.search(query)]

    def load(self, url: str) -> LoadResponse:
        data = LoadData.from_json(url)
        if not data.course_id:
            raise DecodeError("Load payload has no courseId")
        detail = self.provider.resolve_course(data.course_id)
        return to_load_response(data, url, detail, self.name)

    def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        return self.provider.resolve_links(data, subtitle_callback, callback)


def load(registry: PluginRegistry, settings: Settings | None = None) -> SkillshareAPI:
    """Register the SkillShare provider with the host.

    Args:
        registry: The host's provider registry.
        settings: Overrides for endpoints and timeout.

    Returns:
        The registered provider.
    """
    api = SkillshareAPI(SkillshareProvider(settings))
    registry.register(api)
    return api
