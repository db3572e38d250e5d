"""Types and base classes of the media host that providers plug into.

The host application owns rendering, plugin discovery and playback. A provider
only has to subclass :class:`MainAPI`, fill in the display types below, and be
handed to :meth:`PluginRegistry.register` by its plugin's ``load`` hook.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from loguru import logger


class TvType(Enum):
    """Kinds of content the host knows how to display."""

    MOVIE = "Movie"
    TV_SERIES = "TvSeries"
    DOCUMENTARY = "Documentary"
    OTHERS = "Others"


class Qualities(IntEnum):
    """Stream quality markers; ``UNKNOWN`` lets the player decide."""

    UNKNOWN = 400
    P360 = 360
    P480 = 480
    P720 = 720
    P1080 = 1080


class ProviderStatus(IntEnum):
    DOWN = 0
    OK = 1
    SLOW = 2
    BETA_ONLY = 3


@dataclass(frozen=True)
class MainPageData:
    """A section of a provider's home page: display name plus opaque request data."""

    name: str
    data: str


@dataclass(frozen=True)
class MainPageRequest:
    """What the host passes back when it asks for one home page section."""

    name: str
    data: str
    horizontal_images: bool = False


@dataclass
class SearchResponse:
    name: str
    url: str
    api_name: str
    type: TvType = TvType.TV_SERIES
    poster_url: str | None = None


@dataclass
class HomePageList:
    name: str
    items: list[SearchResponse]
    is_horizontal_images: bool = False


@dataclass
class HomePageResponse:
    items: list[HomePageList]
    has_next: bool = False


@dataclass
class Episode:
    """One playable entry of a series.

    Attributes:
        data: Opaque string handed back to ``load_links`` when the episode plays.
        name: Display name.
        season: Season number.
        episode: Episode number within the season.
    """

    data: str
    name: str | None = None
    season: int | None = None
    episode: int | None = None


@dataclass
class LoadResponse:
    name: str
    url: str
    api_name: str
    type: TvType = TvType.TV_SERIES
    episodes: list[Episode] = field(default_factory=list)
    poster_url: str | None = None


@dataclass(frozen=True)
class SubtitleFile:
    lang: str
    url: str


@dataclass(frozen=True)
class ExtractorLink:
    """A stream the host player can open."""

    source: str
    name: str
    url: str
    referer: str
    quality: int = Qualities.UNKNOWN
    is_m3u8: bool = False


SubtitleCallback = Callable[[SubtitleFile], None]
LinkCallback = Callable[[ExtractorLink], None]


def main_page_of(*sections: tuple[str, str]) -> list[MainPageData]:
    """Build a home page layout from ``(data, name)`` pairs."""
    return [MainPageData(name=name, data=data) for data, name in sections]


class MainAPI(ABC):
    """Abstract base class for content providers.

    Attributes:
        name: Display name, also used as the link source.
        main_url: Public site URL.
        lang: ISO 639-1 language code of the content.
        supported_types: Kinds of content this provider returns.
        has_main_page: Whether :meth:`get_main_page` is implemented.
        has_chromecast_support: Whether links can be cast.
        main_page: Sections shown on the host's home screen.
    """

    name: str
    main_url: str
    lang: str = "en"
    supported_types: frozenset[TvType] = frozenset({TvType.OTHERS})
    has_main_page: bool = False
    has_chromecast_support: bool = False
    main_page: list[MainPageData] = []

    def get_main_page(self, page: int, request: MainPageRequest) -> HomePageResponse:
        """Return one page of a home page section.

        Args:
            page: 1-based page number; page 1 starts a fresh traversal.
            request: The section being requested, taken from :attr:`main_page`.
        """
        raise NotImplementedError(f"{self.name} has no main page")

    @abstractmethod
    def search(self, query: str) -> list[SearchResponse]:
        """Search the provider for ``query``."""
        ...

    @abstractmethod
    def load(self, url: str) -> LoadResponse:
        """Load the detail page of a search result.

        Args:
            url: The ``url`` of a :class:`SearchResponse` produced by this provider.
        """
        ...

    @abstractmethod
    def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """Emit playable links for an episode.

        Args:
            data: The ``data`` of an :class:`Episode` produced by :meth:`load`.
            is_casting: Whether the links will be cast to another device.
            subtitle_callback: Called once per subtitle track found.
            callback: Called once per playable link found.

        Returns:
            True if at least one link was emitted.
        """
        ...


class PluginRegistry:
    """The host's list of loaded providers."""

    def __init__(self):
        self._providers: dict[str, MainAPI] = {}

    def register(self, api: MainAPI) -> None:
        """Add a provider; names must be unique."""
        if api.name in self._providers:
            raise ValueError(f"Provider already registered: {api.name}")
        self._providers[api.name] = api
        logger.debug(f"Registered provider {api.name} ({api.main_url})")

    def get(self, name: str) -> MainAPI:
        return self._providers[name]

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __iter__(self):
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)
