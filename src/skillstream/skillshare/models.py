"""SkillShare records and the decoders that build them from response bodies.

Listing and search responses nest the same class fields differently::

    listing: data.classListByType.nodes[]
    search:  data.search.edges[].node

Both decoders produce :class:`ClassNode` records so the rest of the provider
does not care which query produced them.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from skillstream.exceptions import DecodeError


def _parse_json(body: str) -> Any:
    try:
        return json.loads(body)
    except (TypeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e


def _member(obj: Any, key: str, path: str) -> Any:
    """Return ``obj[key]``, requiring ``obj`` to be a JSON object."""
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected an object at {path}, got {type(obj).__name__}")
    if key not in obj:
        raise DecodeError(f"Missing {path}.{key}")
    return obj[key]


def _list_member(obj: Any, key: str, path: str) -> list:
    value = _member(obj, key, path)
    if not isinstance(value, list):
        raise DecodeError(f"Expected a list at {path}.{key}, got {type(value).__name__}")
    return value


def _optional_str(obj: dict, key: str) -> str | None:
    value = obj.get(key)
    if value is None:
        return None
    return str(value)


def _graphql_data(body: str) -> dict:
    """Return the ``data`` member of a GraphQL response.

    Raises:
        DecodeError: If the body is malformed or carries errors but no data.
    """
    payload = _parse_json(body)
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object, got {type(payload).__name__}")
    data = payload.get("data")
    if data is None:
        errors = payload.get("errors") or []
        messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
        if messages:
            raise DecodeError(f"GraphQL error: {'; '.join(messages)}")
        raise DecodeError("Missing data")
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object at data, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class ClassNode:
    """A class as returned by either GraphQL query; every field may be missing."""

    id: str | None = None
    title: str | None = None
    url: str | None = None
    sku: str | None = None
    small_cover_url: str | None = None
    large_cover_url: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ClassNode":
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a class object, got {type(data).__name__}")
        return cls(
            id=_optional_str(data, "id"),
            title=_optional_str(data, "title"),
            url=_optional_str(data, "url"),
            sku=_optional_str(data, "sku"),
            small_cover_url=_optional_str(data, "smallCoverUrl"),
            large_cover_url=_optional_str(data, "largeCoverUrl"),
        )


def decode_listing(body: str) -> list[ClassNode]:
    """Decode a ``GetClassesByType`` response into nodes, in page order."""
    data = _graphql_data(body)
    class_list = _member(data, "classListByType", "data")
    nodes = _list_member(class_list, "nodes", "data.classListByType")
    return [ClassNode.from_dict(node) for node in nodes]


def decode_search(body: str) -> list[ClassNode]:
    """Decode a ``GetClassesQuery`` response into nodes, in result order."""
    data = _graphql_data(body)
    search = _member(data, "search", "data")
    edges = _list_member(search, "edges", "data.search")
    return [
        ClassNode.from_dict(_member(edge, "node", f"data.search.edges[{i}]"))
        for i, edge in enumerate(edges)
    ]


@dataclass(frozen=True)
class CourseSummary:
    """A class as shown in listings and search results.

    Attributes:
        id: GraphQL node id; also the pagination cursor.
        title: Class title, "" when the API omits it.
        url: Canonical class page.
        course_id: The class SKU, used to look up lessons on the bypass mirrors.
        small_cover_url: Poster for result grids.
        large_cover_url: Poster for the detail page.
    """

    id: str | None
    title: str = ""
    url: str | None = None
    course_id: str | None = None
    small_cover_url: str | None = None
    large_cover_url: str | None = None

    @classmethod
    def from_node(cls, node: ClassNode) -> "CourseSummary":
        return cls(
            id=node.id,
            title=node.title or "",
            url=node.url,
            course_id=node.sku,
            small_cover_url=node.small_cover_url,
            large_cover_url=node.large_cover_url,
        )

    def to_load_data(self) -> "LoadData":
        return LoadData(
            title=self.title, course_id=self.course_id, large_cover_url=self.large_cover_url
        )


@dataclass(frozen=True)
class LoadData:
    """The opaque payload passed from a search result to the detail load."""

    title: str | None = None
    course_id: str | None = None
    large_cover_url: str | None = None

    def to_json(self) -> str:
        return json.dumps(
            {
                "title": self.title,
                "courseId": self.course_id,
                "largeCoverUrl": self.large_cover_url,
            }
        )

    @classmethod
    def from_json(cls, payload: str) -> "LoadData":
        """Parse a payload produced by :meth:`to_json`.

        Raises:
            DecodeError: If the payload is not a JSON object.
        """
        data = _parse_json(payload)
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(
            title=_optional_str(data, "title"),
            course_id=_optional_str(data, "courseId"),
            large_cover_url=_optional_str(data, "largeCoverUrl"),
        )


@dataclass(frozen=True)
class Lesson:
    title: str | None = None
    url: str = ""


@dataclass(frozen=True)
class CourseDetail:
    """A class with its ordered lessons, as served by a bypass mirror."""

    title: str | None = None
    large_cover_url: str | None = None
    lessons: list[Lesson] = field(default_factory=list)


def decode_bypass(body: str) -> CourseDetail:
    """Decode a bypass mirror response.

    The body must be a JSON object with a ``lessons`` list; ``class`` and
    ``class_thumbnail`` are optional.
    """
    payload = _parse_json(body)
    lessons = _list_member(payload, "lessons", "response")
    decoded = []
    for i, lesson in enumerate(lessons):
        if not isinstance(lesson, dict):
            raise DecodeError(f"Expected an object at lessons[{i}], got {type(lesson).__name__}")
        decoded.append(Lesson(title=_optional_str(lesson, "title"), url=_optional_str(lesson, "url") or ""))
    return CourseDetail(
        title=_optional_str(payload, "class"),
        large_cover_url=_optional_str(payload, "class_thumbnail"),
        lessons=decoded,
    )
