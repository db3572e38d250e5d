"""GraphQL payloads sent to the SkillShare API."""

import json

PAGE_SIZE = 30

SEARCH_LEVELS = ["ALL_LEVELS", "BEGINNER", "INTERMEDIATE", "ADVANCED"]

CLASSES_BY_TYPE_QUERY = """\
query GetClassesByType($filter: ClassFilters!, $pageSize: Int, $cursor: String, $type: ClassListType!, $sortAttribute: ClassListByTypeSortAttribute) {
  classListByType(type: $type, where: $filter, first: $pageSize, after: $cursor, sortAttribute: $sortAttribute) {
    nodes {
      id
      title
      url
      sku
      smallCoverUrl
      largeCoverUrl
    }
  }
}"""

SEARCH_QUERY = """\
fragment ClassFields on Class {
  id
  smallCoverUrl
  largeCoverUrl
  sku
  title
  url
}

query GetClassesQuery($query: String!, $where: SearchFilters!, $after: String!, $first: Int!) {
  search(query: $query, where: $where, analyticsTags: ["src:browser", "src:browser:search"], after: $after, first: $first) {
    edges {
      node {
        ...ClassFields
      }
    }
  }
}"""


def classes_by_type_payload(sort_attribute: str, cursor: str) -> str:
    """Build the listing request for one page of a sort order.

    Args:
        sort_attribute: The listing sort, e.g. ``"SIX_MONTHS_ENGAGEMENT"``.
        cursor: Id of the last class of the previous page, or "" for the first page.

    Returns:
        The JSON request body.
    """
    return json.dumps(
        {
            "query": CLASSES_BY_TYPE_QUERY,
            "variables": {
                "type": "TRENDING_CLASSES",
                "filter": {"subCategory": "", "classLength": []},
                "pageSize": PAGE_SIZE,
                "cursor": cursor,
                "sortAttribute": sort_attribute,
            },
            "operationName": "GetClassesByType",
        }
    )


def search_payload(term: str) -> str:
    """Build the search request for the first page of results for ``term``."""
    return json.dumps(
        {
            "query": SEARCH_QUERY,
            "variables": {
                "query": term,
                "where": {"level": list(SEARCH_LEVELS)},
                "after": "-1",
                "first": PAGE_SIZE,
            },
            "operationName": "GetClassesQuery",
        }
    )
