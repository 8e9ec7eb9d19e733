"""Fetch a GraphQL schema from a running server."""

import logging

import requests
from graphql import GraphQLError, build_client_schema, get_introspection_query, print_schema

from .errors import SchemaFetchError

logger = logging.getLogger(__name__)


def fetch_schema(url: str, headers: dict[str, str] | None = None) -> str:
    """Introspect a GraphQL endpoint and return its schema as SDL.

    Args:
        url: GraphQL endpoint (e.g., http://localhost:8088/api/graphql)
        headers: Extra HTTP headers, such as authorization

    Returns:
        Schema definition language text

    Raises:
        requests.RequestException: If the request fails
        SchemaFetchError: If the response is not an introspection result
    """
    logger.debug("Introspecting %s", url)
    response = requests.post(
        url,
        json={"query": get_introspection_query(descriptions=True)},
        headers=headers or {},
        timeout=30,
    )
    response.raise_for_status()
    payload = response.json()

    if payload.get("errors"):
        messages = "; ".join(error.get("message", "") for error in payload["errors"])
        raise SchemaFetchError(f"Introspection failed: {messages}")
    if not payload.get("data"):
        raise SchemaFetchError("Introspection response has no data")

    try:
        schema = build_client_schema(payload["data"])
    except (GraphQLError, TypeError) as e:
        raise SchemaFetchError(f"Invalid introspection result: {e}") from e
    return print_schema(schema)
