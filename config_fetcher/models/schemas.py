"""Pydantic models for upstream payloads."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from config_fetcher.core.errors import MalformedRecommendationError


class RecommendedServer(BaseModel):
    """One element of the recommendation source's JSON array.

    Only ``hostname`` is consumed; the source sends many more fields
    (load, station, locations, technologies...) which are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    hostname: StrictStr = Field(..., min_length=1)


def parse_recommendations(payload: bytes | str) -> list[str]:
    """
    Decode a recommendation payload into hostnames, preserving source order.
    Never raises anything but MalformedRecommendationError.

    Decoding is all-or-nothing: the first record without a usable hostname
    fails the whole list. An empty string counts as unusable, since it can
    never name a server to fetch a config for.
    """
    try:
        data: Any = json.loads(payload)
    except (ValueError, TypeError) as e:
        raise MalformedRecommendationError(
            f"recommendation payload is not valid JSON: {e}",
        ) from e
    if not isinstance(data, list):
        raise MalformedRecommendationError(
            f"recommendation payload must be a JSON array, got {type(data).__name__}",
            details={"type": type(data).__name__},
        )

    hostnames: list[str] = []
    for index, record in enumerate(data):
        try:
            server = RecommendedServer.model_validate(record)
        except ValidationError as e:
            first = e.errors()[0] if e.errors() else {}
            raise MalformedRecommendationError(
                f"recommendation record {index} has no usable hostname: {first.get('msg', 'invalid')}",
                details={"index": index, "errors": e.errors(include_url=False, include_context=False, include_input=False)},
            ) from e
        hostnames.append(server.hostname)
    return hostnames
