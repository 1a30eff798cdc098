"""Unit tests for recommendation decoding and entities."""

import json

import pytest

from config_fetcher.core.errors import MalformedRecommendationError
from config_fetcher.models.entities import Assignment
from config_fetcher.models.schemas import RecommendedServer, parse_recommendations


def test_parse_keeps_source_order_and_ignores_extra_fields() -> None:
    payload = json.dumps(
        [
            {"id": 1, "hostname": "us1234.nordvpn.com", "load": 12, "station": "1.2.3.4"},
            {"id": 2, "hostname": "us42.nordvpn.com", "technologies": []},
        ]
    ).encode()
    assert parse_recommendations(payload) == ["us1234.nordvpn.com", "us42.nordvpn.com"]


def test_parse_empty_array() -> None:
    assert parse_recommendations(b"[]") == []


def test_parse_keeps_duplicates() -> None:
    assert parse_recommendations('[{"hostname": "a"}, {"hostname": "a"}]') == ["a", "a"]


def test_missing_hostname_names_record_index() -> None:
    with pytest.raises(MalformedRecommendationError) as exc_info:
        parse_recommendations(b'[{"hostname": "a"}, {"name": "b"}]')
    assert exc_info.value.details["index"] == 1
    assert "record 1" in exc_info.value.message


@pytest.mark.parametrize(
    "payload",
    [
        b'[{"hostname": 42}]',
        b'[{"hostname": null}]',
        b'[{"hostname": ""}]',
        b'[{"hostname": ["a"]}]',
        b'["a.example.com"]',
        b"[null]",
    ],
)
def test_unusable_records_are_malformed(payload: bytes) -> None:
    with pytest.raises(MalformedRecommendationError):
        parse_recommendations(payload)


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"<html>502 Bad Gateway</html>",
        b'{"hostname": "a"}',
        b'"a"',
        b"\xff\xfe",
    ],
)
def test_non_array_payloads_are_malformed(payload: bytes) -> None:
    with pytest.raises(MalformedRecommendationError):
        parse_recommendations(payload)


def test_recommended_server_is_strict() -> None:
    assert RecommendedServer.model_validate({"hostname": "x", "extra": 1}).hostname == "x"


def test_assignment_to_dict() -> None:
    a = Assignment(node_id="alice", hostname="a", assigned_at="2026-01-01T00:00:00Z")
    assert a.to_dict() == {"node_id": "alice", "hostname": "a", "assigned_at": "2026-01-01T00:00:00Z"}


def test_assignment_timestamp_default() -> None:
    a = Assignment(node_id="alice", hostname="a")
    assert a.assigned_at.endswith("Z")


def test_empty_hostname_fails_the_whole_list() -> None:
    with pytest.raises(MalformedRecommendationError) as exc_info:
        parse_recommendations(b'[{"hostname": "a"}, {"hostname": ""}, {"hostname": "c"}]')
    assert exc_info.value.details["index"] == 1
