"""
Response shaping tests - paging echo, facets and suggestion lists.
"""

from product_search.schemas.search import SearchRequest
from product_search.search.shaping import (
    build_facets,
    extract_suggestions,
    price_bucket_label,
    shape_search_response,
)


def _hit(doc_id: str, **source):
    return {"_id": doc_id, "_score": 1.0, "_source": {"id": doc_id, **source}}


def test_shape_search_response_copies_hits_and_echoes_paging():
    raw = {
        "hits": {
            "total": {"value": 42, "relation": "eq"},
            "hits": [_hit("a", title="Blue Widget", price=19.99), _hit("b", title="Red Widget", price=9.5)],
        }
    }
    request = SearchRequest(query="widget", page=3, page_size=2, include_facets=False)

    response = shape_search_response(raw, request, elapsed_ms=12.7)

    assert [p.id for p in response.products] == ["a", "b"]
    assert response.products[0].title == "Blue Widget"
    assert response.total_count == 42
    assert response.page == 3
    assert response.page_size == 2
    assert response.execution_time_ms == 12
    assert response.facets == {}


def test_hit_without_id_in_source_uses_hit_id():
    raw = {"hits": {"total": {"value": 1}, "hits": [{"_id": "xyz", "_source": {"title": "Loose"}}]}}
    response = shape_search_response(raw, SearchRequest(), elapsed_ms=0)
    assert response.products[0].id == "xyz"


def test_facets_built_only_when_requested_and_returned():
    raw = {
        "hits": {"total": {"value": 0}, "hits": []},
        "aggregations": {"categories": {"buckets": [{"key": "Hardware", "doc_count": 3}]}},
    }
    with_facets = shape_search_response(raw, SearchRequest(include_facets=True), elapsed_ms=1)
    assert with_facets.facets["categories"][0].value == "Hardware"

    without = shape_search_response(raw, SearchRequest(include_facets=False), elapsed_ms=1)
    assert without.facets == {}

    no_aggs = shape_search_response({"hits": {"hits": []}}, SearchRequest(include_facets=True), elapsed_ms=1)
    assert no_aggs.facets == {}


def test_build_facets_maps_buckets():
    aggregations = {
        "categories": {"buckets": [{"key": "Hardware", "doc_count": 7}, {"key": "Kitchen", "doc_count": 2}]},
        "brands": {"buckets": [{"key": "Acme", "doc_count": 5}]},
        "price_ranges": {
            "buckets": [
                {"key": "*-25.0", "to": 25.0, "doc_count": 4},
                {"key": "25.0-50.0", "from": 25.0, "to": 50.0, "doc_count": 3},
                {"key": "200.0-*", "from": 200.0, "doc_count": 1},
            ]
        },
    }

    facets = build_facets(aggregations)

    assert [(f.value, f.count) for f in facets["categories"]] == [("Hardware", 7), ("Kitchen", 2)]
    assert [(f.value, f.count) for f in facets["brands"]] == [("Acme", 5)]
    assert [(f.value, f.count) for f in facets["price_ranges"]] == [("0-25", 4), ("25-50", 3), ("200-*", 1)]


def test_price_bucket_labels_never_leave_a_side_empty():
    assert price_bucket_label({}) == "0-*"
    assert price_bucket_label({"from": 12.5}) == "12.5-*"
    assert price_bucket_label({"to": 100.0}) == "0-100"
    for label in (price_bucket_label({"from": 1.0}), price_bucket_label({"to": 1.0})):
        lower, upper = label.split("-")
        assert lower and upper


def test_extract_suggestions_dedupes_in_first_seen_order():
    raw = {
        "suggest": {
            "product_suggest": [
                {
                    "text": "bl",
                    "options": [{"text": "Blue Widget"}, {"text": "Blender"}, {"text": "Blue Widget"}],
                },
                {"text": "bl", "options": [{"text": "Blender"}, {"text": "Blanket"}]},
            ]
        }
    }
    assert extract_suggestions(raw) == ["Blue Widget", "Blender", "Blanket"]


def test_extract_suggestions_handles_missing_groups():
    assert extract_suggestions({"hits": {"hits": []}}) == []
    assert extract_suggestions({"suggest": {"product_suggest": [{"options": []}]}}) == []
