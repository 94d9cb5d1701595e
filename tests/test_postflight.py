"""
Tests for analytics events fired after successful queries.
"""
import logging

import pytest

from adapters.analytics_sink import LoggingAnalyticsSink
from conftest import FakeTransport
from core.config import AnalyticsSettings
from core.domain.analytics import (
    AnalyticsContentType,
    AnalyticsProduct,
    ImpressionEvent,
    PageViewEvent,
)
from core.queries import AuthorQuery, CommentsQuery, ProductQuery, ReviewQuery


class TestProductPostflight:
    """Product display: one impression per UGC item plus a page view."""

    @pytest.mark.asyncio
    async def test_event_counts(self, settings, sink, product_payload):
        query = ProductQuery("test1", settings=settings, transport=FakeTransport(product_payload), analytics=sink)

        response = await query.fetch()

        assert response.ok
        impressions = [e for e in sink.events if isinstance(e, ImpressionEvent)]
        page_views = [e for e in sink.events if isinstance(e, PageViewEvent)]
        assert len(impressions) == 5
        assert len(page_views) == 1
        assert sum(e.content_type is AnalyticsContentType.REVIEW for e in impressions) == 2
        assert sum(e.content_type is AnalyticsContentType.QUESTION for e in impressions) == 3

    @pytest.mark.asyncio
    async def test_review_impressions_carry_product_details(self, settings, sink, product_payload):
        query = ProductQuery("test1", settings=settings, transport=FakeTransport(product_payload), analytics=sink)

        await query.fetch()

        reviews = [e for e in sink.events if getattr(e, "content_type", None) is AnalyticsContentType.REVIEW]
        assert {e.content_id for e in reviews} == {"r1", "r2"}
        assert all(e.brand == "brand-1" and e.category_id == "kitchen" for e in reviews)
        assert all(e.bv_product is AnalyticsProduct.REVIEWS for e in reviews)

    @pytest.mark.asyncio
    async def test_page_view(self, settings, sink, product_payload):
        query = ProductQuery("test1", settings=settings, transport=FakeTransport(product_payload), analytics=sink)

        await query.fetch()

        page_view = sink.events[-1]
        assert isinstance(page_view, PageViewEvent)
        assert page_view.product_id == "test1"
        assert page_view.brand == "brand-1"
        assert sink.configs[-1].client_id == "acme"

    @pytest.mark.asyncio
    async def test_review_of_unknown_product_is_not_tracked(self, settings, sink):
        payload = {
            "Results": [{"Id": "test1", "ReviewIds": ["r1"]}],
            "Includes": {"Reviews": {"r1": {"Id": "r1", "ProductId": "other-product"}}},
        }
        query = ProductQuery("test1", settings=settings, transport=FakeTransport(payload), analytics=sink)

        await query.fetch()

        assert len(sink.events) == 1
        assert isinstance(sink.events[0], PageViewEvent)

    @pytest.mark.asyncio
    async def test_no_results_no_events(self, settings, sink):
        query = ProductQuery("test1", settings=settings, transport=FakeTransport({"Results": []}), analytics=sink)

        await query.fetch()

        assert sink.events == []


class TestListingPostflight:
    """Reviews and comments listings."""

    @pytest.mark.asyncio
    async def test_reviews_without_product_are_skipped(self, settings, sink):
        payload = {
            "Results": [
                {"Id": "r1", "ProductId": "test1"},
                {"Id": "r2"},
            ],
            "Includes": {
                "Products": {"test1": {"Id": "test1", "Brand": {"Id": "b"}, "CategoryId": "c"}},
            },
        }
        query = ReviewQuery("test1", settings=settings, transport=FakeTransport(payload), analytics=sink)

        await query.fetch()

        assert len(sink.events) == 1
        event = sink.events[0]
        assert event.content_id == "r1"
        assert event.brand == "b"
        assert event.category_id == "c"

    @pytest.mark.asyncio
    async def test_reviews_need_matching_included_product(self, settings, sink):
        payload = {
            "Results": [
                {"Id": "r1", "ProductId": "test1"},
                {"Id": "r2", "ProductId": "other-product"},
            ],
            "Includes": {"Products": {"test1": {"Id": "test1"}}},
        }
        query = ReviewQuery("test1", settings=settings, transport=FakeTransport(payload), analytics=sink)

        await query.fetch()

        assert [e.content_id for e in sink.events] == ["r1"]

    @pytest.mark.asyncio
    async def test_comment_needs_included_review(self, settings, sink):
        payload = {
            "Results": [
                {"Id": "c1", "ReviewId": "r1"},
                {"Id": "c2", "ReviewId": "r-missing"},
            ],
            "Includes": {"Reviews": {"r1": {"Id": "r1", "ProductId": "test1"}}},
        }
        query = CommentsQuery("r1", settings=settings, transport=FakeTransport(payload), analytics=sink)

        await query.fetch()

        assert len(sink.events) == 1
        assert sink.events[0].content_type is AnalyticsContentType.COMMENT
        assert sink.events[0].product_id == "test1"

    @pytest.mark.asyncio
    async def test_author_has_no_analytics(self, settings, sink):
        payload = {"Results": [{"Id": "author-1", "ReviewIds": ["r1"]}]}
        query = AuthorQuery("author-1", settings=settings, transport=FakeTransport(payload), analytics=sink)

        await query.fetch()

        assert sink.events == []


class TestEvents:
    """Event payloads and the logging sink."""

    def test_impression_payload(self):
        event = ImpressionEvent(
            bv_product=AnalyticsProduct.QUESTIONS,
            content_id="q1",
            content_type=AnalyticsContentType.QUESTION,
            product_id="test1",
            additional={"source": "tests"},
        )

        assert event.to_payload() == {
            "cl": "Impression",
            "type": "UGC",
            "bvProduct": "AskAndAnswer",
            "productId": "test1",
            "contentId": "q1",
            "contentType": "Question",
            "source": "tests",
        }

    def test_logging_sink(self, caplog):
        event = PageViewEvent(bv_product=AnalyticsProduct.REVIEWS, product_id="test1")
        config = AnalyticsSettings(client_id="acme", dry_run=True)

        with caplog.at_level(logging.DEBUG, logger="adapters.analytics_sink"):
            LoggingAnalyticsSink().track(event, config)

        assert "analytics PageView (dry run)" in caplog.text
        assert "'client': 'acme'" in caplog.text
