"""
Tests for the chainable query builders and the requests they produce.
"""
from core.config import ConversationsSettings
from core.domain.fields import (
    AnswerField,
    ContentType,
    FilterOperator,
    ProductField,
    QuestionField,
    ReviewField,
    SortOrder,
)
from core.queries import AuthorQuery, CommentsQuery, ProductQuery, QuestionQuery, ReviewQuery


class TestQuestionQuery:
    """Questions listing: includes, filters and pagination."""

    def test_full_request(self, settings):
        query = (
            QuestionQuery("test1", limit=10, settings=settings)
            .include(ContentType.ANSWERS)
            .include(ContentType.PRODUCTS)
            .filter((QuestionField.HAS_ANSWERS, FilterOperator.EQUAL_TO, True))
        )

        request = query.build_request()

        assert request.url == "https://api.test/data/questions.json"
        assert request.params == (
            ("passkey", "test-key"),
            ("apiversion", "5.4"),
            ("Filter", "ProductId:eq:test1"),
            ("Include", "Answers,Products"),
            ("Limit_Answers", "10"),
            ("Limit_Products", "10"),
            ("Filter", "HasAnswers:eq:true"),
            ("Limit", "10"),
        )
        assert request.headers["Accept"] == "application/json"

    def test_builder_methods_return_same_instance(self, settings):
        query = QuestionQuery("test1", settings=settings)

        assert query.include(ContentType.ANSWERS) is query
        assert query.filter((QuestionField.HAS_ANSWERS, FilterOperator.EQUAL_TO, True)) is query
        assert query.sort(QuestionField.SUBMISSION_TIME) is query

    def test_filter_on_answers_uses_typed_filter(self, settings):
        query = QuestionQuery("test1", limit=0, settings=settings).filter(
            (AnswerField.IS_BEST_ANSWER, FilterOperator.EQUAL_TO, True)
        )

        assert ("Filter_Answers", "IsBestAnswer:eq:true") in query.query_items()

    def test_sort_on_own_and_other_scope(self, settings):
        query = (
            QuestionQuery("test1", limit=0, settings=settings)
            .sort(QuestionField.SUBMISSION_TIME, SortOrder.DESCENDING)
            .sort(AnswerField.SUBMISSION_TIME)
            .sort(ReviewField.RATING)
        )

        items = query.query_items()
        assert ("Sort", "SubmissionTime:desc") in items
        assert ("Sort_Answers", "SubmissionTime:asc") in items
        assert not any(k == "Sort_Reviews" for k, _ in items)

    def test_illegal_include_is_ignored(self, settings):
        query = QuestionQuery("test1", limit=0, settings=settings).include(ContentType.REVIEWS)

        assert query.query_items() == [("Filter", "ProductId:eq:test1")]


class TestIncludes:
    """Include and include-limit coalescing."""

    def test_limit_zero_sends_no_include_limit(self, settings):
        query = ReviewQuery("test1", limit=0, settings=settings).include(ContentType.COMMENTS, limit=0)

        assert query.query_items() == [
            ("Filter", "ProductId:eq:test1"),
            ("Include", "Comments"),
        ]

    def test_repeated_include_coalesces(self, settings):
        query = (
            ReviewQuery("test1", limit=0, settings=settings)
            .include(ContentType.COMMENTS)
            .include(ContentType.COMMENTS, limit=5)
        )

        assert query.query_items() == [
            ("Filter", "ProductId:eq:test1"),
            ("Include", "Comments"),
            ("Limit_Comments", "5"),
        ]


class TestFilters:
    """OR within a field, AND across fields."""

    def test_or_on_same_field(self, settings):
        query = ReviewQuery("test1", limit=0, settings=settings).filter(
            (ReviewField.RATING, FilterOperator.EQUAL_TO, 4),
            (ReviewField.RATING, FilterOperator.EQUAL_TO, 5),
        )

        assert query.query_items()[1:] == [("Filter", "Rating:eq:4,5")]

    def test_and_across_fields(self, settings):
        query = ReviewQuery("test1", limit=0, settings=settings).filter(
            (ReviewField.RATING, FilterOperator.GREATER_THAN_OR_EQUAL_TO, 4),
            (ReviewField.IS_RECOMMENDED, FilterOperator.EQUAL_TO, True),
        )

        assert query.query_items()[1:] == [
            ("Filter", "Rating:gte:4"),
            ("Filter", "IsRecommended:eq:true"),
        ]

    def test_separate_filter_calls_do_not_merge(self, settings):
        query = (
            ReviewQuery("test1", limit=0, settings=settings)
            .filter((ReviewField.RATING, FilterOperator.EQUAL_TO, 4))
            .filter((ReviewField.RATING, FilterOperator.EQUAL_TO, 5))
        )

        assert query.query_items()[1:] == [
            ("Filter", "Rating:eq:4"),
            ("Filter", "Rating:eq:5"),
        ]

    def test_reserved_characters_in_values(self, settings):
        query = ReviewQuery("test1", limit=0, settings=settings).filter(
            (ReviewField.CONTENT_LOCALE, FilterOperator.EQUAL_TO, "en:US,fr")
        )

        assert query.query_items()[-1] == ("Filter", "ContentLocale:eq:en\\:US\\,fr")


class TestProductQuery:
    """Product display: fixed id, typed filters only, no pagination."""

    def test_product_field_filters_are_dropped(self, settings):
        query = ProductQuery("test1", settings=settings).filter(
            (ProductField.NAME, FilterOperator.EQUAL_TO, "Other"),
            (ReviewField.RATING, FilterOperator.EQUAL_TO, 5),
        )

        assert query.query_items() == [
            ("Filter", "Id:eq:test1"),
            ("Filter_Reviews", "Rating:eq:5"),
        ]

    def test_same_named_fields_of_different_types(self, settings):
        query = ProductQuery("test1", settings=settings).filter(
            (ReviewField.ID, FilterOperator.EQUAL_TO, "r1"),
            (QuestionField.ID, FilterOperator.EQUAL_TO, "q1"),
        )

        assert query.query_items()[1:] == [
            ("Filter_Reviews", "Id:eq:r1"),
            ("Filter_Questions", "Id:eq:q1"),
        ]

    def test_stats_union(self, settings):
        query = (
            ProductQuery("test1", settings=settings)
            .stats(ContentType.REVIEWS)
            .stats(ContentType.QUESTIONS)
            .stats(ContentType.REVIEWS)
            .stats(ContentType.ANSWERS)
        )

        assert query.query_items()[1:] == [("Stats", "Reviews,Questions")]

    def test_sort_on_included_content(self, settings):
        query = ProductQuery("test1", settings=settings).sort(ReviewField.SUBMISSION_TIME, SortOrder.DESCENDING)

        assert query.query_items()[-1] == ("Sort_Reviews", "SubmissionTime:desc")

    def test_no_pagination(self, settings):
        query = ProductQuery("test1", settings=settings)

        assert not any(k in ("Limit", "Offset") for k, _ in query.query_items())


class TestStats:
    """Filtered and incentivized statistics on reviews."""

    def test_filtered_and_incentivized(self, settings):
        query = (
            ReviewQuery("test1", limit=0, settings=settings)
            .filtered_stats(ContentType.REVIEWS)
            .incentivized_stats(True)
            .incentivized_stats(False)
        )

        assert query.query_items()[1:] == [
            ("FilteredStats", "Reviews"),
            ("IncentivizedStats", "false"),
        ]


class TestPagination:
    """Limit and Offset for paged queries."""

    def test_default_limit_from_settings(self):
        settings = ConversationsSettings(_env_file=None, api_key="k", default_limit=25)
        query = ReviewQuery("test1", settings=settings)

        assert query.query_items()[-1] == ("Limit", "25")

    def test_limit_is_capped(self, settings):
        query = ReviewQuery("test1", limit=500, settings=settings)

        assert ("Limit", "100") in query.query_items()

    def test_offset(self, settings):
        query = CommentsQuery("rev-1", limit=5, offset=20, settings=settings)

        assert query.query_items() == [
            ("Filter", "ReviewId:eq:rev-1"),
            ("Limit", "5"),
            ("Offset", "20"),
        ]


class TestRequest:
    """Request descriptor details."""

    def test_no_passkey_when_unset(self):
        settings = ConversationsSettings(_env_file=None, api_key=None)
        request = AuthorQuery("author-1", settings=settings).build_request()

        assert request.url == "https://stg.api.bazaarvoice.com/data/authors.json"
        assert request.params == (("apiversion", "5.4"), ("Filter", "Id:eq:author-1"))

    def test_full_url(self, settings):
        request = AuthorQuery("author-1", settings=settings).build_request()

        assert request.full_url() == (
            "https://api.test/data/authors.json?passkey=test-key&apiversion=5.4&Filter=Id%3Aeq%3Aauthor-1"
        )
