import pytest
from uuid import uuid4
from sqlalchemy.exc import OperationalError

from ecocatalog.products.service import CatalogService, age_bucket
from ecocatalog.core.exceptions import InvalidArgumentError, NotFoundError, StorageUnavailableError


def titles(products):
    return [p.title for p in products]


def scores_are_descending_with_nulls_last(products):
    scores = [p.eco_score for p in products]
    scored = [s for s in scores if s is not None]
    first_null = next((i for i, s in enumerate(scores) if s is None), len(scores))
    return all(s is None for s in scores[first_null:]) and scored == sorted(scored, reverse=True)


@pytest.mark.parametrize("age, bucket", [
    (18, "18-24"), (24, "18-24"), (25, "25-34"), (34, "25-34"), (35, "35-44"),
    (44, "35-44"), (45, "45-54"), (54, "45-54"), (55, "55+"), (90, "55+"), (12, "18-24"),
])
def test_age_bucket_boundaries(age, bucket):
    assert age_bucket(age) == bucket


class TestListProducts:

    def test_orders_by_eco_score_with_unscored_last(self, db_session, products):
        result = CatalogService.list_products(db_session)

        assert len(result) == len(products)
        assert scores_are_descending_with_nulls_last(result)
        assert result[0].title == "Organic Cotton Tee"
        assert result[-1].title == "Canvas Tote"

    def test_category_filter(self, db_session, products):
        result = CatalogService.list_products(db_session, category="Clothing")

        assert titles(result) == ["Organic Cotton Tee", "Recycled Sneaker"]

    @pytest.mark.parametrize("category", [None, "", "all", "  "])
    def test_all_and_blank_category_mean_unfiltered(self, db_session, products, category):
        assert len(CatalogService.list_products(db_session, category=category)) == len(products)

    def test_pagination(self, db_session, products):
        everything = CatalogService.list_products(db_session, limit=100)
        first_page = CatalogService.list_products(db_session, limit=3, offset=0)
        second_page = CatalogService.list_products(db_session, limit=3, offset=3)

        assert titles(first_page) == titles(everything[:3])
        assert titles(second_page) == titles(everything[3:6])
        assert CatalogService.list_products(db_session, limit=3, offset=100) == []

    @pytest.mark.parametrize("kwargs", [
        {"limit": 0},
        {"limit": -5},
        {"limit": 101},
        {"limit": "20"},
        {"limit": True},
        {"offset": -1},
        {"offset": 1.5},
        {"offset": 2**70},
    ])
    def test_rejects_malformed_paging(self, db_session, kwargs):
        with pytest.raises(InvalidArgumentError):
            CatalogService.list_products(db_session, **kwargs)

    def test_storage_failure_is_wrapped(self, mocker):
        db = mocker.MagicMock()
        db.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with pytest.raises(StorageUnavailableError) as exc_info:
            CatalogService.list_products(db)

        assert "connection refused" not in exc_info.value.user_message
        assert "connection refused" in exc_info.value.technical_details


class TestSearchProducts:

    def test_matches_title_case_insensitively(self, db_session, products):
        assert titles(CatalogService.search_products(db_session, "bamboo")) == ["Bamboo Toothbrush"]

    def test_matches_review_text(self, db_session, products):
        assert titles(CatalogService.search_products(db_session, "gym")) == ["Glass Water Bottle"]

    def test_combines_with_category(self, db_session, products):
        assert titles(CatalogService.search_products(db_session, "recycled", category="Clothing")) == ["Recycled Sneaker"]
        assert CatalogService.search_products(db_session, "bamboo", category="Home") == []

    def test_results_keep_eco_score_order(self, db_session, products):
        result = CatalogService.search_products(db_session, "e")

        assert len(result) > 2
        assert scores_are_descending_with_nulls_last(result)

    def test_like_wildcards_are_literal(self, db_session, products):
        assert titles(CatalogService.search_products(db_session, "50%_off")) == ["Olive Oil Soap"]
        assert titles(CatalogService.search_products(db_session, "%")) == ["Glass Water Bottle", "Olive Oil Soap"]
        assert titles(CatalogService.search_products(db_session, "100%")) == ["Glass Water Bottle"]

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_degrades_to_listing(self, db_session, products, query):
        assert titles(CatalogService.search_products(db_session, query)) == titles(CatalogService.list_products(db_session))


class TestDemographicRecommendations:

    def test_thirty_year_old_female(self, db_session, products):
        result = CatalogService.recommend_by_demographic(db_session, 30, "Female")

        assert titles(result) == [
            "Organic Cotton Tee",   # exact match on both
            "Glass Water Bottle",   # both targets contain the values
            "Bamboo Toothbrush",    # untargeted
            "Canvas Tote",          # untargeted age, unscored so last
        ]
        for product in result:
            assert product.age_target is None or "25-34" in product.age_target
            assert product.gender_target is None or "female" in product.gender_target.lower()

    def test_twenty_two_year_old_male(self, db_session, products):
        result = CatalogService.recommend_by_demographic(db_session, 22, "Male")

        for product in result:
            assert product.age_target is None or "18-24" in product.age_target
            assert product.gender_target is None or "male" in product.gender_target.lower()
        assert "Steel Safety Razor" not in titles(result)
        assert "Olive Oil Soap" in titles(result)
        assert scores_are_descending_with_nulls_last(result)

    def test_oldest_bucket(self, db_session, products):
        assert titles(CatalogService.recommend_by_demographic(db_session, 70, "Other")) == [
            "Bamboo Toothbrush",
            "Solar Lamp",
        ]

    def test_limit(self, db_session, products):
        assert len(CatalogService.recommend_by_demographic(db_session, 30, "Female", limit=2)) == 2

    @pytest.mark.parametrize("age, gender", [
        (None, "Female"),
        (30, None),
        (30, ""),
        (30, "   "),
        (0, "Female"),
        (-3, "Female"),
        ("thirty", "Female"),
        (30.5, "Female"),
        (2**70, "Female"),
    ])
    def test_rejects_missing_or_malformed_demographics(self, db_session, age, gender):
        with pytest.raises(InvalidArgumentError):
            CatalogService.recommend_by_demographic(db_session, age, gender)


class TestPersonalizedRecommendations:

    def test_uses_stored_demographics(self, db_session, products, test_user):
        personalized = CatalogService.recommend_personalized(db_session, test_user.id)
        demographic = CatalogService.recommend_by_demographic(db_session, test_user.age, test_user.gender)

        assert titles(personalized) == titles(demographic)

    def test_unknown_user(self, db_session, products):
        with pytest.raises(NotFoundError):
            CatalogService.recommend_personalized(db_session, uuid4())


class TestCategoriesAndLookup:

    def test_categories_skip_null_and_empty(self, db_session, products):
        assert CatalogService.list_categories(db_session) == ["Beauty", "Clothing", "Home"]

    def test_categories_of_empty_catalogue(self, db_session):
        assert CatalogService.list_categories(db_session) == []

    def test_get_product(self, db_session, products):
        tee = products["tee_women_25"]
        assert CatalogService.get_product(db_session, tee.id).title == tee.title

    def test_get_missing_product(self, db_session, products):
        with pytest.raises(NotFoundError):
            CatalogService.get_product(db_session, uuid4())

    def test_create_product(self, db_session):
        product = CatalogService.create_product(db_session, title="Hemp Backpack", category="Bags")

        assert product.id is not None
        assert product.eco_score is None
        assert CatalogService.list_categories(db_session) == ["Bags"]
