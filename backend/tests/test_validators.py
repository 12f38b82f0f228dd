"""
CarLookup Backend: Validator Tests
===================================

What we test:
    ✅ Car make and car model body rules and their messages
    ✅ Model year window: 1885 to next calendar year
    ✅ Pagination query limits, including the tighter model name filter
"""

import uuid

import pytest

from carlookup.exceptions import ValidationError
from carlookup.schemas.car import CarMakeRequest, CarModelRequest
from carlookup.schemas.pagination import CarModelPaginationQuery, PaginationQuery
from carlookup.validators import (
    ensure_valid,
    latest_model_year,
    validate_car_make_request,
    validate_car_model_pagination_query,
    validate_car_model_request,
    validate_pagination_query,
)


def messages(errors):
    return [e.message for e in errors]


class TestCarMakeRequest:
    def test_valid(self):
        assert validate_car_make_request(CarMakeRequest(name="BMW", country_of_origin="Germany")) == []

    def test_whitespace_only_is_missing(self):
        errors = validate_car_make_request(CarMakeRequest(name="   ", country_of_origin="Germany"))
        assert messages(errors) == ["Name is required"]
        assert errors[0].field == "name"

    def test_length_is_measured_after_trimming(self):
        errors = validate_car_make_request(CarMakeRequest(name=" B ", country_of_origin="x" * 101))
        assert messages(errors) == [
            "Name must be between 2 and 100 characters",
            "Country of origin must be between 2 and 100 characters",
        ]
        assert errors[1].field == "countryOfOrigin"


class TestCarModelRequest:
    def test_valid(self):
        request = CarModelRequest(make_id=uuid.uuid4(), name="X", model_year=1885)
        assert validate_car_model_request(request) == []

    def test_next_year_allowed(self):
        request = CarModelRequest(make_id=uuid.uuid4(), name="Future", model_year=latest_model_year())
        assert validate_car_model_request(request) == []

    def test_year_bounds(self):
        too_old = CarModelRequest(make_id=uuid.uuid4(), name="Old", model_year=1884)
        too_new = CarModelRequest(make_id=uuid.uuid4(), name="New", model_year=latest_model_year() + 1)

        assert messages(validate_car_model_request(too_old)) == ["Model year must be 1885 or later"]
        assert messages(validate_car_model_request(too_new)) == [
            f"Model year cannot be later than {latest_model_year()}"
        ]

    def test_nil_make_id(self):
        errors = validate_car_model_request(CarModelRequest(name="Civic", model_year=2020))
        assert messages(errors) == ["Make ID is required"]

    def test_name_too_long(self):
        request = CarModelRequest(make_id=uuid.uuid4(), name="n" * 121, model_year=2020)
        assert messages(validate_car_model_request(request)) == [
            "Name must be between 1 and 120 characters"
        ]


class TestPaginationQuery:
    @pytest.mark.parametrize("page,limit", [(0, 0), (1, 100), (5, 1)])
    def test_accepted(self, page, limit):
        query = PaginationQuery(page=page, limit=limit)
        assert validate_pagination_query(query, max_page_size=100, max_name_filter_length=100) == []

    def test_negative_values(self):
        errors = validate_pagination_query(
            PaginationQuery(page=-1, limit=-1), max_page_size=100, max_name_filter_length=100
        )
        assert messages(errors) == [
            "Page number cannot be negative",
            "Page size cannot be negative",
        ]

    def test_limit_above_max(self):
        errors = validate_pagination_query(
            PaginationQuery(limit=101), max_page_size=100, max_name_filter_length=100
        )
        assert messages(errors) == ["Page size cannot be greater than 100"]

    def test_name_filter_length(self):
        errors = validate_pagination_query(
            PaginationQuery(name_contains="x" * 11), max_page_size=100, max_name_filter_length=10
        )
        assert messages(errors) == ["Name filter cannot be longer than 10 characters"]

    def test_page_above_32_bit_range(self):
        errors = validate_pagination_query(
            PaginationQuery(page=2**31), max_page_size=100, max_name_filter_length=100
        )
        assert messages(errors) == ["Page number cannot be greater than 2147483647"]

    def test_largest_page_accepted(self):
        errors = validate_pagination_query(
            PaginationQuery(page=2**31 - 1), max_page_size=100, max_name_filter_length=100
        )
        assert errors == []

    def test_model_name_filter_is_capped_at_fifty(self):
        errors = validate_car_model_pagination_query(
            CarModelPaginationQuery(name_contains="x" * 51),
            max_page_size=100,
            max_name_filter_length=100,
        )
        assert messages(errors) == ["Name filter cannot be longer than 50 characters"]

    def test_model_year_filter(self):
        errors = validate_car_model_pagination_query(
            CarModelPaginationQuery(year=latest_model_year() + 1),
            max_page_size=100,
            max_name_filter_length=100,
        )
        assert messages(errors) == [f"Year cannot be later than {latest_model_year()}"]


class TestEnsureValid:
    def test_no_errors_is_silent(self):
        ensure_valid([])

    def test_raises_with_all_errors(self):
        errors = validate_car_make_request(CarMakeRequest())
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid(errors)
        assert exc_info.value.message == "Name is required; Country of origin is required"
