"""Tests for sp_expense request validation."""

import math
from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.sp_expense.application.schemas import CreateExpenseRequest


def _body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "description": "Food",
        "amount": 42,
        "created_at": "2021-01-01T15:04:05Z",
        "users": [{"id": 2}, {"id": 3}],
    }
    body.update(overrides)
    return body


class TestCreateExpenseRequest:
    def test_valid(self) -> None:
        req = CreateExpenseRequest.model_validate(_body())
        assert req.amount == 42.0
        assert req.user_ids == [2, 3]
        assert req.created_at == datetime(2021, 1, 1, 15, 4, 5, tzinfo=UTC)

    @pytest.mark.parametrize("amount", [0, -1, -0.01])
    def test_non_positive_amount_rejected(self, amount: float) -> None:
        with pytest.raises(ValidationError):
            CreateExpenseRequest.model_validate(_body(amount=amount))

    @pytest.mark.parametrize("amount", [math.inf, -math.inf, math.nan, "Infinity", "NaN"])
    def test_non_finite_amount_rejected(self, amount: object) -> None:
        with pytest.raises(ValidationError):
            CreateExpenseRequest.model_validate(_body(amount=amount))

    @pytest.mark.parametrize("description", ["", "   "])
    def test_empty_description_rejected(self, description: str) -> None:
        with pytest.raises(ValidationError):
            CreateExpenseRequest.model_validate(_body(description=description))

    def test_empty_user_list_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CreateExpenseRequest.model_validate(_body(users=[]))

    def test_bad_timestamp_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CreateExpenseRequest.model_validate(_body(created_at="yesterday"))

    def test_offset_timestamp_normalised_to_utc(self) -> None:
        req = CreateExpenseRequest.model_validate(_body(created_at="2021-01-01T17:04:05+02:00"))
        assert req.created_at == datetime(2021, 1, 1, 15, 4, 5, tzinfo=UTC)
        assert req.created_at.utcoffset() == timedelta(0)

    def test_naive_timestamp_assumed_utc(self) -> None:
        req = CreateExpenseRequest.model_validate(_body(created_at="2021-01-01T15:04:05"))
        assert req.created_at.tzinfo == timezone.utc

    def test_created_at_optional(self) -> None:
        body = _body()
        del body["created_at"]
        assert CreateExpenseRequest.model_validate(body).created_at is None
