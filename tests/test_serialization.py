"""Tests for document conversion and JSON import parsing."""

from __future__ import annotations

import json

import pytest

from core.models import BudgetDocument, PaydayCalculator
from core.serialization import (
    DocumentImportError,
    bill_to_dict,
    document_from_dict,
    document_to_dict,
    parse_import_payload,
)


def test_document_round_trips_through_dict(sample_document):
    payload = document_to_dict(sample_document)

    assert set(payload) == {"categories", "dailyExpenses", "paydayCalculator"}
    assert payload["paydayCalculator"]["schedule"]["nextPayday"] == "2024-01-20"
    assert document_from_dict(payload) == sample_document


def test_recurring_keys_only_written_for_recurring_bills(sample_document):
    one_time, _, recurring = sample_document.payday_calculator.bills

    assert "isRecurring" not in bill_to_dict(one_time)
    assert bill_to_dict(recurring) == {
        "id": "b3",
        "date": "",
        "amount": 50.0,
        "description": "Gym",
        "categoryId": "fun",
        "isRecurring": True,
        "recurringType": "weekly",
        "recurringInterval": 1,
        "startDate": "2024-01-08",
    }


def test_missing_sections_fall_back_to_defaults():
    document = document_from_dict({"categories": [{"id": "c1", "name": "Food", "budget": "120"}]})

    assert document.categories[0].budget == 120.0
    assert document.categories[0].spent == 0.0
    assert document.daily_expenses == ()
    assert document.payday_calculator == PaydayCalculator()


def test_malformed_records_are_dropped_or_defaulted():
    document = document_from_dict(
        {
            "categories": ["nope", {"id": 7, "name": None, "budget": "lots"}],
            "dailyExpenses": "also nope",
            "paydayCalculator": {
                "startingBalance": "",
                "schedule": {"type": "recurring", "interval": "x"},
                "bills": [{"id": "b", "amount": None, "isRecurring": True}],
            },
        }
    )

    assert len(document.categories) == 1
    assert document.categories[0].id == "7"
    assert document.categories[0].name == ""
    assert document.categories[0].budget == 0.0
    assert document.daily_expenses == ()
    calculator = document.payday_calculator
    assert calculator.starting_balance is None
    assert calculator.schedule.type == "recurring"
    assert calculator.schedule.recurring_type == "biweekly"
    assert calculator.schedule.interval == 1
    assert calculator.bills[0].amount == 0.0
    assert calculator.bills[0].is_recurring is True


def test_zero_starting_balance_is_kept():
    document = document_from_dict({"paydayCalculator": {"startingBalance": 0}})

    assert document.payday_calculator.starting_balance == 0.0


def test_parse_import_payload_current_shape(sample_document):
    preview = parse_import_payload(json.dumps(document_to_dict(sample_document)))

    assert preview.migrated is False
    assert preview.document == sample_document


def test_parse_import_payload_migrates_legacy_export():
    legacy = {
        "version": "1.0",
        "data": {
            "scheduleMode": "manual",
            "manualDate": "2024-02-01",
            "balance": 500,
            "bills": [{"name": "Rent", "amount": 400, "dueDate": "2024-01-28", "id": "r1"}],
        },
    }

    preview = parse_import_payload(json.dumps(legacy))

    assert preview.migrated is True
    calculator = preview.document.payday_calculator
    assert calculator.starting_balance == 500.0
    assert calculator.schedule.next_payday == "2024-02-01"
    assert calculator.bills[0].description == "Rent"
    assert calculator.bills[0].date == "2024-01-28"
    assert preview.document.categories == ()


@pytest.mark.parametrize("text", ["", "{not json", "[1, 2", None])
def test_parse_import_payload_rejects_invalid_json(text):
    with pytest.raises(DocumentImportError, match="Invalid JSON"):
        parse_import_payload(text)


@pytest.mark.parametrize("text", ["[]", "42", '"budget"', "null"])
def test_parse_import_payload_rejects_non_objects(text):
    with pytest.raises(DocumentImportError):
        parse_import_payload(text)


def test_import_error_is_a_value_error():
    assert issubclass(DocumentImportError, ValueError)


def test_empty_object_imports_as_empty_document():
    preview = parse_import_payload("{}")

    assert preview.document == BudgetDocument()
    assert preview.migrated is False


def test_non_finite_numbers_fall_back_to_defaults():
    text = (
        '{"categories": [{"id": "c", "name": "Food", "budget": NaN, "spent": -Infinity}],'
        ' "paydayCalculator": {"startingBalance": Infinity,'
        ' "schedule": {"type": "recurring", "interval": Infinity},'
        ' "bills": [{"id": "b", "amount": NaN, "isRecurring": true, "recurringInterval": -Infinity}]}}'
    )

    document = parse_import_payload(text).document

    assert document.categories[0].budget == 0.0
    assert document.categories[0].spent == 0.0
    calculator = document.payday_calculator
    assert calculator.starting_balance is None
    assert calculator.schedule.interval == 1
    assert calculator.bills[0].amount == 0.0
    assert calculator.bills[0].recurring_interval == 1
