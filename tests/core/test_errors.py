"""Error Hierarchy: status codes, categories and the {status, message} envelope."""

import pytest

from cardealer.core.errors import (
    CarDealerError,
    ConflictError,
    DatabaseError,
    ErrorCategory,
    ErrorSeverity,
    InvalidInputError,
    ResourceNotFoundError,
)


@pytest.mark.parametrize("error, status, category", [
    (InvalidInputError("bad"), 400, ErrorCategory.VALIDATION),
    (ResourceNotFoundError("Car", 1), 404, ErrorCategory.RESOURCE_NOT_FOUND),
    (ConflictError("taken"), 409, ErrorCategory.CONFLICT),
    (DatabaseError("boom", "query"), 500, ErrorCategory.DATABASE),
])
def test_error_kinds_map_to_http_status(error, status, category):
    assert isinstance(error, CarDealerError)
    assert error.http_status == status
    assert error.category == category


def test_to_response_is_status_and_message():
    assert ConflictError("Username already exists").to_response() == {
        "status": 409, "message": "Username already exists",
    }


def test_not_found_default_message_and_context():
    error = ResourceNotFoundError("Dealer", 42)
    assert error.message == "Dealer not found with id: 42"
    assert error.context.entity == "Dealer"
    assert error.context.entity_id == 42


def test_not_found_custom_message():
    error = ResourceNotFoundError("Car", 3, message="Car is not in user's favorites")
    assert str(error) == "Car is not in user's favorites"
    assert error.resource_id == 3


def test_invalid_input_keeps_field():
    error = InvalidInputError("VIN cannot be empty", field="vin")
    assert error.field == "vin"
    assert error.severity == ErrorSeverity.WARNING


def test_database_error_is_critical_and_names_operation():
    error = DatabaseError("Connection refused", "execute")
    assert error.severity == ErrorSeverity.CRITICAL
    assert error.message == "Database execute failed: Connection refused"
