"""Validation error flattening for request-binding failures."""

from cardealer.api.error_handlers import build_validation_error_response


def test_strips_location_root_and_joins_path():
    errors = [
        {"loc": ("body", "vin"), "msg": "Field required"},
        {"loc": ("body", 0, "dealerId"), "msg": "Input should be greater than 0"},
        {"loc": ("query", "maxMileage"), "msg": "Input should be greater than or equal to 0"},
    ]
    assert build_validation_error_response(errors) == {
        "vin": "Field required",
        "0.dealerId": "Input should be greater than 0",
        "maxMileage": "Input should be greater than or equal to 0",
    }


def test_first_message_per_field_wins():
    errors = [
        {"loc": ("body", "vin"), "msg": "first"},
        {"loc": ("body", "vin"), "msg": "second"},
    ]
    assert build_validation_error_response(errors) == {"vin": "first"}


def test_whole_body_error_uses_request_key():
    errors = [{"loc": ("body",), "msg": "Field required"}]
    assert build_validation_error_response(errors) == {"request": "Field required"}


async def test_openapi_documents_error_body(client):
    res = await client.get("/openapi.json")
    schema = res.json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    documented = schema["paths"]["/api/cars/{car_id}"]["get"]["responses"]
    assert {"404", "409"} <= set(documented)
