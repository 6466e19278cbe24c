import pytest
from pydantic import ValidationError

from app.core.errors import format_validation_errors
from app.domain.models import OrderStatus
from app.domain.schemas import OrderCreate, OrderUpdate


def test_create_accepts_camel_and_snake_case():
    camel = OrderCreate.model_validate({"customerName": "Al", "phone": "(555) 123-4567", "medicine": "Zinc"})
    snake = OrderCreate(customer_name="Al", phone="(555) 123-4567", medicine="Zinc")

    assert camel == snake


def test_create_phone_allows_plus_dash_space_and_parens():
    assert OrderCreate(customer_name="Al", phone="+1 (555) 123-4567", medicine="Zinc").phone == "+1 (555) 123-4567"


def test_create_rejects_letters_in_phone():
    with pytest.raises(ValidationError) as exc:
        OrderCreate(customer_name="Al", phone="555-CALL-NOW", medicine="Zinc")

    assert "Please enter a valid phone number" in str(exc.value)


def test_update_reports_only_sent_fields():
    update = OrderUpdate.model_validate({"status": "cancelled"})

    assert update.changes() == {"status": OrderStatus.CANCELLED}


def test_update_may_be_empty():
    assert OrderUpdate.model_validate({}).changes() == {}


def test_update_rejects_null_and_unknown_status():
    with pytest.raises(ValidationError):
        OrderUpdate.model_validate({"medicine": None})
    with pytest.raises(ValidationError):
        OrderUpdate.model_validate({"status": "shipped"})


def test_format_validation_errors():
    with pytest.raises(ValidationError) as exc:
        OrderCreate.model_validate({"customerName": "A", "phone": "1234567890", "medicine": "Zinc"})

    message = format_validation_errors(exc.value.errors())

    assert message == 'Validation error: Name must be at least 2 characters at "customerName"'
