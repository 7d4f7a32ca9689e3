from decimal import Decimal

import pytest

from fairshare.errors import ValidationError
from fairshare.ledger import Ledger
from fairshare.utils.parse import command_args, parse_id, parse_id_list, parse_payment_command


def test_command_args():
    assert command_args("/adduser  Alice Smith ") == "Alice Smith"
    assert command_args("/pay@fairshare_bot 1 | 2") == "1 | 2"
    assert command_args("/users") == ""
    assert command_args(None) == ""


def test_parse_id():
    assert parse_id(" #12 ") == 12
    with pytest.raises(ValidationError):
        parse_id("twelve")


@pytest.mark.parametrize("value", ["²", "3²", "-1", ""])
def test_parse_id_rejects_non_decimal_digits(value):
    with pytest.raises(ValidationError):
        parse_id(value)


def test_parse_id_list():
    assert parse_id_list("1, 2 3") == [1, 2, 3]
    assert parse_id_list("ALL") is None
    with pytest.raises(ValidationError):
        parse_id_list(" , ")


def test_parse_payment_command_full():
    command = parse_payment_command("1 | 12,50 | 1,2 | Dinner at Joe's | Food")
    assert command.payer_id == 1
    assert command.amount == Decimal("12.50")
    assert command.involved_ids == [1, 2]
    assert command.purpose == "Dinner at Joe's"
    assert command.category == "Food"


def test_parse_payment_command_all_and_defaults():
    command = parse_payment_command("2 | 30 | all")
    assert command.involved_ids is None
    assert command.resolve_involved([1, 2, 3]) == [1, 2, 3]
    assert command.purpose == ""
    assert command.category is None


@pytest.mark.parametrize("args", ["", "1 | 10", "x | 10 | all", "1 | ten | all"])
def test_parse_payment_command_invalid(args):
    with pytest.raises(ValidationError):
        parse_payment_command(args)


def test_parse_payment_command_huge_amount_is_rejected_by_ledger():
    command = parse_payment_command("1 | 1e30 | all | x")
    ledger = Ledger()
    ledger.add_participant("A")
    with pytest.raises(ValidationError):
        ledger.add_payment(command.payer_id, command.amount, command.resolve_involved([1]), command.purpose)
