from __future__ import annotations

import datetime
import random
from decimal import Decimal

import pytest

from business.constants import ACC_DOCUMENT_FUNCTION, COMMIT_FUNCTION, READ_TABLE_FUNCTION
from business.customer_invoices.processing import CustomerInvoiceBatch
from business.customer_invoices.reference import ReferenceGenerator
from business.models.errors import EmptyCustomerPoolError
from business.models.settings import CustomerInvoiceSettings
from config import CUSTOMER_INVOICE_DEFAULTS

from tests.conftest import TODAY
from tests.fakes import FakeAbapError, FakeCommunicationError, read_table_response, success_return

NOW = datetime.datetime(2026, 10, 19, 16, 33)


def make_batch(rfc, settings, journal, seed=1):
    return CustomerInvoiceBatch(rfc, settings, rng=random.Random(seed),
                                references=ReferenceGenerator(now=NOW), journal=journal, today=TODAY)


def posted(obj_key):
    return {"OBJ_TYPE": "BKPFF", "OBJ_KEY": obj_key, "OBJ_SYS": "ECCCLNT100", "RETURN": success_return()}


def test_single_document_end_to_end(rfc, fake_connection, journal, batch_settings) -> None:
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response("0000000001")
    fake_connection.responses[ACC_DOCUMENT_FUNCTION] = posted("0100000001AUS2026")

    report = make_batch(rfc, batch_settings, journal).run()

    postings = fake_connection.calls_to(ACC_DOCUMENT_FUNCTION)
    assert len(postings) == 1
    amounts = postings[0]["CURRENCYAMOUNT"]
    assert amounts[0]["AMT_DOCCUR"] == Decimal("500.00")
    assert amounts[1]["AMT_DOCCUR"] == Decimal("-500.00")
    assert postings[0]["ACCOUNTRECEIVABLE"][0]["CUSTOMER"] == "0000000001"
    assert fake_connection.calls_to(COMMIT_FUNCTION) == [{"WAIT": "X"}]
    assert report.document_keys == ["0100000001AUS2026"]
    assert report.failed == []


def test_empty_pool_posts_nothing(rfc, fake_connection, journal, batch_settings) -> None:
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response("", "   ")

    with pytest.raises(EmptyCustomerPoolError):
        make_batch(rfc, batch_settings, journal).run()

    assert [name for name, _ in fake_connection.calls] == [READ_TABLE_FUNCTION]
    assert journal.statuses() == ["Error"]


@pytest.mark.parametrize("severity", ["E", "A"])
def test_failed_iteration_is_not_committed_and_loop_continues(rfc, fake_connection, journal, severity) -> None:
    settings = CustomerInvoiceSettings(**dict(CUSTOMER_INVOICE_DEFAULTS, invoice_count=3))
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response("0000000001", "0000000002")
    fake_connection.responses[ACC_DOCUMENT_FUNCTION] = [
        posted("0100000001AUS2026"),
        {"OBJ_KEY": "$", "RETURN": [{"TYPE": severity, "MESSAGE": "Customer is blocked for posting"}]},
        posted("0100000002AUS2026"),
    ]

    report = make_batch(rfc, settings, journal).run()

    assert len(fake_connection.calls_to(ACC_DOCUMENT_FUNCTION)) == 3
    assert len(fake_connection.calls_to(COMMIT_FUNCTION)) == 2
    assert [result.index for result in report.failed] == [2]
    assert report.failed[0].document_key is None
    assert report.document_keys == ["0100000001AUS2026", "0100000002AUS2026"]

    names = [name for name, _ in fake_connection.calls]
    failed_position = [i for i, name in enumerate(names) if name == ACC_DOCUMENT_FUNCTION][1]
    assert names[failed_position + 1] == ACC_DOCUMENT_FUNCTION


def test_abap_exception_fails_only_its_iteration(rfc, fake_connection, journal) -> None:
    settings = CustomerInvoiceSettings(**dict(CUSTOMER_INVOICE_DEFAULTS, invoice_count=2))
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response("0000000001")
    fake_connection.responses[ACC_DOCUMENT_FUNCTION] = [FakeAbapError("RFC_CONVERSION_FIELD"),
                                                       posted("0100000003AUS2026")]

    report = make_batch(rfc, settings, journal).run()

    assert len(report.posted) == 1
    assert report.failed[0].errors[0].type == "A"
    assert "RFC_CONVERSION_FIELD" in report.failed[0].errors[0].message
    assert len(fake_connection.calls_to(COMMIT_FUNCTION)) == 1


def test_communication_failure_terminates_run(rfc, fake_connection, journal, batch_settings) -> None:
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response("0000000001")
    fake_connection.responses[ACC_DOCUMENT_FUNCTION] = FakeCommunicationError("connection reset")

    with pytest.raises(FakeCommunicationError):
        make_batch(rfc, batch_settings, journal).run()

    assert fake_connection.calls_to(COMMIT_FUNCTION) == []


def test_random_choices_come_from_pool_and_amount_set(rfc, fake_connection, journal) -> None:
    settings = CustomerInvoiceSettings(**dict(CUSTOMER_INVOICE_DEFAULTS, invoice_count=50, amounts="100;250"))
    pool = ["0000000001", "0000000002", "0000000003"]
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response(*pool)
    fake_connection.responses[ACC_DOCUMENT_FUNCTION] = posted("0100000001AUS2026")

    report = make_batch(rfc, settings, journal, seed=7).run()

    postings = fake_connection.calls_to(ACC_DOCUMENT_FUNCTION)
    assert {p["ACCOUNTRECEIVABLE"][0]["CUSTOMER"] for p in postings} <= set(pool)
    assert {p["CURRENCYAMOUNT"][0]["AMT_DOCCUR"] for p in postings} <= {Decimal("100.00"), Decimal("250.00")}
    references = [p["DOCUMENTHEADER"]["REF_DOC_NO"] for p in postings]
    assert len(set(references)) == 50
    assert len(report.posted) == 50
    assert report.summary() == "Запрошено: 50, проведено: 50, с ошибками: 0"


def test_username_comes_from_connection(rfc, fake_connection, journal, batch_settings) -> None:
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response("0000000001")

    make_batch(rfc, batch_settings, journal).run()

    assert fake_connection.calls_to(ACC_DOCUMENT_FUNCTION)[0]["DOCUMENTHEADER"]["USERNAME"] == "MYUSER"


def test_failed_commit_fails_only_its_iteration(rfc, fake_connection, journal) -> None:
    settings = CustomerInvoiceSettings(**dict(CUSTOMER_INVOICE_DEFAULTS, invoice_count=2))
    fake_connection.responses[READ_TABLE_FUNCTION] = read_table_response("0000000001")
    fake_connection.responses[ACC_DOCUMENT_FUNCTION] = [posted("0100000001AUS2026"), posted("0100000002AUS2026")]
    fake_connection.responses[COMMIT_FUNCTION] = [{"RETURN": {"TYPE": "E", "MESSAGE": "Update failed"}}, {}]

    report = make_batch(rfc, settings, journal).run()

    failed = report.failed
    assert [result.index for result in failed] == [1]
    assert not failed[0].success
    assert not failed[0].committed
    assert [str(message) for message in failed[0].errors] == ["E: Update failed"]
    assert report.document_keys == ["0100000002AUS2026"]
    assert len(fake_connection.calls_to(ACC_DOCUMENT_FUNCTION)) == 2
    post_statuses = [record[4] for record in journal.records if record[3] == "post_one"]
    assert post_statuses == ["Error", "OK"]
