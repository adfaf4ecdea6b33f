from __future__ import annotations

import datetime

import pytest

from business.models.rfc_additions import RfcBase
from business.models.settings import ConnectionSettings, CustomerInvoiceSettings, IncomingInvoiceSettings
from config import CUSTOMER_INVOICE_DEFAULTS, INCOMING_INVOICE_DEFAULTS

from tests.fakes import FakeAbapError, FakeConnection, FakeJournal

TODAY = datetime.date(2026, 10, 19)


@pytest.fixture
def connection_settings() -> ConnectionSettings:
    return ConnectionSettings(ashost="sap-app-host", sysnr="00", user="MYUSER", passwd="MYPASS",
                              client="100", sysid="ECC", lang="EN")


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def rfc(connection_settings, fake_connection) -> RfcBase:
    return RfcBase(connection_settings, connection=fake_connection, application_errors=(FakeAbapError,))


@pytest.fixture
def journal() -> FakeJournal:
    return FakeJournal()


@pytest.fixture
def invoice_settings() -> IncomingInvoiceSettings:
    return IncomingInvoiceSettings(**INCOMING_INVOICE_DEFAULTS)


@pytest.fixture
def batch_settings() -> CustomerInvoiceSettings:
    values = dict(CUSTOMER_INVOICE_DEFAULTS)
    values.update(invoice_count=1, amounts="500")
    return CustomerInvoiceSettings(**values)
