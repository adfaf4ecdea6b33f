import sys

from loguru import logger as log

from business.incoming_invoice.processing import IncomingInvoicePoster, build_incoming_invoice
from business.models.rfc_additions import RfcBase
from business.models.settings import ConnectionSettings, IncomingInvoiceSettings
from config import ENV_DATA, LOGS_DIR
from db.logger import logger


def main() -> int:
    logger.set_log('', 'Python', 'create_incoming_invoice', 'main', 'Info', 'Исполнение', 'Начало работы')
    log.add(LOGS_DIR / 'incoming_invoice_{time:YYYY-MM-DD}.log', level='INFO')
    log.info('Исполнение - Начало работы')

    connection = ConnectionSettings.from_env(ENV_DATA)
    invoice = build_incoming_invoice(IncomingInvoiceSettings.from_env(ENV_DATA))

    with RfcBase(connection) as rfc:
        result = IncomingInvoicePoster(rfc).post(invoice)

    logger.set_log(invoice.reference, 'Python', 'create_incoming_invoice', 'main', 'Info', 'Исполнение',
                   'Штатное завершение работы')
    log.info('Исполнение - Штатное завершение работы')
    return 0 if result.success else 1


if __name__ == '__main__':
    try:
        sys.exit(main())
    except Exception:
        log.exception('Исполнение - Аварийное завершение работы')
        sys.exit(1)
