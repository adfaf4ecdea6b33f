import sys

from loguru import logger as log

from business.customer_invoices.processing import CustomerInvoiceBatch
from business.models.errors import EmptyCustomerPoolError
from business.models.rfc_additions import RfcBase
from business.models.settings import ConnectionSettings, CustomerInvoiceSettings
from config import ENV_DATA, LOGS_DIR
from db.app_launch_status import AppLaunchStatus
from db.logger import logger


def main() -> int:
    logger.set_log('', 'Python', 'post_customer_invoices', 'main', 'Info', 'Исполнение', 'Начало работы')
    log.add(LOGS_DIR / 'customer_invoices_{time:YYYY-MM-DD}.log', level='INFO')
    log.info('Исполнение - Начало работы')

    connection = ConnectionSettings.from_env(ENV_DATA)
    settings = CustomerInvoiceSettings.from_env(ENV_DATA)

    ls = AppLaunchStatus('Customer invoices posting')
    ls.set_start_status_work(connection.user)
    ls.set_cnt_request(settings.invoice_count)

    try:
        with RfcBase(connection) as rfc:
            report = CustomerInvoiceBatch(rfc, settings).run()
        ls.update_cnt_good(len(report.posted))
    except EmptyCustomerPoolError as ex:
        log.error(f'Исполнение - {ex}')
        return 1
    finally:
        ls.set_end_status_work()

    for result in report.failed:
        log.warning(f'{result.reference} - не проведен: ' + '; '.join(map(str, result.errors)))

    logger.set_log('', 'Python', 'post_customer_invoices', 'main', 'Info', 'Исполнение', report.summary())
    log.info(f'Исполнение - Штатное завершение работы. {report.summary()}')
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except Exception:
        log.exception('Исполнение - Аварийное завершение работы')
        sys.exit(1)
