import datetime

from loguru import logger as log

from business.constants import INCOMING_INVOICE_FUNCTION
from business.models.dto import AccountingLine, GlAccountLine, PostingResult, VendorInvoice
from business.models.rfc_additions import RfcBase, get_return_messages, has_errors, log_messages
from business.models.settings import IncomingInvoiceSettings
from db.logger import logger


def build_incoming_invoice(settings: IncomingInvoiceSettings, today: datetime.date = None) -> VendorInvoice:
    """
    Собирает счет поставщика без ссылки на заказ.
    Распределение одной строкой по счету ОК на всю сумму брутто, контировка на МВП той же позиции.

    :param settings: Параметры счета
    :param today: Дата документа и проводки, по умолчанию текущая
    :return: VendorInvoice
    """
    today = today or datetime.date.today()

    return VendorInvoice(
        doc_type=settings.doc_type,
        doc_date=today,
        posting_date=today,
        company_code=settings.company_code,
        currency=settings.currency,
        gross_amount=settings.gross_amount,
        vendor=settings.vendor,
        reference=settings.reference,
        gl_lines=[GlAccountLine(item_no=1,
                                gl_account=settings.gl_account,
                                amount=settings.gross_amount,
                                tax_code=settings.tax_code,
                                item_text=settings.item_text)],
        accounting_lines=[AccountingLine(item_no=1,
                                         profit_center=settings.profit_center,
                                         cost_center=settings.cost_center)],
        payment_terms=settings.payment_terms,
        baseline_date=today if settings.payment_terms else None,
    )


class IncomingInvoicePoster:
    """Проведение входящего счета поставщика"""

    def __init__(self, rfc: RfcBase, journal=None):
        """
        Конструктор

        :param rfc: RFC подключение
        :param journal: (Опционально) Журнал в БД
        """
        self.rfc = rfc
        self.journal = journal or logger

    def post(self, invoice: VendorInvoice) -> PostingResult:
        """
        Вызывает BAPI, проверяет RETURN и при отсутствии ошибок выполняет COMMIT.

        :param invoice: Счет
        :return: Результат проводки
        """
        log.info(f'{invoice.reference} - Создание входящего счета - Начало работы')
        self.journal.set_log(invoice.reference, 'SAP ERP', 'incoming_invoice', 'post', 'Info',
                             'Создание входящего счета', 'Начало работы')

        if invoice.lines_total() != invoice.gross_amount:
            log.warning(f'{invoice.reference} - Сумма строк {invoice.lines_total()} '
                        f'не равна сумме брутто {invoice.gross_amount}')

        response = self.rfc.call(INCOMING_INVOICE_FUNCTION,
                                 HEADERDATA=invoice.header_to_rfc(),
                                 GLACCOUNTDATA=invoice.gl_lines_to_rfc(),
                                 ACCOUNTINGDATA=invoice.accounting_lines_to_rfc())

        messages = get_return_messages(response)
        log_messages(messages)
        result = PostingResult(index=1, reference=invoice.reference, customer=invoice.vendor,
                               amount=invoice.gross_amount, messages=messages)

        if has_errors(messages):
            log.error(f'{invoice.reference} - Счет не проведен из-за ошибок.')
            self.journal.set_log(invoice.reference, 'SAP ERP', 'incoming_invoice', 'post', 'Error',
                                 'Создание входящего счета', '; '.join(map(str, result.errors)))
            return result

        doc_number = str(response.get('INVOICEDOCNUMBER', '')).strip()
        fiscal_year = str(response.get('FISCALYEAR', '')).strip()
        result.document_key = f'{doc_number}/{fiscal_year}'
        log.info(f'{invoice.reference} - Создан документ счета {doc_number}, год {fiscal_year}')

        commit_messages = self.rfc.commit()
        result.messages.extend(commit_messages)
        if has_errors(commit_messages):
            log.error(f'{invoice.reference} - COMMIT документа {result.document_key} завершился с ошибкой.')
            self.journal.set_log(invoice.reference, 'SAP ERP', 'incoming_invoice', 'post', 'Error',
                                 'Создание входящего счета', '; '.join(map(str, commit_messages)))
            return result

        result.committed = True
        log.info(f'{invoice.reference} - COMMIT выполнен.')
        self.journal.set_log(invoice.reference, 'SAP ERP', 'incoming_invoice', 'post', 'OK',
                             'Создание входящего счета', f'Документ {result.document_key} проведен')
        return result
