import datetime
import random
from decimal import Decimal
from typing import List

from loguru import logger as log

from business.constants import ACC_DOCUMENT_FUNCTION
from business.customer_invoices.customers import get_customer_ids
from business.customer_invoices.reference import ReferenceGenerator
from business.models.dto import AccountingDocument, PostingResult, ReturnMessage, RunReport
from business.models.errors import EmptyCustomerPoolError, RfcCallError
from business.models.rfc_additions import RfcBase, get_return_messages, has_errors, log_messages
from business.models.settings import CustomerInvoiceSettings
from db.logger import logger


def build_accounting_document(settings: CustomerInvoiceSettings, customer: str, amount: Decimal, reference: str,
                              today: datetime.date = None, username: str = '') -> AccountingDocument:
    """
    Собирает счет клиенту: дебет дебитора, кредит счета выручки на ту же сумму.

    :param settings: Параметры пакета
    :param customer: Номер дебитора
    :param amount: Сумма документа
    :param reference: Внешняя ссылка
    :param today: Дата документа и проводки, по умолчанию текущая
    :param username: Пользователь SAP
    :return: AccountingDocument
    """
    today = today or datetime.date.today()

    return AccountingDocument(company_code=settings.company_code,
                              doc_date=today,
                              posting_date=today,
                              doc_type=settings.doc_type,
                              currency=settings.currency,
                              header_text=settings.header_text,
                              reference=reference,
                              username=username,
                              customer=customer,
                              amount=amount,
                              gl_account=settings.gl_account,
                              profit_center=settings.profit_center,
                              tax_code=settings.tax_code)


class CustomerInvoiceBatch:
    """Пакетная проводка случайных счетов клиентам"""

    def __init__(self, rfc: RfcBase, settings: CustomerInvoiceSettings, rng: random.Random = None,
                 references: ReferenceGenerator = None, journal=None, today: datetime.date = None):
        """
        Конструктор

        :param rfc: RFC подключение
        :param settings: Параметры пакета
        :param rng: (Опционально) Генератор случайных чисел
        :param references: (Опционально) Генератор ссылок
        :param journal: (Опционально) Журнал в БД
        :param today: (Опционально) Дата документов
        """
        self.rfc = rfc
        self.settings = settings
        self.rng = rng or random.Random()
        self.references = references or ReferenceGenerator()
        self.journal = journal or logger
        self.today = today

    def run(self) -> RunReport:
        """
        Проводит settings.invoice_count документов.
        Ошибка одного документа не прерывает пакет, COMMIT выполняется только для документов без ошибок.

        :return: Отчет о запуске
        """
        log.info('Пакет счетов клиентам. Запуск.')
        customers = get_customer_ids(self.rfc, self.settings.company_code, self.settings.customer_row_limit)

        if not customers:
            log.error(f'Нет дебиторов в БЕ {self.settings.company_code}. Проводка не выполняется.')
            self.journal.set_log('', 'SAP ERP', 'customer_invoices', 'run', 'Error',
                                 'Получение списка дебиторов', 'Список дебиторов пуст')
            raise EmptyCustomerPoolError(f'Нет дебиторов в БЕ {self.settings.company_code}')

        report = RunReport(requested=self.settings.invoice_count)
        for index in range(1, self.settings.invoice_count + 1):
            report.add(self.post_one(index, customers))

        log.info(report.summary())
        self.journal.set_log('', 'SAP ERP', 'customer_invoices', 'run', 'OK', 'Пакет счетов клиентам',
                             report.summary())
        return report

    def post_one(self, index: int, customers: List[str]) -> PostingResult:
        """
        Проводит один случайный документ

        :param index: Номер итерации
        :param customers: Список дебиторов
        :return: Результат проводки
        """
        customer = self.rng.choice(customers)
        amount = self.rng.choice(self.settings.amounts)
        reference = self.references.next(index)
        document = build_accounting_document(self.settings, customer, amount, reference,
                                             today=self.today, username=self.rfc.user)

        log.info(f'{index}/{self.settings.invoice_count} {reference} - дебитор {customer}, '
                 f'сумма {document.receivable_amount} {document.currency}')
        result = PostingResult(index=index, reference=reference, customer=customer,
                               amount=document.receivable_amount)

        try:
            response = self.rfc.call(ACC_DOCUMENT_FUNCTION, **document.to_rfc())
            result.messages = get_return_messages(response)
            log_messages(result.messages, f'{reference} ')

            if has_errors(result.messages):
                log.error(f'{reference} - документ не проведен из-за ошибок.')
                self.journal.set_log(reference, 'SAP ERP', 'customer_invoices', 'post_one', 'Error',
                                     'Проводка счета клиенту', '; '.join(map(str, result.errors)))
                return result

            result.document_key = str(response.get('OBJ_KEY', '')).strip()
            commit_messages = self.rfc.commit()
            result.messages.extend(commit_messages)
            if has_errors(commit_messages):
                log.error(f'{reference} - COMMIT документа {result.document_key} завершился с ошибкой.')
                self.journal.set_log(reference, 'SAP ERP', 'customer_invoices', 'post_one', 'Error',
                                     'Проводка счета клиенту', '; '.join(map(str, commit_messages)))
                return result

            result.committed = True
        except RfcCallError as ex:
            log.exception(f'{reference} - ошибка вызова {ex.function}')
            result.messages.append(ReturnMessage('A', str(ex.error)))
            self.journal.set_log(reference, 'SAP ERP', 'customer_invoices', 'post_one', 'Error',
                                 'Проводка счета клиенту', str(ex))
            return result

        log.info(f'{reference} - документ {result.document_key} проведен.')
        self.journal.set_log(reference, 'SAP ERP', 'customer_invoices', 'post_one', 'OK',
                             'Проводка счета клиенту', f'Документ {result.document_key} проведен')
        return result
