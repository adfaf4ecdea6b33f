import datetime
from decimal import Decimal
from typing import List, Optional

from business.utils import sap_date, to_amount

# Уровни сообщений таблицы RETURN
SEVERITY_NAMES = {
    'S': 'Success',
    'W': 'Warning',
    'E': 'Error',
    'A': 'Abort',
    'I': 'Info',
}
ERROR_TYPES = ('E', 'A')


class ReturnMessage:
    """Модель сообщения таблицы RETURN"""

    def __init__(self, msg_type: str, message: str, msg_id: str = '', number: str = ''):

        self.type = (msg_type or '').strip().upper()  # Тип сообщения S, W, E, A
        self.message = (message or '').strip()  # Текст сообщения
        self.id = msg_id  # Класс сообщения
        self.number = number  # Номер сообщения

    @classmethod
    def from_row(cls, row: dict) -> 'ReturnMessage':
        return cls(msg_type=row.get('TYPE', ''), message=row.get('MESSAGE', ''),
                   msg_id=row.get('ID', ''), number=row.get('NUMBER', ''))

    @property
    def is_error(self) -> bool:
        return self.type in ERROR_TYPES

    @property
    def severity_name(self) -> str:
        return SEVERITY_NAMES.get(self.type, self.type or 'Unknown')

    def __str__(self):
        return f'{self.type}: {self.message}'

    def __repr__(self):
        return '%s(%r, %r)' % (self.__class__.__name__, self.type, self.message)

    def __eq__(self, other):
        if not isinstance(other, ReturnMessage):
            return NotImplemented
        return (self.type, self.message, self.id, self.number) == (other.type, other.message, other.id, other.number)


class GlAccountLine:
    """Модель строки распределения по счету ОК (GLACCOUNTDATA)"""

    def __init__(self, item_no: int, gl_account: str, amount: Decimal, tax_code: str, item_text: str = ''):

        self.item_no = item_no  # Номер позиции
        self.gl_account = gl_account  # Счет ОК
        self.amount = to_amount(amount)  # Сумма позиции
        self.tax_code = tax_code  # Код налога
        self.item_text = item_text  # Текст позиции

    def to_rfc(self) -> dict:
        return {
            'INVOICE_DOC_ITEM': f'{self.item_no:06d}',
            'GL_ACCOUNT': self.gl_account,
            'ITEM_AMOUNT': self.amount,
            'TAX_CODE': self.tax_code,
            'ITEM_TEXT': self.item_text,
        }


class AccountingLine:
    """Модель строки контировки КУ (ACCOUNTINGDATA)"""

    def __init__(self, item_no: int, profit_center: str, cost_center: str = None):

        self.item_no = item_no  # Номер позиции, ссылка на строку GLACCOUNTDATA
        self.profit_center = profit_center  # Место возникновения прибыли
        self.cost_center = cost_center  # Место возникновения затрат

    def to_rfc(self) -> dict:
        row = {
            'INVOICE_DOC_ITEM': f'{self.item_no:06d}',
            'PROFIT_CTR': self.profit_center,
        }
        if self.cost_center:
            row['COSTCENTER'] = self.cost_center
        return row


class VendorInvoice:
    """Модель входящего счета поставщика без ссылки на заказ"""

    def __init__(self, doc_type: str, doc_date: datetime.date, posting_date: datetime.date, company_code: str,
                 currency: str, gross_amount: Decimal, vendor: str, reference: str,
                 gl_lines: List[GlAccountLine] = None, accounting_lines: List[AccountingLine] = None,
                 payment_terms: str = None, baseline_date: datetime.date = None):

        self.doc_type = doc_type  # Вид документа
        self.doc_date = doc_date  # Дата документа
        self.posting_date = posting_date  # Дата проводки
        self.company_code = company_code  # Балансовая единица
        self.currency = currency  # Валюта
        self.gross_amount = to_amount(gross_amount)  # Сумма брутто
        self.vendor = vendor  # Кредитор
        self.reference = reference  # Внешняя ссылка
        self.gl_lines = gl_lines or []  # Строки по счетам ОК
        self.accounting_lines = accounting_lines or []  # Строки контировки
        self.payment_terms = payment_terms  # Условия платежа
        self.baseline_date = baseline_date  # Базовая дата платежа

    def lines_total(self) -> Decimal:
        return sum((line.amount for line in self.gl_lines), Decimal('0.00'))

    def header_to_rfc(self) -> dict:
        """Структура HEADERDATA"""
        header = {
            'INVOICE_IND': 'X',
            'DOC_TYPE': self.doc_type,
            'DOC_DATE': sap_date(self.doc_date),
            'PSTNG_DATE': sap_date(self.posting_date),
            'COMP_CODE': self.company_code,
            'CURRENCY': self.currency,
            'GROSS_AMOUNT': self.gross_amount,
            'VENDOR': self.vendor,
            'REF_DOC_NO': self.reference,
        }
        if self.payment_terms:
            header['PMNTTRMS'] = self.payment_terms
            header['BLINE_DATE'] = sap_date(self.baseline_date or self.doc_date)
        return header

    def gl_lines_to_rfc(self) -> List[dict]:
        return [line.to_rfc() for line in self.gl_lines]

    def accounting_lines_to_rfc(self) -> List[dict]:
        return [line.to_rfc() for line in self.accounting_lines]


class AccountingDocument:
    """Модель бухгалтерского документа счета клиенту: одна строка дебитора и одна строка выручки"""

    RECEIVABLE_ITEM = '0000000001'
    REVENUE_ITEM = '0000000002'

    def __init__(self, company_code: str, doc_date: datetime.date, posting_date: datetime.date, doc_type: str,
                 currency: str, header_text: str, reference: str, username: str, customer: str, amount: Decimal,
                 gl_account: str, profit_center: str, tax_code: str = None):

        self.company_code = company_code  # Балансовая единица
        self.doc_date = doc_date  # Дата документа
        self.posting_date = posting_date  # Дата проводки
        self.doc_type = doc_type  # Вид документа
        self.currency = currency  # Валюта
        self.header_text = header_text  # Текст заголовка
        self.reference = reference  # Внешняя ссылка
        self.username = username  # Пользователь
        self.customer = customer  # Дебитор
        self.__amount = to_amount(amount)  # Сумма документа
        self.gl_account = gl_account  # Счет выручки
        self.profit_center = profit_center  # Место возникновения прибыли
        self.tax_code = tax_code  # Код налога

    @property
    def receivable_amount(self) -> Decimal:
        """Сумма по дебету (строка дебитора)"""
        return self.__amount

    @property
    def revenue_amount(self) -> Decimal:
        """Сумма по кредиту (строка выручки)"""
        return -self.__amount

    def to_rfc(self) -> dict:
        """
        Параметры BAPI_ACC_DOCUMENT_POST
        :return: DOCUMENTHEADER, ACCOUNTRECEIVABLE, ACCOUNTGL, CURRENCYAMOUNT
        """
        revenue = {
            'ITEMNO_ACC': self.REVENUE_ITEM,
            'GL_ACCOUNT': self.gl_account,
            'COMP_CODE': self.company_code,
            'PROFIT_CTR': self.profit_center,
            'ITEM_TEXT': self.header_text,
        }
        if self.tax_code:
            revenue['TAX_CODE'] = self.tax_code

        return {
            'DOCUMENTHEADER': {
                'BUS_ACT': 'RFBU',
                'USERNAME': self.username,
                'COMP_CODE': self.company_code,
                'DOC_DATE': sap_date(self.doc_date),
                'PSTNG_DATE': sap_date(self.posting_date),
                'DOC_TYPE': self.doc_type,
                'REF_DOC_NO': self.reference,
                'HEADER_TXT': self.header_text,
            },
            'ACCOUNTRECEIVABLE': [{
                'ITEMNO_ACC': self.RECEIVABLE_ITEM,
                'CUSTOMER': self.customer,
                'COMP_CODE': self.company_code,
                'ITEM_TEXT': self.header_text,
            }],
            'ACCOUNTGL': [revenue],
            'CURRENCYAMOUNT': [
                {'ITEMNO_ACC': self.RECEIVABLE_ITEM, 'CURRENCY': self.currency, 'AMT_DOCCUR': self.receivable_amount},
                {'ITEMNO_ACC': self.REVENUE_ITEM, 'CURRENCY': self.currency, 'AMT_DOCCUR': self.revenue_amount},
            ],
        }


class PostingResult:
    """Результат проводки одного документа"""

    def __init__(self, index: int, reference: str, customer: str = None, amount: Decimal = None,
                 document_key: str = None, messages: List[ReturnMessage] = None, committed: bool = False):

        self.index = index  # Номер итерации
        self.reference = reference  # Внешняя ссылка
        self.customer = customer  # Дебитор / кредитор
        self.amount = amount  # Сумма
        self.document_key = document_key  # Ключ созданного документа
        self.messages = messages or []  # Сообщения RETURN
        self.committed = committed  # Выполнен COMMIT

    @property
    def success(self) -> bool:
        return self.committed and not any(message.is_error for message in self.messages)

    @property
    def errors(self) -> List[ReturnMessage]:
        return [message for message in self.messages if message.is_error]

    def __repr__(self):
        return '%s(index=%r, reference=%r, document_key=%r, success=%r)' % (
            self.__class__.__name__, self.index, self.reference, self.document_key, self.success)


class RunReport:
    """Отчет о пакетном запуске"""

    def __init__(self, requested: int = 0, results: List[PostingResult] = None):

        self.requested = requested  # Запрошено документов
        self.results = results or []  # Результаты по итерациям

    def add(self, result: PostingResult):
        if not isinstance(result, PostingResult):
            raise ValueError('Ожидалось PostingResult получил %s' % type(result))
        self.results.append(result)

    @property
    def posted(self) -> List[PostingResult]:
        return [result for result in self.results if result.success]

    @property
    def failed(self) -> List[PostingResult]:
        return [result for result in self.results if not result.success]

    @property
    def document_keys(self) -> List[Optional[str]]:
        return [result.document_key for result in self.posted]

    def summary(self) -> str:
        return (f'Запрошено: {self.requested}, проведено: {len(self.posted)}, '
                f'с ошибками: {len(self.failed)}')
