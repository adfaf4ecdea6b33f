import re
from decimal import Decimal
from typing import List, Mapping, Optional

from business.models.errors import SettingsError
from business.utils import parse_amounts, to_decimal
from config import CUSTOMER_INVOICE_DEFAULTS, INCOMING_INVOICE_DEFAULTS, REFERENCE_MAX_LENGTH

MAX_INVOICE_COUNT = 99999
# Длина HEADER_TXT в DOCUMENTHEADER
HEADER_TEXT_MAX_LENGTH = 25


def _check_company_code(value: str) -> str:
    value = (value or '').strip()
    if not 1 <= len(value) <= 4:
        raise SettingsError('Балансовая единица должна содержать от 1 до 4 символов: %r' % value)
    return value


def _check_currency(value: str) -> str:
    value = (value or '').strip().upper()
    if not re.fullmatch(r'[A-Z]{3}', value):
        raise SettingsError('Код валюты должен состоять из 3 букв: %r' % value)
    return value


def _check_amount(value) -> Decimal:
    try:
        amount = to_decimal(value)
    except (TypeError, ValueError) as ex:
        raise SettingsError(str(ex))
    if not amount.is_finite() or amount <= 0:
        raise SettingsError('Сумма должна быть положительной: %s' % value)
    if amount != amount.quantize(Decimal('0.01')):
        raise SettingsError('Сумма должна содержать не более двух знаков после запятой: %s' % value)
    return amount


def _check_required(name: str, value: Optional[str]) -> str:
    value = (value or '').strip()
    if not value:
        raise SettingsError('Не задан параметр %s' % name)
    return value


def _optional(value: Optional[str]) -> Optional[str]:
    value = (value or '').strip()
    return value or None


class ConnectionSettings:
    """Параметры подключения к SAP по RFC"""

    REQUIRED = ('sap_ashost', 'sap_sysnr', 'sap_user', 'sap_passwd', 'sap_client')

    def __init__(self, ashost: str, sysnr: str, user: str, passwd: str, client: str,
                 sysid: str = None, lang: str = 'EN'):

        self.ashost = ashost  # Сервер приложений
        self.sysnr = sysnr  # Номер системы
        self.sysid = sysid  # ID системы
        self.user = user  # Пользователь
        self.__passwd = passwd  # Пароль
        self.client = client  # Мандант
        self.lang = lang or 'EN'  # Язык входа

    @classmethod
    def from_env(cls, env: Mapping[str, Optional[str]]) -> 'ConnectionSettings':
        """
        Собирает параметры подключения из .env
        :param env: словарь ENV_DATA
        :return: ConnectionSettings
        """
        missing = [key for key in cls.REQUIRED if not (env.get(key) or '').strip()]
        if missing:
            raise SettingsError('Не заданы параметры подключения: %s' % ', '.join(missing))

        return cls(ashost=env['sap_ashost'].strip(),
                   sysnr=env['sap_sysnr'].strip(),
                   user=env['sap_user'].strip(),
                   passwd=env['sap_passwd'],
                   client=env['sap_client'].strip(),
                   sysid=_optional(env.get('sap_sysid')),
                   lang=_optional(env.get('sap_lang')) or 'EN')

    def params(self) -> dict:
        """Параметры для pyrfc.Connection"""
        params = {
            'ashost': self.ashost,
            'sysnr': self.sysnr,
            'user': self.user,
            'passwd': self.__passwd,
            'client': self.client,
            'lang': self.lang,
        }
        if self.sysid:
            params['sysid'] = self.sysid
        return params

    def __repr__(self):
        return '%s(ashost=%r, sysnr=%r, sysid=%r, user=%r, client=%r, lang=%r)' % (
            self.__class__.__name__, self.ashost, self.sysnr, self.sysid, self.user, self.client, self.lang)


class IncomingInvoiceSettings:
    """Параметры входящего счета поставщика"""

    def __init__(self, company_code: str, currency: str, doc_type: str, vendor: str, gross_amount,
                 gl_account: str, tax_code: str, item_text: str, profit_center: str, reference: str,
                 cost_center: str = None, payment_terms: str = None):

        self.company_code = _check_company_code(company_code)  # Балансовая единица
        self.currency = _check_currency(currency)  # Валюта
        self.doc_type = _check_required('doc_type', doc_type)  # Вид документа
        self.vendor = _check_required('vendor', vendor)  # Кредитор
        self.gross_amount = _check_amount(gross_amount)  # Сумма брутто
        self.gl_account = _check_required('gl_account', gl_account)  # Счет ОК
        self.tax_code = _check_required('tax_code', tax_code)  # Код налога
        self.item_text = item_text or ''  # Текст позиции
        self.profit_center = _check_required('profit_center', profit_center)  # Место возникновения прибыли
        self.reference = _check_required('reference', reference)  # Внешняя ссылка
        self.cost_center = _optional(cost_center)  # Место возникновения затрат
        self.payment_terms = _optional(payment_terms)  # Условия платежа

        if len(self.reference) > REFERENCE_MAX_LENGTH:
            raise SettingsError('Ссылка длиннее %s символов: %r' % (REFERENCE_MAX_LENGTH, self.reference))

    @classmethod
    def from_env(cls, env: Mapping[str, Optional[str]]) -> 'IncomingInvoiceSettings':
        """
        Значения по умолчанию из config перекрываются ключами .env с префиксом 'invoice_'
        :param env: словарь ENV_DATA
        :return: IncomingInvoiceSettings
        """
        values = dict(INCOMING_INVOICE_DEFAULTS)
        for key in list(values) + ['cost_center', 'payment_terms']:
            if env.get(f'invoice_{key}') is not None:
                values[key] = env[f'invoice_{key}']
        return cls(**values)


class CustomerInvoiceSettings:
    """Параметры пакетной проводки счетов клиентам"""

    def __init__(self, company_code: str, currency: str, doc_type: str, gl_account: str, profit_center: str,
                 tax_code: str, header_text: str, invoice_count, amounts, customer_row_limit=0):

        self.company_code = _check_company_code(company_code)  # Балансовая единица
        self.currency = _check_currency(currency)  # Валюта
        self.doc_type = _check_required('doc_type', doc_type)  # Вид документа
        self.gl_account = _check_required('gl_account', gl_account)  # Счет выручки
        self.profit_center = _check_required('profit_center', profit_center)  # Место возникновения прибыли
        self.tax_code = _optional(tax_code)  # Код налога
        self.header_text = header_text or ''  # Текст заголовка
        self.invoice_count = self.__check_count(invoice_count)  # Количество счетов
        self.amounts = self.__check_amounts(amounts)  # Набор сумм
        self.customer_row_limit = self.__check_row_limit(customer_row_limit)  # Ограничение выборки клиентов

        if len(self.header_text) > HEADER_TEXT_MAX_LENGTH:
            raise SettingsError('Текст заголовка длиннее %s символов: %r' % (HEADER_TEXT_MAX_LENGTH, self.header_text))

    @classmethod
    def from_env(cls, env: Mapping[str, Optional[str]]) -> 'CustomerInvoiceSettings':
        """
        Значения по умолчанию из config перекрываются ключами .env с префиксом 'batch_'
        :param env: словарь ENV_DATA
        :return: CustomerInvoiceSettings
        """
        values = dict(CUSTOMER_INVOICE_DEFAULTS)
        for key in values:
            if env.get(f'batch_{key}') is not None:
                values[key] = env[f'batch_{key}']
        return cls(**values)

    @staticmethod
    def __check_count(value) -> int:
        try:
            count = int(value)
        except (TypeError, ValueError):
            raise SettingsError('Количество счетов должно быть целым числом: %r' % (value,))
        if not 1 <= count <= MAX_INVOICE_COUNT:
            raise SettingsError('Количество счетов должно быть от 1 до %s: %s' % (MAX_INVOICE_COUNT, count))
        return count

    @staticmethod
    def __check_amounts(value) -> List[Decimal]:
        if isinstance(value, str):
            try:
                value = parse_amounts(value)
            except ValueError as ex:
                raise SettingsError(str(ex))
        amounts = [_check_amount(item) for item in value]
        if not amounts:
            raise SettingsError('Набор сумм пуст')
        return amounts

    @staticmethod
    def __check_row_limit(value) -> int:
        try:
            limit = int(value)
        except (TypeError, ValueError):
            raise SettingsError('Ограничение выборки должно быть целым числом: %r' % (value,))
        if limit < 0:
            raise SettingsError('Ограничение выборки не может быть отрицательным: %s' % limit)
        return limit
