import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Union

CENT = Decimal('0.01')


def to_decimal(value: Union[str, int, Decimal]) -> Decimal:
    """
    Приводит сумму к Decimal.
    :param value: сумма числом или строкой вида '1 000,50' / '1000.50'
    :return: Decimal
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError('Суммы задаются строкой или Decimal, получен float %s' % value)
    try:
        return Decimal(str(value).replace(' ', '').replace('\xa0', '').replace(',', '.'))
    except InvalidOperation:
        raise ValueError('Не удалось привести к сумме: %r' % (value,))


def to_amount(value: Union[str, int, Decimal]) -> Decimal:
    """Сумма с точностью до копеек"""
    return to_decimal(value).quantize(CENT)


def parse_amounts(text: str) -> List[Decimal]:
    """
    Разбирает набор сумм из строки .env
    :param text: суммы через ';' (или ',' если нет ';')
    :return: список сумм в порядке записи
    """
    separator = ';' if ';' in text else ','
    return [to_decimal(item) for item in text.split(separator) if item.strip()]


def sap_date(value: datetime.date) -> str:
    """Дата в формате DATS (YYYYMMDD)"""
    return value.strftime('%Y%m%d')
