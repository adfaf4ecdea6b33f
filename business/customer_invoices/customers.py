from typing import Iterable, List

from loguru import logger as log

from business.constants import COMPANY_CODE_FIELD, CUSTOMER_FIELD, CUSTOMER_TABLE, TABLE_DELIMITER
from business.models.rfc_additions import RfcBase


def parse_customer_rows(rows: Iterable[str], delimiter: str = TABLE_DELIMITER) -> List[str]:
    """
    Разбирает строки WA ответа RFC_READ_TABLE.
    Номер дебитора остается строкой, ведущие нули не отбрасываются.

    :param rows: строки WA
    :param delimiter: разделитель полей
    :return: номера дебиторов без пустых значений
    """
    customers = []
    for row in rows:
        value = (row or '').split(delimiter)[0].strip()
        if value:
            customers.append(value)
    return customers


def get_customer_ids(rfc: RfcBase, company_code: str, row_limit: int = 0) -> List[str]:
    """
    Получает номера дебиторов, созданных в балансовой единице (KNB1)

    :param rfc: RFC подключение
    :param company_code: Балансовая единица
    :param row_limit: Ограничение количества строк, 0 - без ограничения
    :return: список номеров дебиторов
    """
    log.info(f'Получение списка дебиторов БЕ {company_code}')
    rows = rfc.read_table(CUSTOMER_TABLE,
                          fields=[CUSTOMER_FIELD],
                          options=[f"{COMPANY_CODE_FIELD} = '{company_code}'"],
                          delimiter=TABLE_DELIMITER,
                          row_count=row_limit)
    customers = parse_customer_rows(rows)
    log.info(f'Количество дебиторов - {len(customers)}.')
    return customers
