from typing import Iterable, List, Tuple, Union

from loguru import logger as log

from business.constants import COMMIT_FUNCTION, READ_TABLE_FUNCTION
from business.models.dto import ReturnMessage
from business.models.errors import RfcCallError
from business.models.settings import ConnectionSettings


def get_return_messages(result: dict, parameter: str = 'RETURN') -> List[ReturnMessage]:
    """
    Возвращает сообщения RETURN ответа BAPI.
    RETURN бывает как таблицей, так и одиночной структурой.
    :param result: ответ вызова
    :param parameter: имя параметра с сообщениями
    :return: список ReturnMessage без пустых строк
    """
    rows = result.get(parameter) or []
    if isinstance(rows, dict):
        rows = [rows]

    messages = [ReturnMessage.from_row(row) for row in rows]
    return [message for message in messages if message.type or message.message]


def has_errors(messages: Iterable[ReturnMessage]) -> bool:
    """True если есть сообщение типа E или A"""
    return any(message.is_error for message in messages)


def log_messages(messages: Iterable[ReturnMessage], prefix: str = ''):
    """Пишет сообщения RETURN в лог с уровнем по типу сообщения"""
    for message in messages:
        if message.is_error:
            log.error(f'{prefix}{message}')
        elif message.type == 'W':
            log.warning(f'{prefix}{message}')
        else:
            log.info(f'{prefix}{message}')


class RfcBase:
    """Класс с вспомогательными методами RFC вызовов"""

    def __init__(self, settings: ConnectionSettings = None, connection=None,
                 application_errors: Tuple[type, ...] = ()):
        """
        Конструктор

        :param settings: Параметры подключения
        :param connection: (Опционально) Открытое подключение с методом call(function, **params)
        :param application_errors: Исключения коннектора, относящиеся к одному вызову (ошибки ABAP)
        """

        if connection is None:
            if settings is None:
                raise ValueError('Нужны параметры подключения или открытое подключение')
            connection, application_errors = self.__connect(settings)

        self.settings = settings
        self.connection = connection
        self.__application_errors = tuple(application_errors)

    @staticmethod
    def __connect(settings: ConnectionSettings):
        """
        Открывает подключение через SAP NW RFC SDK
        :param settings: Параметры подключения
        :return: подключение и классы ошибок ABAP
        """
        import pyrfc

        log.info(f'Подключение к SAP {settings.ashost} / {settings.sysnr}, мандант {settings.client}')
        connection = pyrfc.Connection(**settings.params())
        return connection, (pyrfc.ABAPApplicationError, pyrfc.ABAPRuntimeError)

    @property
    def user(self) -> str:
        return self.settings.user if self.settings else ''

    def call(self, function: str, **params) -> dict:
        """
        Вызывает функциональный модуль

        :param function: Имя функционального модуля
        :param params: Параметры вызова
        :return: Ответ
        """
        log.debug(f'RFC {function}')
        try:
            return self.connection.call(function, **params)
        except self.__application_errors as ex:
            raise RfcCallError(function, ex) from ex

    def commit(self) -> List[ReturnMessage]:
        """
        Завершает LUW с ожиданием обновления

        :return: Сообщения RETURN
        """
        messages = get_return_messages(self.call(COMMIT_FUNCTION, WAIT='X'))
        log_messages(messages, 'COMMIT ')
        return messages

    def read_table(self, table: str, fields: List[str], options: Union[List[str], None] = None,
                   delimiter: str = '|', row_count: int = 0) -> List[str]:
        """
        Читает таблицу через RFC_READ_TABLE

        :param table: Имя таблицы
        :param fields: Поля
        :param options: Условия WHERE построчно
        :param delimiter: Разделитель полей
        :param row_count: Ограничение количества строк, 0 - без ограничения
        :return: Строки WA
        """
        params = {
            'QUERY_TABLE': table,
            'DELIMITER': delimiter,
            'NO_DATA': '',
            'FIELDS': [{'FIELDNAME': field} for field in fields],
            'OPTIONS': [{'TEXT': text} for text in (options or [])],
        }
        if row_count:
            params['ROWCOUNT'] = row_count

        result = self.call(READ_TABLE_FUNCTION, **params)
        return [row.get('WA', '') for row in result.get('DATA') or []]

    def close(self):
        if self.connection is not None and hasattr(self.connection, 'close'):
            self.connection.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
