from typing import Optional, Sequence

from config import ENV_DATA


class Procedure:
    """Класс процедур, связанных с базой данных журнала."""

    def __init__(self, dsn: Optional[str] = None):
        """
        Конструктор

        :param dsn: Строка подключения ODBC. По умолчанию db_dsn из .env,
                    без нее журнал в базу не пишется.
        """
        self.__dsn = dsn if dsn is not None else ENV_DATA.get('db_dsn')

    @property
    def enabled(self) -> bool:
        return bool(self.__dsn)

    def __connect(self):
        # pyodbc требует драйвер ODBC в системе, поэтому грузим только при включенном журнале
        import pyodbc

        return pyodbc.connect(self.__dsn)

    def execute_sql_read(self, request: str, params: Sequence = ()) -> list:
        """
        Возвращает список строк

        :param request: SQL запрос
        :param params: Параметры запроса
        :return:
        """
        if not self.enabled:
            return []

        with self.__connect() as connection:
            cursor = connection.cursor()
            cursor.execute(request, *params)

            return cursor.fetchall()

    def execute_sql_write(self, request: str, params: Sequence = ()):
        """
        Записывает данные
        """
        if not self.enabled:
            return

        with self.__connect() as connection:
            cursor = connection.cursor()
            cursor.execute(request, *params)
            connection.commit()
