from datetime import datetime

from business.models.db import Procedure
from config import ROBOT_NAME


class Logger:
    def __init__(self, db: Procedure = None):
        self.__robot_name = ROBOT_NAME
        self.__table = 'App_Logs'
        self.__db = db or Procedure()

    @property
    def enabled(self) -> bool:
        return self.__db.enabled

    def set_log(self, reference, sys_name, module_name, proc_name, status, step, options):
        """
        Метод запускает инсерт в таблицу App_Logs
        :param reference: Внешняя ссылка документа
        :param sys_name: Название системы
        :param module_name: Название выполняемого модуля
        :param proc_name: Название метода
        :param status: Статус выполнения
        :param step: Шаг
        :param options: Результат
        :return:
        """
        if not self.enabled:
            return

        row = (str(reference), self.__robot_name, sys_name, module_name, proc_name, status, step, str(options))
        if self.__if_row_exist(row):
            return

        self.__log_insert(row)

    def __if_row_exist(self, row: tuple) -> bool:
        """
        Метод проверяет существует ли строка в базе
        :param row: Значения полей записи
        :return: True or False
        """
        rows = self.__db.execute_sql_read(
            f"SELECT Idtask FROM {self.__table} WHERE "
            f"IdTask = ? AND appName = ? AND sysName = ? AND module = ? AND "
            f"procName = ? AND status = ? AND step = ? AND options = ?",
            row
        )
        return bool(rows)

    def __log_insert(self, row: tuple):
        """
        Метод инсертит в таблицу App_Logs
        :param row: Значения полей записи
        :return:
        """
        now = datetime.today()
        self.__db.execute_sql_write(
            f"INSERT INTO {self.__table} (Idtask,appName,sysName,module,procName,status,step,options,changeDate,changeTime) "
            f"VALUES (?,?,?,?,?,?,?,?,?,?)",
            row + (now.strftime('%Y-%m-%d'), now.strftime('%H:%M:%S'))
        )


logger = Logger()
