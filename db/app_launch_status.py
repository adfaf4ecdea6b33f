import socket

from business.models.db import Procedure
from config import ROBOT_NAME


class AppLaunchStatus:
    """Таблица запусков"""
    __table = 'App_LaunchStatus'

    def __init__(self, module_name: str, db: Procedure = None):
        self.__robot_name = ROBOT_NAME
        self.__proc_name = module_name
        self.__vm_name = socket.gethostname()
        self.__db = db or Procedure()

    def __key(self) -> tuple:
        return self.__vm_name, self.__robot_name, self.__proc_name

    def set_start_status_work(self, tab_num: str):
        """Устанавливает статус запуска"""
        self.__db.execute_sql_write(
            f"INSERT INTO {self.__table} (vmName, robotName, procName, tabnum, launchStatus, dt_Open) "
            f"VALUES (?, ?, ?, ?, 1, GETDATE())",
            self.__key() + (tab_num,)
        )

    def set_cnt_request(self, quantity: int):
        """Устанавливает общее количество документов на проводку"""
        self.__db.execute_sql_write(
            f"UPDATE {self.__table} SET cntRequest = ? "
            f"WHERE vmName = ? AND robotName = ? AND procName = ? AND launchStatus = 1",
            (quantity,) + self.__key()
        )

    def update_cnt_good(self, quantity: int):
        """Обновляет количество проведенных документов"""
        self.__db.execute_sql_write(
            f"UPDATE {self.__table} SET cntGood = ? "
            f"WHERE vmName = ? AND robotName = ? AND procName = ? AND launchStatus = 1",
            (quantity,) + self.__key()
        )

    def set_end_status_work(self):
        """Устанавливает статус завершения работы"""
        self.__db.execute_sql_write(
            f"UPDATE {self.__table} SET launchStatus = 0, dt_Close = GETDATE() "
            f"WHERE vmName = ? AND robotName = ? AND procName = ? AND launchStatus = 1",
            self.__key()
        )
