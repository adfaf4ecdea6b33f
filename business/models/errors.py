class SettingsError(ValueError):
    """Некорректные параметры запуска"""


class RfcCallError(Exception):
    """Ошибка ABAP при выполнении одного удаленного вызова"""

    def __init__(self, function: str, error: Exception):
        """
        Конструктор

        :param function: Имя функционального модуля
        :param error: Исходное исключение коннектора
        """

        super().__init__(f'{function}: {error}')
        self.function = function
        self.error = error


class EmptyCustomerPoolError(RuntimeError):
    """Список клиентов балансовой единицы пуст"""
