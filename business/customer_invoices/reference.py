import datetime

from config import REFERENCE_MAX_LENGTH


class ReferenceGenerator:
    """
    Внешние ссылки документов пакета: префикс, метка времени запуска до минуты и номер итерации.

    Метка времени фиксируется при создании, поэтому в пределах запуска ссылки различаются
    номером итерации. Повторная выдача той же ссылки - ошибка, перегенерации нет.
    """

    INDEX_WIDTH = 5

    def __init__(self, prefix: str = 'R', now: datetime.datetime = None):
        now = now or datetime.datetime.now()
        self.prefix = prefix
        self.stamp = now.strftime('%y%m%d%H%M')
        self.__issued = set()

        if len(self.prefix) + len(self.stamp) + self.INDEX_WIDTH > REFERENCE_MAX_LENGTH:
            raise ValueError('Префикс ссылки слишком длинный: %r' % prefix)

    def next(self, index: int) -> str:
        """
        :param index: Номер итерации, начиная с 1
        :return: Ссылка длиной не более 16 символов
        """
        if index < 0:
            raise ValueError('Номер итерации не может быть отрицательным: %s' % index)

        reference = f'{self.prefix}{self.stamp}{index:0{self.INDEX_WIDTH}d}'
        if len(reference) > REFERENCE_MAX_LENGTH:
            raise ValueError('Ссылка %s длиннее %s символов' % (reference, REFERENCE_MAX_LENGTH))
        if reference in self.__issued:
            raise ValueError('Ссылка %s уже выдана в этом запуске' % reference)

        self.__issued.add(reference)
        return reference
