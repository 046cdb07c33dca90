"""
Иерархия ошибок движка ценообразования.

PricingError - ошибки вычислительного слоя: попытка бронирования прерывается,
сводка цены не строится.
ValidationError - восстановимые ошибки пользовательского ввода: блокируют
только финальную отправку.
"""


class RentalEngineError(Exception):
    """Базовая ошибка движка"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


# ================ ВЫЧИСЛИТЕЛЬНЫЙ СЛОЙ ================

class PricingError(RentalEngineError):
    """Ошибка расчета цены - сводка не строится"""


class OutOfOperatingSeason(PricingError):
    """Дата вне сезона работы (апрель - октябрь)"""

    def __init__(self, on_date):
        super().__init__(
            f"Дата {on_date.isoformat()} вне сезона работы (апрель - октябрь)"
        )
        self.on_date = on_date


class NoSuchPrice(PricingError):
    """В таблице цен нет записи для лодки/сезона/длительности"""

    def __init__(self, boat_id: str, season, duration):
        super().__init__(
            f"Цена не найдена: лодка '{boat_id}', сезон {getattr(season, 'value', season)}, "
            f"длительность {getattr(duration, 'value', duration)}"
        )
        self.boat_id = boat_id
        self.season = season
        self.duration = duration


class IllegalDuration(PricingError):
    """Длительность недоступна для выбранной лодки/категории лицензии"""

    def __init__(self, duration, legal):
        legal_str = ", ".join(getattr(k, 'value', str(k)) for k in legal)
        super().__init__(
            f"Длительность {getattr(duration, 'value', duration)} недоступна. "
            f"Допустимые варианты: {legal_str}"
        )
        self.duration = duration
        self.legal = list(legal)


class IncompleteSelection(PricingError):
    """Не выбраны лодка, дата или длительность"""

    def __init__(self, missing):
        super().__init__(f"Не заполнены параметры бронирования: {', '.join(missing)}")
        self.missing = list(missing)


class PricingInvariantError(PricingError):
    """Нарушен инвариант расчета (например, отрицательный итог)"""


class CatalogIntegrityError(PricingError):
    """Каталог цен не прошел проверку при загрузке"""


class UnknownBoat(PricingError):
    """Лодка отсутствует в каталоге"""

    def __init__(self, boat_id: str):
        super().__init__(f"Лодка с id '{boat_id}' не найдена")
        self.boat_id = boat_id


class UnknownPack(PricingError):
    """Пакет допов недоступен для лодки"""

    def __init__(self, pack_id: str, boat_id: str = None):
        suffix = f" для лодки '{boat_id}'" if boat_id else ""
        super().__init__(f"Пакет '{pack_id}' недоступен{suffix}")
        self.pack_id = pack_id
        self.boat_id = boat_id


# ================ СЛОЙ ВАЛИДАЦИИ ================

class ValidationError(RentalEngineError):
    """Восстановимая ошибка ввода"""


class InvalidCode(ValidationError):
    """Код не является ни подарочной картой, ни кодом скидки"""

    def __init__(self, code: str):
        super().__init__(f"Код '{code}' недействителен")
        self.code = code


class ValidationInProgress(ValidationError):
    """Проверка этого же кода уже выполняется"""

    def __init__(self, code: str):
        super().__init__(f"Код '{code}' уже проверяется")
        self.code = code


class StaleValidationResult(ValidationError):
    """Результат проверки устарел: пользователь ввел другой код"""

    def __init__(self, code: str):
        super().__init__(f"Проверка кода '{code}' отменена новым запросом")
        self.code = code


class FieldValidationError(ValidationError, ValueError):
    """Ошибка поля формы бронирования"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class RequiredFieldMissing(FieldValidationError):
    """Обязательное поле не заполнено"""


class InvalidFieldFormat(FieldValidationError):
    """Поле заполнено в неверном формате"""
