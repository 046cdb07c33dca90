"""
Стоимость допов: пакет плюс отдельно выбранные допы.

Доп, входящий в выбранный пакет, никогда не оплачивается повторно.
"""

from decimal import Decimal
from typing import List, Optional

from boat_rental.engine.catalog import Catalog
from boat_rental.exceptions import IncompleteSelection
from boat_rental.schemas.booking import Selection
from boat_rental.schemas.catalog import ExtraPack
from boat_rental.utils.money import ZERO
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


class ExtrasPricer:
    """Расчет стоимости допов и изменение выбора допов"""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.extras_catalog = catalog.extras

    def _require_boat(self, selection: Selection) -> str:
        if not selection.boat_id:
            raise IncompleteSelection(["boat"])
        return selection.boat_id

    def active_pack(self, selection: Selection) -> Optional[ExtraPack]:
        if not selection.selected_pack_id:
            return None
        return self.extras_catalog.pack(self._require_boat(selection), selection.selected_pack_id)

    # ================ РАСЧЕТ ================

    def price(self, selection: Selection) -> Decimal:
        """
        Стоимость допов выбора

        Пакет по своей цене плюс отдельно выбранные допы, не входящие в пакет.
        """
        if not selection.selected_pack_id and not selection.selected_extra_names:
            return ZERO

        boat_id = self._require_boat(selection)
        pack = self.active_pack(selection)

        total = pack.price if pack else ZERO
        covered = set(pack.extras) if pack else set()

        for name in sorted(selection.selected_extra_names - covered):
            total += self.extras_catalog.extra(boat_id, name).price

        logger.debug(
            f"Допы лодки '{boat_id}': пакет={pack.id if pack else None}, "
            f"отдельно={sorted(selection.selected_extra_names - covered)}, итого={total}"
        )
        return total

    def effective_extras(self, selection: Selection) -> List[str]:
        """Все допы выбора (из пакета и отдельные) в порядке каталога"""
        if not selection.boat_id:
            return []
        pack = self.active_pack(selection)
        chosen = set(selection.selected_extra_names)
        if pack:
            chosen.update(pack.extras)
        boat = self.catalog.boat(selection.boat_id)
        return [name for name in boat.extra_names if name in chosen]

    def is_locked(self, selection: Selection, extra_name: str) -> bool:
        """Доп включен пакетом и не может быть снят отдельно"""
        pack = self.active_pack(selection)
        return bool(pack and pack.covers(extra_name))

    # ================ ИЗМЕНЕНИЕ ВЫБОРА ================

    def toggle_extra(self, selection: Selection, extra_name: str) -> None:
        """Включить/выключить доп. Для допа из активного пакета ничего не делает"""
        boat_id = self._require_boat(selection)
        self.extras_catalog.extra(boat_id, extra_name)

        if self.is_locked(selection, extra_name):
            logger.debug(f"Доп '{extra_name}' входит в пакет '{selection.selected_pack_id}', пропускаем")
            return

        if extra_name in selection.selected_extra_names:
            selection.selected_extra_names.discard(extra_name)
        else:
            selection.selected_extra_names.add(extra_name)

    def select_pack(self, selection: Selection, pack_id: str) -> ExtraPack:
        """
        Raises:
            UnknownPack: пакет недоступен для лодки
        """
        pack = self.extras_catalog.pack(self._require_boat(selection), pack_id)
        selection.selected_pack_id = pack.id
        logger.debug(f"Выбран пакет '{pack.id}' для лодки '{selection.boat_id}'")
        return pack

    def deselect_pack(self, selection: Selection) -> None:
        """Снять пакет. Самостоятельно выбранные допы остаются"""
        selection.selected_pack_id = None

    def drop_unavailable(self, selection: Selection) -> None:
        """Убрать пакет и допы, которых нет у текущей лодки"""
        boat = self.catalog.find_boat(selection.boat_id)
        if boat is None:
            selection.selected_pack_id = None
            selection.selected_extra_names.clear()
            return

        offered = set(boat.extra_names)
        dropped = selection.selected_extra_names - offered
        if dropped:
            logger.debug(f"Допы {sorted(dropped)} недоступны для лодки '{boat.id}', сброшены")
            selection.selected_extra_names.intersection_update(offered)

        if selection.selected_pack_id:
            available = {pack.id for pack in self.extras_catalog.packs_for(boat.id)}
            if selection.selected_pack_id not in available:
                logger.debug(f"Пакет '{selection.selected_pack_id}' недоступен для лодки '{boat.id}', сброшен")
                selection.selected_pack_id = None
