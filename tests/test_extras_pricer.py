import pytest
from decimal import Decimal

from boat_rental.engine.extras import ExtrasPricer
from boat_rental.exceptions import IncompleteSelection, UnknownPack
from boat_rental.schemas.booking import Selection


@pytest.fixture
def pricer(catalog):
    return ExtrasPricer(catalog)


@pytest.fixture
def selection():
    return Selection(boat_id="solar-450")


class TestExtrasPrice:
    """Тесты расчета стоимости допов."""

    def test_no_extras(self, pricer, selection):
        assert pricer.price(selection) == Decimal("0")

    def test_individual_extras(self, pricer, selection):
        """Без пакета допы суммируются по отдельности."""
        selection.selected_extra_names.update({"Parking", "Bebidas"})

        assert pricer.price(selection) == Decimal("12.5")

    def test_pack_only(self, pricer, selection):
        pricer.select_pack(selection, "pack-basic")

        assert pricer.price(selection) == Decimal("10")

    def test_no_double_charge(self, pricer, selection):
        """Доп из пакета не оплачивается второй раз."""
        selection.selected_extra_names.update({"Nevera", "Snorkel", "Parking"})
        pricer.select_pack(selection, "pack-basic")

        naive = Decimal("10") + Decimal("5") + Decimal("7.5") + Decimal("10")
        price = pricer.price(selection)

        # цена пакета + только Parking
        assert price == Decimal("20")
        assert price < naive

    def test_premium_pack_with_seascooter(self, pricer, selection):
        pricer.select_pack(selection, "pack-premium")
        pricer.toggle_extra(selection, "Seascooter")

        assert pricer.price(selection) == Decimal("80")

    def test_extras_without_boat(self, pricer):
        selection = Selection(selected_extra_names={"Parking"})

        with pytest.raises(IncompleteSelection):
            pricer.price(selection)


class TestExtrasSelection:
    """Тесты изменения выбора допов и пакетов."""

    def test_toggle_extra(self, pricer, selection):
        pricer.toggle_extra(selection, "Parking")
        assert selection.selected_extra_names == {"Parking"}

        pricer.toggle_extra(selection, "Parking")
        assert selection.selected_extra_names == set()

    def test_toggle_locked_extra_is_noop(self, pricer, selection):
        """Доп из активного пакета нельзя снять отдельно."""
        pricer.select_pack(selection, "pack-basic")

        pricer.toggle_extra(selection, "Nevera")

        assert pricer.is_locked(selection, "Nevera")
        assert "Nevera" in pricer.effective_extras(selection)
        assert pricer.price(selection) == Decimal("10")

    def test_toggle_unknown_extra(self, pricer, selection):
        with pytest.raises(ValueError, match="Jacuzzi"):
            pricer.toggle_extra(selection, "Jacuzzi")

    def test_deselect_pack_keeps_independent_extras(self, pricer, selection):
        """Снятие пакета убирает его допы, но сохраняет выбранные до пакета."""
        pricer.toggle_extra(selection, "Nevera")
        pricer.select_pack(selection, "pack-premium")

        pricer.deselect_pack(selection)

        assert selection.selected_pack_id is None
        assert pricer.effective_extras(selection) == ["Nevera"]
        assert pricer.price(selection) == Decimal("5")

    def test_effective_extras_in_catalog_order(self, pricer, selection):
        pricer.toggle_extra(selection, "Seascooter")
        pricer.toggle_extra(selection, "Parking")
        pricer.select_pack(selection, "pack-basic")

        assert pricer.effective_extras(selection) == ["Parking", "Nevera", "Snorkel", "Seascooter"]

    def test_select_unknown_pack(self, pricer, selection):
        with pytest.raises(UnknownPack):
            pricer.select_pack(selection, "pack-gold")

        assert selection.selected_pack_id is None
