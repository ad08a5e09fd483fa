"""
순소요량 / 발주량 보정 테스트

- 순소요량 = max(0, 총소요량 - (현재고 + 미입고))
- 발주량 = max(순소요량, MOQ) → 포장단위 배수 올림
"""

import pytest

from src.domain.models import IngredientMaster
from src.domain.ordering.net_requirement import (
    build_master_index,
    default_master,
    resolve_master,
    resolve_net_requirement,
    round_to_packaging,
)


def _master(moq=1, packaging_unit=1, unit_price=0, code="I001"):
    return IngredientMaster(
        ingredient_code=code, ingredient_name="돼지고기",
        moq=moq, packaging_unit=packaging_unit, unit_price=unit_price,
    )


class TestRoundToPackaging:
    """round_to_packaging() 테스트"""

    @pytest.mark.unit
    def test_moq_then_packaging(self):
        """순소요 37, MOQ 10, 포장 25 → 50"""
        assert round_to_packaging(37, moq=10, packaging_unit=25) == 50

    @pytest.mark.unit
    def test_moq_dominates(self):
        """순소요 3, MOQ 10, 포장 1 → 10"""
        assert round_to_packaging(3, moq=10, packaging_unit=1) == 10

    @pytest.mark.unit
    def test_exact_multiple_not_rounded_up(self):
        assert round_to_packaging(50, moq=1, packaging_unit=25) == 50

    @pytest.mark.unit
    def test_zero_net_gives_zero_order(self):
        """순소요량 0이면 MOQ가 있어도 발주하지 않는다"""
        assert round_to_packaging(0, moq=100, packaging_unit=10) == 0

    @pytest.mark.unit
    def test_fractional_packaging_ignored_when_one(self):
        assert round_to_packaging(12.4, moq=1, packaging_unit=1) == pytest.approx(12.4)


class TestResolveNetRequirement:
    """resolve_net_requirement() 테스트"""

    @pytest.mark.unit
    def test_worked_example(self):
        """210 + 114.3 - 50 → 274.3 → 포장 10 → 280"""
        net = resolve_net_requirement(
            gross_qty=210, safety_stock=114.3, master=_master(packaging_unit=10, unit_price=5),
            on_hand=50, in_transit=0,
        )
        assert net.total_requirement == pytest.approx(324.3)
        assert net.available_stock == 50
        assert net.net_requirement == pytest.approx(274.3)
        assert net.order_qty == 280
        assert net.estimated_cost == 1400

    @pytest.mark.unit
    def test_in_transit_counts_as_available(self):
        net = resolve_net_requirement(100, 0, _master(), on_hand=30, in_transit=50)
        assert net.available_stock == 80
        assert net.net_requirement == pytest.approx(20)

    @pytest.mark.unit
    def test_net_never_negative(self):
        """가용재고가 충분하면 순소요량 0, 발주량 0"""
        net = resolve_net_requirement(100, 10, _master(moq=50), on_hand=500, in_transit=0)
        assert net.net_requirement == 0
        assert net.order_qty == 0
        assert net.estimated_cost == 0

    @pytest.mark.unit
    def test_negative_stock_treated_as_zero(self):
        net = resolve_net_requirement(100, 0, _master(), on_hand=-40, in_transit=-5)
        assert net.current_stock == 0
        assert net.in_transit == 0
        assert net.net_requirement == 100

    @pytest.mark.unit
    def test_order_qty_at_least_net(self):
        for gross in (1, 9.5, 37, 101, 999):
            net = resolve_net_requirement(gross, 0, _master(moq=7, packaging_unit=6))
            assert net.order_qty >= net.net_requirement
            assert net.order_qty >= 7
            assert net.order_qty % 6 == 0


class TestMasterResolution:

    @pytest.mark.unit
    def test_default_master_uses_config(self, config):
        master = default_master("I404", config)
        assert master.ingredient_code == "I404"
        assert master.ingredient_name == "I404"
        assert master.category == "기타"
        assert master.unit == "g"
        assert master.moq == 1
        assert master.packaging_unit == 1
        assert master.lead_time == config.default_lead_time
        assert master.safety_days == config.safety_days
        assert master.unit_price == 0

    @pytest.mark.unit
    def test_resolve_known_and_unknown(self, config):
        index = build_master_index([_master(code="I001")])
        assert resolve_master("I001", index, config).ingredient_name == "돼지고기"
        assert resolve_master("I002", index, config).ingredient_name == "I002"

    @pytest.mark.unit
    def test_index_falls_back_to_name_key(self):
        master = IngredientMaster(ingredient_code="", ingredient_name="양파")
        assert "양파" in build_master_index([master])
