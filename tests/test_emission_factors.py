"""
Unit tests for ghg_engine/emission_factors.py
"""
import pytest

from ghg_engine.calculator import create_emission_calculator
from ghg_engine.emission_factors import (
    factor_id,
    filter_emission_factors,
    get_default_emission_factors,
    get_factor_categories,
)
from ghg_engine.schemas import EmissionFactor


@pytest.fixture
def catalog():
    return get_default_emission_factors()


class TestDefaultCatalog:

    def test_records_are_validated_models(self, catalog):
        assert catalog
        assert all(isinstance(f, EmissionFactor) for f in catalog)

    def test_ids_are_unique(self, catalog):
        ids = [f.id for f in catalog]
        assert len(ids) == len(set(ids))

    def test_id_format(self, catalog):
        diesel = next(f for f in catalog if f.id == "mobile_combustion.diesel_fuel.gallon")
        assert diesel.factor == pytest.approx(10.21)
        assert diesel.id == factor_id(diesel.category, diesel.subcategory, diesel.unit)

    def test_freight_factors_in_both_directions(self, catalog):
        cats = {f.category for f in catalog if f.subcategory == "rail_freight"}
        assert cats == {"upstream_transportation", "downstream_transportation"}

    def test_catalog_usable_by_calculator(self, catalog):
        # 100 L diesel → 26.417 gal × 10.21
        calc = create_emission_calculator(catalog)
        result = calc.calculate({
            "scope": "scope_1",
            "category": "mobile_combustion",
            "subcategory": "diesel_fuel",
            "activityData": {
                "amount": 100, "unit": "L",
                "startDate": "2025-01-01", "endDate": "2025-01-31",
            },
            "emissionFactorId": "mobile_combustion.diesel_fuel.gallon",
        })
        assert result.status == "completed"
        assert result.calculated_emissions == pytest.approx(100 / 3.78541 * 10.21)


class TestFilterEmissionFactors:

    def test_filter_by_category(self, catalog):
        rows = filter_emission_factors(catalog, category="purchased_electricity")
        assert rows
        assert {f.category for f in rows} == {"purchased_electricity"}

    def test_region_is_case_insensitive(self, catalog):
        rows = filter_emission_factors(catalog, region="ercot")
        assert [f.subcategory for f in rows] == ["ercot"]

    def test_limit(self, catalog):
        assert len(filter_emission_factors(catalog, limit=3)) == 3

    def test_default_limit_is_fifty(self, catalog):
        assert len(catalog) > 50
        assert len(filter_emission_factors(catalog)) == 50

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_bounds(self, catalog, limit):
        with pytest.raises(ValueError, match="limit must be between"):
            filter_emission_factors(catalog, limit=limit)

    def test_inactive_factors_skipped_by_default(self, catalog):
        retired = catalog[0].model_copy(update={"id": "retired", "is_active": False})
        rows = filter_emission_factors([retired], active_only=True)
        assert rows == []
        assert filter_emission_factors([retired], active_only=False) == [retired]


class TestFactorCategories:

    def test_sorted_distinct(self, catalog):
        categories = get_factor_categories(catalog)
        assert categories == sorted(set(categories))
        assert "stationary_combustion" in categories
        assert "process_emissions" not in categories

    def test_empty(self):
        assert get_factor_categories([]) == []
