"""Tests for asset taxonomy integrity - ASSET_GROUP_MAP contract."""

from __future__ import annotations

import pytest

from bond_advisor.taxonomy.asset_taxonomy import (
    ASSET_GROUP_MAP,
    ASSET_TYPE_LABELS,
    AssetGroup,
    AssetType,
    RecommendationCategory,
    RiskTolerance,
    asset_group,
    asset_type_label,
)


class TestAssetTypeEnum:
    def test_eighteen_instrument_kinds(self):
        assert len(AssetType) == 18

    def test_no_duplicate_values(self):
        values = [m.value for m in AssetType]
        assert len(values) == len(set(values)), "AssetType has duplicate values"

    def test_stored_values_kept_verbatim(self):
        assert AssetType("governmentBond") is AssetType.GOVERNMENT_BOND
        assert AssetType("CD") is AssetType.CD
        assert AssetType("OATs") is AssetType.OATS
        assert AssetType("perpetualBond") is AssetType.PERPETUAL_BOND

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            AssetType("junkBond")


class TestAssetGroupMap:
    def test_every_group_has_entry(self):
        missing = set(AssetGroup) - set(ASSET_GROUP_MAP)
        assert not missing, f"Groups missing from ASSET_GROUP_MAP: {missing}"

    def test_every_type_in_exactly_one_group(self):
        seen: dict[AssetType, AssetGroup] = {}
        for group, types in ASSET_GROUP_MAP.items():
            for t in types:
                assert t not in seen, f"{t} listed under both {seen[t]} and {group}"
                seen[t] = group
        assert set(seen) == set(AssetType)

    @pytest.mark.parametrize("asset_type,group", [
        (AssetType.GILTS,                 AssetGroup.GOVERNMENT),
        (AssetType.INFLATION_LINKED_BOND, AssetGroup.GOVERNMENT),
        (AssetType.PERPETUAL_BOND,        AssetGroup.CORPORATE),
        (AssetType.MUNICIPAL_BOND,        AssetGroup.MUNICIPAL),
        (AssetType.MONEY_MARKET,          AssetGroup.SAVINGS),
        (AssetType.OTHER,                 AssetGroup.OTHER),
    ])
    def test_asset_group(self, asset_type, group):
        assert asset_group(asset_type) is group


class TestLabels:
    def test_every_type_labelled(self):
        assert set(ASSET_TYPE_LABELS) == set(AssetType)

    def test_label_lookup(self):
        assert asset_type_label(AssetType.GOVERNMENT_BOND) == "government bond"
        assert asset_type_label(AssetType.OTHER) == "fixed income asset"


class TestClosedVocabularies:
    def test_risk_tolerance_values(self):
        assert {r.value for r in RiskTolerance} == {"conservative", "moderate", "aggressive"}

    def test_recommendation_categories(self):
        assert {c.value for c in RecommendationCategory} == {
            "rollover", "diversification", "laddering", "liquidity",
            "currency", "regional", "yield",
        }
