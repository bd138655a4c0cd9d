"""FieldSynchronizer 테스트"""

from datetime import date, datetime

from core.domain.entities import MhdState, TextVariant
from core.domain.synchronizer import CustomFieldKeys, FieldSynchronizer

TODAY = date(2024, 12, 1)


def variant(title="Milk", description=None, custom_fields=None, language_id="de-DE"):
    return TextVariant(
        language_id=language_id,
        title=title,
        description=description,
        custom_fields=custom_fields or {},
    )


def apply(result, current):
    """결과를 번역에 반영한 새 번역"""
    return TextVariant(
        language_id=current.language_id,
        title=result.title,
        description=result.description,
        custom_fields=result.custom_fields,
    )


class TestSynchronize:
    def test_valid_token(self, synchronizer):
        result = synchronizer.synchronize("311224", TODAY, variant(description="<p>Frisch</p>"))

        assert result.state == MhdState.HAS_DATE
        assert result.structured_date == datetime(2024, 12, 31)
        assert result.days_remaining == 30
        assert result.title == "Milk MHD 31.12.24"
        assert result.description == (
            '<p>Frisch</p>\n\n<span class="invisible-date">Mindestens haltbar bis: 31.12.2024</span>'
        )
        assert result.custom_fields == {
            "custom_product_mhd_date": "2024-12-31 00:00:00.000",
            "custom_product_mhd_days": 30,
            "custom_product_detail_expiry_date": "31.12.24",
        }

    def test_empty_title_stays_empty(self, synchronizer):
        result = synchronizer.synchronize("311224", TODAY, variant(title=""))
        assert result.title == ""

    def test_milk_end_to_end(self, synchronizer):
        current = variant(title="Milk")

        current = apply(synchronizer.synchronize("311224", TODAY, current), current)
        assert current.title == "Milk MHD 31.12.24"

        current = apply(synchronizer.synchronize("150125", TODAY, current), current)
        assert current.title == "Milk MHD 15.01.25"
        assert current.custom_fields["custom_product_mhd_days"] == 45

        current = apply(synchronizer.synchronize(None, TODAY, current), current)
        assert current.title == "Milk"
        assert current.description == ""
        assert current.custom_fields == {}

    def test_invalid_token_clears_date_fields_only(self, synchronizer):
        current = variant(
            title="Milk MHD 31.12.24",
            custom_fields={
                "custom_product_mhd_date": "2024-12-31 00:00:00.000",
                "custom_product_mhd_days": 30,
                "custom_product_detail_expiry_date": "31.12.24",
                "custom_product_single_ean": "4006381333931",
            },
        )
        result = synchronizer.synchronize("300229", TODAY, current)

        assert result.state == MhdState.NO_DATE
        assert result.structured_date is None
        assert result.days_remaining is None
        assert result.title == "Milk"
        assert result.custom_fields == {"custom_product_single_ean": "4006381333931"}

    def test_no_marker_and_no_date_means_no_changes(self, synchronizer):
        current = variant(title="Milk", description=None)
        result = synchronizer.synchronize(None, TODAY, current)

        assert result.title == "Milk"
        assert result.description is None
        assert not result.has_changes(current)
        assert result.to_update(current) is None

    def test_input_variant_is_not_modified(self, synchronizer):
        current = variant(custom_fields={"other": 1})
        synchronizer.synchronize("311224", TODAY, current)

        assert current.title == "Milk"
        assert current.custom_fields == {"other": 1}

    def test_second_run_has_no_changes(self, synchronizer):
        current = variant(description="<p>Frisch</p>")
        current = apply(synchronizer.synchronize("311224", TODAY, current), current)

        again = synchronizer.synchronize("311224", TODAY, current)
        assert not again.has_changes(current)

    def test_days_change_with_today(self, synchronizer):
        current = variant()
        current = apply(synchronizer.synchronize("311224", TODAY, current), current)

        later = synchronizer.synchronize("311224", date(2025, 1, 2), current)
        assert later.to_update(current).custom_fields["custom_product_mhd_days"] == -2
        assert later.to_update(current).title is None

    def test_custom_keys(self):
        keys = CustomFieldKeys(mhd_date="mhd", mhd_days="days", expiry_display=None)
        result = FieldSynchronizer(keys=keys).synchronize("010125", TODAY, variant())

        assert result.custom_fields == {"mhd": "2025-01-01 00:00:00.000", "days": 31}


class TestSynchronizeEan:
    def test_sets_field_and_span(self, synchronizer):
        result = synchronizer.synchronize_ean("4006381333931", variant(description="<p>Frisch</p>"))

        assert result.custom_fields["custom_product_single_ean"] == "4006381333931"
        assert result.description.endswith(
            '<span class="single-ean">Einzel EAN: 4006381333931</span>'
        )
        assert result.title == "Milk"

    def test_removal_keeps_date(self, synchronizer):
        current = variant()
        current = apply(synchronizer.synchronize("311224", TODAY, current), current)
        current = apply(synchronizer.synchronize_ean("4006381333931", current), current)

        result = synchronizer.synchronize_ean(None, current)

        assert "single-ean" not in result.description
        assert "Mindestens haltbar bis: 31.12.2024" in result.description
        assert "custom_product_single_ean" not in result.custom_fields
        assert result.state == MhdState.HAS_DATE
        assert result.structured_date == datetime(2024, 12, 31)

    def test_refresh_uses_stored_value(self, synchronizer):
        current = variant(custom_fields={"custom_product_single_ean": "12345678"})
        result = synchronizer.refresh_ean(current)

        assert result.description == '<span class="single-ean">Einzel EAN: 12345678</span>'

    def test_extract_markers(self, synchronizer):
        current = variant()
        current = apply(synchronizer.synchronize("311224", TODAY, current), current)
        current = apply(synchronizer.synchronize_ean("12345678", current), current)

        markers = synchronizer.extract_markers(current)
        assert markers["title_mhd"] == "31.12.24"
        assert markers["description_mhd"] == "31.12.2024"
        assert markers["single_ean"] == "12345678"
        assert markers["mhd_days"] == 30
