from decimal import Decimal

import pytest

from apps.parcels.catalog import (
    FIELD_CONFIG,
    ParcelType,
    calculate_total,
    count_by_type,
    generate_all_parcels,
    get_parcel_by_id,
    group_parcels_by_type,
)


class TestGenerateAllParcels:
    """Tests for the static catalog."""

    def test_total_count(self):
        parcels = generate_all_parcels()
        assert len(parcels) == 60 * 50 + 10 + 2 + 1 == 3013

    def test_ids_are_unique(self):
        ids = [parcel.id for parcel in generate_all_parcels()]
        assert len(ids) == len(set(ids))

    def test_display_order(self):
        ids = [parcel.id for parcel in generate_all_parcels()]

        assert ids[:13] == [
            'goal-left-0', 'goal-left-1', 'goal-left-2', 'goal-left-3', 'goal-left-4',
            'goal-right-0', 'goal-right-1', 'goal-right-2', 'goal-right-3', 'goal-right-4',
            'penalty-left', 'penalty-right',
            'kickoff',
        ]
        assert ids[13] == 'field-0-0'
        assert ids[14] == 'field-0-1'
        assert ids[13 + 60] == 'field-1-0'
        assert ids[-1] == 'field-49-59'

    def test_prices_per_type(self):
        prices = {parcel.type: parcel.price for parcel in generate_all_parcels()}

        assert prices == {
            ParcelType.GOAL: Decimal('300'),
            ParcelType.PENALTY: Decimal('300'),
            ParcelType.KICKOFF: Decimal('500'),
            ParcelType.FIELD: Decimal('50'),
        }

    def test_count_by_type(self):
        assert count_by_type(generate_all_parcels()) == {
            'goal': 10,
            'penalty': 2,
            'kickoff': 1,
            'field': 3000,
        }


class TestGetParcelById:
    """Tests for parcel ID resolution."""

    @pytest.mark.parametrize('parcel_id,parcel_type', [
        ('goal-left-0', ParcelType.GOAL),
        ('goal-right-4', ParcelType.GOAL),
        ('penalty-left', ParcelType.PENALTY),
        ('kickoff', ParcelType.KICKOFF),
        ('field-0-0', ParcelType.FIELD),
        ('field-49-59', ParcelType.FIELD),
    ])
    def test_valid_ids(self, parcel_id, parcel_type):
        parcel = get_parcel_by_id(parcel_id)

        assert parcel is not None
        assert parcel.id == parcel_id
        assert parcel.type == parcel_type

    def test_field_coordinates(self):
        parcel = get_parcel_by_id('field-12-34')

        assert parcel.row == 12
        assert parcel.col == 34
        assert parcel.price_cents == 5000

    def test_goal_position(self):
        parcel = get_parcel_by_id('goal-right-3')

        assert parcel.goal_side == 'right'
        assert parcel.goal_position == 3

    @pytest.mark.parametrize('parcel_id', [
        'goal-left-5',
        'goal-top-0',
        'goal-left-01',
        'penalty-center',
        'field-50-0',
        'field-0-60',
        'field-01-2',
        'field--1-2',
        'field-1',
        'kickoff-1',
        'field-1-2\n',
        '',
        None,
    ])
    def test_invalid_ids_return_none(self, parcel_id):
        assert get_parcel_by_id(parcel_id) is None


class TestTotalsAndGrouping:
    """Tests for price aggregation helpers."""

    def test_calculate_total(self):
        total = calculate_total(['kickoff', 'goal-left-0', 'field-0-0', 'field-0-1'])
        assert total == Decimal('900')

    def test_calculate_total_ignores_unknown_ids(self):
        assert calculate_total(['field-0-0', 'nonsense']) == Decimal('50')

    def test_calculate_total_empty(self):
        assert calculate_total([]) == Decimal('0')

    def test_group_by_type_sorted_by_total_descending(self):
        groups = group_parcels_by_type([
            'field-0-0', 'field-0-1', 'kickoff', 'goal-left-0', 'goal-left-1',
        ])

        assert [group['type'] for group in groups] == ['goal', 'kickoff', 'field']
        assert groups[0]['type_name'] == 'Tor-Parzelle'
        assert groups[0]['count'] == 2
        assert groups[0]['total_price'] == Decimal('600')
        assert groups[1]['type_name'] == 'Anstoßpunkt'
        assert groups[2]['type_name'] == 'Feld-Parzelle'
        assert groups[2]['ids'] == ['field-0-0', 'field-0-1']

    def test_field_config_grid(self):
        assert FIELD_CONFIG['GRID_COLS'] == 60
        assert FIELD_CONFIG['GRID_ROWS'] == 50
        assert FIELD_CONFIG['GOAL_PARCELS_PER_SIDE'] == 5
