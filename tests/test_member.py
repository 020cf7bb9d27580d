"""Tests for the Member class and its document adapter."""

import pytest
from datetime import date, datetime

from famlink.core.member import Member, BirthPlace, normalize_nationality, parse_date


def test_member_creation():
    """Test basic member creation."""
    member = Member(id='m1', first_name='Jean', last_name='Dupont')

    assert member.id == 'm1'
    assert member.full_name == 'Jean Dupont'
    assert member.birth_date is None
    assert member.birth_place is None
    assert member.nationality == []
    assert member.parents_ids == []
    assert member.children_ids == []
    assert member.brothers_ids == []


def test_member_str():
    """Test human-readable representation."""
    member = Member(id='m1', first_name='Jean', last_name='Dupont', birth_date=date(1990, 6, 1))
    assert str(member) == 'Jean Dupont (b. 1990)'

    assert str(Member(id='m2')) == 'Unknown'


def test_relative_ids():
    """Test union of relationship lists."""
    member = Member(
        id='m1',
        parents_ids=['p1', 'p2'],
        children_ids=['c1'],
        brothers_ids=['b1', 'p1']
    )

    assert member.relative_ids() == {'p1', 'p2', 'c1', 'b1'}


def test_from_dict_camel_case(family_documents):
    """Test building a member from a stored document."""
    member = Member.from_dict(family_documents[0])

    assert member.id == 'n1'
    assert member.first_name == 'Jean'
    assert member.last_name == 'Dupont'
    assert member.birth_date == date(1990, 6, 1)
    assert member.birth_year == 1990
    assert member.birth_city == 'Lyon'
    assert member.birth_country == 'France'
    assert member.nationality == ['Française']
    assert member.parents_ids == ['p1']
    assert member.children_ids == []
    assert member.tree_id == 't1'


def test_from_dict_snake_case():
    """Test snake_case keys are accepted too."""
    member = Member.from_dict({
        'id': 'm1',
        'first_name': 'Anne',
        'last_name': 'Martin',
        'brothers_ids': ['m2'],
    })

    assert member.first_name == 'Anne'
    assert member.last_name == 'Martin'
    assert member.brothers_ids == ['m2']


def test_from_dict_missing_optional_fields():
    """Test a bare document gives an empty member."""
    member = Member.from_dict({'id': 'm1'})

    assert member.first_name == ''
    assert member.last_name == ''
    assert member.birth_date is None
    assert member.birth_place is None
    assert member.nationality == []
    assert member.relative_ids() == set()


def test_from_dict_null_lists():
    """Test explicit nulls for relationship lists become empty lists."""
    member = Member.from_dict({'id': 'm1', 'parentsIds': None, 'childrenIds': None})

    assert member.parents_ids == []
    assert member.children_ids == []


def test_from_dict_requires_id():
    """Test a record without id is rejected."""
    with pytest.raises(KeyError):
        Member.from_dict({'firstName': 'Jean'})


def test_from_dict_requires_mapping():
    """Test a non-mapping record is rejected."""
    with pytest.raises(TypeError):
        Member.from_dict(['m1'])


def test_from_dict_birth_place_string():
    """Test a plain string birth place is taken as the city."""
    member = Member.from_dict({'id': 'm1', 'birthPlace': 'Lyon'})

    assert member.birth_city == 'Lyon'
    assert member.birth_country is None


@pytest.mark.parametrize('value', [123, ['Lyon'], True, 4.5])
def test_from_dict_birth_place_of_other_type(value):
    """Test a birth place that is neither a mapping nor a string is dropped."""
    member = Member.from_dict({'id': 'm1', 'birthPlace': value})

    assert member.birth_place is None
    assert member.birth_city is None


def test_relative_ids_with_null_lists():
    """Test lists set to None directly count as empty."""
    member = Member(id='m1', parents_ids=None, children_ids=['c1'], brothers_ids=None)

    assert member.relative_ids() == {'c1'}


def test_to_dict_shape(family):
    """Test conversion back to the document shape."""
    data = family['n1'].to_dict()

    assert data['id'] == 'n1'
    assert data['firstName'] == 'Jean'
    assert data['birthDate'] == '1990-06-01'
    assert data['birthPlace'] == {'city': 'Lyon', 'country': 'France'}
    assert data['nationality'] == ['Française']
    assert data['parentsIds'] == ['p1']

    assert Member.from_dict(data) == family['n1']


class TestNormalizeNationality:
    """Tests for nationality normalization."""

    def test_scalar_is_wrapped(self):
        assert normalize_nationality('Française') == ['Française']

    def test_list_is_kept(self):
        assert normalize_nationality(['Française', 'Belge']) == ['Française', 'Belge']

    def test_empty_values_are_dropped(self):
        assert normalize_nationality(None) == []
        assert normalize_nationality('') == []
        assert normalize_nationality(['Belge', '', None, '  ']) == ['Belge']


class TestParseDate:
    """Tests for stored date parsing."""

    def test_epoch_milliseconds(self):
        # 1990-01-01T00:00:00Z
        assert parse_date(631152000000) == date(1990, 1, 1)

    def test_iso_string(self):
        assert parse_date('1990-06-01') == date(1990, 6, 1)
        assert parse_date('1990-06-01T10:30:00Z') == date(1990, 6, 1)

    def test_year_only(self):
        assert parse_date('1920') == date(1920, 1, 1)

    def test_date_and_datetime(self):
        assert parse_date(date(1950, 2, 3)) == date(1950, 2, 3)
        assert parse_date(datetime(1950, 2, 3, 12, 0)) == date(1950, 2, 3)

    def test_unparseable_values(self):
        assert parse_date(None) is None
        assert parse_date('') is None
        assert parse_date('not a date') is None
        assert parse_date(True) is None


def test_birth_place_str():
    """Test birth place display."""
    assert str(BirthPlace(city='Lyon', country='France')) == 'Lyon, France'
    assert str(BirthPlace(country='France')) == 'France'
