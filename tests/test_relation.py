"""Tests for relationship inference."""

import pytest
from datetime import date

from famlink.core.member import Member
from famlink.matching import RelationClassifier, RelationLabel, guess_relation


@pytest.fixture
def classifier():
    return RelationClassifier()


def born(member_id: str, year: int, **kwargs) -> Member:
    return Member(id=member_id, birth_date=date(year, 1, 1), **kwargs)


class TestRelationClassifier:
    """Tests for RelationClassifier class."""

    def test_missing_member_is_unknown(self, classifier):
        member = Member(id='a')
        assert classifier.classify(None, member) == RelationLabel.UNKNOWN
        assert classifier.classify(member, None) == RelationLabel.UNKNOWN
        assert classifier.classify(None, None) == RelationLabel.UNKNOWN

    def test_parent(self, classifier):
        """Test the existing member is listed among the new member's parents."""
        a = Member(id='a', parents_ids=['b'])
        b = Member(id='b')
        assert classifier.classify(a, b) == RelationLabel.PARENT

    def test_child(self, classifier):
        """Test the new member is listed among the existing member's parents."""
        a = Member(id='a')
        b = Member(id='b', parents_ids=['a'])
        assert classifier.classify(a, b) == RelationLabel.CHILD

    def test_parent_wins_over_child(self, classifier):
        """Test rule order when links contradict each other."""
        a = Member(id='a', parents_ids=['b'])
        b = Member(id='b', parents_ids=['a'])
        assert classifier.classify(a, b) == RelationLabel.PARENT

    def test_sibling_listed_by_new_member(self, classifier):
        a = Member(id='a', brothers_ids=['b'])
        b = Member(id='b')
        assert classifier.classify(a, b) == RelationLabel.SIBLING

    def test_sibling_listed_by_existing_member(self, classifier):
        a = Member(id='a')
        b = Member(id='b', brothers_ids=['a'])
        assert classifier.classify(a, b) == RelationLabel.SIBLING

    def test_shared_parent_is_sibling(self, classifier):
        """Test siblings are inferred from a common parent."""
        a = Member(id='a', parents_ids=['p1'])
        b = Member(id='b', parents_ids=['p2', 'p1'])
        assert classifier.classify(a, b) == RelationLabel.SIBLING

    def test_shared_parent_wins_over_first_cousin(self, classifier):
        """Test the cousin check never fires: any pair it matches shares a parent."""
        a = born('a', 1990, parents_ids=['p1', 'p2'])
        b = born('b', 1992, parents_ids=['p3', 'p2'])

        assert classifier.classify(a, b) == RelationLabel.SIBLING
        assert classifier.classify(b, a) == RelationLabel.SIBLING

        results = {
            classifier.classify(born(x, 1990, parents_ids=px), born(y, 1990, parents_ids=py))
            for x, px in (('a', ['p1']), ('b', ['p1', 'p2']), ('c', ['p3']))
            for y, py in (('d', ['p1']), ('e', ['p2', 'p3']), ('f', ['p4']))
        }
        assert RelationLabel.FIRST_COUSIN not in results

    def test_parent_link_beats_age(self, classifier):
        """Test id links are checked before birth years."""
        a = born('a', 1990, parents_ids=['b'])
        b = born('b', 1985)
        assert classifier.classify(a, b) == RelationLabel.PARENT

    def test_distinct_parents_fall_through_to_age(self, classifier):
        """Test members with unrelated parents are classified by age."""
        a = born('a', 1990, parents_ids=['p1'])
        b = born('b', 1995, parents_ids=['p2'])
        assert classifier.classify(a, b) == RelationLabel.DISTANT_COUSIN

    def test_close_ages_are_distant_cousins(self, classifier):
        assert classifier.classify(born('a', 1990), born('b', 1980)) == RelationLabel.DISTANT_COUSIN
        assert classifier.classify(born('a', 1980), born('b', 1994)) == RelationLabel.DISTANT_COUSIN

    def test_older_existing_member_is_aunt_uncle(self, classifier):
        assert classifier.classify(born('a', 1990), born('b', 1960)) == RelationLabel.POSSIBLE_AUNT_UNCLE
        assert classifier.classify(born('a', 1990), born('b', 1969)) == RelationLabel.POSSIBLE_AUNT_UNCLE

    def test_younger_existing_member_is_niece_nephew(self, classifier):
        assert classifier.classify(born('a', 1960), born('b', 1990)) == RelationLabel.POSSIBLE_NIECE_NEPHEW

    def test_age_gaps_between_thresholds(self, classifier):
        """Test gaps of 15 to 20 years give no age-based label."""
        assert classifier.classify(born('a', 1990), born('b', 1975)) == RelationLabel.POSSIBLE_FAMILY_LINK
        assert classifier.classify(born('a', 1990), born('b', 1970)) == RelationLabel.POSSIBLE_FAMILY_LINK
        assert classifier.classify(born('a', 1970), born('b', 1990)) == RelationLabel.POSSIBLE_FAMILY_LINK

    def test_missing_birth_year_is_family_link(self, classifier):
        assert classifier.classify(born('a', 1990), Member(id='b')) == RelationLabel.POSSIBLE_FAMILY_LINK
        assert classifier.classify(Member(id='a'), Member(id='b')) == RelationLabel.POSSIBLE_FAMILY_LINK

    def test_sample_tree(self, classifier, family):
        """Test the relations inferred on the sample tree."""
        n1 = family['n1']
        assert classifier.classify(n1, family['p1']) == RelationLabel.PARENT
        assert classifier.classify(n1, family['s1']) == RelationLabel.SIBLING
        assert classifier.classify(n1, family['c1']) == RelationLabel.DISTANT_COUSIN
        assert classifier.classify(n1, family['x1']) == RelationLabel.POSSIBLE_AUNT_UNCLE
        assert classifier.classify(family['p1'], n1) == RelationLabel.CHILD
        assert classifier.classify(family['x1'], n1) == RelationLabel.POSSIBLE_NIECE_NEPHEW


class TestRelationLabel:
    """Tests for relation label display."""

    def test_english_is_default(self):
        assert RelationLabel.SIBLING.display_name() == 'Brother/Sister'
        assert RelationLabel.FIRST_COUSIN.display_name('en') == 'First cousin'

    def test_french(self):
        assert RelationLabel.CHILD.display_name('fr') == 'Enfant'
        assert RelationLabel.FIRST_COUSIN.display_name('fr') == 'Cousin germain'
        assert RelationLabel.POSSIBLE_FAMILY_LINK.display_name('fr') == 'Lien familial possible (non défini)'

    def test_unknown_locale_falls_back_to_english(self):
        assert RelationLabel.PARENT.display_name('de') == 'Parent'

    def test_every_label_has_display_names(self):
        for label in RelationLabel:
            assert label.display_name('en')
            assert label.display_name('fr')


def test_guess_relation_function(family):
    """Test the module-level helper matches the classifier."""
    assert guess_relation(family['n1'], family['p1']) == RelationLabel.PARENT
    assert guess_relation(None, family['p1']) == RelationLabel.UNKNOWN
