"""Shared fixtures: a small tree exported from the document store."""

import pytest

from famlink.core.member import Member


FAMILY_DOCUMENTS = [
    {
        'id': 'n1',
        'firstName': 'Jean',
        'lastName': 'Dupont',
        'birthDate': '1990-06-01',
        'birthPlace': {'city': 'Lyon', 'country': 'France'},
        'nationality': 'Française',
        'parentsIds': ['p1'],
        'treeId': 't1',
    },
    {
        'id': 'p1',
        'firstName': 'Pierre',
        'lastName': 'Dupont',
        'birthDate': '1960-03-12',
        'birthPlace': {'city': 'Lyon', 'country': 'France'},
        'nationality': ['Française'],
        'childrenIds': ['n1', 's1'],
        'treeId': 't1',
    },
    {
        'id': 's1',
        'firstName': 'Marie',
        'lastName': 'Dupont',
        'birthDate': '1992-01-01',
        'birthPlace': {'city': 'Lyon', 'country': 'France'},
        'nationality': 'Française',
        'parentsIds': ['p1'],
        'treeId': 't1',
    },
    {
        'id': 'c1',
        'firstName': 'Paul',
        'lastName': 'Martin',
        'birthDate': '1991-09-20',
        'birthPlace': {'city': 'Lyon', 'country': 'France'},
        'treeId': 't1',
    },
    {
        'id': 'x1',
        'firstName': 'Luc',
        'lastName': 'Bernard',
        'birthDate': '1950-05-05',
        'birthPlace': {'city': 'Paris'},
        'treeId': 't1',
    },
]


@pytest.fixture
def family_documents():
    """Raw member documents for one tree."""
    return [dict(doc) for doc in FAMILY_DOCUMENTS]


@pytest.fixture
def family(family_documents):
    """Members of one tree, keyed by id."""
    return {doc['id']: Member.from_dict(doc) for doc in family_documents}
