import pytest

from apps.taxonomy.models import ExpenseCategory, Tag


@pytest.fixture
def category(db):
    return ExpenseCategory.objects.create(
        name='tiles',
        label='Tiles',
        icon_name='grid',
        color='#A47449',
        bg_color='#F5EBE0',
        sort_order=1,
    )


@pytest.fixture
def category_payload():
    return {
        'name': 'Heating Works',
        'label': 'Heating works',
        'icon_name': 'flame',
        'color': '#C0392B',
        'bg_color': '#FDEDEC',
    }


@pytest.fixture
def tag(db):
    return Tag.objects.create(name='urgent', color='#C0392B')
