"""
Service layer unit tests for homes app.

Tests cover:
- Soft delete of homes and list filtering
- Gallery ordering
- Area delete guard
"""

import pytest
from uuid import uuid4

from apps.homes.models import Area, Home, Room
from apps.homes.services import (
    create_home,
    get_home,
    list_homes,
    update_home,
    soft_delete_home,
    add_home_image,
    list_home_images,
    delete_home_image,
    create_area,
    list_areas,
    can_delete_area,
    delete_area,
    create_room,
    list_rooms,
    delete_room,
)
from apps.homes.services.exceptions import (
    AreaHasRoomsError,
    AreaNotFoundError,
    HomeImageNotFoundError,
    HomeNotFoundError,
    RoomNotFoundError,
)


# =============================================================================
# Home Management
# =============================================================================

@pytest.mark.django_db
class TestHomeManagement:
    """Tests for home_management.py service functions."""

    def test_create_home(self):
        home = create_home(name='Barn', address='Farm lane', unknown='ignored')
        assert home.name == 'Barn'
        assert home.address == 'Farm lane'
        assert home.is_deleted is False

    def test_update_home(self, home):
        updated = update_home(home_id=home.id, data={'name': 'Lake Villa'})
        assert updated.name == 'Lake Villa'

    def test_soft_deleted_home_is_hidden(self, home, other_home):
        """Soft-deleted homes disappear from lists and lookups but stay in storage."""
        soft_delete_home(home_id=home.id)

        assert list(list_homes()) == [other_home]
        with pytest.raises(HomeNotFoundError):
            get_home(home_id=home.id)
        assert Home.objects.filter(id=home.id).exists()

    def test_list_homes_counts_areas(self, home, kitchen):
        Area.objects.create(home=home, name='Attic')
        listed = list_homes().get(id=home.id)
        assert listed.area_count == 2

    def test_list_homes_search(self, home, other_home):
        assert [h.name for h in list_homes(search='city')] == ['City Flat']

    def test_update_deleted_home_not_found(self, home):
        soft_delete_home(home_id=home.id)
        with pytest.raises(HomeNotFoundError):
            update_home(home_id=home.id, data={'name': 'x'})


@pytest.mark.django_db
class TestHomeImages:
    """Tests for the image gallery."""

    def test_images_append_in_order(self, home):
        first = add_home_image(home_id=home.id, url='https://img.example.com/1.jpg')
        second = add_home_image(home_id=home.id, url='https://img.example.com/2.jpg')

        assert first.sort_order == 0
        assert second.sort_order == 1
        assert list(list_home_images(home_id=home.id)) == [first, second]

    def test_delete_image_of_other_home(self, home, other_home):
        image = add_home_image(home_id=home.id, url='https://img.example.com/1.jpg')
        with pytest.raises(HomeImageNotFoundError):
            delete_home_image(home_id=other_home.id, image_id=image.id)

    def test_add_image_to_missing_home(self):
        with pytest.raises(HomeNotFoundError):
            add_home_image(home_id=uuid4(), url='https://img.example.com/1.jpg')


# =============================================================================
# Areas & Rooms
# =============================================================================

@pytest.mark.django_db
class TestAreaManagement:
    """Tests for area_management.py service functions."""

    def test_area_with_room_cannot_be_deleted(self, kitchen, sink):
        """Delete is blocked while a room exists, then succeeds."""
        with pytest.raises(AreaHasRoomsError):
            can_delete_area(area_id=kitchen.id)
        with pytest.raises(AreaHasRoomsError):
            delete_area(area_id=kitchen.id)
        assert Area.objects.filter(id=kitchen.id).exists()

        delete_room(room_id=sink.id)
        delete_area(area_id=kitchen.id)

        assert not Area.objects.filter(id=kitchen.id).exists()

    def test_delete_missing_area(self):
        with pytest.raises(AreaNotFoundError):
            delete_area(area_id=uuid4())

    def test_delete_missing_room(self):
        with pytest.raises(RoomNotFoundError):
            delete_room(room_id=uuid4())

    def test_list_areas_by_home(self, home, other_home, kitchen):
        create_area(name='Garage', home=other_home)
        assert [a.name for a in list_areas(home_id=home.id)] == ['Kitchen']

    def test_areas_of_deleted_home_hidden(self, home, kitchen):
        orphan = create_area(name='Unassigned')
        soft_delete_home(home_id=home.id)

        assert list(list_areas()) == [orphan]

    def test_rooms_filtered_by_area(self, kitchen, sink, counter):
        other = create_area(name='Bath')
        create_room(area=other, name='Shower')

        assert {r.name for r in list_rooms(area_id=kitchen.id)} == {'Sink', 'Counter'}
        assert Room.objects.count() == 3
