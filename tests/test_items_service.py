import pytest

from services.groups_service import GroupsService
from services.items_service import ItemsService
from services.locations_service import LocationsService
from services.repository import SqlCatalogRepository
from services.sequence_service import format_asset_id, highest_asset_id
from tests.factories import GroupFactory, ItemFactory, LabelFactory, LocationFactory


def test_highest_asset_id_is_per_group(session, group):
    other = GroupFactory()
    ItemFactory(group_id=group.id, asset_id=3)
    ItemFactory(group_id=other.id, asset_id=90)

    assert highest_asset_id(session, group.id) == 3
    assert highest_asset_id(session, GroupFactory().id) == 0


def test_format_asset_id():
    assert format_asset_id(12) == "000-012"
    assert format_asset_id(123456) == "123-456"


def test_create_with_asset_id(session, group):
    ItemFactory(group_id=group.id, asset_id=5)

    numbered = ItemsService.create_with_asset_id(session, group.id, {"name": "A"}, True)
    plain = ItemsService.create_with_asset_id(session, group.id, {"name": "B"}, False)

    assert numbered.asset_id == 6
    assert plain.asset_id == 0


def test_ensure_asset_ids_numbers_unset_items(session, group):
    ItemFactory(group_id=group.id, asset_id=4)
    ItemFactory(group_id=group.id, asset_id=0)
    ItemFactory(group_id=group.id, asset_id=0)

    assert ItemsService.ensure_asset_ids(session, group.id) == 2
    session.commit()

    ids = sorted(i.asset_id for i in ItemsService.get_all(session, group.id))
    assert ids == [4, 5, 6]
    assert ItemsService.ensure_asset_ids(session, group.id) == 0


def test_ensure_import_refs(session, group):
    ItemFactory(group_id=group.id, import_ref="keep-me")
    ItemFactory(group_id=group.id, import_ref="")

    assert ItemsService.ensure_import_refs(session, group.id) == 1

    refs = [i.import_ref for i in ItemsService.get_all(session, group.id)]
    assert "keep-me" in refs
    (fresh,) = [r for r in refs if r != "keep-me"]
    assert len(fresh) == 8


def test_update_rewrites_everything(session, group):
    loc = LocationFactory(group_id=group.id)
    tag = LabelFactory(group_id=group.id)
    item = ItemFactory(group_id=group.id, manufacturer="Old Co", notes="old")

    ItemsService.update(session, group.id, {
        "id": item.id,
        "name": "Renamed",
        "location_id": loc.id,
        "label_ids": [tag.id, tag.id],
        "fields": [{"name": "Size", "text_value": "L"}],
    })

    assert item.name == "Renamed"
    assert item.manufacturer == ""
    assert item.notes == ""
    assert item.quantity == 1
    assert item.location_id == loc.id
    assert [l.id for l in item.labels] == [tag.id]
    assert [(f.name, f.type, f.text_value) for f in item.fields] == [("Size", "text", "L")]


def test_update_unknown_item(session, group):
    with pytest.raises(LookupError):
        ItemsService.update(session, group.id, {"id": "missing"})


def test_get_by_ref_unknown(session, group):
    with pytest.raises(LookupError):
        ItemsService.get_by_ref(session, group.id, "nope")


def test_location_parent_must_share_group(session, group):
    foreign = LocationFactory(group_id=GroupFactory().id)
    with pytest.raises(ValueError):
        LocationsService.create(session, group.id, "Child", foreign.id)


def test_repository_round_trip(session, group):
    repo = SqlCatalogRepository(session)

    root = repo.create_location(group.id, "Basement")
    repo.create_location(group.id, "Rack", root["id"])
    label = repo.create_label(group.id, "Spare")
    item = repo.create_item(group.id, {"name": "Fuse", "import_ref": "f-1",
                                       "location_id": root["id"], "label_ids": [label["id"]]})

    assert repo.get_location_tree(group.id)[0]["children"][0]["name"] == "Rack"
    assert repo.get_all_labels(group.id) == [label]
    assert repo.item_exists_by_ref(group.id, "f-1") is True
    assert repo.item_exists_by_ref(group.id, "f-2") is False
    assert repo.get_item_by_ref(group.id, "f-1")["id"] == item["id"]
    assert item["labels"] == ["Spare"]


def test_group_get_or_create(session):
    first = GroupsService.get_or_create(session, " lab ")
    again = GroupsService.get_or_create(session, "lab")
    assert first.id == again.id
    with pytest.raises(ValueError):
        GroupsService.get_or_create(session, "  ")
