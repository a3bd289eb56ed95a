import pytest

from import_engine.errors import ConsistencyError, MaterializationError, PersistenceError
from import_engine.indexes import CatalogIndex, build_indexes
from import_engine.row_processor import RowProcessor, validate_row
from import_engine.rows import ImportRow
from tests.fakes import FakeRepository, node


def _processor(repo=None, index=None, **kwargs):
    repo = repo or FakeRepository()
    index = index or build_indexes(repo, "grp")
    return RowProcessor(repo, "grp", index, **kwargs)


# ── Validation ─────────────────────────────────────────────────────────

def test_valid_row_passes():
    assert validate_row(ImportRow(quantity=0, purchase_price=0.0), 1) == (True, "")


def test_every_negative_field_gets_its_own_line():
    row = ImportRow(quantity=-1, purchase_price=-2.0, sold_price=-3.0)
    ok, message = validate_row(row, 7)
    assert not ok
    assert message.splitlines() == [
        "Negative quantity at row 7",
        "Negative purchase price at row 7",
        "Negative sold price at row 7",
    ]


# ── Labels ─────────────────────────────────────────────────────────────

def test_labels_created_once_and_order_kept():
    repo = FakeRepository(labels=[{"id": "l-old", "name": "Tools"}])
    proc = _processor(repo)

    ids = proc.ensure_labels(["Power", "Tools", "Power"])

    assert len(repo.calls_to("create_label")) == 1
    assert ids[1] == "l-old"
    assert ids[0] == ids[2]
    assert proc.index.labels["Power"] == ids[0]


def test_label_create_failure():
    repo = FakeRepository(fail_on={"create_label": 1})
    with pytest.raises(MaterializationError):
        _processor(repo).ensure_labels(["New"])


# ── Locations ──────────────────────────────────────────────────────────

def test_missing_path_created_root_to_leaf_with_parents():
    """A depth-N path with no ancestors creates N nodes, each under the previous."""
    repo = FakeRepository()
    proc = _processor(repo)

    leaf = proc.ensure_location(["House", "Kitchen", "Drawer"])

    creates = repo.calls_to("create_location")
    assert [c[2] for c in creates] == ["House", "Kitchen", "Drawer"]
    house, kitchen, drawer = (repo.locations[i] for i in proc.index.paths.values())
    assert house["parent_id"] is None
    assert kitchen["parent_id"] == house["id"]
    assert drawer["parent_id"] == kitchen["id"]
    assert leaf == drawer["id"]


def test_shared_path_creates_one_chain():
    repo = FakeRepository()
    proc = _processor(repo)

    first = proc.ensure_location(["A", "B"])
    second = proc.ensure_location(["A", "B"])

    assert first == second
    assert len(repo.calls_to("create_location")) == 2


def test_known_path_creates_nothing():
    repo = FakeRepository(tree=[node("a", "A", node("b", "B"))])
    proc = _processor(repo)

    assert proc.ensure_location(["A", "B"]) == "b"
    assert proc.ensure_location(["A"]) == "a"
    assert repo.calls_to("create_location") == []


def test_existing_ancestor_becomes_parent():
    repo = FakeRepository(tree=[node("a", "A")])
    proc = _processor(repo)

    proc.ensure_location(["A", "C", "D"])

    creates = repo.calls_to("create_location")
    assert [(c[2], c[3]) for c in creates] == [
        ("C", "a"),
        ("D", proc.index.paths["A/C"]),
    ]


def test_empty_path_means_no_location():
    repo = FakeRepository()
    assert _processor(repo).ensure_location([]) is None
    assert repo.calls_to("create_location") == []


def test_location_create_failure():
    repo = FakeRepository(fail_on={"create_location": 2})
    proc = _processor(repo)
    with pytest.raises(MaterializationError):
        proc.ensure_location(["A", "B"])
    # the root made it into the index before the failure
    assert "A" in proc.index.paths


class ForgetfulPaths(dict):
    """Path index that silently drops writes for one key."""

    def __init__(self, forget):
        super().__init__()
        self.forget = forget

    def __setitem__(self, key, value):
        if key != self.forget:
            super().__setitem__(key, value)


def test_path_missing_after_walk_is_inconsistent():
    repo = FakeRepository()
    proc = _processor(repo, CatalogIndex(paths=ForgetfulPaths("A/B")))

    with pytest.raises(ConsistencyError):
        proc.ensure_location(["A", "B"])

    assert len(repo.calls_to("create_location")) == 2


# ── Identity / asset IDs ───────────────────────────────────────────────

def test_row_without_ref_is_always_new():
    repo = FakeRepository()
    assert _processor(repo).resolve_identity(ImportRow(import_ref="")) is False
    assert repo.calls_to("item_exists_by_ref") == []


def test_row_with_known_ref_is_existing():
    repo = FakeRepository()
    repo.items["item-x"] = {"id": "item-x", "import_ref": "abc"}
    proc = _processor(repo)
    assert proc.resolve_identity(ImportRow(import_ref="abc")) is True
    assert proc.resolve_identity(ImportRow(import_ref="zzz")) is False


def test_ref_check_failure_is_fatal():
    repo = FakeRepository(fail_on={"item_exists_by_ref": 1})
    with pytest.raises(PersistenceError):
        _processor(repo).resolve_identity(ImportRow(import_ref="abc"))


def test_auto_increment_numbers_unset_rows_in_order():
    proc = _processor(index=CatalogIndex(), high_water=41, auto_increment=True)

    got = [proc.allocate_asset_id(ImportRow(asset_id=a)) for a in (0, 0, 500, 0)]

    assert got == [42, 43, 500, 44]
    assert proc.high_water == 44


def test_without_auto_increment_ids_pass_through():
    proc = _processor(index=CatalogIndex(), high_water=41, auto_increment=False)

    assert proc.allocate_asset_id(ImportRow(asset_id=0)) == 0
    assert proc.allocate_asset_id(ImportRow(asset_id=7)) == 7
    assert proc.high_water == 41
