import pytest

from errors import ActivityNotFoundError
from models import ActivityIn


def _create(svc, **fields):
    return svc.create_activity(ActivityIn.model_validate(fields))


def test_create_assigns_server_fields(svc):
    a = _create(svc, description="walk")
    assert a.id
    assert a.is_synced is True
    assert a.created_at.endswith("Z")
    assert a.updated_at is None


def test_create_generates_unique_ids(svc):
    ids = {_create(svc).id for _ in range(20)}
    assert len(ids) == 20


def test_create_reuses_client_id(svc):
    assert _create(svc, id="local-42").id == "local-42"


def test_create_ignores_empty_client_id(svc):
    assert _create(svc, id="").id != ""


def test_create_overrides_client_sync_flag(svc):
    assert _create(svc, isSynced=False).is_synced is True


def test_create_with_existing_id_replaces(svc):
    _create(svc, id="dup", description="first")
    _create(svc, id="other")
    _create(svc, id="dup", description="second")
    assert [a.id for a in svc.repo.all()] == ["dup", "other"]
    assert svc.get_activity("dup").description == "second"


def test_get_missing_raises(svc):
    with pytest.raises(ActivityNotFoundError):
        svc.get_activity("missing")


def test_list_sorts_newest_first(svc, central_park, gym):
    _create(svc, **central_park)
    _create(svc, **gym)
    _create(svc, description="Lunch", timestamp="2024-01-01T12:00:00Z")
    assert [a.description for a in svc.list_activities()] == [
        "Gym session",
        "Lunch",
        "Morning run in Central Park",
    ]


def test_list_puts_undated_last_in_insertion_order(svc, central_park):
    _create(svc, description="no time 1")
    _create(svc, **central_park)
    _create(svc, description="bad time", timestamp="yesterday-ish")
    assert [a.description for a in svc.list_activities()] == [
        "Morning run in Central Park",
        "no time 1",
        "bad time",
    ]


def test_list_search_matches_description_or_address(svc, central_park, gym):
    _create(svc, **central_park)
    _create(svc, **gym)
    _create(svc, location={"address": "Riverside PARK"}, timestamp="2023-12-31T00:00:00Z")
    _create(svc, photoUri="p.jpg")
    found = svc.list_activities("park")
    assert [a.description for a in found] == ["Morning run in Central Park", None]
    assert found[1].location["address"] == "Riverside PARK"


def test_list_empty_search_means_no_filter(svc, central_park, gym):
    _create(svc, **central_park)
    _create(svc, **gym)
    assert len(svc.list_activities("")) == 2


def test_update_shallow_merges(svc):
    a = _create(svc, description="walk", location={"address": "Main St", "latitude": 1.0}, mood="ok")
    updated = svc.update_activity(a.id, ActivityIn.model_validate({
        "description": "long walk",
        "location": {"address": "Elm St"},
    }))
    out = updated.to_json()
    assert out["description"] == "long walk"
    assert out["location"] == {"address": "Elm St"}
    assert out["mood"] == "ok"
    assert out["createdAt"] == a.created_at
    assert out["updatedAt"].endswith("Z")
    assert svc.get_activity(a.id).description == "long walk"


def test_update_cannot_change_id(svc):
    a = _create(svc)
    updated = svc.update_activity(a.id, ActivityIn.model_validate({"id": "hijack"}))
    assert updated.id == a.id
    assert svc.repo.get("hijack") is None


def test_update_resorts_on_new_timestamp(svc, central_park, gym):
    park = _create(svc, **central_park)
    _create(svc, **gym)
    svc.update_activity(park.id, ActivityIn.model_validate({"timestamp": "2024-02-01T00:00:00Z"}))
    assert svc.list_activities()[0].id == park.id


def test_update_missing_leaves_store_unchanged(svc):
    a = _create(svc, description="walk")
    before = [x.to_json() for x in svc.repo.all()]
    with pytest.raises(ActivityNotFoundError):
        svc.update_activity("missing", ActivityIn.model_validate({"description": "x"}))
    assert [x.to_json() for x in svc.repo.all()] == before
    assert svc.get_activity(a.id).description == "walk"


def test_delete_removes_only_that_record(svc):
    a = _create(svc)
    b = _create(svc)
    svc.delete_activity(a.id)
    assert [x.id for x in svc.repo.all()] == [b.id]
    with pytest.raises(ActivityNotFoundError):
        svc.delete_activity(a.id)
