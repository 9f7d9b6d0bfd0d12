import pytest

from center_attendance.core.exceptions import NotFoundError, ValidationError

ADMIN_ID = 1


def test_create_center_defaults_radius(container, repos):
    center = container.center_service.create_center(
        actor_id=ADMIN_ID,
        data={"name": " Maadi Center ", "latitude": 29.96, "longitude": 31.25},
    )

    assert center.name == "Maadi Center"
    assert center.radius_m == 30
    assert repos.centers.get_by_id(center.center_id) == center
    assert repos.audit.actions() == ["CREATE_CENTER"]


@pytest.mark.parametrize(
    "patch",
    [
        {"name": ""},
        {"latitude": 91},
        {"longitude": "east"},
        {"radius_m": 0},
        {"radius_m": 501},
    ],
)
def test_create_center_validation(container, patch):
    data = {"name": "Maadi Center", "latitude": 29.96, "longitude": 31.25, **patch}

    with pytest.raises(ValidationError):
        container.center_service.create_center(actor_id=ADMIN_ID, data=data)


def test_update_center_keeps_unchanged_fields(container):
    center = container.center_service.update_center(actor_id=ADMIN_ID, center_id=1, data={"radius_m": 50})

    assert center.radius_m == 50
    assert center.name == "Dokki Center"


def test_delete_center_snapshots_then_removes(container, repos):
    container.center_service.delete_center(actor_id=ADMIN_ID, center_id=1, reason="closed")

    assert repos.centers.get_by_id(1) is None
    assert repos.deleted_items.items[0].item_data["name"] == "Dokki Center"

    with pytest.raises(NotFoundError):
        container.center_service.get_center(1)
