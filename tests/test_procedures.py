import pytest

from garment_erp.core.exceptions import ConflictError, NotFoundError, ValidationFailed
from garment_erp.core.security import verify_password
from garment_erp.data.procedures import (
    PASSWORD_INVALID,
    PASSWORD_SUCCESS,
    PASSWORD_USER_NOT_FOUND,
)
from garment_erp.models.user import User


@pytest.fixture
def login(store, make_employee):
    emp = make_employee("Suresh", role="supervisor")
    return store.rpc("create_employee_user", {
        "employee_id": emp["id"], "email": " Suresh@Factory.test ", "password": "stitch-123",
    })


def test_create_employee_user(db_session, login):
    assert login["email"] == "suresh@factory.test"
    assert login["role"] == "supervisor"
    user = db_session.get(User, login["user_id"])
    assert user.employee_id == login["employee_id"]
    assert verify_password("stitch-123", user.hashed_password)


def test_create_employee_user_rejects_duplicates(store, login):
    with pytest.raises(ConflictError):
        store.rpc("create_employee_user", {
            "employee_id": login["employee_id"], "email": "suresh@factory.test", "password": "another-pass",
        })


def test_create_employee_user_validation(store, make_employee):
    emp = make_employee()
    with pytest.raises(ValidationFailed):
        store.rpc("create_employee_user", {"employee_id": emp["id"], "email": "a@b.test", "password": "short"})
    with pytest.raises(NotFoundError):
        store.rpc("create_employee_user", {"employee_id": "missing", "email": "a@b.test", "password": "long-enough"})


def test_change_password_codes(store, login):
    def change(user_id, current, new="brand-new-pass"):
        return store.rpc("change_user_password", {
            "user_id": user_id, "current_password": current, "new_password": new,
        })

    assert change("missing", "stitch-123") == PASSWORD_USER_NOT_FOUND
    assert change(login["user_id"], "wrong-pass") == PASSWORD_INVALID
    assert change(login["user_id"], "stitch-123") == PASSWORD_SUCCESS
    assert change(login["user_id"], "brand-new-pass", "another-one") == PASSWORD_SUCCESS


def test_change_password_too_short(store, login):
    with pytest.raises(ValidationFailed):
        store.rpc("change_user_password", {
            "user_id": login["user_id"], "current_password": "stitch-123", "new_password": "tiny",
        })
