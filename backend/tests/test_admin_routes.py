"""Tests for the administration endpoints."""
from datetime import date

from sqlalchemy import select

from conftest import auth_headers
from healfit.models.plan import DietPlan
from healfit.models.profile import Profile, Role
from healfit.models.tracking import EntryType, TimeLog
from healfit.models.workout import UserWorkout
from healfit.services.auth_service import auth_service
from healfit.services.field_encryption import get_field_encryption


def _profile(db_session, phone):
    db_session.expire_all()
    return db_session.scalar(select(Profile).where(Profile.phone == phone))


class TestAdminAccess:
    """Tests for admin-only access."""

    def test_member_forbidden(self, client, member):
        response = client.get("/api/admin/users", headers=auth_headers(member.phone))
        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient permissions"

    def test_trainer_forbidden(self, client, trainer):
        response = client.get("/api/admin/users", headers=auth_headers(trainer.phone, Role.TRAINER))
        assert response.status_code == 403

    def test_list_users(self, client, admin, member, trainer):
        response = client.get("/api/admin/users", headers=auth_headers(admin.phone, Role.ADMIN))

        assert response.status_code == 200
        users = response.json()["users"]
        assert [u["username"] for u in users] == ["admin", "coach", "member"]
        assert users[2]["fullName"] == "Asha Rao"


class TestCreateAccounts:
    """Tests for admin account creation."""

    def test_create_user(self, client, admin, db_session):
        response = client.post(
            "/api/admin/create-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={
                "phone": "9111111111",
                "username": "newbie",
                "email": "Newbie@Example.com",
                "password": "welcome123",
                "full_name": "New Bie",
            },
        )

        assert response.status_code == 201
        profile = _profile(db_session, "9111111111")
        assert profile.role == Role.USER
        assert profile.email == "newbie@example.com"
        assert profile.id
        assert auth_service.verify_password("welcome123", profile.password_hash)
        assert get_field_encryption().decrypt(profile.full_name) == "New Bie"

    def test_create_expert(self, client, admin, db_session):
        response = client.post(
            "/api/admin/create-expert",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={
                "phone": "9111111111",
                "username": "physio1",
                "email": "physio@example.com",
                "password": "welcome123",
                "role": "physio",
                "specialty": "Sports rehab",
            },
        )

        assert response.status_code == 201
        profile = _profile(db_session, "9111111111")
        assert profile.role == Role.PHYSIO
        assert profile.specialty == "Sports rehab"

    def test_expert_needs_expert_role(self, client, admin):
        response = client.post(
            "/api/admin/create-expert",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={
                "phone": "9111111111",
                "username": "x",
                "email": "x@example.com",
                "password": "welcome123",
                "role": "user",
                "specialty": "None",
            },
        )
        assert response.status_code == 422

    def test_expert_needs_specialty(self, client, admin):
        response = client.post(
            "/api/admin/create-expert",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={
                "phone": "9111111111",
                "username": "x",
                "email": "x@example.com",
                "password": "welcome123",
            },
        )
        assert response.status_code == 422

    def test_duplicate_phone(self, client, admin, member):
        response = client.post(
            "/api/admin/create-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={
                "phone": member.phone,
                "username": "fresh",
                "email": "fresh@example.com",
                "password": "welcome123",
            },
        )
        assert response.status_code == 409

    def test_duplicate_username(self, client, admin, member):
        response = client.post(
            "/api/admin/create-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={
                "phone": "9111111111",
                "username": "member",
                "email": "fresh@example.com",
                "password": "welcome123",
            },
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Username already taken"

    def test_short_password(self, client, admin):
        response = client.post(
            "/api/admin/create-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={
                "phone": "9111111111",
                "username": "fresh",
                "email": "fresh@example.com",
                "password": "abc",
            },
        )
        assert response.status_code == 422


class TestUpdateUser:
    """Tests for POST /api/admin/update-user."""

    def test_update_fields(self, client, admin, member, db_session):
        response = client.post(
            "/api/admin/update-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"oldPhone": member.phone, "role": "dietitian", "specialty": "Sports nutrition"},
        )

        assert response.status_code == 200
        profile = _profile(db_session, member.phone)
        assert profile.role == Role.DIETITIAN
        assert profile.specialty == "Sports nutrition"
        assert profile.username == "member"

    def test_null_role_rejected(self, client, admin, member):
        response = client.post(
            "/api/admin/update-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"oldPhone": member.phone, "role": None},
        )
        assert response.status_code == 422

    def test_change_phone_rekeys_related_rows(self, client, admin, member, trainer, create_workout, db_session):
        workout = create_workout()
        db_session.add_all(
            [
                UserWorkout(user_phone=member.phone, workout_id=workout.id, assigned_by=trainer.phone),
                DietPlan(
                    phone=member.phone,
                    cycle_start=date(2025, 1, 6),
                    plan=[],
                    last_modified_by=member.phone,
                ),
                TimeLog(user_phone=member.phone, role="user", type=EntryType.IN),
            ]
        )
        db_session.commit()

        response = client.post(
            "/api/admin/update-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"oldPhone": member.phone, "phone": "+91 91111 11111"},
        )

        assert response.status_code == 200
        assert _profile(db_session, "9876543210") is None
        assert _profile(db_session, "9111111111").username == "member"
        assert db_session.scalar(select(UserWorkout.user_phone)) == "9111111111"
        assert db_session.scalar(select(DietPlan.phone)) == "9111111111"
        assert db_session.scalar(select(DietPlan.last_modified_by)) == "9111111111"
        assert db_session.scalar(select(TimeLog.user_phone)) == "9111111111"

    def test_change_phone_to_taken_number(self, client, admin, member, trainer):
        response = client.post(
            "/api/admin/update-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"oldPhone": member.phone, "phone": trainer.phone},
        )
        assert response.status_code == 409

    def test_assign_trainer_via_update(self, client, admin, member, trainer, db_session):
        response = client.post(
            "/api/admin/update-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"oldPhone": member.phone, "trainerPhone": trainer.phone},
        )
        assert response.status_code == 200
        assert _profile(db_session, member.phone).trainer_phone == trainer.phone

    def test_trainer_must_be_trainer(self, client, admin, member, create_profile):
        other = create_profile("9111111111", username="other")
        response = client.post(
            "/api/admin/update-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"oldPhone": member.phone, "trainerPhone": other.phone},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Selected profile is not a trainer"

    def test_unknown_profile(self, client, admin):
        response = client.post(
            "/api/admin/update-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"oldPhone": "9111111111", "city": "Pune"},
        )
        assert response.status_code == 404


class TestDeleteUser:
    """Tests for POST /api/admin/delete-user."""

    def test_delete_with_data(self, client, admin, member, trainer, create_workout, db_session):
        workout = create_workout()
        member.trainer_phone = trainer.phone
        db_session.add_all(
            [
                UserWorkout(user_phone=member.phone, workout_id=workout.id),
                DietPlan(phone=member.phone, cycle_start=date(2025, 1, 6), plan=[]),
            ]
        )
        db_session.commit()

        response = client.post(
            "/api/admin/delete-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"phone": member.phone},
        )

        assert response.status_code == 200
        assert _profile(db_session, member.phone) is None
        assert db_session.scalar(select(UserWorkout)) is None
        assert db_session.scalar(select(DietPlan)) is None

    def test_deleting_trainer_clears_members(self, client, admin, member, trainer, db_session):
        member.trainer_phone = trainer.phone
        db_session.commit()

        client.post(
            "/api/admin/delete-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"phone": trainer.phone},
        )

        assert _profile(db_session, member.phone).trainer_phone is None

    def test_cannot_delete_self(self, client, admin):
        response = client.post(
            "/api/admin/delete-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"phone": admin.phone},
        )
        assert response.status_code == 400

    def test_unknown(self, client, admin):
        response = client.post(
            "/api/admin/delete-user",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"phone": "9111111111"},
        )
        assert response.status_code == 404


class TestAssignTrainer:
    """Tests for POST /api/admin/assign-trainer."""

    def test_assign_and_clear(self, client, admin, member, trainer, db_session):
        headers = auth_headers(admin.phone, Role.ADMIN)

        response = client.post(
            "/api/admin/assign-trainer",
            headers=headers,
            json={"userPhone": member.phone, "trainerPhone": trainer.phone},
        )
        assert response.status_code == 200
        assert _profile(db_session, member.phone).trainer_phone == trainer.phone

        client.post(
            "/api/admin/assign-trainer",
            headers=headers,
            json={"userPhone": member.phone, "trainerPhone": ""},
        )
        assert _profile(db_session, member.phone).trainer_phone is None

    def test_non_trainer_rejected(self, client, admin, member):
        response = client.post(
            "/api/admin/assign-trainer",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"userPhone": member.phone, "trainerPhone": admin.phone},
        )
        assert response.status_code == 400
