"""Tests for profile and onboarding endpoints."""
from datetime import date

from sqlalchemy import select

from conftest import auth_headers
from healfit.models.profile import ActivityLevel, FitnessGoal, Gender, Profile, Role
from healfit.services.auth_service import auth_service

SIGNUP = {
    "phone": "+91 91234 56789",
    "username": "ravi",
    "email": "Ravi@Example.com",
    "password": "secret123",
    "fullName": "Ravi Kumar",
}


def _stored(db_session, phone) -> Profile:
    db_session.expire_all()
    return db_session.scalar(select(Profile).where(Profile.phone == phone))


class TestSignup:
    """Tests for creating profiles."""

    def test_create_profile(self, client, db_session):
        response = client.post("/api/profile", json=SIGNUP)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["id"]

        profile = _stored(db_session, "9123456789")
        assert profile.id == data["id"]
        assert profile.email == "ravi@example.com"
        assert profile.role == Role.USER
        # Stored protected, salted and encrypted
        assert profile.password_hash != "secret123"
        assert auth_service.verify_password("secret123", profile.password_hash)
        assert profile.full_name and profile.full_name != "Ravi Kumar"

    def test_client_supplied_id_is_kept(self, client):
        response = client.post("/api/profile", json={**SIGNUP, "id": "user-42"})
        assert response.json()["id"] == "user-42"

    def test_role_cannot_be_chosen(self, client, db_session):
        client.post("/api/profile", json={**SIGNUP, "role": "admin"})
        assert _stored(db_session, "9123456789").role == Role.USER

    def test_password_required(self, client):
        body = {k: v for k, v in SIGNUP.items() if k != "password"}
        response = client.post("/api/profile", json=body)
        assert response.status_code == 400

    def test_invalid_phone(self, client):
        response = client.post("/api/profile", json={**SIGNUP, "phone": "12345"})
        assert response.status_code == 422

    def test_duplicate_username(self, client, member):
        response = client.post("/api/profile", json={**SIGNUP, "username": "member"})
        assert response.status_code == 409
        assert response.json()["detail"] == "Username already taken"

    def test_duplicate_email(self, client, member):
        response = client.post("/api/profile", json={**SIGNUP, "email": "MEMBER@example.com"})
        assert response.status_code == 409

    def test_existing_phone_without_login(self, client, member):
        response = client.post("/api/profile", json={**SIGNUP, "phone": member.phone})
        assert response.status_code == 400
        assert response.json()["detail"] == "Phone number already registered. Please log in."


class TestUpdate:
    """Tests for updating an existing profile."""

    def test_onboarding_update(self, client, member, db_session):
        response = client.post(
            "/api/profile",
            headers=auth_headers(member.phone),
            json={
                "phone": member.phone,
                "gender": "female",
                "dob": "1995-04-12",
                "height": 162,
                "weight": 58.5,
                "activityLevel": "moderate",
                "fitnessGoal": "lose_weight",
                "dietaryPreference": "vegetarian",
                "sleepHours": "6_7",
                "stressLevel": 4,
            },
        )
        assert response.status_code == 200

        profile = _stored(db_session, member.phone)
        assert profile.height == 162
        assert profile.activity_level.value == "moderate"
        # Fields not sent are kept
        assert profile.username == "member"
        assert auth_service.verify_password("secret123", profile.password_hash)

    def test_admin_can_update_anyone(self, client, member, admin, db_session):
        response = client.post(
            "/api/profile",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"phone": member.phone, "city": "Pune"},
        )
        assert response.status_code == 200
        assert _stored(db_session, member.phone).city == "Pune"

    def test_other_member_cannot_update(self, client, member, create_profile):
        other = create_profile("9111111111", username="other")
        response = client.post(
            "/api/profile",
            headers=auth_headers(other.phone),
            json={"phone": member.phone, "city": "Pune"},
        )
        assert response.status_code == 400

    def test_invalid_stress_level(self, client, member):
        response = client.post(
            "/api/profile",
            headers=auth_headers(member.phone),
            json={"phone": member.phone, "stressLevel": 11},
        )
        assert response.status_code == 422


class TestRead:
    """Tests for reading profiles."""

    def test_get_own_profile(self, client, member):
        response = client.get(f"/api/profile/{member.id}", headers=auth_headers(member.phone))

        assert response.status_code == 200
        data = response.json()
        assert data["fullName"] == "Asha Rao"
        assert data["role"] == "user"
        assert "passwordHash" not in data

    def test_get_by_phone_key(self, client, member):
        response = client.get(f"/api/profile/{member.phone}", headers=auth_headers(member.phone))
        assert response.status_code == 200
        assert response.json()["id"] == member.id

    def test_expert_can_read_member(self, client, member, trainer):
        response = client.get(
            f"/api/profile/{member.id}", headers=auth_headers(trainer.phone, Role.TRAINER)
        )
        assert response.status_code == 200

    def test_member_cannot_read_other_member(self, client, member, create_profile):
        other = create_profile("9111111111", username="other")
        response = client.get(f"/api/profile/{member.id}", headers=auth_headers(other.phone))
        assert response.status_code == 403

    def test_not_found(self, client, admin):
        response = client.get("/api/profile/missing", headers=auth_headers(admin.phone, Role.ADMIN))
        assert response.status_code == 404


class TestLookups:
    """Tests for signup lookups."""

    def test_lookup_by_phone(self, client, member):
        response = client.get("/api/profile/phone/+919876543210")
        assert response.status_code == 200
        assert response.json() == {
            "id": member.id,
            "phone": "9876543210",
            "username": "member",
            "role": "user",
        }

    def test_lookup_unknown_phone(self, client):
        response = client.get("/api/profile/phone/9111111111")
        assert response.status_code == 200
        assert response.json() is None

    def test_lookup_by_email(self, client, member):
        response = client.get("/api/profile/email/MEMBER@example.com")
        assert response.json()["phone"] == member.phone

    def test_username_exists(self, client, member):
        assert client.get("/api/profile/username/member").json() == {"exists": True}
        assert client.get("/api/profile/username/nobody").json() == {"exists": False}


class TestCompleteness:
    """Tests for onboarding completeness."""

    def test_incomplete(self, client, member):
        response = client.get(
            f"/api/profile/{member.phone}/completeness", headers=auth_headers(member.phone)
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_complete"] is False
        assert "gender" in data["missing_fields"]
        assert "full_name" not in data["missing_fields"]
        assert data["completion_percent"] == 14  # 1 of 7

    def test_complete(self, client, create_profile):
        profile = create_profile(
            "9222222222",
            full_name="Complete Person",
            gender=Gender.MALE,
            dob=date(1990, 1, 1),
            height=180,
            weight=80,
            activity_level=ActivityLevel.ACTIVE,
            fitness_goal=FitnessGoal.GAIN_MUSCLE,
        )
        response = client.get(
            f"/api/profile/{profile.phone}/completeness", headers=auth_headers(profile.phone)
        )
        assert response.json() == {
            "is_complete": True,
            "missing_fields": [],
            "completion_percent": 100,
        }
