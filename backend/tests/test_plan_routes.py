"""Tests for plan storage endpoints."""
from sqlalchemy import func, select

from conftest import auth_headers
from healfit.models.plan import DietPlan, PlanNote
from healfit.models.profile import Role

PLAN = [
    {
        "day": 1,
        "meals": [
            {"name": "Breakfast", "time": "08:00", "calories": 420, "items": ["Oats", "Banana"]},
        ],
        "workouts": [{"name": "Squat", "sets": 4, "reps": 8, "workout_id": 3}],
        "physio": [{"name": "Hamstring stretch", "duration_min": 5}],
        "coachTip": "Hydrate well",
    },
    {"day": 2, "meals": [], "workouts": []},
]


class TestSavePlan:
    """Tests for POST /api/plan."""

    def test_member_saves_own_plan(self, client, member, db_session):
        response = client.post(
            "/api/plan",
            headers=auth_headers(member.phone),
            json={"phone": member.phone, "plan": PLAN, "date": "2025-01-10"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["cycle"] == {"index": 0, "start": "2025-01-06", "end": "2025-01-20"}
        assert data["last_modified_at"]

        plan = db_session.scalar(select(DietPlan))
        assert plan.phone == member.phone
        assert plan.last_modified_by == member.phone

    def test_read_back_preserves_unknown_keys(self, client, member):
        headers = auth_headers(member.phone)
        client.post(
            "/api/plan", headers=headers,
            json={"phone": member.phone, "plan": PLAN, "date": "2025-01-10"},
        )

        response = client.get(
            "/api/plan", headers=headers, params={"phone": member.phone, "date": "2025-01-18"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["plan"][0]["coachTip"] == "Hydrate well"
        assert data["plan"][0]["meals"][0]["items"] == ["Oats", "Banana"]
        assert data["plan"][0]["meals"][0]["completed"] is False
        assert data["last_modified_by"] == member.phone

    def test_upsert_replaces_plan_in_same_cycle(self, client, member, db_session):
        headers = auth_headers(member.phone)
        client.post("/api/plan", headers=headers, json={"phone": member.phone, "plan": PLAN, "date": "2025-01-07"})
        client.post(
            "/api/plan", headers=headers,
            json={"phone": member.phone, "plan": PLAN[:1], "date": "2025-01-19"},
        )

        db_session.expire_all()
        assert db_session.scalar(select(func.count(DietPlan.id))) == 1
        assert len(db_session.scalar(select(DietPlan)).plan) == 1

    def test_different_cycles_are_separate(self, client, member):
        headers = auth_headers(member.phone)
        client.post("/api/plan", headers=headers, json={"phone": member.phone, "plan": PLAN, "date": "2025-01-07"})

        response = client.get(
            "/api/plan", headers=headers, params={"phone": member.phone, "date": "2025-01-21"}
        )
        data = response.json()
        assert data["plan"] is None
        assert data["cycle"]["index"] == 1

    def test_expert_note(self, client, member, trainer, db_session):
        response = client.post(
            "/api/plan",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={
                "phone": member.phone,
                "plan": PLAN,
                "date": "2025-01-07",
                "section": "workout",
                "note": "Added squats",
            },
        )
        assert response.status_code == 200

        note = db_session.scalar(select(PlanNote))
        assert note.author_phone == trainer.phone
        assert note.expert == "trainer"
        assert note.section == "workout"

        response = client.get(
            "/api/plan",
            headers=auth_headers(member.phone),
            params={"phone": member.phone, "date": "2025-01-07"},
        )
        data = response.json()
        assert data["last_modified_by"] == trainer.phone
        assert [n["note"] for n in data["notes"]] == ["Added squats"]

    def test_member_cannot_write_other_plan(self, client, member, create_profile):
        other = create_profile("9111111111", username="other")
        response = client.post(
            "/api/plan",
            headers=auth_headers(other.phone),
            json={"phone": member.phone, "plan": PLAN},
        )
        assert response.status_code == 403

    def test_unknown_member(self, client, admin):
        response = client.post(
            "/api/plan",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"phone": "9111111111", "plan": PLAN},
        )
        assert response.status_code == 404

    def test_invalid_day(self, client, member):
        response = client.post(
            "/api/plan",
            headers=auth_headers(member.phone),
            json={"phone": member.phone, "plan": [{"day": 0}]},
        )
        assert response.status_code == 422


class TestGetPlan:
    """Tests for GET /api/plan."""

    def test_empty_plan(self, client, member):
        response = client.get(
            "/api/plan", headers=auth_headers(member.phone), params={"phone": member.phone}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["plan"] is None
        assert data["notes"] == []

    def test_member_cannot_read_other_plan(self, client, member, create_profile):
        other = create_profile("9111111111", username="other")
        response = client.get(
            "/api/plan", headers=auth_headers(other.phone), params={"phone": member.phone}
        )
        assert response.status_code == 403

    def test_invalid_phone(self, client, member):
        response = client.get(
            "/api/plan", headers=auth_headers(member.phone), params={"phone": "123"}
        )
        assert response.status_code == 422
