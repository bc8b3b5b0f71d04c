"""Tests for the workout library and trainer assignment endpoints."""
from sqlalchemy import func, select

from conftest import auth_headers
from healfit.models.profile import Role
from healfit.models.workout import UserWorkout, Workout


class TestWorkoutLibrary:
    """Tests for workout CRUD."""

    def test_trainer_creates_workout(self, client, trainer, db_session):
        response = client.post(
            "/api/workouts",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={
                "name": "Deadlift",
                "type": "strength",
                "sets": 3,
                "reps": 5,
                "muscle_group": "back,hamstrings",
                "goal": "gain_muscle",
                "level": "intermediate",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert db_session.get(Workout, data["id"]).name == "Deadlift"

    def test_member_cannot_create(self, client, member):
        response = client.post(
            "/api/workouts", headers=auth_headers(member.phone), json={"name": "Deadlift"}
        )
        assert response.status_code == 403

    def test_list_with_filters(self, client, member, create_workout):
        create_workout("Bench Press", muscle_group="chest, triceps", goal="gain_muscle", level="beginner")
        create_workout("Push Up", muscle_group="chest", goal="improve_fitness", level="beginner")
        create_workout("Row", muscle_group="back", goal="gain_muscle", level="advanced")
        headers = auth_headers(member.phone)

        names = lambda r: [w["name"] for w in r.json()["workouts"]]  # noqa: E731

        assert names(client.get("/api/workouts", headers=headers)) == ["Bench Press", "Push Up", "Row"]
        assert names(client.get("/api/workouts", headers=headers, params={"muscle": "Triceps"})) == [
            "Bench Press"
        ]
        assert names(client.get("/api/workouts", headers=headers, params={"goal": "gain_muscle"})) == [
            "Bench Press",
            "Row",
        ]
        assert names(
            client.get("/api/workouts", headers=headers, params={"muscle": "chest", "level": "beginner"})
        ) == ["Bench Press", "Push Up"]

    def test_tag_filter_matches_whole_entries(self, client, member, create_workout):
        create_workout("Calf Raise", muscle_group="calves")
        response = client.get(
            "/api/workouts", headers=auth_headers(member.phone), params={"muscle": "calf"}
        )
        assert response.json()["workouts"] == []

    def test_update(self, client, trainer, create_workout, db_session):
        workout = create_workout("Bench Press", sets=3)
        response = client.put(
            f"/api/workouts/{workout.id}",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={"sets": 5},
        )

        assert response.status_code == 200
        db_session.expire_all()
        updated = db_session.get(Workout, workout.id)
        assert updated.sets == 5
        assert updated.name == "Bench Press"

    def test_null_name_rejected(self, client, trainer, create_workout):
        workout = create_workout("Bench Press")
        response = client.put(
            f"/api/workouts/{workout.id}",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={"name": None},
        )
        assert response.status_code == 422

    def test_update_unknown(self, client, trainer):
        response = client.put(
            "/api/workouts/999", headers=auth_headers(trainer.phone, Role.TRAINER), json={"sets": 5}
        )
        assert response.status_code == 404

    def test_delete_removes_assignments(self, client, trainer, member, create_workout, db_session):
        workout = create_workout()
        db_session.add(UserWorkout(user_phone=member.phone, workout_id=workout.id))
        db_session.commit()

        response = client.delete(
            f"/api/workouts/{workout.id}", headers=auth_headers(trainer.phone, Role.TRAINER)
        )

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.scalar(select(func.count(Workout.id))) == 0
        assert db_session.scalar(select(func.count(UserWorkout.id))) == 0


class TestAssignments:
    """Tests for trainer workout assignments."""

    def test_bulk_assign(self, client, trainer, member, create_profile, create_workout, db_session):
        other = create_profile("9111111111", username="other")
        first = create_workout("Squat")
        second = create_workout("Lunge")

        response = client.post(
            "/api/trainer/assign-workout-bulk",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={"user_ids": [member.phone, other.phone], "workout_id": [first.id, second.id]},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "assigned": 4}
        rows = db_session.scalars(select(UserWorkout)).all()
        assert len(rows) == 4
        assert {r.assigned_by for r in rows} == {trainer.phone}

    def test_reassign_refreshes_existing_row(self, client, trainer, admin, member, create_workout, db_session):
        workout = create_workout("Squat")
        client.post(
            "/api/trainer/assign-workout-bulk",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={"user_ids": [member.phone], "workout_id": workout.id},
        )
        client.post(
            "/api/trainer/assign-workout-bulk",
            headers=auth_headers(admin.phone, Role.ADMIN),
            json={"user_ids": [member.phone], "workout_id": workout.id},
        )

        db_session.expire_all()
        rows = db_session.scalars(select(UserWorkout)).all()
        assert len(rows) == 1
        assert rows[0].assigned_by == admin.phone

    def test_unknown_workout(self, client, trainer, member):
        response = client.post(
            "/api/trainer/assign-workout-bulk",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={"user_ids": [member.phone], "workout_id": 999},
        )
        assert response.status_code == 404

    def test_unknown_user(self, client, trainer, create_workout):
        workout = create_workout()
        response = client.post(
            "/api/trainer/assign-workout-bulk",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={"user_ids": ["9111111111"], "workout_id": workout.id},
        )
        assert response.status_code == 404

    def test_member_cannot_assign(self, client, member, create_workout):
        workout = create_workout()
        response = client.post(
            "/api/trainer/assign-workout-bulk",
            headers=auth_headers(member.phone),
            json={"user_ids": [member.phone], "workout_id": workout.id},
        )
        assert response.status_code == 403

    def test_user_workouts(self, client, trainer, member, create_workout):
        workout = create_workout("Squat", sets=4, reps=8)
        client.post(
            "/api/trainer/assign-workout-bulk",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            json={"user_ids": [member.phone], "workout_id": workout.id},
        )

        response = client.get(
            "/api/trainer/user-workouts",
            headers=auth_headers(member.phone),
            params={"user_id": member.phone},
        )

        assert response.status_code == 200
        [assigned] = response.json()["workouts"]
        assert assigned["name"] == "Squat"
        assert assigned["sets"] == 4
        assert assigned["assigned_by"] == trainer.phone
        assert assigned["assigned_at"]


class TestTrainerViews:
    """Tests for trainer member lists and expert profile view."""

    def test_assigned_users(self, client, trainer, create_profile):
        create_profile("9111111111", username="mine", trainer_phone=trainer.phone)
        create_profile("9222222222", username="not-mine")

        response = client.get(
            "/api/trainer/assigned-users",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            params={"trainerPhone": trainer.phone},
        )

        assert response.status_code == 200
        assert [u["username"] for u in response.json()["users"]] == ["mine"]

    def test_trainer_cannot_list_other_trainer(self, client, trainer, create_profile):
        other = create_profile("9333333333", role=Role.TRAINER, username="coach2")
        response = client.get(
            "/api/trainer/assigned-users",
            headers=auth_headers(trainer.phone, Role.TRAINER),
            params={"trainerPhone": other.phone},
        )
        assert response.status_code == 403

    def test_expert_user_view(self, client, trainer, member):
        response = client.get(
            f"/api/experts/user/{member.phone}", headers=auth_headers(trainer.phone, Role.TRAINER)
        )
        assert response.status_code == 200
        assert response.json()["fullName"] == "Asha Rao"

    def test_member_cannot_use_expert_view(self, client, member):
        response = client.get(
            f"/api/experts/user/{member.phone}", headers=auth_headers(member.phone)
        )
        assert response.status_code == 403
