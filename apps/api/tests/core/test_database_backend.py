"""
Tests for the SQLAlchemy-backed stores.

Runs the enrollment workflow against a real engine (in-memory SQLite)
instead of mocked sessions. Reads that matter are repeated in a second
session, so relationships are loaded from the database rather than from
the first session's identity map.
"""

import pytest
from sqlalchemy import func, select

from kinderadmin.modules.enrollment.models import Guardian, Student, guardians_students
from kinderadmin.modules.enrollment.schemas import StudentUpdate
from kinderadmin.modules.enrollment.service import (
    GuardianHasStudentsError,
    delete_guardian,
    delete_student,
    update_student,
)
from kinderadmin.modules.student_applications.models import StudentApplication
from kinderadmin.modules.student_applications.schemas import StudentApplicationCreate
from kinderadmin.modules.student_applications.service import (
    accept_application,
    list_applications,
    reject_application,
    submit_application,
)


async def _count(session, table) -> int:
    return (await session.execute(select(func.count()).select_from(table))).scalar_one()


# ============================================
# Decisions
# ============================================


class TestDecisions:
    @pytest.mark.asyncio
    async def test_accept_persists_student_and_guardian(
        self, db_stores, db_session_maker, make_application
    ):
        await db_stores.applications.add(make_application())

        student = await accept_application(db_stores, "app-42")

        assert student.guardians[0].email == "ana.g@test.com"

        async with db_session_maker() as other:
            stored = await other.get(Student, student.id)
            assert stored.full_name == "Ana Ruiz"
            assert stored.allergies == ["maní"]
            assert [g.type_id for g in stored.guardians] == ["2"]
            assert await _count(other, Guardian) == 1
            assert await _count(other, StudentApplication) == 0

        async with db_session_maker() as other:
            guardian = await other.get(Guardian, student.guardians[0].id)
            assert [s.id for s in guardian.students] == [student.id]

    @pytest.mark.asyncio
    async def test_reject_creates_nothing(self, db_stores, db_session_maker, make_application):
        await db_stores.applications.add(make_application())

        rejected = await reject_application(db_stores, "app-42")

        assert rejected.email == "ana.g@test.com"
        async with db_session_maker() as other:
            assert await _count(other, StudentApplication) == 0
            assert await _count(other, Student) == 0
            assert await _count(other, Guardian) == 0

    @pytest.mark.asyncio
    async def test_submitted_applications_listed_oldest_first(self, db_stores, intake_payload):
        first = await submit_application(db_stores, StudentApplicationCreate(**intake_payload))
        intake_payload["student_name"] = "Sara Pérez"
        second = await submit_application(db_stores, StudentApplicationCreate(**intake_payload))

        applications = await list_applications(db_stores)

        assert [app.id for app in applications] == [first.id, second.id]
        assert applications[0].allergies == ["polen", "lactosa"]


class TestDecisionEndpoints:
    @pytest.mark.asyncio
    async def test_accept_endpoint(self, db_client, db_stores, transport, make_application):
        await db_stores.applications.add(make_application())

        res = await db_client.post("/api/v1/admin/student-applications/app-42/accept")

        assert res.status_code == 200
        body = res.json()
        assert body["email"] == "ana.g@test.com"
        assert body["student"]["guardians"][0]["type_id"] == "2"
        assert body["notification"]["sent"] is True
        assert transport.await_args.args[0] == ["ana.g@test.com"]

    @pytest.mark.asyncio
    async def test_reject_endpoint(self, db_client, db_stores, make_application):
        await db_stores.applications.add(make_application())

        res = await db_client.post("/api/v1/admin/student-applications/app-42/reject")
        again = await db_client.post("/api/v1/admin/student-applications/app-42/reject")

        assert res.status_code == 200
        assert res.json()["decision"] == "rejected"
        assert again.status_code == 404


# ============================================
# Notifications
# ============================================


@pytest.mark.asyncio
async def test_all_expands_from_guardian_table(
    db_stores, db_dispatcher, transport, make_guardian
):
    await db_stores.guardians.add(make_guardian("b@test.com", full_name="Beatriz"))
    await db_stores.guardians.add(make_guardian("a@test.com", full_name="Alicia"))
    await db_stores.guardians.add(make_guardian("b@test.com", full_name="Bruno"))

    report = await db_dispatcher.send_notification(["All"], "Reunión", "Mañana")

    assert report.recipients == ["a@test.com", "b@test.com"]
    transport.assert_awaited_once_with(["a@test.com", "b@test.com"], "Reunión", "Mañana")


# ============================================
# Maintenance
# ============================================


class TestMaintenance:
    @pytest.mark.asyncio
    async def test_update_relinks_guardians(
        self, db_stores, db_session_maker, make_application, make_guardian
    ):
        await db_stores.applications.add(make_application())
        student = await accept_application(db_stores, "app-42")
        tutor = await db_stores.guardians.add(make_guardian("tutor@test.com", type_id="3"))

        await update_student(
            db_stores, student.id, StudentUpdate(guardian_ids=[tutor.id], height=110)
        )

        async with db_session_maker() as other:
            stored = await other.get(Student, student.id)
            assert stored.height == 110
            assert [g.email for g in stored.guardians] == ["tutor@test.com"]

    @pytest.mark.asyncio
    async def test_delete_student_then_guardian(
        self, db_stores, db_session_maker, make_application
    ):
        await db_stores.applications.add(make_application())
        student = await accept_application(db_stores, "app-42")
        guardian_id = student.guardians[0].id

        with pytest.raises(GuardianHasStudentsError):
            await delete_guardian(db_stores, guardian_id)

        await delete_student(db_stores, student.id)
        await delete_guardian(db_stores, guardian_id)

        async with db_session_maker() as other:
            assert await _count(other, Student) == 0
            assert await _count(other, Guardian) == 0
            assert await _count(other, guardians_students) == 0
