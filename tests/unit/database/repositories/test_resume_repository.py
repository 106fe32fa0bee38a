"""Tests for ResumeRepository and ProfileRepository on in-memory SQLite."""
import datetime

import pytest
from sqlalchemy import func, select

from database.models import ProfileEducation, ProfileExperience, ProfileSkill, ResumeDocument
from database.uow import resume_uow

pytestmark = pytest.mark.db

PARSED = {
    "personalInfo": {"name": "Jane Smith"},
    "education": [{"degree": "BSc", "institution": "MIT", "year": "2016", "gpa": "", "details": ""}],
    "experience": [
        {"title": "Engineer", "company": "Acme", "duration": "2020 - 2022", "description": ""},
        {"title": "Intern", "company": "Initech", "duration": "2019", "description": ""},
    ],
    "skills": {"technical": ["python", "sql"], "soft": ["leadership"], "tools": []},
}

METADATA = {
    "fileSize": 120,
    "contentType": "text/plain",
    "processingMethod": "basic-fallback",
    "confidence": 0.7,
}


def _create(store, resume_id, user_id="user-1", uploaded_at=None):
    document = store.resumes.create(
        resume_id=resume_id,
        user_id=user_id,
        file_name="resume.txt",
        storage_path=f"resumes/{user_id}/{resume_id}/resume.txt",
        file_url=f"file:///tmp/{resume_id}",
        parsed_data=PARSED,
        metadata=METADATA,
    )
    if uploaded_at is not None:
        document.uploaded_at = uploaded_at
        store.resumes.flush()
    return document


def _count(database, model):
    with resume_uow(database) as store:
        return store.db.execute(select(func.count()).select_from(model)).scalar_one()


class TestResumeRepository:

    def test_create_and_get(self, database):
        with resume_uow(database) as store:
            _create(store, "r1")

        with resume_uow(database) as store:
            document = store.resumes.get_by_id("r1")
            assert document is not None
            assert document.processing_method == "basic-fallback"
            assert document.confidence == 0.7
            assert document.status == "processed"

            data = document.to_dict()
            assert data["userId"] == "user-1"
            assert data["parsedData"]["personalInfo"]["name"] == "Jane Smith"
            assert data["metadata"]["fileSize"] == 120
            assert data["uploadedAt"] is not None

    def test_get_missing(self, database):
        with resume_uow(database) as store:
            assert store.resumes.get_by_id("missing") is None
            assert store.resumes.get_latest_for_user("nobody") is None

    def test_latest_and_list_order(self, database):
        base = datetime.datetime(2026, 1, 1, tzinfo=datetime.timezone.utc)
        with resume_uow(database) as store:
            _create(store, "old", uploaded_at=base)
            _create(store, "new", uploaded_at=base + datetime.timedelta(days=2))
            _create(store, "mid", uploaded_at=base + datetime.timedelta(days=1))
            _create(store, "someone-else", user_id="user-2", uploaded_at=base + datetime.timedelta(days=5))

        with resume_uow(database) as store:
            assert store.resumes.get_latest_for_user("user-1").id == "new"
            assert [d.id for d in store.resumes.list_for_user("user-1")] == ["new", "mid", "old"]
            assert [d.id for d in store.resumes.list_for_user("user-1", limit=2)] == ["new", "mid"]

    def test_delete(self, database):
        with resume_uow(database) as store:
            _create(store, "r1")

        with resume_uow(database) as store:
            assert store.resumes.delete("r1") is True
            assert store.resumes.delete("r1") is False

        assert _count(database, ResumeDocument) == 0

    def test_rollback_on_error(self, database):
        with pytest.raises(RuntimeError):
            with resume_uow(database) as store:
                _create(store, "r1")
                raise RuntimeError("boom")

        assert _count(database, ResumeDocument) == 0


class TestProfileRepository:

    def test_replace_for_resume_writes_rows(self, database):
        with resume_uow(database) as store:
            rows = store.profile.replace_for_resume("user-1", "r1", PARSED)

        # 1 education + 2 experience + 3 skills
        assert rows == 6
        assert _count(database, ProfileEducation) == 1
        assert _count(database, ProfileExperience) == 2
        assert _count(database, ProfileSkill) == 3

        with resume_uow(database) as store:
            experience = store.db.execute(
                select(ProfileExperience).order_by(ProfileExperience.position)
            ).scalars().all()
            assert [e.company for e in experience] == ["Acme", "Initech"]

    def test_replace_is_idempotent(self, database):
        with resume_uow(database) as store:
            store.profile.replace_for_resume("user-1", "r1", PARSED)
        with resume_uow(database) as store:
            store.profile.replace_for_resume("user-1", "r1", PARSED)

        assert _count(database, ProfileSkill) == 3

    def test_delete_for_resume_only_touches_that_resume(self, database):
        with resume_uow(database) as store:
            store.profile.replace_for_resume("user-1", "r1", PARSED)
            store.profile.replace_for_resume("user-1", "r2", PARSED)

        with resume_uow(database) as store:
            store.profile.delete_for_resume("r1")

        assert _count(database, ProfileExperience) == 2
        assert _count(database, ProfileSkill) == 3

    def test_empty_document(self, database):
        with resume_uow(database) as store:
            assert store.profile.replace_for_resume("user-1", "r1", {}) == 0

    def test_list_for_user(self, database):
        with resume_uow(database) as store:
            store.profile.replace_for_resume("user-1", "r1", PARSED)
            store.profile.replace_for_resume("user-2", "r2", PARSED)

        with resume_uow(database) as store:
            profile = store.profile.list_for_user("user-1")

        assert [e["company"] for e in profile["experiences"]] == ["Acme", "Initech"]
        assert profile["educations"] == [{
            "resumeId": "r1", "degree": "BSc", "institution": "MIT", "year": "2016", "gpa": "", "details": "",
        }]
        assert [(s["category"], s["name"]) for s in profile["skills"]] == [
            ("technical", "python"), ("technical", "sql"), ("soft", "leadership"),
        ]

    def test_list_for_user_filters_by_resume(self, database):
        with resume_uow(database) as store:
            store.profile.replace_for_resume("user-1", "r1", PARSED)
            store.profile.replace_for_resume("user-1", "r2", {"skills": {"tools": ["git"]}})

        with resume_uow(database) as store:
            profile = store.profile.list_for_user("user-1", resume_id="r2")

        assert profile == {
            "educations": [],
            "experiences": [],
            "skills": [{"resumeId": "r2", "category": "tools", "name": "git"}],
        }

    def test_list_for_unknown_user(self, database):
        with resume_uow(database) as store:
            assert store.profile.list_for_user("nobody") == {"educations": [], "experiences": [], "skills": []}
