"""
Mock Classroom service for testing without Google credentials.

This is an in-memory stand-in for the Google Classroom v1 REST API covering the
operations the assistant registers. It returns Classroom-shaped JSON (including
omitting empty collection fields) so the gateway and executor can be exercised
end to end, locally or in tests.
"""
from __future__ import annotations

import itertools
import typing as t
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query

from services.shared.models import (
    Announcement,
    Course,
    CourseWork,
    Name,
    Student,
    StudentSubmission,
    Teacher,
    Topic,
    UserProfile,
)


# In-memory storage, keyed by course id for course-scoped collections
courses: dict[str, dict] = {}
course_work: dict[str, list[dict]] = {}
students: dict[str, list[dict]] = {}
teachers: dict[str, list[dict]] = {}
announcements: dict[str, list[dict]] = {}
topics: dict[str, list[dict]] = {}
submissions: dict[str, list[dict]] = {}

_COLLECTIONS = (course_work, students, teachers, announcements, topics, submissions)
_ids = itertools.count(1000)


def _next_id() -> str:
    return str(next(_ids))


def reset_store() -> None:
    """Remove every course and course-scoped item."""
    courses.clear()
    for collection in _COLLECTIONS:
        collection.clear()


def seed_course(name: str, course_id: t.Optional[str] = None, **fields: t.Any) -> dict:
    """Add a course directly to the store and return it."""
    course = Course(id=course_id or _next_id(), name=name, courseState="ACTIVE", **fields)
    data = course.model_dump(exclude_none=True)
    courses[data["id"]] = data
    for collection in _COLLECTIONS:
        collection.setdefault(data["id"], [])
    return data


def seed_course_work(course_id: str, title: str, **fields: t.Any) -> dict:
    fields.setdefault("state", "PUBLISHED")
    fields.setdefault("workType", "ASSIGNMENT")
    work = CourseWork(id=fields.pop("id", None) or _next_id(), courseId=course_id, title=title, **fields)
    data = work.model_dump(exclude_none=True)
    _items(course_work, course_id).append(data)
    return data


def seed_student(course_id: str, full_name: str, email: t.Optional[str] = None) -> dict:
    data = _person(Student, course_id, full_name, email)
    _items(students, course_id).append(data)
    return data


def seed_submission(course_id: str, course_work_id: str, user_id: str, **fields: t.Any) -> dict:
    submission = StudentSubmission(
        id=_next_id(), courseId=course_id, courseWorkId=course_work_id, userId=user_id, **fields
    )
    data = submission.model_dump(exclude_none=True)
    _items(submissions, course_id).append(data)
    return data


def _person(model: t.Type[t.Union[Student, Teacher]], course_id: str, full_name: str, email: t.Optional[str]) -> dict:
    user_id = _next_id()
    given, _, family = full_name.partition(" ")
    person = model(
        courseId=course_id,
        userId=user_id,
        profile=UserProfile(
            id=user_id,
            name=Name(givenName=given, familyName=family or None, fullName=full_name),
            emailAddress=email,
        ),
    )
    return person.model_dump(exclude_none=True)


def _items(collection: dict[str, list[dict]], course_id: str) -> list[dict]:
    if course_id not in courses:
        raise HTTPException(status_code=404, detail=f"Course {course_id} was not found.")
    return collection.setdefault(course_id, [])


def _find(items: list[dict], key: str, value: str) -> dict:
    for item in items:
        if item.get(key) == value:
            return item
    raise HTTPException(status_code=404, detail="Requested entity was not found.")


def _remove(items: list[dict], key: str, value: str) -> dict:
    items.remove(_find(items, key, value))
    return {}


def _listing(field: str, items: list[dict]) -> dict:
    # Classroom omits the collection field entirely when it is empty
    return {field: items} if items else {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Mock lifespan - no initialization needed."""
    print("🧪 Mock Classroom Service starting - no Google API calls will be made")
    yield
    print("🧪 Mock Classroom Service shutting down")


app = FastAPI(
    title="Mock Classroom Service",
    description="In-memory REST API shaped like Google Classroom v1",
    version="1.0.0-mock",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "mock-classroom-service", "mode": "test"}


# Courses
@app.get("/v1/courses")
async def list_courses() -> dict:
    return _listing("courses", list(courses.values()))


@app.post("/v1/courses")
async def create_course(body: Course) -> dict:
    return seed_course(body.name, **body.model_dump(exclude_none=True, exclude={"id", "name", "courseState"}))


@app.get("/v1/courses/{course_id}")
async def get_course(course_id: str) -> dict:
    if course_id not in courses:
        raise HTTPException(status_code=404, detail=f"Course {course_id} was not found.")
    return courses[course_id]


@app.delete("/v1/courses/{course_id}")
async def delete_course(course_id: str) -> dict:
    if course_id not in courses:
        raise HTTPException(status_code=404, detail=f"Course {course_id} was not found.")
    del courses[course_id]
    for collection in _COLLECTIONS:
        collection.pop(course_id, None)
    return {}


# Course work
@app.get("/v1/courses/{course_id}/courseWork")
async def list_course_work(
    course_id: str,
    courseWorkStates: t.Optional[list[str]] = Query(default=None),
) -> dict:
    # Like Classroom, only published work is listed unless states are requested
    states = set(courseWorkStates or ["PUBLISHED"])
    items = [item for item in _items(course_work, course_id) if item.get("state") in states]
    return _listing("courseWork", items)


@app.post("/v1/courses/{course_id}/courseWork")
async def create_course_work(course_id: str, body: CourseWork) -> dict:
    _items(course_work, course_id)
    fields = body.model_dump(exclude_none=True, exclude={"id", "courseId", "title"})
    fields.setdefault("state", "DRAFT")
    return seed_course_work(course_id, body.title, **fields)


@app.get("/v1/courses/{course_id}/courseWork/{course_work_id}")
async def get_course_work(course_id: str, course_work_id: str) -> dict:
    return _find(_items(course_work, course_id), "id", course_work_id)


@app.delete("/v1/courses/{course_id}/courseWork/{course_work_id}")
async def delete_course_work(course_id: str, course_work_id: str) -> dict:
    return _remove(_items(course_work, course_id), "id", course_work_id)


@app.get("/v1/courses/{course_id}/courseWork/{course_work_id}/studentSubmissions")
async def list_student_submissions(course_id: str, course_work_id: str) -> dict:
    _find(_items(course_work, course_id), "id", course_work_id)
    items = [s for s in _items(submissions, course_id) if s.get("courseWorkId") == course_work_id]
    return _listing("studentSubmissions", items)


# Roster
@app.get("/v1/courses/{course_id}/students")
async def list_students(course_id: str) -> dict:
    return _listing("students", _items(students, course_id))


@app.post("/v1/courses/{course_id}/students")
async def create_student(course_id: str, body: Student) -> dict:
    if not body.userId:
        raise HTTPException(status_code=400, detail="userId is required.")
    data = _person(Student, course_id, body.userId.split("@")[0], body.userId)
    _items(students, course_id).append(data)
    return data


@app.get("/v1/courses/{course_id}/students/{user_id}")
async def get_student(course_id: str, user_id: str) -> dict:
    return _find(_items(students, course_id), "userId", user_id)


@app.delete("/v1/courses/{course_id}/students/{user_id}")
async def delete_student(course_id: str, user_id: str) -> dict:
    return _remove(_items(students, course_id), "userId", user_id)


@app.get("/v1/courses/{course_id}/teachers")
async def list_teachers(course_id: str) -> dict:
    return _listing("teachers", _items(teachers, course_id))


@app.post("/v1/courses/{course_id}/teachers")
async def create_teacher(course_id: str, body: Teacher) -> dict:
    if not body.userId:
        raise HTTPException(status_code=400, detail="userId is required.")
    data = _person(Teacher, course_id, body.userId.split("@")[0], body.userId)
    _items(teachers, course_id).append(data)
    return data


@app.delete("/v1/courses/{course_id}/teachers/{user_id}")
async def delete_teacher(course_id: str, user_id: str) -> dict:
    return _remove(_items(teachers, course_id), "userId", user_id)


# Stream
@app.get("/v1/courses/{course_id}/announcements")
async def list_announcements(course_id: str) -> dict:
    return _listing("announcements", _items(announcements, course_id))


@app.post("/v1/courses/{course_id}/announcements")
async def create_announcement(course_id: str, body: Announcement) -> dict:
    fields = body.model_dump(exclude_none=True, exclude={"id", "courseId"})
    fields.setdefault("state", "DRAFT")
    data = Announcement(id=_next_id(), courseId=course_id, **fields).model_dump(exclude_none=True)
    _items(announcements, course_id).append(data)
    return data


@app.get("/v1/courses/{course_id}/announcements/{announcement_id}")
async def get_announcement(course_id: str, announcement_id: str) -> dict:
    return _find(_items(announcements, course_id), "id", announcement_id)


@app.delete("/v1/courses/{course_id}/announcements/{announcement_id}")
async def delete_announcement(course_id: str, announcement_id: str) -> dict:
    return _remove(_items(announcements, course_id), "id", announcement_id)


@app.get("/v1/courses/{course_id}/topics")
async def list_topics(course_id: str) -> dict:
    return _listing("topic", _items(topics, course_id))


@app.post("/v1/courses/{course_id}/topics")
async def create_topic(course_id: str, body: Topic) -> dict:
    data = Topic(topicId=_next_id(), courseId=course_id, name=body.name).model_dump(exclude_none=True)
    _items(topics, course_id).append(data)
    return data


@app.delete("/v1/courses/{course_id}/topics/{topic_id}")
async def delete_topic(course_id: str, topic_id: str) -> dict:
    return _remove(_items(topics, course_id), "topicId", topic_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8010)
