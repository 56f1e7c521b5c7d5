"""
Classroom operation handlers.

Each handler takes a ``ClassroomClient`` followed by the positional arguments of
the Classroom advanced-service signature it mirrors:

- ``list(courseId, [query])``
- ``get(courseId, id)``
- ``create(resourceBody, courseId)``
- ``remove(courseId, id)``
"""
from __future__ import annotations

import typing as t

from classroom_api.client import ClassroomClient, path_segment


def _course_path(course_id: t.Any, collection: str = "") -> str:
    path = f"/v1/courses/{path_segment(course_id)}"
    if collection:
        path += f"/{collection}"
    return path


# Courses
def list_courses(client: ClassroomClient, query: t.Optional[dict] = None) -> t.Any:
    return client.get("/v1/courses", params=query)


def get_course(client: ClassroomClient, course_id: str) -> t.Any:
    return client.get(_course_path(course_id))


def create_course(client: ClassroomClient, body: dict, course_id: t.Optional[str] = None) -> t.Any:
    # Courses are top-level; the course id slot of the create convention is unused.
    return client.post("/v1/courses", json=body)


def remove_course(client: ClassroomClient, course_id: str) -> t.Any:
    return client.delete(_course_path(course_id))


# Course work
def list_course_work(client: ClassroomClient, course_id: str, query: t.Optional[dict] = None) -> t.Any:
    return client.get(_course_path(course_id, "courseWork"), params=query)


def get_course_work(client: ClassroomClient, course_id: str, course_work_id: str) -> t.Any:
    return client.get(_course_path(course_id, f"courseWork/{path_segment(course_work_id)}"))


def create_course_work(client: ClassroomClient, body: dict, course_id: str) -> t.Any:
    return client.post(_course_path(course_id, "courseWork"), json=body)


def remove_course_work(client: ClassroomClient, course_id: str, course_work_id: str) -> t.Any:
    return client.delete(_course_path(course_id, f"courseWork/{path_segment(course_work_id)}"))


def list_student_submissions(
    client: ClassroomClient,
    course_id: str,
    course_work_id: str,
    query: t.Optional[dict] = None,
) -> t.Any:
    path = _course_path(course_id, f"courseWork/{path_segment(course_work_id)}/studentSubmissions")
    return client.get(path, params=query)


# Students
def list_students(client: ClassroomClient, course_id: str, query: t.Optional[dict] = None) -> t.Any:
    return client.get(_course_path(course_id, "students"), params=query)


def get_student(client: ClassroomClient, course_id: str, user_id: str) -> t.Any:
    return client.get(_course_path(course_id, f"students/{path_segment(user_id)}"))


def create_student(client: ClassroomClient, body: dict, course_id: str) -> t.Any:
    return client.post(_course_path(course_id, "students"), json=body)


def remove_student(client: ClassroomClient, course_id: str, user_id: str) -> t.Any:
    return client.delete(_course_path(course_id, f"students/{path_segment(user_id)}"))


# Teachers
def list_teachers(client: ClassroomClient, course_id: str, query: t.Optional[dict] = None) -> t.Any:
    return client.get(_course_path(course_id, "teachers"), params=query)


def create_teacher(client: ClassroomClient, body: dict, course_id: str) -> t.Any:
    return client.post(_course_path(course_id, "teachers"), json=body)


def remove_teacher(client: ClassroomClient, course_id: str, user_id: str) -> t.Any:
    return client.delete(_course_path(course_id, f"teachers/{path_segment(user_id)}"))


# Announcements
def list_announcements(client: ClassroomClient, course_id: str, query: t.Optional[dict] = None) -> t.Any:
    return client.get(_course_path(course_id, "announcements"), params=query)


def get_announcement(client: ClassroomClient, course_id: str, announcement_id: str) -> t.Any:
    return client.get(_course_path(course_id, f"announcements/{path_segment(announcement_id)}"))


def create_announcement(client: ClassroomClient, body: dict, course_id: str) -> t.Any:
    return client.post(_course_path(course_id, "announcements"), json=body)


def remove_announcement(client: ClassroomClient, course_id: str, announcement_id: str) -> t.Any:
    return client.delete(_course_path(course_id, f"announcements/{path_segment(announcement_id)}"))


# Topics
def list_topics(client: ClassroomClient, course_id: str, query: t.Optional[dict] = None) -> t.Any:
    return client.get(_course_path(course_id, "topics"), params=query)


def create_topic(client: ClassroomClient, body: dict, course_id: str) -> t.Any:
    return client.post(_course_path(course_id, "topics"), json=body)


def remove_topic(client: ClassroomClient, course_id: str, topic_id: str) -> t.Any:
    return client.delete(_course_path(course_id, f"topics/{path_segment(topic_id)}"))
