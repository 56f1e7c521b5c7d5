# -*- coding: utf-8 -*-
"""Registry of the Classroom operations the assistant may invoke.

Operations are keyed by ``(resource, method)``, where ``resource`` is a dotted
path such as ``Courses.CourseWork``. Anything not registered here is rejected
by the gateway before a request is made.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass

from pydantic import BaseModel

from classroom_api import operations as ops
from services.shared import models


@dataclass(frozen=True)
class Operation:
    """A callable Classroom operation and how to read its response."""
    resource: str
    method: str
    handler: t.Callable[..., t.Any]
    params: str
    description: str
    response_model: t.Optional[type[BaseModel]] = None
    collection_field: t.Optional[str] = None


_OPERATIONS = [
    # Courses
    Operation("Courses", "list", ops.list_courses, "[query]",
              "List courses visible to the user.",
              models.ListCoursesResponse, "courses"),
    Operation("Courses", "get", ops.get_course, "[courseId]", "Get one course."),
    Operation("Courses", "create", ops.create_course, "[courseId, courseBody]",
              "Create a course (courseId slot is ignored)."),
    Operation("Courses", "remove", ops.remove_course, "[courseId]", "Delete a course."),
    # Course work
    Operation("Courses.CourseWork", "list", ops.list_course_work, "[courseId, query]",
              "List assignments and questions in the course.",
              models.ListCourseWorkResponse, "courseWork"),
    Operation("Courses.CourseWork", "get", ops.get_course_work, "[courseId, courseWorkId]",
              "Get one assignment or question."),
    Operation("Courses.CourseWork", "create", ops.create_course_work, "[courseId, courseWorkBody]",
              "Create an assignment or question."),
    Operation("Courses.CourseWork", "remove", ops.remove_course_work, "[courseId, courseWorkId]",
              "Delete an assignment or question."),
    Operation("Courses.CourseWork.StudentSubmissions", "list", ops.list_student_submissions,
              "[courseId, courseWorkId, query]", "List student submissions for one assignment.",
              models.ListStudentSubmissionsResponse, "studentSubmissions"),
    # Roster
    Operation("Courses.Students", "list", ops.list_students, "[courseId, query]",
              "List students enrolled in the course.",
              models.ListStudentsResponse, "students"),
    Operation("Courses.Students", "get", ops.get_student, "[courseId, userId]", "Get one student."),
    Operation("Courses.Students", "create", ops.create_student, "[courseId, {\"userId\": email}]",
              "Enroll a student by email or user id."),
    Operation("Courses.Students", "remove", ops.remove_student, "[courseId, userId]",
              "Remove a student from the course."),
    Operation("Courses.Teachers", "list", ops.list_teachers, "[courseId, query]",
              "List teachers of the course.",
              models.ListTeachersResponse, "teachers"),
    Operation("Courses.Teachers", "create", ops.create_teacher, "[courseId, {\"userId\": email}]",
              "Add a teacher by email or user id."),
    Operation("Courses.Teachers", "remove", ops.remove_teacher, "[courseId, userId]",
              "Remove a teacher from the course."),
    # Stream
    Operation("Courses.Announcements", "list", ops.list_announcements, "[courseId, query]",
              "List announcements in the course.",
              models.ListAnnouncementsResponse, "announcements"),
    Operation("Courses.Announcements", "get", ops.get_announcement, "[courseId, announcementId]",
              "Get one announcement."),
    Operation("Courses.Announcements", "create", ops.create_announcement,
              "[courseId, announcementBody]", "Create an announcement."),
    Operation("Courses.Announcements", "remove", ops.remove_announcement,
              "[courseId, announcementId]", "Delete an announcement."),
    Operation("Courses.Topics", "list", ops.list_topics, "[courseId, query]",
              "List topics in the course.",
              models.ListTopicResponse, "topic"),
    Operation("Courses.Topics", "create", ops.create_topic, "[courseId, {\"name\": title}]",
              "Create a topic."),
    Operation("Courses.Topics", "remove", ops.remove_topic, "[courseId, topicId]", "Delete a topic."),
]

# Operation registry mapping (resource, method) to its handler
OPERATION_REGISTRY: dict[tuple[str, str], Operation] = {
    (op.resource, op.method): op for op in _OPERATIONS
}


def get_operation(
    resource: str,
    method: str,
    registry: t.Optional[dict[tuple[str, str], Operation]] = None,
) -> t.Optional[Operation]:
    registry = OPERATION_REGISTRY if registry is None else registry
    return registry.get((resource, method))


def methods_for(
    resource: str,
    registry: t.Optional[dict[tuple[str, str], Operation]] = None,
) -> list[str]:
    """Return the registered method names of a resource, in registration order."""
    registry = OPERATION_REGISTRY if registry is None else registry
    return [method for (res, method) in registry if res == resource]


def list_operation_schemas(
    registry: t.Optional[dict[tuple[str, str], Operation]] = None,
) -> list[dict]:
    """Collect and return a description of every registered operation."""
    registry = OPERATION_REGISTRY if registry is None else registry
    return [
        {
            "resource": op.resource,
            "method": op.method,
            "params": op.params,
            "description": op.description,
        }
        for op in registry.values()
    ]
