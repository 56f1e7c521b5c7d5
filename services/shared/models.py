"""
Shared Pydantic models for Classroom REST API payloads.

These mirror the JSON shapes of the Google Classroom v1 API (camelCase field
names included) for the resources the assistant can reach. They are used by the
gateway to read list responses through a typed schema, and by the mock
Classroom service to produce realistic responses.
"""
from __future__ import annotations

import typing as t
from pydantic import BaseModel, ConfigDict, Field


# Type literals for commonly used values
CourseWorkType = t.Literal[
    "COURSE_WORK_TYPE_UNSPECIFIED",
    "ASSIGNMENT",
    "SHORT_ANSWER_QUESTION",
    "MULTIPLE_CHOICE_QUESTION",
]
PublishState = t.Literal["PUBLISHED", "DRAFT", "DELETED"]


class ClassroomModel(BaseModel):
    """Base model keeping fields the assistant does not model explicitly."""
    model_config = ConfigDict(extra="allow")


class Date(ClassroomModel):
    """Calendar date, e.g. a course-work due date."""
    year: int
    month: int
    day: int


class TimeOfDay(ClassroomModel):
    """Time of day in 24h form."""
    hours: int = 0
    minutes: int = 0


class Course(ClassroomModel):
    id: t.Optional[str] = None
    name: str = ""
    section: t.Optional[str] = None
    ownerId: t.Optional[str] = None
    courseState: t.Optional[str] = None


class CourseWork(ClassroomModel):
    """
    An assignment or question posted to a course.
    """
    id: t.Optional[str] = None
    courseId: t.Optional[str] = None
    title: str = ""
    description: t.Optional[str] = None
    workType: t.Optional[CourseWorkType] = None
    state: t.Optional[PublishState] = None
    dueDate: t.Optional[Date] = None
    dueTime: t.Optional[TimeOfDay] = None
    maxPoints: t.Optional[float] = None
    topicId: t.Optional[str] = None


class Name(ClassroomModel):
    givenName: t.Optional[str] = None
    familyName: t.Optional[str] = None
    fullName: t.Optional[str] = None


class UserProfile(ClassroomModel):
    id: t.Optional[str] = None
    name: t.Optional[Name] = None
    emailAddress: t.Optional[str] = None


class Student(ClassroomModel):
    courseId: t.Optional[str] = None
    userId: t.Optional[str] = None
    profile: t.Optional[UserProfile] = None


class Teacher(ClassroomModel):
    courseId: t.Optional[str] = None
    userId: t.Optional[str] = None
    profile: t.Optional[UserProfile] = None


class Announcement(ClassroomModel):
    id: t.Optional[str] = None
    courseId: t.Optional[str] = None
    text: str = ""
    state: t.Optional[PublishState] = None


class Topic(ClassroomModel):
    topicId: t.Optional[str] = None
    courseId: t.Optional[str] = None
    name: str = ""


class StudentSubmission(ClassroomModel):
    id: t.Optional[str] = None
    courseId: t.Optional[str] = None
    courseWorkId: t.Optional[str] = None
    userId: t.Optional[str] = None
    state: t.Optional[str] = None
    assignedGrade: t.Optional[float] = None


# List responses. The Classroom API omits the collection field when empty.
class ListCoursesResponse(ClassroomModel):
    courses: list[Course] = Field(default_factory=list)
    nextPageToken: t.Optional[str] = None


class ListCourseWorkResponse(ClassroomModel):
    courseWork: list[CourseWork] = Field(default_factory=list)
    nextPageToken: t.Optional[str] = None


class ListStudentsResponse(ClassroomModel):
    students: list[Student] = Field(default_factory=list)
    nextPageToken: t.Optional[str] = None


class ListTeachersResponse(ClassroomModel):
    teachers: list[Teacher] = Field(default_factory=list)
    nextPageToken: t.Optional[str] = None


class ListAnnouncementsResponse(ClassroomModel):
    announcements: list[Announcement] = Field(default_factory=list)
    nextPageToken: t.Optional[str] = None


class ListTopicResponse(ClassroomModel):
    topic: list[Topic] = Field(default_factory=list)
    nextPageToken: t.Optional[str] = None


class ListStudentSubmissionsResponse(ClassroomModel):
    studentSubmissions: list[StudentSubmission] = Field(default_factory=list)
    nextPageToken: t.Optional[str] = None
