"""
Data models for natural-language Classroom commands.

This module contains the models used to represent the structured API calls the
LLM produces from a user's instruction, and the results of running them against
the Classroom API.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import typing as t

from pydantic import BaseModel, ConfigDict, Field


class FilterSpec(BaseModel):
    """Case-insensitive substring match applied to ``item[key]``."""
    key: str
    value: str


class PreFlightSpec(BaseModel):
    """A lookup that resolves an item described by name to its identifier."""
    resource: str
    method: str
    params: list[t.Any] = Field(default_factory=list)
    filter: FilterSpec
    select: str


class ApiCallSpec(BaseModel):
    """One Classroom API invocation described by the LLM."""
    model_config = ConfigDict(populate_by_name=True)

    resource: str
    method: str
    params: list[t.Any] = Field(default_factory=list)
    summary: str = ""
    pre_flight: t.Optional[PreFlightSpec] = Field(default=None, alias="preFlight")


class CommandEnvelope(BaseModel):
    """
    Top-level structure returned by the translator.

    Either ``apiCall`` (one action) or ``apiCalls`` (ordered actions) is set.
    """
    model_config = ConfigDict(populate_by_name=True)

    api_call: t.Optional[ApiCallSpec] = Field(default=None, alias="apiCall")
    api_calls: t.Optional[list[ApiCallSpec]] = Field(default=None, alias="apiCalls")

    def actions(self) -> list[ApiCallSpec]:
        """Return the actions to run, in order."""
        if self.api_calls is not None:
            return list(self.api_calls)
        if self.api_call is not None:
            return [self.api_call]
        return []


@dataclass
class RemoteResult:
    """Outcome of one gateway invocation."""
    resource: str
    method: str
    raw: t.Any = None
    items: list[dict[str, t.Any]] = field(default_factory=list)
