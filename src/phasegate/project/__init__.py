"""Project snapshot models.

This package provides the immutable data models for a project snapshot
(tasks, test cases, documents, SDLC phases and requirements) and the loader
that builds them from the surrounding application's JSON export.
"""

from phasegate.project._io import load_project, project_from_dict
from phasegate.project._models import (
    BddScenario,
    BugSeverity,
    Document,
    Phase,
    PhaseName,
    PhaseStatus,
    Project,
    Requirement,
    STLCPhaseName,
    Task,
    TaskStatus,
    TaskType,
    TestCase,
    TestCaseStatus,
)

__all__ = [
    "BddScenario",
    "BugSeverity",
    "Document",
    "Phase",
    "PhaseName",
    "PhaseStatus",
    "Project",
    "Requirement",
    "STLCPhaseName",
    "Task",
    "TaskStatus",
    "TaskType",
    "TestCase",
    "TestCaseStatus",
    "load_project",
    "project_from_dict",
]
