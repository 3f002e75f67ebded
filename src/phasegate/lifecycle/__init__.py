"""Lifecycle phase engines.

This package derives where a project stands from its snapshot: the SDLC
phase list and current phase, the STLC phase, and the phase-gated access
descriptor of each requirement. Every function is pure and total.
"""

from phasegate.lifecycle._access import (
    CLOSURE_MESSAGE,
    AccessLevel,
    RequirementAccess,
    evaluate_requirement_access,
    filter_requirements_by_phase,
    get_requirement_access,
)
from phasegate.lifecycle._metrics import (
    ModuleQuality,
    ProjectMetrics,
    compute_project_metrics,
    percentage,
)
from phasegate.lifecycle._sdlc import (
    CurrentPhase,
    SDLCEvaluation,
    compute_sdlc_phases,
    current_sdlc_phase,
    evaluate_sdlc,
    sdlc_conditions,
)
from phasegate.lifecycle._stlc import (
    STLCCounts,
    classify_stlc_phase,
    detect_stlc_phase,
    is_stlc_phase_after,
    is_stlc_phase_before,
    stlc_phase_order,
)
from phasegate.lifecycle._task_phase import (
    NEXT_STEP_EXECUTE_TESTS,
    NEXT_STEP_FIX_FAILURES,
    NEXT_STEP_GENERATE_TESTS,
    NEXT_STEP_MARK_DONE,
    NEXT_STEP_WRITE_BDD,
    get_next_step_for_task,
    get_task_phase,
)

__all__ = [
    "CLOSURE_MESSAGE",
    "NEXT_STEP_EXECUTE_TESTS",
    "NEXT_STEP_FIX_FAILURES",
    "NEXT_STEP_GENERATE_TESTS",
    "NEXT_STEP_MARK_DONE",
    "NEXT_STEP_WRITE_BDD",
    "AccessLevel",
    "CurrentPhase",
    "ModuleQuality",
    "ProjectMetrics",
    "RequirementAccess",
    "SDLCEvaluation",
    "STLCCounts",
    "classify_stlc_phase",
    "compute_project_metrics",
    "compute_sdlc_phases",
    "current_sdlc_phase",
    "detect_stlc_phase",
    "evaluate_requirement_access",
    "evaluate_sdlc",
    "filter_requirements_by_phase",
    "get_next_step_for_task",
    "get_requirement_access",
    "get_task_phase",
    "is_stlc_phase_after",
    "is_stlc_phase_before",
    "percentage",
    "sdlc_conditions",
    "stlc_phase_order",
]
