"""SDLC phase progression.

The ten delivery phases are walked in order once. Each phase is completed
while its predicate holds and every earlier phase is completed; the first
phase whose predicate fails is in progress and every later phase is not
started.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import TypeAlias

from phasegate.lifecycle._metrics import ProjectMetrics, compute_project_metrics
from phasegate.project import Phase, PhaseName, PhaseStatus, Project

# A phase name, or PhaseStatus.COMPLETED once no phase is in progress
CurrentPhase: TypeAlias = PhaseName | PhaseStatus


@dataclass(frozen=True, slots=True)
class SDLCEvaluation:
    """Result of evaluating a snapshot against the SDLC.

    Attributes:
        phases: All ten phases in order with their derived status.
        current_phase: The phase in progress, or ``PhaseStatus.COMPLETED``.
        metrics: The metrics the completion predicates were derived from.
    """

    phases: tuple[Phase, ...]
    current_phase: CurrentPhase
    metrics: ProjectMetrics


def sdlc_conditions(metrics: ProjectMetrics) -> dict[PhaseName, bool]:
    """Derive the completion predicate of every SDLC phase.

    Monitor is a manual phase and never completes on its own.

    Args:
        metrics: Project metrics.

    Returns:
        Mapping of phase name to whether the phase is complete.
    """
    released = metrics.all_tests_executed and metrics.no_open_bugs
    return {
        PhaseName.REQUEST: metrics.has_documents_or_tasks,
        PhaseName.ANALYSIS: metrics.has_bdd_scenarios,
        PhaseName.DESIGN: metrics.total_test_cases > 0,
        PhaseName.ANALYSIS_AND_CODE: metrics.all_tasks_done,
        PhaseName.BUILD: metrics.all_tasks_done,
        PhaseName.TEST: metrics.all_tests_executed,
        PhaseName.RELEASE: released,
        PhaseName.DEPLOY: released,
        PhaseName.OPERATE: released,
        PhaseName.MONITOR: False,
    }


def compute_sdlc_phases(
    conditions: Mapping[PhaseName, bool],
    existing: Iterable[Phase] = (),
) -> tuple[Phase, ...]:
    """Assign a status to each SDLC phase from its completion predicate.

    Phases missing from ``conditions`` count as incomplete. Summary and test
    types are carried over from ``existing``; only the status is derived.

    Args:
        conditions: Completion predicate per phase.
        existing: Phases as last stored for the project.

    Returns:
        All ten phases in order. At most one is in progress, every phase
        before it is completed and every phase after it is not started.
    """
    stored = {phase.name: phase for phase in existing}
    statuses: list[PhaseStatus] = []
    previous_completed = True
    in_progress_set = False

    for name in PhaseName:
        status = PhaseStatus.NOT_STARTED
        if not in_progress_set and previous_completed:
            if conditions.get(name, False):
                status = PhaseStatus.COMPLETED
            else:
                status = PhaseStatus.IN_PROGRESS
                in_progress_set = True
        if status != PhaseStatus.COMPLETED:
            previous_completed = False
        statuses.append(status)

    if not in_progress_set:
        # Every predicate held; start the phase after the last completed one
        last_completed = max(
            (i for i, s in enumerate(statuses) if s == PhaseStatus.COMPLETED),
            default=-1,
        )
        if last_completed < len(statuses) - 1:
            statuses[last_completed + 1] = PhaseStatus.IN_PROGRESS

    return tuple(
        replace(stored[name], status=status)
        if name in stored
        else Phase(name=name, status=status)
        for name, status in zip(PhaseName, statuses, strict=True)
    )


def current_sdlc_phase(phases: Iterable[Phase]) -> CurrentPhase:
    """Return the name of the phase in progress.

    Args:
        phases: Phases with derived status.

    Returns:
        The first phase in progress, or ``PhaseStatus.COMPLETED`` if none is.
    """
    for phase in phases:
        if phase.status == PhaseStatus.IN_PROGRESS:
            return phase.name
    return PhaseStatus.COMPLETED


def evaluate_sdlc(project: Project) -> SDLCEvaluation:
    """Derive SDLC phase statuses and the current phase for a snapshot.

    Args:
        project: The project snapshot.

    Returns:
        The phase list, current phase and underlying metrics.
    """
    metrics = compute_project_metrics(project)
    phases = compute_sdlc_phases(sdlc_conditions(metrics), project.phases)
    return SDLCEvaluation(
        phases=phases,
        current_phase=current_sdlc_phase(phases),
        metrics=metrics,
    )
