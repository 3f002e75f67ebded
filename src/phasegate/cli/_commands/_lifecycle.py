# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, TC003
"""Lifecycle phase commands."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from phasegate.lifecycle import (
    STLCCounts,
    classify_stlc_phase,
    evaluate_sdlc,
    filter_requirements_by_phase,
    get_requirement_access,
)

from ._context import CLIContext, OutputFormat
from ._shared import format_bool, format_json, format_table, load_snapshot

__all__ = ["access", "phases", "stlc"]


def phases(
    snapshot: Path,
    /,
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the SDLC phase list and the current phase

    Args:
        snapshot: Path to the project snapshot (JSON).
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    logger = ctx.get_logger("phases")
    project = load_snapshot(snapshot, logger)

    evaluation = evaluate_sdlc(project)
    metrics = evaluation.metrics
    logger.info("sdlc_evaluated", current_phase=str(evaluation.current_phase))

    if format_ == OutputFormat.JSON:
        data = {
            "current_phase": evaluation.current_phase,
            "phases": [
                {"order": phase.name.order, "name": phase.name, "status": phase.status}
                for phase in evaluation.phases
            ],
            "metrics": {
                "total_tasks": metrics.total_tasks,
                "total_test_cases": metrics.total_test_cases,
                "executed_test_cases": metrics.executed_test_cases,
                "passed_test_cases": metrics.passed_test_cases,
                "test_coverage": metrics.test_coverage,
                "automation_ratio": metrics.automation_ratio,
                "test_pass_rate": metrics.test_pass_rate,
                "open_bugs": metrics.open_bugs,
                "closed_bugs": metrics.closed_bugs,
            },
        }
        print(format_json(data))
        return

    rows = [
        [str(phase.name.order), str(phase.name), str(phase.status)]
        for phase in evaluation.phases
    ]
    print(format_table(["#", "Phase", "Status"], rows))
    print(f"\nCurrent phase: {evaluation.current_phase}")

    if ctx.verbose:
        print(
            f"Coverage: {metrics.test_coverage}%  "
            f"Automation: {metrics.automation_ratio}%  "
            f"Pass rate: {metrics.test_pass_rate}%  "
            f"Open bugs: {metrics.open_bugs}"
        )


def stlc(
    snapshot: Path,
    /,
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the detected STLC phase

    Args:
        snapshot: Path to the project snapshot (JSON).
        format_: Output format.
    """
    logger = CLIContext.get_current().get_logger("stlc")
    project = load_snapshot(snapshot, logger)

    counts = STLCCounts.from_project(project)
    phase = classify_stlc_phase(counts)
    logger.info("stlc_detected", phase=str(phase))

    if format_ == OutputFormat.JSON:
        data = {
            "phase": phase,
            "order": phase.order,
            "counts": {
                "tasks": counts.tasks,
                "documents": counts.documents,
                "test_cases": counts.test_cases,
                "executed": counts.executed,
                "passed": counts.passed,
            },
        }
        print(format_json(data))
        return

    print(f"STLC phase: {phase} ({phase.order}/5)")
    print(
        f"Test cases: {counts.test_cases} total, {counts.executed} executed, "
        f"{counts.passed} passed"
    )


def access(
    snapshot: Path,
    /,
    *,
    show_restricted: Annotated[
        bool | None,
        Parameter(
            name="--show-restricted",
            negative="--hide-restricted",
            help="Include requirements gated to a later phase",
        ),
    ] = None,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the access granted on each requirement in the current STLC phase

    Args:
        snapshot: Path to the project snapshot (JSON).
        show_restricted: Include restricted requirements. Defaults to the
            ``requirements.show_restricted`` setting.
        format_: Output format.
    """
    ctx = CLIContext.get_current()
    logger = ctx.get_logger("access")
    project = load_snapshot(snapshot, logger)

    if show_restricted is None:
        show_restricted = ctx.config.requirements.show_restricted

    phase = classify_stlc_phase(STLCCounts.from_project(project))
    visible = filter_requirements_by_phase(
        project.requirements, phase, show_restricted=show_restricted
    )
    entries = [(req, get_requirement_access(req, phase)) for req in visible]
    logger.info(
        "access_evaluated",
        phase=str(phase),
        requirements=len(project.requirements),
        shown=len(entries),
    )

    if format_ == OutputFormat.JSON:
        data = {
            "current_phase": phase,
            "requirements": [
                {
                    "id": req.id,
                    "stlc_phase": req.stlc_phase,
                    "access_level": result.access_level,
                    "can_edit": result.can_edit,
                    "can_view": result.can_view,
                    "can_delete": result.can_delete,
                    "message": result.message,
                }
                for req, result in entries
            ],
        }
        print(format_json(data))
        return

    print(f"Current STLC phase: {phase}\n")
    if not entries:
        print("No requirements to show")
        return

    rows = [
        [
            req.id,
            str(req.stlc_phase),
            str(result.access_level),
            format_bool(result.can_edit),
            format_bool(result.can_view),
            format_bool(result.can_delete),
            result.message or "",
        ]
        for req, result in entries
    ]
    print(
        format_table(
            ["Requirement", "Phase", "Access", "Edit", "View", "Delete", "Message"],
            rows,
        )
    )
