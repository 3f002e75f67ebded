"""Phase-gated access to requirements.

Access depends only on the project's current STLC phase, the phase a
requirement is assigned to and whether the requirement has linked test
cases. It is not tied to user identity.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from phasegate.lifecycle._stlc import detect_stlc_phase
from phasegate.project import Project, Requirement, STLCPhaseName

CLOSURE_MESSAGE = (
    "Closure phase: access limited to historical lookup and coverage review (RTM)"
)


class AccessLevel(StrEnum):
    """Access level granted on a requirement."""

    FULL = "full"
    LIMITED = "limited"
    RESTRICTED = "restricted"


@dataclass(frozen=True, slots=True)
class RequirementAccess:
    """Access descriptor for one requirement.

    Attributes:
        access_level: Granted access level.
        can_edit: Whether the requirement may be edited.
        can_view: Whether the requirement may be viewed.
        can_delete: Whether the requirement may be deleted.
        message: User-facing explanation, if any.
    """

    access_level: AccessLevel
    can_edit: bool
    can_view: bool
    can_delete: bool
    message: str | None = None


def get_requirement_access(
    requirement: Requirement, current_phase: STLCPhaseName
) -> RequirementAccess:
    """Decide what may be done with a requirement in the current STLC phase.

    Requirements assigned to a later phase are restricted. Otherwise the
    current phase decides:

    - requirements analysis and test planning grant full access;
    - test case development grants view and edit but not delete;
    - test execution is view-only, full when test cases are linked and
      limited otherwise;
    - test closure is limited to historical lookup.

    Args:
        requirement: The requirement to evaluate.
        current_phase: The project's current STLC phase.

    Returns:
        The access descriptor.
    """
    requirement_phase = requirement.stlc_phase

    if requirement_phase.is_after(current_phase):
        return _restricted(requirement_phase)

    match current_phase:
        case STLCPhaseName.REQUIREMENTS_ANALYSIS | STLCPhaseName.TEST_PLANNING:
            return RequirementAccess(
                access_level=AccessLevel.FULL,
                can_edit=True,
                can_view=True,
                can_delete=True,
            )
        case STLCPhaseName.TEST_CASE_DEVELOPMENT:
            if requirement_phase.order <= current_phase.order:
                return RequirementAccess(
                    access_level=AccessLevel.FULL,
                    can_edit=True,
                    can_view=True,
                    can_delete=False,
                )
            return _restricted(requirement_phase)
        case STLCPhaseName.TEST_EXECUTION:
            if requirement.test_cases:
                return RequirementAccess(
                    access_level=AccessLevel.FULL,
                    can_edit=False,
                    can_view=True,
                    can_delete=False,
                )
            if requirement_phase.order <= current_phase.order:
                return _view_only()
            return _restricted(requirement_phase)
        case STLCPhaseName.TEST_CLOSURE:
            return _view_only(CLOSURE_MESSAGE)

    return _view_only()  # pyright: ignore[reportUnreachable]


def filter_requirements_by_phase(
    requirements: Iterable[Requirement],
    current_phase: STLCPhaseName,
    *,
    show_restricted: bool = True,
) -> list[Requirement]:
    """Keep the requirements that may be viewed in the current phase.

    Args:
        requirements: Requirements to filter.
        current_phase: The project's current STLC phase.
        show_restricted: Whether to keep requirements of later phases.

    Returns:
        The viewable requirements, in input order.
    """
    kept: list[Requirement] = []
    for requirement in requirements:
        access = get_requirement_access(requirement, current_phase)
        if not show_restricted and access.access_level == AccessLevel.RESTRICTED:
            continue
        if access.can_view:
            kept.append(requirement)
    return kept


def evaluate_requirement_access(project: Project) -> dict[str, RequirementAccess]:
    """Map every requirement of a snapshot to its access descriptor.

    The snapshot's STLC phase is detected once and used for all requirements.

    Args:
        project: The project snapshot.

    Returns:
        Mapping of requirement ID to access descriptor, in snapshot order.
    """
    current_phase = detect_stlc_phase(project)
    return {
        requirement.id: get_requirement_access(requirement, current_phase)
        for requirement in project.requirements
    }


def _restricted(requirement_phase: STLCPhaseName) -> RequirementAccess:
    return RequirementAccess(
        access_level=AccessLevel.RESTRICTED,
        can_edit=False,
        can_view=True,
        can_delete=False,
        message=f"Release gated to phase {requirement_phase}",
    )


def _view_only(message: str | None = None) -> RequirementAccess:
    return RequirementAccess(
        access_level=AccessLevel.LIMITED,
        can_edit=False,
        can_view=True,
        can_delete=False,
        message=message,
    )
