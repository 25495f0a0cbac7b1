"""
Population initialization for the genetic assignment solver.

Builds group constraints from task names, works out how many pairings each
candidate holds, and generates random candidates by a wrapping diagonal walk
over the cost matrix.
"""

from typing import Any, Dict, List, Sequence

from .data_models import Assignment, Candidate, Group, RunContext
from .fitness import calculate_total_cost


def task_id_of(task: Any) -> Any:
    """Task identifier from either a bare id or a {"taskId": ...} mapping."""
    if isinstance(task, dict):
        return task.get("taskId")
    return task


def get_groups(group_specs: Sequence[Dict[str, Any]], col_names: Sequence[Any]) -> List[Group]:
    """
    Convert group specifications into column-index constraints.

    Args:
        group_specs: Mappings of the form {"maxAssignments": int, "tasks": [...]}
            where tasks are task ids or {"taskId": ...} mappings
        col_names: Task identifier of each cost matrix column

    Returns:
        List of Group objects

    Raises:
        ValueError: If a group references a task that is not a column
    """
    col_names = list(col_names)
    groups = []

    for index, spec in enumerate(group_specs or []):
        cols = []
        for task in spec.get("tasks", []):
            task_id = task_id_of(task)
            if task_id not in col_names:
                raise ValueError(f"Group {index} references unknown task: {task_id!r}")
            cols.append(col_names.index(task_id))

        groups.append(
            Group(
                cols=tuple(cols),
                max_assignments=int(spec.get("maxAssignments", spec.get("max_assignments", 0))),
                name=spec.get("name", f"group_{index}")
            )
        )

    return groups


def get_max_column_assignments(cols: int, groups: Sequence[Group]) -> int:
    """
    Maximum number of columns that can be assigned once group caps apply.

    Unconstrained columns each take one assignment; each group contributes at
    most its cap. Groups are assumed to be disjoint.

    Args:
        cols: Number of columns in the cost matrix
        groups: Group constraints

    Returns:
        Number of assignable columns
    """
    if not groups:
        return cols

    constrained_columns = sum(len(group.cols) for group in groups)
    allowed_in_groups = sum(group.max_assignments for group in groups)
    return (cols - constrained_columns) + allowed_in_groups


def overlapping_columns(groups: Sequence[Group]) -> List[int]:
    """Column indices that belong to more than one group, in ascending order."""
    seen = set()
    shared = set()
    for group in groups:
        for col in set(group.cols):
            if col in seen:
                shared.add(col)
            seen.add(col)
    return sorted(shared)


def random_assignment(context: RunContext) -> List[Assignment]:
    """
    Build a random assignment by walking diagonally from a random cell.

    Row and column indices both advance by one per step, wrapping to zero at
    the end of their dimension, until max_assignments pairings are collected.

    Note:
        When rows != cols the wrap can revisit a row or column, so the result
        is not guaranteed to be structurally valid.

    Args:
        context: Run context holding the cost matrix and rng

    Returns:
        List of max_assignments pairings
    """
    if context.max_assignments <= 0:
        raise ValueError("No assignable pairings: max_assignments must be positive")

    rows = context.rows
    cols = context.cols

    col_index = context.rng.int_between(0, cols - 1)
    row_index = context.rng.int_between(0, rows - 1)

    assignments = []
    while len(assignments) < context.max_assignments:
        assignments.append(
            Assignment(
                row=row_index,
                col=col_index,
                cost=context.cost(row_index, col_index)
            )
        )
        row_index = 0 if row_index + 1 > rows - 1 else row_index + 1
        col_index = 0 if col_index + 1 > cols - 1 else col_index + 1

    return assignments


def generate_population(n: int, context: RunContext) -> List[Candidate]:
    """
    Generate n random candidates.

    Distances are left unset; the generation loop evaluates them.

    Args:
        n: Population size
        context: Run context

    Returns:
        List of n candidates
    """
    population = []
    while len(population) < n:
        assignment = random_assignment(context)
        population.append(
            Candidate(
                assignment=assignment,
                total_cost=calculate_total_cost(assignment)
            )
        )

    context.log(f"Population initialized: {len(population)} candidates")
    return population
