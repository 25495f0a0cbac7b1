"""
Input validation for the genetic assignment solver.

Checks solver input before a run starts so that malformed data is reported
without attempting any generations.
"""

import math
from numbers import Real
from typing import Any, Dict, Optional, Sequence

from .data_models import GeneticOptions
from .population import task_id_of


class InvalidInputError(ValueError):
    """Raised when agent/cost data or solver options are invalid."""
    pass


def _is_cost(value: Any) -> bool:
    """True for a finite, non-negative real number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value >= 0


def is_agent_data(data: Sequence[Any]) -> bool:
    """True if data is a list of agents carrying preference answers."""
    return bool(data) and isinstance(data[0], dict) and "answers" in data[0]


def validate_genetic_input(
    data: Any,
    row_names: Optional[Sequence[Any]] = None,
    col_names: Optional[Sequence[Any]] = None
) -> None:
    """
    Validate agent preference data or a raw cost matrix.

    Args:
        data: List of agents ({"agentId", "answers": [{"taskId", "cost"}]})
            or a rectangular list of numeric rows
        row_names: Agent names, required for matrix input
        col_names: Task names, required for matrix input

    Raises:
        InvalidInputError: If data is malformed or inconsistent
    """
    if not isinstance(data, (list, tuple)) or len(data) == 0:
        raise InvalidInputError("Input data must be a non-empty list")

    if is_agent_data(data):
        _validate_agents(data)
    else:
        _validate_matrix(data, row_names, col_names)


def _validate_agents(agents: Sequence[Any]) -> None:
    """Validate the agent/answers form."""
    task_order = None

    for index, agent in enumerate(agents):
        if not isinstance(agent, dict):
            raise InvalidInputError(f"Agent {index} must be a mapping")
        if "agentId" not in agent:
            raise InvalidInputError(f"Agent {index} is missing 'agentId'")

        answers = agent.get("answers")
        if not isinstance(answers, (list, tuple)) or len(answers) == 0:
            raise InvalidInputError(f"Agent {agent['agentId']!r} has no answers")

        task_ids = []
        for answer in answers:
            if not isinstance(answer, dict) or "taskId" not in answer:
                raise InvalidInputError(
                    f"Agent {agent['agentId']!r} has an answer without 'taskId'"
                )
            if not _is_cost(answer.get("cost")):
                raise InvalidInputError(
                    f"Agent {agent['agentId']!r} has an invalid cost for task "
                    f"{answer['taskId']!r}: {answer.get('cost')!r}"
                )
            task_ids.append(answer["taskId"])

        if task_order is None:
            task_order = task_ids
        elif len(task_ids) != len(task_order):
            raise InvalidInputError(
                f"Agent {agent['agentId']!r} has {len(task_ids)} answers, "
                f"expected {len(task_order)}"
            )
        elif task_ids != task_order:
            raise InvalidInputError(
                f"Agent {agent['agentId']!r} answers tasks in a different order"
            )


def _validate_matrix(
    matrix: Sequence[Any],
    row_names: Optional[Sequence[Any]],
    col_names: Optional[Sequence[Any]]
) -> None:
    """Validate the raw cost matrix form."""
    width = None

    for index, row in enumerate(matrix):
        if not isinstance(row, (list, tuple)) or len(row) == 0:
            raise InvalidInputError(f"Row {index} must be a non-empty list of costs")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise InvalidInputError(
                f"Row {index} has {len(row)} columns, expected {width}"
            )
        for col, value in enumerate(row):
            if not _is_cost(value):
                raise InvalidInputError(f"Invalid cost at ({index}, {col}): {value!r}")

    if row_names is None or col_names is None:
        raise InvalidInputError("Matrix input requires row names and column names")
    if len(row_names) != len(matrix):
        raise InvalidInputError(
            f"Got {len(row_names)} row names for {len(matrix)} rows"
        )
    if len(col_names) != width:
        raise InvalidInputError(
            f"Got {len(col_names)} column names for {width} columns"
        )


def validate_options(options: GeneticOptions, col_names: Optional[Sequence[Any]] = None) -> None:
    """
    Validate solver options.

    Args:
        options: Solver options
        col_names: Task identifiers; when given, group tasks must be among them

    Raises:
        InvalidInputError: If an option is out of range
    """
    for attribute in ("max_generations", "returned_candidates", "population_size"):
        value = getattr(options, attribute)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidInputError(f"'{attribute}' must be a positive integer, got: {value!r}")

    if not _is_cost(options.mutation_chance) or options.mutation_chance > 1:
        raise InvalidInputError(
            f"'mutation_chance' must be between 0 and 1, got: {options.mutation_chance!r}"
        )

    if not _is_cost(options.distance_threshold):
        raise InvalidInputError(
            f"'distance_threshold' must be a non-negative number, got: {options.distance_threshold!r}"
        )

    if not isinstance(options.groups, (list, tuple)):
        raise InvalidInputError("'groups' must be a list")

    for index, group in enumerate(options.groups):
        _validate_group(index, group, col_names)


def _validate_group(index: int, group: Dict[str, Any], col_names: Optional[Sequence[Any]]) -> None:
    """Validate one group specification."""
    if not isinstance(group, dict):
        raise InvalidInputError(f"Group {index} must be a mapping")

    cap = group.get("maxAssignments", group.get("max_assignments"))
    if isinstance(cap, bool) or not isinstance(cap, int) or cap < 0:
        raise InvalidInputError(
            f"Group {index} 'maxAssignments' must be a non-negative integer, got: {cap!r}"
        )

    tasks = group.get("tasks")
    if not isinstance(tasks, (list, tuple)):
        raise InvalidInputError(f"Group {index} 'tasks' must be a list")

    if col_names is not None:
        known = list(col_names)
        for task in tasks:
            task_id = task_id_of(task)
            if task_id not in known:
                raise InvalidInputError(f"Group {index} references unknown task: {task_id!r}")
