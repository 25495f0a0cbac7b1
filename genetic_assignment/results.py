"""
Result formatting for the genetic assignment solver.

Translates the final population back into named assignment pairs, either
with the caller's real agents and tasks or with row/column names supplied
alongside a raw cost matrix.
"""

from typing import Any, Dict, List, Sequence

from .data_models import Assignment, Candidate
from .fitness import sort_by_distance


def get_top_results_with_real_agents(
    data: Sequence[Dict[str, Any]],
    population: List[Candidate],
    returned_candidates: int
) -> List[Dict[str, Any]]:
    """
    Top candidates paired with the agents and tasks from preference data.

    Args:
        data: Agents with answers, as passed to the solver
        population: Final population
        returned_candidates: Number of candidates to return

    Returns:
        List of {"totalCost", "distance", "assignment"} sorted by distance
    """
    top = sort_by_distance(list(population))[:returned_candidates]
    tasks = list(data[0]["answers"])

    return [
        {
            "totalCost": candidate.total_cost,
            "distance": candidate.distance,
            "assignment": [
                {
                    "agent": data[pairing.row],
                    "task": {
                        "taskId": tasks[pairing.col]["taskId"],
                        "taskName": tasks[pairing.col].get("taskName"),
                    },
                    "cost": pairing.cost,
                }
                for pairing in candidate.assignment
            ],
        }
        for candidate in top
    ]


def unique_by_distance(population: List[Candidate]) -> List[Candidate]:
    """Keep the first candidate of each distinct distance, in order."""
    seen = set()
    unique = []
    for candidate in population:
        if candidate.distance not in seen:
            seen.add(candidate.distance)
            unique.append(candidate)
    return unique


def get_solution_matrix(rows: int, cols: int, assignment: Sequence[Assignment]) -> List[List[int]]:
    """
    Binary rows x cols matrix with 1 at every assigned cell.

    Args:
        rows: Number of agents
        cols: Number of tasks
        assignment: Pairings to mark

    Returns:
        Nested list of 0/1 values
    """
    solution = [[0] * cols for _ in range(rows)]
    for pairing in assignment:
        solution[pairing.row][pairing.col] = 1
    return solution


def get_assignment_pairs(
    mask_matrix: Sequence[Sequence[int]],
    cost_matrix: Sequence[Sequence[float]],
    row_names: Sequence[Any],
    col_names: Sequence[Any]
) -> List[Dict[str, Any]]:
    """
    Named pairs for every marked cell, scanned row by row.

    Args:
        mask_matrix: Binary solution matrix
        cost_matrix: Original costs
        row_names: Agent names
        col_names: Task names

    Returns:
        List of {"agent": {"agentId", "email"}, "task": {"taskId", "taskName"}, "cost"}
    """
    pairs = []
    for i, row_name in enumerate(row_names):
        for j, col_name in enumerate(col_names):
            if mask_matrix[i][j] == 1:
                pairs.append({
                    "agent": {"agentId": row_name, "email": row_name},
                    "task": {"taskId": col_name, "taskName": col_name},
                    "cost": cost_matrix[i][j],
                })
    return pairs


def get_assignment_rating(pairs: Sequence[Dict[str, Any]]) -> float:
    """Fraction of pairs with a cost below 3 (0.0 for no pairs)."""
    if not pairs:
        return 0.0
    return sum(1 for pair in pairs if pair["cost"] < 3) / len(pairs)


def get_top_results_with_dummy_names(
    matrix: Sequence[Sequence[float]],
    population: List[Candidate],
    returned_candidates: int,
    row_names: Sequence[Any],
    col_names: Sequence[Any]
) -> List[Dict[str, Any]]:
    """
    Top unique candidates as solved matrices plus named pairs.

    Candidates are sorted by distance and deduplicated by identical distance
    before the top returned_candidates are taken.

    Args:
        matrix: Original cost matrix
        population: Final population
        returned_candidates: Number of candidates to return
        row_names: Agent names
        col_names: Task names

    Returns:
        List of {"solution", "assignment", "assignmentRating", "totalCost", "distance"}
    """
    top = unique_by_distance(sort_by_distance(list(population)))[:returned_candidates]
    rows = len(matrix)
    cols = len(matrix[0])

    results = []
    for candidate in top:
        solution = get_solution_matrix(rows, cols, candidate.assignment)
        pairs = get_assignment_pairs(solution, matrix, row_names, col_names)
        results.append({
            "solution": solution,
            "assignment": pairs,
            "assignmentRating": get_assignment_rating(pairs),
            "totalCost": candidate.total_cost,
            "distance": candidate.distance,
        })

    return results
