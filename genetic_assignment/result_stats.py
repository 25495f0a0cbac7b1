"""
Summary statistics for a returned assignment.

Works on the named pairs produced by the result formatters: how many agents
and tasks were covered, the mean cost, a preference rating and a tally of
how well agents were placed.
"""

from typing import Any, Dict, List, Sequence


def get_mean_cost(pairs: Sequence[Dict[str, Any]]) -> float:
    if not pairs:
        return 0.0
    return sum(pair["cost"] for pair in pairs) / len(pairs)


def get_preference_rating(pairs: Sequence[Dict[str, Any]]) -> float:
    """
    Mean of 1 / cost over all pairs.

    A first choice (cost 1) scores 1, a third choice 1/3. Zero-cost pairs
    count as a full score.
    """
    if not pairs:
        return 0.0
    return sum(1.0 / pair["cost"] if pair["cost"] > 0 else 1.0 for pair in pairs) / len(pairs)


def tally_assignments(pairs: Sequence[Dict[str, Any]], max_selection: int) -> List[Dict[str, Any]]:
    """
    Count pairs per preference bucket.

    Args:
        pairs: Named assignment pairs
        max_selection: Number of ranked choices each agent could make

    Returns:
        List of {"name", "value"} buckets
    """
    costs = [pair["cost"] for pair in pairs]

    if max_selection > 10:
        return [
            {"name": "Assigned to top 3", "value": sum(1 for cost in costs if cost < 3)},
            {"name": "Assigned to top 5", "value": sum(1 for cost in costs if cost < 5)},
            {"name": "Assigned to top 8", "value": sum(1 for cost in costs if cost < 8)},
            {"name": "Assigned to 10+", "value": sum(1 for cost in costs if cost > 10)},
        ]

    return [
        {"name": "1st Choice", "value": sum(1 for cost in costs if cost == 1)},
        {"name": "Not 1st Choice", "value": sum(1 for cost in costs if cost > 1)},
    ]


def summarize_assignment(
    pairs: Sequence[Dict[str, Any]],
    total_agents: int,
    total_tasks: int,
    max_selection: int = 0
) -> Dict[str, Any]:
    """
    Summary of one returned assignment.

    Args:
        pairs: Named assignment pairs of one candidate
        total_agents: Number of agents in the problem
        total_tasks: Number of tasks in the problem
        max_selection: Number of ranked choices per agent (selects tally buckets)

    Returns:
        Dictionary of statistics
    """
    return {
        "agentsAssigned": len(pairs),
        "tasksAssigned": len(pairs),
        "totalAgents": total_agents,
        "totalTasks": total_tasks,
        "meanCost": get_mean_cost(pairs),
        "assignmentRating": get_preference_rating(pairs),
        "tally": tally_assignments(pairs, max_selection),
    }
