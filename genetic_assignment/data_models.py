"""
Data models for the genetic assignment solver.

Core data structures representing assignment pairings, candidate solutions,
group constraints, solver options and the per-run context.
"""

from dataclasses import dataclass, field
from typing import Optional, Any

from .rng import SeededRandom


@dataclass(frozen=True)
class Assignment:
    """
    One agent-to-task pairing.

    Attributes:
        row: Agent index into the cost matrix
        col: Task index into the cost matrix
        cost: Cost of the pairing, cost_matrix[row][col]
    """
    row: int
    col: int
    cost: float

    def conflicts_with(self, other: "Assignment") -> bool:
        """True if both pairings use the same agent or the same task."""
        return self.row == other.row or self.col == other.col

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "col": self.col, "cost": self.cost}


@dataclass
class Candidate:
    """
    A full proposed solution (individual in the GA population).

    Attributes:
        assignment: Ordered pairings, one per assigned agent
        total_cost: Sum of the pairing costs
        distance: Fitness score, lower is better (None until evaluated)
    """
    assignment: list[Assignment]
    total_cost: float = 0.0
    distance: Optional[float] = None

    def copy(self) -> "Candidate":
        """
        Create a copy of this candidate.

        Assignments are immutable so only the list itself is copied.

        Returns:
            New Candidate with a copied assignment list
        """
        return Candidate(
            assignment=list(self.assignment),
            total_cost=self.total_cost,
            distance=self.distance
        )

    def rows(self) -> list[int]:
        return [pairing.row for pairing in self.assignment]

    def cols(self) -> list[int]:
        return [pairing.col for pairing in self.assignment]

    def is_structurally_valid(self, max_assignments: Optional[int] = None) -> bool:
        """
        Check that no two pairings share a row or a column.

        Args:
            max_assignments: If given, the assignment length must also match

        Returns:
            True if the candidate is structurally valid
        """
        rows = self.rows()
        cols = self.cols()
        if len(set(rows)) != len(rows) or len(set(cols)) != len(cols):
            return False
        if max_assignments is not None and len(self.assignment) != max_assignments:
            return False
        return True


@dataclass(frozen=True)
class Group:
    """
    Cap on the number of assignments made across a subset of tasks.

    Attributes:
        cols: Column indices covered by the group
        max_assignments: Maximum number of pairings allowed across cols
        name: Optional label used in diagnostics
    """
    cols: tuple[int, ...]
    max_assignments: int
    name: Optional[str] = None

    def __post_init__(self):
        """Store columns as a tuple so the group stays hashable."""
        if not isinstance(self.cols, tuple):
            object.__setattr__(self, "cols", tuple(self.cols))

    def count_assignments(self, candidate: Candidate) -> int:
        """Number of the candidate's pairings that fall in this group."""
        return sum(1 for pairing in candidate.assignment if pairing.col in self.cols)


# Wire names used by callers of the solver mapped to option attributes
_OPTION_KEYS = {
    "maxGenerations": "max_generations",
    "mutationChance": "mutation_chance",
    "returnedCandidates": "returned_candidates",
    "populationSize": "population_size",
    "distanceThreshold": "distance_threshold",
    "groups": "groups",
    "seed": "seed",
}


@dataclass
class GeneticOptions:
    """
    Solver configuration.

    Attributes:
        max_generations: Upper bound on the number of generations
        mutation_chance: Probability in [0, 1] that a candidate is mutated
        returned_candidates: Number of top candidates returned
        population_size: Number of candidates in the initial population
        distance_threshold: Stop once the best distance falls below this
        groups: Group constraints as {"maxAssignments", "tasks"} mappings
        seed: Optional seed; when present the run is reproducible
    """
    max_generations: int = 15
    mutation_chance: float = 0.3
    returned_candidates: int = 3
    population_size: int = 30
    distance_threshold: float = 3
    groups: list[dict[str, Any]] = field(default_factory=list)
    seed: Any = None

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "GeneticOptions":
        """
        Create options from a mapping with camelCase or snake_case keys.

        Args:
            data: Option mapping (unknown keys are ignored)

        Returns:
            GeneticOptions instance with defaults for missing keys
        """
        if data is None:
            return cls()
        if isinstance(data, GeneticOptions):
            return data

        kwargs = {}
        for key, value in data.items():
            attribute = _OPTION_KEYS.get(key, key)
            if attribute in _OPTION_KEYS.values():
                kwargs[attribute] = value

        if kwargs.get("groups") is None:
            kwargs["groups"] = []

        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            wire_key: getattr(self, attribute)
            for wire_key, attribute in _OPTION_KEYS.items()
        }


@dataclass
class RunContext:
    """
    Everything one solver run needs, owned exclusively by that run.

    Attributes:
        cost_matrix: rows x cols grid of costs (immutable for the run)
        groups: Group constraints derived from task names
        rng: Random source for the run
        max_column_assignments: Columns assignable once group caps apply
        max_assignments: Pairings per candidate, min(rows, max_column_assignments)
        verbose: Print log messages as they are recorded
        run_log: Diagnostic messages recorded during the run
    """
    cost_matrix: tuple[tuple[float, ...], ...]
    groups: list[Group]
    rng: SeededRandom
    max_column_assignments: int
    max_assignments: int
    verbose: bool = False
    run_log: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Freeze the cost matrix."""
        self.cost_matrix = tuple(tuple(row) for row in self.cost_matrix)

    @property
    def rows(self) -> int:
        return len(self.cost_matrix)

    @property
    def cols(self) -> int:
        return len(self.cost_matrix[0]) if self.cost_matrix else 0

    def cost(self, row: int, col: int) -> float:
        return self.cost_matrix[row][col]

    def log(self, message: str) -> None:
        """Record a diagnostic message, printing it in verbose runs."""
        self.run_log.append(message)
        if self.verbose:
            print(message)
