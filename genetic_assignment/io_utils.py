"""
I/O utilities for the genetic assignment solver.

Handles problem file loading (YAML or JSON) and result serialization.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml


def load_problem(problem_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a problem file.

    File format (YAML, or JSON which YAML also parses):
        data: [[1, 2], [2, 1]]       # cost matrix, or list of agents with answers
        rowNames: [alice, bob]       # matrix input only
        colNames: [kiln, lathe]      # matrix input only

    Args:
        problem_path: Path to problem file

    Returns:
        Dictionary with "data", "rowNames" and "colNames" keys

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a valid problem
    """
    problem_path = Path(problem_path)

    if not problem_path.exists():
        raise FileNotFoundError(f"Problem file not found: {problem_path}")

    try:
        with open(problem_path, 'r') as f:
            problem = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid problem file {problem_path}: {e}")

    if not isinstance(problem, dict) or 'data' not in problem:
        raise ValueError(f"Invalid problem file {problem_path}. Expected a mapping with 'data'")

    return {
        'data': problem['data'],
        'rowNames': problem.get('rowNames', problem.get('row_names')),
        'colNames': problem.get('colNames', problem.get('col_names')),
    }


def save_results(
    results: Union[List[Dict[str, Any]], Dict[str, Any]],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save solver results to a JSON file.

    Args:
        results: Result list (or error dictionary) returned by the solver
        output_path: Path for output JSON
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        'saved_at': datetime.now().isoformat(),
        'results': results,
    }

    with open(output_path, 'w') as f:
        json.dump(payload, f, indent=2, default=str)

    return output_path


def load_results(results_path: Union[str, Path]) -> Any:
    """
    Load results previously written by save_results.

    Args:
        results_path: Path to results JSON

    Returns:
        The stored result list or error dictionary
    """
    results_path = Path(results_path)

    if not results_path.exists():
        raise FileNotFoundError(f"Results file not found: {results_path}")

    with open(results_path, 'r') as f:
        return json.load(f)['results']
