"""
CLI module for the genetic assignment solver.

Handles run configuration loading, validation, and solver dispatch.
"""

from typing import Dict, Any
from pathlib import Path
import yaml

from .data_models import GeneticOptions
from .io_utils import load_problem, save_results
from .orchestration import start, GeneticError
from .result_stats import summarize_assignment


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Problem data and solver options are checked by the solver itself; this
    only checks the layout of the run file.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ConfigValidationError("Run configuration must be a mapping")

    for field in ['input', 'output']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")
        if not isinstance(config[field], dict):
            raise ConfigValidationError(f"'{field}' must be a dictionary")

    if 'problem' not in config['input']:
        raise ConfigValidationError("Missing required field: 'input.problem'")

    problem_path = Path(config['input']['problem'])
    if not problem_path.exists():
        raise ConfigValidationError(f"Problem file not found: {problem_path}")

    if 'path' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.path'")

    output_path = Path(config['output']['path'])
    overwrite = config['output'].get('overwrite', False)
    if output_path.exists() and not overwrite:
        raise ConfigValidationError(
            f"Output file already exists: {output_path}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    options = config.get('options', {})
    if options is not None and not isinstance(options, dict):
        raise ConfigValidationError("'options' must be a dictionary")

    if 'max_selection' in config and not isinstance(config['max_selection'], int):
        raise ConfigValidationError(
            f"'max_selection' must be an integer, got: {config['max_selection']}"
        )


def run_from_config(config_path: str) -> Any:
    """
    Load run configuration, solve the problem and save the results.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Result list, or GeneticError if the solver failed

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    problem = load_problem(config['input']['problem'])
    options = GeneticOptions.from_dict(config.get('options'))
    verbose = bool(config.get('verbose', False))

    print(f"Seed: {options.seed}")
    print(f"Population: {options.population_size}, max generations: {options.max_generations}")

    results = start(
        problem['data'],
        options,
        row_names=problem['rowNames'],
        col_names=problem['colNames'],
        verbose=verbose
    )

    output_path = config['output']['path']
    overwrite = config['output'].get('overwrite', False)

    if isinstance(results, GeneticError):
        save_results(results.to_dict(), output_path, overwrite=overwrite)
        print(f"Solver failed ({results.code}): {results.message}")
        return results

    save_results(results, output_path, overwrite=overwrite)

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    total_agents = len(problem['data'])
    total_tasks = len(problem['colNames'] or problem['data'][0]['answers'])
    for rank, result in enumerate(results, start=1):
        stats = summarize_assignment(
            result['assignment'], total_agents, total_tasks, config.get('max_selection', 0)
        )
        print(
            f"#{rank}: total cost {result['totalCost']}, distance {result['distance']:.4f}, "
            f"mean cost {stats['meanCost']:.2f}, rating {stats['assignmentRating']:.2f}"
        )
    print(f"Results: {output_path}")

    return results
