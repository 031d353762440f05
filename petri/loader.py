"""
YAML config loader with schema validation.

Loads SimulationConfig from YAML files and validates against a JSON schema.
Values that pass the schema are still clamped (SimulationConfig.sanitized)
before the engine sees them.
"""

import yaml
import json
from pathlib import Path
from typing import Optional
import jsonschema

from .data_types import SimulationConfig
from .constants import DEFAULT_CONFIG


PACKAGE_ROOT = Path(__file__).parent
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "data" / "default_config.yaml"
DEFAULT_SCHEMA_DIR = PACKAGE_ROOT / "schemas"


class ConfigLoadError(Exception):
    """Raised when config loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    if not file_path.exists():
        raise ConfigLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"YAML parse error in {file_path}: {e}") from e

    # Empty file parses to None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Expected a mapping at top level of {file_path}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        # Schema validation optional
        return

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise ConfigLoadError(f"Validation error in {data_path}: {e.message}") from e
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON schema {schema_path}: {e}") from e


def load_config(
    file_path: Path,
    schema_dir: Optional[Path] = DEFAULT_SCHEMA_DIR,
    verbose: bool = True
) -> SimulationConfig:
    """
    Load simulation config from YAML.

    Keys missing from the file fall back to DEFAULT_CONFIG.

    Args:
        file_path: YAML file with snake_case config keys
        schema_dir: Directory holding simulation_config.schema.json (None skips validation)
        verbose: Print [WARN] lines for clamped values

    Returns:
        Sanitized SimulationConfig

    Raises:
        ConfigLoadError: Missing file, YAML error, or schema violation
    """
    file_path = Path(file_path)
    data = load_yaml(file_path)

    # Validate if schema available
    if schema_dir:
        schema_path = Path(schema_dir) / "simulation_config.schema.json"
        validate_against_schema(data, schema_path, file_path)

    merged = dict(DEFAULT_CONFIG)
    merged.update(data)

    return SimulationConfig.from_dict(merged).sanitized(verbose=verbose)


def load_default_config(verbose: bool = True) -> SimulationConfig:
    """Load the config shipped with the package"""
    return load_config(DEFAULT_CONFIG_PATH, verbose=verbose)
