"""
Configuration for normal generation.

A config document is a YAML mapping, for example:

    counter_clockwise: false
    index_property: vertex_indices

Both keys are optional.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from plykit.errors import ConfigError
from plykit.normals import NormalGenerator

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """
    Settings for a NormalGenerator.

    Properties:
        counter_clockwise: Winding convention of the faces (default True)
        index_property: Face list property with vertex indices (None: auto-detect)
    """

    counter_clockwise: bool = True
    index_property: Optional[str] = None

    def create_generator(self) -> NormalGenerator:
        return NormalGenerator(
            counter_clockwise=self.counter_clockwise,
            index_property=self.index_property,
        )


def config_from_dict(d: Optional[Dict[str, Any]]) -> GeneratorConfig:
    """
    Build a GeneratorConfig from a plain mapping.

    Raises:
        ConfigError: On unknown keys or values of the wrong type
    """
    if d is None:
        return GeneratorConfig()
    if not isinstance(d, dict):
        raise ConfigError(f"Config must be a mapping, got {type(d).__name__}")

    known = {f.name for f in fields(GeneratorConfig)}
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

    ccw = d.get("counter_clockwise", True)
    if not isinstance(ccw, bool):
        raise ConfigError(f"counter_clockwise must be true or false, got {ccw!r}")

    index_property = d.get("index_property")
    if index_property is not None and not isinstance(index_property, str):
        raise ConfigError(f"index_property must be a string, got {index_property!r}")

    return GeneratorConfig(counter_clockwise=ccw, index_property=index_property)


def config_from_yaml(s: str) -> GeneratorConfig:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML config: {e}")
    return config_from_dict(d)


def load_config(path: Union[str, Path]) -> GeneratorConfig:
    """
    Read a GeneratorConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the document is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    logger.debug(f"Loading generator config from {path}")
    return config_from_yaml(path.read_text(encoding="utf-8"))
