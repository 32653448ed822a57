"""Runtime configuration for building generators.

A :class:`GeneratorConfig` enumerates the knobs that select the generator
flavour: arithmetic policy, integer representation, whether iteration is
available and the seed pair.  Configurations can be loaded from JSON or YAML
files; the file format is picked from the suffix.

Example YAML document::

    policy: checked
    representation: u32
    iterable: true
    seed: [0, 1]
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .arithmetic import ArithmeticPolicy
from .generator import FibonacciGenerator
from .integers import UINT64, Representation, resolve_representation

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigurationError",
    "GeneratorConfig",
    "load_generator_config",
]

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})
_KNOWN_KEYS = frozenset({"policy", "representation", "width", "iterable", "seed"})


class ConfigurationError(ValueError):
    """Raised when a generator configuration cannot be interpreted."""


@dataclass(frozen=True)
class GeneratorConfig:
    """Selects policy, representation, iterability and seed of a generator."""

    policy: ArithmeticPolicy = ArithmeticPolicy.CHECKED
    representation: Representation = UINT64
    iterable: bool = True
    seed: Tuple[Optional[int], Optional[int]] = field(default=(None, None))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "GeneratorConfig":
        """Validate ``payload`` and build a configuration from it.

        ``width`` is accepted as an alias of ``representation``.  Missing keys
        fall back to the dataclass defaults.
        """

        if not isinstance(payload, Mapping):
            raise ConfigurationError("Generator configuration must be a mapping")
        unknown = sorted(set(payload) - _KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(
                "Unknown generator configuration keys: " + ", ".join(unknown)
            )
        if "representation" in payload and "width" in payload:
            raise ConfigurationError("Specify either 'representation' or 'width', not both")

        try:
            policy = ArithmeticPolicy.parse(payload.get("policy", ArithmeticPolicy.CHECKED))
            raw_representation = payload.get("representation", payload.get("width", UINT64))
            representation = resolve_representation(raw_representation)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(str(exc)) from exc

        iterable = payload.get("iterable", True)
        if not isinstance(iterable, bool):
            raise ConfigurationError("'iterable' must be a boolean")

        seed = _parse_seed(payload.get("seed"))
        return cls(
            policy=policy,
            representation=representation,
            iterable=iterable,
            seed=seed,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "policy": self.policy.value,
            "representation": self.representation.label,
            "iterable": self.iterable,
            "seed": list(self.seed),
        }

    def build(self) -> FibonacciGenerator:
        """Instantiate a generator, reporting bad seeds as configuration errors."""

        try:
            return FibonacciGenerator.from_config(self)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid seed: {exc}") from exc


def _parse_seed(raw: Any) -> Tuple[Optional[int], Optional[int]]:
    if raw is None:
        return (None, None)
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
        raise ConfigurationError("'seed' must be a list of two integers")
    if len(raw) != 2:
        raise ConfigurationError("'seed' must contain exactly two integers")
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ConfigurationError("'seed' must contain integers")
    return (raw[0], raw[1])


def load_generator_config(path: Union[str, Path, None]) -> GeneratorConfig:
    """Load a :class:`GeneratorConfig` from ``path`` (JSON or YAML).

    ``None`` returns the defaults: checked policy over ``u64`` with the
    canonical ``0, 1`` seed and iteration enabled.
    """

    if path is None:
        return GeneratorConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    try:
        text = config_path.read_text(encoding="utf-8")
        if config_path.suffix.lower() in _YAML_SUFFIXES:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

    if payload is None:
        payload = {}
    config = GeneratorConfig.from_mapping(payload)
    logger.debug("Loaded generator configuration from %s: %s", config_path, config.to_dict())
    return config
