"""Run configuration for the dictionary creator."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .errors import ConfigError

# --- RULES ---
RULE_FREQUENT = "933150"
RULE_RARE = "933151"
RULE_WORDS = "933161"
ALL_RULES = (RULE_FREQUENT, RULE_RARE, RULE_WORDS)

# --- DEFAULTS ---
DEFAULT_AGE_LIMIT = 30
DEFAULT_FREQUENCY_LIMIT = 90000
DEFAULT_SPELL_PATH = Path("../fp-finder/spell.sh")
DEFAULT_DATA_DIR = Path("../../rules")
DEFAULT_RA_DIR = Path("../../regex-assembly")
DEFAULT_HIGH_RISK_PATH = Path("php-high-risk-functions.txt")

TOKEN_ENV = "GITHUB_TOKEN"

# --- FILE NAMES ---
R933150_FILENAME = "php-function-names-933150.data"
R933151_FILENAME = "php-function-names-933151.data"
R933160_FILENAME = "933160.ra"
R933161_FILENAME = "933161.ra"
FREQUENCIES_FILENAME = "php-function-frequencies.txt"
ERRORS_FILENAME = "php-function-frequency-errors.txt"


def parse_rules(raw: str | Iterable[str]) -> frozenset[str]:
    """Parse a space separated rule list, rejecting unknown rules."""
    parts = raw.split() if isinstance(raw, str) else [str(r).strip() for r in raw]
    rules = [part for part in parts if part]
    if not rules:
        raise ConfigError("No rules selected.")
    for rule in rules:
        if rule not in ALL_RULES:
            raise ConfigError(f"Rule {rule} is not available.")
    return frozenset(rules)


def _non_negative_int(value, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}.") from None
    if number < 0:
        raise ConfigError(f"{name} must not be negative, got {number}.")
    return number


@dataclass(frozen=True)
class RunConfig:
    """All parameters of a single run. Built once and passed down, never mutated."""

    github_token: str = field(default="", repr=False)
    age_limit: int = DEFAULT_AGE_LIMIT
    frequency_limit: int = DEFAULT_FREQUENCY_LIMIT
    rules: frozenset[str] = frozenset(ALL_RULES)
    frequency_store: Optional[Path] = None
    php_repo: Optional[Path] = None
    spell_path: Path = DEFAULT_SPELL_PATH
    data_dir: Path = DEFAULT_DATA_DIR
    ra_dir: Path = DEFAULT_RA_DIR
    high_risk_path: Path = DEFAULT_HIGH_RISK_PATH
    error_report: Optional[Path] = None
    verbose: bool = False

    @classmethod
    def from_args(cls, args, environ: Mapping[str, str] = os.environ) -> "RunConfig":
        """Build a config from parsed CLI arguments plus the environment."""
        return cls(
            github_token=environ.get(TOKEN_ENV, ""),
            age_limit=_non_negative_int(args.agelimit, "Age limit"),
            frequency_limit=_non_negative_int(args.frequencylimit, "Frequency limit"),
            rules=parse_rules(args.rules),
            frequency_store=Path(args.frequencylist) if args.frequencylist else None,
            php_repo=Path(args.phprepo) if args.phprepo else None,
            spell_path=Path(args.spell),
            data_dir=Path(args.data_dir),
            ra_dir=Path(args.ra_dir),
            high_risk_path=Path(args.high_risk),
            error_report=Path(args.error_report) if args.error_report else None,
            verbose=bool(args.verbose),
        )

    def wants(self, rule: str) -> bool:
        return rule in self.rules

    @property
    def stricter_sibling_path(self) -> Path:
        return self.ra_dir / R933160_FILENAME

    def output_path(self, rule: str) -> Path:
        if rule == RULE_FREQUENT:
            return self.data_dir / R933150_FILENAME
        if rule == RULE_RARE:
            return self.data_dir / R933151_FILENAME
        if rule == RULE_WORDS:
            return self.ra_dir / R933161_FILENAME
        raise ConfigError(f"Rule {rule} is not available.")

    def validate(self) -> "RunConfig":
        """Check everything that must hold before any work starts."""
        if not self.github_token:
            raise ConfigError(f"Env variable {TOKEN_ENV} to access GitHub is not set.")
        if self.age_limit < 0 or self.frequency_limit < 0:
            raise ConfigError("Age limit and frequency limit must not be negative.")
        parse_rules(self.rules)
        if self.frequency_store is not None and not self.frequency_store.is_file():
            raise ConfigError(f"{self.frequency_store} is not existing.")
        if self.php_repo is not None and not self.php_repo.is_dir():
            raise ConfigError("Path to PHP repository passed on command line is not existing.")
        if self.wants(RULE_WORDS):
            if not self.stricter_sibling_path.is_file():
                raise ConfigError(f"{self.stricter_sibling_path} is not existing.")
        if self.wants(RULE_FREQUENT) and not self.high_risk_path.is_file():
            raise ConfigError(f"{self.high_risk_path} is not existing.")
        for rule in self.rules:
            if not self.output_path(rule).parent.is_dir():
                raise ConfigError(f"Output directory {self.output_path(rule).parent} is not existing.")
        return self


__all__ = [
    "RunConfig",
    "parse_rules",
    "ALL_RULES",
    "RULE_FREQUENT",
    "RULE_RARE",
    "RULE_WORDS",
    "R933150_FILENAME",
    "R933151_FILENAME",
    "R933160_FILENAME",
    "R933161_FILENAME",
    "FREQUENCIES_FILENAME",
    "ERRORS_FILENAME",
]
