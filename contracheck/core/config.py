"""
Contract vocabularies, type tables and runtime settings
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .models import OutcomeKind, ValueConstraint

# Contract DSL tokens
CONSTRAINT_TOKENS = {
    "_": ValueConstraint.ANY,
    "null": ValueConstraint.NULL,
    "!null": ValueConstraint.NOT_NULL,
    "true": ValueConstraint.TRUE,
    "false": ValueConstraint.FALSE
}

OUTCOME_TOKENS = {
    "_": OutcomeKind.ANY,
    "any": OutcomeKind.ANY,
    "null": OutcomeKind.NULL,
    "!null": OutcomeKind.NOT_NULL,
    "true": OutcomeKind.TRUE,
    "false": OutcomeKind.FALSE,
    "fail": OutcomeKind.FAIL,
    "this": OutcomeKind.THIS,
    "new": OutcomeKind.NEW
}

PARAMETER_OUTCOME_PREFIX = "param"

CLAUSE_SEPARATOR = ";"
CONSTRAINT_SEPARATOR = ","
ARROW = "->"

# Python annotation tables
PRIMITIVE_TYPES = {"int", "float", "complex", "bool"}
BOOLEAN_TYPES = {"bool"}
UNKNOWN_TYPES = {"Any", "object"}
OPTIONAL_WRAPPERS = {"Optional"}
UNION_WRAPPERS = {"Union"}
SELF_TYPES = {"Self"}

# Same bound the data flow runner uses for states per branch
MAX_TRACKED_REGIONS = 300

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@dataclass
class Settings:
    """Runtime settings read from the environment (and .env)"""
    max_tracked_regions: int = MAX_TRACKED_REGIONS
    log_level: str = "WARNING"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            max_tracked_regions=int(os.getenv("CONTRACHECK_MAX_REGIONS", MAX_TRACKED_REGIONS)),
            log_level=os.getenv("CONTRACHECK_LOG_LEVEL", "WARNING").upper(),
            host=os.getenv("CONTRACHECK_HOST", DEFAULT_HOST),
            port=int(os.getenv("CONTRACHECK_PORT", DEFAULT_PORT))
        )
