"""
Effective nullability facts for parameters
"""

import json
import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from ..core.errors import NullabilityFactsError
from ..core.models import FunctionSignature, Nullability, Parameter, TypeInfo

logger = logging.getLogger(__name__)


def declared_nullability(type_info: TypeInfo) -> Nullability:
    """A non-optional reference annotation declares the parameter not-null"""
    if type_info.unknown or type_info.optional or type_info.primitive or type_info.void:
        return Nullability.UNCONSTRAINED
    return Nullability.NOT_NULL_DECLARED


class NullabilityOracle:
    """
    Read-only nullability facts.

    Declared facts come from annotations. Inferred facts are supplied by an
    external inference tool as {qualified function name: [parameter, ...]}.
    """

    def __init__(self, inferred: Optional[Mapping[str, Iterable[str]]] = None):
        self.inferred: Dict[str, FrozenSet[str]] = {
            name: frozenset(params) for name, params in (inferred or {}).items()
        }

    def effective_nullability(self, signature: FunctionSignature, parameter: Parameter) -> Nullability:
        declared = declared_nullability(parameter.type)
        if declared is not Nullability.UNCONSTRAINED:
            return declared
        if parameter.name in self.inferred.get(signature.name, frozenset()):
            return Nullability.NOT_NULL_INFERRED
        return Nullability.UNCONSTRAINED

    @classmethod
    def from_file(cls, path: str) -> "NullabilityOracle":
        """
        Load inferred facts from a JSON file.

        Raises:
            NullabilityFactsError: if the file cannot be read or has the wrong shape
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise NullabilityFactsError(f"Cannot read nullability facts from {path}: {e}") from e

        if not isinstance(data, dict) or not all(
                isinstance(params, list) and all(isinstance(p, str) for p in params)
                for params in data.values()):
            raise NullabilityFactsError(
                f"Nullability facts in {path} must map function names to lists of parameter names")

        logger.debug("Loaded inferred not-null facts for %d functions from %s", len(data), path)
        return cls(data)
