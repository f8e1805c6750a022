from openingodds.analysis.hypergeometric import (
    choose,
    generate_combined_formula,
    generate_formula,
    hypergeometric,
)
from openingodds.analysis.probability import ProbabilityEngine
from openingodds.analysis.validation import validate_combo

__all__ = [
    "ProbabilityEngine",
    "choose",
    "generate_combined_formula",
    "generate_formula",
    "hypergeometric",
    "validate_combo",
]
