from enum import Enum


class SpecificationOperator(str, Enum):
    """Operators a serialised specification node may carry."""

    # Comparison
    IEQ = "ieq"
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="

    # Text and collections
    ICONTAINS = "icontains"
    IHAS = "ihas"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"


LOGICAL_OPERATORS = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT}
)
