"""
Parameterized UPDATE construction for partial product updates.

Column names only ever come from ``UPDATABLE_COLUMNS``; values only ever travel
as positional parameters, never inside the SQL text.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

TABLE = "products"
UPDATABLE_COLUMNS = ("name", "price", "quantity")
PLACEHOLDER = "%s"


@dataclass(frozen=True)
class Assignment:
    column: str
    placeholder: str
    value: Any


@dataclass(frozen=True)
class UpdateSet:
    assignments: Tuple[Assignment, ...]
    target_id: int

    @property
    def sql(self) -> str:
        set_clause = ", ".join(f"{a.column} = {a.placeholder}" for a in self.assignments)
        return f"UPDATE {TABLE} SET {set_clause} WHERE id = {PLACEHOLDER}"

    @property
    def params(self) -> Tuple[Any, ...]:
        # same order as the placeholders in ``sql``; the id comes last
        return tuple(a.value for a in self.assignments) + (self.target_id,)


def build_update(fields: Mapping[str, Any], target_id: int) -> UpdateSet:
    unknown = set(fields) - set(UPDATABLE_COLUMNS)
    if unknown:
        raise ValueError(f"Columns not updatable: {', '.join(sorted(unknown))}")
    if not fields:
        raise ValueError("At least one column is required")

    assignments = tuple(
        Assignment(column=column, placeholder=PLACEHOLDER, value=fields[column])
        for column in UPDATABLE_COLUMNS
        if column in fields
    )
    return UpdateSet(assignments=assignments, target_id=target_id)
