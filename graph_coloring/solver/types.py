from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from ..graph import NodeId
from ..palette import Color

SolverName = Literal["backtracking", "z3"]

SolveStatus = Literal["colored", "uncolorable", "aborted"]


@dataclass(frozen=True)
class SolveResult:
    status: SolveStatus
    node_color: Optional[Mapping[NodeId, Color]]  # read-only; None unless colored
    solver: SolverName
    steps: int = 0  # candidate colors tried
    reason: str = ""

    @property
    def colored(self) -> bool:
        return self.status == "colored"

    @property
    def uncolorable(self) -> bool:
        return self.status == "uncolorable"

    @property
    def aborted(self) -> bool:
        return self.status == "aborted"
