"""Apportion a project's costs to the categories a scheme recognizes."""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..models.project_costs import ProjectCosts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Apportionment:
    """Eligible cost total and the labels of the cost lines that contributed."""

    total: float = 0.0
    matched_labels: list[str] = field(default_factory=list)
    map_provided: bool = True


def apportion(costs: ProjectCosts, eligible_costs: Optional[Mapping[str, bool]]) -> Apportionment:
    """Sum the cost lines marked eligible in ``eligible_costs``.

    A line contributes when its key maps to True and its amount is strictly
    positive. Lines are visited in the fixed category-then-field order.

    A scheme without any eligible-costs map apportions nothing: blanket
    eligibility is never assumed. An empty map also yields zero; the two cases
    are told apart by ``map_provided``.
    """
    if eligible_costs is None:
        logger.debug("No eligible-costs map configured; apportioning nothing")
        return Apportionment(map_provided=False)

    total = 0.0
    matched: list[str] = []
    for line, item in costs.iter_lines():
        if eligible_costs.get(line.eligible_key) and item.amount > 0:
            total += item.amount
            matched.append(line.label)

    return Apportionment(total=total, matched_labels=matched)
