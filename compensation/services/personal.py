"""
Personal objective scoring.

Every surface that shows an objective percentage (dashboard, detail view,
bonus table) goes through ``effective_value`` / ``aggregate_personal`` so the
numbers agree.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from compensation.schemas.bonus import ObjectiveScore, PersonalScore, SubObjectiveScore
from compensation.schemas.objective import Objective, Periodicity
from compensation.utils.numbers import clamp, mean, round_half_up

logger = logging.getLogger(__name__)


def effective_value(objective: Objective) -> float:
    """Finalized achievement wins over self-reported progress"""
    if objective.is_evaluated:
        return clamp(objective.achievement_percentage or 0)
    return objective.progress_percentage


def score_objective(main: Objective, subs: Sequence[Objective]) -> ObjectiveScore:
    own_value = effective_value(main)
    sub_scores = [
        SubObjectiveScore(id=s.id, title=s.title, effective_value=effective_value(s), evaluated=s.is_evaluated)
        for s in subs
    ]

    if main.periodicity != Periodicity.ANNUAL and sub_scores:
        progress = round_half_up(mean(s.effective_value for s in sub_scores))
        evaluated = main.is_evaluated or all(s.evaluated for s in sub_scores)
    else:
        progress = own_value
        evaluated = main.is_evaluated

    return ObjectiveScore(
        id=main.id,
        title=main.title,
        periodicity=main.periodicity,
        effective_value=own_value,
        progress=progress,
        evaluated=evaluated,
        sub_objectives=sub_scores,
    )


def aggregate_personal(objectives: Sequence[Objective]) -> PersonalScore:
    mains: List[Objective] = []
    subs_by_parent: Dict[str, List[Objective]] = defaultdict(list)
    for objective in objectives:
        if objective.is_main:
            mains.append(objective)
        else:
            subs_by_parent[objective.parent_objective_id].append(objective)

    main_ids = {m.id for m in mains}
    for parent_id, orphans in subs_by_parent.items():
        if parent_id not in main_ids:
            logger.warning("Ignoring %d sub-objective(s) of unknown objective %s", len(orphans), parent_id)

    scores = [score_objective(m, subs_by_parent.get(m.id, [])) for m in mains]
    return PersonalScore(
        objectives=scores,
        average_completion=mean(clamp(s.progress) for s in scores),
        evaluated_count=sum(1 for s in scores if s.evaluated),
        total_count=len(scores),
    )
