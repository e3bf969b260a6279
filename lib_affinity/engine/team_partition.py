"""Team partitioning optimizer.

Splits a member list into teams of a fixed size so that the mean pairwise
fit under the active :class:`GroupingCriteria` is approximately maximal:

1. shuffle the members with the injected random source,
2. seed the teams (bucketed by unit, round-robin across units, or sequential
   depending on the criteria),
3. greedily place the rest into the open team they fit best,
4. optionally refine with pairwise swaps between teams,
5. attach diversity counts and the mean fit of every team.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Sequence

from lib_affinity.engine.clustering import unit_of
from lib_affinity.engine.subscores import job_level_score, location_score, org_proximity_score
from lib_affinity.errors import InvalidTeamSizeError
from lib_affinity.job_levels import resolve_job_level
from lib_affinity.locations import normalize_location
from lib_affinity.member_models import Member
from lib_affinity.personality_types import (
    NEUTRAL_SCORE,
    is_same_temperament,
    normalize_code,
    personality_compatibility,
)
from lib_affinity.team_models import (
    GroupingCriteria,
    PartitionResult,
    RemainderPolicy,
    Team,
    TeamDiversity,
)

logger = logging.getLogger(__name__)

DEFAULT_SWAP_ITERATIONS = 100

# Diversity rewards
DIFFERENT_SCORE = 1.0
SAME_UNIT_SCORE = 0.2
SAME_TYPE_SCORE = 0.1
SAME_TEMPERAMENT_SCORE = 0.4
SAME_LOCATION_SCORE = 0.3
# Homogeneity rewards
SAME_LEVEL_SCORE = 1.0
DIFFERENT_LEVEL_SCORE = 0.4


# ---------------------------------------------------------------------------
# Fit scores
# ---------------------------------------------------------------------------
def _level_label(label: str | None) -> str | None:
    level = resolve_job_level(label)
    return level.label if level is not None else None


def pair_fit(a: Member, b: Member, criteria: GroupingCriteria) -> float:
    """Mean contribution of the active criteria for one member pair.

    Personality criteria only count when both members have a type. With no
    contributing criterion the fit is the neutral 0.5.
    """
    scores: list[float] = []

    if criteria.diverse_departments:
        scores.append(DIFFERENT_SCORE if unit_of(a) != unit_of(b) else SAME_UNIT_SCORE)
    elif criteria.similar_departments:
        scores.append(org_proximity_score(a.org_path, b.org_path, prefer_cross=False))

    code_a = normalize_code(a.personality)
    code_b = normalize_code(b.personality)
    if code_a and code_b:
        if criteria.similar_personality:
            scores.append(personality_compatibility(code_a, code_b))
        elif criteria.diverse_personality:
            if code_a == code_b:
                scores.append(SAME_TYPE_SCORE)
            elif is_same_temperament(code_a, code_b):
                scores.append(SAME_TEMPERAMENT_SCORE)
            else:
                scores.append(DIFFERENT_SCORE)

    if criteria.same_location:
        scores.append(location_score(a.location, b.location))
    elif criteria.mixed_locations:
        same = normalize_location(a.location) == normalize_location(b.location)
        scores.append(SAME_LOCATION_SCORE if same else DIFFERENT_SCORE)

    if criteria.mixed_job_levels:
        scores.append(job_level_score(a.job_level, b.job_level))
    elif criteria.same_job_levels:
        level_a = _level_label(a.job_level)
        level_b = _level_label(b.job_level)
        if level_a is None or level_b is None:
            scores.append(NEUTRAL_SCORE)
        else:
            scores.append(SAME_LEVEL_SCORE if level_a == level_b else DIFFERENT_LEVEL_SCORE)

    if not scores:
        return NEUTRAL_SCORE
    return sum(scores) / len(scores)


def team_fit(candidate: Member, team: Sequence[Member], criteria: GroupingCriteria) -> float:
    """Mean fit of ``candidate`` against the current members (0.5 for an empty team)."""
    if not team:
        return NEUTRAL_SCORE
    return sum(pair_fit(candidate, m, criteria) for m in team) / len(team)


def average_fit(team: Sequence[Member], criteria: GroupingCriteria) -> float:
    """Mean intra-team pairwise fit; 1.0 for teams of one or zero members."""
    if len(team) <= 1:
        return 1.0
    total = 0.0
    pairs = 0
    for i in range(len(team)):
        for j in range(i + 1, len(team)):
            total += pair_fit(team[i], team[j], criteria)
            pairs += 1
    return total / pairs


def team_diversity(team: Sequence[Member]) -> TeamDiversity:
    """Distinct units, personality types and locations represented in ``team``."""
    units = {unit_of(m) for m in team}
    types = {normalize_code(m.personality) for m in team} - {None}
    locations = {normalize_location(m.location) for m in team} - {None}
    return TeamDiversity(
        unit_count=len(units),
        personality_count=len(types),
        location_count=len(locations),
    )


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------
def _buckets_by_unit(members: Sequence[Member]) -> dict[str, list[Member]]:
    buckets: dict[str, list[Member]] = {}
    for m in members:
        buckets.setdefault(unit_of(m), []).append(m)
    return buckets


def _seed_by_department(members: Sequence[Member], teams: list[list[Member]], team_size: int) -> None:
    """Fill whole teams from the largest unit buckets, then place leftovers near their unit."""
    buckets = sorted(_buckets_by_unit(members).values(), key=len, reverse=True)

    next_team = 0
    leftovers: list[Member] = []
    for bucket in buckets:
        queue = list(bucket)
        while len(queue) >= team_size and next_team < len(teams):
            teams[next_team].extend(queue[:team_size])
            queue = queue[team_size:]
            next_team += 1
        leftovers.extend(queue)

    open_teams = teams[next_team:]
    for bucket in sorted(_buckets_by_unit(leftovers).values(), key=len, reverse=True):
        for member in bucket:
            unit = unit_of(member)
            target = next(
                (t for t in open_teams if len(t) < team_size and any(unit_of(m) == unit for m in t)),
                None,
            )
            if target is None:
                candidates = [t for t in open_teams if len(t) < team_size]
                if not candidates:
                    continue
                target = min(candidates, key=len)
            target.append(member)


def _seed_round_robin(members: Sequence[Member], teams: list[list[Member]]) -> None:
    """Give every team one seed member, cycling through the unit buckets."""
    queues = list(_buckets_by_unit(members).values())
    cursor = 0
    for team in teams:
        if not any(queues):
            break
        while not queues[cursor]:
            cursor = (cursor + 1) % len(queues)
        team.append(queues[cursor].pop(0))
        cursor = (cursor + 1) % len(queues)


def _seed_sequential(members: Sequence[Member], teams: list[list[Member]]) -> None:
    for team, member in zip(teams, members):
        team.append(member)


def _greedy_fill(
    members: Sequence[Member],
    teams: list[list[Member]],
    team_size: int,
    criteria: GroupingCriteria,
) -> list[Member]:
    """Place each unassigned member into the best-fitting open team; return those left over."""
    assigned = {m.id for team in teams for m in team}
    ungrouped: list[Member] = []
    for member in members:
        if member.id in assigned:
            continue
        best: list[Member] | None = None
        best_score = -1.0
        for team in teams:
            if len(team) >= team_size:
                continue
            score = team_fit(member, team, criteria)
            if score > best_score:
                best_score = score
                best = team
        if best is None:
            ungrouped.append(member)
        else:
            best.append(member)
            assigned.add(member.id)
    return ungrouped


# ---------------------------------------------------------------------------
# Local search
# ---------------------------------------------------------------------------
def optimize_swaps(
    teams: list[list[Member]],
    criteria: GroupingCriteria,
    max_iterations: int = DEFAULT_SWAP_ITERATIONS,
    time_budget: float | None = None,
) -> int:
    """Swap members between team pairs while the pair's summed mean fit strictly improves.

    Mutates ``teams`` in place. Stops after a pass with no improving swap, after
    ``max_iterations`` passes, or once ``time_budget`` seconds have elapsed.

    Returns:
        Number of swaps kept.
    """
    started = time.monotonic()
    kept = 0
    for iteration in range(max_iterations):
        improved = False
        for t1 in range(len(teams)):
            for t2 in range(t1 + 1, len(teams)):
                first, second = teams[t1], teams[t2]
                for i in range(len(first)):
                    for j in range(len(second)):
                        before = average_fit(first, criteria) + average_fit(second, criteria)
                        first[i], second[j] = second[j], first[i]
                        after = average_fit(first, criteria) + average_fit(second, criteria)
                        if after > before:
                            improved = True
                            kept += 1
                        else:
                            first[i], second[j] = second[j], first[i]
        logger.debug("Swap pass %d: %d swaps kept so far", iteration + 1, kept)
        if not improved:
            break
        if time_budget is not None and time.monotonic() - started > time_budget:
            logger.warning("Swap search stopped after %d passes (time budget)", iteration + 1)
            break
    return kept


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def partition_teams(
    members: Sequence[Member],
    team_size: int,
    criteria: GroupingCriteria | None = None,
    optimize: bool = True,
    max_swap_iterations: int = DEFAULT_SWAP_ITERATIONS,
    rng: random.Random | None = None,
    remainder_policy: RemainderPolicy = "append",
    time_budget: float | None = None,
) -> PartitionResult:
    """Partition ``members`` into ``len(members) // team_size`` teams.

    Args:
        members: Population to split; not mutated.
        team_size: Target size of every team.
        criteria: Resolved grouping criteria (default: none active).
        optimize: Run the swap refinement after greedy assignment.
        max_swap_iterations: Cap on full swap passes.
        rng: Random source for the initial shuffle (default: a fresh
            ``random.Random()``). Pass a seeded instance for reproducible output.
        remainder_policy: ``"append"`` adds the ``n mod team_size`` leftover
            members to the last team; ``"separate"`` returns them in
            ``PartitionResult.remainder``.
        time_budget: Optional wall-clock limit in seconds for the swap search.

    Returns:
        PartitionResult with numbered teams and the remainder ids.

    Raises:
        InvalidTeamSizeError: If ``team_size < 1`` or ``members`` is empty.
    """
    if team_size < 1:
        raise InvalidTeamSizeError(f"team_size must be at least 1, got {team_size}")
    if not members:
        raise InvalidTeamSizeError("Cannot partition an empty member list")
    if remainder_policy not in ("append", "separate"):
        raise ValueError(f"Unknown remainder policy: {remainder_policy!r}")

    criteria = criteria or GroupingCriteria()
    rng = rng or random.Random()

    shuffled = list(members)
    rng.shuffle(shuffled)

    if team_size > len(shuffled):
        logger.warning(
            "team_size %d exceeds member count %d; building a single team",
            team_size,
            len(shuffled),
        )
    team_count = max(1, len(shuffled) // team_size)
    teams: list[list[Member]] = [[] for _ in range(team_count)]

    if criteria.similar_departments:
        _seed_by_department(shuffled, teams, team_size)
    elif criteria.any_diverse:
        _seed_round_robin(shuffled, teams)
    else:
        _seed_sequential(shuffled, teams)

    ungrouped = _greedy_fill(shuffled, teams, team_size, criteria)

    if optimize and len(teams) > 1:
        optimize_swaps(teams, criteria, max_swap_iterations, time_budget)

    if ungrouped and remainder_policy == "append":
        teams[-1].extend(ungrouped)
        ungrouped = []

    result = PartitionResult(
        teams=[
            Team(
                team_index=index + 1,
                name=f"Team {index + 1}",
                member_ids=[m.id for m in team],
                diversity=team_diversity(team),
                average_fit=average_fit(team, criteria),
            )
            for index, team in enumerate(teams)
        ],
        remainder=[m.id for m in ungrouped],
        team_size=team_size,
        remainder_policy=remainder_policy,
    )
    logger.info(
        "Partitioned %d members into %d teams (size %d, criteria=%s, remainder=%d)",
        len(shuffled),
        len(result.teams),
        team_size,
        criteria.active or "none",
        len(result.remainder),
    )
    return result
