"""
Battle module.

Provides:
- GameState: Battle snapshot
- Trigger/filter evaluation and target selection
- DecisionEngine: evaluate_character, compute_decisions
- TickProcessor: process_tick, next_tick
- BattleSystem: Setup and run controller
"""

from tactics.battle.events import (
    BattleEvent,
    BattlePhase,
    GameEvent,
    TickEvent,
    DamageEvent,
    HealEvent,
    WhiffEvent,
    MovementEvent,
    DeathEvent,
    InterruptEvent,
    InterruptMissEvent,
    InterruptMissReason,
    ChargeEvent,
)
from tactics.battle.status import (
    BattleStatus,
    calculate_battle_status,
    calculate_pre_battle_status,
)
from tactics.battle.state import GameState
from tactics.battle.conditions import (
    evaluate_condition,
    evaluate_trigger,
    evaluate_triggers,
    evaluate_filter,
    failed_triggers,
)
from tactics.battle.targeting import TargetResolution, select_target
from tactics.battle.movement import (
    compute_move_destination,
    compute_multi_step_destination,
    compute_charge_destination,
)
from tactics.battle.decisions import (
    EvaluationStatus,
    RejectionReason,
    SkillEvaluation,
    CharacterEvaluation,
    Decision,
    evaluate_character,
    evaluate_all,
    compute_decisions,
)
from tactics.battle.resolution import TickResult, process_tick, next_tick
from tactics.battle.system import BattleSystem, faction_assigned_skill_ids

__all__ = [
    # Events
    "BattleEvent",
    "BattlePhase",
    "GameEvent",
    "TickEvent",
    "DamageEvent",
    "HealEvent",
    "WhiffEvent",
    "MovementEvent",
    "DeathEvent",
    "InterruptEvent",
    "InterruptMissEvent",
    "InterruptMissReason",
    "ChargeEvent",
    # Status / state
    "BattleStatus",
    "calculate_battle_status",
    "calculate_pre_battle_status",
    "GameState",
    # Evaluation
    "evaluate_condition",
    "evaluate_trigger",
    "evaluate_triggers",
    "evaluate_filter",
    "failed_triggers",
    "TargetResolution",
    "select_target",
    "compute_move_destination",
    "compute_multi_step_destination",
    "compute_charge_destination",
    "EvaluationStatus",
    "RejectionReason",
    "SkillEvaluation",
    "CharacterEvaluation",
    "Decision",
    "evaluate_character",
    "evaluate_all",
    "compute_decisions",
    # Ticks
    "TickResult",
    "process_tick",
    "next_tick",
    # Controller
    "BattleSystem",
    "faction_assigned_skill_ids",
]
