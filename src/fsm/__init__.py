"""
Módulo FSM: status do bootstrap de sessão.

Estrutura:
    - states/: Estados publicados para a UI (BootstrapStatus)
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - manager/: Máquina de estados por tentativa (BootstrapStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import BootstrapStateMachine
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    BootstrapStatus,
    is_terminal,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "BootstrapStateMachine",
    "BootstrapStatus",
    "StateTransition",
    "TransitionResult",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "validate_transition_map",
]
