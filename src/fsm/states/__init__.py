"""
Exports públicos do módulo fsm/states.

Estados do bootstrap de sessão.
"""

from fsm.states.bootstrap import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    BootstrapStatus,
    is_terminal,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "BootstrapStatus",
    "is_terminal",
]
