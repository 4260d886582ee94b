"""
Regras de transição válidas entre estados do bootstrap.

LOADING só pode seguir para um estado terminal; estados terminais
não permitem saída (retry = nova máquina).
"""

from fsm.states.bootstrap import TERMINAL_STATES, BootstrapStatus

TransitionMap = dict[BootstrapStatus, frozenset[BootstrapStatus]]

VALID_TRANSITIONS: TransitionMap = {
    BootstrapStatus.LOADING: frozenset({
        BootstrapStatus.NEEDS_SERVER_SELECTION,
        BootstrapStatus.SIGNED_IN_ERROR,
        BootstrapStatus.READY,
    }),
    BootstrapStatus.NEEDS_SERVER_SELECTION: frozenset(),
    BootstrapStatus.SIGNED_IN_ERROR: frozenset(),
    BootstrapStatus.READY: frozenset(),
}


def get_valid_targets(state: BootstrapStatus) -> frozenset[BootstrapStatus]:
    """Retorna os estados de destino válidos (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: BootstrapStatus, to_state: BootstrapStatus) -> bool:
    """
    Verifica se uma transição é válida segundo as regras definidas.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino

    Returns:
        True se a transição é permitida, False caso contrário
    """
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in BootstrapStatus:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    return errors
