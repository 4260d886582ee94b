"""
Máquina de estados de uma tentativa de bootstrap.

Uma instância por tentativa: LOADING → exatamente um estado terminal.
"""

from typing import Any

from fsm.states.bootstrap import (
    DEFAULT_INITIAL_STATE,
    BootstrapStatus,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class BootstrapStateMachine:
    """
    Controla o status de uma tentativa de bootstrap.

    Attributes:
        current_state: Estado atual da máquina
        history: Histórico de transições realizadas
    """

    __slots__ = ("_attempt_id", "_current_state", "_history")

    def __init__(self, attempt_id: str = "") -> None:
        self._current_state = DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._attempt_id = attempt_id

    @property
    def current_state(self) -> BootstrapStatus:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def attempt_id(self) -> str:
        return self._attempt_id

    @property
    def is_terminal(self) -> bool:
        """Verifica se está em estado terminal."""
        return is_terminal(self._current_state)

    def get_valid_targets(self) -> frozenset[BootstrapStatus]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: BootstrapStatus,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho
            metadata: Dados adicionais para auditoria (nunca tokens)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)
        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual para logs."""
        return {
            "attempt_id": self._attempt_id,
            "current_state": self._current_state.value,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
        }
