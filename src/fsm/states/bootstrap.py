"""
Estados do bootstrap de sessão exibidos para a UI.

Uma tentativa de bootstrap começa em LOADING e termina em exatamente
um estado terminal. Uma nova tentativa cria uma nova máquina.
"""

from enum import StrEnum


class BootstrapStatus(StrEnum):
    """
    Sinal de estado publicado para a camada de UI.

    Estado não-terminal:
        - LOADING: Sequência de bootstrap em andamento

    Estados terminais:
        - NEEDS_SERVER_SELECTION: Nenhum servidor/conta configurado
        - SIGNED_IN_ERROR: Credencial salva rejeitada (dispara re-autenticação)
        - READY: Sequência concluída (não garante que todos os dados existam)
    """

    LOADING = "loading"
    NEEDS_SERVER_SELECTION = "needsServerSelection"
    SIGNED_IN_ERROR = "signedInError"
    READY = "ready"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[BootstrapStatus] = frozenset({
    BootstrapStatus.NEEDS_SERVER_SELECTION,
    BootstrapStatus.SIGNED_IN_ERROR,
    BootstrapStatus.READY,
})

DEFAULT_INITIAL_STATE: BootstrapStatus = BootstrapStatus.LOADING


def is_terminal(state: BootstrapStatus) -> bool:
    """Verifica se o estado encerra a tentativa de bootstrap."""
    return state in TERMINAL_STATES
