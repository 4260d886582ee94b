"""Estado observável da tela inicial (home feed).

Snapshots imutáveis: cada publicação substitui o estado inteiro, então
observadores nunca veem listas de tentativas diferentes misturadas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from fsm.states.bootstrap import BootstrapStatus

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.account import Account, ServerConnection


@dataclass(frozen=True, slots=True)
class ActiveSession:
    """Servidor, conta e header de autorização da tentativa atual.

    Também serve de pré-preenchimento para a re-autenticação quando o
    status é `signedInError`.
    """

    server: ServerConnection
    account: Account
    authorization: str = field(repr=False)

    @property
    def reauth_device_id(self) -> str:
        return self.account.device_identifier


def _frozen_names(names: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(names or {}))


@dataclass(frozen=True, slots=True)
class HomeFeedState:
    """Resultado publicado pelo coordenador de bootstrap.

    Attributes:
        status: Sinal de estado para a UI
        ordered_library_ids: Ordem de navegação definida pelo servidor
        recently_added_eligible_ids: Subsequência de ordered_library_ids
            não excluída de 'adicionados recentemente'
        library_names: id da biblioteca → nome de exibição
        session: Contexto da sessão ativa (None sem servidor configurado)
    """

    status: BootstrapStatus = BootstrapStatus.LOADING
    ordered_library_ids: tuple[str, ...] = ()
    recently_added_eligible_ids: tuple[str, ...] = ()
    library_names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    session: ActiveSession | None = None

    @classmethod
    def loading(cls, session: ActiveSession | None = None) -> HomeFeedState:
        """Estado inicial de uma tentativa, com coleções vazias."""
        return cls(status=BootstrapStatus.LOADING, session=session)

    @classmethod
    def build(
        cls,
        *,
        status: BootstrapStatus,
        ordered_library_ids: tuple[str, ...] = (),
        recently_added_eligible_ids: tuple[str, ...] = (),
        library_names: Mapping[str, str] | None = None,
        session: ActiveSession | None = None,
    ) -> HomeFeedState:
        return cls(
            status=status,
            ordered_library_ids=tuple(ordered_library_ids),
            recently_added_eligible_ids=tuple(recently_added_eligible_ids),
            library_names=_frozen_names(library_names),
            session=session,
        )

    def library_name(self, library_id: str) -> str:
        """Nome da biblioteca ou string vazia se o servidor não informou."""
        return self.library_names.get(library_id, "")

    def to_log_dict(self) -> dict[str, Any]:
        """Resumo sem tokens para logs estruturados."""
        return {
            "status": self.status.value,
            "library_count": len(self.ordered_library_ids),
            "recently_added_count": len(self.recently_added_eligible_ids),
            "named_library_count": len(self.library_names),
            "server_id": self.session.server.server_id if self.session else None,
        }


__all__ = ["ActiveSession", "HomeFeedState"]
