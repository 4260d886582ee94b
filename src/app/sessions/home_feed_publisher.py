"""Publicador do estado da tela inicial para observadores da UI.

Mantém um único HomeFeedState corrente e notifica assinantes a cada
substituição. O estado só é trocado por snapshots completos.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.home_feed import HomeFeedState

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.home_feed_observer import HomeFeedObserverProtocol

logger = logging.getLogger(__name__)


class HomeFeedPublisher:
    """Estado observável com assinatura explícita."""

    __slots__ = ("_observers", "_state")

    def __init__(self, initial: HomeFeedState | None = None) -> None:
        self._state = initial or HomeFeedState.loading()
        self._observers: list[HomeFeedObserverProtocol] = []

    @property
    def state(self) -> HomeFeedState:
        """Snapshot publicado mais recente."""
        return self._state

    def subscribe(self, observer: HomeFeedObserverProtocol) -> Callable[[], None]:
        """Registra observador e retorna função para cancelar a assinatura.

        O observador não recebe o estado atual na assinatura, apenas as
        próximas publicações.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def publish(self, state: HomeFeedState) -> None:
        """Substitui o estado e notifica todos os observadores.

        Falha de um observador é registrada e não impede os demais.
        """
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception(
                    "home_feed_observer_failed",
                    extra={"status": state.status.value},
                )
