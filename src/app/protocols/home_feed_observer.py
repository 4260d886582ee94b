"""Contrato de observadores do estado da tela inicial."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.home_feed import HomeFeedState


class HomeFeedObserverProtocol(Protocol):
    """Callable notificado a cada snapshot publicado."""

    def __call__(self, state: HomeFeedState) -> None: ...
