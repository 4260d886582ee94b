"""Entrypoint do bootstrap da tela inicial.

Roda uma tentativa de bootstrap com as settings do ambiente e registra
cada estado publicado em log estruturado.

Uso:
    home-feed-bootstrap
    python -m app.app
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from app.bootstrap import get_coordinator, initialize_app, validate_runtime_settings
from config.logging import get_logger
from fsm import BootstrapStatus

if TYPE_CHECKING:
    from app.domain.home_feed import HomeFeedState

logger = get_logger(__name__)

# Código de saída por status terminal
EXIT_CODES: dict[BootstrapStatus, int] = {
    BootstrapStatus.READY: 0,
    BootstrapStatus.NEEDS_SERVER_SELECTION: 2,
    BootstrapStatus.SIGNED_IN_ERROR: 3,
}


def _log_state(state: HomeFeedState) -> None:
    logger.info(
        "home_feed_state_published",
        extra={
            **state.to_log_dict(),
            "recently_added": [
                {"id": library_id, "name": state.library_name(library_id)}
                for library_id in state.recently_added_eligible_ids
            ],
        },
    )


async def run() -> BootstrapStatus:
    """Executa uma tentativa de bootstrap e retorna o status terminal."""
    coordinator = get_coordinator()
    unsubscribe = coordinator.publisher.subscribe(_log_state)
    try:
        state = await coordinator.bootstrap()
    finally:
        unsubscribe()
    return state.status


def main() -> int:
    initialize_app()
    validate_runtime_settings()
    status = asyncio.run(run())
    return EXIT_CODES.get(status, 1)


if __name__ == "__main__":
    raise SystemExit(main())
