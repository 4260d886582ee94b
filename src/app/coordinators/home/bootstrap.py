"""Bootstrap de sessão: credencial → perfil → views → estado da home.

Fluxo linear por tentativa:
    1. Publica LOADING com coleções vazias
    2. Sem servidor configurado → NEEDS_SERVER_SELECTION
    3. Primeiro par (conta, servidor) do registro + token salvo
    4. Requisição A (perfil) falhou → SIGNED_IN_ERROR
    5. Requisição B (views) é best-effort; termina sempre em READY

Nenhuma exceção escapa sem um status terminal publicado.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING
from urllib.parse import quote

from pydantic import ValidationError

from app.domain.home_feed import ActiveSession, HomeFeedState
from app.domain.media_browser import LibraryViewsResponse, UserProfile
from app.infra.http import HttpError
from app.observability import bootstrap_attempt, record_bootstrap_outcome, record_latency
from app.services.authorization import authorization_headers, build_authorization_header
from app.services.home_feed_assembly import (
    library_names_from_views,
    ordered_library_ids,
    recently_added_eligible_ids,
)
from app.sessions.home_feed_publisher import HomeFeedPublisher
from config.logging import log_fallback
from fsm import BootstrapStateMachine, BootstrapStatus

if TYPE_CHECKING:
    from app.domain.account import Account, ServerConnection
    from app.protocols.account_registry import AccountRegistryProtocol
    from app.protocols.credential_store import CredentialStoreProtocol
    from app.protocols.http_client import HttpClientProtocol
    from app.services.authorization import ClientIdentity

logger = logging.getLogger(__name__)

PROFILE_PATH = "/Users/Me"
VIEWS_PATH_TEMPLATE = "/Users/{user_id}/Views"


class SessionBootstrapCoordinator:
    """Executa a sequência de inicialização e publica o HomeFeedState.

    Cada chamada a `bootstrap()` trabalha em estado isolado. Se uma nova
    chamada começar antes de a anterior terminar, os resultados da
    anterior são descartados em vez de publicados.
    """

    __slots__ = (
        "_credentials",
        "_generation",
        "_http",
        "_identity",
        "_publisher",
        "_registry",
    )

    def __init__(
        self,
        *,
        registry: AccountRegistryProtocol,
        credentials: CredentialStoreProtocol,
        http_client: HttpClientProtocol,
        identity: ClientIdentity,
        publisher: HomeFeedPublisher | None = None,
    ) -> None:
        self._registry = registry
        self._credentials = credentials
        self._http = http_client
        self._identity = identity
        self._publisher = publisher or HomeFeedPublisher()
        self._generation = 0

    @property
    def publisher(self) -> HomeFeedPublisher:
        return self._publisher

    @property
    def state(self) -> HomeFeedState:
        """Último snapshot publicado."""
        return self._publisher.state

    async def bootstrap(self) -> HomeFeedState:
        """Roda uma tentativa completa até um status terminal.

        Returns:
            Snapshot terminal desta tentativa (publicado apenas se ainda
            for a tentativa mais recente).
        """
        self._generation += 1
        generation = self._generation
        started = time.perf_counter()

        with bootstrap_attempt() as attempt_id:
            machine = BootstrapStateMachine(attempt_id)
            self._publish(generation, HomeFeedState.loading())
            logger.info("session_bootstrap_started", extra={"generation": generation})

            final_state, trigger = await self._run()

            result = machine.transition(final_state.status, trigger)
            if result.transition is not None:
                logger.info("session_bootstrap_transition", extra=result.transition.to_log_dict())
            self._publish(generation, final_state)

            record_bootstrap_outcome(
                final_state.status.value,
                (time.perf_counter() - started) * 1000,
            )
            logger.info("session_bootstrap_finished", extra=final_state.to_log_dict())
            return final_state

    async def _run(self) -> tuple[HomeFeedState, str]:
        selected = self._select_configured()
        if selected is None:
            return (
                HomeFeedState.build(status=BootstrapStatus.NEEDS_SERVER_SELECTION),
                "no_configured_server",
            )

        account, server = selected
        token = self._lookup_token(account)
        session = ActiveSession(
            server=server,
            account=account,
            authorization=build_authorization_header(
                self._identity,
                device_id=account.device_identifier,
                token=token,
            ),
        )

        profile = await self._fetch_profile(session)
        if profile is None:
            return (
                HomeFeedState.build(status=BootstrapStatus.SIGNED_IN_ERROR, session=session),
                "profile_request_failed",
            )

        configuration = profile.configuration
        ordered_ids = ordered_library_ids(configuration)
        eligible_ids = recently_added_eligible_ids(
            ordered_ids,
            configuration.latest_items_excludes,
        )

        # Views dependem da identidade resolvida pelo perfil
        user_id = profile.user_id or account.account_id
        names = await self._fetch_library_names(session, user_id)

        return (
            HomeFeedState.build(
                status=BootstrapStatus.READY,
                ordered_library_ids=ordered_ids,
                recently_added_eligible_ids=eligible_ids,
                library_names=names,
                session=session,
            ),
            "views_request_settled",
        )

    def _select_configured(self) -> tuple[Account, ServerConnection] | None:
        try:
            configured = self._registry.list_configured()
        except Exception:
            logger.exception("account_registry_unavailable")
            return None
        if not configured:
            logger.info("no_configured_server")
            return None
        return configured[0]

    def _lookup_token(self, account: Account) -> str:
        # Token ausente segue adiante: o servidor rejeita e cai em SIGNED_IN_ERROR
        try:
            token = self._credentials.lookup(account.account_id)
        except Exception:
            logger.exception("credential_store_unavailable")
            return ""
        if token is None:
            logger.info("credential_missing")
            return ""
        return token

    async def _fetch_profile(self, session: ActiveSession) -> UserProfile | None:
        """Requisição A. Qualquer falha vira None (sinal de re-autenticação)."""
        started = time.perf_counter()
        try:
            body = await self._http.send(
                "GET",
                session.server.url_for(PROFILE_PATH),
                headers=authorization_headers(session.authorization),
            )
            profile = UserProfile.model_validate_json(body)
        except HttpError as exc:
            logger.warning(
                "profile_request_failed",
                extra={"status_code": exc.status_code, "error_type": type(exc).__name__},
            )
            profile = None
        except ValidationError:
            logger.warning("profile_response_invalid")
            profile = None
        except Exception:
            logger.exception("profile_request_unexpected_error")
            profile = None
        record_latency(
            "profile_request",
            (time.perf_counter() - started) * 1000,
            ok=profile is not None,
        )
        return profile

    async def _fetch_library_names(self, session: ActiveSession, user_id: str) -> dict[str, str]:
        """Requisição B. Falha é absorvida e resulta em mapa vazio."""
        started = time.perf_counter()
        path = VIEWS_PATH_TEMPLATE.format(user_id=quote(user_id, safe=""))
        reason: str | None = None
        names: dict[str, str] = {}
        try:
            body = await self._http.send(
                "GET",
                session.server.url_for(path),
                headers=authorization_headers(session.authorization),
            )
            names = library_names_from_views(LibraryViewsResponse.model_validate_json(body).items)
        except HttpError as exc:
            reason = f"http_status_{exc.status_code}" if exc.status_code else "http_transport"
        except ValidationError:
            reason = "invalid_response"
        except Exception:
            logger.exception("views_request_unexpected_error")
            reason = "unexpected_error"

        elapsed_ms = (time.perf_counter() - started) * 1000
        record_latency("views_request", elapsed_ms, ok=reason is None)
        if reason is not None:
            log_fallback(logger, "library_names", reason=reason, elapsed_ms=elapsed_ms)
        return names

    def _publish(self, generation: int, state: HomeFeedState) -> None:
        if generation != self._generation:
            logger.info(
                "stale_bootstrap_result_discarded",
                extra={"generation": generation, "status": state.status.value},
            )
            return
        self._publisher.publish(state)
