"""Testes do SessionBootstrapCoordinator."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from app.coordinators.home import SessionBootstrapCoordinator
from app.domain.account import ServerConnection
from app.domain.home_feed import HomeFeedState
from app.infra.http import HttpClient, HttpError
from app.infra.stores import MemoryAccountRegistry, MemoryCredentialStore
from app.services.authorization import AUTHORIZATION_HEADER, ClientIdentity
from fsm import BootstrapStatus
from tests.fakes.fake_media_server import (
    ACCOUNT_ID,
    BASE_ADDRESS,
    DEVICE_ID,
    TOKEN,
    FakeHttpClient,
    RaisingCredentialStore,
    RaisingRegistry,
    make_account,
    make_server,
    profile_body,
    views_body,
)

PROFILE = "/Users/Me"
VIEWS = f"/Users/{ACCOUNT_ID}/Views"
IDENTITY = ClientIdentity(client_name="SwiftFin", client_version="0.0.1", device_name="ipad")


def _registry() -> MemoryAccountRegistry:
    return MemoryAccountRegistry(servers=[make_server()], accounts=[make_account()])


def _credentials(token: str | None = TOKEN) -> MemoryCredentialStore:
    store = MemoryCredentialStore()
    if token is not None:
        store.save(ACCOUNT_ID, token)
    return store


def _coordinator(
    http: FakeHttpClient,
    registry: object | None = None,
    credentials: object | None = None,
) -> SessionBootstrapCoordinator:
    return SessionBootstrapCoordinator(
        registry=registry if registry is not None else _registry(),  # type: ignore[arg-type]
        credentials=credentials if credentials is not None else _credentials(),  # type: ignore[arg-type]
        http_client=http,
        identity=IDENTITY,
    )


def _recorder(coordinator: SessionBootstrapCoordinator) -> list[HomeFeedState]:
    seen: list[HomeFeedState] = []
    coordinator.publisher.subscribe(seen.append)
    return seen


class TestNoConfiguredServer:
    """Sem servidor configurado."""

    @pytest.mark.asyncio
    async def test_empty_registry_needs_server_selection(self) -> None:
        """Registro vazio termina em needsServerSelection sem requisições."""
        http = FakeHttpClient()
        coordinator = _coordinator(http, registry=MemoryAccountRegistry())
        seen = _recorder(coordinator)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.NEEDS_SERVER_SELECTION
        assert state.ordered_library_ids == ()
        assert state.recently_added_eligible_ids == ()
        assert dict(state.library_names) == {}
        assert state.session is None
        assert http.requests == []
        assert [s.status for s in seen] == [
            BootstrapStatus.LOADING,
            BootstrapStatus.NEEDS_SERVER_SELECTION,
        ]

    @pytest.mark.asyncio
    async def test_registry_failure_needs_server_selection(self) -> None:
        """Falha do registro também termina em needsServerSelection."""
        http = FakeHttpClient()
        coordinator = _coordinator(http, registry=RaisingRegistry())

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.NEEDS_SERVER_SELECTION
        assert http.requests == []


class TestProfileRequest:
    """Requisição A (perfil + configuração)."""

    @pytest.mark.asyncio
    async def test_ordered_and_eligible_libraries(self) -> None:
        """OrderedViews [A,B,C] com exclusão [B] gera elegíveis [A,C]."""
        http = FakeHttpClient(
            routes={
                PROFILE: profile_body(ordered=["A", "B", "C"], excludes=["B"]),
                VIEWS: views_body([]),
            }
        )
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.READY
        assert state.ordered_library_ids == ("A", "B", "C")
        assert state.recently_added_eligible_ids == ("A", "C")

    @pytest.mark.asyncio
    async def test_requests_carry_authorization_header(self) -> None:
        """Ambas as requisições enviam o mesmo header MediaBrowser."""
        http = FakeHttpClient(
            routes={PROFILE: profile_body(ordered=["A"]), VIEWS: views_body([])}
        )
        coordinator = _coordinator(http)

        await coordinator.bootstrap()

        expected = (
            'MediaBrowser Client="SwiftFin", Device="ipad", '
            f'DeviceId="{DEVICE_ID}", Version="0.0.1", Token="{TOKEN}"'
        )
        assert [r.url for r in http.requests] == [
            f"{BASE_ADDRESS}/Users/Me",
            f"{BASE_ADDRESS}/Users/{ACCOUNT_ID}/Views",
        ]
        assert all(r.method == "GET" for r in http.requests)
        assert all(r.headers[AUTHORIZATION_HEADER] == expected for r in http.requests)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            HttpError("http_status_error", status_code=401),
            HttpError("http_connection_error", is_retryable=True),
            HttpError("http_retryable_status", status_code=503, is_retryable=True),
        ],
    )
    async def test_failure_is_signed_in_error_without_views_call(
        self, failure: HttpError
    ) -> None:
        """Qualquer falha da requisição A vira signedInError e B não é chamada."""
        http = FakeHttpClient(routes={PROFILE: failure, VIEWS: views_body([])})
        coordinator = _coordinator(http)
        seen = _recorder(coordinator)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.SIGNED_IN_ERROR
        assert http.calls_to(PROFILE) == 1
        assert http.calls_to("/Views") == 0
        assert state.ordered_library_ids == ()
        assert [s.status for s in seen] == [
            BootstrapStatus.LOADING,
            BootstrapStatus.SIGNED_IN_ERROR,
        ]

    @pytest.mark.asyncio
    async def test_unparseable_body_is_signed_in_error(self) -> None:
        """Corpo que não é JSON também dispara re-autenticação."""
        http = FakeHttpClient(routes={PROFILE: b"<html>login</html>", VIEWS: views_body([])})
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.SIGNED_IN_ERROR
        assert http.calls_to("/Views") == 0

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_signed_in_error(self) -> None:
        """Exceção inesperada do cliente não escapa do bootstrap."""
        http = FakeHttpClient(routes={PROFILE: RuntimeError("boom")})
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.SIGNED_IN_ERROR

    @pytest.mark.asyncio
    async def test_signed_in_error_keeps_reauth_prefill(self) -> None:
        """signedInError publica servidor e device id para re-autenticação."""
        http = FakeHttpClient(routes={PROFILE: HttpError("http_status_error", status_code=401)})
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert state.session is not None
        assert state.session.server == make_server()
        assert state.session.reauth_device_id == DEVICE_ID

    @pytest.mark.asyncio
    async def test_missing_credential_sends_empty_token(self) -> None:
        """Sem token salvo, segue com Token vazio e o servidor decide."""
        http = FakeHttpClient(routes={PROFILE: HttpError("http_status_error", status_code=401)})
        coordinator = _coordinator(http, credentials=_credentials(token=None))

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.SIGNED_IN_ERROR
        assert http.requests[0].headers[AUTHORIZATION_HEADER].endswith('Token=""')

    @pytest.mark.asyncio
    async def test_credential_store_failure_treated_as_missing(self) -> None:
        """Falha do credential store equivale a token ausente."""
        http = FakeHttpClient(
            routes={PROFILE: profile_body(ordered=["A"]), VIEWS: views_body([])}
        )
        coordinator = _coordinator(http, credentials=RaisingCredentialStore())

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.READY
        assert http.requests[0].headers[AUTHORIZATION_HEADER].endswith('Token=""')

    @pytest.mark.asyncio
    async def test_malformed_configuration_defaults_to_empty(self) -> None:
        """Campos opcionais malformados viram listas vazias."""
        http = FakeHttpClient(
            routes={
                PROFILE: profile_body(ordered="A,B", excludes=None),
                VIEWS: views_body([]),
            }
        )
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.READY
        assert state.ordered_library_ids == ()
        assert state.recently_added_eligible_ids == ()

    @pytest.mark.asyncio
    async def test_views_use_identity_resolved_by_profile(self) -> None:
        """A requisição B usa o Id retornado pelo perfil."""
        http = FakeHttpClient(
            routes={
                PROFILE: profile_body(ordered=["A"], user_id="resolved-9"),
                "/Users/resolved-9/Views": views_body([{"Id": "A", "Name": "Filmes"}]),
            }
        )
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert http.calls_to("/Users/resolved-9/Views") == 1
        assert dict(state.library_names) == {"A": "Filmes"}


class TestViewsRequest:
    """Requisição B (views)."""

    @pytest.mark.asyncio
    async def test_views_failure_still_ready(self) -> None:
        """Falha de B mantém dados de A e termina em ready."""
        http = FakeHttpClient(
            routes={
                PROFILE: profile_body(ordered=["A", "B", "C"], excludes=["B"]),
                VIEWS: HttpError("http_status_error", status_code=500),
            }
        )
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.READY
        assert dict(state.library_names) == {}
        assert state.ordered_library_ids == ("A", "B", "C")
        assert state.recently_added_eligible_ids == ("A", "C")

    @pytest.mark.asyncio
    async def test_views_invalid_body_still_ready(self) -> None:
        """Corpo inválido em B é absorvido."""
        http = FakeHttpClient(routes={PROFILE: profile_body(ordered=["A"]), VIEWS: b"{"})
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.READY
        assert dict(state.library_names) == {}

    @pytest.mark.asyncio
    async def test_library_names_include_unordered_ids(self) -> None:
        """Nomes vêm de B inteiro; ids sem nome ficam sem entrada."""
        http = FakeHttpClient(
            routes={
                PROFILE: profile_body(ordered=["A", "B"]),
                VIEWS: views_body(
                    [{"Id": "A", "Name": "Movies"}, {"Id": "X", "Name": "Unknown"}]
                ),
            }
        )
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert dict(state.library_names) == {"A": "Movies", "X": "Unknown"}
        assert "B" not in state.library_names
        assert state.library_name("B") == ""

    @pytest.mark.asyncio
    async def test_duplicate_view_ids_last_write_wins(self) -> None:
        """Ids repetidos em B não quebram; vence o último."""
        http = FakeHttpClient(
            routes={
                PROFILE: profile_body(ordered=["A"]),
                VIEWS: views_body([{"Id": "A", "Name": "Old"}, {"Id": "A", "Name": "New"}]),
            }
        )
        coordinator = _coordinator(http)

        state = await coordinator.bootstrap()

        assert dict(state.library_names) == {"A": "New"}


class TestRetryAndIsolation:
    """Re-execução e isolamento entre tentativas."""

    @pytest.mark.asyncio
    async def test_retry_after_signed_in_error_resets_state(self) -> None:
        """Nova tentativa publica loading limpo e refaz a sequência inteira."""
        http = FakeHttpClient(routes={PROFILE: HttpError("http_status_error", status_code=401)})
        coordinator = _coordinator(http)
        await coordinator.bootstrap()
        seen = _recorder(coordinator)

        http.routes = {
            PROFILE: profile_body(ordered=["A", "B"], excludes=["A"]),
            VIEWS: views_body([{"Id": "B", "Name": "Shows"}]),
        }
        state = await coordinator.bootstrap()

        assert seen[0] == HomeFeedState.loading()
        assert seen[0].session is None
        assert state.status == BootstrapStatus.READY
        assert state.recently_added_eligible_ids == ("B",)
        assert dict(state.library_names) == {"B": "Shows"}
        assert http.calls_to(PROFILE) == 2

    @pytest.mark.asyncio
    async def test_successful_run_fully_replaces_previous_state(self) -> None:
        """Dados da tentativa anterior não vazam para a seguinte."""
        http = FakeHttpClient(
            routes={
                PROFILE: profile_body(ordered=["A", "B"]),
                VIEWS: views_body([{"Id": "A", "Name": "Movies"}]),
            }
        )
        coordinator = _coordinator(http)
        await coordinator.bootstrap()

        http.routes = {
            PROFILE: profile_body(ordered=["C"]),
            VIEWS: HttpError("http_status_error", status_code=500),
        }
        state = await coordinator.bootstrap()

        assert state.ordered_library_ids == ("C",)
        assert dict(state.library_names) == {}

    @pytest.mark.asyncio
    async def test_stale_attempt_is_not_published(self) -> None:
        """Tentativa superada por outra não publica resultado atrasado."""
        release = asyncio.Event()
        http = FakeHttpClient(
            routes={PROFILE: profile_body(ordered=["OLD"]), VIEWS: views_body([])},
            gates={PROFILE: release},
        )
        coordinator = _coordinator(http)
        seen = _recorder(coordinator)

        first = asyncio.create_task(coordinator.bootstrap())
        await asyncio.sleep(0)

        http.gates = {}
        http.routes = {PROFILE: profile_body(ordered=["NEW"]), VIEWS: views_body([])}
        second_state = await coordinator.bootstrap()

        release.set()
        first_state = await first

        assert second_state.ordered_library_ids == ("NEW",)
        assert first_state.status == BootstrapStatus.READY
        assert coordinator.state is second_state
        assert [s.status for s in seen] == [
            BootstrapStatus.LOADING,
            BootstrapStatus.LOADING,
            BootstrapStatus.READY,
        ]


class TestWithHttpxClient:
    """Fluxo completo com o HttpClient real sobre MockTransport."""

    @pytest.mark.asyncio
    async def test_redirected_server_stays_signed_in(self) -> None:
        """Servidor http que redireciona para https termina em READY."""
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.scheme == "http":
                target = request.url.copy_with(scheme="https", port=8096)
                return httpx.Response(301, headers={"Location": str(target)})
            assert request.headers[AUTHORIZATION_HEADER].endswith(f'Token="{TOKEN}"')
            if request.url.path == PROFILE:
                return httpx.Response(200, content=profile_body(ordered=["A"]))
            return httpx.Response(200, content=views_body([{"Id": "A", "Name": "Movies"}]))

        server = ServerConnection(
            server_id="srv-1",
            name="Casa",
            base_address="http://media.local:8096",
        )
        coordinator = SessionBootstrapCoordinator(
            registry=MemoryAccountRegistry(servers=[server], accounts=[make_account()]),
            credentials=_credentials(),
            http_client=HttpClient(transport=httpx.MockTransport(handler)),
            identity=IDENTITY,
        )

        state = await coordinator.bootstrap()

        assert state.status == BootstrapStatus.READY
        assert state.ordered_library_ids == ("A",)
        assert state.library_name("A") == "Movies"
