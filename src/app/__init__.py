"""App: bootstrap de sessão e agregação da tela inicial.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: fluxo de bootstrap (credencial → perfil → views → estado)
- domain/: contas, servidores, payloads da API e estado da home
- services/: header de autorização e montagem do estado derivado (sem IO)
- infra/: implementações concretas de IO (httpx, stores)
- protocols/: contratos dos colaboradores
- sessions/: publicação do estado para observadores
- observability/: correlação de logs e métricas

Padrão: app executa; fsm governa; config configura; utils apoia.
"""
