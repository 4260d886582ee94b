"""Exceções de domínio para falhas recuperáveis de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura dos colaboradores externos."""


class CredentialStoreError(InfrastructureError):
    """Falha ao ler ou gravar credenciais no armazenamento seguro."""


class RegistryError(InfrastructureError):
    """Falha ao carregar o registro de servidores/contas configurados."""
