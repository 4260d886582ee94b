"""Coordenação da inicialização da tela inicial."""

from app.coordinators.home.bootstrap import SessionBootstrapCoordinator

__all__ = ["SessionBootstrapCoordinator"]
