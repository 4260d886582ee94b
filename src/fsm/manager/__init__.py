"""
Exports públicos do módulo fsm/manager.

Máquina de estados de uma tentativa de bootstrap.
"""

from fsm.manager.machine import BootstrapStateMachine

__all__ = ["BootstrapStateMachine"]
