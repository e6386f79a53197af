"""
Flow modules, one per Jupiter API
"""

from .base import FlowModule, OrderFlowModule
from .swap import SwapModule, DEFAULT_SWAP_REQUEST
from .swap_instructions import SwapInstructionsModule, DEFAULT_SWAP_INSTRUCTIONS_REQUEST
from .ultra import UltraModule, DEFAULT_ULTRA_REQUEST
from .trigger import TriggerModule, DEFAULT_TRIGGER_REQUEST
from .recurring import RecurringModule, DEFAULT_RECURRING_REQUEST

# CLI flow name -> module class
FLOW_MODULES = {
    SwapModule.name: SwapModule,
    SwapInstructionsModule.name: SwapInstructionsModule,
    UltraModule.name: UltraModule,
    TriggerModule.name: TriggerModule,
    RecurringModule.name: RecurringModule,
}

__all__ = [
    "FlowModule",
    "OrderFlowModule",
    "SwapModule",
    "SwapInstructionsModule",
    "UltraModule",
    "TriggerModule",
    "RecurringModule",
    "FLOW_MODULES",
    "DEFAULT_SWAP_REQUEST",
    "DEFAULT_SWAP_INSTRUCTIONS_REQUEST",
    "DEFAULT_ULTRA_REQUEST",
    "DEFAULT_TRIGGER_REQUEST",
    "DEFAULT_RECURRING_REQUEST",
]
