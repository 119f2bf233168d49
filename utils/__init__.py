"""
Utilities Package
Gas estimation and RPC connection management
"""

from .gas_calculator import GasCalculator, apply_gas_buffer
from .rpc_manager import RPCManager

__all__ = [
    'GasCalculator',
    'apply_gas_buffer',
    'RPCManager'
]
