"""AI Infrastructure - Adapters for the generative scoring oracle.

This module contains concrete implementations of AI domain ports.
"""

from .openai_provider import OpenAIOracleProvider
from .cost_calculator import calculate_cost_micros, format_cost_usd

__all__ = [
    "OpenAIOracleProvider",
    "calculate_cost_micros",
    "format_cost_usd",
]
