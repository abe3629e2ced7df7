"""
Travel Booking Tools Package

Available tools (registered in this order):
- get_flight_schedule: Mock flight duration and price
- get_hotel_booking: Mock hotel cost for a stay
- convert_currency: Mock currency conversion at a fixed rate
"""

from .registry import ToolDefinition, ToolParameter, ToolRegistry
from .flights import get_flight_schedule
from .hotels import get_hotel_booking
from .currency import convert_currency
from .dispatcher import execute_tool, get_tool, parse_arguments

__all__ = [
    "ToolDefinition",
    "ToolParameter",
    "ToolRegistry",
    "get_flight_schedule",
    "get_hotel_booking",
    "convert_currency",
    "execute_tool",
    "get_tool",
    "parse_arguments",
]
