"""
Typed argument models for the travel tools.

The model sends arguments as an untyped JSON object; each tool validates
it against one of these models before running. Field aliases keep the
wire names the tool catalog advertises (``tripType``, ``from``, ``to``).
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class FlightScheduleArgs(BaseModel):
    """Arguments for ``get_flight_schedule``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    origin: str
    destination: str
    # Free string: anything other than "round-trip" is priced one-way
    trip_type: str = Field(alias="tripType")


class HotelBookingArgs(BaseModel):
    """Arguments for ``get_hotel_booking``."""

    model_config = ConfigDict(frozen=True)

    city: str
    nights: Number


class CurrencyConversionArgs(BaseModel):
    """Arguments for ``convert_currency``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    amount: Number
    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
