"""Mock hotel booking cost lookup."""

from .schemas import HotelBookingArgs, Number

COST_PER_NIGHT_USD = 120


def get_hotel_booking(city: str, nights: Number) -> dict:
    """
    Price a hotel stay at the flat nightly rate.

    ``nights`` goes straight into the arithmetic, so fractional or
    negative values produce fractional or negative totals.
    """
    return {
        "city": city,
        "nights": nights,
        "costPerNightUSD": COST_PER_NIGHT_USD,
        "totalHotelCostUSD": COST_PER_NIGHT_USD * nights,
    }


def _handle_hotel_booking(args: HotelBookingArgs) -> dict:
    return get_hotel_booking(args.city, args.nights)


def _register():
    from .registry import ToolParameter, ToolRegistry

    ToolRegistry.register(
        name="get_hotel_booking",
        description="Returns hotel cost per night in USD",
        parameters=[
            ToolParameter("city", "string", description="City to stay in"),
            ToolParameter("nights", "number", description="Number of nights"),
        ],
        args_model=HotelBookingArgs,
        handler=_handle_hotel_booking,
    )


_register()
