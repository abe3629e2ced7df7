"""
Mock flight schedule lookup.

Returns a fixed duration and price for any route; a round trip costs and
takes exactly twice the one-way figures.
"""

from .schemas import FlightScheduleArgs

ONE_WAY_DURATION_HOURS = 5.5
ONE_WAY_COST_USD = 420

ROUND_TRIP = "round-trip"


def get_flight_schedule(origin: str, destination: str, trip_type: str) -> dict:
    """
    Look up the flight schedule and price for a route.

    Origin and destination are opaque labels. Only the exact string
    ``"round-trip"`` doubles the one-way figures; every other trip type,
    including misspellings, is priced as one-way.

    Args:
        origin: Departure city
        destination: Arrival city
        trip_type: "one-way" or "round-trip"

    Returns:
        Dictionary with the route, total flight time and total cost
    """
    legs = 2 if trip_type == ROUND_TRIP else 1
    return {
        "origin": origin,
        "destination": destination,
        "tripType": trip_type,
        "totalFlightTimeHours": ONE_WAY_DURATION_HOURS * legs,
        "totalCostUSD": ONE_WAY_COST_USD * legs,
    }


def _handle_flight_schedule(args: FlightScheduleArgs) -> dict:
    return get_flight_schedule(args.origin, args.destination, args.trip_type)


# Register tool with the registry
def _register():
    from .registry import ToolParameter, ToolRegistry

    ToolRegistry.register(
        name="get_flight_schedule",
        description="Returns flight schedule and pricing in USD",
        parameters=[
            ToolParameter("origin", "string", description="Departure city"),
            ToolParameter("destination", "string", description="Arrival city"),
            ToolParameter(
                "tripType",
                "string",
                enum=("one-way", ROUND_TRIP),
                description="Whether the trip is one-way or a round trip",
            ),
        ],
        args_model=FlightScheduleArgs,
        handler=_handle_flight_schedule,
    )


_register()
