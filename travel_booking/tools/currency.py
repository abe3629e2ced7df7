"""
Mock currency conversion.

Uses a fixed rate of 1.0 for every currency pair; the codes are echoed
back so the answer can name them.
"""

from .schemas import CurrencyConversionArgs, Number

FIXED_RATE = 1.0


def convert_currency(amount: Number, from_currency: str, to_currency: str) -> dict:
    """Convert an amount between currencies at the fixed mock rate."""
    return {
        "from": from_currency,
        "to": to_currency,
        "originalAmount": amount,
        "convertedAmount": amount * FIXED_RATE,
    }


def _handle_convert_currency(args: CurrencyConversionArgs) -> dict:
    return convert_currency(args.amount, args.from_currency, args.to_currency)


def _register():
    from .registry import ToolParameter, ToolRegistry

    ToolRegistry.register(
        name="convert_currency",
        description="Converts an amount from one currency to another",
        parameters=[
            ToolParameter("amount", "number", description="Amount to convert"),
            ToolParameter("from", "string", description="Source currency code"),
            ToolParameter("to", "string", description="Target currency code"),
        ],
        args_model=CurrencyConversionArgs,
        handler=_handle_convert_currency,
    )


_register()
