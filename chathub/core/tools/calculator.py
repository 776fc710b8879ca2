"""
Calculator tool.

Evaluates arithmetic expressions by walking the Python AST (no eval) and
converts between common units of length, weight, volume and temperature.

Dependencies: langchain_core.tools, pydantic
System role: Generic math tool for the chat agent
"""

import ast
import logging
import math
import operator
import random
from typing import Any, Callable

from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


def _sign(x: float) -> float:
    return float((x > 0) - (x < 0))


_FUNCTIONS: dict[str, Callable[..., float]] = {
    "abs": abs,
    "acos": math.acos,
    "asin": math.asin,
    "atan": math.atan,
    "atan2": math.atan2,
    "ceil": math.ceil,
    "cos": math.cos,
    "exp": math.exp,
    "floor": math.floor,
    "log": math.log,
    "log10": math.log10,
    "log2": math.log2,
    "max": max,
    "min": min,
    "pow": math.pow,
    "random": random.random,
    "round": round,
    "sign": _sign,
    "sin": math.sin,
    "sqrt": math.sqrt,
    "tan": math.tan,
    "trunc": math.trunc,
}

_CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
    "ln2": math.log(2),
    "ln10": math.log(10),
    "log2e": math.log2(math.e),
    "log10e": math.log10(math.e),
    "sqrt2": math.sqrt(2),
    "sqrt1_2": math.sqrt(0.5),
}

_BINARY_OPS: dict[type, Callable[[float, float], float]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS: dict[type, Callable[[float], float]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

INVALID_EXPRESSION = (
    "Invalid expression. Only numbers, basic operators (+, -, *, /, %, **), "
    "parentheses, and Math functions are allowed."
)

# Base unit per category: meters, kilograms, liters.
UNIT_CONVERSIONS: dict[str, dict[str, float]] = {
    "length": {
        "m": 1, "meter": 1, "meters": 1,
        "km": 1000, "kilometer": 1000, "kilometers": 1000,
        "cm": 0.01, "centimeter": 0.01, "centimeters": 0.01,
        "mm": 0.001, "millimeter": 0.001, "millimeters": 0.001,
        "mi": 1609.344, "mile": 1609.344, "miles": 1609.344,
        "yd": 0.9144, "yard": 0.9144, "yards": 0.9144,
        "ft": 0.3048, "foot": 0.3048, "feet": 0.3048,
        "in": 0.0254, "inch": 0.0254, "inches": 0.0254,
    },
    "weight": {
        "kg": 1, "kilogram": 1, "kilograms": 1,
        "g": 0.001, "gram": 0.001, "grams": 0.001,
        "mg": 0.000001, "milligram": 0.000001, "milligrams": 0.000001,
        "lb": 0.453592, "pound": 0.453592, "pounds": 0.453592,
        "oz": 0.0283495, "ounce": 0.0283495, "ounces": 0.0283495,
        "ton": 907.185, "tons": 907.185,
        "tonne": 1000, "tonnes": 1000,
    },
    "volume": {
        "l": 1, "liter": 1, "liters": 1,
        "ml": 0.001, "milliliter": 0.001, "milliliters": 0.001,
        "gal": 3.78541, "gallon": 3.78541, "gallons": 3.78541,
        "qt": 0.946353, "quart": 0.946353, "quarts": 0.946353,
        "pt": 0.473176, "pint": 0.473176, "pints": 0.473176,
        "cup": 0.236588, "cups": 0.236588,
        "floz": 0.0295735, "fluid ounce": 0.0295735, "fluid ounces": 0.0295735,
    },
}

_CELSIUS = ("c", "celsius")
_FAHRENHEIT = ("f", "fahrenheit")
_KELVIN = ("k", "kelvin")
_TEMPERATURE_UNITS = _CELSIUS + _FAHRENHEIT + _KELVIN


def _evaluate_node(node: ast.AST) -> float:
    if isinstance(node, ast.Expression):
        return _evaluate_node(node.body)

    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValueError(INVALID_EXPRESSION)
        return float(node.value)

    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left = _evaluate_node(node.left)
        right = _evaluate_node(node.right)
        return _BINARY_OPS[type(node.op)](left, right)

    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_evaluate_node(node.operand))

    if isinstance(node, ast.Name) and node.id.lower() in _CONSTANTS:
        return _CONSTANTS[node.id.lower()]

    if (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id.lower() in _FUNCTIONS
        and not node.keywords
    ):
        args = [_evaluate_node(arg) for arg in node.args]
        return float(_FUNCTIONS[node.func.id.lower()](*args))

    raise ValueError(INVALID_EXPRESSION)


def evaluate_expression(expression: str) -> float:
    """
    Safely evaluate a math expression.

    ``^`` is exponentiation; ``×``, ``÷`` and ``−`` are accepted as
    operators. Only numbers, arithmetic operators, parentheses and the
    whitelisted math functions and constants are allowed.

    Args:
        expression: Expression such as "2^10" or "sqrt(16) + sin(pi/2)"

    Returns:
        float: The finite result

    Raises:
        ValueError: If the expression is not allowed or has no finite value
    """
    cleaned = (
        expression.replace("×", "*")
        .replace("÷", "/")
        .replace("−", "-")
        .replace("^", "**")
    )
    try:
        tree = ast.parse(cleaned.strip(), mode="eval")
    except SyntaxError as e:
        raise ValueError(INVALID_EXPRESSION) from e

    try:
        result = _evaluate_node(tree)
    except (ZeroDivisionError, OverflowError, TypeError) as e:
        raise ValueError("Expression did not evaluate to a valid number") from e
    except ValueError as e:
        if str(e) == INVALID_EXPRESSION:
            raise
        # math domain errors, e.g. sqrt(-1)
        raise ValueError(f"Failed to evaluate expression: {e}") from e

    # negative base with fractional exponent yields a complex number
    if isinstance(result, complex) or not math.isfinite(result):
        raise ValueError("Expression did not evaluate to a valid number")
    return result


def convert_units(value: float, from_unit: str, to_unit: str) -> float | None:
    """
    Convert ``value`` between two units of the same category.

    Returns:
        The converted value, or None when the units are unknown or belong
        to different categories
    """
    source = from_unit.lower()
    target = to_unit.lower()

    if source in _TEMPERATURE_UNITS:
        if source in _CELSIUS:
            celsius = value
        elif source in _FAHRENHEIT:
            celsius = (value - 32) * 5 / 9
        else:
            celsius = value - 273.15

        if target in _CELSIUS:
            return celsius
        if target in _FAHRENHEIT:
            return celsius * 9 / 5 + 32
        if target in _KELVIN:
            return celsius + 273.15
        return None

    for factors in UNIT_CONVERSIONS.values():
        if source in factors and target in factors:
            return value * factors[source] / factors[target]
    return None


def _tidy(number: float, digits: int) -> float | int:
    rounded = round(number, digits)
    return int(rounded) if float(rounded).is_integer() else rounded


class UnitConversion(BaseModel):
    """Unit conversion parameters."""

    model_config = ConfigDict(populate_by_name=True)

    value: float = Field(..., description="The numeric value to convert")
    from_unit: str = Field(
        ...,
        alias="from",
        description='The unit to convert from (e.g., "miles", "kg", "celsius")',
    )
    to_unit: str = Field(
        ...,
        alias="to",
        description='The unit to convert to (e.g., "km", "pounds", "fahrenheit")',
    )


class CalculatorInput(BaseModel):
    """Input schema for the calculator tool."""

    expression: str | None = Field(
        None,
        description=(
            'Mathematical expression to evaluate (e.g., "2 + 2", "sqrt(16)", '
            '"sin(pi/2)", "2^10"). Use this OR the conversion parameters.'
        ),
    )
    convert: UnitConversion | None = Field(
        None,
        description="Unit conversion parameters. Use this OR the expression parameter.",
    )


def run_calculator(
    expression: str | None = None,
    convert: UnitConversion | None = None,
) -> dict[str, Any]:
    """Execute a calculator request, returning a result or ``{"error": ...}``."""
    if convert is not None:
        result = convert_units(convert.value, convert.from_unit, convert.to_unit)
        if result is None:
            return {
                "error": (
                    f"Cannot convert between {convert.from_unit} and {convert.to_unit}. "
                    "Supported conversions: length (m, km, mi, ft, in, etc.), "
                    "weight (kg, g, lb, oz, etc.), volume (l, ml, gal, cup, etc.), "
                    "temperature (c, f, k)."
                )
            }
        return {
            "conversion": {
                "value": convert.value,
                "from": convert.from_unit,
                "to": convert.to_unit,
                "result": _tidy(result, 6),
            }
        }

    if expression:
        try:
            result = evaluate_expression(expression)
        except ValueError as e:
            logger.info("Calculator rejected expression", extra={"expression": expression, "error": str(e)})
            return {"error": str(e)}
        return {"expression": expression, "result": _tidy(result, 12)}

    return {"error": "Please provide either an expression to evaluate or conversion parameters."}


def create_calculator_tool() -> BaseTool:
    """
    Create the calculator tool.

    Returns:
        BaseTool: Async LangChain tool named "calculator"
    """

    @tool("calculator", args_schema=CalculatorInput)
    async def calculator(
        expression: str | None = None,
        convert: UnitConversion | None = None,
    ) -> dict[str, Any]:
        """Evaluate mathematical expressions and perform unit conversions. Supports basic arithmetic (+, -, *, /, %, **), parentheses, and Math functions (sin, cos, sqrt, pow, log, etc.). Also converts between common units of length, weight, volume, and temperature."""
        if isinstance(convert, dict):
            convert = UnitConversion.model_validate(convert)
        return run_calculator(expression=expression, convert=convert)

    return calculator
