"""
Unit Conversion

Each category converts through a base unit using fixed factors
(value_in_base = value * factor). Temperature is affine and converts
through Celsius instead.
"""

from typing import Dict, List
from dataclasses import dataclass

TEMPERATURE = "temperature"

# category -> unit -> (display name, factor relative to the base unit)
CONVERSION_FACTORS: Dict[str, Dict[str, tuple]] = {
    "length": {
        "meter": ("Meter", 1),
        "kilometer": ("Kilometer", 1000),
        "centimeter": ("Centimeter", 0.01),
        "millimeter": ("Millimeter", 0.001),
        "inch": ("Inch", 0.0254),
        "foot": ("Foot", 0.3048),
        "yard": ("Yard", 0.9144),
        "mile": ("Mile", 1609.344),
    },
    "weight": {
        "kilogram": ("Kilogram", 1),
        "gram": ("Gram", 0.001),
        "pound": ("Pound", 0.453592),
        "ounce": ("Ounce", 0.0283495),
        "ton": ("Ton", 1000),
        "stone": ("Stone", 6.35029),
    },
    "area": {
        "squareMeter": ("Square Meter", 1),
        "squareKilometer": ("Square Kilometer", 1000000),
        "squareCentimeter": ("Square Centimeter", 0.0001),
        "squareFoot": ("Square Foot", 0.092903),
        "acre": ("Acre", 4046.86),
        "hectare": ("Hectare", 10000),
    },
    "volume": {
        "liter": ("Liter", 1),
        "milliliter": ("Milliliter", 0.001),
        "gallon": ("Gallon (US)", 3.78541),
        "quart": ("Quart", 0.946353),
        "pint": ("Pint", 0.473176),
        "cup": ("Cup", 0.236588),
        "tablespoon": ("Tablespoon", 0.0147868),
        "teaspoon": ("Teaspoon", 0.00492892),
    },
    "time": {
        "second": ("Second", 1),
        "minute": ("Minute", 60),
        "hour": ("Hour", 3600),
        "day": ("Day", 86400),
        "week": ("Week", 604800),
        "month": ("Month", 2629746),
        "year": ("Year", 31556952),
    },
    "speed": {
        "meterPerSecond": ("Meter per Second", 1),
        "kilometerPerHour": ("Kilometer per Hour", 0.277778),
        "milePerHour": ("Mile per Hour", 0.44704),
        "knot": ("Knot", 0.514444),
        "footPerSecond": ("Foot per Second", 0.3048),
    },
    "energy": {
        "joule": ("Joule", 1),
        "kilojoule": ("Kilojoule", 1000),
        "calorie": ("Calorie", 4.184),
        "kilocalorie": ("Kilocalorie", 4184),
        "wattHour": ("Watt Hour", 3600),
        "kilowattHour": ("Kilowatt Hour", 3600000),
        "btu": ("BTU", 1055.06),
    },
}

TEMPERATURE_UNITS = {
    "celsius": "Celsius",
    "fahrenheit": "Fahrenheit",
    "kelvin": "Kelvin",
}


@dataclass
class ConversionResult:
    category: str
    from_unit: str
    to_unit: str
    value: float
    result: float


def _to_celsius(value: float, unit: str) -> float:
    if unit == "fahrenheit":
        return (value - 32) * 5 / 9
    if unit == "kelvin":
        return value - 273.15
    return value


def _from_celsius(celsius: float, unit: str) -> float:
    if unit == "fahrenheit":
        return celsius * 9 / 5 + 32
    if unit == "kelvin":
        return celsius + 273.15
    return celsius


def convert_temperature(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between celsius, fahrenheit and kelvin via Celsius."""
    for unit in (from_unit, to_unit):
        if unit not in TEMPERATURE_UNITS:
            raise ValueError(f"Unknown temperature unit: {unit}")
    return _from_celsius(_to_celsius(value, from_unit), to_unit)


def convert(value: float, from_unit: str, to_unit: str, category: str) -> ConversionResult:
    """
    Convert ``value`` between two units of the same category.

    Raises:
        ValueError: If the category or either unit is unknown
    """
    if category == TEMPERATURE:
        result = convert_temperature(value, from_unit, to_unit)
    else:
        units = CONVERSION_FACTORS.get(category)
        if units is None:
            raise ValueError(f"Unknown unit category: {category}")
        for unit in (from_unit, to_unit):
            if unit not in units:
                raise ValueError(f"Unknown {category} unit: {unit}")
        result = value * units[from_unit][1] / units[to_unit][1]

    return ConversionResult(
        category=category,
        from_unit=from_unit,
        to_unit=to_unit,
        value=value,
        result=result,
    )


def list_categories() -> List[Dict]:
    """Describe every category and its units."""
    categories = [
        {
            "id": category,
            "units": [
                {"id": unit, "name": name, "factor": factor}
                for unit, (name, factor) in units.items()
            ],
        }
        for category, units in CONVERSION_FACTORS.items()
    ]
    categories.append(
        {
            "id": TEMPERATURE,
            "units": [
                {"id": unit, "name": name, "factor": None}
                for unit, name in TEMPERATURE_UNITS.items()
            ],
        }
    )
    return categories
