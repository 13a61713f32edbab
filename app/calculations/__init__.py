"""
Financial Calculation Engine

Stateless calculation modules behind each calculator. Every function
returns fresh result objects and keeps no state between calls.
"""

from app.calculations import emi, sip, gst, compound_interest, rent_vs_buy, units

__all__ = ["emi", "sip", "gst", "compound_interest", "rent_vs_buy", "units"]
