"""
Flight Price Tracker - price-observation analytics for tracked flights.

Answers questions such as the cheapest weekday to book a flight, how its
price moves as departure approaches, and which departure date inside a
flexibility window is cheapest.
"""

__version__ = "0.1.0"
__app_name__ = "FlightPriceTracker"
