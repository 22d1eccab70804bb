"""Feature modules for the charge console.

- charging_stations: Connector table and the start-transaction workflow
"""

from chargeconsole.features import charging_stations

__all__ = ["charging_stations"]
