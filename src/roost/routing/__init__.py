"""Routing: ordered route table with segment-wise ``:param`` matching.

Routes are registered during adapter setup and matched in registration
order: the first pattern that fits the path and the method wins.
"""

from roost.routing.matcher import match_path
from roost.routing.route import ApiRoute, EntryRoute, RouteMatch
from roost.routing.router import RouteTable

__all__ = ["ApiRoute", "EntryRoute", "RouteMatch", "RouteTable", "match_path"]
