import enum
import typing
from dataclasses import dataclass
from pprint import pprint

from shapeval import SchemaMixin


@dataclass
class Point(object):
    x: float
    y: float


class PolygonColor(enum.Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


@dataclass
class Polygon(SchemaMixin):
    points: typing.List[Point]
    color: PolygonColor
    name: typing.Optional[str] = None


pprint(Polygon.schema().json_schema())
print(
    Polygon.load(
        {"color": 1, "points": [{"x": 1, "y": 2}, {"x": 2, "y": 3}, {"x": 4, "y": 5}]}
    )
)
