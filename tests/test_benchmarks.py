# -*- coding: utf-8 -*-

import dataclasses
import typing

from dataslots import dataslots

import shapeval

BENCHMARK_PEDANTIC_OPTIONS = {"rounds": 200, "warmup_rounds": 100, "iterations": 10}


@dataslots
@dataclasses.dataclass
class Nested(object):
    """
    A nested type for Dataclass
    """

    name: str


@dataslots
@dataclasses.dataclass
class Dataclass(object):
    """
    A Dataclass class
    """

    name: str
    value: int
    f: float
    b: bool
    nest: typing.List[Nested]
    many: typing.List[int]
    option: typing.Optional[str] = None


schema = shapeval.object_(
    {
        "name": shapeval.string().min(1),
        "value": shapeval.number().int(),
        "f": shapeval.number(),
        "b": shapeval.boolean(),
        "nest": shapeval.array(shapeval.object_({"name": shapeval.string()})),
        "many": shapeval.array(shapeval.number()),
        "option": shapeval.string().optional(),
    }
)
dataclass_schema = shapeval.schema_from_type(Dataclass)
test_dict = {
    "name": "Foo",
    "value": 42,
    "f": 12.34,
    "b": True,
    "nest": [{"name": "Bar_{}".format(index)} for index in range(0, 1000)],
    "many": [1, 2, 3],
}
invalid_dict = {**test_dict, "nest": [{"name": index} for index in range(0, 1000)]}


def test_parse(benchmark):
    benchmark.pedantic(schema.parse, args=(test_dict,), **BENCHMARK_PEDANTIC_OPTIONS)


def test_safe_parse_invalid(benchmark):
    result = benchmark.pedantic(
        schema.safe_parse, args=(invalid_dict,), **BENCHMARK_PEDANTIC_OPTIONS
    )
    assert 1000 == len(result.errors)


def test_parse_dataclass(benchmark):
    obj = benchmark.pedantic(
        dataclass_schema.parse, args=(test_dict,), **BENCHMARK_PEDANTIC_OPTIONS
    )
    assert isinstance(obj, Dataclass)
    assert 1000 == len(obj.nest)
