import pytest

from ..configuration import Configuration, Options
from ..interfaces import ContextAware, MapperAware
from ..mapper import AutoMapper
from ..operations import (
    DefaultMappingOperation,
    FromProperty,
    Ignore,
    MapFrom,
    MapTo,
    SetTo,
)
from .testing import Address, AddressView, Person


class TestDefaultMappingOperation:
    def test_copies_same_name(self):
        destination = Address()
        DefaultMappingOperation().map_property("city", {"city": "Springfield"}, destination)
        assert destination.city == "Springfield"

    def test_object_to_record(self):
        destination = {}
        DefaultMappingOperation().map_property("city", Address(city="Springfield"), destination)
        assert destination == {"city": "Springfield"}

    def test_skips_missing_property(self):
        destination = Address(city="Springfield")
        DefaultMappingOperation().map_property("city", {"street": "1 Main St"}, destination)
        assert destination.city == "Springfield"

    def test_none_is_copied_by_default(self):
        destination = Address(city="Springfield")
        DefaultMappingOperation().map_property("city", {"city": None}, destination)
        assert destination.city is None

    def test_skip_none(self):
        operation = DefaultMappingOperation()
        operation.set_options(Options(skip_none=True))
        destination = Address(city="Springfield")
        operation.map_property("city", {"city": None}, destination)
        assert destination.city == "Springfield"


class TestMapFrom:
    def test_ignores_property_name(self):
        seen = []

        def callback(source):
            seen.append(source)
            return source["name"].upper()

        source = {"name": "Ann", "display_name": "unused"}
        destination = Person()
        MapFrom(callback).map_property("display_name", source, destination)
        assert destination.display_name == "ANN"
        assert seen == [source]

    def test_callback_errors_propagate(self):
        with pytest.raises(KeyError):
            MapFrom(lambda src: src["missing"]).map_property("display_name", {}, Person())


class TestOtherOperations:
    def test_from_property(self):
        destination = AddressView()
        FromProperty("line1").map_property("street", {"line1": "1 Main St"}, destination)
        assert destination.street == "1 Main St"

        FromProperty("line1").map_property("city", {"line2": "x"}, destination)
        assert destination.city == ""

    def test_set_to(self):
        destination = Address()
        SetTo("Springfield").map_property("city", object(), destination)
        assert destination.city == "Springfield"

    def test_ignore(self):
        destination = Address(city="Springfield")
        Ignore().map_property("city", {"city": "Shelbyville"}, destination)
        assert destination.city == "Springfield"


class TestMapTo:
    @pytest.fixture
    def mapper(self) -> AutoMapper:
        config = Configuration()
        config.register_mapping(Address, AddressView)
        return AutoMapper(config)

    def test_capabilities(self):
        operation = MapTo(AddressView)
        assert isinstance(operation, MapperAware)
        assert isinstance(operation, ContextAware)
        assert not isinstance(MapFrom(lambda src: None), (MapperAware, ContextAware))

    def test_single(self, mapper: AutoMapper):
        operation = MapTo(AddressView, property_name="home")
        operation.set_mapper(mapper)
        operation.set_context({})
        destination = {}
        source = {"home": Address("1 Main St", "Springfield")}
        operation.map_property("address", source, destination)
        assert destination == {"address": AddressView("1 Main St", "Springfield")}

    def test_sequence(self, mapper: AutoMapper):
        operation = MapTo(AddressView, sequence=True)
        operation.set_mapper(mapper)
        operation.set_context({})
        destination = {}
        operation.map_property(
            "addresses", {"addresses": (Address("1 Main St"), Address("2 Elm St"))}, destination
        )
        assert destination == {"addresses": [AddressView("1 Main St"), AddressView("2 Elm St")]}

    def test_none(self, mapper: AutoMapper):
        operation = MapTo(AddressView, sequence=True)
        operation.set_mapper(mapper)
        destination = {}
        operation.map_property("addresses", {"addresses": None}, destination)
        assert destination == {"addresses": None}
