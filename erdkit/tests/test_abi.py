"""Tests for loading contract ABIs"""

# pylint: disable=redefined-outer-name,unused-variable,expression-not-assigned,singleton-comparison

import json

import pytest

from erdkit.abi import AbiDefinition, AbiRegistry
from erdkit.errors import AbiError, TypeMappingError
from erdkit.typesystem import (
    ADDRESS,
    BIG_UINT,
    BYTES,
    I32,
    U8,
    U64,
    TypeMapper,
    composite_of,
    list_of,
    option_of,
    variadic_of,
)


def describe_abi_registry():
    def loads_endpoints(expect, adder_abi):
        expect(adder_abi.name) == "Adder"
        expect([e.name for e in adder_abi.endpoints]) == ["getSum", "add"]

    def resolves_parameter_types(expect, adder_abi):
        add = adder_abi.get_endpoint("add")
        expect(add.input_types) == [BIG_UINT]
        expect(add.inputs[0].name) == "value"
        expect(add.inputs[0].descriptor.name) == "BigUint"
        expect(add.is_readonly) == False
        expect(adder_abi.get_endpoint("getSum").output_types) == [BIG_UINT]
        expect(adder_abi.get_endpoint("getSum").is_readonly) == True

    def exposes_the_constructor(expect, adder_abi):
        constructor = adder_abi.get_endpoint("constructor")
        expect(constructor) == adder_abi.constructor_definition
        expect(constructor.name) == "constructor"
        expect(constructor.input_types) == [BIG_UINT]

    def resolves_rich_types(expect, registry_abi):
        register = registry_abi.get_endpoint("register")
        expect(register.input_types) == [BYTES, ADDRESS, list_of(U8), option_of(U64)]
        expect(register.payable_in_tokens) == ("EGLD",)

        pairs = registry_abi.get_endpoint("getPairs")
        expect(pairs.output_types) == [variadic_of(composite_of(I32, BYTES))]
        expect(pairs.outputs[0].is_variadic) == True

        configure = registry_abi.get_endpoint("configure")
        expect(configure.inputs[1].is_optional) == True

    def ignores_unknown_sections(expect, registry_abi):
        expect(len(registry_abi.endpoints)) == 6

    def reports_missing_endpoints():
        registry = AbiRegistry.from_dict({"endpoints": []})
        with pytest.raises(AbiError):
            registry.get_endpoint("nope")

    def defaults_to_an_empty_constructor(expect):
        registry = AbiRegistry.from_dict({"name": "Empty"})
        expect(registry.get_endpoint("constructor").inputs) == ()

    def shares_a_mapper(expect):
        mapper = TypeMapper()
        data = {"endpoints": [{"name": "f", "inputs": [{"name": "x", "type": "List<u8>"}]}]}
        first = AbiRegistry.from_dict(data, mapper).get_endpoint("f").input_types[0]
        second = AbiRegistry.from_dict(data, mapper).get_endpoint("f").input_types[0]
        expect(first is second) == True


def describe_abi_errors():
    def rejects_duplicate_endpoints():
        data = {"endpoints": [{"name": "f"}, {"name": "f"}]}
        with pytest.raises(AbiError):
            AbiRegistry.from_dict(data)

    def rejects_parameters_without_type():
        data = {"endpoints": [{"name": "f", "inputs": [{"name": "x", "type": ""}]}]}
        with pytest.raises(AbiError):
            AbiRegistry.from_dict(data)

    def rejects_unknown_types():
        data = {"endpoints": [{"name": "f", "inputs": [{"name": "x", "type": "Frob"}]}]}
        with pytest.raises(TypeMappingError):
            AbiRegistry.from_dict(data)

    def rejects_invalid_json():
        with pytest.raises(AbiError):
            AbiRegistry.from_json("{not json")
        with pytest.raises(AbiError):
            AbiRegistry.from_json(json.dumps([1, 2]))


def describe_abi_definition():
    def maps_camel_case_keys(expect):
        definition = AbiDefinition.from_dict(
            {"endpoints": [{"name": "f", "payableInTokens": ["*"], "onlyOwner": True}]}
        )
        expect(definition.endpoints[0].payable_in_tokens) == ["*"]
        expect(definition.endpoints[0].only_owner) == True
