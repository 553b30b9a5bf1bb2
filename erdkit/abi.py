"""Contract interface descriptions (ABI JSON) and resolved endpoint definitions."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dataclasses_json import DataClassJsonMixin, config

from .errors import AbiError
from .typesystem.mapper import TypeMapper
from .typesystem.parser import parse_type_expression
from .typesystem.types import Type, TypeDescriptor, TypeKind

logger = logging.getLogger(__name__)

CONSTRUCTOR_NAME = "constructor"


@dataclass
class AbiParameter(DataClassJsonMixin):
    """A parameter or output as written in the ABI JSON."""

    type: str
    name: str = ""
    multi_arg: bool = False
    multi_result: bool = False


@dataclass
class AbiEndpoint(DataClassJsonMixin):
    """An endpoint as written in the ABI JSON."""

    name: str = ""
    inputs: list[AbiParameter] = field(default_factory=list)
    outputs: list[AbiParameter] = field(default_factory=list)
    mutability: str = "mutable"
    payable_in_tokens: list[str] = field(
        default_factory=list, metadata=config(field_name="payableInTokens")
    )
    only_owner: bool = field(default=False, metadata=config(field_name="onlyOwner"))
    docs: list[str] = field(default_factory=list)


@dataclass
class AbiDefinition(DataClassJsonMixin):
    """Top level of an ABI JSON file."""

    name: str = ""
    constructor: AbiEndpoint | None = None
    endpoints: list[AbiEndpoint] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class EndpointParameterDefinition:
    """A parameter with its parsed descriptor and resolved type."""

    name: str
    descriptor: TypeDescriptor
    type: Type

    @property
    def is_variadic(self) -> bool:
        return self.type.kind == TypeKind.VARIADIC

    @property
    def is_optional(self) -> bool:
        return self.type.kind == TypeKind.OPTIONAL


@dataclass(frozen=True, slots=True)
class EndpointDefinition:
    """A callable endpoint: name plus ordered inputs and outputs."""

    name: str
    inputs: tuple[EndpointParameterDefinition, ...] = ()
    outputs: tuple[EndpointParameterDefinition, ...] = ()
    mutability: str = "mutable"
    payable_in_tokens: tuple[str, ...] = ()

    @property
    def input_types(self) -> list[Type]:
        return [p.type for p in self.inputs]

    @property
    def output_types(self) -> list[Type]:
        return [p.type for p in self.outputs]

    @property
    def is_readonly(self) -> bool:
        return self.mutability == "readonly"

    @classmethod
    def from_abi(cls, endpoint: AbiEndpoint, mapper: TypeMapper) -> "EndpointDefinition":
        return cls(
            name=endpoint.name,
            inputs=tuple(_resolve_parameter(p, mapper) for p in endpoint.inputs),
            outputs=tuple(_resolve_parameter(p, mapper) for p in endpoint.outputs),
            mutability=endpoint.mutability,
            payable_in_tokens=tuple(endpoint.payable_in_tokens),
        )


def _resolve_parameter(parameter: AbiParameter, mapper: TypeMapper) -> EndpointParameterDefinition:
    if not isinstance(parameter.type, str) or not parameter.type:
        raise AbiError(f"Parameter {parameter.name!r} has no type")
    return EndpointParameterDefinition(
        name=parameter.name,
        descriptor=parse_type_expression(parameter.type),
        type=mapper.map_expression(parameter.type),
    )


class AbiRegistry:
    """Lookup table of a contract's endpoints, resolved against the type catalogue."""

    def __init__(self, definition: AbiDefinition, mapper: TypeMapper | None = None) -> None:
        mapper = mapper or TypeMapper()
        self.name = definition.name

        constructor = definition.constructor or AbiEndpoint()
        self.constructor_definition = EndpointDefinition.from_abi(constructor, mapper)
        if not self.constructor_definition.name:
            self.constructor_definition = EndpointDefinition(
                name=CONSTRUCTOR_NAME,
                inputs=self.constructor_definition.inputs,
                outputs=self.constructor_definition.outputs,
            )

        self._endpoints: dict[str, EndpointDefinition] = {}
        for endpoint in definition.endpoints:
            if endpoint.name in self._endpoints:
                raise AbiError(f"Endpoint {endpoint.name} is defined twice")
            self._endpoints[endpoint.name] = EndpointDefinition.from_abi(endpoint, mapper)

        logger.debug("Loaded ABI %r with %d endpoint(s)", self.name, len(self._endpoints))

    @classmethod
    def from_dict(cls, data: dict[str, Any], mapper: TypeMapper | None = None) -> "AbiRegistry":
        try:
            definition = AbiDefinition.from_dict(data)
        except (KeyError, TypeError, ValueError) as err:
            raise AbiError(f"Malformed ABI: {err}") from err
        return cls(definition, mapper)

    @classmethod
    def from_json(cls, text: str, mapper: TypeMapper | None = None) -> "AbiRegistry":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise AbiError(f"ABI is not valid JSON: {err}") from err
        if not isinstance(data, dict):
            raise AbiError("ABI must be a JSON object")
        return cls.from_dict(data, mapper)

    @classmethod
    def load(cls, path: str | Path, mapper: TypeMapper | None = None) -> "AbiRegistry":
        with open(path, encoding="utf-8") as f:
            return cls.from_json(f.read(), mapper)

    @property
    def endpoints(self) -> list[EndpointDefinition]:
        return list(self._endpoints.values())

    def get_endpoint(self, name: str) -> EndpointDefinition:
        if name == CONSTRUCTOR_NAME:
            return self.constructor_definition
        try:
            return self._endpoints[name]
        except KeyError:
            raise AbiError(f"Endpoint {name} not found in ABI {self.name!r}") from None
