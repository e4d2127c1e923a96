"""Messages exchanged with attribute-set evaluators, and their JSON forms."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar
from urllib.parse import quote

from nixlens.ranges import LspPosition, LspRange
from nixlens.references import Location

T = TypeVar("T")

MAX_ITEMS = 30


class JSONParseError(ValueError):
    """The text is not valid JSON."""


def parse_json(text: str) -> Any:
    """Parse ``text`` as JSON, raising JSONParseError when it is malformed."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise JSONParseError(str(exc)) from exc


def _object(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {what}")
    return data


def _str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    return value


def _str_list(value: Any) -> list[str]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ValueError(f"expected an array, got {value!r}")
    return [_str(item) for item in value]


def _optional(data: Mapping[str, Any], key: str, conv: Callable[[Any], T]) -> T | None:
    value = data.get(key)
    return None if value is None else conv(value)


def _required(data: Mapping[str, Any], key: str, conv: Callable[[Any], T]) -> T:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    return conv(data[key])


def _position_to_json(pos: LspPosition) -> dict[str, int]:
    return {"line": pos.line, "character": pos.character}


def _position_from_json(data: Any) -> LspPosition:
    obj = _object(data, "position")
    return LspPosition(_required(obj, "line", _int), _required(obj, "character", _int))


def _location_to_json(loc: Location) -> dict[str, Any]:
    return {
        "uri": loc.uri,
        "range": {
            "start": _position_to_json(loc.range.start),
            "end": _position_to_json(loc.range.end),
        },
    }


def _location_from_json(data: Any) -> Location:
    obj = _object(data, "location")
    rng = _object(_required(obj, "range", lambda v: v), "range")
    return Location(
        _required(obj, "uri", _str),
        LspRange(
            _required(rng, "start", _position_from_json),
            _required(rng, "end", _position_from_json),
        ),
    )


def _location_list(value: Any) -> list[Location]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ValueError(f"expected an array, got {value!r}")
    return [_location_from_json(item) for item in value]


@dataclass
class OptionType:
    description: str | None = None
    name: str | None = None

    def to_json(self) -> dict[str, Any]:
        return {"Description": self.description, "Name": self.name}

    @classmethod
    def from_json(cls, data: Any) -> OptionType:
        obj = _object(data, "OptionType")
        return cls(_optional(obj, "Description", _str), _optional(obj, "Name", _str))


@dataclass
class OptionDescription:
    description: str | None = None
    declarations: list[Location] = field(default_factory=list)
    definitions: list[Location] = field(default_factory=list)
    example: str | None = None
    type: OptionType | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "Description": self.description,
            "Declarations": [_location_to_json(d) for d in self.declarations],
            "Definitions": [_location_to_json(d) for d in self.definitions],
            "Example": self.example,
            "Type": self.type.to_json() if self.type is not None else None,
        }

    @classmethod
    def from_json(cls, data: Any) -> OptionDescription:
        obj = _object(data, "OptionDescription")
        return cls(
            description=_optional(obj, "Description", _str),
            declarations=_optional(obj, "Declarations", _location_list) or [],
            definitions=_optional(obj, "Definitions", _location_list) or [],
            example=_optional(obj, "Example", _str),
            type=_optional(obj, "Type", OptionType.from_json),
        )


@dataclass
class OptionField:
    name: str | None = None
    description: OptionDescription | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Description": (
                self.description.to_json() if self.description is not None else None
            ),
        }

    @classmethod
    def from_json(cls, data: Any) -> OptionField:
        obj = _object(data, "OptionField")
        return cls(
            name=_optional(obj, "Name", _str),
            description=_optional(obj, "Description", OptionDescription.from_json),
        )


_PACKAGE_KEYS = (
    ("name", "Name"),
    ("pname", "PName"),
    ("version", "Version"),
    ("description", "Description"),
    ("long_description", "LongDescription"),
    ("position", "Position"),
    ("homepage", "Homepage"),
)


@dataclass
class PackageDescription:
    name: str | None = None
    pname: str | None = None
    version: str | None = None
    description: str | None = None
    long_description: str | None = None
    position: str | None = None
    homepage: str | None = None

    def to_json(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in _PACKAGE_KEYS}

    @classmethod
    def from_json(cls, data: Any) -> PackageDescription:
        obj = _object(data, "PackageDescription")
        return cls(**{attr: _optional(obj, key, _str) for attr, key in _PACKAGE_KEYS})


@dataclass
class ValueMeta:
    type: int
    location: Location | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "Type": self.type,
            "Location": (
                _location_to_json(self.location) if self.location is not None else None
            ),
        }

    @classmethod
    def from_json(cls, data: Any) -> ValueMeta:
        obj = _object(data, "ValueMeta")
        return cls(
            _required(obj, "Type", _int), _optional(obj, "Location", _location_from_json)
        )


@dataclass
class AttrPathInfoResponse:
    meta: ValueMeta
    package_desc: PackageDescription = field(default_factory=PackageDescription)

    def to_json(self) -> dict[str, Any]:
        return {"Meta": self.meta.to_json(), "PackageDesc": self.package_desc.to_json()}

    @classmethod
    def from_json(cls, data: Any) -> AttrPathInfoResponse:
        obj = _object(data, "AttrPathInfoResponse")
        package = _optional(obj, "PackageDesc", PackageDescription.from_json)
        return cls(
            _required(obj, "Meta", ValueMeta.from_json),
            package if package is not None else PackageDescription(),
        )


@dataclass
class AttrPathCompleteParams:
    scope: list[str]
    prefix: str

    def to_json(self) -> dict[str, Any]:
        return {"Scope": list(self.scope), "Prefix": self.prefix}

    @classmethod
    def from_json(cls, data: Any) -> AttrPathCompleteParams:
        obj = _object(data, "AttrPathCompleteParams")
        return cls(_required(obj, "Scope", _str_list), _required(obj, "Prefix", _str))


@dataclass
class RegisterBCParams:
    shm: str
    base_path: str
    cache_path: str
    size: int

    def to_json(self) -> dict[str, Any]:
        return {
            "Shm": self.shm,
            "BasePath": self.base_path,
            "CachePath": self.cache_path,
            "Size": self.size,
        }

    @classmethod
    def from_json(cls, data: Any) -> RegisterBCParams:
        obj = _object(data, "RegisterBCParams")
        return cls(
            _required(obj, "Shm", _str),
            _required(obj, "BasePath", _str),
            _required(obj, "CachePath", _str),
            _required(obj, "Size", _int),
        )


@dataclass
class ExprValueParams:
    expr_id: int

    def to_json(self) -> dict[str, Any]:
        return {"ExprID": self.expr_id}

    @classmethod
    def from_json(cls, data: Any) -> ExprValueParams:
        return cls(_required(_object(data, "ExprValueParams"), "ExprID", _int))


@dataclass
class ExprValueResponse:
    result_kind: int
    value_id: int
    value_kind: int

    def to_json(self) -> dict[str, Any]:
        return {
            "ResultKind": self.result_kind,
            "ValueID": self.value_id,
            "ValueKind": self.value_kind,
        }

    @classmethod
    def from_json(cls, data: Any) -> ExprValueResponse:
        obj = _object(data, "ExprValueResponse")
        return cls(
            _required(obj, "ResultKind", _int),
            _required(obj, "ValueID", _int),
            _required(obj, "ValueKind", _int),
        )


def _select_string(value: Any, path: Sequence[str]) -> str | None:
    for key in path:
        if not isinstance(value, Mapping) or key not in value:
            return None
        value = value[key]
    return value if isinstance(value, str) else None


def describe_package(package: Any) -> PackageDescription:
    """Describe an evaluated value as if it were a nixpkgs package."""
    return PackageDescription(
        name=_select_string(package, ["name"]),
        pname=_select_string(package, ["pname"]),
        version=_select_string(package, ["version"]),
        description=_select_string(package, ["meta", "description"]),
        long_description=_select_string(package, ["meta", "longDescription"]),
        position=_select_string(package, ["meta", "position"]),
        homepage=_select_string(package, ["meta", "homepage"]),
    )


def complete_attr_names(names: Sequence[str], prefix: str) -> list[str]:
    """Names starting with ``prefix``, in lexicographic order, a limited number."""
    result: list[str] = []
    for name in sorted(names):
        if name.startswith(prefix):
            result.append(name)
            if len(result) > MAX_ITEMS:
                break
    return result


def _is_option(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("_type") == "option"


def _print_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, Mapping):
        body = "".join(f"{k} = {_print_value(value[k])}; " for k in sorted(value))
        return "{ " + body + "}"
    if isinstance(value, Sequence):
        return "[ " + "".join(f"{_print_value(v)} " for v in value) + "]"
    return repr(value)


def _file_uri(path: str) -> str:
    return "file://" + quote(path)


def _declaration_location(item: Any) -> Location:
    uri = ""
    rng = LspRange()
    if isinstance(item, Mapping):
        file = item.get("file")
        line = item.get("line")
        column = item.get("column")
        if isinstance(file, str):
            uri = _file_uri(file)
        if (
            isinstance(line, int)
            and not isinstance(line, bool)
            and isinstance(column, int)
            and not isinstance(column, bool)
        ):
            # Positions in the evaluator count from 1, the protocol from 0.
            pos = LspPosition(line - 1, column - 1)
            rng = LspRange(pos, pos)
    return Location(uri, rng)


def _option_description(option: Any) -> OptionDescription:
    desc = OptionDescription(description=_select_string(option, ["description"]))
    if not isinstance(option, Mapping):
        return desc
    positions = option.get("declarationPositions")
    if isinstance(positions, Sequence) and not isinstance(positions, str):
        desc.declarations = [_declaration_location(item) for item in positions]
    if "type" in option:
        vtype = option["type"]
        desc.type = OptionType(
            description=_select_string(vtype, ["description"]),
            name=_select_string(vtype, ["name"]),
        )
    if "example" in option:
        example = option["example"]
        if isinstance(example, Mapping) and example.get("_type") == "literalExpression":
            desc.example = _select_string(example, ["text"])
        else:
            desc.example = _print_value(example)
    return desc


def complete_option_fields(scope: Any, prefix: str) -> list[OptionField]:
    """Fields of an option set starting with ``prefix``, described where they are options."""
    if not isinstance(scope, Mapping):
        raise ValueError("scope is not an attrset")
    if _is_option(scope):
        raise ValueError("scope is already an option")
    fields: list[OptionField] = []
    for name in sorted(scope):
        if not name.startswith(prefix):
            continue
        value = scope[name]
        fields.append(
            OptionField(
                name=name,
                description=_option_description(value) if _is_option(value) else None,
            )
        )
        if len(fields) >= MAX_ITEMS:
            break
    return fields