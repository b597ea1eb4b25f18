"""Function descriptors for the GAME SDK.

A Function declares a callable HTTP operation: its name, ordered typed
arguments and a FunctionConfig request template. Descriptors are data only;
FunctionInvoker turns them into requests.
"""

import copy
import json
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from game_sdk.templating import has_placeholders, interpolate


class ArgumentType(str, Enum):
    """Declared argument types."""
    STRING = "string"
    ARRAY = "array"
    BOOLEAN = "boolean"
    NUMBER = "number"


@dataclass(frozen=True)
class FunctionArgument:
    """A named, typed parameter of a function."""
    name: str
    description: str
    type: ArgumentType = ArgumentType.STRING
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        # Accept plain strings such as "string" or "array"
        object.__setattr__(self, "type", ArgumentType(self.type))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FunctionArgument":
        kwargs = {
            "name": data["name"],
            "description": data.get("description", ""),
            "type": data.get("type", ArgumentType.STRING.value),
        }
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class PayloadField:
    """
    One payload entry, classified once when the config is built.

    Template fields have string values that are interpolated per call;
    literal fields are copied as they are. A key may itself be a template
    (``"{{media_type}}"``).
    """
    key: str
    value: Any
    is_template: bool
    key_is_template: bool

    @classmethod
    def classify(cls, key: str, value: Any) -> "PayloadField":
        return cls(
            key=key,
            value=value,
            is_template=isinstance(value, str),
            key_is_template=has_placeholders(key),
        )

    def render(self, values: Mapping[str, Any]) -> Tuple[str, Any]:
        key = interpolate(self.key, values) if self.key_is_template else self.key
        if self.is_template:
            return key, interpolate(self.value, values)
        return key, copy.deepcopy(self.value)


@dataclass
class FunctionConfig:
    """
    Request template of a function.

    Attributes:
        method: HTTP method
        url: URL template
        headers: Header name to template string
        payload: Body key to template string or literal value
        success_feedback: Template emitted after a successful call
        error_feedback: Template emitted after a failed call
        platform: Platform the function targets, if any
        is_main_loop: Whether the GAME backend runs it in the main loop
        is_reaction: Whether the GAME backend runs it as a reaction
    """
    method: str = "GET"
    url: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)
    success_feedback: Optional[str] = None
    error_feedback: Optional[str] = None
    platform: Optional[str] = None
    is_main_loop: bool = False
    is_reaction: bool = False
    payload_fields: List[PayloadField] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.method = self.method.upper()
        self.payload_fields = [
            PayloadField.classify(key, value) for key, value in self.payload.items()
        ]

    def build_url(self, values: Mapping[str, Any]) -> str:
        return interpolate(self.url, values)

    def build_headers(self, values: Mapping[str, Any]) -> Dict[str, str]:
        return {name: interpolate(str(value), values) for name, value in self.headers.items()}

    def build_payload(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Render every payload field against the named argument values."""
        return dict(payload_field.render(values) for payload_field in self.payload_fields)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FunctionConfig":
        return cls(
            method=data.get("method", "GET"),
            url=data.get("url", ""),
            headers=data.get("headers") or {},
            payload=data.get("payload") or {},
            success_feedback=data.get("success_feedback"),
            error_feedback=data.get("error_feedback"),
            platform=data.get("platform"),
            is_main_loop=data.get("is_main_loop", False),
            is_reaction=data.get("is_reaction", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
            "payload": copy.deepcopy(self.payload),
            "success_feedback": self.success_feedback or "",
            "error_feedback": self.error_feedback or "",
            "platform": self.platform,
            "is_main_loop": self.is_main_loop,
            "is_reaction": self.is_reaction,
            "headers_string": json.dumps(self.headers, indent=4),
            "payload_string": json.dumps(self.payload, indent=4),
        }


@dataclass
class Function:
    """
    A callable HTTP operation.

    Example:
        >>> fn = Function(
        ...     fn_name="get_weather",
        ...     fn_description="Get the weather for a city",
        ...     args=[FunctionArgument("city", "City name")],
        ...     config=FunctionConfig(
        ...         method="GET",
        ...         url="https://weather.example.com/{{city}}",
        ...         success_feedback="Weather: {{response.summary}}",
        ...     ),
        ... )
        >>> result = await FunctionInvoker().invoke(fn, "Paris")
    """
    fn_name: str
    fn_description: str
    args: List[FunctionArgument] = field(default_factory=list)
    config: FunctionConfig = field(default_factory=FunctionConfig)
    hint: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        names = [arg.name for arg in self.args]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate argument names in {self.fn_name}: {', '.join(duplicates)}")

    @property
    def arg_names(self) -> List[str]:
        return [arg.name for arg in self.args]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Function":
        """Create Function from its exported form."""
        kwargs = {
            "fn_name": data["fn_name"],
            "fn_description": data.get("fn_description", ""),
            "args": [FunctionArgument.from_dict(arg) for arg in data.get("args", [])],
            "config": FunctionConfig.from_dict(data.get("config") or {}),
            "hint": data.get("hint") or "",
        }
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "fn_name": self.fn_name,
            "fn_description": self.fn_description,
            "args": [arg.to_dict() for arg in self.args],
            "hint": self.hint,
            "config": self.config.to_dict(),
        }
