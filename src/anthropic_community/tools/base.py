"""Tool base class and registration helpers.

A tool is a host-defined capability the model may request by name. Tools
declare a description and an ordered list of parameters, which are rendered
into the system prompt, and implement `invoke` to produce a string result.

Example:
    >>> class Weather(Tool):
    ...     description = "Returns the current weather for a location."
    ...     parameters = [ToolParameter("location", "string", "City name.")]
    ...
    ...     def invoke(self, arguments):
    ...         return f"Sunny in {arguments['location']}"
"""

import importlib
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, ClassVar, Literal

from anthropic_community.errors import ToolNotLoaded

logger = logging.getLogger(__name__)

ParameterType = Literal["string", "integer", "float"]


@dataclass(frozen=True)
class ToolParameter:
    """A declared tool parameter.

    Attributes:
        name: Parameter name as it appears in the invoke block
        type: Primitive type used to convert the raw string value
        description: Human-readable description shown to the model
    """

    name: str
    type: ParameterType
    description: str

    def __post_init__(self) -> None:
        """Validate the parameter type."""
        if self.type not in ("string", "integer", "float"):
            raise ValueError(
                f"Unsupported parameter type {self.type!r} for {self.name!r}"
            )

    def convert(self, raw_value: str) -> Any:
        """Convert a raw string value to this parameter's type.

        Raises:
            ValueError: If the value cannot be converted
        """
        if self.type == "integer":
            return int(raw_value)
        if self.type == "float":
            return float(raw_value)
        return raw_value


class Tool:
    """Base class for tools.

    Subclasses set `description` and `parameters` and implement `invoke`.
    `name` defaults to the class name. `invoke` may be a plain method or a
    coroutine function.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    parameters: ClassVar[list[ToolParameter]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get("name"):
            cls.name = cls.__name__

    def invoke(self, arguments: dict[str, Any]) -> str | Awaitable[str]:
        """Run the tool with resolved arguments and return its result."""
        raise NotImplementedError

    def get_parameter(self, name: str) -> ToolParameter | None:
        """Return the declared parameter with the given name, if any."""
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} tool {self.name!r}>"


def load_tool(reference: Any) -> Tool:
    """Resolve a tool reference to a Tool instance.

    Args:
        reference: A Tool instance, a Tool subclass (instantiated without
                   arguments) or a dotted import path ("pkg.module.ToolClass")

    Returns:
        Tool: The resolved tool instance

    Raises:
        ToolNotLoaded: If the reference cannot be imported or is not a Tool
    """
    obj = reference
    if isinstance(reference, str):
        module_name, _, attribute = reference.rpartition(".")
        if not module_name:
            raise ToolNotLoaded(
                reference,
                "use the full dotted path (my_app.tools.MyTool)",
            )
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ToolNotLoaded(reference, str(e)) from e
        try:
            obj = getattr(module, attribute)
        except AttributeError as e:
            raise ToolNotLoaded(
                reference, f"module {module_name} has no attribute {attribute}"
            ) from e
        logger.debug(f"Imported tool reference {reference}")

    if inspect.isclass(obj) and issubclass(obj, Tool):
        return obj()

    if isinstance(obj, Tool):
        return obj

    raise ToolNotLoaded(reference, "not a Tool subclass or instance")
