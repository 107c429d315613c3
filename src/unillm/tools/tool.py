# src/unillm/tools/tool.py

from collections.abc import Callable

from pydantic import BaseModel


class Tool:
    """A function the model may call.

    Only the declaration travels to the provider: name, description and the
    JSON schema of input_schema. Dispatching calls to handler is up to the
    caller.
    """

    def __init__(
        self,
        *,
        name: str,
        description: str,
        input_schema: type[BaseModel],
        handler: Callable | None = None,
    ) -> None:
        if not name:
            raise ValueError("Tool name must be non-empty")
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.handler = handler

    def json_schema(self) -> dict:
        return self.input_schema.model_json_schema()
