# src/unillm/llms/_tool_schema.py

"""Internal module for converting Tool definitions to provider-specific schemas.

Pure data transformation, mirroring unillm.content.formats for tools.
"""

from unillm.tools.tool import Tool


def tools_to_openai_schema(tools: list[Tool]) -> list[dict]:
    """Convert Tool definitions to OpenAI function calling format."""
    return [
        {
            "type": "function",
            "function": {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.json_schema(),
            },
        }
        for tool in tools
    ]


def tools_to_anthropic_schema(tools: list[Tool]) -> list[dict]:
    """Convert Tool definitions to Anthropic tool use format (flatter)."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "input_schema": tool.json_schema(),
        }
        for tool in tools
    ]
