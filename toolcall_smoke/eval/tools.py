"""
Tool declarations and the prompts that should trigger each of them.

Every request carries the full tool table; each test case names the tool
its prompt is written to elicit. The table is checked once at import.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TOOLS_VERSION = "1.0.0"


class ToolSpec(BaseModel):
    """A function the model may call, in OpenAI function-calling terms."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, Any] = Field(
        description="JSON Schema for the function arguments"
    )

    def to_openai(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class TestCase(BaseModel):
    """A prompt and the tool it is meant to elicit."""
    __test__ = False  # not a pytest class

    model_config = ConfigDict(frozen=True)

    tool_name: str
    prompt: str


def _single_string_tool(name: str, description: str, field: str, field_description: str) -> ToolSpec:
    return ToolSpec(
        name=name,
        description=description,
        parameters={
            "type": "object",
            "properties": {
                field: {"type": "string", "description": field_description},
            },
            "required": [field],
            "additionalProperties": False,
        },
    )


# ---------------------------------------
# Tool table
# ---------------------------------------
TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="write_to_file",
        description="Write content to a file",
        parameters={
            "type": "object",
            "properties": {
                "filename": {"type": "string", "description": "The name of the file to write to"},
                "content": {"type": "string", "description": "The content to write to the file (can be HTML)"},
            },
            "required": ["filename", "content"],
        },
    ),
    _single_string_tool(
        "read_file", "Read content from a file",
        "filename", "The name of the file to read from",
    ),
    _single_string_tool(
        "list_files", "List files in a directory",
        "directory", "The directory path to list files from",
    ),
    _single_string_tool(
        "list_code_definition_names",
        "List names of code definitions (functions, classes, etc.) in a file",
        "filename", "The name of the file to analyze",
    ),
    ToolSpec(
        name="search_files",
        description="Search for files containing specific text",
        parameters={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "The text to search for in files"},
                "directory": {"type": "string", "description": "The directory to search in (optional)"},
            },
            "required": ["query"],
            "additionalProperties": False,
        },
    ),
    _single_string_tool(
        "execute_command", "Execute a system command",
        "command", "The command to execute",
    ),
    _single_string_tool(
        "ask_followup_question", "Ask a follow-up question to the user",
        "question", "The follow-up question to ask",
    ),
    _single_string_tool(
        "attempt_completion", "Attempt to complete a partial code snippet or text",
        "partial_text", "The partial code or text to complete",
    ),
)

# ---------------------------------------
# Test cases, in execution order
# ---------------------------------------
TEST_CASES: tuple[TestCase, ...] = (
    TestCase(tool_name="write_to_file", prompt="Write a simple HTML file named 'test.html' with a heading that says 'Hello, World!'"),
    TestCase(tool_name="read_file", prompt="Read the contents of the file 'example.txt'."),
    TestCase(tool_name="list_files", prompt="List all files in the current directory."),
    TestCase(tool_name="list_code_definition_names", prompt="List all function and class names in 'main.py'."),
    TestCase(tool_name="search_files", prompt="Search for files containing 'important' in the 'documents' folder."),
    TestCase(tool_name="execute_command", prompt="Execute the command 'echo Hello, World!'."),
    TestCase(tool_name="ask_followup_question", prompt="I'm thinking of a number between 1 and 10. Ask a follow-up question to guess it."),
    TestCase(tool_name="attempt_completion", prompt="Complete this code: 'def factorial(n):'"),
)


def validate_tool_table(tools=TOOLS, test_cases=TEST_CASES) -> None:
    """Raise ValueError on duplicate tool names or test cases naming unknown tools."""
    seen: set[str] = set()
    for spec in tools:
        if spec.name in seen:
            raise ValueError(f"Duplicate tool name: {spec.name}")
        seen.add(spec.name)

    case_names: set[str] = set()
    for case in test_cases:
        if case.tool_name not in seen:
            raise ValueError(f"Test case references unknown tool: {case.tool_name}")
        if case.tool_name in case_names:
            raise ValueError(f"More than one test case for tool: {case.tool_name}")
        case_names.add(case.tool_name)


def openai_tools(tools=TOOLS) -> list[dict[str, Any]]:
    """The `tools` array sent with every request."""
    return [spec.to_openai() for spec in tools]


validate_tool_table()
