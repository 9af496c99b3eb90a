"""
Prompt tasks for the backend developer agent

Each task is a small record carrying exactly the data its prompt needs.
build_prompt() turns a task into (system prompt, user message) using the
"function printer" framing: the model is shown a function description and
asked to print only what that function would return for the given input.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


BACKEND_DEVELOPER_SYSTEM_PROMPT = """You are an expert backend developer writing web servers.

## Rules:
- Output source code or data only, exactly what is asked for
- No commentary, no explanations, no markdown
- Keep the structure of any template you are given
- The server must listen on the port the template uses"""


PRINT_BACKEND_WEBSERVER_CODE = """def print_backend_webserver_code(project_description_and_template) -> str:
    # INPUT: Takes in a PROJECT_DESCRIPTION and CODE_TEMPLATE for a website backend build
    # IMPORTANT: The backend code is ONLY an example. If the Project Description requires it, make as many changes as you like.
    # IMPORTANT: You do not need to follow the backend code exactly. Write functions that make sense for the user's request if required.
    # FUNCTION: Takes an existing set of code marked as CODE_TEMPLATE and updates or re-writes it to work for the purpose in the PROJECT_DESCRIPTION
    # IMPORTANT: The following libraries are already installed, only use what the template already imports
    # RETURN: Prints ONLY the code, nothing else."""

PRINT_IMPROVED_WEBSERVER_CODE = """def print_improved_webserver_code(project_description_and_template) -> str:
    # INPUT: Takes in a PROJECT_DESCRIPTION and CODE_TEMPLATE for a website backend build
    # FUNCTION: Performs the following tasks:
    #   1. Removes any bugs in the code and adds minor additional functionality
    #   2. Makes sure everything requested in the PROJECT_DESCRIPTION from a backend standpoint was followed. If not, add the feature. No code should be implemented later. Everything should be written now.
    #   3. ONLY WRITES THE CODE. No commentary.
    # RETURN: Prints ONLY the code, nothing else."""

PRINT_FIXED_CODE = """def print_fixed_code(broken_code_with_bugs) -> str:
    # INPUT: Takes in code under BROKEN_CODE and the errors found under ERROR_BUGS
    # FUNCTION: Removes bugs from the code
    # IMPORTANT: Only prints out the new and improved code. No commentary or anything else
    # RETURN: Prints ONLY the code, nothing else."""

PRINT_REST_API_ENDPOINTS = """def print_rest_api_endpoints(code_input) -> str:
    # INPUT: Takes in code under CODE_INPUT
    # FUNCTION: Prints out the JSON schema for url endpoints and their respective types
    # LOGIC: Script analyses all code and can categorize into the following object keys:
    #   "route": This represents the url path of the endpoint
    #   "is_route_dynamic": if a route has curly braces or a path parameter in it, then this is set to "true"
    #   "method": This represents the lower case method type, such as "get" or "post"
    # IMPORTANT: Only prints out the JSON schema. No commentary or anything else.
    # MUST READ: All keys are strings. Even bool should be wrapped in double quotes as "bool"
    # EXAMPLE:
    # INPUT_CODE:
    #   ...
    #   pub struct Item {
    #      pub id: u64,
    #      pub name: String,
    #      pub completed: bool,
    #   }
    #   pub struct User {
    #      pub id: u64,
    #      pub username: String,
    #      pub password: String,
    #   }
    #   ...
    #   HttpServer::new(move || {
    #      App::new()
    #          .app_data(data.clone())
    #          .route("/item", web::post().to(create_item))
    #          .route("/item/{id}", web::get().to(read_item))
    #          .route("/item/{id}", web::put().to(update_item))
    #          .route("/item/{id}", web::delete().to(delete_item))
    #          .route("/signup", web::post().to(signup))
    #          .route("/crypto", web::get().to(crypto))
    # PRINTS JSON FORMATTED OUTPUT:
    #   [
    #     {
    #       "route": "/item/{id}",
    #       "is_route_dynamic": "true",
    #       "method": "get"
    #     },
    #     {
    #       "route": "/item",
    #       "is_route_dynamic": "false",
    #       "method": "post"
    #     },
    #     ... // etc
    #   ]
    # RETURN: Prints ONLY the JSON list, nothing else."""


@dataclass
class InitialGeneration:
    code_template: str
    project_description: str

    operation = "Writing initial backend code"
    ai_function = PRINT_BACKEND_WEBSERVER_CODE


@dataclass
class Improvement:
    backend_code: Optional[str]
    factsheet: Dict[str, Any]

    operation = "Improving backend code"
    ai_function = PRINT_IMPROVED_WEBSERVER_CODE


@dataclass
class BugFix:
    backend_code: Optional[str]
    bug_errors: Optional[str]
    bug_count: int

    operation = "Fixing bugs in backend code"
    ai_function = PRINT_FIXED_CODE


@dataclass
class SchemaExtraction:
    backend_code: str

    operation = "Extracting REST API endpoints"
    ai_function = PRINT_REST_API_ENDPOINTS


PromptTask = Union[InitialGeneration, Improvement, BugFix, SchemaExtraction]


def render_context(task: PromptTask) -> str:
    """The input handed to the AI function for this task"""
    if isinstance(task, InitialGeneration):
        return (
            f"CODE TEMPLATE: {task.code_template}\n"
            f"PROJECT_DESCRIPTION: {task.project_description}\n"
            f"OUTPUT IN PLAIN TEXT ONLY"
        )
    elif isinstance(task, Improvement):
        return (
            f"CODE TEMPLATE: {task.backend_code}\n"
            f"PROJECT_DESCRIPTION: {json.dumps(task.factsheet, indent=2)}\n"
        )
    elif isinstance(task, BugFix):
        return (
            f"BROKEN_CODE: {task.backend_code}\n"
            f"ERROR_BUGS: {task.bug_errors}\n"
            f"FAILED_BUILDS_SO_FAR: {task.bug_count}\n"
        )
    elif isinstance(task, SchemaExtraction):
        return f"CODE_INPUT: {task.backend_code}"
    else:
        raise TypeError(f"Unknown prompt task: {type(task).__name__}")


def extend_ai_function(ai_function: str, function_input: str) -> str:
    """Wrap an AI function so the model only prints its return value"""
    return f"""FUNCTION {ai_function}
INSTRUCTION You are a function printer. You ONLY print the results of functions.
Nothing else. No commentary. Here is the input to the function: {function_input}.
Print out what the function will return."""


def build_prompt(task: PromptTask) -> Tuple[str, str]:
    """Return (system prompt, user message) for a task"""
    message = extend_ai_function(task.ai_function, render_context(task))
    return BACKEND_DEVELOPER_SYSTEM_PROMPT, message
