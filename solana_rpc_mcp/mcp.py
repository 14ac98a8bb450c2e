"""
Tool registry and dispatcher shared by the stdio and HTTP transports.

Every dispatch returns the same envelope, ``{"content": [{"type": "text",
"text": ...}]}``. Failures of any kind (unknown tool, bad arguments, RPC or
signing errors) are rendered in-band as text starting with ``"Error: "``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from solana_rpc_mcp.config import ServerConfig, default_config
from solana_rpc_mcp.outcome import Failure, Outcome, Success
from solana_rpc_mcp.privy_api import default_signer
from solana_rpc_mcp.solana_api import default_client
from solana_rpc_mcp.tools import (
    get_account_info,
    get_balance,
    get_minimum_balance_for_rent_exemption,
    get_transaction,
    transfer_sol,
)

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "

ToolHandler = Callable[[Dict[str, Any]], Awaitable[Outcome]]

# Primitive argument types and the Python values accepted for them.
_PRIMITIVES: Dict[str, Tuple[type, ...]] = {
    "string": (str,),
    "number": (int, float),
}


class DuplicateToolError(ValueError):
    """Raised when a tool name is registered twice."""


@dataclass(slots=True, frozen=True)
class ToolDefinition:
    name: str
    description: str
    params: Dict[str, str]
    handler: ToolHandler
    param_descriptions: Dict[str, str] = field(default_factory=dict)

    @property
    def input_schema(self) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        for arg_name, arg_type in self.params.items():
            prop: Dict[str, Any] = {"type": arg_type}
            if arg_name in self.param_descriptions:
                prop["description"] = self.param_descriptions[arg_name]
            properties[arg_name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": list(self.params),
        }


class ToolRegistry:
    """Write-once mapping from tool name to definition."""

    def __init__(self) -> None:
        self._tools: Dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        if definition.name in self._tools:
            raise DuplicateToolError(f"Tool already registered: {definition.name}")
        self._tools[definition.name] = definition

    def lookup(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Return a simple list of available tools."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "params": dict(tool.params),
                "inputSchema": tool.input_schema,
            }
            for tool in self._tools.values()
        ]


def validate_arguments(
    params: Mapping[str, str], arguments: Any
) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Check ``arguments`` against a flat schema of required primitive fields.

    Returns:
        ``(validated, None)`` on success, otherwise ``(None, message)`` naming
        the first offending field. Undeclared fields are dropped.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        return None, "Invalid arguments: expected an object."

    validated: Dict[str, Any] = {}
    for arg_name, arg_type in params.items():
        if arg_name not in arguments or arguments[arg_name] is None:
            return None, f"Missing required argument: {arg_name}"
        value = arguments[arg_name]
        accepted = _PRIMITIVES.get(arg_type)
        # bool is an int subclass but never a valid number here.
        if accepted is None or isinstance(value, bool) or not isinstance(value, accepted):
            return None, f"Invalid argument type for {arg_name}: expected {arg_type}"
        validated[arg_name] = value
    return validated, None


def text_response(text: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}


def error_response(message: str) -> Dict[str, Any]:
    return text_response(f"{ERROR_PREFIX}{message}")


def render_outcome(outcome: Outcome) -> Dict[str, Any]:
    """Normalize a handler outcome into the text envelope."""
    if isinstance(outcome, Failure):
        return error_response(outcome.message)
    if isinstance(outcome, Success):
        payload = outcome.payload
        if isinstance(payload, str):
            return text_response(payload)
        return text_response(json.dumps(payload, indent=2))
    return error_response("Tool returned an unexpected result.")


def build_registry(
    config: ServerConfig = default_config,
    *,
    client=default_client,
    signer=default_signer,
) -> ToolRegistry:
    """Register the tool set; ``transferSOL`` only when the extended variant is enabled."""
    registry = ToolRegistry()
    registry.register(
        ToolDefinition(
            name="getAccountInfo",
            description="Used to look up account info by public key (32 byte base58 encoded address)",
            params={"publicKey": "string"},
            param_descriptions={"publicKey": "Base58 encoded account address"},
            handler=lambda args: get_account_info(args["publicKey"], client=client),
        )
    )
    registry.register(
        ToolDefinition(
            name="getBalance",
            description="Used to look up balance by public key (32 byte base58 encoded address)",
            params={"publicKey": "string"},
            param_descriptions={"publicKey": "Base58 encoded account address"},
            handler=lambda args: get_balance(args["publicKey"], client=client),
        )
    )
    registry.register(
        ToolDefinition(
            name="getMinimumBalanceForRentExemption",
            description="Used to look up minimum balance required for rent exemption by data size",
            params={"dataSize": "number"},
            param_descriptions={"dataSize": "Account data size in bytes"},
            handler=lambda args: get_minimum_balance_for_rent_exemption(args["dataSize"], client=client),
        )
    )
    registry.register(
        ToolDefinition(
            name="getTransaction",
            description="Used to look up transaction by signature (64 byte base58 encoded string)",
            params={"signature": "string"},
            param_descriptions={"signature": "Base58 encoded transaction signature"},
            handler=lambda args: get_transaction(args["signature"], client=client),
        )
    )
    if config.extended:
        registry.register(
            ToolDefinition(
                name="transferSOL",
                description="Transfer SOL from the configured wallet to a recipient address",
                params={"recipient": "string", "amount": "number"},
                param_descriptions={
                    "recipient": "Base58 encoded recipient address",
                    "amount": "Amount of SOL to send",
                },
                handler=lambda args: transfer_sol(
                    args["recipient"], args["amount"], client=client, signer=signer, config=config
                ),
            )
        )
    return registry


TOOL_REGISTRY = build_registry()


def list_tools(registry: ToolRegistry | None = None) -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    return (registry or TOOL_REGISTRY).list_tools()


async def call_tool(
    tool_name: str,
    arguments: Optional[Mapping[str, Any]] = None,
    *,
    registry: ToolRegistry | None = None,
) -> Dict[str, Any]:
    """Dispatch to a tool by name; never raises."""
    registry = registry if registry is not None else TOOL_REGISTRY
    tool = registry.lookup(tool_name)
    if tool is None:
        logger.warning("tool=%s outcome=unknown", tool_name, extra={"tool": tool_name})
        return error_response(f"Unknown tool: {tool_name}")

    validated, problem = validate_arguments(tool.params, arguments)
    if problem is not None:
        logger.info("tool=%s outcome=invalid_params error=%s", tool_name, problem, extra={"tool": tool_name})
        return error_response(problem)

    try:
        outcome = await tool.handler(validated)
    except Exception as exc:
        logger.exception("Unexpected error while calling tool %s", tool_name, extra={"tool": tool_name})
        outcome = Failure(str(exc) or "Unexpected error while calling tool.")

    if isinstance(outcome, Failure):
        logger.warning(
            "tool=%s outcome=error error=%s",
            tool_name,
            outcome.message,
            extra={"tool": tool_name, "error": outcome.message},
        )
    else:
        logger.info("tool=%s outcome=success", tool_name, extra={"tool": tool_name})
    return render_outcome(outcome)


async def close_clients() -> None:
    """Close the shared HTTP clients of the default gateways."""
    await default_client.aclose()
    await default_signer.aclose()
