"""Fixed prompt templates exposed to MCP clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from solana_rpc_mcp.mcp import validate_arguments


class PromptError(ValueError):
    """Raised for unknown prompts or invalid prompt arguments."""


@dataclass(slots=True, frozen=True)
class PromptDefinition:
    name: str
    description: str
    arguments: Tuple[str, ...]
    template: Callable[[Dict[str, str]], str]


PROMPTS: Dict[str, PromptDefinition] = {
    prompt.name: prompt
    for prompt in (
        PromptDefinition(
            name="calculate-storage-deposit",
            description="Calculate storage deposit for a specified number of bytes",
            arguments=("bytes",),
            template=lambda args: (
                f"Calculate the SOL amount needed to store {args['bytes']} bytes of data on Solana "
                "using getMinimumBalanceForRentExemption."
            ),
        ),
        PromptDefinition(
            name="minimum-amount-of-sol-for-storage",
            description="Calculate the minimum amount of SOL needed for storing 0 bytes on-chain",
            arguments=(),
            template=lambda args: (
                "Calculate the amount of SOL needed to store 0 bytes of data on Solana using "
                "getMinimumBalanceForRentExemption & present it to the user as the minimum cost "
                "for storing any data on Solana."
            ),
        ),
        PromptDefinition(
            name="why-did-my-transaction-fail",
            description="Look up the given transaction and inspect its logs to figure out why it failed",
            arguments=("signature",),
            template=lambda args: (
                f"Look up the transaction with signature {args['signature']} and inspect its logs "
                "to figure out why it failed."
            ),
        ),
        PromptDefinition(
            name="how-much-did-this-transaction-cost",
            description="Fetch the transaction by signature, and break down cost & priority fees",
            arguments=("signature",),
            template=lambda args: (
                f"Calculate the network fee for the transaction with signature {args['signature']} by "
                "fetching it and inspecting the 'fee' field in 'meta'. Base fee is 0.000005 sol "
                "per signature (also provided as array at the end). So priority fee is fee - "
                "(numSignatures * 0.000005). Please provide the base fee and the priority fee."
            ),
        ),
        PromptDefinition(
            name="what-happened-in-transaction",
            description=(
                "Look up the given transaction and inspect its logs & instructions to figure out what happened"
            ),
            arguments=("signature",),
            template=lambda args: (
                f"Look up the transaction with signature {args['signature']} and inspect its logs & "
                "instructions to figure out what happened."
            ),
        ),
    )
}


def list_prompts() -> List[Dict[str, Any]]:
    return [
        {
            "name": prompt.name,
            "description": prompt.description,
            "arguments": [{"name": arg, "required": True} for arg in prompt.arguments],
        }
        for prompt in PROMPTS.values()
    ]


def get_prompt(name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Expand a prompt template into the user message list."""
    prompt = PROMPTS.get(name)
    if prompt is None:
        raise PromptError(f"Unknown prompt: {name}")
    validated, problem = validate_arguments({arg: "string" for arg in prompt.arguments}, arguments)
    if problem is not None:
        raise PromptError(problem)
    text = prompt.template(validated)
    return {
        "description": prompt.description,
        "messages": [{"role": "user", "content": {"type": "text", "text": text}}],
    }
