"""
Intent Extraction
=================

Maps a natural-language token description to ERC20Options using an
OpenAI chat model. The model only chooses option values; the contract
itself is always produced by the deterministic composition engine.
"""

import json
import os
import re
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from openai import OpenAI

from .options import ERC20Options

# Load environment variables
load_dotenv()

DEFAULT_MODEL = "gpt-4o"

SCHEMA_PROMPT = """
You are an ERC20 token configuration assistant.
Read a natural language description of a token and output a JSON object
selecting options for an OpenZeppelin ERC20 contract.

Schema format (omit any key the description does not mention):
{
  "name": "string",
  "symbol": "string",
  "burnable": true | false,
  "pausable": true | false,
  "premint": "decimal string, e.g. \\"1000000\\" or \\"1.5e6\\"",
  "mintable": true | false,
  "permit": true | false,
  "restriction": false | "blocklist" | "allowlist",
  "custodian": true | false,
  "limit": "decimal string, maximum tokens an account may send per day",
  "votes": false | "blocknumber" | "timestamp",
  "flashmint": true | false,
  "access": false | "ownable" | "roles" | "managed",
  "upgradeable": false | "transparent" | "uups",
  "info": {"license": "string", "securityContact": "string"}
}

Rules:
- Always output valid JSON only.
- Amounts are whole-token amounts, not base units.
- Voting requires permit: if "votes" is enabled, "permit" must be true.
- Use "roles" access when the description names more than one privileged role.
"""

_client: Optional[OpenAI] = None


def _get_client() -> OpenAI:
    global _client
    if _client is None:
        api_key = os.getenv("OPENAI_API_KEY") or os.getenv("API_KEY")
        if not api_key:
            raise RuntimeError(
                "OpenAI API key not found. Set `OPENAI_API_KEY` in a .env file or in your environment."
            )
        _client = OpenAI(api_key=api_key)
    return _client


def safe_parse_json(text: str, debug: bool = False) -> Dict[str, Any]:
    """
    Parse the first JSON object in model output, tolerating markdown fences
    and trailing commas.

    Raises:
        ValueError: If no valid JSON object is found
    """
    if not text:
        raise ValueError("Empty text provided")

    text = text.strip()
    if text.startswith("```json"):
        text = text[7:].strip()
    elif text.startswith("```"):
        text = text[3:].strip()
    if text.endswith("```"):
        text = text[:-3].strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or start >= end:
        if debug:
            print(f"[Intent] No JSON object found in text: {text[:200]}...")
        raise ValueError("No JSON object found in model output")

    json_chunk = text[start:end + 1]
    try:
        return json.loads(json_chunk)
    except json.JSONDecodeError:
        fixed = re.sub(r",(\s*[}\]])", r"\1", json_chunk)
        try:
            return json.loads(fixed)
        except json.JSONDecodeError as e:
            if debug:
                print(f"[Intent] JSON parse error: {e}")
            raise ValueError(f"Invalid JSON format: {e}")


def extract_erc20_options(description: str, client: Optional[OpenAI] = None,
                          model: Optional[str] = None, debug: bool = False) -> ERC20Options:
    """
    Extract ERC20 options from a natural language description.

    Args:
        description: What the token should do
        client: OpenAI client (defaults to one built from OPENAI_API_KEY)
        model: Chat model name (defaults to OPENAI_MODEL or gpt-4o)
        debug: Print the raw model output

    Returns:
        ERC20Options chosen by the model

    Raises:
        RuntimeError: If the API key is missing or the model returns no content
        ValueError: If the output is not JSON
        OptionsError: If the output names unknown options or variants
    """
    client = client or _get_client()
    model = model or os.getenv("OPENAI_MODEL") or DEFAULT_MODEL

    prompt = f"{SCHEMA_PROMPT}\n\nToken description:\n{description.strip()}"
    response = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        temperature=0.0,
    )

    output_text = response.choices[0].message.content
    if output_text is None:
        raise RuntimeError("No content returned by the model for intent extraction")

    if debug:
        print(f"[Intent] Model output: {output_text}")

    return ERC20Options.from_dict(safe_parse_json(output_text, debug=debug))
