# runtime/nodes/prompt.py
from __future__ import annotations

from typing import Any, Dict
from pocketflow import AsyncNode

from emergency_chat.runtime.prompts import build_prompt


class PromptBuildNode(AsyncNode):
    """Assemble the single prompt string sent to the model.
    - prep_async: pick user text and optional category from shared
    - exec_async: pure string assembly
    - post_async: write shared["prompt"] and route
    """

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "user_text": str(shared.get("user_text") or ""),
            "category": shared.get("category"),
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Dict[str, Any]:
        return {"prompt": build_prompt(prep["user_text"], prep["category"])}

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Dict[str, Any]) -> str:
        shared["prompt"] = exec_res["prompt"]
        return "ok"
