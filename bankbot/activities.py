from typing import Dict, Any, List, Optional

from .state import State

# Input hints tell the channel whether the bot is waiting for a reply.
EXPECTING_INPUT = "expectingInput"
IGNORING_INPUT = "ignoringInput"
ACCEPTING_INPUT = "acceptingInput"

MENU_ACTIONS = ("Make a transaction", "View transactions", "View account")


def text_message(text: str, input_hint: str = ACCEPTING_INPUT) -> Dict[str, Any]:
    return {"type": "message", "text": text, "input_hint": input_hint}


def card_message(card: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "message", "attachments": [card], "input_hint": ACCEPTING_INPUT}


def menu_message(text: str) -> Dict[str, Any]:
    """A prompt offering the main banking actions as suggested replies."""
    actions = [{"type": "postBack", "title": title, "value": title} for title in MENU_ACTIONS]
    return {
        "type": "message",
        "text": text,
        "input_hint": EXPECTING_INPUT,
        "suggested_actions": actions,
    }


def send(state: State, *activities: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Returns the turn's outbox with `activities` appended."""
    return state.get("outbox", []) + list(activities)


def render_text(activity: Dict[str, Any]) -> str:
    """Flattens an activity to plain text for console output."""
    lines: List[str] = []
    if activity.get("text"):
        lines.append(activity["text"])
    for attachment in activity.get("attachments", []):
        lines.extend(_render_card(attachment))
    actions = activity.get("suggested_actions")
    if actions:
        lines.append(" | ".join(f"[{a['title']}]" for a in actions))
    return "\n".join(lines)


def _render_card(attachment: Dict[str, Any]) -> List[str]:
    content = attachment.get("content", {})
    if "body" in content:
        return [_block_text(block) for block in content["body"] if _block_text(block)]
    lines = [content.get("title", ""), content.get("subtitle", ""), content.get("text", "")]
    lines.extend(f"[{b['title']}]" for b in content.get("buttons", []))
    return [line for line in lines if line]


def _block_text(block: Dict[str, Any]) -> Optional[str]:
    if block.get("type") == "TextBlock":
        return block.get("text")
    if block.get("type") == "ColumnSet":
        texts = [
            item["text"]
            for column in block.get("columns", [])
            for item in column.get("items", [])
            if item.get("type") == "TextBlock"
        ]
        return "  ".join(texts)
    return None
