import os
import yaml
from typing import Dict

RESPONSES_PATH = os.path.join(os.path.dirname(__file__), "..", "config", "responses.yaml")

class ResponseGenerator:
    """Renders the canned replies defined in responses.yaml."""

    def __init__(self, path: str = RESPONSES_PATH):
        self.templates = self._load_templates(path)

    def _load_templates(self, path: str) -> Dict[str, str]:
        """Loads the response templates from the file."""
        with open(path, "r") as f:
            return yaml.safe_load(f).get("responses", {})

    def generate(self, key: str, **data) -> str:
        """Generates the response for `key`, filling in any placeholders from `data`."""
        template = self.templates.get(key)
        if template is None:
            raise KeyError(f"No response template named '{key}'.")
        return template.format(**data) if data else template

# Create a singleton instance of the ResponseGenerator
response_generator = ResponseGenerator()
