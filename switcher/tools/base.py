"""Tool base class - every side-effecting action inherits from this

Tools are deterministic Python only. They never decide WHICH browser to
use (RuleResolver's job); they only carry out a decided action.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class Tool(ABC):
    """Base class for all tools

    Tools:
    - Have a name
    - Define their input schema (JSON Schema subset)
    - Execute once, without retries
    - Return a result dict with a "status" key
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name (must be unique)"""
        raise NotImplementedError

    @property
    @abstractmethod
    def schema(self) -> Dict[str, Any]:
        """JSON Schema for tool arguments

        Example:
        {
            "type": "object",
            "properties": {
                "path": {"type": "string"}
            },
            "required": ["path"]
        }
        """
        raise NotImplementedError

    @abstractmethod
    def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the tool with given arguments

        Args:
            args: Arguments matching the schema

        Returns:
            Dict with execution result. Must include "status" key.
            Example: {"status": "success", "pid": 4242}
        """
        raise NotImplementedError

    def validate_args(self, args: Dict[str, Any]) -> bool:
        """Check required keys and string types against the schema"""
        if not isinstance(args, dict):
            return False

        for field in self.schema.get("required", []):
            if field not in args:
                return False

        properties = self.schema.get("properties", {})
        for key, value in args.items():
            if properties.get(key, {}).get("type") == "string" and not isinstance(value, str):
                return False

        return True
