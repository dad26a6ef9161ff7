"""Intent routing helpers: which downstream tools serve each intent."""

from __future__ import annotations

from typing import Dict, List

from partsbot.core.constants import IntentConstants

_TOOL_MAP: Dict[str, List[str]] = {
    IntentConstants.PRODUCT_SEARCH: ["productSearchTool"],
    IntentConstants.COMPATIBILITY_CHECK: ["compatibilityTool", "productSearchTool"],
    IntentConstants.INSTALLATION_GUIDE: ["installationTool", "productSearchTool"],
    IntentConstants.TROUBLESHOOTING: ["troubleshootingTool", "productSearchTool"],
    IntentConstants.ORDER_SUPPORT: ["orderSupportTool"],
    IntentConstants.GENERAL_INQUIRY: ["productSearchTool"],
}
_DEFAULT_TOOLS: List[str] = ["productSearchTool"]


def suggest_tools(intent: str) -> List[str]:
    """Return the tool names the orchestrator should run for an intent."""
    return list(_TOOL_MAP.get(intent, _DEFAULT_TOOLS))
