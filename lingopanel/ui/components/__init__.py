"""
UI components for LingoPanel.

Component imports are lazy-loaded (they import nicegui).
Use explicit imports like:
    from lingopanel.ui.components.translator_panel import create_translator_panel
"""

# Lazy-loaded components via __getattr__
_LAZY_IMPORTS = {
    "create_translator_panel": "translator_panel",
    "NiceGUIView": "translator_panel",
}


def __getattr__(name: str):
    """Lazy-load heavy component modules on first access."""
    if name in _LAZY_IMPORTS:
        module_name = _LAZY_IMPORTS[name]
        import importlib

        module = importlib.import_module(f".{module_name}", __package__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "create_translator_panel",
    "NiceGUIView",
]
