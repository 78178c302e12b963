from .font_registry import BUILTIN_FAMILIES, FontCache, FontFamily

__all__ = ["BUILTIN_FAMILIES", "FontCache", "FontFamily"]
