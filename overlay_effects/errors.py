from __future__ import annotations


class OverlayEffectsError(Exception):
    pass


class KeyframeError(OverlayEffectsError, ValueError):
    pass


class UnknownLayerTypeError(OverlayEffectsError, ValueError):
    pass


class RenderError(OverlayEffectsError):
    pass
