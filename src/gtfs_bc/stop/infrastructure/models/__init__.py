from .stop_model import StopModel

__all__ = [
    "StopModel",
]
