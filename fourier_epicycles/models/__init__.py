from .coefficients import EpicycleChain, FourierCoefficient, Point
from .profile import EpicycleProfile, load_profile, save_profile

__all__ = [
    "EpicycleChain",
    "FourierCoefficient",
    "Point",
    "EpicycleProfile",
    "load_profile",
    "save_profile",
]
