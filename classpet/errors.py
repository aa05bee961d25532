"""Game-rule failures raised by the service layer.

Each error carries a human readable message plus optional extra fields; the
app maps them to a ``400`` JSON body ``{"detail": message, **extra}``.
"""
from __future__ import annotations

from typing import Any


class ClassPetError(Exception):
    status_code = 400

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra


class InsufficientCoins(ClassPetError):
    def __init__(self, required: int, balance: int, **extra: Any):
        super().__init__(f"Not enough coins! Need {required} coins.", required=required, balance=balance, **extra)


class NoPet(ClassPetError):
    def __init__(self):
        super().__init__("This student has no pet yet!")


class FoodNotInInventory(ClassPetError):
    def __init__(self):
        super().__init__("That food is not in the student's bag!")


class NotPurchasable(ClassPetError):
    pass


class AlreadyOwned(ClassPetError):
    def __init__(self, message: str = "This item is already owned!"):
        super().__init__(message)


class NotOwned(ClassPetError):
    def __init__(self):
        super().__init__("This item is not owned yet!")


class PetTypeInUse(ClassPetError):
    def __init__(self):
        super().__init__("Cannot delete this pet type while pets are using it!")


class DuplicateName(ClassPetError):
    pass


class RosterFileError(ClassPetError):
    pass
