# Re-export models so external code can keep using: from classpet.models import Student, Classroom, ...
from .user import User
from .classroom import Classroom
from .student import Student
from .pet import PetType, StudentPet, PetFeedLog, PetRarity, PetMood, RARITY_RANK
from .food import PetFood, StudentInventory, FoodRarity
from .shop import ShopItem, StudentItem, ShopItemType, RARITY_LABELS
from .point_transaction import PointTransaction, TransactionSource

__all__ = [
    "User", "Classroom", "Student",
    "PetType", "StudentPet", "PetFeedLog", "PetRarity", "PetMood", "RARITY_RANK",
    "PetFood", "StudentInventory", "FoodRarity",
    "ShopItem", "StudentItem", "ShopItemType", "RARITY_LABELS",
    "PointTransaction", "TransactionSource",
]
